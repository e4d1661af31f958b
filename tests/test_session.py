"""Tests for the nutrition session."""

import json
import logging
from datetime import date

import pytest

from nutrilog.domain.goals import Goals
from nutrilog.domain.log import MealType
from nutrilog.services.reference_table import REFERENCE_FOODS
from nutrilog.services.session import (
    BODY_LOG_KEY,
    DAILY_LOG_KEY,
    SEED_BODY_METRICS,
    InvalidBodyMetricError,
    InvalidFoodEntryError,
    NutritionSession,
    build_custom_food,
)
from nutrilog.services.snapshots import daily_log_from_payload
from tests.conftest import TODAY, FakeClock, InMemoryStore


def test_new_session_starts_empty_and_persists_log(
    session: NutritionSession, store: InMemoryStore
) -> None:
    assert session.daily_log.date == TODAY
    assert session.daily_log.items == []
    assert store.saves == [DAILY_LOG_KEY]
    assert session.body_metrics == list(SEED_BODY_METRICS)


def test_logging_same_food_twice_doubles_totals(session: NutritionSession) -> None:
    egg = REFERENCE_FOODS["egg"]

    session.add_food(egg)
    session.add_food(egg)
    summary = session.summary()

    assert summary.item_count == 2
    assert summary.totals.calories == 144
    assert summary.totals.protein == pytest.approx(12.6)
    assert [item.serving_size for item in session.daily_log.items] == [
        "1 x 1 large",
        "1 x 1 large",
    ]


def test_add_food_puts_newest_first_and_persists(
    session: NutritionSession, store: InMemoryStore, clock: FakeClock
) -> None:
    session.add_food(REFERENCE_FOODS["idli"], quantity=3, meal_type=MealType.BREAKFAST)
    clock.advance(hours=3)
    session.add_food(REFERENCE_FOODS["dosa"], quantity="0.5")

    names = [item.name for item in session.daily_log.items]
    assert names == ["Plain Dosa", "Idli"]
    idli = session.daily_log.items[1]
    assert idli.calories == 117
    assert idli.meal_type == MealType.BREAKFAST
    assert idli.serving_size == "3 x 1 piece (30g)"

    stored = daily_log_from_payload(store.data[DAILY_LOG_KEY])
    assert [item.name for item in stored.items] == names
    assert stored.items[0].timestamp == clock.now


def test_add_food_rejects_negative_quantity(session: NutritionSession) -> None:
    with pytest.raises(ValueError):
        session.add_food(REFERENCE_FOODS["egg"], quantity=-2)

    assert session.daily_log.items == []


def test_failed_save_keeps_state(
    session: NutritionSession,
    store: InMemoryStore,
    caplog: pytest.LogCaptureFixture,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(logging.getLogger("nutrilog"), "propagate", True)
    store.fail_saves = True

    item = session.add_food(REFERENCE_FOODS["egg"])

    assert session.daily_log.items == [item]
    assert "Failed to persist session snapshot" in caplog.text


def test_session_restores_todays_log(
    session: NutritionSession, store: InMemoryStore, goals: Goals, clock: FakeClock
) -> None:
    session.add_food(REFERENCE_FOODS["egg"])

    restored = NutritionSession.load(store, goals, clock=clock)

    assert [item.name for item in restored.daily_log.items] == ["Boiled Egg"]
    assert restored.daily_log.items[0].calories == 72


def test_session_discards_log_from_previous_day(
    session: NutritionSession, store: InMemoryStore, goals: Goals, clock: FakeClock
) -> None:
    session.add_food(REFERENCE_FOODS["egg"])
    clock.advance(days=1)

    restored = NutritionSession.load(store, goals, clock=clock)

    assert restored.daily_log.date == date(2026, 10, 20)
    assert restored.daily_log.items == []
    assert daily_log_from_payload(store.data[DAILY_LOG_KEY]).items == []


def test_day_rollover_during_session(
    session: NutritionSession, clock: FakeClock
) -> None:
    session.add_food(REFERENCE_FOODS["egg"])
    clock.advance(days=1)

    assert session.summary().item_count == 0
    session.add_food(REFERENCE_FOODS["dosa"])

    assert session.daily_log.date == date(2026, 10, 20)
    assert [item.name for item in session.daily_log.items] == ["Plain Dosa"]


def test_malformed_state_falls_back_to_defaults(
    store: InMemoryStore, goals: Goals, clock: FakeClock
) -> None:
    store.data[DAILY_LOG_KEY] = "{not json"
    store.data[BODY_LOG_KEY] = json.dumps([{"id": 1}])

    session = NutritionSession.load(store, goals, clock=clock)

    assert session.daily_log.items == []
    assert session.daily_log.date == TODAY
    assert session.body_metrics == list(SEED_BODY_METRICS)


def test_stored_json_string_is_accepted(
    store: InMemoryStore, goals: Goals, clock: FakeClock
) -> None:
    store.data[BODY_LOG_KEY] = json.dumps(
        [{"id": "a", "date": "2026-10-01", "weight": 69.5, "visceralFat": 7}]
    )

    session = NutritionSession.load(store, goals, clock=clock)

    assert len(session.body_metrics) == 1
    assert session.body_metrics[0].visceral_fat == 7


def test_add_custom_food_applies_defaults(session: NutritionSession) -> None:
    item = session.add_custom_food(name="  Homemade Sambar ", calories="150")

    assert item.name == "Homemade Sambar"
    assert item.calories == 150
    assert item.protein == 0
    assert item.serving_size == "1 x 1 serving"
    assert item.brand is None


def test_add_custom_food_with_quantity_and_brand(session: NutritionSession) -> None:
    item = session.add_custom_food(
        name="Protein Bar",
        calories=210,
        protein="20",
        carbs="",
        serving_size="1 bar",
        brand="Quest",
        quantity=2,
    )

    assert item.calories == 420
    assert item.protein == 40
    assert item.carbs == 0
    assert item.serving_size == "2 x 1 bar"
    assert item.brand == "Quest"


@pytest.mark.parametrize(
    ("name", "calories"),
    [("", 100), ("   ", 100), (None, 100), ("Toast", None), ("Toast", "  ")],
)
def test_custom_food_requires_name_and_calories(
    session: NutritionSession, name: str | None, calories: object
) -> None:
    with pytest.raises(InvalidFoodEntryError):
        session.add_custom_food(name=name, calories=calories)

    assert session.daily_log.items == []


@pytest.mark.parametrize("calories", ["abc", -5, "inf"])
def test_custom_food_rejects_invalid_calories(calories: object) -> None:
    with pytest.raises(InvalidFoodEntryError):
        build_custom_food(name="Toast", calories=calories)


def test_add_body_metric_appends_and_persists(
    session: NutritionSession, store: InMemoryStore
) -> None:
    entry = session.add_body_metric(
        weight="69.4", body_fat_percent=20.1, muscle_mass=None, visceral_fat="8"
    )

    assert entry.date == TODAY
    assert entry.weight == 69.4
    assert entry.muscle_mass is None
    assert entry.visceral_fat == 8
    assert session.body_metrics[-1] == entry
    assert store.data[BODY_LOG_KEY][-1]["weight"] == 69.4


@pytest.mark.parametrize("weight", [None, "", 0, "heavy"])
def test_body_metric_requires_weight(session: NutritionSession, weight: object) -> None:
    with pytest.raises(InvalidBodyMetricError):
        session.add_body_metric(weight=weight)


def test_body_trend_orders_by_date(session: NutritionSession) -> None:
    session.add_body_metric(weight=69.0)

    trend = session.body_trend()

    assert [entry.date for entry in trend.entries] == sorted(
        entry.date for entry in trend.entries
    )
    assert trend.start == SEED_BODY_METRICS[0]
    assert trend.current is not None
    assert trend.current.weight == 69.0
    assert trend.total_change == -3.5
    assert trend.to_target == 5.0


def test_body_trend_empty(
    store: InMemoryStore, goals: Goals, clock: FakeClock
) -> None:
    store.data[BODY_LOG_KEY] = []
    session = NutritionSession.load(store, goals, clock=clock)

    trend = session.body_trend()

    assert trend.entries == []
    assert trend.current is None
    assert trend.total_change == 0

"""Session state for the daily log and body metrics."""

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import uuid4
from zoneinfo import ZoneInfo

from nutrilog.domain.body import BodyMetricEntry, BodyTrend
from nutrilog.domain.goals import Goals
from nutrilog.domain.log import DailyLog, LoggedFoodItem, MealType
from nutrilog.domain.nutrition import FoodSource, NutrientRecord
from nutrilog.domain.stats import DailySummary
from nutrilog.services.aggregation import daily_summary
from nutrilog.services.portions import round_half_up, scale_portion
from nutrilog.services.snapshots import (
    body_metrics_from_payload,
    body_metrics_to_payload,
    daily_log_from_payload,
    daily_log_to_payload,
)

DAILY_LOG_KEY = "ntrition_daily_log"
BODY_LOG_KEY = "ntrition_body_logs"
DEFAULT_CUSTOM_SERVING = "1 serving"

SEED_BODY_METRICS = (
    BodyMetricEntry(
        id="1", date=date(2023, 10, 1), weight=72.5, body_fat_percent=22.0
    ),
    BodyMetricEntry(
        id="2", date=date(2023, 10, 15), weight=71.8, body_fat_percent=21.5
    ),
    BodyMetricEntry(
        id="3",
        date=date(2023, 10, 25),
        weight=70.2,
        body_fat_percent=20.8,
        muscle_mass=52.5,
    ),
)

_logger = logging.getLogger(__name__)


class SessionStore(Protocol):
    """Key-value persistence for session snapshots."""

    def load(self, key: str) -> object | None:
        """Return the stored value for a key, if any."""

    def save(self, key: str, value: object) -> None:
        """Store a value under a key, replacing any previous one."""


class InvalidFoodEntryError(ValueError):
    """Raised when a custom food is missing required values."""


class InvalidBodyMetricError(ValueError):
    """Raised when a body measurement is missing required values."""


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def _new_id() -> str:
    return uuid4().hex


@dataclass
class NutritionSession:
    """Owns the daily log, body history and goals for one user.

    Every mutation is followed by a snapshot write to the store. Writes are
    not transactional: a failed write is logged and the in-memory state is
    kept.
    """

    store: SessionStore
    goals: Goals
    daily_log: DailyLog
    body_metrics: list[BodyMetricEntry] = field(default_factory=list)
    timezone_name: str = "UTC"
    daily_log_key: str = DAILY_LOG_KEY
    body_log_key: str = BODY_LOG_KEY
    clock: Callable[[], datetime] = _utc_now
    id_factory: Callable[[], str] = _new_id

    @classmethod
    def load(  # noqa: PLR0913
        cls,
        store: SessionStore,
        goals: Goals,
        *,
        timezone_name: str = "UTC",
        daily_log_key: str = DAILY_LOG_KEY,
        body_log_key: str = BODY_LOG_KEY,
        clock: Callable[[], datetime] = _utc_now,
    ) -> "NutritionSession":
        """Restore a session from the store, falling back to defaults."""
        today = _local_day(clock(), timezone_name)
        daily_log, fresh = _load_daily_log(store, daily_log_key, today)
        session = cls(
            store=store,
            goals=goals,
            daily_log=daily_log,
            body_metrics=_load_body_metrics(store, body_log_key),
            timezone_name=timezone_name,
            daily_log_key=daily_log_key,
            body_log_key=body_log_key,
            clock=clock,
        )
        if fresh:
            session._persist_daily_log()
        return session

    def today(self) -> date:
        """Return the current calendar day in the session timezone."""
        return _local_day(self.clock(), self.timezone_name)

    def ensure_current_day(self) -> None:
        """Replace the daily log with an empty one once its day has passed."""
        today = self.today()
        if self.daily_log.date == today:
            return
        _logger.info(
            "Discarding daily log for %s (today is %s)", self.daily_log.date, today
        )
        self.daily_log = DailyLog(date=today)
        self._persist_daily_log()

    def add_food(
        self,
        record: NutrientRecord,
        quantity: object = None,
        meal_type: MealType = MealType.SNACK,
    ) -> LoggedFoodItem:
        """Scale a record by the serving count and log it."""
        self.ensure_current_day()
        portion = scale_portion(record, quantity)
        item = LoggedFoodItem(
            id=self.id_factory(),
            name=portion.name,
            calories=portion.calories,
            protein=portion.protein,
            carbs=portion.carbs,
            fat=portion.fat,
            fiber=portion.fiber,
            serving_size=portion.serving_size,
            timestamp=self.clock(),
            meal_type=meal_type,
            brand=record.brand,
        )
        self.daily_log.items.insert(0, item)
        self._persist_daily_log()
        _logger.info(
            "Logged food: name=%s calories=%s quantity=%s",
            item.name,
            item.calories,
            portion.quantity,
        )
        return item

    def add_custom_food(  # noqa: PLR0913
        self,
        name: str | None,
        calories: object,
        protein: object = None,
        carbs: object = None,
        fat: object = None,
        fiber: object = None,
        serving_size: str | None = None,
        brand: str | None = None,
        quantity: object = None,
        meal_type: MealType = MealType.SNACK,
    ) -> LoggedFoodItem:
        """Validate a user-entered food and log it."""
        record = build_custom_food(
            name=name,
            calories=calories,
            protein=protein,
            carbs=carbs,
            fat=fat,
            fiber=fiber,
            serving_size=serving_size,
            brand=brand,
        )
        return self.add_food(record, quantity=quantity, meal_type=meal_type)

    def add_body_metric(
        self,
        weight: object,
        body_fat_percent: object = None,
        muscle_mass: object = None,
        visceral_fat: object = None,
    ) -> BodyMetricEntry:
        """Record a body measurement for today."""
        parsed_weight = _parse_number(weight, InvalidBodyMetricError, "weight")
        if parsed_weight is None or parsed_weight <= 0:
            raise InvalidBodyMetricError("Weight is required")
        entry = BodyMetricEntry(
            id=self.id_factory(),
            date=self.today(),
            weight=parsed_weight,
            body_fat_percent=_parse_number(
                body_fat_percent, InvalidBodyMetricError, "body fat"
            ),
            muscle_mass=_parse_number(
                muscle_mass, InvalidBodyMetricError, "muscle mass"
            ),
            visceral_fat=_parse_number(
                visceral_fat, InvalidBodyMetricError, "visceral fat"
            ),
        )
        self.body_metrics.append(entry)
        self._persist_body_metrics()
        return entry

    def summary(self) -> DailySummary:
        """Return today's totals and progress against goals."""
        self.ensure_current_day()
        return daily_summary(self.daily_log, self.goals)

    def body_trend(self) -> BodyTrend:
        """Return body metrics ordered by date with change figures."""
        entries = sorted(self.body_metrics, key=lambda entry: entry.date)
        if not entries:
            return BodyTrend(
                entries=[], start=None, current=None, total_change=0.0, to_target=None
            )
        start, current = entries[0], entries[-1]
        return BodyTrend(
            entries=entries,
            start=start,
            current=current,
            total_change=round_half_up(current.weight - start.weight, 1),
            to_target=round_half_up(current.weight - self.goals.target_weight, 1),
        )

    def _persist_daily_log(self) -> None:
        self._save(self.daily_log_key, daily_log_to_payload(self.daily_log))

    def _persist_body_metrics(self) -> None:
        self._save(self.body_log_key, body_metrics_to_payload(self.body_metrics))

    def _save(self, key: str, payload: object) -> None:
        try:
            self.store.save(key, payload)
        except Exception:
            _logger.exception("Failed to persist session snapshot: key=%s", key)


def build_custom_food(  # noqa: PLR0913
    *,
    name: str | None,
    calories: object,
    protein: object = None,
    carbs: object = None,
    fat: object = None,
    fiber: object = None,
    serving_size: str | None = None,
    brand: str | None = None,
) -> NutrientRecord:
    """Build a record from user input, rejecting incomplete entries."""
    cleaned_name = (name or "").strip()
    if not cleaned_name:
        raise InvalidFoodEntryError("Food name is required")
    parsed_calories = _parse_number(calories, InvalidFoodEntryError, "calories")
    if parsed_calories is None:
        raise InvalidFoodEntryError("Calories are required")
    return NutrientRecord(
        name=cleaned_name,
        calories=parsed_calories,
        protein=_parse_number(protein, InvalidFoodEntryError, "protein") or 0.0,
        carbs=_parse_number(carbs, InvalidFoodEntryError, "carbs") or 0.0,
        fat=_parse_number(fat, InvalidFoodEntryError, "fat") or 0.0,
        fiber=_parse_number(fiber, InvalidFoodEntryError, "fiber") or 0.0,
        serving_size=(serving_size or "").strip() or DEFAULT_CUSTOM_SERVING,
        source=FoodSource.LOCAL,
        brand=(brand or "").strip() or None,
    )


def _parse_number(
    value: object, error: type[ValueError], label: str
) -> float | None:
    """Parse an optional non-negative number from form input."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool):
        raise error(f"Invalid {label}: {value!r}")
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError) as exc:
        raise error(f"Invalid {label}: {value!r}") from exc
    if not math.isfinite(number) or number < 0:
        raise error(f"Invalid {label}: {value!r}")
    return number


def _local_day(moment: datetime, timezone_name: str) -> date:
    return moment.astimezone(ZoneInfo(timezone_name)).date()


def _load_daily_log(
    store: SessionStore, key: str, today: date
) -> tuple[DailyLog, bool]:
    """Return the stored log for today, or a fresh one and True."""
    try:
        payload = store.load(key)
        stored = daily_log_from_payload(payload) if payload is not None else None
    except Exception:
        _logger.warning("Failed to load daily log", exc_info=True)
        return DailyLog(date=today), True
    if stored is None:
        return DailyLog(date=today), True
    if stored.date != today:
        _logger.info("Discarding daily log for %s (today is %s)", stored.date, today)
        return DailyLog(date=today), True
    return stored, False


def _load_body_metrics(store: SessionStore, key: str) -> list[BodyMetricEntry]:
    try:
        payload = store.load(key)
        if payload is None:
            return list(SEED_BODY_METRICS)
        return body_metrics_from_payload(payload)
    except Exception:
        _logger.warning("Failed to load body metrics", exc_info=True)
        return list(SEED_BODY_METRICS)

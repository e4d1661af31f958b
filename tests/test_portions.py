"""Tests for portion scaling."""

import math

import pytest

from nutrilog.domain.nutrition import FoodSource, NutrientRecord
from nutrilog.services.portions import parse_quantity, round_half_up, scale_portion

EGG = NutrientRecord("Boiled Egg", 72, 6.3, 0.6, 5, 0, "1 large", FoodSource.LOCAL)
DOSA = NutrientRecord(
    "Plain Dosa", 133, 3.8, 23, 3.5, 0.8, "1 medium", FoodSource.LOCAL
)


def test_default_quantity_keeps_values() -> None:
    portion = scale_portion(DOSA)

    assert portion.calories == 133
    assert portion.protein == 3.8
    assert portion.carbs == 23
    assert portion.fat == 3.5
    assert portion.fiber == 0.8
    assert portion.serving_size == "1 x 1 medium"
    assert portion.quantity == 1


def test_fractional_quantity_rounds_half_up() -> None:
    portion = scale_portion(DOSA, 1.5)

    assert portion.calories == 200
    assert portion.protein == 5.7
    assert portion.carbs == 34.5
    assert portion.fat == 5.3
    assert portion.fiber == 1.2
    assert portion.serving_size == "1.5 x 1 medium"


def test_zero_quantity_gives_zero_nutrients() -> None:
    portion = scale_portion(EGG, 0)

    assert portion.calories == 0
    assert portion.protein == 0
    assert portion.serving_size == "0 x 1 large"


@pytest.mark.parametrize("quantity", [None, "", "  ", "abc", object()])
def test_missing_or_non_numeric_quantity_means_one(quantity: object) -> None:
    assert parse_quantity(quantity) == 1


def test_numeric_string_quantity_is_parsed() -> None:
    assert parse_quantity(" 2.5 ") == 2.5
    assert scale_portion(EGG, "2").calories == 144


@pytest.mark.parametrize("quantity", [-1, "-0.5", math.inf, "nan"])
def test_negative_or_non_finite_quantity_is_rejected(quantity: object) -> None:
    with pytest.raises(ValueError):
        parse_quantity(quantity)


def test_round_half_up() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(0.25, 1) == 0.3
    assert round_half_up(-2.5) == -3
    assert round_half_up(1.05, 1) == 1.1


def test_very_large_values_round_without_error() -> None:
    huge = NutrientRecord("Bulk Sugar", 1e30, 1e27, 0, 0, 0, "1 ton", FoodSource.LOCAL)

    portion = scale_portion(huge, 1)

    assert portion.calories == 1e30
    assert portion.protein == 1e27
    assert round_half_up(1e40) == 1e40


def test_overflowing_scaled_value_is_rejected() -> None:
    huge = NutrientRecord("Bulk Sugar", 1e308, 0, 0, 0, 0, "1 ton", FoodSource.LOCAL)

    with pytest.raises(ValueError):
        scale_portion(huge, 10)


@pytest.mark.parametrize(
    ("quantity", "expected"),
    [(2.1234567, "2.1234567 x 1 large"), (1234567, "1234567 x 1 large")],
)
def test_serving_text_keeps_full_quantity(quantity: float, expected: str) -> None:
    assert scale_portion(EGG, quantity).serving_size == expected

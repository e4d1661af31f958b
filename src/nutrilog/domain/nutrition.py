"""Nutrition domain models."""

from dataclasses import dataclass
from enum import StrEnum


class FoodSource(StrEnum):
    """Where a nutrient record came from."""

    LOCAL = "local"
    REMOTE = "remote"


@dataclass(frozen=True)
class NutrientRecord:
    """Canonical nutrient values for one stated serving."""

    name: str
    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float
    serving_size: str
    source: FoodSource
    brand: str | None = None


@dataclass(frozen=True)
class RemoteProduct:
    """Partially populated product as returned by Open Food Facts.

    Every field may be missing. Nutrients are per 100g as reported by the
    remote database; ``energy_kcal`` is the per-serving fallback some products
    only carry.
    """

    product_name: str | None = None
    product_name_en: str | None = None
    energy_kcal_100g: float | None = None
    energy_kcal: float | None = None
    protein_100g: float | None = None
    carbohydrates_100g: float | None = None
    fat_100g: float | None = None
    fiber_100g: float | None = None
    serving_size: str | None = None
    brands: str | None = None

    @property
    def display_name(self) -> str | None:
        """Return the English name, falling back to the generic one."""
        return self.product_name_en or self.product_name or None

    @property
    def has_calories(self) -> bool:
        """Return True when any calorie value is reported."""
        return self.energy_kcal_100g is not None or self.energy_kcal is not None


@dataclass(frozen=True)
class MacroTotals:
    """Summed nutrient values."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0


@dataclass(frozen=True)
class ScaledPortion:
    """Nutrient values for a chosen number of servings."""

    name: str
    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float
    serving_size: str
    quantity: float

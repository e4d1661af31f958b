"""Domain models for daily progress."""

from dataclasses import dataclass
from datetime import date

from nutrilog.domain.nutrition import MacroTotals


@dataclass(frozen=True)
class NutrientProgress:
    """Progress of one nutrient against its goal."""

    total: float
    goal: float
    remaining: float
    percent: float
    ring_fill: float


@dataclass(frozen=True)
class DailySummary:
    """Daily totals with per-nutrient progress."""

    day: date
    totals: MacroTotals
    calories: NutrientProgress
    protein: NutrientProgress
    carbs: NutrientProgress
    fat: NutrientProgress
    fiber: NutrientProgress
    item_count: int

"""Domain models for the daily food log."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum


class MealType(StrEnum):
    """Meal slot a logged item belongs to."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


@dataclass(frozen=True)
class LoggedFoodItem:
    """A food item recorded in the daily log."""

    id: str
    name: str
    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float
    serving_size: str
    timestamp: datetime
    meal_type: MealType = MealType.SNACK
    brand: str | None = None


@dataclass
class DailyLog:
    """Items logged on one calendar day, most recent first."""

    date: date
    items: list[LoggedFoodItem] = field(default_factory=list)

"""Domain models for user goals."""

from dataclasses import dataclass
from enum import StrEnum


class WeightGoal(StrEnum):
    """Direction of the body-weight goal."""

    LOSE = "lose"
    MAINTAIN = "maintain"
    GAIN = "gain"


@dataclass(frozen=True)
class Goals:
    """Daily nutrient targets and body-weight goal."""

    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float
    weight_goal: WeightGoal
    start_weight: float
    current_weight: float
    target_weight: float

"""Daily totals and progress against goals."""

import math
from collections.abc import Iterable

from nutrilog.domain.goals import Goals
from nutrilog.domain.log import DailyLog, LoggedFoodItem
from nutrilog.domain.nutrition import MacroTotals
from nutrilog.domain.stats import DailySummary, NutrientProgress

MAX_RING_FILL = 100.0


def totals(items: Iterable[LoggedFoodItem]) -> MacroTotals:
    """Sum nutrient fields across logged items."""
    collected = list(items)
    # fsum keeps the totals independent of item order.
    return MacroTotals(
        calories=math.fsum(item.calories for item in collected),
        protein=math.fsum(item.protein for item in collected),
        carbs=math.fsum(item.carbs for item in collected),
        fat=math.fsum(item.fat for item in collected),
        fiber=math.fsum(item.fiber for item in collected),
    )


def percent_of_goal(total: float, goal: float) -> float:
    """Return ``total`` as a percentage of ``goal``; 0 when no goal is set."""
    if goal <= 0:
        return 0.0
    return total / goal * 100


def remaining(total: float, goal: float) -> float:
    """Return how much of the goal is left, never negative."""
    return max(0.0, goal - total)


def ring_fill(total: float, goal: float) -> float:
    """Return the progress-ring fill percentage, capped at 100."""
    return min(MAX_RING_FILL, percent_of_goal(total, goal))


def progress(total: float, goal: float) -> NutrientProgress:
    """Build the progress indicators for one nutrient."""
    return NutrientProgress(
        total=total,
        goal=goal,
        remaining=remaining(total, goal),
        percent=percent_of_goal(total, goal),
        ring_fill=ring_fill(total, goal),
    )


def daily_summary(log: DailyLog, goals: Goals) -> DailySummary:
    """Summarize a day's log against the configured goals."""
    day_totals = totals(log.items)
    return DailySummary(
        day=log.date,
        totals=day_totals,
        calories=progress(day_totals.calories, goals.calories),
        protein=progress(day_totals.protein, goals.protein),
        carbs=progress(day_totals.carbs, goals.carbs),
        fat=progress(day_totals.fat, goals.fat),
        fiber=progress(day_totals.fiber, goals.fiber),
        item_count=len(log.items),
    )

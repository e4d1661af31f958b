"""Portion scaling for logged foods."""

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext

from nutrilog.domain.nutrition import NutrientRecord, ScaledPortion

DEFAULT_QUANTITY = 1.0


def round_half_up(value: float, places: int = 0) -> float:
    """Round to ``places`` decimals with halves rounded away from zero.

    Non-finite values are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    number = Decimal(str(value))
    with localcontext() as context:
        # quantize needs every integer digit plus the requested decimals
        context.prec = max(context.prec, number.adjusted() + places + 2)
        rounded = number.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    return float(rounded)


def parse_quantity(quantity: object) -> float:
    """Return a serving multiplier, treating missing or non-numeric input as 1.

    Raises:
        ValueError: If the quantity is negative or not finite.
    """
    if quantity is None or isinstance(quantity, bool):
        return DEFAULT_QUANTITY
    if isinstance(quantity, int | float | Decimal):
        value = float(quantity)
    elif isinstance(quantity, str):
        try:
            value = float(quantity.strip())
        except ValueError:
            return DEFAULT_QUANTITY
    else:
        return DEFAULT_QUANTITY
    if not math.isfinite(value):
        raise ValueError(f"Quantity must be finite, got {quantity!r}")
    if value < 0:
        raise ValueError(f"Quantity must not be negative, got {quantity!r}")
    return value


def format_quantity(quantity: float) -> str:
    """Format a multiplier without a trailing ``.0`` for whole numbers."""
    return f"{quantity:.15g}"


def scale_portion(record: NutrientRecord, quantity: object = None) -> ScaledPortion:
    """Scale a record's nutrients by a serving multiplier.

    Raises:
        ValueError: If the quantity is invalid or a scaled value overflows.
    """
    factor = parse_quantity(quantity)
    return ScaledPortion(
        name=record.name,
        calories=_scale(record.calories, factor, 0),
        protein=_scale(record.protein, factor, 1),
        carbs=_scale(record.carbs, factor, 1),
        fat=_scale(record.fat, factor, 1),
        fiber=_scale(record.fiber, factor, 1),
        serving_size=f"{format_quantity(factor)} x {record.serving_size}",
        quantity=factor,
    )


def _scale(value: float, factor: float, places: int) -> float:
    scaled = value * factor
    if not math.isfinite(scaled):
        raise ValueError(f"Scaled value out of range: {value!r} x {factor!r}")
    return round_half_up(scaled, places)

"""Conversion between session state and its persisted JSON form."""

import json
import math
from datetime import UTC, date, datetime

from nutrilog.domain.body import BodyMetricEntry
from nutrilog.domain.log import DailyLog, LoggedFoodItem, MealType

_MS_PER_SECOND = 1000


class SnapshotError(ValueError):
    """Raised when persisted state has an unexpected shape."""


def daily_log_to_payload(log: DailyLog) -> dict[str, object]:
    """Serialize a daily log to its stored JSON shape."""
    return {
        "date": log.date.isoformat(),
        "items": [_item_to_payload(item) for item in log.items],
    }


def daily_log_from_payload(payload: object) -> DailyLog:
    """Parse a stored daily log."""
    data = _decode(payload)
    if not isinstance(data, dict):
        raise SnapshotError("Daily log must be an object")
    items = data.get("items")
    if not isinstance(items, list):
        raise SnapshotError("Daily log items must be a list")
    return DailyLog(
        date=_parse_date(data.get("date")),
        items=[_item_from_payload(item) for item in items],
    )


def body_metrics_to_payload(entries: list[BodyMetricEntry]) -> list[dict[str, object]]:
    """Serialize body metric entries to their stored JSON shape."""
    payload = []
    for entry in entries:
        row: dict[str, object] = {
            "id": entry.id,
            "date": entry.date.isoformat(),
            "weight": entry.weight,
        }
        if entry.body_fat_percent is not None:
            row["bodyFatPercent"] = entry.body_fat_percent
        if entry.muscle_mass is not None:
            row["muscleMass"] = entry.muscle_mass
        if entry.visceral_fat is not None:
            row["visceralFat"] = entry.visceral_fat
        payload.append(row)
    return payload


def body_metrics_from_payload(payload: object) -> list[BodyMetricEntry]:
    """Parse stored body metric entries."""
    data = _decode(payload)
    if not isinstance(data, list):
        raise SnapshotError("Body metrics must be a list")
    entries = []
    for row in data:
        if not isinstance(row, dict):
            raise SnapshotError("Body metric entry must be an object")
        entries.append(
            BodyMetricEntry(
                id=_require_text(row, "id"),
                date=_parse_date(row.get("date")),
                weight=_require_number(row, "weight"),
                body_fat_percent=_optional_number(row, "bodyFatPercent"),
                muscle_mass=_optional_number(row, "muscleMass"),
                visceral_fat=_optional_number(row, "visceralFat"),
            )
        )
    return entries


def _item_to_payload(item: LoggedFoodItem) -> dict[str, object]:
    row: dict[str, object] = {
        "id": item.id,
        "name": item.name,
        "calories": item.calories,
        "protein": item.protein,
        "carbs": item.carbs,
        "fat": item.fat,
        "fiber": item.fiber,
        "servingSize": item.serving_size,
        "timestamp": int(item.timestamp.timestamp() * _MS_PER_SECOND),
        "type": item.meal_type.value,
    }
    if item.brand:
        row["brand"] = item.brand
    return row


def _item_from_payload(row: object) -> LoggedFoodItem:
    if not isinstance(row, dict):
        raise SnapshotError("Logged item must be an object")
    try:
        meal_type = MealType(row.get("type", MealType.SNACK.value))
    except ValueError as exc:
        raise SnapshotError(f"Unknown meal type: {row.get('type')!r}") from exc
    timestamp_ms = _require_number(row, "timestamp")
    brand = row.get("brand")
    return LoggedFoodItem(
        id=_require_text(row, "id"),
        name=_require_text(row, "name"),
        calories=_require_number(row, "calories"),
        protein=_require_number(row, "protein"),
        carbs=_require_number(row, "carbs"),
        fat=_require_number(row, "fat"),
        fiber=_require_number(row, "fiber"),
        serving_size=_require_text(row, "servingSize"),
        timestamp=datetime.fromtimestamp(timestamp_ms / _MS_PER_SECOND, tz=UTC),
        meal_type=meal_type,
        brand=brand if isinstance(brand, str) and brand else None,
    )


def _decode(payload: object) -> object:
    if isinstance(payload, str | bytes):
        try:
            return json.loads(payload)
        except json.JSONDecodeError as exc:
            raise SnapshotError(f"Invalid JSON: {exc}") from exc
    return payload


def _parse_date(value: object) -> date:
    if not isinstance(value, str):
        raise SnapshotError(f"Invalid date: {value!r}")
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise SnapshotError(f"Invalid date: {value!r}") from exc


def _require_text(row: dict[str, object], key: str) -> str:
    value = row.get(key)
    if not isinstance(value, str):
        raise SnapshotError(f"Field {key!r} must be a string")
    return value


def _require_number(row: dict[str, object], key: str) -> float:
    value = _optional_number(row, key)
    if value is None:
        raise SnapshotError(f"Field {key!r} is required")
    return value


def _optional_number(row: dict[str, object], key: str) -> float | None:
    value = row.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise SnapshotError(f"Field {key!r} must be a number")
    if not math.isfinite(value):
        raise SnapshotError(f"Field {key!r} must be finite")
    return float(value)

"""Domain models for body metrics."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class BodyMetricEntry:
    """A single body measurement."""

    id: str
    date: date
    weight: float
    body_fat_percent: float | None = None
    muscle_mass: float | None = None
    visceral_fat: float | None = None


@dataclass(frozen=True)
class BodyTrend:
    """Body metrics ordered by date with summary figures."""

    entries: list[BodyMetricEntry]
    start: BodyMetricEntry | None
    current: BodyMetricEntry | None
    total_change: float
    to_target: float | None

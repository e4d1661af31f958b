"""Domain models for food lookups."""

from dataclasses import dataclass
from enum import StrEnum

from nutrilog.domain.nutrition import NutrientRecord


class LookupStatus(StrEnum):
    """Outcome of a barcode lookup."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    UNAVAILABLE = "unavailable"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class BarcodeLookup:
    """Result of resolving a scanned barcode."""

    code: str | None
    status: LookupStatus
    record: NutrientRecord | None = None


@dataclass(frozen=True)
class SearchBatch:
    """One emission of a food search.

    The remote batch always extends the local batch; ``complete`` is set on
    the last batch of a search.
    """

    query: str
    results: list[NutrientRecord]
    complete: bool
    generation: int = 0

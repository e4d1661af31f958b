"""Food lookup combining the reference table with Open Food Facts."""

import asyncio
import logging
import math
from collections.abc import AsyncIterator
from contextlib import aclosing
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from nutrilog.adapters.off_client import OpenFoodFactsClient
from nutrilog.domain.lookup import BarcodeLookup, LookupStatus, SearchBatch
from nutrilog.domain.nutrition import FoodSource, NutrientRecord, RemoteProduct
from nutrilog.services.cache import Cache
from nutrilog.services.portions import round_half_up
from nutrilog.services.reference_table import (
    REFERENCE_FOODS,
    match_reference,
    normalize_query,
)

_DEFAULT_SERVING_SIZE = "100g"
_FOUND_STATUS = 1

_logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


@dataclass
class FoodLookupService:
    """Resolves queries and barcodes into nutrient records.

    Remote failures never propagate: searches fall back to an empty list and
    barcode lookups to a result without a record.
    """

    client: OpenFoodFactsClient
    cache: Cache
    reference_foods: dict[str, NutrientRecord] = field(
        default_factory=lambda: REFERENCE_FOODS
    )
    page_size: int = 10
    search_ttl_seconds: int = 3600
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    def search_local(self, query: str) -> list[NutrientRecord]:
        """Match the query against the reference table."""
        return match_reference(query, self.reference_foods)

    async def search_remote(self, query: str) -> list[NutrientRecord]:
        """Search Open Food Facts, returning an empty list on any failure."""
        normalized = normalize_query(query)
        if not normalized:
            return []
        cache_key = f"off:search:{normalized}:{self.page_size}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return list(cached)

        try:
            payload = await self._call_with_retry(
                lambda: self.client.search_products(
                    query.strip(), page_size=self.page_size
                ),
                action="search",
            )
            records = _parse_search_payload(payload, self.page_size)
        except Exception as exc:  # noqa: BLE001
            _logger.warning(
                "Remote food search failed: query=%s status=%s error=%s",
                query,
                _status_code_from_exception(exc),
                exc,
            )
            return []

        self.cache.set(cache_key, records, ttl_seconds=self.search_ttl_seconds)
        _logger.info("Remote food search: query=%s results=%s", query, len(records))
        return list(records)

    async def search(self, query: str) -> AsyncIterator[SearchBatch]:
        """Yield local matches at once, then the list extended by remote ones."""
        local = self.search_local(query)
        yield SearchBatch(query=query, results=list(local), complete=False)
        remote = await self.search_remote(query)
        yield SearchBatch(
            query=query, results=merge_results(local, remote), complete=True
        )

    async def search_complete(self, query: str) -> SearchBatch:
        """Run one search to completion and return the merged batch."""
        batch = SearchBatch(query=query, results=[], complete=False)
        async with aclosing(self.search(query)) as batches:
            async for batch in batches:
                pass
        return batch

    async def lookup_barcode(self, code: str) -> BarcodeLookup:
        """Fetch a product by barcode, telling absence apart from failures."""
        barcode = code.strip()
        if not barcode:
            return BarcodeLookup(code=code, status=LookupStatus.NOT_FOUND)
        try:
            payload = await self._call_with_retry(
                lambda: self.client.get_product(barcode),
                action=f"get_product:{barcode}",
            )
            record = _parse_barcode_payload(payload)
        except Exception as exc:  # noqa: BLE001
            _logger.warning(
                "Barcode lookup failed: code=%s status=%s error=%s",
                barcode,
                _status_code_from_exception(exc),
                exc,
            )
            return BarcodeLookup(code=barcode, status=LookupStatus.UNAVAILABLE)
        if record is None:
            _logger.info("Barcode not found: code=%s", barcode)
            return BarcodeLookup(code=barcode, status=LookupStatus.NOT_FOUND)
        return BarcodeLookup(code=barcode, status=LookupStatus.FOUND, record=record)

    async def resolve_barcode(self, code: str) -> NutrientRecord | None:
        """Return the product for a barcode, or None when unavailable."""
        result = await self.lookup_barcode(code)
        return result.record

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[dict[str, object]]]", *, action: str
    ) -> dict[str, object]:
        """Call an async function with a short retry."""
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                _logger.debug(
                    "Open Food Facts %s failed (attempt %s/%s, status=%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    _status_code_from_exception(exc),
                    exc,
                )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


@dataclass
class SearchCoordinator:
    """Runs searches for one session, discarding superseded results.

    Every call takes a new generation number. A batch is only emitted while
    its generation is still the latest one issued, so a slow remote response
    can never overwrite the results of a newer query.
    """

    lookup: FoodLookupService
    current: SearchBatch | None = None
    _generation: int = 0

    @property
    def generation(self) -> int:
        """Return the latest issued generation."""
        return self._generation

    async def search(self, query: str) -> AsyncIterator[SearchBatch]:
        """Yield the batches of a search that are still current."""
        self._generation += 1
        generation = self._generation
        async with aclosing(self.lookup.search(query)) as batches:
            async for batch in batches:
                if generation != self._generation:
                    _logger.debug(
                        "Discarding stale search batch: query=%s generation=%s",
                        query,
                        generation,
                    )
                    return
                applied = replace(batch, generation=generation)
                self.current = applied
                yield applied

    async def search_all(self, query: str) -> SearchBatch | None:
        """Run a search to completion and return its last current batch."""
        last: SearchBatch | None = None
        async for batch in self.search(query):
            last = batch
        return last


def merge_results(
    local: list[NutrientRecord], remote: list[NutrientRecord]
) -> list[NutrientRecord]:
    """Append remote records whose name has not been presented yet."""
    merged = list(local)
    seen = {record.name.lower() for record in local}
    for record in remote:
        key = record.name.lower()
        if key in seen:
            continue
        seen.add(key)
        merged.append(record)
    return merged


def _parse_search_payload(
    payload: dict[str, object], page_size: int
) -> list[NutrientRecord]:
    products = payload.get("products") if isinstance(payload, dict) else None
    if not isinstance(products, list):
        return []
    records: list[NutrientRecord] = []
    for raw in products:
        try:
            product = parse_remote_product(raw)
            if not product.display_name or not product.has_calories:
                continue
            record = to_nutrient_record(product, default_name="Unknown")
        except (ArithmeticError, ValueError) as exc:
            _logger.warning("Skipping unreadable remote product: error=%s", exc)
            continue
        records.append(record)
        if len(records) >= page_size:
            break
    return records


def _parse_barcode_payload(payload: dict[str, object]) -> NutrientRecord | None:
    if not isinstance(payload, dict):
        raise TypeError(f"Unexpected barcode payload: {type(payload).__name__}")
    product = payload.get("product")
    if _to_number(payload.get("status")) != _FOUND_STATUS or not product:
        return None
    return to_nutrient_record(
        parse_remote_product(product), default_name="Unknown Product"
    )


def parse_remote_product(raw: object) -> RemoteProduct:
    """Read the fields used for nutrition out of a raw product."""
    if not isinstance(raw, dict):
        return RemoteProduct()
    nutriments = raw.get("nutriments")
    if not isinstance(nutriments, dict):
        nutriments = {}
    return RemoteProduct(
        product_name=_to_text(raw.get("product_name")),
        product_name_en=_to_text(raw.get("product_name_en")),
        energy_kcal_100g=_to_number(nutriments.get("energy-kcal_100g")),
        energy_kcal=_to_number(nutriments.get("energy-kcal")),
        protein_100g=_to_number(nutriments.get("protein_100g")),
        carbohydrates_100g=_to_number(nutriments.get("carbohydrates_100g")),
        fat_100g=_to_number(nutriments.get("fat_100g")),
        fiber_100g=_to_number(nutriments.get("fiber_100g")),
        serving_size=_to_text(raw.get("serving_size")),
        brands=_to_text(raw.get("brands")),
    )


def to_nutrient_record(product: RemoteProduct, default_name: str) -> NutrientRecord:
    """Apply defaults to a partial product: absent values become 0."""
    calories = product.energy_kcal_100g or product.energy_kcal or 0.0
    return NutrientRecord(
        name=product.display_name or default_name,
        calories=_whole(calories),
        protein=_whole(product.protein_100g),
        carbs=_whole(product.carbohydrates_100g),
        fat=_whole(product.fat_100g),
        fiber=_whole(product.fiber_100g),
        serving_size=product.serving_size or _DEFAULT_SERVING_SIZE,
        source=FoodSource.REMOTE,
        brand=product.brands,
    )


def _whole(value: float | None) -> float:
    if value is None:
        return 0.0
    return max(round_half_up(value), 0.0)


def _to_number(value: object) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _to_text(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    text = value.strip()
    return text or None


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"

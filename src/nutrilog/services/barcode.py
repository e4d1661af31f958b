"""Barcode scanning capability."""

import logging
from typing import Protocol

from nutrilog.domain.lookup import BarcodeLookup, LookupStatus
from nutrilog.services.food_lookup import FoodLookupService

_logger = logging.getLogger(__name__)


class BarcodeScanner(Protocol):
    """Interface for a device capability that decodes a barcode."""

    async def decode(self) -> str | None:
        """Return the decoded text, or None if the user cancelled."""


async def scan_and_resolve(
    scanner: BarcodeScanner, lookup: FoodLookupService
) -> BarcodeLookup:
    """Decode a barcode and look up the product it identifies."""
    code = await scanner.decode()
    if code is None:
        _logger.info("Barcode scan cancelled")
        return BarcodeLookup(code=None, status=LookupStatus.CANCELLED)
    return await lookup.lookup_barcode(code)

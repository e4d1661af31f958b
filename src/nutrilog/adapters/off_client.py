"""Open Food Facts API client."""

from dataclasses import dataclass
from typing import Protocol
from urllib.parse import quote

import httpx


class OpenFoodFactsClient(Protocol):
    """Interface for Open Food Facts API interactions."""

    async def search_products(
        self, query: str, page_size: int = 10
    ) -> dict[str, object]:
        """Search products by free text and return raw API data."""

    async def get_product(self, barcode: str) -> dict[str, object]:
        """Fetch a product by barcode and return raw API data."""


@dataclass
class HttpxOpenFoodFactsClient(OpenFoodFactsClient):
    """HTTPX-backed Open Food Facts client."""

    base_url: str
    http_client: httpx.AsyncClient
    sort_by: str | None = "unique_scans_n"
    timeout: float = 15.0

    @classmethod
    def create(
        cls,
        base_url: str,
        sort_by: str | None = "unique_scans_n",
        timeout: float = 15.0,
        user_agent: str = "nutrilog/0.1",
    ) -> "HttpxOpenFoodFactsClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(headers={"User-Agent": user_agent}),
            sort_by=sort_by,
            timeout=timeout,
        )

    async def search_products(
        self, query: str, page_size: int = 10
    ) -> dict[str, object]:
        """Search products by free text."""
        params: dict[str, str | int] = {
            "search_terms": query,
            "search_simple": 1,
            "action": "process",
            "json": 1,
            "page_size": page_size,
        }
        if self.sort_by:
            params["sort_by"] = self.sort_by
        response = await self.http_client.get(
            f"{self.base_url}/cgi/search.pl",
            params=params,
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()

    async def get_product(self, barcode: str) -> dict[str, object]:
        """Fetch a product by barcode."""
        response = await self.http_client.get(
            f"{self.base_url}/api/v0/product/{quote(barcode, safe='')}.json",
            timeout=self.timeout,
        )
        if response.status_code == httpx.codes.NOT_FOUND:
            return {"status": 0, "code": barcode}
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

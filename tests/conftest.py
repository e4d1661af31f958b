"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta

import httpx
import pytest

from nutrilog.adapters.off_client import OpenFoodFactsClient
from nutrilog.config import Settings
from nutrilog.containers import AppContainer
from nutrilog.domain.goals import Goals, WeightGoal
from nutrilog.services.cache import InMemoryCache
from nutrilog.services.food_lookup import FoodLookupService, SearchCoordinator
from nutrilog.services.session import NutritionSession, SessionStore

NOW = datetime(2026, 10, 19, 9, 30, tzinfo=UTC)
TODAY = date(2026, 10, 19)


def _egg_products() -> list[dict[str, object]]:
    return [
        {
            "product_name": "BOILED EGG",
            "nutriments": {"energy-kcal_100g": 155, "protein_100g": 12.6},
        },
        {
            "product_name": "Egg Noodles",
            "brands": "Maggi",
            "serving_size": "50 g",
            "nutriments": {
                "energy-kcal_100g": 384.6,
                "protein_100g": 14.2,
                "carbohydrates_100g": 71.3,
                "fat_100g": 4.4,
            },
        },
        {
            "product_name": "Oeufs",
            "product_name_en": "Free Range Eggs",
            "nutriments": {"energy-kcal": 143},
        },
        {"product_name": "", "nutriments": {"energy-kcal_100g": 100}},
        {"product_name": "Mystery Egg Snack", "nutriments": {}},
    ]


@dataclass
class FakeOpenFoodFactsClient(OpenFoodFactsClient):
    """Fake Open Food Facts client with in-memory responses."""

    search_payload: dict[str, object] = field(
        default_factory=lambda: {"products": _egg_products()}
    )
    products: dict[str, dict[str, object]] = field(
        default_factory=lambda: {
            "8850999220000": {
                "product_name": "Thai Milk Tea",
                "brands": "Oishi",
                "serving_size": "250 ml",
                "nutriments": {
                    "energy-kcal_100g": 52.4,
                    "protein_100g": 1.2,
                    "carbohydrates_100g": 9.6,
                    "fat_100g": 1.1,
                },
            }
        }
    )
    fail: bool = False
    search_calls: list[str] = field(default_factory=list)
    product_calls: list[str] = field(default_factory=list)

    async def search_products(
        self, query: str, page_size: int = 10
    ) -> dict[str, object]:
        self.search_calls.append(query)
        if self.fail:
            raise httpx.ConnectError("network unreachable")
        return self.search_payload

    async def get_product(self, barcode: str) -> dict[str, object]:
        self.product_calls.append(barcode)
        if self.fail:
            raise httpx.ConnectError("network unreachable")
        product = self.products.get(barcode)
        if product is None:
            return {"status": 0, "status_verbose": "product not found"}
        return {"status": 1, "product": product}


@dataclass
class GatedOpenFoodFactsClient(FakeOpenFoodFactsClient):
    """Holds each remote search until its gate is opened."""

    gates: dict[str, asyncio.Event] = field(default_factory=dict)
    waiting: list[str] = field(default_factory=list)

    async def search_products(
        self, query: str, page_size: int = 10
    ) -> dict[str, object]:
        self.waiting.append(query)
        await self.gates[query].wait()
        return {
            "products": [
                {
                    "product_name": f"{query} from the store",
                    "nutriments": {"energy-kcal_100g": 120},
                }
            ]
        }

    async def wait_until_pending(self, query: str) -> None:
        while query not in self.waiting:
            await asyncio.sleep(0)


@dataclass
class InMemoryStore(SessionStore):
    """In-memory key-value store for tests."""

    data: dict[str, object] = field(default_factory=dict)
    saves: list[str] = field(default_factory=list)
    fail_saves: bool = False

    def load(self, key: str) -> object | None:
        return self.data.get(key)

    def save(self, key: str, value: object) -> None:
        if self.fail_saves:
            raise RuntimeError("store offline")
        self.saves.append(key)
        self.data[key] = value


@dataclass
class FakeClock:
    """Controllable clock."""

    now: datetime = NOW

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
    )


@pytest.fixture
def goals() -> Goals:
    return Goals(
        calories=1850,
        protein=160,
        carbs=165,
        fat=60,
        fiber=30,
        weight_goal=WeightGoal.LOSE,
        start_weight=70.2,
        current_weight=70.2,
        target_weight=64.0,
    )


@pytest.fixture
def off_client() -> FakeOpenFoodFactsClient:
    return FakeOpenFoodFactsClient()


@pytest.fixture
def food_lookup(off_client: FakeOpenFoodFactsClient) -> FoodLookupService:
    return FoodLookupService(
        client=off_client,
        cache=InMemoryCache(),
        retry_delay_seconds=0,
    )


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def session(store: InMemoryStore, goals: Goals, clock: FakeClock) -> NutritionSession:
    return NutritionSession.load(store, goals, clock=clock)


@pytest.fixture
def container(
    settings: Settings,
    store: InMemoryStore,
    food_lookup: FoodLookupService,
    session: NutritionSession,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        store=store,
        food_lookup=food_lookup,
        food_search=SearchCoordinator(food_lookup),
        session=session,
        close_resources=close_resources,
    )


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    """Chainable stand-in for a Supabase table query."""

    name: str
    rows: dict[str, dict[str, object]] = field(default_factory=dict)
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    last_on_conflict: str | None = None

    def select(self, *_args) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "select"
        return self

    def upsert(  # type: ignore[no-untyped-def]
        self, payload, on_conflict: str = ""
    ) -> "FakeTable":
        self._action = "upsert"
        self.last_payload = payload
        self.last_on_conflict = on_conflict
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        if action == "upsert" and isinstance(self.last_payload, dict):
            row = dict(self.last_payload)
            self.rows[str(row["key"])] = row
            return FakeResponse(data=[row])
        key = self.last_filters[-1][1] if self.last_filters else None
        row = self.rows.get(str(key))
        return FakeResponse(data=[{"value": row["value"]}] if row else [])


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]

"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Query, Request, status
from fastapi.responses import StreamingResponse

from nutrilog.api.models import (
    BarcodeLookupModel,
    BodyMetricModel,
    BodyMetricRequest,
    BodyTrendResponse,
    CustomFoodRequest,
    DailyLogResponse,
    LogFoodRequest,
    LoggedFoodItemModel,
    SearchBatchModel,
)
from nutrilog.app_logging import configure_logging
from nutrilog.containers import AppContainer


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/foods/search")
    async def search_foods(
        request: Request, q: str = Query(min_length=1)
    ) -> SearchBatchModel:
        """Return the merged local and remote results for a query."""
        batch = await _container(request).food_lookup.search_complete(q)
        return SearchBatchModel.from_batch(batch)

    @app.get("/foods/search/stream")
    async def stream_foods(
        request: Request, q: str = Query(min_length=1)
    ) -> StreamingResponse:
        """Stream the local batch, then the extended remote batch, as NDJSON."""
        coordinator = _container(request).food_search

        async def batches() -> AsyncIterator[str]:
            async for batch in coordinator.search(q):
                yield SearchBatchModel.from_batch(batch).model_dump_json() + "\n"

        return StreamingResponse(batches(), media_type="application/x-ndjson")

    @app.get("/foods/barcode/{code}")
    async def barcode_lookup(code: str, request: Request) -> BarcodeLookupModel:
        """Look up a product by a scanned barcode."""
        result = await _container(request).food_lookup.lookup_barcode(code)
        return BarcodeLookupModel.from_lookup(result)

    @app.get("/log/today")
    async def today_log(request: Request) -> DailyLogResponse:
        """Return today's log with totals and goal progress."""
        session = _container(request).session
        summary = session.summary()
        return DailyLogResponse.build(summary, session.daily_log.items)

    @app.post("/log/foods", status_code=status.HTTP_201_CREATED)
    async def log_food(
        payload: LogFoodRequest, request: Request
    ) -> LoggedFoodItemModel:
        """Log a food chosen from lookup results."""
        session = _container(request).session
        try:
            item = session.add_food(
                payload.food.to_record(),
                quantity=payload.quantity,
                meal_type=payload.meal_type,
            )
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_CONTENT, detail=str(exc)
            ) from exc
        return LoggedFoodItemModel.from_item(item)

    @app.post("/log/custom", status_code=status.HTTP_201_CREATED)
    async def log_custom_food(
        payload: CustomFoodRequest, request: Request
    ) -> LoggedFoodItemModel:
        """Log a manually entered food."""
        session = _container(request).session
        try:
            item = session.add_custom_food(
                name=payload.name,
                calories=payload.calories,
                protein=payload.protein,
                carbs=payload.carbs,
                fat=payload.fat,
                fiber=payload.fiber,
                serving_size=payload.serving_size,
                brand=payload.brand,
                quantity=payload.quantity,
                meal_type=payload.meal_type,
            )
        except ValueError as exc:
            logger.info("Rejected custom food: %s", exc)
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_CONTENT, detail=str(exc)
            ) from exc
        return LoggedFoodItemModel.from_item(item)

    @app.get("/body")
    async def body_metrics(request: Request) -> BodyTrendResponse:
        """Return body metrics ordered by date."""
        session = _container(request).session
        return BodyTrendResponse.build(
            session.body_trend(), session.goals.target_weight
        )

    @app.post("/body", status_code=status.HTTP_201_CREATED)
    async def add_body_metric(
        payload: BodyMetricRequest, request: Request
    ) -> BodyMetricModel:
        """Record a body measurement for today."""
        session = _container(request).session
        try:
            entry = session.add_body_metric(
                weight=payload.weight,
                body_fat_percent=payload.body_fat_percent,
                muscle_mass=payload.muscle_mass,
                visceral_fat=payload.visceral_fat,
            )
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_CONTENT, detail=str(exc)
            ) from exc
        return BodyMetricModel.from_entry(entry)

    return app

"""Pydantic models for the HTTP API."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from nutrilog.domain.body import BodyMetricEntry, BodyTrend
from nutrilog.domain.log import LoggedFoodItem, MealType
from nutrilog.domain.lookup import BarcodeLookup, LookupStatus, SearchBatch
from nutrilog.domain.nutrition import FoodSource, MacroTotals, NutrientRecord
from nutrilog.domain.stats import DailySummary, NutrientProgress


class NutrientRecordModel(BaseModel):
    """Nutrient record payload."""

    name: str
    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)
    fiber: float = Field(ge=0)
    serving_size: str = Field(min_length=1)
    source: FoodSource
    brand: str | None = None

    @classmethod
    def from_record(cls, record: NutrientRecord) -> "NutrientRecordModel":
        return cls(
            name=record.name,
            calories=record.calories,
            protein=record.protein,
            carbs=record.carbs,
            fat=record.fat,
            fiber=record.fiber,
            serving_size=record.serving_size,
            source=record.source,
            brand=record.brand,
        )

    def to_record(self) -> NutrientRecord:
        return NutrientRecord(
            name=self.name,
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fat=self.fat,
            fiber=self.fiber,
            serving_size=self.serving_size,
            source=self.source,
            brand=self.brand,
        )


class SearchBatchModel(BaseModel):
    """A batch of search results."""

    query: str
    generation: int
    complete: bool
    results: list[NutrientRecordModel]

    @classmethod
    def from_batch(cls, batch: SearchBatch) -> "SearchBatchModel":
        return cls(
            query=batch.query,
            generation=batch.generation,
            complete=batch.complete,
            results=[NutrientRecordModel.from_record(r) for r in batch.results],
        )


class BarcodeLookupModel(BaseModel):
    """Barcode lookup result."""

    code: str | None
    status: LookupStatus
    record: NutrientRecordModel | None = None

    @classmethod
    def from_lookup(cls, lookup: BarcodeLookup) -> "BarcodeLookupModel":
        return cls(
            code=lookup.code,
            status=lookup.status,
            record=(
                NutrientRecordModel.from_record(lookup.record)
                if lookup.record
                else None
            ),
        )


class LogFoodRequest(BaseModel):
    """Request to log a food chosen from lookup results."""

    food: NutrientRecordModel
    quantity: float | str | None = None
    meal_type: MealType = MealType.SNACK


class CustomFoodRequest(BaseModel):
    """Request to log a manually entered food."""

    name: str | None = None
    calories: float | str | None = None
    protein: float | str | None = None
    carbs: float | str | None = None
    fat: float | str | None = None
    fiber: float | str | None = None
    serving_size: str | None = None
    brand: str | None = None
    quantity: float | str | None = None
    meal_type: MealType = MealType.SNACK


class LoggedFoodItemModel(BaseModel):
    """Logged food item payload."""

    id: str
    name: str
    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float
    serving_size: str
    timestamp: datetime
    meal_type: MealType
    brand: str | None = None

    @classmethod
    def from_item(cls, item: LoggedFoodItem) -> "LoggedFoodItemModel":
        return cls(
            id=item.id,
            name=item.name,
            calories=item.calories,
            protein=item.protein,
            carbs=item.carbs,
            fat=item.fat,
            fiber=item.fiber,
            serving_size=item.serving_size,
            timestamp=item.timestamp,
            meal_type=item.meal_type,
            brand=item.brand,
        )


class NutrientProgressModel(BaseModel):
    """Progress of one nutrient against its goal."""

    total: float
    goal: float
    remaining: float
    percent: float
    ring_fill: float

    @classmethod
    def from_progress(cls, progress: NutrientProgress) -> "NutrientProgressModel":
        return cls(
            total=progress.total,
            goal=progress.goal,
            remaining=progress.remaining,
            percent=progress.percent,
            ring_fill=progress.ring_fill,
        )


class MacroTotalsModel(BaseModel):
    """Summed nutrient values."""

    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float

    @classmethod
    def from_totals(cls, totals: MacroTotals) -> "MacroTotalsModel":
        return cls(
            calories=totals.calories,
            protein=totals.protein,
            carbs=totals.carbs,
            fat=totals.fat,
            fiber=totals.fiber,
        )


class DailyLogResponse(BaseModel):
    """Today's log with totals and progress."""

    date: date
    totals: MacroTotalsModel
    progress: dict[str, NutrientProgressModel]
    items: list[LoggedFoodItemModel]

    @classmethod
    def build(
        cls, summary: DailySummary, items: list[LoggedFoodItem]
    ) -> "DailyLogResponse":
        return cls(
            date=summary.day,
            totals=MacroTotalsModel.from_totals(summary.totals),
            progress={
                "calories": NutrientProgressModel.from_progress(summary.calories),
                "protein": NutrientProgressModel.from_progress(summary.protein),
                "carbs": NutrientProgressModel.from_progress(summary.carbs),
                "fat": NutrientProgressModel.from_progress(summary.fat),
                "fiber": NutrientProgressModel.from_progress(summary.fiber),
            },
            items=[LoggedFoodItemModel.from_item(item) for item in items],
        )


class BodyMetricRequest(BaseModel):
    """Request to record a body measurement."""

    weight: float | str | None = None
    body_fat_percent: float | str | None = None
    muscle_mass: float | str | None = None
    visceral_fat: float | str | None = None


class BodyMetricModel(BaseModel):
    """Body measurement payload."""

    id: str
    date: date
    weight: float
    body_fat_percent: float | None = None
    muscle_mass: float | None = None
    visceral_fat: float | None = None

    @classmethod
    def from_entry(cls, entry: BodyMetricEntry) -> "BodyMetricModel":
        return cls(
            id=entry.id,
            date=entry.date,
            weight=entry.weight,
            body_fat_percent=entry.body_fat_percent,
            muscle_mass=entry.muscle_mass,
            visceral_fat=entry.visceral_fat,
        )


class BodyTrendResponse(BaseModel):
    """Body metrics ordered by date."""

    entries: list[BodyMetricModel]
    total_change: float
    to_target: float | None
    target_weight: float

    @classmethod
    def build(cls, trend: BodyTrend, target_weight: float) -> "BodyTrendResponse":
        return cls(
            entries=[BodyMetricModel.from_entry(entry) for entry in trend.entries],
            total_change=trend.total_change,
            to_target=trend.to_target,
            target_weight=target_weight,
        )

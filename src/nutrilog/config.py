"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from nutrilog.domain.goals import Goals, WeightGoal

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    supabase_kv_table: str = "kv_store"
    off_base_url: str = "https://world.openfoodfacts.org"
    off_page_size: int = 10
    off_sort_by: str | None = "unique_scans_n"
    off_timeout_seconds: float = 15.0
    off_user_agent: str = "nutrilog/0.1"
    search_ttl_seconds: int = 3600
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3
    daily_log_key: str = "ntrition_daily_log"
    body_log_key: str = "ntrition_body_logs"
    timezone: str = "UTC"
    log_level: str = "INFO"
    goal_calories: float = 1850
    goal_protein: float = 160
    goal_carbs: float = 165
    goal_fat: float = 60
    goal_fiber: float = 30
    weight_goal: WeightGoal = WeightGoal.LOSE
    start_weight: float = 70.2
    current_weight: float = 70.2
    target_weight: float = 64.0
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def build_goals(settings: Settings) -> Goals:
    """Build the read-only goals from settings."""
    return Goals(
        calories=settings.goal_calories,
        protein=settings.goal_protein,
        carbs=settings.goal_carbs,
        fat=settings.goal_fat,
        fiber=settings.goal_fiber,
        weight_goal=settings.weight_goal,
        start_weight=settings.start_weight,
        current_weight=settings.current_weight,
        target_weight=settings.target_weight,
    )

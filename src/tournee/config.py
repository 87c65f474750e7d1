"""Application configuration and settings management."""

from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="TOURNEE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Tournée Route & ETA API"
    api_prefix: str = "/api"
    timezone: str = Field(
        default="Europe/Paris",
        description="IANA timezone used for the wall clock when a request does not supply one.",
    )

    # Speeds (km/h)
    base_speed_kmh: float = Field(default=18.0, gt=0.0, description="Base speed before the traffic multiplier.")
    eta_speed_kmh: float = Field(default=18.0, gt=0.0, description="Speed of the simple ETA used for route display.")
    tracking_speed_kmh: float = Field(
        default=15.0,
        gt=0.0,
        description="Fallback speed of the lateness detector when a sample carries no usable speed.",
    )

    lateness_grace_minutes: float = Field(default=15.0, ge=0.0)
    long_leg_threshold_km: float = Field(default=10.0, ge=0.0)
    priority_time_weight: float = Field(default=0.5, ge=0.0)
    very_close_km: float = Field(default=0.5, ge=0.0)
    close_km: float = Field(default=2.0, ge=0.0)
    next_mission_lookahead: int = Field(default=5, ge=1)

    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )
    missions_table: str = "missions"
    locations_table: str = "intervenant_locations"
    notifications_table: str = "notifications"

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            # Try JSON first
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()

"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="AGRI_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Agri Delivery Engine API"
    api_prefix: str = "/api"
    data_root: Path = Field(default=Path("data"), description="Root directory for the file-backed state store.")
    storage_backend: Literal["file", "memory", "supabase"] = Field(
        default="file",
        description="Key/value backend used for carts, delivery orders and the last known location.",
    )
    delivery_eta_offset_minutes: int = Field(
        default=120,
        ge=1,
        description="Offset from creation time used for a new delivery order's estimated delivery.",
    )
    default_delivery_zone: str = Field(default="ZONE_1", description="Zone used when a request names none.")
    pooling_max_radius_km: float = Field(default=5.0, ge=0.0)
    pooling_common_seller_radius_km: float = Field(default=3.0, ge=0.0)
    geolocation_url: Optional[str] = Field(
        default=None,
        description="HTTP endpoint returning the caller's position as JSON (lat/lng).",
    )
    geolocation_timeout_seconds: float = Field(default=10.0, gt=0.0)
    geolocation_max_retries: int = Field(default=0, ge=0)
    geolocation_backoff_seconds: float = Field(default=1.0, ge=0.0)
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:8081",
            "http://127.0.0.1:8081",
            "http://localhost:19006",
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
    supabase_state_table: str = Field(default="app_state", description="Table holding key/value rows.")

    @field_validator("data_root", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
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

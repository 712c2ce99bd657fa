"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="SAFEROUTE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "SafeRoute Engine API"
    api_prefix: str = "/api"

    alternatives_requested: int = Field(
        default=3,
        ge=1,
        description="Number of alternative routes requested from the directions provider.",
    )
    tick_period_ms: int = Field(default=1000, ge=1, description="Deviation monitor tick period.")
    off_route_threshold_meters: float = Field(
        default=100.0,
        gt=0.0,
        description="Distance from the route beyond which a position is considered off route.",
    )
    earth_radius_meters: float = Field(default=6_371_000.0, gt=0.0)
    loop_route: bool = Field(
        default=True,
        description="Wrap the deviation monitor cursor back to the start instead of stopping at the destination.",
    )
    unsafe_zones_file: Optional[Path] = Field(
        default=None,
        description="Optional JSON catalog of unsafe zones replacing the built-in reference zones.",
    )

    ors_base_url: str = Field(
        default="https://api.openrouteservice.org",
        description="Base URL for the OpenRouteService directions API.",
    )
    ors_api_key: Optional[str] = Field(default=None, description="OpenRouteService API key.")
    ors_profile: Literal["foot-walking", "driving-car"] = Field(
        default="foot-walking",
        description="Primary directions profile.",
    )
    ors_fallback_profile: Literal["foot-walking", "driving-car"] = Field(
        default="driving-car",
        description="Profile used for the final fallback request.",
    )
    ors_max_retries: int = Field(default=2, ge=0)
    ors_backoff_seconds: float = Field(default=0.5, ge=0.0)
    ors_timeout_seconds: float = Field(default=20.0, gt=0.0)

    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("unsafe_zones_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Optional[Path]:
        if value is None or value == "":
            return None
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

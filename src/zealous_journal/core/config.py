"""Configuration management.

Loads from TOML config files + environment variables.
Uses pydantic-settings for validation and env var overriding.
"""

from __future__ import annotations

from datetime import tzinfo
from pathlib import Path
from typing import Any, Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, ValidationError, model_validator
from pydantic_settings import BaseSettings

from .errors import ConfigError


# ---------------------------------------------------------------------------
# Sub-configs
# ---------------------------------------------------------------------------

class AnalyticsConfig(BaseModel):
    monthly_buckets: int = Field(default=6, ge=1)  # Months kept in monthly P&L
    top_symbols: int = Field(default=10, ge=1)  # Rows kept in symbol breakdown
    # Reported instead of +inf when there are wins and no losses, so the
    # stats stay JSON-serialisable.
    profit_factor_cap: float = Field(default=999.0, gt=0)
    risk_free_rate: float = 0.02  # Per-trade, subtracted in the Sharpe ratio
    periods_per_year: int = Field(default=252, ge=1)


class ScoreConfig(BaseModel):
    win_rate_target: float = Field(default=70.0, gt=0)  # percent
    profit_factor_target: float = Field(default=2.0, gt=0)
    trading_days_target: float = Field(default=30.0, gt=0)
    win_rate_weight: float = Field(default=30.0, ge=0)
    profit_factor_weight: float = Field(default=40.0, ge=0)
    consistency_weight: float = Field(default=30.0, ge=0)

    @model_validator(mode="after")
    def _weights_sum_to_100(self) -> "ScoreConfig":
        total = self.win_rate_weight + self.profit_factor_weight + self.consistency_weight
        if abs(total - 100.0) > 1e-9:
            raise ValueError(f"score weights must sum to 100, got {total}")
        return self


class CalendarConfig(BaseModel):
    timezone: str | None = None  # IANA name; None = timestamps' own wall time

    def resolve_tz(self) -> tzinfo | None:
        if not self.timezone:
            return None
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ConfigError(f"Unknown timezone: {self.timezone!r}") from exc


class CacheConfig(BaseModel):
    ttl_seconds: float = Field(default=60.0, ge=0)


class ObservabilityConfig(BaseModel):
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"


# ---------------------------------------------------------------------------
# Top-level settings
# ---------------------------------------------------------------------------

class Settings(BaseSettings):
    """Top-level application settings.

    Loaded from TOML config files, overridden by environment variables.
    """

    analytics: AnalyticsConfig = Field(default_factory=AnalyticsConfig)
    score: ScoreConfig = Field(default_factory=ScoreConfig)
    calendar: CalendarConfig = Field(default_factory=CalendarConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    trades_path: str = "data/trades.json"

    model_config = {"env_prefix": "JOURNAL_", "env_nested_delimiter": "__"}


def load_settings(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Settings:
    """Load settings from TOML file + env vars.

    Args:
        config_path: Path to TOML config file (optional).
        overrides: Dict of overrides to apply on top.

    Raises:
        ConfigError: The file is not valid TOML or fails validation.
    """
    data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            import tomli

            try:
                with open(path, "rb") as f:
                    data = tomli.load(f)
            except tomli.TOMLDecodeError as exc:
                raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc

    if overrides:
        data.update(overrides)

    try:
        return Settings(**data)
    except ValidationError as exc:
        raise ConfigError(f"Configuration validation error: {exc}") from exc

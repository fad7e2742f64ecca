"""
Centralized configuration with environment variable overrides.

Driver contact details, pricing constants, the distance stub parameters and
the operating window are all configurable here. Nothing is hardcoded in the
workflow or rule modules.
"""

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional

from dotenv import load_dotenv

from src.logging_context import session_log_handler

load_dotenv()

logger = logging.getLogger(__name__)


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


def _safe_decimal(env_var: str, default: str) -> Decimal:
    """Parse a currency amount from an env var."""
    raw = os.getenv(env_var, default)
    try:
        return Decimal(raw)
    except (InvalidOperation, TypeError):
        raise ValueError(
            f"Invalid decimal for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class DriverConfig:
    """The single driver that receives booking messages."""

    name: str = os.getenv("DRIVER_NAME", "Leticia")
    phone: str = os.getenv("DRIVER_PHONE", "5511968362035")
    messaging_host: str = os.getenv("MESSAGING_HOST", "wa.me")


@dataclass(frozen=True)
class PricingConfig:
    """Fixed surcharge and currency display."""

    fixed_fee: Decimal = _safe_decimal("FIXED_FEE", "10.00")
    currency_prefix: str = os.getenv("CURRENCY_PREFIX", "R$ ")


@dataclass(frozen=True)
class DistanceConfig:
    """Parameters of the simulated distance lookup."""

    min_km: int = _safe_int("DISTANCE_MIN_KM", "5")
    max_km: int = _safe_int("DISTANCE_MAX_KM", "55")
    delay_sec: float = _safe_float("DISTANCE_DELAY_SEC", "1.0")


@dataclass(frozen=True)
class ScheduleConfig:
    """Daily operating window for bookable slots."""

    first_slot: str = os.getenv("FIRST_SLOT", "08:30")
    last_slot: str = os.getenv("LAST_SLOT", "16:00")
    slot_step_minutes: int = _safe_int("SLOT_STEP_MINUTES", "30")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    driver: DriverConfig = field(default_factory=DriverConfig)
    pricing: PricingConfig = field(default_factory=PricingConfig)
    distance: DistanceConfig = field(default_factory=DistanceConfig)
    schedule: ScheduleConfig = field(default_factory=ScheduleConfig)
    app_id: str = os.getenv("APP_ID", "default-app-id")
    initial_auth_token: Optional[str] = os.getenv("INITIAL_AUTH_TOKEN") or None
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


def _parse_clock(name: str, value: str) -> datetime:
    try:
        return datetime.strptime(value, "%H:%M")
    except ValueError:
        raise ValueError(f"{name} must be in HH:MM format, got {value!r}") from None


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if not config.driver.phone.isdigit():
        raise ValueError(
            f"DRIVER_PHONE must contain digits only, got {config.driver.phone!r}"
        )
    if not config.driver.messaging_host.strip():
        raise ValueError("MESSAGING_HOST must not be empty")
    if config.pricing.fixed_fee < 0:
        raise ValueError(
            f"FIXED_FEE must be >= 0, got {config.pricing.fixed_fee}"
        )
    if config.distance.min_km < 0:
        raise ValueError(
            f"DISTANCE_MIN_KM must be >= 0, got {config.distance.min_km}"
        )
    if config.distance.max_km < config.distance.min_km:
        raise ValueError(
            "DISTANCE_MAX_KM must be >= DISTANCE_MIN_KM, "
            f"got {config.distance.max_km} < {config.distance.min_km}"
        )
    if config.distance.delay_sec < 0:
        raise ValueError(
            f"DISTANCE_DELAY_SEC must be >= 0, got {config.distance.delay_sec}"
        )
    if config.schedule.slot_step_minutes < 1:
        raise ValueError(
            f"SLOT_STEP_MINUTES must be >= 1, got {config.schedule.slot_step_minutes}"
        )

    first = _parse_clock("FIRST_SLOT", config.schedule.first_slot)
    last = _parse_clock("LAST_SLOT", config.schedule.last_slot)
    if last < first:
        raise ValueError(
            f"LAST_SLOT must not be before FIRST_SLOT, got "
            f"{config.schedule.last_slot} < {config.schedule.first_slot}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        handlers=[session_log_handler()],
    )
    logger.info("Configuration loaded for driver '%s'", config.driver.name)
    return config


# Singleton instance
settings = load_config()

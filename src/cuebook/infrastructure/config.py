from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import time

from cuebook.domain.booking.pricing import RateTable
from cuebook.domain.common.money import Money
from cuebook.domain.venue.policy import VenuePolicy

_DEV_TOKEN_SECRET = "cuebook-dev-secret-change-me-before-deploying"
_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class AuthSettings:
    token_secret: str
    token_ttl_seconds: int


@dataclass(frozen=True)
class SeedSettings:
    enabled: bool
    admin_email: str
    admin_password: str


def app_env() -> str:
    return os.getenv("APP_ENV", "dev").lower()


def _int_env(name: str, default: int) -> int:
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return default
    try:
        return int(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw_value!r}") from exc


def _clock_env(name: str, default: str) -> time:
    raw_value = os.getenv(name, default).strip()
    try:
        return time.fromisoformat(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be HH:MM, got {raw_value!r}") from exc


def _bool_env(name: str, default: bool) -> bool:
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in _TRUE_VALUES


def load_venue_policy() -> VenuePolicy:
    return VenuePolicy(
        table_count=_int_env("VENUE_TABLE_COUNT", 12),
        opens_at=_clock_env("VENUE_OPENS_AT", "09:00"),
        closes_at=_clock_env("VENUE_CLOSES_AT", "22:00"),
        max_players_per_table=_int_env("VENUE_MAX_PLAYERS", 4),
    )


def load_rate_table() -> RateTable:
    currency = os.getenv("VENUE_CURRENCY", "INR").upper()
    # Rates are configured in major units per hour.
    weekday_cents = _int_env("VENUE_WEEKDAY_RATE", 150) * 100
    weekend_cents = _int_env("VENUE_WEEKEND_RATE", 300) * 100
    return RateTable(
        weekday_rate=Money(amount_cents=weekday_cents, currency=currency),
        weekend_rate=Money(amount_cents=weekend_cents, currency=currency),
    )


def load_auth_settings() -> AuthSettings:
    secret = os.getenv("AUTH_TOKEN_SECRET", "")
    if not secret:
        if app_env() not in {"dev", "test"}:
            raise RuntimeError("AUTH_TOKEN_SECRET is not set")
        secret = _DEV_TOKEN_SECRET
    return AuthSettings(
        token_secret=secret,
        token_ttl_seconds=_int_env("AUTH_TOKEN_TTL_SECONDS", 86_400),
    )


def load_seed_settings() -> SeedSettings:
    return SeedSettings(
        enabled=_bool_env("SEED_DEMO_DATA", app_env() in {"dev", "test"}),
        admin_email=os.getenv("SEED_ADMIN_EMAIL", "admin@snookermania.com"),
        admin_password=os.getenv("SEED_ADMIN_PASSWORD", "admin123"),
    )


@dataclass(frozen=True)
class ServerSettings:
    host: str
    port: int


def load_server_settings() -> ServerSettings:
    return ServerSettings(
        host=os.getenv("HOST", "127.0.0.1"),
        port=_int_env("PORT", 8000),
    )


def redis_url() -> str | None:
    return os.getenv("REDIS_URL", "").strip() or None

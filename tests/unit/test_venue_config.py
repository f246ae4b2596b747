from __future__ import annotations

import sys
from datetime import time
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from cuebook.infrastructure.config import (
    load_auth_settings,
    load_rate_table,
    load_seed_settings,
    load_venue_policy,
)

_VENUE_VARS = (
    "VENUE_TABLE_COUNT",
    "VENUE_OPENS_AT",
    "VENUE_CLOSES_AT",
    "VENUE_MAX_PLAYERS",
    "VENUE_WEEKDAY_RATE",
    "VENUE_WEEKEND_RATE",
    "VENUE_CURRENCY",
)


@pytest.fixture(autouse=True)
def clean_venue_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VENUE_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_describe_the_hall() -> None:
    policy = load_venue_policy()
    rates = load_rate_table()

    assert policy.table_count == 12
    assert (policy.opens_at, policy.closes_at) == (time(9, 0), time(22, 0))
    assert policy.max_players_per_table == 4
    assert rates.weekday_rate.amount_cents == 15000
    assert rates.weekend_rate.amount_cents == 30000
    assert rates.weekend_rate.currency == "INR"


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VENUE_TABLE_COUNT", "6")
    monkeypatch.setenv("VENUE_OPENS_AT", "10:30")
    monkeypatch.setenv("VENUE_CLOSES_AT", "23:00")
    monkeypatch.setenv("VENUE_WEEKEND_RATE", "400")
    monkeypatch.setenv("VENUE_CURRENCY", "usd")

    policy = load_venue_policy()
    rates = load_rate_table()

    assert policy.table_count == 6
    assert policy.opens_at == time(10, 30)
    assert rates.weekend_rate.amount_cents == 40000
    assert rates.weekend_rate.currency == "USD"


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("VENUE_TABLE_COUNT", "twelve"),
        ("VENUE_TABLE_COUNT", "0"),
        ("VENUE_OPENS_AT", "9am"),
        ("VENUE_OPENS_AT", "09:15"),
        ("VENUE_CLOSES_AT", "08:00"),
    ],
)
def test_invalid_venue_config_fails_fast(
    monkeypatch: pytest.MonkeyPatch, name: str, value: str
) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ValueError):
        load_venue_policy()


def test_auth_secret_required_outside_dev(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", "prod")
    monkeypatch.delenv("AUTH_TOKEN_SECRET", raising=False)

    with pytest.raises(RuntimeError):
        load_auth_settings()


def test_seeding_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SEED_DEMO_DATA", raising=False)
    monkeypatch.setenv("APP_ENV", "prod")
    assert load_seed_settings().enabled is False

    monkeypatch.setenv("APP_ENV", "test")
    assert load_seed_settings().enabled is True

    monkeypatch.setenv("SEED_DEMO_DATA", "off")
    assert load_seed_settings().enabled is False

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from cuebook.application.concurrency import KeyedLock
from cuebook.application.ports.publisher import EventPublisher
from cuebook.domain.booking.pricing import RateTable
from cuebook.domain.venue.policy import VenuePolicy
from cuebook.infrastructure.config import (
    load_auth_settings,
    load_rate_table,
    load_seed_settings,
    load_venue_policy,
    redis_url,
)
from cuebook.infrastructure.memory.account_repo import InMemoryAccountRepository
from cuebook.infrastructure.memory.reservation_repo import InMemoryReservationRepository
from cuebook.infrastructure.messaging.redis_publisher import build_event_publisher
from cuebook.infrastructure.security.passwords import Argon2PasswordHasher
from cuebook.infrastructure.security.tokens import JwtTokenCodec
from cuebook.tools.seed import seed_demo_data


@dataclass(frozen=True)
class Container:
    """Process-wide singletons shared by every request."""

    venue_policy: VenuePolicy
    rate_table: RateTable
    reservation_repository: InMemoryReservationRepository
    account_repository: InMemoryAccountRepository
    reservation_locks: KeyedLock
    token_codec: JwtTokenCodec
    password_hasher: Argon2PasswordHasher
    publisher: EventPublisher


def build_container() -> Container:
    auth_settings = load_auth_settings()
    container = Container(
        venue_policy=load_venue_policy(),
        rate_table=load_rate_table(),
        reservation_repository=InMemoryReservationRepository(),
        account_repository=InMemoryAccountRepository(),
        reservation_locks=KeyedLock(),
        token_codec=JwtTokenCodec(
            secret=auth_settings.token_secret,
            ttl_seconds=auth_settings.token_ttl_seconds,
        ),
        password_hasher=Argon2PasswordHasher(),
        publisher=build_event_publisher(redis_url()),
    )

    seed_settings = load_seed_settings()
    if seed_settings.enabled:
        seed_demo_data(
            account_repository=container.account_repository,
            reservation_repository=container.reservation_repository,
            password_hasher=container.password_hasher,
            rate_table=container.rate_table,
            venue_policy=container.venue_policy,
            admin_email=seed_settings.admin_email,
            admin_password=seed_settings.admin_password,
        )
    return container


@lru_cache(maxsize=1)
def get_container() -> Container:
    return build_container()

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, timezone

from cuebook.application.ports.identity import PasswordHasher
from cuebook.application.ports.repositories import AccountRepository, ReservationRepository
from cuebook.domain.account.entities import Account, AccountRole, normalize_email
from cuebook.domain.booking.entities import TimeWindow, create_confirmed_reservation
from cuebook.domain.booking.pricing import RateTable
from cuebook.domain.common.ids import AccountId, ReservationId, TableNumber
from cuebook.domain.venue.policy import VenuePolicy

logger = logging.getLogger(__name__)

ADMIN_ACCOUNT_ID = AccountId("acc_admin")
MEMBER_ACCOUNT_ID = AccountId("acc_member")
MEMBER_EMAIL = "rajesh@example.com"
MEMBER_PASSWORD = "pass123"


def seed_demo_data(
    account_repository: AccountRepository,
    reservation_repository: ReservationRepository,
    password_hasher: PasswordHasher,
    rate_table: RateTable,
    venue_policy: VenuePolicy,
    admin_email: str,
    admin_password: str,
) -> None:
    now = datetime.now(timezone.utc)
    if account_repository.get_by_email(admin_email) is None:
        account_repository.add(
            Account(
                account_id=ADMIN_ACCOUNT_ID,
                name="Admin User",
                email=normalize_email(admin_email),
                phone="+91 98765 43210",
                password_hash=password_hasher.hash(admin_password),
                role=AccountRole.ADMIN,
                created_at=now,
            )
        )

    if account_repository.get_by_email(MEMBER_EMAIL) is None:
        account_repository.add(
            Account(
                account_id=MEMBER_ACCOUNT_ID,
                name="Rajesh Kumar",
                email=MEMBER_EMAIL,
                phone="+91 98765 43211",
                password_hash=password_hasher.hash(MEMBER_PASSWORD),
                role=AccountRole.MEMBER,
                created_at=now,
                membership_type="Gold",
                membership_expiry=now.date() + timedelta(days=30),
            )
        )

    demo_bookings = [
        (ReservationId("bkg_demo_001"), date(2024, 1, 20), time(14, 0), time(15, 30), 3),
        (ReservationId("bkg_demo_002"), date(2024, 1, 21), time(10, 0), time(11, 0), 5),
    ]
    for reservation_id, booking_date, start, end, table_number in demo_bookings:
        if reservation_repository.get(reservation_id) is not None:
            continue
        window = TimeWindow(start=start, end=end)
        if not (
            venue_policy.has_table(table_number)
            and venue_policy.operating_window.contains(window)
        ):
            logger.info("demo_booking_skipped", extra={"reservation_id": reservation_id})
            continue
        reservation_repository.add(
            create_confirmed_reservation(
                reservation_id=reservation_id,
                requester_id=MEMBER_ACCOUNT_ID,
                table_number=TableNumber(table_number),
                booking_date=booking_date,
                window=window,
                player_count=2,
                price=rate_table.price_for(booking_date, window.duration_minutes),
                now=now,
            )
        )

    logger.info("demo_data_seeded")

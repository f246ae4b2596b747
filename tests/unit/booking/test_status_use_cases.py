from __future__ import annotations

import json
import sys
from datetime import date, datetime, time, timezone
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from cuebook.application.concurrency import KeyedLock
from cuebook.application.errors import (
    BookingValidationError,
    ForbiddenError,
    InvalidTransitionError,
    ReservationNotFoundError,
)
from cuebook.application.ports.identity import Identity
from cuebook.application.use_cases.cancel_booking import CancelBooking
from cuebook.application.use_cases.context import TraceContext
from cuebook.application.use_cases.transitions import ReservationTransitioner
from cuebook.application.use_cases.update_booking_status import UpdateBookingStatus
from cuebook.domain.booking.entities import (
    ReservationStatus,
    TimeWindow,
    create_confirmed_reservation,
)
from cuebook.domain.common.ids import AccountId, ReservationId, TableNumber
from cuebook.domain.common.money import Money
from cuebook.infrastructure.memory.reservation_repo import InMemoryReservationRepository

OWNER = Identity(subject_id=AccountId("acc_owner"), is_admin=False)
STRANGER = Identity(subject_id=AccountId("acc_other"), is_admin=False)
ADMIN = Identity(subject_id=AccountId("acc_admin"), is_admin=True)


class FakePublisher:
    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def publish(self, channel: str, message: str) -> None:
        self.messages.append((channel, message))


def _repository_with_booking() -> InMemoryReservationRepository:
    repository = InMemoryReservationRepository()
    repository.add(
        create_confirmed_reservation(
            reservation_id=ReservationId("bkg_001"),
            requester_id=OWNER.subject_id,
            table_number=TableNumber(3),
            booking_date=date(2024, 2, 10),
            window=TimeWindow(start=time(14, 0), end=time(15, 30)),
            player_count=2,
            price=Money(amount_cents=45000, currency="INR"),
            now=datetime.now(timezone.utc),
        )
    )
    return repository


def _transitioner(
    repository: InMemoryReservationRepository,
    publisher: FakePublisher,
) -> ReservationTransitioner:
    return ReservationTransitioner(
        reservation_repository=repository,
        locks=KeyedLock(),
        publisher=publisher,
    )


def _cancel(repository, requester: Identity, publisher: FakePublisher | None = None):
    use_case = CancelBooking(
        reservation_repository=repository,
        transitioner=_transitioner(repository, publisher or FakePublisher()),
    )
    return use_case.execute(
        reservation_id=ReservationId("bkg_001"),
        requester=requester,
        trace_ctx=TraceContext.detached(),
    )


def _set_status(repository, requester: Identity, new_status: str):
    use_case = UpdateBookingStatus(
        reservation_repository=repository,
        transitioner=_transitioner(repository, FakePublisher()),
    )
    return use_case.execute(
        reservation_id=ReservationId("bkg_001"),
        new_status=new_status,
        requester=requester,
        trace_ctx=TraceContext.detached(),
    )


def test_owner_can_cancel() -> None:
    repository = _repository_with_booking()
    publisher = FakePublisher()

    payload = _cancel(repository, OWNER, publisher)

    assert payload.status == "cancelled"
    stored = repository.get(ReservationId("bkg_001"))
    assert stored is not None
    assert stored.status == ReservationStatus.CANCELLED
    assert json.loads(publisher.messages[0][1])["event_type"] == "booking.cancelled"


def test_admin_can_cancel_someone_elses_booking() -> None:
    payload = _cancel(_repository_with_booking(), ADMIN)

    assert payload.status == "cancelled"


def test_stranger_cannot_cancel() -> None:
    repository = _repository_with_booking()

    with pytest.raises(ForbiddenError):
        _cancel(repository, STRANGER)

    stored = repository.get(ReservationId("bkg_001"))
    assert stored is not None
    assert stored.status == ReservationStatus.CONFIRMED


def test_cancel_unknown_reservation() -> None:
    with pytest.raises(ReservationNotFoundError):
        _cancel(InMemoryReservationRepository(), OWNER)


def test_second_cancel_is_an_invalid_transition() -> None:
    repository = _repository_with_booking()
    publisher = FakePublisher()
    _cancel(repository, OWNER, publisher)

    with pytest.raises(InvalidTransitionError):
        _cancel(repository, OWNER, publisher)

    assert len(publisher.messages) == 1


def test_cancelled_booking_is_kept_for_audit() -> None:
    repository = _repository_with_booking()
    _cancel(repository, OWNER)

    assert [item.status for item in repository.list_all()] == [ReservationStatus.CANCELLED]


def test_admin_completes_booking() -> None:
    payload = _set_status(_repository_with_booking(), ADMIN, "completed")

    assert payload.status == "completed"


def test_admin_status_change_requires_admin() -> None:
    with pytest.raises(ForbiddenError):
        _set_status(_repository_with_booking(), OWNER, "completed")


def test_admin_status_change_rejects_unknown_status() -> None:
    with pytest.raises(BookingValidationError):
        _set_status(_repository_with_booking(), ADMIN, "pending")


@pytest.mark.parametrize(
    ("first", "second"),
    [
        ("completed", "confirmed"),
        ("completed", "cancelled"),
        ("cancelled", "confirmed"),
        ("cancelled", "completed"),
    ],
)
def test_terminal_statuses_cannot_be_left(first: str, second: str) -> None:
    repository = _repository_with_booking()
    _set_status(repository, ADMIN, first)

    with pytest.raises(InvalidTransitionError):
        _set_status(repository, ADMIN, second)


def test_confirming_a_confirmed_booking_is_rejected() -> None:
    with pytest.raises(InvalidTransitionError):
        _set_status(_repository_with_booking(), ADMIN, "confirmed")


def test_owner_cannot_cancel_completed_booking() -> None:
    repository = _repository_with_booking()
    _set_status(repository, ADMIN, "COMPLETED")

    with pytest.raises(InvalidTransitionError):
        _cancel(repository, OWNER)

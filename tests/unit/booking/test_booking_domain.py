from __future__ import annotations

import sys
from datetime import date, datetime, time, timezone
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from cuebook.domain.booking.entities import (
    Reservation,
    ReservationStatus,
    ReservationTransitionError,
    TimeWindow,
    create_confirmed_reservation,
)
from cuebook.domain.common.ids import AccountId, ReservationId, TableNumber
from cuebook.domain.common.money import Money


def _reservation(status: ReservationStatus = ReservationStatus.CONFIRMED) -> Reservation:
    reservation = create_confirmed_reservation(
        reservation_id=ReservationId("bkg_001"),
        requester_id=AccountId("acc_001"),
        table_number=TableNumber(3),
        booking_date=date(2024, 2, 10),
        window=TimeWindow(start=time(14, 0), end=time(15, 30)),
        player_count=2,
        price=Money(amount_cents=45000, currency="INR"),
        now=datetime.now(timezone.utc),
    )
    if status == ReservationStatus.CONFIRMED:
        return reservation
    return reservation.transition_to(status)


def test_window_requires_start_before_end() -> None:
    with pytest.raises(ValueError):
        TimeWindow(start=time(15, 0), end=time(14, 0))
    with pytest.raises(ValueError):
        TimeWindow(start=time(15, 0), end=time(15, 0))


def test_window_duration_keeps_fractional_hours() -> None:
    window = TimeWindow(start=time(14, 0), end=time(15, 30))

    assert window.duration_minutes == 90
    assert window.duration_hours == 1.5


def test_window_contains() -> None:
    day = TimeWindow(start=time(9, 0), end=time(22, 0))

    assert day.contains(TimeWindow(start=time(9, 0), end=time(22, 0)))
    assert not day.contains(TimeWindow(start=time(21, 0), end=time(22, 30)))


def test_reservation_rejects_zero_players() -> None:
    with pytest.raises(ValueError):
        create_confirmed_reservation(
            reservation_id=ReservationId("bkg_001"),
            requester_id=AccountId("acc_001"),
            table_number=TableNumber(1),
            booking_date=date(2024, 2, 10),
            window=TimeWindow(start=time(10, 0), end=time(11, 0)),
            player_count=0,
            price=Money(amount_cents=30000, currency="INR"),
            now=datetime.now(timezone.utc),
        )


def test_cancel_marks_reservation_inactive() -> None:
    cancelled = _reservation().cancel()

    assert cancelled.status == ReservationStatus.CANCELLED
    assert not cancelled.is_active


def test_completed_reservation_still_occupies_table() -> None:
    completed = _reservation().complete()

    assert completed.status == ReservationStatus.COMPLETED
    assert completed.is_active


@pytest.mark.parametrize(
    ("current", "target"),
    [
        (ReservationStatus.CANCELLED, ReservationStatus.CANCELLED),
        (ReservationStatus.CANCELLED, ReservationStatus.CONFIRMED),
        (ReservationStatus.CANCELLED, ReservationStatus.COMPLETED),
        (ReservationStatus.COMPLETED, ReservationStatus.CONFIRMED),
        (ReservationStatus.COMPLETED, ReservationStatus.CANCELLED),
        (ReservationStatus.CONFIRMED, ReservationStatus.CONFIRMED),
    ],
)
def test_disallowed_transitions_raise(
    current: ReservationStatus,
    target: ReservationStatus,
) -> None:
    with pytest.raises(ReservationTransitionError):
        _reservation(current).transition_to(target)


def test_money_addition_requires_same_currency() -> None:
    total = Money(amount_cents=100, currency="INR") + Money(amount_cents=250, currency="INR")

    assert total == Money(amount_cents=350, currency="INR")
    with pytest.raises(ValueError):
        Money(amount_cents=100, currency="INR") + Money(amount_cents=100, currency="USD")

from __future__ import annotations

import itertools
import sys
from datetime import date, datetime, time, timezone
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from cuebook.domain.booking.availability import conflicts, find_conflicts, is_table_free
from cuebook.domain.booking.entities import TimeWindow, create_confirmed_reservation
from cuebook.domain.common.ids import AccountId, ReservationId, TableNumber
from cuebook.domain.common.money import Money

SATURDAY = date(2024, 2, 10)


def _window(start: str, end: str) -> TimeWindow:
    return TimeWindow(start=time.fromisoformat(start), end=time.fromisoformat(end))


def _booking(table: int, start: str, end: str, booking_date: date = SATURDAY):
    return create_confirmed_reservation(
        reservation_id=ReservationId(f"bkg_{table}_{start}"),
        requester_id=AccountId("acc_001"),
        table_number=TableNumber(table),
        booking_date=booking_date,
        window=_window(start, end),
        player_count=2,
        price=Money(amount_cents=30000, currency="INR"),
        now=datetime.now(timezone.utc),
    )


@pytest.mark.parametrize(
    ("first", "second", "expected"),
    [
        (("14:00", "15:30"), ("14:30", "15:00"), True),
        (("14:00", "15:00"), ("14:30", "15:30"), True),
        (("14:00", "15:00"), ("13:00", "17:00"), True),
        (("14:00", "15:00"), ("14:00", "15:00"), True),
        (("14:00", "15:00"), ("15:00", "16:00"), False),
        (("14:00", "15:00"), ("12:00", "14:00"), False),
        (("09:00", "10:00"), ("20:00", "22:00"), False),
    ],
)
def test_conflict_predicate(first, second, expected) -> None:
    assert conflicts(_window(*first), _window(*second)) is expected


def test_conflict_predicate_is_symmetric() -> None:
    starts = ["09:00", "09:30", "10:00", "10:30", "11:00"]
    windows = [
        _window(start, end)
        for start, end in itertools.combinations(starts + ["11:30"], 2)
    ]
    for first, second in itertools.product(windows, repeat=2):
        assert conflicts(first, second) == conflicts(second, first)
        if conflicts(first, second):
            assert first.start < second.end and second.start < first.end


def test_table_busy_when_active_reservation_overlaps() -> None:
    existing = [_booking(3, "14:30", "15:00")]

    assert not is_table_free(TableNumber(3), SATURDAY, _window("14:00", "15:30"), existing)
    assert is_table_free(TableNumber(4), SATURDAY, _window("14:00", "15:30"), existing)


def test_cancelled_reservation_does_not_block() -> None:
    existing = [_booking(3, "14:30", "15:00").cancel()]

    assert is_table_free(TableNumber(3), SATURDAY, _window("14:00", "15:30"), existing)
    assert find_conflicts(TableNumber(3), SATURDAY, _window("14:00", "15:30"), existing) == []


def test_other_dates_do_not_block() -> None:
    existing = [_booking(3, "14:00", "15:30", booking_date=date(2024, 2, 11))]

    assert is_table_free(TableNumber(3), SATURDAY, _window("14:00", "15:30"), existing)


def test_back_to_back_bookings_are_free() -> None:
    existing = [_booking(1, "10:00", "11:00"), _booking(1, "12:00", "13:00")]

    assert is_table_free(TableNumber(1), SATURDAY, _window("11:00", "12:00"), existing)
    conflicting = find_conflicts(TableNumber(1), SATURDAY, _window("10:30", "12:30"), existing)
    assert [str(item.reservation_id) for item in conflicting] == ["bkg_1_10:00", "bkg_1_12:00"]

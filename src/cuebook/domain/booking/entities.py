from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime, time
from enum import Enum

from cuebook.domain.common.ids import AccountId, ReservationId, TableNumber
from cuebook.domain.common.money import Money


class ReservationStatus(str, Enum):
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


_ALLOWED_TRANSITIONS: dict[ReservationStatus, frozenset[ReservationStatus]] = {
    ReservationStatus.CONFIRMED: frozenset(
        {ReservationStatus.CANCELLED, ReservationStatus.COMPLETED}
    ),
    ReservationStatus.CANCELLED: frozenset(),
    ReservationStatus.COMPLETED: frozenset(),
}


def minutes_of_day(value: time) -> int:
    return value.hour * 60 + value.minute


def time_from_minutes(minutes: int) -> time:
    if minutes < 0 or minutes >= 24 * 60:
        raise ValueError(f"minute offset out of range: {minutes}")
    return time(hour=minutes // 60, minute=minutes % 60)


@dataclass(frozen=True)
class TimeWindow:
    """Half-open wall-clock interval [start, end) within a single day."""

    start: time
    end: time

    def __post_init__(self) -> None:
        if self.start.second or self.start.microsecond or self.end.second or self.end.microsecond:
            raise ValueError("window bounds must be whole minutes")
        if self.start >= self.end:
            raise ValueError("window start must be before window end")

    @property
    def duration_minutes(self) -> int:
        return minutes_of_day(self.end) - minutes_of_day(self.start)

    @property
    def duration_hours(self) -> float:
        return self.duration_minutes / 60

    def contains(self, other: TimeWindow) -> bool:
        return self.start <= other.start and other.end <= self.end


@dataclass(frozen=True)
class Reservation:
    reservation_id: ReservationId
    requester_id: AccountId
    table_number: TableNumber
    date: date
    window: TimeWindow
    player_count: int
    status: ReservationStatus
    price: Money
    created_at: datetime

    def __post_init__(self) -> None:
        if self.table_number < 1:
            raise ValueError("table_number must be >= 1")
        if self.player_count < 1:
            raise ValueError("player_count must be >= 1")

    @property
    def is_active(self) -> bool:
        return self.status != ReservationStatus.CANCELLED

    @property
    def duration_hours(self) -> float:
        return self.window.duration_hours

    def owned_by(self, account_id: AccountId) -> bool:
        return self.requester_id == account_id

    def transition_to(self, new_status: ReservationStatus) -> Reservation:
        if new_status not in _ALLOWED_TRANSITIONS[self.status]:
            raise ReservationTransitionError(
                f"cannot move reservation {self.reservation_id} "
                f"from status={self.status.value} to status={new_status.value}"
            )
        return replace(self, status=new_status)

    def cancel(self) -> Reservation:
        return self.transition_to(ReservationStatus.CANCELLED)

    def complete(self) -> Reservation:
        return self.transition_to(ReservationStatus.COMPLETED)


def create_confirmed_reservation(
    reservation_id: ReservationId,
    requester_id: AccountId,
    table_number: TableNumber,
    booking_date: date,
    window: TimeWindow,
    player_count: int,
    price: Money,
    now: datetime,
) -> Reservation:
    return Reservation(
        reservation_id=reservation_id,
        requester_id=requester_id,
        table_number=table_number,
        date=booking_date,
        window=window,
        player_count=player_count,
        status=ReservationStatus.CONFIRMED,
        price=price,
        created_at=now,
    )


class ReservationTransitionError(Exception):
    pass

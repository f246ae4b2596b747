from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import date

from cuebook.domain.booking.availability import is_table_free
from cuebook.domain.booking.entities import (
    Reservation,
    TimeWindow,
    minutes_of_day,
    time_from_minutes,
)
from cuebook.domain.common.ids import TableNumber
from cuebook.domain.venue.policy import SLOT_STEP_MINUTES, VenuePolicy


@dataclass(frozen=True)
class Slot:
    window: TimeWindow
    available_tables: tuple[TableNumber, ...]

    @property
    def available_count(self) -> int:
        return len(self.available_tables)


def candidate_windows(policy: VenuePolicy, duration_minutes: int) -> Iterator[TimeWindow]:
    opens = minutes_of_day(policy.opens_at)
    closes = minutes_of_day(policy.closes_at)
    for start in range(opens, closes, SLOT_STEP_MINUTES):
        if start + duration_minutes > closes:
            return
        yield TimeWindow(
            start=time_from_minutes(start),
            end=time_from_minutes(start + duration_minutes),
        )


def generate_slots(
    policy: VenuePolicy,
    booking_date: date,
    duration_minutes: int,
    reservations: Iterable[Reservation],
) -> Iterator[Slot]:
    """Yield bookable windows for the day, earliest first.

    Windows where every table is taken are skipped. Each call walks the
    reservation snapshot it was given, so iterating again yields the same
    sequence.
    """
    by_table: dict[TableNumber, list[Reservation]] = defaultdict(list)
    for reservation in reservations:
        if reservation.date == booking_date and reservation.is_active:
            by_table[reservation.table_number].append(reservation)

    for window in candidate_windows(policy, duration_minutes):
        free = tuple(
            table_number
            for table_number in policy.table_numbers()
            if is_table_free(table_number, booking_date, window, by_table.get(table_number, ()))
        )
        if free:
            yield Slot(window=window, available_tables=free)

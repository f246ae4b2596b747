from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from cuebook.domain.booking.entities import Reservation, TimeWindow
from cuebook.domain.common.ids import TableNumber


def conflicts(first: TimeWindow, second: TimeWindow) -> bool:
    return first.start < second.end and second.start < first.end


def is_table_free(
    table_number: TableNumber,
    booking_date: date,
    window: TimeWindow,
    reservations: Iterable[Reservation],
) -> bool:
    for reservation in reservations:
        if not reservation.is_active:
            continue
        if reservation.table_number != table_number or reservation.date != booking_date:
            continue
        if conflicts(reservation.window, window):
            return False
    return True


def find_conflicts(
    table_number: TableNumber,
    booking_date: date,
    window: TimeWindow,
    reservations: Iterable[Reservation],
) -> list[Reservation]:
    return [
        reservation
        for reservation in reservations
        if reservation.is_active
        and reservation.table_number == table_number
        and reservation.date == booking_date
        and conflicts(reservation.window, window)
    ]

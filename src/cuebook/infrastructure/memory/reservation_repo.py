from __future__ import annotations

import threading
from collections import defaultdict
from datetime import date

from cuebook.application.ports.repositories import ReservationNotStoredError, ReservationRepository
from cuebook.domain.booking.entities import Reservation
from cuebook.domain.common.ids import AccountId, ReservationId, TableNumber


class InMemoryReservationRepository(ReservationRepository):
    """Process-local reservation store.

    Reservations are immutable, so every list returned is a consistent
    snapshot that later appends or status updates cannot tear.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_id: dict[ReservationId, Reservation] = {}
        self._by_table_day: dict[tuple[int, date], list[ReservationId]] = defaultdict(list)

    def add(self, reservation: Reservation) -> None:
        with self._lock:
            if reservation.reservation_id in self._by_id:
                raise ValueError(f"reservation {reservation.reservation_id} already stored")
            self._by_id[reservation.reservation_id] = reservation
            key = (int(reservation.table_number), reservation.date)
            self._by_table_day[key].append(reservation.reservation_id)

    def get(self, reservation_id: ReservationId) -> Reservation | None:
        with self._lock:
            return self._by_id.get(reservation_id)

    def update(self, reservation: Reservation) -> None:
        with self._lock:
            current = self._by_id.get(reservation.reservation_id)
            if current is None:
                raise ReservationNotStoredError(
                    f"reservation {reservation.reservation_id} is not stored"
                )
            if (current.table_number, current.date) != (reservation.table_number, reservation.date):
                raise ValueError("table and date of a stored reservation cannot change")
            self._by_id[reservation.reservation_id] = reservation

    def list_for_date(self, booking_date: date) -> list[Reservation]:
        with self._lock:
            return [
                reservation
                for reservation in self._by_id.values()
                if reservation.date == booking_date
            ]

    def list_for_table(self, table_number: TableNumber, booking_date: date) -> list[Reservation]:
        with self._lock:
            ids = self._by_table_day.get((int(table_number), booking_date), [])
            return [self._by_id[reservation_id] for reservation_id in ids]

    def list_for_requester(self, requester_id: AccountId) -> list[Reservation]:
        with self._lock:
            return [
                reservation
                for reservation in self._by_id.values()
                if reservation.requester_id == requester_id
            ]

    def list_all(self) -> list[Reservation]:
        with self._lock:
            return list(self._by_id.values())

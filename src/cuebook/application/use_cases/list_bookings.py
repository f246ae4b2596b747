from __future__ import annotations

from cuebook.application.dto.responses import AdminReservationListResponse, ReservationListResponse
from cuebook.application.errors import ForbiddenError
from cuebook.application.mappers.reservation_mapper import (
    to_admin_reservation_response,
    to_reservation_response,
)
from cuebook.application.ports.identity import Identity
from cuebook.application.ports.repositories import AccountRepository, ReservationRepository
from cuebook.domain.booking.entities import Reservation
from cuebook.domain.common.ids import AccountId


def _schedule_order(reservation: Reservation) -> tuple:
    return reservation.date, reservation.window.start, int(reservation.table_number)


class ListMyBookings:
    def __init__(self, reservation_repository: ReservationRepository) -> None:
        self._reservation_repository = reservation_repository

    def execute(self, requester_id: AccountId) -> ReservationListResponse:
        reservations = sorted(
            self._reservation_repository.list_for_requester(requester_id),
            key=_schedule_order,
        )
        return ReservationListResponse(
            bookings=[to_reservation_response(reservation) for reservation in reservations]
        )


class ListAllBookings:
    def __init__(
        self,
        reservation_repository: ReservationRepository,
        account_repository: AccountRepository,
    ) -> None:
        self._reservation_repository = reservation_repository
        self._account_repository = account_repository

    def execute(self, requester: Identity) -> AdminReservationListResponse:
        if not requester.is_admin:
            raise ForbiddenError("admin access required")

        owners = {account.account_id: account for account in self._account_repository.list_all()}
        reservations = sorted(self._reservation_repository.list_all(), key=_schedule_order)
        return AdminReservationListResponse(
            bookings=[
                to_admin_reservation_response(reservation, owners.get(reservation.requester_id))
                for reservation in reservations
            ]
        )

from __future__ import annotations

from collections import Counter

from cuebook.application.dto.responses import DashboardStatsResponse
from cuebook.application.errors import ForbiddenError
from cuebook.application.mappers.reservation_mapper import to_money_response
from cuebook.application.ports.identity import Identity
from cuebook.application.ports.repositories import AccountRepository, ReservationRepository
from cuebook.domain.booking.entities import ReservationStatus
from cuebook.domain.common.money import Money


class GetDashboardStats:
    def __init__(
        self,
        reservation_repository: ReservationRepository,
        account_repository: AccountRepository,
        currency: str,
    ) -> None:
        self._reservation_repository = reservation_repository
        self._account_repository = account_repository
        self._currency = currency

    def execute(self, requester: Identity) -> DashboardStatsResponse:
        if not requester.is_admin:
            raise ForbiddenError("admin access required")

        reservations = self._reservation_repository.list_all()
        by_status = Counter(reservation.status for reservation in reservations)

        # Revenue counts bookings that are still expected to be played.
        revenue = Money(amount_cents=0, currency=self._currency)
        for reservation in reservations:
            if reservation.status == ReservationStatus.CONFIRMED:
                revenue = revenue + reservation.price

        return DashboardStatsResponse(
            totalBookings=len(reservations),
            confirmedBookings=by_status[ReservationStatus.CONFIRMED],
            cancelledBookings=by_status[ReservationStatus.CANCELLED],
            completedBookings=by_status[ReservationStatus.COMPLETED],
            totalUsers=self._account_repository.count(),
            totalRevenue=to_money_response(revenue),
        )

from __future__ import annotations

from cuebook.application.dto.responses import ReservationResponse
from cuebook.application.errors import ForbiddenError, ReservationNotFoundError
from cuebook.application.mappers.reservation_mapper import to_reservation_response
from cuebook.application.ports.identity import Identity
from cuebook.application.ports.repositories import ReservationRepository
from cuebook.application.use_cases.context import TraceContext
from cuebook.application.use_cases.transitions import ReservationTransitioner
from cuebook.domain.booking.entities import ReservationStatus
from cuebook.domain.common.ids import ReservationId


class CancelBooking:
    def __init__(
        self,
        reservation_repository: ReservationRepository,
        transitioner: ReservationTransitioner,
    ) -> None:
        self._reservation_repository = reservation_repository
        self._transitioner = transitioner

    def execute(
        self,
        reservation_id: ReservationId,
        requester: Identity,
        trace_ctx: TraceContext,
    ) -> ReservationResponse:
        reservation = self._reservation_repository.get(reservation_id)
        if reservation is None:
            raise ReservationNotFoundError(f"reservation {reservation_id} not found")
        if not (requester.is_admin or reservation.owned_by(requester.subject_id)):
            raise ForbiddenError("you can only cancel your own bookings")

        cancelled = self._transitioner.apply(
            reservation,
            ReservationStatus.CANCELLED,
            trace_ctx,
        )
        return to_reservation_response(cancelled)

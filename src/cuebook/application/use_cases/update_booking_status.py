from __future__ import annotations

from cuebook.application.dto.responses import ReservationResponse
from cuebook.application.errors import (
    BookingValidationError,
    ForbiddenError,
    ReservationNotFoundError,
)
from cuebook.application.mappers.reservation_mapper import to_reservation_response
from cuebook.application.ports.identity import Identity
from cuebook.application.ports.repositories import ReservationRepository
from cuebook.application.use_cases.context import TraceContext
from cuebook.application.use_cases.transitions import ReservationTransitioner
from cuebook.domain.booking.entities import ReservationStatus
from cuebook.domain.common.ids import ReservationId

_STATUS_MAP: dict[str, ReservationStatus] = {status.value: status for status in ReservationStatus}


class UpdateBookingStatus:
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
        new_status: str,
        requester: Identity,
        trace_ctx: TraceContext,
    ) -> ReservationResponse:
        if not requester.is_admin:
            raise ForbiddenError("admin access required")

        status = _STATUS_MAP.get(new_status.strip().lower())
        if status is None:
            raise BookingValidationError(
                f"invalid status: {new_status}",
                {"allowed": sorted(_STATUS_MAP)},
            )

        reservation = self._reservation_repository.get(reservation_id)
        if reservation is None:
            raise ReservationNotFoundError(f"reservation {reservation_id} not found")

        updated = self._transitioner.apply(reservation, status, trace_ctx)
        return to_reservation_response(updated)

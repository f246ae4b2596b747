from __future__ import annotations

import logging
from datetime import datetime, timezone

from cuebook.application.concurrency import KeyedLock
from cuebook.application.errors import InvalidTransitionError, ReservationNotFoundError
from cuebook.application.mappers.event_envelope import (
    BOOKING_EVENTS_CHANNEL,
    serialize_booking_event,
)
from cuebook.application.metrics.booking_lifecycle import record_booking_status, record_transition
from cuebook.application.ports.publisher import EventPublisher
from cuebook.application.ports.repositories import ReservationRepository
from cuebook.application.use_cases.context import TraceContext
from cuebook.application.use_cases.create_booking import reservation_lock_key
from cuebook.domain.booking.entities import (
    Reservation,
    ReservationStatus,
    ReservationTransitionError,
)

logger = logging.getLogger(__name__)


class ReservationTransitioner:
    """Applies a status change under the same per-table/day lock as booking commits."""

    def __init__(
        self,
        reservation_repository: ReservationRepository,
        locks: KeyedLock,
        publisher: EventPublisher,
    ) -> None:
        self._reservation_repository = reservation_repository
        self._locks = locks
        self._publisher = publisher

    def apply(
        self,
        reservation: Reservation,
        new_status: ReservationStatus,
        trace_ctx: TraceContext,
    ) -> Reservation:
        with self._locks.hold(reservation_lock_key(reservation.table_number, reservation.date)):
            current = self._reservation_repository.get(reservation.reservation_id)
            if current is None:
                raise ReservationNotFoundError(
                    f"reservation {reservation.reservation_id} not found"
                )
            try:
                updated = current.transition_to(new_status)
            except ReservationTransitionError as exc:
                raise InvalidTransitionError(
                    str(exc),
                    {"currentStatus": current.status.value, "requestedStatus": new_status.value},
                ) from exc
            self._reservation_repository.update(updated)

        record_transition(from_status=current.status, to_status=updated.status)
        record_booking_status(updated)
        logger.info(
            "booking_status_changed",
            extra={
                "reservation_id": updated.reservation_id,
                "table_number": updated.table_number,
                "booking_date": str(updated.date),
            },
        )
        message = serialize_booking_event(
            occurred_at=datetime.now(timezone.utc),
            reservation=updated,
            trace_id=trace_ctx.trace_id,
            request_id=trace_ctx.request_id,
        )
        try:
            self._publisher.publish(channel=BOOKING_EVENTS_CHANNEL, message=message)
        except Exception:
            logger.exception("booking_event_publish_failed")
        return updated

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from uuid import uuid4

from cuebook.application.concurrency import KeyedLock
from cuebook.application.dto.requests import CreateBookingRequest
from cuebook.application.dto.responses import ReservationResponse
from cuebook.application.errors import BookingValidationError, ResourceUnavailableError
from cuebook.application.mappers.event_envelope import (
    BOOKING_EVENTS_CHANNEL,
    serialize_booking_event,
)
from cuebook.application.mappers.reservation_mapper import format_clock, to_reservation_response
from cuebook.application.metrics.booking_lifecycle import (
    record_booking_conflict,
    record_booking_status,
)
from cuebook.application.ports.publisher import EventPublisher
from cuebook.application.ports.repositories import ReservationRepository
from cuebook.application.use_cases.context import TraceContext
from cuebook.domain.booking.availability import find_conflicts
from cuebook.domain.booking.entities import TimeWindow, create_confirmed_reservation
from cuebook.domain.booking.pricing import RateTable
from cuebook.domain.common.ids import AccountId, ReservationId, TableNumber
from cuebook.domain.venue.policy import (
    SLOT_STEP_MINUTES,
    VenuePolicy,
    duration_minutes_from_hours,
    is_on_slot_boundary,
)

logger = logging.getLogger(__name__)


def reservation_lock_key(table_number: int, booking_date: date) -> tuple[int, date]:
    return int(table_number), booking_date


class CreateBooking:
    def __init__(
        self,
        reservation_repository: ReservationRepository,
        venue_policy: VenuePolicy,
        rate_table: RateTable,
        locks: KeyedLock,
        publisher: EventPublisher,
    ) -> None:
        self._reservation_repository = reservation_repository
        self._venue_policy = venue_policy
        self._rate_table = rate_table
        self._locks = locks
        self._publisher = publisher

    def execute(
        self,
        requester_id: AccountId,
        request_dto: CreateBookingRequest,
        trace_ctx: TraceContext,
    ) -> ReservationResponse:
        window = self._validated_window(request_dto)
        table_number = TableNumber(request_dto.table_number)
        price = self._rate_table.price_for(request_dto.date, window.duration_minutes)

        with self._locks.hold(reservation_lock_key(table_number, request_dto.date)):
            existing = self._reservation_repository.list_for_table(table_number, request_dto.date)
            if find_conflicts(table_number, request_dto.date, window, existing):
                record_booking_conflict(table_number)
                logger.info(
                    "booking_rejected_conflict",
                    extra={"table_number": table_number, "booking_date": str(request_dto.date)},
                )
                raise ResourceUnavailableError(
                    f"table {table_number} is not available for "
                    f"{format_clock(window.start)}-{format_clock(window.end)} "
                    f"on {request_dto.date.isoformat()}",
                    {
                        "tableNumber": table_number,
                        "date": request_dto.date.isoformat(),
                        "startTime": format_clock(window.start),
                        "endTime": format_clock(window.end),
                    },
                )

            now = datetime.now(timezone.utc)
            reservation = create_confirmed_reservation(
                reservation_id=ReservationId(f"bkg_{uuid4().hex[:12]}"),
                requester_id=requester_id,
                table_number=table_number,
                booking_date=request_dto.date,
                window=window,
                player_count=request_dto.player_count,
                price=price,
                now=now,
            )
            self._reservation_repository.add(reservation)

        record_booking_status(reservation)
        logger.info(
            "booking_confirmed",
            extra={
                "reservation_id": reservation.reservation_id,
                "table_number": table_number,
                "booking_date": str(reservation.date),
            },
        )
        message = serialize_booking_event(
            occurred_at=now,
            reservation=reservation,
            trace_id=trace_ctx.trace_id,
            request_id=trace_ctx.request_id,
        )
        try:
            self._publisher.publish(channel=BOOKING_EVENTS_CHANNEL, message=message)
        except Exception:
            logger.exception("booking_event_publish_failed")
        return to_reservation_response(reservation)

    def _validated_window(self, request_dto: CreateBookingRequest) -> TimeWindow:
        policy = self._venue_policy
        try:
            window = TimeWindow(start=request_dto.start_time, end=request_dto.end_time)
        except ValueError as exc:
            raise BookingValidationError(str(exc)) from exc

        if not (is_on_slot_boundary(window.start) and is_on_slot_boundary(window.end)):
            raise BookingValidationError(
                f"booking times must fall on {SLOT_STEP_MINUTES}-minute boundaries"
            )
        if not policy.operating_window.contains(window):
            raise BookingValidationError(
                f"booking must fall within opening hours "
                f"{format_clock(policy.opens_at)}-{format_clock(policy.closes_at)}"
            )

        try:
            requested_minutes = duration_minutes_from_hours(request_dto.duration_hours)
        except ValueError as exc:
            raise BookingValidationError(str(exc)) from exc
        if requested_minutes != window.duration_minutes:
            raise BookingValidationError(
                "durationHours does not match the booked window",
                {"durationHours": request_dto.duration_hours, "windowHours": window.duration_hours},
            )

        if not policy.has_table(request_dto.table_number):
            raise BookingValidationError(
                f"table number must be between 1 and {policy.table_count}",
                {"tableNumber": request_dto.table_number},
            )
        if not 1 <= request_dto.player_count <= policy.max_players_per_table:
            raise BookingValidationError(
                f"player count must be between 1 and {policy.max_players_per_table}",
                {"playerCount": request_dto.player_count},
            )
        return window

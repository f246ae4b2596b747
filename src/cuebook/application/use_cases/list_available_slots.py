from __future__ import annotations

from datetime import date

from cuebook.application.dto.responses import AvailableSlotsResponse
from cuebook.application.errors import BookingValidationError
from cuebook.application.mappers.reservation_mapper import to_slot_response
from cuebook.application.metrics.booking_lifecycle import record_availability_query
from cuebook.application.ports.repositories import ReservationRepository
from cuebook.domain.booking.pricing import is_weekend
from cuebook.domain.booking.slots import generate_slots
from cuebook.domain.venue.policy import VenuePolicy, duration_minutes_from_hours


class ListAvailableSlots:
    def __init__(
        self,
        reservation_repository: ReservationRepository,
        venue_policy: VenuePolicy,
    ) -> None:
        self._reservation_repository = reservation_repository
        self._venue_policy = venue_policy

    def execute(self, booking_date: date, duration_hours: float) -> AvailableSlotsResponse:
        try:
            duration_minutes = duration_minutes_from_hours(duration_hours)
        except ValueError as exc:
            raise BookingValidationError(str(exc), {"durationHours": duration_hours}) from exc

        snapshot = self._reservation_repository.list_for_date(booking_date)
        slots = [
            to_slot_response(slot)
            for slot in generate_slots(
                policy=self._venue_policy,
                booking_date=booking_date,
                duration_minutes=duration_minutes,
                reservations=snapshot,
            )
        ]

        record_availability_query(
            day_type="weekend" if is_weekend(booking_date) else "weekday",
            slot_count=len(slots),
        )
        return AvailableSlotsResponse(
            date=booking_date,
            durationHours=duration_hours,
            slots=slots,
        )

from __future__ import annotations

from prometheus_client import Counter, Histogram

from cuebook.domain.booking.entities import Reservation, ReservationStatus

BOOKINGS_TOTAL = Counter(
    "cuebook_bookings_total",
    "Total number of reservations observed by status.",
    ["status"],
)

BOOKING_CONFLICTS_TOTAL = Counter(
    "cuebook_booking_conflicts_total",
    "Total number of booking commits rejected because the table was taken.",
    ["table_number"],
)

BOOKING_TRANSITION_TOTAL = Counter(
    "cuebook_booking_transition_total",
    "Total number of reservation status transitions.",
    ["from", "to"],
)

AVAILABILITY_QUERIES_TOTAL = Counter(
    "cuebook_availability_queries_total",
    "Total number of availability queries.",
    ["day_type"],
)

AVAILABLE_SLOTS_RETURNED = Histogram(
    "cuebook_available_slots_returned",
    "Number of bookable windows returned per availability query.",
    buckets=(0, 1, 2, 5, 10, 15, 20, 25, 30),
)


def record_booking_status(reservation: Reservation) -> None:
    BOOKINGS_TOTAL.labels(status=reservation.status.value).inc()


def record_booking_conflict(table_number: int) -> None:
    BOOKING_CONFLICTS_TOTAL.labels(table_number=str(table_number)).inc()


def record_transition(from_status: ReservationStatus, to_status: ReservationStatus) -> None:
    BOOKING_TRANSITION_TOTAL.labels(**{"from": from_status.value, "to": to_status.value}).inc()


def record_availability_query(day_type: str, slot_count: int) -> None:
    AVAILABILITY_QUERIES_TOTAL.labels(day_type=day_type).inc()
    AVAILABLE_SLOTS_RETURNED.observe(slot_count)

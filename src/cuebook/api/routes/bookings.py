from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, Depends, Query, status

from cuebook.api.dependencies import require_identity, trace_context
from cuebook.application.dto.requests import CreateBookingRequest
from cuebook.application.dto.responses import (
    AvailableSlotsResponse,
    ReservationListResponse,
    ReservationResponse,
)
from cuebook.application.ports.identity import Identity
from cuebook.application.use_cases.cancel_booking import CancelBooking
from cuebook.application.use_cases.context import TraceContext
from cuebook.application.use_cases.create_booking import CreateBooking
from cuebook.application.use_cases.list_available_slots import ListAvailableSlots
from cuebook.application.use_cases.list_bookings import ListMyBookings
from cuebook.application.use_cases.transitions import ReservationTransitioner
from cuebook.domain.common.ids import ReservationId
from cuebook.infrastructure.container import get_container
from cuebook.infrastructure.observability.otel import tag_booking_span

router = APIRouter()


def _list_available_slots_use_case() -> ListAvailableSlots:
    container = get_container()
    return ListAvailableSlots(
        reservation_repository=container.reservation_repository,
        venue_policy=container.venue_policy,
    )


def _create_booking_use_case() -> CreateBooking:
    container = get_container()
    return CreateBooking(
        reservation_repository=container.reservation_repository,
        venue_policy=container.venue_policy,
        rate_table=container.rate_table,
        locks=container.reservation_locks,
        publisher=container.publisher,
    )


def _cancel_booking_use_case() -> CancelBooking:
    container = get_container()
    return CancelBooking(
        reservation_repository=container.reservation_repository,
        transitioner=ReservationTransitioner(
            reservation_repository=container.reservation_repository,
            locks=container.reservation_locks,
            publisher=container.publisher,
        ),
    )


def _list_my_bookings_use_case() -> ListMyBookings:
    return ListMyBookings(reservation_repository=get_container().reservation_repository)


@router.get("/v1/bookings/available-slots", response_model=AvailableSlotsResponse)
def list_available_slots(
    booking_date: dt.date = Query(alias="date"),
    duration_hours: float = Query(alias="durationHours", allow_inf_nan=False),
) -> AvailableSlotsResponse:
    return _list_available_slots_use_case().execute(
        booking_date=booking_date,
        duration_hours=duration_hours,
    )


@router.post(
    "/v1/bookings",
    response_model=ReservationResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_booking(
    request_dto: CreateBookingRequest,
    identity: Identity = Depends(require_identity),
    trace_ctx: TraceContext = Depends(trace_context),
) -> ReservationResponse:
    tag_booking_span(request_dto.table_number, request_dto.date)
    result = _create_booking_use_case().execute(
        requester_id=identity.subject_id,
        request_dto=request_dto,
        trace_ctx=trace_ctx,
    )
    tag_booking_span(result.tableNumber, result.date, result.reservationId)
    return result


@router.get("/v1/bookings", response_model=ReservationListResponse)
def list_my_bookings(identity: Identity = Depends(require_identity)) -> ReservationListResponse:
    return _list_my_bookings_use_case().execute(requester_id=identity.subject_id)


@router.delete("/v1/bookings/{reservation_id}", response_model=ReservationResponse)
def cancel_booking(
    reservation_id: str,
    identity: Identity = Depends(require_identity),
    trace_ctx: TraceContext = Depends(trace_context),
) -> ReservationResponse:
    result = _cancel_booking_use_case().execute(
        reservation_id=ReservationId(reservation_id),
        requester=identity,
        trace_ctx=trace_ctx,
    )
    tag_booking_span(result.tableNumber, result.date, result.reservationId)
    return result

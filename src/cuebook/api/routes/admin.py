from __future__ import annotations

from fastapi import APIRouter, Depends

from cuebook.api.dependencies import require_identity, trace_context
from cuebook.application.dto.requests import UpdateBookingStatusRequest
from cuebook.application.dto.responses import (
    AccountListResponse,
    AdminReservationListResponse,
    DashboardStatsResponse,
    ReservationResponse,
)
from cuebook.application.ports.identity import Identity
from cuebook.application.use_cases.accounts import ListAccounts
from cuebook.application.use_cases.admin_dashboard import GetDashboardStats
from cuebook.application.use_cases.context import TraceContext
from cuebook.application.use_cases.list_bookings import ListAllBookings
from cuebook.application.use_cases.transitions import ReservationTransitioner
from cuebook.application.use_cases.update_booking_status import UpdateBookingStatus
from cuebook.domain.common.ids import ReservationId
from cuebook.infrastructure.container import get_container
from cuebook.infrastructure.observability.otel import tag_booking_span

router = APIRouter(prefix="/v1/admin")


def _update_booking_status_use_case() -> UpdateBookingStatus:
    container = get_container()
    return UpdateBookingStatus(
        reservation_repository=container.reservation_repository,
        transitioner=ReservationTransitioner(
            reservation_repository=container.reservation_repository,
            locks=container.reservation_locks,
            publisher=container.publisher,
        ),
    )


def _list_all_bookings_use_case() -> ListAllBookings:
    container = get_container()
    return ListAllBookings(
        reservation_repository=container.reservation_repository,
        account_repository=container.account_repository,
    )


def _dashboard_use_case() -> GetDashboardStats:
    container = get_container()
    return GetDashboardStats(
        reservation_repository=container.reservation_repository,
        account_repository=container.account_repository,
        currency=container.rate_table.currency,
    )


def _list_accounts_use_case() -> ListAccounts:
    return ListAccounts(account_repository=get_container().account_repository)


@router.get("/bookings", response_model=AdminReservationListResponse)
def list_all_bookings(
    identity: Identity = Depends(require_identity),
) -> AdminReservationListResponse:
    return _list_all_bookings_use_case().execute(requester=identity)


@router.put("/bookings/{reservation_id}", response_model=ReservationResponse)
def update_booking_status(
    reservation_id: str,
    request_dto: UpdateBookingStatusRequest,
    identity: Identity = Depends(require_identity),
    trace_ctx: TraceContext = Depends(trace_context),
) -> ReservationResponse:
    result = _update_booking_status_use_case().execute(
        reservation_id=ReservationId(reservation_id),
        new_status=request_dto.status,
        requester=identity,
        trace_ctx=trace_ctx,
    )
    tag_booking_span(result.tableNumber, result.date, result.reservationId)
    return result


@router.get("/dashboard", response_model=DashboardStatsResponse)
def dashboard(identity: Identity = Depends(require_identity)) -> DashboardStatsResponse:
    return _dashboard_use_case().execute(requester=identity)


@router.get("/users", response_model=AccountListResponse)
def list_accounts(identity: Identity = Depends(require_identity)) -> AccountListResponse:
    return _list_accounts_use_case().execute(requester=identity)

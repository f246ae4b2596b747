from __future__ import annotations

from datetime import time

from cuebook.application.dto.responses import (
    AdminReservationResponse,
    MoneyResponse,
    ReservationResponse,
    SlotResponse,
)
from cuebook.domain.account.entities import Account
from cuebook.domain.booking.entities import Reservation
from cuebook.domain.booking.slots import Slot
from cuebook.domain.common.money import Money


def format_clock(value: time) -> str:
    return value.strftime("%H:%M")


def to_money_response(money: Money) -> MoneyResponse:
    return MoneyResponse(amountCents=money.amount_cents, currency=money.currency)


def to_reservation_response(reservation: Reservation) -> ReservationResponse:
    return ReservationResponse(
        reservationId=str(reservation.reservation_id),
        requesterId=str(reservation.requester_id),
        tableNumber=int(reservation.table_number),
        date=reservation.date,
        startTime=format_clock(reservation.window.start),
        endTime=format_clock(reservation.window.end),
        durationHours=reservation.duration_hours,
        playerCount=reservation.player_count,
        status=reservation.status.value,
        price=to_money_response(reservation.price),
        createdAt=reservation.created_at,
    )


def to_admin_reservation_response(
    reservation: Reservation,
    owner: Account | None,
) -> AdminReservationResponse:
    base = to_reservation_response(reservation)
    return AdminReservationResponse(
        **base.model_dump(),
        userName=owner.name if owner else None,
        userEmail=owner.email if owner else None,
        userPhone=owner.phone if owner else None,
    )


def to_slot_response(slot: Slot) -> SlotResponse:
    return SlotResponse(
        startTime=format_clock(slot.window.start),
        endTime=format_clock(slot.window.end),
        availableTables=[int(number) for number in slot.available_tables],
        availableCount=slot.available_count,
    )

from __future__ import annotations

import json
from datetime import datetime
from typing import Any
from uuid import uuid4

from cuebook.domain.booking.entities import Reservation

BOOKING_EVENTS_CHANNEL = "events:bookings"


def _serialize_event(
    *,
    event_type: str,
    occurred_at: datetime,
    payload: dict[str, Any],
    trace_id: str | None,
    request_id: str | None,
) -> str:
    envelope = {
        "event_id": str(uuid4()),
        "event_type": event_type,
        "occurred_at": occurred_at.isoformat(),
        "request_id": request_id,
        "trace_id": trace_id,
        "payload": payload,
    }
    return json.dumps(envelope, separators=(",", ":"), ensure_ascii=False)


def serialize_booking_event(
    *,
    occurred_at: datetime,
    reservation: Reservation,
    trace_id: str | None,
    request_id: str | None,
) -> str:
    return _serialize_event(
        event_type=f"booking.{reservation.status.value}",
        occurred_at=occurred_at,
        trace_id=trace_id,
        request_id=request_id,
        payload={
            "reservationId": str(reservation.reservation_id),
            "requesterId": str(reservation.requester_id),
            "tableNumber": int(reservation.table_number),
            "date": reservation.date.isoformat(),
            "startTime": reservation.window.start.strftime("%H:%M"),
            "endTime": reservation.window.end.strftime("%H:%M"),
            "status": reservation.status.value,
            "price": {
                "amountCents": reservation.price.amount_cents,
                "currency": reservation.price.currency,
            },
        },
    )

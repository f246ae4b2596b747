from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

from opentelemetry.sdk.trace import TracerProvider

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from cuebook.infrastructure.observability.otel import current_trace_id, tag_booking_span


def test_booking_attributes_land_on_current_span() -> None:
    tracer = TracerProvider().get_tracer("cuebook-tests")

    with tracer.start_as_current_span("POST /v1/bookings") as span:
        tag_booking_span(3, date(2024, 2, 10), "bkg_0123456789ab")
        trace_id = current_trace_id()

    assert span.attributes["booking.table_number"] == 3
    assert span.attributes["booking.date"] == "2024-02-10"
    assert span.attributes["booking.reservation_id"] == "bkg_0123456789ab"
    assert trace_id == format(span.get_span_context().trace_id, "032x")


def test_no_trace_id_outside_a_span() -> None:
    assert current_trace_id() is None
    tag_booking_span(3, date(2024, 2, 10))

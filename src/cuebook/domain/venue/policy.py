from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import time

from cuebook.domain.booking.entities import TimeWindow, minutes_of_day
from cuebook.domain.common.ids import TableNumber

SLOT_STEP_MINUTES = 30


@dataclass(frozen=True)
class VenuePolicy:
    table_count: int
    opens_at: time
    closes_at: time
    max_players_per_table: int

    def __post_init__(self) -> None:
        if self.table_count < 1:
            raise ValueError("table_count must be >= 1")
        if self.max_players_per_table < 1:
            raise ValueError("max_players_per_table must be >= 1")
        if self.opens_at >= self.closes_at:
            raise ValueError("venue must open before it closes")
        if not (is_on_slot_boundary(self.opens_at) and is_on_slot_boundary(self.closes_at)):
            raise ValueError(f"opening hours must fall on {SLOT_STEP_MINUTES}-minute boundaries")

    @property
    def operating_window(self) -> TimeWindow:
        return TimeWindow(start=self.opens_at, end=self.closes_at)

    def table_numbers(self) -> list[TableNumber]:
        return [TableNumber(number) for number in range(1, self.table_count + 1)]

    def has_table(self, table_number: int) -> bool:
        return 1 <= table_number <= self.table_count


def is_on_slot_boundary(value: time) -> bool:
    return (
        value.second == 0
        and value.microsecond == 0
        and minutes_of_day(value) % SLOT_STEP_MINUTES == 0
    )


def duration_minutes_from_hours(duration_hours: float) -> int:
    """Convert a requested duration to whole minutes.

    Durations are quantized to half hours; anything else is rejected rather
    than rounded so that the booked window and the charged duration agree.
    """
    if not math.isfinite(duration_hours) or duration_hours <= 0:
        raise ValueError(f"duration must be a positive multiple of 0.5 hours, got {duration_hours}")
    half_hours = duration_hours * 2
    if half_hours != int(half_hours):
        raise ValueError(f"duration must be a positive multiple of 0.5 hours, got {duration_hours}")
    return int(half_hours) * SLOT_STEP_MINUTES

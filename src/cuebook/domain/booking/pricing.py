from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from cuebook.domain.common.money import Money


@dataclass(frozen=True)
class RateTable:
    """Two-tier hourly rate keyed on the calendar day of the booking."""

    weekday_rate: Money
    weekend_rate: Money

    def __post_init__(self) -> None:
        if self.weekday_rate.currency != self.weekend_rate.currency:
            raise ValueError("weekday and weekend rates must share a currency")
        for rate in (self.weekday_rate, self.weekend_rate):
            # Half-hour bookings must price to whole minor units.
            if rate.amount_cents % 2:
                raise ValueError("hourly rates must be divisible into half hours")

    @property
    def currency(self) -> str:
        return self.weekday_rate.currency

    def rate_for(self, booking_date: date) -> Money:
        return self.weekend_rate if is_weekend(booking_date) else self.weekday_rate

    def price_for(self, booking_date: date, duration_minutes: int) -> Money:
        if duration_minutes <= 0:
            raise ValueError("duration_minutes must be > 0")
        rate = self.rate_for(booking_date)
        amount, remainder = divmod(rate.amount_cents * duration_minutes, 60)
        if remainder:
            raise ValueError(
                f"duration of {duration_minutes} minutes does not price to whole units"
            )
        return Money(amount_cents=amount, currency=rate.currency)


def is_weekend(booking_date: date) -> bool:
    return booking_date.weekday() >= 5

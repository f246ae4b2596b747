from __future__ import annotations

from typing import Any


class BookingError(Exception):
    """Base for per-request failures surfaced to the caller."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details = details or {}


class BookingValidationError(BookingError):
    pass


class ResourceUnavailableError(BookingError):
    pass


class ReservationNotFoundError(BookingError):
    pass


class ForbiddenError(BookingError):
    pass


class InvalidTransitionError(BookingError):
    pass


class AuthenticationError(BookingError):
    pass


class AccountNotFoundError(BookingError):
    pass


class AccountAlreadyExistsError(BookingError):
    pass

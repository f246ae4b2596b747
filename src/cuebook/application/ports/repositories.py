from __future__ import annotations

from datetime import date
from typing import Protocol

from cuebook.domain.account.entities import Account
from cuebook.domain.booking.entities import Reservation
from cuebook.domain.common.ids import AccountId, ReservationId, TableNumber


class ReservationRepository(Protocol):
    def add(self, reservation: Reservation) -> None: ...

    def get(self, reservation_id: ReservationId) -> Reservation | None: ...

    def update(self, reservation: Reservation) -> None: ...

    def list_for_date(self, booking_date: date) -> list[Reservation]: ...

    def list_for_table(
        self, table_number: TableNumber, booking_date: date
    ) -> list[Reservation]: ...

    def list_for_requester(self, requester_id: AccountId) -> list[Reservation]: ...

    def list_all(self) -> list[Reservation]: ...


class AccountRepository(Protocol):
    def add(self, account: Account) -> None: ...

    def get(self, account_id: AccountId) -> Account | None: ...

    def get_by_email(self, email: str) -> Account | None: ...

    def update(self, account: Account) -> None: ...

    def list_all(self) -> list[Account]: ...

    def count(self) -> int: ...


class ReservationNotStoredError(Exception):
    pass


class DuplicateAccountEmailError(Exception):
    pass

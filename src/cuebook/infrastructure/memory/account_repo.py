from __future__ import annotations

import threading

from cuebook.application.ports.repositories import AccountRepository, DuplicateAccountEmailError
from cuebook.domain.account.entities import Account, normalize_email
from cuebook.domain.common.ids import AccountId


class InMemoryAccountRepository(AccountRepository):
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_id: dict[AccountId, Account] = {}
        self._id_by_email: dict[str, AccountId] = {}

    def add(self, account: Account) -> None:
        email = normalize_email(account.email)
        with self._lock:
            if email in self._id_by_email:
                raise DuplicateAccountEmailError(f"email {email} already registered")
            self._by_id[account.account_id] = account
            self._id_by_email[email] = account.account_id

    def get(self, account_id: AccountId) -> Account | None:
        with self._lock:
            return self._by_id.get(account_id)

    def get_by_email(self, email: str) -> Account | None:
        with self._lock:
            account_id = self._id_by_email.get(normalize_email(email))
            return self._by_id.get(account_id) if account_id else None

    def update(self, account: Account) -> None:
        with self._lock:
            if account.account_id not in self._by_id:
                raise KeyError(account.account_id)
            self._by_id[account.account_id] = account

    def list_all(self) -> list[Account]:
        with self._lock:
            return list(self._by_id.values())

    def count(self) -> int:
        with self._lock:
            return len(self._by_id)

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from enum import Enum

from cuebook.domain.common.ids import AccountId


class AccountRole(str, Enum):
    MEMBER = "member"
    ADMIN = "admin"


@dataclass(frozen=True)
class Account:
    account_id: AccountId
    name: str
    email: str
    phone: str
    password_hash: str
    role: AccountRole
    created_at: datetime
    membership_type: str | None = None
    membership_expiry: date | None = None

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must be non-empty")
        if "@" not in self.email:
            raise ValueError("email must contain '@'")

    @property
    def is_admin(self) -> bool:
        return self.role == AccountRole.ADMIN

    def with_profile(self, name: str | None, phone: str | None) -> Account:
        return replace(
            self,
            name=name if name else self.name,
            phone=phone if phone else self.phone,
        )


def normalize_email(email: str) -> str:
    return email.strip().lower()

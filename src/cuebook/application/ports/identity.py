from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from cuebook.domain.common.ids import AccountId


@dataclass(frozen=True)
class Identity:
    subject_id: AccountId
    is_admin: bool


class TokenVerifier(Protocol):
    def verify(self, token: str) -> Identity: ...


class TokenIssuer(Protocol):
    def issue(self, identity: Identity) -> str: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...

    def verify(self, password: str, password_hash: str) -> bool: ...

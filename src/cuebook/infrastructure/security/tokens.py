from __future__ import annotations

import time
from collections.abc import Callable

import jwt

from cuebook.application.errors import AuthenticationError
from cuebook.application.ports.identity import Identity, TokenIssuer, TokenVerifier
from cuebook.domain.common.ids import AccountId

_ALGORITHM = "HS256"
_REQUIRED_CLAIMS = ["sub", "adm", "iat", "exp"]


class JwtTokenCodec(TokenIssuer, TokenVerifier):
    """HS256 session tokens carrying ``{"sub", "adm", "iat", "exp"}``."""

    def __init__(
        self,
        secret: str,
        ttl_seconds: int,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not secret:
            raise ValueError("token secret must be non-empty")
        if ttl_seconds < 1:
            raise ValueError("ttl_seconds must be >= 1")
        self._secret = secret
        self._ttl_seconds = ttl_seconds
        self._clock = clock

    def issue(self, identity: Identity) -> str:
        issued_at = int(self._clock())
        payload = {
            "sub": str(identity.subject_id),
            "adm": identity.is_admin,
            "iat": issued_at,
            "exp": issued_at + self._ttl_seconds,
        }
        return jwt.encode(payload, self._secret, algorithm=_ALGORITHM)

    def verify(self, token: str) -> Identity:
        try:
            payload = jwt.decode(
                token.strip(),
                self._secret,
                algorithms=[_ALGORITHM],
                options={"require": _REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as exc:
            raise AuthenticationError("token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise AuthenticationError("invalid token") from exc

        if not isinstance(payload["adm"], bool):
            raise AuthenticationError("invalid token")
        return Identity(subject_id=AccountId(str(payload["sub"])), is_admin=payload["adm"])

from __future__ import annotations

import sys
import time
from pathlib import Path

import jwt
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from cuebook.application.errors import AuthenticationError
from cuebook.application.ports.identity import Identity
from cuebook.domain.common.ids import AccountId
from cuebook.infrastructure.security.tokens import JwtTokenCodec

SECRET = "token-tests-signing-secret-0123456789"
ADMIN = Identity(subject_id=AccountId("acc_admin"), is_admin=True)


class FakeClock:
    def __init__(self, now: float) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_round_trip_preserves_admin_flag() -> None:
    codec = JwtTokenCodec(secret=SECRET, ttl_seconds=60)

    assert codec.verify(codec.issue(ADMIN)) == ADMIN


def test_issued_token_is_standard_hs256_jwt() -> None:
    token = JwtTokenCodec(secret=SECRET, ttl_seconds=60).issue(ADMIN)

    assert jwt.get_unverified_header(token)["alg"] == "HS256"
    claims = jwt.decode(token, SECRET, algorithms=["HS256"])
    assert claims["sub"] == "acc_admin"
    assert claims["adm"] is True
    assert claims["exp"] - claims["iat"] == 60


def test_token_signed_with_other_secret_is_rejected() -> None:
    token = JwtTokenCodec(secret="another-signing-secret-0123456789ab", ttl_seconds=60).issue(ADMIN)

    with pytest.raises(AuthenticationError):
        JwtTokenCodec(secret=SECRET, ttl_seconds=60).verify(token)


def test_tampered_payload_is_rejected() -> None:
    codec = JwtTokenCodec(secret=SECRET, ttl_seconds=60)
    member_token = codec.issue(Identity(subject_id=AccountId("acc_1"), is_admin=False))
    header, _, signature = member_token.split(".")
    admin_claims = codec.issue(ADMIN).split(".")[1]
    forged = f"{header}.{admin_claims}.{signature}"

    with pytest.raises(AuthenticationError):
        codec.verify(forged)


def test_unsigned_token_is_rejected() -> None:
    unsigned = jwt.encode(
        {"sub": "acc_admin", "adm": True, "iat": 0, "exp": 2**31},
        key=None,
        algorithm="none",
    )

    with pytest.raises(AuthenticationError):
        JwtTokenCodec(secret=SECRET, ttl_seconds=60).verify(unsigned)


def test_token_missing_admin_claim_is_rejected() -> None:
    now = int(time.time())
    token = jwt.encode({"sub": "acc_1", "iat": now, "exp": now + 60}, SECRET, algorithm="HS256")

    with pytest.raises(AuthenticationError):
        JwtTokenCodec(secret=SECRET, ttl_seconds=60).verify(token)


def test_expired_token_is_rejected() -> None:
    clock = FakeClock(time.time() - 120)
    token = JwtTokenCodec(secret=SECRET, ttl_seconds=60, clock=clock).issue(ADMIN)

    with pytest.raises(AuthenticationError, match="expired"):
        JwtTokenCodec(secret=SECRET, ttl_seconds=60).verify(token)


@pytest.mark.parametrize("token", ["", "no-dot", "a.b", "a.b.c", "päyload.sig.x"])
def test_malformed_tokens_are_rejected(token: str) -> None:
    codec = JwtTokenCodec(secret=SECRET, ttl_seconds=60)

    with pytest.raises(AuthenticationError):
        codec.verify(token)


def test_codec_requires_secret() -> None:
    with pytest.raises(ValueError):
        JwtTokenCodec(secret="", ttl_seconds=60)

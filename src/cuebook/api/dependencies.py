from __future__ import annotations

from fastapi import Header

from cuebook.api.middleware.request_id import get_request_id
from cuebook.application.errors import AuthenticationError
from cuebook.application.ports.identity import Identity
from cuebook.application.use_cases.context import TraceContext
from cuebook.infrastructure.container import get_container
from cuebook.infrastructure.observability.otel import current_trace_id


def require_identity(authorization: str | None = Header(default=None)) -> Identity:
    if not authorization:
        raise AuthenticationError("missing bearer token")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("authorization header must be 'Bearer <token>'")
    return get_container().token_codec.verify(token.strip())


def trace_context() -> TraceContext:
    return TraceContext(trace_id=current_trace_id(), request_id=get_request_id())

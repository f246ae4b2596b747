from __future__ import annotations

import logging
import os
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from cuebook.api.error_handling import register_exception_handlers
from cuebook.api.middleware.request_id import RequestIDMiddleware
from cuebook.api.routes.admin import router as admin_router
from cuebook.api.routes.auth import router as auth_router
from cuebook.api.routes.bookings import router as bookings_router
from cuebook.api.routes.health import router as health_router
from cuebook.api.routes.metrics import router as metrics_router
from cuebook.infrastructure.container import get_container
from cuebook.infrastructure.observability.logging_config import configure_logging
from cuebook.infrastructure.observability.otel import configure_otel

logger = logging.getLogger("cuebook.api.access")

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    ["method", "path", "status_code"],
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
)


def _cors_allow_origins() -> list[str]:
    env = os.getenv("APP_ENV", "dev").lower()

    if env in {"dev", "test"}:
        return ["*"]

    default_value = "https://snookermania.com"
    raw_value = os.getenv("CORS_ALLOW_ORIGINS", default_value)
    return [origin.strip() for origin in raw_value.split(",") if origin.strip()]


def _route_template(request: Request) -> str:
    # Label metrics by route template so reservation ids do not explode cardinality.
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        method = request.method
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - started) * 1000
            path = _route_template(request)
            REQUEST_COUNT.labels(method=method, path=path, status_code="500").inc()
            REQUEST_LATENCY.labels(method=method, path=path).observe(duration_ms / 1000)
            logger.exception(
                "request_error",
                extra={
                    "method": method,
                    "path": request.url.path,
                    "status_code": 500,
                    "duration_ms": round(duration_ms, 2),
                },
            )
            raise

        duration_ms = (time.perf_counter() - started) * 1000
        path = _route_template(request)
        REQUEST_COUNT.labels(method=method, path=path, status_code=str(response.status_code)).inc()
        REQUEST_LATENCY.labels(method=method, path=path).observe(duration_ms / 1000)
        logger.info(
            "request_complete",
            extra={
                "method": method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    get_container()
    logger.info("venue_ready")
    yield


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(title="Cuebook Backend", version="0.1.0", lifespan=lifespan)
    register_exception_handlers(app)
    app.include_router(health_router)
    app.include_router(metrics_router)
    app.include_router(auth_router)
    app.include_router(bookings_router)
    app.include_router(admin_router)

    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_allow_origins(),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-Id"],
    )

    configure_otel(app)
    return app


app = create_app()

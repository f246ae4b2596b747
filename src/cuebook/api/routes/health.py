from __future__ import annotations

import logging

from fastapi import APIRouter, Response, status

from cuebook.infrastructure.container import get_container
from cuebook.infrastructure.messaging.redis_publisher import RedisEventPublisher

router = APIRouter()
logger = logging.getLogger(__name__)


def _store_ready() -> bool:
    try:
        get_container()
    except (RuntimeError, ValueError):
        logger.exception("container_build_failed")
        return False
    return True


@router.get("/health/live")
def live() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/health/ready")
def ready(response: Response) -> dict[str, object]:
    checks: dict[str, bool] = {"store": _store_ready()}
    if checks["store"]:
        publisher = get_container().publisher
        if isinstance(publisher, RedisEventPublisher):
            checks["redis"] = publisher.is_reachable()

    if all(checks.values()):
        return {"status": "ok"}

    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return {"status": "unavailable", "checks": checks}

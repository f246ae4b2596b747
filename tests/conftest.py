from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Iterator

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

os.environ["APP_ENV"] = "test"
os.environ.pop("REDIS_URL", None)
os.environ.setdefault("OTEL_SERVICE_NAME", "cuebook-backend-test")
os.environ.setdefault("OTEL_EXPORTER_OTLP_ENDPOINT", "")

from cuebook.infrastructure.container import get_container


@pytest.fixture(autouse=True)
def fresh_container() -> Iterator[None]:
    get_container.cache_clear()
    yield
    get_container.cache_clear()

from __future__ import annotations

from typing import Protocol


class EventPublisher(Protocol):
    """Fire-and-forget channel publisher. Callers treat failures as non-fatal."""

    def publish(self, channel: str, message: str) -> None: ...

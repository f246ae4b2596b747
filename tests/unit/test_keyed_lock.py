from __future__ import annotations

import sys
import threading
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from cuebook.application.concurrency import KeyedLock


def test_distinct_keys_do_not_block_each_other() -> None:
    locks = KeyedLock()
    entered_other = threading.Event()

    def hold_other() -> None:
        with locks.hold((4, "2024-02-10")):
            entered_other.set()

    with locks.hold((3, "2024-02-10")):
        worker = threading.Thread(target=hold_other)
        worker.start()
        assert entered_other.wait(timeout=1.0)
        worker.join(timeout=1.0)


def test_same_key_is_mutually_exclusive() -> None:
    locks = KeyedLock()
    entered = threading.Event()
    key = (3, "2024-02-10")

    def contend() -> None:
        with locks.hold(key):
            entered.set()

    with locks.hold(key):
        worker = threading.Thread(target=contend)
        worker.start()
        assert not entered.wait(timeout=0.1)

    assert entered.wait(timeout=1.0)
    worker.join(timeout=1.0)


def test_entries_are_released_after_use() -> None:
    locks = KeyedLock()

    with locks.hold("a"):
        with locks.hold("b"):
            assert locks.active_keys() == 2

    assert locks.active_keys() == 0


def test_lock_is_released_when_body_raises() -> None:
    locks = KeyedLock()

    try:
        with locks.hold("a"):
            raise RuntimeError("boom")
    except RuntimeError:
        pass

    assert locks.active_keys() == 0
    with locks.hold("a"):
        assert locks.active_keys() == 1

from __future__ import annotations

from typing import NewType

AccountId = NewType("AccountId", str)
ReservationId = NewType("ReservationId", str)
TableNumber = NewType("TableNumber", int)

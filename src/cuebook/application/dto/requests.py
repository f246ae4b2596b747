from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field


def _to_camel(value: str) -> str:
    parts = value.split("_")
    return parts[0] + "".join(part.capitalize() for part in parts[1:])


class CamelBaseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=_to_camel,
        populate_by_name=True,
    )


class CreateBookingRequest(CamelBaseModel):
    date: dt.date
    start_time: dt.time
    end_time: dt.time
    duration_hours: float = Field(allow_inf_nan=False)
    player_count: int
    table_number: int


class UpdateBookingStatusRequest(CamelBaseModel):
    status: str


class RegisterRequest(CamelBaseModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    phone: str = Field(min_length=1)
    password: str = Field(min_length=1)
    confirm_password: str


class LoginRequest(CamelBaseModel):
    email: str
    password: str


class UpdateProfileRequest(CamelBaseModel):
    name: str | None = None
    phone: str | None = None

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field


class MoneyResponse(BaseModel):
    amountCents: int
    currency: str


class ReservationResponse(BaseModel):
    reservationId: str
    requesterId: str
    tableNumber: int
    date: dt.date
    startTime: str
    endTime: str
    durationHours: float
    playerCount: int
    status: str
    price: MoneyResponse
    createdAt: dt.datetime


class ReservationListResponse(BaseModel):
    bookings: list[ReservationResponse] = Field(default_factory=list)


class AdminReservationResponse(ReservationResponse):
    userName: str | None = None
    userEmail: str | None = None
    userPhone: str | None = None


class AdminReservationListResponse(BaseModel):
    bookings: list[AdminReservationResponse] = Field(default_factory=list)


class SlotResponse(BaseModel):
    startTime: str
    endTime: str
    availableTables: list[int] = Field(default_factory=list)
    availableCount: int


class AvailableSlotsResponse(BaseModel):
    date: dt.date
    durationHours: float
    slots: list[SlotResponse] = Field(default_factory=list)


class DashboardStatsResponse(BaseModel):
    totalBookings: int
    confirmedBookings: int
    cancelledBookings: int
    completedBookings: int
    totalUsers: int
    totalRevenue: MoneyResponse


class AccountResponse(BaseModel):
    accountId: str
    name: str
    email: str
    phone: str
    isAdmin: bool
    membershipType: str | None = None
    membershipExpiry: dt.date | None = None


class AccountListResponse(BaseModel):
    users: list[AccountResponse] = Field(default_factory=list)


class AuthResponse(BaseModel):
    account: AccountResponse
    token: str

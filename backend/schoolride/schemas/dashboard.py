"""Role-specific dashboard payloads."""

from typing import Literal
from pydantic import BaseModel

from .child import ChildRead
from .ride import RideRead
from .user import UserResponse


class AdminStats(BaseModel):
    total_users: int
    total_children: int
    total_rides: int
    active_drivers: int


class ParentDashboard(BaseModel):
    role: Literal["parent"] = "parent"
    profile: UserResponse
    children: list[ChildRead]
    rides: list[RideRead]
    total_rides: int
    upcoming_rides: int


class DriverDashboard(BaseModel):
    role: Literal["driver"] = "driver"
    profile: UserResponse
    assigned_children: list[ChildRead]
    todays_rides: list[RideRead]
    recent_rides: list[RideRead]
    total_rides: int


class AdminDashboard(BaseModel):
    role: Literal["admin"] = "admin"
    profile: UserResponse
    stats: AdminStats
    recent_rides: list[RideRead]

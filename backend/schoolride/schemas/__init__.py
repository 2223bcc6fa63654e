"""Convenience imports for all schema classes used by the API."""

from .user import UserCreate, UserResponse, UserLogin
from .child import ChildCreate, ChildRead, DriverAssignmentUpdate, DriverRead
from .ride import RideCreate, RideRead, UpcomingCount
from .settings import SettingsRead, SettingsUpdate
from .dashboard import (
    AdminStats,
    ParentDashboard,
    DriverDashboard,
    AdminDashboard,
)

__all__ = [
    "UserCreate",
    "UserResponse",
    "UserLogin",
    "ChildCreate",
    "ChildRead",
    "DriverAssignmentUpdate",
    "DriverRead",
    "RideCreate",
    "RideRead",
    "UpcomingCount",
    "SettingsRead",
    "SettingsUpdate",
    "AdminStats",
    "ParentDashboard",
    "DriverDashboard",
    "AdminDashboard",
]

"""Aggregate import for all API route modules."""

from . import (
    auth,
    users,
    children,
    assignments,
    rides,
    dashboard,
    admin,
    settings,
)

__all__ = [
    "auth",
    "users",
    "children",
    "assignments",
    "rides",
    "dashboard",
    "admin",
    "settings",
]

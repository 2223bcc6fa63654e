"""Single entry point returning the dashboard for the caller's role."""

from typing import Union

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from schoolride import rides
from schoolride.acl import ROLE_ADMIN, ROLE_DRIVER, ROLE_PARENT
from schoolride.auth import get_current_user
from schoolride.crud import (
    get_children_by_driver,
    get_children_by_parent,
    get_recent_rides,
    get_settings,
)
from schoolride.database import get_session
from schoolride.errors import persistence_guard
from schoolride.models import User
from schoolride.routes.admin import collect_stats
from schoolride.schemas import (
    AdminDashboard,
    ChildRead,
    DriverDashboard,
    ParentDashboard,
    RideRead,
    UserResponse,
)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def _profile(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        phone=user.phone,
        role=user.role,
    )


async def parent_dashboard(db: AsyncSession, user: User) -> ParentDashboard:
    async with persistence_guard(db, "load parent dashboard"):
        children = await get_children_by_parent(db, user.id)
    ride_list = await rides.parent_rides(db, user, user.id)
    return ParentDashboard(
        profile=_profile(user),
        children=[ChildRead.from_child(c) for c in children],
        rides=[RideRead.from_ride(r) for r in ride_list],
        total_rides=len(ride_list),
        upcoming_rides=await rides.upcoming_count(db, user, user.id),
    )


async def driver_dashboard(db: AsyncSession, user: User) -> DriverDashboard:
    async with persistence_guard(db, "load driver dashboard"):
        settings = await get_settings(db)
        children = await get_children_by_driver(db, user.id)
    today = await rides.todays_rides(db, user, user.id)
    history = await rides.ride_history(db, user, user.id)
    return DriverDashboard(
        profile=_profile(user),
        assigned_children=[ChildRead.from_child(c) for c in children],
        todays_rides=[RideRead.from_ride(r) for r in today],
        # Display prefix only; /rides/history returns everything
        recent_rides=[
            RideRead.from_ride(r) for r in history[: settings.driver_history_limit]
        ],
        total_rides=len(history),
    )


async def admin_dashboard(db: AsyncSession, user: User) -> AdminDashboard:
    async with persistence_guard(db, "load admin dashboard"):
        settings = await get_settings(db)
        recent = await get_recent_rides(db, settings.admin_recent_rides_limit)
    return AdminDashboard(
        profile=_profile(user),
        stats=await collect_stats(db),
        recent_rides=[RideRead.from_ride(r) for r in recent],
    )


@router.get(
    "/",
    response_model=Union[ParentDashboard, DriverDashboard, AdminDashboard],
)
async def read_dashboard(
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    if current_user.role == ROLE_PARENT:
        return await parent_dashboard(db, current_user)
    if current_user.role == ROLE_DRIVER:
        return await driver_dashboard(db, current_user)
    if current_user.role == ROLE_ADMIN:
        return await admin_dashboard(db, current_user)
    raise HTTPException(status_code=400, detail="Unknown role")

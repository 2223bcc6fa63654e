from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from schoolride import rides
from schoolride.database import get_session
from schoolride.auth import require_role
from schoolride.acl import ROLE_ADMIN, ROLE_DRIVER
from schoolride.errors import persistence_guard
from schoolride.models import User
from schoolride.schemas import AdminStats, RideCreate, RideRead, UserResponse
from schoolride.crud import (
    count_children,
    count_rides,
    count_users,
    get_all_users,
    get_recent_rides,
    get_settings,
)

router = APIRouter(prefix="/admin", tags=["admin"])


async def collect_stats(db: AsyncSession) -> AdminStats:
    async with persistence_guard(db, "collect stats"):
        return AdminStats(
            total_users=await count_users(db),
            total_children=await count_children(db),
            total_rides=await count_rides(db),
            active_drivers=await count_users(db, role=ROLE_DRIVER),
        )


@router.get("/stats", response_model=AdminStats)
async def admin_stats(
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    return await collect_stats(db)


@router.get("/users", response_model=list[UserResponse])
async def admin_list_users(
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    async with persistence_guard(db, "list users"):
        return await get_all_users(db)


@router.get("/rides", response_model=list[RideRead])
async def admin_recent_rides(
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    """Most recent rides, limited by ``admin_recent_rides_limit``."""
    async with persistence_guard(db, "load recent rides"):
        settings = await get_settings(db)
        result = await get_recent_rides(db, settings.admin_recent_rides_limit)
    return [RideRead.from_ride(r) for r in result]


@router.post("/rides", response_model=RideRead)
async def admin_schedule_ride(
    data: RideCreate,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    ride = await rides.schedule_ride(
        db,
        current_user,
        data.child_id,
        data.ride_date,
        data.pickup_time,
        driver_id=data.driver_id,
    )
    return RideRead.from_ride(ride)

"""Routes for drivers reporting ride progress and parents following rides."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from schoolride import rides
from schoolride.acl import ROLE_DRIVER, ROLE_PARENT
from schoolride.auth import require_role
from schoolride.database import get_session
from schoolride.models import User
from schoolride.schemas import RideRead, UpcomingCount

router = APIRouter(prefix="/rides", tags=["rides"])


@router.get("/", response_model=list[RideRead])
async def list_parent_rides(
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(ROLE_PARENT)),
):
    """All rides of the parent's children, newest first."""
    result = await rides.parent_rides(db, current_user, current_user.id)
    return [RideRead.from_ride(r) for r in result]


@router.get("/upcoming-count", response_model=UpcomingCount)
async def read_upcoming_count(
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(ROLE_PARENT)),
):
    count = await rides.upcoming_count(db, current_user, current_user.id)
    return UpcomingCount(upcoming=count)


@router.get("/today", response_model=list[RideRead])
async def list_todays_rides(
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(ROLE_DRIVER)),
):
    result = await rides.todays_rides(db, current_user, current_user.id)
    return [RideRead.from_ride(r) for r in result]


@router.get("/history", response_model=list[RideRead])
async def list_ride_history(
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(ROLE_DRIVER)),
):
    """Full ride history of the driver; not paginated."""
    result = await rides.ride_history(db, current_user, current_user.id)
    return [RideRead.from_ride(r) for r in result]


@router.post("/{ride_id}/pickup", response_model=RideRead)
async def pick_up(
    ride_id: int,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(ROLE_DRIVER)),
):
    ride = await rides.mark_picked_up(db, current_user, ride_id)
    return RideRead.from_ride(ride)


@router.post("/{ride_id}/dropoff", response_model=RideRead)
async def drop_off(
    ride_id: int,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(ROLE_DRIVER)),
):
    ride = await rides.mark_dropped_off(db, current_user, ride_id)
    return RideRead.from_ride(ride)

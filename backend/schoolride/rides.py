"""Ride status updates and the ride views shown on dashboards.

Drivers report pick-up and drop-off; each report is checked against the
transition table in :mod:`schoolride.ride_status` and against ride
ownership before anything is written.  The read views are plain queries
and never mutate a ride.  Admins record new rides with
:func:`schedule_ride`; no operation moves a ride to ``cancelled``.
"""

import logging
from datetime import date, datetime, time

from sqlalchemy.ext.asyncio import AsyncSession

from schoolride import crud
from schoolride.acl import (
    ROLE_DRIVER,
    ensure_admin,
    ensure_can_view_driver,
    ensure_can_view_parent,
    ensure_ride_driver,
)
from schoolride.errors import (
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
    persistence_guard,
)
from schoolride.models import Ride, User
from schoolride.ride_status import RideEvent, check_transition

logger = logging.getLogger(__name__)


async def _apply(
    db: AsyncSession,
    actor: User,
    ride_id: int,
    event: RideEvent,
    now: datetime | None = None,
) -> Ride:
    async with persistence_guard(db, f"record {event.value} for ride {ride_id}"):
        ride = await crud.get_ride(db, ride_id)
        if ride is None:
            raise NotFoundError("Ride", ride_id)
        ensure_ride_driver(actor, ride)
        previous = ride.status
        try:
            target = check_transition(ride.status, event, ride_id=ride.id)
        except InvalidTransitionError:
            logger.warning(
                "Driver %s sent %s for ride %s in status %s",
                actor.id,
                event.value,
                ride_id,
                previous,
            )
            raise
        ride.status = target.value
        if event is RideEvent.DROP_OFF:
            clock = (now or datetime.now()).time().replace(microsecond=0)
            # drop_time never precedes the scheduled pickup
            ride.drop_time = max(clock, ride.pickup_time)
        await crud.save_ride(db, ride)
        logger.info(
            "Ride %s moved from %s to %s by driver %s",
            ride_id,
            previous,
            target.value,
            actor.id,
        )
        return await crud.get_ride(db, ride_id)


async def mark_picked_up(db: AsyncSession, actor: User, ride_id: int) -> Ride:
    """scheduled -> picked_up."""
    return await _apply(db, actor, ride_id, RideEvent.PICK_UP)


async def mark_dropped_off(
    db: AsyncSession, actor: User, ride_id: int, now: datetime | None = None
) -> Ride:
    """picked_up -> dropped_off, stamping the local drop-off time."""
    return await _apply(db, actor, ride_id, RideEvent.DROP_OFF, now=now)


async def todays_rides(
    db: AsyncSession, actor: User, driver_id: int, today: date | None = None
) -> list[Ride]:
    """Rides for ``driver_id`` on the local calendar date, earliest first."""
    ensure_can_view_driver(actor, driver_id)
    async with persistence_guard(db, "load today's rides"):
        return await crud.get_rides_for_driver_on(
            db, driver_id, today or date.today()
        )


async def ride_history(db: AsyncSession, actor: User, driver_id: int) -> list[Ride]:
    """Every ride of ``driver_id``, newest first.

    Dashboards only render a prefix of this list; the full history is
    always returned.
    """
    ensure_can_view_driver(actor, driver_id)
    async with persistence_guard(db, "load ride history"):
        return await crud.get_rides_by_driver(db, driver_id)


async def parent_rides(db: AsyncSession, actor: User, parent_id: int) -> list[Ride]:
    ensure_can_view_parent(actor, parent_id)
    async with persistence_guard(db, "load rides"):
        return await crud.get_rides_for_parent(db, parent_id)


async def upcoming_count(
    db: AsyncSession, actor: User, parent_id: int, today: date | None = None
) -> int:
    """Number of rides of the parent's children dated today or later."""
    ensure_can_view_parent(actor, parent_id)
    async with persistence_guard(db, "count upcoming rides"):
        return await crud.count_rides_for_parent_since(
            db, parent_id, today or date.today()
        )


async def schedule_ride(
    db: AsyncSession,
    actor: User,
    child_id: int,
    ride_date: date,
    pickup_time: time,
    driver_id: int | None = None,
) -> Ride:
    """Record a scheduled ride for a child.

    The driver defaults to the child's assigned driver.  Addresses are
    copied from the child so later edits to the child do not rewrite
    past rides.
    """
    ensure_admin(actor)
    async with persistence_guard(db, f"schedule ride for child {child_id}"):
        child = await crud.get_child(db, child_id)
        if child is None:
            raise NotFoundError("Child", child_id)
        driver_id = driver_id if driver_id is not None else child.assigned_driver_id
        if driver_id is None:
            raise ValidationError(f"Child {child_id} has no assigned driver")
        driver = await crud.get_user(db, driver_id)
        if driver is None or driver.role != ROLE_DRIVER:
            raise ValidationError(f"User {driver_id} is not a driver")
        ride = await crud.create_ride(
            db,
            Ride(
                child_id=child.id,
                driver_id=driver_id,
                ride_date=ride_date,
                pickup_time=pickup_time,
                pickup_address=child.pickup_address,
                drop_address=child.drop_address,
            ),
        )
        logger.info(
            "Admin %s scheduled ride %s for child %s with driver %s on %s",
            actor.id,
            ride.id,
            child_id,
            driver_id,
            ride_date,
        )
        return await crud.get_ride(db, ride.id)

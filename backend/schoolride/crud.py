"""Asynchronous CRUD helpers for the application's data models.

Each function in this module encapsulates a specific database operation
using SQLModel and SQLAlchemy.  Centralizing the logic keeps route
handlers and workflow modules light and makes behavior easier to test.
Authorization is not checked here; callers decide who may do what.
"""

from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select
from sqlalchemy.orm import selectinload
from sqlalchemy import func
from schoolride.models import User, Child, Ride, Settings
from schoolride.auth import get_password_hash
from schoolride.acl import ROLE_DRIVER


async def get_settings(db: AsyncSession) -> Settings:
    """Fetch the singleton settings record, creating it if necessary."""
    result = await db.execute(select(Settings).where(Settings.id == 1))
    settings = result.scalar_one_or_none()
    if not settings:
        settings = Settings()
        db.add(settings)
        await db.commit()
        await db.refresh(settings)
    return settings


async def save_settings(db: AsyncSession, settings: Settings) -> Settings:
    """Persist settings changes and return the refreshed object."""

    db.add(settings)
    await db.commit()
    await db.refresh(settings)
    return settings


async def create_user(db: AsyncSession, user: User):
    """Create a new user, hashing the password if it is still plain text."""

    if not user.password_hash.startswith("$2b$"):
        user.password_hash = get_password_hash(user.password_hash)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def get_user_by_email(db: AsyncSession, email: str):
    """Return a user by email or ``None`` if not found."""
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def get_user(db: AsyncSession, user_id: int) -> User | None:
    """Load a user by primary key."""
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_all_users(db: AsyncSession) -> list[User]:
    """Return all users, newest first."""

    result = await db.execute(
        select(User).order_by(User.created_at.desc(), User.id.desc())
    )
    return result.scalars().all()


async def count_users(db: AsyncSession, role: str | None = None) -> int:
    query = select(func.count()).select_from(User)
    if role is not None:
        query = query.where(User.role == role)
    result = await db.execute(query)
    return result.scalar()


async def get_drivers(db: AsyncSession) -> list[User]:
    """Return every driver profile ordered by name."""

    result = await db.execute(
        select(User).where(User.role == ROLE_DRIVER).order_by(User.name)
    )
    return result.scalars().all()


async def create_child(db: AsyncSession, child: Child) -> Child:
    """Persist a new child record."""

    db.add(child)
    await db.commit()
    await db.refresh(child)
    return child


async def get_child(db: AsyncSession, child_id: int) -> Child | None:
    """Fetch a child by id or ``None`` if not found."""
    result = await db.execute(select(Child).where(Child.id == child_id))
    return result.scalar_one_or_none()


async def get_child_with_names(db: AsyncSession, child_id: int) -> Child | None:
    """Fetch a child with its parent and assigned driver eagerly loaded."""
    result = await db.execute(
        select(Child)
        .where(Child.id == child_id)
        .options(selectinload(Child.parent), selectinload(Child.driver))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_children_with_names(db: AsyncSession) -> list[Child]:
    """Return all children with parent and driver loaded, ordered by name."""

    result = await db.execute(
        select(Child)
        .options(selectinload(Child.parent), selectinload(Child.driver))
        .order_by(Child.name, Child.id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().all()


async def get_children_by_parent(db: AsyncSession, parent_id: int) -> list[Child]:
    """Return all children registered by a given parent."""
    result = await db.execute(
        select(Child)
        .where(Child.parent_id == parent_id)
        .options(selectinload(Child.parent), selectinload(Child.driver))
        .order_by(Child.name, Child.id)
    )
    return result.scalars().all()


async def get_children_by_driver(db: AsyncSession, driver_id: int) -> list[Child]:
    """Return the children currently assigned to a driver."""
    result = await db.execute(
        select(Child)
        .where(Child.assigned_driver_id == driver_id)
        .options(selectinload(Child.parent), selectinload(Child.driver))
        .order_by(Child.name, Child.id)
    )
    return result.scalars().all()


async def count_children(db: AsyncSession) -> int:
    result = await db.execute(select(func.count()).select_from(Child))
    return result.scalar()


async def set_assigned_driver(
    db: AsyncSession, child: Child, driver_id: int | None
) -> Child:
    """Write the child's assigned driver; ``None`` clears it."""
    child.assigned_driver_id = driver_id
    db.add(child)
    await db.commit()
    await db.refresh(child)
    return child


def _ride_query():
    return select(Ride).options(
        selectinload(Ride.child), selectinload(Ride.driver)
    )


async def create_ride(db: AsyncSession, ride: Ride) -> Ride:
    """Persist a new ride record."""

    db.add(ride)
    await db.commit()
    await db.refresh(ride)
    return ride


async def get_ride(db: AsyncSession, ride_id: int) -> Ride | None:
    """Fetch a ride with its child and driver loaded."""
    result = await db.execute(
        _ride_query()
        .where(Ride.id == ride_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def save_ride(db: AsyncSession, ride: Ride) -> Ride:
    """Persist changes to a ride record."""

    db.add(ride)
    await db.commit()
    await db.refresh(ride)
    return ride


async def get_rides_for_driver_on(
    db: AsyncSession, driver_id: int, ride_date: date
) -> list[Ride]:
    """Rides a driver has on ``ride_date`` ordered by pickup time."""
    result = await db.execute(
        _ride_query()
        .where(Ride.driver_id == driver_id, Ride.ride_date == ride_date)
        .order_by(Ride.pickup_time, Ride.id)
    )
    return result.scalars().all()


async def get_rides_by_driver(db: AsyncSession, driver_id: int) -> list[Ride]:
    """All rides of a driver, newest first."""
    result = await db.execute(
        _ride_query()
        .where(Ride.driver_id == driver_id)
        .order_by(Ride.ride_date.desc(), Ride.pickup_time.desc(), Ride.id.desc())
    )
    return result.scalars().all()


async def get_rides_for_parent(db: AsyncSession, parent_id: int) -> list[Ride]:
    """All rides of a parent's children, newest first."""
    result = await db.execute(
        _ride_query()
        .join(Child, Ride.child_id == Child.id)
        .where(Child.parent_id == parent_id)
        .order_by(Ride.ride_date.desc(), Ride.pickup_time.desc(), Ride.id.desc())
    )
    return result.scalars().all()


async def count_rides_for_parent_since(
    db: AsyncSession, parent_id: int, since: date
) -> int:
    """Count rides of a parent's children dated on or after ``since``."""
    result = await db.execute(
        select(func.count(Ride.id))
        .join(Child, Ride.child_id == Child.id)
        .where(Child.parent_id == parent_id, Ride.ride_date >= since)
    )
    return result.scalar()


async def get_recent_rides(db: AsyncSession, limit: int) -> list[Ride]:
    """Most recent rides across all drivers."""
    result = await db.execute(
        _ride_query()
        .order_by(Ride.ride_date.desc(), Ride.pickup_time.desc(), Ride.id.desc())
        .limit(limit)
    )
    return result.scalars().all()


async def count_rides(db: AsyncSession) -> int:
    result = await db.execute(select(func.count()).select_from(Ride))
    return result.scalar()

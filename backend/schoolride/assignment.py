"""Assignment of drivers to children.

Admins see every child together with its parent and current driver and may
point a child at any driver-role profile, or clear the assignment.  Nothing
is cached here: after :func:`assign` the caller re-reads
:func:`list_children` to see the stored state.  Concurrent admins resolve
last-write-wins in the database.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from schoolride import crud
from schoolride.acl import ROLE_DRIVER, ensure_admin
from schoolride.errors import NotFoundError, ValidationError, persistence_guard
from schoolride.models import Child, User

logger = logging.getLogger(__name__)


async def list_children(db: AsyncSession, actor: User) -> list[Child]:
    """All children with parent and driver loaded, ordered by name."""
    ensure_admin(actor)
    async with persistence_guard(db, "list children"):
        return await crud.get_children_with_names(db)


async def list_eligible_drivers(db: AsyncSession, actor: User) -> list[User]:
    ensure_admin(actor)
    async with persistence_guard(db, "list drivers"):
        return await crud.get_drivers(db)


async def assign(
    db: AsyncSession, actor: User, child_id: int, driver_id: int | None
) -> Child:
    """Set or clear the driver assigned to ``child_id``.

    ``driver_id=None`` unassigns; repeating it is harmless.  Raises
    :class:`ValidationError` when ``driver_id`` is not a driver profile.
    """
    ensure_admin(actor)
    async with persistence_guard(db, "assign driver"):
        child = await crud.get_child(db, child_id)
        if child is None:
            raise NotFoundError("Child", child_id)
        if driver_id is not None:
            driver = await crud.get_user(db, driver_id)
            if driver is None or driver.role != ROLE_DRIVER:
                logger.warning(
                    "Admin %s tried to assign non-driver %s to child %s",
                    actor.id,
                    driver_id,
                    child_id,
                )
                raise ValidationError(f"User {driver_id} is not a driver")
        previous = child.assigned_driver_id
        await crud.set_assigned_driver(db, child, driver_id)
        logger.info(
            "Admin %s changed driver of child %s from %s to %s",
            actor.id,
            child_id,
            previous,
            driver_id,
        )
        return await crud.get_child_with_names(db, child_id)

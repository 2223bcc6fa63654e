"""Admin routes for assigning drivers to children."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from schoolride import assignment
from schoolride.acl import ROLE_ADMIN
from schoolride.auth import require_role
from schoolride.database import get_session
from schoolride.models import User
from schoolride.schemas import ChildRead, DriverAssignmentUpdate, DriverRead

router = APIRouter(prefix="/assignments", tags=["assignments"])


@router.get("/children", response_model=list[ChildRead])
async def list_children_with_drivers(
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    children = await assignment.list_children(db, current_user)
    return [ChildRead.from_child(c) for c in children]


@router.get("/drivers", response_model=list[DriverRead])
async def list_drivers(
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    drivers = await assignment.list_eligible_drivers(db, current_user)
    return [DriverRead(id=d.id, name=d.name, phone=d.phone) for d in drivers]


@router.put("/children/{child_id}", response_model=ChildRead)
async def assign_driver(
    child_id: int,
    data: DriverAssignmentUpdate,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    """Assign a driver to a child, or unassign with ``driver_id: null``."""
    child = await assignment.assign(db, current_user, child_id, data.driver_id)
    return ChildRead.from_child(child)

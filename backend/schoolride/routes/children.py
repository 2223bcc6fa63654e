"""Routes for parents registering and viewing their children."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from schoolride.schemas import ChildCreate, ChildRead
from schoolride.models import Child, User
from schoolride.database import get_session
from schoolride.crud import (
    create_child,
    get_children_by_parent,
    get_child_with_names,
)
from schoolride.auth import get_current_user, require_role
from schoolride.acl import ROLE_PARENT, can_view_child
from schoolride.errors import persistence_guard

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/children", tags=["children"])


@router.post("/", response_model=ChildRead)
async def create_child_route(
    child: ChildCreate,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(ROLE_PARENT)),
):
    """Register a child for the current parent."""
    child_model = Child(**child.model_dump(), parent_id=current_user.id)
    async with persistence_guard(db, "register child"):
        new_child = await create_child(db, child_model)
        logger.info("Parent %s registered child %s", current_user.id, new_child.id)
        return ChildRead.from_child(await get_child_with_names(db, new_child.id))


@router.get("/", response_model=list[ChildRead])
async def list_children(
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(ROLE_PARENT)),
):
    """List children belonging to the authenticated parent."""
    async with persistence_guard(db, "list children"):
        children = await get_children_by_parent(db, current_user.id)
    return [ChildRead.from_child(c) for c in children]


@router.get("/{child_id}", response_model=ChildRead)
async def get_child_route(
    child_id: int,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    async with persistence_guard(db, f"load child {child_id}"):
        child = await get_child_with_names(db, child_id)
    # Hide children the caller has no relation to
    if not child or not can_view_child(current_user, child):
        raise HTTPException(status_code=404, detail="Child not found")
    return ChildRead.from_child(child)

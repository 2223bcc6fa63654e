"""Endpoints for viewing and updating site-wide settings."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from schoolride.database import get_session
from schoolride.models import User
from schoolride.auth import require_role
from schoolride.acl import ROLE_ADMIN
from schoolride.schemas import SettingsRead, SettingsUpdate
from schoolride.crud import get_settings, save_settings

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/", response_model=SettingsRead)
async def read_settings(db: AsyncSession = Depends(get_session)):
    """Retrieve the current configuration values."""
    settings = await get_settings(db)
    return SettingsRead(
        site_name=settings.site_name,
        driver_history_limit=settings.driver_history_limit,
        admin_recent_rides_limit=settings.admin_recent_rides_limit,
        public_registration_disabled=settings.public_registration_disabled,
    )


@router.put("/", response_model=SettingsRead)
async def update_settings(
    data: SettingsUpdate,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_role(ROLE_ADMIN)),
):
    """Update settings; only admins may change configuration."""
    settings = await get_settings(db)
    changes = data.model_dump(exclude_unset=True)
    for field, value in changes.items():
        setattr(settings, field, value)
    updated = await save_settings(db, settings)
    logger.info("Admin %s updated settings: %s", current_user.id, sorted(changes))
    return SettingsRead(
        site_name=updated.site_name,
        driver_history_limit=updated.driver_history_limit,
        admin_recent_rides_limit=updated.admin_recent_rides_limit,
        public_registration_disabled=updated.public_registration_disabled,
    )

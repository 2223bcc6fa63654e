"""Pydantic models for application configuration settings."""

from pydantic import BaseModel, Field


class SettingsRead(BaseModel):
    site_name: str
    driver_history_limit: int
    admin_recent_rides_limit: int
    public_registration_disabled: bool

    class Config:
        model_config = {"from_attributes": True}


class SettingsUpdate(BaseModel):
    site_name: str | None = None
    driver_history_limit: int | None = Field(default=None, ge=1)
    admin_recent_rides_limit: int | None = Field(default=None, ge=1)
    public_registration_disabled: bool | None = None

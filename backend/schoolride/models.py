"""Database models used by SchoolRide.

The models are defined with SQLModel (built on SQLAlchemy and Pydantic)
and represent user profiles, children, rides and site settings.
Comments are kept concise to avoid distracting from the field
definitions.
"""

from typing import Optional, List
from datetime import datetime, date, time
from sqlmodel import SQLModel, Field, Relationship

from schoolride.ride_status import RideStatus


class User(SQLModel, table=True):
    """Profile of a parent, driver or admin."""
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    email: str = Field(unique=True, index=True)
    phone: Optional[str] = None
    password_hash: str
    role: str  # 'parent', 'driver', 'admin'
    created_at: datetime = Field(default_factory=datetime.utcnow)


class Child(SQLModel, table=True):
    """Child registered by a parent for school transport."""
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    age: int
    school_name: str
    pickup_address: str
    drop_address: str
    parent_id: int = Field(foreign_key="user.id")
    assigned_driver_id: Optional[int] = Field(default=None, foreign_key="user.id")
    created_at: datetime = Field(default_factory=datetime.utcnow)

    parent: User = Relationship(
        sa_relationship_kwargs={"foreign_keys": "Child.parent_id"}
    )
    driver: Optional[User] = Relationship(
        sa_relationship_kwargs={"foreign_keys": "Child.assigned_driver_id"}
    )
    rides: List["Ride"] = Relationship(back_populates="child")


class Ride(SQLModel, table=True):
    """Single transport event for one child, executed by one driver."""
    id: Optional[int] = Field(default=None, primary_key=True)
    child_id: int = Field(foreign_key="child.id")
    driver_id: int = Field(foreign_key="user.id")
    ride_date: date = Field(index=True)
    pickup_time: time
    drop_time: Optional[time] = None
    # Copied from the child when the ride is scheduled
    pickup_address: str
    drop_address: str
    status: str = RideStatus.SCHEDULED.value  # scheduled, picked_up, dropped_off, cancelled
    created_at: datetime = Field(default_factory=datetime.utcnow)

    child: Child = Relationship(back_populates="rides")
    driver: User = Relationship()


class Settings(SQLModel, table=True):
    """Singleton table storing site‑wide configuration values."""
    id: Optional[int] = Field(default=1, primary_key=True)
    site_name: str = "SchoolRide"
    driver_history_limit: int = 5
    admin_recent_rides_limit: int = 10
    public_registration_disabled: bool = False

"""Schemas for rides and their status updates."""

from datetime import date, time
from typing import Optional
from pydantic import BaseModel

from schoolride.ride_status import available_events


class RideCreate(BaseModel):
    child_id: int
    ride_date: date
    pickup_time: time
    # Defaults to the child's assigned driver
    driver_id: Optional[int] = None


class RideRead(BaseModel):
    id: int
    child_id: int
    child_name: Optional[str] = None
    school_name: Optional[str] = None
    driver_id: int
    driver_name: Optional[str] = None
    driver_phone: Optional[str] = None
    ride_date: date
    pickup_time: time
    drop_time: Optional[time] = None
    pickup_address: str
    drop_address: str
    status: str
    next_actions: list[str] = []

    @classmethod
    def from_ride(cls, ride) -> "RideRead":
        """Build from a ``Ride`` whose child and driver are loaded."""
        return cls(
            id=ride.id,
            child_id=ride.child_id,
            child_name=ride.child.name if ride.child else None,
            school_name=ride.child.school_name if ride.child else None,
            driver_id=ride.driver_id,
            driver_name=ride.driver.name if ride.driver else None,
            driver_phone=ride.driver.phone if ride.driver else None,
            ride_date=ride.ride_date,
            pickup_time=ride.pickup_time,
            drop_time=ride.drop_time,
            pickup_address=ride.pickup_address,
            drop_address=ride.drop_address,
            status=ride.status,
            next_actions=[e.value for e in available_events(ride.status)],
        )


class UpcomingCount(BaseModel):
    upcoming: int

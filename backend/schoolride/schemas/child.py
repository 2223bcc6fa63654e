from pydantic import BaseModel, Field
from typing import Optional


class ChildCreate(BaseModel):
    name: str
    age: int = Field(ge=0, le=25)
    school_name: str
    pickup_address: str
    drop_address: str


class ChildRead(BaseModel):
    id: int
    name: str
    age: int
    school_name: str
    pickup_address: str
    drop_address: str
    parent_id: int
    parent_name: Optional[str] = None
    assigned_driver_id: Optional[int] = None
    driver_name: Optional[str] = None

    @classmethod
    def from_child(cls, child) -> "ChildRead":
        """Build from a ``Child`` whose parent and driver are loaded."""
        return cls(
            id=child.id,
            name=child.name,
            age=child.age,
            school_name=child.school_name,
            pickup_address=child.pickup_address,
            drop_address=child.drop_address,
            parent_id=child.parent_id,
            parent_name=child.parent.name if child.parent else None,
            assigned_driver_id=child.assigned_driver_id,
            driver_name=child.driver.name if child.driver else None,
        )


class DriverAssignmentUpdate(BaseModel):
    """``driver_id`` of ``None`` removes the current assignment."""

    driver_id: Optional[int]


class DriverRead(BaseModel):
    id: int
    name: str
    phone: Optional[str] = None

    class Config:
        model_config = {"from_attributes": True}

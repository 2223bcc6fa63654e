# schoolride/schemas/user.py

from typing import Optional
from pydantic import BaseModel, EmailStr, field_validator

from schoolride.acl import ROLE_PARENT, SELF_REGISTER_ROLES

class UserCreate(BaseModel):
    name: str
    email: EmailStr
    password: str
    phone: Optional[str] = None
    role: str = ROLE_PARENT

    @field_validator("role")
    @classmethod
    def role_is_self_assignable(cls, value: str) -> str:
        if value not in SELF_REGISTER_ROLES:
            raise ValueError(f"role must be one of {', '.join(SELF_REGISTER_ROLES)}")
        return value

class UserResponse(BaseModel):
    id: int
    name: str
    email: EmailStr
    phone: Optional[str] = None
    role: str

    class Config:
        model_config = {"from_attributes": True}


class UserLogin(BaseModel):
    email: EmailStr
    password: str

"""Pydantic schemas for user request/response contracts."""

from pydantic import BaseModel
from typing import Literal, Optional
from datetime import datetime

Role = Literal["admin", "employee"]


class UserBase(BaseModel):
    username: str
    email: str
    role: Role = "employee"


class UserCreate(UserBase):
    pass


class UserUpdate(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    role: Optional[Role] = None
    is_active: Optional[bool] = None


class UserOut(UserBase):
    user_id: int
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class UserBrief(BaseModel):
    user_id: int
    username: str

    model_config = {"from_attributes": True}


class LoginRequest(BaseModel):
    email: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut

"""
Pydantic schemas for authentication, user and role management
"""
from datetime import datetime
from pydantic import Field
from typing import List, Optional

from app.schemas.base import CamelModel


class LoginRequest(CamelModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserInfo(CamelModel):
    id: int
    email: str
    permissions: List[str]


class LoginResponse(CamelModel):
    user: UserInfo
    token: str


class MeResponse(CamelModel):
    user: UserInfo


class TrackAccessRequest(CamelModel):
    page_path: str = Field(..., min_length=1)


class RoleRef(CamelModel):
    id: int
    name: str


class RoleOut(RoleRef):
    description: Optional[str] = None


class ManagedUser(CamelModel):
    id: int
    username: str
    created_at: Optional[datetime] = None
    roles: List[RoleRef]


class UserCreate(CamelModel):
    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)
    role_ids: List[int]


class UserCreated(CamelModel):
    message: str
    user_id: int


class RoleAssignment(CamelModel):
    role_ids: List[int]

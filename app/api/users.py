"""
User and role management API endpoints
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
import logging

from app.database import get_db
from app.schemas.auth import ManagedUser, RoleAssignment, RoleOut, UserCreate, UserCreated
from app.schemas.base import MessageResponse
from app.services.user_service import user_service
from app.utils.auth import CurrentUser, require_permission

router = APIRouter(prefix="/api", tags=["users"])
logger = logging.getLogger(__name__)


@router.get("/users/management", response_model=List[ManagedUser])
async def list_users(
    user: CurrentUser = Depends(require_permission("page:user-management:view")),
    db: Session = Depends(get_db),
):
    """Users with their roles, newest first"""
    return user_service.list_users(db)


@router.post("/users", response_model=UserCreated, status_code=201)
async def create_user(
    payload: UserCreate,
    user: CurrentUser = Depends(require_permission("action:users:manage")),
    db: Session = Depends(get_db),
):
    created = user_service.create_user(db, payload.username, payload.password, payload.role_ids)
    return UserCreated(message="User created successfully", user_id=created.id)


@router.get("/roles", response_model=List[RoleOut])
async def list_roles(
    user: CurrentUser = Depends(require_permission("page:user-management:view")),
    db: Session = Depends(get_db),
):
    return user_service.list_roles(db)


@router.put("/users/{user_id}/roles", response_model=MessageResponse)
async def update_user_roles(
    user_id: int,
    payload: RoleAssignment,
    user: CurrentUser = Depends(require_permission("action:users:manage")),
    db: Session = Depends(get_db),
):
    """
    Replace a user's roles

    All of that user's sessions are revoked so the new permissions apply
    on their next login.
    """
    user_service.set_roles(db, user_id, payload.role_ids)
    return MessageResponse(message="User roles updated successfully. User sessions have been cleared.")

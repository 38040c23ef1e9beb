"""
Authentication API endpoints
"""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
import logging

from app.database import get_db
from app.schemas.auth import LoginRequest, LoginResponse, MeResponse, TrackAccessRequest, UserInfo
from app.schemas.base import MessageResponse
from app.services.auth_service import auth_service
from app.utils.auth import CurrentUser, get_current_user

router = APIRouter(prefix="/api", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/auth/login", response_model=LoginResponse)
async def login(credentials: LoginRequest, request: Request, db: Session = Depends(get_db)):
    """
    Exchange username and password for a session token

    - 401 on bad credentials
    - 403 when the account has no roles
    """
    return auth_service.login(
        db,
        credentials.username,
        credentials.password,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )


@router.get("/auth/me", response_model=MeResponse)
async def me(user: CurrentUser = Depends(get_current_user)):
    return MeResponse(user=UserInfo(id=user.id, email=user.email, permissions=user.permissions))


@router.post("/auth/logout", response_model=MessageResponse)
async def logout(user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    auth_service.logout(db, user.token)
    return MessageResponse(message="Logged out successfully.")


@router.post("/track-access")
async def track_access(
    payload: TrackAccessRequest,
    request: Request,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Record that the user opened a dashboard page"""
    auth_service.record_page_access(
        db,
        user.id,
        payload.page_path,
        request.client.host if request.client else None,
        request.headers.get("user-agent"),
    )
    return {"success": True}

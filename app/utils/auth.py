"""
FastAPI dependencies resolving the authenticated principal and its permissions
"""
from typing import List

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.database import get_db
from app.services.auth_service import auth_service
from app.services.rbac_service import has_permission
from app.utils.exceptions import AuthenticationError, PermissionDeniedError

bearer = HTTPBearer(auto_error=False)


class CurrentUser(BaseModel):
    id: int
    email: str
    permissions: List[str]
    token: str


def get_current_user(
    request: Request,
    creds: HTTPAuthorizationCredentials = Depends(bearer),
    db: Session = Depends(get_db),
) -> CurrentUser:
    if creds is None or creds.scheme.lower() != "bearer":
        raise AuthenticationError("Authentication required: No token provided.")

    user, permissions = auth_service.resolve_session(db, creds.credentials)
    request.state.user_id = user.id
    return CurrentUser(id=user.id, email=user.username, permissions=permissions, token=creds.credentials)


def require_permission(permission: str):
    """Dependency factory: the handler runs only if the principal holds `permission`"""
    def checker(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if not has_permission(user.permissions, permission):
            raise PermissionDeniedError(f"Forbidden: Lacks '{permission}' permission.")
        return user
    return checker

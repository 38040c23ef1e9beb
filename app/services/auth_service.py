"""
Session-token authentication service
"""
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session
from werkzeug.security import check_password_hash

from app.config import settings
from app.models import User, UserSession, LoginHistory, PageAccessHistory
from app.services.rbac_service import rbac_service
from app.utils.exceptions import AuthenticationError, PermissionDeniedError

logger = logging.getLogger(__name__)


class AuthService:
    """
    Password login issuing opaque bearer tokens stored in user_sessions

    Tokens are 128 hex characters and expire after SESSION_TTL_HOURS.
    """

    def login(
        self,
        db: Session,
        username: str,
        password: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Verify credentials and open a session

        Raises:
            AuthenticationError: unknown user or wrong password
            PermissionDeniedError: the user holds no permissions
        """
        user = db.query(User).filter(User.username == username).first()
        if user is None or not user.password_hash or not check_password_hash(user.password_hash, password):
            logger.info(f"Failed login for {username}")
            raise AuthenticationError("Invalid credentials")

        permissions = rbac_service.get_user_permissions(db, user.id)
        if not permissions:
            raise PermissionDeniedError("Login failed. Your account has not been assigned any roles.")

        token = self.create_session(db, user.id)
        self.record_login(db, user.id, "password", ip_address, user_agent)

        return {
            "user": {"id": user.id, "email": user.username, "permissions": permissions},
            "token": token,
        }

    def create_session(self, db: Session, user_id: int) -> str:
        token = secrets.token_hex(64)
        expires_at = datetime.now(timezone.utc) + timedelta(hours=settings.SESSION_TTL_HOURS)
        db.add(UserSession(user_id=user_id, token=token, expires_at=expires_at))
        db.commit()
        return token

    def resolve_session(self, db: Session, token: str) -> Tuple[User, List[str]]:
        """
        Look up the user behind a live token

        Raises:
            AuthenticationError: token unknown, expired, or user removed
        """
        session = (
            db.query(UserSession)
            .filter(UserSession.token == token, UserSession.expires_at > datetime.now(timezone.utc))
            .first()
        )
        if session is None:
            raise AuthenticationError("Authentication failed: Invalid or expired token.")

        user = db.get(User, session.user_id)
        if user is None:
            raise AuthenticationError("Authentication failed: User not found.")

        return user, rbac_service.get_user_permissions(db, user.id)

    def logout(self, db: Session, token: str) -> None:
        db.query(UserSession).filter(UserSession.token == token).delete(synchronize_session=False)
        db.commit()

    def revoke_user_sessions(self, db: Session, user_id: int) -> int:
        """Delete every session of a user; returns how many were removed"""
        removed = db.query(UserSession).filter(UserSession.user_id == user_id).delete(synchronize_session=False)
        db.commit()
        logger.info(f"Revoked {removed} session(s) for user {user_id}")
        return removed

    def record_login(self, db, user_id, method, ip_address, user_agent) -> None:
        """Best-effort login audit; a failure here never blocks the login"""
        try:
            db.add(LoginHistory(
                user_id=user_id,
                login_method=method,
                ip_address=ip_address,
                user_agent=user_agent,
            ))
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Failed to log login history: {str(e)}")

    def record_page_access(self, db, user_id, page_path, ip_address, user_agent) -> None:
        db.add(PageAccessHistory(
            user_id=user_id,
            page_path=page_path,
            ip_address=ip_address,
            user_agent=user_agent,
        ))
        db.commit()


# Global instance
auth_service = AuthService()

"""
User management service
"""
import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload
from werkzeug.security import generate_password_hash

from app.models import Role, User
from app.services.auth_service import auth_service
from app.utils.exceptions import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class UserService:

    def list_users(self, db: Session) -> List[User]:
        return (
            db.query(User)
            .options(selectinload(User.roles))
            .order_by(User.created_at.desc(), User.id.desc())
            .all()
        )

    def list_roles(self, db: Session) -> List[Role]:
        return db.query(Role).order_by(Role.name.asc()).all()

    def _load_roles(self, db: Session, role_ids: List[int]) -> List[Role]:
        wanted = set(role_ids)
        roles = db.query(Role).filter(Role.id.in_(wanted)).all() if wanted else []
        missing = wanted - {role.id for role in roles}
        if missing:
            raise ValidationError(f"Unknown role id(s): {sorted(missing)}")
        return roles

    def create_user(self, db: Session, username: str, password: str, role_ids: List[int]) -> User:
        """
        Create a user with the given roles in one transaction

        Raises:
            ValidationError: unknown role id
            ConflictError: username already taken
        """
        roles = self._load_roles(db, role_ids)
        user = User(username=username, password_hash=generate_password_hash(password), roles=roles)
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ConflictError("A user with this email already exists.")
        db.refresh(user)

        logger.info(f"Created user {user.id} ({username}) with roles {sorted(role_ids)}")
        return user

    def set_roles(self, db: Session, user_id: int, role_ids: List[int]) -> User:
        """Replace the user's roles, then revoke their sessions"""
        user = db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")

        try:
            user.roles = self._load_roles(db, role_ids)
            db.commit()
        except Exception:
            db.rollback()
            raise

        auth_service.revoke_user_sessions(db, user_id)
        return user


# Global instance
user_service = UserService()

"""
Role-based access control: permission catalogue, role seeding and lookups
"""
import logging
from typing import Iterable, List, Optional, Set

from sqlalchemy.orm import Session
from werkzeug.security import generate_password_hash

from app.models import Permission, Role, User
from app.models.user import role_permissions, user_roles

logger = logging.getLogger(__name__)

# Holders of this permission pass every permission check
SUPER_PERMISSION = "action:users:manage"

ALL_PERMISSIONS = [
    ("page:dashboard:view", "Can view the main dashboard"),
    ("page:contributions:view", "Can view the contributions page"),
    ("page:bulk-add:view", "Can view the bulk add page"),
    ("page:donors:view", "Can view the donors page"),
    ("page:sponsors:view", "Can view the sponsors page"),
    ("page:vendors:view", "Can view the vendors page"),
    ("page:expenses:view", "Can view the expenses page"),
    ("page:quotations:view", "Can view the quotations page"),
    ("page:budget:view", "Can view the budget page"),
    ("page:campaigns:view", "Can view the campaigns page"),
    ("page:events:view", "Can view the festival events page"),
    ("page:tasks:view", "Can view the tasks page"),
    ("page:reports:view", "Can view the reports page"),
    ("page:ai-insights:view", "Can view the AI insights page"),
    ("page:user-management:view", "Can view the user management page"),
    ("page:archive:view", "Can view and restore archived items"),
    ("action:create", "Can create new items (contributions, expenses, etc.)"),
    ("action:edit", "Can edit existing items"),
    ("action:delete", "Can archive items"),
    ("action:restore", "Can restore archived items"),
    (SUPER_PERMISSION, "Can create users and manage their roles"),
]

ALL_PERMISSION_NAMES = frozenset(name for name, _ in ALL_PERMISSIONS)

_VIEWER = [
    "page:dashboard:view", "page:contributions:view", "page:donors:view",
    "page:sponsors:view", "page:vendors:view", "page:expenses:view",
    "page:quotations:view", "page:budget:view", "page:campaigns:view",
    "page:events:view", "page:tasks:view", "page:reports:view",
    "page:ai-insights:view",
]

ROLES_CONFIG = {
    "Admin": [name for name, _ in ALL_PERMISSIONS],
    "Manager": _VIEWER + [
        "page:bulk-add:view", "page:archive:view",
        "action:create", "action:edit", "action:delete", "action:restore",
    ],
    "Viewer": list(_VIEWER),
}


def effective_permissions(granted: Iterable[str]) -> Set[str]:
    """Granted permissions, widened to the full catalogue for the super permission"""
    effective = set(granted)
    if SUPER_PERMISSION in effective:
        effective |= ALL_PERMISSION_NAMES
    return effective


def has_permission(granted: Iterable[str], required: str) -> bool:
    return required in effective_permissions(granted)


class RBACService:
    """Seeding and lookup of roles and permissions"""

    def seed(self, db: Session) -> None:
        """
        Idempotently sync the permission catalogue and role definitions

        Descriptions are upserted and each configured role's permission set
        is replaced by the configured list on every run.
        """
        permissions = {permission.name: permission for permission in db.query(Permission).all()}
        for name, description in ALL_PERMISSIONS:
            permission = permissions.get(name)
            if permission is None:
                permission = Permission(name=name, description=description)
                db.add(permission)
                permissions[name] = permission
            else:
                permission.description = description

        for role_name, permission_names in ROLES_CONFIG.items():
            role = db.query(Role).filter(Role.name == role_name).first()
            if role is None:
                role = Role(name=role_name)
                db.add(role)
            role.permissions = [permissions[name] for name in permission_names if name in permissions]
            logger.info(f"Permissions for role '{role_name}' have been synced.")

        db.flush()

    def ensure_admin_user(self, db: Session, email: Optional[str], password: Optional[str]) -> Optional[User]:
        """Make sure the bootstrap admin exists and holds the Admin role"""
        if not email:
            return None

        user = db.query(User).filter(User.username == email).first()
        if user is None:
            if not password:
                logger.warning(
                    f"Admin user {email} does not exist and no ADMIN_PASSWORD is set. Cannot create admin."
                )
                return None
            user = User(username=email, password_hash=generate_password_hash(password))
            db.add(user)
            logger.info(f"Created admin user: {email}")

        admin_role = db.query(Role).filter(Role.name == "Admin").first()
        if admin_role is not None and admin_role not in user.roles:
            user.roles.append(admin_role)
            logger.info(f"Ensured user {email} has 'Admin' role.")

        db.flush()
        return user

    def get_user_permissions(self, db: Session, user_id: int) -> List[str]:
        """Distinct permission names granted through any of the user's roles"""
        rows = (
            db.query(Permission.name)
            .join(role_permissions, role_permissions.c.permission_id == Permission.id)
            .join(user_roles, user_roles.c.role_id == role_permissions.c.role_id)
            .filter(user_roles.c.user_id == user_id)
            .distinct()
            .order_by(Permission.name)
            .all()
        )
        return [name for (name,) in rows]


# Global instance
rbac_service = RBACService()

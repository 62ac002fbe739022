# backend/utils/permissions.py
import logging
from sqlalchemy.orm import Session

from models.users import UserRole

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"
CUSTOMER_ROLE = "customer"

def is_admin(db: Session, user_id: int) -> bool:
    return db.query(UserRole).filter(
        UserRole.user_id == user_id, UserRole.role == ADMIN_ROLE
    ).first() is not None

def user_roles(db: Session, user_id: int) -> list:
    rows = db.query(UserRole.role).filter(UserRole.user_id == user_id).all()
    return sorted(r[0] for r in rows)

def ensure_first_user_is_admin(db: Session, user_id: int) -> bool:
    """Grant the admin role when no admin exists yet.

    Returns True when the user was promoted. The caller commits.
    """
    existing = db.query(UserRole).filter(UserRole.role == ADMIN_ROLE).first()
    if existing:
        return False

    db.add(UserRole(user_id=user_id, role=ADMIN_ROLE))
    logger.info(f"No admin found, promoting user {user_id}")
    return True

def grant_role(db: Session, user_id: int, role: str) -> bool:
    # Idempotent: re-granting an existing role is a no-op
    exists = db.query(UserRole).filter(
        UserRole.user_id == user_id, UserRole.role == role
    ).first()
    if exists:
        return False
    db.add(UserRole(user_id=user_id, role=role))
    return True

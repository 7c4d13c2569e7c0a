"""
User data access.

Deleting a user relies on the database's ON DELETE CASCADE rules to
remove everything the user owns: problems (and everything hanging off
them), submissions with their test case results, solved records and
playlists.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..common.errors import UserNotFoundError, integrity_guard
from ..common.models import User
from ..common.schemas import UserCreate, UserUpdate

logger = logging.getLogger(__name__)

_NULLABLE_FIELDS = {"name", "image"}


def create_user(db: Session, data: UserCreate) -> User:
    """
    Create a user.

    Args:
        db: Database session
        data: Validated user fields

    Returns:
        Created user instance

    Raises:
        UniqueConstraintViolation: If the email is already registered
    """
    user = User(**data.model_dump())

    with integrity_guard(db, User.__tablename__):
        db.add(user)
        db.commit()
    db.refresh(user)

    logger.info(f"Created user {user.id}")
    return user


def get_user(db: Session, user_id: str) -> Optional[User]:
    """Retrieve user by ID, or None."""
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """Retrieve user by email, or None."""
    return db.query(User).filter(User.email == email).first()


def require_user(db: Session, user_id: str) -> User:
    """
    Retrieve user by ID.

    Raises:
        UserNotFoundError: If user doesn't exist
    """
    user = get_user(db, user_id)
    if not user:
        raise UserNotFoundError(user_id)
    return user


def list_users(db: Session) -> list[User]:
    """List all users, oldest first."""
    return db.query(User).order_by(User.created_at, User.id).all()


def update_user(db: Session, user_id: str, data: UserUpdate) -> User:
    """
    Apply changes to an existing user.

    Only fields explicitly set on ``data`` are written. ``None`` clears
    optional fields and is ignored for required ones.

    Raises:
        UserNotFoundError: If user doesn't exist
        UniqueConstraintViolation: If the new email is taken
    """
    user = require_user(db, user_id)

    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field not in _NULLABLE_FIELDS:
            continue
        setattr(user, field, value)

    with integrity_guard(db, User.__tablename__):
        db.commit()
    db.refresh(user)

    logger.info(f"Updated user {user_id}")
    return user


def delete_user(db: Session, user_id: str) -> None:
    """
    Delete a user and, by cascade, everything they own.

    Raises:
        UserNotFoundError: If user doesn't exist
    """
    user = require_user(db, user_id)

    with integrity_guard(db, User.__tablename__):
        db.delete(user)
        db.commit()

    logger.info(f"Deleted user {user_id}")

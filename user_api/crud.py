from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import models, schemas


class StorageError(RuntimeError):
    """Raised when the backing store fails to persist a change."""


def _commit(db: Session) -> None:
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        # Re-raise a simplified error; the exception boundary turns it into a 500.
        raise StorageError("Database commit failed") from exc


def get_users(db: Session) -> List[models.User]:
    """Return all users in the database."""
    stmt = select(models.User).order_by(models.User.id)
    return list(db.execute(stmt).scalars().all())


def get_user(db: Session, user_id: int) -> Optional[models.User]:
    return db.get(models.User, user_id)


def get_user_by_email(db: Session, email: str) -> Optional[models.User]:
    stmt = select(models.User).where(models.User.email == email)
    return db.execute(stmt).scalars().first()


def create_user(db: Session, user_in: schemas.UserIn) -> models.User:
    """Insert a new user; the database assigns the id.

    Raises:
        StorageError: if the database commit fails.
    """
    user = models.User(
        first_name=user_in.first_name,
        last_name=user_in.last_name,
        email=user_in.email,
        phone_number=user_in.phone_number,
        department=user_in.department,
        created_at=datetime.now(timezone.utc),
    )
    db.add(user)
    _commit(db)
    db.refresh(user)
    return user


def update_user(db: Session, user: models.User, user_in: schemas.UserIn) -> models.User:
    """Overwrite the editable fields of `user` and stamp `updated_at`.

    `id` and `created_at` are never touched.

    Raises:
        StorageError: if the database commit fails.
    """
    user.first_name = user_in.first_name
    user.last_name = user_in.last_name
    user.email = user_in.email
    user.phone_number = user_in.phone_number
    user.department = user_in.department
    user.updated_at = datetime.now(timezone.utc)

    _commit(db)
    db.refresh(user)
    return user


def delete_user(db: Session, user: models.User) -> None:
    """Delete a user.

    Raises:
        StorageError: if the database commit fails.
    """
    db.delete(user)
    _commit(db)

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from .. import crud, schemas
from ..database import get_db
from ..validation import is_valid_email

router = APIRouter(prefix="/users", tags=["users"])


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _not_found(user_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"User with ID {user_id} not found.",
    )


def _bad_request(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


@router.get("", response_model=List[schemas.UserOut])
def list_users(db: Session = Depends(get_db)):
    """Return all users."""
    return crud.get_users(db)


@router.get(
    "/{user_id}",
    response_model=schemas.UserOut,
    responses={404: {"model": schemas.ErrorResponse}},
)
def get_user(user_id: int, db: Session = Depends(get_db)):
    user = crud.get_user(db, user_id)
    if user is None:
        raise _not_found(user_id)
    return user


@router.post(
    "",
    response_model=schemas.UserOut,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": schemas.ErrorResponse}},
)
def create_user(user_in: schemas.UserIn, response: Response, db: Session = Depends(get_db)):
    """Create a new user.

    Checks run in a fixed order and the first failure wins: names, email
    presence, email syntax, email uniqueness.
    """
    if _is_blank(user_in.first_name) or _is_blank(user_in.last_name):
        raise _bad_request("FirstName and LastName are required.")
    if _is_blank(user_in.email):
        raise _bad_request("Email is required.")
    if not is_valid_email(user_in.email):
        raise _bad_request("Email format is invalid.")
    # Not atomic: two concurrent creates can both get past this check, the
    # unique index on users.email then fails the second commit.
    if crud.get_user_by_email(db, user_in.email) is not None:
        raise _bad_request("Email is already in use.")

    user = crud.create_user(db, user_in)
    response.headers["Location"] = f"/users/{user.id}"
    return user


@router.put(
    "/{user_id}",
    response_model=schemas.UserOut,
    responses={400: {"model": schemas.ErrorResponse}, 404: {"model": schemas.ErrorResponse}},
)
def update_user(user_id: int, user_in: schemas.UserIn, db: Session = Depends(get_db)):
    """Replace a user's editable fields.

    Returns 404 before looking at the payload if the user does not exist.
    """
    user = crud.get_user(db, user_id)
    if user is None:
        raise _not_found(user_id)

    if _is_blank(user_in.first_name) or _is_blank(user_in.last_name):
        raise _bad_request("FirstName and LastName are required.")
    if _is_blank(user_in.email) or not is_valid_email(user_in.email):
        raise _bad_request("Email is required and must be valid.")
    owner = crud.get_user_by_email(db, user_in.email)
    if owner is not None and owner.id != user_id:
        raise _bad_request("Email is already in use.")

    return crud.update_user(db, user, user_in)


@router.delete(
    "/{user_id}",
    response_model=schemas.MessageOut,
    responses={404: {"model": schemas.ErrorResponse}},
)
def delete_user(user_id: int, db: Session = Depends(get_db)):
    user = crud.get_user(db, user_id)
    if user is None:
        raise _not_found(user_id)

    crud.delete_user(db, user)
    return schemas.MessageOut(message="User deleted successfully.")

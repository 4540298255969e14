"""
Account API endpoints.

Registration, login, the current user, and self-profile updates.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from quickdesk.api.auth import _normalize_email, authenticate, register_user
from quickdesk.api.deps import get_current_user
from quickdesk.db import models, schemas
from quickdesk.db.database import get_db
from quickdesk.db.repositories import users as user_repo
from quickdesk.utils.security import create_access_token, hash_password, verify_password

router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_response(user: models.User) -> schemas.AuthResponse:
    return schemas.AuthResponse(
        user=schemas.User.model_validate(user),
        token=create_access_token(user.id),
    )


@router.post("/register", response_model=schemas.AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: schemas.RegisterRequest, db: Session = Depends(get_db)):
    name = (payload.name or "").strip()
    email = _normalize_email(payload.email)
    if not name or not email or not payload.password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="All fields are required")
    if user_repo.get_user_by_email(db, email) is not None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already exists")

    user = register_user(db, name=name, email=email, password=payload.password)
    return _auth_response(user)


@router.post("/login", response_model=schemas.AuthResponse)
def login(payload: schemas.LoginRequest, db: Session = Depends(get_db)):
    user = authenticate(db, payload.email, payload.password)
    if user is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid credentials")
    return _auth_response(user)


@router.get("/me", response_model=schemas.UserResponse)
def me(user: models.User = Depends(get_current_user)):
    return schemas.UserResponse(user=schemas.User.model_validate(user))


@router.put("/profile", response_model=schemas.UserResponse)
def update_profile(
    payload: schemas.ProfileUpdateRequest,
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    name = (payload.name or "").strip()
    email = _normalize_email(payload.email)
    if not name or not email:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Name and email are required")
    if user_repo.email_taken_by_other(db, email, user.id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already taken")

    fields = {"name": name, "email": email}
    if payload.new_password:
        if not payload.current_password:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Current password is required to set a new password",
            )
        if not verify_password(payload.current_password, user.password_hash):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Current password is incorrect")
        fields["password_hash"] = hash_password(payload.new_password)

    user = user_repo.update_user(db, user, **fields)
    return schemas.UserResponse(user=schemas.User.model_validate(user))

from datetime import timedelta
from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from app.database import get_db
from app.crud import user as user_crud
from app.enums.tutor_profile import UserRole
from app.exceptions import Unauthenticated, ValidationError, PermissionDenied
from app.schemas.common import ActionResponse
from app.schemas.user import (
    UserCreate,
    UserResponse,
    UserChangePassword,
    TokenResponse,
    RefreshTokenRequest,
)
from app.services.auth import (
    authenticate_user,
    create_access_token,
    create_refresh_token,
    get_password_hash,
    get_user_from_refresh_token,
    token_claims,
    ACCESS_TOKEN_EXPIRE_MINUTES,
    get_current_user,
)
from app.models.user import User

router = APIRouter()


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(user: UserCreate, db: Session = Depends(get_db)):
    if user.role == UserRole.ADMIN:
        raise PermissionDenied("Admin accounts cannot be self-registered")

    if user_crud.get_user_by_email(db, user.email):
        raise ValidationError("Email already registered")

    return user_crud.create_user(
        db,
        name=user.name,
        email=user.email,
        phone=user.phone,
        hashed_password=get_password_hash(user.password),
        role=user.role.value,
    )


@router.post("/token", response_model=TokenResponse)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)
):
    user = authenticate_user(db, form_data.username, form_data.password)
    if not user:
        raise Unauthenticated("Incorrect email or password")

    access_token = create_access_token(
        data=token_claims(user),
        expires_delta=timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    refresh_token = create_refresh_token(data={"sub": user.email})
    return TokenResponse(access_token=access_token, refresh_token=refresh_token)


@router.post("/refresh", response_model=TokenResponse)
def refresh(body: RefreshTokenRequest, db: Session = Depends(get_db)):
    user = get_user_from_refresh_token(body.refresh_token, db)
    if not user or not user.is_active:
        raise Unauthenticated("Invalid or expired refresh token")

    return TokenResponse(
        access_token=create_access_token(data=token_claims(user)),
        refresh_token=body.refresh_token,
    )


@router.get("/me", response_model=UserResponse)
def read_users_me(current_user: User = Depends(get_current_user)):
    return current_user


@router.post("/change-password", response_model=ActionResponse)
def change_password(
    password_data: UserChangePassword,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Change the caller's password.
    The current password must be supplied again.
    """
    user = authenticate_user(db, current_user.email, password_data.current_password)
    if not user:
        raise Unauthenticated("Current password is incorrect")

    user.hashed_password = get_password_hash(password_data.new_password)
    db.commit()

    return ActionResponse(message="Password updated successfully")

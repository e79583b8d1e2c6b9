from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from app.database import get_db
from app.exceptions import Unauthenticated, PermissionDenied
from app.models.user import User
from app.enums.tutor_profile import UserRole
import logging
import os
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

# Security configuration
SECRET_KEY = os.getenv("SECRET_KEY", "your-secret-key")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(
    os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440")
)  # 24h by default
REFRESH_TOKEN_EXPIRE_DAYS = int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", "7"))

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=12,
)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token", auto_error=False)


def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password):
    return pwd_context.hash(password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)
    return encoded_jwt


def create_refresh_token(data: dict) -> str:
    """Long-lived JWT used to obtain a new access token without logging in."""
    to_encode = data.copy()
    to_encode.update({"type": "refresh"})
    expire = datetime.utcnow() + timedelta(days=REFRESH_TOKEN_EXPIRE_DAYS)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def token_claims(user: User) -> dict:
    return {"sub": user.email, "role": user.role}


def get_user_from_refresh_token(refresh_token: str, db: Session) -> Optional[User]:
    """Returns the token's user, or None when the token is invalid or expired."""
    try:
        payload = jwt.decode(refresh_token, SECRET_KEY, algorithms=[ALGORITHM])
        if payload.get("type") != "refresh":
            return None
        email = payload.get("sub")
        if not email:
            return None
        return get_user_by_email(db, email=email)
    except JWTError:
        return None


def get_user_by_email(db: Session, email: str):
    return db.query(User).filter(User.email == email).first()


def authenticate_user(db: Session, email: str, password: str):
    user = get_user_by_email(db, email)
    if not user:
        logger.info(f"Login failed: no user with email {email}")
        return False

    if not user.is_active:
        logger.info(f"Login failed: user {user.id} is inactive")
        return False

    if not user.hashed_password or not verify_password(password, user.hashed_password):
        logger.info(f"Login failed: wrong password for user {user.id}")
        return False

    return user


def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme), db: Session = Depends(get_db)
):
    if not token:
        raise Unauthenticated()
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        email: str = payload.get("sub")
        if email is None or payload.get("type") == "refresh":
            raise Unauthenticated("Could not validate credentials")
    except JWTError:
        raise Unauthenticated("Could not validate credentials")
    user = get_user_by_email(db, email=email)
    if user is None or not user.is_active:
        raise Unauthenticated("Could not validate credentials")
    return user


def get_current_admin(current_user: User = Depends(get_current_user)):
    if not (current_user.is_admin or current_user.role == UserRole.ADMIN.value):
        raise PermissionDenied("Admin access required")
    return current_user

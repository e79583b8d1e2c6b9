from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime

from app.enums.tutor_profile import UserRole
from app.schemas.common import CamelModel


class UserBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = None


class UserCreate(UserBase):
    password: str = Field(..., min_length=6)
    role: UserRole = UserRole.STUDENT


class UserUpdate(CamelModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    profile_image: Optional[str] = None


class UserResponse(UserBase):
    id: int
    role: str
    profile_image: Optional[str] = ""
    is_active: bool = True
    is_admin: bool = False
    created_at: datetime


class UserChangePassword(CamelModel):
    current_password: str
    new_password: str = Field(..., min_length=6)

    class Config:
        json_schema_extra = {
            "example": {
                "currentPassword": "old_password123",
                "newPassword": "new_secure_password456",
            }
        }


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"


class RefreshTokenRequest(CamelModel):
    refresh_token: str

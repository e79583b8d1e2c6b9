from pydantic import BaseModel, Field
from datetime import datetime
from typing import Literal, Optional


class FCMTokenCreate(BaseModel):
    token: str = Field(..., min_length=1, max_length=255)
    device_type: Optional[Literal["ios", "android", "web"]] = None


class FCMTokenResponse(BaseModel):
    id: int
    user_id: int
    token: str
    device_type: Optional[str] = None
    is_active: bool
    last_seen_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True

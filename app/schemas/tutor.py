from pydantic import Field
from typing import Optional, List
from datetime import datetime

from app.enums.tutor_profile import TeachingMode
from app.schemas.common import CamelModel, Pagination


class TutorBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    city: Optional[str] = Field(None, max_length=50)
    subjects: List[str] = []
    qualifications: List[str] = []
    experience: int = Field(0, ge=0, le=50)
    fee_per_hour: Optional[float] = Field(None, ge=0, le=10000)
    trial_fee: Optional[float] = Field(None, ge=0)
    mode: TeachingMode = TeachingMode.BOTH
    bio: str = Field("", max_length=1000)
    profile_image: Optional[str] = ""


class TutorCreate(TutorBase):
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    address: Optional[str] = ""


class TutorUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    city: Optional[str] = Field(None, max_length=50)
    subjects: Optional[List[str]] = None
    qualifications: Optional[List[str]] = None
    experience: Optional[int] = Field(None, ge=0, le=50)
    fee_per_hour: Optional[float] = Field(None, ge=0, le=10000)
    trial_fee: Optional[float] = Field(None, ge=0)
    mode: Optional[TeachingMode] = None
    bio: Optional[str] = Field(None, max_length=1000)
    profile_image: Optional[str] = None
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    address: Optional[str] = None
    is_active: Optional[bool] = None


class TutorPublic(TutorBase):
    """Tutor as seen by anyone browsing: no contact details."""

    id: int
    rating: float = 0.0
    total_reviews: int = 0
    is_verified: bool = False
    kyc_status: str
    created_at: datetime


class TutorPrivate(TutorPublic):
    """Tutor as seen by the tutor themselves."""

    user_id: int
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    address: Optional[str] = ""
    is_active: bool = True
    profile_completion: int = 0


class TutorListResponse(CamelModel):
    success: bool = True
    data: List[TutorPublic]
    pagination: Pagination


class TutorEnvelope(CamelModel):
    success: bool = True
    data: TutorPublic


class TutorPrivateEnvelope(CamelModel):
    success: bool = True
    data: TutorPrivate
    message: Optional[str] = None

from pydantic import Field
from typing import Optional, List
from datetime import datetime

from app.enums.tutor_profile import CourseCategory, TeachingMode
from app.schemas.common import CamelModel, Pagination


class CourseBase(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    price: float = Field(..., ge=0)
    category: CourseCategory
    coaching_type: TeachingMode = TeachingMode.BOTH
    location: str = ""
    thumbnail: str = "default-course.jpg"
    duration: int = Field(10, ge=1)
    language: str = "English"
    topics: List[str] = []


class CourseCreate(CourseBase):
    pass


class CourseUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    category: Optional[CourseCategory] = None
    coaching_type: Optional[TeachingMode] = None
    location: Optional[str] = None
    thumbnail: Optional[str] = None
    duration: Optional[int] = Field(None, ge=1)
    language: Optional[str] = None
    topics: Optional[List[str]] = None


class CourseResponse(CourseBase):
    id: int
    instructor_id: int
    rating: float = 0.0
    students_enrolled: int = 0
    is_featured: bool = False
    created_at: datetime


class CourseEnvelope(CamelModel):
    success: bool = True
    data: CourseResponse
    message: Optional[str] = None


class CourseListResponse(CamelModel):
    success: bool = True
    data: List[CourseResponse]
    pagination: Pagination

from pydantic import Field
from typing import Optional, List
from datetime import datetime

from app.schemas.common import CamelModel


class ReviewCreate(CamelModel):
    tutor_id: int
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field("", max_length=500)
    booking_id: Optional[int] = None


class ReviewResponse(CamelModel):
    id: int
    tutor_id: int
    student_id: int
    student_name: Optional[str] = None
    booking_id: Optional[int] = None
    rating: int
    comment: str = ""
    created_at: datetime

    @classmethod
    def from_review(cls, review) -> "ReviewResponse":
        return cls(
            id=review.id,
            tutor_id=review.tutor_id,
            student_id=review.student_id,
            student_name=review.student.name if review.student else None,
            booking_id=review.booking_id,
            rating=review.rating,
            comment=review.comment or "",
            created_at=review.created_at,
        )


class ReviewEnvelope(CamelModel):
    success: bool = True
    review: ReviewResponse


class ReviewListResponse(CamelModel):
    success: bool = True
    reviews: List[ReviewResponse]
    average_rating: float = 0.0
    total_reviews: int = 0

from sqlalchemy.orm import Session, joinedload
from sqlalchemy import func
from typing import List, Optional

from app.models.review import Review
from app.models.tutor import Tutor


def get_review_for_booking(db: Session, booking_id: int) -> Optional[Review]:
    return db.query(Review).filter(Review.booking_id == booking_id).first()


def get_tutor_reviews(db: Session, tutor_id: int) -> List[Review]:
    return (
        db.query(Review)
        .options(joinedload(Review.student))
        .filter(Review.tutor_id == tutor_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
        .all()
    )


def create_review(
    db: Session,
    tutor: Tutor,
    student_id: int,
    rating: int,
    comment: str = "",
    booking_id: Optional[int] = None,
) -> Review:
    """Stores the review and refreshes the tutor's average rating and count."""
    review = Review(
        tutor_id=tutor.id,
        student_id=student_id,
        booking_id=booking_id,
        rating=rating,
        comment=comment or "",
    )
    db.add(review)
    db.flush()

    average, count = (
        db.query(func.avg(Review.rating), func.count(Review.id))
        .filter(Review.tutor_id == tutor.id)
        .one()
    )
    tutor.rating = round(float(average or 0), 1)
    tutor.total_reviews = count

    db.commit()
    db.refresh(review)
    return review

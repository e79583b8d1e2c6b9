from sqlalchemy import (
    Column,
    Integer,
    String,
    Float,
    Boolean,
    DateTime,
    Text,
    JSON,
    ForeignKey,
)
from sqlalchemy.orm import relationship
from datetime import datetime

from app.database import Base
from app.enums.tutor_profile import KycStatus, TeachingMode


class Tutor(Base):
    """Public tutor profile, one per user account."""

    __tablename__ = "tutors"
    __table_args__ = {"extend_existing": True}

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True)
    name = Column(String(100), nullable=False)
    profile_image = Column(String, default="")
    phone = Column(String)
    whatsapp = Column(String)
    city = Column(String(50), index=True)
    address = Column(String, default="")
    subjects = Column(JSON, default=list)
    qualifications = Column(JSON, default=list)
    experience = Column(Integer, default=0)
    fee_per_hour = Column(Float, nullable=True)  # None = uses the platform default
    trial_fee = Column(Float, nullable=True)
    mode = Column(String(10), default=TeachingMode.BOTH.value)
    bio = Column(Text, default="")
    rating = Column(Float, default=0.0, index=True)
    total_reviews = Column(Integer, default=0)
    kyc_status = Column(String(20), default=KycStatus.NOT_STARTED.value)
    is_verified = Column(Boolean, default=False)
    is_active = Column(Boolean, default=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user = relationship("app.models.user.User", back_populates="tutor_profile")
    courses = relationship("app.models.course.Course", back_populates="instructor")
    bookings = relationship("app.models.booking.Booking", back_populates="tutor")

    @property
    def email(self):
        return self.user.email if self.user else None

    @property
    def profile_completion(self) -> int:
        completion = 0
        for field in ("name", "phone", "city", "bio", "experience", "fee_per_hour"):
            value = getattr(self, field)
            if value not in (None, "", 0):
                completion += 15
        if self.subjects:
            completion += 10
        if self.profile_image:
            completion += 10
        return min(completion, 100)

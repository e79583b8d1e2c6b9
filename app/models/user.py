from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.orm import relationship
from app.database import Base
from datetime import datetime

from app.enums.tutor_profile import UserRole


class User(Base):
    __tablename__ = "users"
    __table_args__ = {"extend_existing": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, index=True)
    email = Column(String, unique=True, index=True)
    phone = Column(String)
    hashed_password = Column(String)
    role = Column(String(20), default=UserRole.STUDENT.value, nullable=False)
    profile_image = Column(String, default="")
    is_active = Column(Boolean, default=True)
    is_admin = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    tutor_profile = relationship(
        "app.models.tutor.Tutor", back_populates="user", uselist=False
    )
    bookings = relationship("app.models.booking.Booking", back_populates="student")
    notifications = relationship(
        "app.models.notification.Notification",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    fcm_tokens = relationship(
        "app.models.fcm_token.FCMToken",
        back_populates="user",
        cascade="all, delete-orphan",
    )

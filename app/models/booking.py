from sqlalchemy import (
    Column,
    Integer,
    String,
    Float,
    Boolean,
    Date,
    DateTime,
    Text,
    ForeignKey,
    Enum,
)
from sqlalchemy.orm import relationship
from datetime import datetime

from app.database import Base
from app.enums.booking_status import BookingStatus, PaymentStatus, BookingType


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = {"extend_existing": True}

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    tutor_id = Column(Integer, ForeignKey("tutors.id"), nullable=False, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=True)
    session_date = Column(Date, nullable=False, index=True)
    session_time = Column(String, nullable=False)  # "HH:MM"
    message = Column(Text, default="")
    booking_type = Column(Enum(BookingType), default=BookingType.TUTOR)
    is_trial = Column(Boolean, default=False, nullable=False)
    amount = Column(Float, nullable=False)  # fixed at creation
    status = Column(Enum(BookingStatus), default=BookingStatus.PENDING, index=True)
    payment_status = Column(Enum(PaymentStatus), default=PaymentStatus.PENDING)
    order_id = Column(String, nullable=True)
    payment_id = Column(String, nullable=True)
    rejection_reason = Column(String, nullable=True)

    # Chat and contact details stay locked until payment succeeds
    can_chat = Column(Boolean, default=False, nullable=False)
    private_details_unlocked = Column(Boolean, default=False, nullable=False)

    tutor_paid = Column(Boolean, default=False, nullable=False)
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __mapper_args__ = {"version_id_col": version}

    # Relationships
    student = relationship("app.models.user.User", back_populates="bookings")
    tutor = relationship("app.models.tutor.Tutor", back_populates="bookings")
    course = relationship("app.models.course.Course")
    messages = relationship(
        "app.models.chat_message.ChatMessage",
        back_populates="booking",
        cascade="all, delete-orphan",
    )

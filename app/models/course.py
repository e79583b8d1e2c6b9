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
from app.enums.tutor_profile import TeachingMode


class Course(Base):
    __tablename__ = "courses"
    __table_args__ = {"extend_existing": True}

    id = Column(Integer, primary_key=True, index=True)
    instructor_id = Column(Integer, ForeignKey("tutors.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, default="")
    price = Column(Float, nullable=False)
    category = Column(String(20), nullable=False, index=True)
    coaching_type = Column(String(10), default=TeachingMode.BOTH.value)
    location = Column(String, default="")
    thumbnail = Column(String, default="default-course.jpg")
    duration = Column(Integer, default=10)
    language = Column(String, default="English")
    topics = Column(JSON, default=list)
    is_featured = Column(Boolean, default=False)
    rating = Column(Float, default=0.0)
    students_enrolled = Column(Integer, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    instructor = relationship("app.models.tutor.Tutor", back_populates="courses")

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Boolean
from sqlalchemy.orm import relationship
from datetime import datetime

from app.database import Base


class FCMToken(Base):
    """
    Push token of one of the user's devices.

    A token belongs to one user at a time; registering it again from another
    account moves it. Tokens FCM rejects are kept but switched off.
    """

    __tablename__ = "fcm_tokens"
    __table_args__ = {"extend_existing": True}

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    token = Column(String(255), nullable=False, unique=True)
    device_type = Column(String(20), nullable=True)  # ios / android / web
    is_active = Column(Boolean, default=True, nullable=False)
    last_seen_at = Column(DateTime, default=datetime.utcnow)
    deactivated_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("app.models.user.User", back_populates="fcm_tokens")

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime

from app.database import Base
from app.enums.tutor_profile import KycStatus

# Documents a tutor must upload, in display order
KYC_DOCUMENT_FIELDS = ("aadhaar_front", "aadhaar_back", "pan_card", "selfie")


class KycDocument(Base):
    __tablename__ = "kyc_documents"
    __table_args__ = {"extend_existing": True}

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True)
    aadhaar_front = Column(String, nullable=False)
    aadhaar_back = Column(String, nullable=False)
    pan_card = Column(String, nullable=False)
    selfie = Column(String, nullable=False)
    status = Column(String(20), default=KycStatus.PENDING.value, nullable=False)
    rejection_reason = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("app.models.user.User")

    @property
    def documents(self):
        return [getattr(self, field) for field in KYC_DOCUMENT_FIELDS]

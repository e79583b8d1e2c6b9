from sqlalchemy.orm import Session
from typing import Dict, Optional
from datetime import datetime

from app.models.kyc import KycDocument
from app.enums.tutor_profile import KycStatus


def get_kyc_by_user(db: Session, user_id: int) -> Optional[KycDocument]:
    return db.query(KycDocument).filter(KycDocument.user_id == user_id).first()


def upsert_kyc_documents(
    db: Session, user_id: int, filenames: Dict[str, str]
) -> KycDocument:
    """Re-uploading replaces the previous set and sends it back to review."""
    record = get_kyc_by_user(db, user_id)
    if record is None:
        record = KycDocument(user_id=user_id, **filenames)
        db.add(record)
    else:
        for field, value in filenames.items():
            setattr(record, field, value)
        record.updated_at = datetime.utcnow()
    record.status = KycStatus.PENDING.value
    record.rejection_reason = None

    db.commit()
    db.refresh(record)
    return record


def set_kyc_status(
    db: Session, record: KycDocument, status: KycStatus, reason: Optional[str] = None
) -> KycDocument:
    record.status = status.value
    record.rejection_reason = reason if status == KycStatus.REJECTED else None
    record.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(record)
    return record

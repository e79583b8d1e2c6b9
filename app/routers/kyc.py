from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session
from typing import Optional
import logging
import os
import shutil

from dotenv import load_dotenv

from app.database import get_db
from app.crud import kyc as kyc_crud
from app.crud import tutor as tutor_crud
from app.crud import user as user_crud
from app.enums.tutor_profile import KycStatus
from app.exceptions import NotFound, ValidationError
from app.models.kyc import KYC_DOCUMENT_FIELDS
from app.models.user import User
from app.schemas.common import ActionResponse
from app.schemas.kyc import KycStatusResponse, KycDecision, KycDecisionResponse
from app.services.auth import get_current_user, get_current_admin
from app.services.notification_service import (
    NotificationService,
    get_notification_service,
)

load_dotenv()

router = APIRouter()
logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".pdf"}


def get_upload_dir() -> str:
    return os.getenv("KYC_UPLOAD_DIR", "uploads/kyc_docs")


def _store(upload: UploadFile, directory: str, field: str) -> str:
    extension = os.path.splitext(upload.filename or "")[1].lower()
    if extension not in ALLOWED_EXTENSIONS:
        raise ValidationError(f"{field} must be an image or PDF")

    filename = f"{field}{extension}"
    with open(os.path.join(directory, filename), "wb") as out:
        shutil.copyfileobj(upload.file, out)
    return filename


def _mirror_on_tutor(db: Session, user_id: int, status: KycStatus) -> None:
    tutor = tutor_crud.get_tutor_by_user(db, user_id)
    if tutor is None:
        return
    tutor.kyc_status = status.value
    tutor.is_verified = status == KycStatus.VERIFIED
    db.commit()


@router.post("/upload", response_model=ActionResponse)
def upload_documents(
    aadhaar_front: Optional[UploadFile] = File(None),
    aadhaar_back: Optional[UploadFile] = File(None),
    pan_card: Optional[UploadFile] = File(None),
    selfie: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    upload_dir: str = Depends(get_upload_dir),
):
    uploads = {
        "aadhaar_front": aadhaar_front,
        "aadhaar_back": aadhaar_back,
        "pan_card": pan_card,
        "selfie": selfie,
    }
    if any(uploads[field] is None for field in KYC_DOCUMENT_FIELDS):
        raise ValidationError("All documents are required")

    directory = os.path.join(upload_dir, str(current_user.id))
    os.makedirs(directory, exist_ok=True)
    filenames = {
        field: _store(uploads[field], directory, field) for field in KYC_DOCUMENT_FIELDS
    }

    kyc_crud.upsert_kyc_documents(db, current_user.id, filenames)
    _mirror_on_tutor(db, current_user.id, KycStatus.PENDING)
    logger.info(f"KYC documents uploaded by user {current_user.id}")

    return ActionResponse(message="Documents uploaded successfully. Awaiting approval.")


@router.get("/status", response_model=KycStatusResponse)
def read_status(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    record = kyc_crud.get_kyc_by_user(db, current_user.id)
    if record is None:
        return KycStatusResponse(status=KycStatus.NOT_STARTED.value)

    return KycStatusResponse(
        status=record.status,
        documents=[f"{current_user.id}/{name}" for name in record.documents],
        rejection_reason=record.rejection_reason,
    )


def _decide(
    db: Session,
    decision: KycDecision,
    status: KycStatus,
    notifications: NotificationService,
):
    record = kyc_crud.get_kyc_by_user(db, decision.user_id)
    if record is None:
        raise NotFound("KYC record not found")

    kyc_crud.set_kyc_status(db, record, status, decision.reason)
    _mirror_on_tutor(db, decision.user_id, status)
    logger.info(f"KYC for user {decision.user_id} set to {status.value}")

    user = user_crud.get_user(db, decision.user_id)
    if user is not None:
        notifications.kyc_decided(db, user, status.value, record.rejection_reason)


@router.post("/approve", response_model=KycDecisionResponse)
def approve(
    decision: KycDecision,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
    notifications: NotificationService = Depends(get_notification_service),
):
    _decide(db, decision, KycStatus.VERIFIED, notifications)
    return KycDecisionResponse(message="KYC approved", status=KycStatus.VERIFIED.value)


@router.post("/reject", response_model=KycDecisionResponse)
def reject(
    decision: KycDecision,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
    notifications: NotificationService = Depends(get_notification_service),
):
    _decide(db, decision, KycStatus.REJECTED, notifications)
    return KycDecisionResponse(message="KYC rejected", status=KycStatus.REJECTED.value)

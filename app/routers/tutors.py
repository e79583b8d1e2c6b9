from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional
import logging

from app.database import get_db
from app.crud import tutor as tutor_crud
from app.enums.tutor_profile import UserRole
from app.exceptions import NotFound, ValidationError
from app.models.user import User
from app.schemas.tutor import (
    TutorCreate,
    TutorUpdate,
    TutorPublic,
    TutorPrivate,
    TutorEnvelope,
    TutorPrivateEnvelope,
    TutorListResponse,
)
from app.services.auth import get_current_user
from app.utils.pagination import page_bounds, pagination_meta

router = APIRouter()
logger = logging.getLogger(__name__)


def _own_profile(db: Session, user: User):
    tutor = tutor_crud.get_tutor_by_user(db, user.id)
    if not tutor:
        raise NotFound("Tutor profile not found")
    return tutor


@router.post(
    "/profile", response_model=TutorPrivateEnvelope, status_code=status.HTTP_201_CREATED
)
def create_profile(
    profile: TutorCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Turns the caller into a tutor. One profile per account."""
    if tutor_crud.get_tutor_by_user(db, current_user.id):
        raise ValidationError("Tutor profile already exists")

    if profile.phone is None:
        profile.phone = current_user.phone
    tutor = tutor_crud.create_tutor(db, current_user.id, profile)

    if current_user.role == UserRole.STUDENT.value:
        current_user.role = UserRole.TUTOR.value
        db.commit()

    logger.info(f"Tutor profile {tutor.id} created for user {current_user.id}")
    return TutorPrivateEnvelope(
        data=TutorPrivate.model_validate(tutor), message="Tutor profile created"
    )


@router.put("/profile", response_model=TutorPrivateEnvelope)
def update_profile(
    profile: TutorUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    tutor = tutor_crud.update_tutor(db, _own_profile(db, current_user), profile)
    return TutorPrivateEnvelope(
        data=TutorPrivate.model_validate(tutor), message="Tutor profile updated"
    )


@router.get("/me", response_model=TutorPrivateEnvelope)
def read_my_profile(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return TutorPrivateEnvelope(
        data=TutorPrivate.model_validate(_own_profile(db, current_user))
    )


@router.get("/", response_model=TutorListResponse)
def search_tutors(
    city: Optional[str] = None,
    subject: Optional[str] = None,
    mode: Optional[str] = None,
    min_fee: Optional[float] = Query(None, ge=0),
    max_fee: Optional[float] = Query(None, ge=0),
    q: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    skip, limit = page_bounds(page, limit)
    tutors, total = tutor_crud.search_tutors(
        db,
        skip=skip,
        limit=limit,
        city=city,
        subject=subject,
        mode=mode,
        min_fee=min_fee,
        max_fee=max_fee,
        q=q,
    )
    return TutorListResponse(
        data=[TutorPublic.model_validate(t) for t in tutors],
        pagination=pagination_meta(page, limit, total),
    )


@router.get("/{tutor_id}", response_model=TutorEnvelope)
def read_tutor(tutor_id: int, db: Session = Depends(get_db)):
    tutor = tutor_crud.get_tutor(db, tutor_id)
    if not tutor or not tutor.is_active:
        raise NotFound("Tutor not found")
    return TutorEnvelope(data=TutorPublic.model_validate(tutor))

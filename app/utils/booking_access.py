from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from app.crud import tutor as tutor_crud
from app.exceptions import PermissionDenied


@dataclass(frozen=True)
class Identity:
    """Who is calling: the user id plus their tutor profile id, if any."""

    user_id: int
    role: str = "student"
    tutor_id: Optional[int] = None


@dataclass(frozen=True)
class BookingAccess:
    is_student: bool
    is_tutor: bool

    @property
    def is_party(self) -> bool:
        return self.is_student or self.is_tutor


def identity_for(db: Session, user) -> Identity:
    tutor = tutor_crud.get_tutor_by_user(db, user.id)
    return Identity(
        user_id=user.id,
        role=user.role,
        tutor_id=tutor.id if tutor else None,
    )


def authorize(caller: Identity, booking) -> BookingAccess:
    """Recomputed on every access from the booking's stored student/tutor ids."""
    return BookingAccess(
        is_student=caller.user_id == booking.student_id,
        is_tutor=caller.tutor_id is not None and caller.tutor_id == booking.tutor_id,
    )


def require_party(caller: Identity, booking, action: str = "view") -> BookingAccess:
    access = authorize(caller, booking)
    if not access.is_party:
        raise PermissionDenied(f"Not authorized to {action} this booking")
    return access


def require_tutor(caller: Identity, booking) -> BookingAccess:
    access = authorize(caller, booking)
    if not access.is_tutor:
        raise PermissionDenied("Not authorized to update this booking")
    return access

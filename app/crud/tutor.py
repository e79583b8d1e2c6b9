from sqlalchemy.orm import Session
from sqlalchemy import or_
from typing import List, Optional, Tuple

from app.models.tutor import Tutor
from app.schemas.tutor import TutorCreate, TutorUpdate


def get_tutor(db: Session, tutor_id: int) -> Optional[Tutor]:
    return db.query(Tutor).filter(Tutor.id == tutor_id).first()


def get_tutor_by_user(db: Session, user_id: int) -> Optional[Tutor]:
    return db.query(Tutor).filter(Tutor.user_id == user_id).first()


def create_tutor(db: Session, user_id: int, tutor: TutorCreate) -> Tutor:
    data = tutor.model_dump()
    data["mode"] = tutor.mode.value
    db_tutor = Tutor(user_id=user_id, **data)
    db.add(db_tutor)
    db.commit()
    db.refresh(db_tutor)
    return db_tutor


def update_tutor(db: Session, db_tutor: Tutor, tutor: TutorUpdate) -> Tutor:
    update_data = tutor.model_dump(exclude_unset=True)
    if update_data.get("mode") is not None:
        update_data["mode"] = update_data["mode"].value
    for field, value in update_data.items():
        setattr(db_tutor, field, value)

    db.commit()
    db.refresh(db_tutor)
    return db_tutor


def search_tutors(
    db: Session,
    skip: int = 0,
    limit: int = 10,
    city: Optional[str] = None,
    subject: Optional[str] = None,
    mode: Optional[str] = None,
    min_fee: Optional[float] = None,
    max_fee: Optional[float] = None,
    q: Optional[str] = None,
) -> Tuple[List[Tutor], int]:
    """Active tutors matching the filters, best rated first, plus the total count."""
    query = db.query(Tutor).filter(Tutor.is_active == True)

    if city:
        query = query.filter(Tutor.city.ilike(f"%{city}%"))
    if mode:
        query = query.filter(or_(Tutor.mode == mode, Tutor.mode == "both"))
    if min_fee is not None:
        query = query.filter(Tutor.fee_per_hour >= min_fee)
    if max_fee is not None:
        query = query.filter(Tutor.fee_per_hour <= max_fee)
    if q:
        query = query.filter(or_(Tutor.name.ilike(f"%{q}%"), Tutor.bio.ilike(f"%{q}%")))

    tutors = query.order_by(Tutor.rating.desc(), Tutor.id.asc()).all()

    # subjects is a JSON list, filtered in Python to stay portable across backends
    if subject:
        needle = subject.lower()
        tutors = [
            t for t in tutors if any(needle in s.lower() for s in (t.subjects or []))
        ]

    return tutors[skip : skip + limit], len(tutors)

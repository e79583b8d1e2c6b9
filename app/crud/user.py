from sqlalchemy.orm import Session
from typing import Optional

from app.models.user import User


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def create_user(
    db: Session,
    name: str,
    email: str,
    hashed_password: str,
    phone: Optional[str] = None,
    role: str = "student",
    is_admin: bool = False,
) -> User:
    db_user = User(
        name=name,
        email=email,
        phone=phone,
        hashed_password=hashed_password,
        role=role,
        is_admin=is_admin,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user

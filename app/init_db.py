from sqlalchemy.orm import Session
from app.models.user import User
from app.enums.tutor_profile import UserRole
from app.services.auth import get_password_hash
import logging
import os

logger = logging.getLogger(__name__)


def create_initial_admins(db: Session):
    """
    Seeds the platform admin when the users table is empty.
    """
    if db.query(User).count() > 0:
        logger.info("Users already exist, skipping initial admin.")
        return

    users_data = [
        {
            "name": os.getenv("ADMIN_NAME", "TutorMitra Admin"),
            "email": os.getenv("ADMIN_EMAIL", "admin@tutormitra.com"),
            "password": os.getenv("ADMIN_PASSWORD", "change.me.Admin1"),
        },
    ]

    for user in users_data:
        db_user = User(
            name=user["name"],
            email=user["email"],
            phone=None,
            hashed_password=get_password_hash(user["password"]),
            role=UserRole.ADMIN.value,
            is_admin=True,
            is_active=True,
        )
        db.add(db_user)
        logger.info(f"Admin created: {user['email']}")

    db.commit()

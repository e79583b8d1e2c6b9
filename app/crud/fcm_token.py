from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime
import logging

from app.models.fcm_token import FCMToken
from app.schemas.fcm_token import FCMTokenCreate

logger = logging.getLogger(__name__)


def _preview(token: str) -> str:
    return f"{token[:20]}...{token[-10:]}" if len(token) > 30 else token


def create_fcm_token(db: Session, token_data: FCMTokenCreate, user_id: int) -> FCMToken:
    """Registers a device token; a token seen before is re-assigned to this user."""
    existing_token = db.query(FCMToken).filter(FCMToken.token == token_data.token).first()

    if existing_token:
        if existing_token.user_id != user_id:
            logger.info(
                f"🔄 [PUSH] Token moved from user {existing_token.user_id} to user {user_id} | "
                f"Token: {_preview(token_data.token)}"
            )
        existing_token.user_id = user_id
        existing_token.device_type = token_data.device_type
        existing_token.is_active = True
        existing_token.last_seen_at = datetime.utcnow()
        existing_token.deactivated_at = None
        db.commit()
        db.refresh(existing_token)
        return existing_token

    db_token = FCMToken(
        user_id=user_id,
        token=token_data.token,
        device_type=token_data.device_type,
        is_active=True,
    )
    db.add(db_token)
    db.commit()
    db.refresh(db_token)
    logger.info(
        f"✅ [PUSH] Token registered - user {user_id} | "
        f"Device: {token_data.device_type or 'unknown'} | Token: {_preview(token_data.token)}"
    )
    return db_token


def get_user_fcm_tokens(db: Session, user_id: int, active_only: bool = True) -> List[FCMToken]:
    query = db.query(FCMToken).filter(FCMToken.user_id == user_id)
    if active_only:
        query = query.filter(FCMToken.is_active == True)
    return query.all()


def get_user_token(db: Session, token_id: int, user_id: int) -> Optional[FCMToken]:
    return (
        db.query(FCMToken)
        .filter(FCMToken.id == token_id, FCMToken.user_id == user_id)
        .first()
    )


def delete_fcm_token(db: Session, db_token: FCMToken) -> None:
    db.delete(db_token)
    db.commit()


def deactivate_tokens(db: Session, tokens: List[str]) -> int:
    """Turns off tokens FCM reported as unregistered/invalid."""
    if not tokens:
        return 0
    updated = (
        db.query(FCMToken)
        .filter(FCMToken.token.in_(tokens))
        .update(
            {"is_active": False, "deactivated_at": datetime.utcnow()},
            synchronize_session=False,
        )
    )
    db.commit()
    return updated


def get_active_tokens_for_users(db: Session, user_ids: List[int]) -> List[str]:
    tokens = db.query(FCMToken.token).filter(
        FCMToken.user_id.in_(user_ids),
        FCMToken.is_active == True
    ).all()

    return [token[0] for token in tokens]

# asset_inventory/core/sessions.py

import logging
import secrets
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from asset_inventory.core.config import settings
from asset_inventory.models.users import User, UserSession

logger = logging.getLogger("app")


# Expiry columns hold naive UTC
def create_session(db: Session, user: User, expires_delta: timedelta | None = None) -> UserSession:
    expire = datetime.now(timezone.utc).replace(tzinfo=None) + (
        expires_delta or timedelta(hours=settings.SESSION_EXPIRE_HOURS)
    )

    user_session = UserSession(
        id=secrets.token_urlsafe(32),
        user_id=user.id,
        expires_at=expire,
    )
    db.add(user_session)
    db.commit()
    db.refresh(user_session)

    return user_session


def resolve_session(db: Session, session_id: str) -> User | None:
    """Return the active user owning ``session_id``.

    Expired sessions are deleted as they are found; unknown tokens and
    deactivated users yield ``None``.
    """
    row = (
        db.query(UserSession, User)
        .join(User, UserSession.user_id == User.id)
        .filter(
            UserSession.id == session_id,
            User.is_active == True,
        )
        .first()
    )

    if row is None:
        return None

    user_session, user = row

    if user_session.expires_at < datetime.now(timezone.utc).replace(tzinfo=None):
        db.delete(user_session)
        db.commit()
        logger.info(f"Expired session removed for user {user.username}")
        return None

    return user


def revoke_session(db: Session, session_id: str) -> None:
    db.query(UserSession).filter(UserSession.id == session_id).delete()
    db.commit()

# asset_inventory/core/bootstrap.py

import logging

from sqlalchemy.orm import Session

from asset_inventory.core.config import settings
from asset_inventory.core.hashing import hash_password
from asset_inventory.models.users import User, UserRole

logger = logging.getLogger("app")


def ensure_default_admin(db: Session) -> User:
    """Create the bootstrap admin account unless it already exists."""
    user = (
        db.query(User)
        .filter(User.username == settings.DEFAULT_ADMIN_USERNAME)
        .first()
    )

    if user:
        return user

    user = User(
        username=settings.DEFAULT_ADMIN_USERNAME,
        password_hash=hash_password(settings.DEFAULT_ADMIN_PASSWORD),
        role=UserRole.ADMIN,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info(f"Default admin user '{user.username}' created")

    return user

import logging

from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy.orm import Session

from asset_inventory.database import get_db
from asset_inventory.models.users import User
from asset_inventory.schemas.user import (
    UserLogin,
    LoginResponse,
    SessionInput,
    SessionValidationResponse,
)
from asset_inventory.core.hashing import verify_password
from asset_inventory.core.sessions import create_session, resolve_session, revoke_session
from asset_inventory.core.rate_limiter import limiter
from asset_inventory.core.config import settings

router = APIRouter(prefix="/auth", tags=["Authentication"])

logger = logging.getLogger("app")


# ---------------- LOGIN ----------------
@router.post("/login", response_model=LoginResponse)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
def login(
    request: Request,
    credentials: UserLogin,
    db: Session = Depends(get_db),
):
    user = (
        db.query(User)
        .filter(
            User.username == credentials.username,
            User.is_active == True,
        )
        .first()
    )

    if not user or not verify_password(credentials.password, user.password_hash):
        logger.warning(f"Failed login attempt for '{credentials.username}'")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )

    user_session = create_session(db, user)

    return {
        "success": True,
        "session_id": user_session.id,
        "expires_at": user_session.expires_at,
        "user": user,
    }


# ---------------- LOGOUT ----------------
@router.post("/logout")
def logout(session_data: SessionInput, db: Session = Depends(get_db)):
    revoke_session(db, session_data.session_id)
    return {"success": True}


# ---------------- VALIDATE SESSION ----------------
@router.post("/validate-session", response_model=SessionValidationResponse)
def validate_session(session_data: SessionInput, db: Session = Depends(get_db)):
    return {"user": resolve_session(db, session_data.session_id)}

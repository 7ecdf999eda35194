# asset_inventory/routers/users.py

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from asset_inventory.database import get_db
from asset_inventory.core.auth import get_admin_user
from asset_inventory.core.config import settings
from asset_inventory.core.hashing import hash_password
from asset_inventory.models.users import User, UserSession
from asset_inventory.schemas.common import DeleteResponse
from asset_inventory.schemas.user import UserCreate, UserResponse


router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=list[UserResponse])
def list_users(
    db: Session = Depends(get_db),
    admin=Depends(get_admin_user),
):
    return db.query(User).order_by(User.id).all()


@router.get("/{user_id}", response_model=Optional[UserResponse])
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    admin=Depends(get_admin_user),
):
    return db.query(User).filter(User.id == user_id).first()


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    user_data: UserCreate,
    db: Session = Depends(get_db),
    admin=Depends(get_admin_user),
):
    if db.query(User).filter(User.username == user_data.username).first():
        raise HTTPException(status_code=409, detail="Username already exists")

    user = User(
        username=user_data.username,
        password_hash=hash_password(user_data.password),
        role=user_data.role,
        is_active=True,
    )

    try:
        db.add(user)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise HTTPException(status_code=500, detail="Unable to create user")

    db.refresh(user)
    return user


@router.delete("/{user_id}", response_model=DeleteResponse)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    admin=Depends(get_admin_user),
):
    user = db.query(User).filter(User.id == user_id).first()

    if not user:
        return {"success": False}

    if user.username == settings.DEFAULT_ADMIN_USERNAME:
        raise HTTPException(status_code=400, detail="Cannot delete the admin user")

    try:
        # Sessions reference the user and go first
        db.query(UserSession).filter(UserSession.user_id == user.id).delete()
        db.delete(user)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise HTTPException(status_code=500, detail="Unable to delete user")

    return {"success": True}

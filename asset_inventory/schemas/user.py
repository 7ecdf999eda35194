from pydantic import BaseModel, Field
from datetime import datetime

from asset_inventory.models.users import UserRole


class UserCreate(BaseModel):
    username: str = Field(..., min_length=1, description="Username is required")
    password: str = Field(..., min_length=6, max_length=128, description="Plain password (will be hashed). Minimum 6 characters.")
    role: UserRole = UserRole.USER


class UserResponse(BaseModel):
    id: int
    username: str
    role: UserRole
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class UserLogin(BaseModel):
    username: str = Field(..., min_length=1, description="Username is required")
    password: str = Field(..., min_length=1, description="Password is required")


class LoginResponse(BaseModel):
    success: bool
    session_id: str
    expires_at: datetime
    user: UserResponse


class SessionInput(BaseModel):
    session_id: str


class SessionValidationResponse(BaseModel):
    user: UserResponse | None

from pydantic import BaseModel, Field
from datetime import datetime


class LocationCreate(BaseModel):
    name: str = Field(..., min_length=1, description="Location name is required")
    branch_code: str = Field(..., min_length=1, description="Branch code is required")
    address: str | None = None


# Omitted fields are left untouched; only address may be cleared with null
class LocationUpdate(BaseModel):
    name: str = Field(None, min_length=1)
    branch_code: str = Field(None, min_length=1)
    address: str | None = None


class LocationResponse(BaseModel):
    id: int
    name: str
    branch_code: str
    address: str | None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

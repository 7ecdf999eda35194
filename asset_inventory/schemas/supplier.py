from pydantic import BaseModel, Field
from datetime import datetime


class SupplierCreate(BaseModel):
    name: str = Field(..., min_length=1, description="Supplier name is required")
    contact_person: str | None = None
    phone_number: str | None = None
    address: str | None = None


class SupplierUpdate(BaseModel):
    name: str = Field(None, min_length=1)
    contact_person: str | None = None
    phone_number: str | None = None
    address: str | None = None


class SupplierResponse(BaseModel):
    id: int
    name: str
    contact_person: str | None
    phone_number: str | None
    address: str | None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

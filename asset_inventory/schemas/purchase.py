from decimal import Decimal
from pydantic import BaseModel, Field
from datetime import datetime


class PurchaseCreate(BaseModel):
    item_id: int
    supplier_id: int
    quantity: int = Field(..., gt=0)

    unit_price: Decimal = Field(
        ...,
        gt=0,
        lt=10_000_000_000,
        decimal_places=2,
        description="Unit price must be positive",
    )

    purchase_date: datetime
    notes: str | None = None


class PurchaseUpdate(BaseModel):
    item_id: int = None
    supplier_id: int = None
    quantity: int = Field(None, gt=0)
    unit_price: Decimal = Field(None, gt=0, lt=10_000_000_000, decimal_places=2)
    purchase_date: datetime = None
    notes: str | None = None


class PurchaseResponse(BaseModel):
    id: int
    item_id: int
    supplier_id: int
    quantity: int
    unit_price: float
    total_price: float
    purchase_date: datetime
    notes: str | None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

from decimal import Decimal
from pydantic import BaseModel, Field
from datetime import datetime

from asset_inventory.models.inventory import ItemCondition


class InventoryItemCreate(BaseModel):
    item_code: str = Field(..., min_length=1, description="Item code is required")
    name: str = Field(..., min_length=1, description="Item name is required")
    description: str | None = None
    category_id: int
    location_id: int
    condition: ItemCondition
    quantity: int = Field(..., ge=0)

    purchase_price: Decimal = Field(
        ...,
        ge=0,
        lt=10_000_000_000,
        decimal_places=2,
        description="Purchase price must be non-negative",
    )

    purchase_date: datetime


class InventoryItemUpdate(BaseModel):
    item_code: str = Field(None, min_length=1)
    name: str = Field(None, min_length=1)
    description: str | None = None
    category_id: int = None
    location_id: int = None
    condition: ItemCondition = None
    quantity: int = Field(None, ge=0)
    purchase_price: Decimal = Field(None, ge=0, lt=10_000_000_000, decimal_places=2)
    purchase_date: datetime = None


class InventoryItemResponse(BaseModel):
    id: int
    item_code: str
    name: str
    description: str | None
    category_id: int
    location_id: int
    condition: ItemCondition
    quantity: int
    purchase_price: float
    purchase_date: datetime
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class BatchImportItem(BaseModel):
    item_code: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: str | None = None
    category_name: str = Field(..., min_length=1)
    location_name: str = Field(..., min_length=1)
    condition: ItemCondition
    quantity: int = Field(..., ge=0)
    purchase_price: Decimal = Field(..., ge=0, lt=10_000_000_000, decimal_places=2)
    purchase_date: datetime


class BatchImportInput(BaseModel):
    items: list[BatchImportItem]


class BatchImportTsvInput(BaseModel):
    data: str = Field(..., description="Tab-separated rows, one item per line")


class BatchImportResponse(BaseModel):
    success: int
    errors: list[str]

# schemas/report.py

from pydantic import BaseModel
from typing import Dict


class InventorySummaryResponse(BaseModel):
    total_items: int
    total_value: float
    items_by_category: Dict[str, int]
    items_by_location: Dict[str, int]
    items_by_condition: Dict[str, int]


class PurchaseBucket(BaseModel):
    count: int
    amount: float


class PurchaseSummaryResponse(BaseModel):
    total_purchases: int
    total_amount: float
    purchases_by_supplier: Dict[str, PurchaseBucket]
    purchases_by_month: Dict[str, PurchaseBucket]

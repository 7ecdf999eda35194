# =========================================================
# REPORTS ROUTER
#
# Filtered listings and summaries over inventory, purchases
# and transfers. Date filters are whole days: date_from starts
# at midnight, date_to runs to the end of that day.
#
# Summaries use Decimal internally and are returned as floats.
# =========================================================

from fastapi import APIRouter, Depends, Query
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from asset_inventory.database import get_db
from asset_inventory.core.auth import get_current_user
from asset_inventory.models.inventory import InventoryItem, ItemCondition
from asset_inventory.models.location_history import LocationHistory, TransferStatus
from asset_inventory.models.purchases import Purchase
from asset_inventory.schemas.inventory import InventoryItemResponse
from asset_inventory.schemas.location_history import LocationHistoryResponse
from asset_inventory.schemas.purchase import PurchaseResponse
from asset_inventory.schemas.report import (
    InventorySummaryResponse,
    PurchaseSummaryResponse,
)

router = APIRouter(prefix="/reports", tags=["Reports"])


def _apply_date_range(query, column, date_from: Optional[date], date_to: Optional[date]):
    if date_from:
        query = query.filter(column >= datetime.combine(date_from, datetime.min.time()))

    if date_to:
        query = query.filter(column <= datetime.combine(date_to, datetime.max.time()))

    return query


# =========================================================
# CORE INVENTORY QUERY
# =========================================================
def inventory_query(
    db: Session,
    category_id: Optional[int],
    location_id: Optional[int],
    condition: Optional[ItemCondition],
    date_from: Optional[date],
    date_to: Optional[date],
):
    query = db.query(InventoryItem)

    if category_id is not None:
        query = query.filter(InventoryItem.category_id == category_id)

    if location_id is not None:
        query = query.filter(InventoryItem.location_id == location_id)

    if condition is not None:
        query = query.filter(InventoryItem.condition == condition)

    query = _apply_date_range(query, InventoryItem.purchase_date, date_from, date_to)

    return query.order_by(InventoryItem.id)


# =========================================================
# CORE PURCHASE QUERY
# =========================================================
def purchase_query(
    db: Session,
    supplier_id: Optional[int],
    date_from: Optional[date],
    date_to: Optional[date],
):
    query = db.query(Purchase)

    if supplier_id is not None:
        query = query.filter(Purchase.supplier_id == supplier_id)

    query = _apply_date_range(query, Purchase.purchase_date, date_from, date_to)

    return query.order_by(Purchase.purchase_date, Purchase.id)


# =========================================================
# INVENTORY REPORT
# =========================================================
@router.get("/inventory", response_model=list[InventoryItemResponse])
def inventory_report(
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
    category_id: Optional[int] = Query(None),
    location_id: Optional[int] = Query(None),
    condition: Optional[ItemCondition] = Query(None),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
):
    return inventory_query(db, category_id, location_id, condition, date_from, date_to).all()


# =========================================================
# INVENTORY SUMMARY
# =========================================================
@router.get("/inventory/summary", response_model=InventorySummaryResponse)
def inventory_summary(
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
    category_id: Optional[int] = Query(None),
    location_id: Optional[int] = Query(None),
    condition: Optional[ItemCondition] = Query(None),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
):
    items = (
        inventory_query(db, category_id, location_id, condition, date_from, date_to)
        .options(joinedload(InventoryItem.category), joinedload(InventoryItem.location))
        .all()
    )

    return summarize_inventory(items)


def summarize_inventory(items: list[InventoryItem]) -> dict:
    total_items = 0
    total_value = Decimal("0.00")
    items_by_category: dict[str, int] = {}
    items_by_location: dict[str, int] = {}
    items_by_condition: dict[str, int] = {}

    for item in items:
        total_items += item.quantity
        total_value += Decimal(item.purchase_price) * item.quantity

        category_name = item.category.name
        location_name = item.location.name
        condition_name = item.condition.value

        items_by_category[category_name] = items_by_category.get(category_name, 0) + item.quantity
        items_by_location[location_name] = items_by_location.get(location_name, 0) + item.quantity
        items_by_condition[condition_name] = items_by_condition.get(condition_name, 0) + item.quantity

    return {
        "total_items": total_items,
        "total_value": float(total_value),
        "items_by_category": items_by_category,
        "items_by_location": items_by_location,
        "items_by_condition": items_by_condition,
    }


# =========================================================
# PURCHASE REPORT
# =========================================================
@router.get("/purchases", response_model=list[PurchaseResponse])
def purchase_report(
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
    supplier_id: Optional[int] = Query(None),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
):
    return purchase_query(db, supplier_id, date_from, date_to).all()


# =========================================================
# PURCHASE SUMMARY (BY SUPPLIER / BY MONTH)
# =========================================================
@router.get("/purchases/summary", response_model=PurchaseSummaryResponse)
def purchase_summary(
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
    supplier_id: Optional[int] = Query(None),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
):
    purchases = (
        purchase_query(db, supplier_id, date_from, date_to)
        .options(joinedload(Purchase.supplier))
        .all()
    )

    return summarize_purchases(purchases)


def summarize_purchases(purchases: list[Purchase]) -> dict:
    total_amount = Decimal("0.00")
    by_supplier: dict[str, dict] = {}
    by_month: dict[str, dict] = {}

    for purchase in purchases:
        amount = Decimal(purchase.total_price)
        total_amount += amount

        supplier_bucket = by_supplier.setdefault(
            purchase.supplier.name, {"count": 0, "amount": Decimal("0.00")}
        )
        supplier_bucket["count"] += 1
        supplier_bucket["amount"] += amount

        month_bucket = by_month.setdefault(
            purchase.purchase_date.strftime("%Y-%m"), {"count": 0, "amount": Decimal("0.00")}
        )
        month_bucket["count"] += 1
        month_bucket["amount"] += amount

    def _as_float(buckets: dict[str, dict]):
        return {
            key: {"count": bucket["count"], "amount": float(bucket["amount"])}
            for key, bucket in buckets.items()
        }

    return {
        "total_purchases": len(purchases),
        "total_amount": float(total_amount),
        "purchases_by_supplier": _as_float(by_supplier),
        "purchases_by_month": _as_float(by_month),
    }


# =========================================================
# LOCATION HISTORY REPORT
# =========================================================
@router.get("/location-history", response_model=list[LocationHistoryResponse])
def location_history_report(
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
    item_id: Optional[int] = Query(None),
    location_id: Optional[int] = Query(None),
    status: Optional[TransferStatus] = Query(None),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
):
    query = db.query(LocationHistory)

    if item_id is not None:
        query = query.filter(LocationHistory.item_id == item_id)

    # Either end of the transfer counts
    if location_id is not None:
        query = query.filter(
            or_(
                LocationHistory.from_location_id == location_id,
                LocationHistory.to_location_id == location_id,
            )
        )

    if status is not None:
        query = query.filter(LocationHistory.status == status)

    query = _apply_date_range(query, LocationHistory.transfer_date, date_from, date_to)

    return query.order_by(LocationHistory.transfer_date.desc(), LocationHistory.id.desc()).all()

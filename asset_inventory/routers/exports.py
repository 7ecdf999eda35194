from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session, joinedload
from datetime import date
from decimal import Decimal
from io import BytesIO
from typing import Optional

from openpyxl import Workbook
from fastapi.responses import StreamingResponse

from asset_inventory.database import get_db
from asset_inventory.core.auth import get_current_user
from asset_inventory.core.rate_limiter import limiter
from asset_inventory.models.inventory import InventoryItem, ItemCondition
from asset_inventory.models.purchases import Purchase
from asset_inventory.routers.reports import (
    inventory_query,
    purchase_query,
    summarize_inventory,
    summarize_purchases,
)

router = APIRouter(prefix="/exports", tags=["Exports"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


# =========================================================
# EXPORT ROUTES
# =========================================================

@router.get("/inventory")
@limiter.limit("10/minute")
def export_inventory(
    request: Request,
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

    workbook = _build_inventory_workbook(items)
    return _workbook_response(workbook, f"inventory_{date.today()}.xlsx")


@router.get("/purchases")
@limiter.limit("10/minute")
def export_purchases(
    request: Request,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
    supplier_id: Optional[int] = Query(None),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
):
    purchases = (
        purchase_query(db, supplier_id, date_from, date_to)
        .options(joinedload(Purchase.item), joinedload(Purchase.supplier))
        .all()
    )

    workbook = _build_purchase_workbook(purchases)
    return _workbook_response(workbook, f"purchases_{date.today()}.xlsx")


# =========================================================
# EXCEL BUILDERS
# =========================================================
def _build_inventory_workbook(items: list[InventoryItem]) -> Workbook:
    workbook = Workbook()

    # =======================
    # SHEET 1 - ITEMS
    # =======================
    sheet = workbook.active
    sheet.title = "Inventory"

    sheet.append([
        "Item Code",
        "Name",
        "Category",
        "Location",
        "Condition",
        "Quantity",
        "Purchase Price",
        "Line Value",
        "Purchase Date",
    ])

    for item in items:
        price = Decimal(item.purchase_price)
        sheet.append([
            item.item_code,
            item.name,
            item.category.name,
            item.location.name,
            item.condition.value,
            item.quantity,
            float(price),
            float(price * item.quantity),
            item.purchase_date.strftime("%Y-%m-%d"),
        ])

    # =======================
    # SHEET 2 - SUMMARY
    # =======================
    summary = summarize_inventory(items)
    sheet = workbook.create_sheet(title="Summary")

    sheet.append(["Total Items", summary["total_items"]])
    sheet.append(["Total Value", summary["total_value"]])

    for heading, key in (
        ("Category", "items_by_category"),
        ("Location", "items_by_location"),
        ("Condition", "items_by_condition"),
    ):
        sheet.append([])
        sheet.append([heading, "Quantity"])
        for name, quantity in summary[key].items():
            sheet.append([name, quantity])

    return workbook


def _build_purchase_workbook(purchases: list[Purchase]) -> Workbook:
    workbook = Workbook()

    sheet = workbook.active
    sheet.title = "Purchases"

    sheet.append([
        "Date",
        "Purchase ID",
        "Item Code",
        "Item",
        "Supplier",
        "Quantity",
        "Unit Price",
        "Total Price",
    ])

    for purchase in purchases:
        sheet.append([
            purchase.purchase_date.strftime("%Y-%m-%d"),
            purchase.id,
            purchase.item.item_code,
            purchase.item.name,
            purchase.supplier.name,
            purchase.quantity,
            float(purchase.unit_price),
            float(purchase.total_price),
        ])

    summary = summarize_purchases(purchases)
    sheet = workbook.create_sheet(title="Summary")

    sheet.append(["Total Purchases", summary["total_purchases"]])
    sheet.append(["Total Amount", summary["total_amount"]])

    for heading, key in (
        ("Supplier", "purchases_by_supplier"),
        ("Month", "purchases_by_month"),
    ):
        sheet.append([])
        sheet.append([heading, "Count", "Amount"])
        for name, bucket in summary[key].items():
            sheet.append([name, bucket["count"], bucket["amount"]])

    return workbook


# =======================
# RETURN FILE
# =======================
def _workbook_response(workbook: Workbook, filename: str) -> StreamingResponse:
    output = BytesIO()
    workbook.save(output)
    output.seek(0)

    return StreamingResponse(
        output,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

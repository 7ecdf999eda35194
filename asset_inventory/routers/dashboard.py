# asset_inventory/routers/dashboard.py

from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from asset_inventory.database import get_db
from asset_inventory.core.auth import get_current_user
from asset_inventory.models.categories import Category
from asset_inventory.models.inventory import InventoryItem
from asset_inventory.models.location_history import LocationHistory
from asset_inventory.models.locations import Location
from asset_inventory.models.purchases import Purchase
from asset_inventory.models.suppliers import Supplier
from asset_inventory.schemas.dashboard import DashboardStatsResponse

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])

RECENT_ACTIVITY_DAYS = 30


@router.get("/stats", response_model=DashboardStatsResponse)
def dashboard_stats(
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    recent_start = now - timedelta(days=RECENT_ACTIVITY_DAYS)

    total_items = db.query(func.count(InventoryItem.id)).scalar()
    total_categories = db.query(func.count(Category.id)).scalar()
    total_locations = db.query(func.count(Location.id)).scalar()
    total_suppliers = db.query(func.count(Supplier.id)).scalar()

    recent_purchases = (
        db.query(func.count(Purchase.id))
        .filter(Purchase.created_at >= recent_start)
        .scalar()
    )

    recent_transfers = (
        db.query(func.count(LocationHistory.id))
        .filter(LocationHistory.created_at >= recent_start)
        .scalar()
    )

    condition_rows = (
        db.query(InventoryItem.condition, func.count(InventoryItem.id))
        .group_by(InventoryItem.condition)
        .all()
    )

    location_rows = (
        db.query(Location.name, func.count(InventoryItem.id))
        .join(InventoryItem, InventoryItem.location_id == Location.id)
        .group_by(Location.id, Location.name)
        .all()
    )

    items_by_location: dict[str, int] = {}
    for name, count in location_rows:
        # Locations may share a name
        items_by_location[name] = items_by_location.get(name, 0) + count

    return {
        "total_items": total_items,
        "total_categories": total_categories,
        "total_locations": total_locations,
        "total_suppliers": total_suppliers,
        "recent_purchases": recent_purchases,
        "items_by_condition": {condition.value: count for condition, count in condition_rows},
        "items_by_location": items_by_location,
        "recent_transfers": recent_transfers,
    }

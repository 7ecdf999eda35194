# asset_inventory/routers/inventory.py

import logging
import re
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import ValidationError
from sqlalchemy import func
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from asset_inventory.database import get_db
from asset_inventory.core.auth import get_current_user
from asset_inventory.models.categories import Category
from asset_inventory.models.inventory import InventoryItem
from asset_inventory.models.locations import Location
from asset_inventory.schemas.common import DeleteResponse
from asset_inventory.schemas.inventory import (
    BatchImportInput,
    BatchImportItem,
    BatchImportResponse,
    BatchImportTsvInput,
    InventoryItemCreate,
    InventoryItemUpdate,
    InventoryItemResponse,
)
from asset_inventory.utils.tsv_import import parse_tsv_rows

router = APIRouter(
    prefix="/inventory",
    tags=["Inventory"],
)

logger = logging.getLogger("app")


def _ensure_category_exists(db: Session, category_id: int):
    if not db.query(Category).filter(Category.id == category_id).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Category with ID {category_id} does not exist",
        )


def _ensure_location_exists(db: Session, location_id: int):
    if not db.query(Location).filter(Location.id == location_id).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Location with ID {location_id} does not exist",
        )


def _ensure_code_available(db: Session, item_code: str, item_id: int | None = None):
    query = db.query(InventoryItem).filter(InventoryItem.item_code == item_code)
    if item_id is not None:
        query = query.filter(InventoryItem.id != item_id)

    if query.first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Item code {item_code} already exists",
        )


@router.get("", response_model=list[InventoryItemResponse])
def list_inventory(
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return db.query(InventoryItem).order_by(InventoryItem.id).all()


@router.get("/by-code/{item_code}", response_model=Optional[InventoryItemResponse])
def get_inventory_item_by_code(
    item_code: str,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return db.query(InventoryItem).filter(InventoryItem.item_code == item_code).first()


@router.get("/{item_id}", response_model=Optional[InventoryItemResponse])
def get_inventory_item(
    item_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return db.query(InventoryItem).filter(InventoryItem.id == item_id).first()


@router.post("", response_model=InventoryItemResponse, status_code=201)
def create_inventory_item(
    item_data: InventoryItemCreate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    _ensure_category_exists(db, item_data.category_id)
    _ensure_location_exists(db, item_data.location_id)
    _ensure_code_available(db, item_data.item_code)

    item = InventoryItem(**item_data.model_dump())

    try:
        db.add(item)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise HTTPException(status_code=500, detail="Unable to create inventory item")

    db.refresh(item)
    return item


@router.put("/{item_id}", response_model=InventoryItemResponse)
def update_inventory_item(
    item_id: int,
    item_data: InventoryItemUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    item = db.query(InventoryItem).filter(InventoryItem.id == item_id).first()

    if not item:
        raise HTTPException(
            status_code=404,
            detail=f"Inventory item with ID {item_id} does not exist",
        )

    update_data = item_data.model_dump(exclude_unset=True)

    if "category_id" in update_data:
        _ensure_category_exists(db, update_data["category_id"])

    if "location_id" in update_data:
        _ensure_location_exists(db, update_data["location_id"])

    if "item_code" in update_data:
        _ensure_code_available(db, update_data["item_code"], item_id=item.id)

    for field, value in update_data.items():
        setattr(item, field, value)

    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise HTTPException(status_code=500, detail="Unable to update inventory item")

    db.refresh(item)
    return item


@router.delete("/{item_id}", response_model=DeleteResponse)
def delete_inventory_item(
    item_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    item = db.query(InventoryItem).filter(InventoryItem.id == item_id).first()

    if not item:
        return {"success": False}

    try:
        db.delete(item)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Cannot delete inventory item: it has purchases or transfers",
        )

    return {"success": True}


# =========================================================
# BATCH IMPORT
# =========================================================
def _generate_branch_code(db: Session, location_name: str) -> str:
    prefix = re.sub(r"[^A-Za-z0-9]", "", location_name)[:3].upper() or "LOC"

    taken = (
        db.query(func.count(Location.id))
        .filter(Location.branch_code.like(f"{prefix}%"))
        .scalar()
    )

    # Codes may have been entered by hand or freed by deletes
    sequence = taken + 1
    while db.query(Location.id).filter(Location.branch_code == f"{prefix}{sequence:02d}").first():
        sequence += 1

    return f"{prefix}{sequence:02d}"


def _import_items(db: Session, rows: list[tuple[int, BatchImportItem | None, str | None, str]]):
    """Insert each parsed row on its own commit.

    ``rows`` holds ``(number, item, parse_error, item_code)``. Categories
    and locations are matched by case-insensitive name and created on
    first use; a failing row is rolled back and reported without
    touching rows already imported.
    """
    category_ids = {
        name.lower(): category_id
        for category_id, name in db.query(Category.id, Category.name).all()
    }
    location_ids = {
        name.lower(): location_id
        for location_id, name in db.query(Location.id, Location.name).all()
    }

    success_count = 0
    errors: list[str] = []

    for number, item, parse_error, item_code in rows:
        if parse_error:
            errors.append(f"Item {number} ({item_code}): {parse_error}")
            continue

        try:
            category_id = category_ids.get(item.category_name.lower())
            if category_id is None:
                category = Category(name=item.category_name, description=None)
                db.add(category)
                db.commit()
                category_id = category.id
                category_ids[item.category_name.lower()] = category_id

            location_id = location_ids.get(item.location_name.lower())
            if location_id is None:
                location = Location(
                    name=item.location_name,
                    branch_code=_generate_branch_code(db, item.location_name),
                    address=None,
                )
                db.add(location)
                db.commit()
                location_id = location.id
                location_ids[item.location_name.lower()] = location_id

            if db.query(InventoryItem).filter(InventoryItem.item_code == item.item_code).first():
                errors.append(f"Item {number} ({item.item_code}): Item code {item.item_code} already exists")
                continue

            db.add(
                InventoryItem(
                    item_code=item.item_code,
                    name=item.name,
                    description=item.description,
                    category_id=category_id,
                    location_id=location_id,
                    condition=item.condition,
                    quantity=item.quantity,
                    purchase_price=item.purchase_price,
                    purchase_date=item.purchase_date,
                )
            )
            db.commit()
            success_count += 1

        except SQLAlchemyError as exc:
            db.rollback()
            logger.warning(f"Batch import row {number} ({item.item_code}) failed: {exc}")
            # Report the driver's message, not SQLAlchemy's wrapper text
            reason = getattr(exc, "orig", None) or exc
            errors.append(f"Item {number} ({item.item_code}): {reason}")

    logger.info(f"Batch import finished: {success_count} imported, {len(errors)} failed")

    return {"success": success_count, "errors": errors}


@router.post("/batch-import", response_model=BatchImportResponse)
def batch_import_items(
    batch_data: BatchImportInput,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    rows = [
        (number, item, None, item.item_code)
        for number, item in enumerate(batch_data.items, start=1)
    ]
    return _import_items(db, rows)


@router.post("/batch-import/tsv", response_model=BatchImportResponse)
def batch_import_tsv(
    batch_data: BatchImportTsvInput,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    rows = []

    for parsed in parse_tsv_rows(batch_data.data):
        if parsed.error:
            rows.append((parsed.number, None, parsed.error, parsed.item_code))
            continue

        try:
            item = BatchImportItem(**parsed.values)
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                for error in exc.errors()
            )
            rows.append((parsed.number, None, problems, parsed.item_code))
            continue

        rows.append((parsed.number, item, None, item.item_code))

    return _import_items(db, rows)

# =========================================================
# LOCATION HISTORY ROUTER
#
# A transfer moves one inventory item between locations.
# Setting a transfer's status to "completed" (on create or
# update) moves the item to the transfer's destination in the
# same commit. Statuses may be changed in any order.
# =========================================================

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from asset_inventory.database import get_db
from asset_inventory.core.auth import get_current_user
from asset_inventory.models.inventory import InventoryItem
from asset_inventory.models.location_history import LocationHistory, TransferStatus
from asset_inventory.models.locations import Location
from asset_inventory.schemas.common import DeleteResponse
from asset_inventory.schemas.location_history import (
    LocationHistoryCreate,
    LocationHistoryUpdate,
    LocationHistoryResponse,
)

router = APIRouter(prefix="/location-history", tags=["Location History"])

logger = logging.getLogger("app")


def _ensure_location_exists(db: Session, location_id: int):
    if not db.query(Location).filter(Location.id == location_id).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Location with ID {location_id} does not exist",
        )


def _apply_completed_transfer(db: Session, transfer: LocationHistory):
    item = db.query(InventoryItem).filter(InventoryItem.id == transfer.item_id).first()

    if item:
        item.location_id = transfer.to_location_id
        logger.info(
            f"Transfer completed: item {item.item_code} moved to location {transfer.to_location_id}"
        )


# =========================================================
# LIST / GET
# =========================================================
@router.get("", response_model=list[LocationHistoryResponse])
def list_location_history(
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return (
        db.query(LocationHistory)
        .order_by(LocationHistory.created_at.desc(), LocationHistory.id.desc())
        .all()
    )


@router.get("/by-item/{item_id}", response_model=list[LocationHistoryResponse])
def list_location_history_by_item(
    item_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return (
        db.query(LocationHistory)
        .filter(LocationHistory.item_id == item_id)
        .order_by(LocationHistory.transfer_date.desc(), LocationHistory.id.desc())
        .all()
    )


@router.get("/{history_id}", response_model=Optional[LocationHistoryResponse])
def get_location_history(
    history_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return db.query(LocationHistory).filter(LocationHistory.id == history_id).first()


# =========================================================
# CREATE TRANSFER
# =========================================================
@router.post("", response_model=LocationHistoryResponse, status_code=status.HTTP_201_CREATED)
def create_location_history(
    transfer_data: LocationHistoryCreate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    if not db.query(InventoryItem).filter(InventoryItem.id == transfer_data.item_id).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Item with ID {transfer_data.item_id} does not exist",
        )

    _ensure_location_exists(db, transfer_data.to_location_id)

    if transfer_data.from_location_id is not None:
        _ensure_location_exists(db, transfer_data.from_location_id)

    try:
        transfer = LocationHistory(**transfer_data.model_dump())
        db.add(transfer)
        db.flush()

        if transfer.status == TransferStatus.COMPLETED:
            _apply_completed_transfer(db, transfer)

        db.commit()

    except SQLAlchemyError:
        db.rollback()
        raise HTTPException(status_code=500, detail="Unable to record transfer")

    db.refresh(transfer)
    return transfer


# =========================================================
# UPDATE TRANSFER (STATUS / NOTES)
# =========================================================
@router.put("/{history_id}", response_model=LocationHistoryResponse)
def update_location_history(
    history_id: int,
    transfer_data: LocationHistoryUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    transfer = db.query(LocationHistory).filter(LocationHistory.id == history_id).first()

    if not transfer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Location history with ID {history_id} does not exist",
        )

    update_data = transfer_data.model_dump(exclude_unset=True)

    try:
        for field, value in update_data.items():
            setattr(transfer, field, value)

        if update_data.get("status") == TransferStatus.COMPLETED:
            _apply_completed_transfer(db, transfer)

        db.commit()

    except SQLAlchemyError:
        db.rollback()
        raise HTTPException(status_code=500, detail="Unable to update transfer")

    db.refresh(transfer)
    return transfer


@router.delete("/{history_id}", response_model=DeleteResponse)
def delete_location_history(
    history_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    transfer = db.query(LocationHistory).filter(LocationHistory.id == history_id).first()

    if not transfer:
        return {"success": False}

    db.delete(transfer)
    db.commit()

    return {"success": True}

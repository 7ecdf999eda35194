# asset_inventory/routers/locations.py

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from asset_inventory.database import get_db
from asset_inventory.core.auth import get_current_user
from asset_inventory.models.locations import Location
from asset_inventory.schemas.common import DeleteResponse
from asset_inventory.schemas.location import (
    LocationCreate,
    LocationUpdate,
    LocationResponse,
)

router = APIRouter(
    prefix="/locations",
    tags=["Locations"],
)


@router.get("", response_model=list[LocationResponse])
def list_locations(
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return db.query(Location).order_by(Location.id).all()


@router.get("/{location_id}", response_model=Optional[LocationResponse])
def get_location(
    location_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return db.query(Location).filter(Location.id == location_id).first()


@router.post(
    "",
    response_model=LocationResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_location(
    location_data: LocationCreate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    location = Location(
        name=location_data.name,
        branch_code=location_data.branch_code,
        address=location_data.address,
    )

    db.add(location)
    db.commit()
    db.refresh(location)

    return location


@router.put("/{location_id}", response_model=LocationResponse)
def update_location(
    location_id: int,
    location_data: LocationUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    location = db.query(Location).filter(Location.id == location_id).first()

    if not location:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Location with ID {location_id} not found",
        )

    for field, value in location_data.model_dump(exclude_unset=True).items():
        setattr(location, field, value)

    db.commit()
    db.refresh(location)

    return location


@router.delete("/{location_id}", response_model=DeleteResponse)
def delete_location(
    location_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    location = db.query(Location).filter(Location.id == location_id).first()

    if not location:
        return {"success": False}

    # Items and transfers point at locations; the database refuses the delete
    try:
        db.delete(location)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Cannot delete location: it is in use by inventory items or transfers",
        )
    except SQLAlchemyError:
        db.rollback()
        raise HTTPException(status_code=500, detail="Unable to delete location")

    return {"success": True}

# asset_inventory/routers/purchases.py

from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from asset_inventory.database import get_db
from asset_inventory.core.auth import get_current_user
from asset_inventory.models.inventory import InventoryItem
from asset_inventory.models.purchases import Purchase
from asset_inventory.models.suppliers import Supplier
from asset_inventory.schemas.common import DeleteResponse
from asset_inventory.schemas.purchase import (
    PurchaseCreate,
    PurchaseUpdate,
    PurchaseResponse,
)

router = APIRouter(prefix="/purchases", tags=["Purchases"])


def calculate_total_price(quantity: int, unit_price: Decimal) -> Decimal:
    return (Decimal(unit_price) * quantity).quantize(Decimal("0.01"))


def _ensure_item_exists(db: Session, item_id: int):
    if not db.query(InventoryItem).filter(InventoryItem.id == item_id).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Inventory item with ID {item_id} does not exist",
        )


def _ensure_supplier_exists(db: Session, supplier_id: int):
    if not db.query(Supplier).filter(Supplier.id == supplier_id).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Supplier with ID {supplier_id} does not exist",
        )


@router.get("", response_model=list[PurchaseResponse])
def list_purchases(
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return db.query(Purchase).order_by(Purchase.id).all()


@router.get("/by-item/{item_id}", response_model=list[PurchaseResponse])
def list_purchases_by_item(
    item_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return (
        db.query(Purchase)
        .filter(Purchase.item_id == item_id)
        .order_by(Purchase.id)
        .all()
    )


@router.get("/by-supplier/{supplier_id}", response_model=list[PurchaseResponse])
def list_purchases_by_supplier(
    supplier_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return (
        db.query(Purchase)
        .filter(Purchase.supplier_id == supplier_id)
        .order_by(Purchase.id)
        .all()
    )


@router.get("/{purchase_id}", response_model=Optional[PurchaseResponse])
def get_purchase(
    purchase_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return db.query(Purchase).filter(Purchase.id == purchase_id).first()


@router.post("", response_model=PurchaseResponse, status_code=status.HTTP_201_CREATED)
def create_purchase(
    purchase_data: PurchaseCreate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    _ensure_item_exists(db, purchase_data.item_id)
    _ensure_supplier_exists(db, purchase_data.supplier_id)

    purchase = Purchase(
        item_id=purchase_data.item_id,
        supplier_id=purchase_data.supplier_id,
        quantity=purchase_data.quantity,
        unit_price=purchase_data.unit_price,
        total_price=calculate_total_price(purchase_data.quantity, purchase_data.unit_price),
        purchase_date=purchase_data.purchase_date,
        notes=purchase_data.notes,
    )

    try:
        db.add(purchase)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise HTTPException(status_code=500, detail="Unable to record purchase")

    db.refresh(purchase)
    return purchase


@router.put("/{purchase_id}", response_model=PurchaseResponse)
def update_purchase(
    purchase_id: int,
    purchase_data: PurchaseUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    purchase = db.query(Purchase).filter(Purchase.id == purchase_id).first()

    if not purchase:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Purchase with ID {purchase_id} does not exist",
        )

    update_data = purchase_data.model_dump(exclude_unset=True)

    if "item_id" in update_data:
        _ensure_item_exists(db, update_data["item_id"])

    if "supplier_id" in update_data:
        _ensure_supplier_exists(db, update_data["supplier_id"])

    # Recompute the total from whichever operands were supplied
    new_quantity = update_data.get("quantity", purchase.quantity)
    new_unit_price = update_data.get("unit_price", purchase.unit_price)

    for field, value in update_data.items():
        setattr(purchase, field, value)

    if "quantity" in update_data or "unit_price" in update_data:
        purchase.total_price = calculate_total_price(new_quantity, new_unit_price)

    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise HTTPException(status_code=500, detail="Unable to update purchase")

    db.refresh(purchase)
    return purchase


@router.delete("/{purchase_id}", response_model=DeleteResponse)
def delete_purchase(
    purchase_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    purchase = db.query(Purchase).filter(Purchase.id == purchase_id).first()

    if not purchase:
        return {"success": False}

    db.delete(purchase)
    db.commit()

    return {"success": True}

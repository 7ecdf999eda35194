# asset_inventory/models/inventory.py

from enum import Enum

from sqlalchemy import CheckConstraint, Column, Integer, String, Text, Numeric, ForeignKey, DateTime, Enum as sqlalchemyEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from asset_inventory.database import Base


class ItemCondition(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    DAMAGED = "damaged"


class InventoryItem(Base):
    __tablename__ = "inventory_items"

    id = Column(Integer, primary_key=True, index=True)
    item_code = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)

    # No ondelete: referenced categories/locations must not disappear
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=False, index=True)

    condition = Column(
        sqlalchemyEnum(ItemCondition, name="item_condition", values_callable=lambda conditions: [c.value for c in conditions]),
        nullable=False,
    )
    quantity = Column(Integer, nullable=False)
    purchase_price = Column(Numeric(12, 2), nullable=False)
    purchase_date = Column(DateTime, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    category = relationship("Category")
    location = relationship("Location")

    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_inventory_quantity_non_negative"),
        CheckConstraint("purchase_price >= 0", name="ck_inventory_purchase_price_non_negative"),
    )

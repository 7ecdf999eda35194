# asset_inventory/models/location_history.py

from enum import Enum

from sqlalchemy import Column, Index, Integer, String, Text, ForeignKey, DateTime, Enum as sqlalchemyEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from asset_inventory.database import Base


class TransferStatus(str, Enum):
    PENDING = "pending"
    IN_TRANSIT = "in_transit"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class LocationHistory(Base):
    __tablename__ = "location_history"

    id = Column(Integer, primary_key=True, index=True)
    item_id = Column(Integer, ForeignKey("inventory_items.id"), nullable=False, index=True)
    from_location_id = Column(Integer, ForeignKey("locations.id"), nullable=True)
    to_location_id = Column(Integer, ForeignKey("locations.id"), nullable=False)

    transfer_date = Column(DateTime, nullable=False)
    transferred_by = Column(String, nullable=False)
    reason = Column(Text, nullable=True)
    status = Column(
        sqlalchemyEnum(TransferStatus, name="transfer_status", values_callable=lambda statuses: [s.value for s in statuses]),
        nullable=False,
    )
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    item = relationship("InventoryItem")
    from_location = relationship("Location", foreign_keys=[from_location_id])
    to_location = relationship("Location", foreign_keys=[to_location_id])

    __table_args__ = (
        Index("ix_location_history_created_at", "created_at"),
    )

# asset_inventory/models/locations.py

from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func

from asset_inventory.database import Base


class Location(Base):
    __tablename__ = "locations"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    branch_code = Column(String, nullable=False)
    address = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

from pydantic import BaseModel, Field
from datetime import datetime

from asset_inventory.models.location_history import TransferStatus


class LocationHistoryCreate(BaseModel):
    item_id: int
    from_location_id: int | None = None
    to_location_id: int
    transfer_date: datetime
    transferred_by: str = Field(..., min_length=1, description="Transferred by is required")
    reason: str | None = None
    status: TransferStatus
    notes: str | None = None


# Only the workflow fields of a transfer are editable
class LocationHistoryUpdate(BaseModel):
    status: TransferStatus = None
    notes: str | None = None


class LocationHistoryResponse(BaseModel):
    id: int
    item_id: int
    from_location_id: int | None
    to_location_id: int
    transfer_date: datetime
    transferred_by: str
    reason: str | None
    status: TransferStatus
    notes: str | None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

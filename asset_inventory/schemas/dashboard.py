from pydantic import BaseModel


class DashboardStatsResponse(BaseModel):
    total_items: int
    total_categories: int
    total_locations: int
    total_suppliers: int
    recent_purchases: int
    items_by_condition: dict[str, int]
    items_by_location: dict[str, int]
    recent_transfers: int

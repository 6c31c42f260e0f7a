from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class SaleCreate(BaseModel):
    # Presence is checked by the service so missing fields map to 400, not 422.
    item_id: Optional[int] = None
    quantity: Optional[int] = None
    unit_price: Optional[float] = None


class SaleItemSummary(BaseModel):
    id: int
    name: str
    category: str


class SaleItemDetail(SaleItemSummary):
    unit: str
    selling_price: Optional[float] = None


class SaleRead(BaseModel):
    id: int
    item_id: int
    quantity: int
    unit_price: float
    total: float
    sold_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SaleWithSummary(SaleRead):
    item: SaleItemSummary


class SaleWithItem(SaleRead):
    item: Optional[SaleItemDetail] = None


class SaleCreated(BaseModel):
    message: str
    sale: SaleWithSummary


class SalesStats(BaseModel):
    total_sales: int
    total_revenue: float
    total_items: int
    average_sale: float


class SalesReport(BaseModel):
    sales: List[SaleWithItem]
    stats: SalesStats

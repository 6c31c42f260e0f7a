from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from shopledger.core.constants import DEFAULT_ITEM_CATEGORY, DEFAULT_ITEM_UNIT


class InventoryItemBase(BaseModel):
    name: str = Field(min_length=1)
    category: str = DEFAULT_ITEM_CATEGORY
    unit: str = DEFAULT_ITEM_UNIT
    selling_price: Optional[float] = Field(default=None, gt=0)
    unit_price: Optional[float] = Field(default=None, gt=0)


class InventoryItemCreate(InventoryItemBase):
    current_stock: int = Field(default=0, ge=0)


class InventoryItemRead(InventoryItemBase):
    id: int
    current_stock: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RestockRequest(BaseModel):
    quantity: int = Field(gt=0)
    unit_cost: Optional[float] = Field(default=None, gt=0)
    note: Optional[str] = None


class LedgerEntryRead(BaseModel):
    id: int
    item_id: int
    type: Literal["in", "out"]
    quantity: int
    total_amount: float
    note: str
    logged_at: datetime

    model_config = ConfigDict(from_attributes=True)


class StockReconciliation(BaseModel):
    item_id: int
    current_stock: int
    ledger_in: int
    ledger_out: int
    ledger_balance: int
    drift: int
    consistent: bool

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ExpenseBase(BaseModel):
    description: str = Field(min_length=1)
    category: str = "General"
    amount: float = Field(gt=0)


class ExpenseCreate(ExpenseBase):
    spent_at: Optional[datetime] = None


class ExpenseRead(ExpenseBase):
    id: int
    spent_at: datetime

    model_config = ConfigDict(from_attributes=True)


class InventoryOverview(BaseModel):
    total_expenses: float
    total_revenue: float
    net_profit: float
    total_items: int
    low_stock_items: int
    today_sales: float
    this_month_sales: float

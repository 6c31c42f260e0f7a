from datetime import date

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from shopledger.core.dates import end_of_day_exclusive, month_bounds, start_of_day, utc_today
from shopledger.core.money import round_money
from shopledger.models.inventory_item import InventoryItem
from shopledger.models.sale import SaleRecord
from shopledger.services.expense_service import total_expenses
from shopledger.services.inventory_service import count_low_stock


def _revenue_between(db: Session, start=None, end=None) -> float:
    stmt = select(func.coalesce(func.sum(SaleRecord.total), 0))
    if start is not None:
        stmt = stmt.where(SaleRecord.sold_at >= start)
    if end is not None:
        stmt = stmt.where(SaleRecord.sold_at < end)
    return round_money(db.execute(stmt).scalar_one())


def inventory_overview(db: Session, today: date | None = None) -> dict:
    if today is None:
        today = utc_today()

    expenses = total_expenses(db)
    revenue = _revenue_between(db)
    month_start, month_end = month_bounds(today)
    total_items = db.execute(select(func.count(InventoryItem.id))).scalar_one()

    return {
        "total_expenses": expenses,
        "total_revenue": revenue,
        "net_profit": round_money(revenue - expenses),
        "total_items": total_items,
        "low_stock_items": count_low_stock(db),
        "today_sales": _revenue_between(db, start_of_day(today), end_of_day_exclusive(today)),
        "this_month_sales": _revenue_between(db, month_start, month_end),
    }

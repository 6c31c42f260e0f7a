"""Sale recording, reversal and reporting.

Recording and reversal each make two dependent writes. The first write (sale
row plus stock counter) is one transaction; the ledger append that follows is
a separate commit. When that append fails the recording path logs and
carries on, while the reversal path raises ``PartialFailureError`` so the
caller knows the ledger needs manual reconciliation.
"""

import logging
import math
from numbers import Number

from sqlalchemy import delete, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shopledger.core.constants import LEDGER_IN, LEDGER_OUT, SALE_NOTE_TEMPLATE, SALE_REVERSAL_NOTE
from shopledger.core.dates import end_of_day_exclusive, start_of_day, utc_now
from shopledger.core.errors import (
    InsufficientStockError,
    NotFoundError,
    PartialFailureError,
    PersistenceError,
    ValidationError,
)
from shopledger.core.money import line_total, round_money, sum_money
from shopledger.models.inventory_item import InventoryItem
from shopledger.models.ledger_entry import LedgerEntry
from shopledger.models.sale import SaleRecord

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Missing required fields: item_id, quantity, unit_price"
NON_POSITIVE_MESSAGE = "Quantity and unit_price must be greater than 0"


def _is_number(value) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def validate_sale_request(item_id, quantity, unit_price):
    if item_id is None or quantity is None or unit_price is None:
        raise ValidationError(MISSING_FIELDS_MESSAGE)
    if not _is_number(quantity) or not _is_number(unit_price):
        raise ValidationError("Quantity and unit_price must be numbers")
    # NaN compares false against everything, so test finiteness first
    if not math.isfinite(quantity) or not math.isfinite(unit_price):
        raise ValidationError(NON_POSITIVE_MESSAGE)
    if quantity <= 0 or unit_price <= 0:
        raise ValidationError(NON_POSITIVE_MESSAGE)
    if int(quantity) != quantity:
        raise ValidationError("Quantity must be a whole number")


def item_summary(item: InventoryItem) -> dict:
    return {"id": item.id, "name": item.name, "category": item.category}


def item_detail(item: InventoryItem | None) -> dict | None:
    if item is None:
        return None
    summary = item_summary(item)
    summary["unit"] = item.unit
    summary["selling_price"] = item.selling_price
    return summary


def serialize_sale(sale: SaleRecord, item: dict | None) -> dict:
    return {
        "id": sale.id,
        "item_id": sale.item_id,
        "quantity": sale.quantity,
        "unit_price": sale.unit_price,
        "total": sale.total,
        "sold_at": sale.sold_at,
        "item": item,
    }


def _append_ledger_entry(db: Session, *, item_id, entry_type, quantity, total_amount, note):
    entry = LedgerEntry(
        item_id=item_id,
        type=entry_type,
        quantity=quantity,
        total_amount=total_amount,
        note=note,
        logged_at=utc_now(),
    )
    db.add(entry)
    db.commit()
    return entry


def _current_stock(db: Session, item_id) -> int:
    stock = db.execute(
        select(InventoryItem.current_stock).where(InventoryItem.id == item_id)
    ).scalar_one_or_none()
    return stock or 0


def record_sale(db: Session, item_id, quantity, unit_price) -> dict:
    validate_sale_request(item_id, quantity, unit_price)
    quantity = int(quantity)
    total = line_total(quantity, unit_price)

    item = db.get(InventoryItem, item_id)
    if item is None:
        raise NotFoundError("Item not found")
    if item.current_stock < quantity:
        raise InsufficientStockError(available=item.current_stock, required=quantity)

    item_name = item.name
    summary = item_summary(item)

    try:
        # Conditional decrement: a concurrent sale that drained the stock
        # after our read leaves zero matching rows.
        result = db.execute(
            update(InventoryItem)
            .where(InventoryItem.id == item_id, InventoryItem.current_stock >= quantity)
            .values(current_stock=InventoryItem.current_stock - quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            db.rollback()
            raise InsufficientStockError(
                available=_current_stock(db, item_id), required=quantity
            )

        sale = SaleRecord(
            item_id=item_id,
            quantity=quantity,
            unit_price=float(unit_price),
            total=total,
            sold_at=utc_now(),
        )
        db.add(sale)
        db.commit()
        db.expire(item)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error creating sale for item %s", item_id)
        raise PersistenceError("Failed to record sale") from exc

    try:
        _append_ledger_entry(
            db,
            item_id=item_id,
            entry_type=LEDGER_OUT,
            quantity=quantity,
            total_amount=total,
            note=SALE_NOTE_TEMPLATE.format(item_name=item_name),
        )
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error creating inventory log for sale %s", sale.id)

    logger.info("Recorded sale %s: %s x %s = %s", sale.id, quantity, item_name, total)
    return serialize_sale(sale, summary)


def reverse_sale(db: Session, sale_id) -> None:
    sale = db.get(SaleRecord, sale_id)
    if sale is None:
        raise NotFoundError("Sale not found")

    item_id = sale.item_id
    quantity = sale.quantity
    total = sale.total

    try:
        result = db.execute(
            delete(SaleRecord)
            .where(SaleRecord.id == sale_id)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            db.rollback()
            raise NotFoundError("Sale not found")
        db.execute(
            update(InventoryItem)
            .where(InventoryItem.id == item_id)
            .values(current_stock=InventoryItem.current_stock + quantity)
            .execution_options(synchronize_session=False)
        )
        db.commit()
        # Bulk statements bypass the identity map.
        db.expunge(sale)
        db.expire_all()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error deleting sale %s", sale_id)
        raise PersistenceError("Failed to delete sale") from exc

    try:
        _append_ledger_entry(
            db,
            item_id=item_id,
            entry_type=LEDGER_IN,
            quantity=quantity,
            total_amount=total,
            note=SALE_REVERSAL_NOTE,
        )
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error creating reverse inventory log for sale %s", sale_id)
        raise PartialFailureError(
            "Sale deleted but failed to restore stock. Please check inventory manually."
        ) from exc

    logger.info("Reversed sale %s (%s units of item %s)", sale_id, quantity, item_id)


def build_sales_query(date_from=None, date_to=None, category=None, search=None):
    stmt = (
        select(SaleRecord, InventoryItem)
        .outerjoin(InventoryItem, InventoryItem.id == SaleRecord.item_id)
        .order_by(SaleRecord.sold_at.desc(), SaleRecord.id.desc())
    )
    if date_from is not None:
        stmt = stmt.where(SaleRecord.sold_at >= start_of_day(date_from))
    if date_to is not None:
        stmt = stmt.where(SaleRecord.sold_at < end_of_day_exclusive(date_to))
    if category:
        stmt = stmt.where(InventoryItem.category == category)
    search = (search or "").strip()
    if search:
        pattern = "%{}%".format(search)
        stmt = stmt.where(
            or_(
                InventoryItem.name.ilike(pattern),
                InventoryItem.category.ilike(pattern),
            )
        )
    return stmt


def compute_sales_stats(sales) -> dict:
    total_sales = len(sales)
    total_revenue = sum_money(sale["total"] for sale in sales)
    total_items = sum(sale["quantity"] for sale in sales)
    average_sale = round_money(total_revenue / total_sales) if total_sales else 0.0
    return {
        "total_sales": total_sales,
        "total_revenue": total_revenue,
        "total_items": total_items,
        "average_sale": average_sale,
    }


def query_sales(db: Session, date_from=None, date_to=None, category=None, search=None) -> dict:
    if date_from is not None and date_to is not None and date_from > date_to:
        raise ValidationError("dateFrom must be on or before dateTo")

    stmt = build_sales_query(
        date_from=date_from, date_to=date_to, category=category, search=search
    )
    try:
        rows = db.execute(stmt).all()
    except SQLAlchemyError as exc:
        logger.exception("Error fetching sales")
        raise PersistenceError("Failed to fetch sales") from exc

    sales = [serialize_sale(row.SaleRecord, item_detail(row.InventoryItem)) for row in rows]
    return {"sales": sales, "stats": compute_sales_stats(sales)}


__all__ = [
    "build_sales_query",
    "compute_sales_stats",
    "query_sales",
    "record_sale",
    "reverse_sale",
    "serialize_sale",
    "validate_sale_request",
]

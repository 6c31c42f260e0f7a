import logging
from typing import cast

from sqlalchemy import case, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shopledger.config import get_settings
from shopledger.core.constants import (
    DEFAULT_ITEM_CATEGORY,
    DEFAULT_ITEM_UNIT,
    LEDGER_IN,
    LEDGER_OUT,
    OPENING_STOCK_NOTE,
    RESTOCK_NOTE,
)
from shopledger.core.dates import utc_now
from shopledger.core.errors import NotFoundError, PersistenceError, ValidationError
from shopledger.core.money import line_total
from shopledger.models.inventory_item import InventoryItem
from shopledger.models.ledger_entry import LedgerEntry
from shopledger.services.sales_service import record_sale

logger = logging.getLogger(__name__)


def get_item(db: Session, item_id) -> InventoryItem:
    item = db.get(InventoryItem, item_id)
    if item is None:
        raise NotFoundError("Item not found")
    return item


def list_items(db: Session, *, available_only=False, category=None) -> list[InventoryItem]:
    stmt = select(InventoryItem).order_by(InventoryItem.name, InventoryItem.id)
    if available_only:
        stmt = stmt.where(InventoryItem.current_stock > 0)
    if category:
        stmt = stmt.where(InventoryItem.category == category)
    return cast(list[InventoryItem], list(db.execute(stmt).scalars().all()))


def low_stock_items(db: Session, threshold: int | None = None) -> list[InventoryItem]:
    if threshold is None:
        threshold = get_settings().LOW_STOCK_THRESHOLD
    stmt = (
        select(InventoryItem)
        .where(InventoryItem.current_stock < threshold)
        .order_by(InventoryItem.current_stock, InventoryItem.name)
    )
    return cast(list[InventoryItem], list(db.execute(stmt).scalars().all()))


def count_low_stock(db: Session, threshold: int | None = None) -> int:
    if threshold is None:
        threshold = get_settings().LOW_STOCK_THRESHOLD
    return db.execute(
        select(func.count(InventoryItem.id)).where(InventoryItem.current_stock < threshold)
    ).scalar_one()


def resolve_sale_price(item: InventoryItem) -> float | None:
    """Selling price when set, otherwise the unit price."""
    if item.selling_price:
        return item.selling_price
    if item.unit_price:
        return item.unit_price
    return None


def create_item(db: Session, payload) -> InventoryItem:
    item = InventoryItem(
        name=payload.name.strip(),
        category=(payload.category or "").strip() or DEFAULT_ITEM_CATEGORY,
        unit=(payload.unit or "").strip() or DEFAULT_ITEM_UNIT,
        current_stock=payload.current_stock,
        selling_price=payload.selling_price,
        unit_price=payload.unit_price,
        created_at=utc_now(),
    )
    opening_cost = line_total(item.current_stock, item.unit_price or item.selling_price or 0)
    try:
        db.add(item)
        db.flush()
        # Journal the opening balance so ledger totals match the counter.
        if item.current_stock > 0:
            db.add(
                LedgerEntry(
                    item_id=item.id,
                    type=LEDGER_IN,
                    quantity=item.current_stock,
                    total_amount=opening_cost,
                    note=OPENING_STOCK_NOTE,
                    logged_at=utc_now(),
                )
            )
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error creating inventory item %s", payload.name)
        raise PersistenceError("Failed to create item") from exc

    db.refresh(item)
    logger.info("Created inventory item %s (%s) with stock %s", item.id, item.name, item.current_stock)
    return item


def restock_item(db: Session, item_id, quantity, *, unit_cost=None, note=None) -> InventoryItem:
    if quantity is None or quantity <= 0:
        raise ValidationError("Quantity must be greater than 0")

    item = get_item(db, item_id)
    if unit_cost is None:
        unit_cost = item.unit_price or 0
    restock_cost = line_total(quantity, unit_cost)

    try:
        db.execute(
            update(InventoryItem)
            .where(InventoryItem.id == item_id)
            .values(current_stock=InventoryItem.current_stock + quantity)
            .execution_options(synchronize_session=False)
        )
        db.add(
            LedgerEntry(
                item_id=item_id,
                type=LEDGER_IN,
                quantity=quantity,
                total_amount=restock_cost,
                note=note or "{} - {}".format(RESTOCK_NOTE, item.name),
                logged_at=utc_now(),
            )
        )
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error restocking item %s", item_id)
        raise PersistenceError("Failed to restock item") from exc

    db.refresh(item)
    return item


def quick_sale(db: Session, item_id) -> dict:
    """Sell a single unit at the item's resolved price."""
    item = get_item(db, item_id)
    price = resolve_sale_price(item)
    if price is None:
        raise ValidationError("Item has no selling price or unit price set")
    return record_sale(db, item.id, 1, price)


def list_ledger(db: Session, *, item_id=None, limit=None) -> list[LedgerEntry]:
    if limit is None:
        limit = get_settings().LEDGER_PAGE_LIMIT
    stmt = (
        select(LedgerEntry)
        .order_by(LedgerEntry.logged_at.desc(), LedgerEntry.id.desc())
        .limit(limit)
    )
    if item_id is not None:
        stmt = stmt.where(LedgerEntry.item_id == item_id)
    return cast(list[LedgerEntry], list(db.execute(stmt).scalars().all()))


def reconcile_item(db: Session, item_id) -> dict:
    item = get_item(db, item_id)
    db.refresh(item)

    ledger_in, ledger_out = db.execute(
        select(
            func.coalesce(
                func.sum(case((LedgerEntry.type == LEDGER_IN, LedgerEntry.quantity), else_=0)),
                0,
            ),
            func.coalesce(
                func.sum(case((LedgerEntry.type == LEDGER_OUT, LedgerEntry.quantity), else_=0)),
                0,
            ),
        ).where(LedgerEntry.item_id == item_id)
    ).one()

    ledger_balance = int(ledger_in) - int(ledger_out)
    drift = item.current_stock - ledger_balance
    if drift:
        logger.warning(
            "Stock drift on item %s: counter %s, ledger %s",
            item_id,
            item.current_stock,
            ledger_balance,
        )
    return {
        "item_id": item.id,
        "current_stock": item.current_stock,
        "ledger_in": int(ledger_in),
        "ledger_out": int(ledger_out),
        "ledger_balance": ledger_balance,
        "drift": drift,
        "consistent": drift == 0,
    }


__all__ = [
    "count_low_stock",
    "create_item",
    "get_item",
    "list_items",
    "list_ledger",
    "low_stock_items",
    "quick_sale",
    "reconcile_item",
    "resolve_sale_price",
    "restock_item",
]

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from shopledger.core.errors import ShopLedgerError, to_http_exception
from shopledger.dependencies import get_db
from shopledger.schemas.inventory import (
    InventoryItemCreate,
    InventoryItemRead,
    LedgerEntryRead,
    RestockRequest,
    StockReconciliation,
)
from shopledger.services.inventory_service import (
    create_item,
    list_items,
    list_ledger,
    low_stock_items,
    reconcile_item,
    restock_item,
)

router = APIRouter(tags=["Inventory"])


@router.get("/inventory-items", response_model=List[InventoryItemRead])
def get_inventory_items(
    available: bool = Query(False, description="Only items with stock on hand"),
    category: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    return list_items(db, available_only=available, category=category or None)


@router.post("/inventory-items", response_model=InventoryItemRead, status_code=status.HTTP_201_CREATED)
def add_inventory_item(payload: InventoryItemCreate, db: Session = Depends(get_db)):
    try:
        return create_item(db, payload)
    except ShopLedgerError as exc:
        raise to_http_exception(exc) from exc


@router.get("/inventory-items/low-stock", response_model=List[InventoryItemRead])
def get_low_stock_items(
    threshold: Optional[int] = Query(None, ge=1, description="Defaults to LOW_STOCK_THRESHOLD"),
    db: Session = Depends(get_db),
):
    return low_stock_items(db, threshold=threshold)


@router.post("/inventory-items/{item_id}/restock", response_model=InventoryItemRead)
def restock_inventory_item(item_id: int, payload: RestockRequest, db: Session = Depends(get_db)):
    try:
        return restock_item(
            db,
            item_id,
            payload.quantity,
            unit_cost=payload.unit_cost,
            note=payload.note,
        )
    except ShopLedgerError as exc:
        raise to_http_exception(exc) from exc


@router.get("/inventory-items/{item_id}/reconciliation", response_model=StockReconciliation)
def get_item_reconciliation(item_id: int, db: Session = Depends(get_db)):
    try:
        return reconcile_item(db, item_id)
    except ShopLedgerError as exc:
        raise to_http_exception(exc) from exc


@router.get("/inventory-logs", response_model=List[LedgerEntryRead])
def get_inventory_logs(
    item_id: Optional[int] = Query(None),
    limit: Optional[int] = Query(None, ge=1, le=2000, description="Max records to return"),
    db: Session = Depends(get_db),
):
    return list_ledger(db, item_id=item_id, limit=limit)


__all__ = ["router"]

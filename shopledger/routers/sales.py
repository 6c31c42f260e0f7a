from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from shopledger.core.dates import parse_date_param, utc_today
from shopledger.core.errors import ShopLedgerError, to_http_exception
from shopledger.dependencies import get_db
from shopledger.schemas.sales import SaleCreate, SaleCreated, SalesReport
from shopledger.services.export_service import export_sales
from shopledger.services.inventory_service import quick_sale
from shopledger.services.sales_service import query_sales, record_sale, reverse_sale

router = APIRouter(prefix="/sales", tags=["Sales"])


def _parse_date_filters(date_from, date_to) -> tuple[Optional[date], Optional[date]]:
    try:
        return (
            parse_date_param(date_from, "dateFrom"),
            parse_date_param(date_to, "dateTo"),
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.get("", response_model=SalesReport)
def list_sales(
    date_from: Optional[str] = Query(None, alias="dateFrom", description="Inclusive start date (YYYY-MM-DD)"),
    date_to: Optional[str] = Query(None, alias="dateTo", description="Inclusive end date (YYYY-MM-DD)"),
    category: Optional[str] = Query(None, description="Exact item category"),
    search: Optional[str] = Query(None, description="Substring of item name or category"),
    db: Session = Depends(get_db),
):
    start, end = _parse_date_filters(date_from, date_to)
    try:
        return query_sales(
            db, date_from=start, date_to=end, category=category or None, search=search
        )
    except ShopLedgerError as exc:
        raise to_http_exception(exc) from exc


@router.post("", response_model=SaleCreated, status_code=status.HTTP_201_CREATED)
def create_sale(payload: SaleCreate, db: Session = Depends(get_db)):
    try:
        sale = record_sale(db, payload.item_id, payload.quantity, payload.unit_price)
    except ShopLedgerError as exc:
        raise to_http_exception(exc) from exc
    return {"message": "Sale recorded successfully", "sale": sale}


@router.post("/quick/{item_id}", response_model=SaleCreated, status_code=status.HTTP_201_CREATED)
def create_quick_sale(item_id: int, db: Session = Depends(get_db)):
    try:
        sale = quick_sale(db, item_id)
    except ShopLedgerError as exc:
        raise to_http_exception(exc) from exc
    return {"message": "Sale recorded successfully", "sale": sale}


@router.delete("")
def delete_sale(
    sale_id: Optional[str] = Query(None, alias="id", description="Sale to reverse"),
    db: Session = Depends(get_db),
):
    if sale_id is None or not sale_id.strip():
        raise HTTPException(status_code=400, detail="Sale ID is required")
    try:
        sale_id = int(sale_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Sale ID must be an integer.")

    try:
        reverse_sale(db, sale_id)
    except ShopLedgerError as exc:
        raise to_http_exception(exc) from exc
    return {"message": "Sale deleted and stock restored successfully"}


@router.get("/export")
def export_sales_report(
    fmt: str = Query("csv", alias="format", description="csv | xlsx"),
    date_from: Optional[str] = Query(None, alias="dateFrom"),
    date_to: Optional[str] = Query(None, alias="dateTo"),
    category: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    start, end = _parse_date_filters(date_from, date_to)
    try:
        content, media_type = export_sales(
            db,
            fmt,
            date_from=start,
            date_to=end,
            category=category or None,
            search=search,
        )
    except ShopLedgerError as exc:
        raise to_http_exception(exc) from exc

    extension = "xlsx" if media_type.endswith("sheet") else "csv"
    filename = "sales-report-{}.{}".format(utc_today().isoformat(), extension)
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": 'attachment; filename="{}"'.format(filename)},
    )


__all__ = ["router"]

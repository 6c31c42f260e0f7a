from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from shopledger.core.dates import parse_date_param
from shopledger.core.errors import ShopLedgerError, to_http_exception
from shopledger.dependencies import get_db
from shopledger.schemas.expense import ExpenseCreate, ExpenseRead
from shopledger.services.expense_service import create_expense, list_expenses

router = APIRouter(prefix="/expenses", tags=["Expenses"])


@router.get("", response_model=List[ExpenseRead])
def get_expenses(
    date_from: Optional[str] = Query(None, alias="dateFrom"),
    date_to: Optional[str] = Query(None, alias="dateTo"),
    category: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    try:
        start = parse_date_param(date_from, "dateFrom")
        end = parse_date_param(date_to, "dateTo")
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return list_expenses(db, date_from=start, date_to=end, category=category or None)


@router.post("", response_model=ExpenseRead, status_code=status.HTTP_201_CREATED)
def add_expense(payload: ExpenseCreate, db: Session = Depends(get_db)):
    try:
        return create_expense(db, payload)
    except ShopLedgerError as exc:
        raise to_http_exception(exc) from exc


__all__ = ["router"]

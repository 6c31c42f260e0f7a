import logging
from typing import cast

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shopledger.core.dates import end_of_day_exclusive, start_of_day, to_utc, utc_now
from shopledger.core.errors import PersistenceError
from shopledger.core.money import round_money
from shopledger.models.expense import Expense

logger = logging.getLogger(__name__)


def list_expenses(db: Session, *, date_from=None, date_to=None, category=None) -> list[Expense]:
    stmt = select(Expense).order_by(Expense.spent_at.desc(), Expense.id.desc())
    if date_from is not None:
        stmt = stmt.where(Expense.spent_at >= start_of_day(date_from))
    if date_to is not None:
        stmt = stmt.where(Expense.spent_at < end_of_day_exclusive(date_to))
    if category:
        stmt = stmt.where(Expense.category == category)
    return cast(list[Expense], list(db.execute(stmt).scalars().all()))


def create_expense(db: Session, payload) -> Expense:
    expense = Expense(
        description=payload.description.strip(),
        category=payload.category,
        amount=round_money(payload.amount),
        spent_at=to_utc(payload.spent_at) if payload.spent_at else utc_now(),
    )
    try:
        db.add(expense)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error creating expense")
        raise PersistenceError("Failed to create expense") from exc
    db.refresh(expense)
    return expense


def total_expenses(db: Session) -> float:
    total = db.execute(select(func.coalesce(func.sum(Expense.amount), 0))).scalar_one()
    return round_money(total)

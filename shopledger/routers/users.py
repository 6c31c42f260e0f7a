from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from shopledger.core.errors import ShopLedgerError, to_http_exception
from shopledger.dependencies import get_db
from shopledger.schemas.user import UserProfileCreate, UserProfileRead, UserStats
from shopledger.services.user_service import create_user, list_users, user_stats

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=List[UserProfileRead])
def get_users(
    search: Optional[str] = Query(None, description="Matches full name or email"),
    db: Session = Depends(get_db),
):
    return list_users(db, search=search)


@router.get("/stats", response_model=UserStats)
def get_user_stats(db: Session = Depends(get_db)):
    return user_stats(db)


@router.post("", response_model=UserProfileRead, status_code=status.HTTP_201_CREATED)
def add_user(payload: UserProfileCreate, db: Session = Depends(get_db)):
    try:
        return create_user(db, payload)
    except ShopLedgerError as exc:
        raise to_http_exception(exc) from exc

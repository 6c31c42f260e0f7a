from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shopledger.dependencies import get_db
from shopledger.schemas.expense import InventoryOverview
from shopledger.services.dashboard_service import inventory_overview

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/overview", response_model=InventoryOverview)
def get_overview(db: Session = Depends(get_db)):
    return inventory_overview(db)

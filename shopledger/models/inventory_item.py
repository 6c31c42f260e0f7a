from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, Float, Index, Integer, String

from shopledger.core.constants import DEFAULT_ITEM_CATEGORY, DEFAULT_ITEM_UNIT
from shopledger.database.base import Base


class InventoryItem(Base):
    __tablename__ = "inventory_items"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    category = Column(String, nullable=False, default=DEFAULT_ITEM_CATEGORY)
    unit = Column(String, nullable=False, default=DEFAULT_ITEM_UNIT)

    current_stock = Column(Integer, nullable=False, default=0)
    selling_price = Column(Float)
    unit_price = Column(Float)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        CheckConstraint("current_stock >= 0", name="ck_inventory_items_stock_non_negative"),
        Index("idx_inventory_items_category", "category"),
    )


__all__ = ["InventoryItem"]

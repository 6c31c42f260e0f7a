from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, Float, ForeignKey, Index, Integer, String

from shopledger.database.base import Base


class LedgerEntry(Base):
    """Append-only stock movement. Reversals are new "in" rows, never edits."""

    __tablename__ = "inventory_logs"

    id = Column(Integer, primary_key=True)
    item_id = Column(Integer, ForeignKey("inventory_items.id"), nullable=False)

    type = Column(String(3), nullable=False)
    quantity = Column(Integer, nullable=False)
    total_amount = Column(Float, nullable=False, default=0)
    note = Column(String, nullable=False, default="")

    logged_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        CheckConstraint("type IN ('in', 'out')", name="ck_inventory_logs_type"),
        CheckConstraint("quantity > 0", name="ck_inventory_logs_quantity_positive"),
        Index("idx_inventory_logs_item_logged", "item_id", "logged_at"),
    )


__all__ = ["LedgerEntry"]

import argparse

from sqlalchemy import delete, select

from shopledger.core.logging import setup_logging
from shopledger.database import Base, SessionLocal, engine
from shopledger.models import Expense, InventoryItem, LedgerEntry, SaleRecord, UserProfile
from shopledger.models import import_all_models
from shopledger.schemas.expense import ExpenseCreate
from shopledger.schemas.inventory import InventoryItemCreate
from shopledger.schemas.user import UserProfileCreate
from shopledger.services.expense_service import create_expense
from shopledger.services.inventory_service import create_item
from shopledger.services.user_service import create_user


def parse_args():
    parser = argparse.ArgumentParser(description="Seed sample shop data.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear existing data before seeding.",
    )
    return parser.parse_args()


def main():
    setup_logging()
    args = parse_args()

    import_all_models()
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        if args.reset:
            db.execute(delete(LedgerEntry))
            db.execute(delete(SaleRecord))
            db.execute(delete(InventoryItem))
            db.execute(delete(Expense))
            db.execute(delete(UserProfile))
            db.commit()

        has_item = db.execute(select(InventoryItem.id).limit(1)).first()
        if has_item:
            print("Seed skipped: inventory items already exist.")
            return

        items = [
            InventoryItemCreate(
                name="Masala Chai",
                category="Beverages",
                unit="cup",
                current_stock=120,
                selling_price=20.0,
                unit_price=8.0,
            ),
            InventoryItemCreate(
                name="Cold Coffee",
                category="Beverages",
                unit="glass",
                current_stock=40,
                selling_price=90.0,
                unit_price=35.0,
            ),
            InventoryItemCreate(
                name="Veg Sandwich",
                category="Snacks",
                unit="pcs",
                current_stock=6,
                selling_price=70.0,
                unit_price=30.0,
            ),
        ]
        for payload in items:
            create_item(db, payload)

        create_expense(db, ExpenseCreate(description="Milk delivery", category="Supplies", amount=1450.0))
        create_expense(db, ExpenseCreate(description="Electricity bill", category="Utilities", amount=3200.0))

        create_user(db, UserProfileCreate(full_name="Asha Rao", email="asha@example.com", role="admin"))
        create_user(db, UserProfileCreate(full_name="Vikram Shah", email="vikram@example.com", role="staff"))
        print("Seed data created.")
    finally:
        db.close()


if __name__ == "__main__":
    main()

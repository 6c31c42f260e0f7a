from datetime import datetime

from shopledger.database import Base, create_db_engine, make_session_factory
from shopledger.models import InventoryItem, SaleRecord, import_all_models


def make_engine(url="sqlite:///:memory:"):
    import_all_models()
    engine = create_db_engine(url)
    Base.metadata.create_all(bind=engine)
    return engine


def make_session(engine=None):
    if engine is None:
        engine = make_engine()
    return make_session_factory(engine)()


def add_item(db, *, name="Masala Chai", category="Beverages", stock=5, selling_price=100.0, unit_price=None):
    item = InventoryItem(
        name=name,
        category=category,
        unit="pcs",
        current_stock=stock,
        selling_price=selling_price,
        unit_price=unit_price,
    )
    db.add(item)
    db.commit()
    return item


def add_sale(db, item, *, quantity=1, unit_price=100.0, sold_at=None):
    sale = SaleRecord(
        item_id=item.id,
        quantity=quantity,
        unit_price=unit_price,
        total=round(quantity * unit_price, 2),
        sold_at=sold_at or datetime(2026, 10, 18, 12, 0, 0),
    )
    db.add(sale)
    db.commit()
    return sale

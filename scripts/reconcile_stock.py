import argparse

from sqlalchemy.exc import SQLAlchemyError

from shopledger.core.errors import NotFoundError
from shopledger.core.logging import setup_logging
from shopledger.database import SessionLocal
from shopledger.services.inventory_service import list_items, reconcile_item


def parse_args():
    parser = argparse.ArgumentParser(
        description="Compare each item's stock counter against its ledger entries."
    )
    parser.add_argument("--item-id", type=int, default=None, help="Check a single item.")
    parser.add_argument(
        "--only-drift",
        action="store_true",
        help="Print only items whose counter disagrees with the ledger.",
    )
    return parser.parse_args()


def main():
    setup_logging()
    args = parse_args()

    db = SessionLocal()
    try:
        if args.item_id is not None:
            item_ids = [args.item_id]
        else:
            item_ids = [item.id for item in list_items(db)]

        drifted = 0
        for item_id in item_ids:
            report = reconcile_item(db, item_id)
            if not report["consistent"]:
                drifted += 1
            elif args.only_drift:
                continue
            print(
                f"item {report['item_id']}: counter {report['current_stock']}, "
                f"ledger {report['ledger_balance']} "
                f"(in {report['ledger_in']}, out {report['ledger_out']}), "
                f"drift {report['drift']}"
            )
    except NotFoundError as exc:
        raise SystemExit(f"Item {args.item_id}: {exc}") from exc
    except SQLAlchemyError as exc:
        raise SystemExit(f"Reconciliation failed: {exc}") from exc
    finally:
        db.close()

    if drifted:
        raise SystemExit(f"{drifted} item(s) need manual reconciliation.")
    print("All checked items are consistent.")


if __name__ == "__main__":
    main()

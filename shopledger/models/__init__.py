import importlib

from shopledger.models.expense import Expense
from shopledger.models.inventory_item import InventoryItem
from shopledger.models.ledger_entry import LedgerEntry
from shopledger.models.sale import SaleRecord
from shopledger.models.user_profile import UserProfile


def import_all_models() -> None:
    for module_name in (
        "shopledger.models.expense",
        "shopledger.models.inventory_item",
        "shopledger.models.ledger_entry",
        "shopledger.models.sale",
        "shopledger.models.user_profile",
    ):
        importlib.import_module(module_name)


__all__ = [
    "Expense",
    "InventoryItem",
    "LedgerEntry",
    "SaleRecord",
    "UserProfile",
    "import_all_models",
]

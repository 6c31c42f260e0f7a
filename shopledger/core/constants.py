LEDGER_IN = "in"
LEDGER_OUT = "out"

DEFAULT_ITEM_CATEGORY = "Other"
DEFAULT_ITEM_UNIT = "pcs"

OPENING_STOCK_NOTE = "Opening stock"
RESTOCK_NOTE = "Restock"
SALE_NOTE_TEMPLATE = "Sale - {item_name}"
SALE_REVERSAL_NOTE = "Sale reversal - Restoring stock"

NEW_USER_WINDOW_DAYS = 7

EXPORT_FORMATS = ("csv", "xlsx")
EXPORT_COLUMNS = ("Date", "Time", "Item", "Category", "Quantity", "Unit Price", "Total")

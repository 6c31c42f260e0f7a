import csv
import io

from openpyxl import Workbook
from openpyxl.styles import Font
from sqlalchemy.orm import Session

from shopledger.config import get_settings
from shopledger.core.constants import EXPORT_COLUMNS, EXPORT_FORMATS
from shopledger.core.errors import ValidationError
from shopledger.services.sales_service import query_sales

MEDIA_TYPES = {
    "csv": "text/csv",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


def _sale_row(sale, currency):
    item = sale.get("item") or {}
    sold_at = sale["sold_at"]
    return [
        sold_at.date().isoformat(),
        sold_at.strftime("%H:%M:%S"),
        item.get("name") or "Unknown",
        item.get("category") or "N/A",
        sale["quantity"],
        "{}{:.2f}".format(currency, sale["unit_price"]),
        "{}{:.2f}".format(currency, sale["total"]),
    ]


def build_rows(sales, currency=None):
    if currency is None:
        currency = get_settings().CURRENCY_SYMBOL
    return [_sale_row(sale, currency) for sale in sales]


def render_csv(rows) -> bytes:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(EXPORT_COLUMNS)
    writer.writerows(rows)
    return buffer.getvalue().encode("utf-8")


def render_xlsx(rows, sheet_title="Sales") -> bytes:
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = sheet_title
    worksheet.append(list(EXPORT_COLUMNS))
    for cell in worksheet[1]:
        cell.font = Font(bold=True)
    for row in rows:
        worksheet.append(row)
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def export_sales(db: Session, fmt="csv", *, date_from=None, date_to=None, category=None, search=None):
    """Render the filtered sales report; returns ``(content, media_type)``."""
    fmt = (fmt or "csv").strip().lower()
    if fmt not in EXPORT_FORMATS:
        raise ValidationError(
            "Unsupported export format: {}. Use one of: {}".format(fmt, ", ".join(EXPORT_FORMATS))
        )

    report = query_sales(
        db, date_from=date_from, date_to=date_to, category=category, search=search
    )
    rows = build_rows(report["sales"])
    if fmt == "xlsx":
        return render_xlsx(rows), MEDIA_TYPES["xlsx"]
    return render_csv(rows), MEDIA_TYPES["csv"]

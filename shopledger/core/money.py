from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from shopledger.core.errors import ValidationError

_CENT = Decimal("0.01")


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps 0.1 as 0.1 instead of its binary expansion
    return Decimal(str(value))


def round_money(value) -> float:
    amount = to_decimal(value)
    if not amount.is_finite():
        raise ValidationError("Amount is out of range: {}".format(value))
    try:
        return float(amount.quantize(_CENT, rounding=ROUND_HALF_UP))
    except InvalidOperation as exc:
        # quantize fails past 28 significant digits
        raise ValidationError("Amount is out of range: {}".format(value)) from exc


def line_total(quantity, unit_price) -> float:
    return round_money(to_decimal(quantity) * to_decimal(unit_price))


def sum_money(values) -> float:
    total = Decimal("0")
    for value in values:
        if value is None:
            continue
        total += to_decimal(value)
    return round_money(total)

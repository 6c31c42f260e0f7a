from datetime import date, datetime, time, timedelta, timezone


def normalize_date(value):
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        value_text = value.strip()
        if not value_text:
            return None
        try:
            return date.fromisoformat(value_text)
        except ValueError:
            return None
    return None


def parse_date_param(value, field):
    """Parse an optional ``YYYY-MM-DD`` query value, rejecting garbage."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    parsed = normalize_date(value)
    if parsed is None:
        raise ValueError("{} must be a date in YYYY-MM-DD format.".format(field))
    return parsed


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day_exclusive(day: date) -> datetime:
    # Upper bound for "on or before day": covers 23:59:59 and any fraction after it.
    return start_of_day(day) + timedelta(days=1)


def month_bounds(day: date) -> tuple[datetime, datetime]:
    first = day.replace(day=1)
    if first.month == 12:
        following = first.replace(year=first.year + 1, month=1)
    else:
        following = first.replace(month=first.month + 1)
    return start_of_day(first), start_of_day(following)


def to_utc(value: datetime) -> datetime:
    """Shift an aware timestamp to UTC; naive ones are taken as UTC already."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_today() -> date:
    return utc_now().date()

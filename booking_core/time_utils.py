from datetime import date, datetime, time, timezone
from typing import Optional, Union

DATE_FORMAT = "%Y-%m-%d"


def datetime_to_str(dt: datetime) -> str:
    return dt.isoformat()


def str_to_datetime(s: str) -> datetime:
    # accepts the trailing "Z" that browsers and the API emit
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    return datetime.fromisoformat(s)


def as_datetime(value: Union[None, str, date, datetime]) -> Optional[datetime]:
    """
    Coerces a wizard or API date value into a naive UTC datetime.

    Plain dates become midnight. Aware datetimes are converted to UTC and
    stripped of their tzinfo so they can be subtracted from naive ones.
    """
    if value is None or value == "":
        return None
    if isinstance(value, str):
        value = str_to_datetime(value)
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    raise TypeError(f"Unsupported date value: {value!r}")

"""Date formatting exposed to templates as dateFormat and the dateformat filter"""

from datetime import date, datetime


DEFAULT_FORMAT = "%Y-%m-%d"


def date_format(value, fmt: str = DEFAULT_FORMAT) -> str:
    """Format a date or datetime with strftime; ISO strings are parsed first.

    Anything else is returned as str(value).
    """
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return value
    if not isinstance(value, (date, datetime)):
        return str(value)
    return value.strftime(fmt)

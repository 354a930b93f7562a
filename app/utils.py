import math
from datetime import datetime
from typing import Optional

# 0.4 seconds per word
WORDS_PER_MINUTE = 150

PT_BR_MONTHS = (
    "jan", "fev", "mar", "abr", "mai", "jun",
    "jul", "ago", "set", "out", "nov", "dez",
)


def calculate_reading_time(text: str) -> int:
    """Estimated reading time in whole minutes, rounded up."""
    words = text.split()
    return math.ceil(len(words) / WORDS_PER_MINUTE)


def parse_prismic_date(value) -> Optional[datetime]:
    """Prismic sends timestamps like ``2021-03-25T19:25:28+0000``."""
    if value is None or isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%dT%H:%M:%S%z")
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def format_date(value: Optional[datetime]) -> Optional[str]:
    """``dd MMM yyyy`` with pt-BR month abbreviations, e.g. ``15 mar 2021``."""
    if value is None:
        return None
    return f"{value.day:02d} {PT_BR_MONTHS[value.month - 1]} {value.year}"


def format_datetime(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return f"{format_date(value)}, às {value.hour:02d}:{value.minute:02d}"

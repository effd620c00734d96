"""Helpers for "YYYY-MM" planner month strings."""

import re
from datetime import date, datetime
from typing import Optional

# ASCII digits only; \d would also match full-width and other Unicode digits
MONTH_PATTERN = r"^[0-9]{4}-(0[1-9]|1[0-2])$"
_MONTH_RE = re.compile(MONTH_PATTERN)


def is_valid_month(value: str) -> bool:
    """Check that value is a "YYYY-MM" month string."""
    return bool(_MONTH_RE.fullmatch(value or ""))


def format_month_string(month: str) -> str:
    """Turn "2025-11" into "November, 2025". Unparseable input is returned as is."""
    if not is_valid_month(month):
        return month
    try:
        parsed = datetime.strptime(month, "%Y-%m")
    except ValueError:
        return month
    return f"{parsed.strftime('%B')}, {parsed.year}"


def current_month(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"{today.year:04d}-{today.month:02d}"

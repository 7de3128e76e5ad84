"""
Parse-with-default helpers for raw query parameters.

Every helper here returns ``None`` (or the supplied default) instead of
raising, so malformed client input never escapes the parsing boundary.
"""
import math
import re
from datetime import date, datetime, timezone
from typing import List, Mapping, Optional, Sequence, Union

RawValue = Union[str, Sequence[str], None]
RawParams = Mapping[str, RawValue]

_LEADING_INT = re.compile(r"^\s*[+-]?\d+")

# Keeps page * limit within a signed 64-bit skip
MAX_PAGE_VALUE = 2**31 - 1


def normalize_params(items) -> dict:
    """
    Collapse ``(key, value)`` pairs into a raw parameter mapping.

    Repeated keys become lists and ``key[]`` is folded into ``key``.
    """
    params: dict = {}
    for key, value in items:
        if key.endswith("[]"):
            key = key[:-2]
        if key in params:
            existing = params[key]
            if isinstance(existing, list):
                existing.append(value)
            else:
                params[key] = [existing, value]
        else:
            params[key] = value
    return params


def get_scalar(params: RawParams, key: str) -> Optional[str]:
    """Single value for ``key``; the last one wins when it was repeated."""
    value = params.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return value
    values = [item for item in value if item is not None]
    return str(values[-1]) if values else None


def get_values(params: RawParams, key: str) -> List[str]:
    """All non-empty values for ``key``, de-duplicated in first-seen order."""
    value = params.get(key)
    if value is None:
        return []
    raw = [value] if isinstance(value, str) else list(value)
    values: List[str] = []
    for item in raw:
        if item and item not in values:
            values.append(item)
    return values


def parse_number(value: Optional[str]) -> Optional[float]:
    # float() also accepts digit separators, which clients never mean
    if value is None or not value.strip() or "_" in value:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_positive_int(value: Optional[str], default: int) -> int:
    """Leading integer of ``value`` when it lies in ``1..MAX_PAGE_VALUE``, otherwise ``default``."""
    if value is None:
        return default
    match = _LEADING_INT.match(value)
    if match is None:
        return default
    try:
        number = int(match.group())
    except ValueError:
        # more digits than int() will convert
        return default
    return number if 1 <= number <= MAX_PAGE_VALUE else default


def parse_calendar_date(value: Optional[str]) -> Optional[date]:
    """
    Calendar date of an ISO date or datetime string.

    Datetimes carrying an offset are converted to UTC before the date is taken.
    """
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None
    return parsed.date()

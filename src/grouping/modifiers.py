"""
Field modifiers -- value transforms applied before grouping.

Only ``date_trunc`` exists today.  Dates are read in UTC and truncated to
an ISO prefix (``YYYY-MM-DD`` / ``YYYY-MM`` / ``YYYY``), so truncated keys
sort chronologically as plain strings.  A value that cannot be read as a
date is returned untouched and becomes its own group.
"""
from __future__ import annotations

import math
import re
from datetime import date, datetime, timezone
from typing import Any

from src.core.logging import get_logger
from src.grouping.spec import DateUnit, ModifierKind, ParsedGroup

logger = get_logger(__name__)

_UNIT_WIDTH = {
    DateUnit.DAY: 10,
    DateUnit.MONTH: 7,
    DateUnit.YEAR: 4,
}

_FALLBACK_FORMATS = (
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M:%S",
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M:%S",
)

# reduced-precision ISO: "2018", "2018-03"
_REDUCED_ISO_RE = re.compile(r"^(\d{4})(?:-(\d{2}))?$")


def to_datetime(value: Any) -> datetime | None:
    """Read *value* as an aware UTC datetime, or None if it is not a date.

    Accepts ISO-8601 strings (``Z`` and offsets included; naive values are
    taken as UTC), reduced ISO forms (``2018``, ``2018-03``) read as the
    first day of the period, a few slash formats, ``date``/``datetime``
    objects and numbers as epoch milliseconds.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        if not math.isfinite(value):
            return None
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        dt = _parse_date_string(value.strip())
        if dt is None:
            return None
    else:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _parse_date_string(text: str) -> datetime | None:
    if not text:
        return None
    iso = text[:-1] + "+00:00" if text[-1] in "Zz" else text
    try:
        return datetime.fromisoformat(iso)
    except ValueError:
        pass
    reduced = _REDUCED_ISO_RE.match(text)
    if reduced:
        try:
            return datetime(int(reduced.group(1)), int(reduced.group(2) or 1), 1)
        except ValueError:
            return None
    for fmt in _FALLBACK_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def truncate_date(value: Any, unit: str) -> Any:
    """Truncate *value* to *unit*; unknown units and bad dates pass through."""
    try:
        width = _UNIT_WIDTH[DateUnit(unit.lower())]
    except ValueError:
        return value
    dt = to_datetime(value)
    if dt is None:
        logger.debug("date_trunc: %r is not a date -- kept as is", value)
        return value
    return dt.isoformat()[:width]


def apply_modifier(value: Any, group: ParsedGroup) -> Any:
    """Apply the group's modifier to a raw field value (identity if none)."""
    if group.modifier is None:
        return value
    if group.modifier is ModifierKind.DATE_TRUNC:
        unit = group.modifier_params[0] if group.modifier_params else ""
        return truncate_date(value, unit)
    return value

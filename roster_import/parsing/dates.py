from __future__ import annotations

import logging
import re
from collections.abc import Callable
from datetime import date, datetime

from roster_import.models.dialect import DatePattern, RosterDialect

"""Date resolution for roster sheets.

Sheets write the shift date in several hand-typed forms:
"Friday, April 4th, 2025", "DATE: 4/4/25", "2025-04-04". find_date searches the
dialect's date patterns in priority order and returns the first match that is
a real calendar date. resolve_date never fails: without a usable date it
returns today from the injected clock, a missing date must not abort a parse.
"""

__all__ = [
    "Clock",
    "find_date",
    "resolve_date",
    "format_date",
]

logger = logging.getLogger(__name__)

Clock = Callable[[], date]

CANONICAL_FMT = "%Y-%m-%d"


def format_date(value: date) -> str:
    return value.strftime(CANONICAL_FMT)


def _parse_candidate(raw: str, pattern: DatePattern, ordinal_re: re.Pattern[str]) -> date | None:
    cleaned = ordinal_re.sub("", raw)
    # "April 4, 2025" / "Apr. 4 2025" -> "April 4 2025"
    cleaned = " ".join(cleaned.replace(",", " ").replace(".", " ").split())
    for fmt in pattern.formats:
        try:
            return datetime.strptime(cleaned, fmt).date()
        except ValueError:
            continue
    return None


def find_date(text: str, dialect: RosterDialect | None = None) -> str | None:
    """Return the first parseable date in text as YYYY-MM-DD, or None."""
    if not text:
        return None
    dialect = dialect or RosterDialect()
    ordinal_re = re.compile(dialect.ordinal_suffix_pattern, re.IGNORECASE)
    for pattern in dialect.date_patterns:
        for m in re.finditer(pattern.regex, text, re.IGNORECASE):
            raw = m.group(1) if m.groups() else m.group(0)
            parsed = _parse_candidate(raw, pattern, ordinal_re)
            if parsed is not None:
                logger.debug("date %r matched pattern %s", raw, pattern.name)
                return format_date(parsed)
            logger.debug("date candidate %r (%s) is not a calendar date", raw, pattern.name)
    return None


def resolve_date(
    text: str,
    dialect: RosterDialect | None = None,
    *,
    clock: Clock | None = None,
) -> str:
    """find_date with today's date as the fallback."""
    found = find_date(text, dialect)
    if found is not None:
        return found
    today = (clock or date.today)()
    logger.debug("no date found, falling back to %s", today)
    return format_date(today)

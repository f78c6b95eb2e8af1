from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping

from roster_import.models.dialect import RosterDialect
from roster_import.models.roster import ColumnMap
from roster_import.parsing.text import normalize_label

"""Fuzzy header-to-column mapping.

Header wording drifts between files ("RN DAYS", "RN Day's", "RNDAY"). Labels
and keys are compared after normalize_label (lowercase, no whitespace) by
substring containment, so no synonym table is needed.

Grid fields are described declaratively: build_matchers() turns the dialect's
token sets into a {semantic key: predicate} table evaluated once per header
row by map_headers().
"""

__all__ = [
    "HeaderMatcher",
    "GRID_KEYS",
    "contains_token",
    "build_matchers",
    "map_headers",
]

HeaderMatcher = Callable[[str], bool]

GRID_KEYS: tuple[str, ...] = (
    "room",
    "prec",
    "patient",
    "mrn",
    "status",
    "rn_day",
    "ext_day",
    "rn_night",
    "ext_night",
)


def contains_token(*tokens: str) -> HeaderMatcher:
    """Predicate: normalized label contains any normalized token."""
    needles = [normalize_label(t) for t in tokens if normalize_label(t)]

    def _match(label: str) -> bool:
        norm = normalize_label(label)
        return any(n in norm for n in needles)

    return _match


def build_matchers(dialect: RosterDialect) -> dict[str, HeaderMatcher]:
    """Matcher table for the assignment grid columns."""
    return {
        "room": contains_token(*dialect.room_tokens),
        "prec": contains_token(*dialect.precaution_tokens),
        "patient": contains_token(*dialect.patient_tokens),
        "mrn": contains_token(*dialect.mrn_tokens),
        "status": contains_token(*dialect.status_tokens),
        "rn_day": contains_token(*dialect.nurse_day_tokens),
        "ext_day": contains_token(*dialect.extension_day_tokens),
        "rn_night": contains_token(*dialect.nurse_night_tokens),
        "ext_night": contains_token(*dialect.extension_night_tokens),
    }


def map_headers(
    header_texts: Iterable[str],
    keys: Iterable[str] | Mapping[str, HeaderMatcher],
) -> ColumnMap:
    """Map each key to the index of the first header cell it matches.

    Parameters
    ----------
    header_texts: header cell texts in column order
    keys: plain keys (matched as normalized substrings) or a mapping of
          key -> predicate over the raw header text

    Keys are resolved independently; first match wins and one header cell may
    satisfy several keys. Unmatched keys map to None.
    """
    headers = list(header_texts)
    if isinstance(keys, Mapping):
        matchers: dict[str, HeaderMatcher] = dict(keys)
    else:
        matchers = {k: contains_token(k) for k in keys}

    column_map: ColumnMap = {}
    for key, matcher in matchers.items():
        column_map[key] = next((i for i, h in enumerate(headers) if matcher(h)), None)
    return column_map

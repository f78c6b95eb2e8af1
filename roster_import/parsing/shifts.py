from __future__ import annotations

import re
from itertools import zip_longest

from roster_import.models.dialect import RosterDialect

"""Shift token recognition (day / night).

Shift words are matched as whole words with an optional plural "s", so
"DAYS" and "Night" count but "Friday", "Dayna" and "Knight" do not. Where a
text carries several tokens, the dialect's token order is the priority order:
the first token of each shift list ("7A-7P" / "7P-7A") outranks the later
word tokens.
"""

__all__ = [
    "DAY",
    "NIGHT",
    "ShiftMatcher",
]

DAY = "day"
NIGHT = "night"


class ShiftMatcher:
    def __init__(self, dialect: RosterDialect) -> None:
        # interleave so each shift's time range comes before either shift's words
        ordered: list[tuple[str, str]] = []
        for day, night in zip_longest(dialect.day_shift_tokens, dialect.night_shift_tokens):
            if day:
                ordered.append((day, DAY))
            if night:
                ordered.append((night, NIGHT))
        self._ranked = [(re.compile(self._token_regex(t), re.IGNORECASE), shift) for t, shift in ordered]
        self._any = re.compile(
            "|".join(f"(?P<t{i}>{self._token_regex(t)})" for i, (t, _) in enumerate(ordered)) or r"(?!)",
            re.IGNORECASE,
        )
        self._shift_of_group = {f"t{i}": shift for i, (_, shift) in enumerate(ordered)}

    @staticmethod
    def _token_regex(token: str) -> str:
        words = r"\s+".join(re.escape(w) for w in token.split())
        return rf"(?<!\w){words}s?(?!\w)"

    def shift_of(self, text: str) -> str | None:
        """Highest-priority shift mentioned anywhere in text."""
        for pattern, shift in self._ranked:
            if pattern.search(text):
                return shift
        return None

    def positions(self, text: str) -> list[tuple[int, str]]:
        """(offset, shift) of every shift token in text, in reading order."""
        return [(m.start(), self._shift_of_group[m.lastgroup]) for m in self._any.finditer(text)]

from __future__ import annotations

from dataclasses import dataclass, field

"""Document dialect configuration for the roster parser.

A dialect bundles every token set and regular expression the parsers use to
recognize one family of staffing sheets. Parsers never read module-level
keyword lists; they receive a RosterDialect, so a different template family
is supported by building a different dialect (see config.loader.build_dialect).
"""

__all__ = [
    "DatePattern",
    "RosterDialect",
    "DEFAULT_DATE_PATTERNS",
]


@dataclass(frozen=True)
class DatePattern:
    """One textual date form.

    Attributes:
        name: Label used in debug logs
        regex: Search pattern; group 1 is the text handed to strptime
        formats: strptime formats tried in order against group 1
    """
    name: str
    regex: str
    formats: tuple[str, ...]


# Order matters: first pattern producing a valid calendar date wins.
DEFAULT_DATE_PATTERNS: tuple[DatePattern, ...] = (
    DatePattern(
        name="long_form",
        regex=(
            r"(?:\b(?:mon|tue|wed|thu|fri|sat|sun)[a-z]*\.?,?\s+)?"
            r"\b([a-z]{3,9}\.?\s+\d{1,2}(?:st|nd|rd|th)?,?\s+\d{4})\b"
        ),
        formats=("%B %d %Y", "%b %d %Y"),
    ),
    DatePattern(
        name="iso",
        regex=r"\b(\d{4}-\d{1,2}-\d{1,2})\b",
        formats=("%Y-%m-%d",),
    ),
    DatePattern(
        name="slash",
        regex=r"\b(\d{1,2}/\d{1,2}/(?:\d{4}|\d{2}))\b",
        formats=("%m/%d/%Y", "%m/%d/%y"),
    ),
)


@dataclass(frozen=True)
class RosterDialect:
    """Token sets, regexes and room range for one staffing-sheet template.

    Token matching is case-insensitive. Header matching additionally ignores
    whitespace, so "RN DAY" also matches a header cell reading "RN\\nDays".
    """
    room_start: int = 501
    room_end: int = 532

    # grid header
    room_tokens: tuple[str, ...] = ("RM", "ROOM")
    patient_tokens: tuple[str, ...] = ("PATIENT",)
    precaution_tokens: tuple[str, ...] = ("PREC",)
    mrn_tokens: tuple[str, ...] = ("MRN",)
    status_tokens: tuple[str, ...] = ("STATUS",)
    nurse_day_tokens: tuple[str, ...] = ("RN DAY",)
    nurse_night_tokens: tuple[str, ...] = ("RN NIGHT",)
    extension_tokens: tuple[str, ...] = ("EXT",)
    extension_day_tokens: tuple[str, ...] = ("EXT DAY",)
    extension_night_tokens: tuple[str, ...] = ("EXT NIGHT",)

    # footer lists
    respiratory_tokens: tuple[str, ...] = ("RESPIRATORY",)
    float_tokens: tuple[str, ...] = ("FLOAT",)

    # metadata block
    charge_markers: tuple[str, ...] = ("CHARGE NURSE",)
    support_staff_markers: tuple[str, ...] = ("PCT'S", "PCT’S", "PCTS", "PCT")
    day_shift_tokens: tuple[str, ...] = ("7A-7P", "DAY")
    night_shift_tokens: tuple[str, ...] = ("7P-7A", "NIGHT")
    date_label_tokens: tuple[str, ...] = ("DATE",)

    weekday_pattern: str = r"\b(?:mon|tue|wed|thu|fri|sat|sun)[a-z]*\b"
    ordinal_suffix_pattern: str = r"(?<=\d)(?:st|nd|rd|th)\b"
    date_patterns: tuple[DatePattern, ...] = field(default=DEFAULT_DATE_PATTERNS)

    def __post_init__(self) -> None:
        if self.room_start > self.room_end:
            raise ValueError(
                f"invalid room range: start {self.room_start} > end {self.room_end}"
            )

    @property
    def room_numbers(self) -> range:
        return range(self.room_start, self.room_end + 1)

    def in_range(self, room: int) -> bool:
        return self.room_start <= room <= self.room_end

    @property
    def footer_tokens(self) -> tuple[str, ...]:
        """Markers that terminate the grid body."""
        return self.float_tokens + self.respiratory_tokens

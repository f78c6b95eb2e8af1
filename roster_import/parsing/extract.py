from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

"""Try-extract / default combinator.

Optional roster fields are resolved as an ordered list of independent
extraction steps. Each step returns a value or None; the first present value
wins, otherwise the default is used. Keeps the fallback chains (date, lead
nurses, support staff) flat and testable one step at a time.
"""

__all__ = [
    "first_present",
]

logger = logging.getLogger(__name__)

T = TypeVar("T")


def first_present(
    label: str,
    *steps: Callable[[], T | None],
    default: T | None = None,
    default_factory: Callable[[], T] | None = None,
) -> T:
    """Return the first non-empty result of steps, else the default.

    Steps are evaluated lazily in order. Empty strings and empty collections
    count as missing. default_factory wins over default when both are given.
    """
    for position, step in enumerate(steps):
        value = step()
        if value is not None and value != "" and value != () and value != []:
            if position:
                logger.debug("%s: resolved by fallback step %d", label, position)
            return value
    if default_factory is not None:
        logger.debug("%s: not found, using default factory", label)
        return default_factory()
    logger.debug("%s: not found, using default", label)
    return default  # type: ignore[return-value]

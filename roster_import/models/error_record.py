from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the per-run error log.

One record per document that could not be turned into a Roster. The JSON
Lines schema is fixed: timestamp, file, error_type, message.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Document file name
        error_type: UPPER_SNAKE_CASE classification (GRID_HEADER_NOT_FOUND, ...)
        message: Human-readable diagnostic
    """
    timestamp: str
    file: str
    error_type: str
    message: str

    @staticmethod
    def create(file: str, error_type: str, message: str) -> ErrorRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(timestamp=ts, file=file, error_type=error_type, message=message)

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

"""Batch processing result models.

FileStat records the outcome of one document; ProcessingResult aggregates a
whole run for the SUMMARY line.
"""


class FileStatus(Enum):
    """Outcome of one document: success -> roster written, failed -> see error log."""
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class FileStat:
    """Per-file processing statistics."""
    file_name: str
    status: FileStatus
    elapsed_seconds: float
    roster_date: str | None = None  # 成功時のみ
    filled_rooms: int = 0  # 患者が入っている部屋数
    output_path: str | None = None
    error: str | None = None  # 失敗理由


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results of one run."""
    success_files: int
    failed_files: int
    total_filled_rooms: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] | None = None
    error_log_path: str | None = None

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from tqdm import tqdm

from ..models.processing_result import FileStat, FileStatus

"""Progress display with tqdm (TTY only).

One bar per run, one tick per document. The postfix carries the running
ok/failed/rooms counts so a long run shows its health before the SUMMARY
line. Disabled when stdout is not a TTY so CI logs and piped output stay free
of control sequences.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]

BAR_OPTIONS: dict[str, Any] = {
    "unit": "file",
    "disable": False,
    "leave": True,
    "position": 0,
    "ncols": 80,
    "ascii": True,
}


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class ProgressTracker:
    """Document progress for one batch run.

    Counts are kept even without a bar; the orchestrator does not need to
    know whether anything is drawn.
    """

    def __init__(self, total_files: int, *, description: str = "Parsing rosters") -> None:
        self.total_files = total_files
        self.description = description
        self.current_file = 0
        self.ok = 0
        self.failed = 0
        self.rooms = 0
        self.bar = tqdm(total=total_files, desc=description, **BAR_OPTIONS) if is_tty_enabled() else None

    @property
    def enabled(self) -> bool:
        return self.bar is not None

    def start_file(self, file_path: Path) -> None:
        self.current_file += 1
        if self.bar is not None:
            self.bar.set_description(f"{self.description} ({file_path.name})")

    def finish_file(self, stat: FileStat) -> None:
        if stat.status is FileStatus.SUCCESS:
            self.ok += 1
            self.rooms += stat.filled_rooms
        else:
            self.failed += 1
        if self.bar is not None:
            self.bar.update(1)
            self.bar.set_description(self.description)
            self.bar.set_postfix(ok=self.ok, failed=self.failed, rooms=self.rooms)

    def close(self) -> None:
        if self.bar is not None:
            self.bar.close()
            self.bar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

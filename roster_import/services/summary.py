from __future__ import annotations

from ..models.processing_result import ProcessingResult

"""SUMMARY line rendering.

Format:
SUMMARY files={total}/{total} success={success} failed={failed} rooms={rooms} elapsed_sec={elapsed}

render_summary_body() is the part after the label; the CLI hands it to
log_summary(), whose formatter supplies "SUMMARY".
"""

SUMMARY_LABEL = "SUMMARY"


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # 指数表記を避ける
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(round(value, 3))


def render_summary_body(total_files: int, result: ProcessingResult) -> str:
    return (
        f"files={total_files}/{total_files} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"rooms={result.total_filled_rooms} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )


def render_summary_line(total_files: int, result: ProcessingResult) -> str:
    """Render the full SUMMARY line for a run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2025, 4, 4, 7, 0, 0, tzinfo=timezone.utc)
        >>> result = ProcessingResult(
        ...     success_files=2, failed_files=1, total_filled_rooms=40,
        ...     start_time=start, end_time=start, elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(3, result)
        'SUMMARY files=3/3 success=2 failed=1 rooms=40 elapsed_sec=2'
    """
    return f"{SUMMARY_LABEL} {render_summary_body(total_files, result)}"

"""Text rendering of report rows and log lines."""
import math
from datetime import datetime
from typing import Union

from schemas.enums import LogLevel

from .callstack import CallstackRow
from .summary import SummaryRow

# Spaces per nesting level in the callstack report
DEFAULT_INDENT = 4


def format_summary_row(row: SummaryRow) -> str:
    return (
        f"{row.key} was called {row.calls} times.  "
        f"min execution time was {row.min:0.5f}.  "
        f"max time was {row.max:0.5f}.  "
        f"total time spent was {row.total:0.5f}"
    )


def format_callstack_row(row: CallstackRow, indent: int = DEFAULT_INDENT) -> str:
    spaces = " " * (row.depth * indent)
    return f"{spaces}{row.token} was called and took {row.duration:.5f} seconds"


def format_log_line(message: str, level: Union[LogLevel, str], category: str, timestamp: float) -> str:
    """
    Format a log entry with microsecond precision.

    Example:
        "2024-03-01 14:05:09.004211 [profile] [db] query was called 3 times. ..."
    """
    level = level.value if isinstance(level, LogLevel) else level
    micro = min(int((timestamp - math.floor(timestamp)) * 1_000_000), 999_999)
    stamp = datetime.fromtimestamp(math.floor(timestamp)).strftime("%Y-%m-%d %H:%M:%S")
    return f"{stamp}.{micro:06d} [{level}] [{category}] {message}\n"

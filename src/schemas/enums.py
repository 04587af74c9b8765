"""Shared enums used across event schemas and report builders."""
from enum import Enum


class LogLevel(str, Enum):
    """Log levels an event can be recorded at."""
    TRACE = "trace"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    PROFILE = "profile"


class ReportMode(str, Enum):
    """Kinds of profiling report a log route can produce."""
    SUMMARY = "summary"
    CALLSTACK = "callstack"


# Message prefixes marking the start and end of a profiled code block
BEGIN_PREFIX = "begin:"
END_PREFIX = "end:"

# Default category for events recorded without one
DEFAULT_CATEGORY = "application"

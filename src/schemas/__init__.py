"""Profile report schemas - Pydantic models and enums for log events."""
from .enums import LogLevel, ReportMode, BEGIN_PREFIX, END_PREFIX, DEFAULT_CATEGORY
from .events import ProfileEvent

__all__ = [
    # Enums
    "LogLevel",
    "ReportMode",
    # Constants
    "BEGIN_PREFIX",
    "END_PREFIX",
    "DEFAULT_CATEGORY",
    # Events
    "ProfileEvent",
]

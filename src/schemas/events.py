"""Pydantic models for profiling log events."""
from pydantic import BaseModel, Field
from typing import Optional

from .enums import BEGIN_PREFIX, DEFAULT_CATEGORY, END_PREFIX, LogLevel


class ProfileEvent(BaseModel):
    """A single log record, as collected by the logging host."""
    message: str = Field(description="Log message, e.g. 'begin:db.query' or 'end:db.query'")
    level: LogLevel = Field(default=LogLevel.PROFILE, description="Level the message was logged at")
    category: str = Field(default=DEFAULT_CATEGORY, description="Grouping tag, independent of the token")
    timestamp: float = Field(description="Seconds (epoch or relative), sub-millisecond precision")

    @property
    def is_profile(self) -> bool:
        return self.level == LogLevel.PROFILE

    @property
    def begin_token(self) -> Optional[str]:
        """Token of a begin marker, or None if this is not one.

        The prefix is matched case-insensitively; the token keeps its case.
        """
        if self.message[:len(BEGIN_PREFIX)].lower() == BEGIN_PREFIX:
            return self.message[len(BEGIN_PREFIX):]
        return None

    @property
    def end_token(self) -> Optional[str]:
        """Token of an end marker, or None if this is not one."""
        if self.message[:len(END_PREFIX)].lower() == END_PREFIX:
            return self.message[len(END_PREFIX):]
        return None

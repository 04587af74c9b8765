"""Lightweight begin/end profile markers for instrumented code.

Usage:
    prof = Profiler()

    with prof.span("discovery", category="pipeline"):
        run_discovery(...)

    prof.begin_profile("orientation")
    with prof.span("pass1"):
        ...
    prof.end_profile("orientation")

    rows = compute_callstack(prof.events)
"""
import time
from contextlib import contextmanager
from typing import Callable, List

from schemas.enums import BEGIN_PREFIX, DEFAULT_CATEGORY, END_PREFIX, LogLevel
from schemas.events import ProfileEvent


class Profiler:
    """Records profile markers and other log messages as ProfileEvents."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self.events: List[ProfileEvent] = []
        self._clock = clock

    def log(self, message: str, level: LogLevel = LogLevel.INFO,
            category: str = DEFAULT_CATEGORY) -> ProfileEvent:
        """Record a log message at the given level."""
        event = ProfileEvent(
            message=message,
            level=level,
            category=category,
            timestamp=self._clock(),
        )
        self.events.append(event)
        return event

    def begin_profile(self, token: str, category: str = DEFAULT_CATEGORY) -> ProfileEvent:
        """Mark the start of a code block. Must be matched by end_profile()."""
        return self.log(f"{BEGIN_PREFIX}{token}", LogLevel.PROFILE, category)

    def end_profile(self, token: str, category: str = DEFAULT_CATEGORY) -> ProfileEvent:
        """Mark the end of a code block opened with the same token."""
        return self.log(f"{END_PREFIX}{token}", LogLevel.PROFILE, category)

    @contextmanager
    def span(self, token: str, category: str = DEFAULT_CATEGORY):
        """Time a named block. Nested spans produce properly nested markers."""
        self.begin_profile(token, category)
        try:
            yield self
        finally:
            self.end_profile(token, category)

    def clear(self):
        """Forget all recorded events."""
        self.events.clear()

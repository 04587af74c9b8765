"""Hierarchical call-order view of profiled code blocks."""
import logging
from dataclasses import dataclass, asdict
from typing import Dict, Iterable, List, Optional

from schemas.events import ProfileEvent

from .matching import Clock, CompletedSpan, match_spans

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallstackRow:
    """One execution of a code block, placed at its nesting depth."""
    token: str
    duration: float
    depth: int
    category: str

    def to_dict(self) -> Dict:
        return asdict(self)


def build_callstack(spans: Iterable[CompletedSpan]) -> List[CallstackRow]:
    """Order completed spans by when they began, one row per span."""
    return [
        CallstackRow(s.token, s.duration, s.depth, s.category)
        for s in sorted(spans, key=lambda s: s.index)
    ]


def compute_callstack(
    events: Iterable[ProfileEvent],
    clock: Optional[Clock] = None,
) -> List[CallstackRow]:
    """
    Build the callstack report for a batch of log events.

    Rows come out in the order their begin markers were logged, so a parent
    always precedes the blocks nested inside it.

    Raises:
        MismatchError: If the begin/end markers are not properly nested
    """
    rows = build_callstack(match_spans(events, clock))
    logger.debug(f"Callstack report has {len(rows)} rows")
    return rows

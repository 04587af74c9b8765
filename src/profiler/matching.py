"""Stack-based pairing of begin/end profile markers into completed spans."""
import logging
import time
from dataclasses import dataclass, asdict
from typing import Callable, Dict, Iterable, List, Optional

from schemas.events import ProfileEvent

from .errors import MismatchError

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass
class OpenSpan:
    """A begin marker still waiting for its end marker."""
    token: str
    category: str
    start: float
    index: int  # position among begin markers, used to restore begin order


@dataclass(frozen=True)
class CompletedSpan:
    """A matched (or force-closed) code block."""
    token: str
    duration: float
    depth: int  # open ancestors left on the stack when this span closed
    category: str
    index: int
    forced: bool = False

    def to_dict(self) -> Dict:
        return asdict(self)


def filter_profile_events(events: Iterable[ProfileEvent]) -> List[ProfileEvent]:
    """Return the profile-level events, in their original order."""
    return [e for e in events if e.is_profile]


def match_spans(
    events: Iterable[ProfileEvent],
    clock: Optional[Clock] = None,
) -> List[CompletedSpan]:
    """
    Pair begin and end markers into completed spans.

    Markers are matched strictly last-in first-out: an end marker always
    closes the innermost open block, and its token must equal that block's
    token exactly. Blocks still open once the events run out are closed at
    the current clock time.

    Args:
        events: Log events for a single batch; non-profile events are skipped
        clock: Time source for closing unterminated blocks (default time.time)

    Returns:
        Completed spans in closing order

    Raises:
        MismatchError: If an end marker arrives with no open block or for a
            block other than the innermost one
    """
    stack: List[OpenSpan] = []
    results: List[CompletedSpan] = []
    n = 0

    for event in filter_profile_events(events):
        token = event.begin_token
        if token is not None:
            stack.append(OpenSpan(token, event.category, event.timestamp, n))
            n += 1
            continue

        token = event.end_token
        if token is None:
            continue

        if not stack or stack[-1].token != token:
            raise MismatchError(token, [s.token for s in stack])

        last = stack.pop()
        results.append(CompletedSpan(
            token=token,
            duration=event.timestamp - last.start,
            depth=len(stack),
            category=last.category,
            index=last.index,
        ))

    if stack:
        now = (clock or time.time)()
        logger.warning(
            f"Closing {len(stack)} unterminated code block(s): "
            f"{', '.join(s.token for s in stack)}"
        )
        while stack:
            last = stack.pop()
            results.append(CompletedSpan(
                token=last.token,
                duration=now - last.start,
                depth=len(stack),
                category=last.category,
                index=last.index,
                forced=True,
            ))

    logger.debug(f"Matched {len(results)} spans from {n} begin markers")
    return results

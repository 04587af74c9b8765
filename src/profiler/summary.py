"""Per-token (or per-category) timing statistics for profiled code blocks."""
import logging
from dataclasses import dataclass, asdict
from typing import Dict, Iterable, List, Optional

from schemas.events import ProfileEvent

from .matching import Clock, CompletedSpan, match_spans

logger = logging.getLogger(__name__)


@dataclass
class SummaryRow:
    """Aggregated timings for one grouping key."""
    key: str
    calls: int
    min: float
    max: float
    total: float
    category: str

    @property
    def average(self) -> float:
        return self.total / self.calls if self.calls else 0.0

    def to_dict(self) -> Dict:
        return asdict(self)


def aggregate_result(row: SummaryRow, delta: float) -> SummaryRow:
    """Fold one more execution time into an existing summary row."""
    if delta < row.min:
        row.min = delta
    if delta > row.max:
        row.max = delta
    row.calls += 1
    row.total += delta
    return row


def summarize_spans(spans: Iterable[CompletedSpan], group_by_token: bool = True) -> List[SummaryRow]:
    """
    Group completed spans into summary rows.

    Args:
        spans: Completed spans, in any order
        group_by_token: Group by span token if True, otherwise by category

    Returns:
        One row per grouping key, most total time first. Rows with equal
        totals keep the order their keys were first seen in.
    """
    results: Dict[str, SummaryRow] = {}

    for span in spans:
        key = span.token if group_by_token else span.category
        if key in results:
            aggregate_result(results[key], span.duration)
        else:
            results[key] = SummaryRow(
                key=key,
                calls=1,
                min=span.duration,
                max=span.duration,
                total=span.duration,
                category=span.category,
            )

    return sorted(results.values(), key=lambda r: r.total, reverse=True)


def compute_summary(
    events: Iterable[ProfileEvent],
    group_by_token: bool = True,
    clock: Optional[Clock] = None,
) -> List[SummaryRow]:
    """
    Build the summary report for a batch of log events.

    Raises:
        MismatchError: If the begin/end markers are not properly nested
    """
    rows = summarize_spans(match_spans(events, clock), group_by_token)
    logger.debug(f"Summary report has {len(rows)} rows")
    return rows

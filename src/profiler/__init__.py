"""Profile report - summary and callstack reports from begin/end profile markers."""
from .errors import ProfileReportError, ConfigurationError, MismatchError
from .matching import OpenSpan, CompletedSpan, filter_profile_events, match_spans
from .summary import SummaryRow, aggregate_result, summarize_spans, compute_summary
from .callstack import CallstackRow, build_callstack, compute_callstack
from .route import ProfileLogRoute, ReportEntry, parse_report_mode, load_route_config
from .loader import load_events

__all__ = [
    "ProfileReportError",
    "ConfigurationError",
    "MismatchError",
    "OpenSpan",
    "CompletedSpan",
    "filter_profile_events",
    "match_spans",
    "SummaryRow",
    "aggregate_result",
    "summarize_spans",
    "compute_summary",
    "CallstackRow",
    "build_callstack",
    "compute_callstack",
    "ProfileLogRoute",
    "ReportEntry",
    "parse_report_mode",
    "load_route_config",
    "load_events",
]

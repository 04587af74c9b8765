"""Log route that turns collected profile markers into a report."""
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

import yaml

from schemas.enums import LogLevel, ReportMode
from schemas.events import ProfileEvent

from .callstack import CallstackRow, compute_callstack
from .errors import ConfigurationError
from .formatting import DEFAULT_INDENT, format_callstack_row, format_log_line, format_summary_row
from .summary import SummaryRow, compute_summary

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "route.yaml"


def parse_report_mode(value: Union[ReportMode, str]) -> ReportMode:
    """Return the report mode named by value, or raise ConfigurationError."""
    if isinstance(value, ReportMode):
        return value
    try:
        return ReportMode(value)
    except ValueError:
        raise ConfigurationError("report", value, [m.value for m in ReportMode]) from None


def load_route_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load route settings from YAML, layered over the packaged defaults.

    Args:
        path: Optional YAML file overriding some or all default keys

    Returns:
        Dict with report, group_by_token, log_file and indent

    Raises:
        ConfigurationError: On unknown keys or invalid values
    """
    with open(DEFAULT_CONFIG_PATH) as f:
        config = yaml.safe_load(f)

    if path is not None:
        try:
            with open(path) as f:
                overrides = yaml.safe_load(f) or {}
        except yaml.YAMLError:
            raise ConfigurationError("route config", path) from None
        if not isinstance(overrides, dict):
            raise ConfigurationError("route config", path)
        for key in overrides:
            if key not in config:
                raise ConfigurationError("route config key", key, sorted(config))
        config.update(overrides)
        logger.debug(f"Loaded route config overrides from {path}")

    config["report"] = parse_report_mode(config["report"])
    if not isinstance(config["group_by_token"], bool):
        raise ConfigurationError("group_by_token", config["group_by_token"], ["true", "false"])
    indent = config["indent"]
    if isinstance(indent, bool) or not isinstance(indent, int) or indent < 0:
        raise ConfigurationError("indent", indent)
    if config["log_file"] is not None:
        if not isinstance(config["log_file"], str):
            raise ConfigurationError("log_file", config["log_file"])
        config["log_file"] = Path(config["log_file"])

    return config


@dataclass
class ReportEntry:
    """A formatted report line, ready to be handed to a log sink."""
    message: str
    level: LogLevel
    category: str
    time: float

    def to_log_line(self) -> str:
        return format_log_line(self.message, self.level, self.category, self.time)


@dataclass
class ProfileLogRoute:
    """
    Builds a summary or callstack report from a batch of log events.

    Two report types are supported:
    - summary: execution statistics of every marked code block
    - callstack: marked code blocks in the order they were called,
      indented by nesting depth
    """
    report: ReportMode = ReportMode.SUMMARY
    group_by_token: bool = True
    log_file: Optional[Path] = None
    indent: int = DEFAULT_INDENT
    clock: Callable[[], float] = time.time

    def __post_init__(self):
        self.report = parse_report_mode(self.report)
        if self.log_file is not None:
            self.log_file = Path(self.log_file)

    @classmethod
    def from_config(cls, config: Dict[str, Any], **kwargs) -> "ProfileLogRoute":
        """Create a route from a dict returned by load_route_config()."""
        return cls(
            report=config["report"],
            group_by_token=config["group_by_token"],
            log_file=config["log_file"],
            indent=config["indent"],
            **kwargs,
        )

    def set_report(self, value: Union[ReportMode, str]) -> None:
        self.report = parse_report_mode(value)

    def build_rows(self, events: Iterable[ProfileEvent]) -> List[Union[SummaryRow, CallstackRow]]:
        if self.report == ReportMode.SUMMARY:
            return compute_summary(events, self.group_by_token, self.clock)
        return compute_callstack(events, self.clock)

    def format_row(self, row: Union[SummaryRow, CallstackRow]) -> str:
        if isinstance(row, SummaryRow):
            return format_summary_row(row)
        return format_callstack_row(row, self.indent)

    def make_entries(self, rows: Iterable[Union[SummaryRow, CallstackRow]]) -> List[ReportEntry]:
        """Wrap report rows as profile-level entries stamped with the current time."""
        return [
            ReportEntry(self.format_row(row), LogLevel.PROFILE, row.category, self.clock())
            for row in rows
        ]

    def write_entries(self, entries: List[ReportEntry]) -> None:
        """Append entries to the log file. No-op without a log file."""
        if self.log_file is None or not entries:
            return
        self.log_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.log_file, "a", encoding="utf-8") as f:
            f.writelines(e.to_log_line() for e in entries)
        logger.info(f"Wrote {len(entries)} {self.report.value} lines to {self.log_file}")

    def process_logs(self, events: Iterable[ProfileEvent]) -> List[ReportEntry]:
        """
        Build the report and deliver it to the log file, if one is set.

        Returns:
            One profile-level entry per report row

        Raises:
            MismatchError: If the begin/end markers are not properly nested
        """
        entries = self.make_entries(self.build_rows(events))
        self.write_entries(entries)
        return entries

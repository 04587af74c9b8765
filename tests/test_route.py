"""Tests for the profile log route and its configuration."""
import pytest

from schemas.enums import LogLevel, ReportMode
from profiler.callstack import CallstackRow
from profiler.errors import ConfigurationError, MismatchError
from profiler.route import ProfileLogRoute, load_route_config, parse_report_mode
from profiler.summary import SummaryRow


class TestParseReportMode:
    def test_valid_values(self):
        assert parse_report_mode("summary") is ReportMode.SUMMARY
        assert parse_report_mode("callstack") is ReportMode.CALLSTACK
        assert parse_report_mode(ReportMode.CALLSTACK) is ReportMode.CALLSTACK

    def test_invalid_value(self):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_report_mode("flamegraph")
        error = exc_info.value
        assert error.value == "flamegraph"
        assert error.valid == ["summary", "callstack"]
        assert 'report "flamegraph" is invalid' in str(error)

    def test_mode_is_case_sensitive(self):
        with pytest.raises(ConfigurationError):
            parse_report_mode("Summary")


class TestLoadRouteConfig:
    def test_defaults(self):
        config = load_route_config()
        assert config["report"] is ReportMode.SUMMARY
        assert config["group_by_token"] is True
        assert config["log_file"] is None
        assert config["indent"] == 4

    def test_overrides(self, tmp_path):
        path = tmp_path / "route.yaml"
        path.write_text("report: callstack\nlog_file: logs/profile.log\n")
        config = load_route_config(path)
        assert config["report"] is ReportMode.CALLSTACK
        assert config["log_file"].name == "profile.log"
        assert config["group_by_token"] is True

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "route.yaml"
        path.write_text("")
        assert load_route_config(path)["report"] is ReportMode.SUMMARY

    def test_invalid_report(self, tmp_path):
        path = tmp_path / "route.yaml"
        path.write_text("report: detailed\n")
        with pytest.raises(ConfigurationError):
            load_route_config(path)

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "route.yaml"
        path.write_text("levels: profile\n")
        with pytest.raises(ConfigurationError) as exc_info:
            load_route_config(path)
        assert exc_info.value.value == "levels"

    def test_invalid_group_by_token(self, tmp_path):
        path = tmp_path / "route.yaml"
        path.write_text("group_by_token: sometimes\n")
        with pytest.raises(ConfigurationError):
            load_route_config(path)

    def test_negative_indent(self, tmp_path):
        path = tmp_path / "route.yaml"
        path.write_text("indent: -2\n")
        with pytest.raises(ConfigurationError):
            load_route_config(path)

    def test_boolean_indent(self, tmp_path):
        """YAML booleans are not accepted as an indent width."""
        path = tmp_path / "route.yaml"
        path.write_text("indent: true\n")
        with pytest.raises(ConfigurationError) as exc_info:
            load_route_config(path)
        assert exc_info.value.setting == "indent"

    def test_non_string_log_file(self, tmp_path):
        path = tmp_path / "route.yaml"
        path.write_text("log_file: [a, b]\n")
        with pytest.raises(ConfigurationError) as exc_info:
            load_route_config(path)
        assert exc_info.value.setting == "log_file"
        assert exc_info.value.value == ["a", "b"]

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "route.yaml"
        path.write_text("report: [unclosed\n")
        with pytest.raises(ConfigurationError) as exc_info:
            load_route_config(path)
        assert exc_info.value.setting == "route config"


class TestProfileLogRoute:
    def test_defaults(self):
        route = ProfileLogRoute()
        assert route.report is ReportMode.SUMMARY
        assert route.group_by_token is True

    def test_report_from_string(self):
        assert ProfileLogRoute(report="callstack").report is ReportMode.CALLSTACK

    def test_invalid_report(self):
        with pytest.raises(ConfigurationError):
            ProfileLogRoute(report="tree")

    def test_set_report(self):
        route = ProfileLogRoute()
        route.set_report("callstack")
        assert route.report is ReportMode.CALLSTACK
        with pytest.raises(ConfigurationError):
            route.set_report("nope")
        assert route.report is ReportMode.CALLSTACK

    def test_from_config(self, tmp_path):
        path = tmp_path / "route.yaml"
        path.write_text("report: callstack\nindent: 2\n")
        route = ProfileLogRoute.from_config(load_route_config(path))
        assert route.report is ReportMode.CALLSTACK
        assert route.indent == 2

    def test_summary_rows(self, nested_events, fixed_clock):
        rows = ProfileLogRoute(clock=fixed_clock).build_rows(nested_events)
        assert all(isinstance(r, SummaryRow) for r in rows)

    def test_callstack_rows(self, nested_events, fixed_clock):
        rows = ProfileLogRoute(report="callstack", clock=fixed_clock).build_rows(nested_events)
        assert all(isinstance(r, CallstackRow) for r in rows)

    def test_process_logs_summary(self, nested_events, fixed_clock):
        entries = ProfileLogRoute(clock=fixed_clock).process_logs(nested_events)
        assert len(entries) == 2
        assert entries[0].message.startswith("A was called 1 times.")
        assert entries[0].level == LogLevel.PROFILE
        assert entries[0].category == "application"
        assert entries[0].time == 100.0

    def test_process_logs_callstack(self, nested_events, fixed_clock):
        route = ProfileLogRoute(report=ReportMode.CALLSTACK, clock=fixed_clock)
        messages = [e.message for e in route.process_logs(nested_events)]
        assert messages == [
            "A was called and took 5.00000 seconds",
            "    B was called and took 2.00000 seconds",
        ]

    def test_process_logs_writes_file(self, nested_events, fixed_clock, tmp_path):
        log_file = tmp_path / "runtime" / "profile.log"
        route = ProfileLogRoute(report="callstack", log_file=log_file, clock=fixed_clock)
        route.process_logs(nested_events)
        route.process_logs(nested_events)

        lines = log_file.read_text().splitlines()
        assert len(lines) == 4
        assert lines[0].endswith("[profile] [application] A was called and took 5.00000 seconds")

    def test_no_file_for_empty_report(self, tmp_path):
        log_file = tmp_path / "profile.log"
        assert ProfileLogRoute(log_file=log_file).process_logs([]) == []
        assert not log_file.exists()

    def test_mismatch_propagates(self, make_event, tmp_path):
        log_file = tmp_path / "profile.log"
        route = ProfileLogRoute(log_file=log_file)
        with pytest.raises(MismatchError):
            route.process_logs([make_event("end:A", 1.0)])
        assert not log_file.exists()

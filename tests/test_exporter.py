"""Tests for report rendering and the file artifact writer."""

import os
from datetime import datetime

from logspace.config import Config
from logspace.exporter import FileArtifactWriter, render_report, report_filename
from logspace.models import LogEntry, format_entry
from logspace.severity import Severity

_TS = datetime(2025, 5, 14, 10, 23, 45)


def _entry(message, severity=Severity.INFO, category="Gameplay", stack=None):
    return LogEntry(timestamp=_TS, severity=severity, category=category,
                    message=message, stack_trace=stack)


class TestFormatEntry:
    def test_general_line(self):
        assert format_entry(_entry("hello")) == "[10:23:45][Info][Gameplay] hello"

    def test_error_with_stack(self):
        line = format_entry(_entry("crash", Severity.ERROR, "System", "frame a\nframe b\n"))
        assert line == "[10:23:45][Error][System] crash\nStack Trace:\nframe a\nframe b"

    def test_error_without_stack(self):
        assert "Stack Trace" not in format_entry(_entry("crash", Severity.ERROR))


class TestReportFilename:
    def test_format(self):
        assert report_filename("LogSpace", _TS) == "LogSpace_2025-05-14_10-23-45.txt"


class TestRenderReport:
    def test_layout(self):
        config = Config(categories=frozenset({"System", "Gameplay"}),
                        minimum_severity=Severity.WARNING, general_capacity=3)
        errors = [_entry("crash", Severity.ERROR, "System", "trace")]
        general = [_entry("low hp", Severity.WARNING)]
        text = render_report(errors, general, config, _TS)

        assert text.splitlines() == [
            "Log generated on 2025-05-14 10:23:45",
            "Listening to categories: [Gameplay, System] with minimum level: Warning",
            "",
            "========== ERROR LOGS (forced retention) ==========",
            "[10:23:45][Error][System] crash",
            "Stack Trace:",
            "trace",
            "",
            "========== GENERAL LOGS (max 3) ==========",
            "[10:23:45][Warning][Gameplay] low hp",
        ]

    def test_all_categories_header(self):
        text = render_report([], [], Config(), _TS)
        assert "Listening to categories: [All] with minimum level: Info" in text

    def test_errors_before_general(self):
        text = render_report([_entry("E", Severity.ERROR)], [_entry("G")], Config(), _TS)
        assert text.index("ERROR LOGS") < text.index("] E") < text.index("GENERAL LOGS") < text.index("] G")

    def test_sections_stable_across_calls(self):
        errors = [_entry("crash", Severity.ERROR)]
        general = [_entry("a"), _entry("b")]
        first = render_report(errors, general, Config(), _TS)
        second = render_report(errors, general, Config(), datetime(2030, 1, 1))
        assert first.splitlines()[2:] == second.splitlines()[2:]


class TestFileArtifactWriter:
    def test_writes_text(self, tmp_path):
        writer = FileArtifactWriter(str(tmp_path))
        result = writer.write("report.txt", "hello\n", "GameLogs")

        assert result.ok is True
        assert result.path == os.path.join(str(tmp_path), "GameLogs", "report.txt")
        with open(result.path, encoding="utf-8") as f:
            assert f.read() == "hello\n"

    def test_writes_bytes(self, tmp_path):
        writer = FileArtifactWriter(str(tmp_path))
        result = writer.write("shot.png", b"\x89PNG", os.path.join("GameLogs", "PC"))
        assert result.ok is True
        with open(result.path, "rb") as f:
            assert f.read() == b"\x89PNG"

    def test_failure_is_reported(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("I am a file, not a directory")
        writer = FileArtifactWriter(str(tmp_path))

        result = writer.write("report.txt", "data", "blocker")
        assert result.ok is False
        assert result.reason

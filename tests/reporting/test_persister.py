"""Tests for the report artifact."""

import logging

import pytest

from cyclogate.analysis import ComplexityReport
from cyclogate.exceptions import ReportFormatError, ReportWriteError
from cyclogate.reporting import ReportPersister, format_line, parse_line, read_report


def _report(**scores):
    report = ComplexityReport()
    for name, value in scores.items():
        report.record(name, value)
    return report


class TestLineFormat:
    """Test the artifact line format."""

    def test_format_line(self):
        assert format_line("foo", 4) == "Function: foo, Cyclomatic Complexity: 4"

    def test_parse_line(self):
        assert parse_line("Function: foo, Cyclomatic Complexity: 4\n") == ("foo", 4)

    def test_parse_name_with_comma(self):
        """Operator names may contain commas; the score is anchored at the end."""
        line = format_line("operator,", 2)
        assert parse_line(line) == ("operator,", 2)

    def test_parse_rejects_zero_score(self):
        """Scores start at 1, so a zero score is not an artifact line."""
        with pytest.raises(ReportFormatError):
            parse_line("Function: a, Cyclomatic Complexity: 0")

    def test_parse_rejects_garbage(self):
        with pytest.raises(ReportFormatError) as exc_info:
            parse_line("Function foo = 4", line_number=3)
        assert exc_info.value.line_number == 3


class TestReportPersister:
    """Test ReportPersister."""

    def test_scenario_two_line_artifact(self, tmp_path):
        """Persisting {foo:4, bar:1} writes two lines that parse back."""
        path = tmp_path / "results.cy"
        outcome = ReportPersister().persist(_report(foo=4, bar=1), path)

        assert outcome.ok
        assert outcome.lines_written == 2
        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines == [
            "Function: bar, Cyclomatic Complexity: 1",
            "Function: foo, Cyclomatic Complexity: 4",
        ]
        assert read_report(path).as_dict() == {"foo": 4, "bar": 1}

    def test_overwrites_previous_content(self, tmp_path):
        path = tmp_path / "results.cy"
        path.write_text("stale line\nanother\nthird\n", encoding="utf-8")
        ReportPersister().persist(_report(only=2), path)
        assert path.read_text(encoding="utf-8") == "Function: only, Cyclomatic Complexity: 2\n"

    def test_empty_report_writes_empty_file(self, tmp_path):
        path = tmp_path / "results.cy"
        outcome = ReportPersister().persist(ComplexityReport(), path)
        assert outcome.ok
        assert path.read_text(encoding="utf-8") == ""

    def test_unsorted_keeps_insertion_order(self, tmp_path):
        path = tmp_path / "results.cy"
        ReportPersister(sort_entries=False).persist(_report(zeta=1, alpha=2), path)
        names = [parse_line(line)[0] for line in path.read_text(encoding="utf-8").splitlines()]
        assert names == ["zeta", "alpha"]

    def test_write_failure_is_reported_not_raised(self, tmp_path, caplog):
        destination = tmp_path / "missing-dir" / "results.cy"
        with caplog.at_level(logging.ERROR, logger="cyclogate.reporting.persister"):
            outcome = ReportPersister().persist(_report(foo=4), destination)

        assert not outcome.ok
        assert isinstance(outcome.error, ReportWriteError)
        assert outcome.lines_written == 0
        assert outcome.destination == destination
        assert any("Error opening file" in r.getMessage() for r in caplog.records)

    def test_unencodable_name_is_reported_not_raised(self, tmp_path):
        """A name with a lone surrogate fails the write without raising."""
        report = ComplexityReport()
        report.record("bad\ud800", 2)
        outcome = ReportPersister().persist(report, tmp_path / "results.cy")

        assert not outcome.ok
        assert isinstance(outcome.error, ReportWriteError)
        assert outcome.lines_written == 0

    def test_raise_for_status(self, tmp_path):
        outcome = ReportPersister().persist(_report(foo=4), tmp_path)
        with pytest.raises(ReportWriteError):
            outcome.raise_for_status()

    def test_raise_for_status_on_success(self, tmp_path):
        outcome = ReportPersister().persist(_report(foo=4), tmp_path / "ok.cy")
        outcome.raise_for_status()


class TestReadReport:
    """Test read_report()."""

    def test_skips_blank_and_malformed_lines(self, tmp_path):
        path = tmp_path / "results.cy"
        path.write_text(
            "Function: a, Cyclomatic Complexity: 3\n\nnot a report line\nFunction: b, Cyclomatic Complexity: 1\n",
            encoding="utf-8",
        )
        assert read_report(path).as_dict() == {"a": 3, "b": 1}

    def test_strict_raises(self, tmp_path):
        path = tmp_path / "results.cy"
        path.write_text("nonsense\n", encoding="utf-8")
        with pytest.raises(ReportFormatError):
            read_report(path, strict=True)

    def test_zero_score_skipped(self, tmp_path):
        path = tmp_path / "results.cy"
        path.write_text(
            "Function: a, Cyclomatic Complexity: 0\nFunction: b, Cyclomatic Complexity: 2\n",
            encoding="utf-8",
        )
        assert read_report(path).as_dict() == {"b": 2}

    def test_zero_score_strict_raises(self, tmp_path):
        path = tmp_path / "results.cy"
        path.write_text("Function: a, Cyclomatic Complexity: 0\n", encoding="utf-8")
        with pytest.raises(ReportFormatError):
            read_report(path, strict=True)

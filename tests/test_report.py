"""Tests for report aggregation and formatting."""

import json
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from wcag_engine.models import Verdict, verdict
from wcag_engine.report import (
    DEFAULT_TITLE,
    create_report,
    format_error_response,
    format_human_report,
    format_machine_report,
    format_tool_response,
)


# ---------------------------------------------------------------------------
# Sample verdicts
# ---------------------------------------------------------------------------

SAMPLE = [
    verdict("1.4.3", "fail", "Contrast ratio 2.1:1 fails AA requirement", recommendation="Increase contrast"),
    verdict("1.4.6", "fail", "Contrast ratio 2.1:1 does not meet AAA requirement"),
    verdict("2.4.2", "pass", 'Page has title: "Orders"'),
    verdict("1.4.12", "info", "No spacing values provided to check."),
    verdict("2.4.10", "warning", "Consider adding more section headings", recommendation="Add headings"),
    verdict("1.1.1", "pass", "Alt text present"),
]


class TestSummary:
    def test_counts(self):
        s = create_report(SAMPLE).summary
        assert s.total == 6
        assert s.passed == 2
        assert s.failed == 2
        assert s.warnings == 1
        # info verdicts count toward the total only
        assert s.passed + s.failed + s.warnings < s.total

    def test_level_tallies(self):
        s = create_report(SAMPLE).summary
        assert s.level_a.to_dict() == {"passed": 2, "failed": 0}
        assert s.level_aa.to_dict() == {"passed": 0, "failed": 1}
        assert s.level_aaa.to_dict() == {"passed": 0, "failed": 1}

    def test_summary_dict_keys(self):
        d = create_report(SAMPLE).summary.to_dict()
        assert list(d) == ["total", "passed", "failed", "warnings", "levelA", "levelAA", "levelAAA"]

    def test_empty_report(self):
        report = create_report([])
        assert report.summary.total == 0
        assert report.machine["results"] == []
        assert "SUMMARY: 0 passed, 0 failed, 0 warnings" in report.human

    def test_results_keep_input_order(self):
        report = create_report(SAMPLE)
        assert [r.criterion for r in report.results] == [r.criterion for r in SAMPLE]


# ---------------------------------------------------------------------------
# Human-readable text
# ---------------------------------------------------------------------------


class TestHumanReport:
    def test_banner_and_title(self):
        text = format_human_report(SAMPLE, "Contrast check")
        lines = text.split("\n")
        assert lines[0] == "═" * 63
        assert lines[1].strip() == "CONTRAST CHECK"
        assert lines[-1] == "═" * 63

    def test_default_title(self):
        assert DEFAULT_TITLE in format_human_report([])

    def test_sections_in_order(self):
        text = format_human_report(SAMPLE)
        positions = [text.index(h) for h in ("FAILURES", "WARNINGS", "INFO", "PASSED")]
        assert positions == sorted(positions)

    def test_empty_sections_are_omitted(self):
        text = format_human_report([verdict("2.4.2", "pass", "ok")])
        assert "FAILURES" not in text
        assert "PASSED" in text

    def test_failure_block_has_recommendation(self):
        text = format_human_report(SAMPLE)
        assert "[1.4.3] Contrast (Minimum) (Level AA)" in text
        assert "   → Increase contrast" in text

    def test_pass_lines_are_single_line(self):
        text = format_human_report(SAMPLE)
        assert '[2.4.2] Page Titled (Level A): Page has title: "Orders"' in text


# ---------------------------------------------------------------------------
# Machine-readable dict
# ---------------------------------------------------------------------------


class TestMachineReport:
    def test_envelope(self):
        machine = format_machine_report(SAMPLE, "text")
        assert machine["wcagVersion"] == "2.1"
        assert machine["category"] == "text"
        assert machine["timestamp"].endswith("Z")
        assert machine["summary"] == {"total": 6, "passed": 2, "failed": 2, "warnings": 1}

    def test_category_is_optional(self):
        assert "category" not in format_machine_report(SAMPLE)

    def test_entries_carry_url(self):
        entry = format_machine_report(SAMPLE)["results"][0]
        assert entry["criterion"] == "1.4.3"
        assert entry["url"] == "https://www.w3.org/TR/WCAG21/#contrast-minimum"
        assert entry["recommendation"] == "Increase contrast"

    def test_unknown_criterion_has_no_url(self):
        stray = Verdict(criterion="9.9.9", name="Custom", level="A", status="pass", message="ok")
        entry = format_machine_report([stray])["results"][0]
        assert "url" not in entry
        assert entry["criterion"] == "9.9.9"

    def test_is_json_serialisable(self):
        json.dumps(create_report(SAMPLE).to_dict())


# ---------------------------------------------------------------------------
# Tool-style responses
# ---------------------------------------------------------------------------


class TestToolResponse:
    def test_two_text_items(self):
        report = create_report(SAMPLE, title="Check", category="text")
        content = format_tool_response(report)
        assert [c["type"] for c in content] == ["text", "text"]
        assert content[0]["text"] == report.human
        assert content[1]["text"].startswith("\n\nMACHINE-READABLE:\n")
        parsed = json.loads(content[1]["text"].split("MACHINE-READABLE:\n", 1)[1])
        assert parsed["category"] == "text"

    def test_error_response(self):
        resp = format_error_response(ValueError("bad input"))
        assert resp == {"content": [{"type": "text", "text": "Error: bad input"}], "isError": True}

    def test_error_response_unwraps_key_error(self):
        resp = format_error_response(KeyError("Unknown operation: nope"))
        assert resp["content"][0]["text"] == "Error: Unknown operation: nope"

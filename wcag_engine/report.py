"""Aggregate verdicts into a human-readable and a machine-readable report."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from .models import FAIL, INFO, PASS, WARNING, Verdict
from .wcag_rules import LEVELS, get_criterion

WCAG_VERSION = "2.1"
DEFAULT_TITLE = "WCAG ACCESSIBILITY REPORT"

_BANNER = "═" * 63
_SEPARATOR = "─" * 63

# (status, section heading) in presentation order
_SECTIONS = (
    (FAIL, "❌ FAILURES"),
    (WARNING, "⚠️  WARNINGS"),
    (INFO, "ℹ️  INFO"),
    (PASS, "✅ PASSED"),
)


@dataclass
class LevelTally:
    passed: int = 0
    failed: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {"passed": self.passed, "failed": self.failed}


@dataclass
class ReportSummary:
    total: int
    passed: int
    failed: int
    warnings: int
    level_a: LevelTally = field(default_factory=LevelTally)
    level_aa: LevelTally = field(default_factory=LevelTally)
    level_aaa: LevelTally = field(default_factory=LevelTally)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "warnings": self.warnings,
            "levelA": self.level_a.to_dict(),
            "levelAA": self.level_aa.to_dict(),
            "levelAAA": self.level_aaa.to_dict(),
        }


@dataclass
class ValidationReport:
    summary: ReportSummary
    results: List[Verdict]
    human: str
    machine: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": self.summary.to_dict(),
            "results": [r.to_dict() for r in self.results],
            "human": self.human,
            "machine": self.machine,
        }


def _count(results: Sequence[Verdict], status: str, level: Optional[str] = None) -> int:
    return sum(
        1 for r in results if r.status == status and (level is None or r.level == level)
    )


# ---------------------------------------------------------------------------
# Human-readable text
# ---------------------------------------------------------------------------


def format_human_report(results: Sequence[Verdict], title: Optional[str] = None) -> str:
    lines: List[str] = [
        _BANNER,
        f"{' ' * 20}{(title or DEFAULT_TITLE).upper()}{' ' * 14}",
        _BANNER,
        "",
        f"SUMMARY: {_count(results, PASS)} passed, {_count(results, FAIL)} failed, "
        f"{_count(results, WARNING)} warnings",
        "",
    ]

    for status, heading in _SECTIONS:
        bucket = [r for r in results if r.status == status]
        if not bucket:
            continue
        lines.append(heading)
        lines.append(_SEPARATOR)
        if status in (FAIL, WARNING):
            for r in bucket:
                lines.append(f"[{r.criterion}] {r.name} (Level {r.level})")
                lines.append(f"   {r.message}")
                if r.recommendation:
                    lines.append(f"   → {r.recommendation}")
                lines.append("")
        else:
            for r in bucket:
                lines.append(f"[{r.criterion}] {r.name} (Level {r.level}): {r.message}")
            lines.append("")

    lines.append(_BANNER)
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Machine-readable dict
# ---------------------------------------------------------------------------


def format_machine_report(
    results: Sequence[Verdict], category: Optional[str] = None
) -> Dict[str, Any]:
    """
    Build the JSON-ready report.

    Each result carries the criterion URL from the catalog; ids missing from
    the catalog simply have no ``url`` key.
    """
    entries: List[Dict[str, Any]] = []
    for r in results:
        entry = r.to_dict()
        criterion = get_criterion(r.criterion)
        if criterion is not None:
            entry["url"] = criterion.url
        entries.append(entry)

    machine: Dict[str, Any] = {
        "wcagVersion": WCAG_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
    }
    if category is not None:
        machine["category"] = category
    machine["summary"] = {
        "total": len(results),
        "passed": _count(results, PASS),
        "failed": _count(results, FAIL),
        "warnings": _count(results, WARNING),
    }
    machine["results"] = entries
    return machine


def create_report(
    results: Sequence[Verdict],
    title: Optional[str] = None,
    category: Optional[str] = None,
) -> ValidationReport:
    results = list(results)
    tallies = {
        level: LevelTally(passed=_count(results, PASS, level), failed=_count(results, FAIL, level))
        for level in LEVELS
    }
    summary = ReportSummary(
        total=len(results),
        passed=_count(results, PASS),
        failed=_count(results, FAIL),
        warnings=_count(results, WARNING),
        level_a=tallies["A"],
        level_aa=tallies["AA"],
        level_aaa=tallies["AAA"],
    )
    return ValidationReport(
        summary=summary,
        results=results,
        human=format_human_report(results, title),
        machine=format_machine_report(results, category),
    )


# ---------------------------------------------------------------------------
# Tool-style responses
# ---------------------------------------------------------------------------


def format_tool_response(report: ValidationReport) -> List[Dict[str, str]]:
    return [
        {"type": "text", "text": report.human},
        {
            "type": "text",
            "text": "\n\nMACHINE-READABLE:\n" + json.dumps(report.machine, indent=2, ensure_ascii=False),
        },
    ]


def format_error_response(error: Any) -> Dict[str, Any]:
    message = str(error.args[0]) if isinstance(error, KeyError) and error.args else str(error)
    return {
        "content": [{"type": "text", "text": f"Error: {message}"}],
        "isError": True,
    }

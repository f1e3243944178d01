"""Render a validation report as a PDF document."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List, Optional

import fitz  # PyMuPDF

from .models import FAIL, INFO, PASS, WARNING
from .report import DEFAULT_TITLE, ValidationReport
from .wcag_rules import get_criterion


# ---------------------------------------------------------------------------
# Colour palette
# ---------------------------------------------------------------------------

_STATUS_COLORS: Dict[str, tuple] = {
    FAIL: (0.80, 0.13, 0.13),      # red
    WARNING: (0.85, 0.55, 0.10),   # amber
    INFO: (0.20, 0.40, 0.70),      # blue
    PASS: (0.13, 0.55, 0.13),      # green
}
_HEADER_BG = (0.16, 0.30, 0.46)       # dark-blue
_HEADER_FG = (1.0, 1.0, 1.0)
_RULE_COLOR = (0.80, 0.80, 0.80)
_BODY_COLOR = (0.20, 0.20, 0.20)
_MUTED_COLOR = (0.45, 0.45, 0.45)

_SECTIONS = (
    (FAIL, "Failures"),
    (WARNING, "Warnings"),
    (INFO, "Information"),
    (PASS, "Passed"),
)

# ---------------------------------------------------------------------------
# Layout constants
# ---------------------------------------------------------------------------

_PAGE_W, _PAGE_H = 612, 792           # US Letter (pts)
_MARGIN = 54
_CONTENT_W = _PAGE_W - 2 * _MARGIN
_FOOTER_Y = _PAGE_H - 36


def generate_report_pdf(report: ValidationReport, title: Optional[str] = None) -> bytes:
    """Return a self-contained PDF (as bytes) of a validation report.

    Parameters
    ----------
    report:
        The report built by :func:`wcag_engine.report.create_report`.
    title:
        Heading for the first page; defaults to the generic report title.
    """
    heading = title or DEFAULT_TITLE.title()
    doc = fitz.open()

    # ── helpers ──────────────────────────────────────────────────────────
    page: fitz.Page | None = None
    y = _PAGE_H  # force new page on first use

    def _ensure_space(needed: float) -> None:
        if page is None or y + needed > _FOOTER_Y:
            _new_page()

    def _new_page() -> None:
        nonlocal page, y
        page = doc.new_page(width=_PAGE_W, height=_PAGE_H)
        y = _MARGIN
        page.insert_text(
            (_MARGIN, _FOOTER_Y),
            f"WCAG {report.machine.get('wcagVersion', '2.1')} Report - generated "
            f"{datetime.now(timezone.utc):%Y-%m-%d %H:%M UTC}",
            fontsize=7,
            color=_MUTED_COLOR,
        )
        page.insert_text(
            (_PAGE_W - _MARGIN - 30, _FOOTER_Y),
            f"Page {doc.page_count}",
            fontsize=7,
            color=_MUTED_COLOR,
        )

    def _draw_rule() -> None:
        nonlocal y
        if page is None:
            return
        page.draw_line(
            fitz.Point(_MARGIN, y),
            fitz.Point(_PAGE_W - _MARGIN, y),
            color=_RULE_COLOR,
            width=0.5,
        )
        y += 6

    def _write(
        text: str,
        fontsize: float = 10,
        color: tuple = _BODY_COLOR,
        bold: bool = False,
        indent: float = 0,
        spacing: float = 2,
    ) -> None:
        """Insert *text* with automatic wrapping and page breaks."""
        nonlocal y
        fontname = "helv" if not bold else "hebo"
        line_h = fontsize * 1.35
        for paragraph in text.split("\n"):
            for line in _wrap_text(paragraph, fontname, fontsize, _CONTENT_W - indent):
                _ensure_space(line_h + spacing)
                page.insert_text(  # type: ignore[union-attr]
                    (_MARGIN + indent, y + fontsize),
                    line,
                    fontsize=fontsize,
                    fontname=fontname,
                    color=color,
                )
                y += line_h
        y += spacing

    # ── header ──────────────────────────────────────────────────────────
    _new_page()

    rect = fitz.Rect(_MARGIN, y, _PAGE_W - _MARGIN, y + 48)
    page.draw_rect(rect, color=_HEADER_BG, fill=_HEADER_BG)  # type: ignore[union-attr]
    page.insert_text(  # type: ignore[union-attr]
        (_MARGIN + 12, y + 30),
        heading,
        fontsize=18,
        fontname="hebo",
        color=_HEADER_FG,
    )
    y += 60

    category = report.machine.get("category")
    if category:
        _write(f"Category: {category}", fontsize=11, bold=True)
    _write(f"Checked at: {report.machine.get('timestamp', '')}", fontsize=9, color=_MUTED_COLOR)
    y += 4

    # ── summary ─────────────────────────────────────────────────────────
    s = report.summary
    _draw_rule()
    _write("Summary", fontsize=12, bold=True)
    _write(f"Passed: {s.passed}", color=_STATUS_COLORS[PASS], indent=8)
    _write(f"Failed: {s.failed}", color=_STATUS_COLORS[FAIL], indent=8)
    _write(f"Warnings: {s.warnings}", color=_STATUS_COLORS[WARNING], indent=8)
    _write(f"Total: {s.total}", bold=True, indent=8)
    y += 2
    for label, tally in (("A", s.level_a), ("AA", s.level_aa), ("AAA", s.level_aaa)):
        _write(
            f"Level {label}: {tally.passed} passed, {tally.failed} failed",
            fontsize=9,
            color=_MUTED_COLOR,
            indent=8,
        )
    y += 6

    # ── verdicts by status ──────────────────────────────────────────────
    if not report.results:
        _draw_rule()
        _write("No checks produced a verdict for this input.", color=_MUTED_COLOR)

    for status, label in _SECTIONS:
        bucket = [r for r in report.results if r.status == status]
        if not bucket:
            continue
        color = _STATUS_COLORS[status]

        _draw_rule()
        _write(f"{label} ({len(bucket)})", fontsize=13, bold=True, color=color)
        y += 4

        for r in bucket:
            # room for the heading and at least one line
            _ensure_space(40)
            _write(f"[{r.criterion}] {r.name} (Level {r.level})", fontsize=10, bold=True, color=color)
            _write(r.message, fontsize=9, indent=12)
            if r.recommendation:
                _write(f"How to fix: {r.recommendation}", fontsize=9, indent=12, color=_MUTED_COLOR)
            criterion = get_criterion(r.criterion)
            if criterion is not None:
                _write(criterion.url, fontsize=7, indent=12, color=_MUTED_COLOR)
            y += 4

    # ── finalise ────────────────────────────────────────────────────────
    doc.set_metadata({
        "title": heading,
        "subject": f"WCAG {category} report" if category else "WCAG report",
    })
    pdf_bytes = doc.tobytes()
    doc.close()
    return pdf_bytes


# ---------------------------------------------------------------------------
# Text-wrapping helper
# ---------------------------------------------------------------------------


def _wrap_text(text: str, fontname: str, fontsize: float, max_width: float) -> List[str]:
    """Wrap *text* into lines that fit within *max_width* points."""
    font = fitz.Font(fontname)
    lines: List[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}".strip()
        if font.text_length(candidate, fontsize=fontsize) > max_width and current:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines or [""]

"""
Operation registry: maps operation names to typed inputs, checks and report
titles, and runs them through the report builder.

Two kinds of operation are registered:

* check operations (``check_contrast``, ``validate_form``, ...) which build a
  :class:`~wcag_engine.report.ValidationReport`;
* catalog operations (``get_wcag_text_criteria``, ``get_all_wcag_criteria``,
  ``get_wcag_checklist``) which describe the criteria table.

:func:`call_tool` wraps both in the ``{"content": [...]}`` envelope used by
tool-style clients and turns errors into ``isError`` responses.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Type

from . import aria_checks, form_checks, keyboard_checks, media_checks, structure_checks, text_checks
from .models import InputModel, PayloadError, Verdict, parse_payload
from .report import ValidationReport, create_report, format_error_response, format_tool_response
from .wcag_rules import CATEGORIES, LEVELS, Criterion, WCAG_RULES, criterion_sort_key, levels_up_to

logger = logging.getLogger(__name__)


class UnknownOperationError(KeyError):
    """Raised when an operation name is not registered."""


@dataclass(frozen=True)
class Operation:
    name: str
    category: str
    title: str
    input_type: Type[InputModel]
    handler: Callable[[Any], List[Verdict]]
    description: str = ""

    def parse(self, payload: Optional[Mapping[str, Any]]) -> Any:
        return parse_payload(self.input_type, payload if payload is not None else {})

    def run(self, payload: Optional[Mapping[str, Any]]) -> ValidationReport:
        results = self.handler(self.parse(payload))
        return create_report(results, title=self.title, category=self.category)


# ---------------------------------------------------------------------------
# Argument shapes for checks that take plain parameters
# ---------------------------------------------------------------------------


class ContrastArgs(InputModel):
    foreground: str
    background: str
    font_size: float = text_checks.DEFAULT_FONT_SIZE
    is_bold: bool = False


class TextSpacingArgs(InputModel):
    font_size: float
    line_height: Optional[float] = None
    letter_spacing: Optional[float] = None
    word_spacing: Optional[float] = None
    paragraph_spacing: Optional[float] = None


class LineLengthArgs(InputModel):
    text: str


class JustificationArgs(InputModel):
    is_justified: bool


class ResizeTextArgs(InputModel):
    uses_relative_units: bool
    has_fixed_containers: bool = False


class LanguageArgs(InputModel):
    has_lang_attribute: bool
    lang_value: Optional[str] = None


class ImagesOfTextArgs(InputModel):
    has_images_of_text: bool
    is_essential: bool = False


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

OPERATIONS: Dict[str, Operation] = {}


def _register(
    name: str,
    category: str,
    title: str,
    input_type: Type[InputModel],
    handler: Callable[[Any], List[Verdict]],
    description: str = "",
) -> None:
    OPERATIONS[name] = Operation(name, category, title, input_type, handler, description)


# ── text ────────────────────────────────────────────────────────────────────
_register(
    "check_contrast", "text", "WCAG Contrast Check", ContrastArgs,
    lambda a: text_checks.check_contrast_ratio(a.foreground, a.background, a.font_size, a.is_bold),
    "Contrast ratio against WCAG 1.4.3 (AA) and 1.4.6 (AAA)",
)
_register(
    "check_text_spacing", "text", "WCAG Text Spacing Check", TextSpacingArgs,
    lambda a: text_checks.check_text_spacing(
        a.font_size, a.line_height, a.letter_spacing, a.word_spacing, a.paragraph_spacing
    ),
    "Text spacing overrides (WCAG 1.4.12)",
)
_register(
    "check_line_length", "text", "WCAG Line Length Check", LineLengthArgs,
    lambda a: text_checks.check_line_length(a.text),
    "Line length of a text block (WCAG 1.4.8)",
)
_register(
    "check_text_justification", "text", "WCAG Text Justification Check", JustificationArgs,
    lambda a: text_checks.check_text_justification(a.is_justified),
    "Full justification of text blocks (WCAG 1.4.8)",
)
_register(
    "check_resize_text", "text", "WCAG Resize and Reflow Check", ResizeTextArgs,
    lambda a: text_checks.check_resize_text(a.uses_relative_units, a.has_fixed_containers),
    "Relative units and fixed containers (WCAG 1.4.4, 1.4.10)",
)
_register(
    "check_language", "text", "WCAG Language Check", LanguageArgs,
    lambda a: text_checks.check_language(a.has_lang_attribute, a.lang_value),
    "Language of page (WCAG 3.1.1)",
)
_register(
    "check_images_of_text", "text", "WCAG Images of Text Check", ImagesOfTextArgs,
    lambda a: text_checks.check_images_of_text(a.has_images_of_text, a.is_essential),
    "Images of text (WCAG 1.4.5)",
)
_register(
    "validate_text", "text", "WCAG Text Accessibility Report", text_checks.TextValidationInput,
    text_checks.validate_text,
    "Every text check the payload has data for",
)

# ── structure ───────────────────────────────────────────────────────────────
_register("check_heading_structure", "structure", "WCAG Heading Structure Check",
          structure_checks.HeadingStructureInput, structure_checks.check_heading_structure,
          "Heading hierarchy (WCAG 1.3.1, 2.4.6, 2.4.10)")
_register("check_page_title", "structure", "WCAG Page Title Check",
          structure_checks.PageTitleInput, structure_checks.check_page_title,
          "Page titled (WCAG 2.4.2)")
_register("check_link_purpose", "structure", "WCAG Link Purpose Check",
          structure_checks.LinkInput, structure_checks.check_link_purpose,
          "Link purpose (WCAG 2.4.4, 2.4.9)")
_register("check_bypass_blocks", "structure", "WCAG Bypass Blocks Check",
          structure_checks.BypassBlocksInput, structure_checks.check_bypass_blocks,
          "Bypass blocks (WCAG 2.4.1)")
_register("check_reading_order", "structure", "WCAG Reading Order Check",
          structure_checks.ReadingOrderInput, structure_checks.check_reading_order,
          "Meaningful sequence (WCAG 1.3.2)")
_register("check_info_relationships", "structure", "WCAG Info and Relationships Check",
          structure_checks.InfoRelationshipsInput, structure_checks.check_info_relationships,
          "Info and relationships (WCAG 1.3.1)")
_register("check_multiple_ways", "structure", "WCAG Multiple Ways Check",
          structure_checks.MultipleWaysInput, structure_checks.check_multiple_ways,
          "Multiple ways (WCAG 2.4.5)")
_register("check_consistent_navigation", "structure", "WCAG Consistent Navigation Check",
          structure_checks.ConsistentNavigationInput, structure_checks.check_consistent_navigation,
          "Consistent navigation (WCAG 3.2.3)")
_register("check_consistent_identification", "structure", "WCAG Consistent Identification Check",
          structure_checks.ConsistentIdentificationInput,
          structure_checks.check_consistent_identification,
          "Consistent identification (WCAG 3.2.4)")

# ── keyboard ────────────────────────────────────────────────────────────────
_register("check_keyboard_access", "keyboard", "WCAG Keyboard Access Check",
          keyboard_checks.KeyboardAccessInput, keyboard_checks.check_keyboard_access,
          "Keyboard operability (WCAG 2.1.1, 2.1.2, 2.1.4, 2.4.3, 3.2.1)")
_register("check_focus_indicator", "keyboard", "WCAG Focus Indicator Check",
          keyboard_checks.FocusIndicatorInput, keyboard_checks.check_focus_indicator,
          "Focus visible (WCAG 2.4.7)")
_register("check_timing", "keyboard", "WCAG Timing Check",
          keyboard_checks.TimingInput, keyboard_checks.check_timing,
          "Timing adjustable (WCAG 2.2.1, 2.2.3)")
_register("check_motion", "keyboard", "WCAG Motion Actuation Check",
          keyboard_checks.MotionInput, keyboard_checks.check_motion_actuation,
          "Motion actuation (WCAG 2.5.4)")
_register("check_pointer_gestures", "keyboard", "WCAG Pointer Gestures Check",
          keyboard_checks.PointerGesturesInput, keyboard_checks.check_pointer_gestures,
          "Pointer gestures (WCAG 2.5.1)")
_register("check_pointer_cancellation", "keyboard", "WCAG Pointer Cancellation Check",
          keyboard_checks.PointerCancellationInput, keyboard_checks.check_pointer_cancellation,
          "Pointer cancellation (WCAG 2.5.2)")
_register("check_target_size", "keyboard", "WCAG Target Size Check",
          keyboard_checks.TargetSizeInput, keyboard_checks.check_target_size,
          "Target size (WCAG 2.5.5)")

# ── aria ────────────────────────────────────────────────────────────────────
_register("check_name_role_value", "aria", "WCAG Name, Role, Value Check",
          aria_checks.NameRoleValueInput, aria_checks.check_name_role_value,
          "Name, role, value (WCAG 4.1.2)")
_register("check_status_message", "aria", "WCAG Status Message Check",
          aria_checks.StatusMessageInput, aria_checks.check_status_message,
          "Status messages (WCAG 4.1.3)")
_register("check_aria_attributes", "aria", "WCAG ARIA Attributes Check",
          aria_checks.AriaElement, aria_checks.check_aria_attributes,
          "ARIA attribute usage (WCAG 4.1.2)")
_register("check_landmarks", "aria", "WCAG Landmarks Check",
          aria_checks.LandmarksInput, aria_checks.check_landmarks,
          "Landmark labelling (WCAG 4.1.2)")
_register("check_label_in_name", "aria", "WCAG Label in Name Check",
          aria_checks.LabelInNameInput, aria_checks.check_label_in_name,
          "Label in name (WCAG 2.5.3)")

# ── forms ───────────────────────────────────────────────────────────────────
_register("check_form_labels", "forms", "WCAG Form Labels Check",
          form_checks.FormFieldInput, form_checks.check_form_labels,
          "Labels or instructions (WCAG 3.3.2)")
_register("check_input_purpose", "forms", "WCAG Input Purpose Check",
          form_checks.InputPurposeInput, form_checks.check_input_purpose,
          "Identify input purpose (WCAG 1.3.5)")
_register("check_error_identification", "forms", "WCAG Error Identification Check",
          form_checks.FormErrorInput, form_checks.check_error_identification,
          "Error identification and suggestion (WCAG 3.3.1, 3.3.3)")
_register("check_error_prevention", "forms", "WCAG Error Prevention Check",
          form_checks.FormSubmissionInput, form_checks.check_error_prevention,
          "Error prevention (WCAG 3.3.4, 3.3.6)")
_register("check_input_constraints", "forms", "WCAG Input Constraints Check",
          form_checks.InputConstraintInput, form_checks.check_input_constraints,
          "Format instructions and help (WCAG 3.3.2, 3.3.5)")
_register("check_on_input", "forms", "WCAG On Input Check",
          form_checks.OnInputInput, form_checks.check_on_input,
          "On input (WCAG 3.2.2)")
_register(
    "validate_form", "forms", "WCAG Form Validation Report", form_checks.FormValidationInput,
    lambda a: form_checks.validate_form(a.fields, a.errors),
    "Labels and input purpose per field, then error identification",
)

# ── media ───────────────────────────────────────────────────────────────────
_register("check_captions", "media", "WCAG Captions Check",
          media_checks.CaptionInput, media_checks.check_captions,
          "Captions (WCAG 1.2.2, 1.2.4)")
_register("check_audio_description", "media", "WCAG Audio Description Check",
          media_checks.AudioDescriptionInput, media_checks.check_audio_description,
          "Audio description (WCAG 1.2.3, 1.2.5, 1.2.7)")
_register("check_transcript", "media", "WCAG Transcript Check",
          media_checks.TranscriptInput, media_checks.check_transcript,
          "Transcripts (WCAG 1.2.1, 1.2.8)")
_register("check_media_controls", "media", "WCAG Media Controls Check",
          media_checks.MediaControlInput, media_checks.check_media_controls,
          "Audio control (WCAG 1.4.2)")
_register("check_animation", "media", "WCAG Animation Check",
          media_checks.AnimationInput, media_checks.check_animation,
          "Pause, stop, hide (WCAG 2.2.2, 2.3.3)")
_register("check_flashing", "media", "WCAG Flashing Content Check",
          media_checks.FlashingInput, media_checks.check_flashing,
          "Flashing thresholds (WCAG 2.3.1, 2.3.2)")
_register("check_sign_language", "media", "WCAG Sign Language Check",
          media_checks.SignLanguageInput, media_checks.check_sign_language,
          "Sign language (WCAG 1.2.6)")


def get_operation(name: str) -> Operation:
    try:
        return OPERATIONS[name]
    except KeyError:
        raise UnknownOperationError(f"Unknown operation: {name}") from None


def list_operations(category: Optional[str] = None) -> List[Operation]:
    return [op for op in OPERATIONS.values() if category is None or op.category == category]


def run_operation(name: str, payload: Optional[Mapping[str, Any]] = None) -> ValidationReport:
    """Parse *payload* for operation *name*, run it and build the report.

    Raises :class:`UnknownOperationError` for unregistered names and
    :class:`~wcag_engine.models.PayloadError` for malformed payloads.
    """
    op = get_operation(name)
    try:
        report = op.run(payload)
    except PayloadError as exc:
        logger.warning("Rejected payload for %s: %s", name, exc)
        raise
    s = report.summary
    logger.info(
        "%s: %d verdicts (%d passed, %d failed, %d warnings)",
        name, s.total, s.passed, s.failed, s.warnings,
    )
    return report


# ---------------------------------------------------------------------------
# Catalog operations
# ---------------------------------------------------------------------------

_CATEGORY_LABELS = {
    "text": "Text",
    "media": "Media",
    "structure": "Structure",
    "keyboard": "Keyboard",
    "forms": "Forms",
    "aria": "ARIA",
    "text-alternatives": "Text Alternatives",
}

# Categories exposed as get_wcag_<category>_criteria
CATALOG_CATEGORIES = ("text", "keyboard", "aria", "media", "forms", "structure")


class CriteriaQuery(InputModel):
    level: Optional[str] = None
    category: Optional[str] = None


class ChecklistQuery(InputModel):
    level: str


def _json_block(data: Any) -> Dict[str, str]:
    return {
        "type": "text",
        "text": "\n\nMACHINE-READABLE:\n" + json.dumps(data, indent=2, ensure_ascii=False),
    }


def category_criteria(category: str) -> List[Dict[str, str]]:
    """Content blocks describing every criterion in *category*."""
    criteria = [c for c in WCAG_RULES.values() if c.category == category]
    formatted = "\n\n".join(
        f"[{c.id}] {c.name} (Level {c.level})\n   {c.description}\n   {c.url}" for c in criteria
    )
    label = _CATEGORY_LABELS.get(category, category.title())
    return [
        {"type": "text", "text": f"WCAG 2.1 {label}-Related Success Criteria\n\n{formatted}"},
        _json_block([c.to_dict() for c in criteria]),
    ]


def filter_criteria(level: Optional[str] = None, category: Optional[str] = None) -> List[Criterion]:
    """
    Return criteria matching *level* and *category*.

    *level* is cumulative (``"AA"`` includes A); ``None`` or ``"all"`` means
    every level, and likewise for *category*.
    """
    if level not in (None, "all") and level not in LEVELS:
        raise PayloadError(f"Unknown level: {level!r}")
    if category not in (None, "all") and category not in CATEGORIES:
        raise PayloadError(f"Unknown category: {category!r}")

    wanted = LEVELS if level in (None, "all") else levels_up_to(level)
    return [
        c for c in WCAG_RULES.values()
        if c.level in wanted and (category in (None, "all") or c.category == category)
    ]


def all_criteria(query: CriteriaQuery) -> List[Dict[str, str]]:
    criteria = filter_criteria(query.level, query.category)

    grouped: Dict[str, List[Criterion]] = {}
    for c in criteria:
        grouped.setdefault(c.category, []).append(c)

    lines = [
        "WCAG 2.1 Success Criteria",
        f"Filters: Level={query.level or 'all'}, Category={query.category or 'all'}",
        f"Total: {len(criteria)} criteria\n",
    ]
    for cat in sorted(grouped):
        items = sorted(grouped[cat], key=criterion_sort_key)
        lines.append(f"\n## {cat.upper()} ({len(items)})")
        lines.append("─" * 50)
        for c in items:
            lines.append(f"[{c.id}] {c.name} (Level {c.level})")
            lines.append(f"   {c.description}")

    machine = {
        cat: [c.to_dict() for c in sorted(grouped[cat], key=criterion_sort_key)] for cat in sorted(grouped)
    }
    return [{"type": "text", "text": "\n".join(lines)}, _json_block(machine)]


def checklist(query: ChecklistQuery) -> List[Dict[str, str]]:
    try:
        levels = levels_up_to(query.level)
    except ValueError as exc:
        raise PayloadError(str(exc)) from exc

    criteria = sorted((c for c in WCAG_RULES.values() if c.level in levels), key=criterion_sort_key)
    lines = [
        f"WCAG 2.1 Level {query.level} Checklist",
        f"(Includes {' + '.join(levels)} criteria)",
        f"Total: {len(criteria)} criteria to check\n",
        "═" * 60,
    ]
    current = ""
    for c in criteria:
        if c.category != current:
            current = c.category
            lines.append(f"\n### {current.upper()}")
        lines.append(f"☐ [{c.id}] {c.name} ({c.level})")
    lines.append("\n" + "═" * 60)
    lines.append("\nUse individual check operations for detailed validation:")
    for cat in CATALOG_CATEGORIES:
        names = ", ".join(op.name for op in list_operations(cat)[:3])
        lines.append(f"- {_CATEGORY_LABELS[cat]}: {names}")

    return [{"type": "text", "text": "\n".join(lines)}]


CatalogHandler = Callable[[Mapping[str, Any]], List[Dict[str, str]]]

CATALOG_OPERATIONS: Dict[str, CatalogHandler] = {
    f"get_wcag_{cat}_criteria": (lambda _payload, _cat=cat: category_criteria(_cat))
    for cat in CATALOG_CATEGORIES
}
CATALOG_OPERATIONS["get_all_wcag_criteria"] = lambda p: all_criteria(parse_payload(CriteriaQuery, p))
CATALOG_OPERATIONS["get_wcag_checklist"] = lambda p: checklist(parse_payload(ChecklistQuery, p))


# ---------------------------------------------------------------------------
# Tool-style entry point
# ---------------------------------------------------------------------------


def call_tool(name: str, arguments: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """
    Run any registered operation and wrap the output in a content envelope.

    Failures never propagate: unknown names and bad payloads come back as
    ``{"content": [...], "isError": True}``.
    """
    payload = arguments if arguments is not None else {}
    try:
        if name in CATALOG_OPERATIONS:
            logger.info("Catalog lookup: %s", name)
            return {"content": CATALOG_OPERATIONS[name](payload)}
        return {"content": format_tool_response(run_operation(name, payload))}
    except (UnknownOperationError, PayloadError) as exc:
        logger.warning("Tool call %s failed: %s", name, exc)
        return format_error_response(exc)

"""WCAG 2.1 success criteria reference table used by the rule engine."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

_BASE_URL = "https://www.w3.org/TR/WCAG21/"

LEVELS = ("A", "AA", "AAA")

CATEGORIES = (
    "text",
    "media",
    "structure",
    "keyboard",
    "forms",
    "aria",
    "text-alternatives",
)


@dataclass(frozen=True)
class Criterion:
    """A single WCAG 2.1 success criterion."""

    id: str
    name: str
    level: str          # "A" | "AA" | "AAA"
    description: str
    url: str
    category: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _criterion(
    id: str, name: str, level: str, category: str, anchor: str, description: str
) -> Criterion:
    return Criterion(
        id=id,
        name=name,
        level=level,
        description=description,
        url=_BASE_URL + "#" + anchor,
        category=category,
    )


_CRITERIA: List[Criterion] = [
    # Perceivable: text alternatives
    _criterion("1.1.1", "Non-text Content", "A", "text-alternatives", "non-text-content",
               "All non-text content has a text alternative"),

    # Perceivable: time-based media
    _criterion("1.2.1", "Audio-only and Video-only (Prerecorded)", "A", "media",
               "audio-only-and-video-only-prerecorded",
               "Alternatives provided for prerecorded audio-only and video-only content"),
    _criterion("1.2.2", "Captions (Prerecorded)", "A", "media", "captions-prerecorded",
               "Captions provided for prerecorded audio in synchronized media"),
    _criterion("1.2.3", "Audio Description or Media Alternative (Prerecorded)", "A", "media",
               "audio-description-or-media-alternative-prerecorded",
               "Audio description or alternative provided for prerecorded video"),
    _criterion("1.2.4", "Captions (Live)", "AA", "media", "captions-live",
               "Captions provided for live audio in synchronized media"),
    _criterion("1.2.5", "Audio Description (Prerecorded)", "AA", "media",
               "audio-description-prerecorded",
               "Audio description provided for prerecorded video"),
    _criterion("1.2.6", "Sign Language (Prerecorded)", "AAA", "media",
               "sign-language-prerecorded",
               "Sign language interpretation provided for prerecorded audio"),
    _criterion("1.2.7", "Extended Audio Description (Prerecorded)", "AAA", "media",
               "extended-audio-description-prerecorded",
               "Extended audio description provided where pauses are insufficient"),
    _criterion("1.2.8", "Media Alternative (Prerecorded)", "AAA", "media",
               "media-alternative-prerecorded",
               "Alternative provided for prerecorded synchronized media"),
    _criterion("1.2.9", "Audio-only (Live)", "AAA", "media", "audio-only-live",
               "Alternative provided for live audio-only content"),

    # Perceivable: adaptable
    _criterion("1.3.1", "Info and Relationships", "A", "structure", "info-and-relationships",
               "Information, structure, and relationships can be programmatically determined"),
    _criterion("1.3.2", "Meaningful Sequence", "A", "structure", "meaningful-sequence",
               "Correct reading sequence can be programmatically determined"),
    _criterion("1.3.3", "Sensory Characteristics", "A", "structure", "sensory-characteristics",
               "Instructions don't rely solely on sensory characteristics"),
    _criterion("1.3.4", "Orientation", "AA", "structure", "orientation",
               "Content not restricted to a single display orientation"),
    _criterion("1.3.5", "Identify Input Purpose", "AA", "forms", "identify-input-purpose",
               "Input field purpose can be programmatically determined"),
    _criterion("1.3.6", "Identify Purpose", "AAA", "structure", "identify-purpose",
               "Purpose of UI components can be programmatically determined"),

    # Perceivable: distinguishable
    _criterion("1.4.1", "Use of Color", "A", "text", "use-of-color",
               "Color is not the only visual means of conveying information"),
    _criterion("1.4.2", "Audio Control", "A", "media", "audio-control",
               "Mechanism to pause, stop, or control audio volume"),
    _criterion("1.4.3", "Contrast (Minimum)", "AA", "text", "contrast-minimum",
               "Text has a contrast ratio of at least 4.5:1 (3:1 for large text)"),
    _criterion("1.4.4", "Resize Text", "AA", "text", "resize-text",
               "Text can be resized up to 200% without loss of content or functionality"),
    _criterion("1.4.5", "Images of Text", "AA", "text", "images-of-text",
               "Use text rather than images of text (except for customizable or essential)"),
    _criterion("1.4.6", "Contrast (Enhanced)", "AAA", "text", "contrast-enhanced",
               "Text has a contrast ratio of at least 7:1 (4.5:1 for large text)"),
    _criterion("1.4.7", "Low or No Background Audio", "AAA", "media",
               "low-or-no-background-audio",
               "Prerecorded audio has low/no background noise or can be turned off"),
    _criterion("1.4.8", "Visual Presentation", "AAA", "text", "visual-presentation",
               "Text blocks: select colors, max 80 chars/line, no justify, "
               "adequate spacing, 200% resize"),
    _criterion("1.4.9", "Images of Text (No Exception)", "AAA", "text",
               "images-of-text-no-exception",
               "Images of text only used for pure decoration or where essential"),
    _criterion("1.4.10", "Reflow", "AA", "text", "reflow",
               "Content reflows at 400% zoom without horizontal scrolling (320px viewport)"),
    _criterion("1.4.11", "Non-text Contrast", "AA", "text", "non-text-contrast",
               "UI components and graphics have 3:1 contrast ratio"),
    _criterion("1.4.12", "Text Spacing", "AA", "text", "text-spacing",
               "No loss of content when: line-height 1.5x, paragraph spacing 2x, "
               "letter spacing 0.12x, word spacing 0.16x"),
    _criterion("1.4.13", "Content on Hover or Focus", "AA", "keyboard",
               "content-on-hover-or-focus",
               "Additional content on hover/focus is dismissible, hoverable, and persistent"),

    # Operable: keyboard accessible
    _criterion("2.1.1", "Keyboard", "A", "keyboard", "keyboard",
               "All functionality available from keyboard"),
    _criterion("2.1.2", "No Keyboard Trap", "A", "keyboard", "no-keyboard-trap",
               "Keyboard focus can be moved away from any component"),
    _criterion("2.1.3", "Keyboard (No Exception)", "AAA", "keyboard", "keyboard-no-exception",
               "All functionality available from keyboard without exception"),
    _criterion("2.1.4", "Character Key Shortcuts", "A", "keyboard", "character-key-shortcuts",
               "Character key shortcuts can be turned off or remapped"),

    # Operable: enough time
    _criterion("2.2.1", "Timing Adjustable", "A", "keyboard", "timing-adjustable",
               "Time limits can be turned off, adjusted, or extended"),
    _criterion("2.2.2", "Pause, Stop, Hide", "A", "media", "pause-stop-hide",
               "Moving, blinking, scrolling, or auto-updating content can be paused, "
               "stopped, or hidden"),
    _criterion("2.2.3", "No Timing", "AAA", "keyboard", "no-timing",
               "Timing is not essential part of the activity"),
    _criterion("2.2.4", "Interruptions", "AAA", "keyboard", "interruptions",
               "Interruptions can be postponed or suppressed"),
    _criterion("2.2.5", "Re-authenticating", "AAA", "forms", "re-authenticating",
               "Data preserved after re-authentication"),
    _criterion("2.2.6", "Timeouts", "AAA", "forms", "timeouts",
               "Users warned of inactivity timeouts that cause data loss"),

    # Operable: seizures and physical reactions
    _criterion("2.3.1", "Three Flashes or Below Threshold", "A", "media",
               "three-flashes-or-below-threshold",
               "No content flashes more than 3 times per second"),
    _criterion("2.3.2", "Three Flashes", "AAA", "media", "three-flashes",
               "No content flashes more than 3 times per second"),
    _criterion("2.3.3", "Animation from Interactions", "AAA", "media",
               "animation-from-interactions",
               "Motion animation can be disabled"),

    # Operable: navigable
    _criterion("2.4.1", "Bypass Blocks", "A", "structure", "bypass-blocks",
               "Mechanism to bypass repeated blocks of content"),
    _criterion("2.4.2", "Page Titled", "A", "structure", "page-titled",
               "Pages have descriptive titles"),
    _criterion("2.4.3", "Focus Order", "A", "keyboard", "focus-order",
               "Focus order preserves meaning and operability"),
    _criterion("2.4.4", "Link Purpose (In Context)", "A", "structure",
               "link-purpose-in-context",
               "Link purpose can be determined from link text or context"),
    _criterion("2.4.5", "Multiple Ways", "AA", "structure", "multiple-ways",
               "More than one way to locate a page within a set of pages"),
    _criterion("2.4.6", "Headings and Labels", "AA", "structure", "headings-and-labels",
               "Headings and labels describe topic or purpose"),
    _criterion("2.4.7", "Focus Visible", "AA", "keyboard", "focus-visible",
               "Keyboard focus indicator is visible"),
    _criterion("2.4.8", "Location", "AAA", "structure", "location",
               "Information about user's location within a set of pages"),
    _criterion("2.4.9", "Link Purpose (Link Only)", "AAA", "structure",
               "link-purpose-link-only",
               "Link purpose can be determined from link text alone"),
    _criterion("2.4.10", "Section Headings", "AAA", "structure", "section-headings",
               "Section headings are used to organize content"),

    # Operable: input modalities
    _criterion("2.5.1", "Pointer Gestures", "A", "keyboard", "pointer-gestures",
               "Multipoint or path-based gestures have single-pointer alternatives"),
    _criterion("2.5.2", "Pointer Cancellation", "A", "keyboard", "pointer-cancellation",
               "Single-pointer functions can be cancelled"),
    _criterion("2.5.3", "Label in Name", "A", "forms", "label-in-name",
               "Accessible name contains the visible label text"),
    _criterion("2.5.4", "Motion Actuation", "A", "keyboard", "motion-actuation",
               "Motion-triggered functions can be disabled and have alternatives"),
    _criterion("2.5.5", "Target Size", "AAA", "keyboard", "target-size",
               "Target size is at least 44×44 CSS pixels"),
    _criterion("2.5.6", "Concurrent Input Mechanisms", "AAA", "keyboard",
               "concurrent-input-mechanisms",
               "Input modalities are not restricted"),

    # Understandable: readable
    _criterion("3.1.1", "Language of Page", "A", "text", "language-of-page",
               "Default language of the page can be programmatically determined"),
    _criterion("3.1.2", "Language of Parts", "AA", "text", "language-of-parts",
               "Language of passages/phrases can be programmatically determined"),
    _criterion("3.1.3", "Unusual Words", "AAA", "text", "unusual-words",
               "Mechanism for identifying definitions of unusual words"),
    _criterion("3.1.4", "Abbreviations", "AAA", "text", "abbreviations",
               "Mechanism for identifying expanded form of abbreviations"),
    _criterion("3.1.5", "Reading Level", "AAA", "text", "reading-level",
               "Supplemental content available when text requires advanced reading"),
    _criterion("3.1.6", "Pronunciation", "AAA", "text", "pronunciation",
               "Mechanism for identifying pronunciation of words"),

    # Understandable: predictable
    _criterion("3.2.1", "On Focus", "A", "keyboard", "on-focus",
               "Focus does not trigger unexpected context changes"),
    _criterion("3.2.2", "On Input", "A", "forms", "on-input",
               "Input does not trigger unexpected context changes"),
    _criterion("3.2.3", "Consistent Navigation", "AA", "structure", "consistent-navigation",
               "Navigation is consistent across pages"),
    _criterion("3.2.4", "Consistent Identification", "AA", "structure",
               "consistent-identification",
               "Components with same functionality identified consistently"),
    _criterion("3.2.5", "Change on Request", "AAA", "forms", "change-on-request",
               "Context changes only on user request"),

    # Understandable: input assistance
    _criterion("3.3.1", "Error Identification", "A", "forms", "error-identification",
               "Input errors are identified and described in text"),
    _criterion("3.3.2", "Labels or Instructions", "A", "forms", "labels-or-instructions",
               "Labels or instructions provided for user input"),
    _criterion("3.3.3", "Error Suggestion", "AA", "forms", "error-suggestion",
               "Suggestions provided for correcting input errors"),
    _criterion("3.3.4", "Error Prevention (Legal, Financial, Data)", "AA", "forms",
               "error-prevention-legal-financial-data",
               "Submissions are reversible, checked, or confirmed"),
    _criterion("3.3.5", "Help", "AAA", "forms", "help",
               "Context-sensitive help is available"),
    _criterion("3.3.6", "Error Prevention (All)", "AAA", "forms", "error-prevention-all",
               "All submissions are reversible, checked, or confirmed"),

    # Robust: compatible
    _criterion("4.1.1", "Parsing", "A", "aria", "parsing",
               "Elements have complete start/end tags and are properly nested "
               "(obsolete in WCAG 2.2)"),
    _criterion("4.1.2", "Name, Role, Value", "A", "aria", "name-role-value",
               "UI components have accessible name, role, states, properties, and values"),
    _criterion("4.1.3", "Status Messages", "AA", "aria", "status-messages",
               "Status messages can be programmatically determined without focus"),
]

# Read-only view keyed by criterion id
WCAG_RULES: Mapping[str, Criterion] = MappingProxyType({c.id: c for c in _CRITERIA})


def get_criterion(criterion_id: str) -> Optional[Criterion]:
    """Return the criterion with *criterion_id*, or ``None`` if unknown."""
    return WCAG_RULES.get(criterion_id)


def get_criteria_by_category(category: str) -> List[Criterion]:
    return [c for c in WCAG_RULES.values() if c.category == category]


def get_criteria_by_level(level: str) -> List[Criterion]:
    return [c for c in WCAG_RULES.values() if c.level == level]


def levels_up_to(level: str) -> List[str]:
    """Return the conformance levels a *level* target includes (AA -> A, AA)."""
    if level not in LEVELS:
        raise ValueError(f"Unknown conformance level: {level!r}")
    return list(LEVELS[: LEVELS.index(level) + 1])


def criterion_sort_key(criterion: Criterion) -> tuple:
    return tuple(int(part) for part in criterion.id.split("."))


def get_checklist(level: str) -> List[Criterion]:
    """
    Return every criterion required for conformance at *level*, in id order.

    Conformance is cumulative: an AA target includes all A criteria.
    """
    wanted = levels_up_to(level)
    return sorted((c for c in WCAG_RULES.values() if c.level in wanted), key=criterion_sort_key)

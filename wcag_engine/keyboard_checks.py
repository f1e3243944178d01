"""Keyboard operability, focus, timing, motion and pointer checks."""

from __future__ import annotations

from typing import List, Optional

from .models import FAIL, InputModel, PASS, WARNING, Verdict, fmt_num, join_present, verdict

INTERACTIVE_ELEMENTS = frozenset({"button", "link", "input", "select", "textarea", "a"})

FOCUS_CONTRAST_MIN = 3.0
TARGET_SIZE_AAA = 44
TARGET_SIZE_USABLE = 24


class KeyboardAccessInput(InputModel):
    element_type: str
    is_focusable: Optional[bool] = None
    has_focus_indicator: Optional[bool] = None
    tab_index: Optional[int] = None
    can_escape_focus: Optional[bool] = None
    has_keyboard_access: Optional[bool] = None
    access_key: Optional[str] = None
    changes_context_on_focus: Optional[bool] = None
    has_character_shortcuts: Optional[bool] = None
    shortcuts_configurable: Optional[bool] = None
    focus_order_issues: Optional[List[str]] = None


class FocusIndicatorInput(InputModel):
    is_visible: bool
    contrast_ratio: Optional[float] = None
    indicator_style: Optional[str] = None
    indicator_size: Optional[float] = None


class TimingInput(InputModel):
    has_time_limit: bool
    can_turn_off: Optional[bool] = None
    can_adjust: Optional[bool] = None
    can_extend: Optional[bool] = None
    is_essential: Optional[bool] = None


class MotionInput(InputModel):
    has_motion_actuation: bool
    can_disable_motion: Optional[bool] = None
    has_alternative: Optional[bool] = None
    is_essential: Optional[bool] = None


class PointerGesturesInput(InputModel):
    has_multipoint_gestures: bool
    has_path_based_gestures: bool
    has_single_pointer_alternative: Optional[bool] = None
    is_essential: Optional[bool] = None


class PointerCancellationInput(InputModel):
    element_type: str
    activates_on_down: Optional[bool] = None
    can_abort: Optional[bool] = None
    can_undo: Optional[bool] = None
    is_essential: Optional[bool] = None


class TargetSizeInput(InputModel):
    element_type: str
    width: float
    height: float
    has_spacing: Optional[bool] = None


# ---------------------------------------------------------------------------
# Keyboard access (WCAG 2.1.1 / 2.1.2 / 2.1.4 / 2.4.3 / 3.2.1)
# ---------------------------------------------------------------------------


def check_keyboard_access(data: KeyboardAccessInput) -> List[Verdict]:
    """
    Evaluate each keyboard property the caller supplied.

    Fields left as ``None`` are not evaluated, so an input with only
    ``element_type`` yields no verdicts.
    """
    el = data.element_type
    results: List[Verdict] = []

    if data.has_keyboard_access is not None:
        ok = data.has_keyboard_access
        results.append(
            verdict(
                "2.1.1",
                PASS if ok else FAIL,
                (
                    f"{el} functionality is accessible via keyboard"
                    if ok
                    else f"{el} functionality is NOT accessible via keyboard"
                ),
                value=ok,
                recommendation=(
                    None if ok else "Ensure all functionality is operable through keyboard interface"
                ),
            )
        )

    if data.can_escape_focus is not None:
        ok = data.can_escape_focus
        results.append(
            verdict(
                "2.1.2",
                PASS if ok else FAIL,
                (
                    f"Focus can be moved away from {el} using keyboard"
                    if ok
                    else f"Focus is TRAPPED in {el} - cannot escape with keyboard"
                ),
                value=ok,
                recommendation=(
                    None
                    if ok
                    else "Ensure focus can be moved away using standard keyboard navigation "
                    "(Tab, Shift+Tab, Escape)"
                ),
            )
        )

    if data.has_character_shortcuts:
        ok = data.shortcuts_configurable is True
        results.append(
            verdict(
                "2.1.4",
                PASS if ok else FAIL,
                (
                    "Character key shortcuts can be turned off or remapped"
                    if ok
                    else "Character key shortcuts exist but cannot be turned off or remapped"
                ),
                value=data.shortcuts_configurable,
                recommendation=(
                    None
                    if ok
                    else "Allow users to turn off, remap, or make shortcuts only active on focus"
                ),
            )
        )

    if data.focus_order_issues is not None:
        ok = not data.focus_order_issues
        results.append(
            verdict(
                "2.4.3",
                PASS if ok else FAIL,
                (
                    "Focus order preserves meaning and operability"
                    if ok
                    else f"Focus order issues: {', '.join(data.focus_order_issues)}"
                ),
                value=ok,
                recommendation=(
                    None
                    if ok
                    else "Ensure focus order follows a logical sequence that preserves meaning"
                ),
            )
        )

    if data.changes_context_on_focus is not None:
        ok = not data.changes_context_on_focus
        results.append(
            verdict(
                "3.2.1",
                PASS if ok else FAIL,
                (
                    f"{el} does not change context when receiving focus"
                    if ok
                    else f"{el} changes context unexpectedly when receiving focus"
                ),
                value=ok,
                recommendation=(
                    None
                    if ok
                    else "Do not initiate context changes (form submission, new windows, "
                    "focus changes) on focus alone"
                ),
            )
        )

    if data.is_focusable is False and el.lower() in INTERACTIVE_ELEMENTS:
        results.append(
            verdict(
                "2.1.1",
                FAIL,
                f"Interactive {el} is not keyboard focusable",
                value=False,
                recommendation=(
                    "Ensure interactive elements are focusable "
                    "(avoid tabindex=-1 on interactive elements)"
                ),
            )
        )

    if data.tab_index is not None and data.tab_index > 0:
        results.append(
            verdict(
                "2.4.3",
                WARNING,
                f"Positive tabindex ({data.tab_index}) may disrupt natural focus order",
                value=data.tab_index,
                recommendation="Avoid positive tabindex values; use DOM order or tabindex=0 instead",
            )
        )

    return results


# ---------------------------------------------------------------------------
# Focus indicator (WCAG 2.4.7)
# ---------------------------------------------------------------------------


def check_focus_indicator(data: FocusIndicatorInput) -> List[Verdict]:
    visible = data.is_visible
    results = [
        verdict(
            "2.4.7",
            PASS if visible else FAIL,
            "Focus indicator is visible" if visible else "Focus indicator is NOT visible",
            value=visible,
            recommendation=(
                None
                if visible
                else "Ensure a visible focus indicator is present "
                "(outline, border, background change, etc.)"
            ),
        )
    ]

    if visible and data.contrast_ratio is not None:
        ratio = data.contrast_ratio
        ok = ratio >= FOCUS_CONTRAST_MIN
        results.append(
            verdict(
                "2.4.7",
                PASS if ok else WARNING,
                (
                    f"Focus indicator contrast ratio ({fmt_num(ratio)}:1) meets minimum (3:1)"
                    if ok
                    else f"Focus indicator contrast ratio ({fmt_num(ratio)}:1) may be insufficient"
                ),
                value=ratio,
                required=FOCUS_CONTRAST_MIN,
                recommendation=(
                    None if ok else "Consider increasing focus indicator contrast to at least 3:1"
                ),
            )
        )

    return results


# ---------------------------------------------------------------------------
# Timing (WCAG 2.2.1 / 2.2.3)
# ---------------------------------------------------------------------------


def check_timing(data: TimingInput) -> List[Verdict]:
    if not data.has_time_limit:
        return [verdict("2.2.1", PASS, "No time limits present")]

    if data.is_essential:
        return [
            verdict("2.2.1", PASS, "Time limit is essential to the activity (exempt)", value=True)
        ]

    adjustments = join_present(
        data.can_turn_off and "turned off",
        data.can_adjust and "adjusted",
        data.can_extend and "extended",
    )
    ok = bool(adjustments)
    results = [
        verdict(
            "2.2.1",
            PASS if ok else FAIL,
            (
                f"Time limit can be: {adjustments}"
                if ok
                else "Time limit cannot be turned off, adjusted, or extended"
            ),
            value=ok,
            recommendation=(
                None
                if ok
                else "Allow users to turn off, adjust, or extend time limits (at least 10x the default)"
            ),
        )
    ]

    results.append(
        verdict(
            "2.2.3",
            PASS if data.can_turn_off else WARNING,
            (
                "Time limit can be turned off (meets AAA)"
                if data.can_turn_off
                else "Time limit exists - consider removing for AAA compliance"
            ),
            value=data.can_turn_off,
            recommendation=(
                None
                if data.can_turn_off
                else "For AAA, timing should not be an essential part of the activity"
            ),
        )
    )
    return results


# ---------------------------------------------------------------------------
# Motion and pointer input (WCAG 2.5.1 / 2.5.2 / 2.5.4)
# ---------------------------------------------------------------------------


def check_motion_actuation(data: MotionInput) -> List[Verdict]:
    if not data.has_motion_actuation:
        return [verdict("2.5.4", PASS, "No motion-triggered functionality present")]

    if data.is_essential:
        return [verdict("2.5.4", PASS, "Motion actuation is essential to the function (exempt)")]

    options = join_present(
        data.can_disable_motion and "can be disabled",
        data.has_alternative and "has alternative input",
    )
    ok = bool(options)
    return [
        verdict(
            "2.5.4",
            PASS if ok else FAIL,
            (
                f"Motion actuation: {options}"
                if ok
                else "Motion actuation cannot be disabled and has no alternative"
            ),
            value=ok,
            recommendation=(
                None
                if ok
                else "Provide a way to disable motion actuation and offer alternative input methods"
            ),
        )
    ]


def check_pointer_gestures(data: PointerGesturesInput) -> List[Verdict]:
    if not data.has_multipoint_gestures and not data.has_path_based_gestures:
        return [verdict("2.5.1", PASS, "No multipoint or path-based gestures required")]

    if data.is_essential:
        return [verdict("2.5.1", PASS, "Complex gestures are essential to the function (exempt)")]

    ok = bool(data.has_single_pointer_alternative)
    return [
        verdict(
            "2.5.1",
            PASS if ok else FAIL,
            (
                "Single-pointer alternative available for complex gestures"
                if ok
                else "Complex gestures lack single-pointer alternatives"
            ),
            value=data.has_single_pointer_alternative,
            recommendation=(
                None
                if ok
                else "Provide single-pointer alternatives (tap, click) "
                "for all multipoint/path-based gestures"
            ),
        )
    ]


def check_pointer_cancellation(data: PointerCancellationInput) -> List[Verdict]:
    el = data.element_type

    if data.is_essential:
        return [verdict("2.5.2", PASS, "Down-event activation is essential (exempt)")]

    if not data.activates_on_down:
        return [verdict("2.5.2", PASS, f"{el} activates on up-event (pointer release)")]

    mechanisms = join_present(
        data.can_abort and "can be aborted",
        data.can_undo and "can be undone",
    )
    ok = bool(mechanisms)
    return [
        verdict(
            "2.5.2",
            PASS if ok else FAIL,
            (
                f"{el} down-event: {mechanisms}"
                if ok
                else f"{el} activates on down-event without abort/undo mechanism"
            ),
            value=ok,
            recommendation=(
                None
                if ok
                else "Use up-event for activation, or provide abort mechanism "
                "(move pointer away) or undo"
            ),
        )
    ]


# ---------------------------------------------------------------------------
# Target size (WCAG 2.5.5)
# ---------------------------------------------------------------------------


def check_target_size(data: TargetSizeInput) -> List[Verdict]:
    el = data.element_type
    size = f"{fmt_num(data.width)}×{fmt_num(data.height)}"
    ok = data.width >= TARGET_SIZE_AAA and data.height >= TARGET_SIZE_AAA

    results = [
        verdict(
            "2.5.5",
            PASS if ok else WARNING,
            (
                f"{el} target size ({size}px) meets AAA (44×44px)"
                if ok
                else f"{el} target size ({size}px) below AAA recommendation (44×44px)"
            ),
            value=size,
            required="44×44",
            recommendation=(
                None
                if ok
                else "Increase target size to at least 44×44 CSS pixels for better touch accessibility"
            ),
        )
    ]

    smallest = min(data.width, data.height)
    if smallest < TARGET_SIZE_USABLE:
        results.append(
            verdict(
                "2.5.5",
                WARNING,
                f"{el} target size ({fmt_num(smallest)}px minimum dimension) may be difficult to activate",
                value=smallest,
                recommendation="Consider increasing to at least 24×24px for usability",
            )
        )

    return results

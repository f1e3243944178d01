"""Tests for keyboard, focus, timing, motion and pointer checks."""

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from wcag_engine.keyboard_checks import (
    FocusIndicatorInput,
    KeyboardAccessInput,
    MotionInput,
    PointerCancellationInput,
    PointerGesturesInput,
    TargetSizeInput,
    TimingInput,
    check_focus_indicator,
    check_keyboard_access,
    check_motion_actuation,
    check_pointer_cancellation,
    check_pointer_gestures,
    check_target_size,
    check_timing,
)


# ---------------------------------------------------------------------------
# Keyboard access
# ---------------------------------------------------------------------------


class TestKeyboardAccess:
    def test_only_element_type_yields_nothing(self):
        assert check_keyboard_access(KeyboardAccessInput(element_type="button")) == []

    def test_keyboard_trap_fails(self):
        (r,) = check_keyboard_access(KeyboardAccessInput(element_type="modal", can_escape_focus=False))
        assert r.criterion == "2.1.2"
        assert r.status == "fail"
        assert "TRAPPED" in r.message

    def test_accessible_element_passes(self):
        results = check_keyboard_access(
            KeyboardAccessInput(element_type="button", has_keyboard_access=True, can_escape_focus=True)
        )
        assert [(r.criterion, r.status) for r in results] == [("2.1.1", "pass"), ("2.1.2", "pass")]

    def test_unconfigurable_shortcuts_fail(self):
        (r,) = check_keyboard_access(KeyboardAccessInput(element_type="app", has_character_shortcuts=True))
        assert r.criterion == "2.1.4"
        assert r.status == "fail"

    def test_configurable_shortcuts_pass(self):
        (r,) = check_keyboard_access(
            KeyboardAccessInput(element_type="app", has_character_shortcuts=True, shortcuts_configurable=True)
        )
        assert r.status == "pass"

    def test_focus_order_issues_listed(self):
        (r,) = check_keyboard_access(
            KeyboardAccessInput(element_type="form", focus_order_issues=["submit before fields", "hidden link"])
        )
        assert r.criterion == "2.4.3"
        assert r.message == "Focus order issues: submit before fields, hidden link"

    def test_empty_focus_order_issues_pass(self):
        (r,) = check_keyboard_access(KeyboardAccessInput(element_type="form", focus_order_issues=[]))
        assert r.status == "pass"

    def test_context_change_on_focus_fails(self):
        (r,) = check_keyboard_access(KeyboardAccessInput(element_type="select", changes_context_on_focus=True))
        assert r.criterion == "3.2.1"
        assert r.status == "fail"

    def test_unfocusable_interactive_element(self):
        (r,) = check_keyboard_access(KeyboardAccessInput(element_type="Button", is_focusable=False))
        assert r.criterion == "2.1.1"
        assert r.message == "Interactive Button is not keyboard focusable"

    def test_unfocusable_div_is_not_flagged(self):
        assert check_keyboard_access(KeyboardAccessInput(element_type="div", is_focusable=False)) == []

    def test_positive_tabindex_warns(self):
        (r,) = check_keyboard_access(KeyboardAccessInput(element_type="a", tab_index=3))
        assert r.status == "warning"
        assert r.value == 3

    def test_zero_tabindex_is_fine(self):
        assert check_keyboard_access(KeyboardAccessInput(element_type="a", tab_index=0)) == []


# ---------------------------------------------------------------------------
# Focus indicator
# ---------------------------------------------------------------------------


class TestFocusIndicator:
    def test_invisible_indicator_fails_and_skips_contrast(self):
        results = check_focus_indicator(FocusIndicatorInput(is_visible=False, contrast_ratio=1.2))
        assert len(results) == 1
        assert results[0].status == "fail"

    def test_low_contrast_is_warning(self):
        results = check_focus_indicator(FocusIndicatorInput(is_visible=True, contrast_ratio=2.5))
        assert [r.status for r in results] == ["pass", "warning"]
        assert "(2.5:1) may be insufficient" in results[1].message

    def test_contrast_at_minimum_passes(self):
        results = check_focus_indicator(FocusIndicatorInput(is_visible=True, contrast_ratio=3))
        assert results[1].status == "pass"
        assert results[1].required == 3.0


# ---------------------------------------------------------------------------
# Timing
# ---------------------------------------------------------------------------


class TestTiming:
    def test_no_time_limit(self):
        (r,) = check_timing(TimingInput(has_time_limit=False))
        assert r.status == "pass"

    def test_essential_time_limit(self):
        (r,) = check_timing(TimingInput(has_time_limit=True, is_essential=True))
        assert r.status == "pass"
        assert "exempt" in r.message

    def test_unadjustable_time_limit(self):
        results = check_timing(TimingInput(has_time_limit=True))
        assert [(r.criterion, r.status) for r in results] == [("2.2.1", "fail"), ("2.2.3", "warning")]

    def test_extendable_time_limit(self):
        results = check_timing(TimingInput(has_time_limit=True, can_adjust=True, can_extend=True))
        assert results[0].status == "pass"
        assert results[0].message == "Time limit can be: adjusted, extended"
        assert results[1].status == "warning"

    def test_turn_off_meets_aaa(self):
        results = check_timing(TimingInput(has_time_limit=True, can_turn_off=True))
        assert [r.status for r in results] == ["pass", "pass"]


# ---------------------------------------------------------------------------
# Motion and pointer input
# ---------------------------------------------------------------------------


class TestMotionActuation:
    def test_no_motion(self):
        assert check_motion_actuation(MotionInput(has_motion_actuation=False))[0].status == "pass"

    def test_motion_without_alternative_fails(self):
        (r,) = check_motion_actuation(MotionInput(has_motion_actuation=True))
        assert r.status == "fail"

    def test_motion_with_options(self):
        data = MotionInput(has_motion_actuation=True, can_disable_motion=True, has_alternative=True)
        (r,) = check_motion_actuation(data)
        assert r.message == "Motion actuation: can be disabled, has alternative input"

    def test_essential_motion(self):
        (r,) = check_motion_actuation(MotionInput(has_motion_actuation=True, is_essential=True))
        assert r.status == "pass"


class TestPointerGestures:
    def test_no_complex_gestures(self):
        data = PointerGesturesInput(has_multipoint_gestures=False, has_path_based_gestures=False)
        assert check_pointer_gestures(data)[0].status == "pass"

    def test_path_gesture_without_alternative(self):
        data = PointerGesturesInput(has_multipoint_gestures=False, has_path_based_gestures=True)
        (r,) = check_pointer_gestures(data)
        assert r.status == "fail"

    def test_multipoint_with_alternative(self):
        (r,) = check_pointer_gestures(
            PointerGesturesInput(
                has_multipoint_gestures=True,
                has_path_based_gestures=False,
                has_single_pointer_alternative=True,
            )
        )
        assert r.status == "pass"


class TestPointerCancellation:
    def test_up_event_passes(self):
        (r,) = check_pointer_cancellation(PointerCancellationInput(element_type="button"))
        assert r.status == "pass"
        assert r.message == "button activates on up-event (pointer release)"

    def test_down_event_without_abort_fails(self):
        (r,) = check_pointer_cancellation(PointerCancellationInput(element_type="button", activates_on_down=True))
        assert r.status == "fail"

    def test_down_event_with_undo(self):
        (r,) = check_pointer_cancellation(
            PointerCancellationInput(element_type="button", activates_on_down=True, can_undo=True)
        )
        assert r.status == "pass"
        assert r.message == "button down-event: can be undone"


# ---------------------------------------------------------------------------
# Target size
# ---------------------------------------------------------------------------


class TestTargetSize:
    def test_large_target_passes(self):
        (r,) = check_target_size(TargetSizeInput(element_type="button", width=48, height=44))
        assert r.status == "pass"
        assert r.value == "48×44"
        assert r.required == "44×44"

    def test_medium_target_single_warning(self):
        results = check_target_size(TargetSizeInput(element_type="icon", width=32, height=32))
        assert [r.status for r in results] == ["warning"]

    def test_tiny_target_two_warnings(self):
        results = check_target_size(TargetSizeInput(element_type="icon", width=40, height=16))
        assert [r.status for r in results] == ["warning", "warning"]
        assert results[1].value == 16
        assert "16px minimum dimension" in results[1].message

    def test_never_fails(self):
        results = check_target_size(TargetSizeInput(element_type="dot", width=2, height=2))
        assert all(r.status == "warning" for r in results)

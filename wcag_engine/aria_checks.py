"""
ARIA checks: name/role/value, status messages, attribute usage, landmarks
and label-in-name.

The role tables below are a static subset of WAI-ARIA 1.1.  They are only
consulted, never modified.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple, Union

from .models import FAIL, INFO, InputModel, PASS, WARNING, Verdict, join_present, verdict

VALID_ROLES = frozenset({
    "alert", "alertdialog", "application", "article", "banner",
    "button", "cell", "checkbox", "columnheader", "combobox",
    "complementary", "contentinfo", "definition", "dialog", "directory",
    "document", "feed", "figure", "form", "grid", "gridcell",
    "group", "heading", "img", "link", "list", "listbox",
    "listitem", "log", "main", "marquee", "math", "menu",
    "menubar", "menuitem", "menuitemcheckbox", "menuitemradio", "meter",
    "navigation", "none", "note", "option", "presentation", "progressbar",
    "radio", "radiogroup", "region", "row", "rowgroup", "rowheader",
    "scrollbar", "search", "searchbox", "separator", "slider", "spinbutton",
    "status", "switch", "tab", "table", "tablist", "tabpanel",
    "term", "textbox", "timer", "toolbar", "tooltip", "tree",
    "treegrid", "treeitem",
})

ROLES_REQUIRING_NAME = frozenset({
    "alert", "alertdialog", "button", "checkbox", "combobox", "dialog",
    "figure", "form", "grid", "heading", "img", "link", "listbox", "log",
    "marquee", "menu", "menubar", "meter", "navigation", "progressbar",
    "radio", "radiogroup", "region", "scrollbar", "search", "searchbox",
    "slider", "spinbutton", "status", "switch", "tab", "table", "tablist",
    "tabpanel", "textbox", "timer", "toolbar", "tree", "treegrid",
})

INTERACTIVE_ROLES = frozenset({
    "button", "checkbox", "combobox", "gridcell", "link", "listbox",
    "menu", "menubar", "menuitem", "menuitemcheckbox", "menuitemradio",
    "option", "radio", "scrollbar", "searchbox", "slider", "spinbutton",
    "switch", "tab", "textbox", "treeitem",
})

LANDMARK_ROLES = frozenset({
    "banner", "complementary", "contentinfo", "form", "main",
    "navigation", "region", "search",
})

SUPPORTS_EXPANDED = frozenset({"button", "combobox", "link", "menuitem", "row", "tab", "treeitem"})

SUPPORTS_CHECKED = frozenset({
    "checkbox", "menuitemcheckbox", "menuitemradio", "option", "radio", "switch",
})

REQUIRED_OWNED: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "list": ("listitem",),
    "menu": ("menuitem", "menuitemcheckbox", "menuitemradio"),
    "menubar": ("menuitem", "menuitemcheckbox", "menuitemradio"),
    "tablist": ("tab",),
    "tree": ("treeitem", "group"),
    "grid": ("row", "rowgroup"),
    "table": ("row", "rowgroup"),
    "radiogroup": ("radio",),
    "listbox": ("option",),
})

IMPLICIT_ROLES: Mapping[str, str] = MappingProxyType({
    "a": "link",
    "article": "article",
    "aside": "complementary",
    "button": "button",
    "datalist": "listbox",
    "details": "group",
    "dialog": "dialog",
    "fieldset": "group",
    "figure": "figure",
    "footer": "contentinfo",
    "form": "form",
    "h1": "heading",
    "h2": "heading",
    "h3": "heading",
    "h4": "heading",
    "h5": "heading",
    "h6": "heading",
    "header": "banner",
    "hr": "separator",
    "img": "img",
    "input": "textbox",
    "li": "listitem",
    "main": "main",
    "math": "math",
    "menu": "list",
    "nav": "navigation",
    "ol": "list",
    "optgroup": "group",
    "option": "option",
    "output": "status",
    "progress": "progressbar",
    "section": "region",
    "select": "listbox",
    "summary": "button",
    "table": "table",
    "tbody": "rowgroup",
    "td": "cell",
    "textarea": "textbox",
    "tfoot": "rowgroup",
    "th": "columnheader",
    "thead": "rowgroup",
    "tr": "row",
    "ul": "list",
})

UNLABELED = "(unlabeled)"


def is_valid_role(role: str) -> bool:
    return role in VALID_ROLES


def implicit_role(tag_name: str) -> Optional[str]:
    return IMPLICIT_ROLES.get(tag_name.lower())


# ---------------------------------------------------------------------------
# Input types
# ---------------------------------------------------------------------------


class AriaElement(InputModel):
    tag_name: str
    role: Optional[str] = None
    accessible_name: Optional[str] = None
    accessible_description: Optional[str] = None
    is_focusable: Optional[bool] = None
    aria_attributes: Optional[Dict[str, str]] = None
    is_interactive: Optional[bool] = None
    id: Optional[str] = None
    labelled_by: Optional[List[str]] = None
    described_by: Optional[List[str]] = None


class ElementStates(InputModel):
    expanded: Optional[bool] = None
    selected: Optional[bool] = None
    checked: Optional[Union[bool, str]] = None   # True / False / "mixed"
    pressed: Optional[Union[bool, str]] = None
    disabled: Optional[bool] = None
    invalid: Optional[bool] = None
    required: Optional[bool] = None
    readonly: Optional[bool] = None

    def any_set(self) -> bool:
        return any(getattr(self, name) is not None for name in type(self).model_fields)


class NameRoleValueInput(InputModel):
    element: AriaElement
    states: Optional[ElementStates] = None
    states_are_communicated: Optional[bool] = None


class StatusMessageInput(InputModel):
    has_live_region: bool
    aria_live: Optional[str] = None   # polite | assertive | off
    aria_atomic: Optional[bool] = None
    has_status_role: Optional[bool] = None
    has_alert_role: Optional[bool] = None
    requires_focus: Optional[bool] = None


class Landmark(InputModel):
    role: str
    label: Optional[str] = None


class LandmarksInput(InputModel):
    landmarks: List[Landmark]


class LabelInNameInput(InputModel):
    visible_label: str
    accessible_name: str


# ---------------------------------------------------------------------------
# Name, role, value (WCAG 4.1.2)
# ---------------------------------------------------------------------------


def check_name_role_value(data: NameRoleValueInput) -> List[Verdict]:
    element = data.element
    role = element.role or implicit_role(element.tag_name)
    results: List[Verdict] = []

    if role in ROLES_REQUIRING_NAME:
        name = element.accessible_name
        has_name = bool(name and name.strip())
        results.append(
            verdict(
                "4.1.2",
                PASS if has_name else FAIL,
                (
                    f'Element has accessible name: "{name}"'
                    if has_name
                    else f'Element with role "{role}" is missing accessible name'
                ),
                value=name or "(none)",
                recommendation=(
                    None
                    if has_name
                    else "Add accessible name via aria-label, aria-labelledby, "
                    "or native labeling mechanism"
                ),
            )
        )

    if element.role:
        valid = is_valid_role(element.role)
        results.append(
            verdict(
                "4.1.2",
                PASS if valid else FAIL,
                (
                    f'Valid ARIA role: "{element.role}"'
                    if valid
                    else f'Invalid ARIA role: "{element.role}"'
                ),
                value=element.role,
                recommendation=None if valid else "Use a valid ARIA role from the WAI-ARIA specification",
            )
        )

    if data.states is not None and data.states.any_set() and data.states_are_communicated is not None:
        ok = data.states_are_communicated
        results.append(
            verdict(
                "4.1.2",
                PASS if ok else FAIL,
                (
                    "State changes are communicated to assistive technology"
                    if ok
                    else "State changes may not be communicated to assistive technology"
                ),
                value=ok,
                recommendation=(
                    None
                    if ok
                    else "Use appropriate ARIA states (aria-expanded, aria-selected, etc.) "
                    "that update dynamically"
                ),
            )
        )

    if role in INTERACTIVE_ROLES and element.is_focusable is False:
        results.append(
            verdict(
                "4.1.2",
                FAIL,
                f'Interactive element with role "{role}" is not keyboard focusable',
                recommendation=(
                    "Ensure interactive elements can receive keyboard focus "
                    "(tabindex=0 or native focusable element)"
                ),
            )
        )

    return results


# ---------------------------------------------------------------------------
# Status messages (WCAG 4.1.3)
# ---------------------------------------------------------------------------


def check_status_message(data: StatusMessageInput) -> List[Verdict]:
    if data.requires_focus:
        return [
            verdict(
                "4.1.3",
                FAIL,
                "Status message requires focus to be perceived",
                recommendation=(
                    "Use aria-live regions or status/alert roles so messages are "
                    "announced without focus"
                ),
            )
        ]

    if not (data.has_live_region or data.has_status_role or data.has_alert_role):
        return [
            verdict(
                "4.1.3",
                FAIL,
                "Status message lacks live region or status role",
                recommendation=(
                    'Add role="status" or aria-live="polite" for status messages, '
                    'role="alert" for urgent messages'
                ),
            )
        ]

    results: List[Verdict] = []
    if data.has_alert_role and data.aria_live == "polite":
        results.append(
            verdict(
                "4.1.3",
                WARNING,
                "Alert role with polite live region may be redundant",
                recommendation='role="alert" implies aria-live="assertive"; consider using one or the other',
            )
        )

    live = f'aria-live="{data.aria_live}"' if data.aria_live else "aria-live region"
    mechanisms = join_present(
        data.has_status_role and 'role="status"',
        data.has_alert_role and 'role="alert"',
        data.has_live_region and live,
    )
    results.append(verdict("4.1.3", PASS, f"Status message properly announced via {mechanisms}"))
    return results


# ---------------------------------------------------------------------------
# ARIA attribute usage (WCAG 4.1.2)
# ---------------------------------------------------------------------------


def check_aria_attributes(element: AriaElement) -> List[Verdict]:
    attrs = element.aria_attributes or {}
    role = element.role
    issues: List[str] = []

    if attrs.get("aria-label") and not role and not element.is_interactive:
        issues.append("aria-label on non-interactive element without explicit role")
    if attrs.get("aria-hidden") == "true" and element.is_focusable:
        issues.append('aria-hidden="true" on focusable element')
    if attrs.get("aria-expanded") and role and role not in SUPPORTS_EXPANDED:
        issues.append(f'aria-expanded not supported on role "{role}"')
    if attrs.get("aria-checked") and role and role not in SUPPORTS_CHECKED:
        issues.append(f'aria-checked not supported on role "{role}"')

    results: List[Verdict] = []
    if issues:
        results.append(
            verdict(
                "4.1.2",
                FAIL,
                f"ARIA attribute issues: {'; '.join(issues)}",
                recommendation="Use ARIA attributes only as specified in the WAI-ARIA specification",
            )
        )
    elif attrs:
        results.append(verdict("4.1.2", PASS, "ARIA attributes are used appropriately"))

    # Ownership needs the DOM to verify, so it is reported, not judged
    if role in REQUIRED_OWNED:
        results.append(
            verdict("4.1.2", INFO, f'Role "{role}" must contain: {" or ".join(REQUIRED_OWNED[role])}')
        )

    return results


# ---------------------------------------------------------------------------
# Landmarks (WCAG 4.1.2)
# ---------------------------------------------------------------------------


def check_landmarks(data: LandmarksInput) -> List[Verdict]:
    landmarks = data.landmarks
    labels_by_role: Dict[str, List[str]] = {}
    for lm in landmarks:
        labels_by_role.setdefault(lm.role, []).append(lm.label or UNLABELED)

    results: List[Verdict] = []
    for role, labels in labels_by_role.items():
        if len(labels) < 2:
            continue
        distinct = set(labels)
        unique = len(distinct) == len(labels) and UNLABELED not in distinct
        results.append(
            verdict(
                "4.1.2",
                PASS if unique else FAIL,
                (
                    f"Multiple {role} landmarks have unique labels"
                    if unique
                    else f"Multiple {role} landmarks lack unique labels: {', '.join(labels)}"
                ),
                value=f"{len(labels)} {role} landmarks",
                recommendation=(
                    None
                    if unique
                    else f"Add unique aria-label or aria-labelledby to distinguish {role} landmarks"
                ),
            )
        )

    if "main" not in labels_by_role:
        results.append(
            verdict(
                "4.1.2",
                WARNING,
                "No main landmark found",
                recommendation='Add role="main" or use <main> element for primary content',
            )
        )

    if not results and landmarks:
        results.append(verdict("4.1.2", PASS, f"{len(landmarks)} landmark(s) properly defined"))

    return results


# ---------------------------------------------------------------------------
# Label in name (WCAG 2.5.3)
# ---------------------------------------------------------------------------


def check_label_in_name(data: LabelInNameInput) -> List[Verdict]:
    visible = data.visible_label.strip().casefold()
    accessible = data.accessible_name.strip().casefold()
    contained = visible in accessible

    results = [
        verdict(
            "2.5.3",
            PASS if contained else FAIL,
            (
                "Accessible name contains the visible label text"
                if contained
                else "Accessible name does NOT contain the visible label text"
            ),
            value=f'Visible: "{data.visible_label}" | Accessible: "{data.accessible_name}"',
            recommendation=(
                None
                if contained
                else "Ensure the accessible name includes the visible label text, ideally at the start"
            ),
        )
    ]

    if contained and not accessible.startswith(visible):
        results.append(
            verdict(
                "2.5.3",
                WARNING,
                "Visible label is not at the start of accessible name",
                recommendation=(
                    "Place the visible label at the beginning of the accessible name "
                    "for better voice control compatibility"
                ),
            )
        )

    return results

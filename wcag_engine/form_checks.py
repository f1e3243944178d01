"""
Form checks: labels, input purpose (autocomplete), error identification and
prevention, format constraints and context changes on input.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import List, Mapping, Optional, Union

from .models import FAIL, INFO, InputModel, PASS, WARNING, Verdict, join_present, verdict

# HTML autocomplete field names, each with a short human description.
AUTOCOMPLETE_TOKENS: Mapping[str, str] = MappingProxyType({
    "name": "Full name",
    "honorific-prefix": "Prefix (Mr., Ms., Dr.)",
    "given-name": "First name",
    "additional-name": "Middle name",
    "family-name": "Last name",
    "honorific-suffix": "Suffix (Jr., III)",
    "nickname": "Nickname",
    "email": "Email address",
    "username": "Username",
    "new-password": "New password",
    "current-password": "Current password",
    "one-time-code": "One-time code (OTP)",
    "organization-title": "Job title",
    "organization": "Organization name",
    "street-address": "Street address",
    "address-line1": "Address line 1",
    "address-line2": "Address line 2",
    "address-line3": "Address line 3",
    "address-level4": "Address level 4",
    "address-level3": "Address level 3",
    "address-level2": "City",
    "address-level1": "State/Province",
    "country": "Country code",
    "country-name": "Country name",
    "postal-code": "Postal/ZIP code",
    "cc-name": "Cardholder name",
    "cc-given-name": "Cardholder first name",
    "cc-additional-name": "Cardholder middle name",
    "cc-family-name": "Cardholder last name",
    "cc-number": "Credit card number",
    "cc-exp": "Card expiration date",
    "cc-exp-month": "Card expiration month",
    "cc-exp-year": "Card expiration year",
    "cc-csc": "Card security code",
    "cc-type": "Card type",
    "transaction-currency": "Transaction currency",
    "transaction-amount": "Transaction amount",
    "language": "Preferred language",
    "bday": "Birthday",
    "bday-day": "Birthday day",
    "bday-month": "Birthday month",
    "bday-year": "Birthday year",
    "sex": "Sex/Gender",
    "tel": "Full telephone number",
    "tel-country-code": "Country code",
    "tel-national": "National telephone number",
    "tel-area-code": "Area code",
    "tel-local": "Local telephone number",
    "tel-extension": "Phone extension",
    "impp": "IM protocol endpoint",
    "url": "Website URL",
    "photo": "Photo URL",
})

# Substrings of a field type / purpose that mark it as collecting user data
USER_INFO_HINTS = ("name", "email", "tel", "password", "address", "cc", "bday")

HIGH_STAKES_TRANSACTIONS = frozenset({"legal", "financial", "data-modification"})


# ---------------------------------------------------------------------------
# Input types
# ---------------------------------------------------------------------------


class FormFieldInput(InputModel):
    field_type: str
    has_visible_label: bool
    has_accessible_label: bool
    label_text: Optional[str] = None
    has_placeholder: Optional[bool] = None
    placeholder_text: Optional[str] = None
    placeholder_as_label: Optional[bool] = None
    has_instructions: Optional[bool] = None
    is_required: Optional[bool] = None
    required_indicated_visually: Optional[bool] = None
    required_indicated_programmatically: Optional[bool] = None
    autocomplete: Optional[str] = None
    input_purpose: Optional[str] = None


class InputPurposeInput(InputModel):
    field_type: str
    autocomplete: Optional[str] = None
    input_purpose: Optional[str] = None
    has_visible_label: Optional[bool] = None
    has_accessible_label: Optional[bool] = None


class FormErrorInput(InputModel):
    has_errors: bool
    errors_in_text: Optional[bool] = None
    error_field_identified: Optional[bool] = None
    error_described: Optional[bool] = None
    has_suggestions: Optional[bool] = None
    error_announced: Optional[bool] = None
    focus_moves_to_error: Optional[bool] = None
    error_message: Optional[str] = None


class FormSubmissionInput(InputModel):
    transaction_type: str  # legal | financial | data-modification | test | other
    is_reversible: Optional[bool] = None
    data_is_checked: Optional[bool] = None
    can_review: Optional[bool] = None
    requires_confirmation: Optional[bool] = None


class InputConstraintInput(InputModel):
    field_name: str
    has_format_requirements: bool
    format_explained: Optional[bool] = None
    example_provided: Optional[bool] = None
    has_realtime_validation: Optional[bool] = None
    has_input_constraints: Optional[bool] = None
    constraint_description: Optional[str] = None


class OnInputInput(InputModel):
    element_type: str
    changes_context_on_input: bool
    user_warned: Optional[bool] = None


class FormValidationInput(InputModel):
    fields: List[FormFieldInput]
    errors: Optional[FormErrorInput] = None


# ---------------------------------------------------------------------------
# Labels (WCAG 3.3.2)
# ---------------------------------------------------------------------------


def check_form_labels(data: FormFieldInput) -> List[Verdict]:
    results: List[Verdict] = []

    if data.has_visible_label or data.has_accessible_label:
        kind = "visible" if data.has_visible_label else "accessible"
        results.append(
            verdict(
                "3.3.2",
                PASS,
                f"{data.field_type} field has {kind} label",
                value=data.label_text or "(accessible label provided)",
            )
        )
    else:
        results.append(
            verdict(
                "3.3.2",
                FAIL,
                f"{data.field_type} field lacks label",
                recommendation=(
                    "Add a visible label associated with the form field "
                    "using <label> element or aria-labelledby"
                ),
            )
        )

    if data.placeholder_as_label:
        results.append(
            verdict(
                "3.3.2",
                FAIL,
                "Placeholder text used as only label",
                recommendation="Placeholders disappear on input; use persistent visible labels instead",
            )
        )

    if data.has_visible_label and not data.has_accessible_label:
        results.append(
            verdict(
                "3.3.2",
                WARNING,
                "Visible label may not be programmatically associated",
                recommendation='Use <label for="id">, aria-labelledby, or wrap input in label element',
            )
        )

    if data.is_required:
        if not data.required_indicated_visually:
            results.append(
                verdict(
                    "3.3.2",
                    WARNING,
                    "Required field not indicated visually",
                    recommendation="Add visual indicator (asterisk, 'required' text) for required fields",
                )
            )
        if not data.required_indicated_programmatically:
            results.append(
                verdict(
                    "3.3.2",
                    FAIL,
                    "Required field not indicated programmatically",
                    recommendation='Add required attribute or aria-required="true"',
                )
            )

    return results


# ---------------------------------------------------------------------------
# Input purpose (WCAG 1.3.5)
# ---------------------------------------------------------------------------


def _collects_user_info(field_type: str, purpose: Optional[str]) -> bool:
    return any(h in field_type or (purpose and h in purpose) for h in USER_INFO_HINTS)


def check_input_purpose(data: Union[FormFieldInput, InputPurposeInput]) -> List[Verdict]:
    """
    Check the ``autocomplete`` token of a field.

    Only the last space-separated token is looked up, so section and
    shipping/billing prefixes (``"shipping postal-code"``) are accepted.
    Fields that do not collect user information and carry no autocomplete
    attribute are out of scope and produce no verdicts.
    """
    autocomplete = data.autocomplete
    if autocomplete:
        tokens = autocomplete.split()
        token = tokens[-1] if tokens else ""
        description = AUTOCOMPLETE_TOKENS.get(token)
        if description is not None:
            return [
                verdict(
                    "1.3.5",
                    PASS,
                    f'Input purpose identified: {description} (autocomplete="{autocomplete}")',
                    value=autocomplete,
                )
            ]
        return [
            verdict(
                "1.3.5",
                WARNING,
                f'Autocomplete value "{autocomplete}" may not be a standard token',
                value=autocomplete,
                recommendation="Use standard autocomplete tokens from HTML specification",
            )
        ]

    if _collects_user_info(data.field_type, data.input_purpose):
        return [
            verdict(
                "1.3.5",
                WARNING,
                f"{data.field_type} field collecting user info should have autocomplete attribute",
                recommendation='Add appropriate autocomplete attribute (e.g., autocomplete="email")',
            )
        ]

    return []


# ---------------------------------------------------------------------------
# Errors (WCAG 3.3.1 / 3.3.3 / 3.3.4 / 3.3.6)
# ---------------------------------------------------------------------------


def check_error_identification(data: FormErrorInput) -> List[Verdict]:
    if not data.has_errors:
        return [verdict("3.3.1", INFO, "No form errors to validate")]

    identified = bool(data.errors_in_text and data.error_field_identified)
    results = [
        verdict(
            "3.3.1",
            PASS if identified else FAIL,
            (
                "Input error is identified and described in text"
                if identified
                else "Input error not properly identified in text"
            ),
            value=identified,
            recommendation=(
                None
                if identified
                else "Identify the field with error and describe the error in text "
                "(not just color/icon)"
            ),
        )
    ]

    if not data.error_described:
        results.append(
            verdict(
                "3.3.1",
                WARNING,
                "Error may not be clearly described",
                recommendation="Provide clear description of what went wrong",
            )
        )

    if data.errors_in_text:
        ok = bool(data.has_suggestions)
        results.append(
            verdict(
                "3.3.3",
                PASS if ok else FAIL,
                (
                    "Suggestions provided for correcting the error"
                    if ok
                    else "No suggestions provided for correcting the error"
                ),
                value=data.has_suggestions,
                recommendation=(
                    None
                    if ok
                    else "Provide suggestions for fixing the error (unless it would compromise security)"
                ),
            )
        )

    if not data.error_announced:
        results.append(
            verdict(
                "3.3.1",
                WARNING,
                "Error may not be announced to screen readers",
                recommendation='Use aria-live region, role="alert", or aria-describedby to announce errors',
            )
        )

    return results


def check_error_prevention(data: FormSubmissionInput) -> List[Verdict]:
    kind = data.transaction_type
    if kind not in HIGH_STAKES_TRANSACTIONS:
        return [
            verdict(
                "3.3.4",
                INFO,
                f'Transaction type "{kind}" may not require error prevention measures',
            )
        ]

    methods = join_present(
        data.is_reversible and "reversible",
        data.data_is_checked and "checked for errors",
        data.can_review and "review before submission",
        data.requires_confirmation and "confirmation required",
    )
    ok = bool(methods)

    # 3.3.6 is judged on the same mechanisms as 3.3.4
    return [
        verdict(
            "3.3.4",
            PASS if ok else FAIL,
            f"Error prevention: {methods}" if ok else f"{kind} transaction lacks error prevention mechanism",
            value=ok,
            recommendation=(
                None
                if ok
                else "Provide at least one: reversibility, error checking, review opportunity, "
                "or confirmation"
            ),
        ),
        verdict(
            "3.3.6",
            PASS if ok else WARNING,
            (
                "Form submission has error prevention (meets AAA for all submissions)"
                if ok
                else "Consider adding error prevention for all form submissions (AAA)"
            ),
            recommendation=(
                None if ok else "For AAA, all submissions should be reversible, checked, or confirmed"
            ),
        ),
    ]


# ---------------------------------------------------------------------------
# Format constraints (WCAG 3.3.2 / 3.3.5)
# ---------------------------------------------------------------------------


def check_input_constraints(data: InputConstraintInput) -> List[Verdict]:
    if not data.has_format_requirements:
        return []

    instructions = join_present(
        data.format_explained and "explained",
        data.example_provided and "example provided",
    )
    has_instructions = bool(instructions)
    results = [
        verdict(
            "3.3.2",
            PASS if has_instructions else FAIL,
            (
                f"Format requirements for {data.field_name}: {instructions}"
                if has_instructions
                else f"{data.field_name} has format requirements but no instructions"
            ),
            value=has_instructions,
            recommendation=(
                None
                if has_instructions
                else "Explain required format and provide examples (e.g., 'MM/DD/YYYY')"
            ),
        )
    ]

    has_help = has_instructions and bool(data.has_realtime_validation)
    results.append(
        verdict(
            "3.3.5",
            PASS if has_help else WARNING,
            (
                "Context-sensitive help is available"
                if has_help
                else "Consider providing context-sensitive help for complex inputs"
            ),
            recommendation=(
                None if has_help else "Provide inline help, tooltips, or real-time validation feedback"
            ),
        )
    )
    return results


# ---------------------------------------------------------------------------
# On input (WCAG 3.2.2)
# ---------------------------------------------------------------------------


def check_on_input(data: OnInputInput) -> List[Verdict]:
    el = data.element_type
    if not data.changes_context_on_input:
        return [verdict("3.2.2", PASS, f"{el} does not change context on input")]

    warned = bool(data.user_warned)
    return [
        verdict(
            "3.2.2",
            PASS if warned else FAIL,
            (
                f"{el} changes context but user is warned in advance"
                if warned
                else f"{el} changes context unexpectedly on input"
            ),
            value=data.user_warned,
            recommendation=(
                None if warned else "Either prevent context change on input, or warn user beforehand"
            ),
        )
    ]


# ---------------------------------------------------------------------------
# Full form validation
# ---------------------------------------------------------------------------


def validate_form(
    fields: List[FormFieldInput], errors: Optional[FormErrorInput] = None
) -> List[Verdict]:
    results: List[Verdict] = []
    for f in fields:
        results.extend(check_form_labels(f))
        results.extend(check_input_purpose(f))
    if errors is not None:
        results.extend(check_error_identification(errors))
    return results

"""
Text presentation checks: contrast, spacing, line length, justification,
resize/reflow, page language and images of text.

Checks implemented
------------------
1.4.3  Contrast (Minimum)        1.4.6  Contrast (Enhanced)
1.4.12 Text Spacing              1.4.8  Visual Presentation
1.4.4  Resize Text               1.4.10 Reflow
3.1.1  Language of Page          1.4.5  Images of Text
"""

from __future__ import annotations

from typing import List, Optional

from .color import contrast_ratio, parse_color
from .models import FAIL, INFO, InputModel, PASS, WARNING, Verdict, fmt_num, verdict

CONTRAST_AA = {"normal": 4.5, "large": 3.0}
CONTRAST_AAA = {"normal": 7.0, "large": 4.5}

# Minimum spacing as a multiple of the font size
SPACING_MULTIPLIERS = (
    ("line_height", "Line height", 1.5),
    ("letter_spacing", "Letter spacing", 0.12),
    ("word_spacing", "Word spacing", 0.16),
    ("paragraph_spacing", "Paragraph spacing", 2.0),
)

MAX_LINE_LENGTH = 80

LARGE_TEXT_PX = 24.0        # 18pt
LARGE_BOLD_TEXT_PX = 18.66  # 14pt bold

DEFAULT_FONT_SIZE = 16.0


def is_large_text(size_px: float, is_bold: bool) -> bool:
    return size_px >= LARGE_TEXT_PX or (is_bold and size_px >= LARGE_BOLD_TEXT_PX)


# ---------------------------------------------------------------------------
# Contrast (WCAG 1.4.3 / 1.4.6)
# ---------------------------------------------------------------------------


def check_contrast_ratio(
    foreground: str,
    background: str,
    font_size: Optional[float] = DEFAULT_FONT_SIZE,
    is_bold: Optional[bool] = False,
) -> List[Verdict]:
    size = DEFAULT_FONT_SIZE if font_size is None else font_size
    bold = bool(is_bold)

    fg = parse_color(foreground)
    bg = parse_color(background)
    if fg is None or bg is None:
        return [
            verdict(
                "1.4.3",
                FAIL,
                f"Invalid color: {foreground if fg is None else background}",
                recommendation="Provide colors in hex, rgb(), hsl() or named notation",
            )
        ]

    ratio = round(contrast_ratio(fg, bg), 2)
    text_type = "large" if is_large_text(size, bold) else "normal"

    aa_required = CONTRAST_AA[text_type]
    aa_passes = ratio >= aa_required
    aa = verdict(
        "1.4.3",
        PASS if aa_passes else FAIL,
        (
            f"Contrast ratio {fmt_num(ratio)}:1 "
            f"{'meets' if aa_passes else 'fails'} AA requirement "
            f"({fmt_num(aa_required)}:1 for {text_type} text)"
        ),
        value=ratio,
        required=aa_required,
        recommendation=None if aa_passes else f"Increase contrast to at least {fmt_num(aa_required)}:1",
    )

    aaa_required = CONTRAST_AAA[text_type]
    aaa_passes = ratio >= aaa_required
    if aaa_passes:
        aaa_status = PASS
    elif aa_passes:
        aaa_status = WARNING
    else:
        aaa_status = FAIL
    aaa = verdict(
        "1.4.6",
        aaa_status,
        (
            f"Contrast ratio {fmt_num(ratio)}:1 "
            f"{'meets' if aaa_passes else 'does not meet'} AAA requirement "
            f"({fmt_num(aaa_required)}:1 for {text_type} text)"
        ),
        value=ratio,
        required=aaa_required,
        recommendation=(
            None
            if aaa_passes
            else f"Increase contrast to at least {fmt_num(aaa_required)}:1 for enhanced accessibility"
        ),
    )
    return [aa, aaa]


# ---------------------------------------------------------------------------
# Text spacing (WCAG 1.4.12)
# ---------------------------------------------------------------------------


def check_text_spacing(
    font_size: float,
    line_height: Optional[float] = None,
    letter_spacing: Optional[float] = None,
    word_spacing: Optional[float] = None,
    paragraph_spacing: Optional[float] = None,
) -> List[Verdict]:
    supplied = {
        "line_height": line_height,
        "letter_spacing": letter_spacing,
        "word_spacing": word_spacing,
        "paragraph_spacing": paragraph_spacing,
    }
    tested = [
        (label, supplied[key], multiplier)
        for key, label, multiplier in SPACING_MULTIPLIERS
        if supplied[key] is not None
    ]

    if not tested:
        return [
            verdict(
                "1.4.12",
                INFO,
                "No spacing values provided to check. "
                "Ensure content adapts to user-defined spacing.",
            )
        ]

    all_pass = True
    details: List[str] = []
    for label, value, multiplier in tested:
        required = font_size * multiplier
        ok = value >= required
        all_pass = all_pass and ok
        details.append(
            f"{label}: {fmt_num(value)}px {'≥' if ok else '<'} {required:.1f}px "
            f"({fmt_num(multiplier)}× font size) {'✓' if ok else '✗'}"
        )

    body = "\n   ".join(details)
    return [
        verdict(
            "1.4.12",
            PASS if all_pass else FAIL,
            (
                f"Text spacing supports WCAG requirements:\n   {body}"
                if all_pass
                else f"Text spacing fails WCAG requirements:\n   {body}"
            ),
            recommendation=(
                None
                if all_pass
                else "Ensure text remains readable when users apply custom spacing styles"
            ),
        )
    ]


# ---------------------------------------------------------------------------
# Visual presentation (WCAG 1.4.8)
# ---------------------------------------------------------------------------


def check_line_length(text: str) -> List[Verdict]:
    longest = max(len(line) for line in (text.splitlines() or [""]))
    ok = longest <= MAX_LINE_LENGTH
    return [
        verdict(
            "1.4.8",
            PASS if ok else WARNING,
            (
                f"Longest line is {longest} characters (max {MAX_LINE_LENGTH} for AAA)"
                if ok
                else f"Longest line is {longest} characters, "
                f"exceeds {MAX_LINE_LENGTH} character recommendation"
            ),
            name="Visual Presentation (Line Length)",
            value=longest,
            required=MAX_LINE_LENGTH,
            recommendation=None if ok else "Consider breaking long lines to improve readability",
        )
    ]


def check_text_justification(is_justified: bool) -> List[Verdict]:
    return [
        verdict(
            "1.4.8",
            FAIL if is_justified else PASS,
            (
                "Text is fully justified, which can create uneven spacing"
                if is_justified
                else "Text is not fully justified"
            ),
            name="Visual Presentation (Justification)",
            value=bool(is_justified),
            recommendation=(
                "Use left, right, or center alignment instead of full justification"
                if is_justified
                else None
            ),
        )
    ]


# ---------------------------------------------------------------------------
# Resize text / reflow (WCAG 1.4.4 / 1.4.10)
# ---------------------------------------------------------------------------


def check_resize_text(uses_relative_units: bool, has_fixed_containers: bool) -> List[Verdict]:
    results: List[Verdict] = []

    if not uses_relative_units:
        results.append(
            verdict(
                "1.4.4",
                WARNING,
                "Text may not use relative units (em, rem, %)",
                value=False,
                recommendation="Use relative units for font sizes to allow proper scaling",
            )
        )
    else:
        results.append(verdict("1.4.4", PASS, "Text uses relative units for proper scaling"))

    if has_fixed_containers:
        results.append(
            verdict(
                "1.4.10",
                WARNING,
                "Fixed-width containers may prevent content reflow at high zoom levels",
                recommendation="Use responsive layouts that adapt to viewport changes",
            )
        )

    return results


# ---------------------------------------------------------------------------
# Language of page (WCAG 3.1.1)
# ---------------------------------------------------------------------------


def check_language(has_lang_attribute: bool, lang_value: Optional[str] = None) -> List[Verdict]:
    if not has_lang_attribute:
        return [
            verdict(
                "3.1.1",
                FAIL,
                "Page is missing lang attribute on html element",
                recommendation='Add lang attribute to html element (e.g., <html lang="en">)',
            )
        ]
    if not lang_value or len(lang_value) < 2:
        return [
            verdict(
                "3.1.1",
                FAIL,
                f'Invalid lang attribute value: "{lang_value or ""}"',
                value=lang_value,
                recommendation='Use valid BCP 47 language tag (e.g., "en", "en-US", "es")',
            )
        ]
    return [
        verdict(
            "3.1.1",
            PASS,
            f'Page language is set to "{lang_value}"',
            value=lang_value,
        )
    ]


# ---------------------------------------------------------------------------
# Images of text (WCAG 1.4.5)
# ---------------------------------------------------------------------------


def check_images_of_text(has_images_of_text: bool, is_essential: Optional[bool] = False) -> List[Verdict]:
    if not has_images_of_text:
        return [verdict("1.4.5", PASS, "No images of text detected")]
    # Logos and other essential presentations are exempt
    if is_essential:
        return [verdict("1.4.5", PASS, "Images of text are marked as essential (logos, etc.)")]
    return [
        verdict(
            "1.4.5",
            FAIL,
            "Images of text should be replaced with actual text",
            recommendation="Use CSS for visual styling instead of text in images",
        )
    ]


# ---------------------------------------------------------------------------
# Full text validation
# ---------------------------------------------------------------------------


class TextValidationInput(InputModel):
    foreground: str
    background: str
    font_size: float
    is_bold: Optional[bool] = None
    line_height: Optional[float] = None
    letter_spacing: Optional[float] = None
    word_spacing: Optional[float] = None
    paragraph_spacing: Optional[float] = None
    sample_text: Optional[str] = None
    is_justified: Optional[bool] = None
    uses_relative_units: Optional[bool] = None
    has_fixed_containers: Optional[bool] = None
    has_lang_attribute: Optional[bool] = None
    lang_value: Optional[str] = None
    has_images_of_text: Optional[bool] = None
    images_are_essential: Optional[bool] = None


def validate_text(data: TextValidationInput) -> List[Verdict]:
    """Run every text check the input has data for, in a fixed order."""
    results: List[Verdict] = []

    results.extend(check_contrast_ratio(data.foreground, data.background, data.font_size, data.is_bold))
    results.extend(
        check_text_spacing(
            data.font_size,
            data.line_height,
            data.letter_spacing,
            data.word_spacing,
            data.paragraph_spacing,
        )
    )

    if data.sample_text:
        results.extend(check_line_length(data.sample_text))

    if data.is_justified is not None:
        results.extend(check_text_justification(data.is_justified))

    if data.uses_relative_units is not None or data.has_fixed_containers is not None:
        results.extend(
            check_resize_text(
                True if data.uses_relative_units is None else data.uses_relative_units,
                bool(data.has_fixed_containers),
            )
        )

    if data.has_lang_attribute is not None:
        results.extend(check_language(data.has_lang_attribute, data.lang_value))

    if data.has_images_of_text is not None:
        results.extend(check_images_of_text(data.has_images_of_text, data.images_are_essential))

    return results

"""
Document structure checks.

Headings, page title, link purpose, bypass blocks, reading order,
info-and-relationships, multiple ways, and consistency of navigation and
identification across pages.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from .models import FAIL, INFO, InputModel, PASS, WARNING, Verdict, join_present, verdict

GENERIC_TITLES = frozenset({"untitled", "home", "page", "document", "welcome"})

GENERIC_LINK_TEXTS = frozenset(
    {"click here", "read more", "learn more", "here", "more", "link", "this"}
)


# ---------------------------------------------------------------------------
# Input types
# ---------------------------------------------------------------------------


class Heading(InputModel):
    level: int
    text: str
    is_first: Optional[bool] = None
    previous_level: Optional[int] = None


class HeadingStructureInput(InputModel):
    headings: List[Heading]
    has_h1: Optional[bool] = None
    h1_count: Optional[int] = None


class PageTitleInput(InputModel):
    has_title: bool
    title_text: Optional[str] = None
    is_descriptive: Optional[bool] = None
    identifies_site: Optional[bool] = None


class LinkInput(InputModel):
    link_text: str
    is_descriptive: Optional[bool] = None
    has_context: Optional[bool] = None
    context_text: Optional[str] = None
    destination_type: Optional[str] = None  # same-page | new-page | download | external
    opens_new_window: Optional[bool] = None
    new_window_indicated: Optional[bool] = None


class BypassBlocksInput(InputModel):
    has_skip_link: bool
    skip_link_target: Optional[str] = None
    has_landmarks: Optional[bool] = None
    has_heading_structure: Optional[bool] = None
    landmarks: Optional[List[str]] = None


class ReadingOrderInput(InputModel):
    visual_matches_dom: bool
    has_css_reordering: Optional[bool] = None
    reordered_elements: Optional[List[str]] = None
    has_positive_tabindex: Optional[bool] = None


class InfoRelationshipsInput(InputModel):
    element_type: str
    is_programmatic: bool
    uses_semantic_html: Optional[bool] = None
    aria_attributes: Optional[List[str]] = None
    issues: Optional[List[str]] = None


class NavigationMethods(InputModel):
    site_map: Optional[bool] = None
    search: Optional[bool] = None
    table_of_contents: Optional[bool] = None
    navigation: Optional[bool] = None
    related_links: Optional[bool] = None
    breadcrumbs: Optional[bool] = None


class MultipleWaysInput(InputModel):
    navigation_methods: NavigationMethods = Field(default_factory=NavigationMethods)
    is_process_step: Optional[bool] = None


class NavigationPage(InputModel):
    page: str
    order: List[str]


class ConsistentNavigationInput(InputModel):
    navigation_elements: List[NavigationPage]


class Component(InputModel):
    function: str
    identifiers: List[str]


class ConsistentIdentificationInput(InputModel):
    components: List[Component]


# ---------------------------------------------------------------------------
# Headings (WCAG 1.3.1 / 2.4.6 / 2.4.10)
# ---------------------------------------------------------------------------


def check_heading_structure(data: HeadingStructureInput) -> List[Verdict]:
    headings = data.headings
    if not headings:
        return [
            verdict(
                "1.3.1",
                WARNING,
                "Page has no headings",
                recommendation="Use heading elements (h1-h6) to identify sections of content",
            )
        ]

    results: List[Verdict] = [
        verdict("2.4.6", INFO, f"Page has {len(headings)} heading(s)"),
    ]

    h1_count = data.h1_count
    if h1_count is None:
        h1_count = sum(1 for h in headings if h.level == 1)

    if h1_count == 0:
        results.append(
            verdict(
                "1.3.1",
                WARNING,
                "Page lacks h1 heading",
                recommendation="Add a main h1 heading that describes the page content",
            )
        )
    elif h1_count > 1:
        results.append(
            verdict(
                "1.3.1",
                WARNING,
                f"Page has {h1_count} h1 headings",
                value=h1_count,
                recommendation=(
                    "Consider using single h1 for main content; "
                    "multiple h1s can confuse navigation"
                ),
            )
        )

    # Only descending jumps count; h4 -> h2 is fine
    skipped = [
        f'h{prev.level} → h{cur.level} ("{cur.text}")'
        for prev, cur in zip(headings, headings[1:])
        if cur.level - prev.level > 1
    ]
    if skipped:
        results.append(
            verdict(
                "1.3.1",
                WARNING,
                f"Heading levels skipped: {'; '.join(skipped)}",
                recommendation="Use heading levels in order (h1, h2, h3...) without skipping levels",
            )
        )
    else:
        results.append(verdict("1.3.1", PASS, "Heading levels follow logical sequence"))

    if len(headings) >= 2:
        results.append(verdict("2.4.10", PASS, "Section headings are used to organize content"))
    else:
        results.append(
            verdict("2.4.10", WARNING, "Consider adding more section headings for AAA compliance")
        )

    return results


# ---------------------------------------------------------------------------
# Page title (WCAG 2.4.2)
# ---------------------------------------------------------------------------


def check_page_title(data: PageTitleInput) -> List[Verdict]:
    if not data.has_title:
        return [
            verdict(
                "2.4.2",
                FAIL,
                "Page lacks a title",
                recommendation="Add a <title> element to the page head",
            )
        ]

    title = data.title_text
    if not title or not title.strip():
        return [
            verdict(
                "2.4.2",
                FAIL,
                "Page title is empty",
                value="(empty)",
                recommendation="Provide a descriptive title that identifies the page content",
            )
        ]

    if title.strip().lower() in GENERIC_TITLES or data.is_descriptive is False:
        return [
            verdict(
                "2.4.2",
                WARNING,
                f'Page title "{title}" may not be descriptive',
                value=title,
                recommendation="Title should describe the page topic or purpose",
            )
        ]

    return [verdict("2.4.2", PASS, f'Page has title: "{title}"', value=title)]


# ---------------------------------------------------------------------------
# Link purpose (WCAG 2.4.4 / 2.4.9)
# ---------------------------------------------------------------------------


def check_link_purpose(data: LinkInput) -> List[Verdict]:
    text = data.link_text
    is_generic = text.strip().lower() in GENERIC_LINK_TEXTS

    in_context = bool(data.is_descriptive or (is_generic and data.has_context))
    results: List[Verdict] = [
        verdict(
            "2.4.4",
            PASS if in_context else FAIL,
            (
                f'Link purpose clear: "{text}"' + (" (with context)" if data.has_context else "")
                if in_context
                else f"Link text \"{text}\" doesn't clearly indicate purpose"
            ),
            value=text,
            recommendation=(
                None
                if in_context
                else "Use descriptive link text or ensure surrounding context clarifies purpose"
            ),
        )
    ]

    link_only = bool(data.is_descriptive) and not is_generic
    results.append(
        verdict(
            "2.4.9",
            PASS if link_only else WARNING,
            (
                "Link text alone describes purpose (meets AAA)"
                if link_only
                else f'Consider making link text "{text}" self-describing for AAA'
            ),
            value=text,
            recommendation=(
                None
                if link_only
                else "Link text should describe destination without needing surrounding context"
            ),
        )
    )

    if data.opens_new_window and not data.new_window_indicated:
        results.append(
            verdict(
                "2.4.4",
                WARNING,
                "Link opens in new window but this is not indicated",
                recommendation=(
                    "Indicate new window behavior (e.g., 'opens in new tab' in link text or title)"
                ),
            )
        )

    return results


# ---------------------------------------------------------------------------
# Bypass blocks (WCAG 2.4.1)
# ---------------------------------------------------------------------------


def check_bypass_blocks(data: BypassBlocksInput) -> List[Verdict]:
    mechanisms = join_present(
        data.has_skip_link and "skip link",
        data.has_landmarks and "ARIA landmarks",
        data.has_heading_structure and "heading structure",
    )
    if not mechanisms:
        return [
            verdict(
                "2.4.1",
                FAIL,
                "No mechanism to bypass repeated content blocks",
                recommendation="Add skip link, use ARIA landmarks, or provide heading structure",
            )
        ]

    results = [verdict("2.4.1", PASS, f"Bypass mechanism(s): {mechanisms}")]

    if data.has_skip_link and not data.skip_link_target:
        results.append(
            verdict(
                "2.4.1",
                WARNING,
                "Skip link target not specified",
                recommendation="Ensure skip link targets main content area",
            )
        )

    if data.landmarks:
        results.append(verdict("2.4.1", INFO, f"Landmarks found: {', '.join(data.landmarks)}"))

    return results


# ---------------------------------------------------------------------------
# Reading order (WCAG 1.3.2)
# ---------------------------------------------------------------------------


def check_reading_order(data: ReadingOrderInput) -> List[Verdict]:
    if data.visual_matches_dom:
        results = [verdict("1.3.2", PASS, "Visual order matches DOM order")]
    else:
        results = [
            verdict(
                "1.3.2",
                FAIL,
                "Visual order does not match DOM order",
                recommendation="Ensure DOM order reflects meaningful reading sequence",
            )
        ]

    if data.has_css_reordering:
        detail = f": {', '.join(data.reordered_elements)}" if data.reordered_elements is not None else ""
        results.append(
            verdict(
                "1.3.2",
                WARNING,
                f"CSS reordering detected{detail}",
                recommendation=(
                    "Verify CSS order/flex-order doesn't break reading sequence for screen readers"
                ),
            )
        )

    if data.has_positive_tabindex:
        results.append(
            verdict(
                "2.4.3",
                WARNING,
                "Positive tabindex values found",
                recommendation="Avoid positive tabindex; use DOM order or tabindex=0",
            )
        )

    return results


# ---------------------------------------------------------------------------
# Info and relationships (WCAG 1.3.1)
# ---------------------------------------------------------------------------


def check_info_relationships(data: InfoRelationshipsInput) -> List[Verdict]:
    kind = data.element_type
    if not data.is_programmatic:
        return [
            verdict(
                "1.3.1",
                FAIL,
                f"{kind} relationships not programmatically determinable",
                recommendation="Use semantic HTML or ARIA to convey structure and relationships",
            )
        ]

    results = [verdict("1.3.1", PASS, f"{kind} relationships are programmatically determinable")]

    if not data.uses_semantic_html:
        results.append(
            verdict(
                "1.3.1",
                WARNING,
                f"{kind} uses ARIA but not semantic HTML",
                recommendation="Prefer semantic HTML elements over ARIA where possible",
            )
        )

    for issue in data.issues or []:
        results.append(verdict("1.3.1", WARNING, issue))

    return results


# ---------------------------------------------------------------------------
# Multiple ways (WCAG 2.4.5)
# ---------------------------------------------------------------------------


def check_multiple_ways(data: MultipleWaysInput) -> List[Verdict]:
    if data.is_process_step:
        return [verdict("2.4.5", PASS, "Page is part of a process (exemption applies)")]

    m = data.navigation_methods
    available = [
        label
        for present, label in (
            (m.site_map, "site map"),
            (m.search, "search"),
            (m.table_of_contents, "table of contents"),
            (m.navigation, "navigation menu"),
            (m.related_links, "related links"),
            (m.breadcrumbs, "breadcrumbs"),
        )
        if present
    ]
    ok = len(available) >= 2
    return [
        verdict(
            "2.4.5",
            PASS if ok else FAIL,
            (
                f"Multiple ways to locate page: {', '.join(available)}"
                if ok
                else f"Only {len(available)} navigation method(s) found"
            ),
            value=len(available),
            recommendation=(
                None
                if ok
                else "Provide at least two ways to locate pages "
                "(e.g., navigation + search, sitemap + TOC)"
            ),
        )
    ]


# ---------------------------------------------------------------------------
# Consistency across pages (WCAG 3.2.3 / 3.2.4)
# ---------------------------------------------------------------------------


def check_consistent_navigation(data: ConsistentNavigationInput) -> List[Verdict]:
    pages = data.navigation_elements
    if len(pages) < 2:
        return [verdict("3.2.3", INFO, "Need multiple pages to check navigation consistency")]

    first = pages[0].order
    consistent = all(p.order == first for p in pages)
    return [
        verdict(
            "3.2.3",
            PASS if consistent else FAIL,
            (
                "Navigation appears in consistent order across pages"
                if consistent
                else "Navigation order varies between pages"
            ),
            recommendation=(
                None if consistent else "Maintain consistent navigation order across all pages"
            ),
        )
    ]


def check_consistent_identification(data: ConsistentIdentificationInput) -> List[Verdict]:
    inconsistent = [
        f"{c.function}: {', '.join(c.identifiers)}"
        for c in data.components
        if len(set(c.identifiers)) > 1
    ]
    if not inconsistent:
        return [
            verdict("3.2.4", PASS, "Components with same function are consistently identified")
        ]
    return [
        verdict(
            "3.2.4",
            FAIL,
            f"Inconsistent identification: {'; '.join(inconsistent)}",
            recommendation="Use consistent labels/names for components with the same function",
        )
    ]

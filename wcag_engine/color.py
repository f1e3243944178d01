"""Colour parsing and WCAG contrast math."""

from __future__ import annotations

import math
import re
from typing import List, Optional, Tuple

from PIL import ImageColor

RGB = Tuple[int, int, int]

_FUNCTIONAL = re.compile(r"^(rgba?|hsla?)\((.*)\)$", re.IGNORECASE)
_SEPARATORS = re.compile(r"\s*[,/]\s*|\s+")


def parse_color(value: str) -> Optional[RGB]:
    """
    Parse a CSS colour string into an ``(r, g, b)`` tuple.

    Accepts ``#rgb``, ``#rgba``, ``#rrggbb``, ``#rrggbbaa``, CSS named colours,
    ``transparent``, and ``rgb()``/``rgba()``/``hsl()``/``hsla()`` in both the
    comma-separated and the space-separated (``rgb(0 0 0 / 50%)``) syntax.
    Alpha is dropped.  Returns ``None`` when the string cannot be parsed.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = ImageColor.getrgb(_normalize(value.strip()))
    except ValueError:
        return None
    return parsed[0], parsed[1], parsed[2]


def _normalize(value: str) -> str:
    """Rewrite notations Pillow rejects into ``rgb(r, g, b)`` / ``hsl(h, s%, l%)``."""
    if value.lower() == "transparent":
        return "rgb(0, 0, 0)"
    match = _FUNCTIONAL.match(value)
    if not match:
        return value
    parts: List[str] = [p for p in _SEPARATORS.split(match.group(2).strip()) if p]
    if len(parts) not in (3, 4):
        return value
    try:
        if match.group(1).lower().startswith("rgb"):
            r, g, b = (_rgb_channel(p) for p in parts[:3])
            return f"rgb({r}, {g}, {b})"
        hue = _number(parts[0].lower().replace("deg", "")) % 360
        sat, light = (_percent(p) for p in parts[1:3])
    except ValueError:
        return value
    return f"hsl({hue:.4f}, {sat:.4f}%, {light:.4f}%)"


def _number(text: str) -> float:
    number = float(text)
    if not math.isfinite(number):
        raise ValueError(f"not a finite number: {text}")
    return number


def _rgb_channel(text: str) -> int:
    if text.endswith("%"):
        number = _number(text[:-1]) * 255 / 100
    else:
        number = _number(text)
    return min(255, max(0, round(number)))


def _percent(text: str) -> float:
    return min(100.0, max(0.0, _number(text.rstrip("%"))))


def relative_luminance(rgb: RGB) -> float:
    def _lin(c: int) -> float:
        v = c / 255.0
        return v / 12.92 if v <= 0.04045 else ((v + 0.055) / 1.055) ** 2.4

    r, g, b = rgb
    return 0.2126 * _lin(r) + 0.7152 * _lin(g) + 0.0722 * _lin(b)


def contrast_ratio(a: RGB, b: RGB) -> float:
    """Return the WCAG contrast ratio between two colours (1.0 to 21.0)."""
    l1, l2 = relative_luminance(a), relative_luminance(b)
    lighter, darker = (l1, l2) if l1 >= l2 else (l2, l1)
    return (lighter + 0.05) / (darker + 0.05)

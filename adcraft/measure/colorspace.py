# Copyright (c) 2026 AdCraft
# SPDX-License-Identifier: MIT

"""
Color utilities.

Colors travel through AdCraft as ``#rrggbb`` strings. This module holds
the small amount of channel math the layout needs: hex parsing and
formatting, alpha-tagged strings, tint/shade mixing, and a binary
luminance test for picking readable text colors.

All functions are pure and deterministic.
"""

from __future__ import annotations

import math
import re

from adcraft.errors import InvalidColorFormatError


# =============================================================================
# Constants
# =============================================================================

#: Text color used on light backgrounds.
DARK_TEXT = "#1F2933"

#: Text color used on dark backgrounds.
LIGHT_TEXT = "#F9FAFB"

#: Luminance above which a background counts as light.
LUMINANCE_THRESHOLD = 0.6

_HEX_RE = re.compile(r"^[0-9a-fA-F]{6}$")

_RGBA_RE = re.compile(
    r"^rgba?\(\s*([-\d.]+)\s*,\s*([-\d.]+)\s*,\s*([-\d.]+)\s*(?:,\s*([-\d.e+]+)\s*)?\)$"
)


# =============================================================================
# Channel helpers
# =============================================================================


def _round_half_up(value: float) -> int:
    """Round to nearest integer, halves away from negative infinity."""
    return math.floor(value + 0.5)


def _clamp(value: float, low: float = 0, high: float = 255) -> float:
    return min(high, max(low, value))


# =============================================================================
# Hex ↔ RGB
# =============================================================================


def to_hex(r: float, g: float, b: float) -> str:
    """
    Format three channels as a lowercase ``#rrggbb`` string.

    Each channel is rounded to the nearest integer and then clamped to
    [0, 255]. Out-of-range input is never rejected.

    Example:
        >>> to_hex(300, 127.5, -4)
        '#ff8000'
    """
    return "#" + "".join(
        f"{int(_clamp(_round_half_up(c))):02x}" for c in (r, g, b)
    )


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """
    Parse a 6-digit hex color into ``(r, g, b)``.

    The leading ``#`` is optional.

    Raises:
        InvalidColorFormatError: If the string is not exactly six hex digits.
    """
    if not isinstance(hex_color, str):
        raise InvalidColorFormatError(
            f"Expected hex color string, got {type(hex_color).__name__}"
        )
    digits = hex_color[1:] if hex_color.startswith("#") else hex_color
    if not _HEX_RE.fullmatch(digits):
        raise InvalidColorFormatError(f"Invalid hex color: {hex_color!r}")

    packed = int(digits, 16)
    return (packed >> 16) & 255, (packed >> 8) & 255, packed & 255


def hex_to_rgba(hex_color: str, alpha: float = 1) -> str:
    """
    Build an ``rgba(r, g, b, a)`` string.

    Alpha is passed through unmodified; values outside [0, 1] are kept
    as given and only clamped when the string is painted.
    """
    r, g, b = hex_to_rgb(hex_color)
    return f"rgba({r}, {g}, {b}, {_format_number(alpha)})"


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def parse_css_color(color: str) -> tuple[int, int, int, float]:
    """
    Parse ``#rrggbb``, ``rgb(...)`` or ``rgba(...)`` into ``(r, g, b, a)``.

    Channels are clamped to [0, 255] and alpha to [0, 1], matching how a
    raster surface interprets an out-of-range paint.

    Raises:
        InvalidColorFormatError: For anything else.
    """
    color = color.strip()
    if color.startswith("#"):
        r, g, b = hex_to_rgb(color)
        return r, g, b, 1.0

    m = _RGBA_RE.match(color)
    if not m:
        raise InvalidColorFormatError(f"Unrecognized color: {color!r}")

    try:
        r, g, b = (int(_clamp(_round_half_up(float(m.group(i))))) for i in (1, 2, 3))
        a = float(m.group(4)) if m.group(4) is not None else 1.0
    except ValueError as e:
        raise InvalidColorFormatError(f"Unrecognized color: {color!r}") from e

    return r, g, b, float(_clamp(a, 0.0, 1.0))


# =============================================================================
# Derived colors
# =============================================================================


def mix_color(hex_color: str, amount: float) -> str:
    """
    Tint toward white (amount > 0) or shade toward black (amount < 0).

    Positive amounts move each channel the given fraction of its distance
    to 255. Negative amounts scale the channel by ``1 + amount``, so -0.2
    multiplies by 0.8.

    Example:
        >>> mix_color("#000000", 0.5)
        '#808080'
        >>> mix_color("#808080", -0.5)
        '#404040'
    """
    r, g, b = hex_to_rgb(hex_color)

    def mix(channel: int) -> float:
        if amount >= 0:
            return _clamp(channel + (255 - channel) * amount)
        return _clamp(channel + channel * amount)

    return to_hex(mix(r), mix(g), mix(b))


def relative_luminance(hex_color: str) -> float:
    """Weighted luminance in [0, 1] using Rec. 601 coefficients."""
    r, g, b = hex_to_rgb(hex_color)
    return (0.299 * r + 0.587 * g + 0.114 * b) / 255


def get_readable_text_color(hex_color: str) -> str:
    """
    Pick a text color for the given background.

    Returns:
        DARK_TEXT if the background luminance exceeds 0.6, else LIGHT_TEXT.
    """
    if relative_luminance(hex_color) > LUMINANCE_THRESHOLD:
        return DARK_TEXT
    return LIGHT_TEXT

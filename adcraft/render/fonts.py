# Copyright (c) 2026 AdCraft
# SPDX-License-Identifier: MIT

"""
Font resolution for poster text.

Fonts are requested by pixel size and CSS-style weight, which maps to one
of three tiers: regular (< 600), bold (600-799) and heavy (>= 800).
Resolution order per tier:
1. Env paths, comma-separated: ``ADCRAFT_HEAVY_FONT`` (heavy only), then
   ``ADCRAFT_BOLD_FONT`` (bold and heavy), then ``ADCRAFT_FONT``
2. Common system sans-serif fonts on Linux, macOS and Windows
3. Pillow's bundled default font at the requested size

A heavy request that finds no black/heavy face falls back to the bold
chain and is emboldened with a text stroke, so an 800 headline still
reads heavier than a 600 label.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from PIL import ImageFont

logger = logging.getLogger(__name__)

BOLD_WEIGHT = 600
HEAVY_WEIGHT = 800

_REGULAR_CANDIDATES: tuple[str, ...] = (
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/System/Library/Fonts/Supplemental/Arial.ttf",
    "/Library/Fonts/Arial.ttf",
    "C:\\Windows\\Fonts\\arial.ttf",
)

_BOLD_CANDIDATES: tuple[str, ...] = (
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
    "/usr/share/fonts/TTF/DejaVuSans-Bold.ttf",
    "/System/Library/Fonts/Supplemental/Arial Bold.ttf",
    "/Library/Fonts/Arial Bold.ttf",
    "C:\\Windows\\Fonts\\arialbd.ttf",
)

_HEAVY_CANDIDATES: tuple[str, ...] = (
    "/usr/share/fonts/truetype/noto/NotoSans-Black.ttf",
    "/usr/share/fonts/noto/NotoSans-Black.ttf",
    "/usr/share/fonts/truetype/roboto/unhinted/RobotoTTF/Roboto-Black.ttf",
    "/usr/share/fonts/truetype/lato/Lato-Black.ttf",
    "/System/Library/Fonts/Supplemental/Arial Black.ttf",
    "/Library/Fonts/Arial Black.ttf",
    "C:\\Windows\\Fonts\\ariblk.ttf",
)

# Synthetic emboldening: stroke width as a fraction of the pixel size
_HEAVY_STROKE_RATIO = 1 / 40


@dataclass(frozen=True, slots=True)
class FontSpec:
    """
    A requested font.

    Attributes:
        size: Pixel size (em height)
        weight: CSS weight, 100-900
    """
    size: int
    weight: int = 400

    def __post_init__(self) -> None:
        if self.size <= 0:
            raise ValueError(f"Font size must be positive, got {self.size}")

    @property
    def bold(self) -> bool:
        return self.weight >= BOLD_WEIGHT

    @property
    def tier(self) -> str:
        """``regular``, ``bold`` or ``heavy``."""
        if self.weight >= HEAVY_WEIGHT:
            return "heavy"
        return "bold" if self.bold else "regular"


def _env_paths(name: str) -> list[str]:
    raw = os.environ.get(name) or ""
    return [p.strip() for p in raw.split(",") if p.strip()]


def _try_truetype(path: str, size: int) -> Optional[ImageFont.FreeTypeFont]:
    if not Path(path).exists():
        return None
    try:
        return ImageFont.truetype(path, size)
    except OSError as e:
        logger.debug("Could not load font %s: %s", path, e)
        return None


class FontResolver:
    """Caches one Pillow font (and its synthetic stroke) per (size, tier)."""

    def __init__(self) -> None:
        self._cache: dict[tuple[int, str], tuple[ImageFont.ImageFont, int]] = {}

    def candidates(self, tier: str) -> list[str]:
        regular = _env_paths("ADCRAFT_FONT")
        if tier == "heavy":
            return _env_paths("ADCRAFT_HEAVY_FONT") + list(_HEAVY_CANDIDATES)
        if tier == "bold":
            return _env_paths("ADCRAFT_BOLD_FONT") + regular + list(_BOLD_CANDIDATES)
        return regular + list(_REGULAR_CANDIDATES)

    def get(self, spec: FontSpec) -> ImageFont.ImageFont:
        return self._resolve(spec)[0]

    def stroke_width(self, spec: FontSpec) -> int:
        """Extra stroke (px) drawn around glyphs to fake a missing heavy face."""
        return self._resolve(spec)[1]

    def _resolve(self, spec: FontSpec) -> tuple[ImageFont.ImageFont, int]:
        key = (spec.size, spec.tier)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        stroke = 0
        font = self._first_available(self.candidates(spec.tier), spec.size)
        if font is None and spec.tier == "heavy":
            font = self._first_available(self.candidates("bold"), spec.size)
            stroke = max(1, round(spec.size * _HEAVY_STROKE_RATIO))
            logger.debug("No heavy face found, emboldening bold with %dpx stroke", stroke)

        if font is None:
            logger.debug("No system font found, using Pillow default at %dpx", spec.size)
            font = ImageFont.load_default(size=spec.size)

        self._cache[key] = (font, stroke)
        return font, stroke

    @staticmethod
    def _first_available(paths: list[str], size: int) -> Optional[ImageFont.ImageFont]:
        for path in paths:
            font = _try_truetype(path, size)
            if font is not None:
                return font
        return None

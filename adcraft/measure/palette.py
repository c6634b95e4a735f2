# Copyright (c) 2026 AdCraft
# SPDX-License-Identifier: MIT

"""
Palette extraction by uniform-bucket histogram.

Pipeline:
1. Downscale to a 220px working width (aspect preserved, height capped
   at 880px so cost is bounded for any input)
2. Sample every 6th pixel of the RGBA buffer
3. Quantize each channel with round(c / 32) → bucket key
4. Accumulate per-bucket count and raw channel sums
5. Rank buckets by count (ties: first bucket seen in scan order wins)
6. Emit the mean raw color of each of the top N buckets

The result is deterministic for a given image. Fewer than N colors are
returned when fewer buckets are populated; padding to five is the
caller's job (see ``resolve_palette``).
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np
from numpy.typing import NDArray
from PIL import Image

from adcraft.schema import PALETTE_SIZE, Palette, SourceImage
from adcraft.measure.colorspace import to_hex

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

#: Width of the off-screen working raster.
WORKING_WIDTH = 220

#: Working raster height cap. Taller images are squashed vertically, which
#: keeps every color's share of the area unchanged.
MAX_WORKING_HEIGHT = WORKING_WIDTH * 4

#: Sample one pixel out of every SAMPLE_STRIDE.
SAMPLE_STRIDE = 6

#: Channel divisor for quantization.
BUCKET_SIZE = 32

# round(255 / 32) == 8, so each channel has 9 levels
_LEVELS = 255 // BUCKET_SIZE + 2

#: Returned by the extractor when the image yields no colors.
EXTRACTION_FALLBACK: tuple[str, ...] = (
    "#0F172A", "#224870", "#F4F6FB", "#FEB144", "#FC6255",
)

#: Fills missing palette slots positionally when composing.
LAYOUT_FALLBACK: tuple[str, ...] = (
    "#111827", "#1E293B", "#6366F1", "#F472B6", "#FACC15",
)


# =============================================================================
# Extraction
# =============================================================================


def extract_palette(
    image: Optional[SourceImage | Image.Image],
    n_colors: int = PALETTE_SIZE,
) -> list[str]:
    """
    Extract up to ``n_colors`` dominant colors from an image.

    Args:
        image: Decoded image (SourceImage or PIL Image). None yields the
            fallback sequence.
        n_colors: Maximum number of colors to return.

    Returns:
        Lowercase ``#rrggbb`` strings ordered by pixel population. If the
        image is missing or yields no samples, the first ``n_colors`` of
        EXTRACTION_FALLBACK.

    Example:
        >>> extract_palette(Image.new("RGB", (40, 30), (200, 40, 40)), 3)
        ['#c82828']
    """
    if image is None:
        return list(EXTRACTION_FALLBACK[:n_colors])

    pil_image = image.image if isinstance(image, SourceImage) else image
    pixels = _working_pixels(pil_image)

    palette = palette_from_pixels(pixels, n_colors=n_colors)
    if not palette:
        return list(EXTRACTION_FALLBACK[:n_colors])
    return palette


def palette_from_pixels(
    rgba_pixels: NDArray[np.uint8],
    n_colors: int = PALETTE_SIZE,
    stride: int = SAMPLE_STRIDE,
) -> list[str]:
    """
    Histogram already-downscaled pixels into ranked bucket means.

    Args:
        rgba_pixels: Array of shape (..., 4) or (..., 3) with uint8 channels.
        n_colors: Maximum number of colors to return.
        stride: Take every ``stride``-th pixel in buffer order.

    Returns:
        Up to ``n_colors`` hex strings. Empty if there are no pixels.
    """
    channels = rgba_pixels.shape[-1]
    if channels not in (3, 4):
        raise ValueError(f"Expected (..., 3) or (..., 4) array, got shape {rgba_pixels.shape}")

    flat = rgba_pixels.reshape(-1, channels)
    rgb = flat[::stride, :3].astype(np.int64)
    if len(rgb) == 0 or n_colors <= 0:
        return []

    # Math.round semantics: halves round up (np.round would go to even)
    quantized = np.floor(rgb / BUCKET_SIZE + 0.5).astype(np.int64)
    keys = (quantized[:, 0] * _LEVELS + quantized[:, 1]) * _LEVELS + quantized[:, 2]

    n_buckets = _LEVELS ** 3
    counts = np.bincount(keys, minlength=n_buckets)
    sums = np.stack(
        [np.bincount(keys, weights=rgb[:, i], minlength=n_buckets) for i in range(3)],
        axis=1,
    )

    populated, first_seen = np.unique(keys, return_index=True)
    # Sort by count descending, then by first appearance ascending
    order = np.lexsort((first_seen, -counts[populated]))
    top = populated[order][:n_colors]

    logger.debug(
        "Histogrammed %d samples into %d buckets, keeping %d",
        len(rgb), len(populated), len(top),
    )

    palette = []
    for key in top:
        count = counts[key]
        r, g, b = sums[key] / count
        palette.append(to_hex(r, g, b))
    return palette


def _working_pixels(img: Image.Image) -> NDArray[np.uint8]:
    """
    Draw the image onto a WORKING_WIDTH-wide RGBA raster.

    Fully transparent pixels read back as (0, 0, 0, 0), as they would
    from a cleared canvas.
    """
    ratio = img.width / img.height
    width = WORKING_WIDTH
    height = max(1, int(np.floor(width / ratio + 0.5)))
    if height > MAX_WORKING_HEIGHT:
        logger.debug("Capping working height %d at %d", height, MAX_WORKING_HEIGHT)
        height = MAX_WORKING_HEIGHT

    if img.mode != "RGBA":
        img = img.convert("RGBA")
    small = img.resize((width, height), Image.Resampling.BILINEAR)

    pixels = np.array(small, dtype=np.uint8)
    pixels[pixels[..., 3] == 0] = 0
    return pixels


# =============================================================================
# Resolution
# =============================================================================


def resolve_palette(
    extracted: Sequence[str],
    fallback: Sequence[str] = LAYOUT_FALLBACK,
) -> Palette:
    """
    Pad or trim extracted colors to exactly five.

    Slot ``i`` takes ``extracted[i]`` if present, else ``fallback[i]``.
    Entries beyond the fifth are ignored.
    """
    if len(fallback) < PALETTE_SIZE:
        raise ValueError(
            f"Fallback palette needs {PALETTE_SIZE} colors, got {len(fallback)}"
        )
    colors = tuple(
        extracted[i] if i < len(extracted) and extracted[i] else fallback[i]
        for i in range(PALETTE_SIZE)
    )
    return Palette(colors=colors)

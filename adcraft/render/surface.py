# Copyright (c) 2026 AdCraft
# SPDX-License-Identifier: MIT

"""
Raster render surface.

A fixed-size RGBA bitmap plus a drawing state (fill paint, font, text
alignment, shadow, clip region). State changes are scoped with
``saved()``, which restores the previous state on every exit path:

    with surface.saved() as state:
        state.fill_style = "#ff0000"
        surface.clip(RoundedRect(10, 10, 100, 50, 12))
        surface.fill(RoundedRect(0, 0, 200, 200, 0))
    # fill style and clip are back to what they were

Paints are CSS-style color strings (``#rrggbb`` or ``rgba(...)``) or
gradient objects. Every fill is composited source-over.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from typing import Iterator, Optional, Union

import numpy as np
from numpy.typing import NDArray
from PIL import Image, ImageChops, ImageDraw, ImageFilter

from adcraft.measure.colorspace import parse_css_color
from adcraft.render.fonts import FontResolver, FontSpec


# =============================================================================
# Paints
# =============================================================================


@dataclass(frozen=True, slots=True)
class ColorStop:
    """A gradient stop at ``position`` in [0, 1]."""
    position: float
    color: str

    def __post_init__(self) -> None:
        if not 0.0 <= self.position <= 1.0:
            raise ValueError(f"Position must be 0-1, got {self.position}")


def _stops(*pairs: tuple[float, str]) -> tuple[ColorStop, ...]:
    return tuple(ColorStop(p, c) for p, c in pairs)


@dataclass(frozen=True, slots=True)
class LinearGradient:
    """Gradient along the line from (x0, y0) to (x1, y1)."""
    x0: float
    y0: float
    x1: float
    y1: float
    stops: tuple[ColorStop, ...]

    @classmethod
    def between(cls, x0, y0, x1, y1, start: str, end: str) -> LinearGradient:
        return cls(x0, y0, x1, y1, _stops((0.0, start), (1.0, end)))

    def positions(self, xs: NDArray, ys: NDArray) -> NDArray[np.float32]:
        dx, dy = self.x1 - self.x0, self.y1 - self.y0
        length_sq = dx * dx + dy * dy
        if length_sq == 0:
            return np.zeros(np.broadcast(xs, ys).shape, dtype=np.float32)
        t = ((xs - self.x0) * dx + (ys - self.y0) * dy) / length_sq
        return np.clip(t, 0.0, 1.0).astype(np.float32)


@dataclass(frozen=True, slots=True)
class RadialGradient:
    """Concentric gradient around (x, y) from ``inner_radius`` to ``radius``."""
    x: float
    y: float
    radius: float
    stops: tuple[ColorStop, ...]
    inner_radius: float = 0.0

    @classmethod
    def between(cls, x, y, radius, start: str, end: str) -> RadialGradient:
        return cls(x, y, radius, _stops((0.0, start), (1.0, end)))

    def positions(self, xs: NDArray, ys: NDArray) -> NDArray[np.float32]:
        span = self.radius - self.inner_radius
        dist = np.sqrt((xs - self.x) ** 2 + (ys - self.y) ** 2)
        if span <= 0:
            return (dist >= self.radius).astype(np.float32)
        t = (dist - self.inner_radius) / span
        return np.clip(t, 0.0, 1.0).astype(np.float32)


Paint = Union[str, LinearGradient, RadialGradient]


def _paint_array(paint: Paint, width: int, height: int) -> NDArray[np.float32]:
    """
    Evaluate a paint over the whole surface.

    Returns:
        (H, W, 4) float32 array; RGB in [0, 255], alpha in [0, 1].
    """
    if isinstance(paint, str):
        r, g, b, a = parse_css_color(paint)
        out = np.empty((height, width, 4), dtype=np.float32)
        out[...] = (r, g, b, a)
        return out

    if not paint.stops:
        return np.zeros((height, width, 4), dtype=np.float32)

    # Sample at pixel centers
    ys, xs = np.ogrid[0:height, 0:width]
    t = paint.positions(xs.astype(np.float32) + 0.5, ys.astype(np.float32) + 0.5)

    positions = np.array([s.position for s in paint.stops], dtype=np.float32)
    colors = np.array([parse_css_color(s.color) for s in paint.stops], dtype=np.float32)

    # Interpolate premultiplied so fades to transparent keep their hue
    alpha = np.interp(t, positions, colors[:, 3]).astype(np.float32)
    out = np.empty((height, width, 4), dtype=np.float32)
    for i in range(3):
        premult = np.interp(t, positions, colors[:, i] * colors[:, 3])
        out[..., i] = np.divide(
            premult, alpha, out=np.zeros_like(alpha), where=alpha > 0
        )
    out[..., 3] = alpha
    return out


# =============================================================================
# Shapes
# =============================================================================


@dataclass(frozen=True, slots=True)
class RoundedRect:
    """
    Axis-aligned rectangle with rounded corners.

    The radius is capped at half the shorter side. A radius of zero is a
    plain rectangle.
    """
    x: float
    y: float
    width: float
    height: float
    radius: float = 0.0

    @property
    def effective_radius(self) -> float:
        return max(0.0, min(self.radius, self.width / 2, self.height / 2))

    def mask(self, size: tuple[int, int], dx: float = 0, dy: float = 0) -> Image.Image:
        """8-bit coverage mask of the shape on a ``size`` canvas."""
        m = Image.new("L", size, 0)
        if self.width <= 0 or self.height <= 0:
            return m
        x0, y0 = self.x + dx, self.y + dy
        box = (round(x0), round(y0), round(x0 + self.width) - 1, round(y0 + self.height) - 1)
        if box[2] < box[0] or box[3] < box[1]:
            return m
        ImageDraw.Draw(m).rounded_rectangle(box, radius=round(self.effective_radius), fill=255)
        return m


# =============================================================================
# Drawing state
# =============================================================================

_TEXT_ALIGN = {"left": "l", "start": "l", "center": "m", "right": "r", "end": "r"}
_TEXT_BASELINE = {
    "top": "a",
    "hanging": "a",
    "middle": "m",
    "alphabetic": "s",
    "bottom": "d",
    "ideographic": "d",
}


@dataclass
class DrawState:
    """
    Mutable drawing state. Snapshotted by ``RenderSurface.saved()``.

    Attributes:
        fill_style: Paint for fills and text
        font: Font used by text operations
        text_align: left, center or right
        text_baseline: top, middle, alphabetic or bottom
        shadow_color: Shadow paint color (transparent disables shadows)
        shadow_blur: Shadow blur amount in pixels
        shadow_offset_x: Horizontal shadow offset
        shadow_offset_y: Vertical shadow offset
        global_alpha: Multiplier applied to every draw
        clip: Coverage mask limiting all draws, None for no clip
    """
    fill_style: Paint = "#000000"
    font: FontSpec = field(default_factory=lambda: FontSpec(size=10))
    text_align: str = "left"
    text_baseline: str = "alphabetic"
    shadow_color: str = "rgba(0, 0, 0, 0)"
    shadow_blur: float = 0.0
    shadow_offset_x: float = 0.0
    shadow_offset_y: float = 0.0
    global_alpha: float = 1.0
    clip: Optional[Image.Image] = None


# =============================================================================
# Surface
# =============================================================================


class RenderSurface:
    """
    Fixed-size RGBA raster target with a save/restore state stack.

    The surface is caller-owned. ``reset()`` clears pixels and state so a
    surface can be reused across renders without leaking state.
    """

    def __init__(
        self,
        width: int = 1080,
        height: int = 1350,
        fonts: Optional[FontResolver] = None,
    ) -> None:
        if width < 1 or height < 1:
            raise ValueError(f"Surface must be at least 1x1, got {width}x{height}")
        self.width = width
        self.height = height
        self.fonts = fonts or FontResolver()
        self._image = Image.new("RGBA", (width, height), (0, 0, 0, 0))
        self._state = DrawState()
        self._stack: list[DrawState] = []

    # -- state ---------------------------------------------------------------

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def state(self) -> DrawState:
        return self._state

    @property
    def depth(self) -> int:
        """Number of open ``saved()`` scopes."""
        return len(self._stack)

    def reset(self) -> None:
        """Clear to transparent and drop all drawing state."""
        self._image = Image.new("RGBA", self.size, (0, 0, 0, 0))
        self._state = DrawState()
        self._stack.clear()

    @contextmanager
    def saved(self) -> Iterator[DrawState]:
        """Scope state changes; the prior state is restored on exit."""
        self._stack.append(replace(self._state))
        try:
            yield self._state
        finally:
            self._state = self._stack.pop()

    def to_image(self) -> Image.Image:
        """Copy of the current bitmap."""
        return self._image.copy()

    # -- drawing -------------------------------------------------------------

    def fill(self, shape: Optional[RoundedRect] = None) -> None:
        """Fill a shape (or the whole surface) with the current fill style."""
        if shape is None:
            shape = RoundedRect(0, 0, self.width, self.height)
        coverage = np.asarray(shape.mask(self.size), dtype=np.float32) / 255.0
        self._composite(self._state.fill_style, coverage)

    def clip(self, shape: RoundedRect) -> None:
        """Intersect the clip region with a shape."""
        mask = shape.mask(self.size)
        if self._state.clip is not None:
            mask = ImageChops.multiply(self._state.clip, mask)
        self._state.clip = mask

    def measure_text(self, text: str) -> float:
        """Advance width of ``text`` in the current font, in pixels."""
        spec = self._state.font
        stroke = self.fonts.stroke_width(spec)
        return float(self.fonts.get(spec).getlength(text)) + 2 * stroke

    def fill_text(self, text: str, x: float, y: float) -> None:
        """Draw text anchored by the current alignment and baseline."""
        if not text:
            return
        spec = self._state.font
        font = self.fonts.get(spec)
        stroke = self.fonts.stroke_width(spec)
        anchor = (
            _TEXT_ALIGN.get(self._state.text_align, "l")
            + _TEXT_BASELINE.get(self._state.text_baseline, "s")
        )
        mask = Image.new("L", self.size, 0)
        ImageDraw.Draw(mask).text(
            (x, y), text, fill=255, font=font, anchor=anchor,
            stroke_width=stroke, stroke_fill=255,
        )
        coverage = np.asarray(mask, dtype=np.float32) / 255.0
        self._composite(self._state.fill_style, coverage)

    def draw_image(
        self,
        image: Image.Image,
        x: float,
        y: float,
        width: float,
        height: float,
    ) -> None:
        """Scale ``image`` into the given box and draw it."""
        w, h = max(1, round(width)), max(1, round(height))
        scaled = image.convert("RGBA").resize((w, h), Image.Resampling.LANCZOS)

        layer = Image.new("RGBA", self.size, (0, 0, 0, 0))
        layer.paste(scaled, (round(x), round(y)))

        pixels = np.asarray(layer, dtype=np.float32).copy()
        pixels[..., 3] *= self._coverage_limit()
        self._image.alpha_composite(_to_layer(pixels, alpha_scale=1.0))

    # -- compositing ---------------------------------------------------------

    def _coverage_limit(self) -> NDArray[np.float32] | float:
        """Clip mask times global alpha, as a multiplier on coverage."""
        alpha = float(np.clip(self._state.global_alpha, 0.0, 1.0))
        if self._state.clip is None:
            return alpha
        return np.asarray(self._state.clip, dtype=np.float32) / 255.0 * alpha

    def _composite(
        self,
        paint: Paint,
        coverage: NDArray[np.float32],
    ) -> None:
        colors = _paint_array(paint, self.width, self.height)
        alpha = colors[..., 3] * coverage

        if self._has_shadow():
            self._draw_shadow(alpha)

        colors[..., 3] = alpha * self._coverage_limit()
        self._image.alpha_composite(_to_layer(colors))

    def _has_shadow(self) -> bool:
        s = self._state
        _, _, _, a = parse_css_color(s.shadow_color)
        return a > 0 and (s.shadow_blur > 0 or s.shadow_offset_x != 0 or s.shadow_offset_y != 0)

    def _draw_shadow(self, alpha: NDArray[np.float32]) -> None:
        s = self._state
        r, g, b, a = parse_css_color(s.shadow_color)
        shifted = _shift(alpha, s.shadow_offset_x, s.shadow_offset_y)

        if s.shadow_blur > 0:
            mask = Image.fromarray(np.round(shifted * 255).astype(np.uint8))
            # Blur amount is twice the Gaussian standard deviation
            mask = mask.filter(ImageFilter.GaussianBlur(s.shadow_blur / 2))
            shifted = np.asarray(mask, dtype=np.float32) / 255.0

        layer = np.empty((self.height, self.width, 4), dtype=np.float32)
        layer[...] = (r, g, b, a)
        layer[..., 3] *= shifted * self._coverage_limit()
        self._image.alpha_composite(_to_layer(layer))


def _shift(arr: NDArray[np.float32], dx: float, dy: float) -> NDArray[np.float32]:
    """Translate a 2D array, filling vacated cells with zero."""
    dx, dy = int(round(dx)), int(round(dy))
    h, w = arr.shape
    out = np.zeros_like(arr)
    if abs(dx) >= w or abs(dy) >= h:
        return out
    src = arr[max(0, -dy):h - max(0, dy), max(0, -dx):w - max(0, dx)]
    out[max(0, dy):max(0, dy) + src.shape[0], max(0, dx):max(0, dx) + src.shape[1]] = src
    return out


def _to_layer(colors: NDArray[np.float32], alpha_scale: float = 255.0) -> Image.Image:
    """Pack an (H, W, 4) float array into an RGBA image."""
    out = colors.copy()
    out[..., 3] *= alpha_scale
    return Image.fromarray(np.clip(np.round(out), 0, 255).astype(np.uint8))

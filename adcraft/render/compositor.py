# Copyright (c) 2026 AdCraft
# SPDX-License-Identifier: MIT

"""
Layout Compositor.

Maps a PosterSpec onto a fixed-size RenderSurface in nine back-to-front
passes. Every placement is a fraction of the canvas size, so changing
``PosterConfig.width``/``height`` rescales the layout.

Pass order:
    1. background         diagonal gradient, tinted primary → shaded secondary
    2. ambient_glow       radial pop glow near the top-right
    3. content_panel      translucent rounded "glass" panel
    4. ribbon_badge       pop-colored badge with the agent label
    5. hero_image         fit-within product photo with a shadowed halo
    6. headline           wrapped product name
    7. tagline            wrapped tagline
    8. feature_highlight  wrapped caption at 90% highlight opacity
    9. call_to_action     shadowed gradient button with centered label

Each pass runs inside its own ``surface.saved()`` scope and sets every
piece of state it relies on.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional

from adcraft.measure.colorspace import (
    get_readable_text_color,
    hex_to_rgba,
    mix_color,
)
from adcraft.measure.palette import LAYOUT_FALLBACK
from adcraft.render.export import poster_filename
from adcraft.render.fonts import FontSpec
from adcraft.render.surface import (
    LinearGradient,
    RadialGradient,
    RenderSurface,
    RoundedRect,
)
from adcraft.schema import Palette, PosterSpec, RenderedPoster

logger = logging.getLogger(__name__)


# =============================================================================
# Configuration
# =============================================================================


@dataclass(frozen=True)
class PosterConfig:
    """Configuration for poster rendering."""

    # Output canvas (portrait 4:5 social format)
    width: int = 1080
    height: int = 1350

    # Fills palette slots the extractor could not provide
    fallback_palette: tuple[str, ...] = LAYOUT_FALLBACK

    # Ribbon badge label
    badge_text: str = "Autonomous Poster Agent"

    # Export name used when the product name is blank
    default_filename: str = "adcraft-poster"

    # Font weights (CSS scale)
    headline_weight: int = 800
    tagline_weight: int = 600
    feature_weight: int = 500
    cta_weight: int = 700
    badge_weight: int = 600

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Canvas must be at least 1x1, got {self.width}x{self.height}")
        if len(self.fallback_palette) < 5:
            raise ValueError("fallback_palette needs 5 colors")


DEFAULT_CONFIG = PosterConfig()


# =============================================================================
# Geometry
# =============================================================================


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def fit_within(
    src_width: float,
    src_height: float,
    max_width: float,
    max_height: float,
) -> tuple[float, float]:
    """
    Largest size with the source aspect ratio inside the bounding box.

    Width is tried first; if the resulting height overflows, height is
    pinned and width recomputed. Never crops.
    """
    if src_width <= 0 or src_height <= 0:
        raise ValueError(f"Source size must be positive, got {src_width}x{src_height}")
    ratio = src_width / src_height
    width = max_width
    height = width / ratio
    if height > max_height:
        height = max_height
        width = height * ratio
    return width, height


@dataclass(frozen=True, slots=True)
class PosterLayout:
    """
    Resolved placements for one render, in canvas pixels.

    Attributes:
        panel: Glass content panel
        ribbon: Ribbon badge
        halo: Glow frame behind the hero image
        hero: Hero image box (fit-within, centered in its region)
        cta: Call-to-action button
        headline_size: Headline font size (also its line height)
    """
    panel: RoundedRect
    ribbon: RoundedRect
    halo: RoundedRect
    hero: RoundedRect
    cta: RoundedRect
    headline_size: int


def compute_layout(
    image_width: int,
    image_height: int,
    config: PosterConfig = DEFAULT_CONFIG,
) -> PosterLayout:
    """Compute every rectangle for a source image of the given size."""
    W, H = config.width, config.height

    max_w, max_h = W * 0.58, H * 0.52
    draw_w, draw_h = fit_within(image_width, image_height, max_w, max_h)
    draw_x = W * 0.11 + (max_w - draw_w) / 2
    draw_y = H * 0.24 + (max_h - draw_h) / 2

    return PosterLayout(
        panel=RoundedRect(W * 0.08, H * 0.18, W * 0.84, H * 0.6, 48),
        ribbon=RoundedRect(W * 0.58, H * 0.16, W * 0.34, 72, 28),
        halo=RoundedRect(draw_x - 22, draw_y - 22, draw_w + 44, draw_h + 44, 40),
        hero=RoundedRect(draw_x, draw_y, draw_w, draw_h, 32),
        cta=RoundedRect(W * 0.12, H * 0.9, W * 0.42, 92, 46),
        headline_size=_round_half_up(W * 0.055),
    )


# =============================================================================
# Text
# =============================================================================


def wrap_lines(
    text: str,
    max_width: float,
    measure: Callable[[str], float],
) -> list[str]:
    """
    Greedy word wrap.

    Words are appended to the current line with single spaces. When the
    candidate line measures wider than ``max_width`` and the current line
    is non-empty, the current line is committed and the word starts a new
    one. Words are never split, so a single over-long word gets its own
    line. The last line is always emitted.

    Returns:
        Lines in order; empty for whitespace-only text.
    """
    words = text.split()
    lines: list[str] = []
    current = ""

    for word in words:
        candidate = word if not current else f"{current} {word}"
        if measure(candidate) > max_width and current:
            lines.append(current)
            current = word
        else:
            current = candidate

    if words:
        lines.append(current)
    return lines


def draw_paragraph(
    surface: RenderSurface,
    text: str,
    *,
    x: float,
    y: float,
    max_width: float,
    line_height: float,
    font: FontSpec,
    color: str,
    align: str = "left",
) -> list[str]:
    """
    Wrap and draw text top-down from (x, y).

    Returns:
        The lines that were drawn.
    """
    with surface.saved() as state:
        state.font = font
        state.fill_style = color
        state.text_baseline = "top"
        state.text_align = align

        lines = wrap_lines(text, max_width, surface.measure_text)
        for i, line in enumerate(lines):
            surface.fill_text(line, x, y + i * line_height)
    return lines


# =============================================================================
# Passes
# =============================================================================


@dataclass(frozen=True)
class _Context:
    spec: PosterSpec
    palette: Palette
    layout: PosterLayout
    config: PosterConfig

    @property
    def W(self) -> int:
        return self.config.width

    @property
    def H(self) -> int:
        return self.config.height


def _background(surface: RenderSurface, ctx: _Context) -> None:
    p = ctx.palette
    with surface.saved() as state:
        state.fill_style = LinearGradient.between(
            0, 0, ctx.W, ctx.H,
            mix_color(p.primary, 0.25),
            mix_color(p.secondary, -0.2),
        )
        surface.fill()


def _ambient_glow(surface: RenderSurface, ctx: _Context) -> None:
    p = ctx.palette
    with surface.saved() as state:
        state.fill_style = RadialGradient.between(
            ctx.W * 0.85, ctx.H * 0.1, ctx.W * 0.9,
            hex_to_rgba(p.pop, 0.3),
            hex_to_rgba(p.primary, 0),
        )
        surface.fill()


def _content_panel(surface: RenderSurface, ctx: _Context) -> None:
    p, panel = ctx.palette, ctx.layout.panel
    with surface.saved() as state:
        state.fill_style = LinearGradient.between(
            panel.x, panel.y, panel.x + panel.width, panel.y + panel.height,
            hex_to_rgba(p.secondary, 0.18),
            hex_to_rgba(p.primary, 0.38),
        )
        surface.fill(panel)


def _ribbon_badge(surface: RenderSurface, ctx: _Context) -> None:
    p, ribbon = ctx.palette, ctx.layout.ribbon
    with surface.saved() as state:
        state.fill_style = LinearGradient.between(
            ribbon.x, ribbon.y, ribbon.x + ribbon.width, ribbon.y + ribbon.height,
            mix_color(p.pop, -0.1),
            mix_color(p.pop, 0.25),
        )
        surface.fill(ribbon)

        state.font = FontSpec(size=28, weight=ctx.config.badge_weight)
        state.fill_style = get_readable_text_color(mix_color(p.pop, 0.12))
        state.text_baseline = "middle"
        state.text_align = "center"
        surface.fill_text(
            ctx.config.badge_text,
            ctx.W * 0.75,
            ribbon.y + ribbon.height / 2,
        )


def _hero_image(surface: RenderSurface, ctx: _Context) -> None:
    p, halo, hero = ctx.palette, ctx.layout.halo, ctx.layout.hero
    with surface.saved() as state:
        state.fill_style = hex_to_rgba(p.highlight, 0.16)
        state.shadow_color = hex_to_rgba(p.primary, 0.45)
        state.shadow_blur = 48
        state.shadow_offset_y = 32
        surface.fill(halo)

    with surface.saved():
        surface.clip(hero)
        surface.draw_image(ctx.spec.image.image, hero.x, hero.y, hero.width, hero.height)


def _headline(surface: RenderSurface, ctx: _Context) -> None:
    size = ctx.layout.headline_size
    draw_paragraph(
        surface,
        ctx.spec.product_name,
        x=ctx.W * 0.12,
        y=ctx.H * 0.12,
        max_width=ctx.W * 0.74,
        line_height=size,
        font=FontSpec(size=size, weight=ctx.config.headline_weight),
        color=get_readable_text_color(mix_color(ctx.palette.primary, 0.16)),
    )


def _tagline(surface: RenderSurface, ctx: _Context) -> None:
    draw_paragraph(
        surface,
        ctx.spec.tagline,
        x=ctx.W * 0.12,
        y=ctx.H * 0.76,
        max_width=ctx.W * 0.76,
        line_height=48,
        font=FontSpec(size=40, weight=ctx.config.tagline_weight),
        color=get_readable_text_color(mix_color(ctx.palette.secondary, 0.1)),
    )


def _feature_highlight(surface: RenderSurface, ctx: _Context) -> None:
    draw_paragraph(
        surface,
        ctx.spec.feature_highlight,
        x=ctx.W * 0.12,
        y=ctx.H * 0.88,
        max_width=ctx.W * 0.76,
        line_height=38,
        font=FontSpec(size=30, weight=ctx.config.feature_weight),
        color=hex_to_rgba(ctx.palette.highlight, 0.9),
    )


def _call_to_action(surface: RenderSurface, ctx: _Context) -> None:
    p, cta = ctx.palette, ctx.layout.cta
    with surface.saved() as state:
        state.fill_style = LinearGradient.between(
            cta.x, cta.y, cta.x + cta.width, cta.y + cta.height,
            mix_color(p.accent, 0.25),
            mix_color(p.pop, 0.1),
        )
        state.shadow_color = hex_to_rgba(p.accent, 0.45)
        state.shadow_blur = 32
        state.shadow_offset_y = 16
        surface.fill(cta)

    with surface.saved() as state:
        state.font = FontSpec(size=34, weight=ctx.config.cta_weight)
        state.fill_style = get_readable_text_color(mix_color(p.accent, 0.25))
        state.text_baseline = "middle"
        state.text_align = "center"
        surface.fill_text(ctx.spec.cta, cta.x + cta.width / 2, cta.y + cta.height / 2)


PASSES: tuple[tuple[str, Callable[[RenderSurface, _Context], None]], ...] = (
    ("background", _background),
    ("ambient_glow", _ambient_glow),
    ("content_panel", _content_panel),
    ("ribbon_badge", _ribbon_badge),
    ("hero_image", _hero_image),
    ("headline", _headline),
    ("tagline", _tagline),
    ("feature_highlight", _feature_highlight),
    ("call_to_action", _call_to_action),
)


# =============================================================================
# Entry point
# =============================================================================


def render_poster(
    spec: PosterSpec,
    surface: Optional[RenderSurface] = None,
    *,
    config: PosterConfig = DEFAULT_CONFIG,
) -> RenderedPoster:
    """
    Render a poster.

    Args:
        spec: Text, image and resolved palette.
        surface: Caller-owned surface sized ``config.width`` x
            ``config.height``. It is reset before drawing. A new one is
            created if omitted.
        config: Layout configuration.

    Returns:
        RenderedPoster with the bitmap and the completed pass names.

    Example:
        >>> poster = render_poster(spec)
        >>> poster.size
        (1080, 1350)
        >>> poster.passes[0], poster.passes[-1]
        ('background', 'call_to_action')
    """
    if surface is None:
        surface = RenderSurface(config.width, config.height)
    elif surface.size != (config.width, config.height):
        raise ValueError(
            f"Surface is {surface.width}x{surface.height}, "
            f"config expects {config.width}x{config.height}"
        )

    surface.reset()
    ctx = _Context(
        spec=spec,
        palette=spec.palette,
        layout=compute_layout(spec.image.width, spec.image.height, config),
        config=config,
    )

    completed: list[str] = []
    for name, draw in PASSES:
        draw(surface, ctx)
        completed.append(name)
        logger.debug("Render pass %s done", name)

    return RenderedPoster(
        image=surface.to_image(),
        passes=tuple(completed),
        filename=poster_filename(spec.product_name, default=config.default_filename),
    )

# Copyright (c) 2026 AdCraft
# SPDX-License-Identifier: MIT

"""
Rendering for AdCraft.

A caller-owned RenderSurface and the Layout Compositor that draws a
PosterSpec onto it.
"""

from adcraft.render.compositor import (
    DEFAULT_CONFIG,
    PosterConfig,
    compute_layout,
    fit_within,
    render_poster,
    wrap_lines,
)
from adcraft.render.surface import RenderSurface

__all__ = [
    "render_poster",
    "PosterConfig",
    "DEFAULT_CONFIG",
    "RenderSurface",
    "compute_layout",
    "fit_within",
    "wrap_lines",
]

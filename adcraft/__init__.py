# Copyright (c) 2026 AdCraft
# SPDX-License-Identifier: MIT

"""
AdCraft -- Palette-driven promotional poster composer.

Turns a product photo, a product name and a short description into a
finished 1080x1350 poster: the palette comes from the photo, the copy
from a keyword-matched brand voice.

Quick start::

    from adcraft import PosterSession

    session = PosterSession(seed=7)
    session.upload_file("lamp.jpg")
    session.generate("Lumen Arc Smart Lamp", "Eco lamp with clean light")
    session.export("posters/")   # posters/lumen-arc-smart-lamp.png
"""

from __future__ import annotations

__version__ = "1.0.0"

from adcraft.errors import (
    AdCraftError,
    DecodeFailureError,
    InvalidColorFormatError,
    InvalidInputError,
    UnsupportedMediaError,
)
from adcraft.measure import extract_palette, load_image, resolve_palette
from adcraft.render import PosterConfig, RenderSurface, render_poster
from adcraft.runtime import PosterSession
from adcraft.schema import (
    GenerationResult,
    Palette,
    PosterSpec,
    RenderedPoster,
    SourceImage,
)

__all__ = [
    # Core API
    "PosterSession",
    "load_image",
    "extract_palette",
    "resolve_palette",
    "render_poster",
    "RenderSurface",
    "PosterConfig",
    # Types
    "Palette",
    "SourceImage",
    "PosterSpec",
    "GenerationResult",
    "RenderedPoster",
    # Errors
    "AdCraftError",
    "InvalidInputError",
    "UnsupportedMediaError",
    "DecodeFailureError",
    "InvalidColorFormatError",
    # Version
    "__version__",
]

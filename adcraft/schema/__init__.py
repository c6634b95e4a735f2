# Copyright (c) 2026 AdCraft
# SPDX-License-Identifier: MIT

"""
Schema definitions for poster generation.

All types in this module are immutable (frozen dataclasses).
"""

from adcraft.schema.poster import (
    PALETTE_ROLES,
    PALETTE_SIZE,
    AgentInsight,
    GenerationResult,
    Palette,
    PosterSpec,
    RenderedPoster,
    SourceImage,
    Voice,
)

__all__ = [
    # Constants
    "PALETTE_SIZE",
    "PALETTE_ROLES",
    # Colors
    "Palette",
    # Inputs
    "SourceImage",
    "PosterSpec",
    # Copy
    "Voice",
    "AgentInsight",
    # Outputs
    "GenerationResult",
    "RenderedPoster",
]

# Copyright (c) 2026 AdCraft
# SPDX-License-Identifier: MIT

"""
Measurement core for AdCraft.

Image decoding, color math and palette extraction. All operations
are pixel-based and deterministic.
"""

from adcraft.measure.loader import load_image
from adcraft.measure.palette import extract_palette, resolve_palette

__all__ = ["load_image", "extract_palette", "resolve_palette"]

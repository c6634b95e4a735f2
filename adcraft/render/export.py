# Copyright (c) 2026 AdCraft
# SPDX-License-Identifier: MIT

"""Poster export: PNG bytes, data URLs and file names."""

from __future__ import annotations

import base64
import io
import re
from pathlib import Path
from typing import Union

from PIL import Image

_WHITESPACE_RE = re.compile(r"\s+")


def poster_filename(product_name: str, default: str = "adcraft-poster") -> str:
    """
    ``<slug>.png`` from the product name.

    The slug is the trimmed, lowercased name with whitespace runs
    collapsed to single hyphens.

    Example:
        >>> poster_filename("  Lumen Arc   Smart Lamp ")
        'lumen-arc-smart-lamp.png'
        >>> poster_filename("   ")
        'adcraft-poster.png'
    """
    slug = _WHITESPACE_RE.sub("-", product_name.strip().lower())
    return f"{slug or default}.png"


def to_png_bytes(image: Image.Image) -> bytes:
    """Encode an image as PNG."""
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def to_data_url(image: Image.Image) -> str:
    """Base64 PNG data URL for inline preview."""
    encoded = base64.b64encode(to_png_bytes(image)).decode("ascii")
    return f"data:image/png;base64,{encoded}"


def save_poster(
    image: Image.Image,
    directory: Union[str, Path],
    filename: str,
) -> Path:
    """Write ``image`` as PNG into ``directory`` and return the path."""
    out_dir = Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / filename
    image.save(path, format="PNG")
    return path

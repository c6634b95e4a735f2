# Copyright (c) 2026 AdCraft
# SPDX-License-Identifier: MIT

"""
Generation report serializers.

Formats a GenerationResult (palette, copy, agent rationale) for display
next to the rendered poster or for logging by automation.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Optional

from adcraft.schema import GenerationResult, RenderedPoster


class ReportFormat(Enum):
    """Report format options."""

    JSON = "json"
    JSON_PRETTY = "json_pretty"
    MARKDOWN = "markdown"


def to_report(
    result: GenerationResult,
    *,
    poster: Optional[RenderedPoster] = None,
    format: ReportFormat = ReportFormat.JSON_PRETTY,
) -> str:
    """Serialize a generation result.

    Args:
        result: The GenerationResult to serialize.
        poster: Rendered poster; adds file name, size and passes if given.
        format: JSON, JSON_PRETTY or MARKDOWN.

    Returns:
        Formatted report string.

    Example (MARKDOWN)::

        ## Lumen Arc Smart Lamp

        **Voice:** eco

        **Palette:** `#F0E6D2` `#2B3A4A` `#C97B4A` `#8FA3B5` `#E8C07D`

        **Tagline:** Pure Lumen Arc Smart Lamp. Designed to respect the planet.

        **CTA:** Make the conscious switch
        ...
    """
    if format == ReportFormat.MARKDOWN:
        return _to_markdown(result, poster)

    data = result.to_dict()
    if poster is not None:
        data["poster"] = _poster_dict(poster)
    indent = 2 if format == ReportFormat.JSON_PRETTY else None
    return json.dumps(data, indent=indent, ensure_ascii=False)


def _poster_dict(poster: RenderedPoster) -> dict:
    width, height = poster.size
    return {
        "filename": poster.filename,
        "width": width,
        "height": height,
        "passes": list(poster.passes),
    }


def _to_markdown(result: GenerationResult, poster: Optional[RenderedPoster]) -> str:
    """Generate a markdown summary."""
    swatches = " ".join(f"`{c}`" for c in result.palette.display())
    lines = [
        f"## {result.product_name}",
        "",
        f"**Voice:** {result.voice_id}",
        "",
        f"**Palette:** {swatches}",
        "",
        f"**Tagline:** {result.tagline}",
        "",
        f"**CTA:** {result.cta}",
        "",
        f"**Feature:** {result.feature_highlight}",
    ]

    if result.insights:
        lines += ["", "### Agent rationale", ""]
        lines += [f"- **{i.title}:** {i.detail}" for i in result.insights]

    if poster is not None:
        width, height = poster.size
        lines += ["", f"Poster: `{poster.filename}` ({width}×{height})"]

    return "\n".join(lines)

# Copyright (c) 2026 AdCraft
# SPDX-License-Identifier: MIT

"""
Poster data model.

Design principles:
- Immutable: All types are frozen dataclasses
- Validated on construction: a Palette always has exactly 5 hex colors
- Serializable: everything except pixel buffers is JSON-ready

Palette roles (in order):
- primary:   most dominant color, drives the background and panel
- secondary: second color, background shade and tagline tone
- accent:    call-to-action gradient start
- highlight: image halo and feature caption tone
- pop:       ambient glow, ribbon badge and CTA gradient end
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from PIL import Image


# =============================================================================
# Constants
# =============================================================================

PALETTE_SIZE = 5

PALETTE_ROLES = ("primary", "secondary", "accent", "highlight", "pop")


# =============================================================================
# Palette
# =============================================================================


@dataclass(frozen=True, slots=True)
class Palette:
    """
    Exactly five resolved colors, ordered by extraction rank.

    Attributes:
        colors: Five ``#rrggbb`` strings (case is preserved as given)
    """
    colors: tuple[str, ...]

    def __post_init__(self) -> None:
        """Validate palette length and color format."""
        from adcraft.measure.colorspace import hex_to_rgb

        if len(self.colors) != PALETTE_SIZE:
            raise ValueError(
                f"Palette requires {PALETTE_SIZE} colors, got {len(self.colors)}"
            )
        for color in self.colors:
            hex_to_rgb(color)
            if not color.startswith("#"):
                raise ValueError(f"Palette colors must start with '#', got {color!r}")

    @property
    def primary(self) -> str:
        return self.colors[0]

    @property
    def secondary(self) -> str:
        return self.colors[1]

    @property
    def accent(self) -> str:
        return self.colors[2]

    @property
    def highlight(self) -> str:
        return self.colors[3]

    @property
    def pop(self) -> str:
        return self.colors[4]

    def display(self) -> tuple[str, ...]:
        """Uppercase hex strings for swatch display."""
        return tuple(c.upper() for c in self.colors)

    def to_dict(self) -> dict:
        """Serialize to dictionary keyed by role."""
        return dict(zip(PALETTE_ROLES, self.display()))

    def __iter__(self):
        return iter(self.colors)

    def __len__(self) -> int:
        return len(self.colors)


# =============================================================================
# Source image
# =============================================================================


@dataclass(frozen=True, eq=False)
class SourceImage:
    """
    A decoded product photo.

    Attributes:
        image: Decoded RGBA pixels in sRGB
        width: Natural width in pixels
        height: Natural height in pixels
        digest: Short SHA256 of the encoded bytes, used to reuse decodes
        format: Pillow format name (``PNG``, ``JPEG``, ``WEBP``, ...)
    """
    image: "Image.Image"
    width: int
    height: int
    digest: str
    format: Optional[str] = None

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Image has no pixels ({self.width}x{self.height})")

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


# =============================================================================
# Copy
# =============================================================================


@dataclass(frozen=True, slots=True)
class Voice:
    """
    A named bundle of marketing phrases.

    Attributes:
        id: Voice identifier (``bold``, ``eco``, ...)
        adjectives: Headline adjectives for the tagline
        vibes: Tagline second sentences
        ctas: Call-to-action phrases
        keywords: Regex alternation matched case-insensitively; empty for
            the default voice
    """
    id: str
    adjectives: tuple[str, ...]
    vibes: tuple[str, ...]
    ctas: tuple[str, ...]
    keywords: str = ""
    _pattern: Optional[re.Pattern] = field(
        default=None, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if not self.adjectives or not self.vibes or not self.ctas:
            raise ValueError(f"Voice {self.id!r} needs adjectives, vibes and ctas")
        if self.keywords:
            object.__setattr__(
                self, "_pattern", re.compile(self.keywords, re.IGNORECASE)
            )

    def matches(self, text: str) -> bool:
        """True if any keyword occurs in the text (substring match)."""
        return self._pattern is not None and self._pattern.search(text) is not None


@dataclass(frozen=True, slots=True)
class AgentInsight:
    """One line of the agent's design rationale."""
    title: str
    detail: str

    def to_dict(self) -> dict:
        return {"title": self.title, "detail": self.detail}

    @classmethod
    def from_dict(cls, data: dict) -> AgentInsight:
        return cls(title=data["title"], detail=data["detail"])


# =============================================================================
# Layout input
# =============================================================================


@dataclass(frozen=True, eq=False)
class PosterSpec:
    """
    Everything the Layout Compositor needs for one render.

    Attributes:
        product_name: Headline text
        tagline: Tagline text
        cta: Call-to-action button label
        feature_highlight: Caption below the tagline
        image: Decoded product photo
        palette: Resolved five-color palette
    """
    product_name: str
    tagline: str
    cta: str
    feature_highlight: str
    image: SourceImage
    palette: Palette


# =============================================================================
# Outputs
# =============================================================================


@dataclass(frozen=True, slots=True)
class GenerationResult:
    """
    Outcome of one generation request.

    Attributes:
        product_name: Product name as submitted (trimmed)
        description: Description as submitted (trimmed)
        voice_id: Voice matched on the description
        extracted: Raw extractor output (may hold fewer than 5 colors)
        palette: Extracted colors padded with the layout fallback
        tagline: Generated tagline
        cta: Generated call to action
        feature_highlight: Caption drawn at session start or upload
        insights: Agent rationale entries
    """
    product_name: str
    description: str
    voice_id: str
    extracted: tuple[str, ...]
    palette: Palette
    tagline: str
    cta: str
    feature_highlight: str
    insights: tuple[AgentInsight, ...] = ()

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON output."""
        return {
            "product_name": self.product_name,
            "description": self.description,
            "voice": self.voice_id,
            "palette": list(self.palette.display()),
            "tagline": self.tagline,
            "cta": self.cta,
            "feature_highlight": self.feature_highlight,
            "insights": [i.to_dict() for i in self.insights],
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)


@dataclass(frozen=True, eq=False)
class RenderedPoster:
    """
    A finished poster bitmap.

    Attributes:
        image: RGBA bitmap at the configured canvas size
        passes: Names of the drawing passes that completed, in order
        filename: Suggested export file name
    """
    image: "Image.Image"
    passes: tuple[str, ...]
    filename: str

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size

    def to_png(self) -> bytes:
        """Encode as PNG bytes."""
        from adcraft.render.export import to_png_bytes
        return to_png_bytes(self.image)

    def to_data_url(self) -> str:
        """Embeddable ``data:image/png;base64,...`` preview."""
        from adcraft.render.export import to_data_url
        return to_data_url(self.image)

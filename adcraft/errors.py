# Copyright (c) 2026 AdCraft
# SPDX-License-Identifier: MIT

"""
Error taxonomy for AdCraft.

Every failure in the pipeline is one of these types. None of them is
fatal: the session catches them at the generation boundary, returns to
idle, and re-raises so callers can branch on the type.
"""

from __future__ import annotations


class AdCraftError(Exception):
    """Base class for all AdCraft errors."""

    #: User-facing status line for this failure.
    message: str = "Something went wrong while generating the poster."

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.message)
        self.detail = detail or self.message


class InvalidInputError(AdCraftError, ValueError):
    """Product name, description or image missing before generation."""

    message = "Feed the agent a product name and description before generating."


class UnsupportedMediaError(AdCraftError, ValueError):
    """Uploaded file is not an image."""

    message = "Please upload an image file (PNG, JPG, or WebP)."


class DecodeFailureError(AdCraftError):
    """Image bytes could not be decoded."""

    message = (
        "The agent hit a snag while reading that image. "
        "Try another file or smaller size."
    )
    retryable = True


class InvalidColorFormatError(AdCraftError, ValueError):
    """A color string is not a 6-digit hex value."""

    message = "Expected a 6-digit hex color."

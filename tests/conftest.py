# Copyright (c) 2026 AdCraft
# SPDX-License-Identifier: MIT

"""Shared fixtures for AdCraft tests."""

import io

import pytest
from PIL import Image

from adcraft.render import PosterConfig


@pytest.fixture
def small_config():
    """A scaled-down canvas so render tests stay fast."""
    return PosterConfig(width=216, height=270)


@pytest.fixture
def png_bytes():
    """64x48 solid PNG."""
    buffer = io.BytesIO()
    Image.new("RGB", (64, 48), (200, 60, 40)).save(buffer, format="PNG")
    return buffer.getvalue()

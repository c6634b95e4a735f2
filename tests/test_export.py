# Copyright (c) 2026 AdCraft
# SPDX-License-Identifier: MIT

"""Tests for poster export helpers."""

import pytest
from PIL import Image

from adcraft.render.export import poster_filename, save_poster


class TestPosterFilename:

    @pytest.mark.parametrize("name,expected", [
        ("Lumen Arc Smart Lamp", "lumen-arc-smart-lamp.png"),
        ("  Lumen   Arc\tLamp  ", "lumen-arc-lamp.png"),
        ("EcoBottle", "ecobottle.png"),
        ("", "adcraft-poster.png"),
        ("   ", "adcraft-poster.png"),
    ])
    def test_slug(self, name, expected):
        assert poster_filename(name) == expected

    def test_custom_default(self):
        assert poster_filename("", default="draft") == "draft.png"


class TestSavePoster:

    def test_creates_directory(self, tmp_path):
        path = save_poster(Image.new("RGBA", (4, 5)), tmp_path / "a" / "b", "x.png")
        assert path == tmp_path / "a" / "b" / "x.png"
        with Image.open(path) as img:
            assert img.format == "PNG"
            assert img.size == (4, 5)

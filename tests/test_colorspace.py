# Copyright (c) 2026 AdCraft
# SPDX-License-Identifier: MIT

"""Tests for color utilities (hex parsing, mixing, readable text)."""

import pytest

from adcraft.errors import InvalidColorFormatError
from adcraft.measure.colorspace import (
    DARK_TEXT,
    LIGHT_TEXT,
    get_readable_text_color,
    hex_to_rgb,
    hex_to_rgba,
    mix_color,
    parse_css_color,
    relative_luminance,
    to_hex,
)


SAMPLE_HEXES = ["#000000", "#FFFFFF", "#0f172a", "#FEB144", "#6366f1", "#123456", "#abcdef"]


class TestToHex:

    def test_formats_lowercase(self):
        assert to_hex(254, 177, 68) == "#feb144"

    def test_rounds_half_up(self):
        assert to_hex(127.5, 0.5, 0.49) == "#800100"

    def test_clamps_out_of_range(self):
        assert to_hex(300, -4, 255.6) == "#ff00ff"


class TestHexToRgb:

    def test_with_hash(self):
        assert hex_to_rgb("#FEB144") == (254, 177, 68)

    def test_without_hash(self):
        assert hex_to_rgb("0f172a") == (15, 23, 42)

    @pytest.mark.parametrize("bad", ["", "#", "#fff", "#12345", "#1234567", "#gg0000", "rgb(1,2,3)"])
    def test_malformed_raises(self, bad):
        with pytest.raises(InvalidColorFormatError):
            hex_to_rgb(bad)

    def test_non_string_raises(self):
        with pytest.raises(InvalidColorFormatError):
            hex_to_rgb(0xFFFFFF)

    @pytest.mark.parametrize("h", SAMPLE_HEXES)
    def test_roundtrip_case_insensitive(self, h):
        assert to_hex(*hex_to_rgb(to_hex(*hex_to_rgb(h)))) == h.lower()


class TestHexToRgba:

    def test_format(self):
        assert hex_to_rgba("#ff8000", 0.3) == "rgba(255, 128, 0, 0.3)"

    def test_integer_alpha(self):
        assert hex_to_rgba("#000000", 0) == "rgba(0, 0, 0, 0)"
        assert hex_to_rgba("#000000") == "rgba(0, 0, 0, 1)"

    def test_out_of_range_alpha_passed_through(self):
        assert hex_to_rgba("#ffffff", 1.5) == "rgba(255, 255, 255, 1.5)"
        assert hex_to_rgba("#ffffff", -2) == "rgba(255, 255, 255, -2)"


class TestMixColor:

    @pytest.mark.parametrize("h", SAMPLE_HEXES)
    def test_zero_is_identity(self, h):
        assert mix_color(h, 0) == h.lower()

    @pytest.mark.parametrize("h", SAMPLE_HEXES)
    def test_one_is_white(self, h):
        assert mix_color(h, 1) == "#ffffff"

    @pytest.mark.parametrize("h", SAMPLE_HEXES)
    def test_minus_one_is_black(self, h):
        assert mix_color(h, -1) == "#000000"

    def test_positive_moves_toward_white(self):
        assert mix_color("#000000", 0.5) == "#808080"

    def test_negative_scales_channel(self):
        # 128 * 0.8 = 102.4
        assert mix_color("#808080", -0.2) == "#666666"

    def test_beyond_one_clamps(self):
        assert mix_color("#336699", 2) == "#ffffff"


class TestReadableTextColor:

    def test_white_background_gets_dark_text(self):
        assert get_readable_text_color("#ffffff") == DARK_TEXT

    def test_black_background_gets_light_text(self):
        assert get_readable_text_color("#000000") == LIGHT_TEXT

    def test_binary_and_monotonic(self):
        for v in range(0, 256, 3):
            h = to_hex(v, v, v)
            result = get_readable_text_color(h)
            assert result in (DARK_TEXT, LIGHT_TEXT)
            expected = DARK_TEXT if relative_luminance(h) > 0.6 else LIGHT_TEXT
            assert result == expected

    def test_green_weighs_more_than_blue(self):
        # 0.587 * 255 / 255 = 0.587 → not above 0.6
        assert get_readable_text_color("#00ff00") == LIGHT_TEXT
        assert get_readable_text_color("#40ff40") == DARK_TEXT


class TestParseCssColor:

    def test_hex(self):
        assert parse_css_color("#ff8000") == (255, 128, 0, 1.0)

    def test_rgba(self):
        assert parse_css_color("rgba(1, 2, 3, 0.45)") == (1, 2, 3, 0.45)

    def test_rgb(self):
        assert parse_css_color("rgb(10,20,30)") == (10, 20, 30, 1.0)

    def test_alpha_clamped_when_painted(self):
        assert parse_css_color(hex_to_rgba("#ffffff", 1.5))[3] == 1.0
        assert parse_css_color(hex_to_rgba("#ffffff", -2))[3] == 0.0

    def test_garbage_raises(self):
        with pytest.raises(InvalidColorFormatError):
            parse_css_color("hsl(0, 0%, 0%)")

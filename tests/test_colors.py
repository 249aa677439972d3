"""
Tests for the color model: transforms, trail gradient and themes.
"""

import pytest

from digital_rain.colors import (
    BLACK,
    COLOR_THEMES,
    Color,
    brighten,
    dim,
    gradient_index,
    resolve_color,
    trail_gradient,
)
from digital_rain.errors import ConfigError


# ===========================================================================
# Color Tests
# ===========================================================================

class TestColor:
    def test_channels(self):
        c = Color(1, 2, 3)
        assert (c.r, c.g, c.b) == (1, 2, 3)
        assert c.brightness == 6

    def test_channel_out_of_range(self):
        with pytest.raises(ValueError):
            Color(256, 0, 0)
        with pytest.raises(ValueError):
            Color(0, -1, 0)

    def test_immutable(self):
        c = Color(1, 2, 3)
        with pytest.raises(Exception):
            c.r = 10

    def test_hex_round_trip(self):
        assert Color.from_hex("#ff8800") == Color(255, 136, 0)
        assert Color.from_hex("00ff00") == Color(0, 255, 0)
        assert Color(255, 136, 0).to_hex() == "#ff8800"

    def test_bad_hex(self):
        with pytest.raises(ValueError):
            Color.from_hex("#fff")


# ===========================================================================
# Transform Tests
# ===========================================================================

class TestTransforms:
    def test_brighten_clamps(self):
        assert brighten(Color(0, 255, 100), 1.2) == Color(0, 255, 120)

    def test_brighten_truncates(self):
        assert brighten(Color(10, 10, 10), 1.25) == Color(12, 12, 12)

    def test_dim_truncates(self):
        assert dim(Color(255, 255, 255), 0.5) == Color(127, 127, 127)

    def test_dim_to_black(self):
        assert dim(Color(200, 100, 50), 0.0) == BLACK


# ===========================================================================
# Gradient Tests
# ===========================================================================

class TestTrailGradient:
    def test_green_gradient_values(self):
        gradient = trail_gradient(Color(0, 255, 0))
        assert [c.g for c in gradient] == [255, 219, 183, 147, 112, 76]
        assert all(c.r == 0 and c.b == 0 for c in gradient)

    def test_head_is_brightened(self):
        base = Color(100, 100, 100)
        assert trail_gradient(base)[0] == Color(120, 120, 120)

    @pytest.mark.parametrize("name", sorted(COLOR_THEMES))
    def test_brightness_non_increasing(self, name):
        gradient = trail_gradient(COLOR_THEMES[name])
        levels = [c.brightness for c in gradient]
        assert levels == sorted(levels, reverse=True)

    def test_custom_steps_and_decay(self):
        gradient = trail_gradient(Color(0, 200, 0), steps=3, head_boost=1.0, decay=0.5)
        assert [c.g for c in gradient] == [200, 150, 100]

    def test_too_few_steps(self):
        with pytest.raises(ValueError):
            trail_gradient(Color(0, 255, 0), steps=1)


class TestGradientIndex:
    def test_head(self):
        assert gradient_index(0, 10, 6) == 0

    def test_scales_with_distance(self):
        assert gradient_index(5, 10, 6) == 3

    def test_clamped_at_tail(self):
        # The row at distance == length would index past the end
        assert gradient_index(10, 10, 6) == 5
        assert gradient_index(50, 10, 6) == 5


# ===========================================================================
# Theme Lookup Tests
# ===========================================================================

class TestResolveColor:
    def test_named(self):
        assert resolve_color("amber") == Color(255, 191, 0)

    def test_case_insensitive(self):
        assert resolve_color("GREEN") == Color(0, 255, 0)

    def test_hex(self):
        assert resolve_color("#123456") == Color(0x12, 0x34, 0x56)

    def test_unknown(self):
        with pytest.raises(ConfigError) as exc_info:
            resolve_color("chartreuse")
        assert exc_info.value.error_code.code == "R002"

    def test_bad_hex(self):
        with pytest.raises(ConfigError):
            resolve_color("#12")

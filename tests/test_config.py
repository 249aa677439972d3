"""
Tests for configuration validation, character sets and error codes.
"""

import logging

import pytest

from digital_rain.charsets import CHARACTER_SETS, resolve_charset
from digital_rain.colors import Color
from digital_rain.config import (
    RainConfig,
    default_pause_chance,
    default_reactivation_chance,
)
from digital_rain.errors import (
    ConfigError,
    ErrorCategory,
    INTERNAL_ERROR,
    TerminalSizeError,
    handle_error,
    lookup,
)


# ===========================================================================
# RainConfig Validation Tests
# ===========================================================================

class TestRainConfig:
    def test_defaults_are_valid(self):
        config = RainConfig()
        assert config.fps == 10
        assert config.density == 0.7
        assert config.base_color == Color(0, 255, 0)
        assert config.charset == tuple(CHARACTER_SETS["matrix"])
        assert (config.min_length, config.max_length) == (8, 19)

    def test_charset_string_becomes_tuple(self):
        assert RainConfig(charset="abc").charset == ("a", "b", "c")

    def test_empty_charset_rejected(self):
        with pytest.raises(ConfigError) as exc_info:
            RainConfig(charset=())
        assert exc_info.value.error_code.code == "R001"

    @pytest.mark.parametrize("fps", [0, 61, -5])
    def test_fps_out_of_range(self, fps):
        with pytest.raises(ConfigError) as exc_info:
            RainConfig(fps=fps)
        assert exc_info.value.error_code.code == "R003"

    @pytest.mark.parametrize("density", [0.05, 3.5])
    def test_density_out_of_range(self, density):
        with pytest.raises(ConfigError) as exc_info:
            RainConfig(density=density)
        assert exc_info.value.error_code.code == "R004"

    @pytest.mark.parametrize("lengths", [(0, 5), (6, 5)])
    def test_invalid_length_bounds(self, lengths):
        with pytest.raises(ConfigError) as exc_info:
            RainConfig(min_length=lengths[0], max_length=lengths[1])
        assert exc_info.value.error_code.code == "R005"

    @pytest.mark.parametrize("field_name", ["reactivation_chance", "pause_chance", "min_pause_chance"])
    def test_invalid_probability(self, field_name):
        with pytest.raises(ConfigError) as exc_info:
            RainConfig(**{field_name: 1.5})
        assert exc_info.value.error_code.code == "R006"

    def test_frame_interval(self):
        assert RainConfig(fps=20).frame_interval == pytest.approx(0.05)

    def test_explicit_probabilities_win(self):
        config = RainConfig(reactivation_chance=0.5, pause_chance=0.25)
        assert config.effective_reactivation_chance == 0.5
        assert config.effective_pause_chance == 0.25

    def test_seeded_rng_is_reproducible(self):
        a = RainConfig(seed=7).make_rng()
        b = RainConfig(seed=7).make_rng()
        assert [a.random() for _ in range(5)] == [b.random() for _ in range(5)]

    def test_from_options(self):
        config = RainConfig.from_options(color="red", chars="binary", fps=30)
        assert config.base_color == Color(255, 0, 0)
        assert config.charset == ("0", "1")
        assert config.fps == 30

    def test_from_options_unknown_color(self):
        with pytest.raises(ConfigError):
            RainConfig.from_options(color="mauve")


# ===========================================================================
# Density-Derived Probability Tests
# ===========================================================================

class TestDerivedProbabilities:
    DENSITIES = [0.1, 0.5, 0.7, 1.0, 1.5, 2.0, 3.0]

    def test_reactivation_grows_with_density(self):
        chances = [default_reactivation_chance(d) for d in self.DENSITIES]
        assert chances == sorted(chances)
        assert default_reactivation_chance(0.7) == pytest.approx(0.0035)
        assert default_reactivation_chance(2.0) == pytest.approx(0.025)

    def test_pause_shrinks_with_density(self):
        chances = [default_pause_chance(d) for d in self.DENSITIES]
        assert chances == sorted(chances, reverse=True)
        assert default_pause_chance(0.7) == pytest.approx(0.115)

    def test_pause_has_floor(self):
        assert default_pause_chance(3.0) == pytest.approx(0.01)
        assert default_pause_chance(3.0, minimum=0.02) == pytest.approx(0.02)


# ===========================================================================
# Character Set Tests
# ===========================================================================

class TestCharsets:
    def test_named_set(self):
        assert resolve_charset("greek")[0] == "α"

    def test_named_set_case_insensitive(self):
        assert resolve_charset("BINARY") == ("0", "1")

    def test_custom_string(self):
        assert resolve_charset("*+.") == ("*", "+", ".")

    def test_emoji_glyphs_are_single_code_points(self):
        assert len(resolve_charset("emojis")) == 10

    def test_empty_rejected(self):
        with pytest.raises(ConfigError) as exc_info:
            resolve_charset("")
        assert exc_info.value.error_code.code == "R001"

    def test_all_named_sets_non_empty(self):
        for name in CHARACTER_SETS:
            assert resolve_charset(name)


# ===========================================================================
# Error Code Tests
# ===========================================================================

class TestErrors:
    def test_lookup(self):
        assert lookup("R001").message == "Empty character set"

    def test_lookup_unknown_falls_back(self):
        assert lookup("Z999") is INTERNAL_ERROR

    def test_config_error_message_and_hint(self):
        err = ConfigError(lookup("R003"), "fps out of range 1-60 (got 0)")
        assert str(err) == "fps out of range 1-60 (got 0)"
        assert err.hint == "Use a value between 1 and 60."

    def test_terminal_size_error_code(self):
        assert TerminalSizeError("no tty").error_code.code == "R007"

    def test_handle_error_logs(self, caplog):
        with caplog.at_level(logging.WARNING, logger="digital_rain.errors"):
            context = handle_error(OSError("boom"), "terminal_size", ErrorCategory.TERMINAL,
                                   additional_context={'last_size': '24x80'},
                                   log_level=logging.WARNING)
        assert context.to_dict()['error_message'] == "boom"
        assert "terminal_size" in caplog.text
        assert "last_size: 24x80" in caplog.text

    def test_handle_error_reraise(self):
        with pytest.raises(ValueError):
            handle_error(ValueError("bad"), "op", reraise=True)

    def test_error_timestamp_is_utc(self):
        context = handle_error(ValueError("bad"), "op", log_level=logging.DEBUG)
        assert context.timestamp.endswith("+00:00")

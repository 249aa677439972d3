"""
Rain Configuration - Immutable settings consumed by the engine.

All validation happens here so that a bad value is reported before any
Engine or DropGrid exists.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .charsets import CHARACTER_SETS, DEFAULT_CHARSET, resolve_charset
from .colors import COLOR_THEMES, Color, resolve_color
from .errors import (
    ConfigError,
    DENSITY_OUT_OF_RANGE,
    EMPTY_CHARSET,
    FPS_OUT_OF_RANGE,
    INVALID_DROP_LENGTH,
    INVALID_PROBABILITY,
)

logger = logging.getLogger(__name__)

MIN_FPS = 1
MAX_FPS = 60
DEFAULT_FPS = 10

MIN_DENSITY = 0.1
MAX_DENSITY = 3.0
DEFAULT_DENSITY = 0.7

DEFAULT_COLOR = "green"
DEFAULT_MIN_LENGTH = 8
DEFAULT_MAX_LENGTH = 19
DEFAULT_MIN_PAUSE_CHANCE = 0.01


def default_reactivation_chance(density: float) -> float:
    """Per-tick chance that an inactive drop starts falling again."""
    if density > 1.0:
        return 0.005 + (density - 1.0) * 0.02
    return 0.005 * density


def default_pause_chance(density: float, minimum: float = DEFAULT_MIN_PAUSE_CHANCE) -> float:
    """Chance that a drop goes inactive after scrolling off the bottom."""
    if density > 1.0:
        pause = 0.05 - (density - 1.0) * 0.02
    else:
        pause = 0.15 - density * 0.05
    return max(minimum, pause)


def _check_probability(name: str, value: Optional[float]):
    if value is not None and not 0.0 <= value <= 1.0:
        raise ConfigError(INVALID_PROBABILITY, f"{name} must be between 0.0 and 1.0 (got {value})")


@dataclass(frozen=True)
class RainConfig:
    """Settings for one rain animation."""
    base_color: Color = COLOR_THEMES[DEFAULT_COLOR]
    fps: int = DEFAULT_FPS
    density: float = DEFAULT_DENSITY
    charset: Tuple[str, ...] = field(default_factory=lambda: tuple(CHARACTER_SETS[DEFAULT_CHARSET]))
    min_length: int = DEFAULT_MIN_LENGTH
    max_length: int = DEFAULT_MAX_LENGTH
    reactivation_chance: Optional[float] = None  # None = derived from density
    pause_chance: Optional[float] = None         # None = derived from density
    min_pause_chance: float = DEFAULT_MIN_PAUSE_CHANCE
    seed: Optional[int] = None

    def __post_init__(self):
        # Accept any iterable of glyphs, store a tuple
        object.__setattr__(self, 'charset', tuple(self.charset))
        if not self.charset:
            raise ConfigError(EMPTY_CHARSET, "character set cannot be empty")
        if not MIN_FPS <= self.fps <= MAX_FPS:
            raise ConfigError(FPS_OUT_OF_RANGE, f"fps out of range {MIN_FPS}-{MAX_FPS} (got {self.fps})")
        if not MIN_DENSITY <= self.density <= MAX_DENSITY:
            raise ConfigError(
                DENSITY_OUT_OF_RANGE,
                f"density out of range {MIN_DENSITY}-{MAX_DENSITY} (got {self.density:.1f})",
            )
        if self.min_length < 1 or self.max_length < self.min_length:
            raise ConfigError(
                INVALID_DROP_LENGTH,
                f"invalid drop length bounds {self.min_length}-{self.max_length}",
            )
        _check_probability("reactivation chance", self.reactivation_chance)
        _check_probability("pause chance", self.pause_chance)
        _check_probability("minimum pause chance", self.min_pause_chance)

    @property
    def frame_interval(self) -> float:
        """Seconds between ticks."""
        return 1.0 / self.fps

    @property
    def effective_reactivation_chance(self) -> float:
        if self.reactivation_chance is not None:
            return self.reactivation_chance
        return default_reactivation_chance(self.density)

    @property
    def effective_pause_chance(self) -> float:
        if self.pause_chance is not None:
            return self.pause_chance
        return default_pause_chance(self.density, self.min_pause_chance)

    def make_rng(self) -> random.Random:
        """Random generator for this run, seeded when a seed is set."""
        return random.Random(self.seed)

    @classmethod
    def from_options(cls, color: str = DEFAULT_COLOR, chars: str = DEFAULT_CHARSET,
                     **kwargs) -> 'RainConfig':
        """Build a config from CLI-style names (theme name, charset name or string)."""
        config = cls(base_color=resolve_color(color), charset=resolve_charset(chars), **kwargs)
        logger.debug(
            f"Config: color={config.base_color.to_hex()} fps={config.fps} "
            f"density={config.density} glyphs={len(config.charset)} "
            f"length={config.min_length}-{config.max_length}"
        )
        return config

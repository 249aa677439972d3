"""
Rain Color Model - RGB colors, brightness transforms and trail gradients.

Colors are immutable RGB triples. A drop's trail is painted from a
precomputed gradient: a brightened head followed by progressively dimmer
steps of the base color.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from .errors import ConfigError, UNKNOWN_COLOR


# Number of gradient steps from head to tail
TRAIL_STEPS = 6
# Head glyph is drawn brighter than the base color
HEAD_BOOST = 1.2
# Fraction of the base brightness lost by the last tail step
TRAIL_DECAY = 0.7


@dataclass(frozen=True)
class Color:
    """24-bit RGB color."""
    r: int
    g: int
    b: int

    def __post_init__(self):
        for channel in (self.r, self.g, self.b):
            if not 0 <= channel <= 255:
                raise ValueError(f"color channel out of range 0-255: {channel}")

    @property
    def brightness(self) -> int:
        """Sum of the three channels."""
        return self.r + self.g + self.b

    @classmethod
    def from_hex(cls, value: str) -> 'Color':
        """Parse '#rrggbb' (leading '#' optional)."""
        text = value.lstrip('#')
        if len(text) != 6:
            raise ValueError(f"expected 6 hex digits, got '{value}'")
        return cls(int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16))

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


BLACK = Color(0, 0, 0)

# Named color themes
COLOR_THEMES: Dict[str, Color] = {
    "green": Color(0, 255, 0),
    "amber": Color(255, 191, 0),
    "red": Color(255, 0, 0),
    "orange": Color(255, 165, 0),
    "blue": Color(0, 150, 255),
    "purple": Color(128, 0, 255),
    "cyan": Color(0, 255, 255),
    "pink": Color(255, 20, 147),
    "white": Color(255, 255, 255),
}


def brighten(color: Color, factor: float) -> Color:
    """Scale every channel by factor, clamped to 255."""
    return Color(
        int(min(255, color.r * factor)),
        int(min(255, color.g * factor)),
        int(min(255, color.b * factor)),
    )


def dim(color: Color, factor: float) -> Color:
    """Scale every channel down by factor (expected <= 1)."""
    return Color(int(color.r * factor), int(color.g * factor), int(color.b * factor))


def trail_gradient(base: Color, steps: int = TRAIL_STEPS,
                   head_boost: float = HEAD_BOOST,
                   decay: float = TRAIL_DECAY) -> Tuple[Color, ...]:
    """
    Build the head-to-tail color sequence for a drop trail.

    Args:
        base: Theme color
        steps: Number of gradient entries (>= 2)
        head_boost: Brighten factor for the head entry
        decay: Fraction of brightness lost at the last entry (0-1)

    Returns:
        Tuple of colors, index 0 is the head
    """
    if steps < 2:
        raise ValueError(f"gradient needs at least 2 steps, got {steps}")
    colors = [brighten(base, head_boost)]
    for i in range(1, steps):
        fade = 1.0 - (i / (steps - 1)) * decay
        colors.append(dim(base, fade))
    return tuple(colors)


def gradient_index(distance: int, length: int, steps: int) -> int:
    """Map a row's distance from the drop head to a gradient index."""
    idx = int(distance / length * steps)
    return max(0, min(steps - 1, idx))


def resolve_color(name: str) -> Color:
    """Look up a theme by name, or parse a '#rrggbb' custom color."""
    if name.startswith('#'):
        try:
            return Color.from_hex(name)
        except ValueError as e:
            raise ConfigError(UNKNOWN_COLOR, str(e)) from e
    color = COLOR_THEMES.get(name.lower())
    if color is None:
        raise ConfigError(UNKNOWN_COLOR, f"unknown color '{name}'")
    return color

"""
Rain Drops - Falling character streams and the per-column drop grid.

Each terminal column holds one or more drops. A drop is either active
(falling one row per tick) or inactive (waiting to restart). Drops are
never destroyed, they are recycled in place when they fall off the bottom.
"""

import logging
import random
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from .colors import Color, gradient_index
from .config import RainConfig
from .frame import Frame

logger = logging.getLogger(__name__)


@dataclass
class Drop:
    """One falling stream in one column."""
    position: int    # Row of the head, may be off screen
    length: int      # Rows of trail behind the head
    character: str
    active: bool = True

    @property
    def tail(self) -> int:
        return self.position - self.length

    def visible_rows(self, height: int) -> range:
        """Rows of the trail that fall inside [0, height)."""
        return range(max(0, self.tail), min(height, self.position + 1))


def create_drop(height: int, min_length: int, max_length: int,
                charset: Sequence[str], rng: random.Random) -> Drop:
    """
    Create a new active drop with a random start row, length and glyph.

    The start row may lie above the screen or part way down it so that
    columns do not fall in lockstep.
    """
    half = height // 2
    position = rng.randrange(height) - (rng.randrange(half) if half > 0 else 0)
    return Drop(
        position=position,
        length=rng.randint(min_length, max_length),
        character=rng.choice(charset),
        active=True,
    )


def draw_drop(drop: Drop, frame: Frame, column: int, gradient: Sequence[Color]):
    """Paint an active drop's visible trail into one frame column."""
    if not drop.active:
        return
    steps = len(gradient)
    for row in drop.visible_rows(frame.height):
        color = gradient[gradient_index(drop.position - row, drop.length, steps)]
        frame.set_cell(row, column, drop.character, color)


class DropGrid:
    """Drops grouped by terminal column."""

    def __init__(self, config: RainConfig, rng: Optional[random.Random] = None):
        self.config = config
        self.rng = rng or config.make_rng()
        self.height = 0
        self.width = 0
        self.columns: List[List[Drop]] = []
        self._reactivation_chance = config.effective_reactivation_chance
        self._pause_chance = config.effective_pause_chance

    def _new_drop(self) -> Drop:
        return create_drop(self.height, self.config.min_length, self.config.max_length,
                           self.config.charset, self.rng)

    def _target_count(self) -> int:
        """Drops for one column; the fractional density part is a weighted roll."""
        density = self.config.density
        count = int(density)
        if self.rng.random() < density - count:
            count += 1
        return max(1, count)

    def resize(self, height: int, width: int):
        """Adapt to new terminal dimensions, keeping drops in surviving columns."""
        if height == self.height and width == self.width:
            return
        if height < 1 or width < 1:
            raise ValueError(f"grid dimensions must be positive (got {height}x{width})")
        logger.debug(f"Drop grid resize {self.height}x{self.width} -> {height}x{width}")
        self.height, self.width = height, width

        columns: List[List[Drop]] = []
        for col in range(width):
            target = self._target_count()
            if col < len(self.columns):
                drops = self.columns[col][:target]
            else:
                drops = []
            while len(drops) < target:
                drops.append(self._new_drop())
            columns.append(drops)
        self.columns = columns

    def _restart(self, drop: Drop):
        drop.length = self.rng.randint(self.config.min_length, self.config.max_length)
        drop.character = self.rng.choice(self.config.charset)

    def update(self, drop: Drop):
        """Advance one drop by one tick."""
        if not drop.active:
            if self.rng.random() < self._reactivation_chance:
                drop.active = True
                drop.position = 0
                self._restart(drop)
            return

        drop.position += 1
        if drop.tail > self.height:
            drop.position = -drop.length
            self._restart(drop)
            if self.rng.random() < self._pause_chance:
                drop.active = False

    def __iter__(self) -> Iterator[Tuple[int, List[Drop]]]:
        return iter(enumerate(self.columns))

    def drop_count(self) -> int:
        return sum(len(drops) for drops in self.columns)

    def active_count(self) -> int:
        return sum(1 for drops in self.columns for d in drops if d.active)

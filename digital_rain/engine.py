"""
Rain Engine - Drives the drop simulation and fills the frame buffer.

The engine owns one Frame and reuses it every tick. Consumers that need
to keep a frame across ticks must copy it (the Renderer does).
"""

import logging
import random
from typing import Callable, Optional, Tuple

from .colors import trail_gradient
from .config import RainConfig
from .drops import DropGrid, draw_drop
from .errors import ErrorCategory, TerminalSizeError, handle_error
from .frame import Frame

logger = logging.getLogger(__name__)

# Returns (height, width); raises TerminalSizeError or OSError on failure
SizeProvider = Callable[[], Tuple[int, int]]


class Engine:
    """Produces one Frame per tick from the drop grid."""

    def __init__(self, config: RainConfig, size_provider: SizeProvider,
                 rng: Optional[random.Random] = None):
        self.config = config
        self.size_provider = size_provider
        self.grid = DropGrid(config, rng)
        self.trail_colors = trail_gradient(config.base_color)
        self.height = 0
        self.width = 0
        self._frame: Optional[Frame] = None

    @property
    def frame(self) -> Optional[Frame]:
        return self._frame

    def resize(self, height: int, width: int):
        """Resize the grid and allocate a fresh frame buffer."""
        if height == self.height and width == self.width:
            return
        # Grid validates first; a rejected size leaves the engine untouched
        self.grid.resize(height, width)
        logger.info(f"Resize {self.height}x{self.width} -> {height}x{width}")
        self.height, self.width = height, width
        self._frame = Frame(height, width)

    def _poll_size(self):
        try:
            height, width = self.size_provider()
        except (TerminalSizeError, OSError) as e:
            # Keep the last known dimensions
            handle_error(e, "terminal_size", ErrorCategory.TERMINAL,
                         additional_context={'last_size': f"{self.height}x{self.width}"},
                         log_level=logging.DEBUG)
            return
        if height <= 0 or width <= 0:
            logger.debug(f"Ignoring invalid terminal size {height}x{width}")
            return
        if height != self.height or width != self.width:
            self.resize(height, width)

    def next_frame(self) -> Frame:
        """Advance every drop one tick and return the shared frame buffer."""
        self._poll_size()
        frame = self._frame
        if frame is None:
            raise TerminalSizeError("terminal size has never been determined")

        frame.clear()
        update = self.grid.update
        gradient = self.trail_colors
        for col, drops in self.grid:
            for drop in drops:
                update(drop)
                draw_drop(drop, frame, col, gradient)
        return frame

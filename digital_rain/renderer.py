"""
Rain Renderer - Converts frames into ANSI output.

The first frame (or any frame with new dimensions) is painted in full.
Every later frame only emits the cells that differ from the last one
drawn, each prefixed with a cursor move.

The renderer keeps its own deep copy of the last frame. The engine reuses
its frame buffer between ticks, so holding a reference to it instead would
make every later comparison see identical frames and freeze the output.
"""

import logging
import threading
from enum import Enum
from typing import List, Optional, TextIO

from .colors import Color
from .frame import Frame

logger = logging.getLogger(__name__)

CSI = "\x1b["
CURSOR_HOME = CSI + "H"
RESET = CSI + "0m"
ROW_BREAK = "\r\n"


def cursor_position(row: int, col: int) -> str:
    """Move to a 0-based cell (terminal addressing is 1-based)."""
    return f"{CSI}{row + 1};{col + 1}H"


def set_foreground(color: Color) -> str:
    return f"{CSI}38;2;{color.r};{color.g};{color.b}m"


class RenderMode(Enum):
    """What the last draw() call emitted."""
    FULL = "full"
    DELTA = "delta"
    IDLE = "idle"  # Delta pass with no changed cells


class _ColorState:
    """Tracks the foreground color currently set on the terminal."""

    def __init__(self):
        self.current: Optional[Color] = None

    def emit(self, out: List[str], color: Color, is_background: bool):
        if is_background:
            if self.current is not None:
                out.append(RESET)
                self.current = None
        elif color != self.current:
            out.append(set_foreground(color))
            self.current = color


class Renderer:
    """Writes frames to a text stream with minimal updates."""

    def __init__(self, out: TextIO):
        self.out = out
        self._lock = threading.Lock()
        self._previous: Optional[Frame] = None
        self.last_mode: Optional[RenderMode] = None

    @property
    def previous_frame(self) -> Optional[Frame]:
        """The renderer's private copy of the last frame drawn."""
        return self._previous

    def reset(self):
        """Forget the last frame so the next draw repaints everything."""
        with self._lock:
            self._previous = None

    def draw(self, frame: Frame) -> str:
        """
        Render a frame and remember it.

        Args:
            frame: Frame to show; only borrowed for the duration of the call

        Returns:
            The text written to the output stream ("" when nothing changed)
        """
        with self._lock:
            previous = self._previous
            if previous is None or previous.shape != frame.shape:
                if previous is not None:
                    logger.debug(f"Full repaint, frame shape {previous.shape} -> {frame.shape}")
                text = self._full_render(frame)
                self.last_mode = RenderMode.FULL
                self._previous = frame.copy()
            else:
                text = self._delta_render(frame, previous)
                self.last_mode = RenderMode.DELTA if text else RenderMode.IDLE
                frame.copy_into(previous)

            if text:
                self.out.write(text)
            return text

    def _full_render(self, frame: Frame) -> str:
        out = [CURSOR_HOME]
        state = _ColorState()
        for row in range(frame.height):
            chars = frame.chars[row]
            colors = frame.colors[row]
            bg = frame.is_background[row]
            for col in range(frame.width):
                state.emit(out, colors[col], bg[col])
                out.append(chars[col])
            if row < frame.height - 1:
                out.append(ROW_BREAK)
        out.append(RESET)
        return ''.join(out)

    def _delta_render(self, frame: Frame, previous: Frame) -> str:
        out: List[str] = []
        state = _ColorState()
        for row in range(frame.height):
            chars, prev_chars = frame.chars[row], previous.chars[row]
            colors, prev_colors = frame.colors[row], previous.colors[row]
            bg, prev_bg = frame.is_background[row], previous.is_background[row]
            if chars == prev_chars and colors == prev_colors and bg == prev_bg:
                continue
            for col in range(frame.width):
                if (chars[col] == prev_chars[col] and colors[col] == prev_colors[col]
                        and bg[col] == prev_bg[col]):
                    continue
                out.append(cursor_position(row, col))
                state.emit(out, colors[col], bg[col])
                out.append(chars[col])
        if not out:
            return ""
        out.append(RESET)
        return ''.join(out)

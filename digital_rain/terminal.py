"""
Terminal helpers - size queries and alternate screen session.
"""

import logging
import os
import sys
from typing import Optional, TextIO, Tuple

from .errors import TerminalSizeError

logger = logging.getLogger(__name__)

ENTER_ALT_SCREEN = "\x1b[?1049h"
EXIT_ALT_SCREEN = "\x1b[?1049l"
HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"


def get_terminal_size(fd: Optional[int] = None) -> Tuple[int, int]:
    """
    Query the terminal size.

    Returns:
        (height, width) in cells

    Raises:
        TerminalSizeError: stdout is not a terminal or reports no size
    """
    if fd is None:
        fd = sys.__stdout__.fileno()
    try:
        size = os.get_terminal_size(fd)
    except (OSError, ValueError) as e:
        raise TerminalSizeError(str(e)) from e
    if size.lines <= 0 or size.columns <= 0:
        raise TerminalSizeError(f"terminal reported {size.lines}x{size.columns}")
    return size.lines, size.columns


class TerminalSession:
    """Context manager: alternate screen with hidden cursor, restored on exit."""

    def __init__(self, out: TextIO):
        self.out = out
        self.active = False

    def __enter__(self) -> 'TerminalSession':
        logger.debug("Entering alternate screen")
        self.out.write(ENTER_ALT_SCREEN + HIDE_CURSOR)
        self.out.flush()
        self.active = True
        return self

    def __exit__(self, exc_type, exc, tb):
        logger.debug("Restoring terminal")
        self.out.write(SHOW_CURSOR + EXIT_ALT_SCREEN)
        self.out.flush()
        self.active = False
        return False

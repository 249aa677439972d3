"""
Digital Rain - Falling character animation for the terminal.

Runs the rain engine at a fixed frame rate inside the terminal's alternate
screen, repainting only the cells that change between frames.

Usage:
    digital-rain
    digital-rain --color amber --fps 30
    digital-rain --chars binary --density 2.0
    digital-rain --list

Press Ctrl+C to quit.
"""

import argparse
import contextlib
import logging
import os
import signal
import sys
import threading
import time
from typing import Callable, Optional, TextIO, Tuple

from .charsets import CHARACTER_SETS, DEFAULT_CHARSET
from .colors import COLOR_THEMES
from .config import (
    DEFAULT_COLOR,
    DEFAULT_DENSITY,
    DEFAULT_FPS,
    DEFAULT_MAX_LENGTH,
    DEFAULT_MIN_LENGTH,
    MAX_DENSITY,
    MAX_FPS,
    MIN_DENSITY,
    MIN_FPS,
    RainConfig,
)
from .engine import Engine
from .errors import ConfigError, ErrorCategory, TerminalSizeError, handle_error
from .renderer import Renderer
from .stats import RenderStats
from .terminal import TerminalSession, get_terminal_size

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class RainApp:
    """
    Fixed-rate driver for the rain animation.

    Each tick produces one frame and renders it; ticks never overlap. A
    tick that overruns the interval delays the next one instead of
    queueing a burst. stop() (or SIGINT/SIGTERM while run() is active)
    ends the loop between ticks.
    """

    def __init__(self, config: RainConfig, out: Optional[TextIO] = None,
                 size_provider: Optional[Callable[[], Tuple[int, int]]] = None,
                 stats: Optional[RenderStats] = None):
        self.config = config
        self.out = out or sys.stdout
        self.size_provider = size_provider or get_terminal_size
        self.engine = Engine(config, self.size_provider, config.make_rng())
        self.renderer = Renderer(self.out)
        self.stats = stats
        self.frames = 0
        self._stop_event = threading.Event()

    @property
    def running(self) -> bool:
        return not self._stop_event.is_set()

    def stop(self):
        """Request the loop to end after the current tick."""
        self._stop_event.set()

    def tick(self):
        """Produce and render one frame."""
        start = time.perf_counter()
        frame = self.engine.next_frame()
        text = self.renderer.draw(frame)
        if text:
            self.out.flush()
        self.frames += 1
        if self.stats is not None:
            self.stats.record(self.renderer.last_mode, len(text), time.perf_counter() - start)

    def _handle_signal(self, signum, _frame):
        logger.info(f"Received signal {signum}, shutting down")
        self.stop()

    def _install_signal_handlers(self) -> dict:
        """Route SIGINT/SIGTERM to stop(); returns the previous handlers."""
        previous = {}
        if threading.current_thread() is not threading.main_thread():
            return previous
        for name in ('SIGINT', 'SIGTERM'):
            signum = getattr(signal, name, None)
            if signum is not None:
                previous[signum] = signal.signal(signum, self._handle_signal)
        return previous

    def run(self, max_frames: Optional[int] = None, use_terminal: bool = True):
        """
        Run until stopped.

        Args:
            max_frames: Stop after this many frames (None = until stopped)
            use_terminal: Enter the alternate screen and hide the cursor

        Raises:
            TerminalSizeError: The initial terminal size is unavailable
        """
        height, width = self.size_provider()
        self.engine.resize(height, width)
        self._stop_event.clear()

        previous = self._install_signal_handlers()
        session = TerminalSession(self.out) if use_terminal else contextlib.nullcontext()
        try:
            with session:
                self._loop(max_frames)
        finally:
            for signum, handler in previous.items():
                signal.signal(signum, handler)
        logger.info(f"Stopped after {self.frames} frames")

    def _loop(self, max_frames: Optional[int]):
        interval = self.config.frame_interval
        next_tick = time.monotonic()
        while not self._stop_event.is_set():
            self.tick()
            if max_frames is not None and self.frames >= max_frames:
                break
            next_tick += interval
            delay = next_tick - time.monotonic()
            if delay < 0:
                # Overran the interval: start the next tick now
                next_tick = time.monotonic()
                delay = 0
            if self._stop_event.wait(delay):
                break


def list_options() -> str:
    """Text listing the available colors, character sets and ranges."""
    lines = ["Available options:", "Colors:"]
    lines.extend(f"  {name}" for name in COLOR_THEMES)
    lines.append("")
    lines.append("Character Sets:")
    lines.extend(f"  {name}" for name in CHARACTER_SETS)
    lines.append("")
    lines.append(f"FPS: {MIN_FPS}-{MAX_FPS}")
    lines.append(f"Density: {MIN_DENSITY}-{MAX_DENSITY}")
    return '\n'.join(lines)


def configure_logging(log_file: Optional[str], debug: bool = False):
    """Send logs to a file; the terminal itself is the display."""
    if not log_file:
        return
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
    )


def run_rain(config: RainConfig, show_stats: bool = False) -> int:
    """
    Run the animation on stdout.

    Returns:
        Process exit code
    """
    stats = RenderStats() if show_stats else None
    app = RainApp(config, stats=stats)
    try:
        app.run()
    except TerminalSizeError as e:
        print(f"Cannot get terminal size: {e}", file=sys.stderr)
        return 1
    if stats is not None:
        print(stats.format_summary(), file=sys.stderr)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="digital-rain",
        description="Digital Rain - Falling character animation for the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    digital-rain                        # Green katakana rain
    digital-rain --color amber --fps 30 # Faster amber rain
    digital-rain --chars binary         # Named character set
    digital-rain --chars "*+."          # Custom characters
    digital-rain --color "#ff8800"      # Custom RGB color
    digital-rain --list                 # Show colors and character sets
        """
    )
    parser.add_argument("--color", "-c", default=DEFAULT_COLOR,
                        help=f"Theme name or #RRGGBB (default: {DEFAULT_COLOR})")
    parser.add_argument("--fps", "-f", type=int, default=DEFAULT_FPS,
                        help=f"Frames per second {MIN_FPS}-{MAX_FPS} (default: {DEFAULT_FPS})")
    parser.add_argument("--density", "-d", type=float, default=DEFAULT_DENSITY,
                        help=f"Drops per column {MIN_DENSITY}-{MAX_DENSITY} (default: {DEFAULT_DENSITY})")
    parser.add_argument("--chars", default=DEFAULT_CHARSET,
                        help=f"Named character set or custom string (default: {DEFAULT_CHARSET})")
    parser.add_argument("--min-length", type=int, default=DEFAULT_MIN_LENGTH,
                        help=f"Shortest drop trail (default: {DEFAULT_MIN_LENGTH})")
    parser.add_argument("--max-length", type=int, default=DEFAULT_MAX_LENGTH,
                        help=f"Longest drop trail (default: {DEFAULT_MAX_LENGTH})")
    parser.add_argument("--reactivation", type=float, default=None, metavar="P",
                        help="Per-tick chance a paused drop restarts (default: from density)")
    parser.add_argument("--pause", type=float, default=None, metavar="P",
                        help="Chance a finished drop pauses (default: from density)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for a reproducible animation")
    parser.add_argument("--list", action="store_true",
                        help="List available colors and character sets")
    parser.add_argument("--stats", action="store_true",
                        help="Print render statistics on exit")
    parser.add_argument("--log-file", default=os.environ.get("DIGITAL_RAIN_LOG"),
                        help="Write logs to this file (default: $DIGITAL_RAIN_LOG)")
    parser.add_argument("--debug", action="store_true",
                        default=os.environ.get("DIGITAL_RAIN_DEBUG", "0") in ("1", "true", "True"),
                        help="Debug-level logging")
    return parser


def main(argv=None) -> int:
    """CLI entry point for the digital-rain command."""
    args = build_parser().parse_args(argv)

    if args.list:
        print(list_options())
        return 0

    configure_logging(args.log_file, args.debug)

    try:
        config = RainConfig.from_options(
            color=args.color,
            chars=args.chars,
            fps=args.fps,
            density=args.density,
            min_length=args.min_length,
            max_length=args.max_length,
            reactivation_chance=args.reactivation,
            pause_chance=args.pause,
            seed=args.seed,
        )
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        handle_error(e, "configure", ErrorCategory.CONFIG,
                     additional_context={'code': e.error_code.code, 'hint': e.hint})
        return 1

    return run_rain(config, show_stats=args.stats)


if __name__ == "__main__":
    sys.exit(main())

"""
Digital Rain - Falling character animation for the terminal

Streams of colored glyphs fall down every terminal column with fading
trails. Frames are diffed so only changed cells are written.

Basic Usage:
    from digital_rain import RainConfig, run_rain
    run_rain(RainConfig())

Driving the pipeline directly:
    from digital_rain import Engine, Renderer, RainConfig

    engine = Engine(RainConfig(density=1.5), size_provider=lambda: (24, 80))
    renderer = Renderer(sys.stdout)
    renderer.draw(engine.next_frame())
"""

import logging

__version__ = "1.0.0"

# Library code never writes log records to the terminal it draws on
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Core classes
from .colors import Color, COLOR_THEMES, brighten, dim, trail_gradient, gradient_index
from .charsets import CHARACTER_SETS, resolve_charset
from .config import RainConfig
from .drops import Drop, DropGrid, create_drop, draw_drop
from .frame import Frame, Cell
from .engine import Engine
from .renderer import Renderer, RenderMode

# Errors
from .errors import RainError, ConfigError, TerminalSizeError, ErrorCode

# Runtime
from .terminal import TerminalSession, get_terminal_size
from .stats import RenderStats
from .app import RainApp, run_rain, main

__all__ = [
    # Version
    "__version__",
    # Model
    "Color",
    "COLOR_THEMES",
    "CHARACTER_SETS",
    "brighten",
    "dim",
    "trail_gradient",
    "gradient_index",
    "resolve_charset",
    "RainConfig",
    # Simulation
    "Drop",
    "DropGrid",
    "create_drop",
    "draw_drop",
    "Frame",
    "Cell",
    "Engine",
    # Output
    "Renderer",
    "RenderMode",
    "TerminalSession",
    "get_terminal_size",
    "RenderStats",
    # Errors
    "RainError",
    "ConfigError",
    "TerminalSizeError",
    "ErrorCode",
    # App
    "RainApp",
    "run_rain",
    "main",
]

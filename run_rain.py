#!/usr/bin/env python3
"""
Digital Rain Entry Point

This script serves as the main entry point for both:
- Running from a source checkout: python run_rain.py
- Running as a standalone executable built with PyInstaller

It handles the import path setup required for frozen builds.
"""

import sys
import os


def setup_path():
    """Setup Python path for standalone execution."""
    if getattr(sys, 'frozen', False):
        # Running as compiled executable
        base_path = sys._MEIPASS
    else:
        # Running as script
        base_path = os.path.dirname(os.path.abspath(__file__))

    if base_path not in sys.path:
        sys.path.insert(0, base_path)


def main():
    """Main entry point."""
    setup_path()

    try:
        from digital_rain.app import main as rain_main
    except ImportError as e:
        print(f"Failed to import digital_rain: {e}")
        sys.exit(1)

    sys.exit(rain_main())


if __name__ == '__main__':
    main()

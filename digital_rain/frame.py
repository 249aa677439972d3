"""
Rain Frame - Snapshot of every visible terminal cell.

A frame keeps three parallel grids (glyph, color, background flag). The
background flag separates empty space from a drawn glyph whose color may
happen to match the cleared state.
"""

from typing import List, NamedTuple

from .colors import BLACK, Color


class Cell(NamedTuple):
    char: str
    color: Color
    is_background: bool


class Frame:
    """Fixed-size height x width grid of cells."""

    def __init__(self, height: int, width: int):
        if height < 1 or width < 1:
            raise ValueError(f"frame dimensions must be positive (got {height}x{width})")
        self.height = height
        self.width = width
        self.chars: List[List[str]] = [[' '] * width for _ in range(height)]
        self.colors: List[List[Color]] = [[BLACK] * width for _ in range(height)]
        self.is_background: List[List[bool]] = [[True] * width for _ in range(height)]

    @property
    def shape(self):
        return self.height, self.width

    def clear(self):
        """Reset every cell to background space."""
        for row in range(self.height):
            chars = self.chars[row]
            colors = self.colors[row]
            bg = self.is_background[row]
            for col in range(self.width):
                chars[col] = ' '
                colors[col] = BLACK
                bg[col] = True

    def set_cell(self, row: int, col: int, char: str, color: Color):
        """Draw a glyph at (row, col)."""
        self.chars[row][col] = char
        self.colors[row][col] = color
        self.is_background[row][col] = False

    def cell(self, row: int, col: int) -> Cell:
        return Cell(self.chars[row][col], self.colors[row][col], self.is_background[row][col])

    def copy(self) -> 'Frame':
        """Return an independent deep copy."""
        dup = Frame(self.height, self.width)
        self.copy_into(dup)
        return dup

    def copy_into(self, other: 'Frame'):
        """Copy cell data into a frame of the same shape."""
        if other.shape != self.shape:
            raise ValueError(f"cannot copy {self.shape} frame into {other.shape} frame")
        for row in range(self.height):
            # Colors are immutable, so slicing each row is a full copy
            other.chars[row][:] = self.chars[row]
            other.colors[row][:] = self.colors[row]
            other.is_background[row][:] = self.is_background[row]

    def drawn_cells(self) -> int:
        """Number of non-background cells."""
        return sum(row.count(False) for row in self.is_background)

    def __eq__(self, other):
        if not isinstance(other, Frame):
            return NotImplemented
        return (self.shape == other.shape
                and self.chars == other.chars
                and self.colors == other.colors
                and self.is_background == other.is_background)

    def __repr__(self):
        return f"Frame(height={self.height}, width={self.width}, drawn={self.drawn_cells()})"

"""
Test helpers: a minimal ANSI screen model and a controllable RNG.

VirtualTerminal understands only what the renderer emits: CSI H,
CSI row;col H, CSI 38;2;r;g;b m, CSI 0 m, CR and LF.
"""

import random

from digital_rain.colors import Color


class FixedRandom(random.Random):
    """Random whose probability rolls always return the same value."""

    def __init__(self, roll: float, seed: int = 0):
        super().__init__(seed)
        self.roll = roll

    def random(self):
        return self.roll

    # Keep randint/choice on the real bit generator
    def getrandbits(self, k):
        return super().getrandbits(k)


class VirtualTerminal:
    """Screen grid of (char, color) where color None means default attributes."""

    def __init__(self, height: int, width: int):
        self.height = height
        self.width = width
        self.cells = [[(' ', None)] * width for _ in range(height)]
        self.row = 0
        self.col = 0
        self.color = None

    def feed(self, text: str):
        i = 0
        while i < len(text):
            ch = text[i]
            if ch == '\x1b':
                assert text[i + 1] == '[', f"unexpected escape at {i}: {text[i:i + 8]!r}"
                j = i + 2
                while text[j] not in 'Hm':
                    j += 1
                self._csi(text[i + 2:j], text[j])
                i = j + 1
                continue
            if ch == '\r':
                self.col = 0
            elif ch == '\n':
                self.row += 1
            else:
                self.cells[self.row][self.col] = (ch, self.color)
                self.col += 1
            i += 1

    def _csi(self, params: str, final: str):
        if final == 'H':
            if params:
                row, col = params.split(';')
                self.row, self.col = int(row) - 1, int(col) - 1
            else:
                self.row, self.col = 0, 0
        elif params == '0':
            self.color = None
        else:
            parts = [int(p) for p in params.split(';')]
            assert parts[:2] == [38, 2], f"unsupported SGR {params!r}"
            self.color = Color(parts[2], parts[3], parts[4])


def expected_screen(frame):
    """What a terminal should show for a frame."""
    screen = []
    for row in range(frame.height):
        cells = []
        for col in range(frame.width):
            if frame.is_background[row][col]:
                cells.append((' ', None))
            else:
                cells.append((frame.chars[row][col], frame.colors[row][col]))
        screen.append(cells)
    return screen

"""Bi-level bitmaps and the visual-equivalence test for symbol templates."""

from __future__ import annotations

import math

__all__ = ["Bitmap", "are_equivalent"]

_DIVIDER = 9


class Bitmap:
    """A 1 bpp image; a set pixel (value 1) is black."""

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"bitmap size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        # Each row is an int whose bit x holds the pixel at column x.
        self._rows = [0] * height

    @property
    def wpl(self) -> int:
        """Number of 32-bit words per packed row."""
        return (self.width + 31) // 32

    def _check(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")

    def get_pixel(self, x: int, y: int) -> int:
        """Value (0 or 1) of the pixel at column ``x``, row ``y``."""
        self._check(x, y)
        return (self._rows[y] >> x) & 1

    def set_pixel(self, x: int, y: int, value: int) -> None:
        """Set the pixel at column ``x``, row ``y`` to 1 if ``value`` else 0."""
        self._check(x, y)
        if value:
            self._rows[y] |= 1 << x
        else:
            self._rows[y] &= ~(1 << x)

    def set_all(self, value: int) -> None:
        """Set every pixel to 1 if ``value`` else 0."""
        fill = (1 << self.width) - 1 if value else 0
        self._rows = [fill] * self.height

    def xor(self, other: Bitmap) -> Bitmap:
        """Pixelwise exclusive or of two bitmaps of the same size."""
        if (self.width, self.height) != (other.width, other.height):
            raise ValueError("bitmaps differ in size")
        result = Bitmap(self.width, self.height)
        result._rows = [a ^ b for a, b in zip(self._rows, other._rows)]
        return result

    def count_pixels(self) -> int:
        """Number of set pixels."""
        return sum(bin(row).count("1") for row in self._rows)

    def _count_span(self, y: int, start: int, end: int) -> int:
        if end <= start:
            return 0
        return bin((self._rows[y] >> start) & ((1 << (end - start)) - 1)).count("1")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bitmap):
            return NotImplemented
        return (self.width, self.height, self._rows) == (
            other.width,
            other.height,
            other._rows,
        )

    def __repr__(self) -> str:
        return f"Bitmap({self.width}, {self.height})"


def _split(total: int, part: int):
    """Yield (start, end) for each of the nine cells along one axis."""
    counter = 0
    for p in range(_DIVIDER):
        start = part * p + counter
        if p == _DIVIDER - 1:
            end = total
        elif (total - counter) % _DIVIDER != 0:
            end = start + part + 1
            counter += 1
        else:
            end = start + part
        yield start, end


def are_equivalent(first: Bitmap, second: Bitmap) -> bool:
    """Whether two symbol templates look alike.

    The XOR difference is spread over a 9x9 grid and rejected when it forms a
    horizontal, vertical or diagonal line, or a concentrated blot.
    """
    if (first.width, first.height) != (second.width, second.height):
        return False
    if first.wpl != second.wpl:
        return False

    diff = first.xor(second)
    w, h = diff.width, diff.height

    if diff.count_pixels() > first.count_pixels() // 4:
        return False

    vertical_part = h // _DIVIDER
    horizontal_part = w // _DIVIDER
    if vertical_part < horizontal_part:
        a, b = horizontal_part // 2, vertical_part // 2
    else:
        a, b = vertical_part // 2, horizontal_part // 2
    point_thresh = a * b * math.pi
    vline_thresh = int(vertical_part * (horizontal_part // 2) * 0.9)
    hline_thresh = int(horizontal_part * (vertical_part // 2) * 0.9)

    parsed = [[0] * _DIVIDER for _ in range(_DIVIDER)]
    h_parsed = [[0] * _DIVIDER for _ in range(_DIVIDER * 2)]
    v_parsed = [[0] * (_DIVIDER * 2) for _ in range(_DIVIDER)]

    v_cells = list(_split(h, vertical_part))
    for hp, (h_start, h_end) in enumerate(_split(w, horizontal_part)):
        h_center = (h_start + h_end) // 2
        for vp, (v_start, v_end) in enumerate(v_cells):
            v_center = (v_start + v_end) // 2
            left = right = up = down = 0
            for j in range(v_start, v_end):
                lc = diff._count_span(j, h_start, min(h_center, h_end))
                rc = diff._count_span(j, max(h_center, h_start), h_end)
                left += lc
                right += rc
                if j < v_center:
                    up += lc + rc
                else:
                    down += lc + rc
            parsed[hp][vp] = left + right
            h_parsed[hp * 2][vp] = left
            h_parsed[hp * 2 + 1][vp] = right
            v_parsed[hp][vp * 2] = up
            v_parsed[hp][vp * 2 + 1] = down

    def block_sum(grid, i: int, j: int) -> int:
        return grid[i][j] + grid[i][j + 1] + grid[i + 1][j] + grid[i + 1][j + 1]

    for i in range(_DIVIDER * 2 - 1):
        for j in range(_DIVIDER - 1):
            if block_sum(h_parsed, i, j) >= hline_thresh:
                return False

    for i in range(_DIVIDER - 1):
        for j in range(_DIVIDER * 2 - 1):
            if block_sum(v_parsed, i, j) >= vline_thresh:
                return False

    for i in range(_DIVIDER - 2):
        for j in range(_DIVIDER - 2):
            left_cross = sum(parsed[i + k][j + k] for k in range(3))
            right_cross = sum(parsed[i + k][j + 2 - k] for k in range(3))
            if left_cross >= hline_thresh or right_cross >= hline_thresh:
                return False

    for i in range(_DIVIDER - 1):
        for j in range(_DIVIDER - 1):
            if block_sum(parsed, i, j) >= point_thresh:
                return False

    return True
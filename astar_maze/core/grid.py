# astar_maze/core/grid.py
#!/usr/bin/env python3
"""
Grid model — a frozen snapshot of wall occupancy.

The search engine only ever reads one of these. Editing happens on the
live grid in astar_maze.app.editor, which hands out a new snapshot per run.
"""

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from astar_maze.core.types import Position, EMPTY, WALL, CELL_KINDS

# up, down, left, right
DIRECTIONS: Tuple[Position, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


def manhattan(a: Position, b: Position) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


@dataclass(frozen=True)
class Grid:
    rows: int
    cols: int
    cells: Tuple[Tuple[int, ...], ...]   # [row][col]

    def __post_init__(self):
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"grid must be non-empty, got {self.rows}x{self.cols}")
        cells = tuple(tuple(int(v) for v in row) for row in self.cells)
        if len(cells) != self.rows or any(len(r) != self.cols for r in cells):
            raise ValueError("cells size mismatch")
        for row in cells:
            for v in row:
                if v not in CELL_KINDS:
                    raise ValueError(f"unknown cell kind {v!r}")
        # frozen dataclass: normalise lists into tuples behind the setter
        object.__setattr__(self, "cells", cells)

    # -------------------- constructors --------------------

    @classmethod
    def empty(cls, rows: int, cols: int) -> "Grid":
        return cls(rows, cols, tuple((EMPTY,) * cols for _ in range(rows)))

    @classmethod
    def from_strings(cls, lines: Iterable[str]) -> "Grid":
        """Parse a picture of the grid: '#' is a wall, anything else is empty."""
        table: List[Tuple[int, ...]] = [
            tuple(WALL if ch == "#" else EMPTY for ch in line) for line in lines
        ]
        if not table:
            raise ValueError("no rows given")
        return cls(len(table), len(table[0]), tuple(table))

    # -------------------- queries --------------------

    def in_bounds(self, p: Position) -> bool:
        r, c = p
        return 0 <= r < self.rows and 0 <= c < self.cols

    def cell_kind(self, p: Position) -> int:
        if not self.in_bounds(p):
            raise IndexError(f"position {p} outside {self.rows}x{self.cols} grid")
        r, c = p
        return self.cells[r][c]

    def is_wall(self, p: Position) -> bool:
        return self.cell_kind(p) == WALL

    def neighbors4(self, p: Position) -> List[Position]:
        """In-bounds, non-wall neighbors of p (no diagonals)."""
        r, c = p
        out: List[Position] = []
        for dr, dc in DIRECTIONS:
            n = (r + dr, c + dc)
            if self.in_bounds(n) and not self.is_wall(n):
                out.append(n)
        return out

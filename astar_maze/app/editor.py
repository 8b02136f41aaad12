# astar_maze/app/editor.py
#!/usr/bin/env python3
"""
Live maze state behind the viewer: walls, start, goal and the editing mode.

The search never sees this object directly; it gets a frozen Grid from
snapshot() when a run begins.
"""

import json
import random
from pathlib import Path
from typing import List, Optional, Union

from astar_maze.core.grid import Grid
from astar_maze.core.types import Position, EMPTY, WALL
from astar_maze.app.config import WALL_DENSITY

MODE_DRAW_WALL = "draw_wall"
MODE_ERASE_WALL = "erase_wall"
MODE_PLACE_START = "place_start"
MODE_PLACE_GOAL = "place_goal"
MODES = (MODE_DRAW_WALL, MODE_ERASE_WALL, MODE_PLACE_START, MODE_PLACE_GOAL)


def default_start(rows: int, cols: int) -> Position:
    return (rows // 2, cols // 6)


def default_goal(rows: int, cols: int) -> Position:
    return (rows // 2, cols - 1 - cols // 6)


class MazeEditor:
    def __init__(self, rows: int, cols: int):
        if rows < 1 or cols < 2:
            raise ValueError(f"maze needs at least 1x2 cells, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self.cells: List[List[int]] = []
        self.start: Position = (0, 0)
        self.goal: Position = (0, 1)
        self.mode = MODE_DRAW_WALL
        self.clear_all()

    # -------------------- queries --------------------

    def in_bounds(self, p: Position) -> bool:
        r, c = p
        return 0 <= r < self.rows and 0 <= c < self.cols

    def is_wall(self, p: Position) -> bool:
        r, c = p
        return self.cells[r][c] == WALL

    def snapshot(self) -> Grid:
        return Grid(self.rows, self.cols, tuple(tuple(row) for row in self.cells))

    # -------------------- edits --------------------

    def set_mode(self, mode: str) -> None:
        if mode not in MODES:
            raise ValueError(f"unknown mode {mode!r}")
        self.mode = mode

    def apply(self, p: Position) -> bool:
        """Apply the current mode at p. Returns True if anything changed."""
        if not self.in_bounds(p):
            return False
        if self.mode == MODE_PLACE_START:
            return self.place_start(p)
        if self.mode == MODE_PLACE_GOAL:
            return self.place_goal(p)
        kind = WALL if self.mode == MODE_DRAW_WALL else EMPTY
        return self.set_cell(p, kind)

    def set_cell(self, p: Position, kind: int) -> bool:
        if p == self.start or p == self.goal:
            return False
        r, c = p
        if self.cells[r][c] == kind:
            return False
        self.cells[r][c] = kind
        return True

    def place_start(self, p: Position) -> bool:
        if p == self.goal:
            return False
        self._clear_wall(p)
        self.start = p
        self.mode = MODE_DRAW_WALL
        return True

    def place_goal(self, p: Position) -> bool:
        if p == self.start:
            return False
        self._clear_wall(p)
        self.goal = p
        self.mode = MODE_DRAW_WALL
        return True

    def _clear_wall(self, p: Position) -> None:
        r, c = p
        self.cells[r][c] = EMPTY

    def random_maze(self, density: float = WALL_DENSITY,
                    rng: Optional[random.Random] = None) -> None:
        """Uniform-random wall fill; start and goal stay open."""
        rng = rng or random.Random()
        for r in range(self.rows):
            for c in range(self.cols):
                if (r, c) in (self.start, self.goal):
                    self.cells[r][c] = EMPTY
                else:
                    self.cells[r][c] = WALL if rng.random() < density else EMPTY

    def clear_all(self) -> None:
        self.cells = [[EMPTY] * self.cols for _ in range(self.rows)]
        self.start = default_start(self.rows, self.cols)
        self.goal = default_goal(self.rows, self.cols)
        self.mode = MODE_DRAW_WALL

    # -------------------- map files --------------------

    @classmethod
    def from_dict(cls, data: dict) -> "MazeEditor":
        try:
            rows = int(data["rows"])
            cols = int(data["cols"])
            cells = data["cells"]
            start = (int(data["start"][0]), int(data["start"][1]))
            goal = (int(data["goal"][0]), int(data["goal"][1]))
        except (KeyError, IndexError, TypeError, ValueError) as ex:
            raise ValueError(f"malformed map: {ex}") from ex

        # Grid() checks the table shape and cell kinds
        try:
            grid = Grid(rows, cols, cells)
        except TypeError as ex:
            raise ValueError(f"malformed map cells: {ex}") from ex
        ed = cls(rows, cols)
        for label, p in (("start", start), ("goal", goal)):
            if not grid.in_bounds(p):
                raise ValueError(f"{label} {p} out of bounds")
            if grid.is_wall(p):
                raise ValueError(f"{label} {p} is a wall")
        if start == goal:
            raise ValueError("start and goal must differ")
        ed.cells = [list(row) for row in grid.cells]
        ed.start = start
        ed.goal = goal
        return ed


def load_map(path: Union[str, Path]) -> MazeEditor:
    with open(path, "r") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as ex:
            raise ValueError(f"{path}: not valid JSON ({ex})") from ex
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object")
    return MazeEditor.from_dict(data)

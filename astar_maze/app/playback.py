# astar_maze/app/playback.py
#!/usr/bin/env python3
"""
Playback controller: owns the search engine for one run and turns its
events into overlay state (open / closed / path) for the viewer.

Pacing is driven from outside through tick(now_ms); the controller never
sleeps. Pausing just stops stepping, resetting drops the engine.
"""

import random
from typing import List, Optional, Set

from astar_maze.core.search import SearchEngine
from astar_maze.core.types import Position, SearchEvent, EXPANSION, COMPLETION, EXHAUSTED
from astar_maze.app.config import INTERVAL_MS, WALL_DENSITY, clamp_interval
from astar_maze.app.editor import MazeEditor

STATE_IDLE = "Idle"
STATE_RUNNING = "Running"
STATE_PAUSED = "Paused"
STATE_DONE = "Done"
STATE_NO_PATH = "No path"

NO_PATH_MESSAGE = "No path found!"


class PlaybackController:
    def __init__(self, editor: MazeEditor, heuristic_enabled: bool = True,
                 interval_ms: int = INTERVAL_MS, wall_density: float = WALL_DENSITY):
        self.editor = editor
        self.heuristic_enabled = heuristic_enabled
        self.interval_ms = clamp_interval(interval_ms)
        self.wall_density = wall_density

        self.engine: Optional[SearchEngine] = None
        self.running = False
        self.state = STATE_IDLE
        self.message: Optional[str] = None
        self._last_step_ms: Optional[int] = None

        self.open_list: List[Position] = []
        self.closed_set: Set[Position] = set()
        self.path: List[Position] = []
        self.metrics: dict = {}
        self._reset_overlays()

    # -------------------- status --------------------

    @property
    def busy(self) -> bool:
        """A search has started and not reached its outcome yet."""
        return self.engine is not None

    @property
    def algo_name(self) -> str:
        return "A*" if self.heuristic_enabled else "Dijkstra"

    # -------------------- stepping --------------------

    def _begin(self) -> None:
        self._reset_overlays()
        self.engine = SearchEngine.create(
            self.editor.snapshot(), self.editor.start, self.editor.goal,
            self.heuristic_enabled,
        )

    def step(self) -> SearchEvent:
        """Advance the current search by one expansion, starting one if needed."""
        if self.engine is None:
            self._begin()
            if not self.running:
                self.state = STATE_PAUSED
        event = self.engine.advance()
        self._apply(event)
        return event

    def _apply(self, event: SearchEvent) -> None:
        self.metrics = event.metrics
        if event.kind == EXPANSION:
            self.open_list = list(event.frontier)
            self.closed_set = set(event.visited)
        elif event.kind == COMPLETION:
            self.path = list(event.path)
            self._finish(STATE_DONE)
        elif event.kind == EXHAUSTED:
            self.message = NO_PATH_MESSAGE
            self._finish(STATE_NO_PATH)

    def _finish(self, state: str) -> None:
        self.engine = None
        self.running = False
        self.state = state
        self._last_step_ms = None

    def run(self) -> None:
        """Start a new run, or resume a paused one."""
        if self.running:
            return
        if self.engine is None:
            self._begin()
        self.running = True
        self.state = STATE_RUNNING
        self._last_step_ms = None

    def pause(self) -> None:
        if not self.running:
            return
        self.running = False
        self.state = STATE_PAUSED

    def toggle_run(self) -> None:
        if self.running:
            self.pause()
        else:
            self.run()

    def tick(self, now_ms: int) -> Optional[SearchEvent]:
        """Timer hook: step once per interval while running."""
        if not self.running:
            return None
        if self._last_step_ms is None:
            # first step waits one full interval, like every later one
            self._last_step_ms = now_ms
            return None
        if now_ms - self._last_step_ms < self.interval_ms:
            return None
        self._last_step_ms = now_ms
        return self.step()

    def reset(self) -> None:
        """Drop the search and its overlays; walls, start and goal stay."""
        self.engine = None
        self.running = False
        self._last_step_ms = None
        self._reset_overlays()

    def _reset_overlays(self) -> None:
        self.open_list = []
        self.closed_set = set()
        self.path = []
        self.message = None
        self.state = STATE_IDLE
        self.metrics = {
            "algo": self.algo_name,
            "expanded": 0,
            "frontier_size": 0,
            "visited_count": 0,
            "path_len": 0,
            "path_cost": None,
        }

    # -------------------- settings & editing --------------------

    def set_interval(self, ms: int) -> None:
        self.interval_ms = clamp_interval(ms)

    def bump_speed(self, delta_ms: int) -> None:
        self.set_interval(self.interval_ms + delta_ms)

    def set_heuristic(self, enabled: bool) -> bool:
        if self.busy:
            return False
        self.heuristic_enabled = bool(enabled)
        self._reset_overlays()
        return True

    def set_mode(self, mode: str) -> bool:
        if self.busy:
            return False
        self.editor.set_mode(mode)
        return True

    def edit(self, p: Position) -> bool:
        if self.busy:
            return False
        changed = self.editor.apply(p)
        if changed and self.state != STATE_IDLE:
            # overlays of a finished search no longer match the maze
            self._reset_overlays()
        return changed

    def randomize(self, rng: Optional[random.Random] = None) -> bool:
        if self.busy:
            return False
        self._reset_overlays()
        self.editor.random_maze(self.wall_density, rng)
        return True

    def clear_all(self) -> bool:
        if self.busy:
            return False
        self.reset()
        self.editor.clear_all()
        return True

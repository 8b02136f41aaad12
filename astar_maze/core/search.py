# astar_maze/core/search.py
#!/usr/bin/env python3
"""
A* / Dijkstra search — one expansion per advance() for animation.

One engine covers both algorithms; they only differ in the f-score:
- heuristic_enabled=True  -> f = g + Manhattan(pos, goal)   (A*)
- heuristic_enabled=False -> f = g                          (Dijkstra)

Tie-breaking in the PQ: (f, seq, pos) where seq is the order in which a
position was first discovered. An improved g keeps the original seq, so among
equal f-scores the earliest discovered position is expanded first.

Lifecycle: unstarted -> running -> completed | exhausted. A terminal engine
refuses further advance() calls; run a new engine to search again.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set, Tuple
import heapq

from astar_maze.core.grid import Grid, manhattan
from astar_maze.core.types import (
    Position, SearchEvent, EXPANSION, COMPLETION, EXHAUSTED,
)

STATE_UNSTARTED = "unstarted"
STATE_RUNNING = "running"
STATE_COMPLETED = "completed"
STATE_EXHAUSTED = "exhausted"


class SearchStateError(RuntimeError):
    """advance() was called on an engine that already reported its outcome."""


@dataclass
class SearchEngine:
    grid: Grid
    start: Position
    goal: Position
    heuristic_enabled: bool = True

    # Internal state
    open_pq: List[Tuple[int, int, Position]] = field(default_factory=list)  # (f, seq, pos)
    frontier: Dict[Position, int] = field(default_factory=dict)             # pos -> discovery seq
    closed_set: Set[Position] = field(default_factory=set)
    closed_order: List[Position] = field(default_factory=list)
    g: Dict[Position, int] = field(default_factory=dict)
    f: Dict[Position, int] = field(default_factory=dict)
    parent: Dict[Position, Position] = field(default_factory=dict)
    state: str = STATE_UNSTARTED
    expanded_count: int = 0
    seq: int = 0

    def __post_init__(self):
        self.start = tuple(self.start)
        self.goal = tuple(self.goal)
        for label, p in (("start", self.start), ("goal", self.goal)):
            if not self.grid.in_bounds(p):
                raise ValueError(f"{label} {p} out of bounds")
            if self.grid.is_wall(p):
                raise ValueError(f"{label} {p} is a wall")
        if self.start == self.goal:
            raise ValueError("start and goal must differ")

        self.g[self.start] = 0
        self.f[self.start] = self._h(self.start)
        self.frontier[self.start] = self._bump()
        heapq.heappush(self.open_pq, (self.f[self.start], self.frontier[self.start], self.start))

    @classmethod
    def create(cls, grid: Grid, start: Position, goal: Position,
               heuristic_enabled: bool = True) -> "SearchEngine":
        return cls(grid, start, goal, heuristic_enabled)

    # -------------------- status --------------------

    @property
    def name(self) -> str:
        return "A*" if self.heuristic_enabled else "Dijkstra"

    @property
    def is_terminal(self) -> bool:
        return self.state in (STATE_COMPLETED, STATE_EXHAUSTED)

    # -------------------- helpers --------------------

    def _bump(self) -> int:
        self.seq += 1
        return self.seq

    def _h(self, p: Position) -> int:
        return manhattan(p, self.goal) if self.heuristic_enabled else 0

    def _pop_best(self) -> Optional[Position]:
        while self.open_pq:
            f_u, _, u = heapq.heappop(self.open_pq)
            # skip entries superseded by a better g, or already taken out
            if u in self.frontier and self.f[u] == f_u:
                del self.frontier[u]
                return u
        return None

    def _frontier_snapshot(self) -> Tuple[Position, ...]:
        return tuple(sorted(self.frontier, key=lambda p: (self.f[p], self.frontier[p])))

    def _reconstruct_path(self, end: Position) -> Tuple[Position, ...]:
        path: List[Position] = [end]
        cur = end
        while cur != self.start:
            cur = self.parent[cur]
            path.append(cur)
        path.reverse()
        return tuple(path)

    def _metrics(self, path: Optional[Tuple[Position, ...]] = None) -> dict:
        return {
            "algo": self.name,
            "expanded": self.expanded_count,
            "frontier_size": len(self.frontier),
            "visited_count": len(self.closed_set),
            "path_len": len(path) - 1 if path else 0,
            "path_cost": self.g[self.goal] if path else None,
        }

    # -------------------- main stepping logic --------------------

    def advance(self) -> SearchEvent:
        """
        Run ONE expansion step:
          - Empty frontier -> exhausted.
          - Pop the lowest (f, seq) position.
          - Goal -> reconstruct the path and complete.
          - Else close it, report it, relax its neighbors with unit cost.
        """
        if self.is_terminal:
            raise SearchStateError(f"{self.name} search already {self.state}")
        self.state = STATE_RUNNING

        u = self._pop_best()
        if u is None:
            self.state = STATE_EXHAUSTED
            return SearchEvent(kind=EXHAUSTED, metrics=self._metrics())

        if u == self.goal:
            self.state = STATE_COMPLETED
            path = self._reconstruct_path(u)
            return SearchEvent(kind=COMPLETION, current=u, path=path,
                               metrics=self._metrics(path))

        self.expanded_count += 1
        self.closed_set.add(u)
        self.closed_order.append(u)
        event = SearchEvent(
            kind=EXPANSION,
            current=u,
            frontier=self._frontier_snapshot(),
            visited=tuple(self.closed_order),
            metrics=self._metrics(),
        )

        for v in self.grid.neighbors4(u):
            if v in self.closed_set:
                continue
            alt = self.g[u] + 1
            if v in self.frontier:
                if alt >= self.g[v]:
                    continue
            else:
                self.frontier[v] = self._bump()
            self.parent[v] = u
            self.g[v] = alt
            self.f[v] = alt + self._h(v)
            heapq.heappush(self.open_pq, (self.f[v], self.frontier[v], v))

        return event

    def __iter__(self) -> Iterator[SearchEvent]:
        """Yield events until (and including) the terminal one."""
        while not self.is_terminal:
            yield self.advance()


def solve(grid: Grid, start: Position, goal: Position,
          heuristic_enabled: bool = True) -> SearchEvent:
    """Run a fresh engine to termination and return the terminal event."""
    event = None
    for event in SearchEngine.create(grid, start, goal, heuristic_enabled):
        pass
    return event

# astar_maze/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from typing import Tuple, Optional, Dict, Any

Position = Tuple[int, int]  # (row, col)

# Cell kinds stored in the grid table. Start and goal are never cell kinds.
EMPTY = 0
WALL = 1
CELL_KINDS = (EMPTY, WALL)

# SearchEvent.kind values
EXPANSION = "expansion"
COMPLETION = "completion"
EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class SearchEvent:
    kind: str                                   # "expansion" | "completion" | "exhausted"
    current: Optional[Position] = None          # expanded position (or goal on completion)
    frontier: Tuple[Position, ...] = ()         # selection order at that instant
    visited: Tuple[Position, ...] = ()          # expansion order at that instant
    path: Optional[Tuple[Position, ...]] = None # start..goal inclusive, completion only
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_terminal(self) -> bool:
        return self.kind in (COMPLETION, EXHAUSTED)

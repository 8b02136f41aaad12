# astar_maze/app/config.py
#!/usr/bin/env python3
"""
Runtime settings for the viewer.

Defaults below, overridden by ENV, then by CLI flags:
    MAZE_ROWS / --rows=20
    MAZE_COLS / --cols=30
    MAZE_ALGO / --algo=astar|dijkstra
    MAZE_SPEED_MS / --speed=50      (ms between steps while running)
    MAZE_MAP / --map=path.json      (optional starting layout)
"""

import os
import sys
from dataclasses import dataclass
from typing import Dict, List, Optional

ROWS = 20
COLS = 30
INTERVAL_MS = 50
MIN_INTERVAL_MS = 10
MAX_INTERVAL_MS = 500
WALL_DENSITY = 0.3
MIN_DIM = 2
MAX_DIM = 200

ALGO_ASTAR = "astar"
ALGO_DIJKSTRA = "dijkstra"


@dataclass
class Settings:
    rows: int = ROWS
    cols: int = COLS
    algo: str = ALGO_ASTAR
    interval_ms: int = INTERVAL_MS
    wall_density: float = WALL_DENSITY
    map_path: Optional[str] = None

    @property
    def heuristic_enabled(self) -> bool:
        return self.algo == ALGO_ASTAR


def clamp_interval(ms: int) -> int:
    return int(max(MIN_INTERVAL_MS, min(MAX_INTERVAL_MS, ms)))


def _parse_flags(argv: List[str]) -> Dict[str, str]:
    flags: Dict[str, str] = {}
    for arg in argv:
        if arg.startswith("--") and "=" in arg:
            key, value = arg[2:].split("=", 1)
            flags[key.lower()] = value
    return flags


def _as_dim(raw: str, default: int, label: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        print(f"Ignoring {label}={raw!r}: not an integer")
        return default
    if not MIN_DIM <= value <= MAX_DIM:
        print(f"Ignoring {label}={value}: must be within {MIN_DIM}..{MAX_DIM}")
        return default
    return value


def resolve_settings(argv: Optional[List[str]] = None,
                     environ: Optional[Dict[str, str]] = None) -> Settings:
    argv = sys.argv[1:] if argv is None else argv
    environ = os.environ if environ is None else environ

    raw = {
        "rows": environ.get("MAZE_ROWS"),
        "cols": environ.get("MAZE_COLS"),
        "algo": environ.get("MAZE_ALGO"),
        "speed": environ.get("MAZE_SPEED_MS"),
        "map": environ.get("MAZE_MAP"),
    }
    for key, value in _parse_flags(argv).items():
        if key in raw:
            raw[key] = value

    s = Settings()
    if raw["rows"] is not None:
        s.rows = _as_dim(raw["rows"], ROWS, "rows")
    if raw["cols"] is not None:
        s.cols = _as_dim(raw["cols"], COLS, "cols")
    if raw["algo"] is not None:
        algo = raw["algo"].lower().replace("*", "star").replace("-", "")
        if algo in (ALGO_ASTAR, ALGO_DIJKSTRA):
            s.algo = algo
        else:
            print(f"Unknown algo {raw['algo']!r}, using {s.algo}")
    if raw["speed"] is not None:
        try:
            s.interval_ms = clamp_interval(int(raw["speed"]))
        except ValueError:
            print(f"Ignoring speed={raw['speed']!r}: not an integer")
    if raw["map"]:
        s.map_path = raw["map"]
    return s

#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import os, sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import random

from astar_maze.app.editor import MazeEditor, MODE_ERASE_WALL
from astar_maze.app.playback import (
    PlaybackController, NO_PATH_MESSAGE,
    STATE_IDLE, STATE_RUNNING, STATE_PAUSED, STATE_DONE, STATE_NO_PATH,
)
from astar_maze.core.types import EXPANSION, COMPLETION, EXHAUSTED, WALL


def step_to_end(ctl, limit=10000):
    for _ in range(limit):
        event = ctl.step()
        if event.is_terminal:
            return event
    raise AssertionError("search did not finish")


def test_step_starts_search_and_finishes_with_path():
    ctl = PlaybackController(MazeEditor(5, 7))
    assert ctl.state == STATE_IDLE and not ctl.busy

    first = ctl.step()
    assert first.kind == EXPANSION
    assert ctl.busy
    assert ctl.state == STATE_PAUSED
    assert ctl.closed_set == {ctl.editor.start}

    last = step_to_end(ctl)
    assert last.kind == COMPLETION
    assert ctl.state == STATE_DONE
    assert ctl.path[0] == ctl.editor.start and ctl.path[-1] == ctl.editor.goal
    assert not ctl.busy
    assert ctl.metrics["path_len"] == len(ctl.path) - 1


def test_blocked_maze_reports_no_path():
    ed = MazeEditor(5, 7)
    for r in range(5):
        ed.apply((r, 3))
    ctl = PlaybackController(ed)
    last = step_to_end(ctl)
    assert last.kind == EXHAUSTED
    assert ctl.state == STATE_NO_PATH
    assert ctl.message == NO_PATH_MESSAGE
    assert ctl.path == []


def test_run_steps_once_per_interval():
    ctl = PlaybackController(MazeEditor(5, 7), interval_ms=50)
    ctl.run()
    assert ctl.state == STATE_RUNNING and ctl.busy
    assert ctl.tick(1000) is None        # arms the timer
    assert ctl.tick(1020) is None
    event = ctl.tick(1050)
    assert event is not None and event.kind == EXPANSION
    assert ctl.tick(1060) is None
    assert ctl.tick(1100) is not None


def test_pause_and_resume():
    ctl = PlaybackController(MazeEditor(5, 7), interval_ms=10)
    ctl.run()
    ctl.tick(0)
    ctl.tick(10)
    visited = set(ctl.closed_set)
    ctl.pause()
    assert ctl.state == STATE_PAUSED and ctl.busy
    assert ctl.tick(500) is None
    assert ctl.closed_set == visited

    ctl.toggle_run()
    assert ctl.state == STATE_RUNNING
    ctl.tick(600)
    assert ctl.tick(610) is not None


def test_run_to_completion_under_timer():
    ctl = PlaybackController(MazeEditor(4, 6), interval_ms=10)
    ctl.run()
    now = 0
    while ctl.busy:
        ctl.tick(now)
        now += 10
    assert ctl.state == STATE_DONE
    assert not ctl.running


def test_editing_refused_mid_search():
    ctl = PlaybackController(MazeEditor(5, 7))
    ctl.step()
    assert not ctl.edit((0, 0))
    assert not ctl.set_heuristic(False)
    assert not ctl.set_mode(MODE_ERASE_WALL)
    assert not ctl.randomize(random.Random(0))
    assert not ctl.clear_all()
    ctl.reset()
    assert ctl.state == STATE_IDLE and not ctl.busy
    assert ctl.edit((0, 0))


def test_edit_after_finish_clears_overlays():
    ctl = PlaybackController(MazeEditor(4, 6))
    step_to_end(ctl)
    assert ctl.path
    assert ctl.edit((0, 0))
    assert ctl.state == STATE_IDLE
    assert ctl.path == [] and ctl.closed_set == set()


def test_refused_edit_keeps_finished_overlays():
    ctl = PlaybackController(MazeEditor(4, 6))
    step_to_end(ctl)
    path = list(ctl.path)
    assert not ctl.edit(ctl.editor.start)    # walls never go on start
    assert not ctl.edit(ctl.editor.goal)
    assert ctl.state == STATE_DONE
    assert ctl.path == path
    assert ctl.closed_set


def test_running_search_ignores_live_edits():
    ed = MazeEditor(3, 7)
    ctl = PlaybackController(ed)
    ctl.step()
    # wall off the goal behind the controller's back
    gr, gc = ed.goal
    for p in ((gr - 1, gc), (gr + 1, gc), (gr, gc - 1), (gr, gc + 1)):
        if ed.in_bounds(p):
            ed.cells[p[0]][p[1]] = WALL
    last = step_to_end(ctl)
    assert last.kind == COMPLETION


def test_reset_keeps_walls_and_clear_all_drops_them():
    ed = MazeEditor(5, 7)
    ed.apply((0, 0))
    ctl = PlaybackController(ed)
    step_to_end(ctl)
    ctl.reset()
    assert ed.is_wall((0, 0))
    assert ctl.clear_all()
    assert not ed.is_wall((0, 0))


def test_switching_algorithm():
    ctl = PlaybackController(MazeEditor(5, 7))
    assert ctl.set_heuristic(False)
    assert ctl.algo_name == "Dijkstra"
    assert ctl.step().metrics["algo"] == "Dijkstra"


def test_interval_is_clamped():
    ctl = PlaybackController(MazeEditor(3, 3), interval_ms=1)
    assert ctl.interval_ms == 10
    ctl.set_interval(10000)
    assert ctl.interval_ms == 500
    ctl.bump_speed(-100)
    assert ctl.interval_ms == 400


def test_new_run_after_finish_starts_fresh():
    ctl = PlaybackController(MazeEditor(4, 6))
    step_to_end(ctl)
    ctl.run()
    assert ctl.busy
    assert ctl.path == []
    assert ctl.state == STATE_RUNNING

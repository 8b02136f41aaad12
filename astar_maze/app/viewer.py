# astar_maze/app/viewer.py
#!/usr/bin/env python3
"""
A* Maze Solver Viewer — grid editor + step-by-step search playback

- Mouse:
    click / drag on the grid -> apply the current mode
- Keyboard:
    [W]/[E]      -> draw walls / erase walls
    [S]/[G]      -> place start / place goal (next click)
    [A]/[D]      -> select algorithm (A* / Dijkstra)
    [SPACE]      -> run/pause
    [N]          -> single step
    [R]          -> reset (keeps walls)
    [M]          -> random maze
    [C]          -> clear all
    [+]/[-]      -> faster / slower
    [Q]/[ESC]    -> quit

Settings: see astar_maze.app.config (--rows=, --cols=, --algo=, --speed=, --map=)
"""

# --- bootstrap import path so `from astar_maze...` works when run as a script ---
import sys
from pathlib import Path
_REPO_ROOT = Path(__file__).resolve().parents[2]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))
# ---------------------------------------------------------------------------------

from typing import Optional, Tuple
import pygame

from astar_maze.core.types import Position
from astar_maze.app.config import Settings, resolve_settings
from astar_maze.app.editor import (
    MazeEditor, load_map,
    MODE_DRAW_WALL, MODE_ERASE_WALL, MODE_PLACE_START, MODE_PLACE_GOAL,
)
from astar_maze.app.playback import (
    PlaybackController, STATE_RUNNING, STATE_DONE, STATE_NO_PATH,
)

# ---------- Config ----------
PANEL_W = 340            # right band: metrics, legend, buttons
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 26
FONT_NAME = None  # default pygame font
SPEED_STEP_MS = 10

# Colors
WHITE       = (255,255,255)
BLACK       = (  0,  0,  0)
EMPTY_GRAY  = (200,200,200)
WALL_DARK   = ( 40, 44, 52)
START_GREEN = ( 46,139, 87)
GOAL_RED    = (220, 50, 47)
OPEN_CYAN_A = (0,150,255,110)
CLOSED_MAG_A= (255,0,120,90)
PATH_GOLD   = (255,210,0)

CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = (230,235,240)
TEXT_WARN   = (255,120,110)
ACCENT_GOLD = (255,210,0)

MODE_LABELS = {
    MODE_DRAW_WALL:   "Draw Walls",
    MODE_ERASE_WALL:  "Erase Walls",
    MODE_PLACE_START: "Place Start",
    MODE_PLACE_GOAL:  "Place Goal",
}

LEGEND = (
    ("Start (S)",  START_GREEN),
    ("Goal (G)",   GOAL_RED),
    ("Wall",       WALL_DARK),
    ("Open Set",   OPEN_CYAN_A),
    ("Closed Set", CLOSED_MAG_A),
    ("Path",       PATH_GOLD),
)


# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False
        self.enabled = True

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        if not self.enabled:
            bg = (30, 32, 38, 160)
        elif self.active and self.togglable:
            bg = (58, 86, 160, 235)
        elif self.hover:
            bg = (46, 50, 60, 230)
        else:
            bg = (36, 40, 48, 220)
        pygame.draw.rect(base, bg, base.get_rect(), border_radius=8)
        screen.blit(base, self.rect.topleft)

        if self.active and self.togglable:
            pygame.draw.rect(screen, (120, 170, 255, 255), self.rect, width=2, border_radius=8)

        fg = (235,238,242) if self.enabled else (120,124,130)
        text = font.render(self.label, True, fg)
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                if self.enabled:
                    self.callback()
                return True
        return False


# ---------- Viewer ----------
class Viewer:
    def __init__(self, controller: PlaybackController):
        pygame.init()

        self.ctl = controller
        self.editor = controller.editor
        self.font_small = pygame.font.Font(FONT_NAME, 16)
        self.font = pygame.font.Font(FONT_NAME, 20)
        self.font_big = pygame.font.Font(FONT_NAME, 26)

        self.cell_size = self._auto_cell_size()
        win_w = GRID_MARGIN*2 + self.editor.cols * self.cell_size + PANEL_W
        win_h = max(GRID_MARGIN*2 + self.editor.rows * self.cell_size, 640)

        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("A* Maze Solver — Interactive Pathfinding")

        self._buttons: list[UIButton] = []
        self._mouse_down = False
        self.clock = pygame.time.Clock()
        self._layout(win_w, win_h)

    # ---------- layout ----------
    def _auto_cell_size(self) -> int:
        target_h = 720 - GRID_MARGIN*2
        return max(10, min(CELL_SIZE_DEFAULT, target_h // self.editor.rows))

    def _layout(self, win_w: int, win_h: int):
        """Integer cell_size that fits the window, grid centered left of the panel."""
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = max(6, min(avail_w // self.editor.cols, avail_h // self.editor.rows))

        grid_w = self.editor.cols * self.cell_size
        grid_h = self.editor.rows * self.cell_size
        left_x = max(0, (win_w - PANEL_W - grid_w - 2 * GRID_MARGIN) // 2)
        top_y = max(0, (win_h - grid_h - 2 * GRID_MARGIN) // 2)
        self._grid_origin = (left_x + GRID_MARGIN, top_y + GRID_MARGIN)
        self._right_band = pygame.Rect(win_w - PANEL_W, 0, PANEL_W, win_h)
        self._build_buttons()

    def _cell_at(self, pos: Tuple[int, int]) -> Optional[Position]:
        ox, oy = self._grid_origin
        x, y = pos
        if x < ox or y < oy:
            return None
        cell = ((y - oy) // self.cell_size, (x - ox) // self.cell_size)
        return cell if self.editor.in_bounds(cell) else None

    def _cell_rect(self, p: Position) -> pygame.Rect:
        ox, oy = self._grid_origin
        r, c = p
        cs = self.cell_size
        return pygame.Rect(ox + c*cs, oy + r*cs, cs, cs)

    # ---------- loop ----------
    def run(self):
        while True:
            self._handle_events()
            self.ctl.tick(pygame.time.get_ticks())
            self._refresh_active_states()
            self._draw()
            self.clock.tick(60)

    def _quit(self):
        pygame.quit()
        sys.exit(0)

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                self._quit()
            elif e.type == pygame.KEYDOWN:
                self._handle_key(e.key)
            elif e.type == pygame.VIDEORESIZE:
                w, h = max(640, e.w), max(480, e.h)
                self.screen = pygame.display.set_mode((w, h), pygame.RESIZABLE)
                self._layout(w, h)
            elif e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                if any(b.handle_mouse(e) for b in self._buttons):
                    continue
                cell = self._cell_at(e.pos)
                if cell is not None:
                    self._mouse_down = True
                    self.ctl.edit(cell)
            elif e.type == pygame.MOUSEBUTTONUP and e.button == 1:
                self._mouse_down = False
            elif e.type == pygame.MOUSEMOTION:
                for b in self._buttons:
                    b.handle_mouse(e)
                if self._mouse_down and self.editor.mode in (MODE_DRAW_WALL, MODE_ERASE_WALL):
                    cell = self._cell_at(e.pos)
                    if cell is not None:
                        self.ctl.edit(cell)

    def _handle_key(self, key: int):
        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._quit()
        elif key == pygame.K_SPACE:
            self.ctl.toggle_run()
        elif key == pygame.K_n:
            self._step_once()
        elif key == pygame.K_r:
            self.ctl.reset()
        elif key == pygame.K_m:
            self.ctl.randomize()
        elif key == pygame.K_c:
            self.ctl.clear_all()
        elif key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
            self.ctl.bump_speed(-SPEED_STEP_MS)
        elif key in (pygame.K_MINUS, pygame.K_UNDERSCORE, pygame.K_KP_MINUS):
            self.ctl.bump_speed(+SPEED_STEP_MS)
        elif key == pygame.K_a:
            self.ctl.set_heuristic(True)
        elif key == pygame.K_d:
            self.ctl.set_heuristic(False)
        elif key == pygame.K_w:
            self.ctl.set_mode(MODE_DRAW_WALL)
        elif key == pygame.K_e:
            self.ctl.set_mode(MODE_ERASE_WALL)
        elif key == pygame.K_s:
            self.ctl.set_mode(MODE_PLACE_START)
        elif key == pygame.K_g:
            self.ctl.set_mode(MODE_PLACE_GOAL)

    def _step_once(self):
        if self.ctl.state == STATE_RUNNING:
            return
        self.ctl.step()

    # ---------- buttons ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 14
        y = rb.y + 330  # metrics + legend above
        w = rb.width - 28
        half = (w - 8) // 2
        h = 32
        gap = 8

        def add(label, cb, col, *, togglable=False, store_as=None, span=False):
            bx = x if col == 0 else x + half + 8
            rect = pygame.Rect(bx, y, w if span else half, h)
            btn = UIButton(label, rect, cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        add("Draw Walls",  lambda: self.ctl.set_mode(MODE_DRAW_WALL),   0, togglable=True, store_as="btn_draw")
        add("Erase Walls", lambda: self.ctl.set_mode(MODE_ERASE_WALL),  1, togglable=True, store_as="btn_erase"); y += h + gap
        add("Place Start", lambda: self.ctl.set_mode(MODE_PLACE_START), 0, togglable=True, store_as="btn_start")
        add("Place Goal",  lambda: self.ctl.set_mode(MODE_PLACE_GOAL),  1, togglable=True, store_as="btn_goal"); y += h + gap + 6

        add("A* (Manhattan)", lambda: self.ctl.set_heuristic(True),  0, togglable=True, store_as="btn_algo_a")
        add("Dijkstra",       lambda: self.ctl.set_heuristic(False), 1, togglable=True, store_as="btn_algo_d"); y += h + gap + 6

        add("Run",   self.ctl.run,   0, togglable=True, store_as="btn_run")
        add("Step",  self._step_once, 1, store_as="btn_step"); y += h + gap
        add("Pause", self.ctl.pause, 0, store_as="btn_pause")
        add("Reset", self.ctl.reset, 1); y += h + gap + 6

        add("Random Maze", self.ctl.randomize, 0, store_as="btn_random")
        add("Clear All",   self.ctl.clear_all, 1, store_as="btn_clear"); y += h + gap
        add("Speed -", lambda: self.ctl.bump_speed(+SPEED_STEP_MS), 0)
        add("Speed +", lambda: self.ctl.bump_speed(-SPEED_STEP_MS), 1)

        self._refresh_active_states()

    def _refresh_active_states(self):
        mode = self.editor.mode
        busy = self.ctl.busy
        running = self.ctl.state == STATE_RUNNING
        for attr, m in (("btn_draw", MODE_DRAW_WALL), ("btn_erase", MODE_ERASE_WALL),
                        ("btn_start", MODE_PLACE_START), ("btn_goal", MODE_PLACE_GOAL)):
            btn = getattr(self, attr)
            btn.active = mode == m
            btn.enabled = not busy
        self.btn_algo_a.active = self.ctl.heuristic_enabled
        self.btn_algo_d.active = not self.ctl.heuristic_enabled
        self.btn_algo_a.enabled = self.btn_algo_d.enabled = not busy
        self.btn_run.active = running
        self.btn_run.enabled = not running
        self.btn_step.enabled = not running
        self.btn_pause.enabled = running
        self.btn_random.enabled = self.btn_clear.enabled = not busy

    # ---------- drawing ----------
    def _draw(self):
        self._draw_backdrop()
        self._draw_grid()
        self._draw_panel()
        for b in self._buttons:
            b.draw(self.screen, self.font_small)
        pygame.display.flip()

    def _draw_backdrop(self):
        w, h = self.screen.get_size()
        top = (24, 26, 32); bot = (36, 40, 48)
        for y in range(h):
            t = y / max(1, h-1)
            c = tuple(int(top[i] + (bot[i]-top[i]) * t) for i in range(3))
            pygame.draw.line(self.screen, c, (0, y), (w, y))

    def _fill_alpha(self, p: Position, rgba):
        cs = self.cell_size
        s = pygame.Surface((cs, cs), pygame.SRCALPHA); s.fill(rgba)
        self.screen.blit(s, self._cell_rect(p).topleft)

    def _draw_grid(self):
        ed = self.editor
        for row in range(ed.rows):
            for col in range(ed.cols):
                rect = self._cell_rect((row, col))
                pygame.draw.rect(self.screen, WALL_DARK if ed.is_wall((row, col)) else EMPTY_GRAY, rect)
                pygame.draw.rect(self.screen, BLACK, rect, 1)

        # overlays: closed, then open, then path; start/goal stay on top
        marks = (ed.start, ed.goal)
        for p in self.ctl.closed_set:
            if p not in marks: self._fill_alpha(p, CLOSED_MAG_A)
        for p in self.ctl.open_list:
            if p not in marks: self._fill_alpha(p, OPEN_CYAN_A)

        if len(self.ctl.path) >= 2:
            pts = [self._cell_rect(p).center for p in self.ctl.path]
            pygame.draw.lines(self.screen, PATH_GOLD, False, pts, max(3, self.cell_size // 4))

        self._draw_badge(ed.start, START_GREEN, "S")
        self._draw_badge(ed.goal, GOAL_RED, "G")

    def _draw_badge(self, p: Position, color, label: str):
        rect = self._cell_rect(p)
        pygame.draw.circle(self.screen, color, rect.center, max(4, self.cell_size // 2 - 2))
        txt = self.font_small.render(label, True, WHITE)
        self.screen.blit(txt, txt.get_rect(center=rect.center))

    def _draw_panel(self):
        rb = self._right_band
        card = pygame.Surface((rb.width - 20, 310), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        hi = pygame.Surface((card.get_width(), 24), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=14)
        card.blit(hi, (0,0))
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 4

        m = self.ctl.metrics
        line("A* Maze Solver", big=True, color=ACCENT_GOLD)
        line(f"Algo: {self.ctl.algo_name}   State: {self.ctl.state}")
        line(f"Mode: {MODE_LABELS[self.editor.mode]}")
        line(f"Speed: {self.ctl.interval_ms} ms/step")
        line(f"Expanded: {m.get('expanded', 0)}   Open: {m.get('frontier_size', 0)}")
        if self.ctl.state == STATE_DONE:
            line(f"Path Len: {m.get('path_len', 0)}", color=PATH_GOLD)
        elif self.ctl.state == STATE_NO_PATH:
            line(self.ctl.message or "", color=TEXT_WARN)
        else:
            line("")

        # legend, two columns
        y_legend = y0 + 6
        for i, (label, color) in enumerate(LEGEND):
            lx = x0 + (i % 2) * 150
            ly = y_legend + (i // 2) * 26
            sw = pygame.Rect(lx, ly, 18, 18)
            pygame.draw.rect(self.screen, EMPTY_GRAY, sw)
            s = pygame.Surface(sw.size, pygame.SRCALPHA); s.fill(color)
            self.screen.blit(s, sw.topleft)
            pygame.draw.rect(self.screen, BLACK, sw, 1)
            txt = self.font_small.render(label, True, TEXT_LIGHT)
            self.screen.blit(txt, (lx + 26, ly + 2))


# ---------- main ----------
def build_controller(settings: Settings) -> PlaybackController:
    editor = None
    if settings.map_path:
        try:
            editor = load_map(settings.map_path)
        except (OSError, ValueError) as ex:
            print(f"Failed to load map {settings.map_path}: {ex}")
    if editor is None:
        editor = MazeEditor(settings.rows, settings.cols)
    return PlaybackController(
        editor,
        heuristic_enabled=settings.heuristic_enabled,
        interval_ms=settings.interval_ms,
        wall_density=settings.wall_density,
    )


def main():
    Viewer(build_controller(resolve_settings())).run()


if __name__ == "__main__":
    main()

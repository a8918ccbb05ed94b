"""
Curses frontend for the board engine.

Controls:
  Arrow keys / WASD : move cursor
  Q, Space or Enter : reveal cell (chord on a revealed number)
  E or F            : flag/unflag
  R                 : restart
  Esc or Ctrl-Q     : quit
"""
import curses
import logging
import time
from dataclasses import dataclass
from typing import Dict, Optional

from engine import Board, BoardConfig, CellState, GameStatus

from .render import BOARD_TOP, frame_rows

logger = logging.getLogger(__name__)

# getch timeout driving the clock redraw
TICK_MS = 250
ESCAPE = 27
CTRL_Q = 17

KEY_ACTIONS: Dict[int, str] = {
    curses.KEY_LEFT: "left",
    ord("a"): "left",
    ord("A"): "left",
    curses.KEY_RIGHT: "right",
    ord("d"): "right",
    ord("D"): "right",
    curses.KEY_UP: "up",
    ord("w"): "up",
    ord("W"): "up",
    curses.KEY_DOWN: "down",
    ord("s"): "down",
    ord("S"): "down",
    ord("q"): "reveal",
    ord(" "): "reveal",
    10: "reveal",
    13: "reveal",
    curses.KEY_ENTER: "reveal",
    ord("e"): "flag",
    ord("f"): "flag",
    ord("F"): "flag",
    ord("r"): "restart",
    ord("R"): "restart",
    ESCAPE: "quit",
    CTRL_Q: "quit",
}

MOVES = {
    "left": (-1, 0),
    "right": (1, 0),
    "up": (0, -1),
    "down": (0, 1),
}


def action_for_key(key: int) -> Optional[str]:
    """Map a curses key code to an action name."""
    return KEY_ACTIONS.get(key)


# ============================================================================
# Game Session
# ============================================================================

@dataclass
class Cursor:
    """Cursor position, always kept on the grid."""

    x: int = 0
    y: int = 0

    def move(self, dx: int, dy: int, width: int, height: int) -> None:
        self.x = min(max(self.x + dx, 0), width - 1)
        self.y = min(max(self.y + dy, 0), height - 1)


class GameSession:
    """
    Turns actions into board calls and keeps the clock.

    Knows nothing about curses, so key handling can be driven directly.
    The clock starts with the first move and stops when the game ends.
    """

    def __init__(
        self,
        config: BoardConfig,
        seed: Optional[int] = None,
        clock=time.monotonic,
    ) -> None:
        self.config = config
        self.board = Board(config, seed=seed)
        self.cursor = Cursor()
        self._clock = clock
        self._started_at: Optional[float] = None
        self._stopped_at: Optional[float] = None

    @property
    def elapsed(self) -> int:
        """Whole seconds since the first move."""
        if self._started_at is None:
            return 0
        end = self._stopped_at if self._stopped_at is not None else self._clock()
        return int(end - self._started_at)

    def handle(self, action: str) -> bool:
        """
        Apply an action.

        Returns:
            False when the session should end, True otherwise.
        """
        if action == "quit":
            return False
        if action == "restart":
            self.restart()
            return True
        if action in MOVES:
            dx, dy = MOVES[action]
            self.cursor.move(dx, dy, self.board.width, self.board.height)
            return True
        if not self.board.is_playing:
            # Any other game key leaves a finished game
            return False

        if self._started_at is None:
            self._started_at = self._clock()
        if action == "reveal":
            self._reveal()
        elif action == "flag":
            self.board.toggle_flag(self.cursor.x, self.cursor.y)

        if not self.board.is_playing:
            self._stopped_at = self._clock()
        return True

    def _reveal(self) -> None:
        x, y = self.cursor.x, self.cursor.y
        if self.board.cell_view(x, y).state == CellState.REVEALED:
            self.board.chord(x, y)
        else:
            self.board.reveal(x, y)

    def restart(self) -> None:
        logger.debug("Restarting %dx%d game", self.config.width,
                     self.config.height)
        self.board.reset()
        self._started_at = None
        self._stopped_at = None


# ============================================================================
# Curses Layer
# ============================================================================

STYLE_COLORS = {
    "mine": curses.COLOR_RED,
    "detonated": curses.COLOR_RED,
    "flag": curses.COLOR_GREEN,
    "flag_wrong": curses.COLOR_YELLOW,
    "number": curses.COLOR_CYAN,
    "counter": curses.COLOR_RED,
    "banner_won": curses.COLOR_GREEN,
    "banner_lost": curses.COLOR_RED,
}


class TerminalApp:
    """Paints a GameSession with curses and feeds it key presses."""

    def __init__(self, stdscr, session: GameSession) -> None:
        self.stdscr = stdscr
        self.session = session
        self._attrs: Dict[str, int] = {}

    def _init_colors(self) -> None:
        """Initialize curses color pairs."""
        if curses.has_colors():
            curses.start_color()
            curses.use_default_colors()
        for pair, (style, color) in enumerate(STYLE_COLORS.items(), start=1):
            attr = curses.A_BOLD
            if curses.has_colors():
                curses.init_pair(pair, color, -1)
                attr |= curses.color_pair(pair)
            self._attrs[style] = attr
        self._attrs["detonated"] |= curses.A_REVERSE

    def draw(self) -> None:
        board = self.session.board
        self.stdscr.erase()
        for row_index, row in enumerate(frame_rows(board, self.session.elapsed)):
            column = 0
            for text, style in row:
                self._addstr(row_index, column, text,
                             self._attrs.get(style, curses.A_NORMAL))
                column += len(text)

        if board.is_playing:
            cursor = self.session.cursor
            try:
                self.stdscr.move(BOARD_TOP + cursor.y, cursor.x + 1)
            except curses.error:
                # Cursor is off screen after the terminal shrank
                pass
        self.stdscr.refresh()

    def _addstr(self, y: int, x: int, text: str, attr: int) -> None:
        try:
            self.stdscr.addstr(y, x, text, attr)
        except curses.error:
            # Writing the bottom-right cell raises after a successful write
            pass

    def run(self) -> GameStatus:
        """Main loop; returns the status of the last game."""
        curses.curs_set(1)
        self.stdscr.keypad(True)
        self.stdscr.timeout(TICK_MS)
        self._init_colors()

        while True:
            self.draw()
            key = self.stdscr.getch()
            if key == -1:
                continue
            action = action_for_key(key)
            if action is None:
                continue
            if not self.session.handle(action):
                break

        logger.info("Session ended: %s", self.session.board.status.name)
        return self.session.board.status


def run(config: BoardConfig, seed: Optional[int] = None) -> GameSession:
    """Play in the current terminal until the player quits."""
    session = GameSession(config, seed=seed)
    curses.wrapper(lambda stdscr: TerminalApp(stdscr, session).run())
    return session

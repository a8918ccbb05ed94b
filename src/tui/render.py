"""
Text layout of a board for the terminal frontend.

Everything here is pure: functions take a Board and return rows of
(text, style) segments, so the curses layer only has to paint them and
tests can check the output as plain strings.
"""
from typing import List, Optional, Tuple

from engine import Board, CellState, CellView, GameStatus


# ============================================================================
# Constants
# ============================================================================

HIDDEN = "░"
FLAG = "Þ"
MINE = "Ø"
EMPTY = " "

# Width taken by the two counter boxes in the header
SPACING = 12
COUNTER_MAX = 999

# Row of the first board line inside the frame
BOARD_TOP = 3

Segment = Tuple[str, str]


# ============================================================================
# Cells
# ============================================================================

def cell_glyph(view: CellView, detonated: bool = False) -> Segment:
    """
    Glyph and style name for one cell.

    Styles: ``hidden``, ``plain``, ``number``, ``flag``, ``flag_wrong``,
    ``mine`` and ``detonated``.
    """
    if view.state == CellState.FLAGGED:
        return FLAG, "flag_wrong" if view.misflagged else "flag"
    if view.state == CellState.HIDDEN:
        if view.is_mine:
            return MINE, "mine"
        return HIDDEN, "hidden"
    if view.is_mine:
        return MINE, "detonated" if detonated else "mine"
    if view.adjacent_mines:
        return str(view.adjacent_mines), "number"
    return EMPTY, "plain"


def counter(value: int) -> str:
    """Three-digit counter clamped to 0..999."""
    return f"{min(max(value, 0), COUNTER_MAX):03}"


def banner(status: GameStatus) -> Optional[str]:
    """End-of-game message, or None while playing."""
    if status == GameStatus.WON:
        return "YOU WON"
    if status == GameStatus.LOST:
        return "YOU LOST"
    return None


# ============================================================================
# Frame
# ============================================================================

def header_rows(board: Board, elapsed: int = 0) -> List[List[Segment]]:
    """
    Counter boxes above the board: mines left on the left, clock on the right.

    The end-of-game banner sits between the boxes. On boards too narrow
    for that gap it is laid over the middle of the whole row instead.
    """
    pad = max(board.width - SPACING, 0)
    message = banner(board.status) or ""
    fits = len(message) <= pad
    middle = message.center(pad) if fits else " " * pad
    style = "banner_won" if board.is_won else "banner_lost"

    counters = [
        ("║ ", "border"),
        (counter(board.remaining_mines), "counter"),
        (" ║", "border"),
        (middle, style if message else "plain"),
        ("║ ", "border"),
        (counter(elapsed), "counter"),
        (" ║", "border"),
    ]
    if message and not fits:
        counters = _overlay(counters, message, style)

    return [
        [("╔═════╦" + "═" * pad + "╦═════╗", "border")],
        counters,
        [("╠═════╩" + "═" * pad + "╩═════╣", "border")],
    ]


def grid_rows(board: Board) -> List[List[Segment]]:
    """Board rows framed by vertical borders."""
    rows = []
    for y in range(board.height):
        row = [("║", "border")]
        for x in range(board.width):
            view = board.cell_view(x, y)
            row.append(cell_glyph(view, board.detonated == (x, y)))
        row.append(("║", "border"))
        rows.append(row)
    return rows


def frame_rows(board: Board, elapsed: int = 0) -> List[List[Segment]]:
    """Header, board and footer as styled rows."""
    footer = [("╚" + "═" * board.width + "╝", "border")]
    return header_rows(board, elapsed) + grid_rows(board) + [footer]


def board_lines(board: Board) -> List[str]:
    """Board rows as plain strings."""
    return [_join(row) for row in grid_rows(board)]


def render_text(board: Board, elapsed: int = 0) -> str:
    """Whole frame as a plain string."""
    return "\n".join(_join(row) for row in frame_rows(board, elapsed))


def _join(row: List[Segment]) -> str:
    return "".join(text for text, _ in row)


def _overlay(row: List[Segment], text: str, style: str) -> List[Segment]:
    """Write text centred over a row, keeping the segments either side."""
    line = _join(row)
    start = max((len(line) - len(text)) // 2, 0)
    end = start + len(text)
    segments = []
    position = 0
    placed = False
    for segment_text, segment_style in row:
        segment_end = position + len(segment_text)
        if position < start:
            segments.append(
                (segment_text[:start - position], segment_style)
            )
        if not placed and segment_end > start:
            segments.append((text, style))
            placed = True
        if segment_end > end:
            segments.append(
                (segment_text[max(end - position, 0):], segment_style)
            )
        position = segment_end
    return [segment for segment in segments if segment[0]]

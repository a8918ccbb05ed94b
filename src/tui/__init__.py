"""
Terminal frontend for the board engine.

Provides the text layout of a board and the curses game loop.
"""
from .render import board_lines, cell_glyph, frame_rows, render_text
from .app import Cursor, GameSession, TerminalApp, action_for_key, run

__all__ = [
    "board_lines",
    "cell_glyph",
    "frame_rows",
    "render_text",
    "Cursor",
    "GameSession",
    "TerminalApp",
    "action_for_key",
    "run",
]

"""
Coordinate notation for checkers.

Squares are written as a column letter A-H followed by a row digit 1-8,
where the digit is the zero-based row plus one:

    (5, 0) <-> "A6"      (0, 7) <-> "H1"

Moves are written "A6 to B5". "a6-b5" and "a6 b5" are accepted as well.
"""

from __future__ import annotations
import re

from .bitboard import is_valid_sq
from .board import Position
from .moves import Move

_MOVE_PATTERN = re.compile(r'^\s*([a-z]\d)\s*(?:to|-|\s)\s*([a-z]\d)\s*$', re.IGNORECASE)


def square_to_text(pos: Position) -> str:
    """Convert (row, col) to notation (e.g., 'A6')."""
    row, col = pos
    return chr(ord('A') + col) + str(row + 1)


def text_to_square(s: str) -> Position:
    """Parse notation like 'A6' into (row, col)."""
    s = s.strip()
    if len(s) != 2 or not s[1].isdigit():
        raise ValueError(f"Invalid square: {s!r}")
    col = ord(s[0].upper()) - ord('A')
    row = int(s[1]) - 1
    if not is_valid_sq(row, col):
        raise ValueError(f"Square off the board: {s!r}")
    return row, col


def parse_move_text(s: str) -> tuple[Position, Position]:
    """Parse 'A6 to B5' into ((5, 0), (4, 1))."""
    match = _MOVE_PATTERN.match(s)
    if match is None:
        raise ValueError(f"Invalid move format: {s!r}")
    src = text_to_square(match.group(1))
    dst = text_to_square(match.group(2))
    if src == dst:
        raise ValueError(f"Start and end square are the same: {s!r}")
    return src, dst


def move_to_text(move: Move) -> str:
    """Convert a move to notation (e.g., 'A6 to B5')."""
    return f"{square_to_text(move.src)} to {square_to_text(move.dst)}"

"""
Bitboard utilities for 8x8 checkers.

Board layout (8 rows x 8 cols = 64 squares, fits in a 64-bit int):

    A  B  C  D  E  F  G  H
  1 |  0  1  2  3  4  5  6  7
  2 |  8  9 10 11 12 13 14 15
  3 | 16 17 18 19 20 21 22 23
  4 | 24 25 26 27 28 29 30 31
  5 | 32 33 34 35 36 37 38 39
  6 | 40 41 42 43 44 45 46 47
  7 | 48 49 50 51 52 53 54 55
  8 | 56 57 58 59 60 61 62 63

Square index = row * 8 + col (row 0 is printed as "1", col 0 as "A").
Only dark squares, where (row + col) is odd, are playable.
Black starts on rows 0-2 and moves toward row 7; Red starts on rows 5-7
and moves toward row 0.
"""

from typing import Iterator, Optional

# Board dimensions
ROWS = 8
COLS = 8
NUM_SQUARES = ROWS * COLS  # 64


def sq_to_rowcol(sq: int) -> tuple[int, int]:
    """Convert square index to (row, col)."""
    return sq // COLS, sq % COLS


def rowcol_to_sq(row: int, col: int) -> int:
    """Convert (row, col) to square index."""
    return row * COLS + col


def is_valid_sq(row: int, col: int) -> bool:
    """Check if (row, col) is on the board."""
    return 0 <= row < ROWS and 0 <= col < COLS


def is_playable(row: int, col: int) -> bool:
    """Check if (row, col) is a dark square on the board."""
    return is_valid_sq(row, col) and (row + col) % 2 == 1


def bit(sq: int) -> int:
    """Return bitboard with single bit set at square."""
    return 1 << sq


def popcount(bb: int) -> int:
    """Count number of set bits."""
    return bin(bb).count('1')


def lsb(bb: int) -> int:
    """Return index of least significant bit (or -1 if empty)."""
    if bb == 0:
        return -1
    return (bb & -bb).bit_length() - 1


def iter_bits(bb: int) -> Iterator[int]:
    """Iterate over indices of set bits."""
    while bb:
        sq = lsb(bb)
        yield sq
        bb &= bb - 1  # Clear LSB


def row_mask(row: int) -> int:
    """Bitboard of every square on a row."""
    return ((1 << COLS) - 1) << (row * COLS)


def _rows_mask(rows: range) -> int:
    mask = 0
    for row in rows:
        mask |= row_mask(row)
    return mask


# Dark (playable) squares
DARK_MASK = 0
for _sq in range(NUM_SQUARES):
    if is_playable(*sq_to_rowcol(_sq)):
        DARK_MASK |= bit(_sq)
del _sq

# Starting positions: three rows of dark squares per side
BLACK_START = _rows_mask(range(0, 3)) & DARK_MASK
RED_START = _rows_mask(range(5, 8)) & DARK_MASK

# Diagonal directions (row_delta, col_delta)
DIAGONALS = [(-1, -1), (-1, 1), (1, -1), (1, 1)]

# Precomputed tables (initialized at module load), indexed [sq][dir].
# None marks a step that would leave the board.
STEP_TARGETS: list[list[Optional[int]]] = [[None] * 4 for _ in range(NUM_SQUARES)]
JUMP_TARGETS: list[list[Optional[int]]] = [[None] * 4 for _ in range(NUM_SQUARES)]


def _init_diagonal_tables() -> None:
    """Precompute one- and two-step diagonal targets for all squares."""
    for sq in range(NUM_SQUARES):
        row, col = sq_to_rowcol(sq)
        for dir_idx, (dr, dc) in enumerate(DIAGONALS):
            if is_valid_sq(row + dr, col + dc):
                STEP_TARGETS[sq][dir_idx] = rowcol_to_sq(row + dr, col + dc)
            if is_valid_sq(row + 2 * dr, col + 2 * dc):
                JUMP_TARGETS[sq][dir_idx] = rowcol_to_sq(row + 2 * dr, col + 2 * dc)


# Initialize lookup tables at module load
_init_diagonal_tables()

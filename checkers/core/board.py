"""
Piece and board model for checkers.

The board is stored as bitboards: one occupancy mask per player plus a
single mask of kings. Pieces are plain values derived from those bits, so
a piece's position is always the square that holds it.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Iterator, Optional

from .bitboard import (
    BLACK_START, RED_START, ROWS, COLS,
    bit, popcount, iter_bits, sq_to_rowcol, rowcol_to_sq
)

# (row, col), zero-based
Position = tuple[int, int]


class Player(IntEnum):
    """The two sides. Values index per-player tuples."""
    RED = 0
    BLACK = 1

    @property
    def opponent(self) -> Player:
        return Player.BLACK if self is Player.RED else Player.RED

    @property
    def forward(self) -> int:
        """Row delta of a man's forward move."""
        return -1 if self is Player.RED else 1

    @property
    def promotion_row(self) -> int:
        """Opponent's back rank, where this side's men are kinged."""
        return 0 if self is Player.RED else ROWS - 1


class Rank(Enum):
    MAN = "man"
    KING = "king"


@dataclass(frozen=True)
class Piece:
    """A checker. Owner is fixed; rank only ever goes from man to king."""
    owner: Player
    rank: Rank = Rank.MAN

    @property
    def is_king(self) -> bool:
        return self.rank is Rank.KING

    @property
    def symbol(self) -> str:
        """Display symbol: R/B for men, K/k for red/black kings."""
        if self.is_king:
            return 'K' if self.owner is Player.RED else 'k'
        return 'R' if self.owner is Player.RED else 'B'


@dataclass
class Board:
    """
    8x8 checkers board.

    Attributes:
        pieces: Tuple of (red, black) occupancy bitboards
        kings: Bitboard of squares holding a king (either side)

    Callers are responsible for passing on-board, playable positions.
    """
    pieces: tuple[int, int] = (0, 0)
    kings: int = 0

    @classmethod
    def standard(cls) -> Board:
        """Board with 12 men per side on the dark squares of the first three rows."""
        return cls(pieces=(RED_START, BLACK_START), kings=0)

    @property
    def occupied(self) -> int:
        """Bitboard of all occupied squares."""
        return self.pieces[0] | self.pieces[1]

    def get(self, pos: Position) -> Optional[Piece]:
        """Return the piece at pos, or None if the square is empty."""
        b = bit(rowcol_to_sq(*pos))
        for player in Player:
            if self.pieces[player] & b:
                return Piece(player, Rank.KING if self.kings & b else Rank.MAN)
        return None

    def is_empty(self, pos: Position) -> bool:
        return not self.occupied & bit(rowcol_to_sq(*pos))

    def place(self, pos: Position, piece: Piece) -> None:
        """Put a piece on an empty square."""
        b = bit(rowcol_to_sq(*pos))
        if self.occupied & b:
            raise ValueError(f"Square {pos} is already occupied")

        new_pieces = list(self.pieces)
        new_pieces[piece.owner] |= b
        self.pieces = tuple(new_pieces)
        if piece.is_king:
            self.kings |= b

    def remove(self, pos: Position) -> Optional[Piece]:
        """Clear a square, returning whatever was on it."""
        piece = self.get(pos)
        if piece is None:
            return None

        b = bit(rowcol_to_sq(*pos))
        new_pieces = list(self.pieces)
        new_pieces[piece.owner] &= ~b
        self.pieces = tuple(new_pieces)
        self.kings &= ~b
        return piece

    def move(self, src: Position, dst: Position) -> None:
        """Relocate the occupant of src to dst, leaving src empty."""
        piece = self.remove(src)
        if piece is None:
            raise ValueError(f"No piece to move at {src}")
        self.place(dst, piece)

    def promote(self, pos: Position) -> None:
        """Turn the man at pos into a king."""
        self.kings |= bit(rowcol_to_sq(*pos))

    def count(self, player: Player) -> int:
        """Number of pieces a player has left."""
        return popcount(self.pieces[player])

    def pieces_of(self, player: Player) -> Iterator[tuple[Position, Piece]]:
        """Iterate (position, piece) over a player's pieces."""
        for sq in iter_bits(self.pieces[player]):
            rank = Rank.KING if self.kings & bit(sq) else Rank.MAN
            yield sq_to_rowcol(sq), Piece(player, rank)

    def copy(self) -> Board:
        return Board(pieces=self.pieces, kings=self.kings)

    def __repr__(self) -> str:
        lines = ["    " + " ".join("ABCDEFGH")]
        for row in range(ROWS):
            rank = f"{row + 1} |"
            for col in range(COLS):
                piece = self.get((row, col))
                if piece is not None:
                    rank += " " + piece.symbol
                elif (row + col) % 2:
                    rank += " ."
                else:
                    rank += "  "
            lines.append(rank)
        return "\n".join(lines)

"""
Move generation and validation for checkers.

Simple moves and jumps are checked per square and enumerated per side.
Everything here is a pure function of the board; nothing is mutated.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from .bitboard import (
    STEP_TARGETS, JUMP_TARGETS,
    is_playable, iter_bits, sq_to_rowcol, rowcol_to_sq
)
from .board import Board, Player, Position


class MoveKind(Enum):
    SIMPLE = "simple"
    JUMP = "jump"


class RejectionReason(Enum):
    """Why a submitted move was refused. None of these are fatal."""
    INVALID_SQUARE = "InvalidSquare"
    NO_PIECE_AT_ORIGIN = "NoPieceAtOrigin"
    NOT_YOUR_PIECE = "NotYourPiece"
    DESTINATION_OCCUPIED = "DestinationOccupied"
    NOT_DIAGONAL_ADJACENT_OR_JUMP_DISTANCE = "NotDiagonalAdjacentOrJumpDistance"
    WRONG_DIRECTION_FOR_MAN = "WrongDirectionForMan"
    JUMP_REQUIRES_CAPTURABLE_PIECE = "JumpRequiresCapturablePiece"
    JUMP_MANDATORY_BUT_SIMPLE_ATTEMPTED = "JumpMandatoryButSimpleAttempted"
    MUST_CONTINUE_JUMPING_FROM_SAME_PIECE = "MustContinueJumpingFromSamePiece"
    GAME_OVER = "GameOver"


@dataclass(frozen=True)
class Move:
    """A relocation from src to dst. Kind follows from the row distance."""
    src: Position
    dst: Position

    @property
    def kind(self) -> MoveKind:
        return MoveKind.JUMP if abs(self.dst[0] - self.src[0]) == 2 else MoveKind.SIMPLE

    @property
    def is_jump(self) -> bool:
        return self.kind is MoveKind.JUMP

    @property
    def captured(self) -> Optional[Position]:
        """Square of the jumped piece (midpoint), or None for a simple move."""
        if not self.is_jump:
            return None
        return (self.src[0] + self.dst[0]) // 2, (self.src[1] + self.dst[1]) // 2


def is_on_playable_square(pos: Position) -> bool:
    """Check a position is a well-formed (row, col) pair on a dark square."""
    try:
        row, col = pos
    except (TypeError, ValueError):
        return False
    if not isinstance(row, int) or not isinstance(col, int):
        return False
    return is_playable(row, col)


class MoveGenerator:
    """Checks and generates simple moves and jumps on a board."""

    @staticmethod
    def _check_direction(board: Board, src: Position, dst: Position) -> Optional[RejectionReason]:
        piece = board.get(src)
        if piece.is_king:
            return None
        dr = dst[0] - src[0]
        if (dr > 0) != (piece.owner.forward > 0):
            return RejectionReason.WRONG_DIRECTION_FOR_MAN
        return None

    @staticmethod
    def check_simple_move(board: Board, src: Position, dst: Position) -> Optional[RejectionReason]:
        """
        Return why src->dst is not a legal simple move, or None if it is.

        Keyed by the piece found at src, not by whose turn it is.
        """
        if board.get(src) is None:
            return RejectionReason.NO_PIECE_AT_ORIGIN
        if not board.is_empty(dst):
            return RejectionReason.DESTINATION_OCCUPIED

        # Must move exactly one diagonal square
        if abs(dst[0] - src[0]) != 1 or abs(dst[1] - src[1]) != 1:
            return RejectionReason.NOT_DIAGONAL_ADJACENT_OR_JUMP_DISTANCE

        return MoveGenerator._check_direction(board, src, dst)

    @staticmethod
    def check_jump(board: Board, src: Position, dst: Position) -> Optional[RejectionReason]:
        """Return why src->dst is not a legal jump, or None if it is."""
        piece = board.get(src)
        if piece is None:
            return RejectionReason.NO_PIECE_AT_ORIGIN
        if not board.is_empty(dst):
            return RejectionReason.DESTINATION_OCCUPIED

        # Must move exactly two diagonal squares
        if abs(dst[0] - src[0]) != 2 or abs(dst[1] - src[1]) != 2:
            return RejectionReason.NOT_DIAGONAL_ADJACENT_OR_JUMP_DISTANCE

        # Need an opponent's piece on the midpoint to jump over
        jumped = board.get(Move(src, dst).captured)
        if jumped is None or jumped.owner == piece.owner:
            return RejectionReason.JUMP_REQUIRES_CAPTURABLE_PIECE

        return MoveGenerator._check_direction(board, src, dst)

    @staticmethod
    def is_simple_move_legal(board: Board, src: Position, dst: Position) -> bool:
        return MoveGenerator.check_simple_move(board, src, dst) is None

    @staticmethod
    def is_jump_legal(board: Board, src: Position, dst: Position) -> bool:
        return MoveGenerator.check_jump(board, src, dst) is None

    @staticmethod
    def _targets(board: Board, pos: Position, table: list, legal) -> Iterator[Move]:
        for target in table[rowcol_to_sq(*pos)]:
            if target is None:
                continue
            dst = sq_to_rowcol(target)
            if legal(board, pos, dst):
                yield Move(pos, dst)

    @staticmethod
    def jumps_from(board: Board, pos: Position) -> list[Move]:
        """All legal jumps for the piece at pos (empty if the square is empty)."""
        if board.get(pos) is None:
            return []
        return list(MoveGenerator._targets(board, pos, JUMP_TARGETS, MoveGenerator.is_jump_legal))

    @staticmethod
    def simple_moves_from(board: Board, pos: Position) -> list[Move]:
        """All legal simple moves for the piece at pos."""
        if board.get(pos) is None:
            return []
        return list(MoveGenerator._targets(board, pos, STEP_TARGETS, MoveGenerator.is_simple_move_legal))

    @staticmethod
    def all_jumps(board: Board, player: Player) -> list[Move]:
        """Every legal jump for every piece a player owns."""
        moves = []
        for sq in iter_bits(board.pieces[player]):
            moves.extend(MoveGenerator.jumps_from(board, sq_to_rowcol(sq)))
        return moves

    @staticmethod
    def all_simple_moves(board: Board, player: Player) -> list[Move]:
        """Every legal simple move for every piece a player owns."""
        moves = []
        for sq in iter_bits(board.pieces[player]):
            moves.extend(MoveGenerator.simple_moves_from(board, sq_to_rowcol(sq)))
        return moves

    @staticmethod
    def has_any_move(board: Board, player: Player) -> bool:
        """Check if a player can make any move at all."""
        return bool(MoveGenerator.all_jumps(board, player) or
                    MoveGenerator.all_simple_moves(board, player))


# Convenience functions
def jumps_from(board: Board, pos: Position) -> list[Move]:
    return MoveGenerator.jumps_from(board, pos)


def all_jumps(board: Board, player: Player) -> list[Move]:
    return MoveGenerator.all_jumps(board, player)


def all_simple_moves(board: Board, player: Player) -> list[Move]:
    return MoveGenerator.all_simple_moves(board, player)

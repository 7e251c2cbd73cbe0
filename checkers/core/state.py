"""
Game state and turn controller for checkers.

A GameState bundles the board, the side to move, the winner and the
multi-jump sub-state. submit_move() never mutates its input: a rejected
move hands back the same state, an accepted one a fresh successor.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional
import numpy as np

from .bitboard import ROWS, COLS, iter_bits, sq_to_rowcol
from .board import Board, Player, Position
from .moves import Move, MoveGenerator, RejectionReason, is_on_playable_square

logger = logging.getLogger("checkers.rules")


class TurnPhase(Enum):
    AWAITING_MOVE = "awaiting_move"
    CONTINUING_JUMP = "continuing_jump"
    TERMINAL = "terminal"


@dataclass
class GameState:
    """
    Represents the complete state of a checkers game.

    Attributes:
        board: Piece placement
        current_player: Side to move
        winner: Set once the game is over, None before
        continue_from: Square of the piece that must keep jumping this turn
        jump_forced: Whether the side to move had a jump when its turn began
        ply: Number of completed turns
    """
    board: Board = field(default_factory=Board.standard)
    current_player: Player = Player.RED
    winner: Optional[Player] = None
    continue_from: Optional[Position] = None
    jump_forced: Optional[bool] = None
    ply: int = 0

    def __post_init__(self) -> None:
        if self.jump_forced is None:
            self.jump_forced = (self.continue_from is not None or
                                bool(MoveGenerator.all_jumps(self.board, self.current_player)))
        if self.winner is None and self.continue_from is None:
            self.winner = self._find_winner()

    @classmethod
    def new_game(cls) -> GameState:
        """Create a new game in the starting position."""
        return cls()

    @property
    def phase(self) -> TurnPhase:
        if self.winner is not None:
            return TurnPhase.TERMINAL
        if self.continue_from is not None:
            return TurnPhase.CONTINUING_JUMP
        return TurnPhase.AWAITING_MOVE

    def is_terminal(self) -> bool:
        """Check if game is over."""
        return self.winner is not None

    def _find_winner(self) -> Optional[Player]:
        """Winner at a turn boundary: elimination first, then no legal move."""
        if self.board.count(Player.RED) == 0:
            return Player.BLACK
        if self.board.count(Player.BLACK) == 0:
            return Player.RED

        # The side to move loses if it cannot move at all
        if not MoveGenerator.has_any_move(self.board, self.current_player):
            return self.current_player.opponent

        return None

    def legal_jumps(self) -> list[Move]:
        """Jumps the side to move may submit right now."""
        if self.is_terminal():
            return []
        if self.continue_from is not None:
            return MoveGenerator.jumps_from(self.board, self.continue_from)
        return MoveGenerator.all_jumps(self.board, self.current_player)

    def legal_simple_moves(self) -> list[Move]:
        """Simple moves the side to move may submit right now (none while a jump is forced)."""
        if self.is_terminal() or self.jump_forced:
            return []
        return MoveGenerator.all_simple_moves(self.board, self.current_player)

    def copy(self) -> GameState:
        return GameState(
            board=self.board.copy(),
            current_player=self.current_player,
            winner=self.winner,
            continue_from=self.continue_from,
            jump_forced=self.jump_forced,
            ply=self.ply
        )

    def check_move(self, src: Position, dst: Position) -> Optional[RejectionReason]:
        """Return why src->dst cannot be played now, or None if it can."""
        if self.is_terminal():
            return RejectionReason.GAME_OVER
        if not is_on_playable_square(src) or not is_on_playable_square(dst):
            return RejectionReason.INVALID_SQUARE

        src, dst = tuple(src), tuple(dst)

        # Mid multi-jump only the jumping piece may move
        if self.continue_from is not None and src != self.continue_from:
            return RejectionReason.MUST_CONTINUE_JUMPING_FROM_SAME_PIECE

        piece = self.board.get(src)
        if piece is None:
            return RejectionReason.NO_PIECE_AT_ORIGIN
        if piece.owner != self.current_player:
            return RejectionReason.NOT_YOUR_PIECE
        if src == dst:
            return RejectionReason.NOT_DIAGONAL_ADJACENT_OR_JUMP_DISTANCE

        move = Move(src, dst)
        if move.is_jump:
            return MoveGenerator.check_jump(self.board, src, dst)
        if self.jump_forced:
            return RejectionReason.JUMP_MANDATORY_BUT_SIMPLE_ATTEMPTED
        return MoveGenerator.check_simple_move(self.board, src, dst)

    def apply_move(self, move: Move) -> MoveResult:
        """
        Play an already validated move. Modifies state in-place.

        Moves the piece, removes a jumped piece, kings a man that reaches the
        far row, then either keeps the turn for a further jump or passes it
        and checks for a winner.
        """
        player = self.current_player
        self.board.move(move.src, move.dst)

        captured = move.captured
        if captured is not None:
            self.board.remove(captured)

        promoted = False
        if not self.board.get(move.dst).is_king and move.dst[0] == player.promotion_row:
            self.board.promote(move.dst)
            promoted = True

        turn_continues = move.is_jump and bool(MoveGenerator.jumps_from(self.board, move.dst))
        if turn_continues:
            self.continue_from = move.dst
            self.jump_forced = True
        else:
            self.continue_from = None
            self.current_player = player.opponent
            self.ply += 1
            self.jump_forced = bool(MoveGenerator.all_jumps(self.board, self.current_player))
            self.winner = self._find_winner()

        logger.info(f"{player.name} played {move.src}->{move.dst}"
                    + (f", captured {captured}" if captured is not None else "")
                    + (", promoted" if promoted else ""))
        if turn_continues:
            logger.info(f"{player.name} must continue jumping from {move.dst}")
        if self.winner is not None:
            logger.info(f"Game over after {self.ply} turns, {self.winner.name} wins")

        return MoveResult(
            accepted=True,
            state=self,
            move=move,
            captured=captured,
            promoted=promoted,
            turn_continues=turn_continues
        )

    def submit_move(self, src: Position, dst: Position) -> MoveResult:
        """Validate and play src->dst on a copy of this state."""
        reason = self.check_move(src, dst)
        if reason is not None:
            logger.debug(f"Rejected {self.current_player.name} move {src}->{dst}: {reason.value}")
            return MoveResult(accepted=False, state=self, reason=reason)

        return self.copy().apply_move(Move(tuple(src), tuple(dst)))

    def to_tensor(self) -> np.ndarray:
        """
        Convert state to an array from the side to move's perspective.

        Returns (5, 8, 8) float32 array:
          - Plane 0: Current player's men
          - Plane 1: Current player's kings
          - Plane 2: Opponent's men
          - Plane 3: Opponent's kings
          - Plane 4: Current player indicator (all 1s if Red, all 0s if Black)
        """
        planes = np.zeros((5, ROWS, COLS), dtype=np.float32)

        p = self.current_player
        kings = self.board.kings
        for plane, player in ((0, p), (2, p.opponent)):
            for sq in iter_bits(self.board.pieces[player] & ~kings):
                row, col = sq_to_rowcol(sq)
                planes[plane, row, col] = 1.0
            for sq in iter_bits(self.board.pieces[player] & kings):
                row, col = sq_to_rowcol(sq)
                planes[plane + 1, row, col] = 1.0

        if p == Player.RED:
            planes[4, :, :] = 1.0

        return planes

    def __repr__(self) -> str:
        """Pretty print the board."""
        lines = [repr(self.board), ""]
        if self.winner is not None:
            lines.append(f"{self.winner.name} wins")
        elif self.continue_from is not None:
            lines.append(f"{self.current_player.name} must continue jumping from {self.continue_from}")
        else:
            lines.append(f"{self.current_player.name} to move (ply {self.ply})")
        return "\n".join(lines)


@dataclass
class MoveResult:
    """Outcome of submit_move(). On rejection, state is the untouched input."""
    accepted: bool
    state: GameState
    reason: Optional[RejectionReason] = None
    move: Optional[Move] = None
    captured: Optional[Position] = None
    promoted: bool = False
    turn_continues: bool = False

    @property
    def winner(self) -> Optional[Player]:
        return self.state.winner


# Convenience functions
def new_game() -> GameState:
    """Standard starting position, Red to move."""
    return GameState.new_game()


def legal_jumps(state: GameState) -> list[Move]:
    return state.legal_jumps()


def legal_simple_moves(state: GameState) -> list[Move]:
    return state.legal_simple_moves()


def submit_move(state: GameState, src: Position, dst: Position) -> MoveResult:
    """Validate and play a move; never mutates state."""
    return state.submit_move(src, dst)


def winner(state: GameState) -> Optional[Player]:
    return state.winner

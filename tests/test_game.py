"""Tests for game state and the turn controller."""

import logging
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from checkers.core.board import Board, Piece, Player, Rank
from checkers.core.moves import Move, RejectionReason, all_jumps
from checkers.core.state import (
    GameState, TurnPhase, new_game, legal_jumps, legal_simple_moves, submit_move, winner
)


def make_state(red=(), black=(), red_kings=(), black_kings=(), to_move=Player.RED) -> GameState:
    board = Board()
    for pos in red:
        board.place(pos, Piece(Player.RED))
    for pos in black:
        board.place(pos, Piece(Player.BLACK))
    for pos in red_kings:
        board.place(pos, Piece(Player.RED, Rank.KING))
    for pos in black_kings:
        board.place(pos, Piece(Player.BLACK, Rank.KING))
    return GameState(board=board, current_player=to_move)


class TestNewGame:
    def test_new_game(self):
        state = new_game()
        assert state.current_player == Player.RED
        assert state.ply == 0
        assert state.phase is TurnPhase.AWAITING_MOVE
        assert not state.is_terminal()
        assert winner(state) is None
        assert not state.jump_forced

    def test_initial_pieces(self):
        state = new_game()
        assert state.board == Board.standard()
        assert state.board.count(Player.RED) == 12
        assert state.board.count(Player.BLACK) == 12
        assert state.board.kings == 0

    def test_initial_legal_moves(self):
        state = new_game()
        assert legal_jumps(state) == []
        assert len(legal_simple_moves(state)) == 7

    def test_copy(self):
        state = new_game()
        copy = state.copy()
        assert copy == state
        assert copy.board is not state.board

    def test_to_tensor(self):
        tensor = new_game().to_tensor()
        assert tensor.shape == (5, 8, 8)
        assert tensor[0].sum() == 12  # Red men
        assert tensor[1].sum() == 0   # Red kings
        assert tensor[2].sum() == 12  # Black men
        assert tensor[4].all()        # Red to move

    def test_to_tensor_black_perspective(self):
        state = make_state(red=[(5, 0)], black=[(2, 1)], black_kings=[(3, 4)], to_move=Player.BLACK)
        tensor = state.to_tensor()
        assert tensor[0, 2, 1] == 1.0
        assert tensor[1, 3, 4] == 1.0
        assert tensor[2, 5, 0] == 1.0
        assert not tensor[4].any()


class TestRejections:
    @pytest.mark.parametrize("src,dst,reason", [
        ((2, 1), (3, 0), RejectionReason.NOT_YOUR_PIECE),
        ((4, 1), (3, 2), RejectionReason.NO_PIECE_AT_ORIGIN),
        ((6, 1), (5, 0), RejectionReason.DESTINATION_OCCUPIED),
        ((5, 0), (4, 3), RejectionReason.NOT_DIAGONAL_ADJACENT_OR_JUMP_DISTANCE),
        ((5, 2), (3, 2), RejectionReason.NOT_DIAGONAL_ADJACENT_OR_JUMP_DISTANCE),
        ((5, 0), (5, 0), RejectionReason.NOT_DIAGONAL_ADJACENT_OR_JUMP_DISTANCE),
        ((5, 0), (3, 2), RejectionReason.JUMP_REQUIRES_CAPTURABLE_PIECE),
        ((6, 1), (4, 3), RejectionReason.JUMP_REQUIRES_CAPTURABLE_PIECE),
        ((5, 0), (4, 0), RejectionReason.INVALID_SQUARE),
        ((8, 1), (7, 0), RejectionReason.INVALID_SQUARE),
        ((5, 0), (-1, 4), RejectionReason.INVALID_SQUARE),
    ])
    def test_rejected_from_start(self, src, dst, reason):
        state = new_game()
        before = state.copy()

        result = submit_move(state, src, dst)

        assert not result.accepted
        assert result.reason == reason
        assert result.state is state
        assert state == before
        assert result.move is None
        assert not result.turn_continues

    def test_wrong_direction_for_man(self):
        state = make_state(red=[(4, 3)], black=[(0, 1)])
        result = submit_move(state, (4, 3), (5, 4))
        assert result.reason == RejectionReason.WRONG_DIRECTION_FOR_MAN
        assert result.state is state

    def test_rejection_is_logged(self, caplog):
        caplog.set_level(logging.DEBUG, logger="checkers.rules")
        submit_move(new_game(), (2, 1), (3, 0))
        assert "NotYourPiece" in caplog.text


class TestSimpleMoves:
    def test_turn_passes(self):
        state = new_game()
        result = submit_move(state, (5, 0), (4, 1))

        assert result.accepted
        assert result.move == Move((5, 0), (4, 1))
        assert result.captured is None
        assert not result.promoted
        assert not result.turn_continues
        assert result.state.current_player == Player.BLACK
        assert result.state.ply == 1

    def test_input_state_untouched(self):
        state = new_game()
        before = state.copy()
        result = submit_move(state, (5, 0), (4, 1))
        assert state == before
        assert result.state is not state
        assert state.board.get((5, 0)) == Piece(Player.RED)

    def test_accepts_lists(self):
        result = submit_move(new_game(), [5, 0], [4, 1])
        assert result.accepted
        assert result.state.board.get((4, 1)) == Piece(Player.RED)

    def test_opening_exchange(self):
        state = new_game()

        result = submit_move(state, (5, 0), (4, 1))
        assert result.accepted
        state = result.state
        assert state.current_player == Player.BLACK

        result = submit_move(state, (2, 1), (3, 2))
        assert result.accepted
        state = result.state
        assert state.current_player == Player.RED

        assert legal_jumps(state) == []
        assert all_jumps(state.board, Player.RED) == []
        assert winner(state) is None


class TestCapture:
    def test_capture_removes_only_jumped_piece(self):
        state = make_state(red=[(5, 2)], black=[(4, 3), (0, 1)])

        result = submit_move(state, (5, 2), (3, 4))

        assert result.accepted
        assert result.captured == (4, 3)
        assert not result.turn_continues
        assert result.state.board == make_state(red=[(3, 4)], black=[(0, 1)]).board
        assert result.state.current_player == Player.BLACK
        assert result.state.board.count(Player.BLACK) == 1

    def test_capture_leaves_input_untouched(self):
        state = make_state(red=[(5, 2)], black=[(4, 3), (0, 1)])
        submit_move(state, (5, 2), (3, 4))
        assert state.board.get((4, 3)) == Piece(Player.BLACK)
        assert state.board.get((5, 2)) == Piece(Player.RED)

    def test_capture_is_logged(self, caplog):
        caplog.set_level(logging.INFO, logger="checkers.rules")
        state = make_state(red=[(5, 2)], black=[(4, 3), (0, 1)])
        submit_move(state, (5, 2), (3, 4))
        assert "captured (4, 3)" in caplog.text


class TestMandatoryJump:
    def setup_method(self):
        self.state = make_state(red=[(5, 2), (5, 6)], black=[(4, 3), (0, 1)])

    def test_jump_forced(self):
        assert self.state.jump_forced
        assert legal_jumps(self.state) == [Move((5, 2), (3, 4))]
        assert legal_simple_moves(self.state) == []

    @pytest.mark.parametrize("src,dst", [
        ((5, 6), (4, 7)),   # Otherwise fine
        ((5, 6), (4, 5)),
        ((5, 6), (4, 1)),   # Not even adjacent
        ((5, 2), (4, 1)),   # The piece that could jump
    ])
    def test_simple_move_rejected(self, src, dst):
        result = submit_move(self.state, src, dst)
        assert result.reason == RejectionReason.JUMP_MANDATORY_BUT_SIMPLE_ATTEMPTED
        assert result.state is self.state

    def test_illegal_jump_rejected(self):
        result = submit_move(self.state, (5, 6), (3, 4))
        assert result.reason == RejectionReason.JUMP_REQUIRES_CAPTURABLE_PIECE

    def test_legal_jump_accepted(self):
        result = submit_move(self.state, (5, 2), (3, 4))
        assert result.accepted
        assert result.captured == (4, 3)


class TestMultiJump:
    def setup_method(self):
        self.state = make_state(red=[(6, 1), (7, 6)], black=[(5, 2), (3, 4)])

    def test_turn_continues(self):
        result = submit_move(self.state, (6, 1), (4, 3))

        assert result.accepted
        assert result.captured == (5, 2)
        assert result.turn_continues
        state = result.state
        assert state.current_player == Player.RED
        assert state.phase is TurnPhase.CONTINUING_JUMP
        assert state.continue_from == (4, 3)
        assert state.ply == 0
        assert legal_jumps(state) == [Move((4, 3), (2, 5))]
        assert legal_simple_moves(state) == []

    def test_other_piece_rejected(self):
        state = submit_move(self.state, (6, 1), (4, 3)).state
        result = submit_move(state, (7, 6), (6, 7))
        assert result.reason == RejectionReason.MUST_CONTINUE_JUMPING_FROM_SAME_PIECE
        assert result.state is state

    def test_empty_origin_rejected_as_wrong_piece(self):
        state = submit_move(self.state, (6, 1), (4, 3)).state
        result = submit_move(state, (6, 1), (4, 3))
        assert result.reason == RejectionReason.MUST_CONTINUE_JUMPING_FROM_SAME_PIECE

    def test_simple_move_with_jumping_piece_rejected(self):
        state = submit_move(self.state, (6, 1), (4, 3)).state
        result = submit_move(state, (4, 3), (3, 2))
        assert result.reason == RejectionReason.JUMP_MANDATORY_BUT_SIMPLE_ATTEMPTED

    def test_chain_completes(self):
        state = submit_move(self.state, (6, 1), (4, 3)).state
        result = submit_move(state, (4, 3), (2, 5))

        assert result.accepted
        assert result.captured == (3, 4)
        assert not result.turn_continues
        assert result.state.continue_from is None
        assert result.state.ply == 1
        # Black has nothing left
        assert result.winner == Player.RED


class TestPromotion:
    def test_red_promoted_on_row_0(self):
        state = make_state(red=[(1, 2)], black=[(3, 6)])
        result = submit_move(state, (1, 2), (0, 1))

        assert result.accepted
        assert result.promoted
        assert result.state.board.get((0, 1)) == Piece(Player.RED, Rank.KING)
        assert result.state.current_player == Player.BLACK

    def test_promoted_once_then_moves_backward(self):
        state = make_state(red=[(1, 2)], black=[(3, 6)])
        state = submit_move(state, (1, 2), (0, 1)).state
        state = submit_move(state, (3, 6), (4, 7)).state

        result = submit_move(state, (0, 1), (1, 2))
        assert result.accepted
        assert not result.promoted
        assert result.state.board.get((1, 2)).is_king

    def test_black_promoted_on_row_7(self):
        state = make_state(red=[(2, 5)], black=[(6, 1)], to_move=Player.BLACK)
        result = submit_move(state, (6, 1), (7, 0))
        assert result.promoted
        assert result.state.board.get((7, 0)) == Piece(Player.BLACK, Rank.KING)

    def test_promoted_by_jump(self):
        state = make_state(red=[(2, 3)], black=[(1, 4), (5, 0)])
        result = submit_move(state, (2, 3), (0, 5))

        assert result.accepted
        assert result.captured == (1, 4)
        assert result.promoted
        assert not result.turn_continues

    def test_new_king_continues_jumping_backward(self):
        state = make_state(red=[(2, 1)], black=[(1, 2), (1, 4)])

        result = submit_move(state, (2, 1), (0, 3))
        assert result.promoted
        assert result.turn_continues
        assert legal_jumps(result.state) == [Move((0, 3), (2, 5))]

        result = submit_move(result.state, (0, 3), (2, 5))
        assert result.accepted
        assert not result.promoted
        assert result.winner == Player.RED

    def test_promotion_is_logged(self, caplog):
        caplog.set_level(logging.INFO, logger="checkers.rules")
        state = make_state(red=[(1, 2)], black=[(3, 6)])
        submit_move(state, (1, 2), (0, 1))
        assert "promoted" in caplog.text

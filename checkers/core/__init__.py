"""Core game logic: bitboards, board model, move generation and turn control."""

from .bitboard import *
from .board import Board, Piece, Player, Position, Rank
from .moves import Move, MoveGenerator, MoveKind, RejectionReason
from .state import (
    GameState, MoveResult, TurnPhase,
    new_game, legal_jumps, legal_simple_moves, submit_move, winner
)

#!/usr/bin/env python3
"""
Terminal-based checkers client.

Two players share the keyboard (hot seat). Red moves first from the bottom.
"""

from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from checkers.core.bitboard import ROWS, COLS
from checkers.core.board import Player
from checkers.core.moves import Move, RejectionReason
from checkers.core.notation import move_to_text, parse_move_text, square_to_text
from checkers.core.state import (
    GameState, MoveResult, new_game, legal_jumps, legal_simple_moves, submit_move
)

# ANSI color codes
GREEN = '\033[92m'
BOLD = '\033[1m'
RESET = '\033[0m'

REJECTION_MESSAGES = {
    RejectionReason.INVALID_SQUARE: "Both squares must be dark squares on the board.",
    RejectionReason.NO_PIECE_AT_ORIGIN: "Invalid selection. That square is empty.",
    RejectionReason.NOT_YOUR_PIECE: "Invalid selection. That piece doesn't belong to you.",
    RejectionReason.DESTINATION_OCCUPIED: "The destination square is occupied.",
    RejectionReason.NOT_DIAGONAL_ADJACENT_OR_JUMP_DISTANCE:
        "Pieces move one diagonal square, or jump two.",
    RejectionReason.WRONG_DIRECTION_FOR_MAN: "Only kings may move backwards.",
    RejectionReason.JUMP_REQUIRES_CAPTURABLE_PIECE:
        "Invalid jump. You must capture an opponent's piece.",
    RejectionReason.JUMP_MANDATORY_BUT_SIMPLE_ATTEMPTED:
        "A jump is available and MUST be taken. Please enter a valid jump move.",
    RejectionReason.MUST_CONTINUE_JUMPING_FROM_SAME_PIECE:
        "You must keep jumping with the same piece.",
    RejectionReason.GAME_OVER: "The game is already over.",
}

PLAYER_LABELS = {
    Player.RED: "RED (R/K)",
    Player.BLACK: "BLACK (B/k)",
}


def print_board(state: GameState, highlight_moves: list[Move] | None = None,
                color: bool = True) -> None:
    """Print the board with optional move highlighting.

    Symbols:
        R = Red man, K = Red king
        B = Black man, k = Black king
        . = empty dark square
    """
    targets = {m.dst for m in highlight_moves or []}

    print()
    print("    " + " ".join("ABCDEFGH"))
    print("  +" + "-" * (COLS * 2 + 1) + "+")
    for row in range(ROWS):
        line = f"{row + 1} |"
        for col in range(COLS):
            piece = state.board.get((row, col))
            if piece is not None:
                sym = piece.symbol
            elif (row + col) % 2:
                sym = '.'
            else:
                sym = ' '

            if color and (row, col) in targets:
                line += f" {GREEN}{sym}{RESET}"  # Green = move target
            elif color and (row, col) == state.continue_from:
                line += f" {BOLD}{sym}{RESET}"  # Bold = piece that must keep jumping
            else:
                line += f" {sym}"
        line += " |"
        print(line)
    print("  +" + "-" * (COLS * 2 + 1) + "+")
    print()


def show_legal_moves(state: GameState) -> None:
    """Display all legal moves."""
    jumps = legal_jumps(state)
    simple = legal_simple_moves(state)
    if not jumps and not simple:
        print("No legal moves!")
        return

    if jumps:
        print("Jumps:", ", ".join(move_to_text(m) for m in jumps))
    if simple:
        print("Moves:", ", ".join(move_to_text(m) for m in simple))


def parse_user_move(input_str: str):
    """Parse user input into a command name or a (src, dst) pair.

    Returns None (after printing why) if the input can't be understood.
    """
    input_str = input_str.strip().lower()

    # Check for special commands
    if input_str in ['q', 'quit', 'exit']:
        return 'quit'
    if input_str in ['h', 'help', '?']:
        return 'help'
    if input_str in ['m', 'moves']:
        return 'show_moves'

    try:
        return parse_move_text(input_str)
    except (ValueError, IndexError):
        print("Invalid input format or coordinates. Try again (e.g., A6 to B5).")
        return None


def describe_result(result: MoveResult) -> list[str]:
    """Messages announcing what an accepted move did."""
    messages = []
    player = result.state.board.get(result.move.dst).owner
    if result.captured is not None:
        messages.append(f"-> PIECE CAPTURED at {square_to_text(result.captured)}!")
    if result.promoted:
        messages.append(f"-> {player.name} piece KINGED at {square_to_text(result.move.dst)}!")
    if result.turn_continues:
        messages.append(f"-> MULTI-JUMP AVAILABLE! Player {player.name} must continue "
                        f"jumping from {square_to_text(result.move.dst)}.")
    return messages


def play_game(state: GameState | None = None, hints: bool = False,
              color: bool = True) -> GameState:
    """Play a hot-seat game until someone wins or a player quits."""
    state = state or new_game()

    print("===========================================")
    print("            WELCOME TO CHECKERS            ")
    print("===========================================")
    print("Red (R) starts at the bottom. Black (B) at the top.")
    print("Input format: [COLROW] to [COLROW] (e.g., A6 to B5)")
    print("Commands: 'm' for moves, 'h' help, 'q' quit")

    while not state.is_terminal():
        jumps = legal_jumps(state)
        print_board(state, jumps + legal_simple_moves(state) if hints else None, color=color)

        print(f"--- Player {PLAYER_LABELS[state.current_player]}'s Turn ---")
        if jumps:
            print("!!! JUMP IS MANDATORY !!! You must take a jump. !!!")
        if hints:
            show_legal_moves(state)

        while True:
            try:
                user_input = input("Enter move (e.g., A6 to B5) or 'exit': ")
            except EOFError:
                return state

            command = parse_user_move(user_input)

            if command == 'quit':
                print("Game exited by player.")
                return state
            elif command == 'help':
                print("Enter moves like 'A6 to B5'. Jumps capture the piece in between.")
                print("'m' to see legal moves, 'q' to quit")
            elif command == 'show_moves':
                show_legal_moves(state)
            elif command is not None:
                src, dst = command
                result = submit_move(state, src, dst)
                if not result.accepted:
                    print(REJECTION_MESSAGES[result.reason])
                    continue

                state = result.state
                for message in describe_result(result):
                    print(message)
                break

    # Game over
    print_board(state, color=color)
    print("*******************************************")
    print(f"        PLAYER {state.winner.name} WINS!         ")
    print("*******************************************")
    return state


def main():
    parser = argparse.ArgumentParser(description='Checkers Terminal Client')
    parser.add_argument('--hints', action='store_true',
                        help='Highlight and list legal moves every turn')
    parser.add_argument('--no-color', action='store_true', help='Disable ANSI colors')
    parser.add_argument('--log-level', type=str, default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Engine log level')

    args = parser.parse_args()

    logging.basicConfig(level=args.log_level,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    play_game(hints=args.hints, color=not args.no_color)


if __name__ == '__main__':
    main()

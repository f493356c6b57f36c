"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from callchess.core import Board, Color, MoveGenerator, apply_move

    board = Board.initial()
    for move in MoveGenerator(board).generate_moves(Color.WHITE):
        print(move)
"""

from callchess.core.board import Board
from callchess.core.enums import Color, GameResult, PieceType
from callchess.core.move import Move
from callchess.core.move_generator import MoveGenerator
from callchess.core.piece import Piece
from callchess.core.rules import (
    IllegalMoveError,
    MoveOutcome,
    apply_move,
    is_path_clear,
    is_valid_move,
)
from callchess.core.types import (
    BOARD_SIZE,
    Coord,
    cell_name,
    is_on_board,
    parse_cell,
)

__all__ = [
    # Enums
    "Color",
    "GameResult",
    "PieceType",
    # Types / helpers
    "BOARD_SIZE",
    "Coord",
    "cell_name",
    "is_on_board",
    "parse_cell",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "MoveOutcome",
    "Piece",
    # Rules
    "IllegalMoveError",
    "apply_move",
    "is_path_clear",
    "is_valid_move",
]

"""Legal move enumeration for one side."""

from __future__ import annotations

from typing import TYPE_CHECKING

from callchess.core.move import Move
from callchess.core.rules import is_valid_move
from callchess.core.types import Coord, all_cells

if TYPE_CHECKING:
    from callchess.core.board import Board
    from callchess.core.enums import Color

_ALL_CELLS: tuple[Coord, ...] = tuple(all_cells())


class MoveGenerator:
    """Brute-force generator: every source piece against every cell.

    At most 16 pieces x 64 destinations, so no lookup tables are needed.
    Moves come out ordered by source then destination, both row-major.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    def legal_destinations(self, row: int, col: int) -> list[Coord]:
        """Cells the piece on (*row*, *col*) may move to; empty if no piece."""
        piece = self._board[row, col]
        if piece is None:
            return []
        return [
            (to_row, to_col)
            for to_row, to_col in _ALL_CELLS
            if is_valid_move(self._board, row, col, to_row, to_col, piece)
        ]

    def generate_moves(self, color: Color) -> list[Move]:
        moves: list[Move] = []
        for source in self._board.all_pieces(color):
            for target in self.legal_destinations(*source):
                moves.append(Move.between(source, target))
        return moves

    def is_capture(self, move: Move) -> bool:
        return self._board[move.target] is not None

    def generate_captures(self, color: Color) -> list[Move]:
        return [m for m in self.generate_moves(color) if self.is_capture(m)]

    def has_legal_moves(self, color: Color) -> bool:
        return any(
            self.legal_destinations(*source) for source in self._board.all_pieces(color)
        )

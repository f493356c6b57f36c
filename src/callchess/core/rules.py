"""Movement rules of the casual in-call chess variant.

The ruleset is deliberately simplified: there is no check, checkmate,
castling, en passant or draw detection, and pawns always promote to a
queen. Capturing the enemy king is the only way to win.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from callchess.core.enums import PieceType
from callchess.core.piece import Piece
from callchess.core.types import require_on_board

if TYPE_CHECKING:
    from callchess.core.board import Board
    from callchess.core.move import Move


class IllegalMoveError(ValueError):
    """Raised when a move that breaks the movement rules is applied."""


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    """Result of :func:`apply_move`."""

    board: Board
    captured: Piece | None = None
    promoted: bool = False

    @property
    def captured_king(self) -> bool:
        """Whether the move ended the game by taking the enemy king."""
        return self.captured is not None and self.captured.is_king


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def is_path_clear(
    board: Board, from_row: int, from_col: int, to_row: int, to_col: int
) -> bool:
    """Whether every cell strictly between source and destination is empty.

    The caller guarantees a straight or diagonal line.
    """
    dr = _sign(to_row - from_row)
    dc = _sign(to_col - from_col)
    row, col = from_row + dr, from_col + dc
    while (row, col) != (to_row, to_col):
        if board[row, col] is not None:
            return False
        row += dr
        col += dc
    return True


def _is_valid_pawn_move(
    board: Board,
    from_row: int,
    from_col: int,
    to_row: int,
    to_col: int,
    piece: Piece,
    target: Piece | None,
) -> bool:
    direction = piece.color.forward
    dr = to_row - from_row
    dc = to_col - from_col

    if dc == 0 and target is None:
        if dr == direction:
            return True
        if (
            from_row == piece.color.pawn_row
            and dr == 2 * direction
            and board[from_row + direction, from_col] is None
        ):
            return True
        return False

    # Diagonal steps are captures only.
    return abs(dc) == 1 and dr == direction and target is not None


def is_valid_move(
    board: Board,
    from_row: int,
    from_col: int,
    to_row: int,
    to_col: int,
    piece: Piece | None,
) -> bool:
    """Whether *piece* standing on the source may move to the destination.

    Pure with respect to *board*. Off-board coordinates raise ``ValueError``.
    """
    require_on_board(from_row, from_col)
    require_on_board(to_row, to_col)
    if piece is None:
        return False
    if (from_row, from_col) == (to_row, to_col):
        return False

    target = board[to_row, to_col]
    if target is not None and target.color == piece.color:
        return False

    adr = abs(to_row - from_row)
    adc = abs(to_col - from_col)
    ptype = piece.piece_type

    if ptype == PieceType.PAWN:
        return _is_valid_pawn_move(
            board, from_row, from_col, to_row, to_col, piece, target
        )
    if ptype == PieceType.ROOK:
        return (adr == 0 or adc == 0) and is_path_clear(
            board, from_row, from_col, to_row, to_col
        )
    if ptype == PieceType.BISHOP:
        return adr == adc and is_path_clear(board, from_row, from_col, to_row, to_col)
    if ptype == PieceType.QUEEN:
        return (adr == 0 or adc == 0 or adr == adc) and is_path_clear(
            board, from_row, from_col, to_row, to_col
        )
    if ptype == PieceType.KNIGHT:
        return (adr, adc) in ((2, 1), (1, 2))
    if ptype == PieceType.KING:
        return adr <= 1 and adc <= 1
    return False


def apply_move(board: Board, move: Move) -> MoveOutcome:
    """Apply *move* to a copy of *board*.

    Raises :class:`IllegalMoveError` if the source is empty or the move is
    not valid for the piece on it; *board* itself is never modified.
    """
    piece = board[move.source]
    if piece is None:
        raise IllegalMoveError(f"No piece on the source cell of {move}")
    if not is_valid_move(
        board, move.from_row, move.from_col, move.to_row, move.to_col, piece
    ):
        raise IllegalMoveError(
            f"Illegal move {move} for {piece.color} {piece.piece_type.name.lower()}"
        )

    new_board = board.copy()
    captured = new_board[move.target]

    promoted = (
        piece.piece_type == PieceType.PAWN
        and move.to_row == piece.color.promotion_row
    )
    new_board[move.target] = Piece(piece.color, PieceType.QUEEN) if promoted else piece
    new_board[move.source] = None
    return MoveOutcome(board=new_board, captured=captured, promoted=promoted)

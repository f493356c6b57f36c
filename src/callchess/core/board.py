"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from callchess.core.enums import Color, PieceType
from callchess.core.piece import Piece
from callchess.core.types import BOARD_SIZE, Coord, require_on_board

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)
_EMPTY_CHAR = "."


class Board:
    """64-cell grid indexed by ``(row, col)``.

    A board handed to the game layer is treated as an immutable snapshot:
    :func:`callchess.core.rules.apply_move` copies it and returns a new one.
    Item assignment is only meant for building positions.
    """

    __slots__ = ("_cells",)

    def __init__(self) -> None:
        self._cells: list[Piece | None] = [None] * (BOARD_SIZE * BOARD_SIZE)

    @staticmethod
    def _index(coord: Coord) -> int:
        row, col = coord
        require_on_board(row, col)
        return row * BOARD_SIZE + col

    # -- Element access -----------------------------------------------------

    def __getitem__(self, coord: Coord) -> Piece | None:
        return self._cells[self._index(coord)]

    def __setitem__(self, coord: Coord, piece: Piece | None) -> None:
        self._cells[self._index(coord)] = piece

    def is_empty(self, row: int, col: int) -> bool:
        return self[row, col] is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Coord, Piece]]:
        """Occupied cells in row-major order."""
        for idx, piece in enumerate(self._cells):
            if piece is not None:
                yield divmod(idx, BOARD_SIZE), piece

    def all_pieces(self, color: Color) -> list[Coord]:
        """All cells occupied by *color*."""
        return [coord for coord, piece in self.occupied() if piece.color == color]

    def pieces(self, color: Color, piece_type: PieceType) -> list[Coord]:
        """Cells occupied by *color*'s *piece_type*."""
        target = Piece(color, piece_type)
        return [coord for coord, piece in self.occupied() if piece == target]

    def king_square(self, color: Color) -> Coord | None:
        """Cell of *color*'s king, or ``None`` once it has been captured."""
        kings = self.pieces(color, PieceType.KING)
        return kings[0] if kings else None

    def piece_count(self, color: Color | None = None) -> int:
        if color is None:
            return sum(1 for _ in self.occupied())
        return len(self.all_pieces(color))

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._cells = self._cells.copy()
        return b

    def clear(self) -> None:
        self._cells = [None] * (BOARD_SIZE * BOARD_SIZE)

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting arrangement, Black at the top."""
        b = cls()
        for col, pt in enumerate(_BACK_RANK):
            b[0, col] = Piece(Color.BLACK, pt)
            b[1, col] = Piece(Color.BLACK, PieceType.PAWN)
            b[6, col] = Piece(Color.WHITE, PieceType.PAWN)
            b[7, col] = Piece(Color.WHITE, pt)
        return b

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> Board:
        """Build a board from eight strings, row 0 first.

        Each string holds eight piece letters (upper case = White) or ``.`` for an empty cell,
        e.g. ``"rnbqkbnr"``. Whitespace inside a row is ignored.
        """
        if len(rows) != BOARD_SIZE:
            raise ValueError(f"Expected {BOARD_SIZE} rows, got {len(rows)}")
        b = cls()
        for row, text in enumerate(rows):
            chars = "".join(text.split())
            if len(chars) != BOARD_SIZE:
                raise ValueError(f"Row {row} must have {BOARD_SIZE} cells: {text!r}")
            for col, char in enumerate(chars):
                if char != _EMPTY_CHAR:
                    b[row, col] = Piece.from_letter(char)
        return b

    def to_rows(self) -> list[str]:
        """Inverse of :meth:`from_rows`."""
        rows: list[str] = []
        for row in range(BOARD_SIZE):
            start = row * BOARD_SIZE
            cells = self._cells[start : start + BOARD_SIZE]
            rows.append("".join(str(p) if p else _EMPTY_CHAR for p in cells))
        return rows

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __repr__(self) -> str:
        rows = [
            f"{BOARD_SIZE - row} {' '.join(text)}"
            for row, text in enumerate(self.to_rows())
        ]
        rows.append("  a b c d e f g h")
        return "\n".join(rows)

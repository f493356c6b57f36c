"""Piece value object and its two renderings: board letter and icon."""

from __future__ import annotations

from dataclasses import dataclass

from callchess.core.enums import Color, PieceType

# Letters used by the text board layout; White is upper case.
_LETTERS: dict[PieceType, str] = {
    PieceType.KING: "k",
    PieceType.QUEEN: "q",
    PieceType.ROOK: "r",
    PieceType.BISHOP: "b",
    PieceType.KNIGHT: "n",
    PieceType.PAWN: "p",
}
_TYPES_BY_LETTER = {letter: pt for pt, letter in _LETTERS.items()}

# Icons drawn on the cells and in the capture tallies.
_ICONS: dict[Color, dict[PieceType, str]] = {
    Color.WHITE: {
        PieceType.KING: "♔",
        PieceType.QUEEN: "♕",
        PieceType.ROOK: "♖",
        PieceType.BISHOP: "♗",
        PieceType.KNIGHT: "♘",
        PieceType.PAWN: "♙",
    },
    Color.BLACK: {
        PieceType.KING: "♚",
        PieceType.QUEEN: "♛",
        PieceType.ROOK: "♜",
        PieceType.BISHOP: "♝",
        PieceType.KNIGHT: "♞",
        PieceType.PAWN: "♟",
    },
}


@dataclass(frozen=True, slots=True)
class Piece:
    """A colored piece. It has no identity beyond color, type and its cell."""

    color: Color
    piece_type: PieceType

    @classmethod
    def from_letter(cls, letter: str) -> Piece:
        """Parse a text-layout letter: ``"N"`` is a white knight, ``"q"`` a black queen."""
        piece_type = _TYPES_BY_LETTER.get(letter.lower()) if len(letter) == 1 else None
        if piece_type is None:
            raise ValueError(f"Invalid piece letter: {letter!r}")
        color = Color.WHITE if letter.isupper() else Color.BLACK
        return cls(color, piece_type)

    @property
    def letter(self) -> str:
        letter = _LETTERS[self.piece_type]
        return letter.upper() if self.color == Color.WHITE else letter

    @property
    def icon(self) -> str:
        return _ICONS[self.color][self.piece_type]

    @property
    def is_king(self) -> bool:
        return self.piece_type == PieceType.KING

    def __str__(self) -> str:
        return self.letter

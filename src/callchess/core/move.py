"""Move value object (long-algebraic representation)."""

from __future__ import annotations

from dataclasses import dataclass

from callchess.core.types import Coord, cell_name, parse_cell


@dataclass(frozen=True, slots=True)
class Move:
    """Transient source/destination pair, built to be tested or applied."""

    from_row: int
    from_col: int
    to_row: int
    to_col: int

    @classmethod
    def between(cls, source: Coord, target: Coord) -> Move:
        return cls(source[0], source[1], target[0], target[1])

    @classmethod
    def from_uci(cls, text: str) -> Move:
        """Parse long-algebraic text, e.g. 'e2e4'."""
        if len(text) != 4:
            raise ValueError(f"Invalid move text: {text!r}")
        return cls.between(parse_cell(text[:2]), parse_cell(text[2:]))

    @property
    def source(self) -> Coord:
        return self.from_row, self.from_col

    @property
    def target(self) -> Coord:
        return self.to_row, self.to_col

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        return cell_name(*self.source) + cell_name(*self.target)

    @property
    def uci(self) -> str:
        return str(self)

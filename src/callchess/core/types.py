"""Coordinate type alias and grid helpers.

Board layout follows the on-screen grid, top to bottom::

    (0, 0) = a8 ... (0, 7) = h8     <- Black's back rank
    ...
    (7, 0) = a1 ... (7, 7) = h1     <- White's back rank
"""

from __future__ import annotations

from typing import TypeAlias

Coord: TypeAlias = tuple[int, int]  # (row, col), each 0–7

BOARD_SIZE = 8
_FILES = "abcdefgh"
_RANKS = "12345678"


def is_on_board(row: int, col: int) -> bool:
    """Whether (*row*, *col*) lies inside the 8x8 grid."""
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def require_on_board(row: int, col: int) -> None:
    """Raise ``ValueError`` for a coordinate outside the grid."""
    if not is_on_board(row, col):
        raise ValueError(f"Coordinate off the board: ({row}, {col})")


def cell_name(row: int, col: int) -> str:
    """Human-readable name, e.g. (7, 0) → 'a1', (0, 7) → 'h8'."""
    require_on_board(row, col)
    return _FILES[col] + str(BOARD_SIZE - row)


def parse_cell(name: str) -> Coord:
    """Parse cell name, e.g. 'e2' → (6, 4)."""
    if len(name) != 2 or name[0] not in _FILES or name[1] not in _RANKS:
        raise ValueError(f"Invalid cell name: {name!r}")
    return BOARD_SIZE - int(name[1]), _FILES.index(name[0])


def all_cells() -> list[Coord]:
    """Every coordinate in row-major order."""
    return [(row, col) for row in range(BOARD_SIZE) for col in range(BOARD_SIZE)]

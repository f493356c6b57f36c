"""Shared engine models and protocol."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from callchess.core.board import Board
    from callchess.core.enums import Color
    from callchess.core.move import Move


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Move picked by an engine plus the candidate counts it picked from."""

    best_move: Move | None
    candidates: int = 0
    captures: int = 0
    is_capture: bool = False


class IEngine(Protocol):
    """Protocol for move-selection engines used by the game layer."""

    def search(self, board: Board, color: Color) -> SearchResult: ...

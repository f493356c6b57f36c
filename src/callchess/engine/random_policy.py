"""Capture-biased random opponent.

Not a search: the opponent lists every legal move, then with probability
``capture_bias`` plays a random capture (when one exists) and otherwise a
random move of any kind. The random source is injectable so tests can seed
it.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from callchess.core.move_generator import MoveGenerator
from callchess.engine.search import SearchResult

if TYPE_CHECKING:
    from callchess.core.board import Board
    from callchess.core.enums import Color
    from callchess.core.move import Move

CAPTURE_BIAS = 0.7


def _check_bias(capture_bias: float) -> float:
    if not 0.0 <= capture_bias <= 1.0:
        raise ValueError(f"capture_bias must be within [0, 1], got {capture_bias}")
    return capture_bias


class CaptureBiasedEngine:
    """:class:`IEngine` implementation of the capture-biased policy."""

    __slots__ = ("_rng", "_capture_bias")

    def __init__(
        self,
        rng: random.Random | None = None,
        capture_bias: float = CAPTURE_BIAS,
    ) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._capture_bias = _check_bias(capture_bias)

    @property
    def capture_bias(self) -> float:
        return self._capture_bias

    @capture_bias.setter
    def capture_bias(self, value: float) -> None:
        self._capture_bias = _check_bias(value)

    def search(self, board: Board, color: Color) -> SearchResult:
        gen = MoveGenerator(board)
        moves = gen.generate_moves(color)
        if not moves:
            return SearchResult(best_move=None)

        captures = [m for m in moves if gen.is_capture(m)]
        if captures and self._rng.random() < self._capture_bias:
            move = self._rng.choice(captures)
        else:
            move = self._rng.choice(moves)

        return SearchResult(
            best_move=move,
            candidates=len(moves),
            captures=len(captures),
            is_capture=gen.is_capture(move),
        )


def select_automated_move(
    board: Board,
    color: Color,
    rng: random.Random | None = None,
    capture_bias: float = CAPTURE_BIAS,
) -> Move | None:
    """Pick a move for *color*, or ``None`` when it has no legal move."""
    return CaptureBiasedEngine(rng, capture_bias).search(board, color).best_move

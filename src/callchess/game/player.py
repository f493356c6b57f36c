"""Concrete player implementations."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from callchess.core.enums import Color
from callchess.game.interfaces import IPlayer

if TYPE_CHECKING:
    from callchess.core.board import Board


class HumanPlayer(IPlayer):
    """The person tapping cells; moves arrive via ``select_cell``."""

    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str = "You") -> None:
        self._color = color
        self._name = name

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, board: Board) -> None:
        pass

    def cancel(self) -> None:
        pass


class AIPlayer(IPlayer):
    """Automated opponent shown under the call partner's name.

    Move selection is not done here: ``on_request_move`` receives the board
    snapshot and is expected to call back into the controller later, which
    is what :class:`callchess.engine.session.OpponentSession` does after its
    thinking pause.

    Args:
        color: Side the opponent plays.
        name: Display name, usually the call partner's.
        on_request_move: ``(Board) -> None`` — start thinking.
        on_cancel: ``() -> None`` — drop a pending move.
    """

    __slots__ = ("_color", "_name", "_on_request_move", "_on_cancel")

    def __init__(
        self,
        color: Color,
        name: str = "Partner",
        on_request_move: Callable[[Board], None] | None = None,
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        self._color = color
        self._name = name
        self._on_request_move = on_request_move
        self._on_cancel = on_cancel

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return False

    def request_move(self, board: Board) -> None:
        if self._on_request_move is not None:
            self._on_request_move(board)

    def cancel(self) -> None:
        if self._on_cancel is not None:
            self._on_cancel()

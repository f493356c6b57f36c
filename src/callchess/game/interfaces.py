"""Abstract interfaces for the game layer.

The controller depends on these ABCs, not on concrete players, so an
automated opponent can be driven by a Qt timer, a test stub or anything
else that calls back into :meth:`IGameController.submit_move`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from callchess.core.enums import Color

if TYPE_CHECKING:
    from callchess.core.board import Board
    from callchess.core.move import Move


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for one game session."""

    NOT_STARTED = auto()
    AWAITING_SELECTION = auto()  # human to move, nothing selected
    AWAITING_DESTINATION = auto()  # human to move, own piece selected
    THINKING = auto()  # automated opponent is "thinking"
    GAME_OVER = auto()


class GameEndReason(IntEnum):
    """Why a game reached :attr:`GamePhase.GAME_OVER`."""

    KING_CAPTURED = auto()
    NO_LEGAL_MOVES = auto()
    RESIGNATION = auto()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IPlayer(ABC):
    """Interface for a game participant (human or automated)."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @abstractmethod
    def request_move(self, board: Board) -> None:
        """Begin choosing a move on *board*.

        Humans answer through cell taps, so this is a no-op for them.
        """

    @abstractmethod
    def cancel(self) -> None:
        """Drop a pending move computation (no-op for humans)."""


class IGameController(ABC):
    """Interface for the game orchestrator."""

    @abstractmethod
    def new_game(
        self,
        white: IPlayer,
        black: IPlayer,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
    ) -> None:
        """Set up (or reset) a game session.

        *board* defaults to the starting arrangement; a custom position can
        be built with :meth:`Board.from_rows`.
        """

    @abstractmethod
    def select_cell(self, row: int, col: int) -> bool:
        """Handle a tap on a cell. Returns True if it played a move."""

    @abstractmethod
    def submit_move(self, move: Move) -> bool:
        """Submit a move. Returns True if legal and applied."""

    @abstractmethod
    def report_no_moves(self, color: Color) -> bool:
        """The automated *color* found no legal move; it loses."""

    @abstractmethod
    def resign(self, color: Color) -> None:
        """Player of *color* resigns."""

    @abstractmethod
    def undo_move(self) -> bool:
        """Rewind to the last human turn. Returns True on success."""

    @abstractmethod
    def end_session(self) -> None:
        """Tear the session down; late automated moves are discarded."""

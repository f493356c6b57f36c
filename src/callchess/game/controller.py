"""GameController — the central orchestrator of a chess session.

Coordinates: Players, GameState, the movement rules.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from callchess.core.board import Board
from callchess.core.enums import Color, GameResult
from callchess.core.move import Move
from callchess.core.move_generator import MoveGenerator
from callchess.core.rules import is_valid_move
from callchess.core.types import Coord, is_on_board, require_on_board
from callchess.game.interfaces import (
    GameEndReason,
    GamePhase,
    IGameController,
    IPlayer,
)
from callchess.game.state import GameState, MoveRecord

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, MoveRecord, GameState], None]
GameOverCallback = Callable[[GameResult], None]
PhaseCallback = Callable[[GamePhase], None]
SelectionCallback = Callable[[Coord | None], None]

_HUMAN_PHASES = (GamePhase.AWAITING_SELECTION, GamePhase.AWAITING_DESTINATION)
_MOVE_PHASES = (*_HUMAN_PHASES, GamePhase.THINKING)


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)
    on_selection_changed: list[SelectionCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Runs one game at a time: cell taps, move validation, turn switching,
    game-over detection, listener notification.

    Thread-safety: call from a single thread (the UI thread). The automated
    opponent answers through ``submit_move`` / ``report_no_moves`` from a
    timer on that same thread.
    """

    __slots__ = ("_state", "_players", "events")

    def __init__(self) -> None:
        self._state = GameState()
        self._players: dict[Color, IPlayer] = {}
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def current_player(self) -> IPlayer | None:
        return self._players.get(self._state.side_to_move)

    def player(self, color: Color) -> IPlayer | None:
        return self._players.get(color)

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(
        self,
        white: IPlayer,
        black: IPlayer,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
    ) -> None:
        self._cancel_pending()
        self._players = {Color.WHITE: white, Color.BLACK: black}
        self._state.setup(board, side_to_move)
        _LOGGER.debug(
            "New game (session %d): %s vs %s",
            self._state.session_id,
            white.name,
            black.name,
        )
        self._prompt_current_player()

    def select_cell(self, row: int, col: int) -> bool:
        require_on_board(row, col)
        state = self._state
        if state.phase not in _HUMAN_PHASES:
            return False
        cp = self.current_player
        if cp is None or not cp.is_human:
            return False

        piece = state.board[row, col]
        is_own = piece is not None and piece.color == state.side_to_move
        cell = (row, col)

        if state.selected is None:
            if is_own:
                self._set_selection(cell)
            return False
        if state.selected == cell:
            self._set_selection(None)
            return False
        if is_own:
            self._set_selection(cell)
            return False

        if self.submit_move(Move.between(state.selected, cell)):
            return True
        self._set_selection(None)
        return False

    def legal_targets(self) -> list[Coord]:
        """Destinations of the selected piece, for highlighting."""
        selected = self._state.selected
        if selected is None:
            return []
        return MoveGenerator(self._state.board).legal_destinations(*selected)

    def submit_move(self, move: Move) -> bool:
        state = self._state
        if state.phase not in _MOVE_PHASES:
            return False
        if not (
            is_on_board(move.from_row, move.from_col)
            and is_on_board(move.to_row, move.to_col)
        ):
            _LOGGER.warning("Rejected off-board move %r", move)
            return False

        piece = state.board[move.source]
        if piece is None or piece.color != state.side_to_move:
            return False
        if not is_valid_move(
            state.board, move.from_row, move.from_col, move.to_row, move.to_col, piece
        ):
            return False

        had_selection = state.selected is not None
        record = state.apply_move(move)
        if had_selection:
            self._emit_selection(None)
        _LOGGER.debug(
            "%s played %s%s",
            record.mover,
            move,
            f" capturing {record.captured}" if record.captured else "",
        )
        _LOGGER.debug("Board after %s:\n%r", move, state.board)
        self._emit_move(move, record)

        if state.is_game_over:
            self._emit_game_over()
            return True

        self._prompt_current_player()
        return True

    def report_no_moves(self, color: Color) -> bool:
        state = self._state
        if state.phase != GamePhase.THINKING or state.side_to_move != color:
            return False
        if MoveGenerator(state.board).has_legal_moves(color):
            _LOGGER.warning("%s reported no moves but has legal moves", color)
            return False
        self._finish(color.opposite, GameEndReason.NO_LEGAL_MOVES)
        return True

    def resign(self, color: Color) -> None:
        if self._state.is_game_over or self._state.phase == GamePhase.NOT_STARTED:
            return
        self._cancel_pending()
        self._state.resign(color)
        self._emit_game_over()

    def undo_move(self) -> bool:
        state = self._state
        if state.is_game_over or not state.move_history:
            return False
        if state.phase == GamePhase.NOT_STARTED:
            return False

        self._cancel_pending()
        state.undo_last_move()
        # Rewind the opponent's reply too, back to a human turn.
        while state.move_history:
            cp = self.current_player
            if cp is None or cp.is_human:
                break
            state.undo_last_move()

        self._emit_selection(None)
        self._prompt_current_player()
        return True

    def end_session(self) -> None:
        if self._state.phase == GamePhase.NOT_STARTED:
            return
        self._cancel_pending()
        self._state.end()
        self._players = {}
        _LOGGER.debug("Session ended")
        self._emit_phase(GamePhase.NOT_STARTED)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _prompt_current_player(self) -> None:
        """Ask the current player to move."""
        cp = self.current_player
        if cp is None:
            return

        if cp.is_human:
            if not MoveGenerator(self._state.board).has_legal_moves(cp.color):
                self._finish(cp.color.opposite, GameEndReason.NO_LEGAL_MOVES)
                return
            self._set_phase(GamePhase.AWAITING_SELECTION)
        else:
            self._set_phase(GamePhase.THINKING)
            cp.request_move(self._state.board)

    def _cancel_pending(self) -> None:
        cp = self.current_player
        if cp is not None and not cp.is_human:
            cp.cancel()

    def _finish(self, winner: Color, reason: GameEndReason) -> None:
        self._state.set_winner(winner, reason)
        self._emit_game_over()

    def _set_selection(self, cell: Coord | None) -> None:
        self._state.selected = cell
        self._emit_selection(cell)
        self._set_phase(
            GamePhase.AWAITING_SELECTION
            if cell is None
            else GamePhase.AWAITING_DESTINATION
        )

    def _set_phase(self, phase: GamePhase) -> None:
        self._state.phase = phase
        self._emit_phase(phase)

    def _emit_move(self, move: Move, record: MoveRecord) -> None:
        for cb in self.events.on_move:
            cb(move, record, self._state)

    def _emit_game_over(self) -> None:
        result = self._state.result
        _LOGGER.info(
            "Game over (session %d): %s by %s",
            self._state.session_id,
            result.name,
            self._state.end_reason.name if self._state.end_reason else "unknown",
        )
        self._emit_phase(GamePhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(result)

    def _emit_phase(self, phase: GamePhase) -> None:
        for cb in self.events.on_phase_changed:
            cb(phase)

    def _emit_selection(self, cell: Coord | None) -> None:
        for cb in self.events.on_selection_changed:
            cb(cell)

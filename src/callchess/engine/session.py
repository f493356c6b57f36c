"""Automated-opponent session: the "thinking" pause and move handoff."""

from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import TYPE_CHECKING

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from callchess.core.enums import Color
from callchess.engine.random_policy import CaptureBiasedEngine
from callchess.game.interfaces import GamePhase
from callchess.game.player import AIPlayer
from callchess.settings import GameSettings

if TYPE_CHECKING:
    from callchess.core.board import Board
    from callchess.engine.search import IEngine
    from callchess.game.controller import GameController

_LOGGER = logging.getLogger(__name__)


class OpponentSession(QObject):
    """Paces the automated opponent and hands its move to the controller.

    A request starts a single-shot timer; when it fires the engine picks a
    move on the requested snapshot. The result is dropped unless the
    controller is still thinking on that same snapshot in the same session,
    so an abandoned or reset game never receives a late move.
    """

    move_played = pyqtSignal(object)
    no_move = pyqtSignal(int)

    def __init__(
        self,
        *,
        controller: GameController,
        settings: GameSettings | None = None,
        engine: IEngine | None = None,
        rng: random.Random | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._settings = replace(settings) if settings is not None else GameSettings()
        self._settings.validate()
        self._engine = engine
        self._rng = rng if rng is not None else random.Random()

        self._think_timer = QTimer(self)
        self._think_timer.setSingleShot(True)
        self._think_timer.timeout.connect(self._on_think_timeout)

        self._request_id = 0
        self._pending_request: int | None = None
        self._pending_board: Board | None = None
        self._pending_color: Color | None = None
        self._pending_session: int | None = None
        self._is_shutting_down = False

    @property
    def settings(self) -> GameSettings:
        """A copy of the active settings; change them with :meth:`apply_settings`."""
        return replace(self._settings)

    @property
    def is_thinking(self) -> bool:
        return self._pending_request is not None

    def apply_settings(self, settings: GameSettings) -> None:
        """Swap in new settings for subsequent requests.

        Raises ``ValueError`` and keeps the current settings if *settings*
        is out of range. A pause already running keeps its length.
        """
        settings.validate()
        self._settings = replace(settings)
        _LOGGER.debug("Opponent settings updated: %s", self._settings)

    def create_ai_player(self, color: Color = Color.BLACK, name: str = "") -> AIPlayer:
        """Create an opponent wired to this session."""
        return AIPlayer(
            color,
            name or self._settings.partner_name,
            on_request_move=self.request_move,
            on_cancel=self.cancel,
        )

    def request_move(self, board: Board) -> None:
        """Start thinking about *board* for the side to move."""
        if self._is_shutting_down:
            return
        self.cancel()

        state = self._controller.state
        self._request_id += 1
        self._pending_request = self._request_id
        self._pending_board = board
        self._pending_color = state.side_to_move
        self._pending_session = state.session_id
        self._think_timer.start(self._settings.thinking_delay_ms(self._rng))

    def cancel(self) -> None:
        """Drop the pending request, if any."""
        self._think_timer.stop()
        self._clear_pending_request()

    def shutdown(self) -> None:
        """Stop for good; later requests are ignored."""
        self._is_shutting_down = True
        self.cancel()

    # ── Internal ─────────────────────────────────────────────────────────

    def _current_engine(self) -> IEngine:
        if self._engine is not None:
            return self._engine
        return CaptureBiasedEngine(self._rng, self._settings.capture_bias)

    def _on_think_timeout(self) -> None:
        if self._is_shutting_down:
            return
        request_id = self._pending_request
        board = self._pending_board
        color = self._pending_color
        session_id = self._pending_session
        self._clear_pending_request()
        if request_id is None or board is None or color is None:
            return

        state = self._controller.state
        if (
            state.session_id != session_id
            or state.phase != GamePhase.THINKING
            or state.board is not board
            or state.side_to_move != color
        ):
            _LOGGER.warning("Discarding stale opponent request %d", request_id)
            return

        result = self._current_engine().search(board, color)
        if result.best_move is None:
            _LOGGER.debug("Opponent %s has no legal move", color)
            if self._controller.report_no_moves(color):
                self.no_move.emit(int(color))
            return

        _LOGGER.debug(
            "Opponent picked %s from %d candidates (%d captures)",
            result.best_move,
            result.candidates,
            result.captures,
        )
        if self._controller.submit_move(result.best_move):
            self.move_played.emit(result.best_move)
        else:
            _LOGGER.warning("Controller rejected opponent move %s", result.best_move)

    def _clear_pending_request(self) -> None:
        self._pending_request = None
        self._pending_board = None
        self._pending_color = None
        self._pending_session = None

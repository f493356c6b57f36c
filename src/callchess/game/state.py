"""Game state — board snapshots, turn, selection, captures and history."""

from __future__ import annotations

from dataclasses import dataclass, field

from callchess.core.board import Board
from callchess.core.enums import Color, GameResult
from callchess.core.move import Move
from callchess.core.piece import Piece
from callchess.core.rules import apply_move
from callchess.core.types import Coord
from callchess.game.interfaces import GameEndReason, GamePhase


@dataclass
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    mover: Color
    board_before: Board
    captured: Piece | None = None
    promoted: bool = False

    @property
    def was_capture(self) -> bool:
        return self.captured is not None


def _empty_captures() -> dict[Color, list[Piece]]:
    return {Color.WHITE: [], Color.BLACK: []}


@dataclass
class GameState:
    """Per-session data: the current board snapshot and everything around it.

    Pure data/logic — no timers, no UI. ``session_id`` grows on every setup
    and teardown so that work started for an older session can be told
    apart from work for the current one.
    """

    board: Board = field(default_factory=Board.initial, init=False)
    side_to_move: Color = field(default=Color.WHITE, init=False)
    phase: GamePhase = field(default=GamePhase.NOT_STARTED, init=False)
    result: GameResult = field(default=GameResult.IN_PROGRESS, init=False)
    end_reason: GameEndReason | None = field(default=None, init=False)
    selected: Coord | None = field(default=None, init=False)
    captured_by: dict[Color, list[Piece]] = field(
        default_factory=_empty_captures, init=False
    )
    move_history: list[MoveRecord] = field(default_factory=list, init=False)
    session_id: int = field(default=0, init=False)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
    ) -> None:
        """Initialise (or reset) the game with a fresh snapshot."""
        self.board = board.copy() if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.phase = GamePhase.AWAITING_SELECTION
        self.result = GameResult.IN_PROGRESS
        self.end_reason = None
        self.selected = None
        self.captured_by = _empty_captures()
        self.move_history.clear()
        self.session_id += 1

    def end(self) -> None:
        """Discard the session; nothing may be applied to it afterwards."""
        self.phase = GamePhase.NOT_STARTED
        self.selected = None
        self.session_id += 1

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(self, move: Move) -> MoveRecord:
        """Apply *move* for the side to move and return the history record.

        Raises :class:`callchess.core.rules.IllegalMoveError` for an illegal
        move, leaving the state untouched.
        """
        mover = self.side_to_move
        outcome = apply_move(self.board, move)

        record = MoveRecord(
            move=move,
            mover=mover,
            board_before=self.board,
            captured=outcome.captured,
            promoted=outcome.promoted,
        )
        self.move_history.append(record)
        self.board = outcome.board
        self.selected = None
        if outcome.captured is not None:
            self.captured_by[mover].append(outcome.captured)

        if outcome.captured_king:
            self.set_winner(mover, GameEndReason.KING_CAPTURED)
        else:
            self.side_to_move = mover.opposite
        return record

    def undo_last_move(self) -> MoveRecord | None:
        """Restore the snapshot before the last move. None if history is empty."""
        if not self.move_history:
            return None

        record = self.move_history.pop()
        self.board = record.board_before
        self.side_to_move = record.mover
        self.selected = None
        if record.captured is not None:
            self.captured_by[record.mover].pop()

        if self.result != GameResult.IN_PROGRESS:
            self.result = GameResult.IN_PROGRESS
            self.end_reason = None
            self.phase = GamePhase.AWAITING_SELECTION
        return record

    # ── Game end ─────────────────────────────────────────────────────────

    def set_winner(self, color: Color, reason: GameEndReason) -> None:
        self.result = GameResult.win_for(color)
        self.end_reason = reason
        self.phase = GamePhase.GAME_OVER
        self.selected = None

    def resign(self, color: Color) -> None:
        self.set_winner(color.opposite, GameEndReason.RESIGNATION)

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def winner(self) -> Color | None:
        return self.result.winner

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    def capture_icons(self, color: Color) -> list[str]:
        """Icons of the pieces *color* has taken, in capture order."""
        return [piece.icon for piece in self.captured_by[color]]

"""Tests for GameController — the orchestrator."""

import inspect

import pytest

from callchess.core.board import Board
from callchess.core.enums import Color, GameResult, PieceType
from callchess.core.move import Move
from callchess.core.piece import Piece
from callchess.game.controller import GameController
from callchess.game.interfaces import GameEndReason, GamePhase, IGameController
from callchess.game.player import AIPlayer, HumanPlayer

EMPTY = "........"
# White queen one step from the black king.
KING_HUNT = Board.from_rows(
    ["....k...", "....Q...", EMPTY, EMPTY, EMPTY, EMPTY, EMPTY, "....K..."]
)


class _RecordingAI(AIPlayer):
    def __init__(self) -> None:
        super().__init__(
            Color.BLACK,
            "Sam",
            on_request_move=self._record,
            on_cancel=self._cancelled,
        )
        self.requests: list[Board] = []
        self.cancels = 0

    def _record(self, board: Board) -> None:
        self.requests.append(board)

    def _cancelled(self) -> None:
        self.cancels += 1


def _make_controller(
    board: Board | None = None,
    side_to_move: Color = Color.WHITE,
) -> tuple[GameController, _RecordingAI]:
    """Helper: human (White) vs recording AI (Black)."""
    ai = _RecordingAI()
    ctrl = GameController()
    ctrl.new_game(HumanPlayer(Color.WHITE), ai, board=board, side_to_move=side_to_move)
    return ctrl, ai


def _make_hh_controller() -> GameController:
    ctrl = GameController()
    ctrl.new_game(HumanPlayer(Color.WHITE, "W"), HumanPlayer(Color.BLACK, "B"))
    return ctrl


class TestNewGame:
    def test_phase_awaiting_selection(self) -> None:
        ctrl, ai = _make_controller()
        assert ctrl.state.phase == GamePhase.AWAITING_SELECTION
        assert ai.requests == []

    def test_players_assigned(self) -> None:
        ctrl, ai = _make_controller()
        assert ctrl.player(Color.BLACK) is ai
        cp = ctrl.current_player
        assert cp is not None and cp.color == Color.WHITE

    def test_ai_to_move_starts_thinking(self) -> None:
        ctrl, ai = _make_controller(side_to_move=Color.BLACK)
        assert ctrl.state.phase == GamePhase.THINKING
        assert ai.requests == [ctrl.state.board]

    def test_reset_discards_previous_game(self) -> None:
        ctrl, ai = _make_controller(KING_HUNT)
        ctrl.submit_move(Move(1, 4, 0, 4))
        old_session = ctrl.state.session_id

        ctrl.new_game(HumanPlayer(Color.WHITE), ai)
        assert ctrl.state.board == Board.initial()
        assert ctrl.state.result == GameResult.IN_PROGRESS
        assert ctrl.state.captured_by[Color.WHITE] == []
        assert ctrl.state.session_id == old_session + 1

    def test_reset_while_thinking_cancels_ai(self) -> None:
        ctrl, ai = _make_controller()
        ctrl.submit_move(Move(6, 4, 4, 4))
        ctrl.new_game(HumanPlayer(Color.WHITE), ai)
        assert ai.cancels == 1

    def test_human_without_moves_loses_immediately(self) -> None:
        board = Board.from_rows(
            ["....k...", EMPTY, EMPTY, EMPTY, EMPTY, "p.......", "P.......", EMPTY]
        )
        ctrl, _ = _make_controller(board)
        assert ctrl.state.is_game_over
        assert ctrl.state.result == GameResult.BLACK_WINS
        assert ctrl.state.end_reason == GameEndReason.NO_LEGAL_MOVES

    def test_interface_matches_new_game_signature(self) -> None:
        declared = inspect.signature(IGameController.new_game).parameters
        actual = inspect.signature(GameController.new_game).parameters
        assert list(declared) == list(actual)
        assert declared["side_to_move"].default == Color.WHITE


class TestSelectCell:
    def test_select_own_piece(self) -> None:
        ctrl, _ = _make_controller()
        assert not ctrl.select_cell(6, 4)
        assert ctrl.state.selected == (6, 4)
        assert ctrl.state.phase == GamePhase.AWAITING_DESTINATION

    def test_select_opponent_or_empty_ignored(self) -> None:
        ctrl, _ = _make_controller()
        ctrl.select_cell(1, 4)
        ctrl.select_cell(4, 4)
        assert ctrl.state.selected is None
        assert ctrl.state.phase == GamePhase.AWAITING_SELECTION

    def test_tap_selected_again_deselects(self) -> None:
        ctrl, _ = _make_controller()
        ctrl.select_cell(6, 4)
        ctrl.select_cell(6, 4)
        assert ctrl.state.selected is None
        assert ctrl.state.phase == GamePhase.AWAITING_SELECTION

    def test_tap_other_own_piece_moves_selection(self) -> None:
        ctrl, _ = _make_controller()
        ctrl.select_cell(6, 4)
        ctrl.select_cell(7, 6)
        assert ctrl.state.selected == (7, 6)
        assert ctrl.legal_targets() == [(5, 5), (5, 7)]

    def test_legal_targets(self) -> None:
        ctrl, _ = _make_controller()
        assert ctrl.legal_targets() == []
        ctrl.select_cell(6, 4)
        assert ctrl.legal_targets() == [(4, 4), (5, 4)]

    def test_tap_destination_plays_move(self) -> None:
        ctrl, ai = _make_controller()
        ctrl.select_cell(6, 4)
        assert ctrl.select_cell(4, 4)
        assert ctrl.state.board[4, 4] == Piece(Color.WHITE, PieceType.PAWN)
        assert ctrl.state.selected is None
        assert ctrl.state.phase == GamePhase.THINKING
        assert ai.requests == [ctrl.state.board]

    def test_tap_illegal_destination_clears_selection(self) -> None:
        ctrl, ai = _make_controller()
        ctrl.select_cell(6, 4)
        assert not ctrl.select_cell(3, 4)
        assert ctrl.state.selected is None
        assert ctrl.state.phase == GamePhase.AWAITING_SELECTION
        assert ctrl.state.ply_count == 0
        assert ai.requests == []

    def test_taps_ignored_while_thinking(self) -> None:
        ctrl, _ = _make_controller()
        ctrl.select_cell(6, 4)
        ctrl.select_cell(4, 4)
        assert not ctrl.select_cell(6, 3)
        assert ctrl.state.selected is None
        assert ctrl.state.phase == GamePhase.THINKING

    def test_selection_events(self) -> None:
        ctrl, _ = _make_controller()
        seen: list[object] = []
        ctrl.events.on_selection_changed.append(seen.append)
        ctrl.select_cell(6, 4)
        ctrl.select_cell(4, 4)
        assert seen == [(6, 4), None]

    def test_off_board_tap_raises(self) -> None:
        ctrl, _ = _make_controller()
        with pytest.raises(ValueError):
            ctrl.select_cell(8, 0)

    def test_black_human_can_select(self) -> None:
        ctrl = _make_hh_controller()
        ctrl.select_cell(6, 4)
        ctrl.select_cell(4, 4)
        ctrl.select_cell(1, 3)
        assert ctrl.select_cell(3, 3)
        assert ctrl.state.side_to_move == Color.WHITE


class TestSubmitMove:
    def test_legal_move_accepted(self) -> None:
        ctrl, _ = _make_controller()
        assert ctrl.submit_move(Move(6, 4, 4, 4))
        assert ctrl.state.side_to_move == Color.BLACK

    def test_illegal_move_rejected(self) -> None:
        ctrl, _ = _make_controller()
        assert not ctrl.submit_move(Move(6, 4, 3, 4))
        assert ctrl.state.side_to_move == Color.WHITE

    def test_wrong_side_rejected(self) -> None:
        ctrl, _ = _make_controller()
        assert not ctrl.submit_move(Move(1, 4, 3, 4))

    def test_empty_source_rejected(self) -> None:
        ctrl, _ = _make_controller()
        assert not ctrl.submit_move(Move(4, 4, 3, 4))

    def test_off_board_rejected(self) -> None:
        ctrl, _ = _make_controller()
        assert not ctrl.submit_move(Move(6, 4, 8, 4))

    def test_not_started_rejected(self) -> None:
        assert not GameController().submit_move(Move(6, 4, 4, 4))

    def test_ai_reply_returns_turn_to_human(self) -> None:
        ctrl, _ = _make_controller()
        ctrl.submit_move(Move(6, 4, 4, 4))
        assert ctrl.submit_move(Move(1, 3, 3, 3))
        assert ctrl.state.phase == GamePhase.AWAITING_SELECTION
        assert ctrl.state.side_to_move == Color.WHITE

    def test_move_event_fires(self) -> None:
        ctrl, _ = _make_controller()
        played: list[str] = []
        ctrl.events.on_move.append(lambda m, rec, st: played.append(str(m)))
        ctrl.submit_move(Move(6, 4, 4, 4))
        assert played == ["e2e4"]

    def test_promotion(self) -> None:
        board = Board.from_rows(
            ["....k...", "P.......", EMPTY, EMPTY, EMPTY, EMPTY, EMPTY, "....K..."]
        )
        ctrl, _ = _make_controller(board)
        ctrl.submit_move(Move(1, 0, 0, 0))
        assert ctrl.state.board[0, 0] == Piece(Color.WHITE, PieceType.QUEEN)
        assert ctrl.state.move_history[-1].promoted

    def test_captures_tracked_for_both_sides(self) -> None:
        board = Board.from_rows(
            ["....k...", EMPTY, EMPTY, "...p....", "....P...", EMPTY, EMPTY, "....K..."]
        )
        ctrl, _ = _make_controller(board)
        ctrl.submit_move(Move(4, 4, 3, 3))
        assert ctrl.state.capture_icons(Color.WHITE) == ["♟"]
        ctrl.submit_move(Move(0, 4, 1, 4))
        assert ctrl.state.capture_icons(Color.BLACK) == []


class TestGameOver:
    def test_white_captures_king(self) -> None:
        ctrl, ai = _make_controller(KING_HUNT)
        results: list[GameResult] = []
        ctrl.events.on_game_over.append(results.append)

        assert ctrl.submit_move(Move(1, 4, 0, 4))

        assert results == [GameResult.WHITE_WINS]
        assert ctrl.state.phase == GamePhase.GAME_OVER
        assert ctrl.state.winner == Color.WHITE
        assert ctrl.state.end_reason == GameEndReason.KING_CAPTURED
        assert ai.requests == []

    def test_black_captures_king(self) -> None:
        board = Board.from_rows(
            ["....k...", EMPTY, EMPTY, EMPTY, EMPTY, EMPTY, "...q....", "....K..."]
        )
        ctrl, _ = _make_controller(board, side_to_move=Color.BLACK)
        assert ctrl.submit_move(Move(6, 3, 7, 4))
        assert ctrl.state.result == GameResult.BLACK_WINS

    def test_phase_events(self) -> None:
        ctrl, _ = _make_controller(KING_HUNT)
        phases: list[GamePhase] = []
        ctrl.events.on_phase_changed.append(phases.append)
        ctrl.submit_move(Move(1, 4, 0, 4))
        assert phases == [GamePhase.GAME_OVER]

    def test_cannot_move_after_game_over(self) -> None:
        ctrl, _ = _make_controller(KING_HUNT)
        ctrl.submit_move(Move(1, 4, 0, 4))
        assert not ctrl.submit_move(Move(7, 4, 6, 4))
        assert not ctrl.select_cell(7, 4)

    def test_resign(self) -> None:
        ctrl, _ = _make_controller()
        ctrl.resign(Color.WHITE)
        assert ctrl.state.result == GameResult.BLACK_WINS
        assert ctrl.state.end_reason == GameEndReason.RESIGNATION

    def test_resign_while_thinking_cancels_ai(self) -> None:
        ctrl, ai = _make_controller()
        ctrl.submit_move(Move(6, 4, 4, 4))
        ctrl.resign(Color.WHITE)
        assert ai.cancels == 1


class TestReportNoMoves:
    NO_BLACK_MOVES = Board.from_rows(
        [EMPTY, "p.......", "P.......", EMPTY, EMPTY, EMPTY, EMPTY, "....K..."]
    )

    def test_no_moves_means_human_wins(self) -> None:
        ctrl, _ = _make_controller(self.NO_BLACK_MOVES, side_to_move=Color.BLACK)
        results: list[GameResult] = []
        ctrl.events.on_game_over.append(results.append)

        assert ctrl.report_no_moves(Color.BLACK)

        assert results == [GameResult.WHITE_WINS]
        assert ctrl.state.end_reason == GameEndReason.NO_LEGAL_MOVES

    def test_ignored_when_moves_exist(self) -> None:
        ctrl, _ = _make_controller()
        ctrl.submit_move(Move(6, 4, 4, 4))
        assert not ctrl.report_no_moves(Color.BLACK)
        assert not ctrl.state.is_game_over

    def test_ignored_when_not_thinking(self) -> None:
        ctrl, _ = _make_controller(self.NO_BLACK_MOVES)
        assert not ctrl.report_no_moves(Color.BLACK)


class TestUndoMove:
    def test_undo_rewinds_to_human_turn(self) -> None:
        ctrl, _ = _make_controller()
        ctrl.submit_move(Move(6, 4, 4, 4))
        ctrl.submit_move(Move(1, 4, 3, 4))
        assert ctrl.undo_move()
        assert ctrl.state.board == Board.initial()
        assert ctrl.state.side_to_move == Color.WHITE
        assert ctrl.state.phase == GamePhase.AWAITING_SELECTION

    def test_undo_while_thinking_cancels_ai(self) -> None:
        ctrl, ai = _make_controller()
        ctrl.submit_move(Move(6, 4, 4, 4))
        assert ctrl.undo_move()
        assert ai.cancels == 1
        assert ctrl.state.ply_count == 0

    def test_undo_human_vs_human_single_ply(self) -> None:
        ctrl = _make_hh_controller()
        ctrl.submit_move(Move(6, 4, 4, 4))
        ctrl.submit_move(Move(1, 4, 3, 4))
        ctrl.undo_move()
        assert ctrl.state.ply_count == 1
        assert ctrl.state.side_to_move == Color.BLACK

    def test_undo_empty_fails(self) -> None:
        ctrl, _ = _make_controller()
        assert not ctrl.undo_move()

    def test_undo_after_game_over_fails(self) -> None:
        ctrl, _ = _make_controller(KING_HUNT)
        ctrl.submit_move(Move(1, 4, 0, 4))
        assert not ctrl.undo_move()


class TestEndSession:
    def test_end_session_discards_game(self) -> None:
        ctrl, ai = _make_controller()
        ctrl.submit_move(Move(6, 4, 4, 4))
        session_id = ctrl.state.session_id

        ctrl.end_session()

        assert ai.cancels == 1
        assert ctrl.state.phase == GamePhase.NOT_STARTED
        assert ctrl.state.session_id == session_id + 1
        assert ctrl.current_player is None

    def test_late_move_rejected(self) -> None:
        ctrl, _ = _make_controller()
        ctrl.submit_move(Move(6, 4, 4, 4))
        ctrl.end_session()
        assert not ctrl.submit_move(Move(1, 4, 3, 4))
        assert not ctrl.report_no_moves(Color.BLACK)
        assert ctrl.state.ply_count == 1

    def test_end_session_twice_is_noop(self) -> None:
        ctrl, _ = _make_controller()
        ctrl.end_session()
        session_id = ctrl.state.session_id
        ctrl.end_session()
        assert ctrl.state.session_id == session_id

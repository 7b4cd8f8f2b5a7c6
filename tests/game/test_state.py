"""Tests for GameState."""

import pytest

from chessbook.core.board import Board
from chessbook.core.enums import Color, GameEndReason, GameResult, MoveFlag, PieceType
from chessbook.core.errors import GameAlreadyOverError, KingWouldBeInCheckError, ReplayError
from chessbook.core.move import Move
from chessbook.core.notation import parse_move_input
from chessbook.core.types import E2, E4
from chessbook.game.interfaces import DrawOffer, GamePhase
from chessbook.game.state import GameState

_FOOLS_MATE = ["f2 f3", "e7 e5", "g2 g4", "d8 h4"]


def _play(gs: GameState, *texts: str) -> list[Move]:
    return [gs.apply_move(parse_move_input(text)) for text in texts]


class TestGameStateSetup:
    def test_defaults(self) -> None:
        gs = GameState()
        assert gs.phase == GamePhase.ONGOING
        assert gs.result == GameResult.IN_PROGRESS
        assert gs.side_to_move == Color.WHITE
        assert gs.ply_count == 0
        assert gs.board == Board.initial()
        assert gs.draw_offer == DrawOffer.NONE

    def test_board_is_not_a_constructor_argument(self) -> None:
        custom = Board.from_pieces({"e1": "K", "e8": "k", "a7": "p"}, turn=Color.BLACK)
        with pytest.raises(TypeError):
            GameState(board=custom)  # type: ignore[call-arg]

    def test_always_starts_from_initial_position(self) -> None:
        gs = GameState()
        assert gs.side_to_move == gs.board.turn == Color.WHITE
        assert gs.board_after(0) == gs.board


class TestGameStateMoves:
    def test_apply_move_records(self) -> None:
        gs = GameState()
        record = gs.apply_move(Move(E2, E4))
        assert record.flag == MoveFlag.DOUBLE_PAWN
        assert record.order == 0
        assert gs.moves == [record]
        assert gs.side_to_move == Color.BLACK

    def test_orders_follow_history(self) -> None:
        gs = GameState()
        moves = _play(gs, "e2 e4", "e7 e5", "g1 f3")
        assert [m.order for m in moves] == [0, 1, 2]

    def test_side_to_move_matches_board(self) -> None:
        gs = GameState()
        for text in ("e2 e4", "e7 e5", "d2 d4"):
            _play(gs, text)
            assert gs.side_to_move == gs.board.turn

    def test_rejected_move_is_not_recorded(self) -> None:
        gs = GameState()
        _play(gs, "e2 e4", "f7 f6", "d1 h5")
        with pytest.raises(KingWouldBeInCheckError):
            _play(gs, "a7 a6")
        assert gs.ply_count == 3
        assert gs.side_to_move == Color.BLACK

    def test_legal_moves(self) -> None:
        gs = GameState()
        assert len(gs.legal_moves()) == 20
        assert sorted(gs.legal_destinations("b1")) == ["a3", "c3"]

    def test_time_used(self) -> None:
        gs = GameState()
        gs.apply_move(parse_move_input("e2 e4", elapsed_ms=1000))
        gs.apply_move(parse_move_input("e7 e5", elapsed_ms=250))
        gs.apply_move(parse_move_input("g1 f3", elapsed_ms=500))
        assert gs.time_used(Color.WHITE) == 1500
        assert gs.time_used(Color.BLACK) == 250

    def test_captured_counts(self) -> None:
        gs = GameState()
        _play(gs, "e2 e4", "d7 d5", "e4 d5")
        assert gs.captured_counts()[Color.BLACK][PieceType.PAWN] == 1


class TestGameStateReplay:
    def test_from_moves(self) -> None:
        gs = GameState()
        _play(gs, "e2 e4", "e7 e5", "g1 f3", "b8 c6", "f1 c4")
        replayed = GameState.from_moves(gs.moves)
        assert replayed.board == gs.board
        assert replayed.side_to_move == Color.BLACK
        assert replayed.moves == gs.moves

    def test_from_moves_detects_finished_game(self) -> None:
        moves = [parse_move_input(t) for t in _FOOLS_MATE]
        replayed = GameState.from_moves(moves)
        assert replayed.is_game_over
        assert replayed.result == GameResult.BLACK_WINS

    def test_from_moves_error(self) -> None:
        moves = [parse_move_input(t) for t in ("e2 e4", "e7 e5", "e4 e5")]
        with pytest.raises(ReplayError) as excinfo:
            GameState.from_moves(moves)
        assert excinfo.value.index == 2

    def test_board_after(self) -> None:
        gs = GameState()
        _play(gs, "e2 e4", "e7 e5", "g1 f3")
        assert gs.board_after(0) == Board.initial()
        assert gs.board_after(3) == gs.board
        after_one = gs.board_after(1)
        assert after_one.piece_at("e4") is not None
        assert after_one.turn == Color.BLACK

    def test_board_after_out_of_range(self) -> None:
        with pytest.raises(ValueError):
            GameState().board_after(1)


class TestGameStateTermination:
    def test_resign_white(self) -> None:
        gs = GameState()
        gs.resign(Color.WHITE)
        assert gs.result == GameResult.BLACK_WINS
        assert gs.is_game_over
        assert gs.description == "White Resigned"
        assert gs.end_reason == GameEndReason.RESIGNATION

    def test_resign_black(self) -> None:
        gs = GameState()
        gs.resign(Color.BLACK)
        assert gs.result == GameResult.WHITE_WINS
        assert gs.description == "Black Resigned"

    def test_resign_twice(self) -> None:
        gs = GameState()
        gs.resign(Color.BLACK)
        with pytest.raises(GameAlreadyOverError):
            gs.resign(Color.WHITE)

    def test_no_moves_after_resignation(self) -> None:
        gs = GameState()
        gs.resign(Color.WHITE)
        with pytest.raises(GameAlreadyOverError):
            _play(gs, "e2 e4")
        assert gs.ply_count == 0

    def test_fools_mate_detected(self) -> None:
        """1.f3 e5 2.g4 Qh4# → checkmate detected automatically."""
        gs = GameState()
        _play(gs, *_FOOLS_MATE)
        assert gs.result == GameResult.BLACK_WINS
        assert gs.phase == GamePhase.FINISHED
        assert gs.description == "Checkmate"
        assert gs.legal_moves() == []


class TestDrawOffers:
    def test_offer_and_accept(self) -> None:
        gs = GameState()
        gs.offer_draw(Color.WHITE)
        assert gs.draw_offer == DrawOffer.OFFERED
        assert gs.draw_offer_by == Color.WHITE
        assert gs.accept_draw(Color.BLACK)
        assert gs.result == GameResult.DRAW
        assert gs.description == "Players agreed a Draw"
        assert gs.end_reason == GameEndReason.DRAW_AGREED
        assert gs.draw_offer == DrawOffer.ACCEPTED

    def test_cannot_accept_own_offer(self) -> None:
        gs = GameState()
        gs.offer_draw(Color.WHITE)
        assert not gs.accept_draw(Color.WHITE)
        assert not gs.is_game_over

    def test_accept_without_offer(self) -> None:
        gs = GameState()
        assert not gs.accept_draw(Color.BLACK)
        assert not gs.is_game_over

    def test_decline(self) -> None:
        gs = GameState()
        gs.offer_draw(Color.BLACK)
        assert gs.decline_draw(Color.WHITE)
        assert gs.draw_offer == DrawOffer.DECLINED
        assert gs.draw_offer_by is None
        assert not gs.accept_draw(Color.WHITE)

    def test_offer_lapses_after_move(self) -> None:
        gs = GameState()
        gs.offer_draw(Color.WHITE)
        _play(gs, "e2 e4")
        assert gs.draw_offer == DrawOffer.NONE
        assert not gs.accept_draw(Color.BLACK)

    def test_offer_after_game_over(self) -> None:
        gs = GameState()
        gs.resign(Color.WHITE)
        with pytest.raises(GameAlreadyOverError):
            gs.offer_draw(Color.BLACK)

    def test_decline_own_offer(self) -> None:
        gs = GameState()
        gs.offer_draw(Color.WHITE)
        assert not gs.decline_draw(Color.WHITE)
        assert gs.draw_offer == DrawOffer.OFFERED
        assert gs.draw_offer_by == Color.WHITE

    def test_decline_without_offer(self) -> None:
        gs = GameState()
        assert not gs.decline_draw(Color.BLACK)
        assert gs.draw_offer == DrawOffer.NONE

    def test_decline_after_game_over(self) -> None:
        gs = GameState()
        gs.resign(Color.WHITE)
        with pytest.raises(GameAlreadyOverError):
            gs.decline_draw(Color.BLACK)
        assert gs.draw_offer == DrawOffer.NONE

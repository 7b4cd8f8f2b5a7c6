"""En-passant tests."""

import pytest

from chessbook.core.board import Board
from chessbook.core.enums import Color, MoveFlag, PieceType
from chessbook.core.errors import CannotCaptureEmptySquareError, KingWouldBeInCheckError
from chessbook.core.notation import parse_move_input


class TestEnPassant:
    def test_capture_removes_passed_pawn(self, play) -> None:
        board = Board.initial()
        play(board, "e2 e4", "h7 h6", "e4 e5", "d7 d5")
        (move,) = play(board, "e5 d6")
        assert move.flag == MoveFlag.EN_PASSANT
        assert move.captured == PieceType.PAWN
        assert board.piece_at("d5") is None
        assert board.piece_at("d6").piece_type == PieceType.PAWN
        assert board.piece_at("d6").color == Color.WHITE
        assert board.captured_counts()[Color.BLACK][PieceType.PAWN] == 1
        assert not board.en_passant_armed

    def test_black_captures(self, play) -> None:
        board = Board.initial()
        play(board, "a2 a3", "d7 d5", "a3 a4", "d5 d4", "e2 e4")
        (move,) = play(board, "d4 e3")
        assert move.flag == MoveFlag.EN_PASSANT
        assert board.piece_at("e4") is None

    def test_window_closes_after_one_move(self, play) -> None:
        board = Board.initial()
        play(board, "e2 e4", "h7 h6", "e4 e5", "d7 d5", "a2 a3", "h6 h5")
        with pytest.raises(CannotCaptureEmptySquareError):
            board.apply_move(parse_move_input("e5 d6"))

    def test_single_step_does_not_qualify(self, play) -> None:
        board = Board.initial()
        play(board, "e2 e4", "d7 d6", "e4 e5", "h7 h6", "a2 a3", "d6 d5")
        with pytest.raises(CannotCaptureEmptySquareError):
            board.apply_move(parse_move_input("e5 d6"))

    def test_only_the_pawn_that_just_moved(self, play) -> None:
        board = Board.initial()
        play(board, "e2 e4", "d7 d5", "e4 e5", "f7 f5")
        with pytest.raises(CannotCaptureEmptySquareError):
            board.apply_move(parse_move_input("e5 d6"))
        assert play(board, "e5 f6")[0].flag == MoveFlag.EN_PASSANT

    def test_listed_as_destination(self, play) -> None:
        board = Board.initial()
        play(board, "e2 e4", "h7 h6", "e4 e5", "d7 d5")
        assert sorted(board.legal_destinations("e5")) == ["d6", "e6"]

    def test_capture_exposing_king_is_refused(self) -> None:
        board = Board.from_pieces(
            {"a5": "K", "e5": "P", "d7": "p", "h5": "r", "h8": "k"},
            turn=Color.BLACK,
        )
        board.apply_move(parse_move_input("d7 d5"))
        with pytest.raises(KingWouldBeInCheckError):
            board.apply_move(parse_move_input("e5 d6"))
        assert board.piece_at("d5") is not None

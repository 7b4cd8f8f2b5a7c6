"""Castling tests: both wings, both colours, and every refusal."""

import pytest

from chessbook.core.board import Board
from chessbook.core.enums import Color, MoveFlag, PieceType
from chessbook.core.errors import (
    CastlingBlockedError,
    CastlingError,
    CastlingKingMovedError,
    CastlingRookMovedError,
    CastlingThroughCheckError,
)
from chessbook.core.notation import parse_move_input
from chessbook.core.piece import Piece

_WHITE_HOME = {"e1": "K", "a1": "R", "h1": "R", "e8": "k"}
_BLACK_HOME = {"e8": "k", "a8": "r", "h8": "r", "e1": "K"}


def _apply(board: Board, text: str):
    return board.apply_move(parse_move_input(text))


class TestCastlingSuccess:
    def test_white_kingside(self) -> None:
        board = Board.from_pieces(_WHITE_HOME)
        move = _apply(board, "e1 g1")
        assert move.flag == MoveFlag.CASTLE_KINGSIDE
        assert board.piece_at("g1") == Piece(Color.WHITE, PieceType.KING, 1)
        assert board.piece_at("f1") == Piece(Color.WHITE, PieceType.ROOK, 1)
        assert board.piece_at("h1") is None
        assert board.piece_at("e1") is None

    def test_white_queenside(self) -> None:
        board = Board.from_pieces(_WHITE_HOME)
        move = _apply(board, "e1 c1")
        assert move.flag == MoveFlag.CASTLE_QUEENSIDE
        assert board.piece_at("c1").piece_type == PieceType.KING
        assert board.piece_at("d1").piece_type == PieceType.ROOK
        assert board.piece_at("a1") is None

    def test_black_kingside(self) -> None:
        board = Board.from_pieces(_BLACK_HOME, turn=Color.BLACK)
        _apply(board, "e8 g8")
        assert board.piece_at("g8") == Piece(Color.BLACK, PieceType.KING, 1)
        assert board.piece_at("f8") == Piece(Color.BLACK, PieceType.ROOK, 1)

    def test_black_queenside(self) -> None:
        board = Board.from_pieces(_BLACK_HOME, turn=Color.BLACK)
        _apply(board, "e8 c8")
        assert board.piece_at("c8").piece_type == PieceType.KING
        assert board.piece_at("d8").piece_type == PieceType.ROOK

    def test_from_the_opening(self, play) -> None:
        board = Board.initial()
        play(board, "e2 e4", "e7 e5", "g1 f3", "b8 c6", "f1 c4", "g8 f6")
        assert "g1" in board.legal_destinations("e1")
        _apply(board, "e1 g1")
        assert board.piece_at("f1").piece_type == PieceType.ROOK

    def test_rook_attacked_square_does_not_matter(self) -> None:
        # b1 is crossed by the rook only; the king never passes it.
        board = Board.from_pieces({**_WHITE_HOME, "b8": "r"})
        _apply(board, "e1 c1")


class TestCastlingRefused:
    def test_king_moved(self, play) -> None:
        board = Board.from_pieces(_WHITE_HOME)
        play(board, "e1 e2", "e8 e7", "e2 e1", "e7 e8")
        with pytest.raises(CastlingKingMovedError):
            _apply(board, "e1 g1")

    def test_king_off_home_square(self) -> None:
        board = Board.from_pieces({"d1": "K", "h1": "R", "e8": "k"})
        with pytest.raises(CastlingKingMovedError):
            _apply(board, "d1 f1")

    def test_rook_moved(self, play) -> None:
        board = Board.from_pieces(_WHITE_HOME)
        play(board, "h1 h2", "e8 e7", "h2 h1", "e7 e8")
        with pytest.raises(CastlingRookMovedError, match="ROOK already moved"):
            _apply(board, "e1 g1")

    def test_rook_missing(self) -> None:
        board = Board.from_pieces({"e1": "K", "a1": "R", "e8": "k"})
        with pytest.raises(CastlingRookMovedError, match="without a ROOK"):
            _apply(board, "e1 g1")

    def test_blocked(self) -> None:
        with pytest.raises(CastlingBlockedError):
            _apply(Board.initial(), "e1 g1")

    def test_queenside_blocked_on_b_file(self) -> None:
        board = Board.from_pieces({**_WHITE_HOME, "b1": "N"})
        with pytest.raises(CastlingBlockedError):
            _apply(board, "e1 c1")

    def test_in_check(self) -> None:
        board = Board.from_pieces({**_WHITE_HOME, "e5": "r"})
        with pytest.raises(CastlingThroughCheckError, match="KING in CHECK"):
            _apply(board, "e1 g1")

    def test_through_attacked_square(self) -> None:
        board = Board.from_pieces({**_WHITE_HOME, "f5": "r"})
        with pytest.raises(CastlingThroughCheckError):
            _apply(board, "e1 g1")

    def test_onto_attacked_square(self) -> None:
        board = Board.from_pieces({**_WHITE_HOME, "g5": "r"})
        with pytest.raises(CastlingThroughCheckError):
            _apply(board, "e1 g1")

    def test_refusal_is_a_castling_error(self) -> None:
        with pytest.raises(CastlingError):
            _apply(Board.initial(), "e1 c1")

    def test_refused_castle_leaves_board_unchanged(self) -> None:
        board = Board.from_pieces({**_WHITE_HOME, "f5": "r"})
        before = board.copy()
        with pytest.raises(CastlingThroughCheckError):
            _apply(board, "e1 g1")
        assert board == before
        assert board.turn == Color.WHITE

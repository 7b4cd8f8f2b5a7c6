"""Candidate generation and legal-move enumeration.

Candidates are deliberately over-generated: whole ranks, files and diagonals
for sliders, every offset for knights and kings, every pawn push and capture.
Blocking and check-safety are left to :class:`LegalityChecker`, which stays the
single source of truth for whether a move is legal.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from chessbook.core.enums import (
    DIAGONAL_DIRECTIONS,
    STRAIGHT_DIRECTIONS,
    Color,
    Direction,
    PieceType,
)
from chessbook.core.errors import IllegalMoveError
from chessbook.core.geometry import KING_OFFSETS, KNIGHT_OFFSETS, offset_square, ray
from chessbook.core.legality import LegalityChecker
from chessbook.core.move import Move
from chessbook.core.types import Square, col_of, home_row, make_square, row_of

if TYPE_CHECKING:
    from chessbook.core.board import Board


_QUEEN_DIRECTIONS: frozenset[Direction] = STRAIGHT_DIRECTIONS | DIAGONAL_DIRECTIONS


class MoveGenerator:
    """Enumerates legal moves for the side to move on a :class:`Board`.

    The pawn tester writes the board's transient en-passant flag; the
    generator restores it before returning so that enumeration is
    side-effect free.
    """

    __slots__ = ("_board", "_checker")

    def __init__(self, board: Board) -> None:
        self._board = board
        self._checker = LegalityChecker(board)

    # -- Public API ---------------------------------------------------------

    def candidates(self, sq: Square) -> list[Move]:
        """Geometrically possible moves for the piece on *sq*.

        Ignores blocking and check-safety.  Empty when *sq* is empty.
        """
        piece = self._board[sq]
        if piece is None:
            return []

        kind = piece.piece_type
        if kind == PieceType.PAWN:
            return list(self._pawn_candidates(sq, piece.color))
        if kind == PieceType.KNIGHT:
            return list(self._offset_candidates(sq, KNIGHT_OFFSETS))
        if kind == PieceType.KING:
            return list(self._king_candidates(sq, piece.color))
        if kind == PieceType.BISHOP:
            return list(self._ray_candidates(sq, DIAGONAL_DIRECTIONS))
        if kind == PieceType.ROOK:
            return list(self._ray_candidates(sq, STRAIGHT_DIRECTIONS))
        return list(self._ray_candidates(sq, _QUEEN_DIRECTIONS))

    def legal_moves_from(self, sq: Square) -> list[Move]:
        """Legal moves for the piece on *sq* (empty if it is not on turn)."""
        piece = self._board[sq]
        if piece is None or piece.color != self._board.turn:
            return []
        return list(self._filter(self.candidates(sq)))

    def generate_legal_moves(self) -> list[Move]:
        """All strictly legal moves for the side to move."""
        legal: list[Move] = []
        for sq in self._own_squares():
            legal.extend(self._filter(self.candidates(sq)))
        return legal

    def has_legal_moves(self) -> bool:
        """Whether the side to move has at least one legal move."""
        for sq in self._own_squares():
            moves = self._filter(self.candidates(sq))
            try:
                if next(moves, None) is not None:
                    return True
            finally:
                moves.close()
        return False

    # -- Filtering ----------------------------------------------------------

    def _own_squares(self) -> list[Square]:
        return self._board.occupied(self._board.turn)

    def _filter(self, candidates: list[Move]) -> Iterator[Move]:
        board = self._board
        saved_flag = board.en_passant_armed
        try:
            for move in candidates:
                try:
                    yield self._checker.check(move)
                except IllegalMoveError:
                    continue
        finally:
            board.en_passant_armed = saved_flag

    # -- Piece-specific candidates (private) --------------------------------

    @staticmethod
    def _ray_candidates(
        sq: Square, directions: frozenset[Direction]
    ) -> Iterator[Move]:
        for direction in directions:
            for to_sq in ray(sq, direction):
                yield Move(sq, to_sq)

    @staticmethod
    def _offset_candidates(
        sq: Square, offsets: tuple[tuple[int, int], ...]
    ) -> Iterator[Move]:
        for d_col, d_row in offsets:
            to_sq = offset_square(sq, d_col, d_row)
            if to_sq is not None:
                yield Move(sq, to_sq)

    def _king_candidates(self, sq: Square, color: Color) -> Iterator[Move]:
        yield from self._offset_candidates(sq, KING_OFFSETS)
        if sq == make_square(4, home_row(color)):
            yield Move(sq, sq + 2)
            yield Move(sq, sq - 2)

    @staticmethod
    def _pawn_candidates(sq: Square, color: Color) -> Iterator[Move]:
        forward = 1 if color == Color.WHITE else -1
        start_row = 1 if color == Color.WHITE else 6
        last_row = 7 if color == Color.WHITE else 0
        row = row_of(sq)
        next_row = row + forward
        if not 0 <= next_row < 8:
            return

        # Promotion candidates carry a placeholder queen; the tester demands it.
        promotion = PieceType.QUEEN if next_row == last_row else None
        for d_col in (0, -1, 1):
            col = col_of(sq) + d_col
            if 0 <= col < 8:
                yield Move(sq, make_square(col, next_row), promotion=promotion)
        if row == start_row:
            yield Move(sq, make_square(col_of(sq), row + 2 * forward))

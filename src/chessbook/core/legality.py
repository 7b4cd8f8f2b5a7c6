"""Per-piece legality testers.

Each tester checks the shape of the move for its piece kind, the path and
capture rules, any piece-specific rule (castling, double push, en passant,
promotion), and always finishes at the check-safety gate.  A tester either
returns the resolved ``(flag, captured)`` pair or raises an
:class:`~chessbook.core.errors.IllegalMoveError` subclass.

Testers never touch the board's squares.  The only state they write is the
board's transient en-passant flag, which the pawn tester clears on entry and
arms after an en-passant capture passes the gate.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from typing import TYPE_CHECKING, TypeAlias

from chessbook.core.attacks import is_king_attacked, nearest_occupied
from chessbook.core.enums import (
    DIAGONAL_DIRECTIONS,
    PROMOTION_TYPES,
    STRAIGHT_DIRECTIONS,
    Color,
    Direction,
    MoveFlag,
    PieceType,
)
from chessbook.core.errors import (
    CannotCaptureEmptySquareError,
    CannotCaptureOwnPieceError,
    CastlingBlockedError,
    CastlingKingMovedError,
    CastlingRookMovedError,
    CastlingThroughCheckError,
    IllegalMoveError,
    InvalidPromotionError,
    KingWouldBeInCheckError,
    NotYourPieceError,
    PathBlockedError,
    PromotionRequiredError,
    WrongShapeForPieceError,
)
from chessbook.core.geometry import distance, is_knight_jump, resolve_direction, step
from chessbook.core.move import Move
from chessbook.core.piece import Piece
from chessbook.core.safety import king_safe_after
from chessbook.core.types import Square, col_of, home_row, make_square, row_of

if TYPE_CHECKING:
    from chessbook.core.board import Board

Verdict: TypeAlias = tuple[MoveFlag, "PieceType | None"]

_PAWN_FORWARD: dict[Color, Direction] = {
    Color.WHITE: Direction.N,
    Color.BLACK: Direction.S,
}
_PAWN_CAPTURES: dict[Color, frozenset[Direction]] = {
    Color.WHITE: frozenset((Direction.NE, Direction.NW)),
    Color.BLACK: frozenset((Direction.SE, Direction.SW)),
}
_PAWN_START_ROW: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: 6}
_PAWN_LAST_ROW: dict[Color, int] = {Color.WHITE: 7, Color.BLACK: 0}

_KING_COL = 4


def _doesnt_move_that_way(piece: Piece) -> WrongShapeForPieceError:
    return WrongShapeForPieceError(f"{piece.piece_type.name} doesn't move that way")


class LegalityChecker:
    """Validates proposed moves against the current :class:`Board`."""

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    # ── Public API ───────────────────────────────────────────────────────

    def check(self, move: Move) -> Move:
        """Validate *move* for the side to move.

        Returns a copy of *move* carrying the piece snapshot, the resolved
        :class:`MoveFlag` and the captured kind.  Raises an
        ``IllegalMoveError`` subclass when the move is not legal.
        """
        piece = self._board[move.from_sq]
        if piece is None or piece.color != self._board.turn:
            raise NotYourPieceError()

        flag, captured = self._TESTERS[piece.piece_type](self, move, piece)
        return replace(
            move,
            piece=piece.snapshot(),
            flag=flag,
            captured=captured,
            promotion=move.promotion if flag == MoveFlag.PROMOTION else None,
        )

    def is_legal(self, move: Move) -> bool:
        try:
            self.check(move)
        except IllegalMoveError:
            return False
        return True

    # ── Check-safety gate ────────────────────────────────────────────────

    def _gate(
        self,
        move: Move,
        *,
        promotion: PieceType | None = None,
        en_passant: bool = False,
    ) -> None:
        if not king_safe_after(
            self._board.grid,
            move.from_sq,
            move.to_sq,
            promotion=promotion,
            en_passant=en_passant,
        ):
            raise KingWouldBeInCheckError()

    def _captured_at(self, sq: Square, piece: Piece) -> PieceType | None:
        target = self._board[sq]
        if target is None:
            return None
        if target.color == piece.color:
            raise CannotCaptureOwnPieceError()
        return target.piece_type

    # ── Sliding pieces ───────────────────────────────────────────────────

    def _test_sliding(
        self,
        move: Move,
        piece: Piece,
        allowed: frozenset[Direction] | None,
    ) -> Verdict:
        direction = resolve_direction(move.from_sq, move.to_sq)
        if direction is None or (allowed is not None and direction not in allowed):
            raise _doesnt_move_that_way(piece)

        blocker = nearest_occupied(self._board.grid, move.from_sq, direction)
        captured: PieceType | None = None
        if blocker is not None:
            reach = distance(move.from_sq, move.to_sq)
            block = distance(move.from_sq, blocker)
            if reach > block:
                raise PathBlockedError()
            if reach == block:
                captured = self._captured_at(blocker, piece)

        self._gate(move)
        return MoveFlag.NORMAL, captured

    def _test_rook(self, move: Move, piece: Piece) -> Verdict:
        return self._test_sliding(move, piece, STRAIGHT_DIRECTIONS)

    def _test_bishop(self, move: Move, piece: Piece) -> Verdict:
        return self._test_sliding(move, piece, DIAGONAL_DIRECTIONS)

    def _test_queen(self, move: Move, piece: Piece) -> Verdict:
        return self._test_sliding(move, piece, None)

    # ── Knight ───────────────────────────────────────────────────────────

    def _test_knight(self, move: Move, piece: Piece) -> Verdict:
        direction = resolve_direction(move.from_sq, move.to_sq)
        if direction is not None or not is_knight_jump(move.from_sq, move.to_sq):
            raise _doesnt_move_that_way(piece)
        captured = self._captured_at(move.to_sq, piece)
        self._gate(move)
        return MoveFlag.NORMAL, captured

    # ── King and castling ────────────────────────────────────────────────

    def _test_king(self, move: Move, piece: Piece) -> Verdict:
        direction = resolve_direction(move.from_sq, move.to_sq)
        if direction is None:
            raise _doesnt_move_that_way(piece)

        d_col = col_of(move.to_sq) - col_of(move.from_sq)
        if direction in (Direction.E, Direction.W) and abs(d_col) == 2:
            return self._test_castle(move, piece, direction)
        if distance(move.from_sq, move.to_sq) != 1:
            raise WrongShapeForPieceError("Can't move more than one square")

        captured = self._captured_at(move.to_sq, piece)
        self._gate(move)
        return MoveFlag.NORMAL, captured

    def _test_castle(self, move: Move, piece: Piece, direction: Direction) -> Verdict:
        grid = self._board.grid
        row = home_row(piece.color)

        if piece.has_moved or move.from_sq != make_square(_KING_COL, row):
            raise CastlingKingMovedError()
        if is_king_attacked(grid, piece.color):
            raise CastlingThroughCheckError("Can't Castle if KING in CHECK")

        rook_sq = make_square(7 if direction == Direction.E else 0, row)
        rook = grid[rook_sq]
        if rook is None or rook.piece_type != PieceType.ROOK or rook.color != piece.color:
            raise CastlingRookMovedError("Can't Castle without a ROOK")
        if rook.has_moved:
            raise CastlingRookMovedError()

        if nearest_occupied(grid, move.from_sq, direction) != rook_sq:
            raise CastlingBlockedError()

        # The second crossing square is the landing square itself.
        crossing = step(move.from_sq, direction)
        for _ in range(2):
            assert crossing is not None
            if not king_safe_after(grid, move.from_sq, crossing):
                raise CastlingThroughCheckError()
            crossing = step(crossing, direction)

        if direction == Direction.E:
            return MoveFlag.CASTLE_KINGSIDE, None
        return MoveFlag.CASTLE_QUEENSIDE, None

    # ── Pawn ─────────────────────────────────────────────────────────────

    def _test_pawn(self, move: Move, piece: Piece) -> Verdict:
        board = self._board
        board.en_passant_armed = False

        direction = resolve_direction(move.from_sq, move.to_sq)
        rows = abs(row_of(move.to_sq) - row_of(move.from_sq))
        flag = MoveFlag.NORMAL
        captured: PieceType | None = None
        en_passant = False

        if direction == _PAWN_FORWARD[piece.color]:
            if rows == 1:
                if board[move.to_sq] is not None:
                    raise PathBlockedError()
            elif rows == 2:
                if row_of(move.from_sq) != _PAWN_START_ROW[piece.color]:
                    raise WrongShapeForPieceError("PAWN can't move that way")
                middle = step(move.from_sq, direction)
                if board[middle] is not None or board[move.to_sq] is not None:
                    raise PathBlockedError()
                flag = MoveFlag.DOUBLE_PAWN
            else:
                raise WrongShapeForPieceError("PAWN can't move that way")
        elif direction in _PAWN_CAPTURES[piece.color]:
            if rows != 1:
                raise WrongShapeForPieceError("Can't capture more than one piece")
            captured = self._captured_at(move.to_sq, piece)
            if captured is None:
                if not self._is_en_passant(move, piece):
                    raise CannotCaptureEmptySquareError()
                en_passant = True
                captured = PieceType.PAWN
                flag = MoveFlag.EN_PASSANT
        else:
            raise _doesnt_move_that_way(piece)

        promotion: PieceType | None = None
        if row_of(move.to_sq) == _PAWN_LAST_ROW[piece.color]:
            if move.promotion is None:
                raise PromotionRequiredError()
            if move.promotion not in PROMOTION_TYPES:
                raise InvalidPromotionError()
            promotion = move.promotion
            flag = MoveFlag.PROMOTION

        self._gate(move, promotion=promotion, en_passant=en_passant)
        if en_passant:
            board.en_passant_armed = True
        return flag, captured

    def _is_en_passant(self, move: Move, piece: Piece) -> bool:
        """Did the previous move push an enemy pawn two squares to beside us?"""
        last = self._board.last_move
        if last is None:
            return False
        victim_sq = make_square(col_of(move.to_sq), row_of(move.from_sq))
        victim = self._board[victim_sq]
        return (
            victim is not None
            and victim.piece_type == PieceType.PAWN
            and victim.color != piece.color
            and last.to_sq == victim_sq
            and abs(row_of(last.from_sq) - row_of(last.to_sq)) == 2
        )

    _TESTERS: dict[PieceType, Callable[[LegalityChecker, Move, Piece], Verdict]] = {
        PieceType.PAWN: _test_pawn,
        PieceType.KNIGHT: _test_knight,
        PieceType.BISHOP: _test_bishop,
        PieceType.ROOK: _test_rook,
        PieceType.QUEEN: _test_queen,
        PieceType.KING: _test_king,
    }

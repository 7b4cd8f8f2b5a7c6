"""Board - piece placement, turn and game-end state on an 8x8 board."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from chessbook.core.attacks import is_king_attacked
from chessbook.core.enums import COUNTED_TYPES, Color, GameEndReason, MoveFlag, PieceType
from chessbook.core.errors import (
    GameAlreadyOverError,
    IllegalMoveError,
    MoveInputError,
    OutOfBoundsError,
    ReplayError,
)
from chessbook.core.legality import LegalityChecker
from chessbook.core.move import Move
from chessbook.core.move_generator import MoveGenerator
from chessbook.core.piece import Piece
from chessbook.core.rules import Rules
from chessbook.core.types import (
    Square,
    col_of,
    is_valid_square,
    make_square,
    parse_square,
    row_of,
    square_name,
)

_LOGGER = logging.getLogger(__name__)

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

_INITIAL_CREATED: dict[PieceType, int] = {
    PieceType.PAWN: 8,
    PieceType.ROOK: 2,
    PieceType.KNIGHT: 2,
    PieceType.BISHOP: 2,
    PieceType.QUEEN: 1,
}

CHECKMATE_DESCRIPTION = "Checkmate"
STALEMATE_DESCRIPTION = "Stalemate"


class Board:
    """Mutable 64-square board and the single move-commit pathway.

    Moves enter through :meth:`apply_move`, which validates them without
    touching any square, commits them, flips the turn and then checks for
    checkmate or stalemate.  A rejected move leaves the board unchanged.

    Not thread-safe: callers serialise moves against one board.
    """

    __slots__ = (
        "_squares",
        "_created",
        "turn",
        "last_move",
        "en_passant_armed",
        "finished",
        "winner",
        "description",
        "end_reason",
    )

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * 64
        # (color, piece_type) -> pieces of that kind ever created; kings excluded.
        self._created: dict[tuple[Color, PieceType], int] = {
            (color, pt): 0 for color in Color for pt in COUNTED_TYPES
        }
        self.turn = Color.WHITE
        self.last_move: Move | None = None
        # Armed by the pawn tester after an en-passant capture passes the gate.
        self.en_passant_armed = False
        self.finished = False
        self.winner: Color | None = None
        self.description = ""
        self.end_reason: GameEndReason | None = None

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        self._squares[sq] = piece

    @property
    def grid(self) -> list[Piece | None]:
        """The live square list; read it, never write through it."""
        return self._squares

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq] is None

    def piece_at(self, name: str) -> Piece | None:
        """Piece on the algebraic square *name*, e.g. ``"e1"``."""
        return self._squares[parse_square(name)]

    # -- Query helpers ------------------------------------------------------

    def occupied(self, color: Color) -> list[Square]:
        """All squares occupied by *color*."""
        return [
            sq
            for sq, piece in enumerate(self._squares)
            if piece is not None and piece.color == color
        ]

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*."""
        return [
            sq
            for sq in self.occupied(color)
            if self._squares[sq].piece_type == piece_type  # type: ignore[union-attr]
        ]

    def is_in_check(self) -> bool:
        """Is the side to move currently in check?"""
        return is_king_attacked(self._squares, self.turn)

    def render(self, sq: Square) -> str:
        """Unicode figurine for the square, or a blank for an empty one."""
        piece = self._squares[sq]
        return piece.symbol if piece is not None else " "

    def legal_destinations(self, name: str) -> list[str]:
        """Legal target squares for the piece on *name*, in algebraic form.

        Pieces of the side not on turn, empty squares and finished games
        yield an empty list.

        Raises:
            MoveInputError: *name* is not an algebraic square.
        """
        try:
            sq = parse_square(name)
        except ValueError as exc:
            raise MoveInputError(str(exc)) from exc
        if self.finished:
            return []
        moves = MoveGenerator(self).legal_moves_from(sq)
        return [square_name(move.to_sq) for move in moves]

    def created_count(self, color: Color, piece_type: PieceType) -> int:
        return self._created[(color, piece_type)]

    def captured_counts(self) -> dict[Color, dict[PieceType, int]]:
        """Captured pieces per colour per kind, as ``created − on board``.

        A pawn that promoted and was later captured is tallied under its
        promoted kind: promotion bumps that kind's creation counter and the
        pawn counter is never decremented.
        """
        on_board = {key: 0 for key in self._created}
        for piece in self._squares:
            if piece is not None and piece.piece_type != PieceType.KING:
                on_board[(piece.color, piece.piece_type)] += 1
        return {
            color: {
                pt: self._created[(color, pt)] - on_board[(color, pt)]
                for pt in COUNTED_TYPES
            }
            for color in Color
        }

    # -- Move pathway -------------------------------------------------------

    def apply_move(self, move: Move) -> Move:
        """Validate and commit *move* for the side to move.

        Returns the committed move with its piece snapshot, flag and captured
        kind filled in.

        Raises:
            IllegalMoveError: one of its subclasses naming the broken rule.
        """
        if self.finished:
            raise GameAlreadyOverError(self._game_over_message())
        if not (is_valid_square(move.from_sq) and is_valid_square(move.to_sq)):
            raise OutOfBoundsError()

        resolved = LegalityChecker(self).check(move)
        self._commit(resolved)
        self.last_move = resolved
        self.turn = self.turn.opposite
        _LOGGER.debug("Committed %s (%s)", resolved, resolved.flag.name)

        reason = Rules.terminal_state(self)
        if reason == GameEndReason.CHECKMATE:
            self.finish(self.turn.opposite, CHECKMATE_DESCRIPTION, reason)
        elif reason == GameEndReason.STALEMATE:
            self.finish(None, STALEMATE_DESCRIPTION, reason)
        return resolved

    def _commit(self, move: Move) -> None:
        squares = self._squares
        piece = squares[move.from_sq]
        assert piece is not None
        squares[move.from_sq] = None

        if move.flag == MoveFlag.PROMOTION and move.promotion is not None:
            placed = Piece(piece.color, move.promotion)
            self._created[(piece.color, move.promotion)] += 1
        else:
            placed = piece
            placed.move_count += 1
        squares[move.to_sq] = placed

        if move.flag == MoveFlag.EN_PASSANT:
            squares[make_square(col_of(move.to_sq), row_of(move.from_sq))] = None
            self.en_passant_armed = False
        elif move.is_castling:
            row = row_of(move.from_sq)
            if move.flag == MoveFlag.CASTLE_KINGSIDE:
                rook_from, rook_to = make_square(7, row), make_square(5, row)
            else:
                rook_from, rook_to = make_square(0, row), make_square(3, row)
            rook = squares[rook_from]
            assert rook is not None
            squares[rook_from] = None
            squares[rook_to] = rook
            rook.move_count += 1

    def finish(
        self,
        winner: Color | None,
        description: str,
        reason: GameEndReason | None = None,
    ) -> None:
        """End the game.  Irreversible; bypasses move validation."""
        if self.finished:
            raise GameAlreadyOverError(self._game_over_message())
        self.finished = True
        self.winner = winner
        self.description = description
        self.end_reason = reason
        _LOGGER.info(
            "Game finished: %s (winner: %s)",
            description,
            winner.title if winner is not None else "none",
        )

    def _game_over_message(self) -> str:
        if self.winner is None:
            return f"Game is already over, {self.description or 'Draw'}"
        return f"Game is already over, {self.winner.title} won"

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        """Independent copy; pieces are duplicated so move counts diverge."""
        b = Board()
        b._squares = [p.snapshot() if p is not None else None for p in self._squares]
        b._created = self._created.copy()
        b.turn = self.turn
        b.last_move = self.last_move
        b.en_passant_armed = self.en_passant_armed
        b.finished = self.finished
        b.winner = self.winner
        b.description = self.description
        b.end_reason = self.end_reason
        return b

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for col in range(8):
            b[make_square(col, 1)] = Piece(Color.WHITE, PieceType.PAWN)
            b[make_square(col, 6)] = Piece(Color.BLACK, PieceType.PAWN)
        for col, pt in enumerate(_BACK_RANK):
            b[make_square(col, 0)] = Piece(Color.WHITE, pt)
            b[make_square(col, 7)] = Piece(Color.BLACK, pt)
        for color in Color:
            for pt, count in _INITIAL_CREATED.items():
                b._created[(color, pt)] = count
        return b

    @classmethod
    def empty(cls) -> Board:
        """A board with no pieces, White to move."""
        return cls()

    @classmethod
    def from_pieces(
        cls,
        placement: Mapping[str, str | Piece],
        turn: Color = Color.WHITE,
    ) -> Board:
        """Build an arbitrary position, e.g. ``{"e1": "K", "e8": "k"}``.

        Creation counters start at the number of pieces placed.
        """
        b = cls()
        for name, entry in placement.items():
            piece = Piece.from_char(entry) if isinstance(entry, str) else entry
            b[parse_square(name)] = piece
            if piece.piece_type != PieceType.KING:
                b._created[(piece.color, piece.piece_type)] += 1
        b.turn = turn
        return b

    @classmethod
    def from_moves(cls, moves: Iterable[Move]) -> Board:
        """Replay an ordered move history from the starting position.

        Raises:
            ReplayError: a stored move is rejected; carries its index.
        """
        b = cls.initial()
        for index, move in enumerate(moves):
            try:
                b.apply_move(move)
            except IllegalMoveError as exc:
                raise ReplayError(index, exc) from exc
        _LOGGER.debug("Replayed board to turn %s", b.turn)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares and self.turn == other.turn

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(7, -1, -1):
            cells = []
            for col in range(8):
                p = self[make_square(col, row)]
                cells.append(str(p) if p else ".")
            rows.append(f"{row + 1} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)

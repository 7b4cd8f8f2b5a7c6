"""Piece — a single chess piece owned by the square that holds it."""

from __future__ import annotations

from dataclasses import dataclass

from chessbook.core.enums import Color, PieceType

_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "P",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}
_FROM_LETTER: dict[str, PieceType] = {v: k for k, v in _LETTERS.items()}

_UNICODE: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.KING): "♔",
    (Color.BLACK, PieceType.PAWN): "♟",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.KING): "♚",
}


@dataclass(slots=True)
class Piece:
    """A piece on the board.

    ``move_count`` counts the moves made by this exact piece since it came
    into existence; it only gates castling eligibility.
    """

    color: Color
    piece_type: PieceType
    move_count: int = 0

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """Piece letter (uppercase = white, lowercase = black)."""
        letter = _LETTERS[self.piece_type]
        return letter if self.color == Color.WHITE else letter.lower()

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from its letter, e.g. 'N' → white knight."""
        try:
            ptype = _FROM_LETTER[char.upper()]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(Color.WHITE if char.isupper() else Color.BLACK, ptype)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.piece_type)]

    @property
    def has_moved(self) -> bool:
        return self.move_count > 0

    def snapshot(self) -> Piece:
        """Independent copy, frozen in time for a :class:`Move` record."""
        return Piece(self.color, self.piece_type, self.move_count)

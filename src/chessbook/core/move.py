"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass, replace

from chessbook.core.enums import MoveFlag, PieceType
from chessbook.core.piece import Piece
from chessbook.core.types import Square, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable record of a single chess move.

    Callers only need ``from_sq``/``to_sq`` (and ``promotion`` when a pawn
    reaches the last rank).  The engine fills ``piece``, ``flag`` and
    ``captured`` when the move is committed.  ``player_id``, ``elapsed_ms``
    and ``order`` are carried for persistence and ignored by the rules.
    """

    from_sq: Square
    to_sq: Square
    promotion: PieceType | None = None
    piece: Piece | None = None
    flag: MoveFlag = MoveFlag.NORMAL
    captured: PieceType | None = None
    player_id: int | None = None
    elapsed_ms: int = 0
    order: int | None = None

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)} {square_name(self.to_sq)}"
        if self.promotion is not None:
            base += f" {self.promotion.name}"
        return base

    @property
    def is_castling(self) -> bool:
        return self.flag in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)

    def with_metadata(self, **changes: object) -> Move:
        """Copy with some fields replaced."""
        return replace(self, **changes)

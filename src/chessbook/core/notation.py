"""Text move input: ``"<from> <to> [QUEEN|ROOK|BISHOP|KNIGHT]"``.

Examples: ``"e2 e4"``, ``"a7 a8 QUEEN"``.  Input is checked here, before it
reaches the engine; a well-formed move may of course still be illegal.
"""

from __future__ import annotations

from chessbook.core.enums import PROMOTION_TYPES, PieceType
from chessbook.core.errors import MoveInputError
from chessbook.core.move import Move
from chessbook.core.types import FILES, RANKS, parse_square

_PROMOTION_TOKENS: dict[str, PieceType] = {pt.name: pt for pt in PROMOTION_TYPES}


def _is_square(token: str) -> bool:
    return len(token) == 2 and token[0] in FILES and token[1] in RANKS


def verify_input(text: str) -> bool:
    """Whether *text* is a well-formed move, e.g. ``"a1 b2"`` or ``"a7 a8 QUEEN"``."""
    parts = text.split()
    if not 2 <= len(parts) <= 3:
        return False
    if not (_is_square(parts[0]) and _is_square(parts[1])):
        return False
    return len(parts) == 2 or parts[2] in _PROMOTION_TOKENS


def parse_move_input(
    text: str,
    *,
    player_id: int | None = None,
    elapsed_ms: int = 0,
    order: int | None = None,
) -> Move:
    """Parse *text* into a :class:`Move` carrying the given metadata.

    Raises:
        MoveInputError: *text* is not ``<from> <to> [PROMOTION]``.
    """
    if not verify_input(text):
        raise MoveInputError(f"Invalid move input: {text!r}")
    parts = text.split()
    promotion = _PROMOTION_TOKENS[parts[2]] if len(parts) == 3 else None
    return Move(
        parse_square(parts[0]),
        parse_square(parts[1]),
        promotion=promotion,
        player_id=player_id,
        elapsed_ms=elapsed_ms,
        order=order,
    )


def move_to_text(move: Move) -> str:
    """Inverse of :func:`parse_move_input` (metadata is dropped)."""
    return str(move)

"""Check-safety simulation: would a move leave the mover's own king attacked?"""

from __future__ import annotations

from chessbook.core.attacks import Grid, is_king_attacked
from chessbook.core.enums import Color, PieceType
from chessbook.core.piece import Piece
from chessbook.core.types import Square, col_of, make_square, row_of


def simulate(
    grid: Grid,
    from_sq: Square,
    to_sq: Square,
    *,
    promotion: PieceType | None = None,
    en_passant: bool = False,
) -> list[Piece | None]:
    """Return a new grid with the square-level effect of the move applied.

    The copy is shallow: pieces are shared with *grid* and must not be
    mutated through it.
    """
    result = list(grid)
    piece = result[from_sq]
    if piece is None:
        raise ValueError(f"No piece on {from_sq}")

    result[from_sq] = None
    if promotion is not None and piece.piece_type == PieceType.PAWN:
        result[to_sq] = Piece(piece.color, promotion)
    else:
        result[to_sq] = piece

    if en_passant:
        # The captured pawn sits beside the origin, on the target file.
        result[make_square(col_of(to_sq), row_of(from_sq))] = None
    return result


def king_safe_after(
    grid: Grid,
    from_sq: Square,
    to_sq: Square,
    *,
    promotion: PieceType | None = None,
    en_passant: bool = False,
) -> bool:
    """Whether the mover's king is unattacked once the move is made."""
    piece = grid[from_sq]
    if piece is None:
        raise ValueError(f"No piece on {from_sq}")
    color: Color = piece.color
    after = simulate(
        grid, from_sq, to_sq, promotion=promotion, en_passant=en_passant
    )
    return not is_king_attacked(after, color)

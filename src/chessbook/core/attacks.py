"""Ray scanning and attack detection over a 64-square grid.

The functions take a bare grid rather than a :class:`Board` so the same code
answers both "is my king in check now" and, through :mod:`chessbook.core.safety`,
"would it be in check after this hypothetical move".
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, TypeAlias

from chessbook.core.enums import (
    DIAGONAL_DIRECTIONS,
    STRAIGHT_DIRECTIONS,
    Color,
    Direction,
    PieceType,
)
from chessbook.core.geometry import KING_OFFSETS, KNIGHT_OFFSETS, offset_square, ray
from chessbook.core.types import Square

if TYPE_CHECKING:
    from chessbook.core.piece import Piece

Grid: TypeAlias = Sequence["Piece | None"]

_STRAIGHT_ATTACKERS = (PieceType.ROOK, PieceType.QUEEN)
_DIAGONAL_ATTACKERS = (PieceType.BISHOP, PieceType.QUEEN)


def nearest_occupied(grid: Grid, sq: Square, direction: Direction) -> Square | None:
    """First occupied square along *direction* from *sq*, or ``None``."""
    for to_sq in ray(sq, direction):
        if grid[to_sq] is not None:
            return to_sq
    return None


def _slider_hits(
    grid: Grid,
    sq: Square,
    by_color: Color,
    directions: frozenset[Direction],
    kinds: tuple[PieceType, ...],
) -> bool:
    for direction in directions:
        hit = nearest_occupied(grid, sq, direction)
        if hit is None:
            continue
        piece = grid[hit]
        if piece.color == by_color and piece.piece_type in kinds:
            return True
    return False


def _offset_hits(
    grid: Grid,
    sq: Square,
    by_color: Color,
    offsets: tuple[tuple[int, int], ...],
    kind: PieceType,
) -> bool:
    for d_col, d_row in offsets:
        from_sq = offset_square(sq, d_col, d_row)
        if from_sq is None:
            continue
        piece = grid[from_sq]
        if piece is not None and piece.color == by_color and piece.piece_type == kind:
            return True
    return False


def is_square_attacked(grid: Grid, sq: Square, by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color*?"""
    if _slider_hits(grid, sq, by_color, STRAIGHT_DIRECTIONS, _STRAIGHT_ATTACKERS):
        return True
    if _slider_hits(grid, sq, by_color, DIAGONAL_DIRECTIONS, _DIAGONAL_ATTACKERS):
        return True
    if _offset_hits(grid, sq, by_color, KNIGHT_OFFSETS, PieceType.KNIGHT):
        return True

    # A pawn attacks one step diagonally forward, so look one row behind
    # the target from the attacker's point of view.
    pawn_row = -1 if by_color == Color.WHITE else 1
    pawn_offsets = ((-1, pawn_row), (1, pawn_row))
    if _offset_hits(grid, sq, by_color, pawn_offsets, PieceType.PAWN):
        return True

    return _offset_hits(grid, sq, by_color, KING_OFFSETS, PieceType.KING)


def find_king(grid: Grid, color: Color) -> Square | None:
    """Square of *color*'s king, or ``None`` if it is not on the grid."""
    for sq, piece in enumerate(grid):
        if (
            piece is not None
            and piece.color == color
            and piece.piece_type == PieceType.KING
        ):
            return sq
    return None


def is_king_attacked(grid: Grid, color: Color) -> bool:
    """Is *color*'s king attacked?  A missing king is never in check."""
    king_sq = find_king(grid, color)
    if king_sq is None:
        return False
    return is_square_attacked(grid, king_sq, color.opposite)

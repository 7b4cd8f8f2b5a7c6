"""Board geometry: direction resolution and the ray-walking primitive.

Every sliding-piece test, the attack scanner and the candidate generator walk
the board through :func:`ray`, so there is exactly one place that knows how
to step along a line of squares.
"""

from __future__ import annotations

from collections.abc import Iterator

from chessbook.core.enums import Direction
from chessbook.core.errors import SameSquareError
from chessbook.core.types import Square, col_of, make_square, on_board, row_of

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

# (d_col sign, d_row sign) -> direction
_BY_SIGN: dict[tuple[int, int], Direction] = {d.delta: d for d in Direction}


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def resolve_direction(from_sq: Square, to_sq: Square) -> Direction | None:
    """Classify the vector ``from_sq → to_sq``.

    Returns the compass direction when the vector is rectilinear or exactly
    diagonal, ``None`` when it is neither (knight jumps and the like).

    Raises:
        SameSquareError: ``from_sq == to_sq``.
    """
    d_col = col_of(to_sq) - col_of(from_sq)
    d_row = row_of(to_sq) - row_of(from_sq)
    if d_col == 0 and d_row == 0:
        raise SameSquareError()
    if d_col != 0 and d_row != 0 and abs(d_col) != abs(d_row):
        return None
    return _BY_SIGN[(_sign(d_col), _sign(d_row))]


def offset_square(sq: Square, d_col: int, d_row: int) -> Square | None:
    """Square ``(d_col, d_row)`` away from *sq*, or ``None`` off the board."""
    col = col_of(sq) + d_col
    row = row_of(sq) + d_row
    if not on_board(col, row):
        return None
    return make_square(col, row)


def step(sq: Square, direction: Direction) -> Square | None:
    """The neighbour of *sq* in *direction*, or ``None`` at the edge."""
    d_col, d_row = direction.delta
    return offset_square(sq, d_col, d_row)


def ray(sq: Square, direction: Direction) -> Iterator[Square]:
    """Squares from *sq* (exclusive) outward to the board edge."""
    d_col, d_row = direction.delta
    col = col_of(sq) + d_col
    row = row_of(sq) + d_row
    while on_board(col, row):
        yield make_square(col, row)
        col += d_col
        row += d_row


def distance(a: Square, b: Square) -> int:
    """Chebyshev distance, i.e. the number of king steps from *a* to *b*."""
    return max(abs(col_of(a) - col_of(b)), abs(row_of(a) - row_of(b)))


def is_knight_jump(from_sq: Square, to_sq: Square) -> bool:
    d_col = abs(col_of(to_sq) - col_of(from_sq))
    d_row = abs(row_of(to_sq) - row_of(from_sq))
    return (d_col, d_row) in ((1, 2), (2, 1))

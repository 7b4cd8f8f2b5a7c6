"""Core enumerations and flags for the chess domain."""

from __future__ import annotations

from enum import IntEnum


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def title(self) -> str:
        """Capitalised name used in end-of-game descriptions."""
        return self.name.capitalize()

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


# Kinds a pawn may promote to, in the order offered to players.
PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)

# Kinds tracked by the captured-piece tally (kings are never captured).
COUNTED_TYPES: tuple[PieceType, ...] = (
    PieceType.PAWN,
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
)


class Direction(IntEnum):
    """The eight compass rays, seen from White's side of the board."""

    N = 0
    S = 1
    E = 2
    W = 3
    NE = 4
    NW = 5
    SE = 6
    SW = 7

    @property
    def delta(self) -> tuple[int, int]:
        """``(d_col, d_row)`` of a single step."""
        return _DELTAS[self]


_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.N: (0, 1),
    Direction.S: (0, -1),
    Direction.E: (1, 0),
    Direction.W: (-1, 0),
    Direction.NE: (1, 1),
    Direction.NW: (-1, 1),
    Direction.SE: (1, -1),
    Direction.SW: (-1, -1),
}

STRAIGHT_DIRECTIONS: frozenset[Direction] = frozenset(
    (Direction.N, Direction.S, Direction.E, Direction.W)
)
DIAGONAL_DIRECTIONS: frozenset[Direction] = frozenset(
    (Direction.NE, Direction.NW, Direction.SE, Direction.SW)
)


class MoveFlag(IntEnum):
    """Special move classification, resolved by the engine on commit."""

    NORMAL = 0
    DOUBLE_PAWN = 1
    EN_PASSANT = 2
    CASTLE_KINGSIDE = 3
    CASTLE_QUEENSIDE = 4
    PROMOTION = 5


class GameEndReason(IntEnum):
    """Why a game finished."""

    CHECKMATE = 1
    STALEMATE = 2
    RESIGNATION = 3
    DRAW_AGREED = 4


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3

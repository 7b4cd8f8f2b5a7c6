"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from chessbook.core import Board, parse_move_input

    board = Board.initial()
    board.apply_move(parse_move_input("e2 e4"))
    print(board.legal_destinations("e7"))
"""

from chessbook.core.board import Board
from chessbook.core.enums import (
    Color,
    Direction,
    GameEndReason,
    GameResult,
    MoveFlag,
    PieceType,
)
from chessbook.core.errors import (
    CannotCaptureEmptySquareError,
    CannotCaptureOwnPieceError,
    CastlingBlockedError,
    CastlingError,
    CastlingKingMovedError,
    CastlingRookMovedError,
    CastlingThroughCheckError,
    ChessError,
    GameAlreadyOverError,
    IllegalMoveError,
    InvalidPromotionError,
    KingWouldBeInCheckError,
    MoveInputError,
    NotYourPieceError,
    NotYourTurnError,
    OutOfBoundsError,
    PathBlockedError,
    PromotionRequiredError,
    ReplayError,
    SameSquareError,
    UnknownPlayerError,
    WrongShapeForPieceError,
)
from chessbook.core.move import Move
from chessbook.core.move_generator import MoveGenerator
from chessbook.core.notation import move_to_text, parse_move_input, verify_input
from chessbook.core.piece import Piece
from chessbook.core.rules import Rules
from chessbook.core.types import (
    Square,
    col_of,
    make_square,
    parse_square,
    row_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "Color",
    "Direction",
    "GameEndReason",
    "GameResult",
    "MoveFlag",
    "PieceType",
    # Types / helpers
    "Square",
    "col_of",
    "make_square",
    "parse_square",
    "row_of",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Rules",
    # Notation
    "move_to_text",
    "parse_move_input",
    "verify_input",
    # Errors
    "CannotCaptureEmptySquareError",
    "CannotCaptureOwnPieceError",
    "CastlingBlockedError",
    "CastlingError",
    "CastlingKingMovedError",
    "CastlingRookMovedError",
    "CastlingThroughCheckError",
    "ChessError",
    "GameAlreadyOverError",
    "IllegalMoveError",
    "InvalidPromotionError",
    "KingWouldBeInCheckError",
    "MoveInputError",
    "NotYourPieceError",
    "NotYourTurnError",
    "OutOfBoundsError",
    "PathBlockedError",
    "PromotionRequiredError",
    "ReplayError",
    "SameSquareError",
    "UnknownPlayerError",
    "WrongShapeForPieceError",
]

"""Exception hierarchy for the rules engine and the game layer.

Every rejected move raises a distinct :class:`IllegalMoveError` subclass
carrying a stable ``code`` (for callers that map errors onto responses) and a
human-readable message (for direct display).  Validation never mutates the
board, so catching one of these always leaves the game exactly as it was.
"""

from __future__ import annotations


class ChessError(Exception):
    """Base exception class for all chessbook errors."""

    code = "chess_error"
    default_message = "Chess error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


# ── Move legality ────────────────────────────────────────────────────────────


class IllegalMoveError(ChessError, ValueError):
    """A proposed move breaks a rule and was not applied."""

    code = "illegal_move"
    default_message = "Illegal move"


class GameAlreadyOverError(IllegalMoveError):
    code = "game_already_over"
    default_message = "Game is already over"


class NotYourPieceError(IllegalMoveError):
    code = "not_your_piece"
    default_message = "You don't have access to that square"


class OutOfBoundsError(IllegalMoveError):
    code = "out_of_bounds"
    default_message = "Move out of bounds"


class SameSquareError(IllegalMoveError):
    code = "same_square"
    default_message = "Can't stay in the same spot"


class WrongShapeForPieceError(IllegalMoveError):
    code = "wrong_shape_for_piece"
    default_message = "That piece doesn't move that way"


class PathBlockedError(IllegalMoveError):
    code = "path_blocked"
    default_message = "You have a piece in your way"


class CannotCaptureOwnPieceError(IllegalMoveError):
    code = "cannot_capture_own_piece"
    default_message = "Can't capture your own pieces"


class CannotCaptureEmptySquareError(IllegalMoveError):
    code = "cannot_capture_empty_square"
    default_message = "Can't capture an empty square"


class PromotionRequiredError(IllegalMoveError):
    code = "promotion_required"
    default_message = "Pawn promotion requires a piece type"


class InvalidPromotionError(IllegalMoveError):
    code = "invalid_promotion"
    default_message = "A pawn can only promote to a QUEEN, ROOK, BISHOP or KNIGHT"


class KingWouldBeInCheckError(IllegalMoveError):
    code = "king_would_be_in_check"
    default_message = "KING will be in 'CHECK'"


class CastlingError(IllegalMoveError):
    """Base class for the castling-specific refusals."""

    code = "castling_error"
    default_message = "Can't Castle"


class CastlingBlockedError(CastlingError):
    code = "castling_blocked"
    default_message = "There is a piece in the way"


class CastlingKingMovedError(CastlingError):
    code = "castling_king_moved"
    default_message = "Can't Castle if KING already moved"


class CastlingRookMovedError(CastlingError):
    code = "castling_rook_moved"
    default_message = "Can't Castle if ROOK already moved"


class CastlingThroughCheckError(CastlingError):
    code = "castling_through_check"
    default_message = "Can't Castle, KING will pass a CHECK square or will be in CHECK"


# ── Input, replay and session errors ─────────────────────────────────────────


class MoveInputError(ChessError, ValueError):
    """Move text did not match ``<from> <to> [PROMOTION]``."""

    code = "invalid_input"
    default_message = "Invalid move input"


class ReplayError(ChessError):
    """A stored move history could not be replayed from the initial position."""

    code = "replay_failed"
    default_message = "Move history could not be replayed"

    def __init__(self, index: int, cause: IllegalMoveError) -> None:
        super().__init__(f"error replaying move {index}: {cause}")
        self.index = index
        self.cause = cause


class NotYourTurnError(ChessError):
    code = "not_your_turn"
    default_message = "It is not your turn"


class UnknownPlayerError(ChessError, KeyError):
    code = "unknown_player"
    default_message = "Player is not part of this game"

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return str(self.args[0]) if self.args else self.default_message

"""High-level chess rules: check, checkmate and stalemate detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessbook.core.attacks import is_king_attacked
from chessbook.core.enums import GameEndReason
from chessbook.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from chessbook.core.board import Board


class Rules:
    """Static rule-checker that operates on a :class:`Board`.

    A position is terminal when the side to move has no legal move: with
    its king attacked that is checkmate, otherwise stalemate.
    """

    @staticmethod
    def is_in_check(board: Board) -> bool:
        return is_king_attacked(board.grid, board.turn)

    @staticmethod
    def is_checkmate(board: Board) -> bool:
        if not Rules.is_in_check(board):
            return False
        return not MoveGenerator(board).has_legal_moves()

    @staticmethod
    def is_stalemate(board: Board) -> bool:
        if Rules.is_in_check(board):
            return False
        return not MoveGenerator(board).has_legal_moves()

    @staticmethod
    def terminal_state(board: Board) -> GameEndReason | None:
        """Checkmate, stalemate, or ``None`` while a legal move exists."""
        if MoveGenerator(board).has_legal_moves():
            return None
        if Rules.is_in_check(board):
            return GameEndReason.CHECKMATE
        return GameEndReason.STALEMATE

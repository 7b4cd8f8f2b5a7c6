"""Game state machine — move history, lifecycle phase and draw offers."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from chessbook.core.board import Board
from chessbook.core.enums import Color, GameEndReason, GameResult, PieceType
from chessbook.core.errors import GameAlreadyOverError, IllegalMoveError, ReplayError
from chessbook.core.move import Move
from chessbook.core.move_generator import MoveGenerator
from chessbook.game.interfaces import DrawOffer, GamePhase

_LOGGER = logging.getLogger(__name__)

DRAW_AGREED_DESCRIPTION = "Players agreed a Draw"


def resigned_description(color: Color) -> str:
    return f"{color.title} Resigned"


@dataclass
class GameState:
    """Manages game lifecycle: phase, move history, resignation, draw offers.

    The board is only ever changed through :meth:`apply_move`, so replaying
    :attr:`moves` from the starting position rebuilds it exactly.  This is a
    pure data/logic class — no threading, no I/O.
    """

    board: Board = field(default_factory=Board.initial, init=False)
    moves: list[Move] = field(default_factory=list)
    phase: GamePhase = GamePhase.ONGOING
    draw_offer: DrawOffer = DrawOffer.NONE
    draw_offer_by: Color | None = None

    # ── Construction ─────────────────────────────────────────────────────

    @classmethod
    def from_moves(cls, moves: Iterable[Move]) -> GameState:
        """Rebuild a game by replaying its stored history in order.

        Raises:
            ReplayError: a stored move is rejected; carries its index.
        """
        state = cls()
        for index, move in enumerate(moves):
            try:
                state.apply_move(move)
            except IllegalMoveError as exc:
                raise ReplayError(index, exc) from exc
        _LOGGER.debug("Replayed %d moves", state.ply_count)
        return state

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(self, move: Move) -> Move:
        """Validate, commit and record *move*; return the committed move.

        The move is stamped with its sequence index.  Any pending draw offer
        lapses once a move is made.
        """
        committed = self.board.apply_move(move.with_metadata(order=self.ply_count))
        self.moves.append(committed)
        self.draw_offer = DrawOffer.NONE
        self.draw_offer_by = None
        if self.board.finished:
            self.phase = GamePhase.FINISHED
        return committed

    # ── Resignation / draw ───────────────────────────────────────────────

    def resign(self, color: Color) -> None:
        self._ensure_ongoing()
        self.board.finish(
            color.opposite, resigned_description(color), GameEndReason.RESIGNATION
        )
        self._close()

    def offer_draw(self, color: Color) -> None:
        self._ensure_ongoing()
        self.draw_offer = DrawOffer.OFFERED
        self.draw_offer_by = color

    def accept_draw(self, color: Color) -> bool:
        """Accept the opponent's pending offer.  Returns False if there is none."""
        self._ensure_ongoing()
        if self.draw_offer != DrawOffer.OFFERED or self.draw_offer_by in (None, color):
            _LOGGER.warning("No draw offer for %s to accept", color)
            return False
        self.board.finish(None, DRAW_AGREED_DESCRIPTION, GameEndReason.DRAW_AGREED)
        self._close()
        self.draw_offer = DrawOffer.ACCEPTED
        return True

    def decline_draw(self, color: Color) -> bool:
        """Decline the opponent's pending offer.  Returns False if there is none."""
        self._ensure_ongoing()
        if self.draw_offer != DrawOffer.OFFERED or self.draw_offer_by in (None, color):
            _LOGGER.warning("No draw offer for %s to decline", color)
            return False
        self.draw_offer = DrawOffer.DECLINED
        self.draw_offer_by = None
        return True

    def _ensure_ongoing(self) -> None:
        if self.is_game_over:
            raise GameAlreadyOverError(f"Game is already over, {self.description}")

    def _close(self) -> None:
        self.phase = GamePhase.FINISHED
        self.draw_offer = DrawOffer.NONE
        self.draw_offer_by = None

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def side_to_move(self) -> Color:
        """White after an even number of moves, Black after an odd one."""
        return Color.WHITE if self.ply_count % 2 == 0 else Color.BLACK

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.FINISHED

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.moves)

    @property
    def end_reason(self) -> GameEndReason | None:
        return self.board.end_reason

    @property
    def winner(self) -> Color | None:
        return self.board.winner

    @property
    def description(self) -> str:
        return self.board.description

    @property
    def result(self) -> GameResult:
        if not self.is_game_over:
            return GameResult.IN_PROGRESS
        if self.winner is None:
            return GameResult.DRAW
        if self.winner == Color.WHITE:
            return GameResult.WHITE_WINS
        return GameResult.BLACK_WINS

    def legal_moves(self) -> list[Move]:
        """Legal moves in the current position."""
        if self.is_game_over:
            return []
        return MoveGenerator(self.board).generate_legal_moves()

    def legal_destinations(self, square: str) -> list[str]:
        return self.board.legal_destinations(square)

    def captured_counts(self) -> dict[Color, dict[PieceType, int]]:
        return self.board.captured_counts()

    def time_used(self, color: Color) -> int:
        """Milliseconds recorded against *color*'s moves (never enforced)."""
        return sum(m.elapsed_ms for m in self.moves[int(color) :: 2])

    def board_after(self, ply: int) -> Board:
        """Board as it stood after the first *ply* moves (replay view)."""
        if not 0 <= ply <= self.ply_count:
            raise ValueError(f"ply must be between 0 and {self.ply_count}, got {ply}")
        return Board.from_moves(self.moves[:ply])

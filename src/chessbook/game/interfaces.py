"""Abstract interfaces and lifecycle enums for the game layer.

Follows Dependency Inversion: collaborators (persistence, presentation,
update fan-out) depend on :class:`IGameController`, not on the concrete
controller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chessbook.core.move import Move


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    ONGOING = auto()
    FINISHED = auto()


class DrawOffer(IntEnum):
    """Draw offer status between players."""

    NONE = 0
    OFFERED = auto()
    ACCEPTED = auto()
    DECLINED = auto()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IGameController(ABC):
    """Interface for the game orchestrator, addressed by player id."""

    @abstractmethod
    def play(self, player_id: int, text: str, elapsed_ms: int = 0) -> Move:
        """Parse and apply a text move for *player_id*."""

    @abstractmethod
    def resign(self, player_id: int) -> None:
        """Player *player_id* resigns."""

    @abstractmethod
    def offer_draw(self, player_id: int) -> None:
        """Player offers a draw."""

    @abstractmethod
    def accept_draw(self, player_id: int) -> None:
        """Opponent accepts the draw offer."""

    @abstractmethod
    def decline_draw(self, player_id: int) -> None:
        """Opponent refuses the draw offer."""

    @abstractmethod
    def legal_destinations(self, square: str) -> list[str]:
        """Legal target squares for the piece on *square*."""

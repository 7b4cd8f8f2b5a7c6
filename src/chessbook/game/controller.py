"""GameController — one game between two identified players.

Coordinates: Players, GameState, text move input.
Emits events via simple callbacks so persistence / presentation layers can
subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from chessbook.core.enums import Color, GameResult
from chessbook.core.errors import NotYourTurnError, UnknownPlayerError
from chessbook.core.move import Move
from chessbook.core.notation import parse_move_input
from chessbook.game.interfaces import IGameController
from chessbook.game.player import Player
from chessbook.game.state import GameState

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, "GameState"], None]
GameOverCallback = Callable[[GameResult, str], None]  # result, description
DrawOfferCallback = Callable[[Color], None]  # offering side


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_draw_offer: list[DrawOfferCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Maps player ids onto colours and routes their actions into the state.

    Thread-safety: not synchronised.  Callers hold one lock per game around
    every call, which serialises moves, resignations and draw actions.
    """

    __slots__ = ("_state", "_players", "events")

    def __init__(
        self,
        white: Player,
        black: Player,
        state: GameState | None = None,
    ) -> None:
        self._players: dict[Color, Player] = {Color.WHITE: white, Color.BLACK: black}
        self._state = state if state is not None else GameState()
        self.events = GameEvents()

    @classmethod
    def resume(
        cls, white: Player, black: Player, moves: Iterable[Move]
    ) -> GameController:
        """Rebuild a stored game by replaying its move history."""
        return cls(white, black, GameState.from_moves(moves))

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def current_player(self) -> Player | None:
        if self._state.is_game_over:
            return None
        return self._players[self._state.side_to_move]

    @property
    def winner_player(self) -> Player | None:
        winner = self._state.winner
        return self._players[winner] if winner is not None else None

    def player(self, color: Color) -> Player:
        return self._players[color]

    def color_of(self, player_id: int) -> Color:
        for color, player in self._players.items():
            if player.id == player_id:
                return color
        raise UnknownPlayerError(f"Player {player_id} is not part of this game")

    # ── IGameController impl ─────────────────────────────────────────────

    def play(self, player_id: int, text: str, elapsed_ms: int = 0) -> Move:
        """Parse *text* and apply it for *player_id*.

        Raises:
            UnknownPlayerError: *player_id* is neither participant.
            MoveInputError: *text* is malformed.
            NotYourTurnError: the player's colour is not on turn.
            IllegalMoveError: the move breaks a rule.
        """
        color = self.color_of(player_id)
        move = parse_move_input(
            text,
            player_id=player_id,
            elapsed_ms=elapsed_ms,
            order=self._state.ply_count,
        )
        if not self._state.is_game_over and color != self._state.side_to_move:
            _LOGGER.warning("Player %s tried to move out of turn", player_id)
            raise NotYourTurnError()

        committed = self._state.apply_move(move)
        self._emit_move(committed)
        if self._state.is_game_over:
            self._emit_game_over()
        return committed

    def resign(self, player_id: int) -> None:
        self._state.resign(self.color_of(player_id))
        self._emit_game_over()

    def offer_draw(self, player_id: int) -> None:
        color = self.color_of(player_id)
        self._state.offer_draw(color)
        for cb in self.events.on_draw_offer:
            cb(color)

    def accept_draw(self, player_id: int) -> None:
        if self._state.accept_draw(self.color_of(player_id)):
            self._emit_game_over()

    def decline_draw(self, player_id: int) -> None:
        self._state.decline_draw(self.color_of(player_id))

    def legal_destinations(self, square: str) -> list[str]:
        return self._state.legal_destinations(square)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _emit_move(self, move: Move) -> None:
        for cb in self.events.on_move:
            cb(move, self._state)

    def _emit_game_over(self) -> None:
        for cb in self.events.on_game_over:
            cb(self._state.result, self._state.description)

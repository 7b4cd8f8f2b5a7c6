"""Player — a lightweight participant reference used inside a game."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Player:
    """A participant identified by the id the account store assigned."""

    id: int
    name: str = ""
    email: str = ""

    def __str__(self) -> str:
        return self.name or f"Player #{self.id}"

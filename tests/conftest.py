"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from chessbook.core.board import Board
from chessbook.core.move import Move
from chessbook.core.notation import parse_move_input

PlayFn = Callable[..., list[Move]]


@pytest.fixture
def play() -> PlayFn:
    """Apply text moves (``"e2 e4"``) to a board; returns the committed moves."""

    def _play(target: Board, *texts: str) -> list[Move]:
        return [target.apply_move(parse_move_input(text)) for text in texts]

    return _play

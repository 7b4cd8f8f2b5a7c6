"""chessbook — a deterministic chess rules engine with a game session layer."""

__version__ = "0.1.0"

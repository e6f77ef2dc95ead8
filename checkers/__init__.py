"""
Checkers AI engine package.

This package implements 8x8 checkers (forced captures, king promotion) and an
automated opponent that searches with minimax and alpha-beta pruning.

Modules:
    constants — Board geometry, evaluation weights, and search parameters
    move      — The Move value type and its text notation
    board     — Squares, pieces, and the rules engine (legal moves, execution)
    evaluate  — Static position evaluation (material, position, mobility, structure)
    search    — Minimax with alpha-beta, sequential and parallel root search
"""

from checkers.board import Board, Color, Piece, Square
from checkers.move import Move, MoveFormatError
from checkers.search import AIPlayer, PlayerConfig, SearchResult

__all__ = [
    "AIPlayer",
    "Board",
    "Color",
    "Move",
    "MoveFormatError",
    "Piece",
    "PlayerConfig",
    "SearchResult",
    "Square",
]

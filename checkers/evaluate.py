"""
Static position evaluation.

The search needs a number for every leaf it reaches. This module scores a
position from one side's point of view as the sum of four independent terms,
each computed over the whole board:

- Material:  10 per man, 30 per king (minus the same for the opponent).
- Position:  how far each piece has advanced toward its promotion row (0-7),
             plus a flat bonus for occupying one of the four central squares.
- Mobility:  difference in available-move counts, times 2.
- Structure: 3 per piece that has a friendly piece diagonally behind it, so
             it cannot be jumped from the front without a recapture.

A finished game overrides all of that: the winner scores WIN_SCORE and the
loser -WIN_SCORE.

Unlike a negamax evaluator, the perspective here is fixed by the caller (the
AI's own color), not by whose turn it is. Minimax does the alternation.
"""

from checkers.board import Board, Color, Piece
from checkers.constants import (
    CENTER_BONUS,
    CENTER_SQUARES,
    DRAW_SCORE,
    KING_VALUE,
    MAN_VALUE,
    MOBILITY_WEIGHT,
    SUPPORT_BONUS,
    WIN_SCORE,
)


def _signed(piece: Piece, color: Color, value: int) -> int:
    return value if piece.color is color else -value


def material(board: Board, color: Color) -> int:
    """Piece values for `color` minus piece values for the opponent."""
    return sum(
        _signed(piece, color, KING_VALUE if piece.king else MAN_VALUE)
        for piece in board.pieces()
    )


def position(board: Board, color: Color) -> int:
    """Advancement plus center-control bonus, signed by ownership."""
    score = 0
    for piece in board.pieces():
        # Rows travelled away from the home row; kings keep counting too.
        bonus = abs(piece.row - piece.color.home_row)
        if (piece.row, piece.col) in CENTER_SQUARES:
            bonus += CENTER_BONUS
        score += _signed(piece, color, bonus)
    return score


def mobility(board: Board, color: Color) -> int:
    own = len(board.available_moves(color))
    theirs = len(board.available_moves(color.opponent))
    return (own - theirs) * MOBILITY_WEIGHT


def _is_supported(board: Board, piece: Piece) -> bool:
    behind = piece.row - piece.color.forward
    for col in (piece.col - 1, piece.col + 1):
        neighbour = board.piece_at(behind, col)
        if neighbour is not None and neighbour.color is piece.color:
            return True
    return False


def structure(board: Board, color: Color) -> int:
    """SUPPORT_BONUS per supported piece, signed by ownership."""
    return sum(
        _signed(piece, color, SUPPORT_BONUS)
        for piece in board.pieces()
        if _is_supported(board, piece)
    )


def evaluate(board: Board, color: Color) -> int:
    """
    Score `board` from `color`'s perspective.

    Args:
        board: The position to score. Not modified.
        color: The side whose advantage is measured (positive = good for it).

    Returns:
        ±WIN_SCORE for a finished game, otherwise the sum of the material,
        position, mobility and structure terms.

    Example:
        >>> evaluate(Board(), Color.WHITE)  # symmetric start
        0
    """
    if board.is_over():
        winner = board.winner()
        if winner is None:
            return DRAW_SCORE
        return WIN_SCORE if winner is color else -WIN_SCORE

    return (
        material(board, color)
        + position(board, color)
        + mobility(board, color)
        + structure(board, color)
    )

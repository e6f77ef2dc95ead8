"""Pytest configuration and shared fixtures."""

import pytest

from checkers.board import Board

# White man on d4 (row 4, col 3) facing a black man on e3 (row 3, col 2).
# Each side's only legal move is to capture the other.
FACING_DIAGRAM = """
    ........
    ........
    ........
    ..b.....
    ...w....
    ........
    ........
    ........
"""


@pytest.fixture
def board() -> Board:
    """A board in the standard starting position."""
    return Board()


@pytest.fixture
def facing_board() -> Board:
    """One white man and one black man diagonally adjacent in the centre."""
    return Board.from_diagram(FACING_DIAGRAM)

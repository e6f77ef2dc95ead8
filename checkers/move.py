"""
Move representation and text notation.

A Move is a plain value: origin and destination coordinates. Whether it is a
regular step or a capture (jump) is derived from its shape, never stored, and
so is the square of the jumped piece.

Text notation is two squares joined by a hyphen, e.g. "a3-b4". The file
letter selects the row and the rank digit the column:

    row = 7 - (letter - 'a')     a -> row 7 ... h -> row 0
    col = digit - 1              1 -> col 0 ... 8 -> col 7

Parsing is case-insensitive; rendering is always lower case.
"""

import re
from dataclasses import dataclass

from checkers.constants import BOARD_SIZE

_NOTATION = re.compile(r"([a-h])([1-8])-([a-h])([1-8])", re.IGNORECASE)


class MoveFormatError(ValueError):
    """Raised when a string is not valid two-square move notation."""


def _square_to_coords(letter: str, digit: str) -> tuple[int, int]:
    row = (BOARD_SIZE - 1) - (ord(letter.lower()) - ord("a"))
    col = int(digit) - 1
    return row, col


def square_name(row: int, col: int) -> str:
    """Return the notation for a square, e.g. (7, 2) -> "a3"."""
    return f"{chr(ord('a') + (BOARD_SIZE - 1) - row)}{col + 1}"


@dataclass(frozen=True)
class Move:
    """
    A single ply from one square to another.

    Attributes:
        from_row: Origin row (0-7).
        from_col: Origin column (0-7).
        to_row:   Destination row (0-7).
        to_col:   Destination column (0-7).

    Coordinates are not range-checked here; a Move pointing off the board is
    simply never legal on any Board.
    """

    from_row: int
    from_col: int
    to_row: int
    to_col: int

    @classmethod
    def parse(cls, text: str) -> "Move":
        """
        Parse two-square notation such as "a3-b4" (case-insensitive).

        Args:
            text: The move string. Surrounding whitespace is not stripped.

        Returns:
            The parsed Move.

        Raises:
            MoveFormatError: If the string does not match <file><rank>-<file><rank>
                with files a-h and ranks 1-8.
        """
        match = _NOTATION.fullmatch(text)
        if match is None:
            raise MoveFormatError(f"Illegal move format: {text!r} (expected e.g. a3-b4)")
        from_row, from_col = _square_to_coords(match.group(1), match.group(2))
        to_row, to_col = _square_to_coords(match.group(3), match.group(4))
        return cls(from_row, from_col, to_row, to_col)

    @property
    def is_capture(self) -> bool:
        """True for a diagonal jump of exactly two squares."""
        return abs(self.from_row - self.to_row) == 2 and abs(self.from_col - self.to_col) == 2

    @property
    def is_regular(self) -> bool:
        """True for a diagonal step of exactly one square."""
        return abs(self.from_row - self.to_row) == 1 and abs(self.from_col - self.to_col) == 1

    @property
    def captured(self) -> tuple[int, int] | None:
        """The (row, col) of the jumped square, or None for non-captures."""
        if not self.is_capture:
            return None
        return (self.from_row + self.to_row) // 2, (self.from_col + self.to_col) // 2

    def __str__(self) -> str:
        return (
            f"{square_name(self.from_row, self.from_col)}-"
            f"{square_name(self.to_row, self.to_col)}"
        )

"""
Board representation and rules engine.

The board is an 8x8 grid of Squares. Only dark squares (row + col odd) can
ever hold a piece. White men start on the dark squares of rows 5-7 and move
toward row 0; black men start on rows 0-2 and move toward row 7. A man that
reaches the far row is crowned and may then move and capture in all four
diagonal directions.

Captures are mandatory: when any piece of the side to move can jump, only
jumps are offered. A single jump is one move; the game loop decides whether
the same side moves again after a capture.

The Board is mutated only by apply(). Searches never undo moves: they copy
the board and apply the move to the copy, so no two branches (or worker
processes) ever share a mutable board.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from checkers.constants import BOARD_SIZE, STARTING_ROWS
from checkers.move import Move

_STEP_DIRECTIONS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))


class Color(Enum):
    """Side colors. White moves up the board (decreasing row)."""

    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def forward(self) -> int:
        """Row delta of a forward step for this color's men."""
        return -1 if self is Color.WHITE else 1

    @property
    def promotion_row(self) -> int:
        return 0 if self is Color.WHITE else BOARD_SIZE - 1

    @property
    def home_row(self) -> int:
        """The back row this color starts from."""
        return BOARD_SIZE - 1 if self is Color.WHITE else 0

    def __str__(self) -> str:
        return self.value.capitalize()


@dataclass
class Piece:
    """
    A single checker.

    Attributes:
        row:   Current row, always equal to the owning square's row.
        col:   Current column, always equal to the owning square's column.
        color: Owner. Never changes.
        king:  Promotion flag. Goes from False to True at most once.
    """

    row: int
    col: int
    color: Color
    king: bool = False

    def crown(self) -> None:
        self.king = True

    @property
    def directions(self) -> tuple[tuple[int, int], ...]:
        """Unit diagonal directions this piece may move in."""
        if self.king:
            return _STEP_DIRECTIONS
        forward = self.color.forward
        return ((forward, -1), (forward, 1))

    @property
    def symbol(self) -> str:
        """Console glyph: ●/◆ for white man/king, ○/◇ for black man/king."""
        if self.color is Color.WHITE:
            return "◆" if self.king else "●"
        return "◇" if self.king else "○"


@dataclass
class Square:
    """One cell of the grid. `dark` is fixed at construction from parity."""

    row: int
    col: int
    piece: Piece | None = None
    dark: bool = field(init=False)

    def __post_init__(self) -> None:
        self.dark = (self.row + self.col) % 2 == 1

    def has_piece(self) -> bool:
        return self.piece is not None

    def set_piece(self, piece: Piece | None) -> None:
        """Place (or clear with None) the occupying piece, syncing its coordinates."""
        if piece is not None:
            piece.row = self.row
            piece.col = self.col
        self.piece = piece


def on_board(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


_DIAGRAM_PIECES: dict[str, tuple[Color, bool]] = {
    "w": (Color.WHITE, False),
    "W": (Color.WHITE, True),
    "b": (Color.BLACK, False),
    "B": (Color.BLACK, True),
}
_EMPTY_MARK = "."


class Board:
    """
    The 64 squares and every live piece on them.

    Build the standard starting position with Board(), an empty board with
    Board.empty(), or an arbitrary position with Board.from_diagram().
    """

    def __init__(self, setup: bool = True) -> None:
        self._grid: list[list[Square]] = [
            [Square(row, col) for col in range(BOARD_SIZE)] for row in range(BOARD_SIZE)
        ]
        if setup:
            for row in range(BOARD_SIZE):
                if row < STARTING_ROWS:
                    color = Color.BLACK
                elif row >= BOARD_SIZE - STARTING_ROWS:
                    color = Color.WHITE
                else:
                    continue
                for col in range(BOARD_SIZE):
                    if self._grid[row][col].dark:
                        self.place(row, col, color)

    # -----------------------------------------------------------------------
    # Construction helpers
    # -----------------------------------------------------------------------

    @classmethod
    def empty(cls) -> "Board":
        return cls(setup=False)

    @classmethod
    def from_diagram(cls, diagram: str) -> "Board":
        """
        Build a board from a text diagram, one line per row (row 0 first).

        Each line holds 8 characters: "." for an empty square, "w"/"W" for a
        white man/king and "b"/"B" for a black man/king. Blank lines and
        surrounding whitespace are ignored.

        Example:
            >>> board = Board.from_diagram('''
            ...     ........
            ...     ........
            ...     ........
            ...     ....b...
            ...     ...w....
            ...     ........
            ...     ........
            ...     ........
            ... ''')
            >>> board.count(Color.WHITE)
            1

        Raises:
            ValueError: On a wrong number of rows/columns, an unknown
                character, or a piece drawn on a light square.
        """
        lines = [line.strip() for line in diagram.strip().splitlines() if line.strip()]
        if len(lines) != BOARD_SIZE:
            raise ValueError(f"Diagram must have {BOARD_SIZE} rows, got {len(lines)}")

        board = cls.empty()
        for row, line in enumerate(lines):
            if len(line) != BOARD_SIZE:
                raise ValueError(f"Diagram row {row} must have {BOARD_SIZE} squares: {line!r}")
            for col, char in enumerate(line):
                if char == _EMPTY_MARK:
                    continue
                if char not in _DIAGRAM_PIECES:
                    raise ValueError(f"Unknown diagram character {char!r} at row {row}")
                color, king = _DIAGRAM_PIECES[char]
                board.place(row, col, color, king=king)
        return board

    def to_diagram(self) -> str:
        """Inverse of from_diagram()."""
        lines = []
        for row in self._grid:
            chars = []
            for square in row:
                piece = square.piece
                if piece is None:
                    chars.append(_EMPTY_MARK)
                else:
                    char = "w" if piece.color is Color.WHITE else "b"
                    chars.append(char.upper() if piece.king else char)
            lines.append("".join(chars))
        return "\n".join(lines)

    def copy(self) -> "Board":
        """
        Return a fully independent deep copy.

        Every piece is rebuilt, so applying moves to the copy (including
        promotions) never affects this board.
        """
        board = Board.empty()
        for row in self._grid:
            for square in row:
                piece = square.piece
                if piece is not None:
                    board.place(piece.row, piece.col, piece.color, king=piece.king)
        return board

    clone = copy

    def place(self, row: int, col: int, color: Color, king: bool = False) -> Piece:
        """
        Put a new piece on an empty dark square and return it.

        Raises:
            ValueError: If the square is off the board, light, or occupied.
        """
        if not on_board(row, col):
            raise ValueError(f"Square ({row}, {col}) is off the board")
        square = self._grid[row][col]
        if not square.dark:
            raise ValueError(f"Square ({row}, {col}) is a light square")
        if square.has_piece():
            raise ValueError(f"Square ({row}, {col}) is already occupied")
        piece = Piece(row, col, color, king)
        square.set_piece(piece)
        return piece

    def remove(self, row: int, col: int) -> Piece | None:
        """Take the piece off a square, returning it (None if it was empty)."""
        square = self._grid[row][col]
        piece = square.piece
        square.set_piece(None)
        return piece

    # -----------------------------------------------------------------------
    # Inspection
    # -----------------------------------------------------------------------

    def square(self, row: int, col: int) -> Square:
        return self._grid[row][col]

    def piece_at(self, row: int, col: int) -> Piece | None:
        if not on_board(row, col):
            return None
        return self._grid[row][col].piece

    def squares(self) -> Iterator[Square]:
        """All 64 squares in row-major order."""
        for row in self._grid:
            yield from row

    def pieces(self, color: Color | None = None) -> Iterator[Piece]:
        """Live pieces in row-major order, optionally filtered by color."""
        for square in self.squares():
            piece = square.piece
            if piece is not None and (color is None or piece.color is color):
                yield piece

    def count(self, color: Color, kings: bool | None = None) -> int:
        """Count pieces of `color`; kings=True/False restricts to kings/men."""
        return sum(1 for p in self.pieces(color) if kings is None or p.king is kings)

    # -----------------------------------------------------------------------
    # Move legality
    # -----------------------------------------------------------------------

    def is_legal(self, move: Move, color: Color) -> bool:
        """
        Check whether `color` may play `move` in this position.

        Rules, in order:
            1. Both squares must be on the board.
            2. The origin must hold a piece of `color`.
            3. The destination must be an empty dark square.
            4. A capture must jump an opposing piece; men only jump forward.
            5. A regular step must be forward for men; kings go any diagonal.
            6. Any other shape is illegal.

        Mandatory capture is not checked here: a legal regular step stays
        legal even when a capture is available. available_moves() enforces
        capture priority.
        """
        if not on_board(move.from_row, move.from_col) or not on_board(move.to_row, move.to_col):
            return False

        piece = self._grid[move.from_row][move.from_col].piece
        if piece is None or piece.color is not color:
            return False

        destination = self._grid[move.to_row][move.to_col]
        if destination.has_piece() or not destination.dark:
            return False

        if move.is_capture:
            return self._is_valid_capture(move, piece)
        if move.is_regular:
            return self._is_forward_or_king(move, piece)
        return False

    @staticmethod
    def _is_forward_or_king(move: Move, piece: Piece) -> bool:
        if piece.king:
            return True
        return (move.to_row - move.from_row) * piece.color.forward > 0

    def _is_valid_capture(self, move: Move, piece: Piece) -> bool:
        mid_row, mid_col = move.captured
        victim = self._grid[mid_row][mid_col].piece
        if victim is None or victim.color is piece.color:
            return False
        return self._is_forward_or_king(move, piece)

    # -----------------------------------------------------------------------
    # Move generation
    # -----------------------------------------------------------------------

    def _candidate_moves(self, color: Color, distance: int) -> Iterator[Move]:
        for piece in self.pieces(color):
            for d_row, d_col in piece.directions:
                move = Move(
                    piece.row,
                    piece.col,
                    piece.row + d_row * distance,
                    piece.col + d_col * distance,
                )
                if self.is_legal(move, color):
                    yield move

    def capture_moves(self, color: Color) -> list[Move]:
        """Every legal jump for `color`, in row-major piece order."""
        return list(self._candidate_moves(color, 2))

    def regular_moves(self, color: Color) -> list[Move]:
        """Every legal one-square step for `color`, ignoring capture priority."""
        return list(self._candidate_moves(color, 1))

    def available_moves(self, color: Color) -> list[Move]:
        """
        The moves `color` may actually play.

        If any piece of `color` can capture, only captures are returned
        (mandatory capture). Otherwise the regular steps are returned. An
        empty list means `color` cannot move.
        """
        captures = self.capture_moves(color)
        if captures:
            return captures
        return self.regular_moves(color)

    def has_moves(self, color: Color) -> bool:
        """Equivalent to bool(available_moves(color)), without building the lists."""
        return any(True for _ in self._candidate_moves(color, 2)) or any(
            True for _ in self._candidate_moves(color, 1)
        )

    # -----------------------------------------------------------------------
    # Move execution
    # -----------------------------------------------------------------------

    def apply(self, move: Move, color: Color) -> bool:
        """
        Play `move` for `color`, mutating the board in place.

        The move is re-validated first; an illegal move leaves the board
        untouched. A capture removes the jumped piece, and a man landing on
        its promotion row is crowned.

        Returns:
            True if the move was played, False if it was illegal (no-op).
        """
        if not self.is_legal(move, color):
            return False

        origin = self._grid[move.from_row][move.from_col]
        destination = self._grid[move.to_row][move.to_col]
        piece = origin.piece

        destination.set_piece(piece)
        origin.set_piece(None)

        if move.is_capture:
            mid_row, mid_col = move.captured
            self._grid[mid_row][mid_col].set_piece(None)

        if not piece.king and move.to_row == piece.color.promotion_row:
            piece.crown()

        return True

    # -----------------------------------------------------------------------
    # Game end
    # -----------------------------------------------------------------------

    def is_over(self) -> bool:
        """True when at least one side has no available moves."""
        return not (self.has_moves(Color.WHITE) and self.has_moves(Color.BLACK))

    def winner(self) -> Color | None:
        """
        The winning color, or None while the game is still running.

        Black wins when white cannot move; otherwise white wins. If both
        sides are stuck at once this reports black.
        """
        if not self.is_over():
            return None
        if not self.has_moves(Color.WHITE):
            return Color.BLACK
        return Color.WHITE

    # -----------------------------------------------------------------------
    # Rendering
    # -----------------------------------------------------------------------

    def __str__(self) -> str:
        border = "      " + " -----" * BOARD_SIZE
        header = "       " + " ".join(f"[ {col + 1} ]" for col in range(BOARD_SIZE))
        lines = [header]
        for row in self._grid:
            lines.append(border)
            letter = chr(ord("A") + (BOARD_SIZE - 1) - row[0].row)
            cells = "".join(f"  {sq.piece.symbol if sq.piece else ' '}  |" for sq in row)
            lines.append(f"[ {letter} ] |{cells}")
        lines.append(border)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Board.from_diagram({self.to_diagram()!r})"

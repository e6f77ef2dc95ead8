"""
Engine constants: board geometry, evaluation weights, and search parameters.

All numeric constants used throughout the engine are defined here so that
other modules never need to introduce new magic numbers. Centralizing
constants makes tuning the evaluation much easier.

Scores are plain integers. A man is worth 10 points and a king 30; the
positional terms are small enough that they only break ties between
positions with equal material.
"""

# ---------------------------------------------------------------------------
# Board geometry
# ---------------------------------------------------------------------------
# Row 0 is the top of the printed board (file letter "h"), row 7 the bottom
# (file letter "a"). White starts on the bottom three rows and moves up.

BOARD_SIZE: int = 8
STARTING_ROWS: int = 3  # Rows filled with men on each side at the start

# The four central squares (rows 3-4, columns 3-4).
CENTER_SQUARES: frozenset[tuple[int, int]] = frozenset(
    (row, col) for row in (3, 4) for col in (3, 4)
)

# ---------------------------------------------------------------------------
# Evaluation weights
# ---------------------------------------------------------------------------

MAN_VALUE: int = 10
KING_VALUE: int = 30

CENTER_BONUS: int = 5       # Any piece on one of CENTER_SQUARES
MOBILITY_WEIGHT: int = 2    # Per available move of difference
SUPPORT_BONUS: int = 3      # Piece backed by a friendly piece diagonally behind

# ---------------------------------------------------------------------------
# Special scores
# ---------------------------------------------------------------------------
# WIN_SCORE dominates every heuristic total. SCORE_INFINITY is only used as the
# initial alpha-beta window and must stay strictly outside [-WIN_SCORE, WIN_SCORE].

WIN_SCORE: int = 10_000
DRAW_SCORE: int = 0
SCORE_INFINITY: int = 1_000_000

# ---------------------------------------------------------------------------
# Search parameters
# ---------------------------------------------------------------------------
# Depth is counted in plies, including the root move. The interactive game
# uses DEFAULT_SEARCH_DEPTH; MAX_SEARCH_DEPTH caps user-supplied values since
# the search has no time limit and always runs to the full depth.

DEFAULT_SEARCH_DEPTH: int = 6
MAX_SEARCH_DEPTH: int = 12

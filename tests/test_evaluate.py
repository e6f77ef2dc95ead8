"""Tests for the static evaluation terms."""

from checkers.board import Board, Color
from checkers.constants import WIN_SCORE
from checkers.evaluate import evaluate, material, mobility, position, structure


def _board(rows: dict[int, str]) -> Board:
    diagram = ["........"] * 8
    for index, row in rows.items():
        diagram[index] = row
    return Board.from_diagram("\n".join(diagram))


class TestTerms:
    """Tests for the individual heuristics."""

    def test_starting_position_is_balanced(self, board: Board) -> None:
        """Test that every term cancels out in the symmetric opening."""
        for color in Color:
            assert material(board, color) == 0
            assert position(board, color) == 0
            assert mobility(board, color) == 0
            assert structure(board, color) == 0
            assert evaluate(board, color) == 0

    def test_material_counts_kings_triple(self) -> None:
        """Test 10 per man and 30 per king, signed by owner."""
        board = _board({1: "..b.....", 4: "...W....", 6: ".w......"})
        assert material(board, Color.WHITE) == 30 + 10 - 10
        assert material(board, Color.BLACK) == -30

    def test_position_rewards_advance_and_centre(self) -> None:
        """Test advancement from the home row plus the centre bonus."""
        board = _board({4: "...w...."})
        assert position(board, Color.WHITE) == 3 + 5
        assert position(board, Color.BLACK) == -8

    def test_position_for_black_counts_from_row_zero(self) -> None:
        """Test that black advancement grows with the row index."""
        board = _board({6: ".b......"})
        assert position(board, Color.BLACK) == 6

    def test_mobility_is_twice_the_move_difference(self) -> None:
        """Test a king with four steps against a man with two."""
        board = _board({0: ".b......", 4: "...W...."})
        assert mobility(board, Color.WHITE) == (4 - 2) * 2
        assert mobility(board, Color.BLACK) == -4

    def test_structure_rewards_backed_pieces(self) -> None:
        """Test the support bonus for a piece with a friend diagonally behind."""
        board = _board({5: "..w.....", 6: ".w......"})
        assert structure(board, Color.WHITE) == 3

    def test_structure_for_black_looks_at_lower_rows(self) -> None:
        """Test that black support comes from the row above (toward row 0)."""
        board = _board({0: ".b......", 1: "..b....."})
        assert structure(board, Color.BLACK) == 3
        assert structure(board, Color.WHITE) == -3


class TestEvaluate:
    """Tests for the combined evaluation."""

    def test_win_and_loss_scores(self) -> None:
        """Test that a finished game scores ±WIN_SCORE."""
        board = _board({4: "...w...."})
        assert evaluate(board, Color.WHITE) == WIN_SCORE
        assert evaluate(board, Color.BLACK) == -WIN_SCORE

    def test_non_terminal_score_is_sum_of_terms(self) -> None:
        """Test that a running position is scored by the four terms added up."""
        board = _board({1: "..b.b...", 2: ".b......", 5: "..w.w...", 6: ".W......"})
        assert not board.is_over()
        for color in Color:
            expected = (
                material(board, color)
                + position(board, color)
                + mobility(board, color)
                + structure(board, color)
            )
            assert evaluate(board, color) == expected

    def test_perspectives_are_opposite(self) -> None:
        """Test that white's score is black's score negated."""
        board = _board({1: "..b.b...", 2: ".b......", 5: "..w.w...", 6: ".W......"})
        assert evaluate(board, Color.WHITE) == -evaluate(board, Color.BLACK)

"""Tests for the interactive console game."""

import io

import pytest
from pydantic import ValidationError

from checkers.board import Board, Color
from checkers.constants import MAX_SEARCH_DEPTH
from interface.cli import ConsoleGame, GameOptions, ask_options, main


def _game(options: GameOptions, diagram: str, lines: list[str]) -> tuple[ConsoleGame, io.StringIO]:
    stdout = io.StringIO()
    game = ConsoleGame(options, stdin=io.StringIO("".join(f"{line}\n" for line in lines)), stdout=stdout)
    game.board = Board.from_diagram(diagram)
    return game, stdout


class TestHumanTurns:
    """Tests for reading and validating human moves."""

    def test_bad_input_is_reprompted_until_legal(self, facing_board: Board) -> None:
        """Test format errors and illegal moves are reported, then the capture wins."""
        game, stdout = _game(
            GameOptions(vs_ai=False),
            facing_board.to_diagram(),
            ["xx", "d4-e5", "D4-F2"],
        )
        assert game.play() is Color.WHITE

        output = stdout.getvalue()
        assert "ATTENTION! You have mandatory captures:" in output
        assert "Invalid move format" in output
        assert "Illegal move!" in output
        assert "Move played: d4-f2" in output
        assert "WINNER: WHITE" in output

    def test_same_side_continues_after_capture(self) -> None:
        """Test that a side keeps moving while it still has captures after a jump."""
        diagram = """
            ........
            ........
            ...b....
            ........
            .b......
            w.......
            ........
            ........
        """
        game, stdout = _game(GameOptions(vs_ai=False), diagram, ["c1-e3", "e3-g5"])
        assert game.play() is Color.WHITE
        assert "Further captures are available!" in stdout.getvalue()
        assert game.board.count(Color.BLACK) == 0

    def test_end_of_input_stops_the_game(self, board: Board) -> None:
        """Test that running out of input raises EOFError to the caller."""
        game, _ = _game(GameOptions(vs_ai=False), board.to_diagram(), [])
        with pytest.raises(EOFError):
            game.play()


class TestAITurns:
    """Tests for the AI side of the loop."""

    @pytest.mark.parametrize("parallel", [True, False])
    def test_ai_moves_first_as_white(self, parallel: bool, facing_board: Board) -> None:
        """Test that the AI plays its forced capture when it holds white."""
        options = GameOptions(vs_ai=True, human_color=Color.BLACK, parallel=parallel, depth=1)
        game, stdout = _game(options, facing_board.to_diagram(), [])
        assert game.ai.color is Color.WHITE
        assert game.play() is Color.WHITE
        assert "The AI plays: d4-f2" in stdout.getvalue()

    def test_human_then_ai(self) -> None:
        """Test a human move followed by the AI's reply finishing the game."""
        diagram = """
            ........
            ........
            ........
            ........
            .b......
            ........
            ...w....
            ........
        """
        options = GameOptions(vs_ai=True, human_color=Color.WHITE, parallel=False, depth=2)
        # b4-c3 steps next to the black man, which must then jump it.
        game, stdout = _game(options, diagram, ["b4-c3"])
        assert game.play() is Color.BLACK
        assert "The AI plays: d2-b4" in stdout.getvalue()


class TestStartup:
    """Tests for option prompts and the entry point."""

    def test_ask_options_against_ai(self) -> None:
        """Test the three questions of a game against the AI, with a retry."""
        stdin = io.StringIO("maybe\ny\nb\ns\n")
        stdout = io.StringIO()
        options = ask_options(stdin, stdout, depth=3)
        assert options == GameOptions(vs_ai=True, human_color=Color.BLACK, parallel=False, depth=3)
        assert "Invalid input" in stdout.getvalue()

    def test_ask_options_two_humans(self) -> None:
        """Test that declining the AI skips the other questions."""
        options = ask_options(io.StringIO("n\n"), io.StringIO())
        assert options.vs_ai is False

    def test_depth_is_clamped(self) -> None:
        """Test that the game options clamp the AI depth."""
        assert GameOptions(depth=0).depth == 1

    def test_options_share_the_player_worker_rule(self) -> None:
        """Test that game options reject a non-positive pool size like the AI does."""
        with pytest.raises(ValidationError):
            GameOptions(workers=0)

    def test_options_depth_matches_the_player(self) -> None:
        """Test that the options and the AI they build agree on the clamped depth."""
        game = ConsoleGame(GameOptions(depth=99), stdin=io.StringIO(), stdout=io.StringIO())
        assert game.options.depth == game.ai.max_depth == MAX_SEARCH_DEPTH

    def test_main_exits_cleanly_on_end_of_input(self) -> None:
        """Test that EOF at any prompt ends the program with status 0."""
        stdout = io.StringIO()
        assert main(["--depth", "1"], stdin=io.StringIO("y\n"), stdout=stdout) == 0
        assert "Goodbye." in stdout.getvalue()

    def test_main_rejects_bad_worker_count(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that a non-positive --workers is a usage error."""
        with pytest.raises(SystemExit):
            main(["--workers", "0"], stdin=io.StringIO(), stdout=io.StringIO())
        assert "workers must be a positive integer" in capsys.readouterr().err

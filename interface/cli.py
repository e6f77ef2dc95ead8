"""
Interactive console game.

Thin glue around the engine: it asks how to play, prints the board, reads
moves in "a3-b4" notation and lets the AI answer. All rules live in
checkers.board; this module only decides whose turn it is.

Turn order:
    White moves first. After a capture, the same side moves again as long as
    that side still has a capture available anywhere on the board (with any
    piece, not only the one that just jumped). Otherwise the turn passes.

Input handling:
    A malformed move string (MoveFormatError) or a well-formed move that is
    not in available_moves() is reported and the player is asked again. End
    of input or Ctrl-C ends the game quietly.

Game output goes to stdout; diagnostics go through logging (stderr).
"""

import argparse
import logging
import sys
import time
from typing import TextIO

from pydantic import BaseModel

from checkers.board import Board, Color
from checkers.constants import DEFAULT_SEARCH_DEPTH, MAX_SEARCH_DEPTH
from checkers.move import Move, MoveFormatError
from checkers.search import AIPlayer, SearchDepth, WorkerCount, check_workers

_log = logging.getLogger(__name__)

# Only this many moves are listed when showing the options to a player.
_MAX_LISTED_MOVES = 10

_COLOR_LABELS: dict[Color, str] = {
    Color.WHITE: "WHITE (●/◆)",
    Color.BLACK: "BLACK (○/◇)",
}


class GameOptions(BaseModel):
    """
    Answers to the start-of-game questions plus command-line settings.

    Fields:
        vs_ai:       Play against the AI (False = two humans at one console).
        human_color: The human's side when playing the AI.
        parallel:    Use the parallel root search for the AI.
        depth:       AI search depth in plies, clamped to [1, MAX_SEARCH_DEPTH].
        workers:     AI process pool size (None = CPU count).
    """

    vs_ai: bool = True
    human_color: Color = Color.WHITE
    parallel: bool = True
    depth: SearchDepth = DEFAULT_SEARCH_DEPTH
    workers: WorkerCount = None


class ConsoleGame:
    """
    One game played over a pair of text streams.

    Attributes:
        board:   The single long-lived board of this game.
        options: Game settings.
        ai:      The AI opponent, or None for a human-vs-human game.
        turn:    The color to move.
    """

    def __init__(
        self,
        options: GameOptions,
        stdin: TextIO = sys.stdin,
        stdout: TextIO = sys.stdout,
    ) -> None:
        self.options = options
        self.board = Board()
        self.turn = Color.WHITE
        self._in = stdin
        self._out = stdout
        self.ai: AIPlayer | None = None
        if options.vs_ai:
            self.ai = AIPlayer(
                options.human_color.opponent,
                max_depth=options.depth,
                workers=options.workers,
            )

    # -----------------------------------------------------------------------
    # I/O helpers
    # -----------------------------------------------------------------------

    def _send(self, line: str = "") -> None:
        print(line, file=self._out, flush=True)

    def _read(self, prompt: str) -> str:
        """Prompt and return one stripped, lower-cased line; EOFError at end of input."""
        self._out.write(prompt)
        self._out.flush()
        line = self._in.readline()
        if not line:
            raise EOFError
        return line.strip().lower()

    def _show_moves(self, moves: list[Move]) -> None:
        for move in moves[:_MAX_LISTED_MOVES]:
            self._send(f"- {move}")
        if len(moves) > _MAX_LISTED_MOVES:
            self._send(f"  ... and {len(moves) - _MAX_LISTED_MOVES} more.")

    # -----------------------------------------------------------------------
    # Turns
    # -----------------------------------------------------------------------

    def _human_turn(self, color: Color) -> bool:
        """Read moves until a legal one is entered. Returns True if it captured."""
        moves = self.board.available_moves(color)
        if not moves:
            return False

        if moves[0].is_capture:
            self._send("ATTENTION! You have mandatory captures:")
            self._show_moves(moves)

        while True:
            text = self._read(f"\n{_COLOR_LABELS[color]} to move. Enter your move: ")
            try:
                move = Move.parse(text)
            except MoveFormatError:
                self._send("Invalid move format. Use the format: a1-b2")
                continue

            if move not in moves:
                self._send("Illegal move! Try again.")
                self._show_moves(moves)
                continue

            self.board.apply(move, color)
            self._send(f"Move played: {move}")
            return move.is_capture

    def _ai_turn(self, color: Color) -> bool:
        """Let the AI move. Returns True if it captured."""
        mode = "parallel" if self.options.parallel else "sequential"
        self._send(f"\nAI turn ({_COLOR_LABELS[color]})...")
        self._send(f"The AI is thinking ({mode} search)...")

        start = time.monotonic()
        if self.options.parallel:
            move = self.ai.best_move(self.board)
        else:
            move = self.ai.best_move_sequential(self.board)
        elapsed_ms = int((time.monotonic() - start) * 1000)

        if move is None:
            self._send("The AI has no moves available.")
            return False

        self.board.apply(move, color)
        self._send(f"The AI plays: {move} (time: {elapsed_ms}ms)")
        return move.is_capture

    def _must_capture_again(self, color: Color) -> bool:
        moves = self.board.available_moves(color)
        if moves and moves[0].is_capture:
            self._send("Further captures are available!")
            self._show_moves(moves)
            return True
        return False

    # -----------------------------------------------------------------------
    # Game loop
    # -----------------------------------------------------------------------

    def _banner(self) -> None:
        self._send("\nLet the game begin!")
        self._send("Move format: a1-b2")
        self._send("Rules: captures are mandatory.")
        if self.ai is not None:
            self._send(f"You play: {_COLOR_LABELS[self.options.human_color]}")
            self._send(f"The AI plays: {_COLOR_LABELS[self.ai.color]}")
        self._send()

    def play(self) -> Color | None:
        """
        Run the game to completion.

        Returns:
            The winning color (see Board.winner()).
        """
        self._banner()

        while not self.board.is_over():
            self._send(str(self.board))
            color = self.turn
            if self.ai is not None and color is self.ai.color:
                captured = self._ai_turn(color)
            else:
                captured = self._human_turn(color)

            if not (captured and self._must_capture_again(color)):
                self.turn = color.opponent

        winner = self.board.winner()
        rule = "=" * 50
        self._send("\n" + rule)
        self._send(str(self.board))
        self._send(rule)
        self._send("GAME OVER!")
        if winner is not None:
            self._send(f"WINNER: {_COLOR_LABELS[winner]}")
        _log.info("game finished, winner=%s", winner)
        return winner


# ---------------------------------------------------------------------------
# Start-of-game questions
# ---------------------------------------------------------------------------


def _ask(stdin: TextIO, stdout: TextIO, prompt: str, choices: dict[str, object]) -> object:
    """Repeat `prompt` until the first letter of the answer is one of `choices`."""
    while True:
        stdout.write(prompt)
        stdout.flush()
        line = stdin.readline()
        if not line:
            raise EOFError
        answer = line.strip().lower()[:1]
        if answer in choices:
            return choices[answer]
        print(f"Invalid input. Please enter one of: {', '.join(choices).upper()}.", file=stdout)


def ask_options(
    stdin: TextIO,
    stdout: TextIO,
    depth: int = DEFAULT_SEARCH_DEPTH,
    workers: int | None = None,
) -> GameOptions:
    """Interview the user for the game mode, their color and the AI mode."""
    vs_ai = _ask(stdin, stdout, "Play against the AI? (Y/N): ", {"y": True, "n": False})
    if not vs_ai:
        return GameOptions(vs_ai=False, depth=depth, workers=workers)

    human_color = _ask(
        stdin,
        stdout,
        "Choose your color (W for White / B for Black): ",
        {"w": Color.WHITE, "b": Color.BLACK},
    )
    parallel = _ask(
        stdin,
        stdout,
        "Should the AI use parallel or sequential search? (P/S): ",
        {"p": True, "s": False},
    )
    return GameOptions(
        vs_ai=True,
        human_color=human_color,
        parallel=parallel,
        depth=depth,
        workers=workers,
    )


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="checkers",
        description="Play 8x8 checkers against a minimax AI.",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=DEFAULT_SEARCH_DEPTH,
        help=f"AI search depth in plies (1-{MAX_SEARCH_DEPTH}, default {DEFAULT_SEARCH_DEPTH})",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="process pool size for the parallel AI (default: CPU count)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="diagnostic log level (logs go to stderr)",
    )
    args = parser.parse_args(argv)
    try:
        check_workers(args.workers)
    except ValueError as exc:
        parser.error(f"--workers: {exc}")
    return args


def main(
    argv: list[str] | None = None,
    stdin: TextIO = sys.stdin,
    stdout: TextIO = sys.stdout,
) -> int:
    """Console entry point. Returns the process exit status."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        stream=sys.stderr,
    )

    print("Welcome to checkers!", file=stdout)
    try:
        options = ask_options(stdin, stdout, depth=args.depth, workers=args.workers)
        ConsoleGame(options, stdin=stdin, stdout=stdout).play()
    except (EOFError, KeyboardInterrupt):
        print("\nGoodbye.", file=stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())

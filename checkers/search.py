"""
Search entry point: minimax with alpha-beta pruning, run sequentially or with
a parallel fan-out over the root moves.

AIPlayer is the automated opponent. It plays one fixed color and searches to
one fixed depth (in plies, the root move included). There is no time limit,
no cancellation and no transposition table: every root move is searched to
the full depth before a decision is returned.

Root decision:
    1. No available moves        -> None (the caller treats it as a loss/pass).
    2. Exactly one available move -> returned at once, nothing is evaluated.
    3. Otherwise every root move is applied to a copy of the board and the
       resulting position is scored with minimax from the opponent's reply.
       The highest score wins.

Sequential vs parallel:
    The sequential path walks the root moves in generation order and only
    replaces the best move on a strictly greater score, so ties keep the
    earliest move and the result is deterministic.

    The parallel path submits every root move to a process pool. CPU-bound
    Python threads share one interpreter lock, so worker processes are used
    instead; each one receives its own pickled copy of the board and runs
    plain sequential minimax below the root. The caller folds results into a
    single best-so-far pair as they complete, again replacing only on a
    strictly greater score. The best score is therefore always the true
    maximum, but which of several equally scored moves is returned depends on
    completion order.

Memory:
    Every node allocates one fresh board copy that is dropped on return. No
    apply/undo, no retained history.
"""

import logging
import os
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict

from checkers.board import Board, Color
from checkers.constants import DEFAULT_SEARCH_DEPTH, MAX_SEARCH_DEPTH, SCORE_INFINITY
from checkers.evaluate import evaluate
from checkers.move import Move

_log = logging.getLogger(__name__)


def clamp_depth(depth: int) -> int:
    """Clamp a requested search depth to [1, MAX_SEARCH_DEPTH], warning if it changes."""
    clamped = max(1, min(depth, MAX_SEARCH_DEPTH))
    if clamped != depth:
        _log.warning("search depth %d is out of range, searching %d plies", depth, clamped)
    return clamped


def check_workers(workers: int | None) -> int | None:
    if workers is not None and workers < 1:
        raise ValueError("workers must be a positive integer")
    return workers


# Shared by every model that carries AI settings (see interface.cli.GameOptions).
SearchDepth = Annotated[int, AfterValidator(clamp_depth)]
WorkerCount = Annotated[int | None, AfterValidator(check_workers)]


class PlayerConfig(BaseModel):
    """
    Validated AI player settings.

    Fields:
        color:     The side the AI plays.
        max_depth: Search depth in plies, clamped to [1, MAX_SEARCH_DEPTH].
                   Depth 1 scores each root move by static evaluation only.
        workers:   Process pool size for the parallel search. None uses the
                   number of CPUs (never more than the number of root moves).
    """

    model_config = ConfigDict(frozen=True)

    color: Color
    max_depth: SearchDepth = DEFAULT_SEARCH_DEPTH
    workers: WorkerCount = None


@dataclass
class SearchState:
    """
    Per-search counters.

    Each root move gets its own SearchState (in the parallel path it lives in
    a worker process), so nothing here is shared between workers.

    Attributes:
        node_count: Number of minimax nodes visited, leaves included.
    """

    node_count: int = 0


@dataclass
class SearchResult:
    """
    Outcome of one root decision.

    Attributes:
        move:     The chosen move, or None when the AI has no legal move.
        score:    Minimax score of the chosen move from the AI's perspective.
                  None when nothing was searched (no move, or a forced move).
        nodes:    Total minimax nodes visited across all root moves.
        elapsed:  Wall-clock seconds spent in the decision.
        forced:   True when exactly one move was available.
        parallel: Whether the root moves were searched in the process pool.
    """

    move: Move | None
    score: int | None = None
    nodes: int = 0
    elapsed: float = 0.0
    forced: bool = False
    parallel: bool = False


class AIPlayer:
    """
    Automated checkers opponent.

    Args:
        color:     The side this player moves for.
        max_depth: Search depth in plies (see PlayerConfig).
        workers:   Process pool size for best_move(); None = CPU count.

    Example:
        >>> ai = AIPlayer(Color.BLACK, max_depth=4)
        >>> board = Board()
        >>> board.apply(Move.parse("c1-d2"), Color.WHITE)
        True
        >>> move = ai.best_move_sequential(board)
        >>> move in board.available_moves(Color.BLACK)
        True
    """

    def __init__(
        self,
        color: Color,
        max_depth: int = DEFAULT_SEARCH_DEPTH,
        workers: int | None = None,
    ) -> None:
        self.config = PlayerConfig(color=color, max_depth=max_depth, workers=workers)

    @property
    def color(self) -> Color:
        return self.config.color

    @property
    def max_depth(self) -> int:
        return self.config.max_depth

    def __repr__(self) -> str:
        return f"AIPlayer(color={self.color}, max_depth={self.max_depth})"

    # -----------------------------------------------------------------------
    # Public interface
    # -----------------------------------------------------------------------

    def best_move(self, board: Board) -> Move | None:
        """Best move using the parallel root search. None if no move exists."""
        return self.analyse(board, parallel=True).move

    def best_move_sequential(self, board: Board) -> Move | None:
        """Best move using the deterministic single-process search."""
        return self.analyse(board, parallel=False).move

    def analyse(self, board: Board, parallel: bool = True) -> SearchResult:
        """
        Choose a move for this player's color and report how it was found.

        Args:
            board:    The current position. Not modified.
            parallel: Fan the root moves out over a process pool.

        Returns:
            SearchResult with the move, its score and search statistics.

        Raises:
            ValueError: If board is None.
        """
        if board is None:
            raise ValueError("board must not be None")

        start = time.monotonic()
        moves = board.available_moves(self.color)

        if not moves:
            _log.info("%s has no legal moves", self.color)
            return SearchResult(move=None, parallel=parallel)

        if len(moves) == 1:
            # Forced: skip the search entirely.
            return SearchResult(
                move=moves[0],
                elapsed=time.monotonic() - start,
                forced=True,
                parallel=parallel,
            )

        if parallel:
            move, score, nodes = self._search_parallel(board, moves)
        else:
            move, score, nodes = self._search_sequential(board, moves)

        elapsed = time.monotonic() - start
        _log.info(
            "%s plays %s score=%d depth=%d nodes=%d time=%.3fs mode=%s",
            self.color,
            move,
            score,
            self.max_depth,
            nodes,
            elapsed,
            "parallel" if parallel else "sequential",
        )
        return SearchResult(
            move=move,
            score=score,
            nodes=nodes,
            elapsed=elapsed,
            parallel=parallel,
        )

    # -----------------------------------------------------------------------
    # Root search
    # -----------------------------------------------------------------------

    def score_root_move(self, board: Board, move: Move) -> tuple[int, int]:
        """
        Score one root move: apply it to a copy, then minimax the reply.

        This is the unit of work shipped to the process pool, so it only
        touches its own copy of the board.

        Returns:
            (score, nodes visited).
        """
        child = board.copy()
        child.apply(move, self.color)
        state = SearchState()
        score = self.minimax(
            child,
            self.max_depth - 1,
            -SCORE_INFINITY,
            SCORE_INFINITY,
            False,
            state,
        )
        return score, state.node_count

    def _search_sequential(self, board: Board, moves: list[Move]) -> tuple[Move, int, int]:
        best_move = moves[0]
        best_score = -SCORE_INFINITY
        nodes = 0

        for move in moves:
            score, visited = self.score_root_move(board, move)
            nodes += visited
            _log.debug("root move %s scored %d (%d nodes)", move, score, visited)
            if score > best_score:
                best_score = score
                best_move = move

        return best_move, best_score, nodes

    def _search_parallel(self, board: Board, moves: list[Move]) -> tuple[Move, int, int]:
        best_move = moves[0]
        best_score = -SCORE_INFINITY
        nodes = 0
        workers = min(self.config.workers or os.cpu_count() or 1, len(moves))

        with ProcessPoolExecutor(max_workers=workers) as pool:
            futures = {pool.submit(self.score_root_move, board, move): move for move in moves}
            for future in as_completed(futures):
                move = futures[future]
                score, visited = future.result()
                nodes += visited
                _log.debug("root move %s scored %d (%d nodes)", move, score, visited)
                # Compare-and-replace in completion order; only ever improves.
                if score > best_score:
                    best_score = score
                    best_move = move

        return best_move, best_score, nodes

    # -----------------------------------------------------------------------
    # Minimax
    # -----------------------------------------------------------------------

    def minimax(
        self,
        board: Board,
        depth: int,
        alpha: int,
        beta: int,
        maximizing: bool,
        state: SearchState | None = None,
    ) -> int:
        """
        Minimax with alpha-beta pruning.

        Maximizing plies move for this player's color, minimizing plies for
        the opponent. A side with no legal moves makes the position terminal,
        so it is handled by the leaf check rather than a separate branch.

        Args:
            board:      Position to search. Never modified; children are copies.
            depth:      Remaining plies. 0 evaluates the position statically.
            alpha:      Best score the maximizer can already guarantee.
            beta:       Best score the minimizer can already guarantee.
            maximizing: True when it is this player's turn at this node.
            state:      Optional node counter.

        Returns:
            The score of the position from this player's perspective.
        """
        if state is not None:
            state.node_count += 1

        if depth == 0 or board.is_over():
            return evaluate(board, self.color)

        side = self.color if maximizing else self.color.opponent

        if maximizing:
            best = -SCORE_INFINITY
            for move in board.available_moves(side):
                child = board.copy()
                child.apply(move, side)
                best = max(best, self.minimax(child, depth - 1, alpha, beta, False, state))
                alpha = max(alpha, best)
                if beta <= alpha:
                    break  # beta cutoff
            return best

        best = SCORE_INFINITY
        for move in board.available_moves(side):
            child = board.copy()
            child.apply(move, side)
            best = min(best, self.minimax(child, depth - 1, alpha, beta, True, state))
            beta = min(beta, best)
            if beta <= alpha:
                break  # alpha cutoff
        return best

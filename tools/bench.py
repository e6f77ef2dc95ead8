#!/usr/bin/env python3
"""
Benchmark: compare sequential and parallel root search at a fixed depth.

Run after each change to the rules engine or the evaluator to see how node
counts and wall-clock times move. Both modes search the same tree, so their
node counts and best scores must match; only the time should differ. A
speedup well below the worker count usually means the root has few moves or
one root move dominates the work.

Usage: python3 tools/bench.py [depth]
"""
import os
import sys

REPO = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO not in sys.path:
    sys.path.insert(0, REPO)

from checkers.board import Board, Color
from checkers.move import Move
from checkers.search import AIPlayer

DEFAULT_DEPTH = 6

# Fixed positions: the start, a few opening lines (white/black alternating)
# and two hand-built endgames. Same positions for every comparison.
POSITIONS = [
    ("Start",        "moves", []),
    ("Single corner", "moves", ["c1-d2", "f2-e1"]),
    ("Centre",       "moves", ["c3-d4", "f4-e3", "b2-c3"]),
    ("Exchange",     "moves", ["c3-d4", "f6-e5"]),
    ("Kings ending", "diagram", """
        ........
        ..B.....
        ........
        ....b...
        ...w....
        ......W.
        ........
        ........
    """),
    ("Runaway",      "diagram", """
        .b.b....
        ........
        ........
        ........
        ........
        ..w.w...
        .w......
        ........
    """),
]


def build_board(kind: str, spec) -> Board:
    """Build a benchmark position from a move list or a diagram."""
    if kind == "diagram":
        return Board.from_diagram(spec)

    board = Board()
    color = Color.WHITE
    for text in spec:
        move = Move.parse(text)
        if not board.apply(move, color):
            raise ValueError(f"illegal benchmark move {text} for {color}")
        color = color.opponent
    return board


def run_position(label: str, board: Board, color: Color, depth: int) -> dict:
    """Search one position in both modes and return the metrics.

    Args:
        label: Human-readable position name for display.
        board: Position to search.
        color: Side to move.
        depth: Search depth in plies.

    Returns:
        Dict with keys: label, move, score, nodes, seq_ms, par_ms.
    """
    ai = AIPlayer(color, max_depth=depth)
    sequential = ai.analyse(board, parallel=False)
    parallel = ai.analyse(board, parallel=True)
    if sequential.score != parallel.score:
        print(f"WARNING: {label}: score mismatch {sequential.score} != {parallel.score}", file=sys.stderr)

    return {
        "label": label,
        "move": str(sequential.move) if sequential.move else "(none)",
        "score": sequential.score if sequential.score is not None else 0,
        "nodes": sequential.nodes,
        "seq_ms": int(sequential.elapsed * 1000),
        "par_ms": int(parallel.elapsed * 1000),
    }


def main() -> None:
    """Run all benchmark positions and print a summary table."""
    depth = int(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_DEPTH
    print(f"Checkers AI benchmark — {sys.executable}")
    print(f"Depth: {depth}, CPUs: {os.cpu_count()}")
    print()
    print(
        f"{'Position':<14} {'Move':<7} {'Score':>6} {'Nodes':>9} "
        f"{'Seq(ms)':>8} {'Par(ms)':>8} {'Speedup':>8}"
    )
    print("-" * 66)

    results = []
    for label, kind, spec in POSITIONS:
        board = build_board(kind, spec)
        # Move lists alternate from white; diagrams are searched for white.
        color = Color.WHITE if kind == "diagram" or len(spec) % 2 == 0 else Color.BLACK
        r = run_position(label, board, color, depth)
        results.append(r)
        speedup = r["seq_ms"] / r["par_ms"] if r["par_ms"] else 0.0
        print(
            f"{r['label']:<14} {r['move']:<7} {r['score']:>6} {r['nodes']:>9,} "
            f"{r['seq_ms']:>8,} {r['par_ms']:>8,} {speedup:>7.2f}x"
        )

    total_seq = sum(r["seq_ms"] for r in results)
    total_par = sum(r["par_ms"] for r in results)
    print("-" * 66)
    print(
        f"{'TOTAL':<14} {'':<7} {'':>6} {sum(r['nodes'] for r in results):>9,} "
        f"{total_seq:>8,} {total_par:>8,} "
        f"{(total_seq / total_par if total_par else 0.0):>7.2f}x"
    )


if __name__ == "__main__":
    main()

"""
Interface package: ways to play against the checkers engine.

Modules:
    cli — Interactive console game (human vs AI, human vs human).
          Installed as the `checkers` command; also runnable with
          `python -m interface.cli`.
"""

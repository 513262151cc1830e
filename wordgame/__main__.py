"""
Entry point for running wordgame as a module.

Usage:
    python -m wordgame play --lexicon words.jsonl --history history.jsonl
    python -m wordgame stats
    python -m wordgame --help
"""
from .cli import main

if __name__ == "__main__":
    main()

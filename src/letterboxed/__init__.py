"""Letter Boxed Puzzle Solver.

Finds the shortest chains of dictionary words that use every letter on a Letter Boxed box.
Each word must start with the last letter of the previous word, and no word may use two
letters from the same side of the box in a row.  Uses breadth-first search over
(end letter, covered letters) states.
"""

from pathlib import Path
from sys import argv, exit

from .candidate import CandidateWord
from .chain import ChainArena, WordChain, WordLink, extend
from .errors import (
    ChainBreak,
    EmptyCandidateSet,
    InvalidConfiguration,
    LetterBoxedError,
    LetterNotOnBoard,
    NoSolutionFound,
)
from .puzzle_config import PuzzleConfig, load_configs, parse_box
from .side_letters import SideLetters
from .solution import PuzzleSolution
from .solver import solver
from .solver.solver import PuzzleSolver, solve_puzzle
from .wordlist import CandidateIndex, WordArchive, load_word_list

__all__ = [
    "CandidateIndex",
    "CandidateWord",
    "ChainArena",
    "ChainBreak",
    "EmptyCandidateSet",
    "InvalidConfiguration",
    "LetterBoxedError",
    "LetterNotOnBoard",
    "NoSolutionFound",
    "PuzzleConfig",
    "PuzzleSolution",
    "PuzzleSolver",
    "SideLetters",
    "WordArchive",
    "WordChain",
    "WordLink",
    "extend",
    "load_configs",
    "load_word_list",
    "main",
    "parse_box",
    "solve_puzzle",
]


def main() -> None:
    """Main entry point for the Letter Boxed solver."""
    # Expect a puzzle file or a box such as RSH-WKB-DEL-YIA, and optionally a word list
    if len(argv) not in (2, 3):
        print("Usage: python -m letterboxed <puzzle_file | box> [word_list_file]")
        exit(1)
    target = argv[1]
    word_list_path = argv[2] if len(argv) == 3 else None

    if Path(target).is_file():
        configs = load_configs(target)
    else:
        try:
            configs = [PuzzleConfig(puzzle_id="box", sides=parse_box(target))]
        except InvalidConfiguration as e:
            print(f"Invalid box '{target}': {e}")
            exit(1)

    archive = WordArchive(load_word_list(word_list_path))
    print(f"Loaded {len(archive)} words")
    print()

    for config in configs:
        solver.run(config, archive)

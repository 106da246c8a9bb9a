"""Main solver module for Letter Boxed puzzles."""

import os
import sys
from collections import Counter
from concurrent.futures import ProcessPoolExecutor
from datetime import datetime
from itertools import chain as iter_chain
from multiprocessing import Value
from multiprocessing.sharedctypes import Synchronized
from operator import attrgetter
from pathlib import Path
from time import time
from typing import TextIO

from bitarray import bitarray
from bitarray.util import zeros
from sortedcontainers import SortedKeyList

from letterboxed.candidate import CandidateWord
from letterboxed.chain import ChainArena, WordChain
from letterboxed.errors import EmptyCandidateSet, NoSolutionFound
from letterboxed.letters import ALPHABET_SIZE, NONE, letter_at, letters_of
from letterboxed.puzzle_config import PuzzleConfig
from letterboxed.side_letters import SideLetters
from letterboxed.solution import PuzzleSolution
from letterboxed.solver.config import SolverConfig
from letterboxed.solver.config import config as solver_config
from letterboxed.solver.utils import TIMESTAMP_FMT, compress_mask, int_comma, target_bits, time_str
from letterboxed.solver.worker import (
    State,
    SuccessorTable,
    Transition,
    expand_states,
    init_worker_globals,
    state_key,
    worker_task,
)
from letterboxed.wordlist import CandidateIndex, WordArchive

SLICES_PER_WORKER = 4
"""Number of slices each worker receives when a layer is expanded in parallel."""


def resolve_workers(n_workers: int | None) -> int:
    """Number of worker processes to use; None means the number of CPU cores minus one."""
    cpus = os.cpu_count() or 1  # Fallback to 1 if os.cpu_count() is None
    if n_workers is None:
        n_workers = max(1, cpus - 1)  # Leave one core free
    if n_workers > cpus:
        raise ValueError(
            f"Requested number of workers ({n_workers}) exceeds CPU count ({cpus})",
        )
    return n_workers


def get_executor(
    *,
    n_workers: int,
    successors: SuccessorTable,
    n_bits: int,
) -> ProcessPoolExecutor:
    """Get a ProcessPoolExecutor whose workers hold the puzzle's successor table.

    Args:
        n_workers (int): Number of worker processes to create.
        successors (SuccessorTable): Successor table to pass to workers.
        n_bits (int): Number of bits in a packed coverage mask.
    """
    worker_ctr: Synchronized[int] = Value("i", 0)
    return ProcessPoolExecutor(
        max_workers=n_workers,
        initializer=init_worker_globals,
        initargs=(worker_ctr, successors, n_bits),
    )


class PuzzleSolver:
    """Breadth-first search for the shortest word chains covering every box letter.

    The search runs over states `(end letter, coverage)`, one layer per word.  The first layer
    holding a state with full coverage gives the minimum word count.  States reached in an
    earlier layer are never expanded again, and chains reaching the same state within a layer
    are merged.
    """

    def __init__(
        self,
        index: CandidateIndex,
        target_mask: int,
        *,
        config: SolverConfig | None = None,
        logf: TextIO | None = None,
    ) -> None:
        """Initialize the solver.

        Args:
            index (CandidateIndex): Candidate words by first letter, from
                `WordArchive.candidates_for`.
            target_mask (int): Coverage mask of every box letter.
            config (SolverConfig | None): Solver settings.  Defaults to the global config.
            logf (TextIO | None): Stream for progress messages, or None for no logging.
        """
        self.config = config if config is not None else solver_config
        self.target_mask = target_mask
        self.logf = logf

        by_letter: list[list[CandidateWord]] = [[]]
        by_letter.extend(list(index.get(letter_at(i), ())) for i in range(1, ALPHABET_SIZE + 1))
        # Any word can start a chain; the per-letter lists are sorted, so this one is too
        by_letter[0] = list(iter_chain.from_iterable(by_letter[1:]))
        self._by_letter = by_letter

        self._bits = target_bits(target_mask)
        self._n_bits = len(self._bits)
        self._full = (1 << self._n_bits) - 1
        self._successors: SuccessorTable = [
            [(word.last_letter, compress_mask(word.mask, self._bits)) for word in words]
            for words in by_letter
        ]

    @classmethod
    def for_puzzle(
        cls,
        side_letters: SideLetters,
        archive: WordArchive,
        *,
        config: SolverConfig | None = None,
        logf: TextIO | None = None,
    ) -> "PuzzleSolver":
        """Create a solver for a box, using the candidate words from an archive."""
        return cls(archive.candidates_for(side_letters), side_letters.mask, config=config, logf=logf)

    @property
    def n_candidates(self) -> int:
        return len(self._by_letter[0])

    def solve(self) -> PuzzleSolution:
        """Return the best solution: fewest words, then fewest letters, then alphabetical.

        Raises:
            EmptyCandidateSet: If there are no candidate words.
            NoSolutionFound: If no chain of at most `max_words` words covers every box letter.
        """
        return self._run(keep_all=False)[0]

    def solve_all(self) -> list[PuzzleSolution]:
        """Return every solution with the minimum number of words, best first.

        Raises:
            EmptyCandidateSet: If there are no candidate words.
            NoSolutionFound: If no chain of at most `max_words` words covers every box letter.
        """
        return self._run(keep_all=True)

    def solve_with_word_count(self, word_count: int) -> list[PuzzleSolution]:
        """Return every solution of exactly `word_count` words, best first.

        Unlike `solve_all`, this also lists solutions longer than the minimum, and chains whose
        first words already cover the box.  The number of chains can grow quickly with
        `word_count`.

        Raises:
            ValueError: If `word_count` is not between 1 and `max_words`.
            EmptyCandidateSet: If there are no candidate words.
            NoSolutionFound: If no chain of exactly `word_count` words covers every box letter.
        """
        if not 1 <= word_count <= self.config.max_words:
            raise ValueError(
                f"Word count must be between 1 and {self.config.max_words}, got {word_count}."
            )
        return self._run(keep_all=True, word_count=word_count)

    def find_solutions(self) -> list[PuzzleSolution]:
        """Return all minimal solutions or only the best one, per `return_all_solutions`."""
        if self.config.return_all_solutions:
            return self.solve_all()
        return [self.solve()]

    def _log(self, message: str) -> None:
        if self.logf is not None:
            print(message, file=self.logf, flush=True)

    def _run(self, *, keep_all: bool, word_count: int | None = None) -> list[PuzzleSolution]:
        self._log(f"Candidate words: {int_comma(self.n_candidates)}")
        if not self.n_candidates:
            raise EmptyCandidateSet("There are no candidate words for this box.")

        reachable = 0
        for word in self._by_letter[0]:
            reachable |= word.mask
        missing = self.target_mask & ~reachable
        if missing:
            raise NoSolutionFound(f"No candidate word contains the letters {letters_of(missing)}.")

        if not self.config.parallel_expansion:
            return self._search(keep_all=keep_all, word_count=word_count, executor=None)

        n_workers = resolve_workers(self.config.max_workers)
        self._log(f"Using up to {n_workers} worker processes for large layers.")
        with get_executor(
            n_workers=n_workers,
            successors=self._successors,
            n_bits=self._n_bits,
        ) as executor:
            try:
                return self._search(
                    keep_all=keep_all,
                    word_count=word_count,
                    executor=executor,
                    n_workers=n_workers,
                )
            except (KeyboardInterrupt, Exception):
                executor.shutdown(wait=False, cancel_futures=True)
                raise

    def _search(
        self,
        *,
        keep_all: bool,
        word_count: int | None,
        executor: ProcessPoolExecutor | None,
        n_workers: int = 1,
    ) -> list[PuzzleSolution]:
        """Run the layered search.

        Without `word_count`, stop at the first layer holding a complete state and skip states
        reached at an earlier depth.  With `word_count`, expand every chain for exactly that
        many layers and collect the complete states of the last one.
        """
        exact = word_count is not None
        last_depth = word_count if exact else self.config.max_words
        n_bits = self._n_bits
        seen = zeros((ALPHABET_SIZE + 1) << n_bits)
        seen[state_key(NONE, 0, n_bits)] = True

        # Layer 0: the empty chain
        states: list[State] = [(NONE, 0)]
        chains: list[list[WordChain]] = [[WordChain.empty(ChainArena())]]

        for depth in range(1, last_depth + 1):
            start = time()
            transitions = self._expand(states, seen, executor, n_workers)
            layer = self._merge(states, chains, transitions, keep_all=keep_all)

            self._log(
                f"Depth {depth}: {int_comma(len(states))} states expanded into "
                f"{int_comma(len(layer))} new states in {time_str(time() - start)}."
            )

            complete = []
            if not exact or depth == last_depth:
                complete = [key for key in layer if (key & self._full) == self._full]
            if complete:
                solutions = SortedKeyList(
                    (PuzzleSolution(chain, self.target_mask) for key in complete for chain in layer[key]),
                    key=attrgetter("sort_key"),
                )
                for solution in solutions:
                    _check_solution(solution)
                self._log(f"Found {int_comma(len(solutions))} solutions with {depth} words.")
                return list(solutions) if keep_all else [solutions[0]]

            if not layer:
                raise NoSolutionFound(
                    f"No chain covers every letter; the search ran out of states after {depth - 1} "
                    "words."
                )

            if not exact:
                for key in layer:
                    seen[key] = True
            states = [(key >> n_bits, key & self._full) for key in layer]
            chains = list(layer.values())

        if exact:
            raise NoSolutionFound(f"No chain of exactly {word_count} words covers every letter.")
        raise NoSolutionFound(
            f"No chain of at most {self.config.max_words} words covers every letter."
        )

    def _merge(
        self,
        states: list[State],
        chains: list[list[WordChain]],
        transitions: list[Transition],
        *,
        keep_all: bool,
    ) -> dict[int, list[WordChain]]:
        """Extend the chains of a layer along its transitions, grouped by next state.

        With `keep_all`, every chain reaching a state is kept.  Otherwise only the best chain per
        state is built, so losing chains never enter the arena.
        """
        layer: dict[int, list[WordChain]] = {}
        if keep_all:
            for pos, cand_pos, key in transitions:
                word = self._by_letter[states[pos][0]][cand_pos]
                extended = [chain.extend(word) for chain in chains[pos]]
                layer.setdefault(key, []).extend(extended)
            return layer

        best: dict[int, tuple[WordChain, CandidateWord]] = {}
        for pos, cand_pos, key in transitions:
            step = (chains[pos][0], self._by_letter[states[pos][0]][cand_pos])
            current = best.get(key)
            if current is None or _is_better(*step, *current):
                best[key] = step
        for key, (prefix, word) in best.items():
            layer[key] = [prefix.extend(word)]
        return layer

    def _expand(
        self,
        states: list[State],
        seen: bitarray,
        executor: ProcessPoolExecutor | None,
        n_workers: int,
    ) -> list[Transition]:
        """Compute the transitions out of a layer, in worker processes if it is large enough."""
        if executor is None or len(states) < self.config.parallel_frontier_threshold:
            return expand_states(states, self._successors, seen, self._n_bits)

        size = -(-len(states) // (n_workers * SLICES_PER_WORKER))
        futures = [
            executor.submit(worker_task, states[offset : offset + size], offset, seen)
            for offset in range(0, len(states), size)
        ]
        # Single-writer merge: collect in submission order so the result matches the
        # sequential expansion
        transitions: list[Transition] = []
        slices = Counter()
        for future in futures:
            worker_idx, part = future.result()
            slices[worker_idx] += 1
            transitions.extend(part)
        for worker_idx, n_slices in sorted(slices.items()):
            self._log(f"  Worker {worker_idx}: {n_slices} slices")
        return transitions


def _is_better(
    prefix: WordChain,
    word: CandidateWord,
    other_prefix: WordChain,
    other_word: CandidateWord,
) -> bool:
    """Whether `prefix` + `word` beats `other_prefix` + `other_word`.

    Fewer letters win, then alphabetically smaller words.
    """
    letters = prefix.letter_count + len(word)
    other_letters = other_prefix.letter_count + len(other_word)
    if letters != other_letters:
        return letters < other_letters
    return prefix.words() + (word.word,) < other_prefix.words() + (other_word.word,)


def _check_solution(solution: PuzzleSolution) -> None:
    """Internal consistency check of a solution before it is returned."""
    assert solution.is_complete, f"Solution {solution} misses {solution.missing_letters}."
    links = solution.chain.links()
    assert all(a.end_letter == b.start_letter for a, b in zip(links, links[1:])), (
        f"Solution {solution} is not a chain."
    )


def solve_puzzle(
    side_letters: SideLetters,
    archive: WordArchive,
    *,
    config: SolverConfig | None = None,
    logf: TextIO | None = None,
) -> list[PuzzleSolution]:
    """Solve a box with the words of an archive; see `PuzzleSolver.find_solutions`."""
    solver = PuzzleSolver.for_puzzle(side_letters, archive, config=config, logf=logf)
    return solver.find_solutions()


def run(
    puzzle_config: PuzzleConfig,
    archive: WordArchive,
    *,
    config: SolverConfig | None = None,
) -> list[PuzzleSolution]:
    """Run the solver on the given puzzle, logging to a file under the configured log dir.

    Args:
        puzzle_config (PuzzleConfig): The puzzle to solve.
        archive (WordArchive): The allowed words.
        config (SolverConfig | None): Solver settings.  Defaults to the global config.

    Returns:
        The solutions found (empty if there are none).
    """
    config = config if config is not None else solver_config
    print(f"puzzle: {puzzle_config}")

    logfile = Path(config.log_dir) / f"{puzzle_config.puzzle_id}.log"
    print(f"Log file: {logfile}")

    logfile.parent.mkdir(parents=True, exist_ok=True)

    with open(logfile, "w", encoding="utf-8") as logf:
        try:
            solutions = solve_one(puzzle_config, archive, config=config, logf=logf)
        except KeyboardInterrupt:
            print("Solver interrupted by user.", file=logf, flush=True)
            print("Solver interrupted by user.")
            sys.exit(1)

    for solution in solutions:
        print(f"Solution: {solution} ({solution.word_count} words, {solution.letter_count} letters)")
    print()
    return solutions


def solve_one(
    puzzle_config: PuzzleConfig,
    archive: WordArchive,
    *,
    config: SolverConfig,
    logf: TextIO,
) -> list[PuzzleSolution]:
    """Attempt to solve a Letter Boxed puzzle.

    Args:
        puzzle_config (PuzzleConfig): The puzzle to solve.
        archive (WordArchive): The allowed words.
        config (SolverConfig): Solver settings.
        logf: File object to log the solving process.
    """
    side_letters = puzzle_config.side_letters
    print(f"Selected puzzle: {puzzle_config.puzzle_id}", file=logf, flush=True)
    print(f"Box: {side_letters}", file=logf, flush=True)
    print(f"Archive size: {int_comma(len(archive))} words", file=logf, flush=True)
    print("Solver config:", file=logf, flush=True)
    for key, value in config.model_dump().items():
        print(f"  {key}: {value}", file=logf, flush=True)

    start_time = time()
    start_time_str = datetime.fromtimestamp(start_time).astimezone().strftime(TIMESTAMP_FMT)
    print(f"Start time: {start_time_str}", file=logf, flush=True)

    try:
        solutions = solve_puzzle(side_letters, archive, config=config, logf=logf)
    except (NoSolutionFound, EmptyCandidateSet) as e:
        print("No solution found.", file=logf, flush=True)
        print(f"Reason: {e}", file=logf, flush=True)
        print(f"No solution found: {e}")
        return []

    print("Solution found!", file=logf, flush=True)
    for solution in solutions:
        print(f"  {solution}", file=logf, flush=True)
    print(f"Time taken: {time_str(time() - start_time)}", file=logf, flush=True)
    return solutions

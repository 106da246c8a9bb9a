"""Layer expansion for the breadth-first search, shared by the solver and its worker processes."""

from collections.abc import Sequence
from dataclasses import dataclass
from multiprocessing.sharedctypes import Synchronized
from typing import TypeAlias

from bitarray import bitarray

Successor: TypeAlias = tuple[int, int]
"""`(last_letter, packed_mask)` of a candidate word."""

SuccessorTable: TypeAlias = list[list[Successor]]
"""Element [letter] lists the successors of every candidate starting with `letter`.

Element [0] (no letter) lists every candidate, for the first word of a chain.
"""

State: TypeAlias = tuple[int, int]
"""`(end_letter, packed_mask)` of a search state."""

Transition: TypeAlias = tuple[int, int, int]
"""`(state_position, candidate_position, next_state_key)` of one search step."""


def state_key(end_letter: int, packed_mask: int, n_bits: int) -> int:
    """Index of a state in the visited-state table."""
    return (end_letter << n_bits) | packed_mask


def expand_states(
    states: Sequence[State],
    successors: SuccessorTable,
    seen: bitarray,
    n_bits: int,
    *,
    offset: int = 0,
) -> list[Transition]:
    """Compute every transition out of `states` into a state not yet in `seen`.

    Args:
        states: The states to expand.
        successors: Successor table of the candidate words.
        seen: Visited-state table; bit `state_key(...)` is set for states reached at an
            earlier depth.
        n_bits: Number of bits in a packed coverage mask.
        offset: Added to each state position in the result (for expanding a slice of a layer).

    Returns:
        The transitions, in order of state and then candidate position.
    """
    transitions: list[Transition] = []
    for pos, (end_letter, packed) in enumerate(states, start=offset):
        for cand_pos, (last_letter, cand_packed) in enumerate(successors[end_letter]):
            key = (last_letter << n_bits) | packed | cand_packed
            if not seen[key]:
                transitions.append((pos, cand_pos, key))
    return transitions


@dataclass(kw_only=True)
class WorkerState:
    """Global state maintained by each worker process."""

    worker_idx: int
    """Index of the worker process."""

    successors: SuccessorTable
    """Successor table for the puzzle being solved."""

    n_bits: int
    """Number of bits in a packed coverage mask."""


worker_state: WorkerState | None = None
"""Global state for each worker process."""


def init_worker_globals(
    worker_ctr: "Synchronized[int]",
    successors: SuccessorTable,
    n_bits: int,
) -> None:
    """Initialize global variables for worker processes.

    Args:
        worker_ctr (Synchronized[int]): Shared counter for workers.
        successors (SuccessorTable): Successor table for the puzzle.
        n_bits (int): Number of bits in a packed coverage mask.
    """
    global worker_state  # noqa: PLW0603
    with worker_ctr.get_lock():
        # Get and set the shared worker counter atomically, using the obtained value
        # as the worker index
        worker_idx = worker_ctr.value
        worker_ctr.value += 1

    worker_state = WorkerState(worker_idx=worker_idx, successors=successors, n_bits=n_bits)
    print(f"Worker {worker_idx} initialized.", flush=True)


def worker_task(states: list[State], offset: int, seen: bitarray) -> tuple[int, list[Transition]]:
    """Expand a slice of a search layer in a worker process.

    Args:
        states (list[State]): The slice of the layer.
        offset (int): Position of the slice's first state within the layer.
        seen (bitarray): Snapshot of the visited-state table for this layer.

    Returns:
        The index of this worker, and the transitions out of the slice (see `expand_states`).
    """
    if not worker_state:
        raise RuntimeError("Worker state not initialized. Call init_worker_globals first.")
    transitions = expand_states(
        states,
        worker_state.successors,
        seen,
        worker_state.n_bits,
        offset=offset,
    )
    return worker_state.worker_idx, transitions

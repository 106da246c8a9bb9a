"""Model of the four sides of a Letter Boxed puzzle."""

from collections.abc import Iterable
from functools import cached_property
from itertools import product

import numpy as np

from letterboxed.errors import InvalidConfiguration, LetterNotOnBoard
from letterboxed.letters import ALPHABET_SIZE, NONE, index_of, letter_at, mask_of

N_SIDES = 4
"""Number of sides on the box."""

LETTERS_PER_SIDE = 3
"""Number of letters on each side of the box."""

OFF_BOARD = -1
"""Value of `SideLetters.side_table` for letters that are not on the box."""


class SideLetters:
    """The twelve letters of a box, grouped into four sides of three.

    Letters are normalised to uppercase.  Construction fails with `InvalidConfiguration` if the
    box does not have four sides of three letters, or if any letter is outside A-Z or appears
    twice on the box.
    """

    def __init__(self, groups: Iterable[str | Iterable[str]]) -> None:
        sides: list[str] = []
        for side_id, group in enumerate(groups):
            letters = [str(ch) for ch in group]
            if len(letters) != LETTERS_PER_SIDE:
                raise InvalidConfiguration(
                    f"Side {side_id} must have exactly {LETTERS_PER_SIDE} letters, "
                    f"got {len(letters)}: {''.join(letters)!r}"
                )
            for ch in letters:
                if index_of(ch) == NONE:
                    raise InvalidConfiguration(f"Side {side_id} has a non-alphabet letter {ch!r}.")
            sides.append("".join(letters).upper())

        if len(sides) != N_SIDES:
            raise InvalidConfiguration(f"A box must have {N_SIDES} sides, got {len(sides)}.")

        codes = np.array([index_of(ch) for ch in "".join(sides)], dtype=np.int8)
        counts = np.bincount(codes, minlength=ALPHABET_SIZE + 1)
        repeated = np.flatnonzero(counts > 1)
        if repeated.size:
            raise InvalidConfiguration(
                "Letters appear more than once on the box: "
                + ", ".join(letter_at(int(i)) for i in repeated)
            )

        self.sides: tuple[str, ...] = tuple(sides)
        """The four sides, each a string of three uppercase letters."""

        self.letters: str = "".join(sides)
        """The twelve box letters, in side order."""

        self.mask: int = mask_of(self.letters)
        """Coverage mask with every box letter set (the solver's target)."""

        side_table = np.full(ALPHABET_SIZE + 1, OFF_BOARD, dtype=np.int8)
        for side_id, side in enumerate(sides):
            side_table[[index_of(ch) for ch in side]] = side_id
        side_table.setflags(write=False)
        self.side_table: np.ndarray = side_table
        """Side id (0-3) of each letter index 0-26; `OFF_BOARD` for index 0 and absent letters."""

    @property
    def sorted_letters(self) -> str:
        """The twelve box letters in alphabetical order."""
        return "".join(sorted(self.letters))

    def side_of(self, letter: str | int) -> int:
        """Return the side id (0-3) of a box letter, given as a letter or a 1-26 index.

        Raises:
            LetterNotOnBoard: If the letter is not one of the twelve box letters.
        """
        index = index_of(letter) if isinstance(letter, str) else letter
        if not 1 <= index <= ALPHABET_SIZE or self.side_table[index] == OFF_BOARD:
            raise LetterNotOnBoard(f"Letter {letter!r} is not on the box {self}.")
        return int(self.side_table[index])

    @cached_property
    def forbidden_pairs(self) -> frozenset[str]:
        """All two-letter sequences whose letters share a side (doubled letters included)."""
        return frozenset(a + b for side in self.sides for a, b in product(side, repeat=2))

    def is_forbidden_pair(self, pair: str) -> bool:
        """Whether a two-letter sequence may not appear inside a word on this box."""
        if len(pair) != 2 or any(index_of(ch) == NONE for ch in pair):
            raise ValueError(f"Expected two alphabet letters, got {pair!r}.")
        return pair.upper() in self.forbidden_pairs

    def __str__(self) -> str:
        return "-".join(self.sides)

    def __repr__(self) -> str:
        return f"SideLetters({list(self.sides)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SideLetters):
            return NotImplemented
        return self.sides == other.sides

    def __hash__(self) -> int:
        return hash(self.sides)

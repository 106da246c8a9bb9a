"""Solutions returned by the puzzle solver."""

from dataclasses import dataclass, field

from letterboxed.chain import WordChain
from letterboxed.letters import letters_of


@dataclass(frozen=True)
class PuzzleSolution:
    """A winning word chain, with read-only summary fields."""

    chain: WordChain = field(repr=False)
    """The chain of words."""

    target_mask: int = field(repr=False)
    """Coverage mask of every box letter."""

    words: tuple[str, ...] = field(init=False)
    """The words of the solution, in order."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "words", self.chain.words())

    @property
    def word_count(self) -> int:
        return self.chain.word_count

    @property
    def letter_count(self) -> int:
        return self.chain.letter_count

    @property
    def is_complete(self) -> bool:
        """Whether the chain covers every box letter."""
        return self.chain.mask & self.target_mask == self.target_mask

    @property
    def missing_letters(self) -> str:
        """Box letters the chain does not cover."""
        return letters_of(self.target_mask & ~self.chain.mask)

    @property
    def sort_key(self) -> tuple[int, int, tuple[str, ...]]:
        """Ordering of solutions: fewer words, then fewer letters, then alphabetical."""
        return (self.word_count, self.letter_count, self.words)

    def __str__(self) -> str:
        return "-".join(self.words)

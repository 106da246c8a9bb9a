"""Candidate words: dictionary words that can be played on a given box."""

from dataclasses import dataclass, field

from letterboxed.letters import NONE, index_of, is_word, letter_at, letter_bit


@dataclass(frozen=True)
class CandidateWord:
    """A word playable on a box, with its letter codes and coverage mask.

    Instances are produced by `WordArchive.candidates_for`, which only yields words that are on
    the box and never use two letters of the same side in a row.
    """

    word: str
    """The word, in uppercase."""

    letters: tuple[int, ...] = field(repr=False, compare=False)
    """1-based alphabet index of each letter of the word."""

    mask: int = field(repr=False, compare=False)
    """Coverage mask of the distinct letters in the word."""

    @classmethod
    def from_word(cls, word: str) -> "CandidateWord":
        """Build a candidate from a word made of alphabet letters (either case)."""
        if not is_word(word):
            raise ValueError(f"Cannot build a candidate word from {word!r}.")
        letters = tuple(index_of(ch) for ch in word)
        return cls.from_codes(word.upper(), letters)

    @classmethod
    def from_codes(cls, word: str, letters: tuple[int, ...]) -> "CandidateWord":
        mask = 0
        for index in letters:
            mask |= letter_bit(index)
        return cls(word=word, letters=letters, mask=mask)

    @property
    def first_letter(self) -> int:
        """Index of the first letter."""
        return self.letters[0] if self.letters else NONE

    @property
    def last_letter(self) -> int:
        """Index of the last letter."""
        return self.letters[-1] if self.letters else NONE

    @property
    def start(self) -> str:
        """The first letter."""
        return letter_at(self.first_letter)

    @property
    def end(self) -> str:
        """The last letter."""
        return letter_at(self.last_letter)

    def __len__(self) -> int:
        return len(self.word)

    def __str__(self) -> str:
        return self.word

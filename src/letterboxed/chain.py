"""Persistent word chains built on a shared, append-only arena of links."""

from dataclasses import dataclass
from typing import NamedTuple

from letterboxed.candidate import CandidateWord
from letterboxed.errors import ChainBreak
from letterboxed.letters import NONE, letter_at

ROOT = -1
"""Node id of the empty chain."""


class WordLink(NamedTuple):
    """A word appended to a chain: an edge from its first letter to its last letter."""

    start_letter: int
    """Index of the word's first letter."""

    end_letter: int
    """Index of the word's last letter."""

    word: CandidateWord
    """The appended word."""

    added_mask: int
    """Letters the word covers that the chain did not cover before it."""


class ChainArena:
    """Append-only log of chain nodes.

    Node `i` is the pair `(parents[i], links[i])`.  A chain is addressed by the id of its last
    node, so chains sharing a prefix share its nodes and extending a chain never changes it.
    """

    def __init__(self) -> None:
        self.parents: list[int] = []
        self.links: list[WordLink] = []

    def append(self, parent: int, link: WordLink) -> int:
        """Add a node and return its id."""
        self.parents.append(parent)
        self.links.append(link)
        return len(self.links) - 1

    def __len__(self) -> int:
        return len(self.links)


@dataclass(frozen=True)
class WordChain:
    """A sequence of words, each starting with the last letter of the previous one."""

    arena: ChainArena
    tip: int = ROOT
    end_letter: int = NONE
    mask: int = 0
    word_count: int = 0
    letter_count: int = 0

    @classmethod
    def empty(cls, arena: ChainArena | None = None) -> "WordChain":
        """Return the zero-length chain, stored in `arena` (a new one if not given)."""
        return cls(arena=arena if arena is not None else ChainArena())

    def extend(self, word: CandidateWord) -> "WordChain":
        """Return a new chain with `word` appended.

        Raises:
            ChainBreak: If the chain is not empty and `word` does not start with its end letter.
        """
        if self.word_count and word.first_letter != self.end_letter:
            raise ChainBreak(
                f"Cannot append {word.word!r} to a chain ending in {letter_at(self.end_letter)!r}."
            )
        link = WordLink(
            start_letter=word.first_letter,
            end_letter=word.last_letter,
            word=word,
            added_mask=word.mask & ~self.mask,
        )
        return WordChain(
            arena=self.arena,
            tip=self.arena.append(self.tip, link),
            end_letter=word.last_letter,
            mask=self.mask | word.mask,
            word_count=self.word_count + 1,
            letter_count=self.letter_count + len(word),
        )

    def links(self) -> tuple[WordLink, ...]:
        """The links of the chain, first word first."""
        links: list[WordLink] = []
        node = self.tip
        while node != ROOT:
            links.append(self.arena.links[node])
            node = self.arena.parents[node]
        return tuple(reversed(links))

    def words(self) -> tuple[str, ...]:
        """The words of the chain, in order."""
        return tuple(link.word.word for link in self.links())

    def __len__(self) -> int:
        return self.word_count

    def __str__(self) -> str:
        return "-".join(self.words())


def extend(chain: WordChain, word: CandidateWord) -> WordChain:
    """Return `chain` with `word` appended; see `WordChain.extend`."""
    return chain.extend(word)

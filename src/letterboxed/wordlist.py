"""Module for word list management: loading, and filtering into candidate words for a box."""

from collections.abc import Iterable, Sequence
from operator import attrgetter
from pathlib import Path
from typing import TypeAlias

import numpy as np
from sortedcontainers import SortedKeyList

from letterboxed.candidate import CandidateWord
from letterboxed.letters import ALPHABET_SIZE, is_word, letter_at
from letterboxed.side_letters import SideLetters
from letterboxed.solver.config import config as solver_config

CandidateIndex: TypeAlias = dict[str, SortedKeyList]
"""Mapping of each letter A-Z to the candidate words starting with it, sorted by word."""

_PAD = chr(ord("A") - 1)
"""Padding character; encodes to letter code 0 (no letter)."""


def load_word_list(path: str | Path | None = None, *, min_len: int | None = None) -> list[str]:
    """Load the word list from a file with one word per line.

    Args:
        path: Path to the word list file.  Defaults to the configured `word_list_path`.
        min_len: Minimum word length to include.  Defaults to the configured `min_word_length`.

    Returns:
        The uppercased words, in file order, without duplicates.  Lines that are not made of
        ASCII letters are skipped.
    """
    word_list_path = Path(path if path is not None else solver_config.word_list_path)
    if min_len is None:
        min_len = solver_config.min_word_length
    if not word_list_path.is_file():
        raise FileNotFoundError(f"Word list file not found: {word_list_path}")

    with word_list_path.open("r", encoding="utf-8") as f:
        words: dict[str, None] = {}
        for line in f:
            word = line.strip()
            if not is_word(word) or len(word) < min_len:
                continue
            words[word.upper()] = None
        return list(words)


def encode_words(words: Sequence[str]) -> np.ndarray:
    """Encode uppercase ASCII words as a zero-padded matrix of 1-based letter codes.

    Row `i` holds the codes of `words[i]`, followed by zeros up to the longest word's length.
    """
    width = max((len(w) for w in words), default=0)
    if not words or width == 0:
        return np.zeros((len(words), width), dtype=np.uint8)
    padded = "".join(w.ljust(width, _PAD) for w in words).encode("ascii")
    codes = np.frombuffer(padded, dtype=np.uint8).reshape(len(words), width)
    return codes - np.uint8(ord(_PAD))


class WordArchive:
    """The dictionary of allowed words, filtered per box into candidate words.

    Words are case-insensitive.  Entries that are empty, shorter than the minimum length, or
    contain anything but ASCII letters can never be played and are dropped silently.
    """

    def __init__(self, words: Iterable[str], *, min_len: int | None = None) -> None:
        self.words: tuple[str, ...] = tuple(words)
        """The raw archive entries, as given."""

        self.min_len: int = solver_config.min_word_length if min_len is None else min_len
        """Shortest playable word length."""

        playable: dict[str, None] = {}
        for entry in self.words:
            word = entry.strip()
            if len(word) >= self.min_len and is_word(word):
                playable[word.upper()] = None
        self._playable: list[str] = list(playable)
        self._codes: np.ndarray = encode_words(self._playable)
        self._lengths: np.ndarray = np.count_nonzero(self._codes, axis=1)
        self._cache: dict[SideLetters, CandidateIndex] = {}

    @classmethod
    def from_text(cls, text: str, *, min_len: int | None = None) -> "WordArchive":
        """Create an archive from whitespace-delimited text."""
        return cls(text.split(), min_len=min_len)

    def __len__(self) -> int:
        return len(self.words)

    def candidates_for(self, side_letters: SideLetters) -> CandidateIndex:
        """Return the candidate words for a box, indexed by their first letter.

        A word is a candidate if all its letters are on the box and no two adjacent letters are
        on the same side.  Every letter A-Z is a key of the result; letters that start no
        candidate map to an empty list.  The result is cached per box.
        """
        cached = self._cache.get(side_letters)
        if cached is not None:
            return cached

        index: CandidateIndex = {
            letter_at(i): SortedKeyList(key=attrgetter("word"))
            for i in range(1, ALPHABET_SIZE + 1)
        }

        if self._playable:
            codes = self._codes
            present = codes != 0
            # Padding (code 0) looks up as off-board, so mask it out
            sides = side_letters.side_table[codes]
            on_board = np.all((sides >= 0) | ~present, axis=1)
            same_side = present[:, 1:] & (sides[:, 1:] == sides[:, :-1])
            allowed = on_board & ~np.any(same_side, axis=1)

            for row in np.flatnonzero(allowed):
                word = self._playable[row]
                letters = tuple(codes[row, : self._lengths[row]].tolist())
                index[word[0]].add(CandidateWord.from_codes(word, letters))

        self._cache[side_letters] = index
        return index

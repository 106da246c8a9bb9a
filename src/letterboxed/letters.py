"""Conversion between letters, 1-based alphabet indices and coverage masks."""

ALPHABET_SIZE = 26

NONE = 0
"""Index used for an absent or invalid letter."""

NO_LETTER = ""
"""Letter returned for an index outside 1-26."""

ALPHABET_MASK = (1 << ALPHABET_SIZE) - 1
"""Coverage mask with all 26 letters set."""

_ORD_A = ord("A")


def index_of(letter: str) -> int:
    """Return the 1-based alphabet index of a letter (either case), or NONE."""
    if len(letter) != 1 or not letter.isascii():
        return NONE
    code = ord(letter.upper()) - _ORD_A + 1
    return code if 1 <= code <= ALPHABET_SIZE else NONE


def letter_at(index: int) -> str:
    """Return the uppercase letter for a 1-based index, or NO_LETTER."""
    if 1 <= index <= ALPHABET_SIZE:
        return chr(_ORD_A + index - 1)
    return NO_LETTER


def letter_bit(index: int) -> int:
    """Return the coverage bit for a 1-based index (0 for NONE or out of range)."""
    if 1 <= index <= ALPHABET_SIZE:
        return 1 << (index - 1)
    return 0


def mask_of(text: str) -> int:
    """Return the coverage mask of all letters in `text`.

    Characters that are not letters A-Z contribute nothing.
    """
    mask = 0
    for ch in text:
        mask |= letter_bit(index_of(ch))
    return mask


def letters_of(mask: int) -> str:
    """Return the letters set in a coverage mask, in alphabetical order."""
    return "".join(
        letter_at(index) for index in range(1, ALPHABET_SIZE + 1) if mask & letter_bit(index)
    )


def is_word(text: str) -> bool:
    """Whether `text` is non-empty and made only of ASCII letters."""
    return text.isascii() and text.isalpha()

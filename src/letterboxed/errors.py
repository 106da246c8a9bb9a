"""Exceptions raised by the Letter Boxed solver."""


class LetterBoxedError(Exception):
    """Base class for all solver errors."""

    pass


class InvalidConfiguration(LetterBoxedError, ValueError):
    """The box (or a puzzle file describing it) is malformed."""

    pass


class LetterNotOnBoard(LetterBoxedError, LookupError):
    """A side was requested for a letter that is not on the box."""

    pass


class ChainBreak(LetterBoxedError, ValueError):
    """A word does not start with the end letter of the chain it extends."""

    pass


class NoSolutionFound(LetterBoxedError):
    """No chain covers every box letter within the word-count ceiling."""

    pass


class EmptyCandidateSet(LetterBoxedError):
    """The word archive yields no candidate words for the box."""

    pass

"""Utility functions for the Letter Boxed solver."""

from letterboxed.letters import ALPHABET_SIZE, letter_bit

TIMESTAMP_FMT = "%Y-%m-%d %H:%M:%S.%f %Z%z"


def target_bits(target_mask: int) -> list[int]:
    """Return the coverage bits set in `target_mask`, lowest first."""
    bits = [letter_bit(i) for i in range(1, ALPHABET_SIZE + 1)]
    return [bit for bit in bits if target_mask & bit]


def compress_mask(mask: int, bits: list[int]) -> int:
    """Pack the bits of `mask` selected by `bits` into a dense mask of `len(bits)` bits.

    Bit `i` of the result is set if `bits[i]` is set in `mask`.  With the twelve box letters as
    `bits`, this maps a 26-bit coverage mask to a 12-bit index into the visited-state table.
    """
    packed = 0
    for i, bit in enumerate(bits):
        if mask & bit:
            packed |= 1 << i
    return packed


def time_str(seconds: float) -> str:
    """Convert a time duration in seconds to a human-readable string.

    Args:
        seconds: Time duration in seconds.

    Returns:
        A string formatted as "HH:MM:SS.sss".
    """
    hours, rem = divmod(seconds, 3600)
    minutes, secs = divmod(rem, 60)
    return f"{int(hours):02}:{int(minutes):02}:{secs:05.2f}"


def int_comma(n: int) -> str:
    """Format an integer with commas as thousands separators."""
    return f"{n:,}"

"""Fixed-width unsigned integer helpers: bit scans and carry arithmetic."""

from __future__ import annotations

__all__ = [
    "flog2",
    "trailingzeros",
    "clog2",
    "add_with_carry",
    "sub_with_carry",
    "wrap",
]


def _check_bits(bits: int) -> int:
    if bits <= 0:
        raise ValueError(f"bit width must be positive, got {bits}")
    return (1 << bits) - 1


def wrap(value: int, bits: int) -> int:
    """Reduce ``value`` modulo 2**bits, as an unsigned integer of that width."""
    return value & _check_bits(bits)


def flog2(value: int) -> int:
    """Return floor(log2(value)) for a positive integer."""
    if value <= 0:
        raise ValueError(f"flog2 is undefined for {value}")
    return value.bit_length() - 1


def trailingzeros(value: int, bits: int) -> int:
    """Count the trailing zero bits of an unsigned ``bits``-wide value.

    A value of zero has ``bits`` trailing zeros.
    """
    value = wrap(value, bits)
    if value == 0:
        return bits
    return (value & -value).bit_length() - 1


def clog2(value: int) -> int:
    """Return ceil(log2(value)) for a positive integer."""
    return flog2(value) + ((value & -value) != value)


def add_with_carry(x: int, y: int, carry_in: bool, bits: int) -> tuple[int, bool]:
    """Add two ``bits``-wide words and an incoming carry.

    Returns the truncated sum and the outgoing carry.
    """
    mask = _check_bits(bits)
    x &= mask
    y &= mask
    half = (y + int(bool(carry_in))) & mask
    result = (x + half) & mask
    return result, (half < y) or (result < x)


def sub_with_carry(x: int, y: int, carry_in: bool, bits: int) -> tuple[int, bool]:
    """Subtract a ``bits``-wide word and an incoming borrow from another.

    Returns the truncated difference and the outgoing borrow.
    """
    mask = _check_bits(bits)
    x &= mask
    y &= mask
    half = (y + int(bool(carry_in))) & mask
    result = (x - half) & mask
    return result, (half < y) or (result > x)
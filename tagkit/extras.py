"""Support routines for permuted congruential generators.

Bit twiddling, seed-sequence plumbing, bounded draws and decimal parsing of
fixed-width unsigned integers.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, MutableSequence
from typing import Any, Protocol

from .bits import wrap

__all__ = [
    "SEED_WORD_BITS",
    "SIZE_MAX",
    "SeedSequence",
    "SeedSeqFrom",
    "unxorshift",
    "rotl",
    "rotr",
    "uneven_copy",
    "generate_to",
    "generate_one",
    "bounded_rand",
    "shuffle",
    "arbitrary_seed",
    "parse_uint",
]

SEED_WORD_BITS = 32
SIZE_MAX = (1 << 64) - 1

_FNV_OFFSET = 2166136261
_FNV_PRIME = 16777619
_DECIMAL = re.compile(r"\s*([0-9]+)")


class SeedSequence(Protocol):
    """Anything that can produce a run of 32-bit seed words."""

    def generate(self, count: int) -> Iterable[int]: ...


def _check_width(bits: int) -> None:
    if bits <= 0 or bits % 8:
        raise ValueError(f"integer width must be a positive multiple of 8, got {bits}")


def _attr_value(rng: Any, name: str) -> int | None:
    value = getattr(rng, name, None)
    return value() if callable(value) else value


def _rng_bounds(rng: Any) -> tuple[int, int]:
    """Return the smallest and largest value a generator can produce.

    The generator may expose ``min``/``max`` (as integers or methods) or
    ``result_bits``; a missing minimum is taken to be zero.
    """
    low = _attr_value(rng, "min")
    high = _attr_value(rng, "max")
    if high is None:
        bits = _attr_value(rng, "result_bits")
        if bits is None:
            raise TypeError("generator exposes neither 'max' nor 'result_bits'")
        high = (1 << bits) - 1
    return (0 if low is None else low), high


class SeedSeqFrom:
    """A seed sequence that draws its words from a random generator."""

    def __init__(self, rng: Callable[[], int]) -> None:
        self._rng = rng

    def generate(self, count: int) -> list[int]:
        """Return ``count`` 32-bit words taken from the generator."""
        return [wrap(self._rng(), SEED_WORD_BITS) for _ in range(count)]

    def size(self) -> int:
        """Return the generator's maximum, capped at the largest size value."""
        _, high = _rng_bounds(self._rng)
        return SIZE_MAX if high > SIZE_MAX else high


def unxorshift(x: int, bits: int, shift: int) -> int:
    """Invert ``x ^ (x >> shift)`` for a ``bits``-wide value."""
    if shift <= 0:
        raise ValueError(f"shift must be positive, got {shift}")
    if bits <= 0:
        raise ValueError(f"bit width must be positive, got {bits}")
    x = wrap(x, bits)
    if 2 * shift >= bits:
        return x ^ (x >> shift)
    lowmask1 = (1 << (bits - shift * 2)) - 1
    top1 = x
    bottom1 = x & lowmask1
    top1 ^= top1 >> shift
    top1 &= ~lowmask1
    x = top1 | bottom1
    lowmask2 = (1 << (bits - shift)) - 1
    bottom2 = unxorshift(x & lowmask2, bits - shift, shift)
    bottom2 &= lowmask1
    return top1 | bottom2


def rotl(value: int, rot: int, bits: int) -> int:
    """Rotate a ``bits``-wide value left by ``rot`` places."""
    value = wrap(value, bits)
    rot %= bits
    return wrap((value << rot) | (value >> (bits - rot)), bits)


def rotr(value: int, rot: int, bits: int) -> int:
    """Rotate a ``bits``-wide value right by ``rot`` places."""
    value = wrap(value, bits)
    rot %= bits
    return wrap((value >> rot) | (value << (bits - rot)), bits)


def uneven_copy(
    source: Iterable[int], source_bits: int, dest_bits: int, count: int
) -> list[int]:
    """Repack words of one width into ``count`` words of another.

    The layout matches a byte copy on a little-endian machine: narrower
    destination words take the low bits of each source word first, wider
    ones gather consecutive source words from the low end up.
    """
    _check_width(source_bits)
    _check_width(dest_bits)
    words = iter(source)

    def take() -> int:
        try:
            return wrap(next(words), source_bits)
        except StopIteration:
            raise ValueError("source ran out before the destination was filled") from None

    result: list[int] = []
    if dest_bits < source_bits:
        scale = source_bits // dest_bits
        value = 0
        for position in range(count):
            if position % scale == 0:
                value = take()
            else:
                value >>= dest_bits
            result.append(wrap(value, dest_bits))
        return result

    scale = -(-dest_bits // source_bits)
    for _ in range(count):
        value = 0
        for shift in range(0, scale * source_bits, source_bits):
            value |= take() << shift
        result.append(wrap(value, dest_bits))
    return result


def generate_to(seed_seq: SeedSequence, count: int, bits: int) -> list[int]:
    """Fill ``count`` integers of width ``bits`` from a seed sequence."""
    _check_width(bits)
    if bits == SEED_WORD_BITS:
        return [wrap(word, SEED_WORD_BITS) for word in seed_seq.generate(count)]
    if bits > SEED_WORD_BITS:
        from_elems = count * -(-bits // SEED_WORD_BITS)
    else:
        per_word = SEED_WORD_BITS // bits
        from_elems = (count + per_word - 1) // per_word
    buffer = list(seed_seq.generate(from_elems))
    return uneven_copy(buffer, SEED_WORD_BITS, bits, count)


def generate_one(
    seed_seq: SeedSequence, bits: int, index: int = 0, total: int | None = None
) -> int:
    """Produce ``total`` values from a seed sequence and return the one at ``index``."""
    if total is None:
        total = index + 1
    if not 0 <= index < total:
        raise IndexError(f"index {index} outside 0..{total - 1}")
    return generate_to(seed_seq, total, bits)[index]


def bounded_rand(rng: Callable[[], int], upper_bound: int) -> int:
    """Draw a value in ``[0, upper_bound)`` without modulo bias."""
    if upper_bound <= 0:
        raise ValueError(f"upper bound must be positive, got {upper_bound}")
    low, high = _rng_bounds(rng)
    threshold = (high - low + 1 - upper_bound) % upper_bound
    while True:
        r = rng() - low
        if r >= threshold:
            return r % upper_bound


def shuffle(items: MutableSequence[Any], rng: Callable[[], int]) -> None:
    """Shuffle ``items`` in place using draws from ``rng``."""
    for last in range(len(items) - 1, 0, -1):
        chosen = bounded_rand(rng, last + 1)
        items[chosen], items[last] = items[last], items[chosen]


def arbitrary_seed(text: str | bytes, bits: int) -> int:
    """Hash ``text`` into a ``bits``-wide seed with an FNV-style mix."""
    _check_width(bits)
    data = text.encode("utf-8") if isinstance(text, str) else bytes(text)
    prime = wrap(_FNV_PRIME, bits)
    value = wrap(_FNV_OFFSET ^ (bits // 8), bits)
    for byte in data:
        signed = byte - 256 if byte >= 128 else byte
        value = wrap((value * prime) ^ signed, bits)
    return value


def parse_uint(text: str, bits: int) -> tuple[int, str]:
    """Read a decimal unsigned integer from the start of ``text``.

    Leading whitespace is skipped. Returns the value and the unread rest of
    the text. Raises ValueError when no digit is found and OverflowError when
    the value does not fit in ``bits`` bits.
    """
    if bits <= 0:
        raise ValueError(f"bit width must be positive, got {bits}")
    match = _DECIMAL.match(text)
    if match is None:
        raise ValueError(f"no decimal digits at the start of {text!r}")
    value = int(match.group(1))
    if value > (1 << bits) - 1:
        raise OverflowError(f"{value} does not fit in {bits} bits")
    return value, text[match.end():]
"""Permuted congruential generator engines.

An :class:`Engine` couples an LCG state of ``ibits`` bits with an output
permutation producing ``xbits``-bit results. How the LCG increment is chosen
is set by a :class:`StreamKind`.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any

from .bits import wrap
from .extras import bounded_rand, generate_one, parse_uint
from .output import (
    SUPPORTED_WIDTHS,
    default_increment,
    default_multiplier,
    rxs_m_xs,
    xsh_rr,
    xsh_rs,
    xsl_rr,
    xsl_rr_rr,
)

__all__ = [
    "DEFAULT_SEED",
    "StreamKind",
    "Engine",
    "advance_state",
    "state_distance",
    "pcg32",
    "pcg32_oneseq",
    "pcg32_unique",
    "pcg32_fast",
    "pcg64",
    "pcg64_oneseq",
    "pcg64_unique",
    "pcg64_fast",
    "pcg32_once_insecure",
    "pcg64_once_insecure",
    "pcg128_once_insecure",
    "pcg32_oneseq_once_insecure",
    "pcg64_oneseq_once_insecure",
]

DEFAULT_SEED = 0xCAFEF00DD15EA5E5

OutputFunction = Callable[[int, int, int], int]


class StreamKind(Enum):
    """How an engine picks the additive constant of its LCG."""

    ONESEQ = "oneseq"
    UNIQUE = "unique"
    SPECIFIC = "specific"
    MCG = "mcg"


def advance_state(
    state: int, delta: int, multiplier: int, increment: int, bits: int
) -> int:
    """Jump an LCG state ``delta`` steps ahead in logarithmic time.

    A negative ``delta`` goes backwards, taking the long way round modulo
    2**bits.
    """
    delta = wrap(delta, bits)
    cur_mult = wrap(multiplier, bits)
    cur_plus = wrap(increment, bits)
    acc_mult = 1
    acc_plus = 0
    while delta > 0:
        if delta & 1:
            acc_mult = wrap(acc_mult * cur_mult, bits)
            acc_plus = wrap(acc_plus * cur_mult + cur_plus, bits)
        cur_plus = wrap((cur_mult + 1) * cur_plus, bits)
        cur_mult = wrap(cur_mult * cur_mult, bits)
        delta >>= 1
    return wrap(acc_mult * wrap(state, bits) + acc_plus, bits)


def state_distance(
    cur_state: int,
    new_state: int,
    multiplier: int,
    increment: int,
    bits: int,
    mask: int | None = None,
) -> int:
    """Return how many steps lead from ``cur_state`` to ``new_state``.

    Only the bits selected by ``mask`` are compared. Raises ValueError when
    the target cannot be reached from the starting state.
    """
    full = (1 << bits) - 1
    mask = full if mask is None else wrap(mask, bits)
    cur_state = wrap(cur_state, bits)
    new_state = wrap(new_state, bits)
    cur_mult = wrap(multiplier, bits)
    cur_plus = wrap(increment, bits)
    is_mcg = cur_plus == 0
    the_bit = 4 if is_mcg else 1
    distance = 0
    while (cur_state & mask) != (new_state & mask):
        if the_bit > full:
            raise ValueError("target state is not reachable from the current state")
        if (cur_state & the_bit) != (new_state & the_bit):
            cur_state = wrap(cur_state * cur_mult + cur_plus, bits)
            distance |= the_bit
        the_bit <<= 1
        cur_plus = wrap((cur_mult + 1) * cur_plus, bits)
        cur_mult = wrap(cur_mult * cur_mult, bits)
    return distance >> 2 if is_mcg else distance


class Engine:
    """A permuted congruential generator.

    Calling the engine with no argument yields the next ``xbits``-bit value;
    with an upper bound it yields a value in ``[0, upper_bound)``.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(
        self,
        xbits: int,
        ibits: int,
        output: OutputFunction,
        stream_kind: StreamKind = StreamKind.ONESEQ,
        *,
        output_previous: bool | None = None,
        multiplier: int | None = None,
        state: Any = None,
        stream: int | None = None,
    ) -> None:
        for width in (xbits, ibits):
            if width not in SUPPORTED_WIDTHS:
                raise ValueError(f"unsupported integer width {width}")
        self.xbits = xbits
        self.ibits = ibits
        self.result_bits = xbits
        self.output = output
        self.stream_kind = stream_kind
        self.output_previous = ibits <= 64 if output_previous is None else output_previous
        self.multiplier = (
            default_multiplier(ibits) if multiplier is None else wrap(multiplier, ibits)
        )
        self._inc = default_increment(ibits)
        self.state = 0
        self.seed(state, stream)

    @property
    def is_mcg(self) -> bool:
        """True when the LCG adds nothing, i.e. it is a multiplicative generator."""
        return self.stream_kind is StreamKind.MCG

    @property
    def can_specify_stream(self) -> bool:
        """True when the stream may be chosen by the caller."""
        return self.stream_kind is StreamKind.SPECIFIC

    @property
    def increment(self) -> int:
        """The additive constant of the underlying LCG."""
        kind = self.stream_kind
        if kind is StreamKind.MCG:
            return 0
        if kind is StreamKind.SPECIFIC:
            return self._inc
        if kind is StreamKind.UNIQUE:
            return wrap(id(self) | 1, self.ibits)
        return default_increment(self.ibits)

    def _bump(self, state: int) -> int:
        return wrap(state * self.multiplier + self.increment, self.ibits)

    def __call__(self, upper_bound: int | None = None) -> int:
        if upper_bound is not None:
            return bounded_rand(self, upper_bound)
        old = self.state
        self.state = self._bump(old)
        internal = old if self.output_previous else self.state
        return self.output(internal, self.xbits, self.ibits)

    def advance(self, delta: int) -> None:
        """Skip ``delta`` steps; a negative value goes backwards."""
        self.state = advance_state(
            self.state, delta, self.multiplier, self.increment, self.ibits
        )

    def backstep(self, delta: int) -> None:
        """Step back ``delta`` steps."""
        self.advance(-delta)

    def discard(self, delta: int) -> None:
        """Throw away the next ``delta`` outputs."""
        self.advance(delta)

    def wrapped(self) -> bool:
        """True when the generator is back at the start of its period."""
        return self.state == (3 if self.is_mcg else 0)

    def seed(self, state: Any = None, stream: int | None = None) -> None:
        """Reinitialise from an integer state or a seed sequence.

        A seed sequence is anything with a ``generate(count)`` method. The
        stream may only be given for engines with a selectable stream.
        """
        if state is not None and not isinstance(state, int):
            if stream is not None:
                raise TypeError("a stream cannot be given alongside a seed sequence")
            if self.can_specify_stream:
                new_state = generate_one(state, self.ibits, 1, 2)
                stream = generate_one(state, self.ibits, 0, 2)
                state = new_state
            else:
                state = generate_one(state, self.ibits)
        if stream is not None:
            self.set_stream(stream)
        elif self.can_specify_stream:
            self._inc = default_increment(self.ibits)
        state = wrap(DEFAULT_SEED if state is None else state, self.ibits)
        self.state = state | 3 if self.is_mcg else self._bump(state + self.increment)

    def set_stream(self, stream: int) -> None:
        """Select a different random sequence."""
        if not self.can_specify_stream:
            raise TypeError(f"a {self.stream_kind.value} engine has no selectable stream")
        self._inc = wrap((stream << 1) | 1, self.ibits)

    def stream(self) -> int:
        """Return the stream the engine draws from."""
        if self.is_mcg:
            raise TypeError("a multiplicative engine has no stream")
        return self.increment >> 1

    def distance(self, new_state: int, mask: int | None = None) -> int:
        """Return how many steps lead from the current state to ``new_state``."""
        return state_distance(
            self.state, new_state, self.multiplier, self.increment, self.ibits, mask
        )

    def period_pow2(self) -> int:
        """Return the base-2 logarithm of the period."""
        return self.ibits - 2 * self.is_mcg

    def load(self, text: str) -> str:
        """Restore the state written by ``str(engine)``; return the unread text.

        Raises ValueError when the text is malformed or belongs to an engine
        with another multiplier or a fixed, different increment.
        """
        multiplier, rest = parse_uint(text, self.ibits)
        increment, rest = parse_uint(rest, self.ibits)
        state, rest = parse_uint(rest, self.ibits)
        if multiplier != self.multiplier:
            raise ValueError("saved multiplier does not match this engine")
        if self.can_specify_stream:
            self.set_stream(increment >> 1)
        elif increment != self.increment:
            raise ValueError("saved increment does not match this engine")
        self.state = state
        return rest

    def _signature(self) -> tuple[Any, ...]:
        return (self.xbits, self.ibits, self.output, self.output_previous)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Engine):
            return NotImplemented
        return (
            self._signature() == other._signature()
            and self.multiplier == other.multiplier
            and self.increment == other.increment
            and self.state == other.state
        )

    def __sub__(self, other: object) -> int:
        if not isinstance(other, Engine):
            return NotImplemented
        if (
            self._signature() != other._signature()
            or self.stream_kind is not other.stream_kind
            or self.multiplier != other.multiplier
        ):
            raise TypeError("incomparable generators")
        if self.increment == other.increment:
            return other.distance(self.state)
        bits = self.ibits
        lhs_diff = wrap(self.increment + (self.multiplier - 1) * self.state, bits)
        rhs_diff = wrap(other.increment + (other.multiplier - 1) * other.state, bits)
        if (lhs_diff & 3) != (rhs_diff & 3):
            rhs_diff = wrap(-rhs_diff, bits)
        return state_distance(rhs_diff, lhs_diff, other.multiplier, 0, bits)

    def __str__(self) -> str:
        return f"{self.multiplier} {self.increment} {self.state}"

    def __repr__(self) -> str:
        return (
            f"Engine(xbits={self.xbits}, ibits={self.ibits}, "
            f"output={self.output.__name__}, stream_kind={self.stream_kind.name}, "
            f"state={self.state})"
        )


def _make(
    xbits: int,
    ibits: int,
    output: OutputFunction,
    kind: StreamKind,
    state: Any,
    stream: int | None = None,
) -> Engine:
    return Engine(xbits, ibits, output, kind, state=state, stream=stream)


def pcg32(state: Any = None, stream: int | None = None) -> Engine:
    """32-bit output, 64-bit state, XSH RR, selectable stream."""
    return _make(32, 64, xsh_rr, StreamKind.SPECIFIC, state, stream)


def pcg32_oneseq(state: Any = None) -> Engine:
    """32-bit output, 64-bit state, XSH RR, single stream."""
    return _make(32, 64, xsh_rr, StreamKind.ONESEQ, state)


def pcg32_unique(state: Any = None) -> Engine:
    """32-bit output, 64-bit state, XSH RR, stream unique to the object."""
    return _make(32, 64, xsh_rr, StreamKind.UNIQUE, state)


def pcg32_fast(state: Any = None) -> Engine:
    """32-bit output, 64-bit multiplicative state, XSH RS."""
    return _make(32, 64, xsh_rs, StreamKind.MCG, state)


def pcg64(state: Any = None, stream: int | None = None) -> Engine:
    """64-bit output, 128-bit state, XSL RR, selectable stream."""
    return _make(64, 128, xsl_rr, StreamKind.SPECIFIC, state, stream)


def pcg64_oneseq(state: Any = None) -> Engine:
    """64-bit output, 128-bit state, XSL RR, single stream."""
    return _make(64, 128, xsl_rr, StreamKind.ONESEQ, state)


def pcg64_unique(state: Any = None) -> Engine:
    """64-bit output, 128-bit state, XSL RR, stream unique to the object."""
    return _make(64, 128, xsl_rr, StreamKind.UNIQUE, state)


def pcg64_fast(state: Any = None) -> Engine:
    """64-bit output, 128-bit multiplicative state, XSL RR."""
    return _make(64, 128, xsl_rr, StreamKind.MCG, state)


def pcg32_once_insecure(state: Any = None, stream: int | None = None) -> Engine:
    """32-bit RXS M XS permutation of a 32-bit state, selectable stream."""
    return _make(32, 32, rxs_m_xs, StreamKind.SPECIFIC, state, stream)


def pcg64_once_insecure(state: Any = None, stream: int | None = None) -> Engine:
    """64-bit RXS M XS permutation of a 64-bit state, selectable stream."""
    return _make(64, 64, rxs_m_xs, StreamKind.SPECIFIC, state, stream)


def pcg128_once_insecure(state: Any = None, stream: int | None = None) -> Engine:
    """128-bit XSL RR RR permutation of a 128-bit state, selectable stream."""
    return _make(128, 128, xsl_rr_rr, StreamKind.SPECIFIC, state, stream)


def pcg32_oneseq_once_insecure(state: Any = None) -> Engine:
    """32-bit RXS M XS permutation of a 32-bit state, single stream."""
    return _make(32, 32, rxs_m_xs, StreamKind.ONESEQ, state)


def pcg64_oneseq_once_insecure(state: Any = None) -> Engine:
    """64-bit RXS M XS permutation of a 64-bit state, single stream."""
    return _make(64, 64, rxs_m_xs, StreamKind.ONESEQ, state)
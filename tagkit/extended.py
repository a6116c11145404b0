"""Extended permuted congruential generators.

An :class:`ExtendedEngine` pairs a base :class:`~tagkit.engine.Engine` with a
table of extra values. Each output of the base engine is xored with an entry
of the table, and the table itself is stepped like a multi-word counter, which
lengthens the period and, in the k-dimensional variants, gives
equidistribution in more dimensions.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .bits import wrap
from .engine import Engine, StreamKind, advance_state, pcg32, pcg64, state_distance
from .extras import bounded_rand, generate_to, parse_uint
from .output import (
    default_increment,
    default_multiplier,
    rxs_m_xs,
    rxs_m_xs_unoutput,
    xsh_rs,
)

__all__ = [
    "ExtendedEngine",
    "external_step",
    "external_advance",
    "pcg32_k2",
    "pcg32_k2_fast",
    "pcg32_k64",
    "pcg32_c64",
    "pcg64_k32",
    "pcg64_c32",
]

_TICK_LIMIT_POW2 = 64


def external_step(randval: int, index: int, bits: int) -> tuple[int, bool]:
    """Step one table value of width ``bits`` by one LCG step.

    The table value is the output of a single-stream RXS M XS generator whose
    increment is offset by ``2 * index``. Returns the new value and whether it
    landed on zero.
    """
    state = rxs_m_xs_unoutput(randval, bits)
    state = wrap(
        state * default_multiplier(bits) + default_increment(bits) + index * 2, bits
    )
    result = rxs_m_xs(state, bits, bits)
    return result, result == 0


def external_advance(
    randval: int, index: int, delta: int, bits: int, forwards: bool = True
) -> tuple[int, bool]:
    """Move one table value ``delta`` steps forwards or backwards.

    Returns the new value and whether the move crossed the zero state.
    """
    state = rxs_m_xs_unoutput(randval, bits)
    mult = default_multiplier(bits)
    inc = wrap(default_increment(bits) + index * 2, bits)
    delta = wrap(delta, bits)
    dist_to_zero = state_distance(state, 0, mult, inc, bits)
    if forwards:
        crosses_zero = dist_to_zero <= delta
    else:
        crosses_zero = wrap(-dist_to_zero, bits) <= delta
        delta = wrap(-delta, bits)
    state = advance_state(state, delta, mult, inc, bits)
    return rxs_m_xs(state, bits, bits), crosses_zero


class ExtendedEngine:
    """A base generator extended by a table of ``2**table_pow2`` values.

    With ``kdd`` set the table is indexed by the low bits of the base state
    (k-dimensional equidistribution); otherwise by the high bits. The table
    is advanced whenever the selected bits of the base state reach zero.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(
        self,
        base: Engine,
        table_pow2: int,
        advance_pow2: int,
        kdd: bool = True,
        data: Iterable[int] | None = None,
    ) -> None:
        stypebits = base.ibits
        if not 0 <= table_pow2 <= stypebits:
            raise ValueError(f"table size 2**{table_pow2} does not suit the base state")
        if advance_pow2 < 0:
            raise ValueError(f"advance_pow2 must not be negative, got {advance_pow2}")
        self.base = base
        self.table_pow2 = table_pow2
        self.advance_pow2 = advance_pow2
        self.kdd = kdd
        self.xbits = base.xbits
        self.result_bits = base.xbits
        self.table_size = 1 << table_pow2
        self._table_shift = stypebits - table_pow2
        self._table_mask = self.table_size - 1
        self._may_tick = advance_pow2 < stypebits and advance_pow2 < _TICK_LIMIT_POW2
        self._tick_shift = stypebits - advance_pow2
        self._tick_mask = (
            (1 << advance_pow2) - 1 if self._may_tick else (1 << stypebits) - 1
        )
        self._may_tock = stypebits < _TICK_LIMIT_POW2
        if data is None:
            self._self_init()
        else:
            values = [wrap(value, self.xbits) for value in data]
            if len(values) != self.table_size:
                raise ValueError(
                    f"expected {self.table_size} table values, got {len(values)}"
                )
            self.data = values

    def _self_init(self) -> None:
        lhs = self.base()
        rhs = self.base()
        xdiff = wrap(lhs - rhs, self.xbits)
        self.data = [self.base() ^ xdiff for _ in range(self.table_size)]

    def _advance_table(self) -> None:
        carry = False
        for i in range(self.table_size):
            if carry:
                self.data[i], carry = external_step(self.data[i], i + 1, self.xbits)
            self.data[i], carry2 = external_step(self.data[i], i + 1, self.xbits)
            carry = carry or carry2

    def _advance_table_by(self, delta: int, forwards: bool = True) -> None:
        basebits = self.base.ibits
        extbits = self.xbits
        carry = 0
        for i in range(self.table_size):
            total_delta = wrap(carry + delta, basebits)
            trunc_delta = wrap(total_delta, extbits)
            carry = total_delta >> extbits if basebits > extbits else 0
            self.data[i], crossed = external_advance(
                self.data[i], i + 1, trunc_delta, extbits, forwards
            )
            carry += crossed

    def _extended_index(self) -> int:
        state = self.base.state
        if self.kdd and self.base.is_mcg:
            state >>= 2
        index = state & self._table_mask if self.kdd else state >> self._table_shift
        if self._may_tick:
            if self.kdd:
                tick = (state & self._tick_mask) == 0
            else:
                tick = (state >> self._tick_shift) == 0
            if tick:
                self._advance_table()
        if self._may_tock and state == 0:
            self._advance_table()
        return index

    def __call__(self, upper_bound: int | None = None) -> int:
        if upper_bound is not None:
            return bounded_rand(self, upper_bound)
        index = self._extended_index()
        rhs = self.data[index]
        lhs = self.base()
        return lhs ^ rhs

    def set(self, wanted: int) -> None:
        """Arrange for the current step to produce ``wanted``, consuming the step."""
        index = self._extended_index()
        lhs = self.base()
        self.data[index] = lhs ^ wrap(wanted, self.xbits)

    def advance(self, distance: int, forwards: bool = True) -> None:
        """Skip ``distance`` steps forwards, or backwards when ``forwards`` is false.

        Only engines whose table is indexed by the low state bits support this.
        """
        if not self.kdd:
            raise TypeError(
                "efficient advance is not available for a table indexed by high bits"
            )
        bits = self.base.ibits
        distance = wrap(distance, bits)
        zero = self.base.state & 3 if self.base.is_mcg else 0
        if self._may_tick:
            ticks = distance >> self.advance_pow2
            adv_mask = (
                wrap(self._tick_mask << 2, bits) if self.base.is_mcg else self._tick_mask
            )
            next_advance_distance = self.base.distance(zero, adv_mask)
            if not forwards:
                next_advance_distance = wrap(-next_advance_distance, bits) & self._tick_mask
            if next_advance_distance < (distance & self._tick_mask):
                ticks += 1
            if ticks:
                self._advance_table_by(ticks, forwards)
        if forwards:
            if self._may_tock and self.base.distance(zero) <= distance:
                self._advance_table()
            self.base.advance(distance)
        else:
            if self._may_tock and wrap(-self.base.distance(zero), bits) <= distance:
                self._advance_table_by(1, False)
            self.base.advance(-distance)

    def backstep(self, distance: int) -> None:
        """Step back ``distance`` steps."""
        self.advance(distance, False)

    def period_pow2(self) -> int:
        """Return the base-2 logarithm of the period."""
        return self.base.period_pow2() + self.table_size * self.xbits

    def load(self, text: str) -> str:
        """Restore the state written by ``str(engine)``; return the unread text.

        Nothing is changed when the text is malformed or does not match.
        """
        rest = text
        for _ in range(3):
            _, rest = parse_uint(rest, self.base.ibits)
        values = []
        for _ in range(self.table_size):
            value, rest = parse_uint(rest, self.xbits)
            values.append(value)
        self.base.load(text)
        self.data = values
        return rest

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExtendedEngine):
            return NotImplemented
        return (
            self.table_pow2 == other.table_pow2
            and self.advance_pow2 == other.advance_pow2
            and self.kdd == other.kdd
            and self.base == other.base
            and self.data == other.data
        )

    def __str__(self) -> str:
        return " ".join([str(self.base), *map(str, self.data)])

    def __repr__(self) -> str:
        return (
            f"ExtendedEngine(base={self.base!r}, table_pow2={self.table_pow2}, "
            f"advance_pow2={self.advance_pow2}, kdd={self.kdd})"
        )


def _is_seed_sequence(state: Any) -> bool:
    return state is not None and not isinstance(state, int)


def _build(
    base: Engine, state: Any, table_pow2: int, advance_pow2: int, kdd: bool
) -> ExtendedEngine:
    data = None
    if _is_seed_sequence(state):
        data = generate_to(state, 1 << table_pow2, base.xbits)
    return ExtendedEngine(base, table_pow2, advance_pow2, kdd, data)


def pcg32_k2(state: Any = None, stream: int | None = None) -> ExtendedEngine:
    """Two-dimensionally equidistributed 32-bit generator over :func:`pcg32`."""
    return _build(pcg32(state, stream), state, 1, 16, True)


def pcg32_k2_fast(state: Any = None) -> ExtendedEngine:
    """Two-dimensionally equidistributed 32-bit generator over single-stream XSH RS."""
    base = Engine(32, 64, xsh_rs, StreamKind.ONESEQ, state=state)
    return _build(base, state, 1, 32, True)


def pcg32_k64(state: Any = None, stream: int | None = None) -> ExtendedEngine:
    """64-dimensionally equidistributed 32-bit generator over :func:`pcg32`."""
    return _build(pcg32(state, stream), state, 6, 16, True)


def pcg32_c64(state: Any = None, stream: int | None = None) -> ExtendedEngine:
    """32-bit generator over :func:`pcg32` with a 64-entry high-bit table."""
    return _build(pcg32(state, stream), state, 6, 16, False)


def pcg64_k32(state: Any = None, stream: int | None = None) -> ExtendedEngine:
    """32-dimensionally equidistributed 64-bit generator over :func:`pcg64`."""
    return _build(pcg64(state, stream), state, 5, 16, True)


def pcg64_c32(state: Any = None, stream: int | None = None) -> ExtendedEngine:
    """64-bit generator over :func:`pcg64` with a 32-entry high-bit table."""
    return _build(pcg64(state, stream), state, 5, 16, False)
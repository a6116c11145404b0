"""Output permutations and LCG constants for permuted congruential generators.

Each output function turns an ``ibits``-wide generator state into an
``xbits``-wide result. Supported widths are 8, 16, 32, 64 and 128 bits.
"""

from __future__ import annotations

from .bits import wrap
from .extras import rotr, unxorshift

__all__ = [
    "SUPPORTED_WIDTHS",
    "default_multiplier",
    "default_increment",
    "mcg_multiplier",
    "mcg_unmultiplier",
    "xsh_rs",
    "xsh_rr",
    "rxs",
    "rxs_m_xs",
    "rxs_m_xs_unoutput",
    "rxs_m",
    "xsl_rr",
    "xsl_rr_rr",
    "xsh",
    "xsl",
]

SUPPORTED_WIDTHS = (8, 16, 32, 64, 128)


def _wide(high: int, low: int) -> int:
    return (high << 64) + low


_DEFAULT_MULTIPLIER = {
    8: 141,
    16: 12829,
    32: 747796405,
    64: 6364136223846793005,
    128: _wide(2549297995355413924, 4865540595714422341),
}

_DEFAULT_INCREMENT = {
    8: 77,
    16: 47989,
    32: 2891336453,
    64: 1442695040888963407,
    128: _wide(6364136223846793005, 1442695040888963407),
}

_MCG_MULTIPLIER = {
    8: 217,
    16: 62169,
    32: 277803737,
    64: 12605985483714917081,
    128: _wide(17766728186571221404, 12605985483714917081),
}

_MCG_UNMULTIPLIER = {
    8: 105,
    16: 28009,
    32: 2897767785,
    64: 15009553638781119849,
    128: _wide(14422606686972528997, 15009553638781119849),
}


def _lookup(table: dict[int, int], bits: int, what: str) -> int:
    try:
        return table[bits]
    except KeyError:
        raise ValueError(f"no {what} defined for {bits}-bit integers") from None


def default_multiplier(bits: int) -> int:
    """Return the default LCG multiplier for a state of ``bits`` bits."""
    return _lookup(_DEFAULT_MULTIPLIER, bits, "default multiplier")


def default_increment(bits: int) -> int:
    """Return the default LCG increment for a state of ``bits`` bits."""
    return _lookup(_DEFAULT_INCREMENT, bits, "default increment")


def mcg_multiplier(bits: int) -> int:
    """Return the multiplier used by the RXS M output step."""
    return _lookup(_MCG_MULTIPLIER, bits, "mcg multiplier")


def mcg_unmultiplier(bits: int) -> int:
    """Return the modular inverse of :func:`mcg_multiplier` for ``bits`` bits."""
    return _lookup(_MCG_UNMULTIPLIER, bits, "mcg unmultiplier")


def _check(internal: int, xbits: int, ibits: int) -> int:
    for width in (xbits, ibits):
        if width not in SUPPORTED_WIDTHS:
            raise ValueError(f"unsupported integer width {width}")
    if xbits > ibits:
        raise ValueError(f"result width {xbits} exceeds state width {ibits}")
    return wrap(internal, ibits)


def _wanted_opbits(width: int) -> int:
    if width >= 128:
        return 7
    if width >= 64:
        return 6
    if width >= 32:
        return 5
    if width >= 16:
        return 4
    return 3


def _rxs_m_opbits(width: int) -> int:
    if width >= 128:
        return 6
    if width >= 64:
        return 5
    if width >= 32:
        return 4
    if width >= 16:
        return 3
    return 2


def _top_bits(internal: int, bits: int, opbits: int, mask: int) -> int:
    return (internal >> (bits - opbits)) & mask if opbits else 0


def xsh_rs(internal: int, xbits: int, ibits: int) -> int:
    """High xorshift followed by a random shift."""
    internal = _check(internal, xbits, ibits)
    sparebits = ibits - xbits
    if sparebits - 5 >= 64:
        opbits = 5
    elif sparebits - 4 >= 32:
        opbits = 4
    elif sparebits - 3 >= 16:
        opbits = 3
    elif sparebits - 2 >= 4:
        opbits = 2
    elif sparebits - 1 >= 1:
        opbits = 1
    else:
        opbits = 0
    mask = (1 << opbits) - 1
    maxrandshift = mask
    topspare = opbits
    bottomspare = sparebits - topspare
    xshift = topspare + (xbits + maxrandshift) // 2
    rshift = _top_bits(internal, ibits, opbits, mask)
    internal ^= internal >> xshift
    return wrap(internal >> (bottomspare - maxrandshift + rshift), xbits)


def xsh_rr(internal: int, xbits: int, ibits: int) -> int:
    """High xorshift followed by a random rotate."""
    internal = _check(internal, xbits, ibits)
    sparebits = ibits - xbits
    wanted = _wanted_opbits(xbits)
    opbits = min(wanted, sparebits)
    amplifier = wanted - opbits
    mask = (1 << opbits) - 1
    topspare = opbits
    bottomspare = sparebits - topspare
    xshift = (topspare + xbits) // 2
    rot = _top_bits(internal, ibits, opbits, mask)
    amprot = (rot << amplifier) & mask
    internal ^= internal >> xshift
    result = wrap(internal >> bottomspare, xbits)
    return rotr(result, amprot, xbits)


def rxs(internal: int, xbits: int, ibits: int) -> int:
    """Random xorshift."""
    internal = _check(internal, xbits, ibits)
    shift = ibits - xbits
    extrashift = wrap(int((xbits - shift) / 2), 8)
    if shift > 64 + 8:
        rshift = (internal >> (ibits - 6)) & 63
    elif shift > 32 + 4:
        rshift = (internal >> (ibits - 5)) & 31
    elif shift > 16 + 2:
        rshift = (internal >> (ibits - 4)) & 15
    elif shift > 8 + 1:
        rshift = (internal >> (ibits - 3)) & 7
    elif shift > 4 + 1:
        rshift = (internal >> (ibits - 2)) & 3
    elif shift > 2 + 1:
        rshift = (internal >> (ibits - 1)) & 1
    else:
        rshift = 0
    internal ^= internal >> (shift + extrashift - rshift)
    return wrap(internal >> rshift, xbits)


def _rxs_m(internal: int, xbits: int, ibits: int) -> int:
    opbits = _rxs_m_opbits(xbits)
    mask = (1 << opbits) - 1
    rshift = _top_bits(internal, ibits, opbits, mask)
    internal ^= internal >> (opbits + rshift)
    internal = wrap(internal * mcg_multiplier(ibits), ibits)
    return wrap(internal >> (ibits - xbits), xbits)


def rxs_m_xs(internal: int, xbits: int, ibits: int) -> int:
    """Random xorshift, MCG multiply, fixed xorshift."""
    internal = _check(internal, xbits, ibits)
    result = _rxs_m(internal, xbits, ibits)
    return result ^ (result >> ((2 * xbits + 2) // 3))


def rxs_m_xs_unoutput(internal: int, ibits: int) -> int:
    """Invert :func:`rxs_m_xs` when result and state have the same width."""
    internal = _check(internal, ibits, ibits)
    opbits = _rxs_m_opbits(ibits)
    mask = (1 << opbits) - 1
    internal = unxorshift(internal, ibits, (2 * ibits + 2) // 3)
    internal = wrap(internal * mcg_unmultiplier(ibits), ibits)
    rshift = _top_bits(internal, ibits, opbits, mask)
    return unxorshift(internal, ibits, opbits + rshift)


def rxs_m(internal: int, xbits: int, ibits: int) -> int:
    """Random xorshift followed by an MCG multiply."""
    internal = _check(internal, xbits, ibits)
    return _rxs_m(internal, xbits, ibits)


def xsl_rr(internal: int, xbits: int, ibits: int) -> int:
    """Fixed xorshift to the low bits, then a random rotate."""
    internal = _check(internal, xbits, ibits)
    sparebits = ibits - xbits
    wanted = _wanted_opbits(xbits)
    opbits = min(wanted, sparebits)
    amplifier = wanted - opbits
    mask = (1 << opbits) - 1
    topspare = sparebits
    xshift = (topspare + xbits) // 2
    rot = _top_bits(internal, ibits, opbits, mask)
    amprot = (rot << amplifier) & mask
    internal ^= internal >> xshift
    return rotr(wrap(internal, xbits), amprot, xbits)


def xsl_rr_rr(internal: int, xbits: int, ibits: int) -> int:
    """Fixed xorshift to the low bits, then random rotates of both halves.

    The result has the full state width, so ``xbits`` must equal ``ibits``.
    """
    internal = _check(internal, xbits, ibits)
    if xbits != ibits or ibits < 16:
        raise ValueError("xsl_rr_rr needs equal result and state widths of at least 16 bits")
    htypebits = ibits // 2
    sparebits = ibits - htypebits
    wanted = _wanted_opbits(htypebits)
    opbits = min(wanted, sparebits)
    amplifier = wanted - opbits
    mask = (1 << opbits) - 1
    topspare = sparebits
    xshift = (topspare + htypebits) // 2
    rot = _top_bits(internal, ibits, opbits, mask)
    amprot = (rot << amplifier) & mask
    internal ^= internal >> xshift
    lowbits = rotr(wrap(internal, htypebits), amprot, htypebits)
    highbits = wrap(internal >> topspare, htypebits)
    amprot2 = ((lowbits & mask) << amplifier) & mask
    highbits = rotr(highbits, amprot2, htypebits)
    return wrap((highbits << topspare) ^ lowbits, ibits)


def xsh(internal: int, xbits: int, ibits: int) -> int:
    """Fixed xorshift to the high bits."""
    internal = _check(internal, xbits, ibits)
    bottomspare = ibits - xbits
    internal ^= internal >> (xbits // 2)
    return wrap(internal >> bottomspare, xbits)


def xsl(internal: int, xbits: int, ibits: int) -> int:
    """Fixed xorshift to the low bits."""
    internal = _check(internal, xbits, ibits)
    sparebits = ibits - xbits
    internal ^= internal >> ((sparebits + xbits) // 2)
    return wrap(internal, xbits)
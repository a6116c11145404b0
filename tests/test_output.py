import random

import pytest

from tagkit import output
from tagkit.output import (
    default_increment,
    default_multiplier,
    mcg_multiplier,
    mcg_unmultiplier,
    rxs,
    rxs_m,
    rxs_m_xs,
    rxs_m_xs_unoutput,
    xsh,
    xsh_rr,
    xsh_rs,
    xsl,
    xsl_rr,
    xsl_rr_rr,
)

WIDTHS = [8, 16, 32, 64, 128]
PAIRS = [(8, 16), (16, 32), (32, 64), (64, 128)]


def _samples(bits, n=50, seed=1234):
    rng = random.Random(seed + bits)
    return [rng.getrandbits(bits) for _ in range(n)]


def test_documented_constants():
    assert default_multiplier(32) == 747796405
    assert default_increment(64) == 1442695040888963407
    assert mcg_multiplier(64) == 12605985483714917081


def test_128bit_constant_halves():
    value = default_multiplier(128)
    assert value >> 64 == 2549297995355413924
    assert value & ((1 << 64) - 1) == 4865540595714422341


@pytest.mark.parametrize("bits", WIDTHS)
def test_mcg_unmultiplier_is_inverse(bits):
    assert (mcg_multiplier(bits) * mcg_unmultiplier(bits)) % (1 << bits) == 1


@pytest.mark.parametrize("bits", WIDTHS)
def test_default_lcg_constants_give_full_period(bits):
    assert default_multiplier(bits) % 4 == 1
    assert default_increment(bits) % 2 == 1


def test_unsupported_width_raises():
    with pytest.raises(ValueError):
        default_multiplier(24)
    with pytest.raises(ValueError):
        xsh_rr(1, 32, 48)


def test_result_wider_than_state_raises():
    with pytest.raises(ValueError):
        xsh_rs(1, 64, 32)


@pytest.mark.parametrize("bits", WIDTHS)
def test_rxs_m_xs_round_trip(bits):
    for value in _samples(bits):
        assert rxs_m_xs_unoutput(rxs_m_xs(value, bits, bits), bits) == value
        assert rxs_m_xs(rxs_m_xs_unoutput(value, bits), bits, bits) == value


def test_rxs_m_xs_8bit_is_permutation():
    assert sorted(rxs_m_xs(v, 8, 8) for v in range(256)) == list(range(256))


def test_xsl_rr_rr_16bit_is_permutation():
    assert len({xsl_rr_rr(v, 16, 16) for v in range(1 << 16)}) == 1 << 16


def test_xsl_rr_rr_requires_equal_widths():
    with pytest.raises(ValueError):
        xsl_rr_rr(5, 32, 64)


@pytest.mark.parametrize(
    "func", [xsh_rs, xsh_rr, rxs, rxs_m_xs, rxs_m, xsl_rr, xsh, xsl]
)
@pytest.mark.parametrize("xbits,ibits", PAIRS)
def test_outputs_fit_result_width(func, xbits, ibits):
    for value in _samples(ibits):
        assert 0 <= func(value, xbits, ibits) < (1 << xbits)


@pytest.mark.parametrize(
    "func", [xsh_rs, xsh_rr, rxs, rxs_m_xs, rxs_m, xsl_rr, xsh, xsl]
)
def test_zero_state_gives_zero(func):
    assert func(0, 32, 64) == 0


def test_input_is_reduced_to_state_width():
    for value in _samples(64):
        assert xsh_rr(value + (1 << 64), 32, 64) == xsh_rr(value, 32, 64)


def test_xsl_folds_halves():
    for value in _samples(64):
        assert xsl(value, 32, 64) == (value & 0xFFFFFFFF) ^ (value >> 32)


def test_xsl_rr_without_rotation_matches_xsl():
    for value in _samples(59):
        assert value >> 59 == 0
        assert xsl_rr(value, 32, 64) == xsl(value, 32, 64)


def test_rxs_m_xs_extends_rxs_m():
    for value in _samples(32):
        y = rxs_m(value, 32, 32)
        assert rxs_m_xs(value, 32, 32) == y ^ (y >> 22)


def test_every_supported_width_has_constants():
    assert output.SUPPORTED_WIDTHS == (8, 16, 32, 64, 128)
    for bits in output.SUPPORTED_WIDTHS:
        assert 0 < output.default_multiplier(bits) < (1 << bits)
        assert 0 < output.mcg_multiplier(bits) < (1 << bits)
import pytest

from tagkit.engine import (
    Engine,
    StreamKind,
    advance_state,
    pcg32,
    pcg32_fast,
    pcg32_once_insecure,
    pcg32_oneseq,
    pcg32_oneseq_once_insecure,
    pcg32_unique,
    pcg64,
    pcg64_fast,
    pcg64_once_insecure,
    pcg64_oneseq,
    pcg64_oneseq_once_insecure,
    pcg64_unique,
    pcg128_once_insecure,
    state_distance,
)
from tagkit.extras import SeedSeqFrom
from tagkit.output import default_increment, default_multiplier, xsh_rr


def test_pcg32_reference_sequence():
    rng = pcg32(42, 54)
    values = [rng() for _ in range(6)]
    assert values == [
        0xA15C02B7,
        0x7B47F409,
        0xBA1D3330,
        0x83D2F293,
        0xBFA4784B,
        0xCBED606E,
    ]


def test_output_previous_uses_old_state():
    rng = pcg32_oneseq(5)
    before = rng.state
    assert rng() == xsh_rr(before, 32, 64)


@pytest.mark.parametrize(
    "factory",
    [pcg32, pcg32_oneseq, pcg32_fast, pcg64, pcg64_oneseq, pcg64_fast,
     pcg32_once_insecure, pcg64_once_insecure, pcg128_once_insecure,
     pcg32_oneseq_once_insecure, pcg64_oneseq_once_insecure],
)
def test_advance_matches_stepping(factory):
    stepped = factory(123)
    jumped = factory(123)
    for _ in range(37):
        stepped()
    jumped.advance(37)
    assert stepped == jumped
    assert stepped() == jumped()


@pytest.mark.parametrize("factory", [pcg32, pcg32_fast, pcg64, pcg64_fast, pcg128_once_insecure])
def test_backstep_restores(factory):
    rng = factory(99)
    start = rng.state
    first = [rng() for _ in range(5)]
    rng.backstep(5)
    assert rng.state == start
    assert [rng() for _ in range(5)] == first


def test_discard_is_advance():
    a = pcg64(7, 3)
    b = pcg64(7, 3)
    a.discard(1000)
    b.advance(1000)
    assert a == b


@pytest.mark.parametrize("factory", [pcg32, pcg32_oneseq, pcg32_fast, pcg64, pcg64_fast])
def test_subtraction_counts_steps(factory):
    origin = factory(11)
    later = factory(11)
    later.advance(12345)
    assert later - origin == 12345
    assert origin.distance(later.state) == 12345


def test_subtraction_incomparable():
    with pytest.raises(TypeError):
        pcg32(1) - pcg32_oneseq(1)


def test_subtraction_different_streams_is_consistent():
    a = pcg32(5, 1)
    b = pcg32(5, 2)
    d1 = a - b
    a.advance(10)
    assert a - b == d1 + 10


def test_wrapped_oneseq_after_reaching_zero():
    rng = pcg32_oneseq(7)
    rng.advance(rng.distance(0))
    assert rng.state == 0
    assert rng.wrapped()


def test_wrapped_mcg():
    rng = pcg32_fast(0)
    assert rng.state == 3
    assert rng.wrapped()
    rng()
    assert not rng.wrapped()


def test_mcg_state_keeps_low_bits():
    rng = pcg64_fast(1000)
    for _ in range(10):
        rng()
        assert rng.state & 3 == 3


def test_period_pow2():
    assert pcg32().period_pow2() == 64
    assert pcg32_fast().period_pow2() == 62
    assert pcg64().period_pow2() == 128


def test_stream_and_set_stream():
    rng = pcg32(1, 54)
    assert rng.stream() == 54
    assert rng.increment == 109
    rng.set_stream(7)
    assert rng.stream() == 7


def test_oneseq_stream_is_default():
    assert pcg32_oneseq().stream() == default_increment(64) >> 1


def test_set_stream_rejected_without_stream():
    with pytest.raises(TypeError):
        pcg32_oneseq().set_stream(3)
    with pytest.raises(TypeError):
        pcg32_fast().stream()


def test_unique_engines_differ():
    a = pcg32_unique(1)
    b = pcg64_unique(1)
    c = pcg32_unique(1)
    assert a.increment % 2 == 1
    assert b.increment % 2 == 1
    assert a.increment != c.increment


def test_str_load_round_trip():
    source = pcg32(42, 54)
    source()
    target = pcg32(0, 1)
    rest = target.load(str(source) + " tail")
    assert rest == " tail"
    assert target == source
    assert [target() for _ in range(4)] == [source() for _ in range(4)]


def test_str_format():
    rng = pcg32_oneseq()
    assert str(rng) == f"{default_multiplier(64)} {default_increment(64)} {rng.state}"


def test_load_wrong_multiplier():
    rng = pcg32(1)
    before = rng.state
    with pytest.raises(ValueError):
        rng.load(f"5 {rng.increment} 10")
    assert rng.state == before


def test_load_wrong_increment_fixed_stream():
    rng = pcg32_oneseq(1)
    with pytest.raises(ValueError):
        rng.load(f"{rng.multiplier} 3 10")


def test_load_malformed():
    with pytest.raises(ValueError):
        pcg32().load("abc")


def test_bounded_call():
    rng = pcg32(3)
    values = [rng(10) for _ in range(300)]
    assert all(0 <= v < 10 for v in values)
    assert set(values) == set(range(10))


def test_bounded_rejects_zero():
    with pytest.raises(ValueError):
        pcg32()(0)


def test_outputs_fit_width():
    rng = pcg128_once_insecure(1, 2)
    assert all(0 <= rng() < 1 << 128 for _ in range(20))
    small = pcg32_oneseq_once_insecure(9)
    assert all(0 <= small() < 1 << 32 for _ in range(20))


def test_seed_resets():
    rng = pcg32(42, 54)
    first = [rng() for _ in range(3)]
    rng.seed(42, 54)
    assert [rng() for _ in range(3)] == first


def test_seed_without_stream_resets_default_stream():
    rng = pcg32(1, 9)
    rng.seed(1)
    assert rng == pcg32(1)


def test_seed_from_seed_sequence():
    a = pcg32(SeedSeqFrom(pcg32(5)))
    b = pcg32(SeedSeqFrom(pcg32(5)))
    c = pcg32(SeedSeqFrom(pcg32(6)))
    assert a == b
    assert a != c
    one = pcg64_oneseq(SeedSeqFrom(pcg32(5)))
    two = pcg64_oneseq(SeedSeqFrom(pcg32(5)))
    assert one() == two()


def test_seed_sequence_with_stream_rejected():
    with pytest.raises(TypeError):
        pcg32(SeedSeqFrom(pcg32()), 3)


def test_engine_rejects_bad_width():
    with pytest.raises(ValueError):
        Engine(32, 48, xsh_rr, StreamKind.ONESEQ)


def test_advance_state_composes():
    m, c = default_multiplier(64), default_increment(64)
    s = 123456789
    assert advance_state(s, 0, m, c, 64) == s
    assert advance_state(advance_state(s, 1, m, c, 64), 2, m, c, 64) == advance_state(s, 3, m, c, 64)
    assert advance_state(advance_state(s, 50, m, c, 64), -50, m, c, 64) == s


def test_state_distance_inverts_advance():
    m, c = default_multiplier(64), default_increment(64)
    s = 987654321
    target = advance_state(s, 424242, m, c, 64)
    assert state_distance(s, target, m, c, 64) == 424242


def test_state_distance_unreachable_mcg():
    m = default_multiplier(64)
    with pytest.raises(ValueError):
        state_distance(3, 1, m, 0, 64)


def test_equality_requires_same_kind():
    assert pcg32(1) != pcg64(1)
    assert pcg32(1) == pcg32(1)
    assert pcg32(1) != pcg32(2)
    with pytest.raises(TypeError):
        hash(pcg32(1))
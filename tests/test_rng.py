from __future__ import annotations

import copy
import pickle

import pytest

from plinkofair.services.errors import DrawBudgetExceeded, InvalidInput
from plinkofair.services.rng import RoundRandomSource, XorShift32, draw_count, extract_prng_seed

COMBINED = "1234567890abcdef1234567890abcdef1234567890abcdef1234567890abcdef"


def test_xorshift_known_sequence():
    prng = XorShift32(0x1234ABCD)
    assert [prng.next() for _ in range(3)] == [0.4331706191878766, 0.18334311456419528, 0.30208519427105784]
    assert prng.state == 1297446030


def test_xorshift_same_seed_same_stream():
    a, b = XorShift32(123456), XorShift32(123456)
    assert [a.next() for _ in range(50)] == [b.next() for _ in range(50)]


def test_xorshift_zero_seed_coerced_to_one():
    prng = XorShift32(0)
    assert prng.state == 1
    assert prng.next() == 0.00006295018829405308


def test_xorshift_outputs_in_unit_interval():
    prng = XorShift32(42)
    values = [prng.next() for _ in range(2000)]
    assert all(0.0 <= v < 1.0 for v in values)
    assert values[0] != values[1]


def test_xorshift_state_stays_32_bit():
    prng = XorShift32(0xFFFFFFFF)
    for _ in range(500):
        prng.next()
        assert 0 < prng.state <= 0xFFFFFFFF


def test_extract_prng_seed_is_big_endian_first_four_bytes():
    assert extract_prng_seed("abcdef1234567890" * 4) == 2882400018
    assert extract_prng_seed("00000001" + "f" * 56) == 1


@pytest.mark.parametrize("bad", [
    "", "abc", "zzzzzzzz", None, 12345678,
    "-fffffff", "+1234567", "0x1234ab", "1_23_456", " 1234567", "1234567\n",
])
def test_extract_prng_seed_rejects_malformed(bad):
    with pytest.raises(InvalidInput):
        extract_prng_seed(bad)


def test_round_source_matches_raw_generator_and_counts_calls():
    rng = RoundRandomSource(COMBINED)
    raw = XorShift32(0x12345678)
    assert rng.call_count() == 0
    for expected_calls in range(1, 6):
        assert rng.next() == raw.next()
        assert rng.call_count() == expected_calls


def test_round_source_reset_replays_from_start():
    rng = RoundRandomSource(COMBINED)
    first = [rng.next() for _ in range(10)]
    rng.reset(COMBINED)
    assert rng.call_count() == 0
    assert [rng.next() for _ in range(10)] == first


def test_round_source_enforces_draw_budget():
    rng = RoundRandomSource(COMBINED, max_draws=3)
    for _ in range(3):
        rng.next()
    with pytest.raises(DrawBudgetExceeded):
        rng.next()
    assert rng.call_count() == 3


def test_round_source_cannot_be_copied_or_pickled():
    rng = RoundRandomSource(COMBINED)
    with pytest.raises(TypeError):
        copy.copy(rng)
    with pytest.raises(TypeError):
        copy.deepcopy(rng)
    with pytest.raises(TypeError):
        pickle.dumps(rng)


@pytest.mark.parametrize("rows, expected", [(1, 2), (4, 14), (12, 90), (16, 152)])
def test_draw_count(rows, expected):
    assert draw_count(rows) == expected

"""
Envelope conversion tests.
"""

import math

import pytest

from banksf2 import ParamInfo, envelope_from_params, to_timecents
from banksf2.curves import ATTACK_TABLE, DECAY_TABLE, HOLD_TABLE


def test_curve_tables_cover_every_7bit_index():
    assert len(ATTACK_TABLE) == 128
    assert len(HOLD_TABLE) == 128
    assert len(DECAY_TABLE) == 128


@pytest.mark.parametrize("seconds, expected", [
    (1.0, 0),
    (2.0, 1200),
    (4.0, 2400),
    (0.5, 65536 - 1200),
    (0.25, 65536 - 2400),
    (1e-9, -12000),
    (0.0, -12000),
    (-3.0, -12000),
])
def test_to_timecents(seconds, expected):
    assert to_timecents(seconds) == expected


def test_to_timecents_clamps_exactly_at_limit():
    # 2 ** -10 seconds is exactly -12000 timecents
    assert to_timecents(2 ** -10) == -12000


def test_attack_times_stay_in_16bit_range():
    for attack in range(127):
        value = envelope_from_params(ParamInfo(attack=attack)).attack_time
        assert -12000 <= value < 65536


def test_attack_uses_table_in_milliseconds():
    env = envelope_from_params(ParamInfo(attack=0))
    assert env.attack_time == math.floor(1200 * math.log2(13.122))

    # 9 ms is below one second, so the result is wrapped
    env = envelope_from_params(ParamInfo(attack=126))
    assert env.attack_time == math.floor(1200 * math.log2(0.009)) + 65536


def test_shortest_attack_and_hold_clamp():
    env = envelope_from_params(ParamInfo(attack=127, hold=0))
    assert env.attack_time == -12000
    assert env.hold_time == -12000


def test_hold_time():
    env = envelope_from_params(ParamInfo(hold=127))
    assert env.hold_time == math.floor(1200 * math.log2(4.096))


@pytest.mark.parametrize("index", [0, 1, 50, 100, 126])
def test_zero_sustain_uses_silence_branch(index):
    env = envelope_from_params(ParamInfo(sustain=0, decay=index, release=index))
    expected = to_timecents(-90.25 / DECAY_TABLE[index] / 1000)
    assert env.sustain_level == 900
    assert env.decay_time == expected
    assert env.release_time == expected


def test_zero_sustain_level_for_every_rate():
    for index in range(128):
        env = envelope_from_params(ParamInfo(sustain=0, decay=index, release=index))
        assert env.sustain_level == 900


def test_infinite_rates_are_minimum_timecents():
    for sustain in range(128):
        env = envelope_from_params(ParamInfo(sustain=sustain, decay=127, release=127))
        assert env.decay_time == -12000
        assert env.release_time == -12000


def test_partial_sustain():
    env = envelope_from_params(ParamInfo(sustain=64, decay=40, release=60))
    sustain_vol = 20 * math.log10((64 / 127) ** 2)

    assert env.sustain_level == pytest.approx(119.05, abs=0.01)
    assert env.decay_time == to_timecents(sustain_vol / DECAY_TABLE[40] / 1000)
    assert env.release_time == to_timecents((-90.25 - sustain_vol) / DECAY_TABLE[60] / 1000)


def test_full_sustain_has_no_decay():
    env = envelope_from_params(ParamInfo(sustain=127, decay=10, release=10))
    assert env.sustain_level == 0
    assert env.decay_time == -12000
    assert env.release_time == to_timecents(-90.25 / DECAY_TABLE[10] / 1000)

"""
Shared bank builders for the tests.
"""

import struct

import pytest

from banksf2 import Instrument, ParamInfo, Region, SoundBank, WaveAudio


def pcm(*frames):
    """Packs signed 16-bit frames as little-endian PCM bytes."""
    return struct.pack(f"<{len(frames)}h", *frames)


@pytest.fixture
def single_region_bank():
    """
    One instrument, one full-range region without a velocity range, and a
    two-frame looping wave.
    """
    params = ParamInfo(
        attack=0,
        hold=0,
        decay=127,
        sustain=0,
        release=127,
        volume=100,
        pan=64,
        original_key=60,
        wave_idx=0
    )
    wave = WaveAudio(data=pcm(100, -100), sample_rate=44100, loop_start=0, loop_end=1, loop=1)
    region = Region(key_lo=0, key_hi=127, vel_lo=0, vel_hi=0, param_idx=0)
    return SoundBank(
        instruments=[Instrument(regions=[region])],
        params=[params],
        waves=[wave],
        name="Test bank"
    )


@pytest.fixture
def multi_bank():
    """
    Two instruments sharing parameter sets:
    - instr0: region with a velocity range, region without one
    - instr1: one region with a velocity range
    Waves are 5 and 3 frames long.
    """
    waves = [
        WaveAudio(data=pcm(1, 2, 3, 4, 5), sample_rate=32000, loop_start=1, loop_end=3, loop=1, name="five"),
        WaveAudio(data=pcm(7, 8, 9), sample_rate=22050, loop_start=0, loop_end=2, loop=0),
    ]
    params = [
        ParamInfo(attack=10, hold=5, decay=40, sustain=64, release=60, volume=127, pan=0, original_key=48, wave_idx=0),
        ParamInfo(attack=126, hold=0, decay=127, sustain=127, release=127, volume=0, pan=127, original_key=72, wave_idx=1),
    ]
    instruments = [
        Instrument(regions=[
            Region(key_lo=0, key_hi=59, vel_lo=1, vel_hi=100, param_idx=0),
            Region(key_lo=60, key_hi=127, param_idx=1),
        ], name="lead"),
        Instrument(regions=[
            Region(key_lo=36, key_hi=36, vel_lo=0, vel_hi=127, param_idx=0),
        ]),
    ]
    return SoundBank(instruments=instruments, params=params, waves=waves, name="Multi")

# Copyright (c) 2025 bakajikara
#
# This file is licensed under the MIT License (MIT).
# See the LICENSE file in the project root for the full license text.

"""
Conversion of hardware envelope indices to SF2 volume envelope generators.

Times are returned in timecents (1200 * log2(seconds)), the sustain level in
centibels of attenuation.
"""

from __future__ import annotations

import math
from typing import NamedTuple

from .constants import MIN_TIMECENTS, SUSTAIN_SILENT_CB
from .curves import ATTACK_TABLE, DECAY_TABLE, HOLD_TABLE

# Attenuation (dB) at which the volume is treated as silent
SILENCE_DB = -90.25

# Index that disables the decay or release stage
INFINITE_RATE = 127


class EnvelopeParams(NamedTuple):
    attack_time: int
    decay_time: int
    sustain_level: float
    release_time: int
    hold_time: int


def to_timecents(time: float) -> int:
    """
    Converts a time in seconds to timecents.

    Small negative values (-12000 < tc < 0) are returned as their 16-bit
    two's complement (tc + 65536); anything at or below -12000 is clamped.
    A non-positive time is treated as infinitely short.
    """
    if time <= 0:
        return MIN_TIMECENTS

    tc = math.floor(1200 * math.log2(time))
    if MIN_TIMECENTS < tc < 0:
        return tc + 65536
    elif tc < MIN_TIMECENTS:
        return MIN_TIMECENTS
    else:
        return tc


def _sustain_volume(sustain: int) -> float:
    """
    Sustain level in dB implied by a 7-bit sustain index (quadratic curve).
    """
    return 20 * math.log10((sustain / 127) ** 2)


def _falling_time(level_db: float, index: int) -> int:
    return to_timecents(level_db / DECAY_TABLE[index] / 1000)


def envelope_from_params(params) -> EnvelopeParams:
    """
    Builds the SF2 volume envelope for a ParamInfo.

    Args:
        params: An object with attack, hold, decay, sustain and release indices.

    Returns:
        EnvelopeParams with attack/hold/decay/release in timecents and the
        sustain level in centibels.
    """
    attack_time = to_timecents(ATTACK_TABLE[params.attack] / 1000)
    hold_time = to_timecents(HOLD_TABLE[params.hold] / 1000)

    if params.sustain == 0:
        sustain_vol = None
        sustain_level = SUSTAIN_SILENT_CB
    else:
        sustain_vol = _sustain_volume(params.sustain)
        sustain_level = 200 * abs(math.log10((params.sustain / 127) ** 2))

    if params.decay == INFINITE_RATE:
        decay_time = MIN_TIMECENTS
    elif sustain_vol is None:
        decay_time = _falling_time(SILENCE_DB, params.decay)
    else:
        decay_time = _falling_time(sustain_vol, params.decay)

    if params.release == INFINITE_RATE:
        release_time = MIN_TIMECENTS
    elif sustain_vol is None:
        release_time = _falling_time(SILENCE_DB, params.release)
    else:
        release_time = _falling_time(SILENCE_DB - sustain_vol, params.release)

    return EnvelopeParams(
        attack_time=attack_time,
        decay_time=decay_time,
        sustain_level=sustain_level,
        release_time=release_time,
        hold_time=hold_time,
    )

# Copyright (c) 2025 bakajikara
#
# This file is licensed under the MIT License (MIT).
# See the LICENSE file in the project root for the full license text.

from .bank import Instrument, ParamInfo, Region, SoundBank, WaveAudio
from .compiler import SF2Compiler, convert_bank
from .constants import VERSION as __version__
from .envelope import EnvelopeParams, envelope_from_params, to_timecents
from .loader import load_bank_directory
from .parser import SF2Parser

__all__ = [
    "EnvelopeParams",
    "Instrument",
    "ParamInfo",
    "Region",
    "SF2Compiler",
    "SF2Parser",
    "SoundBank",
    "WaveAudio",
    "convert_bank",
    "envelope_from_params",
    "load_bank_directory",
    "to_timecents"
]

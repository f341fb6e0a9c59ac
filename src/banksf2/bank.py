# Copyright (c) 2025 bakajikara
#
# This file is licensed under the MIT License (MIT).
# See the LICENSE file in the project root for the full license text.

"""
In-memory sound bank model.

Parameter sets and waves live in arenas owned by the SoundBank; regions and
parameter sets refer to them by index, so many regions can share one
parameter set (and one wave) without aliasing objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class WaveAudio:
    """
    A mono 16-bit little-endian PCM waveform.

    loop_start and loop_end are inclusive frame offsets relative to the start
    of the wave. loop is the SF2 sampleModes value (0 = no loop, 1 = loop).
    """
    data: bytes
    sample_rate: int
    loop_start: int = 0
    loop_end: int = 0
    loop: int = 0
    data_length: int | None = None
    name: str = ""

    def __post_init__(self):
        self.data = bytes(self.data)
        if self.data_length is None:
            self.data_length = len(self.data)
        if self.data_length % 2:
            raise ValueError(f"16-bit PCM data must have an even length, got {self.data_length} bytes.")
        self.loop = int(self.loop)

    @property
    def num_frames(self) -> int:
        return self.data_length // 2


@dataclass
class ParamInfo:
    """
    Envelope and mix parameters of a region.

    attack, hold, decay, sustain and release are 7-bit curve table indices.
    """
    attack: int = 0
    hold: int = 0
    decay: int = 127
    sustain: int = 127
    release: int = 127
    volume: int = 127
    pan: int = 64
    original_key: int = 60
    wave_idx: int = 0


@dataclass
class Region:
    """
    A key/velocity scoped zone. vel_hi == 0 means the velocity range is unset.
    """
    key_lo: int = 0
    key_hi: int = 127
    vel_lo: int = 0
    vel_hi: int = 0
    param_idx: int = 0

    @property
    def has_velocity_range(self) -> bool:
        return self.vel_hi != 0


@dataclass
class Instrument:
    regions: list[Region] = field(default_factory=list)
    name: str = ""


@dataclass
class SoundBank:
    instruments: list[Instrument] = field(default_factory=list)
    params: list[ParamInfo] = field(default_factory=list)
    waves: list[WaveAudio] = field(default_factory=list)
    name: str = "Sound bank"

    @property
    def instrument_count(self) -> int:
        return len(self.instruments)

    def get_instrument_regions(self, index: int) -> list[Region]:
        return self.instruments[index].regions

    def param_for(self, region: Region) -> ParamInfo:
        return self.params[region.param_idx]

    def wave_for(self, params: ParamInfo) -> WaveAudio:
        return self.waves[params.wave_idx]

    def iter_regions(self):
        """
        Yields (instrument_index, region) pairs in bank order.
        """
        for i, instrument in enumerate(self.instruments):
            for region in instrument.regions:
                yield i, region

    @property
    def region_count(self) -> int:
        return sum(len(instrument.regions) for instrument in self.instruments)

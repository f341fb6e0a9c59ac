# Copyright (c) 2025 bakajikara
#
# This file is licensed under the MIT License (MIT).
# See the LICENSE file in the project root for the full license text.

"""
Index chain builder for the pdta (Hydra) chunks.

Every instrument of the bank becomes one instrument (one zone per region)
and one preset with a single zone that references it. Records refer to each
other by position, and every list ends with a terminal record whose index
marks the end of the previous entry's span.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .constants import (
    GENERATOR_IDS,
    INSTRUMENT_TERMINATOR,
    MAX_INDEX,
    PRESET_TERMINATOR,
    SAMPLE_TERMINATOR,
)
from .envelope import envelope_from_params
from .records import (
    Bag,
    Generator,
    InstrumentHeader,
    Modulator,
    PresetHeader,
    SampleHeader,
)

# Generators every preset zone carries: reverbEffectsSend, instrument
PRESET_GENS_PER_ZONE = 2

# Generators every instrument zone carries besides keyRange/velRange
FIXED_GENS_PER_ZONE = 10


@dataclass
class ChainState:
    """
    Running indices of the fold over (instrument, region) pairs.
    """
    preset_bag_index: int = 0
    inst_bag_index: int = 0
    inst_gen_index: int = 0


@dataclass
class Hydra:
    """
    The nine pdta record lists, each ending with its terminal record.
    """
    phdr: list[PresetHeader] = field(default_factory=list)
    pbag: list[Bag] = field(default_factory=list)
    pmod: list[Modulator] = field(default_factory=list)
    pgen: list[Generator] = field(default_factory=list)
    inst: list[InstrumentHeader] = field(default_factory=list)
    ibag: list[Bag] = field(default_factory=list)
    imod: list[Modulator] = field(default_factory=list)
    igen: list[Generator] = field(default_factory=list)
    shdr: list[SampleHeader] = field(default_factory=list)


def round_half_away(value: float) -> int:
    """
    Rounds to the nearest integer, halves away from zero.
    """
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def convert_pan(pan: int) -> int:
    """
    Converts a 0-127 pan (64 = centre) to SF2 pan in 0.1% units.
    """
    return round_half_away(1000 * (pan - 64) / 64.0)


def convert_attenuation(volume: int) -> int:
    return 127 - volume


def _to_int16(value: float) -> int:
    """
    Truncates toward zero and wraps into the signed 16-bit range.
    """
    value = int(value) & 0xFFFF
    return value - 0x10000 if value >= 0x8000 else value


def _check_index(value: int, what: str) -> int:
    if value > MAX_INDEX:
        raise ValueError(f"Bank too large for SF2: {value} {what} exceed the 16-bit index limit ({MAX_INDEX}).")
    return value


def instrument_name(bank, index: int) -> str:
    return bank.instruments[index].name or f"instr{index}"


def region_generators(bank, region) -> list[Generator]:
    """
    Builds the generator list of one instrument zone.

    keyRange comes first and velRange (when set) second; sampleID is always
    the last generator of the zone.
    """
    params = bank.param_for(region)
    wave = bank.wave_for(params)
    envelope = envelope_from_params(params)

    gens = [Generator.from_range(GENERATOR_IDS["keyRange"], region.key_lo, region.key_hi)]

    # vel_hi == 0 means the range is not set
    if region.has_velocity_range:
        gens.append(Generator.from_range(GENERATOR_IDS["velRange"], region.vel_lo, region.vel_hi))

    gens.extend([
        Generator(GENERATOR_IDS["initialAttenuation"], convert_attenuation(params.volume)),
        Generator(GENERATOR_IDS["pan"], convert_pan(params.pan)),
        Generator(GENERATOR_IDS["sampleModes"], wave.loop),
        Generator(GENERATOR_IDS["overridingRootKey"], params.original_key),
        Generator(GENERATOR_IDS["attackVolEnv"], envelope.attack_time),
        Generator(GENERATOR_IDS["holdVolEnv"], envelope.hold_time),
        Generator(GENERATOR_IDS["decayVolEnv"], envelope.decay_time),
        Generator(GENERATOR_IDS["sustainVolEnv"], _to_int16(envelope.sustain_level)),
        Generator(GENERATOR_IDS["releaseVolEnv"], envelope.release_time),
        Generator(GENERATOR_IDS["sampleID"], _check_index(params.wave_idx, "samples")),
    ])
    return gens


class HydraBuilder:
    """
    Builds the preset, instrument and sample record lists for a bank.
    """

    def __init__(self, bank, sample_headers):
        """
        Args:
            bank: The SoundBank to convert.
            sample_headers: Sample headers from the sample table builder, one per wave.
        """
        self.bank = bank
        self.sample_headers = sample_headers
        self.hydra = Hydra()
        self.state = ChainState()

    def build(self) -> Hydra:
        for i in range(self.bank.instrument_count):
            self._add_preset(i)
            self._add_instrument(i)

        self._add_terminators()
        self._check_chains()
        return self.hydra

    def _add_preset(self, index):
        """
        Adds the preset header, its single bag and the bag's two generators.
        """
        hydra = self.hydra
        hydra.phdr.append(PresetHeader(
            name=instrument_name(self.bank, index),
            preset=index,
            bank=0,
            bag_ndx=_check_index(self.state.preset_bag_index, "preset zones")
        ))
        hydra.pbag.append(Bag(gen_ndx=_check_index(len(hydra.pgen), "preset generators")))
        hydra.pgen.append(Generator(GENERATOR_IDS["reverbEffectsSend"], 0))
        hydra.pgen.append(Generator(GENERATOR_IDS["instrument"], _check_index(index, "instruments")))
        self.state.preset_bag_index += 1

    def _add_instrument(self, index):
        """
        Adds the instrument header and one zone per region.
        """
        hydra = self.hydra
        hydra.inst.append(InstrumentHeader(
            name=instrument_name(self.bank, index),
            bag_ndx=_check_index(self.state.inst_bag_index, "instrument zones")
        ))

        for region in self.bank.get_instrument_regions(index):
            hydra.ibag.append(Bag(gen_ndx=_check_index(self.state.inst_gen_index, "instrument generators")))
            gens = region_generators(self.bank, region)
            assert len(gens) == FIXED_GENS_PER_ZONE + 1 + region.has_velocity_range
            hydra.igen.extend(gens)

            self.state.inst_bag_index += 1
            self.state.inst_gen_index += len(gens)

    def _add_terminators(self):
        hydra, state = self.hydra, self.state

        hydra.phdr.append(PresetHeader(
            name=PRESET_TERMINATOR,
            preset=0,
            bank=0,
            bag_ndx=_check_index(state.preset_bag_index, "preset zones")
        ))
        hydra.pbag.append(Bag(gen_ndx=_check_index(len(hydra.pgen), "preset generators")))
        hydra.pmod.append(Modulator())
        hydra.pgen.append(Generator())

        hydra.inst.append(InstrumentHeader(
            name=INSTRUMENT_TERMINATOR,
            bag_ndx=_check_index(state.inst_bag_index, "instrument zones")
        ))
        hydra.ibag.append(Bag(gen_ndx=_check_index(state.inst_gen_index, "instrument generators")))
        hydra.imod.append(Modulator())
        hydra.igen.append(Generator())

        hydra.shdr.extend(self.sample_headers)
        _check_index(len(self.bank.waves), "samples")
        hydra.shdr.append(SampleHeader(name=SAMPLE_TERMINATOR))

    def _check_chains(self):
        hydra, state = self.hydra, self.state
        count = self.bank.instrument_count

        assert len(hydra.phdr) == len(hydra.pbag) == len(hydra.inst) == count + 1
        assert len(hydra.pgen) == count * PRESET_GENS_PER_ZONE + 1
        assert len(hydra.ibag) == state.inst_bag_index + 1 == self.bank.region_count + 1
        assert len(hydra.igen) == state.inst_gen_index + 1
        assert len(hydra.shdr) == len(self.bank.waves) + 1


def build_hydra(bank, sample_headers) -> Hydra:
    return HydraBuilder(bank, sample_headers).build()

"""
Index chain builder tests.
"""

import pytest

from banksf2 import Instrument, ParamInfo, Region, SoundBank, WaveAudio
from banksf2.constants import GENERATOR_IDS
from banksf2.envelope import envelope_from_params
from banksf2.hydra import build_hydra, convert_pan, round_half_away
from banksf2.records import SampleHeader
from banksf2.samples import build_sample_table

from conftest import pcm


def _build(bank):
    return build_hydra(bank, build_sample_table(bank).headers)


def _opers(gens):
    return [g.oper for g in gens]


ZONE_ORDER = [
    "initialAttenuation",
    "pan",
    "sampleModes",
    "overridingRootKey",
    "attackVolEnv",
    "holdVolEnv",
    "decayVolEnv",
    "sustainVolEnv",
    "releaseVolEnv",
    "sampleID",
]


def test_preset_chain(multi_bank):
    hydra = _build(multi_bank)

    assert [p.bag_ndx for p in hydra.phdr] == [0, 1, 2]
    assert [p.preset for p in hydra.phdr[:-1]] == [0, 1]
    assert [p.name for p in hydra.phdr] == ["lead", "instr1", "EOP"]
    assert [b.gen_ndx for b in hydra.pbag] == [0, 2, 4]
    assert [(g.oper, g.amount) for g in hydra.pgen] == [
        (GENERATOR_IDS["reverbEffectsSend"], 0),
        (GENERATOR_IDS["instrument"], 0),
        (GENERATOR_IDS["reverbEffectsSend"], 0),
        (GENERATOR_IDS["instrument"], 1),
        (0, 0),
    ]


def test_instrument_chain(multi_bank):
    hydra = _build(multi_bank)

    assert [i.bag_ndx for i in hydra.inst] == [0, 2, 3]
    assert hydra.inst[-1].name == "EOI"
    # 12 generators with a velocity range, 11 without
    assert [b.gen_ndx for b in hydra.ibag] == [0, 12, 23, 35]
    assert len(hydra.igen) == 35 + 1
    assert (hydra.igen[-1].oper, hydra.igen[-1].amount) == (0, 0)


def test_modulator_chunks_hold_only_terminal(multi_bank):
    hydra = _build(multi_bank)
    assert len(hydra.pmod) == len(hydra.imod) == 1
    assert hydra.pmod[0].pack() == b"\x00" * 10
    assert all(b.mod_ndx == 0 for b in hydra.pbag + hydra.ibag)


def test_zone_with_velocity_range(multi_bank):
    gens = _build(multi_bank).igen[0:12]

    assert _opers(gens) == [GENERATOR_IDS["keyRange"], GENERATOR_IDS["velRange"]] + [GENERATOR_IDS[n] for n in ZONE_ORDER]
    assert gens[0].amount == 0 | (59 << 8)
    assert gens[1].amount == 1 | (100 << 8)


def test_zone_without_velocity_range(multi_bank):
    gens = _build(multi_bank).igen[12:23]

    assert _opers(gens) == [GENERATOR_IDS["keyRange"]] + [GENERATOR_IDS[n] for n in ZONE_ORDER]
    assert gens[0].amount == 60 | (127 << 8)


def test_zone_values(multi_bank):
    gens = {g.oper: g.amount for g in _build(multi_bank).igen[0:12]}
    env = envelope_from_params(multi_bank.params[0])

    assert gens[GENERATOR_IDS["initialAttenuation"]] == 0
    assert gens[GENERATOR_IDS["pan"]] == -1000
    assert gens[GENERATOR_IDS["sampleModes"]] == 1
    assert gens[GENERATOR_IDS["overridingRootKey"]] == 48
    assert gens[GENERATOR_IDS["attackVolEnv"]] == env.attack_time
    assert gens[GENERATOR_IDS["holdVolEnv"]] == env.hold_time
    assert gens[GENERATOR_IDS["decayVolEnv"]] == env.decay_time
    assert gens[GENERATOR_IDS["sustainVolEnv"]] == 119
    assert gens[GENERATOR_IDS["releaseVolEnv"]] == env.release_time
    assert gens[GENERATOR_IDS["sampleID"]] == 0

    second = {g.oper: g.amount for g in _build(multi_bank).igen[12:23]}
    assert second[GENERATOR_IDS["initialAttenuation"]] == 127
    assert second[GENERATOR_IDS["pan"]] == 984
    assert second[GENERATOR_IDS["sampleModes"]] == 0
    assert second[GENERATOR_IDS["sampleID"]] == 1


def test_gen_total_matches_region_strides(multi_bank):
    hydra = _build(multi_bank)
    regions = [r for _, r in multi_bank.iter_regions()]

    assert hydra.ibag[-1].gen_ndx == sum(11 + (r.vel_hi != 0) for r in regions)
    assert hydra.inst[-1].bag_ndx == len(regions)


def test_empty_instrument_shares_next_bag_index():
    bank = SoundBank(
        instruments=[Instrument(), Instrument(regions=[Region()])],
        params=[ParamInfo()],
        waves=[WaveAudio(data=pcm(0), sample_rate=8000)]
    )
    hydra = _build(bank)
    assert [i.bag_ndx for i in hydra.inst] == [0, 0, 1]
    assert [b.gen_ndx for b in hydra.ibag] == [0, 11]


def test_empty_bank_has_only_terminators():
    hydra = _build(SoundBank())
    assert [p.name for p in hydra.phdr] == ["EOP"]
    assert [b.gen_ndx for b in hydra.pbag] == [0]
    assert [b.gen_ndx for b in hydra.ibag] == [0]
    assert [s.name for s in hydra.shdr] == ["EOS"]


@pytest.mark.parametrize("value, expected", [
    (0.4, 0),
    (0.5, 1),
    (-0.5, -1),
    (62.5, 63),
    (-62.5, -63),
    (984.375, 984),
])
def test_round_half_away(value, expected):
    assert round_half_away(value) == expected


@pytest.mark.parametrize("pan, expected", [(0, -1000), (64, 0), (68, 63), (60, -63), (127, 984)])
def test_convert_pan(pan, expected):
    assert convert_pan(pan) == expected


def test_too_many_generators_is_rejected():
    regions = [Region(param_idx=0) for _ in range(6000)]
    bank = SoundBank(
        instruments=[Instrument(regions=regions)],
        params=[ParamInfo()],
        waves=[WaveAudio(data=pcm(0), sample_rate=8000)]
    )
    with pytest.raises(ValueError, match="too large"):
        _build(bank)


def test_sample_index_beyond_16_bits_is_rejected():
    wave = WaveAudio(data=b"", sample_rate=8000)
    bank = SoundBank(
        instruments=[Instrument(regions=[Region(param_idx=0)])],
        params=[ParamInfo(wave_idx=65536)],
        waves=[wave] * 65537
    )
    with pytest.raises(ValueError, match="samples"):
        build_hydra(bank, [])


def test_too_many_samples_is_rejected():
    wave = WaveAudio(data=b"", sample_rate=8000)
    bank = SoundBank(
        instruments=[Instrument(regions=[Region(param_idx=0)])],
        params=[ParamInfo(wave_idx=0)],
        waves=[wave] * 65536
    )
    with pytest.raises(ValueError, match="samples"):
        build_hydra(bank, [])


def test_largest_sample_index_is_kept():
    wave = WaveAudio(data=b"", sample_rate=8000)
    bank = SoundBank(
        instruments=[Instrument(regions=[Region(param_idx=0)])],
        params=[ParamInfo(wave_idx=65534)],
        waves=[wave] * 65535
    )
    headers = [SampleHeader(name="w")] * 65535
    hydra = build_hydra(bank, headers)
    assert hydra.igen[-2].oper == GENERATOR_IDS["sampleID"]
    assert hydra.igen[-2].amount == 65534

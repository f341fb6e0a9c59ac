# Copyright (c) 2025 bakajikara
#
# This file is licensed under the MIT License (MIT).
# See the LICENSE file in the project root for the full license text.

"""
Sample table builder.

Concatenates the wave payloads into the smpl chunk data, with the 46 zero
frames the SoundFont format requires after every sample, and computes the
sample header of each wave.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .constants import BYTES_PER_FRAME, SAMPLE_PADDING, SF_SAMPLETYPE_MONO
from .records import SampleHeader


@dataclass
class SampleTable:
    """
    Output of the sample table builder.

    Attributes:
        data: The concatenated smpl chunk payload.
        headers: One SampleHeader per wave, in wave order (no terminator).
        missing: Indices of waves that no region refers to.
    """
    data: bytes
    headers: list[SampleHeader]
    missing: list[int] = field(default_factory=list)


def params_by_wave(bank):
    """
    Maps each referenced wave index to the first ParamInfo (in instrument,
    then region order) that uses it.
    """
    mapping = {}
    for _, region in bank.iter_regions():
        params = bank.param_for(region)
        mapping.setdefault(params.wave_idx, params)
    return mapping


def build_sample_table(bank) -> SampleTable:
    """
    Builds the smpl data and the sample headers for all waves of a bank.

    Positions are in sample frames from the start of the smpl chunk. Loop
    points are converted from the wave's inclusive, wave-relative frames to
    absolute positions with an exclusive end.
    """
    smpl_padding = b"\x00" * SAMPLE_PADDING * BYTES_PER_FRAME
    data_parts = []
    headers = []
    missing = []
    sample_offset = 0
    wave_params = params_by_wave(bank)

    for idx, wave in enumerate(bank.waves):
        data_parts.append(wave.data[:wave.data_length])
        data_parts.append(smpl_padding)

        start = sample_offset
        end = start + wave.num_frames
        sample_offset = end + SAMPLE_PADDING

        name = wave.name or f"wav{idx}"
        params = wave_params.get(idx)
        if params is None:
            print(f"  Warning: No instrument info for wave index {idx}")
            missing.append(idx)
            headers.append(SampleHeader(name=name))
            continue

        headers.append(SampleHeader(
            name=name,
            start=start,
            end=end,
            start_loop=start + wave.loop_start,
            end_loop=start + wave.loop_end + 1,
            sample_rate=wave.sample_rate,
            original_key=params.original_key,
            correction=0,
            sample_link=0,
            sample_type=SF_SAMPLETYPE_MONO
        ))

    data = b"".join(data_parts)
    expected = sum(wave.data_length + len(smpl_padding) for wave in bank.waves)
    assert len(data) == expected, f"smpl size mismatch: expected {expected} bytes, built {len(data)}"

    return SampleTable(data=data, headers=headers, missing=missing)

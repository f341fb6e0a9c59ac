# Copyright (c) 2025 bakajikara
#
# This file is licensed under the MIT License (MIT).
# See the LICENSE file in the project root for the full license text.

"""
Bank directory loader - Builds a SoundBank from an expanded directory.

The directory holds:
- bank.json: Bank name, waves, parameter sets and instruments
- waves/: Audio files (WAV, FLAC, etc.) referenced from bank.json
"""

import json
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

import numpy as np
import soundfile as sf

from .bank import Instrument, ParamInfo, Region, SoundBank, WaveAudio
from .constants import SAMPLE_MODE_LOOP, SAMPLE_MODE_NO_LOOP

MANIFEST_NAME = "bank.json"

# 7-bit fields of a parameter set and their defaults
PARAM_DEFAULTS = {
    "attack": 0,
    "hold": 0,
    "decay": 127,
    "sustain": 127,
    "release": 127,
    "volume": 127,
    "pan": 64,
    "original_key": 60,
}


def parse_range(text, what="range"):
    """
    Parses a "lo-hi" range string (e.g. "0-127") into a tuple of ints.
    """
    try:
        lo, hi = map(int, str(text).split("-"))
    except ValueError:
        raise ValueError(f"Invalid {what} \"{text}\", expected \"lo-hi\".") from None

    if not (0 <= lo <= 127 and 0 <= hi <= 127):
        raise ValueError(f"Invalid {what} \"{text}\", values must be within 0-127.")
    return lo, hi


def read_wave_file(audio_path):
    """
    Reads an audio file as mono 16-bit PCM.

    Returns:
        Tuple of (pcm_data_bytes, sample_rate, num_frames)
    """
    try:
        data, samplerate = sf.read(audio_path, dtype="int16")
    except Exception as e:
        raise ValueError(f"Failed to read audio file {audio_path}: {e}")

    if data.ndim == 2:
        if data.shape[1] > 1:
            print(f"  Warning: \"{audio_path}\" has {data.shape[1]} channels, using the first one.")
        data = data[:, 0]

    pcm_data = np.ascontiguousarray(data, dtype="<i2").tobytes()
    return pcm_data, samplerate, len(data)


class BankDirectoryLoader:
    """
    Loads a SoundBank from an expanded bank directory.
    """

    def __init__(self, input_dir):
        self.input_dir = Path(input_dir)
        self.manifest = {}

    def load(self):
        """
        Reads bank.json and every wave file it references.
        """
        print(f"Loading bank from: {self.input_dir}")
        self._load_manifest()

        waves = self._load_waves()
        params = self._load_params(len(waves))
        instruments = self._load_instruments(len(params))

        bank = SoundBank(
            instruments=instruments,
            params=params,
            waves=waves,
            name=self.manifest.get("name", self.input_dir.name)
        )
        print(f"  Loaded: {len(waves)} waves, {len(params)} parameter sets, {len(instruments)} instruments")
        return bank

    def _load_manifest(self):
        manifest_path = self.input_dir / MANIFEST_NAME

        if not manifest_path.exists():
            raise FileNotFoundError(f"{MANIFEST_NAME} not found in {self.input_dir}")

        with open(manifest_path, "r", encoding="utf-8") as f:
            try:
                self.manifest = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in {manifest_path}: {e}") from None

    def _load_waves(self):
        """
        Reads all wave files in parallel, preserving manifest order.
        """
        entries = self.manifest.get("waves", [])
        total = len(entries)
        if total:
            print(f"  Loading {total} wave files...")

        for entry in entries:
            audio_path = self.input_dir / entry["file"]
            if not audio_path.exists():
                raise FileNotFoundError(f"Wave file not found: {audio_path}")

        waves = [None] * total
        with ThreadPoolExecutor() as executor:
            # Submit all tasks and map futures to their index
            future_to_index = {
                executor.submit(self._load_wave, idx, entry): idx
                for idx, entry in enumerate(entries)
            }

            for completed, future in enumerate(as_completed(future_to_index), 1):
                idx = future_to_index[future]
                try:
                    waves[idx] = future.result()
                except Exception as e:
                    print(f"\n  ERROR loading {entries[idx]['file']}: {e}")
                    raise

                # Show progress inline
                progress = (completed / total) * 100
                print(f"    Progress: {completed}/{total} ({progress:.1f}%)", end="\r")

        if total:
            print()  # Newline after progress
        return waves

    def _load_wave(self, idx, entry):
        """
        Builds a WaveAudio from one manifest entry.
        """
        audio_path = self.input_dir / entry["file"]
        pcm_data, sample_rate, num_frames = read_wave_file(audio_path)

        loop_start = entry.get("loop_start", 0)
        loop_end = entry.get("loop_end", max(num_frames - 1, 0))
        if not 0 <= loop_start <= loop_end < max(num_frames, 1):
            raise ValueError(f"Invalid loop {loop_start}-{loop_end} for {audio_path} ({num_frames} frames).")

        return WaveAudio(
            data=pcm_data,
            sample_rate=entry.get("sample_rate", sample_rate),
            loop_start=loop_start,
            loop_end=loop_end,
            loop=SAMPLE_MODE_LOOP if entry.get("loop", False) else SAMPLE_MODE_NO_LOOP,
            name=entry.get("name", audio_path.stem)
        )

    def _load_params(self, wave_count):
        params = []
        for idx, entry in enumerate(self.manifest.get("params", [])):
            values = {key: entry.get(key, default) for key, default in PARAM_DEFAULTS.items()}
            for key, value in values.items():
                if not 0 <= value <= 127:
                    raise ValueError(f"params[{idx}].{key} = {value} is outside 0-127.")

            wave_idx = entry.get("wave", 0)
            if not 0 <= wave_idx < wave_count:
                raise ValueError(f"params[{idx}] refers to wave {wave_idx}, but only {wave_count} waves are defined.")

            params.append(ParamInfo(wave_idx=wave_idx, **values))
        return params

    def _load_instruments(self, param_count):
        instruments = []
        for idx, entry in enumerate(self.manifest.get("instruments", [])):
            regions = []
            for region_entry in entry.get("regions", []):
                key_lo, key_hi = parse_range(region_entry.get("key_range", "0-127"), "key range")
                if key_lo > key_hi:
                    raise ValueError(f"instruments[{idx}]: key range {key_lo}-{key_hi} is reversed.")

                vel_lo, vel_hi = 0, 0
                if "vel_range" in region_entry:
                    vel_lo, vel_hi = parse_range(region_entry["vel_range"], "velocity range")

                param_idx = region_entry.get("param", 0)
                if not 0 <= param_idx < param_count:
                    raise ValueError(f"instruments[{idx}] refers to params[{param_idx}], but only {param_count} parameter sets are defined.")

                regions.append(Region(
                    key_lo=key_lo,
                    key_hi=key_hi,
                    vel_lo=vel_lo,
                    vel_hi=vel_hi,
                    param_idx=param_idx
                ))

            instruments.append(Instrument(regions=regions, name=entry.get("name", "")))
        return instruments


def load_bank_directory(input_dir):
    """
    Loads a SoundBank from an expanded bank directory.
    """
    return BankDirectoryLoader(input_dir).load()

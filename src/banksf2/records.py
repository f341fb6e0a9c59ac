# Copyright (c) 2025 bakajikara
#
# This file is licensed under the MIT License (MIT).
# See the LICENSE file in the project root for the full license text.

"""
Fixed-layout pdta (Hydra) records.

Each record packs itself into its SF2 struct layout; chunk payloads are the
concatenation of a record list, terminal record included.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

from .constants import (
    BAG_FORMAT,
    GEN_FORMAT,
    INST_FORMAT,
    MOD_FORMAT,
    PHDR_FORMAT,
    SHDR_FORMAT,
)


def encode_name(name: str) -> bytes:
    """
    Encodes a record name for a 20-byte field, keeping room for the
    terminating null.
    """
    return name.encode("ascii", errors="replace")[:19]


@dataclass
class PresetHeader:
    name: str
    preset: int
    bank: int
    bag_ndx: int
    library: int = 0
    genre: int = 0
    morphology: int = 0

    def pack(self) -> bytes:
        return struct.pack(
            PHDR_FORMAT,
            encode_name(self.name),
            self.preset,
            self.bank,
            self.bag_ndx,
            self.library,
            self.genre,
            self.morphology
        )


@dataclass
class Bag:
    gen_ndx: int
    mod_ndx: int = 0

    def pack(self) -> bytes:
        return struct.pack(BAG_FORMAT, self.gen_ndx, self.mod_ndx)


@dataclass
class Modulator:
    src_oper: int = 0
    dest_oper: int = 0
    amount: int = 0
    amt_src_oper: int = 0
    trans_oper: int = 0

    def pack(self) -> bytes:
        return struct.pack(
            MOD_FORMAT,
            self.src_oper,
            self.dest_oper,
            self.amount,
            self.amt_src_oper,
            self.trans_oper
        )


@dataclass
class Generator:
    """
    A generator record. The amount is written as a raw 16-bit word, so both
    signed values and pre-wrapped unsigned values (timecents) are accepted.
    """
    oper: int = 0
    amount: int = 0

    def pack(self) -> bytes:
        return struct.pack(GEN_FORMAT, self.oper, self.amount & 0xFFFF)

    @classmethod
    def from_range(cls, oper: int, lo: int, hi: int) -> "Generator":
        return cls(oper, (lo & 0xFF) | ((hi & 0xFF) << 8))


@dataclass
class InstrumentHeader:
    name: str
    bag_ndx: int

    def pack(self) -> bytes:
        return struct.pack(INST_FORMAT, encode_name(self.name), self.bag_ndx)


@dataclass
class SampleHeader:
    name: str = ""
    start: int = 0
    end: int = 0
    start_loop: int = 0
    end_loop: int = 0
    sample_rate: int = 0
    original_key: int = 0
    correction: int = 0
    sample_link: int = 0
    sample_type: int = 0

    def pack(self) -> bytes:
        return struct.pack(
            SHDR_FORMAT,
            encode_name(self.name),
            self.start,
            self.end,
            self.start_loop,
            self.end_loop,
            self.sample_rate,
            self.original_key,
            self.correction,
            self.sample_link,
            self.sample_type
        )


def pack_records(records) -> bytes:
    return b"".join(record.pack() for record in records)

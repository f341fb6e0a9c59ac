# Copyright (c) 2025 bakajikara
#
# This file is licensed under the MIT License (MIT).
# See the LICENSE file in the project root for the full license text.

"""
SF2 reader used to inspect and verify generated SoundFont files.
"""

import io
import struct

from .constants import (
    BAG_FORMAT,
    BAG_SIZE,
    GEN_SIZE,
    INST_SIZE,
    MOD_FORMAT,
    MOD_SIZE,
    PHDR_SIZE,
    SHDR_SIZE,
)
from .riff import read_chunk_header


class SF2Parser:
    """
    A parser for SF2 files.
    """

    def __init__(self, source):
        """
        Initializes the SF2Parser.

        Args:
            source: The path to the SF2 file, or the file contents as bytes.
        """
        self.source = source
        self.file = None
        self.riff_size = 0
        self.info_data = {}
        self.sample_data = b""
        self.pdta = {}

    def parse(self):
        """
        Parses the entire SF2 file.
        """
        if isinstance(self.source, (bytes, bytearray)):
            self._parse_file(io.BytesIO(self.source))
        else:
            with open(self.source, "rb") as f:
                self._parse_file(f)
        return self

    def _parse_file(self, f):
        self.file = f

        # RIFF header
        riff_id = f.read(4)
        if riff_id != b"RIFF":
            raise ValueError("Not a RIFF file")

        self.riff_size = struct.unpack("<I", f.read(4))[0]

        form_type = f.read(4)
        if form_type != b"sfbk":
            raise ValueError("Not a SoundFont file")

        # Parse the three main chunks
        self._parse_chunks()
        self.file = None

    def _parse_chunks(self):
        """
        Parses INFO, sdta, and pdta chunks.
        """
        while True:
            try:
                chunk_id, chunk_size = read_chunk_header(self.file)
            except EOFError:
                break

            if chunk_id == b"LIST":
                list_type = self.file.read(4)
                if list_type == b"INFO":
                    self._parse_info_list(chunk_size - 4)
                elif list_type == b"sdta":
                    self._parse_sdta_list(chunk_size - 4)
                elif list_type == b"pdta":
                    self._parse_pdta_list(chunk_size - 4)
                else:
                    self.file.seek(chunk_size - 4, 1)  # Skip unknown list
            else:
                self.file.seek(chunk_size, 1)  # Skip unknown chunk

            # Align to next word
            if chunk_size % 2:
                self.file.seek(1, 1)

    def _iter_sub_chunks(self, size):
        chunk_end = self.file.tell() + size
        while self.file.tell() < chunk_end:
            sub_id, sub_size = read_chunk_header(self.file)
            data = self.file.read(sub_size)

            # Handle padding
            if sub_size % 2:
                self.file.read(1)

            yield sub_id, data

    def _parse_info_list(self, size):
        """
        Parses the INFO-list chunk.
        """
        for sub_id, data in self._iter_sub_chunks(size):
            if sub_id == b"ifil":
                major, minor = struct.unpack("<HH", data)
                self.info_data["version"] = f"{major}.{minor:02d}"
            else:
                key = sub_id.decode("ascii", errors="ignore")
                self.info_data[key] = data.decode("ascii", errors="ignore").rstrip("\x00")

    def _parse_sdta_list(self, size):
        """
        Parses the sdta-list chunk.
        """
        for sub_id, data in self._iter_sub_chunks(size):
            if sub_id == b"smpl":
                self.sample_data = data

    def _parse_pdta_list(self, size):
        """
        Parses the pdta-list (Hydra) chunk, keeping the raw sub-chunk data.
        """
        for sub_id, data in self._iter_sub_chunks(size):
            self.pdta[sub_id.decode("ascii", errors="ignore")] = data

    def _get_pdta_records(self, chunk_name, record_size):
        data = self.pdta.get(chunk_name, b"")
        return [data[i:i + record_size] for i in range(0, len(data) - record_size + 1, record_size)]

    def get_preset_records(self, include_terminal=False):
        """
        Gets preset headers. The EOP record is dropped unless include_terminal is set.
        """
        headers = []
        for r in self._get_pdta_records("phdr", PHDR_SIZE):
            values = struct.unpack("<HHHIII", r[20:38])
            headers.append({
                "name": _decode_name(r[0:20]),
                "preset": values[0],
                "bank": values[1],
                "bag_ndx": values[2],
                "library": values[3],
                "genre": values[4],
                "morphology": values[5]
            })
        return headers if include_terminal else headers[:-1]

    def get_preset_headers(self):
        return self.get_preset_records()

    def get_instrument_records(self, include_terminal=False):
        """
        Gets instrument headers. The EOI record is dropped unless include_terminal is set.
        """
        headers = []
        for r in self._get_pdta_records("inst", INST_SIZE):
            bag_ndx = struct.unpack("<H", r[20:22])[0]
            headers.append({"name": _decode_name(r[0:20]), "bag_ndx": bag_ndx})
        return headers if include_terminal else headers[:-1]

    def get_instrument_headers(self):
        return self.get_instrument_records()

    def get_sample_records(self, include_terminal=False):
        """
        Gets sample headers. The EOS record is dropped unless include_terminal is set.
        """
        headers = []
        for r in self._get_pdta_records("shdr", SHDR_SIZE):
            values = struct.unpack("<IIIIIBbHH", r[20:46])
            headers.append({
                "name": _decode_name(r[0:20]),
                "start": values[0],
                "end": values[1],
                "start_loop": values[2],
                "end_loop": values[3],
                "sample_rate": values[4],
                "original_key": values[5],
                "correction": values[6],
                "sample_link": values[7],
                "sample_type": values[8]
            })
        return headers if include_terminal else headers[:-1]

    def get_sample_headers(self):
        return self.get_sample_records()

    def get_preset_bags(self):
        return self._get_bags("pbag")

    def get_instrument_bags(self):
        return self._get_bags("ibag")

    def _get_bags(self, chunk_name):
        """
        Gets bags (zones), terminal bag included.
        """
        bags = []
        for r in self._get_pdta_records(chunk_name, BAG_SIZE):
            gen_ndx, mod_ndx = struct.unpack(BAG_FORMAT, r)
            bags.append({"gen_ndx": gen_ndx, "mod_ndx": mod_ndx})
        return bags

    def get_preset_generators(self):
        return self._get_generators("pgen")

    def get_instrument_generators(self):
        return self._get_generators("igen")

    def _get_generators(self, chunk_name):
        """
        Gets generators, terminal record included.
        Amounts are read as signed; "raw" holds the unsigned word.
        """
        generators = []
        for r in self._get_pdta_records(chunk_name, GEN_SIZE):
            oper, amount = struct.unpack("<Hh", r)
            generators.append({"oper": oper, "amount": amount, "raw": amount & 0xFFFF})
        return generators

    def get_preset_modulators(self):
        return self._get_modulators("pmod")

    def get_instrument_modulators(self):
        return self._get_modulators("imod")

    def _get_modulators(self, chunk_name):
        """
        Gets modulators, terminal record included.
        """
        modulators = []
        for r in self._get_pdta_records(chunk_name, MOD_SIZE):
            values = struct.unpack(MOD_FORMAT, r)
            modulators.append({
                "src_oper": values[0],
                "dest_oper": values[1],
                "amount": values[2],
                "amt_src_oper": values[3],
                "trans_oper": values[4]
            })
        return modulators

    def get_preset_zones(self, preset_idx):
        """
        Gets all zones for a given preset index, with raw generator/modulator data.
        """
        return self._get_zones(
            header_idx=preset_idx,
            headers=self.get_preset_records(include_terminal=True),
            bags=self.get_preset_bags(),
            gens=self.get_preset_generators(),
            mods=self.get_preset_modulators()
        )

    def get_instrument_zones(self, inst_idx):
        """
        Gets all zones for a given instrument index, with raw generator/modulator data.
        """
        return self._get_zones(
            header_idx=inst_idx,
            headers=self.get_instrument_records(include_terminal=True),
            bags=self.get_instrument_bags(),
            gens=self.get_instrument_generators(),
            mods=self.get_instrument_modulators()
        )

    def _get_zones(self, header_idx, headers, bags, gens, mods):
        """
        Gets zones for an instrument or preset. Spans are taken from the next
        record's index, so the terminal records close the last span.
        """
        bag_start = headers[header_idx]["bag_ndx"]
        bag_end = headers[header_idx + 1]["bag_ndx"]

        zones = []
        for bag_idx in range(bag_start, bag_end):
            bag, next_bag = bags[bag_idx], bags[bag_idx + 1]
            zones.append({
                "generators": gens[bag["gen_ndx"]:next_bag["gen_ndx"]],
                "modulators": mods[bag["mod_ndx"]:next_bag["mod_ndx"]]
            })
        return zones


def _decode_name(raw):
    return raw.split(b"\x00", 1)[0].decode("ascii", errors="ignore")

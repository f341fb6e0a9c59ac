# Copyright (c) 2025 bakajikara
#
# This file is licensed under the MIT License (MIT).
# See the LICENSE file in the project root for the full license text.

"""
SoundFont Compiler - Converts an in-memory SoundBank into an SF2 file.

The file has the fixed SoundFont 2 layout:
- RIFF "sfbk"
  - LIST "INFO": ifil, isng, INAM, ICRD, ISFT
  - LIST "sdta": smpl
  - LIST "pdta": phdr, pbag, pmod, pgen, inst, ibag, imod, igen, shdr
"""

import struct
import time

from .constants import SF_VERSION, SOUND_ENGINE, VERSION
from .hydra import build_hydra
from .records import pack_records
from .riff import Chunk, ListChunk, RiffFile, StringChunk
from .samples import build_sample_table

# Order of the pdta sub-chunks
HYDRA_CHUNKS = ("phdr", "pbag", "pmod", "pgen", "inst", "ibag", "imod", "igen", "shdr")


class SF2Compiler:
    """
    Compiles a SoundBank into a SoundFont 2 file.
    """

    def __init__(self, bank, name=None, creation_date=None, software=None):
        """
        Initializes the SF2 Compiler.

        Args:
            bank: The SoundBank to convert.
            name: Bank name for INAM (default: the bank's name).
            creation_date: Text for ICRD (default: the current local time).
            software: Text for ISFT (default: "banksf2 <version>").
        """
        self.bank = bank
        self.name = name or bank.name
        self.creation_date = creation_date
        self.software = software or f"banksf2 {VERSION}"

        # Filled by build()
        self.sample_table = None
        self.hydra = None

    def build(self):
        """
        Builds the complete chunk tree.

        Returns:
            The RiffFile root chunk.
        """
        # Sample positions are needed by the shdr records
        self.sample_table = build_sample_table(self.bank)
        self.hydra = build_hydra(self.bank, self.sample_table.headers)

        root = RiffFile(b"sfbk")
        root.add_child(self._build_info_chunk())
        root.add_child(self._build_sdta_chunk())
        root.add_child(self._build_pdta_chunk())
        return root

    def save_to_mem(self):
        """
        Returns the complete SF2 file as bytes.
        """
        return self.build().to_bytes()

    def save(self, output_sf):
        """
        Writes the SF2 file to `output_sf`.
        """
        data = self.save_to_mem()
        with open(output_sf, "wb") as f:
            f.write(data)
        return len(data)

    def _build_info_chunk(self):
        """
        Builds the INFO-list chunk.
        """
        info = ListChunk(b"INFO")

        # Version info (required, first)
        info.add_child(Chunk(b"ifil", struct.pack("<HH", *SF_VERSION)))
        # Sound engine (required, second)
        info.add_child(StringChunk(b"isng", SOUND_ENGINE))
        # Bank name (required, third)
        info.add_child(StringChunk(b"INAM", self.name))

        creation_date = self.creation_date
        if creation_date is None:
            creation_date = time.ctime()
        info.add_child(StringChunk(b"ICRD", creation_date))
        info.add_child(StringChunk(b"ISFT", self.software))
        return info

    def _build_sdta_chunk(self):
        """
        Builds the sdta-list chunk holding the concatenated sample data.
        """
        sdta = ListChunk(b"sdta")
        sdta.add_child(Chunk(b"smpl", self.sample_table.data))
        return sdta

    def _build_pdta_chunk(self):
        """
        Builds the pdta-list (Hydra) chunk.
        """
        pdta = ListChunk(b"pdta")
        for chunk_name in HYDRA_CHUNKS:
            records = getattr(self.hydra, chunk_name)
            pdta.add_child(Chunk(chunk_name.encode("ascii"), pack_records(records)))
        return pdta


def convert_bank(bank, **kwargs):
    """
    Converts a SoundBank to SF2 bytes.
    """
    return SF2Compiler(bank, **kwargs).save_to_mem()

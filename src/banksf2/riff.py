# Copyright (c) 2025 bakajikara
#
# This file is licensed under the MIT License (MIT).
# See the LICENSE file in the project root for the full license text.

"""
RIFF (Resource Interchange File Format) utility functions.
Provides a small chunk tree (plain chunks, LIST chunks and the RIFF root)
that knows its serialized size and writes itself into a preallocated buffer,
plus the helpers to read chunk headers and make RIFF strings.
"""

import struct
from typing import BinaryIO


def read_chunk_header(f: BinaryIO) -> tuple[bytes, int]:
    """
    Reads a RIFF chunk header (ID and size) from a file.

    Args:
        f: The file object to read from.

    Returns:
        A tuple containing the chunk ID (bytes) and chunk size (int).
    """
    chunk_id = f.read(4)
    if len(chunk_id) < 4:
        raise EOFError("Unexpected end of file while reading chunk ID.")

    chunk_size_bytes = f.read(4)
    if len(chunk_size_bytes) < 4:
        raise EOFError("Unexpected end of file while reading chunk size.")

    chunk_size = struct.unpack("<I", chunk_size_bytes)[0]
    return chunk_id, chunk_size


def _check_id(chunk_id: bytes, what: str = "Chunk ID") -> bytes:
    if isinstance(chunk_id, str):
        chunk_id = chunk_id.encode("ascii")
    if len(chunk_id) != 4:
        raise ValueError(f"{what} must be 4 bytes long.")
    return chunk_id


def make_zstr(text: str, encoding: str = "ascii") -> bytes:
    """
    Creates a zero-terminated string compliant with the RIFF specification.
    Adjusts the total byte count to be even by adding one or two null terminators.

    Args:
        text: The string to convert.
        encoding: The encoding (default: "ascii").

    Returns:
        The zero-terminated string as a bytes object.
    """
    encoded = text.encode(encoding, errors="replace")

    # If string length is odd, add one terminator (total even)
    # If string length is even, add two terminators (total even)
    if len(encoded) % 2 == 1:
        return encoded + b"\x00"
    else:
        return encoded + b"\x00\x00"


class Chunk:
    """
    A RIFF chunk holding a byte payload.
    """

    HEADER_SIZE = 8

    def __init__(self, chunk_id, data=b""):
        self.chunk_id = _check_id(chunk_id)
        self.data = bytes(data)

    @property
    def size(self):
        """
        Payload size in bytes, as written in the chunk header.
        """
        return len(self.data)

    def get_size(self):
        """
        Returns the serialized size, including the header and the pad byte
        that follows an odd-sized payload.
        """
        return self.HEADER_SIZE + self.size + (self.size % 2)

    def write(self, buf, offset):
        """
        Writes the chunk into `buf` at `offset`.

        Returns:
            The offset just past the written chunk.
        """
        struct.pack_into("<4sI", buf, offset, self.chunk_id, self.size)
        offset += self.HEADER_SIZE
        offset = self._write_payload(buf, offset)
        if self.size % 2:
            buf[offset] = 0
            offset += 1
        return offset

    def _write_payload(self, buf, offset):
        end = offset + len(self.data)
        buf[offset:end] = self.data
        return end


class StringChunk(Chunk):
    """
    An INFO sub-chunk holding a zero-terminated, even-length string.
    """

    def __init__(self, chunk_id, text):
        super().__init__(chunk_id, make_zstr(text))
        self.text = text


class ListChunk(Chunk):
    """
    A container chunk (LIST by default) whose payload is its form type
    followed by its child chunks.
    """

    CONTAINER_ID = b"LIST"

    def __init__(self, list_type):
        super().__init__(self.CONTAINER_ID)
        self.list_type = _check_id(list_type, "List type ID")
        self.children = []

    def add_child(self, chunk):
        self.children.append(chunk)
        return chunk

    @property
    def size(self):
        return 4 + sum(child.get_size() for child in self.children)

    def _write_payload(self, buf, offset):
        buf[offset:offset + 4] = self.list_type
        offset += 4
        for child in self.children:
            offset = child.write(buf, offset)
        return offset


class RiffFile(ListChunk):
    """
    The RIFF root chunk of a file.
    """

    CONTAINER_ID = b"RIFF"

    def to_bytes(self):
        """
        Serializes the whole tree into a buffer of exactly `get_size()` bytes.
        """
        buf = bytearray(self.get_size())
        written = self.write(buf, 0)
        assert written == len(buf), f"RIFF size mismatch: computed {len(buf)} bytes, wrote {written}"
        return bytes(buf)

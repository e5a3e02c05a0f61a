from typing import NamedTuple
import io
import json
import logging
import pathlib
import struct

from . import jsontype
from .errors import MeshError


_log = logging.getLogger("gltfbin.serialization")


class Bin:
    """the single binary buffer. offset is the current length."""

    def __init__(self) -> None:
        self.stream = io.BytesIO()
        self.offset = 0

    def push(self, data: bytes) -> int:
        offset = self.offset
        self.stream.write(data)
        self.offset += len(data)
        return offset

    def align(self, alignment: int = 4) -> None:
        remainder = self.offset % alignment
        if remainder:
            self.push(b"\0" * (alignment - remainder))

    def getvalue(self) -> bytes:
        return self.stream.getvalue()


class Chunk(NamedTuple):
    chunkType: bytes
    data: bytes


def _pad(data: bytes, fill: bytes) -> bytes:
    remainder = len(data) % 4
    if remainder:
        data += fill * (4 - remainder)
    return data


def _prune(value):
    # glTF does not allow empty arrays, at any level
    if isinstance(value, dict):
        return {
            k: _prune(v)
            for k, v in value.items()
            if not (isinstance(v, list) and not v)
        }
    if isinstance(value, list):
        return [_prune(v) for v in value]
    return value


def dumps(root: jsontype.Root) -> str:
    try:
        return json.dumps(_prune(root), allow_nan=False)
    except ValueError as e:
        # infinite bounds of an empty mesh kept with empty_mesh="keep"
        raise MeshError(f"document is not valid JSON: {e}") from e


def write_chunks(dst: pathlib.Path, *chunks: Chunk) -> int:
    # header size
    #
    # magic: char[4]
    # version: uint
    # byteLength: uint
    byteLength = 12
    for chunk in chunks:
        byteLength += 8 + len(chunk.data)

    with dst.open("wb") as w:
        # little endian binary format
        # magic
        w.write(b"glTF")
        # version
        w.write(struct.pack("<I", 2))
        # fileTotalLength
        w.write(struct.pack("<I", byteLength))

        for chunk in chunks:
            if len(chunk.data) % 4:
                raise ValueError(f"chunk {chunk.chunkType!r} is not 4 byte aligned")
            # chunkDataLength
            w.write(struct.pack("<I", len(chunk.data)))
            # chunkType
            if len(chunk.chunkType) != 4:
                raise ValueError("chunk type must be 4 bytes")
            w.write(chunk.chunkType)
            # chunkData
            w.write(chunk.data)

    return byteLength


def write_glb(dst: pathlib.Path, root: jsontype.Root, blob: bytes) -> int:
    chunks = [Chunk(b"JSON", _pad(dumps(root).encode("utf-8"), b" "))]
    if blob:
        chunks.append(Chunk(b"BIN\0", _pad(blob, b"\0")))
    byteLength = write_chunks(dst, *chunks)
    _log.debug("wrote %s: %d bytes", dst, byteLength)
    return byteLength


def write_gltf(dst: pathlib.Path, root: jsontype.Root, blob: bytes = b"") -> None:
    """
    the binary buffer, if any, goes next to the json as <stem>.bin
    """
    if blob:
        bin_path = dst.with_suffix(".bin")
        bin_path.write_bytes(blob)
        buffers = list(root["buffers"])
        buffers[0] = jsontype.Buffer(buffers[0], uri=bin_path.name)
        root = jsontype.Root(root, buffers=buffers)
    dst.write_text(dumps(root), encoding="utf-8")
    _log.debug("wrote %s", dst)


def is_glb(path: pathlib.Path) -> bool:
    return path.suffix.lower() == ".glb"

"""
KHR_draco_mesh_compression support.

The codec is a black box with two calls, encode(mesh, options) -> bytes and
decode(bytes) -> DecodedMesh. CodecAdapter runs one mesh through a temporary
.drc file: encode, write, read back, decode the same bytes. The decoded side
is what the accessors describe, because draco may reorder and quantize
vertices.
"""
import logging
import os
import pathlib
import tempfile
from typing import Any, Dict, NamedTuple, Optional, Sequence

import DracoPy
import numpy as np

from . import constants
from . import vertex
from .attributes import Bounds, compute_bounds, index_bounds
from .errors import CodecError


_log = logging.getLogger("gltfbin.draco")

# draco::GeometryAttribute::Type
DRACO_POSITION = 0
DRACO_NORMAL = 1
DRACO_TEX_COORD = 3

_SEMANTICS = {
    DRACO_POSITION: constants.POSITION,
    DRACO_NORMAL: constants.NORMAL,
    DRACO_TEX_COORD: constants.TEXCOORD_0,
}


class DracoOptions(NamedTuple):
    compression_level: int = 10
    position_bits: int = 11
    normal_bits: int = 11
    texcoord_bits: int = 11


class DecodedMesh(NamedTuple):
    points: Sequence[Sequence[float]]
    faces: Sequence[Sequence[int]]
    normals: Sequence[Sequence[float]]
    tex_coord: Sequence[Sequence[float]]
    # semantic -> unique id in the stream, None for the fixed 0/1/2 layout
    attribute_ids: Optional[Dict[str, int]] = None


class DracoStats(NamedTuple):
    positions: Bounds
    indices: Bounds
    normals: Bounds
    tex_coords: Bounds
    attribute_ids: Dict[str, int]


def _rows(array: Optional[Any], dimension: int) -> np.ndarray:
    if array is None:
        return np.zeros((0, dimension), dtype=np.float32)
    return np.asarray(array).reshape(-1, dimension)


def attribute_field(attribute, name: str):
    if isinstance(attribute, dict):
        return attribute[name]
    return getattr(attribute, name)


def attribute_ids(attributes) -> Dict[str, int]:
    """decoded draco attributes -> {semantic: unique_id}"""
    ids: Dict[str, int] = {}
    for attribute in attributes or []:
        semantic = _SEMANTICS.get(int(attribute_field(attribute, "attribute_type")))
        if semantic is not None and semantic not in ids:
            ids[semantic] = int(attribute_field(attribute, "unique_id"))
    return ids


class DracoPyCodec:
    """DracoPy binding. draco takes a single quantization depth."""

    def encode(self, mesh: vertex.Mesh, options: DracoOptions) -> bytes:
        if not (options.position_bits == options.normal_bits == options.texcoord_bits):
            _log.warning(
                "draco uses one quantization depth, using position bits %d",
                options.position_bits,
            )
        # DracoPy wants float64 for normals and uvs
        kwargs = {}
        if len(mesh.normals):
            kwargs["normals"] = np.asarray(
                mesh.normals, dtype=np.float64
            ).reshape(-1, 3)
        if len(mesh.tex_coords):
            kwargs["tex_coord"] = np.asarray(
                mesh.tex_coords, dtype=np.float64
            ).reshape(-1, 2)
        return DracoPy.encode(
            np.asarray(mesh.vertices, dtype=np.float32).reshape(-1, 3),
            np.asarray(mesh.faces, dtype=np.uint32).reshape(-1, 3),
            quantization_bits=options.position_bits,
            compression_level=options.compression_level,
            **kwargs,
        )

    def decode(self, data: bytes) -> DecodedMesh:
        mesh = DracoPy.decode(data)
        return DecodedMesh(
            points=_rows(mesh.points, 3),
            faces=_rows(mesh.faces, 3),
            normals=_rows(getattr(mesh, "normals", None), 3),
            tex_coord=_rows(getattr(mesh, "tex_coord", None), 2),
            attribute_ids=attribute_ids(getattr(mesh, "attributes", None)),
        )


def decoded_stats(decoded: DecodedMesh) -> DracoStats:
    positions = compute_bounds(decoded.points, 3)
    ids = decoded.attribute_ids
    if ids is None:
        ids = dict(constants.DRACO_ATTRIBUTE_IDS)
    return DracoStats(
        positions=positions,
        # index count, bounds span the vertex table
        indices=index_bounds(len(decoded.faces) * 3, positions.count),
        normals=compute_bounds(decoded.normals, 3),
        tex_coords=compute_bounds(decoded.tex_coord, 2),
        attribute_ids=ids,
    )


class CodecAdapter:
    def __init__(self, codec=None, tmp_dir: Optional[pathlib.Path] = None) -> None:
        self.codec = codec if codec is not None else DracoPyCodec()
        self.tmp_dir = tmp_dir

    def compress(self, mesh: vertex.Mesh, options: DracoOptions):
        """
        returns (compressed bytes, DracoStats)

        the temporary file is removed on every exit path.
        """
        fd, name = tempfile.mkstemp(suffix=".drc", dir=self.tmp_dir)
        os.close(fd)
        path = pathlib.Path(name)
        try:
            try:
                encoded = self.codec.encode(mesh, options)
            except Exception as e:
                raise CodecError(f"draco encode failed: {e}") from e
            path.write_bytes(encoded)

            data = path.read_bytes()

            # decompress the file, not the in-memory copy
            try:
                decoded = self.codec.decode(path.read_bytes())
            except Exception as e:
                raise CodecError(f"draco decode failed: {e}") from e
        finally:
            path.unlink(missing_ok=True)

        stats = decoded_stats(decoded)
        _log.debug(
            "draco: %d bytes, %d vertices, %d indices",
            len(data),
            stats.positions.count,
            stats.indices.count,
        )
        return data, stats

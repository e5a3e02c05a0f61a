"""
packs geometry streams into little endian bytes.

positions are narrowed to float32 and the bounds are taken from the narrowed
values, so accessor min/max always match what is stored.
"""
import ctypes
import math
from typing import Iterable, List, NamedTuple, Sequence

from . import vertex


class Bounds(NamedTuple):
    count: int
    min: List[float]
    max: List[float]


class Attribute(NamedTuple):
    data: bytes
    bounds: Bounds


def compute_bounds(rows: Iterable[Sequence[float]], dimension: int) -> Bounds:
    # an empty stream keeps the seeds: min = +inf, max = -inf
    lo = [math.inf] * dimension
    hi = [-math.inf] * dimension
    count = 0
    for row in rows:
        for i in range(dimension):
            value = float(row[i])
            if value < lo[i]:
                lo[i] = value
            if value > hi[i]:
                hi[i] = value
        count += 1
    return Bounds(count, lo, hi)


def index_bounds(count: int, vertex_count: int) -> Bounds:
    # index range of the vertex table, not the referenced indices
    return Bounds(count, [0], [vertex_count - 1])


def _pack(struct_type, rows: Sequence[Sequence[float]]) -> ctypes.Array:
    array = (struct_type * len(rows))()
    for i, row in enumerate(rows):
        array[i] = struct_type(*row)
    return array


def _encode_floats(struct_type, rows: Sequence[Sequence[float]]) -> Attribute:
    array = _pack(struct_type, rows)
    names = [name for name, _ in struct_type._fields_]
    bounds = compute_bounds(
        ([getattr(item, name) for name in names] for item in array), len(names)
    )
    return Attribute(bytes(array), bounds)


def encode_positions(vertices: Sequence[vertex.Point]) -> Attribute:
    return _encode_floats(vertex.Float3, vertices)


def encode_normals(normals: Sequence[vertex.Point]) -> Attribute:
    return _encode_floats(vertex.Float3, normals)


def encode_tex_coords(tex_coords: Sequence[vertex.UV]) -> Attribute:
    """the v channel must already be flipped"""
    return _encode_floats(vertex.Float2, tex_coords)


def encode_indices(faces: Iterable[vertex.Face], vertex_count: int) -> Attribute:
    flat: List[int] = []
    for triangle in vertex.triangulate(faces):
        flat.extend(triangle)
    array = (vertex.UInt32 * len(flat))(*flat)
    return Attribute(bytes(array), index_bounds(len(flat), vertex_count))

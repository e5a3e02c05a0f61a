import ctypes
from typing import Any, Hashable, Iterable, Iterator, List, NamedTuple, Optional, Sequence, Tuple
import mathutils

from .errors import MeshError


Point = Tuple[float, float, float]
UV = Tuple[float, float]
Face = Tuple[int, ...]  # triangle (a, b, c) or quad (a, b, c, d)


class Float2(ctypes.LittleEndianStructure):
    _fields_ = [
        ("x", ctypes.c_float),
        ("y", ctypes.c_float),
    ]

    def __str__(self) -> str:
        return f"({self.x},{self.y})"


class Float3(ctypes.LittleEndianStructure):
    _fields_ = [
        ("x", ctypes.c_float),
        ("y", ctypes.c_float),
        ("z", ctypes.c_float),
    ]

    def __str__(self) -> str:
        return f"({self.x},{self.y},{self.z})"


UInt32 = ctypes.c_uint32.__ctype_le__


class Mesh(NamedTuple):
    vertices: Sequence[Point]
    normals: Sequence[Point]
    tex_coords: Sequence[UV]
    faces: Sequence[Face]


class Material(NamedTuple):
    name: str = ""
    color: Tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0)
    metallic: float = 0.0
    roughness: float = 1.0
    double_sided: bool = False


class SanitizedObject(NamedTuple):
    meshes: Sequence[Mesh]
    material: Any  # handed to the material converter untouched
    material_id: Hashable
    name: Optional[str] = None


def triangulate(faces: Iterable[Face]) -> Iterator[Tuple[int, int, int]]:
    """
    (a, b, c) -> (a, b, c)
    (a, b, c, d) -> (a, b, c), (a, c, d)

    a quad whose last two corners coincide is a triangle.
    """
    for face in faces:
        if len(face) == 3:
            yield (face[0], face[1], face[2])
        elif len(face) == 4:
            a, b, c, d = face
            yield (a, b, c)
            if c != d:
                yield (a, c, d)
        else:
            raise MeshError(f"face must have 3 or 4 corners: {face}")


def flip_tex_coords(tex_coords: Iterable[UV]) -> List[UV]:
    return [(u, 1.0 - v) for u, v in tex_coords]


def transform_mesh(mesh: Mesh, matrix: mathutils.Matrix) -> Mesh:
    rotation = matrix.to_3x3()
    return mesh._replace(
        vertices=[tuple(matrix @ mathutils.Vector(v)) for v in mesh.vertices],
        normals=[tuple(rotation @ mathutils.Vector(n)) for n in mesh.normals],
    )


def prepare_mesh(mesh: Mesh, matrix: Optional[mathutils.Matrix] = None) -> Mesh:
    """
    returns a copy ready for encoding. the input is left untouched.

    * optional axis conversion
    * v = 1 - v
    * quads split into triangles
    """
    if matrix is not None:
        mesh = transform_mesh(mesh, matrix)
    return mesh._replace(
        tex_coords=flip_tex_coords(mesh.tex_coords),
        faces=list(triangulate(mesh.faces)),
    )

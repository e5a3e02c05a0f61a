"""
glTF 2.0 exporter for already extracted meshes.

    root, blob = gltfbin.build(objects, ExportOptions(use_binary=True))
    gltfbin.export(pathlib.Path("out.glb"), objects)
"""
import pathlib
from typing import Iterable, Tuple

from . import jsontype
from .document import DocumentBuilder
from .draco import CodecAdapter, DracoOptions, DracoPyCodec
from .errors import CodecError, ExportError, MeshError, OptionsError
from .materials import MaterialCache, material_to_gltf
from .options import ExportOptions
from .serialization import is_glb, write_glb, write_gltf
from .vertex import Material, Mesh, SanitizedObject


def build(
    objects: Iterable[SanitizedObject], options: ExportOptions = ExportOptions()
) -> Tuple[jsontype.Root, bytes]:
    return DocumentBuilder(options).build(objects)


def export(
    dst: pathlib.Path,
    objects: Iterable[SanitizedObject],
    options: ExportOptions = ExportOptions(),
) -> None:
    dst = pathlib.Path(dst)
    if is_glb(dst):
        # glb always carries a single BIN chunk
        options = options._replace(use_binary=True)
        root, blob = build(objects, options)
        write_glb(dst, root, blob)
    else:
        root, blob = build(objects, options)
        write_gltf(dst, root, blob)


__all__ = [
    "build",
    "export",
    "CodecAdapter",
    "CodecError",
    "DocumentBuilder",
    "DracoOptions",
    "DracoPyCodec",
    "ExportError",
    "ExportOptions",
    "Material",
    "MaterialCache",
    "Mesh",
    "MeshError",
    "OptionsError",
    "SanitizedObject",
    "material_to_gltf",
]

import logging
from typing import Callable, Dict, Hashable

from . import jsontype
from . import vertex


_log = logging.getLogger("gltfbin.materials")


def material_to_gltf(material: vertex.Material) -> jsontype.Material:
    gltf = jsontype.Material(
        pbrMetallicRoughness=jsontype.PbrMetallicRoughness(
            baseColorFactor=list(material.color),
            metallicFactor=material.metallic,
            roughnessFactor=material.roughness,
        ),
    )
    if material.name:
        gltf["name"] = material.name
    if material.double_sided:
        gltf["doubleSided"] = True
    return gltf


class MaterialCache:
    """
    material_id -> index into root["materials"].

    the first resolve() of an id builds the material, later calls return the
    same index. not thread safe.
    """

    def __init__(
        self,
        root: jsontype.Root,
        converter: Callable[..., jsontype.Material] = material_to_gltf,
    ) -> None:
        self.root = root
        self.converter = converter
        self.material_map: Dict[Hashable, int] = {}

    def resolve(self, material, material_id: Hashable) -> int:
        if material_id in self.material_map:
            return self.material_map[material_id]

        index = len(self.root["materials"])
        self.root["materials"].append(self.converter(material))
        self.material_map[material_id] = index
        _log.debug("material %r -> %d", material_id, index)
        return index

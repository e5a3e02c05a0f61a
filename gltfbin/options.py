from typing import Any, Mapping, NamedTuple

from .draco import DracoOptions
from .errors import OptionsError


EMPTY_MESH_POLICIES = ("skip", "keep", "error")

# names used by the original plugin settings
_CAMEL_CASE = {
    "useDracoCompression": "use_draco_compression",
    "dracoCompressionLevel": "draco_compression_level",
    "dracoQuantizationBits": "draco_quantization_bits",
    "useBinary": "use_binary",
    "mapRhinoZToGltfY": "map_z_to_y",
    "emptyMesh": "empty_mesh",
    "dracoFallback": "draco_fallback",
}


class ExportOptions(NamedTuple):
    use_draco_compression: bool = False
    draco_compression_level: int = 10
    draco_quantization_bits: int = 11
    # one blob (buffer 0) or one base64 buffer per attribute
    use_binary: bool = True
    map_z_to_y: bool = True
    # what to do with a mesh without vertices: skip | keep | error.
    # "keep" builds the graph but its infinite bounds cannot be serialized
    empty_mesh: str = "skip"
    # encode uncompressed when the codec fails
    draco_fallback: bool = False

    @staticmethod
    def from_dict(values: Mapping[str, Any]) -> "ExportOptions":
        kwargs = {}
        for key, value in values.items():
            name = _CAMEL_CASE.get(key, key)
            if name not in ExportOptions._fields:
                raise OptionsError(f"unknown option: {key}")
            kwargs[name] = value
        return ExportOptions(**kwargs).validate()

    def validate(self) -> "ExportOptions":
        if self.empty_mesh not in EMPTY_MESH_POLICIES:
            raise OptionsError(
                f"empty_mesh must be one of {EMPTY_MESH_POLICIES}: {self.empty_mesh!r}"
            )
        if not 0 <= self.draco_compression_level <= 10:
            raise OptionsError(
                f"draco_compression_level out of range 0..10: {self.draco_compression_level}"
            )
        if not 1 <= self.draco_quantization_bits <= 30:
            raise OptionsError(
                f"draco_quantization_bits out of range 1..30: {self.draco_quantization_bits}"
            )
        return self

    def draco_options(self) -> DracoOptions:
        bits = self.draco_quantization_bits
        return DracoOptions(
            compression_level=self.draco_compression_level,
            position_bits=bits,
            normal_bits=bits,
            texcoord_bits=bits,
        )

import logging
from typing import Callable, Iterable, Optional, Tuple

from . import constants
from . import jsontype
from . import vertex
from .draco import CodecAdapter
from .materials import MaterialCache, material_to_gltf
from .objects import ObjectEncoder
from .options import ExportOptions
from .serialization import Bin
from .sinks import create_sink


_log = logging.getLogger("gltfbin.document")

GENERATOR = "gltfbin"


class DocumentBuilder:
    """
    owns the glTF tables, the binary buffer and the material cache for one
    conversion pass. objects are encoded strictly in input order.
    """

    def __init__(
        self,
        options: ExportOptions = ExportOptions(),
        *,
        material_converter: Callable[..., jsontype.Material] = material_to_gltf,
        codec: Optional[CodecAdapter] = None,
    ) -> None:
        self.options = options.validate()
        self.bin = Bin()
        self.root = jsontype.Root(
            asset=jsontype.Asset(version="2.0", generator=GENERATOR),
            scene=0,
            scenes=[jsontype.Scene(nodes=[])],
            nodes=[],
            meshes=[],
            materials=[],
            accessors=[],
            bufferViews=[],
            buffers=[],
            samplers=[
                jsontype.Sampler(
                    magFilter=constants.LINEAR,
                    minFilter=constants.LINEAR,
                    wrapS=constants.REPEAT,
                    wrapT=constants.REPEAT,
                )
            ],
            extensionsUsed=[],
            extensionsRequired=[],
        )
        if self.options.use_draco_compression:
            self.root["extensionsUsed"].append(constants.DRACO_EXTENSION)
            self.root["extensionsRequired"].append(constants.DRACO_EXTENSION)
            if codec is None:
                codec = CodecAdapter()

        self.materials = MaterialCache(self.root, material_converter)
        self.sink = create_sink(self.root, self.bin, self.options.use_binary)
        self.encoder = ObjectEncoder(
            self.options, self.root, self.sink, self.materials, codec
        )
        self.built = False

    def build(
        self, objects: Iterable[vertex.SanitizedObject]
    ) -> Tuple[jsontype.Root, bytes]:
        if self.built:
            raise RuntimeError("DocumentBuilder.build can only run once")
        self.built = True

        count = 0
        for obj in objects:
            self.encoder.encode(obj)
            count += 1

        # buffer 0 covers the whole blob, appended once at the end
        self.sink.finalize()

        _log.info(
            "%d objects -> %d nodes, %d materials, %d bytes binary",
            count,
            len(self.root["nodes"]),
            len(self.root["materials"]),
            self.bin.offset,
        )
        return self.root, self.bin.getvalue()

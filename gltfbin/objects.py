import logging
from typing import Dict, List, Optional

from . import attributes
from . import constants
from . import jsontype
from . import vertex
from .draco import CodecAdapter
from .errors import CodecError, MeshError
from .materials import MaterialCache
from .options import ExportOptions
from .sinks import AttributeSink


_log = logging.getLogger("gltfbin.objects")


class ObjectEncoder:
    """
    one SanitizedObject -> one mesh (a primitive per constituent mesh),
    one node, appended to scene 0.

    the root, the sink and the material cache belong to the DocumentBuilder.
    """

    def __init__(
        self,
        options: ExportOptions,
        root: jsontype.Root,
        sink: AttributeSink,
        materials: MaterialCache,
        codec: Optional[CodecAdapter] = None,
    ) -> None:
        self.options = options
        self.root = root
        self.sink = sink
        self.materials = materials
        self.codec = codec
        self.matrix = constants.Z_UP_TO_Y_UP if options.map_z_to_y else None

    def push_accessor(
        self,
        bounds: attributes.Bounds,
        type: str,
        componentType: int,
        bufferView: Optional[int] = None,
    ) -> int:
        accessor = jsontype.Accessor(
            componentType=componentType,
            type=type,
            count=bounds.count,
            min=bounds.min,
            max=bounds.max,
            byteOffset=0,
        )
        if bufferView is not None:
            accessor["bufferView"] = bufferView
        index = len(self.root["accessors"])
        self.root["accessors"].append(accessor)
        return index

    def encode(self, obj: vertex.SanitizedObject) -> Optional[int]:
        """returns the node index, None if nothing was emitted"""
        material = self.materials.resolve(obj.material, obj.material_id)

        primitives: List[jsontype.Primitive] = []
        for mesh in obj.meshes:
            if not len(mesh.vertices):
                if self.options.empty_mesh == "error":
                    raise MeshError(f"mesh without vertices in {obj.name!r}")
                if self.options.empty_mesh == "skip":
                    _log.warning("skip mesh without vertices in %r", obj.name)
                    continue

            mesh = vertex.prepare_mesh(mesh, self.matrix)
            if self.options.use_draco_compression:
                primitive = self.push_draco_primitive(mesh, material)
            else:
                primitive = self.push_primitive(mesh, material)
            primitives.append(primitive)

        if not primitives:
            _log.warning("skip object %r: no mesh to export", obj.name)
            return None

        mesh_index = len(self.root["meshes"])
        self.root["meshes"].append(jsontype.Mesh(primitives=primitives))

        node = jsontype.Node(mesh=mesh_index)
        if obj.name:
            node["name"] = obj.name
        node_index = len(self.root["nodes"])
        self.root["nodes"].append(node)

        self.root["scenes"][self.root["scene"]]["nodes"].append(node_index)
        _log.debug(
            "object %r: mesh %d, %d primitives", obj.name, mesh_index, len(primitives)
        )
        return node_index

    def push_primitive(self, mesh: vertex.Mesh, material: int) -> jsontype.Primitive:
        # write order: vertices, indices, normals, tex_coords
        vertex_count = len(mesh.vertices)
        streams = [
            (
                constants.POSITION,
                attributes.encode_positions(mesh.vertices),
                constants.VEC3,
            ),
            (
                None,
                attributes.encode_indices(mesh.faces, vertex_count),
                constants.SCALAR,
            ),
            (
                constants.NORMAL,
                attributes.encode_normals(mesh.normals),
                constants.VEC3,
            ),
            (
                constants.TEXCOORD_0,
                attributes.encode_tex_coords(mesh.tex_coords),
                constants.VEC2,
            ),
        ]

        views = []
        for semantic, attribute, _ in streams:
            if self._omit(semantic, attribute.bounds, vertex_count):
                views.append(None)
                continue
            target = (
                constants.ARRAY_BUFFER
                if semantic
                else constants.ELEMENT_ARRAY_BUFFER
            )
            views.append(self.sink.write(attribute.data, target))

        accessors: Dict[str, int] = {}
        indices = -1
        for (semantic, attribute, accessor_type), view in zip(streams, views):
            if view is None:
                continue
            if semantic is None:
                indices = self.push_accessor(
                    attribute.bounds, accessor_type, constants.UNSIGNED_INT, view
                )
            else:
                accessors[semantic] = self.push_accessor(
                    attribute.bounds, accessor_type, constants.FLOAT, view
                )

        return jsontype.Primitive(
            attributes=accessors,
            indices=indices,
            material=material,
        )

    def push_draco_primitive(
        self, mesh: vertex.Mesh, material: int
    ) -> jsontype.Primitive:
        try:
            data, stats = self.codec.compress(mesh, self.options.draco_options())
        except CodecError:
            if not self.options.draco_fallback:
                raise
            _log.warning("draco failed, mesh is written uncompressed", exc_info=True)
            return self.push_primitive(mesh, material)

        ids = stats.attribute_ids
        if constants.POSITION not in ids:
            raise CodecError("compressed stream has no position attribute")

        view = self.sink.write(data)

        vertex_count = stats.positions.count
        accessors: Dict[str, int] = {}
        accessors[constants.POSITION] = self.push_accessor(
            stats.positions, constants.VEC3, constants.FLOAT
        )
        indices = self.push_accessor(
            stats.indices, constants.SCALAR, constants.UNSIGNED_INT
        )
        if constants.NORMAL in ids and not self._omit(
            constants.NORMAL, stats.normals, vertex_count
        ):
            accessors[constants.NORMAL] = self.push_accessor(
                stats.normals, constants.VEC3, constants.FLOAT
            )
        if constants.TEXCOORD_0 in ids and not self._omit(
            constants.TEXCOORD_0, stats.tex_coords, vertex_count
        ):
            accessors[constants.TEXCOORD_0] = self.push_accessor(
                stats.tex_coords, constants.VEC2, constants.FLOAT
            )

        return jsontype.Primitive(
            attributes=accessors,
            indices=indices,
            material=material,
            extensions={
                constants.DRACO_EXTENSION: jsontype.DracoExtension(
                    bufferView=view,
                    attributes={
                        semantic: ids[semantic] for semantic in accessors
                    },
                )
            },
        )

    @staticmethod
    def _omit(semantic: Optional[str], bounds: attributes.Bounds, vertex_count: int):
        # an absent normal or uv stream on a real mesh
        return (
            semantic in (constants.NORMAL, constants.TEXCOORD_0)
            and bounds.count == 0
            and vertex_count > 0
        )

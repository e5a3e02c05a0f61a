from typing import TypedDict, List, Dict


class Asset(TypedDict):
    version: str
    generator: str


class _BufferBase(TypedDict):
    byteLength: int


class Buffer(_BufferBase, total=False):
    uri: str  # data uri in text mode, absent for the binary chunk


class _BufferViewBase(TypedDict):
    buffer: int
    byteOffset: int
    byteLength: int


class BufferView(_BufferViewBase, total=False):
    target: int  # ARRAY_BUFFER | ELEMENT_ARRAY_BUFFER


class _AccessorBase(TypedDict):
    componentType: int  # FLOAT | UNSIGNED_INT
    type: str  # SCALAR | VEC2 | VEC3
    count: int
    min: List[float]
    max: List[float]
    byteOffset: int


class Accessor(_AccessorBase, total=False):
    bufferView: int  # absent when the data lives in a compressed stream


class DracoExtension(TypedDict):
    bufferView: int
    attributes: Dict[str, int]


class _PrimitiveBase(TypedDict):
    attributes: Dict[str, int]
    indices: int
    material: int


class Primitive(_PrimitiveBase, total=False):
    extensions: Dict[str, DracoExtension]


class Mesh(TypedDict):
    primitives: List[Primitive]


class _NodeBase(TypedDict):
    mesh: int


class Node(_NodeBase, total=False):
    name: str


class Scene(TypedDict):
    nodes: List[int]


class Sampler(TypedDict):
    magFilter: int
    minFilter: int
    wrapS: int
    wrapT: int


class PbrMetallicRoughness(TypedDict):
    baseColorFactor: List[float]
    metallicFactor: float
    roughnessFactor: float


class _MaterialBase(TypedDict):
    pbrMetallicRoughness: PbrMetallicRoughness


class Material(_MaterialBase, total=False):
    name: str
    doubleSided: bool


class Root(TypedDict):
    asset: Asset
    scene: int
    scenes: List[Scene]
    nodes: List[Node]
    meshes: List[Mesh]
    materials: List[Material]
    accessors: List[Accessor]
    bufferViews: List[BufferView]
    buffers: List[Buffer]
    samplers: List[Sampler]
    extensionsUsed: List[str]
    extensionsRequired: List[str]

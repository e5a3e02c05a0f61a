import pytest

from gltfbin import draco
from gltfbin.vertex import Mesh, Material, SanitizedObject


class FakeCodec:
    """stands in for DracoPy. decode returns what was last encoded."""

    def __init__(
        self, fail_encode=False, fail_decode=False, fail_calls=(), attribute_ids=None
    ):
        self.fail_encode = fail_encode
        self.fail_decode = fail_decode
        # 1-based encode calls that fail
        self.fail_calls = fail_calls
        self.attribute_ids = attribute_ids
        self.calls = 0
        self.encoded = []
        self.decoded = []
        self.options = []

    def encode(self, mesh, options):
        self.calls += 1
        if self.fail_encode or self.calls in self.fail_calls:
            raise RuntimeError("encode exploded")
        self.mesh = mesh
        self.options.append(options)
        data = b"DRACO" + bytes([len(mesh.vertices)])
        self.encoded.append(data)
        return data

    def decode(self, data):
        self.decoded.append(data)
        if self.fail_decode:
            raise RuntimeError("decode exploded")
        return draco.DecodedMesh(
            points=self.mesh.vertices,
            faces=self.mesh.faces,
            normals=self.mesh.normals,
            tex_coord=self.mesh.tex_coords,
            attribute_ids=self.attribute_ids,
        )


@pytest.fixture
def fake_codec():
    return FakeCodec()


@pytest.fixture
def triangle():
    return Mesh(
        vertices=[(0.0, 0.0, 0.0), (1.0, 2.0, 3.0), (-1.0, 5.0, 0.0)],
        normals=[(0.0, 0.0, 1.0), (0.0, 0.0, 1.0), (0.0, 0.0, 1.0)],
        tex_coords=[(0.0, 0.0), (1.0, 0.25), (0.5, 1.0)],
        faces=[(0, 1, 2)],
    )


@pytest.fixture
def quad():
    return Mesh(
        vertices=[(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0), (0.0, 1.0, 0.0)],
        normals=[(0.0, 0.0, 1.0)] * 4,
        tex_coords=[(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)],
        faces=[(0, 1, 2, 3)],
    )


@pytest.fixture
def red():
    return Material(name="red", color=(1.0, 0.0, 0.0, 1.0))


@pytest.fixture
def make_object(red):
    def make(meshes, name=None, material=red, material_id="red"):
        return SanitizedObject(
            meshes=meshes, material=material, material_id=material_id, name=name
        )

    return make

import mathutils


DRACO_EXTENSION = "KHR_draco_mesh_compression"

POSITION = "POSITION"
NORMAL = "NORMAL"
TEXCOORD_0 = "TEXCOORD_0"

# attribute ids for codecs that do not report their own
DRACO_ATTRIBUTE_IDS = {
    POSITION: 0,
    NORMAL: 1,
    TEXCOORD_0: 2,
}

DATA_URI_PREFIX = "data:application/octet-stream;base64,"

# accessor.componentType
UNSIGNED_INT = 5125
FLOAT = 5126

# accessor.type
SCALAR = "SCALAR"
VEC2 = "VEC2"
VEC3 = "VEC3"

# bufferView.target
ARRAY_BUFFER = 34962
ELEMENT_ARRAY_BUFFER = 34963

# sampler
LINEAR = 9729
REPEAT = 10497

# (x, y, z) -> (x, z, -y)
Z_UP_TO_Y_UP = mathutils.Matrix(
    [
        [1.0000, 0.0000, 0.0000, 0.0000],
        [0.0000, 0.0000, 1.0000, 0.0000],
        [0.0000, -1.0000, 0.0000, 0.0000],
        [0.0000, 0.0000, 0.0000, 1.0000],
    ],
)

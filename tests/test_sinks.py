import base64

from gltfbin import constants
from gltfbin import sinks
from gltfbin.serialization import Bin


def make_root():
    return {"buffers": [], "bufferViews": []}


def test_binary_sink_without_writes_adds_no_buffer():
    root = make_root()
    sink = sinks.create_sink(root, Bin(), use_binary=True)

    sink.finalize()

    assert root["buffers"] == []


def test_binary_sink_aligns_views():
    root = make_root()
    bin = Bin()
    sink = sinks.create_sink(root, bin, use_binary=True)

    assert sink.write(b"abc") == 0
    assert sink.write(b"defg", constants.ARRAY_BUFFER) == 1
    sink.finalize()

    assert root["bufferViews"] == [
        {"buffer": 0, "byteOffset": 0, "byteLength": 3},
        {
            "buffer": 0,
            "byteOffset": 4,
            "byteLength": 4,
            "target": constants.ARRAY_BUFFER,
        },
    ]
    assert bin.getvalue() == b"abc\0defg"
    assert root["buffers"] == [{"byteLength": 8}]


def test_text_sink_buffer_per_write():
    root = make_root()
    sink = sinks.create_sink(root, Bin(), use_binary=False)

    sink.write(b"abc")
    sink.write(b"defg")
    sink.finalize()

    assert [v["buffer"] for v in root["bufferViews"]] == [0, 1]
    uri = root["buffers"][1]["uri"]
    assert base64.b64decode(uri[len(constants.DATA_URI_PREFIX) :]) == b"defg"

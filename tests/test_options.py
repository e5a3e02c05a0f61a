import pytest

from gltfbin.errors import OptionsError
from gltfbin.options import ExportOptions


def test_defaults():
    options = ExportOptions()
    assert not options.use_draco_compression
    assert options.use_binary
    assert options.map_z_to_y
    assert options.empty_mesh == "skip"


def test_from_dict_accepts_plugin_names():
    options = ExportOptions.from_dict(
        {
            "useDracoCompression": True,
            "dracoCompressionLevel": 4,
            "dracoQuantizationBits": 12,
            "useBinary": False,
            "mapRhinoZToGltfY": False,
        }
    )

    assert options == ExportOptions(
        use_draco_compression=True,
        draco_compression_level=4,
        draco_quantization_bits=12,
        use_binary=False,
        map_z_to_y=False,
    )


def test_from_dict_accepts_field_names():
    options = ExportOptions.from_dict({"empty_mesh": "keep", "draco_fallback": True})
    assert options.empty_mesh == "keep"
    assert options.draco_fallback


def test_unknown_option():
    with pytest.raises(OptionsError):
        ExportOptions.from_dict({"useTextures": True})


@pytest.mark.parametrize(
    "values",
    [
        {"empty_mesh": "ignore"},
        {"dracoCompressionLevel": 11},
        {"dracoCompressionLevel": -1},
        {"dracoQuantizationBits": 0},
        {"dracoQuantizationBits": 31},
    ],
)
def test_invalid_values(values):
    with pytest.raises(OptionsError):
        ExportOptions.from_dict(values)


def test_draco_options_share_one_depth():
    draco = ExportOptions(
        draco_compression_level=7, draco_quantization_bits=14
    ).draco_options()

    assert draco.compression_level == 7
    assert draco.position_bits == draco.normal_bits == draco.texcoord_bits == 14

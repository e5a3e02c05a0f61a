from gltfbin.materials import MaterialCache, material_to_gltf
from gltfbin.vertex import Material


def make_root():
    return {"materials": []}


def test_same_id_is_built_once(red):
    root = make_root()
    cache = MaterialCache(root)

    assert cache.resolve(red, "red") == 0
    assert cache.resolve(red, "red") == 0
    assert len(root["materials"]) == 1


def test_distinct_ids_in_first_seen_order(red):
    root = make_root()
    cache = MaterialCache(root)
    blue = Material(name="blue", color=(0.0, 0.0, 1.0, 1.0))

    assert cache.resolve(blue, "blue") == 0
    assert cache.resolve(red, "red") == 1
    assert cache.resolve(blue, "blue") == 0
    assert [m["name"] for m in root["materials"]] == ["blue", "red"]


def test_cache_is_keyed_by_id_not_by_material(red):
    root = make_root()
    cache = MaterialCache(root)

    assert cache.resolve(red, "a") == 0
    assert cache.resolve(red, "b") == 1


def test_custom_converter_runs_once_per_id():
    calls = []

    def converter(material):
        calls.append(material)
        return {"pbrMetallicRoughness": {}, "name": material}

    root = make_root()
    cache = MaterialCache(root, converter)
    cache.resolve("steel", 1)
    cache.resolve("steel", 1)
    cache.resolve("wood", 2)

    assert calls == ["steel", "wood"]
    assert root["materials"][1]["name"] == "wood"


def test_material_to_gltf():
    gltf = material_to_gltf(
        Material(
            name="glass",
            color=(0.5, 0.5, 0.5, 0.25),
            metallic=0.5,
            roughness=0.125,
            double_sided=True,
        )
    )

    assert gltf == {
        "name": "glass",
        "doubleSided": True,
        "pbrMetallicRoughness": {
            "baseColorFactor": [0.5, 0.5, 0.5, 0.25],
            "metallicFactor": 0.5,
            "roughnessFactor": 0.125,
        },
    }


def test_unnamed_material_has_no_name():
    assert "name" not in material_to_gltf(Material())

import json
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest

from pygltfscene import (
    GltfParser, IndexOutOfRange, InvalidFieldType, InvalidHierarchy, MalformedDocument,
    MissingRequiredField, ParserSettings, UnimplementedFeature, UnknownEnumValue, parse,
    parse_document,
)
from pygltfscene.types import AccessorType, CameraType, ComponentType, PrimitiveMode, Vector3

ARENAS = ("buffers", "buffer_views", "images", "samplers", "textures", "materials",
          "accessors", "meshes", "cameras", "nodes", "scenes")


def triangle_document():
    return {
        "asset": {"version": "2.0", "generator": "hand written"},
        "extensionsUsed": ["KHR_materials_unlit", "EXT_custom"],
        "extensionsRequired": ["KHR_materials_unlit"],
        "buffers": [{"byteLength": 44, "uri": "triangle.bin"}],
        "bufferViews": [
            {"buffer": 0, "byteOffset": 0, "byteLength": 6, "target": 34963},
            {"buffer": 0, "byteOffset": 8, "byteLength": 36, "target": 34962},
        ],
        "images": [{"uri": "tex.png"}],
        "samplers": [{"magFilter": 9729}],
        "textures": [{"sampler": 0, "source": 0}],
        "materials": [{"name": "red", "pbrMetallicRoughness": {"baseColorTexture": {"index": 0}}}],
        "accessors": [
            {"bufferView": 0, "componentType": 5123, "count": 3, "type": "SCALAR"},
            {"bufferView": 1, "componentType": 5126, "count": 3, "type": "VEC3",
             "min": [0, 0, 0], "max": [1, 1, 0]},
        ],
        "meshes": [{"name": "tri", "primitives": [
            {"attributes": {"POSITION": 1}, "indices": 0, "material": 0},
        ]}],
        "cameras": [{"type": "perspective", "perspective": {"yfov": 0.7, "znear": 0.1}}],
        "nodes": [
            {"name": "root", "children": [2, 1]},
            {"name": "cam", "camera": 0, "translation": [0, 0, 5]},
            {"name": "geo", "mesh": 0, "scale": [2, 2, 2]},
        ],
        "scenes": [{"name": "empty"}, {"name": "main", "nodes": [0]}],
        "scene": 1,
        "extras": {"note": "top level"},
    }


def test_minimal_document_has_empty_arenas():
    gltf = parse('{"asset": {"version": "2.0"}}')
    assert gltf.asset.version == "2.0"
    for arena in ARENAS:
        assert getattr(gltf, arena) == []
    assert gltf.scene is None
    assert gltf.extensions_used == []
    assert gltf.extensions_required == []


def test_full_document():
    gltf = parse(json.dumps(triangle_document()), base_uri="https://example.com/models/")
    assert gltf.base_uri == "https://example.com/models/"
    assert [len(getattr(gltf, arena)) for arena in ARENAS] == [1, 2, 1, 1, 1, 1, 2, 1, 1, 3, 2]
    assert gltf.asset.generator == "hand written"
    assert gltf.extensions_used == ["KHR_materials_unlit", "EXT_custom"]
    assert gltf.extensions_required == ["KHR_materials_unlit"]
    assert gltf.extras.as_python_object() == {"note": "top level"}

    accessor = gltf.accessors[1]
    assert accessor.component_type is ComponentType.Float
    assert accessor.type is AccessorType.Vec3
    assert accessor.max == [1.0, 1.0, 0.0]

    primitive = gltf.meshes[0].primitives[0]
    assert primitive.mode is PrimitiveMode.Triangles
    assert gltf.cameras[0].type is CameraType.Perspective
    assert gltf.materials[0].name == "red"


def test_references_are_shared_not_copied():
    gltf = parse_document(triangle_document())
    primitive = gltf.meshes[0].primitives[0]
    assert primitive.attributes["POSITION"] is gltf.accessors[1]
    assert primitive.indices is gltf.accessors[0]
    assert primitive.material is gltf.materials[0]
    assert gltf.accessors[1].buffer_view is gltf.buffer_views[1]
    assert gltf.buffer_views[1].buffer is gltf.buffers[0]
    assert gltf.textures[0].image is gltf.images[0]
    assert gltf.materials[0].pbr_metallic_roughness.base_color_texture.texture is gltf.textures[0]
    assert gltf.nodes[2].mesh is gltf.meshes[0]


def test_children_may_point_forward():
    gltf = parse_document(triangle_document())
    root = gltf.nodes[0]
    assert len(root.children) == 2
    assert root.children[0] is gltf.nodes[2]
    assert root.children[1] is gltf.nodes[1]


def test_default_scene_and_world_transforms():
    gltf = parse_document(triangle_document())
    assert gltf.scene is gltf.scenes[1]
    world = {node.name: matrix.translation for node, matrix in gltf.scene.traverse()}
    assert world == {"root": Vector3(0, 0, 0), "geo": Vector3(0, 0, 0), "cam": Vector3(0, 0, 5)}


def test_default_scene_out_of_range():
    document = triangle_document()
    document["scene"] = 2
    with pytest.raises(IndexOutOfRange) as exc_info:
        parse_document(document)
    assert exc_info.value.path == "scene"


def test_animations_are_ignored():
    document = triangle_document()
    document["animations"] = [{"channels": [], "samplers": []}]
    assert len(parse_document(document).nodes) == 3


def test_skins_fail_before_scenes_are_decoded():
    document = triangle_document()
    document["skins"] = [{"joints": [0]}]
    # A broken scene must not be reached.
    document["scenes"] = [{"nodes": [99]}]
    with pytest.raises(UnimplementedFeature) as exc_info:
        parse_document(document)
    assert exc_info.value.feature == "skins"


def test_first_error_in_decode_order_wins():
    document = triangle_document()
    document["bufferViews"][0]["buffer"] = 1
    document["meshes"][0]["primitives"][0]["mode"] = 42
    with pytest.raises(IndexOutOfRange):
        parse_document(document)
    document["bufferViews"][0]["buffer"] = 0
    with pytest.raises(UnknownEnumValue):
        parse_document(document)


def test_cyclic_children():
    document = triangle_document()
    document["nodes"][2]["children"] = [0]
    with pytest.raises(InvalidHierarchy):
        parse_document(document)


@pytest.mark.parametrize("text", ["", "{", "[1, 2]", "null", b"\xff\xfe"])
def test_malformed_documents(text):
    with pytest.raises(MalformedDocument):
        parse(text)


def test_asset_is_required():
    with pytest.raises(MissingRequiredField) as exc_info:
        parse('{"buffers": []}')
    assert exc_info.value.field == "asset"


def test_arrays_must_be_arrays():
    with pytest.raises(InvalidFieldType):
        parse('{"asset": {"version": "2.0"}, "nodes": {}}')
    with pytest.raises(InvalidFieldType):
        parse('{"asset": {"version": "2.0"}, "nodes": [1]}')


def test_errors_carry_the_json_path():
    document = triangle_document()
    document["accessors"][1]["min"] = [0, 0]
    with pytest.raises(ValueError) as exc_info:
        parse_document(document)
    assert str(exc_info.value).startswith("accessors[1].min: ")


def test_unsupported_required_extension_can_be_rejected():
    settings = ParserSettings(reject_unsupported_extensions=True, supported_extensions=["EXT_custom"])
    with pytest.raises(UnimplementedFeature) as exc_info:
        GltfParser(settings).parse_document(triangle_document())
    assert exc_info.value.path == "extensionsRequired[0]"

    settings = ParserSettings(reject_unsupported_extensions=True,
                              supported_extensions=["KHR_materials_unlit"])
    assert GltfParser(settings).parse_document(triangle_document()).extensions_required == [
        "KHR_materials_unlit"]


def test_byte_range_checks_can_be_disabled():
    document = triangle_document()
    document["bufferViews"][1]["byteLength"] = 400
    with pytest.raises(ValueError):
        parse_document(document)
    gltf = parse_document(document, settings=ParserSettings(validate_byte_ranges=False))
    assert gltf.buffer_views[1].byte_length == 400


def test_deeply_nested_extras_are_wrapped():
    depth = 400
    text = '{"asset": {"version": "2.0"}, "extras": ' + '{"k": ' * depth + '1' + '}' * depth + '}'
    gltf = parse(text)
    value = gltf.extras
    for _ in range(depth):
        value = value["k"]
    assert value.as_integer() == 1
    assert json.loads(text)["extras"] == gltf.extras.as_python_object()


def test_nesting_too_deep_for_json_is_malformed():
    depth = 100000
    text = '{"asset": {"version": "2.0"}, "extras": ' + '[' * depth + ']' * depth + '}'
    with pytest.raises(MalformedDocument):
        parse(text)

import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest

from pygltfscene.errors import (
    IndexOutOfRange, InvalidByteRange, InvalidExclusiveFields, InvalidFieldType,
    InvalidHierarchy, MalformedFixedArray, MissingRequiredField, UnimplementedFeature,
    UnknownEnumValue,
)
from pygltfscene.parser import decoders
from pygltfscene.types import (
    Accessor, AccessorType, AlphaMode, Buffer, BufferView, BufferViewTarget, CameraType,
    ComponentType, Gltf, Image, MagFilter, Material, Matrix4, MinFilter, Node,
    NormalTextureInfo, Quaternion, Texture, Vector3, Vector4, WrapMode,
)


def make_root():
    root = Gltf()
    root.buffers = [Buffer(byte_length=1024)]
    root.buffer_views = [BufferView(buffer=root.buffers[0], byte_length=512)]
    root.images = [Image(uri="a.png")]
    root.textures = [Texture(source=root.images[0])]
    root.materials = [Material()]
    root.accessors = [Accessor(count=3, type=AccessorType.Vec3), Accessor(count=3)]
    return root


def test_asset_requires_version():
    asset = decoders.decode_asset({"version": "2.0", "generator": "tool", "minVersion": "2.0"})
    assert asset.version == "2.0"
    assert asset.generator == "tool"
    assert asset.min_version == "2.0"
    assert asset.copyright is None
    with pytest.raises(MissingRequiredField) as exc_info:
        decoders.decode_asset({"generator": "tool"})
    assert exc_info.value.field == "version"


def test_name_comes_from_name_key():
    buffer = decoders.decode_buffer(make_root(), {"byteLength": 4, "name": "geo",
                                                  "extras": {"k": 1}}, "buffers[0]")
    assert buffer.name == "geo"
    assert buffer.extras.as_python_object() == {"k": 1}


def test_buffer_view_fields():
    root = make_root()
    view = decoders.decode_buffer_view(root, {"buffer": 0, "byteOffset": 16, "byteLength": 64,
                                              "byteStride": 12, "target": 34963}, "bufferViews[0]")
    assert view.buffer is root.buffers[0]
    assert (view.byte_offset, view.byte_length, view.byte_stride) == (16, 64, 12)
    assert view.target is BufferViewTarget.ElementArrayBuffer

    view = decoders.decode_buffer_view(root, {"buffer": 0, "byteLength": 8}, "bufferViews[1]")
    assert view.byte_offset == 0
    assert view.byte_stride is None
    assert view.target is BufferViewTarget.ArrayBuffer


def test_buffer_view_index_equal_to_length_is_out_of_range():
    with pytest.raises(IndexOutOfRange) as exc_info:
        decoders.decode_buffer_view(make_root(), {"buffer": 1, "byteLength": 8}, "bufferViews[0]")
    assert exc_info.value.index == 1
    assert exc_info.value.length == 1
    assert exc_info.value.path == "bufferViews[0].buffer"


def test_buffer_view_past_buffer_end():
    obj = {"buffer": 0, "byteOffset": 1000, "byteLength": 100}
    with pytest.raises(InvalidByteRange):
        decoders.decode_buffer_view(make_root(), obj, "bufferViews[0]")
    view = decoders.decode_buffer_view(make_root(), obj, "bufferViews[0]", check_ranges=False)
    assert view.end == 1100


def test_index_of_wrong_type():
    with pytest.raises(InvalidFieldType):
        decoders.decode_buffer_view(make_root(), {"buffer": "0", "byteLength": 8}, "bufferViews[0]")
    with pytest.raises(InvalidFieldType):
        decoders.decode_buffer_view(make_root(), {"buffer": True, "byteLength": 8}, "bufferViews[0]")


@pytest.mark.parametrize("obj", [{}, {"uri": "a.png", "bufferView": 0}])
def test_image_uri_and_buffer_view_are_exclusive(obj):
    with pytest.raises(InvalidExclusiveFields):
        decoders.decode_image(make_root(), obj, "images[0]")


def test_image_from_buffer_view():
    root = make_root()
    image = decoders.decode_image(root, {"bufferView": 0, "mimeType": "image/png"}, "images[0]")
    assert image.buffer_view is root.buffer_views[0]
    assert image.uri is None
    assert image.mime_type == "image/png"


def test_sampler_defaults_and_values():
    sampler = decoders.decode_sampler(make_root(), {}, "samplers[0]")
    assert sampler.mag_filter is MagFilter.Nearest
    assert sampler.min_filter is MinFilter.Nearest
    assert sampler.wrap_s is WrapMode.Repeat
    assert sampler.wrap_t is WrapMode.Repeat

    sampler = decoders.decode_sampler(make_root(), {"magFilter": 9729, "minFilter": 9986,
                                                    "wrapS": 33071, "wrapT": 33648}, "samplers[0]")
    assert sampler.mag_filter is MagFilter.Linear
    assert sampler.min_filter is MinFilter.NearestMipmapLinear
    assert sampler.wrap_s is WrapMode.ClampToEdge
    assert sampler.wrap_t is WrapMode.MirroredRepeat


def test_material_fields():
    root = make_root()
    material = decoders.decode_material(root, {
        "name": "paint",
        "pbrMetallicRoughness": {
            "baseColorFactor": [0.5, 0.25, 1, 1],
            "metallicFactor": 0.1,
            "roughnessFactor": 0.7,
            "baseColorTexture": {"index": 0, "texCoord": 1},
        },
        "normalTexture": {"index": 0, "scale": 2},
        "emissiveFactor": [1, 0, 0],
        "alphaMode": "MASK",
        "alphaCutoff": 0.25,
        "doubleSided": True,
    }, "materials[0]")
    pbr = material.pbr_metallic_roughness
    assert pbr.base_color_factor == Vector4(0.5, 0.25, 1.0, 1.0)
    assert pbr.metallic_factor == 0.1
    assert pbr.roughness_factor == 0.7
    assert pbr.base_color_texture.texture is root.textures[0]
    assert pbr.base_color_texture.tex_coord == 1
    assert pbr.metallic_roughness_texture is None
    assert isinstance(material.normal_texture, NormalTextureInfo)
    assert material.normal_texture.scale == 2.0
    assert material.occlusion_texture is None
    assert material.emissive_factor == Vector3(1, 0, 0)
    assert material.alpha_mode is AlphaMode.Mask
    assert material.alpha_cutoff == 0.25
    assert material.double_sided is True


def test_material_defaults():
    material = decoders.decode_material(make_root(), {}, "materials[0]")
    assert material.pbr_metallic_roughness.base_color_factor == Vector4(1, 1, 1, 1)
    assert material.pbr_metallic_roughness.roughness_factor == 1.0
    assert material.alpha_mode is AlphaMode.Opaque
    assert material.alpha_cutoff == 0.5
    assert material.double_sided is False


def test_texture_info_requires_index():
    with pytest.raises(MissingRequiredField):
        decoders.decode_material(make_root(), {"emissiveTexture": {"texCoord": 0}}, "materials[0]")


def test_unknown_alpha_mode():
    with pytest.raises(UnknownEnumValue) as exc_info:
        decoders.decode_material(make_root(), {"alphaMode": "FOO"}, "materials[0]")
    assert exc_info.value.path == "materials[0].alphaMode"


def test_accessor_fields():
    root = make_root()
    accessor = decoders.decode_accessor(root, {
        "bufferView": 0, "byteOffset": 4, "componentType": 5126, "count": 24,
        "type": "VEC3", "min": [-1, -1, -1], "max": [1, 1, 1],
    }, "accessors[0]")
    assert accessor.buffer_view is root.buffer_views[0]
    assert accessor.component_type is ComponentType.Float
    assert accessor.type is AccessorType.Vec3
    assert accessor.count == 24
    assert accessor.min == [-1.0, -1.0, -1.0]
    assert accessor.max == [1.0, 1.0, 1.0]
    assert accessor.normalized is False
    assert accessor.element_size == 12
    assert accessor.total_size == 288


@pytest.mark.parametrize("missing", ["componentType", "count", "type"])
def test_accessor_required_fields(missing):
    obj = {"componentType": 5126, "count": 1, "type": "SCALAR"}
    del obj[missing]
    with pytest.raises(MissingRequiredField):
        decoders.decode_accessor(make_root(), obj, "accessors[0]")


def test_accessor_min_length_must_match_type():
    obj = {"componentType": 5126, "count": 1, "type": "VEC3", "min": [0, 0]}
    with pytest.raises(MalformedFixedArray) as exc_info:
        decoders.decode_accessor(make_root(), obj, "accessors[0]")
    assert exc_info.value.expected == 3
    assert exc_info.value.actual == 2


def test_accessor_sparse_is_unimplemented():
    obj = {"componentType": 5126, "count": 1, "type": "SCALAR", "sparse": {"count": 1}}
    with pytest.raises(UnimplementedFeature) as exc_info:
        decoders.decode_accessor(make_root(), obj, "accessors[0]")
    assert exc_info.value.feature == "sparse"


def test_accessor_past_buffer_view_end():
    obj = {"bufferView": 0, "componentType": 5126, "count": 100, "type": "VEC4"}
    with pytest.raises(InvalidByteRange):
        decoders.decode_accessor(make_root(), obj, "accessors[0]")


def test_primitive_resolves_shared_accessors():
    root = make_root()
    primitive = decoders.decode_primitive(root, {
        "attributes": {"POSITION": 0, "NORMAL": 0}, "indices": 1, "material": 0, "mode": 1,
    }, "meshes[0].primitives[0]")
    assert list(primitive.attributes) == ["POSITION", "NORMAL"]
    assert primitive.attributes["POSITION"] is root.accessors[0]
    assert primitive.attributes["NORMAL"] is root.accessors[0]
    assert primitive.indices is root.accessors[1]
    assert primitive.material is root.materials[0]


def test_primitive_targets_are_unimplemented():
    with pytest.raises(UnimplementedFeature):
        decoders.decode_primitive(make_root(), {"attributes": {}, "targets": []}, "p")


def test_primitive_attribute_out_of_range():
    with pytest.raises(IndexOutOfRange) as exc_info:
        decoders.decode_primitive(make_root(), {"attributes": {"POSITION": 5}}, "meshes[0].primitives[0]")
    assert exc_info.value.path == "meshes[0].primitives[0].attributes.POSITION"


def test_mesh_requires_primitives():
    with pytest.raises(MissingRequiredField):
        decoders.decode_mesh(make_root(), {"name": "empty"}, "meshes[0]")
    mesh = decoders.decode_mesh(make_root(), {"primitives": [{"attributes": {"POSITION": 0}}],
                                              "weights": [0.5]}, "meshes[0]")
    assert len(mesh.primitives) == 1
    assert mesh.weights == [0.5]


def test_cameras():
    camera = decoders.decode_camera(make_root(), {
        "type": "perspective", "perspective": {"yfov": 0.8, "znear": 0.01, "aspectRatio": 1.5},
    }, "cameras[0]")
    assert camera.type is CameraType.Perspective
    assert camera.perspective.yfov == 0.8
    assert camera.perspective.zfar is None
    assert camera.orthographic is None

    camera = decoders.decode_camera(make_root(), {
        "type": "orthographic", "orthographic": {"xmag": 1, "ymag": 1, "zfar": 100, "znear": 0},
    }, "cameras[1]")
    assert camera.orthographic.zfar == 100.0


def test_camera_needs_its_projection():
    with pytest.raises(MissingRequiredField) as exc_info:
        decoders.decode_camera(make_root(), {"type": "orthographic"}, "cameras[0]")
    assert exc_info.value.field == "orthographic"
    with pytest.raises(MissingRequiredField):
        decoders.decode_camera(make_root(), {"perspective": {"yfov": 1, "znear": 1}}, "cameras[0]")


def test_node_trs():
    node = decoders.decode_node(make_root(), {
        "translation": [1, 2, 3], "scale": [2, 2, 2],
    }, "nodes[0]")
    assert node.translation == Vector3(1, 2, 3)
    assert node.rotation == Quaternion.identity()
    assert node.matrix * Vector3(1, 1, 1) == Vector3(3, 4, 5)


def test_node_matrix_wins_over_trs():
    wire = [1, 0, 0, 0, 0, 1, 0, 0, 0, 0, 1, 0, 9, 8, 7, 1]
    node = decoders.decode_node(make_root(), {"matrix": wire, "translation": [1, 2, 3]}, "nodes[0]")
    assert node.matrix.translation == Vector3(9, 8, 7)


def test_node_defaults_to_identity():
    node = decoders.decode_node(make_root(), {}, "nodes[0]")
    assert node.matrix.is_identity()
    assert node.children == []


def test_node_bad_fixed_arrays():
    with pytest.raises(MalformedFixedArray):
        decoders.decode_node(make_root(), {"matrix": [1, 0, 0]}, "nodes[0]")
    with pytest.raises(MalformedFixedArray):
        decoders.decode_node(make_root(), {"rotation": [0, 0, 1]}, "nodes[0]")


def test_node_skin_is_unimplemented():
    with pytest.raises(UnimplementedFeature):
        decoders.decode_node(make_root(), {"skin": 0}, "nodes[0]")


def test_children_resolve_forward_references():
    objects = [{"children": [2, 1]}, {}, {"children": [1]}]
    nodes = [Node(), Node(), Node()]
    decoders.resolve_node_children(nodes, objects)
    assert nodes[0].children == [nodes[2], nodes[1]]
    assert nodes[0].children[0] is nodes[2]
    assert nodes[2].children[0] is nodes[1]
    decoders.check_node_hierarchy(nodes)


def test_cycles_are_rejected():
    nodes = [Node(), Node(), Node()]
    decoders.resolve_node_children(nodes, [{"children": [1]}, {"children": [2]}, {"children": [0]}])
    with pytest.raises(InvalidHierarchy):
        decoders.check_node_hierarchy(nodes)

    node = Node()
    decoders.resolve_node_children([node], [{"children": [0]}])
    with pytest.raises(InvalidHierarchy):
        decoders.check_node_hierarchy([node])


def test_node_matrix_leaves_trs_at_defaults():
    node = decoders.decode_node(make_root(), {"matrix": Matrix4().to_column_major()}, "nodes[0]")
    assert node.scale == Vector3(1, 1, 1)

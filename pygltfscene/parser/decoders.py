"""
One decoder per glTF entity kind.

Each decoder reads one JSON object, checks its required keys, resolves index
references against the arenas already filled on ``root`` and returns the new
entity. Decoders never touch arenas that come later in the decode order.
"""
import logging

from pygltfscene.errors import (
    InvalidByteRange, InvalidExclusiveFields, InvalidHierarchy, MalformedFixedArray,
    UnimplementedFeature,
)
from pygltfscene.types import (
    Accessor, AccessorType, AlphaMode, Asset, Buffer, BufferView, BufferViewTarget,
    Camera, CameraType, ComponentType, Gltf, Image, MagFilter, Material, Matrix4, Mesh,
    MinFilter, Node, NormalTextureInfo, OcclusionTextureInfo, OrthographicProjection,
    PbrMetallicRoughness, PerspectiveProjection, Primitive, PrimitiveMode,
    Sampler, Scene, Texture, TextureInfo, WrapMode,
)
from .arrays import (
    child_path, decode_entity_array, decode_index_array, decode_mat4, decode_number_array,
    decode_quat, decode_vec3, decode_vec4, item_path, read_array, read_bool,
    read_extensions, read_extras, read_float, read_int, read_object, read_reference,
    read_str, resolve_index,
)

logger = logging.getLogger(__name__)


def _decode_common(entity, obj: dict, path: str, named: bool = True):
    if named:
        entity.name = read_str(obj, "name", path, default="")
    entity.extras = read_extras(obj)
    entity.extensions = read_extensions(obj, path)
    return entity


def decode_asset(obj: dict, path: str = "asset") -> Asset:
    asset = Asset(
        version=read_str(obj, "version", path, required=True),
        copyright=read_str(obj, "copyright", path),
        generator=read_str(obj, "generator", path),
        min_version=read_str(obj, "minVersion", path),
    )
    return _decode_common(asset, obj, path, named=False)


def decode_buffer(root: Gltf, obj: dict, path: str) -> Buffer:
    buffer = Buffer(
        byte_length=read_int(obj, "byteLength", path, required=True),
        uri=read_str(obj, "uri", path),
    )
    return _decode_common(buffer, obj, path)


def decode_buffer_view(root: Gltf, obj: dict, path: str, check_ranges: bool = True) -> BufferView:
    view = BufferView(
        buffer=read_reference(obj, "buffer", root.buffers, "buffers", path, required=True),
        byte_length=read_int(obj, "byteLength", path, required=True),
        byte_offset=read_int(obj, "byteOffset", path, default=0),
        byte_stride=read_int(obj, "byteStride", path),
    )
    target = read_int(obj, "target", path)
    if target is not None:
        view.target = BufferViewTarget.from_wire(target, child_path(path, "target"))
    if check_ranges and view.end > view.buffer.byte_length:
        raise InvalidByteRange(view.end, view.buffer.byte_length, path)
    return _decode_common(view, obj, path)


def decode_image(root: Gltf, obj: dict, path: str) -> Image:
    has_uri = "uri" in obj
    has_view = "bufferView" in obj
    if has_uri == has_view:
        raise InvalidExclusiveFields("uri", "bufferView", path)
    image = Image(
        uri=read_str(obj, "uri", path),
        buffer_view=read_reference(obj, "bufferView", root.buffer_views, "bufferViews", path),
        mime_type=read_str(obj, "mimeType", path),
    )
    return _decode_common(image, obj, path)


def decode_sampler(root: Gltf, obj: dict, path: str) -> Sampler:
    sampler = Sampler()
    value = read_int(obj, "magFilter", path)
    if value is not None:
        sampler.mag_filter = MagFilter.from_wire(value, child_path(path, "magFilter"))
    value = read_int(obj, "minFilter", path)
    if value is not None:
        sampler.min_filter = MinFilter.from_wire(value, child_path(path, "minFilter"))
    value = read_int(obj, "wrapS", path)
    if value is not None:
        sampler.wrap_s = WrapMode.from_wire(value, child_path(path, "wrapS"))
    value = read_int(obj, "wrapT", path)
    if value is not None:
        sampler.wrap_t = WrapMode.from_wire(value, child_path(path, "wrapT"))
    return _decode_common(sampler, obj, path)


def decode_texture(root: Gltf, obj: dict, path: str) -> Texture:
    texture = Texture(
        sampler=read_reference(obj, "sampler", root.samplers, "samplers", path),
        source=read_reference(obj, "source", root.images, "images", path),
    )
    return _decode_common(texture, obj, path)


def decode_texture_info(root: Gltf, obj: dict, path: str, cls=TextureInfo) -> TextureInfo:
    """Decodes a TextureInfo or one of its specialisations, chosen by ``cls``."""
    info = cls(
        texture=read_reference(obj, "index", root.textures, "textures", path, required=True),
        tex_coord=read_int(obj, "texCoord", path, default=0),
    )
    if cls is NormalTextureInfo:
        info.scale = read_float(obj, "scale", path, default=1.0)
    elif cls is OcclusionTextureInfo:
        info.strength = read_float(obj, "strength", path, default=1.0)
    return _decode_common(info, obj, path, named=False)


def _read_texture_info(root: Gltf, obj: dict, key: str, path: str, cls=TextureInfo):
    info = read_object(obj, key, path)
    if info is None:
        return None
    return decode_texture_info(root, info, child_path(path, key), cls)


def decode_pbr_metallic_roughness(root: Gltf, obj: dict, path: str) -> PbrMetallicRoughness:
    pbr = PbrMetallicRoughness(
        base_color_texture=_read_texture_info(root, obj, "baseColorTexture", path),
        metallic_factor=read_float(obj, "metallicFactor", path, default=1.0),
        roughness_factor=read_float(obj, "roughnessFactor", path, default=1.0),
        metallic_roughness_texture=_read_texture_info(root, obj, "metallicRoughnessTexture", path),
    )
    if "baseColorFactor" in obj:
        pbr.base_color_factor = decode_vec4(obj["baseColorFactor"], child_path(path, "baseColorFactor"))
    return _decode_common(pbr, obj, path, named=False)


def decode_material(root: Gltf, obj: dict, path: str) -> Material:
    material = Material(
        normal_texture=_read_texture_info(root, obj, "normalTexture", path, NormalTextureInfo),
        occlusion_texture=_read_texture_info(root, obj, "occlusionTexture", path, OcclusionTextureInfo),
        emissive_texture=_read_texture_info(root, obj, "emissiveTexture", path),
        alpha_cutoff=read_float(obj, "alphaCutoff", path, default=0.5),
        double_sided=read_bool(obj, "doubleSided", path),
    )
    pbr = read_object(obj, "pbrMetallicRoughness", path)
    if pbr is not None:
        material.pbr_metallic_roughness = decode_pbr_metallic_roughness(
            root, pbr, child_path(path, "pbrMetallicRoughness"))
    if "emissiveFactor" in obj:
        material.emissive_factor = decode_vec3(obj["emissiveFactor"], child_path(path, "emissiveFactor"))
    alpha_mode = read_str(obj, "alphaMode", path)
    if alpha_mode is not None:
        material.alpha_mode = AlphaMode.from_wire(alpha_mode, child_path(path, "alphaMode"))
    return _decode_common(material, obj, path)


def decode_accessor(root: Gltf, obj: dict, path: str, check_ranges: bool = True) -> Accessor:
    if "sparse" in obj:
        raise UnimplementedFeature("sparse", path)
    accessor = Accessor(
        component_type=ComponentType.from_wire(
            read_int(obj, "componentType", path, required=True), child_path(path, "componentType")),
        count=read_int(obj, "count", path, required=True),
        type=AccessorType.from_wire(
            read_str(obj, "type", path, required=True), child_path(path, "type")),
        normalized=read_bool(obj, "normalized", path),
        buffer_view=read_reference(obj, "bufferView", root.buffer_views, "bufferViews", path),
        byte_offset=read_int(obj, "byteOffset", path, default=0),
    )
    expected = accessor.component_count
    for key in ("min", "max"):
        if key in obj:
            values = decode_number_array(obj[key], child_path(path, key))
            if len(values) != expected:
                raise MalformedFixedArray(expected, len(values), child_path(path, key))
            setattr(accessor, key, values)

    view = accessor.buffer_view
    if check_ranges and view is not None:
        end = accessor.byte_offset + accessor.byte_span
        if end > view.byte_length:
            raise InvalidByteRange(end, view.byte_length, path)
    return _decode_common(accessor, obj, path)


def decode_primitive(root: Gltf, obj: dict, path: str) -> Primitive:
    if "targets" in obj:
        raise UnimplementedFeature("targets", path)
    attributes = read_object(obj, "attributes", path, required=True)
    attributes_path = child_path(path, "attributes")
    primitive = Primitive(
        attributes={semantic: resolve_index(root.accessors, index, "accessors",
                                            child_path(attributes_path, semantic))
                    for semantic, index in attributes.items()},
        indices=read_reference(obj, "indices", root.accessors, "accessors", path),
        material=read_reference(obj, "material", root.materials, "materials", path),
    )
    mode = read_int(obj, "mode", path)
    if mode is not None:
        primitive.mode = PrimitiveMode.from_wire(mode, child_path(path, "mode"))
    return _decode_common(primitive, obj, path, named=False)


def decode_mesh(root: Gltf, obj: dict, path: str) -> Mesh:
    primitives = read_array(obj, "primitives", path, required=True)
    mesh = Mesh(
        primitives=decode_entity_array(
            primitives, child_path(path, "primitives"),
            lambda item, at: decode_primitive(root, item, at)),
    )
    if "weights" in obj:
        mesh.weights = decode_number_array(obj["weights"], child_path(path, "weights"))
    return _decode_common(mesh, obj, path)


def decode_camera(root: Gltf, obj: dict, path: str) -> Camera:
    camera_type = CameraType.from_wire(read_str(obj, "type", path, required=True),
                                       child_path(path, "type"))
    camera = Camera(type=camera_type)

    perspective = read_object(obj, "perspective", path,
                              required=camera_type == CameraType.Perspective)
    if perspective is not None:
        at = child_path(path, "perspective")
        camera.perspective = _decode_common(PerspectiveProjection(
            yfov=read_float(perspective, "yfov", at, required=True),
            znear=read_float(perspective, "znear", at, required=True),
            zfar=read_float(perspective, "zfar", at),
            aspect_ratio=read_float(perspective, "aspectRatio", at),
        ), perspective, at, named=False)

    orthographic = read_object(obj, "orthographic", path,
                               required=camera_type == CameraType.Orthographic)
    if orthographic is not None:
        at = child_path(path, "orthographic")
        camera.orthographic = _decode_common(OrthographicProjection(
            xmag=read_float(orthographic, "xmag", at, required=True),
            ymag=read_float(orthographic, "ymag", at, required=True),
            zfar=read_float(orthographic, "zfar", at, required=True),
            znear=read_float(orthographic, "znear", at, required=True),
        ), orthographic, at, named=False)
    return _decode_common(camera, obj, path)


def decode_node(root: Gltf, obj: dict, path: str) -> Node:
    """
    First pass over a node: everything except ``children``, which may point
    at nodes later in the array. See resolve_node_children().
    """
    if "skin" in obj:
        raise UnimplementedFeature("skin", path)
    node = Node(
        camera=read_reference(obj, "camera", root.cameras, "cameras", path),
        mesh=read_reference(obj, "mesh", root.meshes, "meshes", path),
    )

    has_trs = any(key in obj for key in ("translation", "rotation", "scale"))
    if "matrix" in obj:
        node.matrix = decode_mat4(obj["matrix"], child_path(path, "matrix"))
        if has_trs:
            logger.debug("%s: both matrix and TRS present, using matrix", path)
    elif has_trs:
        if "translation" in obj:
            node.translation = decode_vec3(obj["translation"], child_path(path, "translation"))
        if "rotation" in obj:
            node.rotation = decode_quat(obj["rotation"], child_path(path, "rotation"))
        if "scale" in obj:
            node.scale = decode_vec3(obj["scale"], child_path(path, "scale"))
        node.matrix = Matrix4.create_from_trs(node.translation, node.rotation, node.scale)

    if "weights" in obj:
        node.weights = decode_number_array(obj["weights"], child_path(path, "weights"))
    return _decode_common(node, obj, path)


def resolve_node_children(nodes: list[Node], node_objects: list, path: str = "nodes") -> None:
    """Second pass: links every node's ``children`` now that the whole arena exists."""
    for i, obj in enumerate(node_objects):
        at = item_path(path, i)
        children = read_array(obj, "children", at)
        if children is None:
            continue
        nodes[i].children = decode_index_array(children, nodes, "nodes", child_path(at, "children"))


def check_node_hierarchy(nodes: list[Node], path: str = "nodes") -> None:
    """Raises InvalidHierarchy if any node can reach itself through ``children``."""
    index_of = {id(node): i for i, node in enumerate(nodes)}
    finished: set[int] = set()

    for start in nodes:
        if id(start) in finished:
            continue
        # Iterative DFS; `active` holds the current path from `start`.
        active: set[int] = {id(start)}
        stack = [(start, iter(start.children))]
        while stack:
            node, children = stack[-1]
            child = next(children, None)
            if child is None:
                stack.pop()
                active.discard(id(node))
                finished.add(id(node))
                continue
            if id(child) in active:
                raise InvalidHierarchy(
                    f"node {index_of[id(child)]} is its own ancestor",
                    child_path(item_path(path, index_of[id(node)]), "children"))
            if id(child) not in finished:
                active.add(id(child))
                stack.append((child, iter(child.children)))


def decode_scene(root: Gltf, obj: dict, path: str) -> Scene:
    scene = Scene()
    if "nodes" in obj:
        scene.nodes = decode_index_array(obj["nodes"], root.nodes, "nodes", child_path(path, "nodes"))
    return _decode_common(scene, obj, path)


def decode_default_scene(root: Gltf, document: dict) -> Scene | None:
    return read_reference(document, "scene", root.scenes, "scenes", "")

# Main __init__.py for the types sub-package

from .vector import Vector3, Vector4
from .quaternion import Quaternion
from .matrix import Matrix4
from .enums import (
    ComponentType, AccessorType, PrimitiveMode, BufferViewTarget,
    MagFilter, MinFilter, WrapMode, AlphaMode, CameraType,
    component_size, component_count,
    GLB_MAGIC, GLB_VERSION, GLB_HEADER_SIZE, GLB_CHUNK_HEADER_SIZE, GlbChunkType,
)
from .entity_defs import ExtensibleEntity, NamedEntity
from .buffer_defs import Buffer, BufferView, Accessor
from .material_defs import (
    Image, Sampler, Texture, TextureInfo, NormalTextureInfo, OcclusionTextureInfo,
    PbrMetallicRoughness, Material,
)
from .scene_defs import (
    PerspectiveProjection, OrthographicProjection, Camera,
    Primitive, Mesh, Node, Scene, Asset, Gltf,
)


__all__ = [
    "Vector3", "Vector4", "Quaternion", "Matrix4",
    "ComponentType", "AccessorType", "PrimitiveMode", "BufferViewTarget",
    "MagFilter", "MinFilter", "WrapMode", "AlphaMode", "CameraType",
    "component_size", "component_count",
    "GLB_MAGIC", "GLB_VERSION", "GLB_HEADER_SIZE", "GLB_CHUNK_HEADER_SIZE", "GlbChunkType",
    "ExtensibleEntity", "NamedEntity",
    "Buffer", "BufferView", "Accessor",
    "Image", "Sampler", "Texture", "TextureInfo", "NormalTextureInfo", "OcclusionTextureInfo",
    "PbrMetallicRoughness", "Material",
    "PerspectiveProjection", "OrthographicProjection", "Camera",
    "Primitive", "Mesh", "Node", "Scene", "Asset", "Gltf",
]

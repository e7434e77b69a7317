from enum import Enum, IntEnum

from pygltfscene.errors import UnknownEnumValue


class _WireCodec:
    """Mixin giving every wire enumeration a strict decoder."""

    @classmethod
    def from_wire(cls, value, path: str = ""):
        """Maps a wire value to its member, raising UnknownEnumValue for anything else."""
        if isinstance(value, bool):
            raise UnknownEnumValue(cls.__name__, value, path)
        try:
            return cls(value)
        except ValueError:
            raise UnknownEnumValue(cls.__name__, value, path) from None


# Based on the OpenGL data type constants used by accessor.componentType
class ComponentType(_WireCodec, IntEnum):
    """Numeric type of a single accessor component."""
    Byte = 0x1400           # 5120
    UnsignedByte = 0x1401   # 5121
    Short = 0x1402          # 5122
    UnsignedShort = 0x1403  # 5123
    Int = 0x1404            # 5124, not allowed by glTF 2.0 but accepted here
    UnsignedInt = 0x1405    # 5125
    Float = 0x1406          # 5126


class AccessorType(_WireCodec, Enum):
    """Element shape of an accessor."""
    Scalar = "SCALAR"
    Vec2 = "VEC2"
    Vec3 = "VEC3"
    Vec4 = "VEC4"
    Mat2 = "MAT2"
    Mat3 = "MAT3"
    Mat4 = "MAT4"


_COMPONENT_SIZES = {
    ComponentType.Byte: 1,
    ComponentType.UnsignedByte: 1,
    ComponentType.Short: 2,
    ComponentType.UnsignedShort: 2,
    ComponentType.Int: 4,
    ComponentType.UnsignedInt: 4,
    ComponentType.Float: 4,
}

_COMPONENT_COUNTS = {
    AccessorType.Scalar: 1,
    AccessorType.Vec2: 2,
    AccessorType.Vec3: 3,
    AccessorType.Vec4: 4,
    AccessorType.Mat2: 4,
    AccessorType.Mat3: 9,
    AccessorType.Mat4: 16,
}


def component_size(component_type: ComponentType) -> int:
    """Size in bytes of one component of the given type."""
    return _COMPONENT_SIZES[component_type]


def component_count(accessor_type: AccessorType) -> int:
    """Number of scalar components in one element of the given type."""
    return _COMPONENT_COUNTS[accessor_type]


class PrimitiveMode(_WireCodec, IntEnum):
    """Topology used to assemble a primitive's vertices."""
    Points = 0
    Line = 1
    LineLoop = 2
    LineStrip = 3
    Triangles = 4       # Default
    TriangleStrip = 5
    TriangleFan = 6


class BufferViewTarget(_WireCodec, IntEnum):
    """GPU buffer binding hint for a buffer view."""
    ArrayBuffer = 34962         # Vertex attributes
    ElementArrayBuffer = 34963  # Vertex indices


class MagFilter(_WireCodec, IntEnum):
    Nearest = 9728
    Linear = 9729


class MinFilter(_WireCodec, IntEnum):
    Nearest = 9728
    Linear = 9729
    NearestMipmapNearest = 9984
    LinearMipmapNearest = 9985
    NearestMipmapLinear = 9986
    LinearMipmapLinear = 9987


class WrapMode(_WireCodec, IntEnum):
    Repeat = 10497
    ClampToEdge = 33071
    MirroredRepeat = 33648


class AlphaMode(_WireCodec, Enum):
    """How the alpha channel of a material's base color is interpreted."""
    Opaque = "OPAQUE"   # Alpha ignored
    Mask = "MASK"       # Alpha tested against alphaCutoff
    Blend = "BLEND"     # Alpha blended


class CameraType(_WireCodec, Enum):
    Perspective = "perspective"
    Orthographic = "orthographic"


# Binary container (.glb) framing. Chunk extraction is not implemented.
GLB_MAGIC = 0x46546C67   # b"glTF" read as little-endian uint32
GLB_VERSION = 2
GLB_HEADER_SIZE = 12     # magic, version, total length
GLB_CHUNK_HEADER_SIZE = 8  # chunk length, chunk type


class GlbChunkType(IntEnum):
    JSON = 0x4E4F534A   # b"JSON"
    BIN = 0x004E4942    # b"BIN\0"

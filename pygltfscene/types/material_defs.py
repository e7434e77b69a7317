import dataclasses

from .buffer_defs import BufferView
from .entity_defs import ExtensibleEntity, NamedEntity
from .enums import AlphaMode, MagFilter, MinFilter, WrapMode
from .vector import Vector3, Vector4


@dataclasses.dataclass(slots=True, eq=False)
class Image(NamedEntity):
    """Image data, either at an external URI or inside a buffer view (never both)."""
    uri: str | None = None
    buffer_view: BufferView | None = None
    mime_type: str | None = None


@dataclasses.dataclass(slots=True, eq=False)
class Sampler(NamedEntity):
    mag_filter: MagFilter = MagFilter.Nearest
    min_filter: MinFilter = MinFilter.Nearest
    wrap_s: WrapMode = WrapMode.Repeat
    wrap_t: WrapMode = WrapMode.Repeat


@dataclasses.dataclass(slots=True, eq=False)
class Texture(NamedEntity):
    sampler: Sampler | None = None
    source: Image | None = None

    @property
    def image(self) -> Image | None:
        return self.source


@dataclasses.dataclass(slots=True, eq=False)
class TextureInfo(ExtensibleEntity):
    """
    Reference from a material to a texture.

    ``tex_coord`` selects the TEXCOORD_<n> attribute of the primitive that
    supplies the texture coordinates.
    """
    texture: Texture | None = None
    tex_coord: int = 0


@dataclasses.dataclass(slots=True, eq=False)
class NormalTextureInfo(TextureInfo):
    scale: float = 1.0


@dataclasses.dataclass(slots=True, eq=False)
class OcclusionTextureInfo(TextureInfo):
    strength: float = 1.0


@dataclasses.dataclass(slots=True, eq=False)
class PbrMetallicRoughness(ExtensibleEntity):
    base_color_factor: Vector4 = dataclasses.field(default_factory=lambda: Vector4(1.0, 1.0, 1.0, 1.0))
    base_color_texture: TextureInfo | None = None
    metallic_factor: float = 1.0
    roughness_factor: float = 1.0
    metallic_roughness_texture: TextureInfo | None = None


@dataclasses.dataclass(slots=True, eq=False)
class Material(NamedEntity):
    pbr_metallic_roughness: PbrMetallicRoughness = dataclasses.field(default_factory=PbrMetallicRoughness)
    normal_texture: NormalTextureInfo | None = None
    occlusion_texture: OcclusionTextureInfo | None = None
    emissive_texture: TextureInfo | None = None
    emissive_factor: Vector3 = dataclasses.field(default_factory=Vector3)
    alpha_mode: AlphaMode = AlphaMode.Opaque
    alpha_cutoff: float = 0.5  # Only meaningful in AlphaMode.Mask
    double_sided: bool = False

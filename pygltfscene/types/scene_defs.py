import dataclasses
from typing import Iterator

from .buffer_defs import Accessor, Buffer, BufferView
from .entity_defs import ExtensibleEntity, NamedEntity
from .enums import CameraType, PrimitiveMode
from .material_defs import Image, Material, Sampler, Texture
from .matrix import Matrix4
from .quaternion import Quaternion
from .vector import Vector3
from pygltfscene.structured_data import ExtraValue


@dataclasses.dataclass(slots=True, eq=False)
class PerspectiveProjection(ExtensibleEntity):
    yfov: float = 0.0                   # Vertical field of view, radians
    znear: float = 0.0
    zfar: float | None = None           # None means an infinite projection
    aspect_ratio: float | None = None   # None means use the viewport's


@dataclasses.dataclass(slots=True, eq=False)
class OrthographicProjection(ExtensibleEntity):
    xmag: float = 0.0
    ymag: float = 0.0
    zfar: float = 0.0
    znear: float = 0.0


@dataclasses.dataclass(slots=True, eq=False)
class Camera(NamedEntity):
    type: CameraType = CameraType.Perspective
    perspective: PerspectiveProjection | None = None
    orthographic: OrthographicProjection | None = None

    def projection_matrix(self, aspect_ratio: float | None = None) -> Matrix4:
        """
        Builds the projection matrix described by this camera.

        For a perspective camera the stored aspect ratio wins; ``aspect_ratio``
        is only used when the document leaves it unset. Raises ValueError when
        no aspect ratio is available or the parameters are degenerate.
        """
        if self.type == CameraType.Orthographic:
            o = self.orthographic
            return Matrix4.create_orthographic(o.xmag, o.ymag, o.znear, o.zfar)

        p = self.perspective
        aspect = p.aspect_ratio if p.aspect_ratio is not None else aspect_ratio
        if aspect is None:
            raise ValueError("Camera has no aspect ratio; pass the viewport's aspect_ratio.")
        if p.zfar is None:
            return Matrix4.create_perspective_infinite(p.yfov, aspect, p.znear)
        return Matrix4.create_perspective_fov(p.yfov, aspect, p.znear, p.zfar)


@dataclasses.dataclass(slots=True, eq=False)
class Primitive(ExtensibleEntity):
    """One draw call: named vertex attributes, optional indices and material."""
    attributes: dict[str, Accessor] = dataclasses.field(default_factory=dict)  # Keeps document order
    indices: Accessor | None = None
    material: Material | None = None
    mode: PrimitiveMode = PrimitiveMode.Triangles


@dataclasses.dataclass(slots=True, eq=False)
class Mesh(NamedEntity):
    primitives: list[Primitive] = dataclasses.field(default_factory=list)
    weights: list[float] | None = None  # Morph target weights, stored only


@dataclasses.dataclass(slots=True, eq=False, repr=False)
class Node(NamedEntity):
    """
    An entry of the scene hierarchy.

    ``matrix`` is always the local transform. When the document gave TRS
    values they are kept in ``translation``/``rotation``/``scale`` as well;
    otherwise those hold identity values.
    """
    camera: Camera | None = None
    mesh: Mesh | None = None
    children: list["Node"] = dataclasses.field(default_factory=list)
    matrix: Matrix4 = dataclasses.field(default_factory=Matrix4)
    translation: Vector3 = dataclasses.field(default_factory=Vector3)
    rotation: Quaternion = dataclasses.field(default_factory=Quaternion)
    scale: Vector3 = dataclasses.field(default_factory=lambda: Vector3(1.0, 1.0, 1.0))
    weights: list[float] | None = None

    def __repr__(self):
        return (f"<Node name='{self.name}' children={len(self.children)} "
                f"mesh={self.mesh is not None} camera={self.camera is not None}>")


@dataclasses.dataclass(slots=True, eq=False, repr=False)
class Scene(NamedEntity):
    nodes: list[Node] = dataclasses.field(default_factory=list)  # Root nodes

    def traverse(self) -> Iterator[tuple[Node, Matrix4]]:
        """
        Yields every node reachable from the roots with its world transform,
        depth-first, parents before children. Uses an explicit stack, so
        hierarchy depth is not limited by the interpreter's recursion limit.
        """
        identity = Matrix4.create_identity()
        stack = [(root, identity) for root in reversed(self.nodes)]
        while stack:
            node, parent_matrix = stack.pop()
            world_matrix = parent_matrix * node.matrix
            yield node, world_matrix
            stack.extend((child, world_matrix) for child in reversed(node.children))

    def __repr__(self):
        return f"<Scene name='{self.name}' roots={len(self.nodes)}>"


@dataclasses.dataclass(slots=True, eq=False)
class Asset(ExtensibleEntity):
    version: str = ""
    copyright: str | None = None
    generator: str | None = None
    min_version: str | None = None


@dataclasses.dataclass(slots=True, eq=False, repr=False)
class Gltf:
    """
    Root of a decoded document. Owns one list per entity kind; every
    reference elsewhere in the graph points into these lists.
    """
    asset: Asset = dataclasses.field(default_factory=Asset)
    base_uri: str = ""
    extensions_used: list[str] = dataclasses.field(default_factory=list)
    extensions_required: list[str] = dataclasses.field(default_factory=list)
    buffers: list[Buffer] = dataclasses.field(default_factory=list)
    buffer_views: list[BufferView] = dataclasses.field(default_factory=list)
    images: list[Image] = dataclasses.field(default_factory=list)
    samplers: list[Sampler] = dataclasses.field(default_factory=list)
    textures: list[Texture] = dataclasses.field(default_factory=list)
    materials: list[Material] = dataclasses.field(default_factory=list)
    accessors: list[Accessor] = dataclasses.field(default_factory=list)
    meshes: list[Mesh] = dataclasses.field(default_factory=list)
    cameras: list[Camera] = dataclasses.field(default_factory=list)
    nodes: list[Node] = dataclasses.field(default_factory=list)
    scenes: list[Scene] = dataclasses.field(default_factory=list)
    scene: Scene | None = None  # Default scene
    extras: ExtraValue | None = None
    extensions: dict[str, ExtraValue] = dataclasses.field(default_factory=dict)

    def __repr__(self):
        return (f"<Gltf version='{self.asset.version}' buffers={len(self.buffers)} "
                f"accessors={len(self.accessors)} meshes={len(self.meshes)} "
                f"nodes={len(self.nodes)} scenes={len(self.scenes)}>")

import dataclasses

from .entity_defs import NamedEntity
from .enums import (
    AccessorType, BufferViewTarget, ComponentType, component_count, component_size
)


@dataclasses.dataclass(slots=True, eq=False)
class Buffer(NamedEntity):
    """A block of binary data. The bytes themselves are fetched by the loader."""
    byte_length: int = 0
    uri: str | None = None  # None when the data lives in the GLB binary chunk


@dataclasses.dataclass(slots=True, eq=False)
class BufferView(NamedEntity):
    """A byte sub-range of a buffer."""
    buffer: Buffer | None = None
    byte_offset: int = 0
    byte_length: int = 0
    byte_stride: int | None = None  # None means tightly packed
    target: BufferViewTarget = BufferViewTarget.ArrayBuffer

    @property
    def end(self) -> int:
        """Offset one past the last byte of this view inside its buffer."""
        return self.byte_offset + self.byte_length


@dataclasses.dataclass(slots=True, eq=False)
class Accessor(NamedEntity):
    """
    A typed view over a buffer view: ``count`` elements of ``type``, each made
    of components of ``component_type``.

    ``buffer_view`` may be None, in which case the data is all zeros (glTF
    allows this for sparse accessors, which are not decoded here).
    """
    buffer_view: BufferView | None = None
    byte_offset: int = 0
    component_type: ComponentType = ComponentType.Float
    normalized: bool = False
    count: int = 0
    type: AccessorType = AccessorType.Scalar
    min: list[float] | None = None
    max: list[float] | None = None

    @property
    def component_count(self) -> int:
        return component_count(self.type)

    @property
    def element_size(self) -> int:
        """Size in bytes of one element (all of its components)."""
        return component_count(self.type) * component_size(self.component_type)

    @property
    def total_size(self) -> int:
        """Size in bytes of the tightly packed data; strides are not included."""
        return self.count * self.element_size

    @property
    def byte_stride(self) -> int:
        """Distance in bytes between consecutive elements."""
        if self.buffer_view is not None and self.buffer_view.byte_stride:
            return self.buffer_view.byte_stride
        return self.element_size

    @property
    def byte_span(self) -> int:
        """Bytes from ``byte_offset`` to the end of the last element."""
        if self.count == 0:
            return 0
        return self.byte_stride * (self.count - 1) + self.element_size

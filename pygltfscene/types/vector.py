import math
import dataclasses


@dataclasses.dataclass(slots=True)
class Vector3:
    """Translation, scale, emissive factor or any other 3-float glTF tuple."""
    X: float = 0.0
    Y: float = 0.0
    Z: float = 0.0

    def __str__(self) -> str:
        return f"<{self.X:.2f}, {self.Y:.2f}, {self.Z:.2f}>"

    def __iter__(self):
        yield self.X
        yield self.Y
        yield self.Z

    def magnitude(self) -> float:
        return math.sqrt(self.X * self.X + self.Y * self.Y + self.Z * self.Z)

    def to_list(self) -> list[float]:
        """Components in wire order (x, y, z)."""
        return list(self)

    @classmethod
    def from_list(cls, values: list[float]) -> "Vector3":
        if len(values) != 3:
            raise ValueError(f"Vector3 needs 3 values, got {len(values)}.")
        x, y, z = values
        return cls(float(x), float(y), float(z))


@dataclasses.dataclass(slots=True)
class Vector4:
    """A 4-float tuple; glTF uses it for RGBA factors such as baseColorFactor."""
    X: float = 0.0
    Y: float = 0.0
    Z: float = 0.0
    W: float = 0.0

    def __str__(self) -> str:
        return f"<{self.X:.2f}, {self.Y:.2f}, {self.Z:.2f}, {self.W:.2f}>"

    def __iter__(self):
        yield self.X
        yield self.Y
        yield self.Z
        yield self.W

    def to_list(self) -> list[float]:
        return list(self)

    @classmethod
    def from_list(cls, values: list[float]) -> "Vector4":
        if len(values) != 4:
            raise ValueError(f"Vector4 needs 4 values, got {len(values)}.")
        x, y, z, w = values
        return cls(float(x), float(y), float(z), float(w))

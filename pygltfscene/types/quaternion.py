import math
from dataclasses import dataclass

from .vector import Vector3


@dataclass(slots=True)
class Quaternion:
    """
    A rotation quaternion in glTF wire order (X, Y, Z, W), W being the scalar
    part. Node rotations are expected to be unit length but are normalised
    again before use.
    """
    X: float = 0.0
    Y: float = 0.0
    Z: float = 0.0
    W: float = 1.0  # Identity

    def __str__(self) -> str:
        return f"<{self.X:.3f}, {self.Y:.3f}, {self.Z:.3f}, {self.W:.3f}>"

    def __iter__(self):
        yield self.X
        yield self.Y
        yield self.Z
        yield self.W

    @staticmethod
    def identity() -> "Quaternion":
        return Quaternion()

    def normalize(self) -> "Quaternion":
        """Unit-length copy; a zero quaternion normalises to identity."""
        length = math.sqrt(sum(c * c for c in self))
        if length < 1e-9:
            return Quaternion.identity()
        return Quaternion(*(c / length for c in self))

    @staticmethod
    def from_axis_angle(axis: Vector3, angle_rad: float) -> "Quaternion":
        length = axis.magnitude()
        if length == 0:
            return Quaternion.identity()
        s = math.sin(angle_rad / 2.0) / length
        return Quaternion(axis.X * s, axis.Y * s, axis.Z * s, math.cos(angle_rad / 2.0))

    def to_list(self) -> list[float]:
        return list(self)

    @classmethod
    def from_list(cls, values: list[float]) -> "Quaternion":
        if len(values) != 4:
            raise ValueError(f"Quaternion needs 4 values, got {len(values)}.")
        x, y, z, w = values
        return cls(float(x), float(y), float(z), float(w))

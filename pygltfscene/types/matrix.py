import math
import dataclasses
from .vector import Vector3, Vector4
from .quaternion import Quaternion

_EPSILON = 1e-6


@dataclasses.dataclass(slots=True)
class Matrix4:
    """
    A 4x4 transform acting on column vectors (``m * v``).

    Fields are named M<row><col>. glTF serialises matrices column-major, so the
    16 wire numbers go through from_column_major() / to_column_major().
    """
    M11: float = 1.0; M12: float = 0.0; M13: float = 0.0; M14: float = 0.0
    M21: float = 0.0; M22: float = 1.0; M23: float = 0.0; M24: float = 0.0
    M31: float = 0.0; M32: float = 0.0; M33: float = 1.0; M34: float = 0.0
    M41: float = 0.0; M42: float = 0.0; M43: float = 0.0; M44: float = 1.0

    def rows(self) -> list[list[float]]:
        return [[self.M11, self.M12, self.M13, self.M14],
                [self.M21, self.M22, self.M23, self.M24],
                [self.M31, self.M32, self.M33, self.M34],
                [self.M41, self.M42, self.M43, self.M44]]

    def to_list(self) -> list[float]:
        """All 16 elements, row by row."""
        return [value for row in self.rows() for value in row]

    @classmethod
    def from_list(cls, elements: list[float]) -> "Matrix4":
        """Builds a matrix from 16 numbers given row by row."""
        if len(elements) != 16:
            raise ValueError(f"Matrix4 needs 16 values, got {len(elements)}.")
        return cls(*(float(e) for e in elements))

    @classmethod
    def from_column_major(cls, elements: list[float]) -> "Matrix4":
        """Builds a matrix from 16 numbers in glTF order, column by column."""
        return cls.from_list(elements).transpose()

    def to_column_major(self) -> list[float]:
        return self.transpose().to_list()

    def transpose(self) -> "Matrix4":
        return Matrix4.from_list([value for column in zip(*self.rows()) for value in column])

    @property
    def translation(self) -> Vector3:
        return Vector3(self.M14, self.M24, self.M34)

    def is_identity(self, tolerance: float = _EPSILON) -> bool:
        return self.almost_equals(Matrix4(), tolerance)

    def almost_equals(self, other: "Matrix4", tolerance: float = _EPSILON) -> bool:
        return all(abs(a - b) <= tolerance for a, b in zip(self.to_list(), other.to_list()))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix4):
            return NotImplemented
        return self.almost_equals(other)

    def __mul__(self, other):
        rows = self.rows()
        if isinstance(other, Matrix4):
            columns = list(zip(*other.rows()))
            return Matrix4.from_list([sum(a * b for a, b in zip(row, column))
                                      for row in rows for column in columns])
        if isinstance(other, Vector4):
            return Vector4(*(sum(a * b for a, b in zip(row, other)) for row in rows))
        if isinstance(other, Vector3):
            # A point: w = 1, with perspective divide when w comes out different
            x, y, z, w = (row[0] * other.X + row[1] * other.Y + row[2] * other.Z + row[3]
                          for row in rows)
            if abs(w - 1.0) > _EPSILON and abs(w) > _EPSILON:
                return Vector3(x / w, y / w, z / w)
            return Vector3(x, y, z)
        return NotImplemented

    @staticmethod
    def create_identity() -> "Matrix4":
        return Matrix4()

    @staticmethod
    def create_translation(translation: Vector3) -> "Matrix4":
        return Matrix4(M14=translation.X, M24=translation.Y, M34=translation.Z)

    @staticmethod
    def create_scale(scale: Vector3) -> "Matrix4":
        return Matrix4(M11=scale.X, M22=scale.Y, M33=scale.Z)

    @staticmethod
    def create_from_quaternion(rotation: Quaternion) -> "Matrix4":
        x, y, z, w = rotation.normalize()
        return Matrix4(
            M11=1 - 2 * (y * y + z * z), M12=2 * (x * y - w * z), M13=2 * (x * z + w * y),
            M21=2 * (x * y + w * z), M22=1 - 2 * (x * x + z * z), M23=2 * (y * z - w * x),
            M31=2 * (x * z - w * y), M32=2 * (y * z + w * x), M33=1 - 2 * (x * x + y * y),
        )

    @staticmethod
    def create_from_trs(translation: Vector3, rotation: Quaternion, scale: Vector3) -> "Matrix4":
        """Local node transform T * R * S: scale first, then rotate, then translate."""
        return (Matrix4.create_translation(translation) *
                Matrix4.create_from_quaternion(rotation) *
                Matrix4.create_scale(scale))

    @staticmethod
    def create_perspective_fov(yfov: float, aspect_ratio: float, znear: float, zfar: float) -> "Matrix4":
        """glTF finite perspective projection (OpenGL clip space, camera looking down -Z)."""
        if yfov <= 0 or yfov >= math.pi: raise ValueError("yfov must be in (0, pi).")
        if aspect_ratio <= 0: raise ValueError("aspect_ratio must be positive.")
        if znear <= 0: raise ValueError("znear must be positive.")
        if zfar <= znear: raise ValueError("zfar must be greater than znear.")

        f = 1.0 / math.tan(yfov / 2.0)
        return Matrix4(M11=f / aspect_ratio, M22=f,
                       M33=(zfar + znear) / (znear - zfar),
                       M34=(2 * zfar * znear) / (znear - zfar),
                       M43=-1.0, M44=0.0)

    @staticmethod
    def create_perspective_infinite(yfov: float, aspect_ratio: float, znear: float) -> "Matrix4":
        """glTF infinite perspective projection, used when a camera has no zfar."""
        if yfov <= 0 or yfov >= math.pi: raise ValueError("yfov must be in (0, pi).")
        if aspect_ratio <= 0: raise ValueError("aspect_ratio must be positive.")
        if znear <= 0: raise ValueError("znear must be positive.")

        f = 1.0 / math.tan(yfov / 2.0)
        return Matrix4(M11=f / aspect_ratio, M22=f, M33=-1.0, M34=-2.0 * znear, M43=-1.0, M44=0.0)

    @staticmethod
    def create_orthographic(xmag: float, ymag: float, znear: float, zfar: float) -> "Matrix4":
        if xmag == 0 or ymag == 0: raise ValueError("xmag and ymag must be non-zero.")
        if zfar == znear: raise ValueError("zfar and znear must differ.")

        return Matrix4(M11=1.0 / xmag, M22=1.0 / ymag,
                       M33=2.0 / (znear - zfar),
                       M34=(zfar + znear) / (znear - zfar))

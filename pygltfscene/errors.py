"""
Error types raised while decoding a glTF document.

Every error carries the JSON path of the offending value (for example
``accessors[3].min``) so callers can point the user at the exact entity.
Decoding stops at the first error; no partial graph is ever returned.
"""


class GltfError(ValueError):
    """Base class for all decode failures."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(f"{path}: {message}" if path else message)
        self.message = message
        self.path = path


class MalformedDocument(GltfError):
    """The text is not JSON, or its top level is not an object."""


class MissingRequiredField(GltfError):
    def __init__(self, field: str, path: str = ""):
        super().__init__(f"missing required field '{field}'", path)
        self.field = field


class InvalidFieldType(GltfError):
    def __init__(self, expected: str, value, path: str = ""):
        super().__init__(f"expected {expected}, got {type(value).__name__}", path)
        self.expected = expected
        self.value = value


class UnknownEnumValue(GltfError):
    def __init__(self, enum_name: str, value, path: str = ""):
        super().__init__(f"unknown {enum_name} value {value!r}", path)
        self.enum_name = enum_name
        self.value = value


class IndexOutOfRange(GltfError):
    def __init__(self, index: int, length: int, target: str, path: str = ""):
        super().__init__(f"index {index} out of range for {target} (length {length})", path)
        self.index = index
        self.length = length
        self.target = target


class MalformedFixedArray(GltfError):
    def __init__(self, expected: int, actual: int, path: str = ""):
        super().__init__(f"expected an array of {expected} numbers, got {actual}", path)
        self.expected = expected
        self.actual = actual


class InvalidExclusiveFields(GltfError):
    def __init__(self, first: str, second: str, path: str = ""):
        super().__init__(f"exactly one of '{first}' or '{second}' must be present", path)
        self.fields = (first, second)


class UnimplementedFeature(GltfError):
    def __init__(self, feature: str, path: str = ""):
        super().__init__(f"'{feature}' is not supported", path)
        self.feature = feature


class InvalidByteRange(GltfError):
    def __init__(self, end: int, limit: int, path: str = ""):
        super().__init__(f"byte range ends at {end}, past the available {limit} bytes", path)
        self.end = end
        self.limit = limit


class InvalidHierarchy(GltfError):
    """A node is (directly or transitively) its own child."""


class LoadError(GltfError):
    """The document text could not be obtained from its source."""

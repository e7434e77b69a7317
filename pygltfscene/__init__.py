# Basic package metadata.

__version__ = "0.1.0"

from .errors import (
    GltfError, MalformedDocument, MissingRequiredField, InvalidFieldType, UnknownEnumValue,
    IndexOutOfRange, MalformedFixedArray, InvalidExclusiveFields, UnimplementedFeature,
    InvalidByteRange, InvalidHierarchy, LoadError,
)
from .settings import ParserSettings
from .types import Gltf
from .parser import GltfParser, parse, parse_document

__all__ = [
    "__version__",
    "parse", "parse_document", "GltfParser", "ParserSettings", "Gltf",
    "GltfError", "MalformedDocument", "MissingRequiredField", "InvalidFieldType",
    "UnknownEnumValue", "IndexOutOfRange", "MalformedFixedArray", "InvalidExclusiveFields",
    "UnimplementedFeature", "InvalidByteRange", "InvalidHierarchy", "LoadError",
]

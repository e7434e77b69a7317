# This file marks pygltfscene.structured_data as a Python package.

from .extras import (
    ExtraType,
    ExtraValue,
    ExtraBoolean,
    ExtraInteger,
    ExtraReal,
    ExtraString,
    ExtraMap,
    ExtraArray,
    to_extra_value,
)

__all__ = [
    "ExtraType",
    "ExtraValue",
    "ExtraBoolean",
    "ExtraInteger",
    "ExtraReal",
    "ExtraString",
    "ExtraMap",
    "ExtraArray",
    "to_extra_value",
]

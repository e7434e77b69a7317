"""
Typed readers for JSON object fields, checked index resolution, and decoders
for arrays of entities and fixed-size numeric tuples.

Every reader takes the JSON path of the object it reads from so that errors
name the exact offending value.
"""
from typing import Callable, Sequence, TypeVar

from pygltfscene.errors import (
    IndexOutOfRange, InvalidFieldType, MalformedFixedArray, MissingRequiredField
)
from pygltfscene.structured_data import ExtraValue, to_extra_value
from pygltfscene.types import Matrix4, Quaternion, Vector3, Vector4

T = TypeVar("T")

_MISSING = object()


def child_path(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def item_path(path: str, index: int) -> str:
    return f"{path}[{index}]"


def _is_int(value) -> bool:
    # bool is an int subclass but never a valid glTF integer
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def require(obj: dict, key: str, path: str):
    """Returns ``obj[key]`` or raises MissingRequiredField."""
    value = obj.get(key, _MISSING)
    if value is _MISSING:
        raise MissingRequiredField(key, path)
    return value


def _read(obj: dict, key: str, path: str, required: bool):
    if required:
        return require(obj, key, path)
    return obj.get(key, _MISSING)


def read_int(obj: dict, key: str, path: str, default=None, required: bool = False,
             minimum: int | None = 0):
    value = _read(obj, key, path, required)
    if value is _MISSING:
        return default
    if not _is_int(value):
        raise InvalidFieldType("an integer", value, child_path(path, key))
    if minimum is not None and value < minimum:
        raise InvalidFieldType(f"an integer >= {minimum}", value, child_path(path, key))
    return value


def read_float(obj: dict, key: str, path: str, default=None, required: bool = False):
    value = _read(obj, key, path, required)
    if value is _MISSING:
        return default
    if not _is_number(value):
        raise InvalidFieldType("a number", value, child_path(path, key))
    return float(value)


def read_str(obj: dict, key: str, path: str, default=None, required: bool = False):
    value = _read(obj, key, path, required)
    if value is _MISSING:
        return default
    if not isinstance(value, str):
        raise InvalidFieldType("a string", value, child_path(path, key))
    return value


def read_bool(obj: dict, key: str, path: str, default: bool = False) -> bool:
    value = obj.get(key, _MISSING)
    if value is _MISSING:
        return default
    if not isinstance(value, bool):
        raise InvalidFieldType("a boolean", value, child_path(path, key))
    return value


def read_object(obj: dict, key: str, path: str, required: bool = False) -> dict | None:
    value = _read(obj, key, path, required)
    if value is _MISSING:
        return None
    if not isinstance(value, dict):
        raise InvalidFieldType("an object", value, child_path(path, key))
    return value


def read_array(obj: dict, key: str, path: str, required: bool = False) -> list | None:
    value = _read(obj, key, path, required)
    if value is _MISSING:
        return None
    if not isinstance(value, list):
        raise InvalidFieldType("an array", value, child_path(path, key))
    return value


def resolve_index(arena: Sequence[T], index, target: str, path: str) -> T:
    """Looks ``index`` up in an already decoded arena, always bounds-checked."""
    if not _is_int(index):
        raise InvalidFieldType("an integer index", index, path)
    if index < 0 or index >= len(arena):
        raise IndexOutOfRange(index, len(arena), target, path)
    return arena[index]


def read_reference(obj: dict, key: str, arena: Sequence[T], target: str, path: str,
                   required: bool = False) -> T | None:
    """Reads an index field and resolves it against ``arena``."""
    value = _read(obj, key, path, required)
    if value is _MISSING:
        return None
    return resolve_index(arena, value, target, child_path(path, key))


def decode_index_array(value, arena: Sequence[T], target: str, path: str) -> list[T]:
    if not isinstance(value, list):
        raise InvalidFieldType("an array of indices", value, path)
    return [resolve_index(arena, index, target, item_path(path, i))
            for i, index in enumerate(value)]


def decode_number_array(value, path: str, length: int | None = None) -> list[float]:
    """Decodes a JSON array of numbers, optionally of an exact length."""
    if not isinstance(value, list):
        raise InvalidFieldType("an array of numbers", value, path)
    if length is not None and len(value) != length:
        raise MalformedFixedArray(length, len(value), path)
    for i, item in enumerate(value):
        if not _is_number(item):
            raise InvalidFieldType("a number", item, item_path(path, i))
    return [float(item) for item in value]


def decode_string_array(value, path: str) -> list[str]:
    if not isinstance(value, list):
        raise InvalidFieldType("an array of strings", value, path)
    for i, item in enumerate(value):
        if not isinstance(item, str):
            raise InvalidFieldType("a string", item, item_path(path, i))
    return list(value)


def decode_vec3(value, path: str) -> Vector3:
    return Vector3.from_list(decode_number_array(value, path, 3))


def decode_vec4(value, path: str) -> Vector4:
    return Vector4.from_list(decode_number_array(value, path, 4))


def decode_quat(value, path: str) -> Quaternion:
    return Quaternion.from_list(decode_number_array(value, path, 4))


def decode_mat4(value, path: str) -> Matrix4:
    """Decodes 16 numbers in glTF column-major order."""
    return Matrix4.from_column_major(decode_number_array(value, path, 16))


def decode_entity_array(array: list, path: str, decoder: Callable[[dict, str], T]) -> list[T]:
    """Runs ``decoder`` over every object of ``array``, in order."""
    result: list[T] = []
    for i, item in enumerate(array):
        item_at = item_path(path, i)
        if not isinstance(item, dict):
            raise InvalidFieldType("an object", item, item_at)
        result.append(decoder(item, item_at))
    return result


def read_extras(obj: dict) -> ExtraValue | None:
    if "extras" not in obj:
        return None
    return to_extra_value(obj["extras"])


def read_extensions(obj: dict, path: str) -> dict[str, ExtraValue]:
    extensions = read_object(obj, "extensions", path)
    if extensions is None:
        return {}
    return {name: to_extra_value(payload) for name, payload in extensions.items()}

"""
Opaque tagged values for glTF ``extras`` and ``extensions`` payloads.

The parser never interprets these payloads; it only wraps the JSON values in a
small tagged tree so downstream tooling can inspect or re-serialise them.
"""
import enum
import json


class ExtraType(enum.Enum):
    NULL = 0
    BOOLEAN = 1
    INTEGER = 2
    REAL = 3
    STRING = 4
    MAP = 5
    ARRAY = 6


class ExtraValue:
    """Base class for opaque values. A bare instance represents JSON null."""
    def __init__(self, type: ExtraType = ExtraType.NULL):
        self.extra_type: ExtraType = type

    def as_boolean(self) -> bool:
        raise TypeError(f"Cannot convert {self.extra_type} to Boolean")

    def as_integer(self) -> int:
        raise TypeError(f"Cannot convert {self.extra_type} to Integer")

    def as_real(self) -> float:
        raise TypeError(f"Cannot convert {self.extra_type} to Real")

    def as_string(self) -> str:
        raise TypeError(f"Cannot convert {self.extra_type} to String")

    def as_python_object(self):
        """Converts the value back to the plain JSON-compatible Python object."""
        if self.extra_type == ExtraType.NULL: return None
        if self.extra_type == ExtraType.BOOLEAN: return self.as_boolean()
        if self.extra_type == ExtraType.INTEGER: return self.as_integer()
        if self.extra_type == ExtraType.REAL: return self.as_real()
        if self.extra_type == ExtraType.STRING: return self.as_string()
        raise TypeError(f"Cannot convert {self.extra_type} to a simple Python object directly.")

    def to_bytes(self) -> bytes:
        """Serialises the payload as a compact UTF-8 JSON blob."""
        return json.dumps(self.as_python_object(), separators=(",", ":"),
                          ensure_ascii=False).encode("utf-8")

    def __eq__(self, other):
        return isinstance(other, ExtraValue) and type(other) is ExtraValue \
            and self.extra_type == other.extra_type

    def __hash__(self):
        return hash(self.extra_type)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} type={self.extra_type}>"


class ExtraBoolean(ExtraValue):
    def __init__(self, value: bool):
        super().__init__(ExtraType.BOOLEAN)
        self.value: bool = bool(value)

    def as_boolean(self) -> bool: return self.value
    def __repr__(self) -> str: return f"ExtraBoolean({self.value})"
    def __eq__(self, other): return isinstance(other, ExtraBoolean) and self.value == other.value
    def __hash__(self): return hash(self.value)


class ExtraInteger(ExtraValue):
    def __init__(self, value: int):
        super().__init__(ExtraType.INTEGER)
        self.value: int = int(value)

    def as_integer(self) -> int: return self.value
    def as_real(self) -> float: return float(self.value)
    def __repr__(self) -> str: return f"ExtraInteger({self.value})"
    def __eq__(self, other): return isinstance(other, ExtraInteger) and self.value == other.value
    def __hash__(self): return hash(self.value)


class ExtraReal(ExtraValue):
    def __init__(self, value: float):
        super().__init__(ExtraType.REAL)
        self.value: float = float(value)

    def as_real(self) -> float: return self.value
    def __repr__(self) -> str: return f"ExtraReal({self.value})"
    def __eq__(self, other): return isinstance(other, ExtraReal) and self.value == other.value
    def __hash__(self): return hash(self.value)


class ExtraString(ExtraValue):
    def __init__(self, value: str):
        super().__init__(ExtraType.STRING)
        self.value: str = str(value)

    def as_string(self) -> str: return self.value
    def __repr__(self) -> str: return f"ExtraString({self.value!r})"
    def __eq__(self, other): return isinstance(other, ExtraString) and self.value == other.value
    def __hash__(self): return hash(self.value)


class ExtraMap(ExtraValue, dict):
    def __init__(self, initial_dict: dict | None = None):
        ExtraValue.__init__(self, ExtraType.MAP)
        dict.__init__(self)
        if initial_dict:
            _fill(self, initial_dict)

    def as_python_object(self) -> dict:
        return _to_python(self)

    __eq__ = dict.__eq__
    __hash__ = None

    def __repr__(self) -> str: return f"ExtraMap({len(self)} items)"


class ExtraArray(ExtraValue, list):
    def __init__(self, initial_list: list | None = None):
        ExtraValue.__init__(self, ExtraType.ARRAY)
        list.__init__(self)
        if initial_list:
            _fill(self, initial_list)

    def as_python_object(self) -> list:
        return _to_python(self)

    __eq__ = list.__eq__
    __hash__ = None

    def __repr__(self) -> str: return f"ExtraArray({len(self)} items)"


def _wrap_scalar(data) -> ExtraValue:
    if isinstance(data, ExtraValue): return data
    if data is None: return ExtraValue()
    # bool before int: bool is an int subclass
    if isinstance(data, bool): return ExtraBoolean(data)
    if isinstance(data, int): return ExtraInteger(data)
    if isinstance(data, float): return ExtraReal(data)
    if isinstance(data, str): return ExtraString(data)
    raise TypeError(f"Cannot convert Python type {type(data)} to an extra value.")


def _items(source):
    if isinstance(source, dict):
        for key, value in source.items():
            if not isinstance(key, str):
                raise TypeError("ExtraMap keys must be strings.")
            yield key, value
    else:
        for index, value in enumerate(source):
            yield index, value


def _fill(target, source):
    """
    Copies ``source`` into the empty container ``target``, wrapping every value.

    Nesting is walked with an explicit stack, so payloads of any depth that
    json.loads accepted can be wrapped.
    """
    stack = [(target, source)]
    while stack:
        container, data = stack.pop()
        for key, value in _items(data):
            if isinstance(value, dict) and not isinstance(value, ExtraValue):
                child = ExtraMap()
                stack.append((child, value))
            elif isinstance(value, (list, tuple)) and not isinstance(value, ExtraValue):
                child = ExtraArray()
                stack.append((child, value))
            else:
                child = _wrap_scalar(value)
            if isinstance(container, dict):
                container[key] = child
            else:
                container.append(child)


def _to_python(value: ExtraValue):
    """Inverse of to_extra_value(), also walked with an explicit stack."""
    def unwrapped(item):
        if isinstance(item, ExtraMap): return {}
        if isinstance(item, ExtraArray): return []
        return item.as_python_object()

    result = unwrapped(value)
    stack = [(result, value)]
    while stack:
        target, source = stack.pop()
        for key, item in (source.items() if isinstance(source, dict) else enumerate(source)):
            plain = unwrapped(item)
            if isinstance(item, (ExtraMap, ExtraArray)):
                stack.append((plain, item))
            if isinstance(target, dict):
                target[key] = plain
            else:
                target.append(plain)
    return result


def to_extra_value(data) -> ExtraValue:
    """Wraps a decoded JSON value in its tagged equivalent."""
    if isinstance(data, ExtraValue): return data
    if isinstance(data, dict): return ExtraMap(data)
    if isinstance(data, (list, tuple)): return ExtraArray(list(data))
    return _wrap_scalar(data)

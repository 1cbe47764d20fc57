"""
Structural probes over decoded JSON values.

Payloads come from unknown third-party APIs, so every access goes through
these helpers instead of assuming a shape.
"""

from enum import Enum
from typing import Any


class JsonKind(str, Enum):
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


def kind_of(value: Any) -> JsonKind:
    if value is None:
        return JsonKind.NULL
    # bool is a subclass of int
    if isinstance(value, bool):
        return JsonKind.BOOLEAN
    if isinstance(value, (int, float)):
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, dict):
        return JsonKind.OBJECT
    if isinstance(value, (list, tuple)):
        return JsonKind.ARRAY
    raise TypeError(f"{type(value).__name__} is not a JSON value")


def is_object(value: Any) -> bool:
    return isinstance(value, dict)


def is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_scalar(value: Any) -> bool:
    return not is_object(value) and not is_array(value)


def has_field(value: Any, key: str, kind: JsonKind | None = None) -> bool:
    """True if value is an object with `key`, optionally of the given kind."""
    if not is_object(value) or key not in value:
        return False
    return kind is None or kind_of(value[key]) == kind


def get_field(value: Any, key: str, kind: JsonKind | None = None, default: Any = None) -> Any:
    if has_field(value, key, kind):
        return value[key]
    return default


def get_path(value: Any, *keys: str) -> Any:
    """Follows nested object keys, eg get_path(v, "formats", "thumbnail", "url")."""
    for key in keys:
        if not is_object(value) or key not in value:
            return None
        value = value[key]
    return value


def first_present(value: Any, keys: tuple[str, ...], kind: JsonKind | None = None) -> Any:
    """Returns the first non-empty field among `keys`, or None."""
    for key in keys:
        candidate = get_field(value, key, kind)
        if candidate not in (None, ""):
            return candidate
    return None

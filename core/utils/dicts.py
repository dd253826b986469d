import json
from typing import Any, cast

type KeyPath = tuple[str | int, ...]


def _step(d: Any, key: str | int) -> Any:
    if isinstance(key, int):
        if not isinstance(d, list):
            return None
        try:
            return cast(list[Any], d)[key]
        except IndexError:
            return None
    if not isinstance(d, dict):
        return None
    return cast(dict[str, Any], d).get(key)


def get_value(d: Any, *path: str | int) -> Any | None:
    """Return the node at 'path' or None if any step is missing or of an unexpected shape.

    String keys step into mappings, integer keys step into lists. Never raises.
    """
    for key in path:
        d = _step(d, key)
        if d is None:
            return None
    return d


def get_dict(d: Any, *path: str | int) -> dict[str, Any] | None:
    value = get_value(d, *path)
    if isinstance(value, dict):
        return cast(dict[str, Any], value)
    return None


def get_list(d: Any, *path: str | int) -> list[Any] | None:
    value = get_value(d, *path)
    if isinstance(value, list):
        return cast(list[Any], value)
    return None


def get_str(d: Any, *path: str | int) -> str | None:
    value = get_value(d, *path)
    if isinstance(value, str):
        return value
    return None


def get_str_dict(d: Any, *path: str | int) -> dict[str, str] | None:
    """Return the mapping at 'path' only if all of its values are strings"""
    value = get_dict(d, *path)
    if value is None or not all(isinstance(v, str) for v in value.values()):
        return None
    return cast(dict[str, str], value)


def dumps_or_none(d: Any) -> str | None:
    try:
        return json.dumps(d)
    except (TypeError, ValueError, RecursionError):
        # Unserializable values or trees nested deeper than the interpreter allows
        return None


def contains_any(d: Any, *needles: str) -> bool:
    """Serialize 'd' as JSON and check whether any of 'needles' appears in the result.

    Returns False when the tree cannot be serialized.
    """
    dumped = dumps_or_none(d)
    if dumped is None:
        return False
    return any(needle in dumped for needle in needles)

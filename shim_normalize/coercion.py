"""
Safe extraction of values from loosely-typed response documents.

Every accessor distinguishes three outcomes:

- found and well-typed: the coerced value is returned
- found and ill-typed: ``TypeMismatchError`` is raised
- not found: ``MissingRequiredFieldError`` for ``require_*``, ``None`` for ``optional_*``

JSON ``null`` is treated exactly like an absent field.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from .exceptions import MissingRequiredFieldError, TypeMismatchError

Path = str | int | Sequence[str | int]

_MISSING = object()


def _segments(path: Path) -> list[str | int]:
    """
    Split a path into segments.

    Digit segments index lists; on a mapping they are looked up as string keys.
    """
    if isinstance(path, int):
        return [path]
    if isinstance(path, str):
        return [int(part) if part.isdigit() else part for part in path.split(".")]
    return list(path)


def _format(path: Path) -> str:
    return ".".join(str(s) for s in _segments(path))


def _lookup(node: Any, path: Path) -> Any:
    current = node
    for segment in _segments(path):
        if isinstance(segment, int) and isinstance(current, Mapping):
            segment = str(segment)
        if isinstance(segment, int):
            if not isinstance(current, Sequence) or isinstance(current, (str, bytes)):
                return _MISSING
            if segment >= len(current):
                return _MISSING
            current = current[segment]
        else:
            if not isinstance(current, Mapping) or segment not in current:
                return _MISSING
            current = current[segment]
        if current is None:
            return _MISSING
    return current


def _as_double(value: Any, path: Path) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeMismatchError(
            f"Expected a number at '{_format(path)}', got {type(value).__name__}",
            path=_format(path),
            expected="double",
        )
    return float(value)


def _as_int(value: Any, path: Path) -> int:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeMismatchError(
            f"Expected an integer at '{_format(path)}', got {value!r}",
            path=_format(path),
            expected="int",
        )
    return value


def _as_string(value: Any, path: Path) -> str:
    if not isinstance(value, str):
        raise TypeMismatchError(
            f"Expected a string at '{_format(path)}', got {type(value).__name__}",
            path=_format(path),
            expected="string",
        )
    return value


def _as_bool(value: Any, path: Path) -> bool:
    if not isinstance(value, bool):
        raise TypeMismatchError(
            f"Expected a boolean at '{_format(path)}', got {type(value).__name__}",
            path=_format(path),
            expected="bool",
        )
    return value


def optional_node(node: Any, path: Path) -> Any | None:
    """Return the node at ``path``, or ``None`` if it is absent."""
    value = _lookup(node, path)
    return None if value is _MISSING else value


def require_node(node: Any, path: Path) -> Any:
    """
    Return the node at ``path``.

    Raises:
        MissingRequiredFieldError: If the node is absent or null
    """
    value = _lookup(node, path)
    if value is _MISSING:
        raise MissingRequiredFieldError(
            f"Required field '{_format(path)}' is missing",
            path=_format(path),
        )
    return value


def require_double(node: Any, path: Path) -> float:
    return _as_double(require_node(node, path), path)


def require_int(node: Any, path: Path) -> int:
    return _as_int(require_node(node, path), path)


def require_string(node: Any, path: Path) -> str:
    return _as_string(require_node(node, path), path)


def require_bool(node: Any, path: Path) -> bool:
    return _as_bool(require_node(node, path), path)


def optional_double(node: Any, path: Path) -> float | None:
    value = optional_node(node, path)
    return None if value is None else _as_double(value, path)


def optional_int(node: Any, path: Path) -> int | None:
    value = optional_node(node, path)
    return None if value is None else _as_int(value, path)


def optional_string(node: Any, path: Path) -> str | None:
    value = optional_node(node, path)
    return None if value is None else _as_string(value, path)


def optional_bool(node: Any, path: Path) -> bool | None:
    value = optional_node(node, path)
    return None if value is None else _as_bool(value, path)

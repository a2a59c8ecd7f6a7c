"""
Record inclusion policy.

Predicates return True when a raw record should produce a data point. A record
rejected here is filtered silently; it is not a mapping error.
"""

from collections.abc import Iterable
from typing import Any

from .coercion import Path, optional_node, optional_string


def admits_source(record: Any, field: Path, markers: Iterable[str]) -> bool:
    """
    Reject records whose originating source id contains any of ``markers``.

    Records without a source id are admitted.
    """
    source_id = optional_string(record, field)
    if source_id is None:
        return True
    return not any(marker in source_id for marker in markers)


def admits_measurement(record: Any, path: Path, sentinels: Iterable[Any] = (0,)) -> bool:
    """
    Reject records whose primary measurement equals a "not measured" sentinel.

    An absent field is not a sentinel; required coercion reports it instead.
    """
    value = optional_node(record, path)
    if value is None or isinstance(value, bool):
        return True
    return value not in tuple(sentinels)

"""
Request-body checks against an operation's JSON-schema-like description.

Only the keywords the registry tables actually use are understood: ``type``,
``required``, ``properties``, ``items``, ``pattern``, ``enum``, ``minimum``,
``maximum`` and ``maxItems``. Problems are collected, never raised.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Any, List, Mapping

_TYPE_CHECKS = {
    "string": lambda value: isinstance(value, str),
    "integer": lambda value: isinstance(value, int) and not isinstance(value, bool),
    "number": lambda value: isinstance(value, (int, float)) and not isinstance(value, bool),
    "boolean": lambda value: isinstance(value, bool),
    "array": lambda value: isinstance(value, (list, tuple)),
    "object": lambda value: isinstance(value, Mapping),
}


@lru_cache(maxsize=64)
def _compiled(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)


def validate_request_body(schema: Mapping[str, Any], body: Any) -> List[str]:
    """Return a list of human-readable problems; empty when the body conforms."""
    errors: List[str] = []
    _check(schema, body, "requestBody", errors)
    return errors


def _check(schema: Mapping[str, Any], value: Any, path: str, errors: List[str]) -> None:
    expected = schema.get("type")
    if expected is not None:
        check = _TYPE_CHECKS.get(expected)
        if check is not None and not check(value):
            errors.append(f"{path}: expected {expected}")
            return

    enum = schema.get("enum")
    if enum is not None and value not in enum:
        errors.append(f"{path}: must be one of {', '.join(map(str, enum))}")

    pattern = schema.get("pattern")
    if pattern is not None and isinstance(value, str) and not _compiled(pattern).fullmatch(value):
        errors.append(f"{path}: does not match pattern {pattern}")

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        minimum = schema.get("minimum")
        maximum = schema.get("maximum")
        if minimum is not None and value < minimum:
            errors.append(f"{path}: must be >= {minimum}")
        if maximum is not None and value > maximum:
            errors.append(f"{path}: must be <= {maximum}")

    if isinstance(value, (list, tuple)):
        max_items = schema.get("maxItems")
        if max_items is not None and len(value) > max_items:
            errors.append(f"{path}: at most {max_items} items allowed")
        item_schema = schema.get("items")
        if item_schema is not None:
            for index, item in enumerate(value):
                _check(item_schema, item, f"{path}[{index}]", errors)

    if isinstance(value, Mapping):
        for name in schema.get("required", ()):
            if name not in value:
                errors.append(f"{path}.{name}: is required")
        properties = schema.get("properties") or {}
        for name, item in value.items():
            prop_schema = properties.get(name)
            if prop_schema is not None:
                _check(prop_schema, item, f"{path}.{name}", errors)

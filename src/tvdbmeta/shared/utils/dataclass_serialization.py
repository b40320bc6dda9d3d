"""Dataclass serialization utilities for tvdbmeta.

This module converts catalog JSON payloads into dataclass records.

Design Principles:
- Type-safe (full mypy support)
- Wire names are mapped through ``field(metadata={"alias": ...})``
- Unknown keys are ignored, so new remote fields never break parsing
"""

from __future__ import annotations

from dataclasses import MISSING, Field, fields, is_dataclass
from datetime import datetime
from typing import Any, get_args, get_origin, get_type_hints


def _has_default(field: Field[Any]) -> bool:
    return field.default is not MISSING or field.default_factory is not MISSING


def _lookup_key(field: Field[Any], data: dict[str, Any]) -> str | None:
    """Return the key under which ``field`` appears in ``data``, if any."""
    if field.name in data:
        return field.name
    alias = field.metadata.get("alias") if field.metadata else None
    if alias is not None and alias in data:
        return alias
    return None


def _convert_value(field_type: Any, value: Any) -> Any:
    origin = get_origin(field_type)
    args = get_args(field_type) if origin is not None else ()

    # Optional[T] / T | None -> T
    if origin is not None and origin not in (list, dict):
        actual_types = [a for a in args if a is not type(None)]
        if actual_types:
            field_type = actual_types[0]
            origin = get_origin(field_type)
            args = get_args(field_type) if origin is not None else ()

    if field_type is datetime and isinstance(value, str):
        return datetime.fromisoformat(value)
    if is_dataclass(field_type) and isinstance(value, dict):
        return from_dict(field_type, value)
    if origin is list and isinstance(value, list):
        item_type = args[0] if args else None
        if item_type is not None and is_dataclass(item_type):
            return [
                from_dict(item_type, item) for item in value if isinstance(item, dict)
            ]
        return value
    if origin is dict and isinstance(value, dict):
        value_type = args[1] if len(args) > 1 else None
        if value_type is not None and is_dataclass(value_type):
            return {k: from_dict(value_type, v) for k, v in value.items()}
        return value
    return value


def from_dict(cls: type, data: dict[str, Any]) -> Any:
    """Create dataclass instance from dictionary.

    Supports:
    - Nested dataclasses
    - List/Dict of dataclasses
    - Optional fields
    - Field aliases (camelCase wire keys)

    A ``null`` wire value for a field that has a default keeps the default,
    so list fields stay lists when the service sends ``null``.

    Args:
        cls: Dataclass class to instantiate
        data: Dictionary with field values

    Returns:
        Dataclass instance

    Raises:
        TypeError: If cls is not a dataclass
        KeyError: If a required field is missing

    Example:
        >>> @dataclass
        ... class Genre:
        ...     id: int
        ...     name: str
        >>> from_dict(Genre, {'id': 1, 'name': 'Drama'}).name
        'Drama'
    """
    if not is_dataclass(cls):
        error_msg = f"{cls.__name__} is not a dataclass"
        raise TypeError(error_msg)

    type_hints = get_type_hints(cls)

    result: dict[str, Any] = {}

    for field in fields(cls):
        if not field.init:
            continue

        field_key = _lookup_key(field, data)
        if field_key is None:
            if _has_default(field):
                continue
            raise KeyError(f"Missing required field: {field.name}")

        value = data[field_key]
        if value is None:
            if _has_default(field):
                continue
            result[field.name] = None
            continue

        field_type = type_hints.get(field.name)
        result[field.name] = (
            _convert_value(field_type, value) if field_type is not None else value
        )

    return cls(**result)


__all__ = ["from_dict"]

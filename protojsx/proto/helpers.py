"""Utility helpers shared by the proto parsers."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from .models import MalformedInputError


def _field_path(parent: str, key: str | int) -> str:
    """Join a field name or sequence index onto a dotted path."""
    if isinstance(key, int):
        return f"{parent}[{key}]"
    return f"{parent}.{key}" if parent else key


def _describe(value: object) -> str:
    """Return a short type label used in error messages."""
    match value:
        case None:
            return "null"
        case bool():
            return "boolean"
        case int() | float():
            return "number"
        case str():
            return "string"
        case cabc.Mapping():
            return "mapping"
        case cabc.Sequence():
            return "sequence"
        case _:
            return type(value).__name__


def _expect_mapping(value: object, path: str) -> cabc.Mapping[str, typ.Any]:
    """Return ``value`` as a mapping or raise ``MalformedInputError``."""
    if not isinstance(value, cabc.Mapping):
        msg = f"expected a mapping, got {_describe(value)}"
        raise MalformedInputError(msg, path=path)
    return value


def _expect_sequence(value: object, path: str) -> cabc.Sequence[typ.Any]:
    """Return ``value`` as a non-string sequence or raise ``MalformedInputError``."""
    if isinstance(value, str | bytes) or not isinstance(value, cabc.Sequence):
        msg = f"expected a sequence, got {_describe(value)}"
        raise MalformedInputError(msg, path=path)
    return value


def _expect_str(value: object, path: str) -> str:
    """Return ``value`` as a string or raise ``MalformedInputError``."""
    if not isinstance(value, str):
        msg = f"expected a string, got {_describe(value)}"
        raise MalformedInputError(msg, path=path)
    return value


def _require_str(payload: cabc.Mapping[str, typ.Any], key: str, path: str) -> str:
    """Return the mandatory string field ``key`` of ``payload``."""
    if key not in payload:
        msg = f"missing required field '{key}'"
        raise MalformedInputError(msg, path=path)
    return _expect_str(payload[key], _field_path(path, key))


def _optional_str(payload: cabc.Mapping[str, typ.Any], key: str, path: str) -> str | None:
    """Return the optional string field ``key`` or ``None`` when absent or null."""
    value = payload.get(key)
    if value is None:
        return None
    return _expect_str(value, _field_path(path, key))


def _optional_bool(
    payload: cabc.Mapping[str, typ.Any], key: str, path: str, *, default: bool = False
) -> bool:
    """Return the optional boolean field ``key`` or ``default``."""
    value = payload.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        msg = f"expected a boolean, got {_describe(value)}"
        raise MalformedInputError(msg, path=_field_path(path, key))
    return value


def _optional_sequence(
    payload: cabc.Mapping[str, typ.Any], key: str, path: str
) -> cabc.Sequence[typ.Any]:
    """Return the optional sequence field ``key``, treating absence as empty."""
    value = payload.get(key)
    if value is None:
        return ()
    return _expect_sequence(value, _field_path(path, key))


def _unwrap_variant(
    value: object, path: str, variants: cabc.Collection[str]
) -> tuple[str, typ.Any, str]:
    """Split a single-key tagged mapping into ``(tag, payload, payload_path)``.

    Tagged unions are written as ``{Tag: payload}``; anything else, including a
    tag outside ``variants``, is rejected.
    """
    mapping = _expect_mapping(value, path)
    if len(mapping) != 1:
        expected = "|".join(variants)
        msg = f"expected a single-key mapping tagged {expected}, got {len(mapping)} keys"
        raise MalformedInputError(msg, path=path)
    tag, payload = next(iter(mapping.items()))
    if tag not in variants:
        expected = ", ".join(variants)
        msg = f"unknown variant '{tag}' (expected one of: {expected})"
        raise MalformedInputError(msg, path=path)
    return tag, payload, _field_path(path, tag)


__all__ = [
    "_describe",
    "_expect_mapping",
    "_expect_sequence",
    "_expect_str",
    "_field_path",
    "_optional_bool",
    "_optional_sequence",
    "_optional_str",
    "_require_str",
    "_unwrap_variant",
]

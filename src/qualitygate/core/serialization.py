# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Helpers for coercing analyzer JSON and serialising violations."""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping, Sequence
from pathlib import Path
from typing import TypeAlias

from pydantic import BaseModel

JsonValue: TypeAlias = str | int | float | bool | None | list["JsonValue"] | dict[str, "JsonValue"]


def coerce_optional_int(value: object) -> int | None:
    """Return an optional integer parsed from ``value`` when feasible."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def coerce_optional_str(value: object) -> str | None:
    """Return a string representation of ``value`` or ``None`` when unset."""
    if value is None:
        return None
    return str(value)


def coerce_positive_int(value: object, default: int) -> int:
    """Return ``value`` as a positive integer, falling back to ``default``.

    Analyzers report ``0`` or omit positions for file-level findings; both
    collapse onto ``default`` so every location stays one-based.
    """

    coerced = coerce_optional_int(value)
    if coerced is None or coerced < 1:
        return default
    return coerced


def is_sequence(value: object) -> bool:
    """Return ``True`` for list-like values that are not strings or bytes."""

    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def iter_dicts(value: object) -> Iterator[Mapping[str, object]]:
    """Yield mapping items from ``value`` when it is a sequence of dict-like objects."""

    if is_sequence(value):
        for item in value:  # type: ignore[union-attr]
            if isinstance(item, Mapping):
                yield item


def load_json_text(text: str) -> JsonValue:
    """Decode ``text`` as JSON, treating blank content as an empty list.

    Raises:
        json.JSONDecodeError: If ``text`` is not blank and not valid JSON.
    """

    stripped = text.strip()
    if not stripped:
        return []
    return json.loads(stripped)


def jsonify(value: object) -> JsonValue:
    """Convert ``value`` into a JSON-compatible structure."""

    if value is None:
        return None
    if isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Path):
        return value.as_posix()
    if isinstance(value, BaseModel):
        return jsonify(value.model_dump(mode="json", by_alias=True))
    if isinstance(value, Mapping):
        return {str(key): jsonify(item) for key, item in value.items()}
    if is_sequence(value) or isinstance(value, (set, frozenset)):
        return [jsonify(item) for item in value]  # type: ignore[union-attr]
    return str(value)


def dump_json(value: object) -> str:
    """Return ``value`` rendered as indented JSON text with a trailing newline."""

    return json.dumps(jsonify(value), indent=2) + "\n"


__all__ = [
    "JsonValue",
    "coerce_optional_int",
    "coerce_optional_str",
    "coerce_positive_int",
    "dump_json",
    "is_sequence",
    "iter_dicts",
    "jsonify",
    "load_json_text",
]

"""Walk a nested data record the way the explorer tree presents it."""

from __future__ import annotations

import datetime
from collections.abc import Iterator, Mapping, Sequence
from enum import StrEnum
from typing import Any

from .expressions import Index, Key, KeyPath, PathSegment


class NodeType(StrEnum):
    OBJECT = "Object"
    ARRAY = "Array"
    STRING = "String"
    NUMBER = "Number"
    BOOLEAN = "Boolean"
    DATE = "Date"
    NULL = "Null"
    CUSTOM = "Custom"


def node_type(value: Any) -> NodeType:
    if value is None:
        return NodeType.NULL
    if isinstance(value, bool):
        return NodeType.BOOLEAN
    if isinstance(value, (int, float)):
        return NodeType.NUMBER
    if isinstance(value, str):
        return NodeType.STRING
    if isinstance(value, (datetime.datetime, datetime.date)):
        return NodeType.DATE
    if isinstance(value, Mapping):
        return NodeType.OBJECT
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return NodeType.ARRAY
    return NodeType.CUSTOM


def sorted_keys(mapping: Mapping[str, Any]) -> list[str]:
    """Object keys in display order (case-insensitive)."""
    return sorted(mapping, key=lambda k: (str(k).casefold(), str(k)))


def children(value: Any) -> Iterator[tuple[PathSegment, Any]]:
    """Direct children of a container node, in display order."""
    kind = node_type(value)
    if kind is NodeType.OBJECT:
        for key in sorted_keys(value):
            yield Key(str(key)), value[key]
    elif kind is NodeType.ARRAY:
        for position, item in enumerate(value):
            yield Index(position), item


def iter_node_paths(
    data: Any, parent: KeyPath = ()
) -> Iterator[tuple[KeyPath, NodeType, Any]]:
    """Yield ``(key_path, node_type, value)`` for every node below ``data``.

    Key paths are deepest-first and the root itself is not yielded.
    """
    for segment, value in children(data):
        path: KeyPath = (segment, *parent)
        yield path, node_type(value), value
        yield from iter_node_paths(value, path)

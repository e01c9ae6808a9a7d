"""Template reference expressions for nodes inside a nested data record.

A *key path* is the ordered list of segments leading to a node, written
deepest-first: the clicked node's own key comes first and the segment directly
under the root comes last. The synthetic root itself is never part of the path.

```python
build_path_expression([Key("child"), Key("parent")])  # "parent.child"
build_path_expression([Index(2), Key("items")])  # "items[2]"
build_path_expression([Key("a-b")])  # '["a-b"]'
```
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import orjson
import regex

from .identifiers import is_valid_identifier

_LONE_SURROGATE = regex.compile(r"([\ud800-\udfff])")


@dataclass(frozen=True, slots=True)
class Key:
    """Object property segment."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class Index:
    """Array position segment."""

    position: int

    def __str__(self) -> str:
        return str(self.position)


PathSegment = Key | Index

KeyPath = tuple[PathSegment, ...]
"""Deepest-first segments from a node up to (excluding) the root."""


def coerce_segment(segment: PathSegment | str | int) -> PathSegment:
    """Accept raw ``str``/``int`` keys as produced by tree walkers.

    Strings are always object keys, even when they look numeric; only integers
    become array positions.
    """
    if isinstance(segment, (Key, Index)):
        return segment
    if isinstance(segment, str):
        return Key(segment)
    if isinstance(segment, int) and not isinstance(segment, bool):
        return Index(segment)
    raise TypeError(
        f"Path segment must be a string key or integer index, got {type(segment).__name__}"
    )


def _segment_expression(segment: PathSegment, root_adjacent: bool) -> str:
    if isinstance(segment, Index):
        return f"[{segment.position}]"
    if is_valid_identifier(segment.name):
        return segment.name if root_adjacent else f".{segment.name}"
    return f"[{_json_string(segment.name)}]"


def _json_string(value: str) -> str:
    """JSON string literal for ``value``; lone surrogates become ``\\uXXXX`` escapes."""
    pieces = []
    for i, part in enumerate(_LONE_SURROGATE.split(value)):
        if i % 2:
            pieces.append(f"\\u{ord(part):04x}")
        elif part:
            pieces.append(orjson.dumps(part).decode("utf-8")[1:-1])
    return '"' + "".join(pieces) + '"'


def build_path_expression(segments: Iterable[PathSegment | str | int]) -> str:
    """Build the template expression addressing the node at ``segments``.

    ``segments`` is deepest-first. Index segments become ``[n]``, identifier keys
    become ``.key`` (bare for the segment directly under the root) and every
    other key becomes a bracketed JSON string literal. The pieces are joined
    root-first with no separator.

    Raises:
        ValueError: if the path is empty; the root has no expression.
        TypeError: if a segment is neither a string nor an integer.
    """
    path = [coerce_segment(segment) for segment in segments]
    if not path:
        raise ValueError("The root node has no template expression")

    last = len(path) - 1
    parts = [
        _segment_expression(segment, root_adjacent=i == last)
        for i, segment in enumerate(path)
    ]
    return "".join(reversed(parts))


def template_reference(expression: str) -> str:
    """Output tag for a single value, e.g. ``{{creators[0].lastName}}``."""
    return f"{{{{{expression}}}}}"


def loop_template(expression: str) -> str:
    """Loop snippet iterating over an array node."""
    return f"{{% for item in {expression} %}}\n{{% item %}}\n{{% endfor %}}"

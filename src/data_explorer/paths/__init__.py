"""Derive template expressions from positions inside nested data."""

from .expressions import (
    Index,
    Key,
    KeyPath,
    PathSegment,
    build_path_expression,
    coerce_segment,
    loop_template,
    template_reference,
)
from .identifiers import IDENTIFIER_PATTERN, is_valid_identifier
from .tree import NodeType, children, iter_node_paths, node_type, sorted_keys

__all__ = [
    "IDENTIFIER_PATTERN",
    "Index",
    "Key",
    "KeyPath",
    "NodeType",
    "PathSegment",
    "build_path_expression",
    "children",
    "coerce_segment",
    "is_valid_identifier",
    "iter_node_paths",
    "loop_template",
    "node_type",
    "sorted_keys",
    "template_reference",
]

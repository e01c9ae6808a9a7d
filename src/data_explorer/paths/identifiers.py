"""Identifier classification for template path segments.

Template expressions are parsed by an ECMAScript-style expression grammar, so a
key can only be emitted as a bare property name when it is a valid identifier in
that grammar:

- first character: ``$``, ``_`` or any code point with the Unicode ``ID_Start``
  property
- following characters: ``$``, ZERO WIDTH NON-JOINER (U+200C), ZERO WIDTH
  JOINER (U+200D) or any code point with the Unicode ``ID_Continue`` property

The standard library ``re`` module has no Unicode property classes and
``str.isidentifier`` follows the Python grammar (``XID_*`` after NFKC), which
accepts and rejects different code points, so the ``regex`` package is used to
express the classes exactly.
"""

from __future__ import annotations

import regex

IDENTIFIER_PATTERN = "[$_\\p{ID_Start}][$\u200c\u200d\\p{ID_Continue}]*"
"""Lexical grammar of an identifier name, without anchors."""

_IDENTIFIER = regex.compile(IDENTIFIER_PATTERN)


def is_valid_identifier(key: str) -> bool:
    """Return True when ``key`` can be written as a bare property name.

    No normalization or trimming is applied; the empty string is not an
    identifier.
    """
    return _IDENTIFIER.fullmatch(key) is not None

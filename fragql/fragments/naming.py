"""Placeholder name generation.

Every fragment that captures a literal value names it ``<tag><hex>``, where
the tag records which kind of fragment produced the placeholder (``lit``,
``func``, ``where``).  The tag exists for debuggability only; merging never
looks at it.

The hex part is drawn from :mod:`random`, not :mod:`secrets`.  Names are
unique with overwhelming probability inside one statement, which is all the
bound-value mapping needs.
"""
from __future__ import annotations

import random

HEX_ALPHABET = "0123456789abcdef"

#: Default number of hex characters in a generated placeholder name.
DEFAULT_LENGTH = 8

#: Tag used by :class:`~fragql.fragments.basic.Literal`.
LITERAL_TAG = "lit"

#: Tag used for bare :class:`~fragql.fragments.basic.Fn` arguments.
FUNCTION_TAG = "func"

#: Tag used for bare right-hand values of :class:`~fragql.fragments.clauses.Where`.
WHERE_TAG = "where"


def insecure_hex_string(length: int) -> str:
    """Return ``length`` random lowercase hex characters.

    Not suitable for anything security related; use it only where a cheap,
    synchronous unique-enough identifier is wanted.
    """
    return "".join(random.choice(HEX_ALPHABET) for _ in range(length))


def new_placeholder(tag: str, length: int = DEFAULT_LENGTH) -> str:
    """Return a fresh placeholder name such as ``where3fa9c01b``.

    Args:
        tag: Short origin prefix.
        length: Number of hex characters after the tag.

    Returns:
        The placeholder name, without the leading colon.
    """
    return f"{tag}{insecure_hex_string(length)}"


def placeholder_token(name: str) -> str:
    """Return the SQL token for a placeholder name (``:name``)."""
    return f":{name}"

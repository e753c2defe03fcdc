"""Encoding, decoding, and dereferencing of document pointers.

Pointers follow RFC 6901, restricted to the fragment form used by ``$ref`` in OpenAPI
and Swagger documents: a pointer is the string ``"#/"`` followed by ``/``-separated
segments. Within a segment, ``~`` is written as ``~0`` and ``/`` as ``~1``.

"""

from typing import Any, Mapping, Sequence
import re

from . import types as _types
from .exceptions import PointerFormatError

#: The prefix every dereferenceable pointer must begin with.
ROOT_PREFIX = "#/"

# keys of the placeholder substituted for a pointer that does not resolve
REF_KEY = "$ref"
UNRESOLVED_KEY = "$unresolved"
ERROR_KEY = "$error"

# an array index: no sign, no leading zeros, ASCII digits only
_INDEX_PATTERN = re.compile(r"0|[1-9][0-9]*")


# segments =============================================================================


def encode_segment(raw: str) -> str:
    """Escape a raw key so that it can be used as a pointer segment.

    The order of replacement matters: tildes must be escaped before slashes, or the
    tilde introduced by ``~1`` would itself be escaped.

    >>> encode_segment("a/b~c")
    'a~1b~0c'

    """
    return raw.replace("~", "~0").replace("/", "~1")


def decode_segment(token: str) -> str:
    """Unescape a pointer segment back into the raw key.

    >>> decode_segment("a~1b~0c")
    'a/b~c'

    """
    return token.replace("~1", "/").replace("~0", "~")


def join_pointer(*segments: str) -> str:
    """Build a pointer from raw (unescaped) keys."""
    return ROOT_PREFIX + "/".join(encode_segment(s) for s in segments)


def schema_name_from_pointer(pointer: str) -> str:
    """Return the schema name a pointer refers to: its last segment, decoded."""
    return decode_segment(pointer.split("/")[-1])


# placeholders =========================================================================


def make_placeholder(pointer: str) -> _types.DocumentDict:
    """Build the placeholder that stands in for a pointer that does not resolve."""
    return {
        REF_KEY: pointer,
        UNRESOLVED_KEY: True,
        ERROR_KEY: f"Reference not found: {pointer}",
    }


def is_unresolved(node: Any) -> bool:
    """Check if the node is a placeholder created by :func:`make_placeholder`."""
    return isinstance(node, Mapping) and node.get(UNRESOLVED_KEY) is True


# dereferencing ========================================================================


def _child(node: Any, key: str) -> tuple[bool, Any]:
    """Look up a key in a mapping or an RFC 6901 array index in a list."""
    if isinstance(node, Mapping):
        if key in node:
            return True, node[key]
        return False, None

    if isinstance(node, Sequence) and not isinstance(node, str):
        if _INDEX_PATTERN.fullmatch(key) and int(key) < len(node):
            return True, node[int(key)]

    return False, None


def resolve_pointer(document: _types.Document, pointer: str) -> Any:
    """Return the node of the document located by the pointer.

    Parameters
    ----------
    document
        The root of the document.
    pointer
        A pointer beginning with ``"#/"``.

    Returns
    -------
    Any
        The node found at the pointer. The node is part of the document and must not
        be mutated. If the pointer does not lead anywhere, a placeholder dictionary is
        returned instead (see :func:`make_placeholder`); this is not an error.

    Raises
    ------
    PointerFormatError
        If the pointer does not begin with ``"#/"``.

    """
    if not isinstance(pointer, str) or not pointer.startswith(ROOT_PREFIX):
        raise PointerFormatError(f'must start with "{ROOT_PREFIX}"', pointer)

    current: Any = document
    for token in pointer[len(ROOT_PREFIX) :].split("/"):
        found, current = _child(current, decode_segment(token))
        if not found:
            return make_placeholder(pointer)

    return current

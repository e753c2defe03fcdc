"""Provides functions for finding references anywhere within a document.

Unlike the expansion performed by :class:`schemaref.SchemaResolver`, these functions
do not follow references and do not care what kind of object they are looking at: they
search every dictionary and list, so they can be used on parts of a document that are
not schemas, such as an operation's request body or responses.

"""

from typing import Any, Mapping, Sequence
import dataclasses

from ._pointers import REF_KEY
from .types import KeyPath


@dataclasses.dataclass(frozen=True)
class RefInfo:
    """A reference found within a document."""

    #: The pointer held by the reference.
    ref: str

    #: The keys (and list indices, as strings) leading to the reference.
    keypath: KeyPath


def _children(node: Any):
    if isinstance(node, Mapping):
        yield from ((str(key), value) for key, value in node.items() if key != REF_KEY)
    elif isinstance(node, Sequence) and not isinstance(node, str):
        yield from ((str(ix), value) for ix, value in enumerate(node))


def extract_refs(
    node: Any, max_depth: int = 10, keypath: KeyPath = tuple()
) -> list[RefInfo]:
    """Find every reference within the node.

    Parameters
    ----------
    node
        Any part of a document.
    max_depth
        The search does not look at nodes nested more than this many levels below
        `node`. This bounds the work done on very deep or self-containing structures.
    keypath
        The keypath of `node` itself; prepended to the keypaths that are reported.

    Returns
    -------
    list[RefInfo]
        The references found, in depth-first order. A dictionary holding a reference
        is reported before any references nested within its other keys.

    """
    refs: list[RefInfo] = []
    _extract_into(refs, node, max_depth, keypath, level=0)
    return refs


def _extract_into(refs, node, max_depth, keypath, level):
    if level >= max_depth:
        return

    if isinstance(node, Mapping) and isinstance(node.get(REF_KEY), str):
        refs.append(RefInfo(node[REF_KEY], keypath))

    for key, child in _children(node):
        _extract_into(refs, child, max_depth, keypath + (key,), level + 1)


def extract_first_ref(node: Any, max_depth: int = 10) -> str | None:
    """Return the pointer of the first reference found by :func:`extract_refs`."""
    refs = extract_refs(node, max_depth)
    return refs[0].ref if refs else None


def has_refs(node: Any, max_depth: int = 10) -> bool:
    """Check if the node contains any reference."""
    return extract_first_ref(node, max_depth) is not None

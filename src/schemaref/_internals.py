"""Internal representation of document nodes, and the machinery for expanding them.

This module is the implementation core of schemaref. It defines the node types used to
classify the parts of a document, and the two traversals performed over them: the
*expansion* of a schema, which inlines every reference, and the *dependency walk*,
which only records the names of the schemas that can be reached.

The public entry point is :class:`schemaref.SchemaResolver` (in ``_resolver.py``), which
adds name lookup and caching on top of the machinery defined here.

Background
==========

A document (such as an OpenAPI description) is a tree of dictionaries, lists, and
scalars. Some dictionaries are *references*: they hold a pointer under the ``"$ref"``
key, and stand for the part of the document that the pointer locates:

    .. code:: python

        {
            "components": {
                "schemas": {
                    "User": {
                        "type": "object",
                        "properties": {
                            "profile": {"$ref": "#/components/schemas/Profile"},
                        },
                    },
                    "Profile": {"type": "object", "properties": {}},
                }
            }
        }

If we draw an edge from each reference to the node it points at, the document tree
becomes a *document graph*. Expanding a schema is a depth-first traversal of this graph
starting at the schema, copying the nodes it visits and substituting the target of
each reference for the reference itself. The graph may contain cycles
(a ``Node`` schema whose ``children`` are a list of ``Node``), so the traversal must
know when to stop.

Node Types
==========

Each raw value is classified by make_node() into one of four node types:

    _ScalarNode: strings, numbers, booleans, and None.

    _SequenceNode: lists.

    _MappingNode: dictionaries that are not references.

    _ReferenceNode: dictionaries with a string under ``"$ref"``.

Nodes are created lazily, as the traversal reaches them, and wrap the raw value without
copying it. Every node implements ``.expand()`` and ``.collect()``, one method for each
of the two traversals.

Expansion
=========

Only three kinds of node are descended into during expansion:

    1. References are followed. This is the only step that increases the *depth* of
       the expansion. A reference found at the maximum depth is left as-is.

    2. Mappings with ``"type": "object"`` have each of their ``"properties"`` expanded.

    3. Mappings with ``"type": "array"`` have their ``"items"`` expanded.

Everything else is returned unchanged. Descending into properties and items does not
increase the depth, but it does increase the *nesting*, which is bounded separately.

Circular References
-------------------

The expansion keeps a stack of the names of the schemas being expanded on the active
branch, in an _Expansion object that is created afresh for every top-level call. When a
reference to a name already on the stack is found, the cycle is recorded as a
diagnostic such as ``"A -> B -> A"`` and the reference is left unexpanded. A name may
appear on many branches; it is only a cycle if it reappears on the same one.

Unresolved References
---------------------

A reference whose pointer does not lead anywhere is replaced by a placeholder
dictionary marked with ``"$unresolved": True``. This is not an error: the rest of the
schema is expanded as usual.

Dependency Walk
===============

The dependency walk follows the same edges as the expansion but keeps a set of the
names it has visited instead of a stack, and has no depth limit. A name is entered at
most once, so the walk always terminates. Since a chain of references may be
arbitrarily long, the walk is driven by a loop over an explicit stack of values to
visit rather than by recursion: each node's ``.collect()`` returns its children
instead of visiting them itself.

Deep Schemas
============

The expansion is recursive, and so is the copy made of its result. A chain of
references long enough to exhaust the interpreter's stack (with a large ``max_depth``
and ``max_nesting``) produces an unsuccessful result rather than a ``RecursionError``.

"""

from typing import Any, Iterable, Mapping, Sequence
import abc
import logging

from . import types as _types
from ._pointers import (
    ERROR_KEY,
    REF_KEY,
    is_unresolved,
    resolve_pointer,
    schema_name_from_pointer,
)
from ._utils import unique
from .exceptions import PointerFormatError

logger = logging.getLogger(__name__)

CYCLE_SEPARATOR = " -> "

TOO_DEEP_ERROR = (
    "Schema is nested too deeply to expand; lower max_depth or max_nesting"
)


# traversal state ======================================================================
#
# Everything that changes during a traversal lives in one of these objects. A new one is
# made for each top-level call, so that concurrent calls never share state.


class _Expansion:
    """The state of a single expansion.

    Attributes
    ----------
    document : Document
        The root of the document that pointers are resolved against.
    max_depth : int
        The maximum number of reference hops to follow along a branch.
    max_nesting : int
        The maximum number of properties/items to descend through along a branch.
    path : list[str]
        The names of the schemas currently being expanded on the active branch.
    dependencies : list[str]
        Every schema name encountered, in order, with repetitions.
    circular_references : list[str]
        Descriptions of every cycle found, in order, with repetitions.

    """

    def __init__(self, document: _types.Document, max_depth: int, max_nesting: int):
        self.document = document
        self.max_depth = max_depth
        self.max_nesting = max_nesting
        self.path: list[str] = []
        self.dependencies: list[str] = []
        self.circular_references: list[str] = []


class _DependencyWalk:
    """The state of a single dependency walk."""

    def __init__(self, document: _types.Document, visited: set[str]):
        self.document = document
        self.visited = visited
        self.dependencies: list[str] = []


# node types ===========================================================================

type _ConcreteNode = _ScalarNode | _SequenceNode | _MappingNode | _ReferenceNode


class _Node(abc.ABC):
    """Abstract base class for all nodes.

    Attributes
    ----------
    value : Any
        The raw value from the document. It is never mutated.

    """

    def __init__(self, value: Any):
        self.value = value

    @abc.abstractmethod
    def expand(self, expansion: _Expansion, depth: int, nesting: int) -> Any:
        """Return a copy of the node with references inlined.

        Parameters
        ----------
        expansion : _Expansion
            The state of the expansion in progress.
        depth : int
            The number of references followed to reach this node.
        nesting : int
            The number of properties/items descended through to reach this node.

        """

    def collect(self, walk: _DependencyWalk) -> Iterable[Any]:
        """Record this node's name, if any, and return the raw values to visit next."""
        return ()


# _ScalarNode --------------------------------------------------------------------------


class _ScalarNode(_Node):
    """A string, number, boolean, or None."""

    def expand(self, expansion, depth, nesting):
        return self.value


# _SequenceNode ------------------------------------------------------------------------


class _SequenceNode(_Node):
    """A list. Lists (such as ``"allOf"`` or ``"required"``) are not descended into."""

    def expand(self, expansion, depth, nesting):
        return self.value


# _MappingNode -------------------------------------------------------------------------


class _MappingNode(_Node):
    """A dictionary that is not a reference."""

    def _child_key(self) -> str | None:
        """The key of the child to descend into, or None if there is none.

        Object schemas descend into their properties, array schemas into their items.

        """
        schema_type = self.value.get("type")

        if schema_type == "object" and isinstance(self.value.get("properties"), Mapping):
            return "properties"

        if schema_type == "array" and self.value.get("items") is not None:
            return "items"

        return None

    def expand(self, expansion, depth, nesting):
        key = self._child_key()
        if key is None:
            return self.value

        if nesting >= expansion.max_nesting:
            logger.warning(
                "Schema nesting exceeds %d levels; leaving %r unexpanded.",
                expansion.max_nesting,
                key,
            )
            return self.value

        if key == "properties":
            expanded = {
                name: make_node(child).expand(expansion, depth, nesting + 1)
                for name, child in self.value["properties"].items()
            }
        else:
            expanded = make_node(self.value["items"]).expand(
                expansion, depth, nesting + 1
            )

        return {**self.value, key: expanded}

    def collect(self, walk):
        key = self._child_key()
        if key == "properties":
            return list(self.value["properties"].values())
        elif key == "items":
            return [self.value["items"]]
        return ()


# _ReferenceNode -----------------------------------------------------------------------


class _ReferenceNode(_Node):
    """A dictionary holding a pointer under ``"$ref"``.

    Attributes
    ----------
    pointer : str
        The pointer to the referenced node.
    name : str
        The name of the referenced schema; the last segment of the pointer.

    """

    def __init__(self, value: Any):
        super().__init__(value)
        self.pointer: str = value[REF_KEY]
        self.name = schema_name_from_pointer(self.pointer)

    def expand(self, expansion, depth, nesting):
        """Replace the reference by the expansion of its target.

        The reference is returned unchanged if the maximum depth has been reached, or
        if following it would close a cycle on the active branch. In the latter case the
        cycle is recorded.

        """
        expansion.dependencies.append(self.name)

        if depth >= expansion.max_depth:
            return self.value

        if self.name in expansion.path:
            cycle = CYCLE_SEPARATOR.join([*expansion.path, self.name])
            expansion.circular_references.append(cycle)
            return self.value

        target = resolve_pointer(expansion.document, self.pointer)
        if is_unresolved(target):
            return target

        expansion.path.append(self.name)
        try:
            return make_node(target).expand(expansion, depth + 1, nesting)
        finally:
            expansion.path.pop()

    def collect(self, walk):
        if self.name in walk.visited:
            return ()

        walk.visited.add(self.name)
        walk.dependencies.append(self.name)

        target = resolve_pointer(walk.document, self.pointer)
        if is_unresolved(target):
            return ()
        return [target]


# make_node() ==========================================================================


def make_node(value: Any) -> _ConcreteNode:
    """Classify a raw document value as one of the node types."""
    if isinstance(value, Mapping):
        if isinstance(value.get(REF_KEY), str):
            return _ReferenceNode(value)
        return _MappingNode(value)
    elif isinstance(value, Sequence) and not isinstance(value, str):
        return _SequenceNode(value)
    else:
        return _ScalarNode(value)


# traversals ===========================================================================


def expand(
    document: _types.Document,
    pointer: str,
    options: _types.ResolveOptions,
) -> _types.ResolveResult:
    """Expand the schema located by the pointer.

    Parameters
    ----------
    document
        The root of the document.
    pointer
        The pointer to the schema to expand. Its last segment names the schema.
    options
        The (already validated) resolution options.

    Returns
    -------
    ResolveResult
        The outcome. Malformed pointers and a root pointer that does not resolve yield
        an unsuccessful result; they are never raised.

    """
    expansion = _Expansion(document, options.max_depth, options.max_nesting)

    try:
        target = resolve_pointer(document, pointer)
        if is_unresolved(target):
            return _types.ResolveResult.failure(target[ERROR_KEY])

        expansion.dependencies.append(schema_name_from_pointer(pointer))
        schema = make_node(target).expand(expansion, depth=0, nesting=0)

        if options.include_circular:
            circular_references = tuple(unique(expansion.circular_references))
        else:
            circular_references = ()

        result = _types.ResolveResult(
            success=True,
            schema=schema,
            dependencies=tuple(unique(expansion.dependencies)),
            circular_references=circular_references,
        )

        # the cache copies the schema again at this same call depth, so if this copy
        # fits on the stack, so will the cache's
        return result.detached()

    except PointerFormatError as exc:
        logger.debug("Could not expand %s: %s", pointer, exc)
        return _types.ResolveResult.failure(str(exc))
    except RecursionError:
        logger.warning("Could not expand %s: the stack was exhausted.", pointer)
        return _types.ResolveResult.failure(TOO_DEEP_ERROR)


def collect_dependencies(
    document: _types.Document, pointer: str, root_name: str
) -> list[str]:
    """Return the names of all schemas reachable from the schema at the pointer.

    The root schema itself is excluded, even if it can be reached through a cycle.

    Raises
    ------
    PointerFormatError
        If a malformed pointer is encountered.

    """
    target = resolve_pointer(document, pointer)
    if is_unresolved(target):
        return []

    walk = _DependencyWalk(document, visited={root_name})

    # children are pushed in reverse so that they are visited in document order
    stack = [target]
    while stack:
        children = make_node(stack.pop()).collect(walk)
        stack.extend(reversed(list(children)))

    return unique(walk.dependencies)

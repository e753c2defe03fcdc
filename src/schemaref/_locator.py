"""Provides locate_all(), which indexes the named schemas of a document."""

from typing import Any, Iterator, Mapping

from . import types as _types
from ._pointers import join_pointer

#: Containers of named schemas, in order of precedence. OpenAPI 3.x keeps its schemas
#: under ``components/schemas``; Swagger 2.x keeps them under ``definitions``. When a
#: name appears in more than one container, the first container wins.
SCHEMA_CONTAINERS: tuple[_types.ContainerPath, ...] = (
    ("components", "schemas"),
    ("definitions",),
)


def _get_container(
    document: _types.Document, path: _types.ContainerPath
) -> Mapping[str, Any] | None:
    """Walk down the container path, returning None if it does not lead to a mapping."""
    current: Any = document
    for key in path:
        if not isinstance(current, Mapping) or key not in current:
            return None
        current = current[key]

    if not isinstance(current, Mapping):
        return None

    return current


def _iter_named_schemas(
    document: _types.Document,
) -> Iterator[tuple[str, _types.ContainerPath, Any]]:
    """Yield (name, container path, schema) for every named schema, by precedence."""
    for path in SCHEMA_CONTAINERS:
        container = _get_container(document, path)
        if container is None:
            continue
        for name, schema in container.items():
            yield name, path, schema


def locate_all(document: _types.Document) -> _types.SchemaIndex:
    """Build an index mapping each schema name to the pointer that locates it.

    Names are escaped when building the pointer, so a schema named ``"a/b"`` in
    ``components/schemas`` is located by ``"#/components/schemas/a~1b"``.

    This does not cache its result and may be called any number of times.

    """
    index: _types.SchemaIndex = {}
    for name, path, _ in _iter_named_schemas(document):
        if name not in index:
            index[name] = join_pointer(*path, name)
    return index


def collect_schemas(document: _types.Document) -> dict[str, Any]:
    """Map each schema name to its raw, unresolved schema.

    Precedence between containers is the same as in :func:`locate_all`.

    """
    schemas: dict[str, Any] = {}
    for name, _, schema in _iter_named_schemas(document):
        schemas.setdefault(name, schema)
    return schemas

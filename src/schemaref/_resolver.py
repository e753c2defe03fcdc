"""Provides SchemaResolver, the entry point for expanding the schemas of a document."""

from typing import Any, Mapping
import logging

from . import types as _types
from ._cache import CacheKey, ResolutionCache
from ._internals import collect_dependencies, expand
from ._locator import collect_schemas, locate_all
from ._options import validate_options

logger = logging.getLogger(__name__)


class SchemaResolver:
    """Expands the named schemas of a single, unchanging document.

    A resolver is made once per loaded document. Results are cached for the lifetime of
    the resolver; if the document changes, make a new resolver (or call
    :meth:`clear_cache`).

    The resolver holds no traversal state between calls, so a single instance can be
    used from several threads at once.

    Parameters
    ----------
    document : Document
        The parsed document, e.g., an OpenAPI 3.x or Swagger 2.x description loaded
        from JSON or YAML. It is never modified.

    Example
    -------

    .. code:: python

        resolver = SchemaResolver(document)
        result = resolver.resolve_by_name("User", max_depth=5)
        if result.success:
            print(result.schema, result.dependencies)

    """

    def __init__(self, document: _types.Document):
        self.document = document
        self._cache = ResolutionCache()

    # resolution -----------------------------------------------------------------------

    def resolve_by_name(
        self,
        name: str,
        options: _types.ResolveOptions | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> _types.ResolveResult:
        """Expand the schema with the given name.

        Parameters
        ----------
        name : str
            The name of the schema, as it appears as a key in ``components/schemas``
            or ``definitions``.
        options : ResolveOptions | Mapping[str, Any] | None
            The resolution options. See :class:`ResolveOptions`.
        **overrides
            Individual options, overriding those in `options`. For example,
            ``resolve_by_name("User", max_depth=2)``.

        Returns
        -------
        ResolveResult
            If no schema has the given name, the result is unsuccessful and its error
            mentions the name.

        Raises
        ------
        InvalidOptionsError
            If the options are invalid.

        """
        resolve_options = _merge_options(options, overrides)
        key: CacheKey = (
            "name",
            name,
            resolve_options.max_depth,
            resolve_options.include_circular,
            resolve_options.max_nesting,
        )

        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Cache hit for schema %r.", name)
            return cached

        pointer = self.locate_all().get(name)
        if pointer is None:
            result = _types.ResolveResult.failure(f'Schema "{name}" not found')
        else:
            result = expand(self.document, pointer, resolve_options)

        _log_outcome(name, result)
        return self._cache.put(key, result)

    def resolve_by_pointer(
        self,
        pointer: str,
        options: _types.ResolveOptions | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> _types.ResolveResult:
        """Expand the schema located by the given pointer.

        Parameters
        ----------
        pointer : str
            A pointer such as ``"#/components/schemas/User"``. The last segment of the
            pointer is taken as the name of the schema.
        options : ResolveOptions | Mapping[str, Any] | None
            The resolution options. See :class:`ResolveOptions`.
        **overrides
            Individual options, overriding those in `options`.

        Returns
        -------
        ResolveResult
            If the pointer is malformed or does not lead anywhere, the result is
            unsuccessful.

        Raises
        ------
        InvalidOptionsError
            If the options are invalid.

        """
        resolve_options = _merge_options(options, overrides)
        key: CacheKey = (
            "pointer",
            pointer,
            resolve_options.max_depth,
            resolve_options.include_circular,
            resolve_options.max_nesting,
        )

        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Cache hit for pointer %r.", pointer)
            return cached

        result = expand(self.document, pointer, resolve_options)

        _log_outcome(pointer, result)
        return self._cache.put(key, result)

    # inspection -----------------------------------------------------------------------

    def get_dependencies(self, name: str) -> list[str]:
        """Return the names of every schema reachable from the named schema.

        The schema itself is not included. If there is no schema with the given name,
        an empty list is returned. Unlike :meth:`resolve_by_name`, there is no depth
        limit and nothing is cached.

        Raises
        ------
        PointerFormatError
            If a reference with a malformed pointer is reachable from the schema.

        """
        pointer = self.locate_all().get(name)
        if pointer is None:
            return []
        return collect_dependencies(self.document, pointer, name)

    def locate_all(self) -> _types.SchemaIndex:
        """Map every schema name in the document to the pointer that locates it."""
        return locate_all(self.document)

    def get_all_schemas(self) -> dict[str, Any]:
        """Map every schema name in the document to its raw, unexpanded schema."""
        return collect_schemas(self.document)

    def clear_cache(self) -> None:
        """Forget every cached result."""
        self._cache.clear()


# helpers ==============================================================================


def _merge_options(
    options: _types.ResolveOptions | Mapping[str, Any] | None,
    overrides: Mapping[str, Any],
) -> _types.ResolveOptions:
    """Validate the options after applying the keyword overrides."""
    if not overrides:
        return validate_options(options)

    base = validate_options(options)
    merged = {
        "max_depth": base.max_depth,
        "include_circular": base.include_circular,
        "max_nesting": base.max_nesting,
        **overrides,
    }
    return validate_options(merged)


def _log_outcome(target: str, result: _types.ResolveResult) -> None:
    if result.success:
        logger.debug(
            "Resolved %r with %d dependencies and %d circular references.",
            target,
            result.total_dependencies,
            len(result.circular_references),
        )
    else:
        logger.debug("Failed to resolve %r: %s", target, result.error)

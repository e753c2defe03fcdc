"""Types and type aliases."""

from copy import deepcopy
from typing import Any, Dict, List, Tuple, Union
import dataclasses

# document type aliases ================================================================

# documents are "raw" dictionaries, lists, or scalars as produced by a JSON or YAML
# parser. A document is never mutated by this package; resolved schemas are new trees
# built from pieces of the document.

# as in the rest of the package, we use the old Union spelling for the recursive
# aliases so that type checkers are happy with the forward references

DocumentValue = Union[str, int, float, bool, None]
DocumentContainer = Union["DocumentDict", "DocumentList"]
DocumentList = List[Union[DocumentContainer, DocumentValue]]
DocumentDict = Dict[str, Union[DocumentContainer, DocumentValue]]

Document = Union[DocumentContainer, DocumentValue]

# a schema index maps schema names to the pointers locating them in the document,
# e.g., {"User": "#/components/schemas/User"}
type SchemaIndex = Dict[str, str]

# a container path is the sequence of (unescaped) keys leading from the root of the
# document to a mapping of named schemas, e.g., ("components", "schemas")
type ContainerPath = Tuple[str, ...]

# options ==============================================================================


@dataclasses.dataclass(frozen=True)
class ResolveOptions:
    """Options controlling a single resolution.

    Attributes
    ----------
    max_depth : int
        The maximum number of reference hops followed along any branch. References
        found at this depth are left unexpanded. Must be non-negative. Default: 10.
    include_circular : bool
        Whether circular reference diagnostics are reported in the result. Cycles are
        always detected and always halt expansion; this only controls reporting.
        Default: True.
    max_nesting : int
        The maximum number of nested properties/items descended into without
        following a reference. Subtrees nested more deeply are returned unexpanded.
        Must be positive. Default: 256.

    """

    max_depth: int = 10
    include_circular: bool = True
    max_nesting: int = 256


# results ==============================================================================


@dataclasses.dataclass(frozen=True)
class ResolveResult:
    """The outcome of resolving a schema.

    Attributes
    ----------
    success : bool
        Whether the schema was resolved.
    schema : Any
        The expanded schema. `None` if resolution failed.
    dependencies : Tuple[str, ...]
        The unique schema names encountered during expansion, in the order they were
        first encountered. When `success` is true, the first element is the name of the
        requested schema itself.
    circular_references : Tuple[str, ...]
        Human-readable descriptions of the reference cycles that were found, such as
        ``"A -> B -> A"``.
    error : str | None
        A description of the failure. `None` on success.

    """

    success: bool
    schema: Any = None
    dependencies: Tuple[str, ...] = ()
    circular_references: Tuple[str, ...] = ()
    error: str | None = None

    @classmethod
    def failure(cls, error: str) -> "ResolveResult":
        """Construct an unsuccessful result with the given error message."""
        return cls(success=False, error=error)

    def detached(self) -> "ResolveResult":
        """Return a copy whose schema shares no mutable state with anything else."""
        if self.schema is None:
            return self
        return dataclasses.replace(self, schema=deepcopy(self.schema))

    @property
    def total_dependencies(self) -> int:
        """The number of unique schemas encountered, including the root."""
        return len(self.dependencies)

    @property
    def has_circular_references(self) -> bool:
        """Whether any circular reference was reported."""
        return len(self.circular_references) > 0


# misc. type aliases ===================================================================

# a keypath is a tuple of strings that represents a path through a document. For
# example, ("paths", "/users", "get") is the path to the "get" operation of the
# "/users" path item. List indices appear as strings.
type KeyPath = Tuple[str, ...]

import logging

from . import exceptions
from . import refs
from . import report
from . import types
from ._resolver import SchemaResolver
from ._options import validate_options, DEFAULT_OPTIONS
from ._locator import locate_all, SCHEMA_CONTAINERS
from ._pointers import decode_segment, encode_segment, resolve_pointer
from .types import ResolveOptions, ResolveResult

# the library does not emit log records unless the application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "exceptions",
    "refs",
    "report",
    "types",
    "SchemaResolver",
    "ResolveOptions",
    "ResolveResult",
    "validate_options",
    "DEFAULT_OPTIONS",
    "locate_all",
    "SCHEMA_CONTAINERS",
    "decode_segment",
    "encode_segment",
    "resolve_pointer",
]

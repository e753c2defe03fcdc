"""Provides validate_options(), which checks and normalizes resolution options."""

from typing import Any, Mapping

from . import exceptions
from .types import ResolveOptions

DEFAULT_OPTIONS = ResolveOptions()


def _check_keys(provided, allowed, keypath):
    extra = set(provided) - set(allowed)

    if extra:
        exemplar = sorted(extra)[0]
        raise exceptions.InvalidOptionsError("Unexpected key.", keypath + (exemplar,))


def _is_int(value):
    # bools are ints in Python, but True is not a sensible depth
    return isinstance(value, int) and not isinstance(value, bool)


def _check_max_depth(value, keypath):
    if not _is_int(value):
        raise exceptions.InvalidOptionsError("Must be an integer.", keypath)
    if value < 0:
        raise exceptions.InvalidOptionsError("Must be >= 0.", keypath)


def _check_include_circular(value, keypath):
    if not isinstance(value, bool):
        raise exceptions.InvalidOptionsError("Must be a boolean.", keypath)


def _check_max_nesting(value, keypath):
    if not _is_int(value):
        raise exceptions.InvalidOptionsError("Must be an integer.", keypath)
    if value < 1:
        raise exceptions.InvalidOptionsError("Must be >= 1.", keypath)


_CHECKERS = {
    "max_depth": _check_max_depth,
    "include_circular": _check_include_circular,
    "max_nesting": _check_max_nesting,
}


def validate_options(
    options: ResolveOptions | Mapping[str, Any] | None = None,
    keypath=tuple(),
) -> ResolveOptions:
    """Validate resolution options, returning them as a :class:`ResolveOptions`.

    Parameters
    ----------
    options
        Either `None` (meaning the defaults), an existing :class:`ResolveOptions`, or
        a mapping whose keys are a subset of the fields of :class:`ResolveOptions`.
        Missing keys take their default values.
    keypath
        Prefix used when reporting the location of an invalid option.

    Raises
    ------
    InvalidOptionsError
        If an unknown key is given or a value has the wrong type or range.

    """
    if options is None:
        return DEFAULT_OPTIONS

    if isinstance(options, ResolveOptions):
        options = {
            "max_depth": options.max_depth,
            "include_circular": options.include_circular,
            "max_nesting": options.max_nesting,
        }

    if not isinstance(options, Mapping):
        raise exceptions.InvalidOptionsError("Options must be a mapping.", keypath)

    _check_keys(options.keys(), _CHECKERS.keys(), keypath)

    for key, value in options.items():
        _CHECKERS[key](value, keypath + (key,))

    return ResolveOptions(**options)

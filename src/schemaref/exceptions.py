"""Provides the exceptions used by schemaref."""

# exceptions ===========================================================================


class Error(Exception):
    """A general error."""


class PointerFormatError(Error):
    """A reference pointer is malformed and cannot be dereferenced.

    This is distinct from a pointer that is well-formed but points nowhere; the latter
    is not an error and is represented by a placeholder node instead.

    """

    def __init__(self, reason, pointer):
        self.reason = reason
        self.pointer = pointer

    def __str__(self):
        return f'Invalid reference "{self.pointer}": {self.reason}'


class InvalidOptionsError(Error):
    """An error while validating resolution options."""

    def __init__(self, reason, keypath):
        self.reason = reason
        self.keypath = keypath

    def __str__(self):
        dotted = _join_dotted(self.keypath)
        return f'Invalid options at keypath: "{dotted}". {self.reason}'


# helpers ==============================================================================


def _join_dotted(keypath):
    """Joins a keypath tuple into a dotted string, e.g., ("a", "b") -> "a.b"."""
    return ".".join(str(x) for x in keypath)

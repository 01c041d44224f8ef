"""Error taxonomy for path parsing and path evaluation.

Absence (an intermediate value being None) is never an error. Only
malformed paths, type mismatches and unsupported writes raise.
"""

from __future__ import annotations


class PathError(Exception):
    """Base class for every error raised by modelpath."""


class PathSyntaxError(PathError, ValueError):
    """A path string does not match the path grammar."""

    def __init__(self, path: str, position: int, description: str) -> None:
        self.path = path
        self.position = position
        self.description = description
        super().__init__(
            f"Unexpected syntax at position {position} in model path "
            f"'{path}': {description}"
        )


class TypeMismatchError(PathError, TypeError):
    """An intermediate value is neither a model nor a collection as the path requires."""

    def __init__(self, path: str, expected: str, value: object) -> None:
        self.path = path
        self.expected = expected
        self.value = value
        super().__init__(
            f"Cannot evaluate expression '{path}': the object it is applied to "
            f"is not {expected} (got {type(value).__name__})"
        )


class UnsupportedOperationError(PathError):
    """The leaf link of a path does not support the requested operation."""

    def __init__(self, path: str, operation: str) -> None:
        self.path = path
        self.operation = operation
        super().__init__(f"'{operation}' is not supported by path '{path}'")

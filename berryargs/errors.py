"""
Exceptions raised by berryargs.

Definition-time errors stop schema construction. Execution-time errors are
raised out of argument preparation and reported by the GraphQL engine at the
failing field's path.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class BerryArgsError(Exception):
    """Base exception for all berryargs errors."""
    pass


class DefinitionError(BerryArgsError):
    """Raised when an argument or field declaration is invalid."""
    pass


class DuplicateArgumentError(DefinitionError):
    """Raised when two arguments of one field share an external name."""

    def __init__(self, name: str, field_path: Optional[str] = None):
        self.name = name
        self.field_path = field_path
        where = f" on '{field_path}'" if field_path else ""
        super().__init__(f"Argument '{name}' is already defined{where}")


class ExecutionError(BerryArgsError):
    """Query-time error reported on the field that raised it.

    ``str(error)`` is exactly the message so it surfaces unchanged in the
    response. ``extensions`` is copied into the GraphQL error entry.
    """

    def __init__(self, message: str, extensions: Optional[Dict[str, Any]] = None):
        self.message = message
        self.extensions = dict(extensions) if extensions else None
        super().__init__(message)


class CoercionError(ExecutionError):
    """Raised when a raw argument value cannot be converted to its type."""

    def __init__(self, message: str, argument: Any = None):
        self.argument = argument
        super().__init__(message, extensions={'code': 'ARGUMENT_COERCION'})


class PreparationError(ExecutionError):
    """Convenience error for prepare hooks to signal a rejected value."""
    pass

"""Schema registry error types."""

from __future__ import annotations


class SchemaCompilationError(Exception):
    """Raised when a field group cannot be compiled into schema declarations."""


class TypeCollisionError(SchemaCompilationError):
    """Raised when a type name is already declared with an incompatible definition."""


class InvalidTypeNameError(SchemaCompilationError):
    """Raised when a configured name cannot be turned into a valid schema name."""

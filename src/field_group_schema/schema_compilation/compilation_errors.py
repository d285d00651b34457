"""Schema compilation error types."""

from __future__ import annotations


class ExtensionHookError(Exception):
    """Raised when an extension hook returns a value that breaks its contract.

    Deliberately not a ``SchemaCompilationError``: hook bugs abort the whole
    schema build instead of being contained to one field group.
    """


class TypeDiscriminationError(Exception):
    """Raised when a union cannot map a resolved entity to one of its member types."""

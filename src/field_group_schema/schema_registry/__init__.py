"""Schema registry exports."""

from .naming import compose_type_name, format_field_name, format_type_name
from .registry_errors import InvalidTypeNameError, SchemaCompilationError, TypeCollisionError
from .schema_builder import SchemaBuildError, build_graphql_schema
from .type_declarations import (
    BUILTIN_SCALAR_NAMES,
    DeclarationKind,
    FieldDeclaration,
    TypeDeclaration,
    TypeRef,
)
from .type_registry import SchemaTypeRegistry

__all__ = [
    "BUILTIN_SCALAR_NAMES",
    "DeclarationKind",
    "FieldDeclaration",
    "TypeDeclaration",
    "TypeRef",
    "SchemaTypeRegistry",
    "SchemaCompilationError",
    "TypeCollisionError",
    "InvalidTypeNameError",
    "SchemaBuildError",
    "build_graphql_schema",
    "compose_type_name",
    "format_field_name",
    "format_type_name",
]

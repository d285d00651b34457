"""Builds an executable graphql-core schema from registry declarations."""

from __future__ import annotations

import logging

from graphql import (
    GraphQLArgument,
    GraphQLBoolean,
    GraphQLField,
    GraphQLFloat,
    GraphQLID,
    GraphQLInt,
    GraphQLInterfaceType,
    GraphQLList,
    GraphQLNamedType,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLString,
    GraphQLUnionType,
    validate_schema,
)

from .registry_errors import SchemaCompilationError
from .type_declarations import FieldDeclaration, TypeDeclaration, TypeRef
from .type_registry import SchemaTypeRegistry

_LOGGER = logging.getLogger("field_group_schema.registry")
_LOGGER.addHandler(logging.NullHandler())

_SCALARS: dict[str, GraphQLNamedType] = {
    "String": GraphQLString,
    "Int": GraphQLInt,
    "Float": GraphQLFloat,
    "Boolean": GraphQLBoolean,
    "ID": GraphQLID,
}


class SchemaBuildError(SchemaCompilationError):
    """Raised when the declared types do not form a valid schema."""


def build_graphql_schema(
    registry: SchemaTypeRegistry, *, query_type_name: str = "Query"
) -> GraphQLSchema:
    """Turn every declaration in the registry into one validated GraphQLSchema."""
    _check_references(registry)
    builder = _GraphQLTypeBuilder(registry)
    query_type = builder.named_type(query_type_name)
    if not isinstance(query_type, GraphQLObjectType):
        raise SchemaBuildError(f"Query root '{query_type_name}' must be an object type.")
    types = [builder.named_type(name) for name in registry.list_types()]
    schema = GraphQLSchema(query=query_type, types=types)
    errors = validate_schema(schema)
    if errors:
        raise SchemaBuildError("; ".join(error.message for error in errors))
    return schema


def _check_references(registry: SchemaTypeRegistry) -> None:
    """Raise for type references to names that were never declared.

    graphql-core resolves field thunks lazily and reports failures as generic
    errors, so dangling references are caught here first.
    """
    for declaration in registry.declarations().values():
        referenced = [field.type_ref.name for field in declaration.fields.values()]
        referenced.extend(
            ref.name for field in declaration.fields.values() for ref in field.args.values()
        )
        referenced.extend(declaration.possible_types)
        for name in referenced:
            if name not in registry:
                raise SchemaBuildError(
                    f"Type '{name}' is referenced by '{declaration.name}' but never declared."
                )


class _GraphQLTypeBuilder:
    """Creates graphql-core types lazily so declarations may reference each other in any order."""

    def __init__(self, registry: SchemaTypeRegistry) -> None:
        self._registry = registry
        self._built: dict[str, GraphQLNamedType] = dict(_SCALARS)

    def named_type(self, name: str) -> GraphQLNamedType:
        built = self._built.get(name)
        if built is not None:
            return built
        declaration = self._registry.lookup_type(name)
        if declaration is None:
            raise SchemaBuildError(f"Type '{name}' is referenced but never declared.")
        built = self._build(declaration)
        self._built[name] = built
        return built

    def _build(self, declaration: TypeDeclaration) -> GraphQLNamedType:
        if declaration.is_object:
            return GraphQLObjectType(
                declaration.name,
                fields=lambda: self._object_fields(declaration),
                interfaces=lambda: self._interfaces(declaration),
                description=declaration.description,
            )
        if declaration.is_interface:
            return GraphQLInterfaceType(
                declaration.name,
                fields=lambda: self._fields(declaration.fields.values()),
                resolve_type=declaration.resolve_type,
                description=declaration.description,
            )
        return GraphQLUnionType(
            declaration.name,
            types=lambda: [self._object_type(name) for name in declaration.possible_types],
            resolve_type=declaration.resolve_type,
            description=declaration.description,
        )

    def _object_fields(self, declaration: TypeDeclaration) -> dict[str, GraphQLField]:
        fields = dict(declaration.fields)
        for interface in self._attached_interfaces(declaration):
            for name, field in interface.fields.items():
                fields.setdefault(name, field)
        return self._fields(fields.values())

    def _interfaces(self, declaration: TypeDeclaration) -> list[GraphQLInterfaceType]:
        interfaces = []
        for interface in self._attached_interfaces(declaration):
            built = self.named_type(interface.name)
            if isinstance(built, GraphQLInterfaceType):
                interfaces.append(built)
        return interfaces

    def _attached_interfaces(self, declaration: TypeDeclaration) -> list[TypeDeclaration]:
        interfaces = []
        for name in self._registry.interfaces_for(declaration.name):
            interface = self._registry.lookup_type(name)
            if interface is None or not interface.is_interface:
                _LOGGER.warning("Ignoring unknown interface %s on %s", name, declaration.name)
                continue
            interfaces.append(interface)
        return interfaces

    def _object_type(self, name: str) -> GraphQLObjectType:
        built = self.named_type(name)
        if not isinstance(built, GraphQLObjectType):
            raise SchemaBuildError(f"Union member '{name}' must be an object type.")
        return built

    def _fields(self, declarations) -> dict[str, GraphQLField]:
        return {field.name: self._field(field) for field in declarations}

    def _field(self, field: FieldDeclaration) -> GraphQLField:
        return GraphQLField(
            self._wrap(field.type_ref),
            args={name: GraphQLArgument(self._wrap(ref)) for name, ref in field.args.items()},
            resolve=field.resolve,
            description=field.description,
        )

    def _wrap(self, ref: TypeRef):
        wrapped = self.named_type(ref.name)
        if ref.is_list:
            wrapped = GraphQLList(wrapped)
        if ref.non_null:
            wrapped = GraphQLNonNull(wrapped)
        return wrapped

"""Field mapping entities."""

from __future__ import annotations

from dataclasses import dataclass

from field_group_schema.field_configuration.descriptor_models import FieldGroupDescriptor
from field_group_schema.schema_registry.type_declarations import FieldResolver, TypeRef


@dataclass(frozen=True)
class GroupScope:
    """A field group together with the schema type name it compiles to."""

    group: FieldGroupDescriptor
    type_name: str


@dataclass(frozen=True)
class FieldMapping:
    """Partial schema mapping for one field; unset parts fall back to defaults."""

    type_ref: TypeRef | None = None
    resolve: FieldResolver | None = None
    description: str | None = None


@dataclass(frozen=True)
class MappedField:
    """Complete schema mapping for one field."""

    type_ref: TypeRef
    resolve: FieldResolver
    description: str

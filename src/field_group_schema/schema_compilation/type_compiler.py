"""Compiles field group descriptors into schema object and interface types."""

from __future__ import annotations

import logging
from typing import Any

from field_group_schema.field_configuration.configuration_provider import ConfigurationProvider
from field_group_schema.field_configuration.descriptor_models import FieldGroupDescriptor
from field_group_schema.schema_registry.naming import (
    compose_type_name,
    format_field_name,
    format_type_name,
)
from field_group_schema.schema_registry.registry_errors import (
    InvalidTypeNameError,
    TypeCollisionError,
)
from field_group_schema.schema_registry.type_declarations import (
    FieldDeclaration,
    TypeRef,
    TypeResolver,
)
from field_group_schema.schema_registry.type_registry import SchemaTypeRegistry
from field_group_schema.value_resolution.value_resolver import ValueResolver

from .builtin_types import ensure_field_group_config_type
from .extension_hooks import ExtensionHooks
from .field_type_mapper import FieldTypeMapper
from .host_types import HostSchema
from .mapping_models import GroupScope
from .union_builder import PolymorphicUnionBuilder

_LOGGER = logging.getLogger("field_group_schema.compilation")
_LOGGER.addHandler(logging.NullHandler())

FIELD_GROUP_CONFIG_FIELD = "fieldGroupConfig"
FIELD_GROUP_NAME_FIELD = "fieldGroupName"
RESERVED_FIELD_NAMES = frozenset({FIELD_GROUP_CONFIG_FIELD, FIELD_GROUP_NAME_FIELD})


class TypeCompiler:  # pylint: disable=too-many-instance-attributes
    """Turns field groups into a group object type plus a ``Has<Type>`` interface.

    Nested groups (group, repeater and flexible content sub-fields) compile
    recursively with the owning type as parent. Compiling a group whose type
    name this compiler already declared returns that name without declaring
    anything.
    """

    def __init__(
        self,
        *,
        registry: SchemaTypeRegistry,
        host: HostSchema,
        provider: ConfigurationProvider,
        value_resolver: ValueResolver,
        hooks: ExtensionHooks | None = None,
    ) -> None:
        self._registry = registry
        self._host = host
        self._provider = provider
        self._hooks = hooks or ExtensionHooks()
        self._compiled: set[str] = set()
        self._mapper = FieldTypeMapper(
            registry=registry,
            host=host,
            unions=PolymorphicUnionBuilder(registry, host),
            value_resolver=value_resolver,
            hooks=self._hooks,
            compile_nested=self.compile,
        )

    def should_compile(self, group: FieldGroupDescriptor) -> bool:
        """Exposure gate: exposed, and nested or active with at least one target kind."""
        show = group.exposed and (
            group.is_nested or (group.active and bool(group.target_kinds))
        )
        return self._hooks.group_visible(show, group)

    def compile(
        self,
        group: FieldGroupDescriptor,
        parent_type_name: str | None = None,
        *,
        attach_to_parent: bool = True,
    ) -> str | None:
        """Declare the types for ``group`` and return its type name.

        Returns None, declaring nothing, when the group is hidden, targets no
        exposed schema type or none of its fields map to the schema. Row types of
        repeater and flexible content fields pass ``attach_to_parent=False`` and
        get no ``Has<Type>`` interface.
        """
        if not self.should_compile(group):
            _LOGGER.debug("Field group %s is not exposed", group.key)
            return None
        targets: list[str] = []
        if parent_type_name is None:
            targets = self._host.type_names_for_kinds(group.target_kinds)
            if not targets:
                _LOGGER.info("Field group %s targets no exposed schema type", group.key)
                return None
        elif attach_to_parent:
            targets = [parent_type_name]
        type_name = self._type_name(group, parent_type_name)
        existing = self._registry.lookup_type(type_name)
        if existing is not None:
            if type_name in self._compiled and existing.is_object:
                return type_name
            raise TypeCollisionError(
                f"Field group '{group.key}' compiles to '{type_name}', which is already"
                f" declared as {existing.kind.value}."
            )

        scope = GroupScope(group=group, type_name=type_name)
        fields = self._map_fields(scope)
        if not fields:
            _LOGGER.debug("Field group %s has no fields to expose", group.key)
            return None

        group_field_name = format_field_name(group.schema_name_source)
        if parent_type_name is None:
            for target in targets:
                self._ensure_field_free(target, group_field_name)
        interface_name = f"Has{type_name}"
        if targets:
            self._registry.declare_interface_type(
                interface_name,
                [
                    FieldDeclaration(
                        group_field_name,
                        TypeRef(type_name),
                        _same_root,
                        f"Fields of the {type_name} field group",
                    )
                ],
                description=f"A type that has the {type_name} field group",
                resolve_type=self._interface_type_resolver(parent_type_name),
            )
        self._registry.declare_object_type(
            type_name,
            [*fields, *self._metadata_fields(group, group_field_name)],
            description=group.description or f"The {group.title} field group",
        )
        if targets:
            self._registry.attach_interfaces([interface_name], targets)
        self._compiled.add(type_name)
        _LOGGER.debug("Compiled field group %s as %s", group.key, type_name)
        return type_name

    def _ensure_field_free(self, target_type_name: str, field_name: str) -> None:
        """Raise when ``target_type_name`` already exposes ``field_name``."""
        owners = [target_type_name, *self._registry.interfaces_for(target_type_name)]
        for owner in owners:
            declaration = self._registry.lookup_type(owner)
            if declaration is not None and field_name in declaration.fields:
                raise TypeCollisionError(
                    f"Field '{field_name}' already exists on '{target_type_name}'"
                    f" (declared by '{owner}')."
                )

    def _interface_type_resolver(self, parent_type_name: str | None) -> TypeResolver:
        if parent_type_name is None:
            return self._host.resolve_entity_type

        def _parent_type(_value: Any, _info: Any, _abstract_type: Any) -> str:
            return parent_type_name

        return _parent_type

    def _type_name(self, group: FieldGroupDescriptor, parent_type_name: str | None) -> str:
        if parent_type_name is not None:
            return compose_type_name(parent_type_name, group.schema_name_source)
        return format_type_name(group.graphql_type_name or group.schema_name_source)

    def _map_fields(self, scope: GroupScope) -> list[FieldDeclaration]:
        group = scope.group
        descriptors = group.fields if group.is_nested else self._provider.list_fields(group)
        fields: dict[str, FieldDeclaration] = {}
        for field in descriptors:
            if not field.exposed:
                continue
            try:
                name = format_field_name(field.schema_name_source)
            except InvalidTypeNameError as exc:
                _LOGGER.warning("Skipping field %s of %s: %s", field.key, group.key, exc)
                continue
            if name in RESERVED_FIELD_NAMES or name in fields:
                _LOGGER.warning(
                    "Skipping field %s of %s: the name %s is already taken",
                    field.key,
                    group.key,
                    name,
                )
                continue
            mapped = self._mapper.map_field(field, scope)
            if mapped is None:
                continue
            fields[name] = FieldDeclaration(
                name, mapped.type_ref, mapped.resolve, mapped.description
            )
        return list(fields.values())

    def _metadata_fields(
        self, group: FieldGroupDescriptor, group_field_name: str
    ) -> list[FieldDeclaration]:
        hooks = self._hooks

        def _group_name(_root: Any, _info: Any) -> str:
            return group_field_name

        def _group_config(_root: Any, info: Any) -> FieldGroupDescriptor | None:
            return group if hooks.admin_allowed(info.context) else None

        return [
            FieldDeclaration(
                FIELD_GROUP_NAME_FIELD,
                TypeRef("String"),
                _group_name,
                "The name of the field group",
            ),
            FieldDeclaration(
                FIELD_GROUP_CONFIG_FIELD,
                TypeRef(ensure_field_group_config_type(self._registry)),
                _group_config,
                "Configuration of the field group; only visible to administrators",
            ),
        ]


def _same_root(root: Any, _info: Any) -> Any:
    return root

"""Assembles the executable schema from host settings and field groups."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from graphql import ExecutionResult, GraphQLSchema, graphql_sync

from field_group_schema.configuration.runtime_settings import HostSettings
from field_group_schema.entity_access.entity_store import EntityProvider
from field_group_schema.field_configuration.configuration_provider import ConfigurationProvider
from field_group_schema.field_configuration.descriptor_models import FieldGroupDescriptor
from field_group_schema.schema_registry.registry_errors import SchemaCompilationError
from field_group_schema.schema_registry.schema_builder import build_graphql_schema
from field_group_schema.schema_registry.type_registry import SchemaTypeRegistry
from field_group_schema.value_resolution.text_formatting import (
    ContentFilter,
    default_content_filter,
)
from field_group_schema.value_resolution.value_resolver import ValueResolver

from .builtin_types import ensure_field_group_config_type, ensure_link_type
from .extension_hooks import ExtensionHooks
from .host_types import QUERY_TYPE_NAME, HostSchema
from .type_compiler import TypeCompiler

_LOGGER = logging.getLogger("field_group_schema.compilation")
_LOGGER.addHandler(logging.NullHandler())


@dataclass(frozen=True)
class QueryContext:
    """Per-request context handed to resolvers."""

    is_admin: bool = False


@dataclass(frozen=True)
class CompiledSchema:
    """Executable schema plus the outcome of compiling every field group."""

    schema: GraphQLSchema
    registry: SchemaTypeRegistry
    group_type_names: Mapping[str, str] = field(default_factory=dict)
    skipped_group_keys: tuple[str, ...] = ()

    def execute(
        self,
        query: str,
        *,
        variables: Mapping[str, Any] | None = None,
        context: Any = None,
    ) -> ExecutionResult:
        return graphql_sync(
            self.schema,
            query,
            context_value=context if context is not None else QueryContext(),
            variable_values=dict(variables) if variables else None,
        )


def build_schema(
    provider: ConfigurationProvider,
    entities: EntityProvider,
    *,
    host_settings: HostSettings | None = None,
    hooks: ExtensionHooks | None = None,
    content_filter: ContentFilter = default_content_filter,
) -> CompiledSchema:
    """Compile every field group of ``provider`` into one executable schema.

    A group that fails to compile is rolled back and reported in
    ``skipped_group_keys``; the remaining groups are unaffected. Extension hook
    contract violations abort the build.
    """
    hooks = hooks or ExtensionHooks()
    registry = SchemaTypeRegistry()
    host = HostSchema(host_settings or HostSettings(), entities)
    host.register_types(registry)
    ensure_link_type(registry)
    ensure_field_group_config_type(registry)
    compiler = TypeCompiler(
        registry=registry,
        host=host,
        provider=provider,
        value_resolver=ValueResolver(
            provider,
            content_filter=content_filter,
            root_identifier_hook=hooks.root_identifier,
            field_value_hook=hooks.field_value,
        ),
        hooks=hooks,
    )
    group_type_names, skipped = compile_field_groups(
        compiler, registry, provider.list_field_groups()
    )
    schema = build_graphql_schema(registry, query_type_name=QUERY_TYPE_NAME)
    return CompiledSchema(
        schema=schema,
        registry=registry,
        group_type_names=group_type_names,
        skipped_group_keys=tuple(skipped),
    )


def compile_field_groups(
    compiler: TypeCompiler,
    registry: SchemaTypeRegistry,
    groups: Sequence[FieldGroupDescriptor],
) -> tuple[dict[str, str], list[str]]:
    """Compile each group in isolation; return compiled type names and skipped keys.

    Groups the exposure gate hides are neither compiled nor reported as skipped.
    """
    compiled: dict[str, str] = {}
    skipped: list[str] = []
    for group in groups:
        if not compiler.should_compile(group):
            _LOGGER.debug("Field group %s is hidden from the schema", group.key)
            continue
        try:
            with registry.checkpoint():
                type_name = compiler.compile(group)
        except SchemaCompilationError as exc:
            _LOGGER.warning("Skipping field group %s: %s", group.key, exc)
            skipped.append(group.key)
            continue
        if type_name is None:
            _LOGGER.info("Field group %s has no fields to expose", group.key)
            skipped.append(group.key)
            continue
        compiled[group.key] = type_name
    return compiled, skipped

"""Schema compilation exports."""

from .builtin_types import (
    FIELD_GROUP_CONFIG_TYPE_NAME,
    LINK_TYPE_NAME,
    LOCATION_RULE_TYPE_NAME,
    ensure_field_group_config_type,
    ensure_link_type,
)
from .compilation_errors import ExtensionHookError, TypeDiscriminationError
from .extension_hooks import ExtensionHooks
from .field_type_mapper import FieldTypeMapper, describe_field
from .host_types import QUERY_TYPE_NAME, HostSchema
from .mapping_models import FieldMapping, GroupScope, MappedField
from .schema_assembly import CompiledSchema, QueryContext, build_schema, compile_field_groups
from .type_compiler import RESERVED_FIELD_NAMES, TypeCompiler
from .union_builder import (
    CONTENT_NODE_UNION_NAME,
    TERM_NODE_UNION_NAME,
    PolymorphicUnionBuilder,
    union_discriminator,
)

__all__ = [
    "FIELD_GROUP_CONFIG_TYPE_NAME",
    "LINK_TYPE_NAME",
    "LOCATION_RULE_TYPE_NAME",
    "ensure_field_group_config_type",
    "ensure_link_type",
    "ExtensionHookError",
    "TypeDiscriminationError",
    "ExtensionHooks",
    "FieldTypeMapper",
    "describe_field",
    "QUERY_TYPE_NAME",
    "HostSchema",
    "FieldMapping",
    "GroupScope",
    "MappedField",
    "CompiledSchema",
    "QueryContext",
    "build_schema",
    "compile_field_groups",
    "RESERVED_FIELD_NAMES",
    "TypeCompiler",
    "CONTENT_NODE_UNION_NAME",
    "TERM_NODE_UNION_NAME",
    "PolymorphicUnionBuilder",
    "union_discriminator",
]

"""Shared object types every compiled schema can reference."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from field_group_schema.field_configuration.descriptor_models import (
    FieldGroupDescriptor,
    LocationRule,
)
from field_group_schema.schema_registry.type_declarations import FieldDeclaration, TypeRef
from field_group_schema.schema_registry.type_registry import SchemaTypeRegistry

LINK_TYPE_NAME = "AcfLink"
FIELD_GROUP_CONFIG_TYPE_NAME = "AcfFieldGroupConfig"
LOCATION_RULE_TYPE_NAME = "AcfLocationRule"


def ensure_link_type(registry: SchemaTypeRegistry) -> str:
    """Declare the link type on first use and return its name."""
    if registry.lookup_type(LINK_TYPE_NAME) is None:
        registry.declare_object_type(
            LINK_TYPE_NAME,
            [
                FieldDeclaration(
                    "url", TypeRef("String"), _mapping_key("url"), "The url of the link"
                ),
                FieldDeclaration(
                    "title", TypeRef("String"), _mapping_key("title"), "The title of the link"
                ),
                FieldDeclaration(
                    "target", TypeRef("String"), _mapping_key("target"), "The target of the link"
                ),
            ],
            description="Link fields",
        )
    return LINK_TYPE_NAME


def ensure_field_group_config_type(registry: SchemaTypeRegistry) -> str:
    """Declare the field group metadata types on first use and return the config type name."""
    if registry.lookup_type(LOCATION_RULE_TYPE_NAME) is None:
        registry.declare_object_type(
            LOCATION_RULE_TYPE_NAME,
            [
                FieldDeclaration("param", TypeRef("String"), _rule_attribute("param")),
                FieldDeclaration("operator", TypeRef("String"), _rule_attribute("operator")),
                FieldDeclaration("value", TypeRef("String"), _rule_attribute("value")),
            ],
            description="A location rule deciding where a field group is shown",
        )
    if registry.lookup_type(FIELD_GROUP_CONFIG_TYPE_NAME) is None:
        registry.declare_object_type(
            FIELD_GROUP_CONFIG_TYPE_NAME,
            [
                _config_field("key", TypeRef("String"), lambda group: group.key),
                _config_field("title", TypeRef("String"), lambda group: group.title),
                _config_field("description", TypeRef("String"), lambda group: group.description),
                _config_field("active", TypeRef("Boolean"), lambda group: group.active),
                _config_field("showInGraphql", TypeRef("Boolean"), lambda group: group.exposed),
                _config_field(
                    "graphqlFieldName", TypeRef("String"), lambda group: group.graphql_field_name
                ),
                _config_field(
                    "graphqlTypeNames",
                    TypeRef.list_of("String"),
                    lambda group: list(group.target_kinds),
                ),
                _config_field(
                    "fields", TypeRef.list_of("String"), lambda group: list(group.field_names())
                ),
                _config_field(
                    "locationRules",
                    TypeRef.list_of(LOCATION_RULE_TYPE_NAME),
                    lambda group: list(group.flat_location_rules()),
                ),
                _config_field("menuOrder", TypeRef("Int"), lambda group: group.menu_order),
                _config_field("position", TypeRef("String"), lambda group: group.position),
                _config_field("style", TypeRef("String"), lambda group: group.style),
                _config_field(
                    "labelPlacement", TypeRef("String"), lambda group: group.label_placement
                ),
                _config_field(
                    "instructionPlacement",
                    TypeRef("String"),
                    lambda group: group.instruction_placement,
                ),
            ],
            description="Configuration of a field group",
        )
    return FIELD_GROUP_CONFIG_TYPE_NAME


def _mapping_key(key: str) -> Callable[..., Any]:
    def _resolve(root: Any, _info: Any) -> Any:
        if isinstance(root, Mapping):
            return root.get(key) or None
        return None

    return _resolve


def _rule_attribute(name: str) -> Callable[..., Any]:
    def _resolve(rule: LocationRule, _info: Any) -> Any:
        return getattr(rule, name)

    return _resolve


def _config_field(
    name: str, type_ref: TypeRef, read: Callable[[FieldGroupDescriptor], Any]
) -> FieldDeclaration:
    def _resolve(group: FieldGroupDescriptor, _info: Any) -> Any:
        return read(group)

    return FieldDeclaration(name, type_ref, _resolve)

"""Field configuration exports."""

from .configuration_provider import (
    ConfigurationProvider,
    ContentFilter,
    Identifier,
    StaticConfigurationProvider,
)
from .descriptor_models import (
    DATE_FIELD_KINDS,
    NESTED_FIELD_KINDS,
    FieldDescriptor,
    FieldGroupDescriptor,
    FieldKind,
    LocationRule,
)
from .descriptor_parsing import (
    LAYOUT_ROW_KEY,
    FieldConfigurationError,
    parse_field,
    parse_field_group,
    target_kinds_from_location,
)

__all__ = [
    "ConfigurationProvider",
    "ContentFilter",
    "Identifier",
    "StaticConfigurationProvider",
    "DATE_FIELD_KINDS",
    "NESTED_FIELD_KINDS",
    "FieldDescriptor",
    "FieldGroupDescriptor",
    "FieldKind",
    "LocationRule",
    "LAYOUT_ROW_KEY",
    "FieldConfigurationError",
    "parse_field",
    "parse_field_group",
    "target_kinds_from_location",
]

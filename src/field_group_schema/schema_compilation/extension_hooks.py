"""Enumerated extension points of the schema compiler."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from field_group_schema.field_configuration.descriptor_models import (
    FieldDescriptor,
    FieldGroupDescriptor,
)
from field_group_schema.value_resolution.value_resolver import FieldValueHook, RootIdentifierHook

from .compilation_errors import ExtensionHookError
from .mapping_models import FieldMapping, GroupScope

FieldMappingOverride = Callable[[FieldDescriptor, GroupScope], FieldMapping | None]
PostObjectSourceHook = Callable[[Any, Any], Any]
ShowFieldGroupHook = Callable[[bool, FieldGroupDescriptor], bool]
AdminPredicate = Callable[[Any], bool]


@dataclass(frozen=True)
class ExtensionHooks:
    """Optional callables that override or post-process compiler decisions.

    Every hook receives the built-in result (or None) and returns the value to
    use instead; an unset hook passes the built-in result through.
    """

    field_mapping_override: FieldMappingOverride | None = None
    root_identifier: RootIdentifierHook | None = None
    field_value: FieldValueHook | None = None
    post_object_source: PostObjectSourceHook | None = None
    show_field_group: ShowFieldGroupHook | None = None
    is_admin: AdminPredicate | None = None

    def override_mapping(self, field: FieldDescriptor, owner: GroupScope) -> FieldMapping | None:
        """Return a replacement mapping for ``field`` or None to use the built-in one."""
        if self.field_mapping_override is None:
            return None
        mapping = self.field_mapping_override(field, owner)
        if mapping is None:
            return None
        if not isinstance(mapping, FieldMapping):
            raise ExtensionHookError(
                f"field_mapping_override returned {type(mapping).__name__} for field"
                f" '{field.key}'; expected FieldMapping or None."
            )
        if mapping.type_ref is None:
            raise ExtensionHookError(
                f"field_mapping_override for field '{field.key}' must set type_ref."
            )
        return mapping

    def group_visible(self, show: bool, group: FieldGroupDescriptor) -> bool:
        if self.show_field_group is None:
            return show
        return bool(self.show_field_group(show, group))

    def post_object_result(self, result: Any, raw_value: Any) -> Any:
        if self.post_object_source is None:
            return result
        return self.post_object_source(result, raw_value)

    def admin_allowed(self, context: Any) -> bool:
        """Whether the requesting context may read field group configuration."""
        if self.is_admin is not None:
            return bool(self.is_admin(context))
        if isinstance(context, Mapping):
            return bool(context.get("is_admin", False))
        return bool(getattr(context, "is_admin", False))

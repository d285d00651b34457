"""Field configuration entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FieldKind(str, Enum):
    """Field kinds the configuration store can declare."""

    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    RANGE = "range"
    EMAIL = "email"
    URL = "url"
    PASSWORD = "password"
    OEMBED = "oembed"
    WYSIWYG = "wysiwyg"
    BUTTON_GROUP = "button_group"
    RADIO = "radio"
    COLOR_PICKER = "color_picker"
    MESSAGE = "message"
    SELECT = "select"
    CHECKBOX = "checkbox"
    TRUE_FALSE = "true_false"
    DATE_PICKER = "date_picker"
    TIME_PICKER = "time_picker"
    DATE_TIME_PICKER = "date_time_picker"
    LINK = "link"
    IMAGE = "image"
    FILE = "file"
    GALLERY = "gallery"
    USER = "user"
    TAXONOMY = "taxonomy"
    POST_OBJECT = "post_object"
    PAGE_LINK = "page_link"
    RELATIONSHIP = "relationship"
    GROUP = "group"
    REPEATER = "repeater"
    FLEXIBLE_CONTENT = "flexible_content"
    ACCORDION = "accordion"

    @classmethod
    def from_tag(cls, tag: str) -> FieldKind | None:
        """Return the kind for a tag, or None for kinds this package does not know."""
        try:
            return cls(tag)
        except ValueError:
            return None


NESTED_FIELD_KINDS = frozenset({FieldKind.GROUP, FieldKind.REPEATER, FieldKind.FLEXIBLE_CONTENT})
DATE_FIELD_KINDS = frozenset(
    {FieldKind.DATE_PICKER, FieldKind.TIME_PICKER, FieldKind.DATE_TIME_PICKER}
)


@dataclass(frozen=True)
class LocationRule:
    """One location constraint of a field group."""

    param: str
    operator: str
    value: str


@dataclass(frozen=True)
class FieldDescriptor:  # pylint: disable=too-many-instance-attributes
    """Normalized configuration of one field."""

    key: str
    name: str
    kind_tag: str
    label: str = ""
    instructions: str = ""
    graphql_field_name: str | None = None
    exposed: bool = True
    multiple: bool | None = None
    target_kinds: tuple[str, ...] = ()
    taxonomy: str | None = None
    return_format: str | None = None
    new_lines: str | None = None
    clone_source_key: str | None = None
    layouts: tuple[str, ...] = ()
    sub_group: FieldGroupDescriptor | None = None
    options: Mapping[str, Any] = field(default_factory=dict)

    @property
    def kind(self) -> FieldKind | None:
        return FieldKind.from_tag(self.kind_tag)

    @property
    def is_clone(self) -> bool:
        return self.clone_source_key is not None

    @property
    def storage_key(self) -> str:
        """Key the value is stored under; clones read their original field's key."""
        return self.clone_source_key if self.clone_source_key is not None else self.key

    @property
    def schema_name_source(self) -> str:
        return self.graphql_field_name or self.name

    @property
    def allows_multiple(self) -> bool:
        """Cardinality flag; an unset flag means single-valued."""
        return bool(self.multiple)


@dataclass(frozen=True)
class FieldGroupDescriptor:  # pylint: disable=too-many-instance-attributes
    """Normalized configuration of one field group.

    Nested groups (the sub-schema of a group, repeater or flexible content
    field) carry the key of that field in ``parent_field_key``; the link is only
    used for naming and is never traversed.
    """

    key: str
    title: str
    description: str = ""
    target_kinds: tuple[str, ...] = ()
    graphql_field_name: str | None = None
    graphql_type_name: str | None = None
    active: bool = True
    exposed: bool = False
    fields: tuple[FieldDescriptor, ...] = ()
    parent_field_key: str | None = None
    location_rules: tuple[tuple[LocationRule, ...], ...] = ()
    menu_order: int = 0
    position: str | None = None
    style: str | None = None
    label_placement: str | None = None
    instruction_placement: str | None = None

    @property
    def is_nested(self) -> bool:
        return self.parent_field_key is not None

    @property
    def schema_name_source(self) -> str:
        return self.graphql_field_name or self.title

    def field_names(self) -> tuple[str, ...]:
        return tuple(field.name for field in self.fields)

    def flat_location_rules(self) -> tuple[LocationRule, ...]:
        return tuple(rule for rule_group in self.location_rules for rule in rule_group)

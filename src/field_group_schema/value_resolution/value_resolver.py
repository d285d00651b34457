"""Field value lookup for every kind of root a query can be positioned on."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from field_group_schema.entity_access.entity_models import EntityKind, EntityRef, FieldRow
from field_group_schema.field_configuration.configuration_provider import (
    ConfigurationProvider,
    Identifier,
)
from field_group_schema.field_configuration.descriptor_models import FieldDescriptor, FieldKind

from .text_formatting import ContentFilter, default_content_filter

_LOGGER = logging.getLogger("field_group_schema.resolution")
_LOGGER.addHandler(logging.NullHandler())

RootIdentifierHook = Callable[[Identifier | None, Any], Identifier | None]
FieldValueHook = Callable[[Any, FieldDescriptor, Any, Identifier | None], Any]


def _numeric_id(entity: EntityRef) -> Identifier:
    try:
        return abs(int(entity.id))
    except (TypeError, ValueError):
        return entity.id


def _term_id(entity: EntityRef) -> Identifier:
    return f"term_{_numeric_id(entity)}"


def _user_id(entity: EntityRef) -> Identifier:
    return f"user_{_numeric_id(entity)}"


def _comment_id(entity: EntityRef) -> Identifier:
    return f"comment_{_numeric_id(entity)}"


def _settings_page_id(entity: EntityRef) -> Identifier:
    return entity.attribute("post_id") or entity.subtype or entity.id


_IDENTIFIER_BY_KIND: Mapping[EntityKind, Callable[[EntityRef], Identifier]] = {
    EntityKind.CONTENT: _numeric_id,
    EntityKind.TAXONOMY: _term_id,
    EntityKind.USER: _user_id,
    EntityKind.COMMENT: _comment_id,
    EntityKind.MENU: _term_id,
    EntityKind.MENU_ITEM: _numeric_id,
    EntityKind.SETTINGS_PAGE: _settings_page_id,
}


class ValueResolver:
    """Fetches stored field values for a root entity or a nested row.

    Resolution only depends on the root, the field descriptor and the
    formatting collaborators, so resolvers for sibling fields never interact.
    """

    def __init__(
        self,
        provider: ConfigurationProvider,
        *,
        content_filter: ContentFilter = default_content_filter,
        root_identifier_hook: RootIdentifierHook | None = None,
        field_value_hook: FieldValueHook | None = None,
    ) -> None:
        self._provider = provider
        self._content_filter = content_filter
        self._root_identifier_hook = root_identifier_hook
        self._field_value_hook = field_value_hook

    @property
    def content_filter(self) -> ContentFilter:
        return self._content_filter

    def resolve(self, root: Any, field: FieldDescriptor, format_hint: bool = False) -> Any:
        """Return the stored value of ``field`` for ``root``, or None when nothing is stored."""
        identifier: Identifier | None = None
        if isinstance(root, FieldRow):
            value = root.lookup(field.storage_key, field.name)
            if field.kind is FieldKind.WYSIWYG and isinstance(value, str):
                value = self._content_filter(value)
        else:
            identifier = self.root_identifier(root)
            if identifier is None:
                _LOGGER.debug("No storage identifier for root %r; %s is null", root, field.key)
                return None
            format_value = format_hint or field.kind is FieldKind.WYSIWYG
            value = self._provider.get_value(identifier, field.storage_key, format_value)

        value = _empty_to_none(value)
        if self._field_value_hook is not None:
            value = self._field_value_hook(value, field, root, identifier)
        return value

    def root_identifier(self, root: Any) -> Identifier | None:
        """Return the identifier the configuration store files values for ``root`` under."""
        identifier: Identifier | None = None
        if isinstance(root, EntityRef):
            identifier = _IDENTIFIER_BY_KIND[root.kind](root)
        if self._root_identifier_hook is not None:
            identifier = self._root_identifier_hook(identifier, root)
        if identifier is None or identifier == "" or identifier == 0:
            return None
        return identifier


def _empty_to_none(value: Any) -> Any:
    """Collapse unset values to None; ``0`` and ``False`` are real values and are kept."""
    if value is None:
        return None
    if isinstance(value, str | list | tuple | dict) and not value:
        return None
    return value

"""Schema types of the host content model that field groups attach to."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from field_group_schema.configuration.runtime_settings import HostSettings, SettingsPageSettings
from field_group_schema.entity_access.entity_models import (
    EntityKind,
    EntityRef,
    make_kind_tag,
    parse_kind_tag,
)
from field_group_schema.entity_access.entity_store import EntityProvider
from field_group_schema.schema_registry.naming import format_field_name
from field_group_schema.schema_registry.type_declarations import FieldDeclaration, TypeRef
from field_group_schema.schema_registry.type_registry import SchemaTypeRegistry

from .compilation_errors import TypeDiscriminationError

_LOGGER = logging.getLogger("field_group_schema.compilation")
_LOGGER.addHandler(logging.NullHandler())

QUERY_TYPE_NAME = "Query"
USER_TYPE_NAME = "User"
COMMENT_TYPE_NAME = "Comment"
MENU_TYPE_NAME = "Menu"
MENU_ITEM_TYPE_NAME = "MenuItem"
MEDIA_CONTENT_TYPE = "attachment"

_FIXED_KIND_TYPE_NAMES = {
    EntityKind.USER.value: USER_TYPE_NAME,
    EntityKind.COMMENT.value: COMMENT_TYPE_NAME,
    EntityKind.MENU.value: MENU_TYPE_NAME,
    EntityKind.MENU_ITEM.value: MENU_ITEM_TYPE_NAME,
}
_ATTRIBUTE_FIELDS: dict[EntityKind, tuple[str, ...]] = {
    EntityKind.CONTENT: ("title", "slug", "uri"),
    EntityKind.TAXONOMY: ("name", "slug", "description"),
    EntityKind.USER: ("name", "slug", "email"),
    EntityKind.COMMENT: ("content", "authorName", "date"),
    EntityKind.MENU: ("name", "slug"),
    EntityKind.MENU_ITEM: ("label", "url"),
    EntityKind.SETTINGS_PAGE: ("title",),
}
_MEDIA_ATTRIBUTE_FIELDS = ("sourceUrl", "altText", "mimeType")


class HostSchema:
    """Declares the host's entity types and maps entity kind tags to schema type names.

    Only kinds the host exposes get a type; field groups targeting any other
    kind have nothing to attach to.
    """

    def __init__(self, settings: HostSettings, entities: EntityProvider) -> None:
        self._settings = settings
        self._entities = entities
        self._type_names = _kind_type_names(settings)

    @property
    def entities(self) -> EntityProvider:
        return self._entities

    def type_name_for_kind(self, kind_tag: str) -> str | None:
        return self._type_names.get(kind_tag)

    def type_name_for_entity(self, value: Any) -> str | None:
        if not isinstance(value, EntityRef):
            return None
        return self.type_name_for_kind(value.kind_tag)

    def type_names_for_kinds(self, kind_tags: Iterable[str]) -> list[str]:
        """Return the schema type names of the exposed kinds among ``kind_tags``."""
        names = []
        for kind_tag in kind_tags:
            type_name = self.type_name_for_kind(kind_tag)
            if type_name is None:
                _LOGGER.warning("Target kind %s is not exposed by the host schema", kind_tag)
                continue
            if type_name not in names:
                names.append(type_name)
        return names

    def content_kind_tags(self) -> list[str]:
        return [
            make_kind_tag(EntityKind.CONTENT, name)
            for name in self._settings.exposed_content_types()
        ]

    def taxonomy_kind_tags(self) -> list[str]:
        return [
            make_kind_tag(EntityKind.TAXONOMY, name) for name in self._settings.exposed_taxonomies()
        ]

    def content_type_name(self, content_type: str) -> str | None:
        return self.type_name_for_kind(make_kind_tag(EntityKind.CONTENT, content_type))

    def taxonomy_type_name(self, taxonomy: str) -> str | None:
        return self.type_name_for_kind(make_kind_tag(EntityKind.TAXONOMY, taxonomy))

    @property
    def media_type_name(self) -> str | None:
        return self.content_type_name(MEDIA_CONTENT_TYPE)

    def resolve_entity_type(self, value: Any, _info: Any, _abstract_type: Any) -> str:
        """Type resolver for interfaces implemented by host types."""
        type_name = self.type_name_for_entity(value)
        if type_name is None:
            raise TypeDiscriminationError(
                f"No schema type is exposed for {getattr(value, 'kind_tag', type(value).__name__)}."
            )
        return type_name

    def register_types(self, registry: SchemaTypeRegistry) -> None:
        """Declare one object type per exposed kind plus the query root."""
        for kind_tag, type_name in self._type_names.items():
            registry.declare_object_type(
                type_name,
                _entity_fields(kind_tag),
                description=f"The {type_name} entity of the host content model",
            )
        registry.declare_object_type(
            QUERY_TYPE_NAME,
            self._query_fields(),
            description="Root query type of the host schema",
        )

    def _query_fields(self) -> list[FieldDeclaration]:
        settings_pages = {page.key: page for page in self._settings.settings_pages}
        fields = []
        for kind_tag, type_name in self._type_names.items():
            parsed = parse_kind_tag(kind_tag)
            if parsed is None:
                continue
            kind, subtype = parsed
            if kind is EntityKind.SETTINGS_PAGE and subtype in settings_pages:
                fields.append(
                    FieldDeclaration(
                        format_field_name(type_name),
                        TypeRef(type_name),
                        self._settings_page_resolver(settings_pages[subtype]),
                        f"The {type_name} settings page",
                    )
                )
                continue
            fields.append(
                FieldDeclaration(
                    format_field_name(type_name),
                    TypeRef(type_name),
                    self._lookup_resolver(kind, subtype),
                    f"Look up a {type_name} by its database id",
                    args={"id": TypeRef("ID", non_null=True)},
                )
            )
        return fields

    def _lookup_resolver(self, kind: EntityKind, subtype: str | None) -> Callable[..., Any]:
        def _resolve(_root: Any, _info: Any, **args: Any) -> EntityRef | None:
            entity = self._entities.resolve_by_id(kind, args["id"])
            if entity is None or (subtype is not None and entity.subtype != subtype):
                return None
            return entity

        return _resolve

    def _settings_page_resolver(self, page: SettingsPageSettings) -> Callable[..., Any]:
        def _resolve(_root: Any, _info: Any) -> EntityRef:
            stored = self._entities.resolve_by_id(EntityKind.SETTINGS_PAGE, page.key)
            if stored is not None:
                return stored
            return EntityRef(
                kind=EntityKind.SETTINGS_PAGE,
                id=page.key,
                subtype=page.key,
                attributes={"post_id": page.post_id, "title": page.title},
            )

        return _resolve


def _kind_type_names(settings: HostSettings) -> dict[str, str]:
    names: dict[str, str] = {}
    for name, type_name in settings.exposed_content_types().items():
        names[make_kind_tag(EntityKind.CONTENT, name)] = type_name
    for name, type_name in settings.exposed_taxonomies().items():
        names[make_kind_tag(EntityKind.TAXONOMY, name)] = type_name
    names.update(_FIXED_KIND_TYPE_NAMES)
    for page in settings.settings_pages:
        names[make_kind_tag(EntityKind.SETTINGS_PAGE, page.key)] = page.graphql_type_name
    return names


def _entity_fields(kind_tag: str) -> list[FieldDeclaration]:
    parsed = parse_kind_tag(kind_tag)
    if parsed is None:
        return []
    kind, subtype = parsed
    fields = [
        FieldDeclaration("id", TypeRef("ID", non_null=True), _global_id, "Globally unique id"),
    ]
    if kind is not EntityKind.SETTINGS_PAGE:
        fields.append(FieldDeclaration("databaseId", TypeRef("Int"), _database_id))
    if kind is EntityKind.CONTENT:
        fields.append(FieldDeclaration("status", TypeRef("String"), _status))
    attribute_names = _ATTRIBUTE_FIELDS[kind]
    if kind is EntityKind.CONTENT and subtype == MEDIA_CONTENT_TYPE:
        attribute_names = attribute_names + _MEDIA_ATTRIBUTE_FIELDS
    fields.extend(
        FieldDeclaration(name, TypeRef("String"), _attribute(name)) for name in attribute_names
    )
    return fields


def _global_id(entity: EntityRef, _info: Any) -> str:
    return f"{entity.kind_tag}:{entity.id}"


def _database_id(entity: EntityRef, _info: Any) -> int | None:
    try:
        return int(entity.id)
    except (TypeError, ValueError):
        return None


def _status(entity: EntityRef, _info: Any) -> str:
    return entity.status


def _attribute(name: str) -> Callable[..., Any]:
    def _resolve(entity: EntityRef, _info: Any) -> Any:
        return entity.attribute(name)

    return _resolve

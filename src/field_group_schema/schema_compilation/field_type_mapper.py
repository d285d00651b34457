"""Maps one field descriptor to a schema type and resolver."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from field_group_schema.entity_access.entity_models import (
    EntityKind,
    EntityRef,
    FieldRow,
    make_kind_tag,
)
from field_group_schema.entity_access.entity_store import EntityProvider
from field_group_schema.field_configuration.descriptor_models import (
    DATE_FIELD_KINDS,
    FieldDescriptor,
    FieldGroupDescriptor,
    FieldKind,
)
from field_group_schema.schema_registry.naming import compose_type_name, format_field_name
from field_group_schema.schema_registry.type_declarations import FieldResolver, TypeRef
from field_group_schema.schema_registry.type_registry import SchemaTypeRegistry
from field_group_schema.value_resolution.text_formatting import apply_new_lines, render_date
from field_group_schema.value_resolution.value_resolver import ValueResolver

from .builtin_types import ensure_link_type
from .extension_hooks import ExtensionHooks
from .host_types import USER_TYPE_NAME, HostSchema
from .mapping_models import FieldMapping, GroupScope, MappedField
from .union_builder import PolymorphicUnionBuilder

_LOGGER = logging.getLogger("field_group_schema.compilation")
_LOGGER.addHandler(logging.NullHandler())

NestedCompiler = Callable[..., str | None]
_Handler = Callable[[FieldDescriptor, GroupScope], FieldMapping | None]

_STRING_KINDS = (
    FieldKind.TEXT,
    FieldKind.EMAIL,
    FieldKind.URL,
    FieldKind.PASSWORD,
    FieldKind.OEMBED,
    FieldKind.WYSIWYG,
    FieldKind.BUTTON_GROUP,
    FieldKind.RADIO,
    FieldKind.COLOR_PICKER,
    FieldKind.MESSAGE,
)


class FieldTypeMapper:  # pylint: disable=too-many-instance-attributes
    """Closed dispatch from field kind to a mapping handler.

    Kinds without a handler (accordion, and anything unknown) are omitted from
    the schema. Every handler result is completed with the default type,
    description and resolver before it is returned.
    """

    def __init__(
        self,
        *,
        registry: SchemaTypeRegistry,
        host: HostSchema,
        unions: PolymorphicUnionBuilder,
        value_resolver: ValueResolver,
        hooks: ExtensionHooks,
        compile_nested: NestedCompiler,
    ) -> None:
        self._registry = registry
        self._host = host
        self._entities: EntityProvider = host.entities
        self._unions = unions
        self._values = value_resolver
        self._hooks = hooks
        self._compile_nested = compile_nested
        handlers: dict[FieldKind, _Handler] = {kind: self._map_string for kind in _STRING_KINDS}
        handlers.update(
            {
                FieldKind.TEXTAREA: self._map_textarea,
                FieldKind.NUMBER: self._map_number,
                FieldKind.RANGE: self._map_range,
                FieldKind.TRUE_FALSE: self._map_true_false,
                FieldKind.SELECT: self._map_select,
                FieldKind.CHECKBOX: self._map_checkbox,
                FieldKind.LINK: self._map_link,
                FieldKind.IMAGE: self._map_media,
                FieldKind.FILE: self._map_media,
                FieldKind.GALLERY: self._map_gallery,
                FieldKind.USER: self._map_user,
                FieldKind.TAXONOMY: self._map_taxonomy,
                FieldKind.POST_OBJECT: self._map_post_object,
                FieldKind.PAGE_LINK: self._map_post_object,
                FieldKind.RELATIONSHIP: self._map_relationship,
                FieldKind.GROUP: self._map_group,
                FieldKind.REPEATER: self._map_rows,
                FieldKind.FLEXIBLE_CONTENT: self._map_rows,
            }
        )
        handlers.update({kind: self._map_date for kind in DATE_FIELD_KINDS})
        self._handlers = handlers

    def map_field(self, field: FieldDescriptor, owner: GroupScope) -> MappedField | None:
        """Return the complete mapping for ``field`` or None when it is not exposed."""
        mapping = self._hooks.override_mapping(field, owner)
        if mapping is None:
            kind = field.kind
            handler = self._handlers.get(kind) if kind is not None else None
            if handler is None:
                _LOGGER.debug("Field %s of kind %s is not mapped", field.key, field.kind_tag)
                return None
            mapping = handler(field, owner)
            if mapping is None:
                return None
        return MappedField(
            type_ref=mapping.type_ref or TypeRef("String"),
            resolve=mapping.resolve or self._value_of(field),
            description=mapping.description or describe_field(field, owner.group),
        )

    def _value_of(self, field: FieldDescriptor, format_hint: bool = False) -> FieldResolver:
        def _resolve(root: Any, _info: Any, **_args: Any) -> Any:
            return self._values.resolve(root, field, format_hint)

        return _resolve

    def _map_string(self, _field: FieldDescriptor, _owner: GroupScope) -> FieldMapping:
        return FieldMapping()

    def _map_textarea(self, field: FieldDescriptor, _owner: GroupScope) -> FieldMapping:
        def _resolve(root: Any, _info: Any) -> Any:
            value = self._values.resolve(root, field)
            if isinstance(value, str):
                return apply_new_lines(value, field.new_lines)
            return value

        return FieldMapping(resolve=_resolve)

    def _map_number(self, _field: FieldDescriptor, _owner: GroupScope) -> FieldMapping:
        return FieldMapping(type_ref=TypeRef("Float"))

    def _map_range(self, _field: FieldDescriptor, _owner: GroupScope) -> FieldMapping:
        return FieldMapping(type_ref=TypeRef("Int"))

    def _map_true_false(self, _field: FieldDescriptor, _owner: GroupScope) -> FieldMapping:
        return FieldMapping(type_ref=TypeRef("Boolean"))

    def _map_select(self, field: FieldDescriptor, _owner: GroupScope) -> FieldMapping:
        if not field.allows_multiple:
            return FieldMapping()

        def _resolve(root: Any, _info: Any) -> list[Any]:
            value = self._values.resolve(root, field)
            return list(value) if isinstance(value, list | tuple) else []

        return FieldMapping(type_ref=TypeRef.list_of("String"), resolve=_resolve)

    def _map_checkbox(self, field: FieldDescriptor, _owner: GroupScope) -> FieldMapping:
        def _resolve(root: Any, _info: Any) -> list[Any] | None:
            value = self._values.resolve(root, field)
            return list(value) if isinstance(value, list | tuple) else None

        return FieldMapping(type_ref=TypeRef.list_of("String"), resolve=_resolve)

    def _map_date(self, field: FieldDescriptor, _owner: GroupScope) -> FieldMapping:
        def _resolve(root: Any, _info: Any) -> Any:
            value = self._values.resolve(root, field, True)
            if isinstance(value, str) and field.return_format:
                return render_date(value, field.return_format)
            return value

        return FieldMapping(resolve=_resolve)

    def _map_link(self, field: FieldDescriptor, _owner: GroupScope) -> FieldMapping:
        def _resolve(root: Any, _info: Any) -> Mapping[str, Any] | None:
            value = self._values.resolve(root, field)
            if isinstance(value, Mapping):
                return value
            if isinstance(value, str):
                return {"url": value}
            return None

        return FieldMapping(type_ref=TypeRef(ensure_link_type(self._registry)), resolve=_resolve)

    def _map_media(self, field: FieldDescriptor, _owner: GroupScope) -> FieldMapping | None:
        media_type = self._host.media_type_name
        if media_type is None:
            return None

        def _resolve(root: Any, _info: Any) -> EntityRef | None:
            return self._load_media(self._values.resolve(root, field))

        return FieldMapping(type_ref=TypeRef(media_type), resolve=_resolve)

    def _map_gallery(self, field: FieldDescriptor, _owner: GroupScope) -> FieldMapping | None:
        media_type = self._host.media_type_name
        if media_type is None:
            return None

        def _resolve(root: Any, _info: Any) -> list[EntityRef]:
            stored = _as_list(self._values.resolve(root, field))
            loaded = (self._load_media(item) for item in stored)
            return [media for media in loaded if media is not None]

        return FieldMapping(type_ref=TypeRef.list_of(media_type), resolve=_resolve)

    def _map_user(self, field: FieldDescriptor, _owner: GroupScope) -> FieldMapping:
        multiple = field.allows_multiple

        def _resolve(root: Any, _info: Any) -> Any:
            users = [
                user
                for user in self._load_all(EntityKind.USER, self._values.resolve(root, field))
                if user.is_public
            ]
            return _collapse(users, multiple)

        type_ref = TypeRef.list_of(USER_TYPE_NAME) if multiple else TypeRef(USER_TYPE_NAME)
        return FieldMapping(type_ref=type_ref, resolve=_resolve)

    def _map_taxonomy(self, field: FieldDescriptor, _owner: GroupScope) -> FieldMapping | None:
        taxonomy = field.taxonomy
        term_type = self._host.taxonomy_type_name(taxonomy) if taxonomy else None
        if term_type is not None:
            allowed = frozenset({make_kind_tag(EntityKind.TAXONOMY, taxonomy)})
        else:
            term_type = self._unions.term_node_union()
            allowed = frozenset(self._host.taxonomy_kind_tags())
        if term_type is None:
            return None

        def _resolve(root: Any, _info: Any) -> list[EntityRef]:
            terms = self._load_all(EntityKind.TAXONOMY, self._values.resolve(root, field))
            return [term for term in terms if term.kind_tag in allowed]

        return FieldMapping(type_ref=TypeRef.list_of(term_type), resolve=_resolve)

    def _map_post_object(self, field: FieldDescriptor, owner: GroupScope) -> FieldMapping | None:
        union_name, allowed = self._content_union(field, owner)
        if union_name is None:
            return None
        multiple = field.allows_multiple

        def _resolve(root: Any, _info: Any) -> Any:
            raw_value = self._values.resolve(root, field)
            result = _collapse(self._load_content(raw_value, allowed), multiple)
            return self._hooks.post_object_result(result, raw_value)

        type_ref = TypeRef.list_of(union_name) if multiple else TypeRef(union_name)
        return FieldMapping(type_ref=type_ref, resolve=_resolve)

    def _map_relationship(self, field: FieldDescriptor, owner: GroupScope) -> FieldMapping | None:
        union_name, allowed = self._content_union(field, owner)
        if union_name is None:
            return None

        def _resolve(root: Any, _info: Any) -> list[EntityRef]:
            return self._load_content(self._values.resolve(root, field), allowed)

        return FieldMapping(type_ref=TypeRef.list_of(union_name), resolve=_resolve)

    def _map_group(self, field: FieldDescriptor, owner: GroupScope) -> FieldMapping | None:
        nested_type = self._nested_type(field, owner)
        if nested_type is None:
            return None

        def _resolve(root: Any, _info: Any) -> Any:
            if isinstance(root, FieldRow):
                row = root.lookup(field.storage_key, field.name)
                return FieldRow(row if isinstance(row, Mapping) else {}, owner=root.owner)
            return root

        return FieldMapping(type_ref=TypeRef(nested_type), resolve=_resolve)

    def _map_rows(self, field: FieldDescriptor, owner: GroupScope) -> FieldMapping | None:
        nested_type = self._nested_type(field, owner)
        if nested_type is None:
            return None

        def _resolve(root: Any, _info: Any) -> list[FieldRow]:
            entity = root.owner if isinstance(root, FieldRow) else root
            rows = _as_list(self._values.resolve(root, field))
            return [FieldRow(row, owner=entity) for row in rows if isinstance(row, Mapping)]

        return FieldMapping(type_ref=TypeRef.list_of(nested_type), resolve=_resolve)

    def _nested_type(self, field: FieldDescriptor, owner: GroupScope) -> str | None:
        if field.sub_group is None:
            return None
        return self._compile_nested(
            field.sub_group, owner.type_name, attach_to_parent=field.kind is FieldKind.GROUP
        )

    def _content_union(
        self, field: FieldDescriptor, owner: GroupScope
    ) -> tuple[str | None, frozenset[str]]:
        """Return the union for a post reference field and the kind tags it may resolve to.

        A field restricted to kinds the host does not expose keeps the fallback
        type but never resolves anything.
        """
        if not field.target_kinds:
            union_name = self._unions.content_node_union()
            return union_name, frozenset(self._host.content_kind_tags())
        candidates = [make_kind_tag(EntityKind.CONTENT, name) for name in field.target_kinds]
        name = compose_type_name(owner.type_name, format_field_name(field.schema_name_source))
        union_name = self._unions.build_union(name, candidates)
        if union_name is None:
            return self._unions.content_node_union(), frozenset()
        return union_name, frozenset(
            tag for tag in candidates if self._host.type_name_for_kind(tag) is not None
        )

    def _load_content(self, raw_value: Any, allowed: frozenset[str]) -> list[EntityRef]:
        return [
            entity
            for entity in self._load_all(EntityKind.CONTENT, raw_value)
            if entity.is_public and entity.kind_tag in allowed
        ]

    def _load_media(self, raw_value: Any) -> EntityRef | None:
        entity_id = _entity_id(raw_value)
        if entity_id is None:
            return None
        media = self._entities.resolve_by_id(EntityKind.CONTENT, entity_id)
        if media is None or media.subtype != "attachment":
            return None
        return media

    def _load_all(self, kind: EntityKind, raw_value: Any) -> list[EntityRef]:
        loaded = []
        for item in _as_list(raw_value):
            entity_id = _entity_id(item)
            if entity_id is None:
                continue
            entity = self._entities.resolve_by_id(kind, entity_id)
            if entity is not None:
                loaded.append(entity)
        return loaded


def describe_field(field: FieldDescriptor, group: FieldGroupDescriptor) -> str:
    """Default description derived from the field label and instructions."""
    label = field.label or field.name
    description = f'The "{label}" field registered to the "{group.title}" field group.'
    if field.instructions:
        description = f"{description} {field.instructions}"
    return description


def _as_list(value: Any) -> Sequence[Any]:
    if value is None:
        return []
    if isinstance(value, list | tuple):
        return value
    return [value]


def _entity_id(value: Any) -> int | str | None:
    """Accept a bare id, a numeric string or a stored record carrying ``id``/``ID``."""
    if isinstance(value, EntityRef):
        return value.id
    if isinstance(value, Mapping):
        value = value.get("id", value.get("ID"))
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _collapse(entities: list[EntityRef], multiple: bool) -> Any:
    if not entities:
        return None
    return entities if multiple else entities[0]

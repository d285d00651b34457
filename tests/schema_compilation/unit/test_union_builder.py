"""Polymorphic union builder tests."""

from __future__ import annotations

import pytest
from field_group_schema.configuration import HostSettings, TaxonomySettings
from field_group_schema.entity_access import EntityKind, EntityRef, InMemoryEntityStore
from field_group_schema.schema_compilation import (
    CONTENT_NODE_UNION_NAME,
    TERM_NODE_UNION_NAME,
    HostSchema,
    PolymorphicUnionBuilder,
    TypeDiscriminationError,
    union_discriminator,
)
from field_group_schema.schema_registry import (
    FieldDeclaration,
    SchemaTypeRegistry,
    TypeCollisionError,
    TypeRef,
)


def _builder(settings: HostSettings | None = None):
    registry = SchemaTypeRegistry()
    host = HostSchema(settings or HostSettings(), InMemoryEntityStore())
    host.register_types(registry)
    return PolymorphicUnionBuilder(registry, host), registry


def test_build_union_filters_candidates_to_exposed_kinds() -> None:
    builder, registry = _builder()

    name = builder.build_union(
        "PostFields_Related", ["content:post", "content:product", "content:page"]
    )

    assert name == "PostFields_Related"
    declaration = registry.lookup_type(name)
    assert declaration is not None
    assert declaration.possible_types == ("Post", "Page")


def test_build_union_without_exposed_candidates_returns_none() -> None:
    builder, registry = _builder()
    types_before = registry.list_types()

    assert builder.build_union("PostFields_Products", ["content:product"]) is None
    assert registry.list_types() == types_before


def test_build_union_is_memoized_by_name() -> None:
    builder, registry = _builder()

    first = builder.build_union("PostFields_Related", ["content:post"])
    second = builder.build_union("PostFields_Related", ["content:post", "content:page"])

    assert first == second == "PostFields_Related"
    declaration = registry.lookup_type("PostFields_Related")
    assert declaration is not None
    assert declaration.possible_types == ("Post",)


def test_build_union_with_name_of_object_type_raises() -> None:
    builder, registry = _builder()
    registry.declare_object_type("Taken", [FieldDeclaration("id", TypeRef("ID"))])

    with pytest.raises(TypeCollisionError, match="Taken"):
        builder.build_union("Taken", ["content:post"])


def test_fallback_unions_cover_exposed_content_types_and_taxonomies() -> None:
    settings = HostSettings(taxonomies=(TaxonomySettings("genre", "Genre", show_in_graphql=False),))
    builder, registry = _builder(settings)

    assert builder.content_node_union() == CONTENT_NODE_UNION_NAME
    assert builder.term_node_union() is None
    declaration = registry.lookup_type(CONTENT_NODE_UNION_NAME)
    assert declaration is not None
    assert declaration.possible_types == ("Post", "Page", "MediaItem")
    assert registry.lookup_type(TERM_NODE_UNION_NAME) is None


def test_discriminator_maps_entity_kind_to_candidate_type() -> None:
    discriminate = union_discriminator(
        "PostFields_Related", {"content:post": "Post", "content:page": "Page"}
    )

    page = EntityRef(EntityKind.CONTENT, 11, "page")
    assert discriminate(page, None, None) == "Page"


def test_discriminator_raises_for_entity_outside_candidates() -> None:
    discriminate = union_discriminator(
        "PostFields_Related", {"content:post": "Post", "content:page": "Page"}
    )

    with pytest.raises(TypeDiscriminationError, match="content:attachment"):
        discriminate(EntityRef(EntityKind.CONTENT, 13, "attachment"), None, None)
    with pytest.raises(TypeDiscriminationError):
        discriminate({"id": 1}, None, None)

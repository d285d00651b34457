"""Type compiler tests."""

from __future__ import annotations

from typing import Any

import pytest
from field_group_schema.configuration import HostSettings
from field_group_schema.entity_access import InMemoryEntityStore
from field_group_schema.field_configuration import (
    FieldGroupDescriptor,
    StaticConfigurationProvider,
    parse_field_group,
)
from field_group_schema.schema_compilation import HostSchema, TypeCompiler
from field_group_schema.schema_registry import SchemaTypeRegistry, TypeCollisionError
from field_group_schema.value_resolution import ValueResolver


def _group(fields: list[dict[str, Any]], **extra: Any) -> FieldGroupDescriptor:
    record = {
        "key": "group_post_fields",
        "title": "Post Fields",
        "graphql_field_name": "postFields",
        "show_in_graphql": 1,
        "location": [[{"param": "post_type", "operator": "==", "value": "post"}]],
        "fields": fields,
    }
    record.update(extra)
    return parse_field_group(record)


def _compiler(*groups: FieldGroupDescriptor) -> tuple[TypeCompiler, SchemaTypeRegistry]:
    registry = SchemaTypeRegistry()
    host = HostSchema(HostSettings(), InMemoryEntityStore())
    host.register_types(registry)
    provider = StaticConfigurationProvider(groups)
    compiler = TypeCompiler(
        registry=registry,
        host=host,
        provider=provider,
        value_resolver=ValueResolver(provider),
    )
    return compiler, registry


_TEXT_FIELD = {"key": "field_text", "name": "text_field", "type": "text"}


def test_compile_declares_group_type_and_interface() -> None:
    group = _group([_TEXT_FIELD])
    compiler, registry = _compiler(group)

    type_name = compiler.compile(group)

    assert type_name == "PostFields"
    declaration = registry.lookup_type("PostFields")
    assert declaration is not None
    assert declaration.field_names() == ["textField", "fieldGroupName", "fieldGroupConfig"]
    interface = registry.lookup_type("HasPostFields")
    assert interface is not None
    assert interface.is_interface
    assert interface.field_names() == ["postFields"]
    assert registry.interfaces_for("Post") == ["HasPostFields"]


def test_compiling_the_same_group_twice_is_a_no_op() -> None:
    group = _group(
        [
            _TEXT_FIELD,
            {
                "key": "field_related",
                "name": "related",
                "type": "relationship",
                "post_type": ["post", "page"],
            },
            {
                "key": "field_rows",
                "name": "rows",
                "type": "repeater",
                "sub_fields": [{"key": "field_row_text", "name": "text", "type": "text"}],
            },
        ]
    )
    compiler, registry = _compiler(group)

    first = compiler.compile(group)
    types_after_first = registry.list_types()
    second = compiler.compile(group)

    assert first == second == "PostFields"
    assert registry.list_types() == types_after_first
    assert registry.interfaces_for("Post") == ["HasPostFields"]
    assert "PostFields_Related" in types_after_first
    assert "PostFields_Rows" in types_after_first


def test_group_without_visible_fields_declares_nothing() -> None:
    group = _group(
        [
            {"key": "field_tab", "name": "tab", "type": "accordion"},
            {"key": "field_hidden", "name": "hidden", "type": "text", "show_in_graphql": 0},
            {"key": "field_map", "name": "map", "type": "google_map"},
        ]
    )
    compiler, registry = _compiler(group)
    types_before = registry.list_types()

    assert compiler.compile(group) is None
    assert registry.lookup_type("PostFields") is None
    assert registry.lookup_type("HasPostFields") is None
    assert registry.list_types() == types_before


@pytest.mark.parametrize(
    "extra",
    [
        {"show_in_graphql": 0},
        {"active": 0},
        {"location": []},
    ],
)
def test_exposure_gate_skips_group(extra: dict[str, Any]) -> None:
    group = _group([_TEXT_FIELD], **extra)
    compiler, registry = _compiler(group)

    assert compiler.should_compile(group) is False
    assert compiler.compile(group) is None
    assert registry.lookup_type("PostFields") is None


def test_duplicate_and_reserved_field_names_are_skipped() -> None:
    group = _group(
        [
            _TEXT_FIELD,
            {"key": "field_text_2", "name": "text-field", "type": "number"},
            {"key": "field_config", "name": "field_group_config", "type": "text"},
        ]
    )
    compiler, registry = _compiler(group)

    compiler.compile(group)

    declaration = registry.lookup_type("PostFields")
    assert declaration is not None
    assert declaration.field_names() == ["textField", "fieldGroupName", "fieldGroupConfig"]
    assert declaration.fields["textField"].type_ref.name == "String"


def test_type_name_collision_with_host_type_raises() -> None:
    group = _group([_TEXT_FIELD], graphql_field_name="post")
    compiler, _ = _compiler(group)

    with pytest.raises(TypeCollisionError, match="Post"):
        compiler.compile(group)


def test_group_field_name_taken_on_target_raises() -> None:
    first = _group([_TEXT_FIELD])
    second = _group([_TEXT_FIELD], key="group_other", graphql_type_name="OtherFields")
    compiler, _ = _compiler(first, second)
    compiler.compile(first)

    with pytest.raises(TypeCollisionError, match="postFields"):
        compiler.compile(second)


def test_nested_types_are_named_after_their_owner() -> None:
    group = _group(
        [
            {
                "key": "field_details",
                "name": "details",
                "type": "group",
                "sub_fields": [
                    {
                        "key": "field_links",
                        "name": "links",
                        "type": "repeater",
                        "sub_fields": [{"key": "field_link", "name": "link", "type": "link"}],
                    }
                ],
            }
        ]
    )
    compiler, registry = _compiler(group)

    compiler.compile(group)

    assert registry.lookup_type("PostFields_Details") is not None
    assert registry.lookup_type("PostFields_Details_Links") is not None
    assert registry.interfaces_for("PostFields") == ["HasPostFields_Details"]
    assert registry.interfaces_for("PostFields_Details") == []
    assert registry.lookup_type("HasPostFields_Details_Links") is None
    details = registry.lookup_type("PostFields_Details")
    assert details is not None
    assert details.fields["links"].type_ref.describe() == "[PostFields_Details_Links]"


def test_unexposed_target_kinds_are_not_attached() -> None:
    group = _group(
        [_TEXT_FIELD],
        location=[
            [{"param": "post_type", "operator": "==", "value": "product"}],
            [{"param": "post_type", "operator": "==", "value": "page"}],
        ],
    )
    compiler, registry = _compiler(group)

    assert compiler.compile(group) == "PostFields"
    assert registry.interfaces_for("Page") == ["HasPostFields"]
    assert registry.interfaces_for("Post") == []


def test_group_targeting_only_unexposed_kinds_declares_nothing() -> None:
    group = _group(
        [
            _TEXT_FIELD,
            {
                "key": "field_rows",
                "name": "rows",
                "type": "repeater",
                "sub_fields": [{"key": "field_row_text", "name": "text", "type": "text"}],
            },
        ],
        key="group_product",
        graphql_field_name="productFields",
        location=[[{"param": "post_type", "operator": "==", "value": "product"}]],
    )
    compiler, registry = _compiler(group)
    types_before = registry.list_types()

    assert compiler.should_compile(group) is True
    assert compiler.compile(group) is None
    assert registry.lookup_type("ProductFields") is None
    assert registry.lookup_type("HasProductFields") is None
    assert registry.lookup_type("ProductFields_Rows") is None
    assert registry.list_types() == types_before

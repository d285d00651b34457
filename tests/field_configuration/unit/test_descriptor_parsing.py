"""Field configuration record parsing tests."""

from __future__ import annotations

import pytest
from field_group_schema.field_configuration import (
    LAYOUT_ROW_KEY,
    FieldConfigurationError,
    FieldKind,
    LocationRule,
    parse_field,
    parse_field_group,
    target_kinds_from_location,
)


def test_parse_field_group_defaults() -> None:
    group = parse_field_group({"key": "group_a", "title": "Post Fields"})

    assert group.exposed is False
    assert group.active is True
    assert group.target_kinds == ()
    assert group.fields == ()
    assert group.is_nested is False
    assert group.schema_name_source == "Post Fields"


def test_parse_field_group_reads_settings_and_location() -> None:
    group = parse_field_group(
        {
            "key": "group_a",
            "title": "Post Fields",
            "show_in_graphql": 1,
            "active": "0",
            "graphql_field_name": "postFields",
            "menu_order": "3",
            "position": "side",
            "location": [
                [{"param": "post_type", "operator": "==", "value": "post"}],
                [{"param": "taxonomy", "operator": "==", "value": "category"}],
            ],
            "fields": [{"key": "field_text", "name": "text", "type": "text"}],
        }
    )

    assert group.exposed is True
    assert group.active is False
    assert group.schema_name_source == "postFields"
    assert group.menu_order == 3
    assert group.position == "side"
    assert group.target_kinds == ("content:post", "taxonomy:category")
    assert group.flat_location_rules()[0] == LocationRule("post_type", "==", "post")
    assert group.field_names() == ("text",)


def test_explicit_target_kinds_override_location() -> None:
    group = parse_field_group(
        {
            "key": "group_a",
            "title": "A",
            "target_kinds": ["user", "comment"],
            "location": [[{"param": "post_type", "operator": "==", "value": "post"}]],
        }
    )

    assert group.target_kinds == ("user", "comment")


def test_target_kinds_from_location_only_uses_equality_rules() -> None:
    rules = (
        (
            LocationRule("post_type", "!=", "page"),
            LocationRule("user_role", "==", "all"),
            LocationRule("options_page", "==", "site-options"),
        ),
        (
            LocationRule("nav_menu_item", "==", "all"),
            LocationRule("page_template", "==", "default"),
            LocationRule("page_type", "==", "front_page"),
            LocationRule("unknown_param", "==", "x"),
        ),
    )

    assert target_kinds_from_location(rules) == (
        "user",
        "site-settings:site-options",
        "menu-item",
        "content:page",
    )


def test_parse_field_reads_relational_options() -> None:
    field = parse_field(
        {
            "key": "field_related",
            "name": "related",
            "type": "post_object",
            "label": "Related",
            "multiple": "1",
            "post_type": ["post", "page"],
            "return_format": "object",
            "ui": 1,
        }
    )

    assert field.kind is FieldKind.POST_OBJECT
    assert field.allows_multiple is True
    assert field.target_kinds == ("post", "page")
    assert field.return_format == "object"
    assert field.options == {"ui": 1}
    assert field.exposed is True


def test_unset_multiple_means_single_valued() -> None:
    field = parse_field({"key": "field_user", "name": "author", "type": "user"})

    assert field.multiple is None
    assert field.allows_multiple is False


def test_unknown_field_kind_parses_without_kind() -> None:
    field = parse_field({"key": "field_map", "name": "map", "type": "google_map"})

    assert field.kind is None
    assert field.kind_tag == "google_map"


def test_clone_fields_read_the_original_key() -> None:
    field = parse_field(
        {"key": "field_clone", "name": "hero", "type": "text", "_clone": 1, "__key": "field_hero"}
    )

    assert field.is_clone
    assert field.storage_key == "field_hero"


def test_clone_without_original_key_is_rejected() -> None:
    with pytest.raises(FieldConfigurationError, match="__key"):
        parse_field({"key": "field_clone", "name": "hero", "type": "text", "_clone": 1})


def test_repeater_sub_fields_form_a_nested_group() -> None:
    field = parse_field(
        {
            "key": "field_rows",
            "name": "rows",
            "type": "repeater",
            "label": "Rows",
            "sub_fields": [
                {"key": "field_row_title", "name": "title", "type": "text"},
                {"key": "field_row_cat", "name": "cat", "type": "taxonomy"},
            ],
        }
    )

    sub_group = field.sub_group
    assert sub_group is not None
    assert sub_group.is_nested
    assert sub_group.parent_field_key == "field_rows"
    assert sub_group.exposed is True
    assert sub_group.schema_name_source == "rows"
    assert sub_group.field_names() == ("title", "cat")


def test_flexible_content_layouts_are_flattened_with_layout_field() -> None:
    field = parse_field(
        {
            "key": "field_blocks",
            "name": "blocks",
            "type": "flexible_content",
            "layouts": {
                "layout_a": {
                    "name": "hero",
                    "sub_fields": [
                        {"key": "field_heading", "name": "heading", "type": "text"},
                    ],
                },
                "layout_b": {
                    "name": "quote",
                    "sub_fields": [
                        {"key": "field_heading_b", "name": "heading", "type": "text"},
                        {"key": "field_quote", "name": "quote", "type": "textarea"},
                    ],
                },
            },
        }
    )

    assert field.layouts == ("hero", "quote")
    assert field.sub_group is not None
    assert field.sub_group.field_names() == ("layout", "heading", "quote")
    assert field.sub_group.fields[0].key == LAYOUT_ROW_KEY
    assert field.sub_group.fields[1].key == "field_heading"


def test_malformed_records_are_rejected() -> None:
    with pytest.raises(FieldConfigurationError, match="must be mappings"):
        parse_field_group(["not", "a", "mapping"])  # type: ignore[arg-type]
    with pytest.raises(FieldConfigurationError, match="type"):
        parse_field({"key": "field_a", "name": "a"})
    with pytest.raises(FieldConfigurationError, match="location"):
        parse_field_group({"key": "group_a", "title": "A", "location": "post"})

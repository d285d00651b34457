"""Static configuration provider tests."""

from __future__ import annotations

from field_group_schema.field_configuration import (
    StaticConfigurationProvider,
    parse_field_group,
)


def _group():
    return parse_field_group(
        {
            "key": "group_a",
            "title": "A",
            "fields": [
                {"key": "field_body", "name": "body", "type": "wysiwyg"},
                {"key": "field_title", "name": "title", "type": "text"},
                {
                    "key": "field_rows",
                    "name": "rows",
                    "type": "repeater",
                    "sub_fields": [{"key": "field_row_body", "name": "body", "type": "wysiwyg"}],
                },
            ],
        }
    )


def test_values_are_addressed_by_identifier_as_string() -> None:
    provider = StaticConfigurationProvider([_group()], {12: {"field_title": "Hello"}})

    assert provider.get_value("12", "field_title", False) == "Hello"
    assert provider.get_value(12, "field_title", False) == "Hello"
    assert provider.get_value(13, "field_title", False) is None


def test_formatted_wysiwyg_reads_apply_content_filter() -> None:
    provider = StaticConfigurationProvider(
        [_group()],
        {1: {"field_body": "text", "field_title": "text", "field_row_body": "row"}},
        content_filter=str.upper,
    )

    assert provider.get_value(1, "field_body", True) == "TEXT"
    assert provider.get_value(1, "field_body", False) == "text"
    assert provider.get_value(1, "field_title", True) == "text"
    assert provider.get_value(1, "field_row_body", True) == "ROW"


def test_set_and_delete_values() -> None:
    provider = StaticConfigurationProvider([_group()])

    provider.set_value("user_3", "field_title", "Bio")
    assert provider.get_value("user_3", "field_title", False) == "Bio"

    provider.delete_value("user_3", "field_title")
    assert provider.get_value("user_3", "field_title", False) is None


def test_lists_groups_and_fields() -> None:
    group = _group()
    provider = StaticConfigurationProvider([group])

    assert provider.list_field_groups() == (group,)
    assert [field.key for field in provider.list_fields(group)] == [
        "field_body",
        "field_title",
        "field_rows",
    ]

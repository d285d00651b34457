"""Entity references and content store tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from field_group_schema.entity_access import (
    ContentStoreError,
    EntityKind,
    EntityRef,
    FieldRow,
    InMemoryEntityStore,
    load_content_store,
    make_kind_tag,
    parse_kind_tag,
)


def _write_file(path: Path, contents: str) -> Path:
    path.write_text(contents, encoding="utf-8")
    return path


def test_kind_tags_round_trip_through_parsing() -> None:
    assert make_kind_tag(EntityKind.CONTENT, "post") == "content:post"
    assert make_kind_tag(EntityKind.USER) == "user"
    assert parse_kind_tag("taxonomy:category") == (EntityKind.TAXONOMY, "category")
    assert parse_kind_tag("menu-item") == (EntityKind.MENU_ITEM, None)
    assert parse_kind_tag("content") is None
    assert parse_kind_tag("planet:mars") is None


def test_entity_visibility_follows_status() -> None:
    assert EntityRef(EntityKind.CONTENT, 1, "post").is_public
    assert EntityRef(EntityKind.CONTENT, 2, "attachment", status="inherit").is_public
    assert not EntityRef(EntityKind.CONTENT, 3, "post", status="draft").is_public
    assert not EntityRef(EntityKind.USER, 4, status="private").is_public


def test_field_row_lookup_prefers_key_over_name() -> None:
    row = FieldRow({"field_title": "By key", "title": "By name", "other": "x"})

    assert row.lookup("field_title", "title") == "By key"
    assert row.lookup("field_missing", "other") == "x"
    assert row.lookup("field_missing", "missing") is None


def test_in_memory_store_resolves_by_kind_and_id() -> None:
    post = EntityRef(EntityKind.CONTENT, 5, "post")
    term = EntityRef(EntityKind.TAXONOMY, 5, "category")
    store = InMemoryEntityStore([post, term])

    assert store.resolve_by_id(EntityKind.CONTENT, "5") is post
    assert store.resolve_by_id(EntityKind.TAXONOMY, 5) is term
    assert store.entities_of(EntityKind.CONTENT, "page") == []

    store.remove(EntityKind.CONTENT, 5)
    assert store.resolve_by_id(EntityKind.CONTENT, 5) is None


def test_load_content_store(tmp_path: Path) -> None:
    store_path = _write_file(
        tmp_path / "store.yaml",
        """
entities:
  - kind: content
    id: 10
    subtype: post
    attributes:
      title: Hello
  - kind: user
    id: 3
    status: private
values:
  10:
    field_title: Stored title
  user_3:
    field_bio: Bio
""",
    )

    store = load_content_store(store_path)

    post = store.entities.resolve_by_id(EntityKind.CONTENT, 10)
    assert post is not None
    assert post.attribute("title") == "Hello"
    user = store.entities.resolve_by_id(EntityKind.USER, 3)
    assert user is not None
    assert user.subtype is None
    assert user.is_public is False
    assert store.values == {"10": {"field_title": "Stored title"}, "user_3": {"field_bio": "Bio"}}


@pytest.mark.parametrize(
    ("contents", "message"),
    [
        ("- 1\n- 2\n", "root must be a mapping"),
        ("entities:\n  - kind: planet\n    id: 1\n", "not a known entity kind"),
        ("entities:\n  - kind: content\n    id: 1\n", "subtype is required"),
        ("entities:\n  - kind: user\n    id: [1]\n", "integer or string"),
        ("values:\n  - 1\n", "values must be a mapping"),
    ],
)
def test_invalid_content_store_files_raise(tmp_path: Path, contents: str, message: str) -> None:
    store_path = _write_file(tmp_path / "store.yaml", contents)

    with pytest.raises(ContentStoreError, match=message):
        load_content_store(store_path)


def test_missing_content_store_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ContentStoreError, match="not found"):
        load_content_store(tmp_path / "missing.yaml")

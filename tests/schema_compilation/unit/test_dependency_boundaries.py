"""Boundary tests for package internal dependencies."""

from __future__ import annotations

from pathlib import Path


def _package_dir() -> Path:
    return Path(__file__).resolve().parents[3] / "src" / "field_group_schema"


def _module_texts(subpackage: str) -> list[tuple[Path, str]]:
    return [
        (path, path.read_text(encoding="utf-8"))
        for path in sorted((_package_dir() / subpackage).glob("*.py"))
    ]


def test_schema_registry_only_depends_on_graphql() -> None:
    forbidden_import_fragments = (
        "field_group_schema.schema_compilation",
        "field_group_schema.value_resolution",
        "field_group_schema.field_configuration",
        "field_group_schema.entity_access",
        "field_group_schema.cli",
    )

    for module_path, text in _module_texts("schema_registry"):
        for fragment in forbidden_import_fragments:
            assert fragment not in text, f"Forbidden dependency in {module_path}: {fragment}"


def test_value_resolution_is_independent_of_schema_types() -> None:
    forbidden_import_fragments = (
        "field_group_schema.schema_compilation",
        "field_group_schema.schema_registry",
        "from graphql",
        "import graphql",
    )

    for module_path, text in _module_texts("value_resolution"):
        for fragment in forbidden_import_fragments:
            assert fragment not in text, f"Forbidden dependency in {module_path}: {fragment}"


def test_configuration_records_do_not_depend_on_compilation() -> None:
    forbidden_import_fragments = (
        "field_group_schema.schema_compilation",
        "field_group_schema.value_resolution",
        "from graphql",
    )

    for subpackage in ("field_configuration", "entity_access"):
        for module_path, text in _module_texts(subpackage):
            for fragment in forbidden_import_fragments:
                assert fragment not in text, f"Forbidden dependency in {module_path}: {fragment}"

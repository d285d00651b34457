"""Configuration scaffold builder tests."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from field_group_schema.configuration.config_scaffold_builder import (
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from field_group_schema.configuration.loader import parse_configuration


def test_build_placeholder_configuration_contains_all_supported_sections() -> None:
    scaffold = build_placeholder_configuration()

    assert "Field group configuration template" in scaffold
    assert "host:" in scaffold
    assert "content_types:" in scaffold
    assert "taxonomies:" in scaffold
    assert "settings_pages:" in scaffold
    assert "field_groups:" in scaffold
    assert "location:" in scaffold
    assert "<REQUIRED>" in scaffold
    assert "<OPTIONAL>" in scaffold


def test_placeholder_configuration_parses_as_valid_configuration() -> None:
    configuration = parse_configuration(yaml.safe_load(build_placeholder_configuration()))

    assert len(configuration.field_groups) == 1
    assert configuration.field_groups[0].target_kinds == ("content:post",)


def test_write_placeholder_configuration_writes_file(tmp_path: Path) -> None:
    output_path = tmp_path / "field-groups.yaml"

    written_path = write_placeholder_configuration(output_path)

    assert written_path == output_path.resolve()
    assert output_path.exists()
    assert "<REQUIRED>" in output_path.read_text(encoding="utf-8")


def test_write_placeholder_configuration_fails_when_file_exists(tmp_path: Path) -> None:
    output_path = tmp_path / "field-groups.yaml"
    output_path.write_text("existing", encoding="utf-8")

    with pytest.raises(FileExistsError):
        write_placeholder_configuration(output_path)

    assert output_path.read_text(encoding="utf-8") == "existing"

"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from field_group_schema.field_configuration.descriptor_parsing import (
    FieldConfigurationError,
    parse_field_group,
)
from field_group_schema.schema_registry.naming import format_type_name
from field_group_schema.schema_registry.registry_errors import InvalidTypeNameError

from .runtime_settings import (
    Configuration,
    ContentTypeSettings,
    HostSettings,
    SettingsPageSettings,
    TaxonomySettings,
)


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    return parse_configuration(parsed, path=path)


def parse_configuration(parsed: Any, *, path: Path | None = None) -> Configuration:
    """Validate an already parsed configuration document."""
    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    host = _parse_host_section(parsed.get("host"))
    field_groups = _parse_field_groups_section(parsed.get("field_groups"))
    return Configuration(path=path, host=host, field_groups=field_groups)


def _parse_host_section(value: Any) -> HostSettings:
    if value is None:
        return HostSettings()
    section = _require_mapping(value, "host")
    defaults = HostSettings()
    content_types = defaults.content_types
    if section.get("content_types") is not None:
        content_types = tuple(
            ContentTypeSettings(name=name, graphql_single_name=single_name, show_in_graphql=show)
            for name, single_name, show in _parse_type_entries(
                section.get("content_types"), "host.content_types"
            )
        )
    taxonomies = defaults.taxonomies
    if section.get("taxonomies") is not None:
        taxonomies = tuple(
            TaxonomySettings(name=name, graphql_single_name=single_name, show_in_graphql=show)
            for name, single_name, show in _parse_type_entries(
                section.get("taxonomies"), "host.taxonomies"
            )
        )
    settings_pages = _parse_settings_pages(section.get("settings_pages"))
    return HostSettings(
        content_types=content_types,
        taxonomies=taxonomies,
        settings_pages=settings_pages,
    )


def _parse_type_entries(value: Any, section_name: str) -> list[tuple[str, str, bool]]:
    entries = _require_sequence(value, section_name)
    parsed: list[tuple[str, str, bool]] = []
    seen: set[str] = set()
    for index, entry in enumerate(entries):
        label = f"{section_name}[{index}]"
        mapping = _require_mapping(entry, label)
        name = _require_non_empty_string(mapping.get("name"), f"{label}.name")
        if name in seen:
            raise ConfigurationError(f"{section_name} declares '{name}' more than once.")
        seen.add(name)
        single_name = _optional_string(
            mapping.get("graphql_single_name"), f"{label}.graphql_single_name"
        )
        parsed.append(
            (
                name,
                _schema_type_name(single_name or name, f"{label}.graphql_single_name"),
                _require_bool(mapping.get("show_in_graphql", True), f"{label}.show_in_graphql"),
            )
        )
    return parsed


def _parse_settings_pages(value: Any) -> tuple[SettingsPageSettings, ...]:
    if value is None:
        return ()
    pages: list[SettingsPageSettings] = []
    for index, entry in enumerate(_require_sequence(value, "host.settings_pages")):
        label = f"host.settings_pages[{index}]"
        mapping = _require_mapping(entry, label)
        key = _require_non_empty_string(mapping.get("key"), f"{label}.key")
        type_name = _optional_string(mapping.get("graphql_type_name"), f"{label}.graphql_type_name")
        pages.append(
            SettingsPageSettings(
                key=key,
                graphql_type_name=_schema_type_name(type_name or key, f"{label}.graphql_type_name"),
                title=_optional_string(mapping.get("title"), f"{label}.title") or "",
                post_id=_optional_string(mapping.get("post_id"), f"{label}.post_id") or "options",
            )
        )
    return tuple(pages)


def _parse_field_groups_section(value: Any) -> tuple:
    if value is None:
        return ()
    groups = []
    seen_keys: set[str] = set()
    for index, record in enumerate(_require_sequence(value, "field_groups")):
        try:
            group = parse_field_group(record)
        except FieldConfigurationError as exc:
            raise ConfigurationError(f"field_groups[{index}]: {exc}") from exc
        if group.key in seen_keys:
            raise ConfigurationError(f"field_groups declares key '{group.key}' more than once.")
        seen_keys.add(group.key)
        groups.append(group)
    return tuple(groups)


def _schema_type_name(value: str, field_name: str) -> str:
    try:
        return format_type_name(value)
    except InvalidTypeNameError as exc:
        raise ConfigurationError(f"{field_name}: {exc}") from exc


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_sequence(value: Any, section_name: str) -> Sequence[Any]:
    if not isinstance(value, Sequence) or isinstance(value, str):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a list.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _require_bool(value: Any, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise ConfigurationError(f"{field_name} must be a boolean.")

"""Parsing of raw configuration-store records into descriptors."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from .descriptor_models import (
    NESTED_FIELD_KINDS,
    FieldDescriptor,
    FieldGroupDescriptor,
    FieldKind,
    LocationRule,
)

_LOCATION_KIND_PREFIXES: dict[str, str] = {
    "post_type": "content",
    "taxonomy": "taxonomy",
    "options_page": "site-settings",
}
_LOCATION_FIXED_KINDS: dict[str, str] = {
    "user_form": "user",
    "user_role": "user",
    "comment": "comment",
    "nav_menu": "menu",
    "nav_menu_item": "menu-item",
    "attachment": "content:attachment",
    "page_type": "content:page",
    "page_template": "content:page",
}
# Flexible content rows store their layout name under this key.
LAYOUT_ROW_KEY = "acf_fc_layout"
_LAYOUT_FIELD_RECORD: Mapping[str, Any] = {
    "key": LAYOUT_ROW_KEY,
    "name": "layout",
    "type": "text",
    "label": "Layout",
    "instructions": "Name of the layout this row uses.",
}
_FIELD_KEYS_CONSUMED = frozenset(
    {
        "key",
        "name",
        "type",
        "label",
        "instructions",
        "graphql_field_name",
        "show_in_graphql",
        "multiple",
        "post_type",
        "taxonomy",
        "return_format",
        "new_lines",
        "_clone",
        "__key",
        "sub_fields",
        "layouts",
    }
)


class FieldConfigurationError(Exception):
    """Raised when a field or field group record is malformed."""


def parse_field_group(record: Mapping[str, Any]) -> FieldGroupDescriptor:
    """Parse one top-level field group record."""
    if not isinstance(record, Mapping):
        raise FieldConfigurationError("Field group records must be mappings.")
    key = _require_string(record.get("key"), "field_group.key")
    title = _optional_string(record.get("title"), f"{key}.title") or key
    location_rules = _parse_location(record.get("location"), key)
    explicit_kinds = record.get("target_kinds")
    if explicit_kinds is None:
        target_kinds = target_kinds_from_location(location_rules)
    else:
        target_kinds = _string_tuple(explicit_kinds, f"{key}.target_kinds")
    fields = _parse_fields(record.get("fields"), f"{key}.fields")
    return FieldGroupDescriptor(
        key=key,
        title=title,
        description=_optional_string(record.get("description"), f"{key}.description") or "",
        target_kinds=target_kinds,
        graphql_field_name=_optional_string(
            record.get("graphql_field_name"), f"{key}.graphql_field_name"
        ),
        graphql_type_name=_optional_string(
            record.get("graphql_type_name"), f"{key}.graphql_type_name"
        ),
        active=_as_bool(record.get("active"), default=True),
        exposed=_as_bool(record.get("show_in_graphql"), default=False),
        fields=fields,
        location_rules=location_rules,
        menu_order=_as_int(record.get("menu_order"), f"{key}.menu_order"),
        position=_optional_string(record.get("position"), f"{key}.position"),
        style=_optional_string(record.get("style"), f"{key}.style"),
        label_placement=_optional_string(
            record.get("label_placement"), f"{key}.label_placement"
        ),
        instruction_placement=_optional_string(
            record.get("instruction_placement"), f"{key}.instruction_placement"
        ),
    )


def parse_field(record: Mapping[str, Any], path: str = "field") -> FieldDescriptor:
    """Parse one field record, including nested sub-fields for group-like kinds."""
    if not isinstance(record, Mapping):
        raise FieldConfigurationError(f"{path} must be a mapping.")
    key = _require_string(record.get("key"), f"{path}.key")
    kind_tag = _require_string(record.get("type"), f"{key}.type")
    name = _optional_string(record.get("name"), f"{key}.name") or ""
    label = _optional_string(record.get("label"), f"{key}.label") or ""
    instructions = _optional_string(record.get("instructions"), f"{key}.instructions") or ""
    graphql_field_name = _optional_string(
        record.get("graphql_field_name"), f"{key}.graphql_field_name"
    )
    multiple = record.get("multiple")
    clone_source_key = None
    if _as_bool(record.get("_clone"), default=False):
        clone_source_key = _require_string(record.get("__key"), f"{key}.__key")

    kind = FieldKind.from_tag(kind_tag)
    layouts: tuple[str, ...] = ()
    sub_group = None
    if kind in NESTED_FIELD_KINDS:
        if kind is FieldKind.FLEXIBLE_CONTENT and record.get("layouts") is not None:
            layouts, sub_records = _flatten_layouts(record.get("layouts"), f"{key}.layouts")
        else:
            sub_records = list(record.get("sub_fields") or [])
        if kind is FieldKind.FLEXIBLE_CONTENT:
            sub_records = [_LAYOUT_FIELD_RECORD, *sub_records]
        sub_group = FieldGroupDescriptor(
            key=key,
            title=label or name or key,
            description=instructions,
            graphql_field_name=graphql_field_name or name or key,
            exposed=True,
            active=True,
            fields=_parse_fields(sub_records, f"{key}.sub_fields"),
            parent_field_key=key,
        )

    return FieldDescriptor(
        key=key,
        name=name,
        kind_tag=kind_tag,
        label=label,
        instructions=instructions,
        graphql_field_name=graphql_field_name,
        exposed=_as_bool(record.get("show_in_graphql"), default=True),
        multiple=None if multiple is None else _as_bool(multiple, default=False),
        target_kinds=_string_tuple(record.get("post_type"), f"{key}.post_type"),
        taxonomy=_optional_string(record.get("taxonomy"), f"{key}.taxonomy"),
        return_format=_optional_string(record.get("return_format"), f"{key}.return_format"),
        new_lines=_optional_string(record.get("new_lines"), f"{key}.new_lines"),
        clone_source_key=clone_source_key,
        layouts=layouts,
        sub_group=sub_group,
        options={k: v for k, v in record.items() if k not in _FIELD_KEYS_CONSUMED},
    )


def target_kinds_from_location(
    location_rules: Sequence[Sequence[LocationRule]],
) -> tuple[str, ...]:
    """Derive entity kind tags from equality location rules, preserving order."""
    kinds: list[str] = []
    for rule_group in location_rules:
        for rule in rule_group:
            if rule.operator != "==":
                continue
            kind = _kind_for_rule(rule)
            if kind and kind not in kinds:
                kinds.append(kind)
    return tuple(kinds)


def _kind_for_rule(rule: LocationRule) -> str | None:
    prefix = _LOCATION_KIND_PREFIXES.get(rule.param)
    if prefix is not None:
        return f"{prefix}:{rule.value}" if rule.value else None
    return _LOCATION_FIXED_KINDS.get(rule.param)


def _parse_fields(value: Any, path: str) -> tuple[FieldDescriptor, ...]:
    if value is None:
        return ()
    if not isinstance(value, Sequence) or isinstance(value, str):
        raise FieldConfigurationError(f"{path} must be a list.")
    return tuple(parse_field(item, f"{path}[{index}]") for index, item in enumerate(value))


def _flatten_layouts(value: Any, path: str) -> tuple[tuple[str, ...], list[Mapping[str, Any]]]:
    if isinstance(value, Mapping):
        value = list(value.values())
    if not isinstance(value, Sequence) or isinstance(value, str):
        raise FieldConfigurationError(f"{path} must be a list of layouts.")
    layout_names: list[str] = []
    sub_records: list[Mapping[str, Any]] = []
    seen_names: set[str] = set()
    for index, layout in enumerate(value):
        if not isinstance(layout, Mapping):
            raise FieldConfigurationError(f"{path}[{index}] must be a mapping.")
        layout_name = _require_string(layout.get("name"), f"{path}[{index}].name")
        layout_names.append(layout_name)
        for sub_record in layout.get("sub_fields") or []:
            sub_name = sub_record.get("name") if isinstance(sub_record, Mapping) else None
            if sub_name in seen_names:
                continue
            seen_names.add(sub_name)
            sub_records.append(sub_record)
    return tuple(layout_names), sub_records


def _parse_location(value: Any, group_key: str) -> tuple[tuple[LocationRule, ...], ...]:
    if value is None or value == "":
        return ()
    if not isinstance(value, Sequence) or isinstance(value, str):
        raise FieldConfigurationError(f"{group_key}.location must be a list of rule groups.")
    groups: list[tuple[LocationRule, ...]] = []
    for group_index, rule_group in enumerate(value):
        if not isinstance(rule_group, Sequence) or isinstance(rule_group, str):
            raise FieldConfigurationError(
                f"{group_key}.location[{group_index}] must be a list of rules."
            )
        rules = []
        for rule in rule_group:
            if not isinstance(rule, Mapping):
                raise FieldConfigurationError(f"{group_key}.location rules must be mappings.")
            rules.append(
                LocationRule(
                    param=str(rule.get("param", "")),
                    operator=str(rule.get("operator", "==")),
                    value=str(rule.get("value", "")),
                )
            )
        groups.append(tuple(rules))
    return tuple(groups)


def _string_tuple(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None or value == "":
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, Sequence):
        items = []
        for item in value:
            if not isinstance(item, str):
                raise FieldConfigurationError(f"{field_name} entries must be strings.")
            if item.strip():
                items.append(item.strip())
        return tuple(items)
    raise FieldConfigurationError(f"{field_name} must be a string or list of strings.")


def _require_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise FieldConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise FieldConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise FieldConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _as_bool(value: Any, *, default: bool) -> bool:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() not in {"0", "false", "no", "off"}
    return bool(value)


def _as_int(value: Any, field_name: str) -> int:
    if value is None or value == "":
        return 0
    if isinstance(value, bool) or not isinstance(value, int | str):
        raise FieldConfigurationError(f"{field_name} must be an integer.")
    try:
        return int(value)
    except ValueError as exc:
        raise FieldConfigurationError(f"{field_name} must be an integer.") from exc

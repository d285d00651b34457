"""Configuration provider boundary and a static in-memory implementation."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any, Protocol

from .descriptor_models import FieldDescriptor, FieldGroupDescriptor, FieldKind

Identifier = int | str
ContentFilter = Callable[[str], str]


class ConfigurationProvider(Protocol):
    """Source of field configuration records and stored field values."""

    def list_field_groups(self) -> Sequence[FieldGroupDescriptor]: ...

    def list_fields(self, group: FieldGroupDescriptor) -> Sequence[FieldDescriptor]: ...

    def get_value(self, identifier: Identifier, storage_key: str, format_value: bool) -> Any: ...


class StaticConfigurationProvider:
    """Provider backed by descriptors and a value table held in memory.

    Values are addressed by ``(identifier, storage_key)``; identifiers are
    compared as strings so ``12`` and ``"12"`` address the same record.
    Formatted reads run wysiwyg values through ``content_filter``.
    """

    def __init__(
        self,
        field_groups: Iterable[FieldGroupDescriptor],
        values: Mapping[Identifier, Mapping[str, Any]] | None = None,
        *,
        content_filter: ContentFilter | None = None,
    ) -> None:
        self._field_groups = tuple(field_groups)
        self._values: dict[str, dict[str, Any]] = {
            str(identifier): dict(record) for identifier, record in (values or {}).items()
        }
        self._content_filter = content_filter
        self._fields_by_key = _index_fields(self._field_groups)

    def list_field_groups(self) -> Sequence[FieldGroupDescriptor]:
        return self._field_groups

    def list_fields(self, group: FieldGroupDescriptor) -> Sequence[FieldDescriptor]:
        return group.fields

    def get_value(self, identifier: Identifier, storage_key: str, format_value: bool) -> Any:
        value = self._values.get(str(identifier), {}).get(storage_key)
        if not format_value or self._content_filter is None or not isinstance(value, str):
            return value
        field = self._fields_by_key.get(storage_key)
        if field is not None and field.kind is FieldKind.WYSIWYG:
            return self._content_filter(value)
        return value

    def set_value(self, identifier: Identifier, storage_key: str, value: Any) -> None:
        self._values.setdefault(str(identifier), {})[storage_key] = value

    def delete_value(self, identifier: Identifier, storage_key: str) -> None:
        self._values.get(str(identifier), {}).pop(storage_key, None)


def _index_fields(groups: Sequence[FieldGroupDescriptor]) -> dict[str, FieldDescriptor]:
    index: dict[str, FieldDescriptor] = {}
    pending = [field for group in groups for field in group.fields]
    while pending:
        field = pending.pop()
        index.setdefault(field.key, field)
        if field.sub_group is not None:
            pending.extend(field.sub_group.fields)
    return index

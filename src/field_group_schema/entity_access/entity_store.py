"""Entity provider boundary and the in-memory content store."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

import yaml

from .entity_models import EntityKind, EntityRef


class ContentStoreError(Exception):
    """Raised when a content store file is invalid."""


class EntityProvider(Protocol):  # pylint: disable=too-few-public-methods
    """Looks up entities by kind and id."""

    def resolve_by_id(self, kind: EntityKind, entity_id: int | str) -> EntityRef | None: ...


class InMemoryEntityStore:
    """Entity provider holding every entity in a dictionary."""

    def __init__(self, entities: Iterable[EntityRef] = ()) -> None:
        self._entities: dict[tuple[EntityKind, str], EntityRef] = {}
        for entity in entities:
            self.add(entity)

    def add(self, entity: EntityRef) -> EntityRef:
        self._entities[(entity.kind, str(entity.id))] = entity
        return entity

    def remove(self, kind: EntityKind, entity_id: int | str) -> None:
        self._entities.pop((kind, str(entity_id)), None)

    def resolve_by_id(self, kind: EntityKind, entity_id: int | str) -> EntityRef | None:
        return self._entities.get((kind, str(entity_id)))

    def entities_of(self, kind: EntityKind, subtype: str | None = None) -> list[EntityRef]:
        return [
            entity
            for (entity_kind, _), entity in self._entities.items()
            if entity_kind is kind and (subtype is None or entity.subtype == subtype)
        ]


@dataclass(frozen=True)
class ContentStore:
    """Entities plus stored field values loaded from a content store file."""

    entities: InMemoryEntityStore
    values: Mapping[str, Mapping[str, Any]]


def load_content_store(store_path: Path | str) -> ContentStore:
    """Load entities and field values from a YAML or JSON content store file."""
    path = Path(store_path)
    if not path.exists():
        raise ContentStoreError(f"Content store file not found: {path}")
    try:
        parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ContentStoreError(f"Failed to parse content store file: {exc}") from exc
    if parsed is None:
        parsed = {}
    if not isinstance(parsed, Mapping):
        raise ContentStoreError("Content store root must be a mapping.")
    return ContentStore(
        entities=InMemoryEntityStore(_parse_entities(parsed.get("entities"))),
        values=_parse_values(parsed.get("values")),
    )


def _parse_entities(value: Any) -> list[EntityRef]:
    if value is None:
        return []
    if not isinstance(value, Sequence) or isinstance(value, str):
        raise ContentStoreError("entities must be a list.")
    entities = []
    for index, record in enumerate(value):
        if not isinstance(record, Mapping):
            raise ContentStoreError(f"entities[{index}] must be a mapping.")
        try:
            kind = EntityKind(record.get("kind"))
        except ValueError as exc:
            raise ContentStoreError(
                f"entities[{index}].kind '{record.get('kind')}' is not a known entity kind."
            ) from exc
        entity_id = record.get("id")
        if isinstance(entity_id, bool) or not isinstance(entity_id, int | str):
            raise ContentStoreError(f"entities[{index}].id must be an integer or string.")
        subtype = record.get("subtype")
        if kind.has_subtype and not isinstance(subtype, str):
            raise ContentStoreError(f"entities[{index}].subtype is required for {kind.value}.")
        attributes = record.get("attributes") or {}
        if not isinstance(attributes, Mapping):
            raise ContentStoreError(f"entities[{index}].attributes must be a mapping.")
        entities.append(
            EntityRef(
                kind=kind,
                id=entity_id,
                subtype=subtype if kind.has_subtype else None,
                status=str(record.get("status", "publish")),
                attributes=dict(attributes),
            )
        )
    return entities


def _parse_values(value: Any) -> dict[str, dict[str, Any]]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ContentStoreError("values must be a mapping of identifier to field values.")
    parsed: dict[str, dict[str, Any]] = {}
    for identifier, record in value.items():
        if not isinstance(record, Mapping):
            raise ContentStoreError(f"values.{identifier} must be a mapping.")
        parsed[str(identifier)] = dict(record)
    return parsed

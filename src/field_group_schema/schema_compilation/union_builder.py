"""Synthesizes union types for relational fields that target several entity kinds."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from field_group_schema.schema_registry.registry_errors import TypeCollisionError
from field_group_schema.schema_registry.type_declarations import TypeResolver
from field_group_schema.schema_registry.type_registry import SchemaTypeRegistry

from .compilation_errors import TypeDiscriminationError
from .host_types import HostSchema

_LOGGER = logging.getLogger("field_group_schema.compilation")
_LOGGER.addHandler(logging.NullHandler())

CONTENT_NODE_UNION_NAME = "ContentNodeUnion"
TERM_NODE_UNION_NAME = "TermNodeUnion"


class PolymorphicUnionBuilder:
    """Declares unions over host types, memoized by union name."""

    def __init__(self, registry: SchemaTypeRegistry, host: HostSchema) -> None:
        self._registry = registry
        self._host = host

    def build_union(self, name: str, candidate_kinds: Sequence[str]) -> str | None:
        """Return the union name, or None when no candidate kind is exposed by the host."""
        existing = self._registry.lookup_type(name)
        if existing is not None:
            if existing.is_union:
                return name
            raise TypeCollisionError(
                f"Cannot declare union '{name}'; the name is already a {existing.kind.value} type."
            )
        candidates: dict[str, str] = {}
        for kind_tag in candidate_kinds:
            type_name = self._host.type_name_for_kind(kind_tag)
            if type_name is not None:
                candidates[kind_tag] = type_name
        if not candidates:
            _LOGGER.debug("Union %s has no exposed candidates among %s", name, candidate_kinds)
            return None
        self._registry.declare_union_type(
            name,
            list(candidates.values()),
            union_discriminator(name, candidates),
            description=f"Union of {', '.join(dict.fromkeys(candidates.values()))}",
        )
        return name

    def content_node_union(self) -> str | None:
        """Union over every exposed content type."""
        return self.build_union(CONTENT_NODE_UNION_NAME, self._host.content_kind_tags())

    def term_node_union(self) -> str | None:
        """Union over every exposed taxonomy."""
        return self.build_union(TERM_NODE_UNION_NAME, self._host.taxonomy_kind_tags())


def union_discriminator(union_name: str, candidates: Mapping[str, str]) -> TypeResolver:
    """Build the resolver that maps an entity's kind tag to one candidate type name."""

    def _discriminate(value: Any, _info: Any, _abstract_type: Any) -> str:
        kind_tag = getattr(value, "kind_tag", None)
        type_name = candidates.get(kind_tag) if isinstance(kind_tag, str) else None
        if type_name is None:
            raise TypeDiscriminationError(
                f"Cannot resolve a member of union '{union_name}' for entity kind"
                f" {kind_tag!r}; expected one of {', '.join(candidates)}."
            )
        return type_name

    return _discriminate

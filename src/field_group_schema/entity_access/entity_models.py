"""Entity reference entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

PUBLIC_STATUSES = frozenset({"publish", "inherit"})


class EntityKind(str, Enum):
    """Kinds of backing objects a query can be positioned on."""

    CONTENT = "content"
    TAXONOMY = "taxonomy"
    USER = "user"
    COMMENT = "comment"
    MENU = "menu"
    MENU_ITEM = "menu-item"
    SETTINGS_PAGE = "site-settings"

    @property
    def has_subtype(self) -> bool:
        return self in _SUBTYPED_KINDS


_SUBTYPED_KINDS = frozenset({EntityKind.CONTENT, EntityKind.TAXONOMY, EntityKind.SETTINGS_PAGE})


@dataclass(frozen=True)
class EntityRef:
    """A loaded entity tagged with its kind.

    ``subtype`` is the content type, taxonomy name or settings page key for the
    kinds that have one.
    """

    kind: EntityKind
    id: int | str
    subtype: str | None = None
    status: str = "publish"
    attributes: Mapping[str, Any] = field(default_factory=dict)

    @property
    def kind_tag(self) -> str:
        return make_kind_tag(self.kind, self.subtype)

    @property
    def is_public(self) -> bool:
        """Drafts, private and otherwise unpublished entities are not public."""
        return self.status in PUBLIC_STATUSES

    def attribute(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name, default)


@dataclass(frozen=True)
class FieldRow:
    """Row data read out of a repeater, flexible content or group value.

    Sub-fields of nested types resolve against the row instead of a top-level
    entity. ``owner`` is the root the row was read from.
    """

    values: Mapping[str, Any]
    owner: Any = None

    def lookup(self, key: str, name: str | None = None) -> Any:
        """Return the stored value for a field key, falling back to the field name."""
        if key in self.values:
            return self.values[key]
        if name and name in self.values:
            return self.values[name]
        return None


def make_kind_tag(kind: EntityKind, subtype: str | None = None) -> str:
    return f"{kind.value}:{subtype}" if subtype else kind.value


def parse_kind_tag(tag: str) -> tuple[EntityKind, str | None] | None:
    """Split a kind tag such as ``content:post`` into its kind and subtype."""
    kind_value, _, subtype = tag.partition(":")
    try:
        kind = EntityKind(kind_value)
    except ValueError:
        return None
    if kind.has_subtype and not subtype:
        return None
    return kind, subtype or None

"""Schema declaration entities."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

BUILTIN_SCALAR_NAMES = ("String", "Int", "Float", "Boolean", "ID")

FieldResolver = Callable[..., Any]
TypeResolver = Callable[[Any, Any, Any], str | None]


class DeclarationKind(str, Enum):
    """Kinds of named types the registry can declare."""

    OBJECT = "object"
    INTERFACE = "interface"
    UNION = "union"


@dataclass(frozen=True)
class TypeRef:
    """Reference to a named type, optionally wrapped in a list."""

    name: str
    is_list: bool = False
    non_null: bool = False

    @classmethod
    def list_of(cls, name: str) -> TypeRef:
        return cls(name=name, is_list=True)

    def describe(self) -> str:
        """Return the SDL spelling of the reference."""
        rendered = f"[{self.name}]" if self.is_list else self.name
        return f"{rendered}!" if self.non_null else rendered


@dataclass(frozen=True)
class FieldDeclaration:
    """One field of an object or interface declaration."""

    name: str
    type_ref: TypeRef
    resolve: FieldResolver | None = None
    description: str | None = None
    args: Mapping[str, TypeRef] = field(default_factory=dict)


@dataclass
class TypeDeclaration:
    """Named type declared into the registry.

    ``fields`` keeps insertion order, which is the order the schema enumerates
    them in.
    """

    name: str
    kind: DeclarationKind
    description: str | None = None
    fields: dict[str, FieldDeclaration] = field(default_factory=dict)
    interfaces: list[str] = field(default_factory=list)
    possible_types: tuple[str, ...] = ()
    resolve_type: TypeResolver | None = None

    @property
    def is_object(self) -> bool:
        return self.kind is DeclarationKind.OBJECT

    @property
    def is_interface(self) -> bool:
        return self.kind is DeclarationKind.INTERFACE

    @property
    def is_union(self) -> bool:
        return self.kind is DeclarationKind.UNION

    def field_names(self) -> list[str]:
        return list(self.fields)

"""Process-wide registry of declared schema types."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from contextlib import contextmanager

from .registry_errors import TypeCollisionError
from .type_declarations import (
    BUILTIN_SCALAR_NAMES,
    DeclarationKind,
    FieldDeclaration,
    TypeDeclaration,
    TypeResolver,
)

_LOGGER = logging.getLogger("field_group_schema.registry")
_LOGGER.addHandler(logging.NullHandler())


class SchemaTypeRegistry:
    """Registry of every type declared while compiling a schema.

    Names are write-once: declaring a name twice raises ``TypeCollisionError``.
    Callers that want to reuse a type look it up first. Interface attachments
    may target types that are declared later; they are resolved when the schema
    is built.
    """

    def __init__(self) -> None:
        self._declarations: dict[str, TypeDeclaration] = {}
        self._attachments: dict[str, list[str]] = {}

    def declare_object_type(
        self,
        name: str,
        fields: Iterable[FieldDeclaration],
        *,
        description: str | None = None,
        interfaces: Sequence[str] = (),
    ) -> TypeDeclaration:
        """Declare an object type with the given ordered fields."""
        declaration = TypeDeclaration(
            name=name,
            kind=DeclarationKind.OBJECT,
            description=description,
            fields=_field_mapping(name, fields),
            interfaces=list(interfaces),
        )
        return self._store(declaration)

    def declare_interface_type(
        self,
        name: str,
        fields: Iterable[FieldDeclaration],
        *,
        description: str | None = None,
        resolve_type: TypeResolver | None = None,
    ) -> TypeDeclaration:
        """Declare an interface type."""
        declaration = TypeDeclaration(
            name=name,
            kind=DeclarationKind.INTERFACE,
            description=description,
            fields=_field_mapping(name, fields),
            resolve_type=resolve_type,
        )
        return self._store(declaration)

    def declare_union_type(
        self,
        name: str,
        possible_types: Sequence[str],
        resolve_type: TypeResolver,
        *,
        description: str | None = None,
    ) -> TypeDeclaration:
        """Declare a union over the given concrete type names."""
        if not possible_types:
            raise TypeCollisionError(f"Union '{name}' requires at least one member type.")
        declaration = TypeDeclaration(
            name=name,
            kind=DeclarationKind.UNION,
            description=description,
            possible_types=tuple(dict.fromkeys(possible_types)),
            resolve_type=resolve_type,
        )
        return self._store(declaration)

    def attach_interfaces(
        self, interface_names: Sequence[str], target_type_names: Sequence[str]
    ) -> None:
        """Attach interfaces to target object types. Attaching twice is a no-op."""
        for target in target_type_names:
            attached = self._attachments.setdefault(target, [])
            for interface_name in interface_names:
                if interface_name not in attached:
                    attached.append(interface_name)

    def lookup_type(self, name: str) -> TypeDeclaration | None:
        """Return the declaration for ``name`` or None when it is not declared."""
        return self._declarations.get(name)

    def is_builtin_scalar(self, name: str) -> bool:
        return name in BUILTIN_SCALAR_NAMES

    def interfaces_for(self, type_name: str) -> list[str]:
        """Return declared plus attached interface names for an object type."""
        declaration = self._declarations.get(type_name)
        names = list(declaration.interfaces) if declaration else []
        for interface_name in self._attachments.get(type_name, ()):
            if interface_name not in names:
                names.append(interface_name)
        return names

    def list_types(self) -> list[str]:
        """List declared type names in declaration order."""
        return list(self._declarations)

    def declarations(self) -> Mapping[str, TypeDeclaration]:
        return dict(self._declarations)

    @contextmanager
    def checkpoint(self) -> Iterator[None]:
        """Roll back every declaration and attachment made inside the block on error."""
        declared_before = set(self._declarations)
        attachments_before = {target: list(names) for target, names in self._attachments.items()}
        try:
            yield
        except Exception:
            for name in [name for name in self._declarations if name not in declared_before]:
                del self._declarations[name]
            self._attachments = attachments_before
            raise

    def _store(self, declaration: TypeDeclaration) -> TypeDeclaration:
        name = declaration.name
        if name in BUILTIN_SCALAR_NAMES:
            raise TypeCollisionError(f"Type '{name}' collides with a built-in scalar.")
        existing = self._declarations.get(name)
        if existing is not None:
            raise TypeCollisionError(
                f"Type '{name}' is already declared as {existing.kind.value};"
                f" cannot declare it again as {declaration.kind.value}."
            )
        self._declarations[name] = declaration
        _LOGGER.debug("Declared %s type %s", declaration.kind.value, name)
        return declaration

    def __contains__(self, name: object) -> bool:
        return name in self._declarations or name in BUILTIN_SCALAR_NAMES


def _field_mapping(
    type_name: str, fields: Iterable[FieldDeclaration]
) -> dict[str, FieldDeclaration]:
    mapping: dict[str, FieldDeclaration] = {}
    for field in fields:
        if field.name in mapping:
            raise TypeCollisionError(f"Field '{field.name}' is declared twice on '{type_name}'.")
        mapping[field.name] = field
    return mapping

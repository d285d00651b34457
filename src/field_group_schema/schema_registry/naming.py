"""Schema name formatting."""

from __future__ import annotations

import re

from .registry_errors import InvalidTypeNameError

_WORD_SEPARATOR = re.compile(r"[^A-Za-z0-9]+")
_VALID_NAME = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*$")


def format_field_name(raw_name: str) -> str:
    """Return the camelCase schema field name for a configured name.

    Separators (anything that is not a letter or digit) start a new word; the
    casing inside each word is preserved, so ``postFields`` stays ``postFields``
    and ``text_field`` becomes ``textField``.
    """
    words = [word for word in _WORD_SEPARATOR.split(raw_name) if word]
    if not words:
        raise InvalidTypeNameError(f"Cannot derive a schema name from {raw_name!r}.")
    head, *tail = words
    name = _lower_first(head) + "".join(_upper_first(word) for word in tail)
    if not _VALID_NAME.match(name):
        raise InvalidTypeNameError(f"Schema name {name!r} derived from {raw_name!r} is invalid.")
    return name


def format_type_name(raw_name: str) -> str:
    """Return the PascalCase schema type name for a configured name."""
    return _upper_first(format_field_name(raw_name))


def compose_type_name(owner_type_name: str, *field_names: str) -> str:
    """Compose a nested type name from its owner type name and field names.

    The owner name is kept verbatim; each field name is formatted, which strips
    underscores, so the ``_`` joiner keeps composed names distinct for distinct
    (owner, field) pairs.
    """
    if not _VALID_NAME.match(owner_type_name):
        raise InvalidTypeNameError(f"Owner type name {owner_type_name!r} is invalid.")
    return "_".join((owner_type_name, *(format_type_name(name) for name in field_names)))


def _lower_first(word: str) -> str:
    return word[:1].lower() + word[1:]


def _upper_first(word: str) -> str:
    return word[:1].upper() + word[1:]

"""Entity access exports."""

from .entity_models import (
    PUBLIC_STATUSES,
    EntityKind,
    EntityRef,
    FieldRow,
    make_kind_tag,
    parse_kind_tag,
)
from .entity_store import (
    ContentStore,
    ContentStoreError,
    EntityProvider,
    InMemoryEntityStore,
    load_content_store,
)

__all__ = [
    "PUBLIC_STATUSES",
    "EntityKind",
    "EntityRef",
    "FieldRow",
    "make_kind_tag",
    "parse_kind_tag",
    "ContentStore",
    "ContentStoreError",
    "EntityProvider",
    "InMemoryEntityStore",
    "load_content_store",
]

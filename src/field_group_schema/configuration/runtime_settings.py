"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from field_group_schema.field_configuration.descriptor_models import FieldGroupDescriptor


@dataclass(frozen=True)
class ContentTypeSettings:
    """A host content type and the schema type it is exposed as."""

    name: str
    graphql_single_name: str
    show_in_graphql: bool = True


@dataclass(frozen=True)
class TaxonomySettings:
    """A host taxonomy and the schema type its terms are exposed as."""

    name: str
    graphql_single_name: str
    show_in_graphql: bool = True


@dataclass(frozen=True)
class SettingsPageSettings:
    """A site settings page that field groups can be attached to."""

    key: str
    graphql_type_name: str
    title: str = ""
    post_id: str = "options"


@dataclass(frozen=True)
class HostSettings:
    """Content model of the host schema the field groups are compiled into."""

    content_types: tuple[ContentTypeSettings, ...] = field(
        default_factory=lambda: (
            ContentTypeSettings(name="post", graphql_single_name="Post"),
            ContentTypeSettings(name="page", graphql_single_name="Page"),
            ContentTypeSettings(name="attachment", graphql_single_name="MediaItem"),
        )
    )
    taxonomies: tuple[TaxonomySettings, ...] = field(
        default_factory=lambda: (
            TaxonomySettings(name="category", graphql_single_name="Category"),
            TaxonomySettings(name="post_tag", graphql_single_name="Tag"),
        )
    )
    settings_pages: tuple[SettingsPageSettings, ...] = ()

    def exposed_content_types(self) -> dict[str, str]:
        """Map exposed content type names to their schema type names."""
        return {ct.name: ct.graphql_single_name for ct in self.content_types if ct.show_in_graphql}

    def exposed_taxonomies(self) -> dict[str, str]:
        """Map exposed taxonomy names to their schema type names."""
        return {tax.name: tax.graphql_single_name for tax in self.taxonomies if tax.show_in_graphql}


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path | None
    host: HostSettings
    field_groups: tuple[FieldGroupDescriptor, ...]

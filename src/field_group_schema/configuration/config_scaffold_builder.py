"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "field-groups.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Field group configuration template for field-group-schema.
# Replace every <REQUIRED> placeholder before running print-schema or query.
# Replace <OPTIONAL> placeholders only when your setup needs them.

host:
  # Content types exposed by the host schema. Omit the section to use post, page and attachment.
  content_types:
    - name: post
      graphql_single_name: Post
    - name: page
      graphql_single_name: Page
    - name: attachment
      graphql_single_name: MediaItem
  # Taxonomies exposed by the host schema. Omit the section to use category and post_tag.
  taxonomies:
    - name: category
      graphql_single_name: Category
  settings_pages:
    - key: "<OPTIONAL>"
      graphql_type_name: "<OPTIONAL>"

field_groups:
  - key: "<REQUIRED>"
    title: "<REQUIRED>"
    # Field groups are only compiled when show_in_graphql is true.
    show_in_graphql: true
    graphql_field_name: "<REQUIRED>"
    active: true
    # Location rules decide which entity kinds receive the field group.
    location:
      - - param: post_type
          operator: "=="
          value: post
    fields:
      - key: "<REQUIRED>"
        name: "<REQUIRED>"
        label: "<OPTIONAL>"
        type: text
"""


def build_placeholder_configuration() -> str:
    """Build a YAML field group configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()

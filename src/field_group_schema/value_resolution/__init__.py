"""Value resolution exports."""

from .text_formatting import (
    ContentFilter,
    apply_new_lines,
    build_content_filter,
    default_content_filter,
    format_php_date,
    line_breaks,
    paragraph_wrap,
    parse_stored_date,
    render_date,
)
from .value_resolver import FieldValueHook, RootIdentifierHook, ValueResolver

__all__ = [
    "ContentFilter",
    "apply_new_lines",
    "build_content_filter",
    "default_content_filter",
    "format_php_date",
    "line_breaks",
    "paragraph_wrap",
    "parse_stored_date",
    "render_date",
    "FieldValueHook",
    "RootIdentifierHook",
    "ValueResolver",
]

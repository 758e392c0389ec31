"""Utilities package - YAML resource loading."""

from .resource_loader import (
    get_resource_path,
    load_category_rules,
    load_restricted_message,
    load_restricted_terms,
    load_yaml_resource,
)

__all__ = [
    "get_resource_path",
    "load_category_rules",
    "load_restricted_message",
    "load_restricted_terms",
    "load_yaml_resource",
]

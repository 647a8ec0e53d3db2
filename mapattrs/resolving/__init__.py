"""Attribute resolution: category chains, default set and the resolver."""

from .chain import iter_category_chain, parent_of
from .defaults import (
    DEFAULT_ATTRIBUTES,
    load_default_attributes,
    missing_attribute_fields,
    validate_default_attributes,
)
from .resolver import AttributeResolver, FieldOrigin, resolve
from .source import AttributeSource, EmptySource

__all__ = [
    "iter_category_chain",
    "parent_of",
    "DEFAULT_ATTRIBUTES",
    "load_default_attributes",
    "missing_attribute_fields",
    "validate_default_attributes",
    "AttributeResolver",
    "FieldOrigin",
    "resolve",
    "AttributeSource",
    "EmptySource",
]

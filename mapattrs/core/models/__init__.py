"""All Pydantic models for mapattrs, organized by domain.

- attributes.py: partial attribute sets and fully resolved records
- mapdata.py: features, categories, overrides and provider files
"""

from .attributes import (
    TextShadow,
    MapVisibility,
    MarkerOptions,
    AttributeSet,
    ResolvedVisibility,
    ResolvedMarkerOptions,
    ResolvedAttributes,
    normalize_color,
)
from .mapdata import (
    MapFeature,
    MapCategory,
    AttributeOverride,
    MapDataSpec,
)

__all__ = [
    "TextShadow",
    "MapVisibility",
    "MarkerOptions",
    "AttributeSet",
    "ResolvedVisibility",
    "ResolvedMarkerOptions",
    "ResolvedAttributes",
    "normalize_color",
    "MapFeature",
    "MapCategory",
    "AttributeOverride",
    "MapDataSpec",
]

"""mapattrs: hierarchical attribute resolution for map features.

Resolve a fully-populated attribute record for a map feature by cascading
through per-feature overrides, the feature's own attributes, every ancestor
category and finally a global default set.

Example:
    from mapattrs import AttributeResolver, MapDataRegistry, MapFeature

    registry = MapDataRegistry()
    registry.register_file("map.yaml")
    resolver = AttributeResolver(registry.snapshot())
    resolved = resolver.resolve(MapFeature(feature_id="f1", category_id="poi:shop"))
"""

__version__ = "0.1.0"

from .exceptions import DefaultAttributesError, MapAttrsError, MapDataError
from .core.models import (
    AttributeSet,
    MapCategory,
    MapFeature,
    MapVisibility,
    MarkerOptions,
    ResolvedAttributes,
    ResolvedMarkerOptions,
    ResolvedVisibility,
    TextShadow,
)
from .resolving import (
    DEFAULT_ATTRIBUTES,
    AttributeResolver,
    AttributeSource,
    iter_category_chain,
    parent_of,
    resolve,
)
from .services import MapDataRegistry, MapDataSnapshot

__all__ = [
    "__version__",
    "MapAttrsError",
    "DefaultAttributesError",
    "MapDataError",
    "AttributeSet",
    "MapCategory",
    "MapFeature",
    "MapVisibility",
    "MarkerOptions",
    "ResolvedAttributes",
    "ResolvedMarkerOptions",
    "ResolvedVisibility",
    "TextShadow",
    "DEFAULT_ATTRIBUTES",
    "AttributeResolver",
    "AttributeSource",
    "iter_category_chain",
    "parent_of",
    "resolve",
    "MapDataRegistry",
    "MapDataSnapshot",
]

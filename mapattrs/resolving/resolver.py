"""Cascading attribute resolution for map features.

Each field of a feature's attributes is looked up in four tiers, first hit
wins:
1. Override attributes supplied by the source for this feature
2. Attributes declared on the feature itself
3. Category attributes, from the feature's own category outward to the root
4. The default attribute set (always complete)

The visibility and marker groups are resolved per sub-field: a tier only
counts as a hit when it has the group and the sub-field inside it, so a far
ancestor can supply min_distance while a nearer category supplies
max_distance.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from operator import attrgetter
from typing import Any, Literal

from ..core.models import (
    AttributeSet,
    MapFeature,
    ResolvedAttributes,
    ResolvedMarkerOptions,
    ResolvedVisibility,
)
from .chain import iter_category_chain
from .defaults import DEFAULT_ATTRIBUTES, validate_default_attributes
from .source import AttributeSource

logger = logging.getLogger(__name__)

Selector = Callable[[AttributeSet], Any]
ResolutionTier = Literal["override", "feature", "category", "default"]


@dataclass(frozen=True)
class FieldOrigin:
    """Where a resolved field's value came from."""

    tier: ResolutionTier
    category_id: str | None = None

    def __str__(self) -> str:
        if self.tier == "category":
            return f"category:{self.category_id}"
        return self.tier


class AttributeResolver:
    """Resolves complete attribute records against an AttributeSource.

    The resolver keeps no state between calls; every resolve() walks the
    tiers again and reads the source afresh.
    """

    def __init__(
        self,
        source: AttributeSource,
        defaults: AttributeSet = DEFAULT_ATTRIBUTES,
    ):
        self._source = source
        if defaults is not DEFAULT_ATTRIBUTES:
            defaults = validate_default_attributes(defaults)
        self._defaults = defaults

    @property
    def defaults(self) -> AttributeSet:
        return self._defaults

    def resolve(self, feature: MapFeature) -> ResolvedAttributes:
        """Resolve every attribute of feature. Never fails."""
        return _FeatureLookup(feature, self._source, self._defaults).build()

    def explain(
        self, feature: MapFeature
    ) -> tuple[ResolvedAttributes, dict[str, FieldOrigin]]:
        """Resolve feature and report the origin of each field.

        Returns:
            Tuple of (resolved attributes, origin per dotted field path)
        """
        lookup = _FeatureLookup(feature, self._source, self._defaults)
        resolved = lookup.build()
        return resolved, dict(lookup.origins)


def resolve(
    feature: MapFeature,
    source: AttributeSource,
    defaults: AttributeSet = DEFAULT_ATTRIBUTES,
) -> ResolvedAttributes:
    """Resolve feature against source. See AttributeResolver."""
    return AttributeResolver(source, defaults).resolve(feature)


def _in_group(group: str, name: str) -> Selector:
    """Selector for one sub-field of a nested attribute group."""

    def select(attributes: AttributeSet) -> Any:
        container = getattr(attributes, group)
        if container is None:
            return None
        return getattr(container, name)

    return select


class _FeatureLookup:
    """Lookup state for resolving a single feature.

    The override set is fetched once and category definitions at most once
    per category id, so one resolution reads each part of the source once.
    """

    def __init__(
        self,
        feature: MapFeature,
        source: AttributeSource,
        defaults: AttributeSet,
    ):
        self._feature = feature
        self._source = source
        self._defaults = defaults
        self._override: AttributeSet | None = None
        self._override_fetched = False
        self._category_attributes: dict[str, list[AttributeSet]] = {}
        self.origins: dict[str, FieldOrigin] = {}

    def build(self) -> ResolvedAttributes:
        return ResolvedAttributes(
            priority=self._attribute("priority"),
            level=self._attribute("level"),
            label=self._attribute("label"),
            label_visibility=self._visibility("label_visibility"),
            label_color=self._attribute("label_color"),
            label_shadow=self._attribute("label_shadow"),
            icon_id=self._attribute("icon_id"),
            icon_visibility=self._visibility("icon_visibility"),
            icon_color=self._attribute("icon_color"),
            icon_decoration=self._attribute("icon_decoration"),
            has_marker=self._attribute("has_marker"),
            marker_options=self._marker_options("marker_options"),
            fill_color=self._attribute("fill_color"),
            border_color=self._attribute("border_color"),
            border_width=self._attribute("border_width"),
        )

    def _attribute(self, name: str) -> Any:
        return self._lookup(name, attrgetter(name))

    def _inherited(self, group: str, name: str) -> Any:
        return self._lookup(f"{group}.{name}", _in_group(group, name))

    def _visibility(self, group: str) -> ResolvedVisibility:
        return ResolvedVisibility(
            **{
                name: self._inherited(group, name)
                for name in ResolvedVisibility.model_fields
            }
        )

    def _marker_options(self, group: str) -> ResolvedMarkerOptions:
        return ResolvedMarkerOptions(
            **{
                name: self._inherited(group, name)
                for name in ResolvedMarkerOptions.model_fields
            }
        )

    def _lookup(self, path: str, selector: Selector) -> Any:
        override = self._get_override()
        if override is not None:
            value = selector(override)
            if value is not None:
                return self._found(path, value, FieldOrigin("override"))

        declared = self._feature.attributes
        if declared is not None:
            value = selector(declared)
            if value is not None:
                return self._found(path, value, FieldOrigin("feature"))

        for category_id in iter_category_chain(self._feature.category_id):
            # Several providers may define the same category; take the first
            # one (in source order) that has this field.
            for attributes in self._get_category_attributes(category_id):
                value = selector(attributes)
                if value is not None:
                    return self._found(
                        path, value, FieldOrigin("category", category_id)
                    )

        return self._found(path, selector(self._defaults), FieldOrigin("default"))

    def _found(self, path: str, value: Any, origin: FieldOrigin) -> Any:
        self.origins[path] = origin
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "[%s] %s = %r (from %s)", self._feature.feature_id, path, value, origin
            )
        return value

    def _get_override(self) -> AttributeSet | None:
        if not self._override_fetched:
            self._override = self._source.get_override_attributes_for_feature(
                self._feature
            )
            self._override_fetched = True
        return self._override

    def _get_category_attributes(self, category_id: str) -> list[AttributeSet]:
        cached = self._category_attributes.get(category_id)
        if cached is None:
            cached = [
                category.attributes
                for category in self._source.get_category_definitions(category_id)
                if category.attributes is not None
            ]
            self._category_attributes[category_id] = cached
        return cached

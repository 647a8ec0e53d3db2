"""In-memory map data registry.

Providers contribute categories, features and attribute overrides. The
registry merges them into immutable snapshots that implement the
AttributeSource protocol, so a resolver can be pointed at either the live
registry or at a snapshot taken for a batch of resolutions.

Thread-safe: registration may happen concurrently with lookups. Each
mutation replaces the current snapshot instead of changing it.
"""

import logging
import threading
from collections.abc import Iterator, Sequence
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..core.models import AttributeSet, MapCategory, MapDataSpec, MapFeature
from ..exceptions import MapDataError
from ..resolving.chain import iter_category_chain

logger = logging.getLogger(__name__)


class MapDataSnapshot:
    """Immutable view over a fixed sequence of providers.

    Category definitions are returned in provider registration order. That
    order breaks ties between providers defining the same category, but it is
    not part of the lookup contract and callers should treat it as arbitrary.
    """

    def __init__(self, providers: Sequence[MapDataSpec] = ()):
        self._providers = tuple(providers)
        self._categories: dict[str, list[MapCategory]] = {}
        self._features: dict[str, MapFeature] = {}
        self._feature_overrides: dict[str, AttributeSet] = {}
        self._category_overrides: dict[str, AttributeSet] = {}

        for provider in self._providers:
            for category in provider.categories:
                self._categories.setdefault(category.category_id, []).append(category)

            for feature in provider.features:
                if feature.feature_id in self._features:
                    logger.warning(
                        "Feature %r from provider %r shadowed by an earlier provider",
                        feature.feature_id,
                        provider.provider_id,
                    )
                    continue
                self._features[feature.feature_id] = feature

            for override in provider.overrides:
                if override.feature_id is not None:
                    self._feature_overrides.setdefault(
                        override.feature_id, override.attributes
                    )
                else:
                    self._category_overrides.setdefault(
                        override.category_id, override.attributes
                    )

    @property
    def provider_ids(self) -> list[str]:
        return [provider.provider_id for provider in self._providers]

    def get_feature(self, feature_id: str) -> MapFeature | None:
        return self._features.get(feature_id)

    def iter_features(self) -> Iterator[MapFeature]:
        return iter(list(self._features.values()))

    def get_category_definitions(self, category_id: str) -> Sequence[MapCategory]:
        return tuple(self._categories.get(category_id, ()))

    def get_override_attributes_for_feature(
        self, feature: MapFeature
    ) -> AttributeSet | None:
        """Return the override for feature, if any.

        A feature-targeted override wins over category-targeted ones; among
        category overrides the nearest category in the feature's chain wins.
        """
        override = self._feature_overrides.get(feature.feature_id)
        if override is not None:
            return override

        for category_id in iter_category_chain(feature.category_id):
            override = self._category_overrides.get(category_id)
            if override is not None:
                return override
        return None


class MapDataRegistry:
    """Live registry of map data providers."""

    def __init__(self) -> None:
        self._providers: dict[str, MapDataSpec] = {}
        self._lock = threading.RLock()
        self._snapshot = MapDataSnapshot()

    def register_provider(self, spec: MapDataSpec) -> None:
        """Add a provider, replacing any provider with the same id in place."""
        with self._lock:
            if spec.provider_id in self._providers:
                logger.warning("Replacing map data provider %r", spec.provider_id)
            self._providers[spec.provider_id] = spec
            self._snapshot = MapDataSnapshot(self._providers.values())

        logger.info(
            "Registered provider %r (%d categories, %d features, %d overrides)",
            spec.provider_id,
            len(spec.categories),
            len(spec.features),
            len(spec.overrides),
        )

    def register_file(self, path: Path | str) -> MapDataSpec:
        """Load a provider from a YAML file and register it.

        Raises:
            MapDataError: If the file cannot be read or is invalid.
        """
        spec = load_map_data(path)
        self.register_provider(spec)
        return spec

    def unregister_provider(self, provider_id: str) -> bool:
        """Remove a provider. Returns False if it was not registered."""
        with self._lock:
            if self._providers.pop(provider_id, None) is None:
                return False
            self._snapshot = MapDataSnapshot(self._providers.values())

        logger.info("Unregistered provider %r", provider_id)
        return True

    def snapshot(self) -> MapDataSnapshot:
        """Current data as an immutable view unaffected by later registrations."""
        with self._lock:
            return self._snapshot

    @property
    def provider_ids(self) -> list[str]:
        return self.snapshot().provider_ids

    def get_feature(self, feature_id: str) -> MapFeature | None:
        return self.snapshot().get_feature(feature_id)

    def iter_features(self) -> Iterator[MapFeature]:
        return self.snapshot().iter_features()

    def get_category_definitions(self, category_id: str) -> Sequence[MapCategory]:
        return self.snapshot().get_category_definitions(category_id)

    def get_override_attributes_for_feature(
        self, feature: MapFeature
    ) -> AttributeSet | None:
        return self.snapshot().get_override_attributes_for_feature(feature)


def load_map_data(path: Path | str) -> MapDataSpec:
    """Load one provider's map data from YAML.

    Raises:
        MapDataError: If the file cannot be read, parsed or validated.
    """
    path = Path(path)
    try:
        return MapDataSpec.from_yaml(path)
    except (OSError, UnicodeDecodeError, yaml.YAMLError, ValidationError) as exc:
        raise MapDataError(f"Failed to load map data from {path}: {exc}") from exc

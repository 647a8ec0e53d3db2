"""Tests for the in-memory map data registry and data checks.

Functions under test in mapattrs/services/.
"""

import threading

import pytest

from mapattrs.core.models import (
    AttributeOverride,
    AttributeSet,
    MapCategory,
    MapDataSpec,
    MapFeature,
)
from mapattrs.exceptions import MapDataError
from mapattrs.resolving import AttributeResolver, AttributeSource
from mapattrs.services import (
    MapDataRegistry,
    MapDataSnapshot,
    check_map_data,
    load_map_data,
)


def _provider(provider_id, categories=(), features=(), overrides=()) -> MapDataSpec:
    return MapDataSpec(
        provider_id=provider_id,
        categories=list(categories),
        features=list(features),
        overrides=list(overrides),
    )


def _category(category_id, **attributes) -> MapCategory:
    return MapCategory(
        category_id=category_id,
        attributes=AttributeSet(**attributes) if attributes else None,
    )


MAP_YAML = """\
provider_id: base
categories:
  - category_id: region
    attributes:
      priority: 5
  - category_id: region:city
features:
  - feature_id: capital
    category_id: region:city
    attributes:
      label: Capital
overrides:
  - feature_id: capital
    attributes:
      icon_id: star
"""


class TestRegistryLookups:
    """Registry implements the AttributeSource protocol."""

    def test_is_attribute_source(self):
        assert isinstance(MapDataRegistry(), AttributeSource)
        assert isinstance(MapDataSnapshot(), AttributeSource)

    def test_category_definitions_in_registration_order(self):
        registry = MapDataRegistry()
        registry.register_provider(_provider("one", [_category("poi", label="one")]))
        registry.register_provider(_provider("two", [_category("poi", label="two")]))

        labels = [c.attributes.label for c in registry.get_category_definitions("poi")]
        assert labels == ["one", "two"]
        assert registry.get_category_definitions("unknown") == ()

    def test_replacing_provider_keeps_its_slot(self):
        registry = MapDataRegistry()
        registry.register_provider(_provider("one", [_category("poi", label="one")]))
        registry.register_provider(_provider("two", [_category("poi", label="two")]))
        registry.register_provider(_provider("one", [_category("poi", label="one-b")]))

        assert registry.provider_ids == ["one", "two"]
        labels = [c.attributes.label for c in registry.get_category_definitions("poi")]
        assert labels == ["one-b", "two"]

    def test_unregister_provider(self):
        registry = MapDataRegistry()
        registry.register_provider(
            _provider("one", [_category("poi")], [MapFeature(feature_id="f", category_id="poi")])
        )

        assert registry.unregister_provider("one") is True
        assert registry.unregister_provider("one") is False
        assert registry.get_feature("f") is None
        assert registry.get_category_definitions("poi") == ()

    def test_first_provider_keeps_duplicate_feature(self):
        registry = MapDataRegistry()
        registry.register_provider(
            _provider("one", features=[MapFeature(feature_id="f", category_id="a")])
        )
        registry.register_provider(
            _provider("two", features=[MapFeature(feature_id="f", category_id="b")])
        )
        assert registry.get_feature("f").category_id == "a"
        assert [f.feature_id for f in registry.iter_features()] == ["f"]


class TestOverrides:
    """Override lookup for features."""

    def test_feature_override_beats_category_override(self):
        registry = MapDataRegistry()
        registry.register_provider(
            _provider(
                "o",
                overrides=[
                    AttributeOverride(category_id="poi", attributes=AttributeSet(label="cat")),
                    AttributeOverride(feature_id="f", attributes=AttributeSet(label="feat")),
                ],
            )
        )
        feature = MapFeature(feature_id="f", category_id="poi")
        assert registry.get_override_attributes_for_feature(feature).label == "feat"

    def test_nearest_category_override(self):
        registry = MapDataRegistry()
        registry.register_provider(
            _provider(
                "o",
                overrides=[
                    AttributeOverride(category_id="a", attributes=AttributeSet(label="far")),
                    AttributeOverride(category_id="a:b", attributes=AttributeSet(label="near")),
                ],
            )
        )
        feature = MapFeature(feature_id="f", category_id="a:b:c")
        assert registry.get_override_attributes_for_feature(feature).label == "near"

    def test_no_override(self):
        registry = MapDataRegistry()
        feature = MapFeature(feature_id="f", category_id="a")
        assert registry.get_override_attributes_for_feature(feature) is None


class TestSnapshots:
    """Snapshots are isolated from later registrations."""

    def test_snapshot_unaffected_by_later_registration(self):
        registry = MapDataRegistry()
        registry.register_provider(_provider("one", [_category("poi", label="one")]))
        snapshot = registry.snapshot()

        registry.register_provider(_provider("two", [_category("poi", label="two")]))
        registry.unregister_provider("one")

        assert [c.attributes.label for c in snapshot.get_category_definitions("poi")] == ["one"]
        assert snapshot.provider_ids == ["one"]

    def test_concurrent_registration(self):
        registry = MapDataRegistry()

        def register(index):
            registry.register_provider(_provider(f"p{index}", [_category("poi", level=index)]))

        threads = [threading.Thread(target=register, args=(i,)) for i in range(20)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(registry.get_category_definitions("poi")) == 20


class TestLoading:
    """Loading provider files."""

    def test_register_file_and_resolve(self, tmp_path):
        path = tmp_path / "map.yaml"
        path.write_text(MAP_YAML)

        registry = MapDataRegistry()
        spec = registry.register_file(path)
        assert spec.provider_id == "base"

        feature = registry.get_feature("capital")
        resolved = AttributeResolver(registry.snapshot()).resolve(feature)
        assert resolved.priority == 5
        assert resolved.label == "Capital"
        assert resolved.icon_id == "star"

    def test_invalid_file_raises_map_data_error(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("features:\n  - category_id: no-id\n")

        with pytest.raises(MapDataError):
            load_map_data(path)

    def test_missing_file_raises_map_data_error(self, tmp_path):
        with pytest.raises(MapDataError):
            MapDataRegistry().register_file(tmp_path / "missing.yaml")

    def test_non_utf8_file_raises_map_data_error(self, tmp_path):
        path = tmp_path / "binary.yaml"
        path.write_bytes(b"provider_id: \xff\xfe\n")

        with pytest.raises(MapDataError, match="binary.yaml"):
            load_map_data(path)


class TestCheckMapData:
    """Warnings for suspicious map data."""

    def test_clean_data_has_no_warnings(self):
        spec = _provider(
            "p",
            [_category("region", priority=1)],
            [MapFeature(feature_id="f", category_id="region:city")],
            [AttributeOverride(feature_id="f", attributes=AttributeSet(level=1))],
        )
        assert check_map_data(spec) == []

    def test_flags_problems(self):
        spec = _provider(
            "p",
            [_category("region", priority=1)],
            [
                MapFeature(feature_id="f", category_id="town"),
                MapFeature(feature_id="f", category_id="region"),
            ],
            [
                AttributeOverride(feature_id="ghost", attributes=AttributeSet(level=1)),
                AttributeOverride(category_id="region", attributes=AttributeSet()),
            ],
        )
        warnings = check_map_data(spec)
        assert any("duplicate feature id 'f'" in w for w in warnings)
        assert any("no defined category" in w for w in warnings)
        assert any("'ghost'" in w for w in warnings)
        assert any("sets no attributes" in w for w in warnings)

    def test_features_only_file_skips_category_check(self):
        spec = _provider("p", [], [MapFeature(feature_id="f", category_id="town")], [])
        assert check_map_data(spec) == []

"""Tests for attribute and map data models."""

import pytest
from pydantic import ValidationError

from mapattrs.core.models import (
    AttributeOverride,
    AttributeSet,
    MapDataSpec,
    MapFeature,
    MarkerOptions,
    TextShadow,
)
from mapattrs.exceptions import MapDataError
from mapattrs.services import load_map_data


class TestAttributeSet:
    """Partial attribute sets."""

    def test_all_fields_default_to_absent(self):
        attributes = AttributeSet()
        assert attributes.is_empty()
        assert attributes.priority is None
        assert attributes.marker_options is None

    def test_colors_normalized_to_upper_case(self):
        attributes = AttributeSet(fill_color="#a0b1c2", border_color="#a0b1c2ff")
        assert attributes.fill_color == "#A0B1C2"
        assert attributes.border_color == "#A0B1C2FF"

    def test_invalid_color_rejected(self):
        with pytest.raises(ValidationError):
            AttributeSet(label_color="red")

    def test_beacon_color_validated(self):
        with pytest.raises(ValidationError):
            MarkerOptions(beacon_color="#12345")

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            AttributeSet.model_validate({"iconId": "star"})

    def test_label_shadow_from_string(self):
        assert AttributeSet(label_shadow="normal").label_shadow == TextShadow.NORMAL

    def test_negative_border_width_rejected(self):
        with pytest.raises(ValidationError):
            AttributeSet(border_width=-1)

    def test_not_empty_with_nested_group(self):
        assert not AttributeSet(marker_options=MarkerOptions(fade=1)).is_empty()


class TestAttributeOverride:
    """Overrides target exactly one feature or category."""

    def test_feature_target(self):
        override = AttributeOverride(feature_id="f", attributes=AttributeSet(level=1))
        assert override.category_id is None

    def test_requires_a_target(self):
        with pytest.raises(ValidationError):
            AttributeOverride(attributes=AttributeSet())

    def test_rejects_two_targets(self):
        with pytest.raises(ValidationError):
            AttributeOverride(feature_id="f", category_id="c", attributes=AttributeSet())


class TestMapDataSpecYaml:
    """YAML I/O for provider files."""

    def test_save_and_load(self, tmp_path):
        spec = MapDataSpec(
            provider_id="base",
            features=[
                MapFeature(
                    feature_id="capital",
                    category_id="region:city",
                    attributes=AttributeSet(label="Capital", label_shadow="none"),
                )
            ],
            overrides=[
                AttributeOverride(category_id="region", attributes=AttributeSet(priority=2))
            ],
        )
        path = tmp_path / "nested" / "base.yaml"
        spec.to_yaml(path)

        text = path.read_text()
        assert "marker_options" not in text

        loaded = MapDataSpec.from_yaml(path)
        assert loaded == spec
        assert loaded.get_feature("capital").attributes.label_shadow == TextShadow.NONE
        assert loaded.get_feature("missing") is None

    def test_provider_id_defaults_to_file_stem(self, tmp_path):
        path = tmp_path / "towns.yaml"
        path.write_text("features:\n  - feature_id: t1\n    category_id: town\n")

        spec = MapDataSpec.from_yaml(path)
        assert spec.provider_id == "towns"
        assert spec.features[0].attributes is None

    def test_empty_file_is_empty_provider(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        spec = MapDataSpec.from_yaml(path)
        assert spec.provider_id == "empty"
        assert spec.categories == []

    def test_mistyped_top_level_key_rejected(self, tmp_path):
        path = tmp_path / "typo.yaml"
        path.write_text(
            "provider_id: base\n"
            "categores:\n"
            "  - category_id: region\n"
            "    attributes:\n"
            "      priority: 5\n"
        )

        with pytest.raises(ValidationError, match="categores"):
            MapDataSpec.from_yaml(path)
        with pytest.raises(MapDataError, match="categores"):
            load_map_data(path)

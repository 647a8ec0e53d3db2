"""Tests for default attribute set coverage checks and loading."""

import pytest
import yaml

from mapattrs.core.models import AttributeSet, MapVisibility
from mapattrs.exceptions import DefaultAttributesError, MapDataError
from mapattrs.resolving.defaults import (
    DEFAULT_ATTRIBUTES,
    load_default_attributes,
    missing_attribute_fields,
    validate_default_attributes,
)


def _write_defaults(path, attributes: AttributeSet) -> None:
    path.write_text(yaml.safe_dump(attributes.model_dump(mode="json", exclude_none=True)))


class TestMissingAttributeFields:
    """Dotted path listing of unset fields."""

    def test_builtin_defaults_are_complete(self):
        assert missing_attribute_fields(DEFAULT_ATTRIBUTES) == []

    def test_empty_set_lists_every_leaf(self):
        missing = missing_attribute_fields(AttributeSet())
        assert "priority" in missing
        assert "label_visibility.min" in missing
        assert "icon_visibility.fade" in missing
        assert "marker_options.has_icon" in missing
        assert "marker_options" not in missing
        assert len(missing) == 12 + 3 + 3 + 7

    def test_partial_group_lists_only_missing_sub_fields(self):
        attributes = DEFAULT_ATTRIBUTES.model_copy(
            update={"label_visibility": MapVisibility(min=1, max=2)}
        )
        assert missing_attribute_fields(attributes) == ["label_visibility.fade"]


class TestValidateDefaultAttributes:
    """Fatal configuration errors for incomplete default sets."""

    def test_complete_set_returned_unchanged(self):
        assert validate_default_attributes(DEFAULT_ATTRIBUTES) is DEFAULT_ATTRIBUTES

    def test_incomplete_set_raises_with_all_paths(self):
        attributes = DEFAULT_ATTRIBUTES.model_copy(
            update={"label": None, "marker_options": None}
        )
        with pytest.raises(DefaultAttributesError) as exc_info:
            validate_default_attributes(attributes)

        missing = exc_info.value.missing
        assert missing[0] == "label"
        assert "marker_options.min_distance" in missing
        assert "label" in str(exc_info.value)


class TestLoadDefaultAttributes:
    """Loading a custom default set from YAML."""

    def test_load_complete_file(self, tmp_path):
        path = tmp_path / "defaults.yaml"
        _write_defaults(path, DEFAULT_ATTRIBUTES.model_copy(update={"priority": 42}))

        loaded = load_default_attributes(path)
        assert loaded.priority == 42
        assert loaded.label_shadow == DEFAULT_ATTRIBUTES.label_shadow

    def test_incomplete_file_raises(self, tmp_path):
        path = tmp_path / "defaults.yaml"
        _write_defaults(path, AttributeSet(priority=1))

        with pytest.raises(DefaultAttributesError):
            load_default_attributes(path)

    def test_invalid_yaml_raises_map_data_error(self, tmp_path):
        path = tmp_path / "defaults.yaml"
        path.write_text("priority: [unclosed\n")

        with pytest.raises(MapDataError):
            load_default_attributes(path)

    def test_invalid_field_raises_map_data_error(self, tmp_path):
        path = tmp_path / "defaults.yaml"
        path.write_text("priority: high\n")

        with pytest.raises(MapDataError):
            load_default_attributes(path)

    def test_missing_file_raises_map_data_error(self, tmp_path):
        with pytest.raises(MapDataError):
            load_default_attributes(tmp_path / "nope.yaml")

    def test_non_utf8_file_raises_map_data_error(self, tmp_path):
        path = tmp_path / "defaults.yaml"
        path.write_bytes(b"label: \xff\xfe\n")

        with pytest.raises(MapDataError):
            load_default_attributes(path)

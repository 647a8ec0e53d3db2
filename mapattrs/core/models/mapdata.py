"""Map data models and YAML I/O.

A MapDataSpec is one provider's contribution to the map data registry:
categories (with optional attributes), features, and attribute overrides.

File format:

    provider_id: base
    categories:
      - category_id: region
        attributes: {priority: 5}
    features:
      - feature_id: capital
        category_id: region:city
        attributes: {label: Capital}
    overrides:
      - feature_id: capital
        attributes: {icon_id: star}
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .attributes import AttributeSet


class MapFeature(BaseModel):
    """A map feature placed in the category hierarchy."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    feature_id: str = Field(min_length=1)
    category_id: str = Field(
        default="", description="Colon-delimited category path, e.g. 'region:city'"
    )
    attributes: AttributeSet | None = Field(
        default=None, description="Attributes declared directly on the feature"
    )


class MapCategory(BaseModel):
    """One provider's definition of a category id."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    category_id: str
    name: str | None = None
    attributes: AttributeSet | None = None


class AttributeOverride(BaseModel):
    """Attributes forced onto a single feature or onto every feature of a category."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    feature_id: str | None = None
    category_id: str | None = None
    attributes: AttributeSet

    @model_validator(mode="after")
    def check_single_target(self) -> "AttributeOverride":
        if (self.feature_id is None) == (self.category_id is None):
            raise ValueError("override needs exactly one of feature_id or category_id")
        return self


class MapDataSpec(BaseModel):
    """A provider's map data, loadable from YAML."""

    model_config = ConfigDict(extra="forbid")

    provider_id: str = Field(min_length=1)
    categories: list[MapCategory] = Field(default_factory=list)
    features: list[MapFeature] = Field(default_factory=list)
    overrides: list[AttributeOverride] = Field(default_factory=list)

    def to_yaml(self, path: Path | str) -> None:
        """Save spec to YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = self.model_dump(mode="json", exclude_none=True)

        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(
                data, f, default_flow_style=False, sort_keys=False, allow_unicode=True
            )

    @classmethod
    def from_yaml(cls, path: Path | str) -> "MapDataSpec":
        """Load spec from YAML file.

        A missing provider_id defaults to the file stem.
        """
        path = Path(path)

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if isinstance(data, dict):
            data.setdefault("provider_id", path.stem)
        return cls.model_validate(data)

    def get_feature(self, feature_id: str) -> MapFeature | None:
        for feature in self.features:
            if feature.feature_id == feature_id:
                return feature
        return None

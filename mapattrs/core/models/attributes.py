"""Attribute models for map features and categories.

Two families of models live here:
- Partial sets (AttributeSet, MapVisibility, MarkerOptions): every field is
  optional and None means "not specified at this level".
- Resolved records (ResolvedAttributes, ResolvedVisibility,
  ResolvedMarkerOptions): every field is required and the record is frozen.
"""

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


_COLOR_PATTERN = re.compile(r"^#(?:[0-9A-Fa-f]{6}|[0-9A-Fa-f]{8})$")


def normalize_color(value):
    """Normalize a hex color string to upper case ``#RRGGBB[AA]``.

    Raises:
        ValueError: If the value is not a 6 or 8 digit hex color.
    """
    if value is None:
        return None
    if not isinstance(value, str) or not _COLOR_PATTERN.match(value.strip()):
        raise ValueError(
            f"Invalid color {value!r}. Expected '#RRGGBB' or '#RRGGBBAA'"
        )
    return value.strip().upper()


class TextShadow(str, Enum):
    NONE = "none"
    NORMAL = "normal"
    OUTLINE = "outline"


# =============================================================================
# Partial attribute sets
# =============================================================================


class MapVisibility(BaseModel):
    """Zoom-dependent visibility window. Any field may be left unspecified."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    min: float | None = Field(default=None, description="Zoom level where fade-in starts")
    max: float | None = Field(default=None, description="Zoom level where fade-out ends")
    fade: float | None = Field(default=None, ge=0, description="Fade width in zoom levels")


class MarkerOptions(BaseModel):
    """World marker (beacon) options. Any field may be left unspecified."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    min_distance: float | None = Field(default=None, ge=0)
    max_distance: float | None = Field(default=None, ge=0)
    fade: float | None = Field(default=None, ge=0)
    beacon_color: str | None = None
    has_label: bool | None = None
    has_distance_label: bool | None = None
    has_icon: bool | None = None

    @field_validator("beacon_color", mode="before")
    @classmethod
    def check_color(cls, v):
        return normalize_color(v)


class AttributeSet(BaseModel):
    """Partially specified attributes for a feature, category or default set.

    Fields set to None are absent and fall through to the next lookup tier.
    The visibility and marker groups are themselves partial: a group being
    present does not mean all of its sub-fields are.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    priority: int | None = None
    level: int | None = None
    label: str | None = None
    label_visibility: MapVisibility | None = None
    label_color: str | None = None
    label_shadow: TextShadow | None = None
    icon_id: str | None = None
    icon_visibility: MapVisibility | None = None
    icon_color: str | None = None
    icon_decoration: str | None = None
    has_marker: bool | None = None
    marker_options: MarkerOptions | None = None
    fill_color: str | None = None
    border_color: str | None = None
    border_width: float | None = Field(default=None, ge=0)

    @field_validator(
        "label_color", "icon_color", "fill_color", "border_color", mode="before"
    )
    @classmethod
    def check_color(cls, v):
        return normalize_color(v)

    def is_empty(self) -> bool:
        """True if no field is specified at all."""
        return not self.model_dump(exclude_none=True)


# =============================================================================
# Resolved records
# =============================================================================


class ResolvedVisibility(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: float
    max: float
    fade: float


class ResolvedMarkerOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    min_distance: float
    max_distance: float
    fade: float
    beacon_color: str
    has_label: bool
    has_distance_label: bool
    has_icon: bool


class ResolvedAttributes(BaseModel):
    """Fully resolved attributes for one feature. Every field is populated."""

    model_config = ConfigDict(frozen=True)

    priority: int
    level: int
    label: str
    label_visibility: ResolvedVisibility
    label_color: str
    label_shadow: TextShadow
    icon_id: str
    icon_visibility: ResolvedVisibility
    icon_color: str
    icon_decoration: str
    has_marker: bool
    marker_options: ResolvedMarkerOptions
    fill_color: str
    border_color: str
    border_width: float

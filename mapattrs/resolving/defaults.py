"""Default attribute set: the base case of attribute resolution.

Every field, including every sub-field of the nested visibility and marker
groups, must be present in a default set. This is checked once when the set
is built; a gap raises DefaultAttributesError.
"""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError

from ..core.models import AttributeSet, MapVisibility, MarkerOptions, TextShadow
from ..exceptions import DefaultAttributesError, MapDataError

logger = logging.getLogger(__name__)


def missing_attribute_fields(model: BaseModel, prefix: str = "") -> list[str]:
    """List dotted paths of every unset field, descending into nested groups.

    An absent group reports each of its sub-fields, not the group itself,
    so "label_visibility.min" rather than "label_visibility".
    """
    missing: list[str] = []
    for name, info in type(model).model_fields.items():
        path = f"{prefix}{name}"
        value = getattr(model, name)
        group_type = _group_type(info.annotation)

        if group_type is not None:
            if value is None:
                missing.extend(
                    f"{path}.{sub}" for sub in group_type.model_fields
                )
            else:
                missing.extend(missing_attribute_fields(value, prefix=f"{path}."))
        elif value is None:
            missing.append(path)
    return missing


def _group_type(annotation) -> type[BaseModel] | None:
    """Return the nested model type for a `Model | None` annotation."""
    for candidate in getattr(annotation, "__args__", (annotation,)):
        if isinstance(candidate, type) and issubclass(candidate, BaseModel):
            return candidate
    return None


def validate_default_attributes(attributes: AttributeSet) -> AttributeSet:
    """Return attributes unchanged if they cover every field.

    Raises:
        DefaultAttributesError: Listing every missing field path.
    """
    missing = missing_attribute_fields(attributes)
    if missing:
        raise DefaultAttributesError(missing)
    return attributes


def load_default_attributes(path: Path | str) -> AttributeSet:
    """Load and validate a complete default attribute set from YAML.

    Raises:
        DefaultAttributesError: If the file parses but leaves fields unset.
        MapDataError: If the file cannot be read or is not a valid attribute set.
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        attributes = AttributeSet.model_validate(data)
    except (OSError, UnicodeDecodeError, yaml.YAMLError, ValidationError) as exc:
        raise MapDataError(f"Failed to load default attributes from {path}: {exc}") from exc

    logger.info("Loaded default attributes from %s", path)
    return validate_default_attributes(attributes)


_DEFAULT_VISIBILITY = MapVisibility(min=0.0, max=100.0, fade=6.0)

DEFAULT_ATTRIBUTES = validate_default_attributes(
    AttributeSet(
        priority=500,
        level=0,
        label="",
        label_visibility=_DEFAULT_VISIBILITY,
        label_color="#FFFFFF",
        label_shadow=TextShadow.OUTLINE,
        icon_id="none",
        icon_visibility=_DEFAULT_VISIBILITY,
        icon_color="#FFFFFF",
        icon_decoration="none",
        has_marker=False,
        marker_options=MarkerOptions(
            min_distance=0.0,
            max_distance=5000.0,
            fade=0.0,
            beacon_color="#FFFFFF",
            has_label=True,
            has_distance_label=True,
            has_icon=True,
        ),
        fill_color="#00000000",
        border_color="#00000000",
        border_width=0.0,
    )
)

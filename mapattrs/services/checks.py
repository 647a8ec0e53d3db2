"""Consistency checks for map data files.

These never block loading: resolution tolerates dangling references by
falling through to the next tier. They flag data that is probably a mistake.
"""

from ..core.models import MapDataSpec
from ..resolving.chain import iter_category_chain


def check_map_data(spec: MapDataSpec) -> list[str]:
    """Return warnings for suspicious but loadable map data.

    The undefined-category check only runs when the file defines categories
    itself. A provider file holding only features usually relies on another
    provider's categories, which one file cannot see.
    """
    warnings: list[str] = []
    category_ids = {category.category_id for category in spec.categories}
    feature_ids: set[str] = set()

    for feature in spec.features:
        if feature.feature_id in feature_ids:
            warnings.append(f"duplicate feature id '{feature.feature_id}'")
        feature_ids.add(feature.feature_id)

        if category_ids and not any(
            cid in category_ids for cid in iter_category_chain(feature.category_id)
        ):
            warnings.append(
                f"feature '{feature.feature_id}' has no defined category in chain "
                f"'{feature.category_id}'"
            )

    for override in spec.overrides:
        if override.feature_id is not None and override.feature_id not in feature_ids:
            warnings.append(
                f"override targets feature '{override.feature_id}' not defined in this file"
            )
        if override.attributes.is_empty():
            target = override.feature_id or override.category_id
            warnings.append(f"override for '{target}' sets no attributes")

    return warnings

"""The lookup interface the resolver reads map data through."""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from ..core.models import AttributeSet, MapCategory, MapFeature


@runtime_checkable
class AttributeSource(Protocol):
    """Provides override and category attributes to the resolver.

    get_category_definitions may return several definitions for one id when
    multiple providers contribute to the same category. The resolver takes the
    first definition that specifies a field, so the returned order decides
    ties. That order is unspecified: callers must not rely on any particular
    provider winning.

    Implementations that can change while a resolution runs are responsible
    for their own consistency, e.g. by handing the resolver a snapshot.
    """

    def get_override_attributes_for_feature(
        self, feature: MapFeature
    ) -> AttributeSet | None: ...

    def get_category_definitions(self, category_id: str) -> Sequence[MapCategory]: ...


class EmptySource:
    """A source with no overrides and no categories."""

    def get_override_attributes_for_feature(
        self, feature: MapFeature
    ) -> AttributeSet | None:
        return None

    def get_category_definitions(self, category_id: str) -> Sequence[MapCategory]:
        return ()

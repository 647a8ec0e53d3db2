"""Category chain walking.

Category ids are colon-delimited paths ("region:city:capital"). The parent
of an id is everything before its last colon; an id without a colon has no
parent. Ids are never validated: "a:" has parent "a" and ":b" has parent "".
"""

from collections.abc import Iterator


def parent_of(category_id: str) -> str | None:
    """Return the parent category id, or None if there are no more ancestors.

    Examples:
        "a:b:c" → "a:b"
        "a" → None
        "" → None
    """
    index = category_id.rfind(":")
    if index == -1:
        return None
    return category_id[:index]


def iter_category_chain(category_id: str) -> Iterator[str]:
    """Yield category_id followed by each of its ancestors, nearest first."""
    current: str | None = category_id
    while current is not None:
        yield current
        current = parent_of(current)

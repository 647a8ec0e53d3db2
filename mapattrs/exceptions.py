"""Exception types raised by mapattrs."""


class MapAttrsError(Exception):
    """Base class for all mapattrs errors."""


class DefaultAttributesError(MapAttrsError):
    """Raised when a default attribute set does not cover every field.

    The default set is the base case of resolution, so a gap is a fatal
    configuration error. It is detected once, when the default set is built,
    never during an individual resolution.
    """

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(
            "Default attribute set is missing required fields: "
            + ", ".join(self.missing)
        )


class MapDataError(MapAttrsError):
    """Raised when a map data file cannot be read or fails validation."""

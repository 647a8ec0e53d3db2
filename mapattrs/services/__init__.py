"""Map data services backing attribute resolution."""

from .checks import check_map_data
from .mapdata import MapDataRegistry, MapDataSnapshot, load_map_data

__all__ = [
    "MapDataRegistry",
    "MapDataSnapshot",
    "load_map_data",
    "check_map_data",
]

"""Fixed-size geographic grid helpers used for spatial aggregation."""

from __future__ import annotations

import math
from typing import Tuple

# Grid resolution in degrees. 10° cells separate independent regional
# clusters while still collecting enough events per cell for variance.
CELL_SIZE: int = 10

# (row, col): south-west corner of the cell in whole degrees
CellKey = Tuple[int, int]


def cell_key(lat: float, lng: float, size: int = CELL_SIZE) -> CellKey:
    """Return the grid cell containing (*lat*, *lng*)."""
    return (math.floor(lat / size) * size, math.floor(lng / size) * size)


def cell_centre(key: CellKey, size: int = CELL_SIZE) -> Tuple[float, float]:
    """Return the (lat, lng) centroid of cell *key*."""
    row, col = key
    return (row + size / 2, col + size / 2)


def cardinal_label(lat: float, lng: float) -> str:
    """Render a coordinate as e.g. ``"15°N 35°W"``."""
    ns = "N" if lat >= 0 else "S"
    ew = "E" if lng >= 0 else "W"
    return f"{abs(round(lat))}°{ns} {abs(round(lng))}°{ew}"

__all__ = ["CELL_SIZE", "CellKey", "cell_key", "cell_centre", "cardinal_label"]

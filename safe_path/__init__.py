from safe_path.models import (
    Cell,
    RadiationGrid,
    SafePath,
    GridError,
    InvalidDimensions,
    InvalidCellValue,
)
from safe_path.grid import as_grid
from safe_path.minimax_core import minimax_path, solve_safest_path

__all__ = [
    "Cell",
    "RadiationGrid",
    "SafePath",
    "GridError",
    "InvalidDimensions",
    "InvalidCellValue",
    "as_grid",
    "minimax_path",
    "solve_safest_path",
]

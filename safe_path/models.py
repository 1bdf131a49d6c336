# models.py
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
import numpy as np

Cell = Tuple[int, int]  # (row, col)


# region Errors
class GridError(ValueError):
    """Input that cannot be turned into a radiation grid."""
    kind = "invalid_grid"


class InvalidDimensions(GridError):
    kind = "invalid_dimensions"


class InvalidCellValue(GridError):
    kind = "invalid_grid"
# endregion


# region Grid
@dataclass
class RadiationGrid:
    values: np.ndarray                      # (N,M) int64, read-only
    blocked: Optional[np.ndarray] = None    # (N,M) bool, True = impassable

    @property
    def N(self) -> int:
        return int(self.values.shape[0])

    @property
    def M(self) -> int:
        return int(self.values.shape[1])

    @property
    def origin(self) -> Cell:
        return (0, 0)

    @property
    def target(self) -> Cell:
        return (self.N - 1, self.M - 1)

    def in_bounds(self, c: Cell) -> bool:
        r, col = c
        return 0 <= r < self.N and 0 <= col < self.M

    def is_blocked(self, c: Cell) -> bool:
        if self.blocked is None:
            return False
        return bool(self.blocked[c[0], c[1]])

    def value(self, c: Cell) -> int:
        return int(self.values[c[0], c[1]])

    def tolist(self) -> List[List[int]]:
        return self.values.tolist()
# endregion


# region Result
@dataclass
class SafePath:
    bottleneck: int
    path: List[Cell]
    expansions: int = 0
    expanded_order: List[Cell] = field(default_factory=list)

    @property
    def path_length(self) -> int:
        return len(self.path)

    def to_dict(self, grid: Optional[RadiationGrid] = None) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "reachable": True,
            "bottleneck": int(self.bottleneck),
            "path": [[int(r), int(c)] for r, c in self.path],
            "path_length": self.path_length,
            "expansions": int(self.expansions),
        }
        if grid is not None:
            out["path_values"] = [grid.value(c) for c in self.path]
        return out
# endregion

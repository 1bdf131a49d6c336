# region Imports
from typing import Any, Iterable, List, Optional, Sequence
import numpy as np

from safe_path.config import RANDOM_MIN_VALUE, RANDOM_MAX_VALUE, SAMPLES
from safe_path.models import (
    Cell,
    RadiationGrid,
    InvalidDimensions,
    InvalidCellValue,
)

_INT64_MAX = int(np.iinfo(np.int64).max)
# endregion

# region Dimensions
def as_dim(v: Any, name: str = "dimension") -> Optional[int]:
    """Declared row/column count as int; None when absent. Rejects bools and fractions."""
    if v is None or (isinstance(v, str) and v.strip() in ("", "null")):
        return None
    if isinstance(v, (bool, np.bool_)):
        raise InvalidDimensions(f"{name} must be an integer, got {v!r}")
    if isinstance(v, (int, np.integer)):
        return int(v)
    if isinstance(v, (float, np.floating)):
        if np.isfinite(v) and float(v).is_integer():
            return int(v)
        raise InvalidDimensions(f"{name} must be an integer, got {v!r}")
    if isinstance(v, str):
        try:
            return int(v.strip())
        except ValueError:
            raise InvalidDimensions(f"{name} must be an integer, got {v!r}") from None
    raise InvalidDimensions(f"{name} must be an integer, got {v!r}")
# endregion

# region Coercion
def _as_matrix(cells: Any) -> np.ndarray:
    if isinstance(cells, np.ndarray):
        arr = cells
    else:
        if isinstance(cells, (str, bytes)) or not isinstance(cells, Iterable):
            raise InvalidDimensions(f"grid must be a matrix of rows, got {type(cells).__name__}")
        rows = []
        for i, row in enumerate(cells):
            if isinstance(row, (str, bytes)) or not isinstance(row, Iterable):
                raise InvalidDimensions(f"row {i + 1} is not a sequence of values")
            rows.append(list(row))
        if len(rows) == 0:
            raise InvalidDimensions("grid must have at least 1 row")
        widths = {len(row) for row in rows}
        if len(widths) != 1:
            raise InvalidDimensions(
                f"rows have different lengths: {sorted(widths)}"
            )
        # object array so nested junk surfaces as a bad cell, not a 3-D shape
        arr = np.empty((len(rows), len(rows[0])), dtype=object)
        for r, row in enumerate(rows):
            for c, v in enumerate(row):
                arr[r, c] = v

    if arr.ndim != 2:
        raise InvalidDimensions(f"grid must be 2-D, got {arr.ndim}-D")
    if arr.shape[0] == 0 or arr.shape[1] == 0:
        raise InvalidDimensions(
            f"grid must have at least 1 row and 1 column, got {arr.shape[0]}x{arr.shape[1]}"
        )
    return arr


def _as_values(arr: np.ndarray) -> np.ndarray:
    """
    int64 array when every value fits, else an object array of Python ints.
    The solver only compares values, so arbitrarily large integers are fine.
    """
    if arr.dtype == bool:
        raise InvalidCellValue("grid values must be integers, not booleans")
    if np.issubdtype(arr.dtype, np.signedinteger):
        out = arr.astype(np.int64)
        if (out < 0).any():
            r, c = (int(i) for i in np.argwhere(out < 0)[0])
            raise InvalidCellValue(f"cell ({r},{c}) is negative: {int(out[r, c])}")
        return out

    out = np.empty(arr.shape, dtype=object)
    fits = True
    for (r, c), v in np.ndenumerate(arr):
        if isinstance(v, (bool, np.bool_, str, bytes)):
            raise InvalidCellValue(f"cell ({r},{c}) is not an integer: {v!r}")
        if isinstance(v, (int, np.integer)):
            iv = int(v)
        else:
            try:
                f = float(v)
            except (TypeError, ValueError, OverflowError) as e:
                raise InvalidCellValue(f"cell ({r},{c}) is not an integer: {v!r}") from e
            if not np.isfinite(f) or not f.is_integer():
                raise InvalidCellValue(f"cell ({r},{c}) is not an integer: {v!r}")
            iv = int(f)
        if iv < 0:
            raise InvalidCellValue(f"cell ({r},{c}) is negative: {iv}")
        if iv > _INT64_MAX:
            fits = False
        out[r, c] = iv

    if fits:
        return out.astype(np.int64)
    return out


def _as_mask(blocked: Any, shape) -> np.ndarray:
    try:
        mask = np.asarray(blocked, dtype=bool)
    except (TypeError, ValueError) as e:
        raise InvalidDimensions(f"blocked mask is not a rectangular matrix: {e}") from e
    if mask.shape != shape:
        raise InvalidDimensions(
            f"blocked mask shape {mask.shape} does not match grid {shape}"
        )
    mask = mask.copy()
    mask.setflags(write=False)
    return mask


def as_grid(
    cells: Any,
    rows: Any = None,
    cols: Any = None,
    blocked: Any = None,
) -> RadiationGrid:
    """
    Validate a matrix of radiation values and wrap it as a read-only RadiationGrid.

    rows/cols, when given, must agree with the matrix shape. blocked is an
    optional same-shape truthy mask of impassable cells; passed with an
    existing grid it replaces that grid's mask.
    """
    rows = as_dim(rows, "N")
    cols = as_dim(cols, "M")

    if isinstance(cells, RadiationGrid):
        grid = cells
        if rows is not None and rows != grid.N or cols is not None and cols != grid.M:
            raise InvalidDimensions(
                f"declared {rows}x{cols} grid but got {grid.N}x{grid.M}"
            )
        if blocked is None:
            return grid
        return RadiationGrid(values=grid.values, blocked=_as_mask(blocked, grid.values.shape))

    if rows is not None and rows <= 0 or cols is not None and cols <= 0:
        raise InvalidDimensions(f"declared dimensions must be >= 1, got {rows}x{cols}")

    values = _as_values(_as_matrix(cells))
    H, W = values.shape
    if (rows is not None and rows != H) or (cols is not None and cols != W):
        raise InvalidDimensions(f"declared {rows}x{cols} grid but got {H}x{W}")

    mask = None if blocked is None else _as_mask(blocked, values.shape)

    values.setflags(write=False)
    return RadiationGrid(values=values, blocked=mask)
# endregion

# region Grid Factories
def zeros_grid(rows: int, cols: int) -> RadiationGrid:
    return as_grid(np.zeros((rows, cols), dtype=np.int64))


def random_grid(rows: int, cols: int, seed: Optional[int] = None) -> RadiationGrid:
    if rows <= 0 or cols <= 0:
        raise InvalidDimensions(f"grid must have at least 1 row and 1 column, got {rows}x{cols}")
    rng = np.random.default_rng(seed)
    vals = rng.integers(RANDOM_MIN_VALUE, RANDOM_MAX_VALUE + 1, size=(rows, cols))
    return as_grid(vals)


def sample_grid(n: int) -> RadiationGrid:
    if n not in SAMPLES:
        raise KeyError(f"unknown sample {n}; available: {sorted(SAMPLES)}")
    return as_grid(SAMPLES[n])
# endregion

# region Path Helpers
def path_values(grid: RadiationGrid, path: Sequence[Cell]) -> List[int]:
    return [grid.value(c) for c in path]


def is_orthogonal_path(grid: RadiationGrid, path: Sequence[Cell]) -> bool:
    """True if path runs origin → target in unit orthogonal steps without repeats."""
    if not path or tuple(path[0]) != grid.origin or tuple(path[-1]) != grid.target:
        return False
    if len(set(map(tuple, path))) != len(path):
        return False
    for c in path:
        if not grid.in_bounds(c) or grid.is_blocked(c):
            return False
    for (r0, c0), (r1, c1) in zip(path, path[1:]):
        if abs(r1 - r0) + abs(c1 - c0) != 1:
            return False
    return True
# endregion

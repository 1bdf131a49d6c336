import numpy as np
import pytest

from safe_path.config import SAMPLES, RANDOM_MIN_VALUE, RANDOM_MAX_VALUE
from safe_path.models import GridError, InvalidCellValue, InvalidDimensions, RadiationGrid
from safe_path.grid import (
    as_dim,
    as_grid,
    is_orthogonal_path,
    path_values,
    random_grid,
    sample_grid,
    zeros_grid,
)


def test_as_grid_wraps_lists_read_only():
    g = as_grid([[1, 2, 3], [4, 5, 6]])
    assert isinstance(g, RadiationGrid)
    assert (g.N, g.M) == (2, 3)
    assert g.origin == (0, 0) and g.target == (1, 2)
    assert g.values.dtype == np.int64
    with pytest.raises(ValueError):
        g.values[0, 0] = 9


def test_as_grid_accepts_integral_floats():
    g = as_grid([[1.0, 2.0], [3.0, 4.0]])
    assert g.tolist() == [[1, 2], [3, 4]]


def test_as_grid_passes_through_existing_grid():
    g = as_grid([[1]])
    assert as_grid(g) is g
    with pytest.raises(InvalidDimensions):
        as_grid(g, rows=2)


@pytest.mark.parametrize("cells", [[[1, 2], [3]], [[1], [2, 3]], [1, 2, 3], ["12", "34"]])
def test_ragged_or_flat_rows(cells):
    with pytest.raises(InvalidDimensions):
        as_grid(cells)


@pytest.mark.parametrize(
    "cells",
    [[[1, -1]], [[1.5]], [[float("nan")]], [[True, 1]], [["3"]], [[None]], [[[1]]]],
)
def test_bad_cell_values(cells):
    with pytest.raises(InvalidCellValue):
        as_grid(cells)


def test_negative_cell_message_names_cell():
    with pytest.raises(InvalidCellValue, match=r"\(1,0\)"):
        as_grid([[0, 0], [-3, 0]])


def test_declared_dimensions():
    assert as_grid([[1, 2]], rows=1, cols=2).M == 2
    with pytest.raises(InvalidDimensions):
        as_grid([[1, 2]], rows=1, cols=3)
    with pytest.raises(InvalidDimensions):
        as_grid([[1, 2]], rows=0, cols=2)


def test_blocked_mask_shape_checked():
    g = as_grid([[1, 2], [3, 4]], blocked=[[0, 1], [0, 0]])
    assert g.is_blocked((0, 1)) and not g.is_blocked((0, 0))
    with pytest.raises(InvalidDimensions):
        as_grid([[1, 2], [3, 4]], blocked=[[False, False]])


def test_errors_are_value_errors():
    assert issubclass(InvalidDimensions, GridError)
    assert issubclass(InvalidCellValue, GridError)
    assert issubclass(GridError, ValueError)
    assert InvalidDimensions.kind == "invalid_dimensions"


def test_factories():
    assert zeros_grid(2, 3).tolist() == [[0, 0, 0], [0, 0, 0]]
    r = random_grid(4, 5, seed=1)
    assert (r.N, r.M) == (4, 5)
    assert r.values.min() >= RANDOM_MIN_VALUE and r.values.max() <= RANDOM_MAX_VALUE
    assert random_grid(4, 5, seed=1).tolist() == r.tolist()
    with pytest.raises(InvalidDimensions):
        random_grid(0, 3)


def test_samples():
    assert sample_grid(1).tolist() == SAMPLES[1]
    assert sample_grid(2).tolist() == [[10, 10], [10, 10]]
    with pytest.raises(KeyError):
        sample_grid(99)


def test_path_helpers():
    g = as_grid([[1, 3, 5], [2, 8, 2], [4, 2, 1]])
    good = [(0, 0), (1, 0), (2, 0), (2, 1), (2, 2)]
    assert path_values(g, good) == [1, 2, 4, 2, 1]
    assert is_orthogonal_path(g, good)
    assert not is_orthogonal_path(g, [(0, 0), (1, 1), (2, 2)])
    assert not is_orthogonal_path(g, [(0, 0), (0, 1), (0, 0), (1, 0), (2, 0), (2, 1), (2, 2)])
    assert not is_orthogonal_path(g, [(0, 0), (1, 0)])
    assert not is_orthogonal_path(g, [])


def test_integers_beyond_int64_are_kept_exact():
    g = as_grid([[2**70, 1], [1, 0]])
    assert g.values.dtype == object
    assert g.value((0, 0)) == 2**70
    assert g.tolist() == [[2**70, 1], [1, 0]]
    assert as_grid([[1e300]]).value((0, 0)) == int(1e300)


def test_unsigned_values_above_int64_are_not_negative():
    big = np.array([[2**64 - 1, 0]], dtype=np.uint64)
    g = as_grid(big)
    assert g.value((0, 0)) == 2**64 - 1
    assert as_grid(np.array([[3, 4]], dtype=np.uint8)).values.dtype == np.int64


@pytest.mark.parametrize("cells", [5, None, "1 2\n3 4", 2.5])
def test_non_matrix_grid(cells):
    with pytest.raises(InvalidDimensions):
        as_grid(cells)


def test_ragged_blocked_mask():
    with pytest.raises(InvalidDimensions):
        as_grid([[1, 1], [1, 1]], blocked=[[True], [False, True]])


@pytest.mark.parametrize("v, expected", [(None, None), ("", None), (3, 3), ("4", 4), (2.0, 2), (np.int64(5), 5)])
def test_as_dim_accepts_integral_values(v, expected):
    assert as_dim(v) == expected


@pytest.mark.parametrize("v", [3.7, True, False, "x", [2], float("inf")])
def test_as_dim_rejects_non_integers(v):
    with pytest.raises(InvalidDimensions):
        as_dim(v)


def test_declared_dimensions_as_strings():
    assert as_grid([[1, 2]], rows="1", cols="2").N == 1
    with pytest.raises(InvalidDimensions):
        as_grid([[1, 2]], rows="one")


def test_existing_grid_takes_new_blocked_mask():
    g = as_grid([[1, 1], [1, 1]])
    walled = as_grid(g, blocked=[[False, True], [True, False]])
    assert walled.is_blocked((0, 1))
    assert not g.is_blocked((0, 1))
    assert walled.values is g.values
    with pytest.raises(InvalidDimensions):
        as_grid(g, blocked=[[True]])

# config.py
# Grids above this size are rejected by the HTTP layer only; the solver has no limit.
MAX_GRID_DIM = 15

# Range used for generated example grids
RANDOM_MIN_VALUE = 1
RANDOM_MAX_VALUE = 9

SAMPLES = {
    1: [[1, 3, 5],
        [2, 8, 2],
        [4, 2, 1]],
    2: [[10, 10],
        [10, 10]],
}

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8081

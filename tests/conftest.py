import math
import random

import pytest

from tsp_evo.problem import TSPProblem

SQUARE_TSP = """NAME: square4
TYPE: TSP
DIMENSION: 4
EDGE_WEIGHT_TYPE: EUC_2D
NODE_COORD_SECTION
1 0 0
2 10 0
3 10 10
4 0 10
EOF
"""

SQUARE_TOUR = """NAME: square4.opt.tour
TYPE: TOUR
DIMENSION: 4
TOUR_SECTION
1
2
3
4
-1
EOF
"""


@pytest.fixture
def square():
    r = math.sqrt(2)
    return TSPProblem.from_distance_matrix(
        [
            [0, 1, r, 1],
            [1, 0, 1, r],
            [r, 1, 0, 1],
            [1, r, 1, 0],
        ],
        name="square",
    )


@pytest.fixture
def cities():
    return TSPProblem.random_euclidean(12, random.Random(42))


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def tsplib_dir(tmp_path):
    (tmp_path / "square4.tsp").write_text(SQUARE_TSP)
    (tmp_path / "square4.opt.tour").write_text(SQUARE_TOUR)
    return tmp_path

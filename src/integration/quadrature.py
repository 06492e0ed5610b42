import basix
import numpy as np

from basis.element_type import type_by_dimension
from errors import InvalidInputError


def gauss_rule(dimension, degree=2):
    """Points and weights of a Gauss rule on the hypercube [-1, 1]^dimension.

    The rule integrates polynomials of the given degree exactly.
    """
    if degree < 0:
        raise InvalidInputError("gauss_rule:: degree must be non-negative.")
    if dimension == 0:
        return np.zeros((1, 0)), np.ones(1)

    cell_type = type_by_dimension(dimension)
    points, weights = basix.make_quadrature(cell_type, degree)

    # basix reference cells are [0, 1]^d
    points = 2.0 * np.asarray(points, dtype=float) - 1.0
    weights = np.asarray(weights, dtype=float) * 2.0**dimension
    return points, weights

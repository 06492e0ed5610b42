import numpy as np

from errors import InvalidInputError


def _validate_param_coords(name, dimension, param_coords):
    coords = np.asarray(param_coords, dtype=float)
    if coords.ndim != 1 or coords.shape[0] != dimension:
        raise InvalidInputError(
            "%s:: parametric coordinates must be a vector of dimension %r"
            % (name, dimension)
        )
    return coords


def _p1_bfun(param_coords):
    _validate_param_coords("P1", 0, param_coords)
    return np.ones((1, 1))


def _p1_bfundpar(param_coords):
    _validate_param_coords("P1", 0, param_coords)
    return np.zeros((1, 0))


def _l2_bfun(param_coords):
    xi = _validate_param_coords("L2", 1, param_coords)[0]
    return np.array([[0.5 * (1.0 - xi)], [0.5 * (1.0 + xi)]])


def _l2_bfundpar(param_coords):
    _validate_param_coords("L2", 1, param_coords)
    return np.array([[-0.5], [+0.5]])


def _q4_bfun(param_coords):
    xi, eta = _validate_param_coords("Q4", 2, param_coords)
    one_minus_xi = 1.0 - xi
    one_plus_xi = 1.0 + xi
    one_minus_eta = 1.0 - eta
    one_plus_eta = 1.0 + eta
    return np.array(
        [
            [0.25 * one_minus_xi * one_minus_eta],
            [0.25 * one_plus_xi * one_minus_eta],
            [0.25 * one_plus_xi * one_plus_eta],
            [0.25 * one_minus_xi * one_plus_eta],
        ]
    )


def _q4_bfundpar(param_coords):
    xi, eta = _validate_param_coords("Q4", 2, param_coords)
    return np.array(
        [
            [-(1.0 - eta) * 0.25, -(1.0 - xi) * 0.25],
            [(1.0 - eta) * 0.25, -(1.0 + xi) * 0.25],
            [(1.0 + eta) * 0.25, (1.0 + xi) * 0.25],
            [-(1.0 + eta) * 0.25, (1.0 - xi) * 0.25],
        ]
    )


H8_REFERENCE_NODES = np.array(
    [
        [-1.0, -1.0, -1.0],
        [+1.0, -1.0, -1.0],
        [+1.0, +1.0, -1.0],
        [-1.0, +1.0, -1.0],
        [-1.0, -1.0, +1.0],
        [+1.0, -1.0, +1.0],
        [+1.0, +1.0, +1.0],
        [-1.0, +1.0, +1.0],
    ]
)


def _h8_bfun(param_coords):
    coords = _validate_param_coords("H8", 3, param_coords)
    factors = 1.0 + H8_REFERENCE_NODES * coords
    return 0.125 * np.prod(factors, axis=1).reshape(8, 1)


def _h8_bfundpar(param_coords):
    coords = _validate_param_coords("H8", 3, param_coords)
    factors = 1.0 + H8_REFERENCE_NODES * coords
    nder = np.empty((8, 3))
    for k in range(3):
        others = [j for j in range(3) if j != k]
        nder[:, k] = H8_REFERENCE_NODES[:, k] * np.prod(factors[:, others], axis=1)
    return 0.125 * nder


class CellShape:
    """Reference cell of one element type: size, shape functions and boundary."""

    def __init__(
        self, name, dimension, cell_size, boundary_name, bfun, bfundpar, reference_nodes
    ):
        self.name = name
        self.dimension = dimension
        self.cell_size = cell_size
        self.boundary_name = boundary_name
        self.bfun = bfun
        self.bfundpar = bfundpar
        self.reference_nodes = reference_nodes

    def __repr__(self):
        return "CellShape(%r)" % self.name


SHAPES = {
    "P1": CellShape("P1", 0, 1, None, _p1_bfun, _p1_bfundpar, np.zeros((1, 0))),
    "L2": CellShape(
        "L2", 1, 2, "P1", _l2_bfun, _l2_bfundpar, np.array([[-1.0], [+1.0]])
    ),
    "Q4": CellShape(
        "Q4",
        2,
        4,
        "L2",
        _q4_bfun,
        _q4_bfundpar,
        np.array([[-1.0, -1.0], [+1.0, -1.0], [+1.0, +1.0], [-1.0, +1.0]]),
    ),
    "H8": CellShape("H8", 3, 8, "Q4", _h8_bfun, _h8_bfundpar, H8_REFERENCE_NODES),
}


def shape_by_name(name):
    if name not in SHAPES:
        raise InvalidInputError(
            "CellShape:: unknown cell type %r, available: %r" % (name, list(SHAPES))
        )
    return SHAPES[name]


def shape_by_dimension(dimension):
    shapes = {shape.dimension: shape for shape in SHAPES.values()}
    return shapes[dimension]


def boundary_shape(shape):
    if shape.boundary_name is None:
        raise NotImplementedError(
            "%s:: boundary cell type is not defined." % shape.name
        )
    return SHAPES[shape.boundary_name]

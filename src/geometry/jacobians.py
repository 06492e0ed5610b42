import warnings

import numpy as np

from errors import DimensionMismatchError, UnsupportedDimensionError
from globals import jacobian_negative_tol


def _radial_coordinate(N, x):
    xyz = (np.asarray(N).T @ np.asarray(x))[0]
    return xyz[0]


def _check_negative(det_jac):
    if det_jac < jacobian_negative_tol:
        warnings.warn("GCellSet:: Negative jacobian determinant: %r" % det_jac)


# manifold 0: points carry their measure in other_dimension
def _point_jacobian_point(cell_set, conn, N, J, x):
    return 1.0


def _point_jacobian_curve(cell_set, conn, N, J, x):
    return cell_set.other_dimension(conn, N, x)


def _point_jacobian_surface(cell_set, conn, N, J, x):
    if cell_set.axis_symm():
        return 2.0 * np.pi * _radial_coordinate(N, x)
    return cell_set.other_dimension(conn, N, x)


def _point_jacobian_volume(cell_set, conn, N, J, x):
    if cell_set.axis_symm():
        return (
            2.0 * np.pi * _radial_coordinate(N, x) * cell_set.other_dimension(conn, N, x)
        )
    return cell_set.other_dimension(conn, N, x)


# manifold 1
def _curve_jacobian_curve(cell_set, conn, N, J, x):
    J = np.asarray(J, dtype=float)
    if J.ndim != 2 or J.shape[1] != 1:
        raise DimensionMismatchError(
            "GCellSet:: curve jacobian expects a single tangent column, J has shape %r"
            % (J.shape,)
        )
    return np.linalg.norm(J[:, 0])


def _curve_jacobian_surface(cell_set, conn, N, J, x):
    jac = _curve_jacobian_curve(cell_set, conn, N, J, x)
    if cell_set.axis_symm():
        return jac * 2.0 * np.pi * _radial_coordinate(N, x)
    return jac * cell_set.other_dimension(conn, N, x)


def _curve_jacobian_volume(cell_set, conn, N, J, x):
    jac = _curve_jacobian_curve(cell_set, conn, N, J, x)
    if cell_set.axis_symm():
        return (
            jac
            * 2.0
            * np.pi
            * _radial_coordinate(N, x)
            * cell_set.other_dimension(conn, N, x)
        )
    return jac * cell_set.other_dimension(conn, N, x)


# manifold 2
def _surface_jacobian_surface(cell_set, conn, N, J, x):
    J = np.asarray(J, dtype=float)
    if J.ndim != 2 or J.shape[1] != 2:
        raise DimensionMismatchError(
            "GCellSet:: surface jacobian expects two tangent columns, J has shape %r"
            % (J.shape,)
        )
    sdim = J.shape[0]
    if sdim == 2:
        jac = J[0, 0] * J[1, 1] - J[1, 0] * J[0, 1]
        _check_negative(jac)
        return jac
    if sdim == 3:
        # surface embedded in 3-space
        return np.linalg.norm(np.cross(J[:, 0], J[:, 1]))
    raise DimensionMismatchError(
        "GCellSet:: surface jacobian is not defined in a space of dimension %r" % sdim
    )


def _surface_jacobian_volume(cell_set, conn, N, J, x):
    jac = _surface_jacobian_surface(cell_set, conn, N, J, x)
    if cell_set.axis_symm():
        return jac * 2.0 * np.pi * _radial_coordinate(N, x)
    return jac * cell_set.other_dimension(conn, N, x)


# manifold 3
def _volume_jacobian_volume(cell_set, conn, N, J, x):
    J = np.asarray(J, dtype=float)
    if J.shape != (3, 3):
        raise DimensionMismatchError(
            "GCellSet:: volume jacobian expects a 3 x 3 matrix, J has shape %r"
            % (J.shape,)
        )
    jac = np.linalg.det(J)
    _check_negative(jac)
    return jac


JACOBIANS_BY_MANIFOLD = {
    0: {
        0: _point_jacobian_point,
        1: _point_jacobian_curve,
        2: _point_jacobian_surface,
        3: _point_jacobian_volume,
    },
    1: {
        1: _curve_jacobian_curve,
        2: _curve_jacobian_surface,
        3: _curve_jacobian_volume,
    },
    2: {
        2: _surface_jacobian_surface,
        3: _surface_jacobian_volume,
    },
    3: {
        3: _volume_jacobian_volume,
    },
}


def jacobian_in_dim(cell_set, conn, N, J, x, dim):
    available = JACOBIANS_BY_MANIFOLD[cell_set.dim()]
    if dim not in available:
        raise UnsupportedDimensionError(
            "%s:: jacobian in dimension %r is not supported, use one of %r"
            % (cell_set.type(), dim, sorted(available))
        )
    return available[dim](cell_set, conn, N, J, x)


def natural_jacobian(cell_set, conn, N, J, x):
    return jacobian_in_dim(cell_set, conn, N, J, x, cell_set.dim())

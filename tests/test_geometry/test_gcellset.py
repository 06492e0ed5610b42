import numpy as np
import pytest

from errors import (
    DimensionMismatchError,
    IndexOutOfRangeError,
    InvalidInputError,
    UnsupportedDimensionError,
)
from geometry.cell_set_registry import CellSetRegistry
from geometry.gcellset import H8, L2, P1, Q4, GCellSet
from topology.cell_topology import hypercube


def l_shape_connectivity():
    return [[0, 1, 2, 3], [3, 2, 4, 5], [3, 5, 6, 7]]


def unit_square():
    return np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]])


def test_accessors():
    gcells = Q4(l_shape_connectivity(), other_dimension=0.25)
    assert gcells.type() == "Q4"
    assert gcells.dim() == 2
    assert gcells.cell_size() == 4
    assert gcells.count() == 3
    assert gcells.nfens() == 8
    assert gcells.id() is None
    assert not gcells.axis_symm()
    assert gcells.other_dimension(None, None, None) == 0.25
    assert gcells.boundary_cell_type() == "L2"
    assert np.array_equal(gcells.conn(), l_shape_connectivity())
    assert np.array_equal(gcells.vertices(), np.arange(8))
    assert gcells.edges().shape == (10, 2)


def test_straight_line_jacobian():
    gcells = L2([[0, 1]])
    x = np.array([[0.0, 0.0], [10.0, 0.0]])
    conn = gcells.conn()[0]
    N = gcells.bfun([0.0])
    J = gcells.jacobian_matrix(gcells.bfundpar([0.0]), x)
    assert np.allclose(J, [[5.0], [0.0]])
    assert gcells.jacobian_curve(conn, N, J, x) == pytest.approx(5.0)
    assert gcells.jacobian(conn, N, J, x) == pytest.approx(5.0)


def test_line_jacobian_in_three_dimensions():
    gcells = L2([[0, 1]])
    x = np.array([[0.0, 0.0, 0.0], [3.0, 4.0, 0.0]])
    J = gcells.jacobian_matrix(gcells.bfundpar([0.2]), x)
    assert gcells.jacobian_curve([0, 1], gcells.bfun([0.2]), J, x) == pytest.approx(2.5)


def test_line_surface_and_volume_jacobians():
    x = np.array([[0.0, 0.0], [10.0, 0.0]])
    gcells = L2([[0, 1]], other_dimension=lambda conn, N, x: 3.0)
    N = gcells.bfun([0.0])
    J = gcells.jacobian_matrix(gcells.bfundpar([0.0]), x)
    assert gcells.jacobian_surface([0, 1], N, J, x) == pytest.approx(15.0)
    assert gcells.jacobian_volume([0, 1], N, J, x) == pytest.approx(15.0)


def test_axisymmetric_line():
    # a segment at radius 1 sweeps a cylinder of height 2
    gcells = L2([[0, 1]], axis_symm=True)
    x = np.array([[1.0, 0.0], [1.0, 2.0]])
    N = gcells.bfun([0.0])
    J = gcells.jacobian_matrix(gcells.bfundpar([0.0]), x)
    assert gcells.jacobian_surface([0, 1], N, J, x) == pytest.approx(2.0 * np.pi)
    assert gcells.measure(x, dim=2) == pytest.approx(4.0 * np.pi)


def test_axisymmetric_quadrilateral_volume():
    gcells = Q4([[0, 1, 2, 3]], axis_symm=True)
    x = np.array([[1.0, 0.0], [2.0, 0.0], [2.0, 1.0], [1.0, 1.0]])
    assert gcells.measure(x, dim=3) == pytest.approx(3.0 * np.pi)
    assert gcells.measure(x) == pytest.approx(1.0)


def test_quadrilateral_jacobians():
    gcells = Q4([[0, 1, 2, 3]], other_dimension=0.5)
    x = unit_square()
    N = gcells.bfun([0.0, 0.0])
    J = gcells.jacobian_matrix(gcells.bfundpar([0.0, 0.0]), x)
    assert np.allclose(J, 0.5 * np.eye(2))
    assert gcells.jacobian_surface([0, 1, 2, 3], N, J, x) == pytest.approx(0.25)
    assert gcells.jacobian_volume([0, 1, 2, 3], N, J, x) == pytest.approx(0.125)
    assert gcells.measure(x) == pytest.approx(1.0)
    assert gcells.measure(x, dim=3) == pytest.approx(0.5)


def test_quadrilateral_in_three_dimensions():
    gcells = Q4([[0, 1, 2, 3]])
    x = np.array([[0.0, 0.0, 0.0], [2.0, 0.0, 0.0], [2.0, 0.0, 3.0], [0.0, 0.0, 3.0]])
    assert gcells.measure(x) == pytest.approx(6.0)


def test_negative_jacobian_warns():
    gcells = Q4([[0, 1, 2, 3]])
    x = unit_square()[[0, 3, 2, 1]]
    N = gcells.bfun([0.0, 0.0])
    J = gcells.jacobian_matrix(gcells.bfundpar([0.0, 0.0]), x)
    with pytest.warns(UserWarning, match="Negative jacobian"):
        jac = gcells.jacobian_surface([0, 1, 2, 3], N, J, x)
    assert jac == pytest.approx(-0.25)


def test_hexahedron_volume():
    gcells = H8([list(range(8))])
    x = np.array(
        [
            [0.0, 0.0, 0.0],
            [2.0, 0.0, 0.0],
            [2.0, 1.0, 0.0],
            [0.0, 1.0, 0.0],
            [0.0, 0.0, 3.0],
            [2.0, 0.0, 3.0],
            [2.0, 1.0, 3.0],
            [0.0, 1.0, 3.0],
        ]
    )
    J = gcells.jacobian_matrix(gcells.bfundpar([0.1, -0.3, 0.7]), x)
    assert np.allclose(J, np.diag([1.0, 0.5, 1.5]))
    assert gcells.measure(x) == pytest.approx(6.0)


def test_points_measure():
    gcells = P1([[0], [1]], other_dimension=3.0)
    x = np.array([[0.0], [1.0]])
    assert gcells.measure(x) == pytest.approx(2.0)
    assert gcells.measure(x, dim=1) == pytest.approx(6.0)


def test_spatial_derivatives():
    gcells = Q4([[0, 1, 2, 3]])
    x = 4.0 * unit_square()
    nder = gcells.bfundpar([0.3, -0.6])
    nspd = gcells.bfundsp(nder, x)
    assert np.allclose(nspd, 0.5 * nder)
    # linear fields are reproduced exactly
    assert np.allclose(x.T @ nspd, np.eye(2))

    line = L2([[0, 1]])
    with pytest.raises(DimensionMismatchError):
        line.bfundsp(line.bfundpar([0.0]), np.array([[0.0, 0.0], [1.0, 1.0]]))


def test_jacobian_matrix_input_shapes():
    gcells = Q4([[0, 1, 2, 3]])
    with pytest.raises(InvalidInputError):
        gcells.jacobian_matrix(np.zeros((4, 1)), unit_square())
    with pytest.raises(InvalidInputError):
        gcells.jacobian_matrix(np.zeros((4, 2)), unit_square()[:3])


def test_unsupported_jacobian_dimensions():
    line = L2([[0, 1]])
    x = np.array([[0.0, 0.0], [1.0, 0.0]])
    J = line.jacobian_matrix(line.bfundpar([0.0]), x)
    with pytest.raises(UnsupportedDimensionError):
        line.jacobian_in_dim([0, 1], line.bfun([0.0]), J, x, 4)
    with pytest.raises(UnsupportedDimensionError):
        line.jacobian_in_dim([0, 1], line.bfun([0.0]), J, x, 0)

    quad = Q4([[0, 1, 2, 3]])
    J = quad.jacobian_matrix(quad.bfundpar([0.0, 0.0]), unit_square())
    with pytest.raises(UnsupportedDimensionError):
        quad.jacobian_curve([0, 1, 2, 3], quad.bfun([0.0, 0.0]), J, unit_square())


def test_mismatched_topology():
    with pytest.raises(DimensionMismatchError):
        GCellSet("Q4", hypercube([[0, 1]], 1))
    with pytest.raises(InvalidInputError):
        GCellSet("Q4", [[0, 1, 2, 3]])
    with pytest.raises(InvalidInputError):
        Q4([[0, 1, 2, 3]], other_dimension="thick")


def test_boundary():
    gcells = Q4([[0, 1, 2, 3]], other_dimension=0.5, axis_symm=True)
    boundary = gcells.boundary()
    assert boundary.type() == "L2"
    assert boundary.count() == 4
    assert np.array_equal(boundary.conn(), [[0, 1], [1, 2], [2, 3], [3, 0]])
    assert boundary.axis_symm()
    assert boundary.other_dimension(None, None, None) == 0.5

    ends = L2([[0, 1], [1, 2]]).boundary()
    assert ends.type() == "P1"
    assert np.array_equal(ends.conn(), [[0], [2]])

    with pytest.raises(NotImplementedError):
        P1([[0]]).boundary()


def test_boundary_of_l_shape_perimeter():
    gcells = Q4(l_shape_connectivity())
    points = np.array(
        [
            [0.5, 0.0],
            [1.0, 0.0],
            [1.0, 0.5],
            [0.5, 0.5],
            [1.0, 1.0],
            [0.5, 1.0],
            [0.0, 1.0],
            [0.0, 0.5],
        ]
    )
    assert gcells.measure(points) == pytest.approx(0.75)
    assert gcells.boundary().measure(points) == pytest.approx(4.0)


def test_subset():
    gcells = Q4(l_shape_connectivity(), other_dimension=2.0, axis_symm=True)
    subset = gcells.subset([1])
    assert subset.count() == 1
    assert np.array_equal(subset.conn(), [[3, 2, 4, 5]])
    assert subset.axis_symm()
    assert subset.other_dimension(None, None, None) == 2.0
    assert subset.subset([]).count() == 0

    with pytest.raises(IndexOutOfRangeError):
        gcells.subset([3])
    with pytest.raises(IndexOutOfRangeError):
        gcells.subset([-1])
    with pytest.raises(InvalidInputError):
        gcells.subset([0.5])


def test_clone():
    gcells = Q4(l_shape_connectivity())
    clone = gcells.clone()
    assert clone is not gcells
    assert clone.type() == gcells.type()
    assert np.array_equal(clone.conn(), gcells.conn())


def test_triangles():
    gcells = Q4([[0, 1, 2, 3], [1, 4, 5, 2]])
    assert np.array_equal(
        gcells.triangles(), [[0, 1, 2], [2, 3, 0], [1, 4, 5], [5, 2, 1]]
    )
    assert L2([[0, 1]]).triangles().shape == (0, 3)
    assert P1([[0]]).edges().shape == (0, 2)


def test_triangles_of_hexahedra():
    hexes = H8([[0, 1, 2, 3, 4, 5, 6, 7], [4, 5, 6, 7, 8, 9, 10, 11]])
    triangles = hexes.triangles()
    # 11 faces, the shared face 4-5-6-7 included once
    assert triangles.shape == (22, 3)
    assert np.array_equal(triangles[:2], [[0, 3, 2], [2, 1, 0]])
    assert sum(set(t.tolist()) <= {4, 5, 6, 7} for t in triangles) == 2
    assert hexes.boundary().triangles().shape == (20, 3)


def test_extrude():
    points = P1([[0]]).extrude([True, True], 1)
    assert points.type() == "L2"
    assert np.array_equal(points.conn(), [[0, 1], [1, 2]])

    quads = L2([[0, 1]]).extrude([True, False, True], 2)
    assert quads.type() == "Q4"
    assert np.array_equal(quads.conn(), [[0, 1, 3, 2], [4, 5, 7, 6]])

    hexes = Q4([[0, 1, 2, 3]]).extrude([True], 4)
    assert hexes.type() == "H8"
    assert np.array_equal(hexes.conn(), [[0, 1, 2, 3, 4, 5, 6, 7]])

    assert L2([[0, 1]]).extrude([False], 2).count() == 0

    with pytest.raises(UnsupportedDimensionError):
        H8([list(range(8))]).extrude([True], 8)


def test_registry_ids():
    registry = CellSetRegistry()
    first = Q4([[0, 1, 2, 3]], registry=registry)
    second = L2([[0, 1]], registry=registry)
    assert first.id() == 0
    assert second.id() == 1
    boundary = first.boundary()
    assert boundary.id() == 2
    assert registry.lookup(0) is first
    assert registry.lookup(2) is boundary
    assert len(registry) == 3
    assert 1 in registry
    assert 5 not in registry
    with pytest.raises(InvalidInputError):
        registry.lookup(5)

import numbers

import numpy as np

from basis.cell_shapes import CellShape, boundary_shape, shape_by_dimension, shape_by_name
from errors import (
    DimensionMismatchError,
    IndexOutOfRangeError,
    InvalidInputError,
    UnsupportedDimensionError,
)
from geometry.jacobians import jacobian_in_dim, natural_jacobian
from globals import DEFAULT_OTHER_DIMENSION, topology_index_dtype
from integration.quadrature import gauss_rule
from topology.cell_topology import Topology, hypercube


class GCellSet:
    """Geometry cell set: a topology together with the behaviour of its cell shape.

    The shape (P1, L2, Q4 or H8) provides the basis functions and the boundary
    shape; the manifold dimension of the shape selects how Jacobians turn
    parametric measures into lengths, areas and volumes.

    ``other_dimension`` is the thickness or cross-section area that completes
    the measure of a lower-dimensional cell, either a number or a callable
    ``(conn, N, x) -> float``.
    """

    def __init__(
        self,
        shape,
        topology,
        other_dimension=DEFAULT_OTHER_DIMENSION,
        axis_symm=False,
        registry=None,
    ):
        if isinstance(shape, str):
            shape = shape_by_name(shape)
        if not isinstance(shape, CellShape):
            raise InvalidInputError("GCellSet:: shape must be a CellShape or a name.")
        if not isinstance(topology, Topology):
            raise InvalidInputError("GCellSet:: topology must be a Topology.")
        if other_dimension is None:
            other_dimension = DEFAULT_OTHER_DIMENSION
        if not (isinstance(other_dimension, numbers.Number) or callable(other_dimension)):
            raise InvalidInputError(
                "GCellSet:: other_dimension must be a number or a callable."
            )

        cell_size = topology.cell_size_by_dimension(topology.dimension)
        if cell_size != shape.cell_size:
            raise DimensionMismatchError(
                "GCellSet:: cell size of the topology is %r, %s cells have size %r"
                % (cell_size, shape.name, shape.cell_size)
            )
        if topology.dimension != shape.dimension:
            raise DimensionMismatchError(
                "GCellSet:: dimension of the topology is %r, %s cells have dimension %r"
                % (topology.dimension, shape.name, shape.dimension)
            )

        self._shape = shape
        self._topology = topology
        self._other_dimension = other_dimension
        self._axis_symm = bool(axis_symm)
        self._registry = registry
        self._id = None
        if registry is not None:
            self._id = registry.register(self)

    @classmethod
    def from_connectivity(
        cls,
        shape_name,
        conn,
        other_dimension=DEFAULT_OTHER_DIMENSION,
        axis_symm=False,
        registry=None,
    ):
        shape = shape_by_name(shape_name)
        return cls(
            shape,
            hypercube(conn, shape.dimension),
            other_dimension=other_dimension,
            axis_symm=axis_symm,
            registry=registry,
        )

    def with_connectivity(self, conn, shape=None):
        if shape is None:
            shape = self._shape
        topology = Topology(
            conn, shape.dimension, face_patterns=self._topology.face_patterns
        )
        return GCellSet(
            shape,
            topology,
            other_dimension=self._other_dimension,
            axis_symm=self._axis_symm,
            registry=self._registry,
        )

    def __repr__(self):
        return "GCellSet(type=%r, count=%r)" % (self.type(), self.count())

    def topology(self):
        return self._topology

    def shape(self):
        return self._shape

    def type(self):
        return self._shape.name

    def dim(self):
        return self._shape.dimension

    def cell_size(self):
        return self._shape.cell_size

    def id(self):
        return self._id

    def axis_symm(self):
        return self._axis_symm

    def other_dimension(self, conn, N, x):
        if callable(self._other_dimension):
            return self._other_dimension(conn, N, x)
        return self._other_dimension

    def boundary_shape(self):
        return boundary_shape(self._shape)

    def boundary_cell_type(self):
        return self.boundary_shape().name

    def conn(self):
        return self._topology.max_cells()

    def count(self):
        return self._topology.n_cells_by_dimension(self._topology.dimension)

    def nfens(self):
        return self._topology.n_cells_by_dimension(0)

    def vertices(self):
        return self._topology.point_indices()

    def edges(self):
        if self.dim() < 1:
            return np.empty((0, 2), dtype=topology_index_dtype)
        return self._topology.cells_by_dimension(1)

    def triangles(self):
        """Two triangles per dimension-2 cell of the topology.

        Every quadrilateral (a, b, c, d) splits into (a, b, c) and (c, d, a).
        For H8 these are all faces of the set, interior faces included; take
        ``boundary().triangles()`` for the surface only.
        """
        if self.dim() < 2:
            return np.empty((0, 3), dtype=topology_index_dtype)
        quads = self._topology.cells_by_dimension(2)
        return np.concatenate([quads[:, [0, 1, 2]], quads[:, [2, 3, 0]]], axis=1).reshape(
            -1, 3
        )

    def bfun(self, param_coords):
        return self._shape.bfun(param_coords)

    def bfundpar(self, param_coords):
        return self._shape.bfundpar(param_coords)

    def jacobian_matrix(self, nder, x):
        nder = np.asarray(nder, dtype=float)
        x = np.asarray(x, dtype=float)
        if nder.shape != (self.cell_size(), self.dim()):
            raise InvalidInputError(
                "GCellSet:: parametric derivatives must be a %r x %r matrix."
                % (self.cell_size(), self.dim())
            )
        if x.ndim != 2 or x.shape[0] != self.cell_size():
            raise InvalidInputError(
                "GCellSet:: nodal coordinates must be a matrix with %r rows."
                % self.cell_size()
            )
        return x.T @ nder

    def bfundsp(self, nder, x):
        J = self.jacobian_matrix(nder, x)
        if J.shape[0] != J.shape[1]:
            raise DimensionMismatchError(
                "GCellSet:: spatial derivatives need a square jacobian, J has shape %r"
                % (J.shape,)
            )
        return np.asarray(nder, dtype=float) @ np.linalg.inv(J)

    def jacobian(self, conn, N, J, x):
        return natural_jacobian(self, conn, N, J, x)

    def jacobian_curve(self, conn, N, J, x):
        return jacobian_in_dim(self, conn, N, J, x, 1)

    def jacobian_surface(self, conn, N, J, x):
        return jacobian_in_dim(self, conn, N, J, x, 2)

    def jacobian_volume(self, conn, N, J, x):
        return jacobian_in_dim(self, conn, N, J, x, 3)

    def jacobian_in_dim(self, conn, N, J, x, dim):
        return jacobian_in_dim(self, conn, N, J, x, dim)

    def boundary(self):
        shape = self.boundary_shape()
        return GCellSet(
            shape,
            self._topology.boundary(),
            other_dimension=self._other_dimension,
            axis_symm=self._axis_symm,
            registry=self._registry,
        )

    def subset(self, indices):
        indices = np.asarray(indices).ravel()
        if indices.size == 0:
            indices = indices.astype(int)
        if not np.issubdtype(indices.dtype, np.integer):
            raise InvalidInputError("GCellSet:: subset indices must be integers.")
        count = self.count()
        if np.any(indices < 0) or np.any(indices >= count):
            raise IndexOutOfRangeError(
                "GCellSet:: subset indices must lie in [0, %r)." % count
            )
        return self.with_connectivity(self.conn()[indices])

    def clone(self):
        return self.with_connectivity(self.conn().copy())

    def extrude(self, flags, n_nodes):
        """Sweep every cell through the layers whose flag is set.

        Layer ``i`` joins the copy of the nodes offset by ``i * n_nodes`` to
        the copy offset by ``(i + 1) * n_nodes``.
        """
        if self.dim() >= 3:
            raise UnsupportedDimensionError(
                "%s:: cells of dimension %r cannot be extruded." % (self.type(), self.dim())
            )
        conn = self.conn()
        layers = []
        for i, flag in enumerate(flags):
            if not flag:
                continue
            lower = conn + i * n_nodes
            upper = conn + (i + 1) * n_nodes
            if self.dim() == 1:
                layers.append(np.column_stack([lower, upper[:, ::-1]]))
            else:
                layers.append(np.column_stack([lower, upper]))

        shape = shape_by_dimension(self.dim() + 1)
        if len(layers) == 0:
            return self.with_connectivity([], shape=shape)
        return self.with_connectivity(np.concatenate(layers), shape=shape)

    def measure(self, x, dim=None, degree=2):
        """Length, area or volume of the cell set for the given node coordinates."""
        x = np.asarray(x, dtype=float)
        if dim is None:
            dim = self.dim()
        points, weights = gauss_rule(self.dim(), degree)
        total = 0.0
        for conn in self.conn():
            xe = x[conn]
            for point, weight in zip(points, weights):
                N = self.bfun(point)
                J = self.jacobian_matrix(self.bfundpar(point), xe)
                total += self.jacobian_in_dim(conn, N, J, xe, dim) * weight
        return total


def P1(conn, other_dimension=DEFAULT_OTHER_DIMENSION, axis_symm=False, registry=None):
    return GCellSet.from_connectivity(
        "P1", conn, other_dimension=other_dimension, axis_symm=axis_symm, registry=registry
    )


def L2(conn, other_dimension=DEFAULT_OTHER_DIMENSION, axis_symm=False, registry=None):
    return GCellSet.from_connectivity(
        "L2", conn, other_dimension=other_dimension, axis_symm=axis_symm, registry=registry
    )


def Q4(conn, other_dimension=DEFAULT_OTHER_DIMENSION, axis_symm=False, registry=None):
    return GCellSet.from_connectivity(
        "Q4", conn, other_dimension=other_dimension, axis_symm=axis_symm, registry=registry
    )


def H8(conn, other_dimension=DEFAULT_OTHER_DIMENSION, axis_symm=False, registry=None):
    return GCellSet.from_connectivity(
        "H8", conn, other_dimension=other_dimension, axis_symm=axis_symm, registry=registry
    )

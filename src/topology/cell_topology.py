import time

import networkx as nx
import numpy as np

from errors import DimensionMismatchError, InvalidTopologyError, UnsupportedDimensionError
from globals import topology_index_dtype

# Local vertex tuples of every sub-cell, by cell dimension and sub-cell dimension.
# Lines run from vertex 0 to 1, quadrilaterals are counter-clockwise and hexahedra
# carry the bottom face (0-3) below the top face (4-7). Faces are listed with
# outward orientation.
HYPERCUBE_FACE_PATTERNS = {
    0: {
        0: ((0,),),
    },
    1: {
        0: ((0,), (1,)),
        1: ((0, 1),),
    },
    2: {
        0: ((0,), (1,), (2,), (3,)),
        1: ((0, 1), (1, 2), (2, 3), (3, 0)),
        2: ((0, 1, 2, 3),),
    },
    3: {
        0: ((0,), (1,), (2,), (3,), (4,), (5,), (6,), (7,)),
        1: (
            (0, 1),
            (1, 2),
            (2, 3),
            (3, 0),
            (4, 5),
            (5, 6),
            (6, 7),
            (7, 4),
            (0, 4),
            (1, 5),
            (2, 6),
            (3, 7),
        ),
        2: (
            (0, 3, 2, 1),
            (0, 1, 5, 4),
            (1, 2, 6, 5),
            (2, 3, 7, 6),
            (3, 0, 4, 7),
            (4, 5, 6, 7),
        ),
        3: ((0, 1, 2, 3, 4, 5, 6, 7),),
    },
}


def _read_only(array):
    array.setflags(write=False)
    return array


def _validate_connectivity(connectivity, cell_size):
    try:
        rows = [tuple(row) for row in connectivity]
    except TypeError:
        raise InvalidTopologyError(
            "Topology:: connectivity must be a sequence of index rows."
        )

    if len(rows) == 0:
        return np.empty((0, cell_size), dtype=topology_index_dtype)

    row_sizes = {len(row) for row in rows}
    if len(row_sizes) != 1:
        raise InvalidTopologyError(
            "Topology:: connectivity rows have inconsistent lengths: %r"
            % sorted(row_sizes)
        )
    row_size = row_sizes.pop()
    if row_size != cell_size:
        raise InvalidTopologyError(
            "Topology:: cells of size %r expected, rows of size %r given."
            % (cell_size, row_size)
        )

    cells = np.array(rows)
    if not np.issubdtype(cells.dtype, np.integer):
        raise InvalidTopologyError("Topology:: connectivity must contain integers.")
    if np.any(cells < 0):
        raise InvalidTopologyError("Topology:: connectivity contains negative indices.")
    return cells.astype(topology_index_dtype)


def _enumerate_sub_cells(top_cells, pattern):
    # two sub-cells are the same entity iff their point sets are equal
    pattern = np.array(pattern, dtype=int)
    positions = {}
    sub_cells = []
    incidence = []
    for i, cell in enumerate(top_cells):
        for sub_cell in cell[pattern]:
            key = tuple(sorted(sub_cell.tolist()))
            j = positions.get(key, None)
            if j is None:
                j = len(sub_cells)
                positions[key] = j
                sub_cells.append(sub_cell)
            incidence.append((i, j))
    sub_cells = np.array(sub_cells, dtype=topology_index_dtype).reshape(
        -1, pattern.shape[1]
    )
    return sub_cells, incidence


class Topology:
    """Incidence structure derived from a top-dimension connectivity list.

    Cells of the top dimension are kept exactly as given. Cells of every
    lower dimension are enumerated from the face patterns of the shape and
    de-duplicated by point set, first seen first.
    """

    def __init__(
        self, connectivity, dimension, face_patterns=None, measure_time_q=False
    ):
        if face_patterns is None:
            face_patterns = HYPERCUBE_FACE_PATTERNS
        if dimension not in face_patterns:
            raise UnsupportedDimensionError(
                "Topology:: no face patterns available for dimension %r" % dimension
            )

        if measure_time_q:
            st = time.time()

        self._dimension = dimension
        self._face_patterns = face_patterns
        self._cells = {}
        self._entity_maps = {}

        top_cells = _validate_connectivity(
            connectivity, self.cell_size_by_dimension(dimension)
        )
        self._cells[dimension] = _read_only(top_cells)
        self._build_entity_maps()

        if measure_time_q:
            et = time.time()
            elapsed_time = et - st
            print("Topology:: Number of top cells:", len(top_cells))
            print("Topology:: Derivation time:", elapsed_time, "seconds")

    def _build_entity_maps(self):
        dim = self._dimension
        top_cells = self._cells[dim]
        for d in range(dim + 1):
            if d == dim:
                incidence = [(i, i) for i in range(len(top_cells))]
            else:
                sub_cells, incidence = _enumerate_sub_cells(
                    top_cells, self._face_patterns[dim][d]
                )
                self._cells[d] = _read_only(sub_cells)
            graph = nx.DiGraph()
            graph.add_nodes_from((dim, i) for i in range(len(top_cells)))
            graph.add_nodes_from((d, j) for j in range(len(self._cells[d])))
            graph.add_edges_from(((dim, i), (d, j)) for i, j in incidence)
            self._entity_maps[d] = graph

    def _check_dimension(self, dimension):
        if dimension < 0 or dimension > self._dimension:
            raise UnsupportedDimensionError(
                "Topology:: max dimension available is %r" % self._dimension
            )

    @property
    def dimension(self):
        return self._dimension

    @property
    def face_patterns(self):
        return self._face_patterns

    def cells_by_dimension(self, dimension):
        self._check_dimension(dimension)
        return self._cells[dimension]

    def n_cells_by_dimension(self, dimension):
        return self.cells_by_dimension(dimension).shape[0]

    def cell_size_by_dimension(self, dimension):
        if dimension < 0 or dimension > self._dimension:
            raise UnsupportedDimensionError(
                "Topology:: max dimension available is %r" % self._dimension
            )
        return len(self._face_patterns[self._dimension][dimension][0])

    def max_cells(self):
        return self._cells[self._dimension]

    def point_indices(self):
        return self._cells[0].ravel()

    def entity_map_by_dimension(self, dimension):
        self._check_dimension(dimension)
        return self._entity_maps[dimension]

    def entity_map_by_codimension(self, codimension):
        return self.entity_map_by_dimension(self._dimension - codimension)

    def boundary(self):
        """Topology of the faces that belong to exactly one top cell."""
        dim = self._dimension
        if dim == 0:
            raise UnsupportedDimensionError(
                "Topology:: a topology of dimension 0 has no boundary."
            )
        entity_map = self._entity_maps[dim - 1]
        faces = self._cells[dim - 1]
        boundary_ids = [
            j for j in range(faces.shape[0]) if entity_map.in_degree((dim - 1, j)) == 1
        ]
        return Topology(
            faces[np.array(boundary_ids, dtype=int)],
            dim - 1,
            face_patterns=self._face_patterns,
        )

    def combine_with(self, other):
        if other.dimension != self._dimension:
            raise DimensionMismatchError(
                "Topology:: cannot combine topologies of dimension %r and %r"
                % (self._dimension, other.dimension)
            )
        present = {tuple(sorted(cell.tolist())) for cell in self.max_cells()}
        extra = [
            cell
            for cell in other.max_cells()
            if tuple(sorted(cell.tolist())) not in present
        ]
        size = self.cell_size_by_dimension(self._dimension)
        cells = np.concatenate(
            [
                self.max_cells(),
                np.array(extra, dtype=topology_index_dtype).reshape(-1, size),
            ]
        )
        return Topology(cells, self._dimension, face_patterns=self._face_patterns)


def hypercube(connectivity, dimension, measure_time_q=False):
    return Topology(connectivity, dimension, measure_time_q=measure_time_q)

import time

import numpy as np

from errors import InvalidInputError
from geometry.gcellset import GCellSet
from geometry.node_set import NodeSet


class Mesh:
    """A node set paired with the geometry cell set connecting its nodes."""

    def __init__(self, node_set=None, gcells=None, xyz=None):
        if xyz is not None:
            node_set = NodeSet(xyz)
        if node_set is not None and not isinstance(node_set, NodeSet):
            raise InvalidInputError("Mesh:: node_set must be a NodeSet.")
        if gcells is not None and not isinstance(gcells, GCellSet):
            raise InvalidInputError("Mesh:: gcells must be a GCellSet.")
        self.node_set = node_set
        self.gcells = gcells

    def __repr__(self):
        return "Mesh(nfens=%r, gcells=%r)" % (self.node_set.count(), self.gcells)

    @property
    def dimension(self):
        return self.gcells.dim()

    @property
    def points(self):
        return self.node_set.xyz()

    def map(self, mapping):
        return Mesh(node_set=self.node_set.map(mapping), gcells=self.gcells.clone())

    def extrude(self, h_list, flags):
        if len(h_list) != len(flags):
            raise InvalidInputError(
                "Mesh:: h_list and flags must be sequences of the same length."
            )
        node_set = self.node_set.extrude(h_list)
        gcells = self.gcells.extrude(flags, self.node_set.count())
        return Mesh(node_set=node_set, gcells=gcells)

    def boundary(self):
        return Mesh(node_set=self.node_set, gcells=self.gcells.boundary())

    def measure(self, dim=None, degree=2):
        return self.gcells.measure(self.points, dim=dim, degree=degree)

    def subdivide(self, measure_time_q=False):
        if self.gcells.type() == "Q4":
            return self._subdivide_q4(measure_time_q)
        return self

    def _subdivide_q4(self, measure_time_q=False):
        if measure_time_q:
            st = time.time()

        xyz = self.points
        n_nodes = xyz.shape[0]
        topology = self.gcells.topology()
        quads = topology.cells_by_dimension(2)
        edges = topology.cells_by_dimension(1)

        quad_centers = np.array([np.mean(xyz[quad], axis=0) for quad in quads])
        edge_centers = np.array([np.mean(xyz[edge], axis=0) for edge in edges])
        quad_center_ids = n_nodes + np.arange(len(quads))
        edge_ids = {
            tuple(sorted(edge.tolist())): n_nodes + len(quads) + i
            for i, edge in enumerate(edges)
        }

        def mid(n_a, n_b):
            return edge_ids[tuple(sorted((int(n_a), int(n_b))))]

        new_conn = []
        for quad, n_c in zip(quads, quad_center_ids):
            n1, n2, n3, n4 = quad
            n12 = mid(n1, n2)
            n23 = mid(n2, n3)
            n34 = mid(n3, n4)
            n41 = mid(n4, n1)
            new_conn.append([n1, n12, n_c, n41])
            new_conn.append([n41, n_c, n34, n4])
            new_conn.append([n12, n2, n23, n_c])
            new_conn.append([n_c, n23, n3, n34])

        added_points = np.concatenate(
            [
                quad_centers.reshape(-1, xyz.shape[1]),
                edge_centers.reshape(-1, xyz.shape[1]),
            ]
        )
        node_set = self.node_set.combine_with(NodeSet(added_points))
        gcells = self.gcells.with_connectivity(
            np.array(new_conn, dtype=int).reshape(-1, 4)
        )

        if measure_time_q:
            et = time.time()
            elapsed_time = et - st
            print("Mesh:: Number of subdivided cells:", gcells.count())
            print("Mesh:: Subdivision time:", elapsed_time, "seconds")
        return Mesh(node_set=node_set, gcells=gcells)

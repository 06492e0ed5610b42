import numpy as np

from errors import DimensionMismatchError, IndexOutOfRangeError, InvalidInputError
from globals import box_select_default_inflate


class NodeSet:
    """Coordinates of the finite element nodes, one row per node."""

    def __init__(self, xyz):
        xyz = np.array(xyz, dtype=float)
        if xyz.ndim != 2:
            raise InvalidInputError("NodeSet:: xyz must be a 2D array of coordinates.")
        self._xyz = xyz

    def __iter__(self):
        return iter(self.xyz())

    def __len__(self):
        return self.count()

    def count(self):
        return self._xyz.shape[0]

    @property
    def dimension(self):
        return self._xyz.shape[1]

    def _check_index(self, index):
        if index < 0 or index >= self.count():
            raise IndexOutOfRangeError(
                "NodeSet:: node index %r out of range [0, %r)." % (index, self.count())
            )

    def xyz(self):
        return self._xyz.copy()

    def xyz_at(self, index):
        self._check_index(index)
        return self._xyz[index].copy()

    def xyz3(self):
        xyz3 = np.zeros((self.count(), 3))
        n_comp = min(self.dimension, 3)
        xyz3[:, :n_comp] = self._xyz[:, :n_comp]
        return xyz3

    def xyz3_at(self, index):
        self._check_index(index)
        return self.xyz3()[index]

    def box_select(self, bounds, inflate=box_select_default_inflate):
        """Indices of the nodes inside ``[x_min, x_max, y_min, y_max, ...]``."""
        bounds = np.asarray(bounds, dtype=float).reshape(-1, 2)
        if bounds.shape[0] > self.dimension:
            raise DimensionMismatchError(
                "NodeSet:: box of dimension %r for nodes of dimension %r."
                % (bounds.shape[0], self.dimension)
            )
        lower = bounds[:, 0] - inflate
        upper = bounds[:, 1] + inflate
        coords = self._xyz[:, : bounds.shape[0]]
        inside = np.all((coords >= lower) & (coords <= upper), axis=1)
        return np.flatnonzero(inside)

    def embed(self, dimension):
        if dimension < self.dimension:
            raise DimensionMismatchError(
                "NodeSet:: cannot embed nodes of dimension %r into dimension %r."
                % (self.dimension, dimension)
            )
        xyz = np.zeros((self.count(), dimension))
        xyz[:, : self.dimension] = self._xyz
        return NodeSet(xyz)

    def map(self, fn):
        return NodeSet([fn(xyz, i) for i, xyz in enumerate(self.xyz())])

    def extrude(self, h_list):
        """Stack copies of the nodes along a new last coordinate.

        Layer ``k`` sits at the sum of the first ``k`` heights and holds
        nodes ``k * count() .. (k + 1) * count() - 1``.
        """
        heights = np.concatenate([[0.0], np.cumsum(np.asarray(h_list, dtype=float))])
        layers = [
            np.column_stack([self._xyz, np.full(self.count(), height)])
            for height in heights
        ]
        return NodeSet(np.concatenate(layers))

    def combine_with(self, other):
        if other.dimension != self.dimension:
            raise DimensionMismatchError(
                "NodeSet:: cannot combine nodes of dimension %r and %r."
                % (self.dimension, other.dimension)
            )
        return NodeSet(np.concatenate([self._xyz, other.xyz()]))

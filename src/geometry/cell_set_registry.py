import itertools

from errors import InvalidInputError


class CellSetRegistry:
    """Hands out monotonic identifiers to the cell sets it owns."""

    def __init__(self):
        self._counter = itertools.count()
        self._cell_sets = {}

    def register(self, cell_set):
        cell_set_id = next(self._counter)
        self._cell_sets[cell_set_id] = cell_set
        return cell_set_id

    def lookup(self, cell_set_id):
        cell_set = self._cell_sets.get(cell_set_id, None)
        if cell_set is None:
            raise InvalidInputError(
                "CellSetRegistry:: no cell set registered with id %r" % cell_set_id
            )
        return cell_set

    def __contains__(self, cell_set_id):
        return cell_set_id in self._cell_sets

    def __len__(self):
        return len(self._cell_sets)

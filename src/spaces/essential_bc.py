import numpy as np

from errors import InvalidInputError


def as_list(item):
    if np.ndim(item) == 0:
        return [item]
    return list(np.ravel(item))


class EssentialBC:
    """Dirichlet data on a group of nodes and directions.

    ``values`` is a single number for all directions, one number per
    direction, or a callable ``(xyz, direction) -> value`` evaluated on the
    current field value of each node.
    """

    def __init__(self, node_ids, directions, values=0.0):
        self.node_ids = [int(i) for i in as_list(node_ids)]
        self.directions = [int(d) for d in as_list(directions)]
        if callable(values):
            self.values = values
        else:
            values = as_list(values)
            if len(values) == 1:
                values = values * len(self.directions)
            if len(values) != len(self.directions):
                raise InvalidInputError(
                    "EssentialBC:: %r values given for %r directions."
                    % (len(values), len(self.directions))
                )
            self.values = [float(v) for v in values]

    def value(self, xyz, k):
        if callable(self.values):
            return self.values(xyz, self.directions[k])
        return self.values[k]

    def apply_to_field(self, field):
        for node_id in self.node_ids:
            xyz = field.at(node_id)
            for k, direction in enumerate(self.directions):
                field.set_prescribed_value(node_id, direction, self.value(xyz, k))
        return field

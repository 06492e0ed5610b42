import numpy as np

from errors import InvalidInputError
from globals import INVALID_EQUATION_NUMBER
from spaces.essential_bc import as_list


class ElementLoad:
    def __init__(self, value, eqnum):
        self.value = value
        self.eqnum = eqnum

    def __repr__(self):
        return "ElementLoad(value=%r, eqnum=%r)" % (self.value, self.eqnum)


class NodalLoad:
    """Concentrated loads: one magnitude per direction, applied at every node."""

    def __init__(self, node_ids, directions, magnitudes):
        self.node_ids = [int(i) for i in as_list(node_ids)]
        self.directions = [int(d) for d in as_list(directions)]
        self.magnitudes = [float(m) for m in as_list(magnitudes)]
        if len(self.magnitudes) != len(self.directions):
            raise InvalidInputError(
                "NodalLoad:: %r magnitudes given for %r directions."
                % (len(self.magnitudes), len(self.directions))
            )

    def loads(self, field):
        loads = []
        for node_id in self.node_ids:
            for direction, magnitude in zip(self.directions, self.magnitudes):
                loads.append(ElementLoad(magnitude, field.eqnum(node_id, direction)))
        return loads

    def load_vector(self, field):
        # prescribed components have no equation
        vector = np.zeros(field.neqns())
        for load in self.loads(field):
            if load.eqnum != INVALID_EQUATION_NUMBER:
                vector[load.eqnum] += load.value
        return vector

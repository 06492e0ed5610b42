import numbers
import time

import numpy as np

from errors import (
    DimensionMismatchError,
    IndexOutOfRangeError,
    InvalidInputError,
    StaleNumberingError,
)
from geometry.node_set import NodeSet
from globals import INVALID_EQUATION_NUMBER


class Field:
    """Nodal vector field with Dirichlet data and equation numbering.

    Values are one vector of length ``dim()`` per node. Components marked as
    prescribed keep their prescribed value and are left out of the numbering;
    every free component receives a dense equation number, node by node and
    component by component.

    Numbering has two phases. The field starts unnumbered and gets numbered
    by ``number_equations()``, or on the first query that needs numbers.
    Prescribing a value afterwards makes the numbering stale and queries fail
    until ``number_equations()`` is called again.
    """

    UNNUMBERED = "unnumbered"
    NUMBERED = "numbered"
    STALE = "stale"

    def __init__(self, values=None, nfens=None, dim=None, node_set=None, ebcs=None):
        if values is not None:
            values = np.array(values, dtype=float)
            if values.ndim != 2:
                raise InvalidInputError("Field:: values must be a 2D array.")
        elif node_set is not None:
            if not isinstance(node_set, NodeSet):
                raise InvalidInputError("Field:: node_set must be a NodeSet.")
            values = node_set.xyz()
        elif nfens is not None and dim is not None:
            if not isinstance(nfens, numbers.Integral) or not isinstance(
                dim, numbers.Integral
            ):
                raise InvalidInputError("Field:: nfens and dim must be integers.")
            if nfens < 0 or dim < 0:
                raise InvalidInputError("Field:: nfens and dim must be non-negative.")
            values = np.zeros((nfens, dim))
        else:
            raise InvalidInputError(
                "Field:: provide values, a node_set, or both nfens and dim."
            )

        self._values = values
        self._prescribed = np.zeros(values.shape, dtype=bool)
        self._prescribed_values = np.zeros(values.shape)
        self._eqnums = None
        self._neqns = -1
        self._state = Field.UNNUMBERED

        if ebcs is not None:
            for ebc in ebcs:
                ebc.apply_to_field(self)

    def __repr__(self):
        return "Field(nfens=%r, dim=%r, state=%r)" % (
            self.nfens(),
            self.dim(),
            self._state,
        )

    def nfens(self):
        return self._values.shape[0]

    def dim(self):
        return self._values.shape[1]

    def values(self):
        return self._values.copy()

    def _check_node(self, index):
        if index < 0 or index >= self.nfens():
            raise IndexOutOfRangeError(
                "Field:: node index %r out of range [0, %r)." % (index, self.nfens())
            )

    def _check_direction(self, direction):
        if direction < 0 or direction >= self.dim():
            raise IndexOutOfRangeError(
                "Field:: direction %r out of range [0, %r)." % (direction, self.dim())
            )

    def at(self, index):
        self._check_node(index)
        return self._values[index].copy()

    def map(self, fn):
        """New field of ``fn(vector, index)`` per node, without boundary conditions."""
        if self.nfens() == 0:
            return Field(nfens=0, dim=self.dim())
        return Field(values=[fn(vec, i) for i, vec in enumerate(self.values())])

    def clone(self):
        new_field = Field(values=self._values)
        new_field._prescribed = self._prescribed.copy()
        new_field._prescribed_values = self._prescribed_values.copy()
        new_field._neqns = self._neqns
        new_field._state = self._state
        if self._eqnums is not None:
            new_field._eqnums = self._eqnums.copy()
        return new_field

    def _bop(self, other, bop_fn, bop_name):
        if isinstance(other, Field):
            if other.nfens() != self.nfens() or other.dim() != self.dim():
                raise DimensionMismatchError(
                    "Field::%s: other field is %r x %r, expected %r x %r."
                    % (bop_name, other.nfens(), other.dim(), self.nfens(), self.dim())
                )
            operand = other._values
        elif isinstance(other, numbers.Number):
            operand = float(other)
        else:
            try:
                operand = np.asarray(other, dtype=float)
            except (TypeError, ValueError):
                operand = None
            if operand is None or operand.shape != (self.dim(),):
                raise InvalidInputError(
                    "Field::%s: other must be a number, a field of the same shape"
                    " or a vector of length %r." % (bop_name, self.dim())
                )
        values = np.broadcast_to(
            np.asarray(bop_fn(self._values, operand), dtype=float), self._values.shape
        )
        return Field(values=values)

    def bop(self, other, bop_fn):
        """Component-wise ``bop_fn(a, b)``; the result has no boundary conditions.

        ``bop_fn`` is called once per component with two numbers: the
        component of this field and the number, the matching component of
        the other field or the matching entry of the vector.
        """
        component_fn = np.vectorize(bop_fn, otypes=[float])
        return self._bop(other, component_fn, getattr(bop_fn, "__name__", "bop"))

    def add(self, other):
        return self._bop(other, np.add, "add")

    def sub(self, other):
        return self._bop(other, np.subtract, "sub")

    def mul(self, other):
        return self._bop(other, np.multiply, "mul")

    scale = mul

    def div(self, other):
        return self._bop(other, np.divide, "div")

    __add__ = add
    __sub__ = sub
    __mul__ = mul
    __truediv__ = div

    def is_prescribed(self, index, direction):
        self._check_node(index)
        self._check_direction(direction)
        return bool(self._prescribed[index, direction])

    def prescribed_value(self, index, direction):
        if self.is_prescribed(index, direction):
            return self._prescribed_values[index, direction]
        return 0.0

    def set_prescribed_value(self, index, direction, value):
        self._check_node(index)
        self._check_direction(direction)
        self._prescribed[index, direction] = True
        self._prescribed_values[index, direction] = value
        self._values[index, direction] = value
        if self._state == Field.NUMBERED:
            self._state = Field.STALE

    def is_numbered(self):
        return self._state == Field.NUMBERED

    def number_equations(self, measure_time_q=False):
        if measure_time_q:
            st = time.time()

        eqnums = np.full(self._values.shape, INVALID_EQUATION_NUMBER, dtype=int)
        free = ~self._prescribed
        # boolean assignment walks the table row by row
        eqnums[free] = np.arange(np.count_nonzero(free))
        self._eqnums = eqnums
        self._neqns = int(np.count_nonzero(free))
        self._state = Field.NUMBERED

        if measure_time_q:
            et = time.time()
            elapsed_time = et - st
            print("Field:: Number of equations:", self._neqns)
            print("Field:: Equation numbering time:", elapsed_time, "seconds")
        return self._neqns

    def _numbered_eqnums(self):
        if self._state == Field.STALE:
            raise StaleNumberingError(
                "Field:: prescribed values changed after numbering, call"
                " number_equations() first."
            )
        if self._state == Field.UNNUMBERED:
            self.number_equations()
        return self._eqnums

    def neqns(self):
        self._numbered_eqnums()
        return self._neqns

    def eqnums(self):
        return self._numbered_eqnums().copy()

    def eqnum(self, index, direction):
        eqnums = self._numbered_eqnums()
        self._check_node(index)
        self._check_direction(direction)
        return int(eqnums[index, direction])

    def _node_indices(self, conn):
        conn = np.asarray(conn, dtype=int).ravel()
        if np.any(conn < 0) or np.any(conn >= self.nfens()):
            raise IndexOutOfRangeError(
                "Field:: connectivity refers to nodes outside [0, %r)." % self.nfens()
            )
        return conn

    def gather_eqnums_vector(self, conn):
        eqnums = self._numbered_eqnums()
        return eqnums[self._node_indices(conn)].ravel()

    def gather_values_matrix(self, conn):
        return self._values[self._node_indices(conn)].copy()

    def gather_prescribed_values(self, conn):
        conn = self._node_indices(conn)
        prescribed_values = np.where(
            self._prescribed[conn], self._prescribed_values[conn], 0.0
        )
        return prescribed_values.ravel()

    def scatter_system_vector(self, vec):
        """Write the free components from a solution vector of length ``neqns()``."""
        eqnums = self._numbered_eqnums()
        vec = np.asarray(vec, dtype=float)
        if vec.ndim != 1 or vec.shape[0] != self._neqns:
            raise DimensionMismatchError(
                "Field:: system vector must be a vector of dimension %r" % self._neqns
            )
        free = eqnums != INVALID_EQUATION_NUMBER
        self._values[free] = vec[eqnums[free]]
        return self

from basix import CellType

from errors import InvalidInputError, UnsupportedDimensionError


def type_by_dimension(dimension):
    element_types = {
        0: CellType.point,
        1: CellType.interval,
        2: CellType.quadrilateral,
        3: CellType.hexahedron,
    }
    if dimension not in element_types:
        raise UnsupportedDimensionError(
            "type_by_dimension:: no reference cell of dimension %r" % dimension
        )
    return element_types[dimension]


def type_by_shape_name(name):
    # reference cell of the linear shape with that name
    element_types = {
        "P1": CellType.point,
        "L2": CellType.interval,
        "Q4": CellType.quadrilateral,
        "H8": CellType.hexahedron,
    }
    if name not in element_types:
        raise InvalidInputError("type_by_shape_name:: unknown shape %r" % name)
    return element_types[name]

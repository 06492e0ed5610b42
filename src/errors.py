class InvalidInputError(ValueError):
    """Malformed option records or wrongly shaped vectors and matrices."""


class InvalidTopologyError(InvalidInputError):
    """Connectivity that cannot describe a topology."""


class IndexOutOfRangeError(IndexError):
    """Node, element or direction index outside the valid bounds."""


class DimensionMismatchError(ValueError):
    """Dimensions or sizes of two collaborating objects disagree."""


class UnsupportedDimensionError(ValueError):
    """A manifold type was asked for a measure it does not define."""


class StaleNumberingError(RuntimeError):
    """Equation numbers requested after the prescribed state changed."""

import numpy as np

# geometry
jacobian_negative_tol = 0.0
box_select_default_inflate = 0.0

# cell sets
DEFAULT_OTHER_DIMENSION = 1.0

# topological operations
topology_index_dtype = np.int64

# equation numbering
INVALID_EQUATION_NUMBER = -1

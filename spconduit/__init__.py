"""Sparse Conduit - a PyTorch-native sparse linear algebra engine in the GraphBLAS style."""

__version__ = "0.1.0"

# Operators, monoids and semirings
from .algebra import (
    ABS,
    ADDITIVE_INVERSE,
    ARITHMETIC,
    DIV,
    EQUAL,
    FIRST,
    GREATER_EQUAL,
    GREATER_THAN,
    IDENTITY,
    LESS_EQUAL,
    LESS_THAN,
    LOGICAL,
    LOGICAL_AND,
    LOGICAL_AND_MONOID,
    LOGICAL_NOT,
    LOGICAL_OR,
    LOGICAL_OR_MONOID,
    LOGICAL_XOR,
    MAX,
    MAX_MONOID,
    MAX_PLUS,
    MAX_SELECT2ND,
    MIN,
    MIN_MONOID,
    MIN_PLUS,
    MIN_SELECT2ND,
    MINUS,
    MULTIPLICATIVE_INVERSE,
    NOT_EQUAL,
    PLUS,
    PLUS_MONOID,
    SECOND,
    TIMES,
    TIMES_MONOID,
    BinaryOp,
    Monoid,
    Semiring,
    UnaryOp,
    select_in_range,
)

# Containers and masks
from .containers import (
    MaskView,
    Matrix,
    SparseStorage,
    TransposeView,
    TupleView,
    Vector,
    complement,
    structure,
)
from .core import Device, default_device, device

# Diagnostics
from .diagnostics import (
    assert_consistent,
    count_present,
    debug_context,
    is_debug_enabled,
    is_nonnegative,
    set_debug_enabled,
)

# Errors
from .errors import (
    DimensionError,
    ErrorKind,
    GraphBLASError,
    IndexOutOfBoundsError,
    InvalidValueError,
    NoValueError,
)

# Shortest paths
from .graphs import (
    adjacency_matrix,
    batch_sssp,
    distances_to_dict,
    filtered_sssp,
    node_index_map,
    source_matrix,
    source_vector,
    split_by_weight,
    sssp,
    sssp_delta_step,
)

# Matrix utilities
from .matrix_utils import diag, normalize_cols, normalize_rows, scaled_identity, split

# Bulk operations
from .ops import apply, ewise_add, ewise_mult, mxm, mxv, reduce, reduce_to_scalar, vxm

__all__ = [
    # Version
    "__version__",
    # Core
    "Device",
    "device",
    "default_device",
    # Errors
    "ErrorKind",
    "GraphBLASError",
    "DimensionError",
    "IndexOutOfBoundsError",
    "NoValueError",
    "InvalidValueError",
    # Algebra
    "UnaryOp",
    "BinaryOp",
    "Monoid",
    "Semiring",
    "IDENTITY",
    "ABS",
    "ADDITIVE_INVERSE",
    "MULTIPLICATIVE_INVERSE",
    "LOGICAL_NOT",
    "select_in_range",
    "PLUS",
    "MINUS",
    "TIMES",
    "DIV",
    "MIN",
    "MAX",
    "FIRST",
    "SECOND",
    "LOGICAL_OR",
    "LOGICAL_AND",
    "LOGICAL_XOR",
    "EQUAL",
    "NOT_EQUAL",
    "LESS_THAN",
    "LESS_EQUAL",
    "GREATER_THAN",
    "GREATER_EQUAL",
    "PLUS_MONOID",
    "TIMES_MONOID",
    "MIN_MONOID",
    "MAX_MONOID",
    "LOGICAL_OR_MONOID",
    "LOGICAL_AND_MONOID",
    "ARITHMETIC",
    "MIN_PLUS",
    "MAX_PLUS",
    "MIN_SELECT2ND",
    "MAX_SELECT2ND",
    "LOGICAL",
    # Containers
    "SparseStorage",
    "TupleView",
    "Vector",
    "Matrix",
    "TransposeView",
    "MaskView",
    "structure",
    "complement",
    # Operations
    "apply",
    "ewise_add",
    "ewise_mult",
    "reduce",
    "reduce_to_scalar",
    "vxm",
    "mxv",
    "mxm",
    # Matrix utilities
    "diag",
    "scaled_identity",
    "split",
    "normalize_rows",
    "normalize_cols",
    # Diagnostics
    "count_present",
    "assert_consistent",
    "is_nonnegative",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    # Shortest paths
    "sssp",
    "batch_sssp",
    "filtered_sssp",
    "sssp_delta_step",
    "split_by_weight",
    "node_index_map",
    "adjacency_matrix",
    "source_vector",
    "source_matrix",
    "distances_to_dict",
]

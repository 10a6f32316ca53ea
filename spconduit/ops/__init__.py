"""
Bulk operations over sparse containers.

Every operation takes ``(out, mask, accum, ...)`` and a trailing
``replace`` flag, computes its result from a snapshot of the inputs and
publishes it into ``out`` under the mask/accumulate/replace contract.
"""

from .elementwise import apply, ewise_add, ewise_mult
from .products import mxm, mxv, vxm
from .reduction import reduce, reduce_to_scalar

__all__ = [
    "apply",
    "ewise_add",
    "ewise_mult",
    "reduce",
    "reduce_to_scalar",
    "vxm",
    "mxv",
    "mxm",
]

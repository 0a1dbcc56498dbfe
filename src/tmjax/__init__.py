"""
tmjax is a transverse Mercator (UTM) projection library implemented in JAX.
"""

from .constants import (
    DEG2RAD,
    RAD2DEG,
    WGS84_a,
    WGS84_f,
    UTM_K0,
)

from .config import set_dtype, get_dtype
from .errors import ConfigurationError, NumericalNonConvergenceError

from .projection import (
    TransverseMercator,
    ForwardResult,
    ReverseResult,
    EllipsoidParams,
    utm,
)

__all__ = [
    # Constants
    "DEG2RAD",
    "RAD2DEG",
    "WGS84_a",
    "WGS84_f",
    "UTM_K0",
    # Config
    "set_dtype",
    "get_dtype",
    # Errors
    "ConfigurationError",
    "NumericalNonConvergenceError",
    # Projection
    "TransverseMercator",
    "ForwardResult",
    "ReverseResult",
    "EllipsoidParams",
    "utm",
]

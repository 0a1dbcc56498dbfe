"""Shared utility functions for tmjax.

Provides degree-based trigonometry, exact angle reduction and host-side
polynomial evaluation.
"""

from tmjax.utils._angle import (
    ang_diff,
    ang_normalize,
    atan2d,
    atand,
    lat_fix,
    sincosd,
)
from tmjax.utils._polynomial import polyval

__all__ = [
    "ang_diff",
    "ang_normalize",
    "atan2d",
    "atand",
    "lat_fix",
    "polyval",
    "sincosd",
]

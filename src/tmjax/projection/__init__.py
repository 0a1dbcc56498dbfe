"""Transverse Mercator projections.

This sub-module converts between geodetic coordinates ``(lat, lon)`` on an
ellipsoid of revolution and transverse Mercator grid coordinates
``(x, y)``, together with the meridian convergence and point scale:

- **TransverseMercator**: series projection (Krueger's series to order
  4-8 in the third flattening), or delegation to an exact implementation
- **utm**: shared WGS84 instance with the UTM central scale
- **Building blocks**: coefficient tables, the conformal-latitude map,
  Clenshaw summation and the forward / reverse pipelines
"""

from ._coefficients import (
    DEFAULT_SERIES_ORDER,
    SUPPORTED_SERIES_ORDERS,
    SeriesCoefficients,
    build_series_coefficients,
)
from ._complex import ComplexPair
from ._types import (
    EllipsoidParams,
    ForwardResult,
    Projection,
    ReverseResult,
)
from .clenshaw import ClenshawSums, clenshaw_sin_series
from .conformal import eatanhe, tau_from_taup, taup_from_tau
from .forward import forward_series
from .reverse import reverse_series
from .transverse_mercator import TransverseMercator, utm

__all__ = [
    "DEFAULT_SERIES_ORDER",
    "SUPPORTED_SERIES_ORDERS",
    "SeriesCoefficients",
    "build_series_coefficients",
    "ComplexPair",
    "EllipsoidParams",
    "ForwardResult",
    "Projection",
    "ReverseResult",
    "ClenshawSums",
    "clenshaw_sin_series",
    "eatanhe",
    "tau_from_taup",
    "taup_from_tau",
    "forward_series",
    "reverse_series",
    "TransverseMercator",
    "utm",
]

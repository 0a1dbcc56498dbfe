"""Type definitions for transverse Mercator projections.

- :class:`EllipsoidParams`: the reference ellipsoid and its derived
  constants, computed once per projection.
- :class:`ForwardResult` / :class:`ReverseResult`: outputs of the forward
  and reverse transforms.
- :class:`Projection`: the ``forward`` / ``reverse`` capability shared by
  the series projection and any exact (elliptic-integral) backend.

The result types are :class:`~typing.NamedTuple` instances, which JAX
treats as pytrees, so they pass through ``jax.jit`` and ``jax.vmap``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import NamedTuple, Protocol

from jax import Array
from jax.typing import ArrayLike


@dataclass(frozen=True)
class EllipsoidParams:
    """Reference ellipsoid of revolution and derived constants.

    Args:
        a: Equatorial radius.  The projected coordinates use the same unit.
        f: Flattening.  Negative for a prolate ellipsoid.
        e2: Eccentricity squared ``f * (2 - f)``.
        es: Eccentricity carrying the sign of ``f``.
        e2m: ``1 - e2``.
        n: Third flattening ``f / (2 - f)``.
        c: Meridian constant ``sqrt(e2m) * exp(eatanhe(1, es))``, the
            Gauss-Schreiber scale at the pole.
    """

    a: float
    f: float
    e2: float
    es: float
    e2m: float
    n: float
    c: float

    @classmethod
    def from_flattening(cls, a: float, f: float) -> EllipsoidParams:
        """Derive the ellipsoid constants from radius and flattening.

        Args:
            a: Equatorial radius.
            f: Flattening.

        Returns:
            EllipsoidParams: Fully populated parameters.

        Examples:
            ```python
            from tmjax.constants import WGS84_a, WGS84_f
            ell = EllipsoidParams.from_flattening(WGS84_a, WGS84_f)
            ell.n
            ```
        """
        a = float(a)
        f = float(f)
        e2 = f * (2 - f)
        es = (-1.0 if f < 0 else 1.0) * math.sqrt(abs(e2))
        e2m = 1 - e2
        # eatanhe(1, es); atanh(1) diverges only for the degenerate e = 1
        if es > 0:
            eatanhe1 = es * math.atanh(es)
        else:
            eatanhe1 = -es * math.atan(es)
        c = math.sqrt(e2m) * math.exp(eatanhe1)
        n = f / (2 - f)
        return cls(a=a, f=f, e2=e2, es=es, e2m=e2m, n=n, c=c)


class ForwardResult(NamedTuple):
    """Result of a forward (geodetic to grid) projection.

    Attributes:
        x: Easting relative to the central meridian.  Units: those of the
            equatorial radius.
        y: Northing relative to the equator.
        gamma: Meridian convergence, the bearing of grid north measured
            clockwise from true north. Units: *deg*
        k: Point scale factor. Dimensionless.
    """

    x: Array
    y: Array
    gamma: Array
    k: Array


class ReverseResult(NamedTuple):
    """Result of a reverse (grid to geodetic) projection.

    Attributes:
        lat: Latitude. Units: *deg*
        lon: Longitude, in ``[-180, 180]``. Units: *deg*
        gamma: Meridian convergence. Units: *deg*
        k: Point scale factor. Dimensionless.
    """

    lat: Array
    lon: Array
    gamma: Array
    k: Array


class Projection(Protocol):
    """Forward and reverse transverse Mercator transforms."""

    def forward(self, lon0: ArrayLike, lat: ArrayLike, lon: ArrayLike) -> ForwardResult:
        ...

    def reverse(self, lon0: ArrayLike, x: ArrayLike, y: ArrayLike) -> ReverseResult:
        ...

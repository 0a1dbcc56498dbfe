"""Reverse transverse Mercator projection (grid to geodetic).

Undoes the steps of :mod:`tmjax.projection.forward`.  The two wrinkles
are the reverted series, ``zeta' = zeta - sum(bet[j] sin(2j zeta))``,
evaluated by the same Clenshaw routine with negated coefficients, and
Newton's method to recover ``tan(phi)`` from the conformal latitude.

References:
    1. C. F. F. Karney, *Transverse Mercator with an accuracy of a few
       nanometers*, J. Geodesy 85, 475-485, 2011.
    2. L. Krueger, *Konforme Abbildung des Erdellipsoids in der Ebene*,
       1912, pp. 17-19, Eqs. (25), (31).
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from tmjax.config import get_dtype
from tmjax.projection._coefficients import SeriesCoefficients
from tmjax.projection._complex import ComplexPair
from tmjax.projection._types import EllipsoidParams, ReverseResult
from tmjax.projection.clenshaw import clenshaw_sin_series
from tmjax.projection.conformal import tau_from_taup
from tmjax.utils import ang_normalize, atan2d, atand


def reverse_series(
    ellipsoid: EllipsoidParams,
    series: SeriesCoefficients,
    k0: float,
    lon0: ArrayLike,
    x: ArrayLike,
    y: ArrayLike,
) -> tuple[ReverseResult, Array]:
    """Convert transverse Mercator grid coordinates to geodetic coordinates.

    Inputs broadcast against each other.  Where ``cos(xi')`` and
    ``sinh(eta')`` both vanish (the pole) the result is ``lat = 90``,
    ``lon = lon0`` regardless of the latitude iteration.

    Args:
        ellipsoid (EllipsoidParams): Reference ellipsoid.
        series (SeriesCoefficients): Series coefficients for *ellipsoid*.
        k0 (float): Central scale factor.
        lon0 (ArrayLike): Central meridian. Units: *deg*
        x (ArrayLike): Easting relative to the central meridian.
        y (ArrayLike): Northing relative to the equator.

    Returns:
        Tuple ``(result, converged)``: the :class:`ReverseResult` and a
        boolean array that is ``False`` where the latitude iteration hit
        its cap.
    """
    _float = get_dtype()
    lon0 = jnp.asarray(lon0, dtype=_float)
    x = jnp.asarray(x, dtype=_float)
    y = jnp.asarray(y, dtype=_float)

    a1k0 = series.b1 * ellipsoid.a * k0
    xi = y / a1k0
    eta = x / a1k0

    # Explicitly enforce the parity
    xisign = jnp.where(jnp.signbit(xi), -1.0, 1.0)
    etasign = jnp.where(jnp.signbit(eta), -1.0, 1.0)
    xi = xi * xisign
    eta = eta * etasign
    backside = xi > jnp.pi / 2
    xi = jnp.where(backside, jnp.pi - xi, xi)

    # Gauss-Krueger to Gauss-Schreiber
    sums = clenshaw_sin_series(tuple(-b for b in series.bet), xi, eta)
    zetap = ComplexPair(xi, eta) + sums.sin_series
    dzetap = sums.cos_series
    gamma = atan2d(dzetap.im, dzetap.re)
    k = series.b1 / abs(dzetap)

    xip = zetap.re
    etap = zetap.im
    s = jnp.sinh(etap)
    # cos(pi/2) might be negative
    c = jnp.fmax(0.0, jnp.cos(xip))
    r = jnp.hypot(s, c)
    pole = r == 0.0

    sxip = jnp.sin(xip)
    tau, converged = tau_from_taup(sxip / jnp.where(pole, 1.0, r), ellipsoid.es)
    converged = converged | pole

    lon = jnp.where(pole, 0.0, atan2d(s, c))
    lat = jnp.where(pole, 90.0, atand(tau))
    gamma = jnp.where(pole, gamma, gamma + atan2d(sxip * jnp.tanh(etap), c))
    # cos(phi') * cosh(eta') = r
    k = jnp.where(
        pole,
        k * ellipsoid.c,
        k * (
            jnp.sqrt(ellipsoid.e2m + ellipsoid.e2 / (1.0 + tau * tau))
            * jnp.hypot(1.0, tau)
            * r
        ),
    )

    lat = lat * xisign
    lon = jnp.where(backside, 180.0 - lon, lon)
    lon = ang_normalize(lon * etasign + lon0)
    gamma = jnp.where(backside, 180.0 - gamma, gamma)
    gamma = ang_normalize(gamma * (xisign * etasign))
    k = k * k0
    return ReverseResult(lat=lat, lon=lon, gamma=gamma, k=k), converged

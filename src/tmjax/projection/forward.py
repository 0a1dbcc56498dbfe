"""Forward transverse Mercator projection (geodetic to grid).

The computation follows Karney (2011):

1. reduce latitude and longitude (relative to the central meridian) to the
   first quadrant, remembering the signs and whether the point lies on
   the far side of the ellipsoid (``|lon - lon0| > 90``);
2. map the geodetic latitude to the conformal latitude and compute the
   Gauss-Schreiber coordinates ``zeta' = xi' + i*eta'`` together with
   their convergence and scale;
3. apply the Krueger series ``zeta = zeta' + sum(alp[j] sin(2j zeta'))``
   via Clenshaw summation to get the Gauss-Krueger coordinates, folding
   the derivative of the series into convergence and scale;
4. restore the signs.

The pole is handled by substituting the limiting values of the
Gauss-Schreiber quantities, so no division by ``cos(lat) = 0`` occurs.
Everything is element-wise with ``jnp.where`` selecting between branches.

References:
    1. C. F. F. Karney, *Transverse Mercator with an accuracy of a few
       nanometers*, J. Geodesy 85, 475-485, 2011.
    2. JHS 154, *ETRS89 - jarjestelmaan liittyvat karttaprojektiot,
       tasokoordinaatistot ja karttalehtijako*, JUHTA, 2006.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax.typing import ArrayLike

from tmjax.config import get_dtype
from tmjax.projection._coefficients import SeriesCoefficients
from tmjax.projection._complex import ComplexPair
from tmjax.projection._types import EllipsoidParams, ForwardResult
from tmjax.projection.clenshaw import clenshaw_sin_series
from tmjax.projection.conformal import taup_from_tau
from tmjax.utils import ang_diff, ang_normalize, atan2d, lat_fix, sincosd


def forward_series(
    ellipsoid: EllipsoidParams,
    series: SeriesCoefficients,
    k0: float,
    lon0: ArrayLike,
    lat: ArrayLike,
    lon: ArrayLike,
) -> ForwardResult:
    """Project geodetic coordinates to transverse Mercator grid coordinates.

    Inputs broadcast against each other.  Latitudes outside ``[-90, 90]``
    give NaN; longitudes are unrestricted.  Accuracy degrades smoothly
    with distance from the central meridian; the order-6 series is good to
    5 nm within the UTM domain.

    Args:
        ellipsoid (EllipsoidParams): Reference ellipsoid.
        series (SeriesCoefficients): Series coefficients for *ellipsoid*.
        k0 (float): Central scale factor.
        lon0 (ArrayLike): Central meridian. Units: *deg*
        lat (ArrayLike): Latitude. Units: *deg*
        lon (ArrayLike): Longitude. Units: *deg*

    Returns:
        ForwardResult: Easting ``x``, northing ``y``, convergence ``gamma``
        (*deg*) and scale ``k``.
    """
    _float = get_dtype()
    lon0 = jnp.asarray(lon0, dtype=_float)
    lat = jnp.asarray(lat, dtype=_float)
    lon = jnp.asarray(lon, dtype=_float)

    lat = lat_fix(lat)
    lon = ang_diff(lon0, lon)

    # Explicitly enforce the parity
    latsign = jnp.where(jnp.signbit(lat), -1.0, 1.0)
    lonsign = jnp.where(jnp.signbit(lon), -1.0, 1.0)
    lon = lon * lonsign
    lat = lat * latsign
    backside = lon > 90.0
    latsign = jnp.where(backside & (lat == 0.0), -1.0, latsign)
    lon = jnp.where(backside, 180.0 - lon, lon)

    sphi, cphi = sincosd(lat)
    slam, clam = sincosd(lon)

    # tau = tan(phi), taup = tan(phi') = sinh(psi)
    pole = lat == 90.0
    tau = sphi / jnp.where(pole, 1.0, cphi)
    taup = taup_from_tau(tau, ellipsoid.es)

    # Gauss-Schreiber coordinates, convergence and scale
    xip = jnp.where(pole, jnp.pi / 2, jnp.arctan2(taup, clam))
    etap = jnp.where(pole, 0.0, jnp.arcsinh(slam / jnp.hypot(taup, clam)))
    gamma = jnp.where(
        pole, lon, atan2d(slam * taup, clam * jnp.hypot(1.0, taup))
    )
    # cos(phi') * cosh(eta') = 1 / hypot(taup, clam); this form has
    # cancelling errors.
    k = jnp.where(
        pole,
        ellipsoid.c,
        jnp.sqrt(ellipsoid.e2m + ellipsoid.e2 * (cphi * cphi))
        * jnp.hypot(1.0, tau)
        / jnp.hypot(taup, clam),
    )

    # Gauss-Schreiber to Gauss-Krueger
    sums = clenshaw_sin_series(series.alp, xip, etap)
    zeta = ComplexPair(xip, etap) + sums.sin_series
    dzeta = sums.cos_series
    gamma = gamma - atan2d(dzeta.im, dzeta.re)
    k = k * (series.b1 * abs(dzeta))
    xi = zeta.re
    eta = zeta.im

    a1k0 = series.b1 * ellipsoid.a * k0
    y = a1k0 * jnp.where(backside, jnp.pi - xi, xi) * latsign
    x = a1k0 * eta * lonsign
    gamma = jnp.where(backside, 180.0 - gamma, gamma)
    gamma = ang_normalize(gamma * (latsign * lonsign))
    k = k * k0
    return ForwardResult(x=x, y=y, gamma=gamma, k=k)

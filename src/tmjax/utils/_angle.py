"""Angle reduction and degree-based trigonometry.

Arguments in degrees are reduced exactly (``fmod`` is exact in IEEE
arithmetic) before being converted to radians, so that e.g.
``sincosd(90.0)`` returns exactly ``(1, 0)`` and ``ang_diff`` of two
longitudes carries no spurious round-off.  Every function is element-wise
and branch free, so it can be traced by ``jax.jit`` and ``jax.vmap``.

References:
    1. C. F. F. Karney, *Algorithms for geodesics*, J. Geodesy 87, 43-55,
       2013.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from tmjax.constants import DEG2RAD

_QD = 90.0  # quarter turn
_HD = 180.0  # half turn
_TD = 360.0  # full turn


def _remainder(x: ArrayLike, y: float) -> Array:
    """IEEE-style remainder of ``x / y`` in ``[-y/2, y/2]``.

    Built on ``fmod`` so the reduction is exact.  A result of exactly
    ``+-y/2`` keeps the sign of ``x``.
    """
    r = jnp.fmod(x, y)
    r = jnp.where(r > y / 2, r - y, r)
    return jnp.where(r < -y / 2, r + y, r)


def _two_sum(u: ArrayLike, v: ArrayLike) -> tuple[Array, Array]:
    """Error-free transformation of a sum, ``u + v = s + t`` exactly."""
    s = u + v
    up = s - v
    vpp = s - up
    up = up - u
    vpp = vpp - v
    t = jnp.where(s != 0, 0.0 - (up + vpp), s)
    return s, t


def lat_fix(lat: ArrayLike) -> Array:
    """Replace latitudes outside ``[-90, 90]`` with NaN.

    Args:
        lat (ArrayLike): Latitude. Units: *deg*

    Returns:
        Latitude, or NaN where ``|lat| > 90``.
    """
    lat = jnp.asarray(lat)
    return jnp.where(jnp.abs(lat) > _QD, jnp.nan, lat)


def ang_normalize(x: ArrayLike) -> Array:
    """Reduce an angle to the range ``[-180, 180]``.

    Args:
        x (ArrayLike): Angle. Units: *deg*

    Returns:
        Equivalent angle in ``[-180, 180]``; an input equivalent to a half
        turn maps to ``180`` carrying the sign of ``x``.

    Examples:
        ```python
        from tmjax.utils import ang_normalize
        ang_normalize(370.0)  # 10.0
        ```
    """
    y = _remainder(x, _TD)
    return jnp.where(jnp.abs(y) == _HD, jnp.copysign(_HD, x), y)


def ang_diff(x: ArrayLike, y: ArrayLike) -> Array:
    """Exact difference ``y - x`` of two angles reduced to ``[-180, 180]``.

    The two inputs are reduced separately and summed with an error-free
    transformation, so the difference is exact even when ``x`` and ``y``
    are large.  For a result of ``0`` or ``+-180`` the sign is taken from
    the unreduced difference ``y - x``.

    Args:
        x (ArrayLike): Subtrahend angle. Units: *deg*
        y (ArrayLike): Minuend angle. Units: *deg*

    Returns:
        ``y - x`` reduced to ``[-180, 180]``. Units: *deg*

    Examples:
        ```python
        from tmjax.utils import ang_diff
        ang_diff(170.0, -170.0)  # 20.0
        ```
    """
    d, t = _two_sum(_remainder(-x, _TD), _remainder(y, _TD))
    d, t = _two_sum(_remainder(d, _TD), t)
    boundary = (d == 0) | (jnp.abs(d) == _HD)
    return jnp.where(
        boundary, jnp.copysign(d, jnp.where(t == 0, y - x, -t)), d
    )


def sincosd(x: ArrayLike) -> tuple[Array, Array]:
    """Sine and cosine of an angle given in degrees.

    The argument is reduced exactly to ``[-45, 45]`` and the quadrant is
    applied afterwards, so multiples of 90 degrees give exact results.
    The cosine is never ``-0``.

    Args:
        x (ArrayLike): Angle. Units: *deg*

    Returns:
        Tuple ``(sin(x), cos(x))``.
    """
    # fmod by a full turn is exact, so the quotient below is a small integer
    x360 = jnp.fmod(x, _TD)
    r = _remainder(x360, _QD)
    q = jnp.mod(jnp.round((x360 - r) / _QD), 4.0)
    r = r * DEG2RAD
    s = jnp.sin(r)
    c = jnp.cos(r)
    quadrants = [q == 0.0, q == 1.0, q == 2.0, q == 3.0]
    sinx = jnp.select(quadrants, [s, c, -s, -c], default=jnp.nan)
    cosx = jnp.select(quadrants, [c, -s, -c, s], default=jnp.nan)
    cosx = jnp.where(cosx == 0.0, 0.0, cosx)
    sinx = jnp.where(sinx == 0.0, jnp.copysign(sinx, x), sinx)
    return sinx, cosx


def atan2d(y: ArrayLike, x: ArrayLike) -> Array:
    """Four-quadrant arctangent in degrees.

    The arguments are rearranged so that the underlying ``atan2`` call
    lies in ``[-45, 45]``, which keeps the conversion to degrees accurate.

    Args:
        y (ArrayLike): Ordinate.
        x (ArrayLike): Abscissa.

    Returns:
        ``atan2(y, x)`` in ``[-180, 180]``. Units: *deg*
    """
    y = jnp.asarray(y)
    x = jnp.asarray(x)
    swap = jnp.abs(y) > jnp.abs(x)
    xx = jnp.where(swap, y, x)
    yy = jnp.where(swap, x, y)
    q = jnp.where(swap, 2, 0)
    flip = jnp.signbit(xx)
    xx = jnp.where(flip, -xx, xx)
    q = q + jnp.where(flip, 1, 0)
    ang = jnp.arctan2(yy, xx) / DEG2RAD
    return jnp.select(
        [q == 1, q == 2, q == 3],
        [jnp.copysign(_HD, yy) - ang, _QD - ang, -_QD + ang],
        default=ang,
    )


def atand(x: ArrayLike) -> Array:
    """Arctangent in degrees.

    Args:
        x (ArrayLike): Tangent of the angle.

    Returns:
        ``atan(x)`` in ``[-90, 90]``. Units: *deg*
    """
    x = jnp.asarray(x)
    return atan2d(x, jnp.ones_like(x))

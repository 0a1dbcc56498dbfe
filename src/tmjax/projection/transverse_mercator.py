"""Transverse Mercator projection on an arbitrary ellipsoid.

Provides :class:`TransverseMercator`, which owns the ellipsoid constants,
the central scale and the series coefficients, and :func:`utm`, a shared
instance for the Universal Transverse Mercator system (WGS84, ``k0 =
0.9996``).

An instance is immutable after construction, so it can be shared between
threads and closed over by ``jax.jit`` without copying.  Construction may
instead delegate to an exact (elliptic-integral) implementation supplied
by the caller; the choice is fixed for the lifetime of the instance.
"""

from __future__ import annotations

import logging
import math
import threading
from collections.abc import Callable

import jax
import jax.numpy as jnp
from jax.typing import ArrayLike

from tmjax.constants import UTM_K0, WGS84_a, WGS84_f
from tmjax.errors import ConfigurationError, NumericalNonConvergenceError
from tmjax.projection._coefficients import (
    DEFAULT_SERIES_ORDER,
    SeriesCoefficients,
    build_series_coefficients,
)
from tmjax.projection._types import (
    EllipsoidParams,
    ForwardResult,
    Projection,
    ReverseResult,
)
from tmjax.projection.forward import forward_series
from tmjax.projection.reverse import reverse_series

logger = logging.getLogger(__name__)

ExactFactory = Callable[[float, float, float, bool], Projection]


class TransverseMercator:
    """Transverse Mercator projection with a series of selectable order.

    Args:
        a (float): Equatorial radius.  Grid coordinates use the same unit.
        f (float): Flattening.  Negative values describe a prolate
            ellipsoid.
        k0 (float): Central scale factor.
        exact (bool): Delegate to an exact implementation built by
            *exact_factory* instead of evaluating the series.
        extendp (bool): Extended domain flag, forwarded to the exact
            implementation.  Must be ``False`` for the series.
        order (int): Series truncation order, one of ``4, 5, 6, 7, 8``.
        exact_factory (Callable | None): Called as
            ``exact_factory(a, f, k0, extendp)`` when *exact* is ``True``;
            must return an object with ``forward`` and ``reverse``.

    Raises:
        ConfigurationError: If a parameter is out of range, or *exact* is
            requested without a factory.

    Examples:
        ```python
        from tmjax.constants import WGS84_a, WGS84_f
        from tmjax.projection import TransverseMercator
        tm = TransverseMercator(WGS84_a, WGS84_f, 0.9996)
        x, y, gamma, k = tm.forward(-3.0, 51.5, -0.1)
        ```
    """

    __slots__ = ("_a", "_f", "_k0", "_exact", "_ellipsoid", "_series", "_exact_impl")

    def __init__(
        self,
        a: float,
        f: float,
        k0: float,
        exact: bool = False,
        extendp: bool = False,
        *,
        order: int = DEFAULT_SERIES_ORDER,
        exact_factory: ExactFactory | None = None,
    ) -> None:
        self._a = a
        self._f = f
        self._k0 = k0
        self._exact = exact
        self._ellipsoid: EllipsoidParams | None = None
        self._series: SeriesCoefficients | None = None
        self._exact_impl: Projection | None = None

        if exact:
            if exact_factory is None:
                raise ConfigurationError(
                    "Exact transverse Mercator requested but no exact_factory given"
                )
            self._exact_impl = exact_factory(a, f, k0, extendp)
            logger.debug(
                "Delegating transverse Mercator (a=%s, f=%s, k0=%s) to %s",
                a, f, k0, type(self._exact_impl).__name__,
            )
            return

        if not (math.isfinite(a) and a > 0):
            raise ConfigurationError("Equatorial radius is not positive")
        if not (math.isfinite(f) and f < 1):
            raise ConfigurationError("Polar semi-axis is not positive")
        if not (math.isfinite(k0) and k0 > 0):
            raise ConfigurationError("Scale is not positive")
        if extendp:
            raise ConfigurationError("TransverseMercator extendp not allowed if !exact")

        ellipsoid = EllipsoidParams.from_flattening(a, f)
        self._series = build_series_coefficients(ellipsoid.n, order)
        self._ellipsoid = ellipsoid
        logger.debug(
            "Built order-%d transverse Mercator (a=%s, f=%s, k0=%s)",
            order, a, f, k0,
        )

    # Properties

    @property
    def equatorial_radius(self) -> float:
        """Equatorial radius of the ellipsoid."""
        return self._a

    @property
    def flattening(self) -> float:
        """Flattening of the ellipsoid."""
        return self._f

    @property
    def central_scale(self) -> float:
        """Scale factor on the central meridian."""
        return self._k0

    @property
    def exact(self) -> bool:
        """Whether calls are delegated to an exact implementation."""
        return self._exact

    @property
    def ellipsoid(self) -> EllipsoidParams | None:
        """Derived ellipsoid constants (``None`` in exact mode)."""
        return self._ellipsoid

    @property
    def series(self) -> SeriesCoefficients | None:
        """Series coefficients (``None`` in exact mode)."""
        return self._series

    @property
    def order(self) -> int | None:
        """Series truncation order (``None`` in exact mode)."""
        return None if self._series is None else self._series.order

    @property
    def rectifying_radius(self) -> float | None:
        """Radius ``a1 = b1 * a`` of the sphere with the same meridian length."""
        return None if self._series is None else self._series.b1 * self._a

    # Transforms

    def forward(self, lon0: ArrayLike, lat: ArrayLike, lon: ArrayLike) -> ForwardResult:
        """Project geodetic coordinates to the grid.

        Args:
            lon0 (ArrayLike): Central meridian. Units: *deg*
            lat (ArrayLike): Latitude in ``[-90, 90]``. Units: *deg*
            lon (ArrayLike): Longitude. Units: *deg*

        Returns:
            ForwardResult: ``(x, y, gamma, k)``.
        """
        if self._exact_impl is not None:
            return self._exact_impl.forward(lon0, lat, lon)
        return forward_series(self._ellipsoid, self._series, self._k0, lon0, lat, lon)

    def reverse(self, lon0: ArrayLike, x: ArrayLike, y: ArrayLike) -> ReverseResult:
        """Convert grid coordinates to geodetic coordinates.

        Outside of a JAX trace the latitude iteration is checked for
        convergence; under ``jax.jit`` the check is skipped.

        Args:
            lon0 (ArrayLike): Central meridian. Units: *deg*
            x (ArrayLike): Easting relative to the central meridian.
            y (ArrayLike): Northing relative to the equator.

        Returns:
            ReverseResult: ``(lat, lon, gamma, k)``.

        Raises:
            NumericalNonConvergenceError: If the latitude iteration failed
                to converge for any element.
        """
        if self._exact_impl is not None:
            return self._exact_impl.reverse(lon0, x, y)
        result, converged = reverse_series(
            self._ellipsoid, self._series, self._k0, lon0, x, y
        )
        if not isinstance(converged, jax.core.Tracer) and not bool(jnp.all(converged)):
            failed = int(jnp.size(converged) - jnp.sum(converged))
            logger.error(
                "Latitude iteration did not converge for %d point(s)", failed
            )
            raise NumericalNonConvergenceError(
                f"Newton iteration for latitude did not converge for {failed} point(s)"
            )
        return result

    # String representations

    def __str__(self) -> str:
        if self._exact:
            return f"TransverseMercator(a={self._a}, f={self._f}, k0={self._k0}, exact=True)"
        return (
            f"TransverseMercator(a={self._a}, f={self._f}, k0={self._k0}, "
            f"order={self._series.order})"
        )

    def __repr__(self) -> str:
        return self.__str__()


_utm: TransverseMercator | None = None
_utm_lock = threading.Lock()


def utm() -> TransverseMercator:
    """Return the shared Universal Transverse Mercator projection.

    WGS84 ellipsoid, central scale 0.9996, order-6 series.  Built on the
    first call under a lock and shared by every caller afterwards.

    Returns:
        TransverseMercator: The shared instance.

    Examples:
        ```python
        from tmjax.projection import utm
        x, y, gamma, k = utm().forward(-75.0, 40.7, -74.0)
        ```
    """
    global _utm
    if _utm is None:
        with _utm_lock:
            if _utm is None:
                _utm = TransverseMercator(WGS84_a, WGS84_f, UTM_K0)
                logger.info("Initialised shared UTM projection")
    return _utm

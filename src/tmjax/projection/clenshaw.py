"""Clenshaw summation of the transverse Mercator trigonometric series.

For a complex argument ``zeta = xi + i*eta`` and coefficients
``c[1..N]`` this evaluates

.. math::

    S(\\zeta) = \\sum_{k=1}^{N} c_k \\sin(2k\\zeta), \\qquad
    S'(\\zeta) = 1 + \\sum_{k=1}^{N} 2k\\, c_k \\cos(2k\\zeta)

without computing any of the ``sin(2k zeta)`` terms individually.  With
``x = 2*zeta`` both ``sin(k x)`` and ``cos(k x)`` satisfy
``phi[k+1] = 2 cos(x) phi[k] - phi[k-1]``, so the sums follow from the
recurrence ``b[k] = 2 cos(x) b[k+1] - b[k+2] + a[k]`` run from ``k = N``
down to ``1``:

- ``S = b[1] * sin(x)`` with ``a[k] = c[k]``;
- ``S' = (1 - b[2]) + b[1] * cos(x)`` with ``a[k] = 2k c[k]``.

The recurrence is unrolled two steps at a time, alternating between two
accumulators, which avoids swapping them on every step.  ``N`` is at most
8, so the Python loop unrolls into a fixed graph under ``jax.jit``.

References:
    1. C. W. Clenshaw, *A note on the summation of Chebyshev series*,
       Math. Tables Aids Comput. 9, 118-120, 1955.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple

import jax.numpy as jnp
from jax.typing import ArrayLike

from tmjax.projection._complex import ComplexPair


class ClenshawSums(NamedTuple):
    """Sums produced by :func:`clenshaw_sin_series`.

    Attributes:
        sin_series: ``sum(c[k] * sin(2k zeta))``, the position correction.
        cos_series: ``1 + sum(2k c[k] cos(2k zeta))``, the derivative of
            ``zeta + sin_series`` with respect to ``zeta``, used to correct
            convergence and scale.
    """

    sin_series: ComplexPair
    cos_series: ComplexPair


def clenshaw_sin_series(
    coeffs: Sequence[float],
    xi: ArrayLike,
    eta: ArrayLike,
) -> ClenshawSums:
    """Sum a sine series and its derivative at ``zeta = xi + i*eta``.

    Args:
        coeffs (Sequence[float]): Coefficients ``c[1..N]`` (index 0 holds
            ``c[1]``).  The reverse projection passes negated coefficients.
        xi (ArrayLike): Real part of ``zeta``. Units: *rad*
        eta (ArrayLike): Imaginary part of ``zeta``. Units: *rad*

    Returns:
        ClenshawSums: The series and its derivative.
    """
    c0 = jnp.cos(2.0 * xi)
    ch0 = jnp.cosh(2.0 * eta)
    s0 = jnp.sin(2.0 * xi)
    sh0 = jnp.sinh(2.0 * eta)
    # 2 * cos(2*zeta)
    a = ComplexPair(2.0 * c0 * ch0, -2.0 * s0 * sh0)

    n = len(coeffs)
    if n & 1:
        y0 = ComplexPair(coeffs[n - 1], 0.0)
        z0 = ComplexPair(2 * n * coeffs[n - 1], 0.0)
        n -= 1
    else:
        y0 = ComplexPair(0.0, 0.0)
        z0 = ComplexPair(0.0, 0.0)
    y1 = ComplexPair(0.0, 0.0)
    z1 = ComplexPair(0.0, 0.0)
    while n:
        y1 = a * y0 - y1 + coeffs[n - 1]
        z1 = a * z0 - z1 + 2 * n * coeffs[n - 1]
        n -= 1
        y0 = a * y1 - y0 + coeffs[n - 1]
        z0 = a * z1 - z0 + 2 * n * coeffs[n - 1]
        n -= 1

    cos2 = a / 2.0
    derivative = (1.0 - z1) + cos2 * z0
    sin2 = ComplexPair(s0 * ch0, c0 * sh0)
    return ClenshawSums(sin_series=sin2 * y0, cos_series=derivative)

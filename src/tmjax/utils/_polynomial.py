"""Polynomial evaluation on the host.

Used while building coefficient tables, which happens once per projection
and outside of any JAX trace, so plain Python floats are evaluated in
IEEE double precision.
"""

from __future__ import annotations

from collections.abc import Sequence


def polyval(coeffs: Sequence[float], x: float) -> float:
    """Evaluate a polynomial by Horner's method.

    Args:
        coeffs (Sequence[float]): Coefficients, highest degree first.  An
            empty sequence is the zero polynomial.
        x (float): Evaluation point.

    Returns:
        float: ``coeffs[0] * x**(n-1) + ... + coeffs[n-1]``.

    Examples:
        ```python
        from tmjax.utils import polyval
        polyval([1, 2, 3], 2.0)  # 11.0
        ```
    """
    y = 0.0
    for i, c in enumerate(coeffs):
        y = float(c) if i == 0 else y * x + c
    return y

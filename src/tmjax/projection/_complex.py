"""Two-component complex value for the Clenshaw recurrence.

``ComplexPair`` stores the real and imaginary parts as separate arrays
instead of a complex dtype, so the series evaluation runs with whatever
real float dtype is configured and on backends without complex support.
Mixed real/complex operations follow ``std::complex`` semantics: a real
operand only touches the real part, and ``real - z`` gives
``(real - re, 0 - im)`` so signed zeros come out the same way.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike


class ComplexPair:
    """Complex number ``re + i*im`` held as a pair of real arrays.

    Registered as a JAX pytree with ``re`` and ``im`` as leaves.

    Args:
        re (ArrayLike): Real part.
        im (ArrayLike): Imaginary part.  Defaults to ``0``.
    """

    __slots__ = ("re", "im")

    def __init__(self, re: ArrayLike, im: ArrayLike = 0.0) -> None:
        self.re = re
        self.im = im

    def __add__(self, other) -> ComplexPair:
        if isinstance(other, ComplexPair):
            return ComplexPair(self.re + other.re, self.im + other.im)
        return ComplexPair(self.re + other, self.im)

    def __radd__(self, other) -> ComplexPair:
        return ComplexPair(other + self.re, self.im)

    def __sub__(self, other) -> ComplexPair:
        if isinstance(other, ComplexPair):
            return ComplexPair(self.re - other.re, self.im - other.im)
        return ComplexPair(self.re - other, self.im)

    def __rsub__(self, other) -> ComplexPair:
        return ComplexPair(other - self.re, 0.0 - self.im)

    def __mul__(self, other) -> ComplexPair:
        if isinstance(other, ComplexPair):
            return ComplexPair(
                self.re * other.re - self.im * other.im,
                self.re * other.im + self.im * other.re,
            )
        return ComplexPair(self.re * other, self.im * other)

    def __rmul__(self, other) -> ComplexPair:
        return ComplexPair(other * self.re, other * self.im)

    def __truediv__(self, other) -> ComplexPair:
        return ComplexPair(self.re / other, self.im / other)

    def __neg__(self) -> ComplexPair:
        return ComplexPair(-self.re, -self.im)

    def __abs__(self) -> Array:
        return jnp.hypot(self.re, self.im)

    def __repr__(self) -> str:
        return f"ComplexPair(re={self.re!r}, im={self.im!r})"


# Register as JAX pytree
jax.tree_util.register_pytree_node(
    ComplexPair,
    lambda z: ((z.re, z.im), None),
    lambda _, children: ComplexPair(*children),
)

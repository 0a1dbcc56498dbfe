"""Tests for ComplexPair arithmetic and Clenshaw summation.

The Clenshaw sums are checked against a direct evaluation of the
trigonometric series with numpy complex arithmetic.
"""

import jax
import jax.numpy as jnp
import numpy as np
import pytest

from tmjax.projection import ComplexPair, clenshaw_sin_series

_SERIES_TOL = 1e-14

_COEFFS_ODD = (8.4e-4, 7.6e-7, 1.2e-9, 2.4e-12, 5.7e-15)
_COEFFS_EVEN = (-8.4e-4, -5.9e-8, -1.7e-10, -2.2e-13, -4.4e-16, 1.0e-18)


def _direct_sums(coeffs, xi, eta):
    zeta = xi + 1j * eta
    s = sum(c * np.sin(2 * k * zeta) for k, c in enumerate(coeffs, start=1))
    d = 1 + sum(2 * k * c * np.cos(2 * k * zeta) for k, c in enumerate(coeffs, start=1))
    return complex(s), complex(d)


# ──────────────────────────────────────────────
# ComplexPair
# ──────────────────────────────────────────────


class TestComplexPair:
    def test_add(self):
        z = ComplexPair(1.0, 2.0) + ComplexPair(3.0, 4.0)
        assert (z.re, z.im) == (4.0, 6.0)

    def test_add_real(self):
        z = ComplexPair(1.0, 2.0) + 3.0
        assert (z.re, z.im) == (4.0, 2.0)
        z = 3.0 + ComplexPair(1.0, 2.0)
        assert (z.re, z.im) == (4.0, 2.0)

    def test_sub(self):
        z = ComplexPair(1.0, 2.0) - ComplexPair(3.0, 5.0)
        assert (z.re, z.im) == (-2.0, -3.0)

    def test_real_minus_complex(self):
        z = 1.0 - ComplexPair(2.0, 3.0)
        assert (z.re, z.im) == (-1.0, -3.0)

    def test_real_minus_complex_signed_zero(self):
        z = 1.0 - ComplexPair(jnp.array(0.5), jnp.array(0.0))
        assert float(z.re) == 0.5
        assert not np.signbit(float(z.im))

    def test_mul(self):
        z = ComplexPair(1.0, 2.0) * ComplexPair(3.0, 4.0)
        assert (z.re, z.im) == (-5.0, 10.0)

    def test_mul_real(self):
        z = ComplexPair(1.0, 2.0) * 2.0
        assert (z.re, z.im) == (2.0, 4.0)
        z = 2.0 * ComplexPair(1.0, 2.0)
        assert (z.re, z.im) == (2.0, 4.0)

    def test_div_real(self):
        z = ComplexPair(3.0, -4.0) / 2.0
        assert (z.re, z.im) == (1.5, -2.0)

    def test_neg(self):
        z = -ComplexPair(1.0, -2.0)
        assert (z.re, z.im) == (-1.0, 2.0)

    def test_abs(self):
        assert float(abs(ComplexPair(3.0, 4.0))) == pytest.approx(5.0)

    def test_pytree_leaves(self):
        leaves = jax.tree_util.tree_leaves(ComplexPair(jnp.array(1.0), jnp.array(2.0)))
        assert len(leaves) == 2

    def test_tree_map(self):
        z = jax.tree_util.tree_map(lambda v: 2 * v, ComplexPair(jnp.array(1.0), jnp.array(2.0)))
        assert isinstance(z, ComplexPair)
        assert float(z.re) == 2.0
        assert float(z.im) == 4.0

    def test_through_jit(self):
        @jax.jit
        def square(z):
            return z * z

        z = square(ComplexPair(jnp.array(1.0), jnp.array(1.0)))
        assert float(z.re) == 0.0
        assert float(z.im) == 2.0


# ──────────────────────────────────────────────
# Clenshaw summation
# ──────────────────────────────────────────────


class TestClenshaw:
    @pytest.mark.parametrize("coeffs", [_COEFFS_ODD, _COEFFS_EVEN])
    @pytest.mark.parametrize(
        "xi, eta",
        [(0.0, 0.0), (0.3, 0.1), (1.2, 0.05), (0.7, 0.8), (1.5707963267948966, 0.0)],
    )
    def test_matches_direct_sum(self, coeffs, xi, eta):
        sums = clenshaw_sin_series(coeffs, xi, eta)
        s, d = _direct_sums(coeffs, xi, eta)
        assert abs(float(sums.sin_series.re) - s.real) < _SERIES_TOL
        assert abs(float(sums.sin_series.im) - s.imag) < _SERIES_TOL
        assert abs(float(sums.cos_series.re) - d.real) < _SERIES_TOL
        assert abs(float(sums.cos_series.im) - d.imag) < _SERIES_TOL

    def test_single_coefficient(self):
        sums = clenshaw_sin_series((0.25,), 0.4, 0.2)
        s, d = _direct_sums((0.25,), 0.4, 0.2)
        assert abs(float(sums.sin_series.re) - s.real) < _SERIES_TOL
        assert abs(float(sums.cos_series.im) - d.imag) < _SERIES_TOL

    def test_empty_series(self):
        sums = clenshaw_sin_series((), jnp.array(0.3), jnp.array(0.1))
        assert float(sums.sin_series.re) == 0.0
        assert float(sums.sin_series.im) == 0.0
        assert float(sums.cos_series.re) == 1.0
        assert float(sums.cos_series.im) == 0.0

    def test_vectorised(self):
        xi = jnp.linspace(0.0, 1.5, 11)
        eta = jnp.linspace(0.0, 0.3, 11)
        sums = clenshaw_sin_series(_COEFFS_ODD, xi, eta)
        assert sums.sin_series.re.shape == (11,)
        for i in range(11):
            s, _ = _direct_sums(_COEFFS_ODD, float(xi[i]), float(eta[i]))
            assert abs(float(sums.sin_series.re[i]) - s.real) < _SERIES_TOL

    def test_negated_coefficients_invert_to_first_order(self):
        xi, eta = 0.6, 0.2
        fwd = clenshaw_sin_series(_COEFFS_ODD, xi, eta)
        xi1 = xi + float(fwd.sin_series.re)
        eta1 = eta + float(fwd.sin_series.im)
        back = clenshaw_sin_series(tuple(-c for c in _COEFFS_ODD), xi1, eta1)
        assert abs(xi1 + float(back.sin_series.re) - xi) < 1e-5
        assert abs(eta1 + float(back.sin_series.im) - eta) < 1e-5

"""Tests for the Krueger series coefficient tables."""

import logging

import pytest

from tmjax.constants import WGS84_a, WGS84_f
from tmjax.errors import ConfigurationError
from tmjax.projection import (
    DEFAULT_SERIES_ORDER,
    SUPPORTED_SERIES_ORDERS,
    EllipsoidParams,
    build_series_coefficients,
)
from tmjax.projection._coefficients import _check_table_sizes

_WGS84_N = WGS84_f / (2 - WGS84_f)

# Karney (2011), Table 1 (WGS84)
_WGS84_RECTIFYING_RADIUS = 6367449.14582  # metres
_WGS84_ALP1 = 8.377318206244698e-4


class TestTables:
    @pytest.mark.parametrize("order", SUPPORTED_SERIES_ORDERS)
    def test_table_sizes(self, order):
        _check_table_sizes(order)

    @pytest.mark.parametrize("order", SUPPORTED_SERIES_ORDERS)
    def test_coefficient_counts(self, order):
        series = build_series_coefficients(_WGS84_N, order)
        assert series.order == order
        assert len(series.alp) == order
        assert len(series.bet) == order

    def test_default_order(self):
        assert DEFAULT_SERIES_ORDER == 6
        assert build_series_coefficients(_WGS84_N).order == 6

    @pytest.mark.parametrize("order", [0, 3, 9, 6.5, "6"])
    def test_unsupported_order_raises(self, order):
        with pytest.raises(ConfigurationError, match="Series order"):
            build_series_coefficients(_WGS84_N, order)


class TestValues:
    @pytest.mark.parametrize("order", SUPPORTED_SERIES_ORDERS)
    def test_sphere(self, order):
        series = build_series_coefficients(0.0, order)
        assert series.b1 == 1.0
        assert all(c == 0.0 for c in series.alp)
        assert all(c == 0.0 for c in series.bet)

    def test_wgs84_rectifying_radius(self):
        series = build_series_coefficients(_WGS84_N)
        assert series.b1 * WGS84_a == pytest.approx(_WGS84_RECTIFYING_RADIUS, abs=1e-3)

    def test_wgs84_alp1(self):
        series = build_series_coefficients(_WGS84_N)
        assert series.alp[0] == pytest.approx(_WGS84_ALP1, rel=1e-8)

    @pytest.mark.parametrize("order", SUPPORTED_SERIES_ORDERS)
    def test_leading_terms(self, order):
        """alp[1] and bet[1] both start n/2 - 2n^2/3."""
        n = 1e-5
        series = build_series_coefficients(n, order)
        leading = n / 2 - 2 * n * n / 3
        assert series.alp[0] == pytest.approx(leading, rel=1e-8)
        assert series.bet[0] == pytest.approx(leading, rel=1e-8)

    @pytest.mark.parametrize("order", SUPPORTED_SERIES_ORDERS)
    def test_orders_agree(self, order):
        series = build_series_coefficients(_WGS84_N, order)
        reference = build_series_coefficients(_WGS84_N, 8)
        assert series.b1 == pytest.approx(reference.b1, rel=1e-12)
        for low, high in zip(series.alp, reference.alp):
            assert abs(low - high) < 5e-14
        for low, high in zip(series.bet, reference.bet):
            assert abs(low - high) < 5e-14

    def test_coefficients_decrease(self):
        series = build_series_coefficients(_WGS84_N, 8)
        magnitudes = [abs(c) for c in series.alp]
        assert magnitudes == sorted(magnitudes, reverse=True)

    def test_prolate_odd_terms_change_sign(self):
        oblate = build_series_coefficients(0.002)
        prolate = build_series_coefficients(-0.002)
        assert oblate.alp[0] > 0
        assert prolate.alp[0] < 0
        assert prolate.b1 > oblate.b1

    def test_debug_log(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="tmjax.projection._coefficients"):
            build_series_coefficients(_WGS84_N, 5)
        assert "order-5" in caplog.text


class TestEllipsoidParams:
    def test_wgs84(self):
        ell = EllipsoidParams.from_flattening(WGS84_a, WGS84_f)
        assert ell.a == WGS84_a
        assert ell.e2 == pytest.approx(6.69437999014e-3, rel=1e-10)
        assert ell.es > 0
        assert ell.e2m == pytest.approx(1 - ell.e2)
        assert ell.n == pytest.approx(_WGS84_N)
        assert ell.c == pytest.approx(1.0033565552, rel=1e-8)

    def test_sphere(self):
        ell = EllipsoidParams.from_flattening(1.0, 0.0)
        assert ell.e2 == 0.0
        assert ell.es == 0.0
        assert ell.n == 0.0
        assert ell.c == 1.0

    def test_prolate(self):
        ell = EllipsoidParams.from_flattening(1.0, -1 / 300)
        assert ell.e2 < 0
        assert ell.es < 0
        assert ell.n < 0
        assert ell.c == pytest.approx(1.0, abs=1e-2)

    def test_frozen(self):
        ell = EllipsoidParams.from_flattening(WGS84_a, WGS84_f)
        with pytest.raises(AttributeError):
            ell.a = 1.0

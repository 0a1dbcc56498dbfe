"""Exception types raised by tmjax."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Invalid parameters supplied when building a projection."""


class NumericalNonConvergenceError(ArithmeticError):
    """An iterative solve exhausted its iteration budget."""

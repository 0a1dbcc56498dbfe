"""Module-wide floating-point precision configuration.

Provides ``set_dtype`` and ``get_dtype`` to control the float dtype used
throughout tmjax.  The default is ``jnp.float64``, and importing this
module enables JAX's 64-bit mode (``jax_enable_x64``) so that the
projections keep IEEE double-precision semantics out of the box.
Switching to ``jnp.float32`` trades accuracy for GPU/TPU throughput.

Call ``set_dtype`` **before** any JIT compilation, just like JAX's own
``jax.config.update("jax_enable_x64", True)``.  Under JIT, ``get_dtype()``
runs during tracing and its result is baked into the compiled program.

Grid coordinates are of order 1e7 m, so float32 resolves them to roughly
half a metre; float64 keeps the series accurate to a few nanometres.
"""

from __future__ import annotations

import math

import jax
import jax.numpy as jnp

_VALID_DTYPES = (jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64)

_dtype = jnp.float64
jax.config.update("jax_enable_x64", True)


def set_dtype(dtype) -> None:
    """Set the module-wide float dtype for tmjax.

    Must be called **before** any ``jax.jit`` compilation.  In eager mode
    the change takes effect immediately.

    If *dtype* is ``jnp.float64``, JAX's 64-bit mode is automatically
    enabled via ``jax.config.update("jax_enable_x64", True)``.

    Args:
        dtype: One of ``jnp.float16``, ``jnp.bfloat16``, ``jnp.float32``,
            or ``jnp.float64``.

    Raises:
        ValueError: If *dtype* is not a supported float type.
    """
    global _dtype
    if dtype not in _VALID_DTYPES:
        raise ValueError(
            f"Unsupported dtype {dtype}. Must be one of: "
            f"jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64"
        )
    if dtype == jnp.float64:
        jax.config.update("jax_enable_x64", True)
    _dtype = dtype


def get_dtype():
    """Return the current module-wide float dtype.

    Returns:
        The active float dtype (default ``jnp.float64``).
    """
    return _dtype


def get_newton_tolerance() -> float:
    """Return the dtype-adaptive step tolerance for Newton iterations.

    Equal to ``sqrt(eps) / 10`` for the configured float dtype, which is
    enough for a quadratically convergent iteration to land at full
    precision on the step after it is met:

    - ``float64``:  ~1.5e-9
    - ``float32``:  ~3.5e-5
    - ``float16``, ``bfloat16``: ~3e-3 and ~9e-3

    Returns:
        float: Relative step tolerance.
    """
    return math.sqrt(float(jnp.finfo(_dtype).eps)) / 10.0


def get_newton_tau_max() -> float:
    """Return the magnitude above which ``tan(latitude)`` is treated as infinite.

    Equal to ``2 / sqrt(eps)`` for the configured float dtype.  Beyond this
    value the conformal-latitude map is the identity to working precision.

    Returns:
        float: Threshold on ``|tan(latitude)|``.
    """
    return 2.0 / math.sqrt(float(jnp.finfo(_dtype).eps))

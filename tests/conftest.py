import jax.numpy as jnp
import pytest

from tmjax.config import set_dtype


@pytest.fixture(autouse=True)
def _ensure_float64():
    """Restore float64 precision before every test.

    float64 is the import-time default, but tests that switch to float32
    (e.g. in test_config.py) must not leak that setting into later tests.
    """
    set_dtype(jnp.float64)

# /// script
# requires-python = ">=3.11"
# dependencies = ["typer>=0.9.0", "tmjax"]
#
# [tool.uv.sources]
# tmjax = { path = ".." }
# ///
"""Project a latitude/longitude grid to UTM and back, and report the error.

Builds a regular grid over one UTM zone, projects it with a JIT-compiled
vmap'd forward transform, inverts it again, and prints the worst round-trip
error together with the range of convergence and scale over the zone.

Requires tmjax to be installed (``uv pip install -e .`` from the repo root).

Usage:
    uv run examples/utm_grid.py [OPTIONS]

Examples:
    # Zone 30 (Great Britain), 0.1 degree spacing
    uv run examples/utm_grid.py --zone 30

    # Zone 18, finer grid, series of order 8
    uv run examples/utm_grid.py --zone 18 --step 0.01 --order 8
"""

import time
from typing import Annotated

import jax
import jax.numpy as jnp
import typer

from tmjax import UTM_K0, WGS84_a, WGS84_f, set_dtype
from tmjax.projection import TransverseMercator
from tmjax.utils import ang_diff

set_dtype(jnp.float64)  # Must be before any JIT compilation


def main(
    zone: Annotated[int, typer.Option(help="UTM zone number, 1-60")] = 30,
    lat_min: Annotated[float, typer.Option(help="Southern edge of the grid (deg)")] = -80.0,
    lat_max: Annotated[float, typer.Option(help="Northern edge of the grid (deg)")] = 84.0,
    step: Annotated[float, typer.Option(help="Grid spacing (deg)")] = 0.1,
    order: Annotated[int, typer.Option(help="Series order, 4-8")] = 6,
) -> None:
    """Round-trip a grid through the UTM projection."""
    if not 1 <= zone <= 60:
        print("ERROR: zone must be between 1 and 60.")
        raise typer.Exit(1)

    lon0 = -183.0 + 6.0 * zone
    tm = TransverseMercator(WGS84_a, WGS84_f, UTM_K0, order=order)
    print(f"Projection: {tm}")
    print(f"  Central meridian: {lon0:+.1f} deg")

    lats = jnp.arange(lat_min, lat_max + step / 2, step)
    lons = jnp.arange(lon0 - 3.0, lon0 + 3.0 + step / 2, step)
    lat, lon = jnp.meshgrid(lats, lons, indexing="ij")
    lat = lat.ravel()
    lon = lon.ravel()
    print(f"  Grid points: {lat.shape[0]}")

    forward = jax.jit(jax.vmap(tm.forward, in_axes=(None, 0, 0)))
    reverse = jax.jit(jax.vmap(tm.reverse, in_axes=(None, 0, 0)))

    # ── Forward ──────────────────────────────────────────────────────────
    t0 = time.perf_counter()
    x, y, gamma, k = forward(lon0, lat, lon)
    x.block_until_ready()
    print(f"\n── Forward: {time.perf_counter() - t0:.3f}s (including compilation) ──")
    print(f"  Easting:     {float(x.min()) + 500000.0:12.3f} .. {float(x.max()) + 500000.0:12.3f} m")
    print(f"  Northing:    {float(y.min()):12.3f} .. {float(y.max()):12.3f} m")
    print(f"  Convergence: {float(gamma.min()):+.6f} .. {float(gamma.max()):+.6f} deg")
    print(f"  Scale:       {float(k.min()):.9f} .. {float(k.max()):.9f}")

    # ── Reverse ──────────────────────────────────────────────────────────
    t0 = time.perf_counter()
    rlat, rlon, _, _ = reverse(lon0, x, y)
    rlat.block_until_ready()
    print(f"\n── Reverse: {time.perf_counter() - t0:.3f}s (including compilation) ──")

    dlat = jnp.max(jnp.abs(rlat - lat))
    dlon = jnp.max(jnp.abs(ang_diff(lon, rlon)))
    print(f"  Max latitude error:  {float(dlat):.3e} deg")
    print(f"  Max longitude error: {float(dlon):.3e} deg")


if __name__ == "__main__":
    typer.run(main)

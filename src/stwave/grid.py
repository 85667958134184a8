"""
Coordinate normalization for spatiotemporal model evaluation.

Turns the accepted coordinate forms into the canonical grid pair
``(Xgrid, Tgrid)``:

* two 1-D axis vectors ``x`` (length ``nx``) and ``t`` (length ``nt``)
  are expanded with ``meshgrid`` semantics into arrays of shape
  ``(nt, nx)``: time along rows, space along columns;
* two 2-D arrays of identical shape are taken as an existing grid and
  passed through.

Paired samples of shape ``(N, 2)`` (column 0 = x, column 1 = t) are *not*
gridded here; evaluators that accept them read the columns directly.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .errors import ShapeError


# ── canonical grid ───────────────────────────────────────────────────────────

def normalize_coordinates(
    x_input: ArrayLike,
    t_input: ArrayLike,
) -> Tuple[NDArray[np.floating], NDArray[np.floating]]:
    """Build the canonical ``(Xgrid, Tgrid)`` pair.

    Parameters
    ----------
    x_input : array_like
        Spatial axis vector of length ``nx``, or a 2-D grid of x-values.
    t_input : array_like
        Temporal axis vector of length ``nt``, or a 2-D grid of t-values
        with the same shape as *x_input*.

    Returns
    -------
    Xgrid, Tgrid : ndarray
        Arrays of identical shape.  For vector input the shape is
        ``(nt, nx)`` with ``Xgrid[i, j] = x[j]`` and ``Tgrid[i, j] = t[i]``.

    Raises
    ------
    ShapeError
        If the inputs are neither two vectors nor two congruent grids.
    """
    x = np.asarray(x_input, dtype=np.float64)
    t = np.asarray(t_input, dtype=np.float64)

    # scalars count as length-1 axes
    if x.ndim == 0:
        x = x.reshape(1)
    if t.ndim == 0:
        t = t.reshape(1)

    if x.ndim == 1 and t.ndim == 1:
        Xgrid, Tgrid = np.meshgrid(x, t)
        return Xgrid, Tgrid

    if x.ndim == 2 and t.ndim == 2 and x.shape == t.shape:
        return x, t

    raise ShapeError(
        "Inputs must be either (x, t) vectors or (X, T) grids of the same "
        f"shape, got shapes {x.shape} and {t.shape}"
    )


# ── paired samples ───────────────────────────────────────────────────────────

def is_paired(coords: ArrayLike) -> bool:
    """True if *coords* is an ``(N, 2)`` array of (x, t) samples."""
    arr = np.asarray(coords)
    return arr.ndim == 2 and arr.shape[1] == 2


def split_paired(
    coords: ArrayLike,
) -> Tuple[NDArray[np.floating], NDArray[np.floating]]:
    """Return the x and t columns of an ``(N, 2)`` paired array."""
    arr = np.asarray(coords, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ShapeError(
            f"Paired coordinates must have shape (N, 2), got {arr.shape}"
        )
    return arr[:, 0], arr[:, 1]


def to_paired(
    Xgrid: ArrayLike,
    Tgrid: ArrayLike,
) -> NDArray[np.floating]:
    """Flatten a canonical grid into ``(N, 2)`` paired samples.

    Samples are taken in row-major order, so reshaping an evaluation over
    the result with ``Xgrid.shape`` restores the grid layout.
    """
    X = np.asarray(Xgrid, dtype=np.float64)
    T = np.asarray(Tgrid, dtype=np.float64)
    if X.shape != T.shape:
        raise ShapeError(f"Grid shapes differ: {X.shape} vs {T.shape}")
    return np.column_stack((X.ravel(), T.ravel()))


def stack_coordinates(
    Xgrid: ArrayLike,
    Tgrid: ArrayLike,
) -> NDArray[np.floating]:
    """Stack a grid pair along a trailing axis of length 2.

    The result has shape ``Xgrid.shape + (2,)`` and is the input form of
    the bivariate dispersion kinds.
    """
    X = np.asarray(Xgrid, dtype=np.float64)
    T = np.asarray(Tgrid, dtype=np.float64)
    if X.shape != T.shape:
        raise ShapeError(f"Grid shapes differ: {X.shape} vs {T.shape}")
    return np.stack((X, T), axis=-1)


# ── axis construction ────────────────────────────────────────────────────────

def make_axis(start: float, stop: float, num: int) -> NDArray[np.floating]:
    """Uniformly spaced axis of *num* points from *start* to *stop*."""
    if int(num) < 1:
        raise ShapeError(f"num must be >= 1, got {num}")
    return np.linspace(float(start), float(stop), int(num))


__all__ = [
    "normalize_coordinates",
    "is_paired",
    "split_paired",
    "to_paired",
    "stack_coordinates",
    "make_axis",
]

"""
Combining dispersion weights with model output.

Weights multiply the field elementwise.  The orientation of 1-D weights is
always stated by the caller rather than guessed from lengths:

* ``axis="x"``: one weight per spatial column, applied as a row
  ``(1, nx)`` to every temporal row;
* ``axis="t"``: one weight per temporal row, applied as a column
  ``(nt, 1)`` to every spatial column;
* ``axis="xt"``: a bivariate weight whose shape equals the field's.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .dispersion import dispersion, is_bivariate
from .errors import ShapeError
from .grid import normalize_coordinates, split_paired, stack_coordinates

AXES = ("x", "t", "xt")


def apply_dispersion(
    field: ArrayLike,
    weight: ArrayLike,
    axis: str,
) -> NDArray[np.floating]:
    """Multiply *field* by *weight* with explicit broadcasting.

    Parameters
    ----------
    field : array_like
        Model output.  Must be 2-D ``(nt, nx)`` for ``axis="x"`` or
        ``axis="t"``; any shape for ``axis="xt"``.
    weight : array_like
        1-D weights of length ``nx`` (``"x"``) or ``nt`` (``"t"``), or an
        array of exactly ``field.shape`` (``"xt"``).
    axis : {"x", "t", "xt"}

    Returns
    -------
    ndarray
        New array; neither input is modified.
    """
    Y = np.asarray(field, dtype=np.float64)
    w = np.asarray(weight, dtype=np.float64)

    if axis == "xt":
        if w.shape != Y.shape:
            raise ShapeError(
                f"Bivariate weight shape {w.shape} must equal field shape {Y.shape}"
            )
        return Y * w

    if axis not in ("x", "t"):
        raise ValueError(f"axis must be one of {AXES}, got {axis!r}")

    if Y.ndim != 2:
        raise ShapeError(f"Axis weights need a 2-D (nt, nx) field, got shape {Y.shape}")
    w = w.reshape(-1)
    nt, nx = Y.shape

    if axis == "x":
        if w.size != nx:
            raise ShapeError(f"x-weight has {w.size} values, field has nx={nx}")
        return Y * w[np.newaxis, :]

    if w.size != nt:
        raise ShapeError(f"t-weight has {w.size} values, field has nt={nt}")
    return Y * w[:, np.newaxis]


def disperse(
    field: ArrayLike,
    x: ArrayLike,
    t: ArrayLike,
    kind: str,
    axis: Optional[str] = None,
    **hyper: float,
) -> NDArray[np.floating]:
    """Compute a dispersion weight over the right coordinates and apply it.

    Parameters
    ----------
    field : array_like
        Grid output ``(nt, nx)`` evaluated on axes *x*, *t*.
    x, t : array_like
        The axis vectors (or congruent grids) the field was evaluated on.
    kind : str
        Dispersion kind.
    axis : {"x", "t", "xt"}, optional
        Where to compute univariate weights.  Bivariate kinds always use
        ``"xt"``; univariate kinds default to ``"x"``.
    **hyper
        ``alpha``, ``beta``, ``gamma``, ``mu0``, ``sigma``.
    """
    if is_bivariate(kind):
        if axis not in (None, "xt"):
            raise ValueError(f"Bivariate dispersion {kind!r} only supports axis='xt'")
        X, T = normalize_coordinates(x, t)
        w = dispersion(kind, stack_coordinates(X, T), **hyper)
        return apply_dispersion(field, w, "xt")

    axis = axis or "x"
    if axis == "xt":
        raise ValueError(f"Univariate dispersion {kind!r} needs axis 'x' or 't'")
    X, T = normalize_coordinates(x, t)
    coord = X[0, :] if axis == "x" else T[:, 0]
    w = dispersion(kind, coord, **hyper)
    return apply_dispersion(field, w, axis)


def disperse_paired(
    values: ArrayLike,
    paired: ArrayLike,
    kind: str,
    axis: Optional[str] = None,
    **hyper: float,
) -> NDArray[np.floating]:
    """Weight ``(N,)`` model values evaluated on ``(N, 2)`` paired samples.

    Univariate kinds read the x column (``axis="x"``, default) or the t
    column (``axis="t"``) of *paired*; bivariate kinds read both.  Each
    sample is scaled by its own weight.
    """
    x, t = split_paired(paired)
    if is_bivariate(kind):
        if axis not in (None, "xt"):
            raise ValueError(f"Bivariate dispersion {kind!r} only supports axis='xt'")
        w = dispersion(kind, np.column_stack((x, t)), **hyper)
    else:
        axis = axis or "x"
        if axis not in ("x", "t"):
            raise ValueError(f"Univariate dispersion {kind!r} needs axis 'x' or 't'")
        w = dispersion(kind, x if axis == "x" else t, **hyper)
    return apply_dispersion(values, w, "xt")


__all__ = ["AXES", "apply_dispersion", "disperse", "disperse_paired"]

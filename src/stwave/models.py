"""
Closed-form sinusoidal spatiotemporal (STW) model evaluators.

Three variants, in increasing order of frequency dispersion:

* **simple** (5 params)::

      Y = A sin(k x + b t + o) + c

* **reduced** (8 params): quadratic self-terms in each axis plus one
  cross-coupling term::

      Y = A sin((k0 + k1 x) x + (b0 + b1 t) t + mu x t + o) + c

* **expanded** (9 params): wave number and frequency each depend on both
  coordinates, evaluated on paired ``(N, 2)`` samples::

      Y = A sin((k0 + k1 x + k2 t) x + (b0 + b1 x + b2 t) t + o) + c

The simple and reduced evaluators accept either axis vectors or an
existing grid and return an array of shape ``(nt, nx)``; row ``i`` is the
spatial profile at ``t[i]``.  All evaluators are pure; a parameter vector
of the wrong length raises :class:`~stwave.errors.ParameterCountError`
before the coordinates are looked at.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .errors import ParameterCountError
from .grid import normalize_coordinates, split_paired
from .params import ModelVariant


# ── parameter handling ───────────────────────────────────────────────────────

def as_param_vector(params) -> NDArray[np.floating]:
    """Flatten *params* (sequence, array or parameter dataclass) to 1-D."""
    if hasattr(params, "as_array"):
        return params.as_array()
    return np.asarray(params, dtype=np.float64).reshape(-1)


def check_param_count(params, variant: ModelVariant) -> NDArray[np.floating]:
    """Return the parameter vector, raising if its length is wrong for *variant*."""
    vec = as_param_vector(params)
    n = variant.n_params
    if vec.size != n:
        raise ParameterCountError(
            vec.size,
            (n,),
            f"For the {variant.value} model the parameter vector must have "
            f"exactly {n} elements [{', '.join(variant.param_names)}], "
            f"got {vec.size}",
        )
    return vec


# ── closed-form kernels (no shape handling) ──────────────────────────────────

def simple_kernel(p: NDArray[np.floating], X: NDArray, T: NDArray) -> NDArray[np.floating]:
    A, k, b, o, c = p
    return A * np.sin(k * X + b * T + o) + c


def reduced_kernel(p: NDArray[np.floating], X: NDArray, T: NDArray) -> NDArray[np.floating]:
    A, k0, k1, b0, b1, mu, o, c = p
    phase = (k0 + k1 * X) * X + (b0 + b1 * T) * T + mu * X * T + o
    return A * np.sin(phase) + c


def expanded_kernel(p: NDArray[np.floating], x: NDArray, t: NDArray) -> NDArray[np.floating]:
    A, k0, k1, k2, b0, b1, b2, o, c = p
    phase = (k0 + k1 * x + k2 * t) * x + (b0 + b1 * x + b2 * t) * t + o
    return A * np.sin(phase) + c


KERNELS = {
    ModelVariant.SIMPLE: simple_kernel,
    ModelVariant.REDUCED: reduced_kernel,
    ModelVariant.EXPANDED: expanded_kernel,
}


# ── public evaluators ────────────────────────────────────────────────────────

def evaluate_simple(params, x_input: ArrayLike, t_input: ArrayLike) -> NDArray[np.floating]:
    """Evaluate the simple model ``A sin(k x + b t + o) + c``.

    Parameters
    ----------
    params : sequence of 5 floats or SimpleParams
        ``[A, k, b, o, c]``.
    x_input, t_input : array_like
        Axis vectors (``nx``, ``nt``) or two grids of identical shape.

    Returns
    -------
    Y : ndarray
        Same shape as the canonical grid, ``(nt, nx)`` for vector input.
    """
    p = check_param_count(params, ModelVariant.SIMPLE)
    X, T = normalize_coordinates(x_input, t_input)
    return simple_kernel(p, X, T)


def evaluate_reduced(params, x_input: ArrayLike, t_input: ArrayLike) -> NDArray[np.floating]:
    """Evaluate the reduced frequency-dispersion model.

    ``params`` is ``[A, k0, k1, b0, b1, mu, o, c]``; coordinates are
    handled exactly as in :func:`evaluate_simple`.  With
    ``k1 = b1 = mu = 0`` the result equals the simple model with
    ``k = k0``, ``b = b0``.
    """
    p = check_param_count(params, ModelVariant.REDUCED)
    X, T = normalize_coordinates(x_input, t_input)
    return reduced_kernel(p, X, T)


def evaluate_expanded(params, paired: ArrayLike) -> NDArray[np.floating]:
    """Evaluate the expanded frequency-dispersion model on paired samples.

    Parameters
    ----------
    params : sequence of 9 floats or ExpandedParams
        ``[A, k0, k1, k2, b0, b1, b2, o, c]``.
    paired : array_like, shape ``(N, 2)``
        Column 0 holds x, column 1 holds t.  No gridding is performed.

    Returns
    -------
    Y : ndarray, shape ``(N,)``
    """
    p = check_param_count(params, ModelVariant.EXPANDED)
    x, t = split_paired(paired)
    return expanded_kernel(p, x, t)


__all__ = [
    "as_param_vector",
    "check_param_count",
    "simple_kernel",
    "reduced_kernel",
    "expanded_kernel",
    "KERNELS",
    "evaluate_simple",
    "evaluate_reduced",
    "evaluate_expanded",
]

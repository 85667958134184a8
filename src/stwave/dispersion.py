"""
Amplitude dispersion (weighting) functions.

A dispersion function maps coordinate values to elementwise weights that
are multiplied onto STW model output to simulate attenuation,
enhancement or localisation.

Univariate kinds act on one coordinate array ``mu`` (x or t) and return an
array of the same shape:

=====================  =====================================  ==========
kind                   D(mu)                                  requires
=====================  =====================================  ==========
``linear``             ``max(0, 1 - alpha mu)``               alpha
``exponential``        ``exp(-alpha mu)``                     alpha
``inverse_power_law``  ``(1 + alpha mu^2)^(-1/2)``            alpha
``quadratic``          ``1 - alpha mu^2``                     alpha
``gaussian``           ``exp(-alpha mu^2)``                   alpha
``gaussian_bump``      ``exp(-(mu - mu0)^2 / (2 sigma^2))``   mu0, sigma
``logarithmic``        ``1 / (1 + alpha log(1 + |mu|))``      alpha
``sigmoid``            ``1 / (1 + exp(alpha mu))``            alpha
``tanh``               ``(1 - tanh(alpha mu)) / 2``           alpha
=====================  =====================================  ==========

Bivariate kinds act on coordinate pairs: an array whose last axis has
length 2 (``[..., 0]`` = x, ``[..., 1]`` = t).  An ``(N, 2)`` input gives
an ``(N,)`` weight; an ``(nt, nx, 2)`` stack (see
:func:`stwave.grid.stack_coordinates`) gives an ``(nt, nx)`` weight.

=====================  ===================================================  ============
kind                   D(x, t)                                              requires
=====================  ===================================================  ============
``multiplicative``     ``exponential(x, alpha) * inverse_power_law(t, alpha)``  alpha
``bivariate``          ``exp(-alpha x^2 - alpha t^2 - beta x t)``           alpha, beta
``gaussian_envelope``  ``exp(-(x^2 + t^2) / (2 sigma^2))``                  sigma
``power_law``          ``(1 + alpha x^2 + alpha t^2)^(-gamma)``             alpha, gamma
=====================  ===================================================  ============

``multiplicative`` is asymmetric: x decays exponentially, t by
the inverse power law.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional, Tuple

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .errors import MissingHyperparameterError, ShapeError, UnknownDispersionKindError

HYPERPARAMETERS = ("alpha", "beta", "gamma", "mu0", "sigma")


# ═══════════════════════════════════════════════════════════════════
#  Univariate kinds
# ═══════════════════════════════════════════════════════════════════

def _linear(mu, alpha):
    return np.maximum(0.0, 1.0 - alpha * mu)


def _exponential(mu, alpha):
    return np.exp(-alpha * mu)


def _inverse_power_law(mu, alpha):
    return (1.0 + alpha * mu ** 2) ** -0.5


def _quadratic(mu, alpha):
    # goes negative once alpha * mu^2 > 1
    return 1.0 - alpha * mu ** 2


def _gaussian(mu, alpha):
    return np.exp(-alpha * mu ** 2)


def _gaussian_bump(mu, mu0, sigma):
    return np.exp(-((mu - mu0) ** 2) / (2.0 * sigma ** 2))


def _logarithmic(mu, alpha):
    return 1.0 / (1.0 + alpha * np.log1p(np.abs(mu)))


def _sigmoid(mu, alpha):
    with np.errstate(over="ignore"):
        return 1.0 / (1.0 + np.exp(alpha * mu))


def _tanh(mu, alpha):
    return (1.0 - np.tanh(alpha * mu)) / 2.0


# ═══════════════════════════════════════════════════════════════════
#  Bivariate kinds
# ═══════════════════════════════════════════════════════════════════

def _multiplicative(x, t, alpha):
    return _exponential(x, alpha) * _inverse_power_law(t, alpha)


def _bivariate(x, t, alpha, beta):
    return np.exp(-alpha * x ** 2 - alpha * t ** 2 - beta * x * t)


def _gaussian_envelope(x, t, sigma):
    return np.exp(-(x ** 2 + t ** 2) / (2.0 * sigma ** 2))


def _power_law(x, t, alpha, gamma):
    return (1.0 + alpha * x ** 2 + alpha * t ** 2) ** (-gamma)


# name -> (function, required hyperparameters in call order)
_UNIVARIATE: Dict[str, Tuple[Callable[..., NDArray], Tuple[str, ...]]] = {
    "linear": (_linear, ("alpha",)),
    "exponential": (_exponential, ("alpha",)),
    "inverse_power_law": (_inverse_power_law, ("alpha",)),
    "quadratic": (_quadratic, ("alpha",)),
    "gaussian": (_gaussian, ("alpha",)),
    "gaussian_bump": (_gaussian_bump, ("mu0", "sigma")),
    "logarithmic": (_logarithmic, ("alpha",)),
    "sigmoid": (_sigmoid, ("alpha",)),
    "tanh": (_tanh, ("alpha",)),
}

_BIVARIATE: Dict[str, Tuple[Callable[..., NDArray], Tuple[str, ...]]] = {
    "multiplicative": (_multiplicative, ("alpha",)),
    "bivariate": (_bivariate, ("alpha", "beta")),
    "gaussian_envelope": (_gaussian_envelope, ("sigma",)),
    "power_law": (_power_law, ("alpha", "gamma")),
}

UNIVARIATE_KINDS: Tuple[str, ...] = tuple(_UNIVARIATE)
BIVARIATE_KINDS: Tuple[str, ...] = tuple(_BIVARIATE)
DISPERSION_KINDS: Tuple[str, ...] = UNIVARIATE_KINDS + BIVARIATE_KINDS


def _lookup(kind: str) -> Tuple[str, Callable[..., NDArray], Tuple[str, ...], bool]:
    name = str(kind).strip().lower()
    if name in _UNIVARIATE:
        fn, required = _UNIVARIATE[name]
        return name, fn, required, False
    if name in _BIVARIATE:
        fn, required = _BIVARIATE[name]
        return name, fn, required, True
    raise UnknownDispersionKindError(kind, DISPERSION_KINDS)


def is_bivariate(kind: str) -> bool:
    """True if *kind* takes (x, t) coordinate pairs."""
    return _lookup(kind)[3]


def required_hyperparameters(kind: str) -> Tuple[str, ...]:
    """Names of the scalars *kind* needs, in call order."""
    return _lookup(kind)[2]


# ═══════════════════════════════════════════════════════════════════
#  Public entry point
# ═══════════════════════════════════════════════════════════════════

def dispersion(
    kind: str,
    coordinate: ArrayLike,
    alpha: Optional[float] = None,
    beta: Optional[float] = None,
    gamma: Optional[float] = None,
    mu0: Optional[float] = None,
    sigma: Optional[float] = None,
) -> NDArray[np.floating]:
    """Compute dispersion weights of the given *kind*.

    Parameters
    ----------
    kind : str
        One of :data:`DISPERSION_KINDS` (case-insensitive).
    coordinate : array_like
        Coordinate values ``mu`` for univariate kinds; an array with a
        trailing axis of length 2 holding ``(x, t)`` for bivariate kinds.
    alpha, beta, gamma, mu0, sigma : float, optional
        Hyperparameters.  Only those the kind requires are read.

    Returns
    -------
    weight : ndarray
        Same shape as *coordinate* (univariate) or as
        ``coordinate[..., 0]`` (bivariate).

    Raises
    ------
    UnknownDispersionKindError
        *kind* is not in the catalog.
    MissingHyperparameterError
        A required hyperparameter is ``None``.
    ShapeError
        Bivariate input without a trailing axis of length 2.
    """
    name, fn, required, bivariate = _lookup(kind)

    given = {"alpha": alpha, "beta": beta, "gamma": gamma, "mu0": mu0, "sigma": sigma}
    args = []
    for key in required:
        if given[key] is None:
            raise MissingHyperparameterError(name, key)
        args.append(float(given[key]))

    mu = np.asarray(coordinate, dtype=np.float64)
    if not bivariate:
        return fn(mu, *args)

    if mu.ndim < 1 or mu.shape[-1] != 2:
        raise ShapeError(
            f"Bivariate dispersion {name!r} needs (x, t) pairs with a trailing "
            f"axis of length 2, got shape {mu.shape}"
        )
    return fn(mu[..., 0], mu[..., 1], *args)


__all__ = [
    "HYPERPARAMETERS",
    "UNIVARIATE_KINDS",
    "BIVARIATE_KINDS",
    "DISPERSION_KINDS",
    "is_bivariate",
    "required_hyperparameters",
    "dispersion",
]

"""
Variant dispatch for the STW model evaluators.

:func:`evaluate` picks the model form either from an explicit selector
(preferred) or from the parameter-vector length, validates the vector
against that form, and delegates to the matching closed form with the
coordinates in whichever layout was supplied:

=================  =====================  ===================
coords             simple / reduced       expanded
=================  =====================  ===================
``(x, t)`` axes    grid ``(nt, nx)``      grid ``(nt, nx)``
``(X, T)`` grids   same shape as ``X``    same shape as ``X``
``(N, 2)`` array   ``(N,)``               ``(N,)``
=================  =====================  ===================

Axis/grid pairs must be passed as a 2-tuple; anything else (an array, or a
nested list of ``[x, t]`` rows) is read as paired samples and never gridded.
"""

from __future__ import annotations

import logging
from typing import Dict

import numpy as np
from numpy.typing import NDArray

from .errors import ParameterCountError
from .grid import normalize_coordinates, split_paired
from .models import KERNELS, as_param_vector, check_param_count
from .params import ModelVariant

logger = logging.getLogger(__name__)

#: Parameter-vector length of each variant.
VARIANT_BY_LENGTH: Dict[int, ModelVariant] = {
    v.n_params: v for v in ModelVariant
}


def infer_variant(n_params: int) -> ModelVariant:
    """Variant implied by a parameter-vector length (5, 8 or 9)."""
    try:
        return VARIANT_BY_LENGTH[int(n_params)]
    except KeyError:
        raise ParameterCountError(
            n_params,
            sorted(VARIANT_BY_LENGTH),
            f"Cannot infer model variant from {n_params} parameters; "
            f"valid lengths are 5 (simple), 8 (reduced) and 9 (expanded)",
        ) from None


def resolve_variant(params, variant: "str | ModelVariant | None" = None) -> ModelVariant:
    """Variant to evaluate: the explicit selector, the container's own, or inferred."""
    if variant is not None:
        return ModelVariant.from_name(variant)
    own = getattr(params, "variant", None)
    if isinstance(own, ModelVariant):
        return own
    return infer_variant(as_param_vector(params).size)


def evaluate(
    params,
    coords,
    variant: "str | ModelVariant | None" = None,
) -> NDArray[np.floating]:
    """Evaluate an STW model, selecting the variant explicitly or by length.

    Parameters
    ----------
    params : sequence of floats or parameter dataclass
        5, 8 or 9 values in the order of the chosen variant.
    coords : tuple or array_like
        A tuple ``(x, t)`` of axis vectors or ``(X, T)`` of congruent grids;
        otherwise ``(N, 2)`` paired samples (array or nested list).
    variant : {"simple", "reduced", "expanded"} or ModelVariant, optional
        When given, the parameter count is checked against this variant
        only, even if the length would match another one.

    Raises
    ------
    ParameterCountError
        Wrong parameter length for the selected or inferred variant.
    ShapeError
        Coordinates in none of the accepted layouts.
    UnknownModelVariantError
        Unrecognised *variant* string.
    """
    selected = resolve_variant(params, variant)
    p = check_param_count(params, selected)
    kernel = KERNELS[selected]

    if isinstance(coords, tuple) and len(coords) == 2:
        X, T = normalize_coordinates(coords[0], coords[1])
        logger.debug("Using %s STW model on grid %s", selected.value, X.shape)
        return kernel(p, X, T)

    x, t = split_paired(np.asarray(coords, dtype=np.float64))
    logger.debug("Using %s STW model on %d paired samples", selected.value, x.size)
    return kernel(p, x, t)


__all__ = ["VARIANT_BY_LENGTH", "infer_variant", "resolve_variant", "evaluate"]

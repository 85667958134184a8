"""
stwave: closed-form sinusoidal spatiotemporal (STW) wave models.

Forward model for fitting and visualisation: given a parameter vector and a
coordinate grid, produce the predicted field ``Y[t_i, x_j]``, and weight it
with amplitude dispersion functions.

Part 1: Coordinate normalisation (axis vectors, grids, paired samples).
Part 2: Model evaluators: simple, reduced and expanded dispersion.
Part 3: Variant dispatch by explicit selector or parameter count.
Part 4: Dispersion library and explicit composition with model output.
Part 5: Run configuration, file I/O, plotting and the ``stwave`` CLI.
"""

from .errors import (
    MissingHyperparameterError,
    ParameterCountError,
    STWaveError,
    ShapeError,
    UnknownDispersionKindError,
    UnknownModelVariantError,
)
from .grid import (
    is_paired,
    make_axis,
    normalize_coordinates,
    split_paired,
    stack_coordinates,
    to_paired,
)
from .params import (
    ExpandedParams,
    ModelVariant,
    ParameterSpec,
    ReducedParams,
    SimpleParams,
    build_params,
    parameter_specs,
    params_for,
)
from .models import evaluate_expanded, evaluate_reduced, evaluate_simple
from .dispatch import evaluate, infer_variant, resolve_variant
from .dispersion import (
    BIVARIATE_KINDS,
    DISPERSION_KINDS,
    UNIVARIATE_KINDS,
    dispersion,
    is_bivariate,
    required_hyperparameters,
)
from .compose import apply_dispersion, disperse, disperse_paired
from .config import ConfigError, load_config

__all__ = [
    # errors
    "STWaveError",
    "ShapeError",
    "ParameterCountError",
    "UnknownDispersionKindError",
    "MissingHyperparameterError",
    "UnknownModelVariantError",
    "ConfigError",
    # Part 1
    "normalize_coordinates",
    "is_paired",
    "split_paired",
    "to_paired",
    "stack_coordinates",
    "make_axis",
    # Part 2
    "ModelVariant",
    "ParameterSpec",
    "SimpleParams",
    "ReducedParams",
    "ExpandedParams",
    "build_params",
    "parameter_specs",
    "params_for",
    "evaluate_simple",
    "evaluate_reduced",
    "evaluate_expanded",
    # Part 3
    "evaluate",
    "infer_variant",
    "resolve_variant",
    # Part 4
    "UNIVARIATE_KINDS",
    "BIVARIATE_KINDS",
    "DISPERSION_KINDS",
    "dispersion",
    "is_bivariate",
    "required_hyperparameters",
    "apply_dispersion",
    "disperse",
    "disperse_paired",
    # Part 5
    "load_config",
]

"""
Model variants and immutable parameter containers.

Each STW model variant has a fixed, ordered parameter vector:

=========  ==  ===============================================
variant    n   order
=========  ==  ===============================================
simple     5   ``[A, k, b, o, c]``
reduced    8   ``[A, k0, k1, b0, b1, mu, o, c]``
expanded   9   ``[A, k0, k1, k2, b0, b1, b2, o, c]``
=========  ==  ===============================================

The evaluators accept plain sequences; the frozen dataclasses here give
the same vectors names, defaults and a printable summary, and replace the
mutable slider state of an interactive front end with a value that is
passed explicitly on every call.
"""

from __future__ import annotations

import math
from dataclasses import astuple, dataclass, fields
from enum import Enum
from typing import Any, ClassVar, Dict, Mapping, Sequence, Tuple, Type

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .errors import ParameterCountError, UnknownModelVariantError


class ModelVariant(str, Enum):
    """Closed-form STW model variants."""

    SIMPLE = "simple"
    REDUCED = "reduced"
    EXPANDED = "expanded"

    @classmethod
    def from_name(cls, name: "str | ModelVariant") -> "ModelVariant":
        """Look up a variant by (case-insensitive) name."""
        if isinstance(name, ModelVariant):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            valid = ", ".join(v.value for v in cls)
            raise UnknownModelVariantError(
                f"Unknown model variant {name!r}; expected one of: {valid}"
            ) from None

    @property
    def specs(self) -> Tuple["ParameterSpec", ...]:
        return PARAMETER_SPECS[self]

    @property
    def param_names(self) -> Tuple[str, ...]:
        return tuple(s.name for s in PARAMETER_SPECS[self])

    @property
    def n_params(self) -> int:
        return len(PARAMETER_SPECS[self])


@dataclass(frozen=True)
class ParameterSpec:
    """Metadata for one model parameter.

    ``bounds`` is the range an interactive front end would offer; it is
    descriptive and never enforced by the evaluators.
    """

    name: str
    description: str
    default: float
    bounds: Tuple[float, float]


PARAMETER_SPECS: Dict[ModelVariant, Tuple[ParameterSpec, ...]] = {
    ModelVariant.SIMPLE: (
        ParameterSpec("A", "Amplitude", 1.0, (-5.0, 5.0)),
        ParameterSpec("k", "Wave number (spatial frequency)", 2.0, (0.0, 10.0)),
        ParameterSpec("b", "Temporal frequency", 3.0, (0.0, 10.0)),
        ParameterSpec("o", "Phase shift", 0.0, (-math.pi, math.pi)),
        ParameterSpec("c", "Constant offset", 0.0, (-2.0, 2.0)),
    ),
    ModelVariant.REDUCED: (
        ParameterSpec("A", "Amplitude", 1.0, (-5.0, 5.0)),
        ParameterSpec("k0", "Base wave number", 2.0, (0.0, 10.0)),
        ParameterSpec("k1", "Linear wave number coefficient", 0.1, (-1.0, 1.0)),
        ParameterSpec("b0", "Base frequency", 3.0, (0.0, 10.0)),
        ParameterSpec("b1", "Linear frequency coefficient", 0.1, (-1.0, 1.0)),
        ParameterSpec("mu", "Cross-term coupling coefficient", 0.1, (-1.0, 1.0)),
        ParameterSpec("o", "Phase shift", 0.0, (-math.pi, math.pi)),
        ParameterSpec("c", "Constant offset", 0.0, (-2.0, 2.0)),
    ),
    ModelVariant.EXPANDED: (
        ParameterSpec("A", "Amplitude", 1.0, (-5.0, 5.0)),
        ParameterSpec("k0", "Base wave number", 2.0, (0.0, 10.0)),
        ParameterSpec("k1", "Wave number variation with x", 0.1, (-1.0, 1.0)),
        ParameterSpec("k2", "Wave number variation with t", 0.1, (-1.0, 1.0)),
        ParameterSpec("b0", "Base frequency", 3.0, (0.0, 10.0)),
        ParameterSpec("b1", "Frequency variation with x", 0.1, (-1.0, 1.0)),
        ParameterSpec("b2", "Frequency variation with t", 0.1, (-1.0, 1.0)),
        ParameterSpec("o", "Phase shift", 0.0, (-math.pi, math.pi)),
        ParameterSpec("c", "Constant offset", 0.0, (-2.0, 2.0)),
    ),
}


def parameter_specs(variant: "str | ModelVariant") -> Tuple[ParameterSpec, ...]:
    """Ordered parameter metadata for *variant*."""
    return ModelVariant.from_name(variant).specs


# ── parameter containers ─────────────────────────────────────────────────────

class _ModelParams:
    """Shared behaviour of the frozen parameter dataclasses."""

    variant: ClassVar[ModelVariant]

    @classmethod
    def from_vector(cls, values: ArrayLike):
        """Build from an ordered parameter vector."""
        vec = np.asarray(values, dtype=np.float64).reshape(-1)
        n = cls.variant.n_params
        if vec.size != n:
            raise ParameterCountError(
                vec.size,
                (n,),
                f"{cls.variant.value} model requires exactly {n} parameters "
                f"[{', '.join(cls.variant.param_names)}], got {vec.size}",
            )
        return cls(*(float(v) for v in vec))

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]):
        """Build from a ``name -> value`` mapping, defaulting absent names."""
        names = cls.variant.param_names
        unknown = sorted(set(values) - set(names))
        if unknown:
            raise ValueError(
                f"Unknown {cls.variant.value} parameters: {', '.join(unknown)}"
            )
        merged = {s.name: s.default for s in cls.variant.specs}
        merged.update({k: float(v) for k, v in values.items()})
        return cls(**merged)

    @classmethod
    def defaults(cls):
        """Instance holding every parameter's default value."""
        return cls(*(s.default for s in cls.variant.specs))

    def as_array(self) -> NDArray[np.floating]:
        """Ordered parameter vector as a float array."""
        return np.array(astuple(self), dtype=np.float64)

    def as_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def __len__(self) -> int:
        return self.variant.n_params

    def summary(self) -> str:
        """One-line-per-parameter human-readable summary."""
        lines = [f"{self.variant.value.upper()} STW model parameters:"]
        for f in fields(self):
            lines.append(f"  {f.name:<4s} = {getattr(self, f.name):g}")
        return "\n".join(lines)


@dataclass(frozen=True)
class SimpleParams(_ModelParams):
    """``Y = A sin(k x + b t + o) + c``."""

    A: float
    k: float
    b: float
    o: float
    c: float

    variant: ClassVar[ModelVariant] = ModelVariant.SIMPLE


@dataclass(frozen=True)
class ReducedParams(_ModelParams):
    """``Y = A sin((k0 + k1 x) x + (b0 + b1 t) t + mu x t + o) + c``."""

    A: float
    k0: float
    k1: float
    b0: float
    b1: float
    mu: float
    o: float
    c: float

    variant: ClassVar[ModelVariant] = ModelVariant.REDUCED


@dataclass(frozen=True)
class ExpandedParams(_ModelParams):
    """``Y = A sin((k0 + k1 x + k2 t) x + (b0 + b1 x + b2 t) t + o) + c``."""

    A: float
    k0: float
    k1: float
    k2: float
    b0: float
    b1: float
    b2: float
    o: float
    c: float

    variant: ClassVar[ModelVariant] = ModelVariant.EXPANDED


_PARAM_CLASSES: Dict[ModelVariant, Type[_ModelParams]] = {
    ModelVariant.SIMPLE: SimpleParams,
    ModelVariant.REDUCED: ReducedParams,
    ModelVariant.EXPANDED: ExpandedParams,
}


def params_for(variant: "str | ModelVariant") -> Type[_ModelParams]:
    """Parameter dataclass for *variant*."""
    return _PARAM_CLASSES[ModelVariant.from_name(variant)]


def build_params(
    variant: "str | ModelVariant",
    values: "Mapping[str, Any] | Sequence[float] | None" = None,
) -> _ModelParams:
    """Parameter container from a mapping, an ordered sequence or defaults."""
    cls = params_for(variant)
    if values is None:
        return cls.defaults()
    if isinstance(values, Mapping):
        return cls.from_mapping(values)
    return cls.from_vector(values)


__all__ = [
    "ModelVariant",
    "ParameterSpec",
    "PARAMETER_SPECS",
    "parameter_specs",
    "SimpleParams",
    "ReducedParams",
    "ExpandedParams",
    "params_for",
    "build_params",
]

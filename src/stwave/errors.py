"""
Error types raised by the STW evaluation engine.

Every error derives from :class:`STWaveError`, itself a ``ValueError``, so
callers can catch the whole family at a boundary or a single kind at the
call site.
"""

from __future__ import annotations

from typing import Sequence, Tuple


class STWaveError(ValueError):
    """Base class for structurally invalid inputs to the engine."""


class ShapeError(STWaveError):
    """Coordinates are neither two vectors nor two congruent grids."""


class ParameterCountError(STWaveError):
    """Parameter vector length does not match the model variant."""

    def __init__(self, got: int, expected: Sequence[int], message: str | None = None):
        self.got = int(got)
        self.expected: Tuple[int, ...] = tuple(int(n) for n in expected)
        if message is None:
            valid = ", ".join(str(n) for n in self.expected)
            message = (
                f"parameter vector has {self.got} elements; "
                f"expected one of: {valid}"
            )
        super().__init__(message)


class UnknownDispersionKindError(STWaveError):
    """Dispersion kind name is not in the catalog."""

    def __init__(self, kind: str, known: Sequence[str] = ()):
        self.kind = kind
        msg = f"Unknown dispersion type: {kind!r}"
        if known:
            msg += f" (known: {', '.join(known)})"
        super().__init__(msg)


class MissingHyperparameterError(STWaveError):
    """A dispersion kind was called without one of its required scalars."""

    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name
        super().__init__(f"dispersion {kind!r} requires hyperparameter {name!r}")


class UnknownModelVariantError(STWaveError):
    """Model selector is not one of the known variants."""


__all__ = [
    "STWaveError",
    "ShapeError",
    "ParameterCountError",
    "UnknownDispersionKindError",
    "MissingHyperparameterError",
    "UnknownModelVariantError",
]

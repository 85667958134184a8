"""Run configuration for STW model evaluation.

A run is described by a nested dictionary with four sections:

- ``grid``: where the coordinates come from: a ``linspace`` for each
  axis, a data file holding the ``x`` and ``t`` vectors (``file``), or a
  table of ``(x, t)`` sample rows evaluated without gridding (``paired``).
- ``model``: the variant and its parameters (a ``name -> value`` mapping
  or a list in the variant's order; omitted names take their defaults).
- ``dispersion``: an ordered list of weights to apply to the field, each
  ``{kind, axis, alpha, beta, gamma, mu0, sigma}``.
- ``outputs``: output directory and which artifacts to write.

:func:`load_config` reads a YAML file, merges it deeply into
:data:`DEFAULT_CONFIG`, applies dotted-key overrides (``model.variant``,
``grid.x.num``) and validates the result.  Invalid values raise
:class:`ConfigError`; unusual but legal ones emit a ``RuntimeWarning``.
"""

from __future__ import annotations

import json
import warnings
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, MutableMapping

import yaml

from .dispersion import DISPERSION_KINDS, is_bivariate, required_hyperparameters
from .errors import STWaveError
from .params import ModelVariant, build_params as _build_params

DEFAULT_CONFIG: Dict[str, Any] = {
    "grid": {
        "source": "linspace",
        "x": {"start": 0.0, "stop": 10.0, "num": 50},
        "t": {"start": 0.0, "stop": 5.0, "num": 30},
        "path": None,
    },
    "model": {
        "variant": "reduced",
        "params": {},
    },
    "dispersion": [],
    "outputs": {
        "out_dir": "outputs/stwave",
        "save_npz": True,
        "save_csv": False,
        "plots": True,
    },
}

GRID_SOURCES = ("linspace", "file", "paired")

#: Grids larger than this trigger a RuntimeWarning.
LARGE_GRID_POINTS = 1_000_000


class ConfigError(ValueError):
    """Raised when a configuration fails validation."""


def _deep_update(base: MutableMapping[str, Any], update: Mapping[str, Any]) -> None:
    """Recursively merge ``update`` into ``base`` in-place.

    Nested mappings are merged key by key; lists and scalars from
    ``update`` replace those in ``base``.

    Example
    -------
    >>> base = {"grid": {"x": {"num": 50}, "t": {"num": 30}}}
    >>> _deep_update(base, {"grid": {"x": {"num": 80}}})
    >>> base
    {'grid': {'x': {'num': 80}, 't': {'num': 30}}}
    """

    for key, value in update.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), MutableMapping):
            _deep_update(base[key], value)  # type: ignore[index]
        else:
            base[key] = value


def _set_by_dotted_key(config: MutableMapping[str, Any], dotted_key: str, value: Any) -> None:
    """Assign ``value`` into ``config`` using a dotted path such as ``grid.x.num``.

    Intermediate mappings are created (or replace non-mapping values) as
    needed.
    """

    keys = dotted_key.split(".")
    target: MutableMapping[str, Any] = config
    for key in keys[:-1]:
        if key not in target or not isinstance(target[key], MutableMapping):
            target[key] = {}
        target = target[key]  # type: ignore[assignment]
    target[keys[-1]] = value


def _validate_axis(name: str, axis: Any) -> int:
    if not isinstance(axis, Mapping):
        raise ConfigError(f"grid.{name} must be a mapping with start/stop/num.")
    missing = [key for key in ("start", "stop", "num") if key not in axis]
    if missing:
        raise ConfigError(f"grid.{name} missing keys: {', '.join(missing)}")
    num = axis["num"]
    if isinstance(num, bool) or not isinstance(num, int) or num < 1:
        raise ConfigError(f"grid.{name}.num must be a positive integer, got {num!r}.")
    return num


def _validate_dispersion(entries: Any) -> None:
    if not isinstance(entries, list):
        raise ConfigError("dispersion must be a list of mappings.")
    for i, entry in enumerate(entries):
        if not isinstance(entry, Mapping) or "kind" not in entry:
            raise ConfigError(f"dispersion[{i}] must be a mapping with a 'kind'.")
        kind = str(entry["kind"]).lower()
        if kind not in DISPERSION_KINDS:
            raise ConfigError(
                f"dispersion[{i}]: unknown kind {entry['kind']!r}; "
                f"expected one of: {', '.join(DISPERSION_KINDS)}"
            )
        axis = entry.get("axis")
        if is_bivariate(kind):
            if axis not in (None, "xt"):
                raise ConfigError(f"dispersion[{i}]: bivariate kind {kind!r} needs axis 'xt'.")
        elif axis not in (None, "x", "t"):
            raise ConfigError(f"dispersion[{i}]: axis must be 'x' or 't' for {kind!r}.")
        missing = [h for h in required_hyperparameters(kind) if entry.get(h) is None]
        if missing:
            raise ConfigError(
                f"dispersion[{i}]: {kind!r} requires {', '.join(missing)}."
            )


def _validate(config: Mapping[str, Any]) -> None:
    """Perform sanity checks on the merged configuration.

    Raises :class:`ConfigError` for values that would make evaluation
    fail; warns with ``RuntimeWarning`` for very large grids.
    """

    grid = config["grid"]
    source = grid.get("source", "linspace")
    if source not in GRID_SOURCES:
        raise ConfigError(f"grid.source must be one of: {', '.join(GRID_SOURCES)}.")
    if source in ("file", "paired"):
        if not grid.get("path"):
            raise ConfigError(f"grid.path is required when grid.source is '{source}'.")
    else:
        nx = _validate_axis("x", grid.get("x"))
        nt = _validate_axis("t", grid.get("t"))
        if nx * nt > LARGE_GRID_POINTS:
            warnings.warn(
                f"Grid of {nt} x {nx} points is large; evaluation may be slow.",
                RuntimeWarning,
                stacklevel=3,
            )

    model = config["model"]
    if not isinstance(model, Mapping):
        raise ConfigError("model must be a mapping with 'variant' and 'params'.")
    try:
        build_params(config)
    except STWaveError as exc:
        raise ConfigError(f"model: {exc}") from exc
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"model.params: {exc}") from exc

    _validate_dispersion(config.get("dispersion", []))

    outputs = config.get("outputs", {})
    if not outputs.get("out_dir"):
        raise ConfigError("outputs.out_dir must be a non-empty path.")


def build_params(config: Mapping[str, Any]):
    """Parameter dataclass described by the ``model`` section."""

    model = config["model"]
    variant = ModelVariant.from_name(model.get("variant", "reduced"))
    values = model.get("params") or None
    return _build_params(variant, values)


def load_config(
    path: str | Path | None = None,
    overrides: Iterable[tuple[str, Any]] | None = None,
) -> Dict[str, Any]:
    """Load a YAML configuration file and merge it with defaults.

    Steps:

    1. Deep-copy :data:`DEFAULT_CONFIG`.
    2. If ``path`` is given, load the YAML and deep-merge it in.
    3. Apply dotted-key ``overrides``.
    4. Validate.

    Parameters
    ----------
    path:
        YAML file, or ``None`` to start from the defaults alone.
    overrides:
        Optional iterable of ``(dotted_key, value)`` pairs.

    Returns
    -------
    dict
        Merged, validated configuration; safe for the caller to mutate.
    """

    cfg = json.loads(json.dumps(DEFAULT_CONFIG))
    if path is not None:
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(config_path)
        with config_path.open("r", encoding="utf-8") as fh:
            try:
                user_cfg = yaml.safe_load(fh) or {}
            except yaml.YAMLError as exc:
                raise ConfigError(f"Could not parse {config_path}: {exc}") from exc
        if not isinstance(user_cfg, Mapping):
            raise ConfigError("Configuration file must define a mapping.")
        # a params list replaces the default mapping wholesale
        _deep_update(cfg, user_cfg)

    if overrides:
        for key, value in overrides:
            _set_by_dotted_key(cfg, key, value)

    _validate(cfg)
    return cfg


__all__ = ["load_config", "build_params", "DEFAULT_CONFIG", "ConfigError"]

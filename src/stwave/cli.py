"""Command-line interface for STW model evaluation.

Subcommands
-----------
``evaluate``
    Load a run configuration, evaluate the model on its grid (or on the
    paired samples of a ``grid.source: paired`` table), apply the
    configured dispersion weights and write ``field.npz`` (plus
    ``field.csv`` / ``field.png`` when enabled).
``dispersion``
    Evaluate univariate dispersion kinds over a ``linspace`` axis and plot
    them side by side.
``params``
    List parameter names, defaults and ranges of a model variant.

Extra ``--dotted.key value`` arguments to ``evaluate`` become config
overrides, e.g. ``stwave evaluate --config run.yaml --grid.x.num 200``.
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Tuple

import numpy as np

from .compose import disperse, disperse_paired
from .config import build_params, load_config
from .dispatch import evaluate
from .dispersion import BIVARIATE_KINDS, HYPERPARAMETERS, UNIVARIATE_KINDS, dispersion
from .grid import make_axis, normalize_coordinates, split_paired
from .io import load_axes, load_paired, save_field, save_field_csv
from .params import ModelVariant, parameter_specs
from .plotting import plot_dispersion_curves, plot_field, plot_samples


def _parse_overrides(unknown: List[str]) -> List[Tuple[str, Any]]:
    """Convert unknown CLI args into ``(dotted_key, value)`` override pairs.

    The parser hands over leftovers such as ``--grid.x.num 50``; they are
    consumed two at a time, the leading ``--`` stripped and the value
    decoded as JSON when possible (so ``50`` becomes an int).
    """

    overrides: List[Tuple[str, Any]] = []
    i = 0
    while i < len(unknown):
        key = unknown[i]
        if not key.startswith("--"):
            raise ValueError(f"Unrecognized argument '{key}'")
        if i + 1 >= len(unknown):
            raise ValueError(f"Missing value for override '{key}'")
        overrides.append((key[2:], _convert_value(unknown[i + 1])))
        i += 2
    return overrides


def _convert_value(value: str):
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return value


def _build_axes(config: Dict[str, Any]) -> Tuple[np.ndarray, np.ndarray]:
    grid = config["grid"]
    if grid.get("source", "linspace") == "file":
        return load_axes(grid["path"])
    x_cfg, t_cfg = grid["x"], grid["t"]
    x = make_axis(x_cfg["start"], x_cfg["stop"], x_cfg["num"])
    t = make_axis(t_cfg["start"], t_cfg["stop"], t_cfg["num"])
    return x, t


def run_evaluate(config: Dict[str, Any]) -> Dict[str, Any]:
    """Evaluate and disperse the field described by *config*; write outputs.

    With ``grid.source: paired`` the model is evaluated on the ``(N, 2)``
    sample rows of ``grid.path`` and ``Y`` has shape ``(N,)``; otherwise
    ``Y`` is the ``(nt, nx)`` grid over the configured axes.

    Returns a dict with ``x``, ``t``, ``Y``, ``params`` and the written
    ``paths``.
    """

    params = build_params(config)
    paired_source = config["grid"].get("source") == "paired"
    if paired_source:
        paired = load_paired(config["grid"]["path"])
        x, t = split_paired(paired)
        Y = evaluate(params, paired)
    else:
        x, t = _build_axes(config)
        Y = evaluate(params, (x, t))

    for entry in config.get("dispersion", []):
        hyper = {h: entry[h] for h in HYPERPARAMETERS if entry.get(h) is not None}
        if paired_source:
            Y = disperse_paired(Y, paired, entry["kind"], entry.get("axis"), **hyper)
        else:
            Y = disperse(Y, x, t, entry["kind"], entry.get("axis"), **hyper)

    outputs = config["outputs"]
    out_dir = Path(outputs["out_dir"])
    title = f"{params.variant.value.capitalize()} STW model"
    paths: Dict[str, Path] = {}
    if outputs.get("save_npz", True):
        paths["npz"] = save_field(
            out_dir,
            "field",
            x=x,
            t=t,
            Y=Y,
            params=params.as_array(),
            variant=np.array(params.variant.value),
        )
    if outputs.get("save_csv", False):
        X, T = (x, t) if paired_source else normalize_coordinates(x, t)
        paths["csv"] = save_field_csv(out_dir, "field", X, T, Y)
    if outputs.get("plots", True):
        if paired_source:
            paths["png"] = plot_samples(
                paired, Y, out_dir / "field.png", title=title, footer=params.summary()
            )
        else:
            paths["png"] = plot_field(
                x, t, Y, out_dir / "field.png", title=title, footer=params.summary()
            )

    return {"x": x, "t": t, "Y": Y, "params": params, "paths": paths}


def cmd_evaluate(args: argparse.Namespace, overrides: List[Tuple[str, Any]]) -> None:
    if args.variant:
        overrides = [("model.variant", args.variant)] + overrides
    config = load_config(args.config, overrides)
    result = run_evaluate(config)

    Y = result["Y"]
    print(result["params"].summary())
    if Y.ndim == 1:
        print(f"\nPaired samples: {Y.size}")
    else:
        print(f"\nGrid: x({result['x'].size}), t({result['t'].size})")
        print(f"Output size: [{Y.shape[0]}, {Y.shape[1]}] (nt x nx)")
    print(f"Output range: [{Y.min():.3f}, {Y.max():.3f}]")
    for kind, path in result["paths"].items():
        print(f"  {kind}: {path}")


def cmd_dispersion(args: argparse.Namespace) -> None:
    bivariate = [k for k in args.kinds if k.lower() in BIVARIATE_KINDS]
    if bivariate:
        raise ValueError(f"Only univariate kinds can be plotted as curves: {', '.join(bivariate)}")

    mu = make_axis(args.start, args.stop, args.num)
    hyper = {h: getattr(args, h) for h in HYPERPARAMETERS}
    curves = {kind: dispersion(kind, mu, **hyper) for kind in args.kinds}
    path = plot_dispersion_curves(mu, curves, Path(args.out))

    print(f"Generated dispersion functions for mu from {mu.min():.1f} to {mu.max():.1f}")
    for kind, values in curves.items():
        print(f"  {kind:<18s} range [{values.min():.3f}, {values.max():.3f}]")
    print(f"Saved: {path}")


def cmd_params(args: argparse.Namespace) -> None:
    variant = ModelVariant.from_name(args.variant)
    print(f"{variant.value} model ({variant.n_params} parameters):")
    for spec in parameter_specs(variant):
        lo, hi = spec.bounds
        print(f"  {spec.name:<4s} default={spec.default:<6g} range=[{lo:.4g}, {hi:.4g}]  {spec.description}")


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI argument parser."""

    parser = argparse.ArgumentParser(prog="stwave")
    subparsers = parser.add_subparsers(dest="command", required=True)
    variants = [v.value for v in ModelVariant]

    ev = subparsers.add_parser("evaluate", help="Evaluate a model from a configuration")
    ev.add_argument("--config", help="Path to configuration YAML (defaults if omitted)")
    ev.add_argument("--variant", choices=variants, help="Override the model variant in the config")

    disp = subparsers.add_parser("dispersion", help="Plot univariate dispersion functions")
    disp.add_argument(
        "--kinds",
        nargs="+",
        default=["linear", "exponential", "inverse_power_law", "quadratic", "gaussian"],
        help=f"Kinds to plot (any of: {', '.join(UNIVARIATE_KINDS)})",
    )
    disp.add_argument("--alpha", type=float, default=0.5)
    disp.add_argument("--beta", type=float, default=None)
    disp.add_argument("--gamma", type=float, default=None)
    disp.add_argument("--mu0", type=float, default=None)
    disp.add_argument("--sigma", type=float, default=None)
    disp.add_argument("--start", type=float, default=0.0)
    disp.add_argument("--stop", type=float, default=5.0)
    disp.add_argument("--num", type=int, default=100)
    disp.add_argument("--out", default="outputs/stwave/dispersion.png", help="PNG destination")

    par = subparsers.add_parser("params", help="List parameters of a model variant")
    par.add_argument("--variant", choices=variants, default="reduced")

    return parser


def main(argv: Iterable[str] | None = None) -> None:
    """Run the command-line interface using the provided argv sequence."""

    parser = build_parser()
    args, unknown = parser.parse_known_args(argv)

    try:
        if args.command == "evaluate":
            cmd_evaluate(args, _parse_overrides(unknown))
        else:
            if unknown:
                parser.error(f"unrecognized arguments: {' '.join(unknown)}")
            if args.command == "dispersion":
                cmd_dispersion(args)
            else:
                cmd_params(args)
    except (ValueError, FileNotFoundError) as exc:
        parser.exit(2, f"stwave: error: {exc}\n")


if __name__ == "__main__":
    main()

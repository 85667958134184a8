"""Figures for STW model output and dispersion weights.

Every function writes a PNG to ``out_path`` and closes its figure.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Optional

import numpy as np
import matplotlib as mpl
import matplotlib.pyplot as plt

from .grid import is_paired

# Use non-interactive backend if needed
mpl.use('Agg')


def plot_field(
    x: np.ndarray,
    t: np.ndarray,
    Y: np.ndarray,
    out_path: Path,
    title: str = "STW model output",
    footer: Optional[str] = None,
) -> Path:
    """Plot an ``(nt, nx)`` field as an image plus a mid-time spatial profile.

    Parameters
    ----------
    x, t : ndarray
        Axis vectors of length ``nx`` and ``nt``.
    Y : ndarray, shape ``(nt, nx)``
        Field to draw; rows are time, columns are space.
    out_path : Path
        PNG destination (parent directories are created).
    title : str
        Title of the image panel.
    footer : str, optional
        Small text printed in the lower-left corner (e.g. parameter values).
    """
    x = np.asarray(x, dtype=float)
    t = np.asarray(t, dtype=float)
    Y = np.asarray(Y, dtype=float)
    if Y.shape != (t.size, x.size):
        raise ValueError(f"Field shape {Y.shape} does not match axes (nt={t.size}, nx={x.size})")

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    fig, axes = plt.subplots(1, 2, figsize=(11, 4))

    ax = axes[0]
    im = ax.imshow(
        Y,
        origin="lower",
        aspect="auto",
        extent=(x.min(), x.max(), t.min(), t.max()),
        cmap="viridis",
    )
    ax.set_xlabel("x")
    ax.set_ylabel("t")
    ax.set_title(title)
    fig.colorbar(im, ax=ax)

    mid = t.size // 2
    ax = axes[1]
    ax.plot(x, Y[mid, :], "b-", linewidth=2)
    ax.set_xlabel("x")
    ax.set_ylabel("Y")
    ax.set_title(f"Spatial profile at t = {t[mid]:.2f}")
    ax.grid(True, alpha=0.3)

    if footer:
        fig.text(0.01, 0.01, footer, fontsize=7, family="monospace")
    fig.tight_layout()
    fig.savefig(out_path, dpi=150)
    plt.close(fig)
    return out_path


def plot_dispersion_curves(
    mu: np.ndarray,
    curves: Mapping[str, np.ndarray],
    out_path: Path,
    title: str = "Dispersion functions",
) -> Path:
    """One subplot per named weight curve ``D(mu)``."""
    if not curves:
        raise ValueError("No dispersion curves to plot")

    n = len(curves)
    ncols = min(3, n)
    nrows = int(np.ceil(n / ncols))
    fig, axes = plt.subplots(nrows, ncols, figsize=(4 * ncols, 3 * nrows), squeeze=False)

    for ax, (name, values) in zip(axes.ravel(), curves.items()):
        ax.plot(mu, values, linewidth=2)
        ax.set_title(name.replace("_", " "))
        ax.set_xlabel("μ")
        ax.set_ylabel("D(μ)")
        ax.grid(True, alpha=0.3)
    for ax in axes.ravel()[n:]:
        ax.set_visible(False)

    fig.suptitle(title)
    fig.tight_layout()
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, dpi=150)
    plt.close(fig)
    return out_path


def plot_samples(
    paired: np.ndarray,
    Y: np.ndarray,
    out_path: Path,
    title: str = "STW model on paired samples",
    footer: Optional[str] = None,
) -> Path:
    """Scatter ``(N,)`` model values at their ``(x, t)`` sample locations."""
    paired = np.asarray(paired, dtype=float)
    Y = np.asarray(Y, dtype=float)
    if not is_paired(paired) or Y.shape != (paired.shape[0],):
        raise ValueError(
            f"Expected (N, 2) samples and (N,) values, got {paired.shape} and {Y.shape}"
        )

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(6, 4.5))
    sc = ax.scatter(paired[:, 0], paired[:, 1], c=Y, cmap="viridis", s=12)
    ax.set_xlabel("x")
    ax.set_ylabel("t")
    ax.set_title(title)
    fig.colorbar(sc, ax=ax, label="Y")

    if footer:
        fig.text(0.01, 0.01, footer, fontsize=7, family="monospace")
    fig.tight_layout()
    fig.savefig(out_path, dpi=150)
    plt.close(fig)
    return out_path


__all__ = ["plot_field", "plot_dispersion_curves", "plot_samples"]

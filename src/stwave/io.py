"""Loading coordinate data and saving evaluated fields."""

from __future__ import annotations

from pathlib import Path
from typing import Tuple

import numpy as np
import pandas as pd

from .grid import to_paired

TABLE_SUFFIXES = {".csv", ".txt", ".dat"}


def ensure_dir(path: str | Path) -> Path:
    """Create a directory path if needed and return it as a :class:`Path`."""

    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def _read_table(path: Path) -> pd.DataFrame:
    sep = "," if path.suffix.lower() == ".csv" else r"\s+"
    df = pd.read_csv(path, sep=sep, header=None, comment="#")
    # a textual first row is a header
    if not all(pd.api.types.is_numeric_dtype(df[c]) for c in df.columns):
        df = pd.read_csv(path, sep=sep, comment="#")
    if df.shape[1] < 2:
        raise ValueError(f"Data file must have at least 2 columns: {path}")
    return df.apply(pd.to_numeric, errors="raise")


def load_axes(path: str | Path) -> Tuple[np.ndarray, np.ndarray]:
    """Read the ``x`` and ``t`` axis vectors from a file.

    ``.npz`` archives are read by array name (``x`` and ``t``) and fall back
    to the first two arrays.  Text tables (``.csv``, ``.txt``, ``.dat``)
    supply x in the first column and t in the second; trailing empty cells
    are dropped so the two axes may have different lengths.
    """

    path = Path(path)
    if path.suffix.lower() == ".npz":
        with np.load(path) as data:
            names = list(data.files)
            if "x" in names and "t" in names:
                x, t = data["x"], data["t"]
            elif len(names) >= 2:
                x, t = data[names[0]], data[names[1]]
            else:
                raise ValueError(f"NPZ file must contain at least 2 arrays (x and t): {path}")
        return np.asarray(x, dtype=np.float64).ravel(), np.asarray(t, dtype=np.float64).ravel()

    if path.suffix.lower() in TABLE_SUFFIXES:
        df = _read_table(path)
        x = df.iloc[:, 0].dropna().to_numpy(dtype=np.float64)
        t = df.iloc[:, 1].dropna().to_numpy(dtype=np.float64)
        return x, t

    raise ValueError(f"Unsupported data file type '{path.suffix}': {path}")


def load_paired(path: str | Path) -> np.ndarray:
    """Read ``(N, 2)`` paired (x, t) samples from the first two table columns."""

    df = _read_table(Path(path))
    return df.iloc[:, :2].dropna().to_numpy(dtype=np.float64)


def save_field(out_dir: str | Path, name: str, **arrays: np.ndarray) -> Path:
    """Save numpy arrays into an ``.npz`` archive within ``out_dir``."""

    directory = ensure_dir(out_dir)
    path = directory / f"{name}.npz"
    np.savez(path, **arrays)
    return path


def save_field_csv(
    out_dir: str | Path,
    name: str,
    Xgrid: np.ndarray,
    Tgrid: np.ndarray,
    Y: np.ndarray,
) -> Path:
    """Write a field as a long-format ``x, t, y`` table (row-major order)."""

    paired = to_paired(Xgrid, Tgrid)
    df = pd.DataFrame(
        {"x": paired[:, 0], "t": paired[:, 1], "y": np.asarray(Y, dtype=np.float64).ravel()}
    )
    directory = ensure_dir(out_dir)
    path = directory / f"{name}.csv"
    df.to_csv(path, index=False)
    return path


__all__ = ["ensure_dir", "load_axes", "load_paired", "save_field", "save_field_csv"]

from pathlib import Path

import numpy as np
import numpy.testing as npt
import pytest

from stwave.cli import _parse_overrides, main, run_evaluate
from stwave.config import load_config
from stwave.dispatch import evaluate
from stwave.plotting import plot_samples


def _write_config(tmp_path: Path, body: str) -> Path:
    cfg_path = tmp_path / "run.yaml"
    cfg_path.write_text(body.replace("OUT", str(tmp_path / "out")))
    return cfg_path


def test_parse_overrides_decodes_json():
    pairs = _parse_overrides(["--grid.x.num", "20", "--model.variant", "simple", "--outputs.plots", "false"])
    assert pairs == [("grid.x.num", 20), ("model.variant", "simple"), ("outputs.plots", False)]


@pytest.mark.parametrize("argv", [["grid.x.num", "3"], ["--grid.x.num"]])
def test_parse_overrides_rejects_malformed(argv):
    with pytest.raises(ValueError):
        _parse_overrides(argv)


def test_run_evaluate_applies_dispersion(tmp_path: Path):
    cfg = load_config(overrides=[
        ("model.variant", "simple"),
        ("model.params", {"A": 2.0, "k": 1.5, "b": 2.0, "o": 0.0, "c": 0.0}),
        ("grid.x.num", 11),
        ("grid.t.num", 6),
        ("dispersion", [{"kind": "exponential", "axis": "x", "alpha": 0.2}]),
        ("outputs.out_dir", str(tmp_path)),
        ("outputs.plots", False),
    ])
    result = run_evaluate(cfg)

    x, t = result["x"], result["t"]
    expected = evaluate([2.0, 1.5, 2.0, 0.0, 0.0], (x, t)) * np.exp(-0.2 * x)[np.newaxis, :]
    npt.assert_allclose(result["Y"], expected)
    assert set(result["paths"]) == {"npz"}

    with np.load(result["paths"]["npz"]) as data:
        npt.assert_allclose(data["Y"], expected)
        assert str(data["variant"]) == "simple"
        assert data["params"].shape == (5,)


def test_evaluate_command_writes_outputs(tmp_path: Path, capsys):
    cfg_path = _write_config(tmp_path, """
grid:
  x: {start: 0.0, stop: 4.0, num: 20}
  t: {start: 0.0, stop: 2.0, num: 10}
model:
  variant: reduced
dispersion:
  - {kind: gaussian_envelope, sigma: 2.0}
outputs:
  out_dir: OUT
  save_csv: true
""")

    main(["evaluate", "--config", str(cfg_path)])

    out_dir = tmp_path / "out"
    assert (out_dir / "field.npz").exists()
    assert (out_dir / "field.csv").exists()
    assert (out_dir / "field.png").exists()
    stdout = capsys.readouterr().out
    assert "REDUCED STW model parameters:" in stdout
    assert "Output size: [10, 20]" in stdout


def test_evaluate_variant_flag_and_overrides(tmp_path: Path, capsys):
    main([
        "evaluate",
        "--variant", "expanded",
        "--outputs.out_dir", str(tmp_path),
        "--outputs.plots", "false",
        "--grid.x.num", "8",
        "--grid.t.num", "4",
    ])
    stdout = capsys.readouterr().out
    assert "EXPANDED STW model parameters:" in stdout
    assert "Output size: [4, 8]" in stdout
    assert not (tmp_path / "field.png").exists()


def test_evaluate_from_axis_file(tmp_path: Path):
    axes = tmp_path / "axes.npz"
    np.savez(axes, x=np.linspace(0, 1, 7), t=np.linspace(0, 1, 3))
    cfg = load_config(overrides=[
        ("grid.source", "file"),
        ("grid.path", str(axes)),
        ("outputs.out_dir", str(tmp_path)),
        ("outputs.plots", False),
    ])
    assert run_evaluate(cfg)["Y"].shape == (3, 7)


def test_evaluate_paired_samples_table(tmp_path: Path, capsys):
    samples = tmp_path / "samples.csv"
    samples.write_text("x,t\n0.0,0.0\n1.0,0.5\n2.0,1.0\n3.0,1.5\n")
    cfg_path = _write_config(tmp_path, f"""
grid:
  source: paired
  path: {samples}
model:
  variant: simple
  params: [2.0, 1.5, 2.0, 0.0, 0.5]
dispersion:
  - {{kind: exponential, axis: t, alpha: 0.2}}
outputs:
  out_dir: OUT
  save_csv: true
""")

    main(["evaluate", "--config", str(cfg_path)])

    out_dir = tmp_path / "out"
    x = np.array([0.0, 1.0, 2.0, 3.0])
    t = np.array([0.0, 0.5, 1.0, 1.5])
    expected = (2.0 * np.sin(1.5 * x + 2.0 * t) + 0.5) * np.exp(-0.2 * t)
    with np.load(out_dir / "field.npz") as data:
        assert data["Y"].shape == (4,)
        npt.assert_allclose(data["Y"], expected, rtol=1e-13)
        npt.assert_array_equal(data["t"], t)
    assert (out_dir / "field.csv").exists()
    assert (out_dir / "field.png").exists()
    assert "Paired samples: 4" in capsys.readouterr().out


def test_invalid_config_exits_with_code_two(tmp_path: Path, capsys):
    cfg_path = _write_config(tmp_path, "model:\n  variant: cubic\n")
    with pytest.raises(SystemExit) as excinfo:
        main(["evaluate", "--config", str(cfg_path)])
    assert excinfo.value.code == 2
    assert "stwave: error:" in capsys.readouterr().err


def test_unparsable_config_exits_with_code_two(tmp_path: Path, capsys):
    cfg_path = _write_config(tmp_path, "model: [simple\n")
    with pytest.raises(SystemExit) as excinfo:
        main(["evaluate", "--config", str(cfg_path)])
    assert excinfo.value.code == 2
    assert "Could not parse" in capsys.readouterr().err


def test_missing_config_exits_with_code_two(tmp_path: Path):
    with pytest.raises(SystemExit) as excinfo:
        main(["evaluate", "--config", str(tmp_path / "missing.yaml")])
    assert excinfo.value.code == 2


def test_dispersion_command(tmp_path: Path, capsys):
    out = tmp_path / "curves.png"
    main(["dispersion", "--kinds", "linear", "sigmoid", "--alpha", "0.8", "--out", str(out)])
    assert out.exists()
    stdout = capsys.readouterr().out
    assert "linear" in stdout and "sigmoid" in stdout


def test_dispersion_command_rejects_bivariate(tmp_path: Path):
    with pytest.raises(SystemExit) as excinfo:
        main(["dispersion", "--kinds", "power_law", "--out", str(tmp_path / "x.png")])
    assert excinfo.value.code == 2


def test_params_command(capsys):
    main(["params", "--variant", "simple"])
    stdout = capsys.readouterr().out
    assert "simple model (5 parameters)" in stdout
    assert "Wave number" in stdout


def test_params_command_rejects_unknown_args():
    with pytest.raises(SystemExit):
        main(["params", "--grid.x.num", "3"])


def test_plot_samples_checks_layout(tmp_path: Path):
    with pytest.raises(ValueError):
        plot_samples(np.zeros((4, 3)), np.zeros(4), tmp_path / "bad.png")
    with pytest.raises(ValueError):
        plot_samples(np.zeros((4, 2)), np.zeros(5), tmp_path / "bad.png")
    path = plot_samples(np.random.default_rng(0).uniform(size=(10, 2)), np.arange(10.0), tmp_path / "ok.png")
    assert path.exists()

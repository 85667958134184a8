import logging

import numpy as np
import numpy.testing as npt
import pytest

from stwave.dispatch import evaluate, infer_variant, resolve_variant
from stwave.errors import ParameterCountError, ShapeError, UnknownModelVariantError
from stwave.grid import normalize_coordinates, to_paired
from stwave.models import evaluate_expanded, evaluate_reduced, evaluate_simple
from stwave.params import ModelVariant, ReducedParams, SimpleParams

X_AXIS = np.linspace(0, 6, 13)
T_AXIS = np.linspace(0, 3, 7)

SIMPLE = [2.0, 1.5, 2.0, np.pi / 4, 0.5]
REDUCED = [1.5, 1.0, 0.2, 2.0, 0.1, 0.3, 0.0, 0.0]
EXPANDED = [1.0, 2.0, 0.1, 0.05, 3.0, 0.05, 0.1, 0.0, 0.0]


def _paired():
    return to_paired(*normalize_coordinates(X_AXIS, T_AXIS))


def test_infer_variant_by_length():
    assert infer_variant(5) is ModelVariant.SIMPLE
    assert infer_variant(8) is ModelVariant.REDUCED
    assert infer_variant(9) is ModelVariant.EXPANDED


@pytest.mark.parametrize("n", [0, 1, 4, 6, 7, 10])
def test_unknown_length_names_valid_lengths(n):
    with pytest.raises(ParameterCountError) as excinfo:
        evaluate(np.ones(n), (X_AXIS, T_AXIS))
    assert excinfo.value.expected == (5, 8, 9)
    msg = str(excinfo.value)
    assert "5" in msg and "8" in msg and "9" in msg


def test_length_five_selects_simple():
    npt.assert_array_equal(
        evaluate(SIMPLE, (X_AXIS, T_AXIS)),
        evaluate_simple(SIMPLE, X_AXIS, T_AXIS),
    )


def test_length_eight_selects_reduced():
    npt.assert_array_equal(
        evaluate(REDUCED, (X_AXIS, T_AXIS)),
        evaluate_reduced(REDUCED, X_AXIS, T_AXIS),
    )


def test_length_nine_with_paired_selects_expanded():
    paired = _paired()
    Y = evaluate(EXPANDED, paired)
    assert Y.shape == (paired.shape[0],)
    npt.assert_array_equal(Y, evaluate_expanded(EXPANDED, paired))


def test_expanded_on_axes_returns_grid():
    Y = evaluate(EXPANDED, (X_AXIS, T_AXIS))
    assert Y.shape == (T_AXIS.size, X_AXIS.size)
    npt.assert_allclose(Y.ravel(), evaluate_expanded(EXPANDED, _paired()), rtol=1e-14)


def test_explicit_variant_validates_its_own_count():
    # 8 parameters would infer "reduced", but "simple" was asked for
    with pytest.raises(ParameterCountError) as excinfo:
        evaluate(REDUCED, (X_AXIS, T_AXIS), variant="simple")
    assert excinfo.value.expected == (5,)

    with pytest.raises(ParameterCountError):
        evaluate(EXPANDED, _paired(), variant="reduced")


def test_explicit_variant_accepts_enum_and_any_case():
    a = evaluate(REDUCED, (X_AXIS, T_AXIS), variant="REDUCED")
    b = evaluate(REDUCED, (X_AXIS, T_AXIS), variant=ModelVariant.REDUCED)
    npt.assert_array_equal(a, b)


def test_unknown_variant_string():
    with pytest.raises(UnknownModelVariantError):
        evaluate(SIMPLE, (X_AXIS, T_AXIS), variant="quartic")


def test_paired_simple_and_reduced_match_flattened_grid():
    paired = _paired()
    grid_shape = (T_AXIS.size, X_AXIS.size)

    npt.assert_allclose(
        evaluate(SIMPLE, paired).reshape(grid_shape),
        evaluate_simple(SIMPLE, X_AXIS, T_AXIS),
        rtol=1e-14,
    )
    npt.assert_allclose(
        evaluate(REDUCED, paired, variant="reduced").reshape(grid_shape),
        evaluate_reduced(REDUCED, X_AXIS, T_AXIS),
        rtol=1e-14,
    )


def test_grid_coordinates_pass_through():
    X, T = np.meshgrid(X_AXIS, T_AXIS)
    npt.assert_array_equal(evaluate(SIMPLE, (X, T)), evaluate(SIMPLE, (X_AXIS, T_AXIS)))


@pytest.mark.parametrize("rows", [
    [[0.0, 0.5], [1.0, 1.5]],
    [[0.0, 0.5], [1.0, 1.5], [2.0, 2.5]],
])
def test_nested_list_is_paired_for_any_length(rows):
    Y = evaluate(SIMPLE, rows)
    assert Y.shape == (len(rows),)
    npt.assert_array_equal(Y, evaluate(SIMPLE, np.array(rows)))
    x, t = np.array(rows).T
    npt.assert_allclose(Y, 2.0 * np.sin(1.5 * x + 2.0 * t + np.pi / 4) + 0.5, rtol=1e-14)


def test_bad_coordinates_raise_shape_error():
    with pytest.raises(ShapeError):
        evaluate(SIMPLE, np.zeros((4, 3)))
    with pytest.raises(ShapeError):
        evaluate(SIMPLE, (np.zeros((2, 2)), np.zeros((3, 3))))


def test_dataclass_carries_its_variant():
    p = ReducedParams.defaults()
    assert resolve_variant(p) is ModelVariant.REDUCED
    npt.assert_array_equal(
        evaluate(p, (X_AXIS, T_AXIS)),
        evaluate_reduced(p.as_array(), X_AXIS, T_AXIS),
    )
    with pytest.raises(ParameterCountError):
        evaluate(SimpleParams.defaults(), (X_AXIS, T_AXIS), variant="reduced")


def test_selected_variant_is_logged_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="stwave.dispatch"):
        evaluate(REDUCED, (X_AXIS, T_AXIS))
    assert any("reduced" in rec.getMessage() for rec in caplog.records)

import numpy as np
import numpy.testing as npt
import pytest

from stwave.errors import ShapeError
from stwave.grid import (
    is_paired,
    make_axis,
    normalize_coordinates,
    split_paired,
    stack_coordinates,
    to_paired,
)


def test_vectors_expand_to_time_by_space_grid():
    x = np.array([0.0, 1.0, 2.0])
    t = np.array([10.0, 20.0])
    X, T = normalize_coordinates(x, t)

    assert X.shape == (2, 3)
    assert T.shape == (2, 3)
    for i in range(2):
        for j in range(3):
            assert X[i, j] == x[j]
            assert T[i, j] == t[i]


def test_vectors_match_numpy_meshgrid():
    x = np.linspace(0, 10, 7)
    t = np.linspace(0, 5, 4)
    X, T = normalize_coordinates(x, t)
    Xm, Tm = np.meshgrid(x, t)
    npt.assert_array_equal(X, Xm)
    npt.assert_array_equal(T, Tm)


def test_lists_and_scalars_are_accepted():
    X, T = normalize_coordinates([0, 1, 2, 3], 0.5)
    assert X.shape == (1, 4)
    npt.assert_array_equal(T, 0.5)


def test_congruent_grids_pass_through():
    Xm, Tm = np.meshgrid(np.arange(4.0), np.arange(3.0))
    X, T = normalize_coordinates(Xm, Tm)
    npt.assert_array_equal(X, Xm)
    npt.assert_array_equal(T, Tm)


@pytest.mark.parametrize(
    "x, t",
    [
        (np.zeros((3, 4)), np.zeros((4, 3))),  # grids of different shape
        (np.zeros(4), np.zeros((3, 4))),  # vector + grid
        (np.zeros((2, 3, 4)), np.zeros((2, 3, 4))),  # 3-D
    ],
)
def test_incompatible_inputs_raise(x, t):
    with pytest.raises(ShapeError):
        normalize_coordinates(x, t)


def test_shape_error_is_value_error():
    with pytest.raises(ValueError):
        normalize_coordinates(np.zeros((2, 2)), np.zeros((3, 3)))


def test_paired_helpers():
    X, T = normalize_coordinates([0.0, 1.0, 2.0], [5.0, 6.0])
    paired = to_paired(X, T)

    assert paired.shape == (6, 2)
    assert is_paired(paired)
    assert not is_paired(X)
    # row-major: first row of the grid comes first
    npt.assert_array_equal(paired[:3, 0], [0.0, 1.0, 2.0])
    npt.assert_array_equal(paired[:3, 1], [5.0, 5.0, 5.0])

    x, t = split_paired(paired)
    npt.assert_array_equal(x.reshape(X.shape), X)
    npt.assert_array_equal(t.reshape(T.shape), T)


def test_split_paired_rejects_wrong_width():
    with pytest.raises(ShapeError):
        split_paired(np.zeros((5, 3)))
    with pytest.raises(ShapeError):
        split_paired(np.zeros(5))


def test_stack_coordinates_trailing_axis():
    X, T = normalize_coordinates(np.arange(3.0), np.arange(2.0))
    stacked = stack_coordinates(X, T)
    assert stacked.shape == (2, 3, 2)
    npt.assert_array_equal(stacked[..., 0], X)
    npt.assert_array_equal(stacked[..., 1], T)

    with pytest.raises(ShapeError):
        stack_coordinates(np.zeros((2, 3)), np.zeros((3, 2)))


def test_make_axis():
    axis = make_axis(0, 10, 50)
    assert axis.shape == (50,)
    assert axis[0] == 0.0 and axis[-1] == 10.0
    with pytest.raises(ShapeError):
        make_axis(0, 1, 0)

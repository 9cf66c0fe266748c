"""
Tests for the Numba-optimized kernels.
"""

import numpy as np

from planar_regrid.methods import _numba_kernels


def test_apply_weights():
    """Test the apply_weights kernel with padded rows."""
    data_flat = np.arange(10, dtype=np.float64).reshape(1, 10)
    indices = np.array([[0, 1, 2], [4, 5, -1], [7, -1, -1]], dtype=np.int64)
    weights = np.array([[0.25, 0.25, 0.5], [0.5, 0.5, 0.0], [1.0, 0.0, 0.0]], dtype=np.float64)

    result = _numba_kernels.apply_weights(data_flat, indices, weights)

    expected = np.array([[0.25 * 0 + 0.25 * 1 + 0.5 * 2, 0.5 * 4 + 0.5 * 5, 7.0]])
    np.testing.assert_allclose(result, expected)


def test_apply_weights_multiple_samples():
    data_flat = np.array([[1.0, 2.0, 3.0], [10.0, 20.0, 30.0]], dtype=np.float64)
    indices = np.array([[2, 0, -1]], dtype=np.int64)
    weights = np.array([[0.75, 0.25, 0.0]], dtype=np.float64)

    result = _numba_kernels.apply_weights(data_flat, indices, weights)

    np.testing.assert_allclose(result, [[0.75 * 3 + 0.25 * 1], [0.75 * 30 + 0.25 * 10]])


def test_apply_weights_propagates_nan():
    data_flat = np.array([[np.nan, 1.0]], dtype=np.float64)
    indices = np.array([[0, 1, -1], [1, -1, -1]], dtype=np.int64)
    weights = np.array([[0.5, 0.5, 0.0], [1.0, 0.0, 0.0]], dtype=np.float64)

    result = _numba_kernels.apply_weights(data_flat, indices, weights)

    assert np.isnan(result[0, 0])
    assert result[0, 1] == 1.0


def test_apply_weights_complex_data():
    data_flat = np.array([[1.0 + 1.0j, 3.0 - 1.0j]])
    indices = np.array([[0, 1, -1]], dtype=np.int64)
    weights = np.array([[0.5, 0.5, 0.0]], dtype=np.float64)

    result = _numba_kernels.apply_weights(data_flat, indices, weights)

    assert result.dtype == np.complex128
    np.testing.assert_allclose(result, [[2.0 + 0.0j]])

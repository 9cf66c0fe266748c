"""
Numba-optimized kernels for applying interpolation weights.

These functions are designed to be used inside xr.apply_ufunc as well as
directly on plain arrays.
"""

import numpy as np
from numba import jit, prange


@jit(nopython=True, nogil=True, parallel=True)
def apply_weights(
    data_flat,  # (n_samples, n_source_points)
    indices,  # (n_target_points, max_vertices) - indices into data_flat or -1
    weights,  # (n_target_points, max_vertices)
):
    """
    Apply precomputed interpolation weights.

    Args:
        data_flat: 2D array of source data (n_samples, n_source_points)
        indices: Source indices for each target point, padded with -1
        weights: Weights matching ``indices``, padded with 0

    Returns:
        Interpolated data (n_samples, n_target_points)
    """
    n_samples = data_flat.shape[0]
    n_targets = indices.shape[0]
    n_vertices = indices.shape[1]

    result = np.zeros((n_samples, n_targets), dtype=data_flat.dtype)

    # Iterate over target points (parallel)
    for i in prange(n_targets):
        for k in range(n_vertices):
            idx = indices[i, k]
            if idx < 0:
                break
            w = weights[i, k]
            for s in range(n_samples):
                result[s, i] += w * data_flat[s, idx]

    return result

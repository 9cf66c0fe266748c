"""
Utility functions for interpolation.
"""

import numpy as np

from planar_regrid.constants import CLAMP_CHUNK_PAIRS

__all__ = [
    "_barycentric_weights_2d",
    "_nearest_on_segments",
]


def _barycentric_weights_2d(points: np.ndarray, transform: np.ndarray) -> np.ndarray:
    """Compute barycentric weights of 2D points from Delaunay affine transforms.

    Args:
        points: Query points (m, 2)
        transform: Per-point affine transforms (m, 3, 2) as stored in
            ``scipy.spatial.Delaunay.transform``

    Returns:
        Weights (m, 3) ordered like the simplex vertices
    """
    b = np.einsum("ijk,ik->ij", transform[:, :2], points - transform[:, 2])
    return np.c_[b, 1.0 - b.sum(axis=1)]


def _nearest_on_segments(
    points: np.ndarray, starts: np.ndarray, ends: np.ndarray, chunk_pairs: int = CLAMP_CHUNK_PAIRS
) -> tuple[np.ndarray, np.ndarray]:
    """Find the closest segment to each point and the clamped position along it.

    Points are processed in chunks so that temporaries stay bounded by
    ``chunk_pairs`` point/segment pairs regardless of the number of points.

    Args:
        points: Query points (m, 2)
        starts: Segment start points (s, 2)
        ends: Segment end points (s, 2)
        chunk_pairs: Maximum number of point/segment pairs per chunk

    Returns:
        Index of the nearest segment (m,) and parameter t in [0, 1] (m,) such
        that the closest point is ``starts + t * (ends - starts)``. Ties go to
        the lowest segment index.
    """
    direction = ends - starts
    length_sq = np.einsum("ij,ij->i", direction, direction)
    degenerate = length_sq == 0.0
    # Zero-length segments clamp to their start point
    safe_length_sq = np.where(degenerate, 1.0, length_sq)

    n_points = len(points)
    nearest = np.empty(n_points, dtype=np.int64)
    t_nearest = np.empty(n_points, dtype=np.float64)
    chunk_size = max(1, chunk_pairs // max(1, len(starts)))

    for lo in range(0, n_points, chunk_size):
        chunk = points[lo : lo + chunk_size]
        rel = chunk[:, None, :] - starts[None, :, :]
        t = np.einsum("msk,sk->ms", rel, direction) / safe_length_sq
        np.clip(t, 0.0, 1.0, out=t)
        t[:, degenerate] = 0.0

        # Offset of the closest point on every segment, reusing rel
        rel -= t[:, :, None] * direction[None, :, :]
        dist_sq = np.einsum("msk,msk->ms", rel, rel)

        chunk_nearest = np.argmin(dist_sq, axis=1)
        nearest[lo : lo + chunk_size] = chunk_nearest
        t_nearest[lo : lo + chunk_size] = t[np.arange(len(chunk)), chunk_nearest]

    return nearest, t_nearest

"""
Resolution of interpolation weights through a 2D triangulation.
"""

from __future__ import annotations

import numpy as np

from planar_regrid.constants import WEIGHT_PRUNE_THRESHOLD, WEIGHT_SUM_TOLERANCE
from planar_regrid.errors import TriangulationError, WeightSumError
from planar_regrid.interpolation.base import DelaunayTriangulator, InterpolationWeights, Triangulator


class WeightResolver:
    """Turn triangulation answers into validated per-destination weight lists."""

    def __init__(
        self,
        triangulator: Triangulator | None = None,
        tolerance: float = WEIGHT_SUM_TOLERANCE,
        prune_threshold: float = WEIGHT_PRUNE_THRESHOLD,
    ):
        """Initialize the resolver.

        Args:
            triangulator: Triangulation capability; ``DelaunayTriangulator`` if None
            tolerance: Allowed deviation of each weight sum from one
            prune_threshold: Weights with a magnitude at or below this are dropped
        """
        self.triangulator = triangulator if triangulator is not None else DelaunayTriangulator()
        self.tolerance = tolerance
        self.prune_threshold = prune_threshold

    def resolve(self, source_2d: np.ndarray, destination_2d: np.ndarray) -> InterpolationWeights:
        """Compute interpolation weights of destination points from source points.

        Source rows keep their position through the triangulation, so returned
        vertex indices are indices into the original source point set.

        Args:
            source_2d: Perturbed projected source points (n, 2)
            destination_2d: Projected destination points (m, 2)

        Returns:
            Validated interpolation weights

        Raises:
            TriangulationError: The triangulation returned malformed indices
            WeightSumError: Some destination weights do not sum to one
        """
        n_source = len(source_2d)
        n_destination = len(destination_2d)

        mesh = self.triangulator.triangulate(source_2d)
        indices, weights = self.triangulator.locate(mesh, destination_2d)

        indices = np.asarray(indices, dtype=np.int64)
        weights = np.asarray(weights, dtype=np.float64)
        if indices.shape != weights.shape or indices.ndim != 2 or indices.shape[0] != n_destination:
            msg = (
                f"Triangulation returned indices {indices.shape} and weights {weights.shape} "
                f"for {n_destination} destination points."
            )
            raise TriangulationError(msg)

        invalid = (indices < -1) | (indices >= n_source)
        if np.any(invalid):
            dest_idx = int(np.nonzero(invalid.any(axis=1))[0][0])
            msg = (
                f"Triangulation returned source indices {indices[dest_idx].tolist()} for destination "
                f"point {dest_idx}, outside the {n_source} source points."
            )
            raise TriangulationError(msg)

        indices, weights = self._compact(indices, weights)
        self._check_sums(weights)

        return InterpolationWeights(indices=indices, weights=weights, n_source=n_source)

    def _compact(self, indices: np.ndarray, weights: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """Drop negligible weights and move used slots to the front of each row."""
        unused = (indices < 0) | (np.abs(weights) <= self.prune_threshold)
        indices = np.where(unused, -1, indices)
        weights = np.where(unused, 0.0, weights)

        order = np.argsort(unused, axis=1, kind="stable")
        return np.take_along_axis(indices, order, axis=1), np.take_along_axis(weights, order, axis=1)

    def _check_sums(self, weights: np.ndarray) -> None:
        sums = weights.sum(axis=1)
        bad = ~(np.abs(sums - 1.0) <= self.tolerance)
        if np.any(bad):
            dest_idx = int(np.nonzero(bad)[0][0])
            msg = (
                f"Interpolation weights of {int(bad.sum())} destination points do not sum to one "
                f"within {self.tolerance}; first is destination {dest_idx} with sum {sums[dest_idx]!r}."
            )
            raise WeightSumError(msg)

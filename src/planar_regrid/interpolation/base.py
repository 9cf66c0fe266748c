"""
Base classes and types for interpolation.
"""

from __future__ import annotations

import abc
import warnings
from dataclasses import dataclass
from typing import Any

import numpy as np
from scipy.spatial import Delaunay, QhullError

from planar_regrid.constants import MAX_VERTICES
from planar_regrid.errors import DegenerateInputError
from planar_regrid.interpolation.utils import _barycentric_weights_2d, _nearest_on_segments

__all__ = [
    "DelaunayTriangulator",
    "InterpolationWeights",
    "Triangulator",
]


class Triangulator(abc.ABC):
    """2D triangulation capability used to derive interpolation weights.

    Implementations triangulate the convex hull of a planar point set and
    locate query points in it. Query points outside the hull must still get a
    well-defined answer.
    """

    @abc.abstractmethod
    def triangulate(self, points: np.ndarray) -> Any:
        """Build a triangulation of planar points (n, 2)."""

    @abc.abstractmethod
    def locate(self, mesh: Any, query: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """Find interpolating vertices for planar query points (m, 2).

        Returns:
            Vertex indices (m, 3) into the triangulated points, ``-1`` where
            unused, and the matching weights (m, 3).
        """


class DelaunayTriangulator(Triangulator):
    """Triangulator backed by ``scipy.spatial.Delaunay``.

    Points inside the hull get the barycentric weights of their triangle.
    Points outside are clamped to the closest point on the hull boundary: two
    weights along the nearest hull edge, or a single weight on a hull vertex.
    """

    def __init__(self, qhull_options: str | None = None):
        self.qhull_options = qhull_options

    def triangulate(self, points: np.ndarray) -> Delaunay:
        try:
            return Delaunay(points, qhull_options=self.qhull_options)
        except (QhullError, ValueError) as e:
            msg = f"Could not triangulate {len(points)} projected source points: {e}"
            raise DegenerateInputError(msg) from e

    def locate(self, mesh: Delaunay, query: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        n_query = len(query)
        indices = np.full((n_query, MAX_VERTICES), -1, dtype=np.int64)
        weights = np.zeros((n_query, MAX_VERTICES), dtype=np.float64)

        simplex_indices = mesh.find_simplex(query)
        inside = simplex_indices >= 0

        if np.any(inside):
            simplices = simplex_indices[inside]
            indices[inside] = mesh.simplices[simplices]
            weights[inside] = _barycentric_weights_2d(query[inside], mesh.transform[simplices])

        if n_query > 0 and not np.any(inside):
            warnings.warn(
                "No destination point lies inside the source points. All values are clamped to the hull boundary.",
                stacklevel=2,
            )

        if not np.all(inside):
            hull_edges = mesh.convex_hull
            nearest_edge, t = _nearest_on_segments(
                query[~inside],
                mesh.points[hull_edges[:, 0]],
                mesh.points[hull_edges[:, 1]],
            )
            indices[~inside, :2] = hull_edges[nearest_edge]
            weights[~inside, 0] = 1.0 - t
            weights[~inside, 1] = t

        return indices, weights


@dataclass(frozen=True, eq=False)
class InterpolationWeights:
    """Per-destination source indices and weights.

    Rows are padded to a fixed width: unused slots have index ``-1`` and
    weight ``0`` and always follow the used ones.
    """

    indices: np.ndarray
    weights: np.ndarray
    n_source: int

    def __post_init__(self) -> None:
        if self.indices.shape != self.weights.shape or self.indices.ndim != 2:
            msg = f"indices {self.indices.shape} and weights {self.weights.shape} must be matching 2D arrays"
            raise ValueError(msg)
        self.indices.flags.writeable = False
        self.weights.flags.writeable = False

    def __len__(self) -> int:
        return self.indices.shape[0]

    def __getitem__(self, destination_index: int) -> list[tuple[int, float]]:
        row_indices = self.indices[destination_index]
        row_weights = self.weights[destination_index]
        return [(int(i), float(w)) for i, w in zip(row_indices, row_weights) if i >= 0]

    @property
    def counts(self) -> np.ndarray:
        """Number of contributing source points per destination."""
        return np.sum(self.indices >= 0, axis=1)

    def sums(self) -> np.ndarray:
        """Sum of the weights of every destination."""
        return self.weights.sum(axis=1)

    def to_lists(self) -> list[list[tuple[int, float]]]:
        return [self[i] for i in range(len(self))]

"""
Planar point-to-point interpolation with precomputed weights.

This module implements an interpolator between non-matching 3D point sets that
lie on (or near) a common surface:
- A local frame is fitted through the source points (or supplied)
- Source and destination points are projected into the frame's plane
- Projected source points are jittered deterministically to break ties
- A 2D Delaunay triangulation of the source points yields, for every
  destination point, a short list of source indices and weights
- Weights are computed once and applied many times

This file is part of planar-regrid.

Copyright (c) 2025 planar-regrid Developers.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from planar_regrid.constants import DEFAULT_PERTURB, PERTURB_SEED, WEIGHT_SUM_TOLERANCE
from planar_regrid.errors import DegenerateInputError, SizeMismatchError
from planar_regrid.frame import CoordinateFrame, as_points, fit_frame
from planar_regrid.interpolation import InterpolationWeights, Triangulator, WeightResolver
from planar_regrid.methods._numba_kernels import apply_weights
from planar_regrid.projection import make_rng, perturb as perturb_points, project

logger = logging.getLogger(__name__)


class PlanarInterpolator:
    """Interpolate values from source points onto destination points in a fitted plane.

    The weights of every destination point are resolved once at construction.
    After that the instance is read-only and can be applied to any number of
    value arrays defined on the source points.
    """

    def __init__(
        self,
        source_points: Any,
        destination_points: Any,
        perturb: float = DEFAULT_PERTURB,
        *,
        frame: CoordinateFrame | None = None,
        triangulator: Triangulator | None = None,
        seed: int = PERTURB_SEED,
        tolerance: float = WEIGHT_SUM_TOLERANCE,
    ):
        """Initialize the interpolator and resolve all weights.

        Args:
            source_points: Points where values are known (n, 3), n >= 3
            destination_points: Points where values are requested (m, 3)
            perturb: Jitter of projected source points as a fraction of their
                bounding box
            frame: Frame to project into; fitted from the source points if None
            triangulator: 2D triangulation capability; scipy Delaunay if None
            seed: Seed of the jitter generator
            tolerance: Allowed deviation of each weight sum from one

        Raises:
            DegenerateInputError: The source points cannot define a plane or
                a triangulation
            WeightSumError: The triangulation returned inconsistent weights
        """
        source = as_points(source_points, "source_points")
        destination = as_points(destination_points, "destination_points")

        if len(source) < 3:
            msg = f"Only {len(source)} source points provided. Need at least three to be able to interpolate."
            raise DegenerateInputError(msg)

        self.perturb = float(perturb)
        self.seed = seed
        self.frame = frame if frame is not None else fit_frame(source)
        self.n_points = len(source)
        self.n_destination = len(destination)

        self.weights = self._calc_weights(source, destination, WeightResolver(triangulator, tolerance=tolerance))

    @classmethod
    def from_frame(
        cls,
        frame: CoordinateFrame,
        source_points: Any,
        destination_points: Any,
        perturb: float = DEFAULT_PERTURB,
        **kwargs: Any,
    ) -> PlanarInterpolator:
        """Build an interpolator in an existing frame, e.g. one shared by related interpolators."""
        return cls(source_points, destination_points, perturb, frame=frame, **kwargs)

    def _calc_weights(
        self, source: np.ndarray, destination: np.ndarray, resolver: WeightResolver
    ) -> InterpolationWeights:
        """Project, jitter and triangulate to resolve weights of all destination points."""
        rng = make_rng(self.seed)
        source_2d = perturb_points(project(source, self.frame), self.perturb, rng)
        destination_2d = project(destination, self.frame)

        weights = resolver.resolve(source_2d, destination_2d)

        logger.debug(
            "Resolved weights of %d destination points from %d source points (%d single-vertex)",
            self.n_destination,
            self.n_points,
            int(np.sum(weights.counts == 1)),
        )
        return weights

    @property
    def vertex_indices(self) -> np.ndarray:
        """Source indices per destination point (m, 3), padded with -1."""
        return self.weights.indices

    @property
    def vertex_weights(self) -> np.ndarray:
        """Weights per destination point (m, 3), padded with 0."""
        return self.weights.weights

    def _check_values(self, source_values: Any) -> np.ndarray:
        values = np.asarray(source_values)
        if values.ndim == 0 or len(values) != self.n_points:
            n_values = 0 if values.ndim == 0 else len(values)
            msg = f"Got {n_values} source values, interpolator was built for {self.n_points} source points."
            raise SizeMismatchError(msg)
        return values

    def apply(self, source_values: Any, destination_index: int) -> Any:
        """Interpolate source values at a single destination point.

        Args:
            source_values: Values at the source points, point axis first
            destination_index: Index of the destination point

        Returns:
            Weighted sum of the contributing source values; a scalar for
            scalar data, an array for vector data
        """
        values = self._check_values(source_values)
        if not -self.n_destination <= destination_index < self.n_destination:
            msg = f"Destination index {destination_index} out of range for {self.n_destination} destination points."
            raise IndexError(msg)

        result = None
        for source_index, weight in self.weights[destination_index]:
            contribution = weight * values[source_index]
            result = contribution if result is None else result + contribution
        return result

    def interpolate(self, source_values: Any) -> np.ndarray:
        """Interpolate source values onto all destination points.

        Args:
            source_values: Values at the source points (n, ...), point axis
                first; trailing axes (vector components, samples) are kept

        Returns:
            Interpolated values (m, ...)
        """
        values = self._check_values(source_values)
        trailing_shape = values.shape[1:]
        # Integer data is promoted to float, complex data stays complex
        dtype = np.result_type(values.dtype, np.float64)

        # Kernel expects (n_samples, n_source_points) contiguous data
        data_flat = np.ascontiguousarray(values.reshape(self.n_points, -1).T, dtype=dtype)
        result = apply_weights(data_flat, self.weights.indices, self.weights.weights)

        return np.ascontiguousarray(result.T).reshape((self.n_destination, *trailing_shape))

    def __call__(self, source_values: Any) -> np.ndarray:
        return self.interpolate(source_values)

    def info(self) -> dict[str, Any]:
        """Get information about the interpolator instance."""
        return {
            "interpolator_type": self.__class__.__name__,
            "n_points": self.n_points,
            "n_destination": self.n_destination,
            "perturb": self.perturb,
            "seed": self.seed,
            "frame": self.frame.to_dict(),
        }

    def to_file(self, filepath: str) -> None:
        """Save the interpolator weights and frame to a netCDF file."""
        from planar_regrid.io import _interpolator_to_netcdf

        _interpolator_to_netcdf(self, filepath)

    @classmethod
    def from_file(cls, filepath: str) -> PlanarInterpolator:
        """Load an interpolator saved with :meth:`to_file` without re-triangulating."""
        from planar_regrid.io import _interpolator_from_netcdf

        config = _interpolator_from_netcdf(filepath)

        interpolator = cls.__new__(cls)
        interpolator.perturb = config["perturb"]
        interpolator.seed = config["seed"]
        interpolator.frame = config["frame"]
        interpolator.n_points = config["n_points"]
        interpolator.n_destination = config["n_destination"]
        interpolator.weights = config["weights"]
        return interpolator

    def __getstate__(self) -> dict[str, Any]:
        """Prepare the interpolator for serialization (pickling, e.g. for dask workers)."""
        return self.__dict__.copy()

    def __setstate__(self, state: dict[str, Any]) -> None:
        """Restore the interpolator from serialized state (pickling, e.g. for dask workers)."""
        self.__dict__.update(state)

"""
Time-varying data sampled on source points and mapped onto destination points.

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

import numpy as np
import xarray as xr

from planar_regrid.errors import SizeMismatchError, TimeRangeError
from planar_regrid.planar import PlanarInterpolator
from planar_regrid.timeseries import Instant, find_time, instants_from_values, time_names

logger = logging.getLogger(__name__)


class TimeVaryingMappedData:
    """Map sampled snapshots onto destination points and blend them in time.

    Samples are a DataArray with a time dimension carrying numeric sample times
    and a point dimension laid out like the interpolator's source points. Any
    further dimensions (e.g. vector components) are kept.
    """

    def __init__(
        self,
        interpolator: PlanarInterpolator,
        samples: xr.DataArray,
        time_dim: str = "time",
        point_dim: str = "point",
        destination_dim: str = "destination",
    ):
        """Initialize the mapped data.

        Args:
            interpolator: Interpolator from the sample points to the destination points
            samples: Sampled values with ``time_dim`` and ``point_dim`` dimensions
            time_dim: Name of the time dimension; its coordinate gives the sample times
            point_dim: Name of the source point dimension
            destination_dim: Name of the destination point dimension in results
        """
        for dim in (time_dim, point_dim):
            if dim not in samples.dims:
                msg = f"samples must have a '{dim}' dimension, got {samples.dims}"
                raise ValueError(msg)
        if samples.sizes[point_dim] != interpolator.n_points:
            msg = (
                f"samples have {samples.sizes[point_dim]} points along '{point_dim}', "
                f"interpolator was built for {interpolator.n_points} source points."
            )
            raise SizeMismatchError(msg)

        self.interpolator = interpolator
        self.time_dim = time_dim
        self.point_dim = point_dim
        self.destination_dim = destination_dim
        # Point axis first so snapshots feed straight into the interpolator
        self.samples = samples.transpose(time_dim, point_dim, ...)

        if time_dim in samples.coords:
            sample_times = samples[time_dim].values
        else:
            sample_times = np.arange(samples.sizes[time_dim], dtype=np.float64)
        self.instants: list[Instant] = instants_from_values(sample_times)

    @property
    def times(self) -> list[str]:
        return time_names(self.instants)

    def _mapped_snapshot(self, index: int) -> np.ndarray:
        snapshot = self.samples.isel({self.time_dim: index}).values
        return self.interpolator.interpolate(snapshot)

    def evaluate(self, time_value: float, cursor: int = -1) -> tuple[xr.DataArray, int]:
        """Interpolate the samples onto the destination points at ``time_value``.

        Between two sample times the mapped snapshots are blended linearly.
        After the last sample time the last snapshot is held.

        Args:
            time_value: Requested time
            cursor: Index of the last lower sample time from a previous call,
                -1 to search from the start

        Returns:
            Mapped values and the cursor to pass to the next call

        Raises:
            TimeRangeError: No sample time at or before ``time_value`` from the cursor on
        """
        bracket = find_time(self.instants, cursor, time_value)
        if not bracket.found:
            msg = (
                f"Cannot find starting sampling values for current time {time_value}. "
                f"Have sampling values for times {self.times}"
            )
            raise TimeRangeError(msg)

        lo_values = self._mapped_snapshot(bracket.lo)
        if bracket.hi is None:
            values = lo_values
        else:
            t_lo = self.instants[bracket.lo].value
            t_hi = self.instants[bracket.hi].value
            w_hi = (time_value - t_lo) / (t_hi - t_lo)
            values = lo_values if w_hi == 0.0 else (1.0 - w_hi) * lo_values + w_hi * self._mapped_snapshot(bracket.hi)
            logger.debug(
                "Blending sample times %s and %s with weights %s and %s",
                self.instants[bracket.lo].name,
                self.instants[bracket.hi].name,
                1.0 - w_hi,
                w_hi,
            )

        other_dims = [d for d in self.samples.dims if d not in (self.time_dim, self.point_dim)]
        coords = {d: self.samples.coords[d] for d in other_dims if d in self.samples.coords}
        result = xr.DataArray(
            values,
            dims=(self.destination_dim, *other_dims),
            coords=coords,
            attrs=dict(self.samples.attrs),
            name=self.samples.name,
        )
        return result.assign_coords({self.time_dim: time_value}), bracket.lo

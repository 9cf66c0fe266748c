"""
xarray accessor applying planar interpolators to labelled data.

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

import numpy as np
import xarray as xr

from planar_regrid.planar import PlanarInterpolator


def _apply_interpolation_wrapper(data_slice: np.ndarray, interpolator: PlanarInterpolator) -> np.ndarray:
    """Wrapper for interpolation to be used with apply_ufunc (picklable)."""
    # apply_ufunc moves the point dimension last; the interpolator wants it first
    interpolated = interpolator.interpolate(np.moveaxis(data_slice, -1, 0))
    return np.moveaxis(interpolated, 0, -1)


@xr.register_dataarray_accessor("planar")
class PlanarAccessor:
    """Planar interpolation of xarray DataArrays.

    Example:
        >>> interpolator = PlanarInterpolator(source_points, destination_points)
        >>> mapped = da.planar.interpolate(interpolator, dim="point")
    """

    def __init__(self, xarray_obj: xr.DataArray):
        self._obj = xarray_obj

    def interpolate(
        self,
        interpolator: PlanarInterpolator,
        dim: str = "point",
        new_dim: str = "destination",
    ) -> xr.DataArray:
        """Interpolate along the source point dimension.

        Args:
            interpolator: Interpolator built for the points along ``dim``
            dim: Name of the source point dimension
            new_dim: Name of the destination point dimension in the result

        Returns:
            DataArray with ``dim`` replaced by ``new_dim``; other dimensions
            and attributes are kept
        """
        if dim not in self._obj.dims:
            msg = f"DataArray has no dimension '{dim}', got {self._obj.dims}"
            raise ValueError(msg)

        result = xr.apply_ufunc(
            _apply_interpolation_wrapper,
            self._obj,
            kwargs={"interpolator": interpolator},
            input_core_dims=[[dim]],
            output_core_dims=[[new_dim]],
            exclude_dims={dim},
            dask="parallelized",
            output_dtypes=[np.result_type(self._obj.dtype, np.float64)],
            dask_gufunc_kwargs={"output_sizes": {new_dim: interpolator.n_destination}},
            keep_attrs=True,
        )
        # Restore the original dimension order with the new dimension in place of the old one
        dims = [new_dim if d == dim else d for d in self._obj.dims]
        return result.transpose(*dims)

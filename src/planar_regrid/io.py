"""
I/O functions for planar-regrid.

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

from typing import TYPE_CHECKING, Any

import numpy as np
import xarray as xr

from planar_regrid.frame import CoordinateFrame
from planar_regrid.interpolation import InterpolationWeights

if TYPE_CHECKING:
    from planar_regrid.planar import PlanarInterpolator


def _interpolator_to_netcdf(interpolator: PlanarInterpolator, filepath: str) -> None:
    """Write interpolator frame and weights to a netCDF file."""
    frame = interpolator.frame
    ds = xr.Dataset(
        {
            "vertex_indices": (("destination", "vertex"), np.asarray(interpolator.vertex_indices)),
            "vertex_weights": (("destination", "vertex"), np.asarray(interpolator.vertex_weights)),
            "frame_origin": (("component",), np.asarray(frame.origin)),
            "frame_normal": (("component",), np.asarray(frame.normal)),
            "frame_axis": (("component",), np.asarray(frame.axis)),
        },
        coords={"component": ["x", "y", "z"]},
    )

    info = interpolator.info()
    # The frame is stored in the frame_* variables
    del info["frame"]
    ds.attrs.update(info)
    ds.to_netcdf(filepath, mode="w", engine="h5netcdf")


def _interpolator_from_netcdf(filepath: str) -> dict[str, Any]:
    """Read interpolator frame and weights from a netCDF file."""
    with xr.open_dataset(filepath, engine="h5netcdf") as ds:
        ds = ds.load()

    attrs = ds.attrs
    n_points = int(attrs["n_points"])
    frame = CoordinateFrame(
        origin=ds["frame_origin"].values,
        normal=ds["frame_normal"].values,
        axis=ds["frame_axis"].values,
    )
    weights = InterpolationWeights(
        indices=ds["vertex_indices"].values.astype(np.int64),
        weights=ds["vertex_weights"].values.astype(np.float64),
        n_source=n_points,
    )

    return {
        "perturb": float(attrs["perturb"]),
        "seed": int(attrs["seed"]),
        "n_points": n_points,
        "n_destination": int(attrs["n_destination"]),
        "frame": frame,
        "weights": weights,
    }

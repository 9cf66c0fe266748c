"""
planar-regrid: map data between non-matching point sets on a plane.
"""

from planar_regrid import accessor  # noqa: F401
from planar_regrid.errors import (
    DegenerateInputError,
    PlanarRegridError,
    SizeMismatchError,
    TimeRangeError,
    TriangulationError,
    WeightSumError,
)
from planar_regrid.frame import CoordinateFrame, fit_frame
from planar_regrid.interpolation import DelaunayTriangulator, InterpolationWeights, Triangulator, WeightResolver
from planar_regrid.mapped import TimeVaryingMappedData
from planar_regrid.planar import PlanarInterpolator
from planar_regrid.projection import perturb, project
from planar_regrid.timeseries import Instant, TimeBracket, find_time, instants_from_values, time_names

__all__ = [
    "CoordinateFrame",
    "DegenerateInputError",
    "DelaunayTriangulator",
    "Instant",
    "InterpolationWeights",
    "PlanarInterpolator",
    "PlanarRegridError",
    "SizeMismatchError",
    "TimeBracket",
    "TimeRangeError",
    "TimeVaryingMappedData",
    "TriangulationError",
    "Triangulator",
    "WeightResolver",
    "WeightSumError",
    "find_time",
    "fit_frame",
    "instants_from_values",
    "perturb",
    "project",
    "time_names",
]

__version__ = "0.1.0"

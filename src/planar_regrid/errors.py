"""
Exceptions raised by planar-regrid.
"""


class PlanarRegridError(Exception):
    """Base class for all planar-regrid errors."""


class DegenerateInputError(PlanarRegridError, ValueError):
    """Point set cannot define a plane or a triangulation."""


class WeightSumError(PlanarRegridError, RuntimeError):
    """Interpolation weights of a destination point do not sum to one."""


class TriangulationError(PlanarRegridError, RuntimeError):
    """Triangulation capability returned an inconsistent response."""


class SizeMismatchError(PlanarRegridError, ValueError):
    """Source values do not match the number of source points."""


class TimeRangeError(PlanarRegridError, ValueError):
    """No sample time at or before the requested time is available."""

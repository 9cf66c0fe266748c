"""
Triangulation-based interpolation weights.
"""

from planar_regrid.interpolation.base import DelaunayTriangulator, InterpolationWeights, Triangulator
from planar_regrid.interpolation.core import WeightResolver

__all__ = [
    "DelaunayTriangulator",
    "InterpolationWeights",
    "Triangulator",
    "WeightResolver",
]

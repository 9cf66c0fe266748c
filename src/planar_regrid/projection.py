"""
Projection of 3D points into a fitted frame and deterministic jitter.
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from planar_regrid.constants import PERTURB_SEED
from planar_regrid.frame import CoordinateFrame

logger = logging.getLogger(__name__)


def make_rng(seed: int = PERTURB_SEED) -> np.random.Generator:
    """Create the generator driving the jitter of one interpolator."""
    return np.random.default_rng(seed)


def project(points: Any, frame: CoordinateFrame) -> np.ndarray:
    """Project 3D points (n, 3) onto the plane of ``frame``, returning (n, 2)."""
    return frame.local_position(points)[:, :2]


def perturb(points_2d: np.ndarray, fraction: float, rng: np.random.Generator) -> np.ndarray:
    """Jitter planar points by a fraction of a random position in their bounding box.

    Regular point sets have co-circular or co-linear subsets that make the
    Delaunay triangulation ambiguous; a tiny reproducible offset breaks the ties.

    Args:
        points_2d: Projected source points (n, 2)
        fraction: Scale of the jitter relative to the bounding box
        rng: Seeded generator, consumed once per call

    Returns:
        New array of jittered points; the input is left untouched
    """
    points_2d = np.asarray(points_2d, dtype=np.float64)
    bb_min = points_2d.min(axis=0)
    bb_max = points_2d.max(axis=0)
    bb_mid = 0.5 * (bb_min + bb_max)

    logger.debug(
        "Perturbing points with %s fraction of a random position inside bounding box %s %s "
        "to break any ties on regular meshes.",
        fraction,
        bb_min.tolist(),
        bb_max.tolist(),
    )

    offsets = rng.uniform(bb_min, bb_max, size=points_2d.shape) - bb_mid
    return points_2d + fraction * offsets

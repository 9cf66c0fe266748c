"""
Default configuration values for planar-regrid.

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

# Fraction of the source bounding box used to jitter projected source points
DEFAULT_PERTURB = 1e-5

# Seed of the generator driving the jitter, identical for every interpolator
PERTURB_SEED = 123456

# Allowed deviation of a destination's weight sum from one
WEIGHT_SUM_TOLERANCE = 1e-9

# Weights at or below this magnitude are dropped from a destination's list
WEIGHT_PRUNE_THRESHOLD = 1e-12

# Relative off-axis distance below which the third frame point counts as collinear
COLLINEAR_TOLERANCE = 1e-10

# Allowed deviation from unit length / orthogonality for frame vectors
FRAME_TOLERANCE = 1e-9

# Maximum number of source vertices contributing to one destination point
MAX_VERTICES = 3

# Number of (point, hull edge) pairs evaluated at once when clamping exterior points
CLAMP_CHUNK_PAIRS = 2**18

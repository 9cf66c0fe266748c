"""
Time bracketing over ordered lists of sample instants.

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
from collections.abc import Iterable, Sequence
from typing import NamedTuple

import numpy as np

logger = logging.getLogger(__name__)


class Instant(NamedTuple):
    """A named sample time."""

    name: str
    value: float


class TimeBracket(NamedTuple):
    """Result of :func:`find_time`.

    ``lo`` is the last instant at or before the requested time (``-1`` when
    none exists), ``hi`` the next one, or None when ``lo`` is the last instant.
    """

    lo: int
    hi: int | None
    found: bool


def time_names(times: Sequence[Instant]) -> list[str]:
    """Names of the given instants, in order."""
    return [t.name for t in times]


def instants_from_values(values: Iterable[float], names: Iterable[str] | None = None) -> list[Instant]:
    """Build an instant list from sample time values.

    Args:
        values: Strictly increasing sample times
        names: Instant names; formatted from the values when omitted

    Returns:
        List of instants

    Raises:
        ValueError: Values are not strictly increasing, or names and values differ in length
    """
    values = [float(v) for v in values]
    names = [f"{v:g}" for v in values] if names is None else [str(n) for n in names]
    if len(names) != len(values):
        msg = f"Got {len(names)} names for {len(values)} sample times."
        raise ValueError(msg)

    diffs = np.diff(values)
    if np.any(diffs <= 0):
        i = int(np.nonzero(diffs <= 0)[0][0])
        msg = (
            "Sample times must be strictly increasing; "
            f"{names[i + 1]} ({values[i + 1]}) follows {names[i]} ({values[i]})."
        )
        raise ValueError(msg)

    return [Instant(name, value) for name, value in zip(names, values)]


def find_time(times: Sequence[Instant], start_index: int, time_value: float) -> TimeBracket:
    """Find the instants bracketing ``time_value``.

    Scans forward from ``start_index``, so callers advancing in time should
    pass the previous ``lo`` back in to avoid rescanning from the start.

    Args:
        times: Instants in strictly increasing order of value
        start_index: Search cursor, -1 to search from the first instant
        time_value: Requested time

    Returns:
        The bracket. ``found`` is False when no instant at or after
        ``start_index`` has a value <= ``time_value``.
    """
    if start_index != -1 and not 0 <= start_index < len(times):
        msg = f"Search start index {start_index} out of range for {len(times)} sample times."
        raise ValueError(msg)

    lo = start_index if start_index >= 0 and times[start_index].value <= time_value else -1

    for i in range(start_index + 1, len(times)):
        if times[i].value > time_value:
            break
        lo = i

    if lo == -1:
        logger.debug(
            "No sample time at or before %s after index %s of %d sample times",
            time_value,
            start_index,
            len(times),
        )
        return TimeBracket(-1, None, False)

    hi = lo + 1 if lo < len(times) - 1 else None

    if hi is None:
        logger.debug("Found time %s after index:%s time:%s", time_value, lo, times[lo].value)
    else:
        logger.debug(
            "Found time %s inbetween index:%s time:%s and index:%s time:%s",
            time_value,
            lo,
            times[lo].value,
            hi,
            times[hi].value,
        )
    return TimeBracket(lo, hi, True)

"""
Tests for time bracketing.
"""

import pytest

from planar_regrid.timeseries import Instant, TimeBracket, find_time, instants_from_values, time_names


def make_times(*values):
    return [Instant(f"t{i}", v) for i, v in enumerate(values)]


@pytest.mark.parametrize("start_index", [-1, 0])
def test_between_two_times(start_index):
    times = make_times(0.0, 1.0, 2.0)
    assert find_time(times, start_index, 1.5) == TimeBracket(1, 2, True)


@pytest.mark.parametrize("start_index", [-1, 0])
def test_before_first_time(start_index):
    times = make_times(1.0, 2.0)
    bracket = find_time(times, start_index, 0.5)
    assert not bracket.found
    assert bracket.lo == -1
    assert bracket.hi is None


def test_after_last_time():
    times = make_times(0.0, 1.0)
    assert find_time(times, -1, 5.0) == TimeBracket(1, None, True)


def test_exact_match_is_lower_bracket():
    times = make_times(0.0, 1.0, 2.0)
    assert find_time(times, -1, 1.0) == TimeBracket(1, 2, True)
    assert find_time(times, -1, 0.0) == TimeBracket(0, 1, True)
    assert find_time(times, -1, 2.0) == TimeBracket(2, None, True)


def test_single_time():
    times = make_times(3.0)
    assert find_time(times, -1, 3.5) == TimeBracket(0, None, True)
    assert not find_time(times, -1, 2.5).found


def test_empty_times():
    assert find_time([], -1, 1.0) == TimeBracket(-1, None, False)


def test_cursor_follows_monotonic_queries():
    times = make_times(0.0, 1.0, 2.0, 3.0, 4.0)
    cursor = -1
    seen = []
    for t in [0.0, 0.5, 1.0, 2.7, 2.9, 3.1, 10.0]:
        bracket = find_time(times, cursor, t)
        assert bracket.found
        cursor = bracket.lo
        seen.append((bracket.lo, bracket.hi))

    assert seen == [(0, 1), (0, 1), (1, 2), (2, 3), (2, 3), (3, 4), (4, None)]


def test_cursor_past_requested_time():
    """A cursor beyond the requested time means no earlier data is available from it."""
    times = make_times(0.0, 1.0, 2.0)
    assert not find_time(times, 2, 0.5).found


def test_start_index_out_of_range():
    times = make_times(0.0, 1.0)
    with pytest.raises(ValueError, match="out of range"):
        find_time(times, 2, 0.5)
    with pytest.raises(ValueError):
        find_time(times, -2, 0.5)


def test_time_names():
    assert time_names(make_times(0.0, 0.5)) == ["t0", "t1"]


def test_instants_from_values():
    instants = instants_from_values([0.0, 0.5, 10])
    assert instants == [Instant("0", 0.0), Instant("0.5", 0.5), Instant("10", 10.0)]

    named = instants_from_values([1.0, 2.0], names=["a", "b"])
    assert time_names(named) == ["a", "b"]


def test_instants_must_increase():
    with pytest.raises(ValueError, match="strictly increasing"):
        instants_from_values([0.0, 1.0, 1.0])
    with pytest.raises(ValueError):
        instants_from_values([0.0, 1.0], names=["a"])
